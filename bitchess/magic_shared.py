"""Masks, slow attack generation and occupancy enumeration for magic bitboards."""

from __future__ import annotations

from bitchess.bitboards import rank_and_file_to_square


def generate_rook_mask(square: int) -> int:
    """Relevant occupancy squares for a rook, board edges excluded."""
    rank = square // 8 + 1
    file = square % 8 + 1
    mask = 0
    for r in range(2, 8):
        if r != rank:
            mask |= 1 << rank_and_file_to_square(r, file)
    for f in range(2, 8):
        if f != file:
            mask |= 1 << rank_and_file_to_square(rank, f)
    return mask


def generate_bishop_mask(square: int) -> int:
    """Relevant occupancy squares for a bishop, board edges excluded."""
    rank = square // 8 + 1
    file = square % 8 + 1
    mask = 0
    for d_rank, d_file in ((1, 1), (1, -1), (-1, -1), (-1, 1)):
        r, f = rank + d_rank, file + d_file
        while 2 <= r <= 7 and 2 <= f <= 7:
            mask |= 1 << rank_and_file_to_square(r, f)
            r += d_rank
            f += d_file
    return mask


def _ray_attacks(square: int, occupancy: int, directions) -> int:
    rank = square // 8 + 1
    file = square % 8 + 1
    attacks = 0
    for d_rank, d_file in directions:
        r, f = rank + d_rank, file + d_file
        while 1 <= r <= 8 and 1 <= f <= 8:
            bit = 1 << rank_and_file_to_square(r, f)
            attacks |= bit
            if occupancy & bit:
                break
            r += d_rank
            f += d_file
    return attacks


def rook_attacks(square: int, occupancy: int) -> int:
    """Rook attacks from ``square``, stopping at and including blockers."""
    return _ray_attacks(square, occupancy, ((0, 1), (0, -1), (1, 0), (-1, 0)))


def bishop_attacks(square: int, occupancy: int) -> int:
    """Bishop attacks from ``square``, stopping at and including blockers."""
    return _ray_attacks(square, occupancy, ((1, 1), (1, -1), (-1, 1), (-1, -1)))


def occupancy_from_index(index: int, mask: int) -> int:
    """Subset of ``mask`` selected by the bits of ``index``, lowest mask bit first."""
    occupancy = 0
    bit_index = 0
    while mask:
        lowest = mask & -mask
        mask ^= lowest
        if index & (1 << bit_index):
            occupancy |= lowest
        bit_index += 1
    return occupancy