"""Magic-multiplier lookup tables for sliding attacks, and fast move generation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

from bitchess.bitboards import (
    BOARD_MASK,
    C1,
    C8,
    FILE_B,
    G1,
    G8,
    KING_SIDE_CASTLING,
    QUEEN_SIDE_CASTLING,
    RANK_1,
    RANK_8,
    BitBoards,
    Colour,
    Piece,
    iter_squares,
    piece_colour,
    rank_and_file_to_square,
    square_to_file,
    square_to_rank,
)
from bitchess.magic_shared import (
    bishop_attacks,
    generate_bishop_mask,
    generate_rook_mask,
    occupancy_from_index,
    rook_attacks,
)
from bitchess.patterns import Rules

_ROOKS = frozenset({Piece.WR, Piece.BR})
_BISHOPS = frozenset({Piece.WB, Piece.BB})
_QUEENS = frozenset({Piece.WQ, Piece.BQ})
_KNIGHTS = frozenset({Piece.WN, Piece.BN})
_KINGS = frozenset({Piece.WK, Piece.BK})
_PAWNS = frozenset({Piece.WP, Piece.BP})


def _extract_bits(occupancy: int, mask: int) -> int:
    """Pack the bits of ``occupancy`` that lie under ``mask`` into a dense index."""
    index = 0
    bit_index = 0
    while mask:
        lowest = mask & -mask
        mask ^= lowest
        if occupancy & lowest:
            index |= 1 << bit_index
        bit_index += 1
    return index


@dataclass(frozen=True)
class Magic:
    """Lookup entry for one square: relevant mask, multiplier, shift and attack table.

    A multiplier of 0 means the index is formed by extracting the masked bits directly.
    """

    mask: int
    magic: int
    shift: int
    attacks: tuple[int, ...]

    def index(self, occupancy: int) -> int:
        """Table index for a board occupancy."""
        occupancy &= self.mask
        if self.magic:
            return ((occupancy * self.magic) & BOARD_MASK) >> self.shift
        return _extract_bits(occupancy, self.mask)

    def attacks_for(self, occupancy: int) -> int:
        """Attacked squares for a board occupancy."""
        return self.attacks[self.index(occupancy)]


def _build_magic(square: int, magic: int, is_rook: bool) -> Magic:
    mask = generate_rook_mask(square) if is_rook else generate_bishop_mask(square)
    attack_of = rook_attacks if is_rook else bishop_attacks
    bits = mask.bit_count()
    shift = 64 - bits
    size = 1 << bits
    table: list[Optional[int]] = [None] * size
    for i in range(size):
        occupancy = occupancy_from_index(i, mask)
        attacks = attack_of(square, occupancy)
        if magic:
            index = ((occupancy * magic) & BOARD_MASK) >> shift
        else:
            index = i
        existing = table[index]
        if existing is not None and existing != attacks:
            kind = "rook" if is_rook else "bishop"
            raise ValueError(f"magic {magic:#x} collides for {kind} square {square}")
        table[index] = attacks
    return Magic(mask, magic, shift, tuple(0 if a is None else a for a in table))


@lru_cache(maxsize=None)
def _build_table(magics: tuple[int, ...], is_rook: bool) -> tuple[Magic, ...]:
    return tuple(_build_magic(square, magic, is_rook) for square, magic in enumerate(magics))


def _checked_magics(magics: Optional[Sequence[int]], name: str) -> tuple[int, ...]:
    if magics is None:
        return (0,) * 64
    values = tuple(int(m) & BOARD_MASK for m in magics)
    if len(values) != 64:
        raise ValueError(f"expected 64 {name} magics, got {len(values)}")
    return values


class MagicBitBoards:
    """Move generation backed by magic lookup for rooks, bishops and queens."""

    def __init__(
        self,
        rook_magics: Optional[Sequence[int]] = None,
        bishop_magics: Optional[Sequence[int]] = None,
    ) -> None:
        self.rules = Rules()
        self.rook_magics = _build_table(_checked_magics(rook_magics, "rook"), True)
        self.bishop_magics = _build_table(_checked_magics(bishop_magics, "bishop"), False)

    def rook_attacks(self, square: int, occupancy: int) -> int:
        return self.rook_magics[square].attacks_for(occupancy)

    def bishop_attacks(self, square: int, occupancy: int) -> int:
        return self.bishop_magics[square].attacks_for(occupancy)

    def _pawn_moves(self, square: int, piece: Piece, boards: BitBoards) -> int:
        colour = piece_colour(piece)
        pushes = self.rules.pseudo_pawn_pushes(piece, square)
        offset = 1 if colour is Colour.WHITE else -1
        file = square_to_file(square)

        blocking_rank = square_to_rank(square) + offset
        if 0 < blocking_rank < 9:
            if boards.test_square(rank_and_file_to_square(blocking_rank, file)):
                pushes = 0
        blocking_rank += offset
        if 0 < blocking_rank < 9:
            blocking_square = rank_and_file_to_square(blocking_rank, file)
            if boards.test_square(blocking_square):
                pushes &= ~(1 << blocking_square)

        attacks = self.rules.pseudo_pawn_attacks(piece, square)
        attacks &= boards.get_occupancy(colour.opponent)

        opponent_pawn = Piece.WP if piece == Piece.BP else Piece.BP
        en_passant = self.rules.pseudo_pawn_en_passant(
            piece, square, boards.get_occupancy(opponent_pawn)
        )
        return attacks | en_passant | pushes

    def moves(self, square: int, piece: Piece, boards: BitBoards) -> int:
        """Pseudo-legal destinations of ``piece`` on ``square``; sliders include blockers."""
        occupancy = boards.get_occupancy()
        if piece in _ROOKS:
            return self.rook_attacks(square, occupancy)
        if piece in _BISHOPS:
            return self.bishop_attacks(square, occupancy)
        if piece in _QUEENS:
            return self.rook_attacks(square, occupancy) | self.bishop_attacks(square, occupancy)
        own = boards.get_occupancy(piece_colour(piece))
        if piece in _KNIGHTS:
            return self.rules.knight_attacks[square] & ~own
        if piece in _KINGS:
            castling = self.castling(square, piece, boards)
            return (castling | self.rules.king_moves[square]) & ~own
        if piece in _PAWNS:
            return self._pawn_moves(square, piece, boards)
        return 0

    def simple_attacks(self, square: int, piece: Piece, boards: BitBoards) -> int:
        """Squares attacked by ``piece`` on ``square``, without pushes or castling."""
        occupancy = boards.get_occupancy()
        if piece in _ROOKS:
            return self.rook_attacks(square, occupancy)
        if piece in _BISHOPS:
            return self.bishop_attacks(square, occupancy)
        if piece in _QUEENS:
            return self.rook_attacks(square, occupancy) | self.bishop_attacks(square, occupancy)
        own = boards.get_occupancy(piece_colour(piece))
        if piece in _KNIGHTS:
            return self.rules.knight_attacks[square] & ~own
        if piece in _KINGS:
            return self.rules.king_moves[square] & ~own
        if piece in _PAWNS:
            return self.rules.pseudo_pawn_attacks(piece, square) & ~own
        return 0

    def all_attacks(self, colour: Colour, boards: BitBoards) -> int:
        """Union of the simple attacks of every piece of ``colour``."""
        attacks = 0
        for piece in Piece:
            if piece_colour(piece) is not colour:
                continue
            for square in iter_squares(boards.get_occupancy(piece)):
                attacks |= self.simple_attacks(square, piece, boards)
        return attacks

    def castling(self, square: int, piece: Piece, boards: BitBoards) -> int:
        """Castling destinations for a king on a king starting square."""
        if piece not in _KINGS:
            return 0
        if square not in (4, 60):
            return 0

        colour = piece_colour(piece)
        white = colour is Colour.WHITE
        result = 0
        for queen_side in (False, True):
            mask = QUEEN_SIDE_CASTLING if queen_side else KING_SIDE_CASTLING
            mask &= RANK_1 if white else RANK_8

            if mask & boards.get_occupancy():
                continue

            if queen_side:
                rook_square = 0 if white else 56
            else:
                rook_square = 7 if white else 63
            if boards.get_piece_at(rook_square) not in _ROOKS:
                continue

            mask &= ~FILE_B
            if self.all_attacks(colour.opponent, boards) & mask:
                continue

            if white:
                result |= C1 if queen_side else G1
            else:
                result |= C8 if queen_side else G8
        return result