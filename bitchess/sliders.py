"""Board-aware single steps, knight hops and sliding rays."""

from __future__ import annotations

from typing import Iterable, Optional

from bitchess.bitboards import (
    BitBoards,
    Colour,
    Piece,
    piece_colour,
    rank_and_file_to_square,
    square_to_file,
    square_to_rank,
)

_ALL_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1))
_KNIGHT_OFFSETS = ((2, -1), (2, 1), (1, -2), (1, 2), (-1, -2), (-1, 2), (-2, -1), (-2, 1))
_FILE_DIRECTIONS = ((1, 0), (-1, 0))
_RANK_DIRECTIONS = ((0, 1), (0, -1))
_DIAGONALS = ((1, 1), (-1, 1), (-1, -1), (1, -1))


def _target(square: int, d_rank: int, d_file: int) -> Optional[int]:
    """Square reached by the offset, or None if it leaves the board."""
    rank = square_to_rank(square) + d_rank
    file = square_to_file(square) + d_file
    if 1 <= rank <= 8 and 1 <= file <= 8:
        return rank_and_file_to_square(rank, file)
    return None


def _step(square: int, d_rank: int, d_file: int) -> int:
    target = _target(square, d_rank, d_file)
    return 0 if target is None else 1 << target


def north(square: int) -> int:
    return _step(square, 1, 0)


def south(square: int) -> int:
    return _step(square, -1, 0)


def east(square: int) -> int:
    return _step(square, 0, 1)


def west(square: int) -> int:
    return _step(square, 0, -1)


def north_east(square: int) -> int:
    return _step(square, 1, 1)


def north_west(square: int) -> int:
    return _step(square, 1, -1)


def south_east(square: int) -> int:
    return _step(square, -1, 1)


def south_west(square: int) -> int:
    return _step(square, -1, -1)


def collision_ok(
    to_square: int, boards: BitBoards, is_push: bool, moving_colour: Colour
) -> bool:
    """True if a piece may end on ``to_square`` given what stands there."""
    if is_push:
        return False
    collided = boards.get_piece_at(to_square)
    if collided is not None and piece_colour(collided) == moving_colour:
        return False
    return True


def step_checked(
    square: int,
    d_rank: int,
    d_file: int,
    boards: BitBoards,
    is_push: bool,
    moving_colour: Colour,
) -> int:
    """One step in a direction, blocked by the board edge and by collisions."""
    target = _target(square, d_rank, d_file)
    if target is None:
        return 0
    if boards.test_square(target):
        if is_push:
            return 0
        return 1 << target if collision_ok(target, boards, is_push, moving_colour) else 0
    return 1 << target


def one_square_all_directions(
    square: int,
    boards: Optional[BitBoards] = None,
    is_push: bool = False,
    moving_colour: Optional[Colour] = None,
) -> int:
    """King-style steps; with a board, occupied (push) or friendly squares are removed."""
    prelim = 0
    for d_rank, d_file in _ALL_DIRECTIONS:
        prelim |= _step(square, d_rank, d_file)
    if boards is None or not boards.test_board(prelim):
        return prelim
    if is_push:
        occupied = boards.get_occupancy()
    else:
        occupied = 0
        for piece in Piece:
            if piece_colour(piece) == moving_colour:
                occupied |= boards.get_bitboard(piece)
    return prelim & ~occupied


def knight_moves(
    square: int, boards: BitBoards, is_push: bool, moving_colour: Colour
) -> int:
    """Knight hops, excluding any collision when pushing and friendly pieces otherwise."""
    result = 0
    for d_rank, d_file in _KNIGHT_OFFSETS:
        target = _target(square, d_rank, d_file)
        if target is None:
            continue
        collided = boards.get_piece_at(target)
        if collided is not None:
            if is_push or piece_colour(collided) == moving_colour:
                continue
        result |= 1 << target
    return result


def _rays(
    start_square: int,
    directions: Iterable[tuple[int, int]],
    boards: Optional[BitBoards],
    is_push: bool,
    moving_colour: Optional[Colour],
) -> int:
    result = 0
    for d_rank, d_file in directions:
        square = _target(start_square, d_rank, d_file)
        while square is not None:
            if boards is not None and boards.test_square(square):
                if not is_push:
                    collided = boards.get_piece_at(square)
                    if piece_colour(collided) != moving_colour:
                        result |= 1 << square
                break
            result |= 1 << square
            square = _target(square, d_rank, d_file)
    return result


def whole_file(
    start_square: int,
    boards: Optional[BitBoards] = None,
    is_push: bool = False,
    moving_colour: Optional[Colour] = None,
) -> int:
    """Squares up and down the file; without a board, the whole file but the start."""
    return _rays(start_square, _FILE_DIRECTIONS, boards, is_push, moving_colour)


def whole_rank(
    start_square: int,
    boards: Optional[BitBoards] = None,
    is_push: bool = False,
    moving_colour: Optional[Colour] = None,
) -> int:
    """Squares east and west along the rank; without a board, the whole rank but the start."""
    return _rays(start_square, _RANK_DIRECTIONS, boards, is_push, moving_colour)


def diags(
    start_square: int,
    boards: Optional[BitBoards] = None,
    is_push: bool = False,
    moving_colour: Optional[Colour] = None,
) -> int:
    """Squares along both diagonals; with a board, rays stop at collisions."""
    return _rays(start_square, _DIAGONALS, boards, is_push, moving_colour)