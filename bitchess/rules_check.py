"""Board-aware move generation: pushes, captures, en passant targets and castling."""

from __future__ import annotations

from bitchess.bitboards import (
    BitBoards,
    Colour,
    Piece,
    iter_squares,
    piece_colour,
    rank_and_file_to_square,
    square_to_file,
    square_to_rank,
)
from bitchess.sliders import (
    diags,
    knight_moves,
    north,
    one_square_all_directions,
    south,
    step_checked,
    whole_file,
    whole_rank,
)

_QUEENS = frozenset({Piece.WQ, Piece.BQ})
_BISHOPS = frozenset({Piece.WB, Piece.BB})
_ROOKS = frozenset({Piece.WR, Piece.BR})
_KINGS = frozenset({Piece.WK, Piece.BK})
_KNIGHTS = frozenset({Piece.WN, Piece.BN})


def _occupied(boards: BitBoards, square: int) -> bool:
    """Occupancy test that treats squares off the board as empty."""
    return 0 <= square < 64 and boards.test_square(square)


def _piece_moves(square: int, piece: Piece, boards: BitBoards, is_push: bool) -> int:
    """Moves of every non-pawn piece, sharing the push/attack collision rules."""
    colour = piece_colour(piece)
    if piece in _QUEENS:
        return (
            diags(square, boards, is_push, colour)
            | whole_file(square, boards, is_push, colour)
            | whole_rank(square, boards, is_push, colour)
        )
    if piece in _BISHOPS:
        return diags(square, boards, is_push, colour)
    if piece in _ROOKS:
        return whole_file(square, boards, is_push, colour) | whole_rank(
            square, boards, is_push, colour
        )
    if piece in _KINGS:
        return one_square_all_directions(square, boards, is_push, colour)
    if piece in _KNIGHTS:
        return knight_moves(square, boards, is_push, colour)
    return 0


def push_moves(square: int, piece: Piece, boards: BitBoards) -> int:
    """Moves of ``piece`` from ``square`` onto empty squares only."""
    colour = piece_colour(piece)
    if piece == Piece.WP:
        result = step_checked(square, 1, 0, boards, True, colour)
        if square_to_rank(square) == 2:
            one_ahead = square + 8
            if _occupied(boards, one_ahead) or _occupied(boards, one_ahead + 8):
                return result
            result |= north(one_ahead)
        return result
    if piece == Piece.BP:
        result = step_checked(square, -1, 0, boards, True, colour)
        if square_to_rank(square) == 7:
            one_ahead = square - 8
            if _occupied(boards, one_ahead) or _occupied(boards, one_ahead - 8):
                return result
            result |= south(one_ahead)
        return result
    return _piece_moves(square, piece, boards, True)


def en_passant_vulnerable_squares(boards: BitBoards, moving_colour: Colour) -> int:
    """Empty squares behind opponent pawns on ranks 4 and 5."""
    result = 0
    for pawn in (Piece.WP, Piece.BP):
        if piece_colour(pawn) == moving_colour:
            continue
        offset = -8 if pawn == Piece.WP else 8
        for square in iter_squares(boards.get_bitboard(pawn)):
            if square_to_rank(square) not in (4, 5):
                continue
            behind = square + offset
            if not _occupied(boards, behind):
                result |= 1 << behind
    return result


def attack_moves(square: int, piece: Piece, boards: BitBoards) -> int:
    """Moves of ``piece`` that land on an opponent or an en passant target."""
    colour = piece_colour(piece)
    if piece == Piece.WP:
        result = 0
        if not _occupied(boards, square + 8):
            result |= north(square)
        if square_to_rank(square) == 2 and not _occupied(boards, square + 16):
            result |= north(square + 8)
        result |= step_checked(square, 1, 1, boards, False, colour)
        result |= step_checked(square, 1, -1, boards, False, colour)
    elif piece == Piece.BP:
        result = 0
        if not _occupied(boards, square - 8):
            result |= south(square)
        if square_to_rank(square) == 7 and not _occupied(boards, square - 16):
            result |= south(square - 8)
        result |= step_checked(square, -1, 1, boards, False, colour)
        result |= step_checked(square, -1, -1, boards, False, colour)
    else:
        result = _piece_moves(square, piece, boards, False)

    targets = boards.get_occupancy(colour.opponent) | en_passant_vulnerable_squares(
        boards, colour
    )
    return result & targets


def _attacked_by(boards: BitBoards, attacker: Colour, target: int) -> bool:
    bit = 1 << target
    for piece in Piece:
        if piece_colour(piece) != attacker:
            continue
        for square in iter_squares(boards.get_bitboard(piece)):
            moves = attack_moves(square, piece, boards) | push_moves(square, piece, boards)
            if moves & bit:
                return True
    return False


def castling_moves(square: int, piece: Piece, boards: BitBoards) -> int:
    """Castling destinations for a king on its starting square."""
    if piece not in _KINGS:
        return 0
    rank_from = square_to_rank(square)
    file_from = square_to_file(square)
    if file_from != 5:
        return 0
    if piece == Piece.WK and rank_from != 1:
        return 0
    if piece == Piece.BK and rank_from != 8:
        return 0

    opponent = piece_colour(piece).opponent
    result = 0
    for file in (3, 7):
        if boards.test_square(rank_and_file_to_square(rank_from, file)):
            continue
        step = 1 if file > file_from else -1
        can_castle = True
        for between in range(file_from + step, file, step):
            between_square = rank_and_file_to_square(rank_from, between)
            if boards.test_square(between_square) or _attacked_by(
                boards, opponent, between_square
            ):
                can_castle = False
                break
        if can_castle:
            result |= 1 << rank_and_file_to_square(rank_from, file)
    return result


def pseudo_legal_moves(square: int, piece: Piece, boards: BitBoards) -> int:
    """Pushes, captures and (for kings) castling, ignoring checks."""
    result = push_moves(square, piece, boards) | attack_moves(square, piece, boards)
    if piece in _KINGS:
        result |= castling_moves(square, piece, boards)
    return result