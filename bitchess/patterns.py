"""Precomputed move patterns for every piece on an empty board."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from bitchess.bitboards import (
    Piece,
    piece_to_char,
    rank_and_file_to_square,
    square_to_file,
    square_to_rank,
)

_KNIGHT_OFFSETS = ((2, -1), (2, 1), (1, -2), (1, 2), (-1, -2), (-1, 2), (-2, -1), (-2, 1))
_KING_OFFSETS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
_DIAGONALS = ((1, 1), (-1, 1), (-1, -1), (1, -1))


def _on_board(rank: int, file: int) -> bool:
    return 1 <= rank <= 8 and 1 <= file <= 8


def _board_of(coordinates: Iterable[tuple[int, int]]) -> int:
    result = 0
    for rank, file in coordinates:
        result |= 1 << rank_and_file_to_square(rank, file)
    return result


def _offsets_from(square: int, offsets) -> int:
    rank, file = square_to_rank(square), square_to_file(square)
    return _board_of(
        (rank + d_rank, file + d_file)
        for d_rank, d_file in offsets
        if _on_board(rank + d_rank, file + d_file)
    )


def build_rank_attacks(square: int) -> int:
    """Every other square on the same rank."""
    rank, own_file = square_to_rank(square), square_to_file(square)
    return _board_of((rank, file) for file in range(1, 9) if file != own_file)


def build_file_attacks(square: int) -> int:
    """Every other square on the same file."""
    own_rank, file = square_to_rank(square), square_to_file(square)
    return _board_of((rank, file) for rank in range(1, 9) if rank != own_rank)


def build_diagonal_attacks(square: int) -> int:
    """Every square on both diagonals through ``square``, excluding it."""
    rank, file = square_to_rank(square), square_to_file(square)
    result = 0
    for d_rank, d_file in _DIAGONALS:
        r, f = rank + d_rank, file + d_file
        while _on_board(r, f):
            result |= 1 << rank_and_file_to_square(r, f)
            r += d_rank
            f += d_file
    return result


def build_knight_attacks(square: int) -> int:
    return _offsets_from(square, _KNIGHT_OFFSETS)


def build_white_pawn_pushes(square: int) -> int:
    rank = square_to_rank(square)
    result = 0
    if rank != 8:
        result |= 1 << (square + 8)
    if rank == 2:
        result |= 1 << (square + 16)
    return result


def build_black_pawn_pushes(square: int) -> int:
    rank = square_to_rank(square)
    result = 0
    if rank != 1:
        result |= 1 << (square - 8)
    if rank == 7:
        result |= 1 << (square - 16)
    return result


def build_white_pawn_attacks(square: int) -> int:
    rank, file = square_to_rank(square), square_to_file(square)
    result = 0
    if rank != 8:
        if file != 1:
            result |= 1 << (square + 7)
        if file != 8:
            result |= 1 << (square + 9)
    return result


def build_black_pawn_attacks(square: int) -> int:
    rank, file = square_to_rank(square), square_to_file(square)
    result = 0
    if rank != 1:
        if file != 1:
            result |= 1 << (square - 9)
        if file != 8:
            result |= 1 << (square - 7)
    return result


def build_king_moves(square: int) -> int:
    return _offsets_from(square, _KING_OFFSETS)


@lru_cache(maxsize=None)
def _tables() -> dict[str, tuple[int, ...]]:
    builders = {
        "rank_attacks": build_rank_attacks,
        "file_attacks": build_file_attacks,
        "diag_attacks": build_diagonal_attacks,
        "knight_attacks": build_knight_attacks,
        "white_pawn_pushes": build_white_pawn_pushes,
        "white_pawn_attacks": build_white_pawn_attacks,
        "black_pawn_pushes": build_black_pawn_pushes,
        "black_pawn_attacks": build_black_pawn_attacks,
        "king_moves": build_king_moves,
    }
    return {name: tuple(build(square) for square in range(64)) for name, build in builders.items()}


class Rules:
    """Lookup tables of empty-board moves, indexed by square."""

    def __init__(self) -> None:
        tables = _tables()
        self.rank_attacks = tables["rank_attacks"]
        self.file_attacks = tables["file_attacks"]
        self.diag_attacks = tables["diag_attacks"]
        self.knight_attacks = tables["knight_attacks"]
        self.white_pawn_pushes = tables["white_pawn_pushes"]
        self.white_pawn_attacks = tables["white_pawn_attacks"]
        self.black_pawn_pushes = tables["black_pawn_pushes"]
        self.black_pawn_attacks = tables["black_pawn_attacks"]
        self.king_moves = tables["king_moves"]

    def pseudo_pawn_en_passant(self, piece: Piece, from_square: int, opponent_pawns: int) -> int:
        """Squares a pawn could capture onto en passant, ignoring move history."""
        opponent_starts = 0xFF00000000 if piece == Piece.WP else 0xFF000000
        if not opponent_pawns & opponent_starts:
            return 0
        if piece == Piece.WP:
            targets = opponent_starts << 8
        else:
            targets = opponent_starts >> 8
        return self.pseudo_pawn_attacks(piece, from_square) & targets

    def pseudo_pawn_pushes(self, piece: Piece, from_square: int) -> int:
        if piece == Piece.WP:
            return self.white_pawn_pushes[from_square]
        if piece == Piece.BP:
            return self.black_pawn_pushes[from_square]
        return 0

    def pseudo_pawn_attacks(self, piece: Piece, from_square: int) -> int:
        if piece == Piece.WP:
            return self.white_pawn_attacks[from_square]
        if piece == Piece.BP:
            return self.black_pawn_attacks[from_square]
        return 0

    def pseudo_attacks(self, piece: Piece, from_square: int) -> int:
        """Empty-board attacks of ``piece`` standing on ``from_square``."""
        kind = piece_to_char(piece).lower()
        if kind == "p":
            return self.pseudo_pawn_attacks(piece, from_square)
        if kind == "n":
            return self.knight_attacks[from_square]
        if kind == "b":
            return self.diag_attacks[from_square]
        if kind == "r":
            return self.rank_attacks[from_square] | self.file_attacks[from_square]
        if kind == "q":
            return (
                self.rank_attacks[from_square]
                | self.file_attacks[from_square]
                | self.diag_attacks[from_square]
            )
        return self.king_moves[from_square]