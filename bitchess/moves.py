"""Moves, move outcome flags and game outcome flags."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Optional

from bitchess.bitboards import Piece, piece_from_char, piece_to_char, square_to_file, square_to_rank


class MoveResult(IntFlag):
    PUSH = 1 << 0
    CAPTURE = 1 << 1
    EN_PASSANT = 1 << 2
    CASTLING = 1 << 3
    CHECK = 1 << 4
    ILLEGAL_MOVE = 1 << 5
    PROMOTION = 1 << 6
    CHECK_MATE = 1 << 7


class GameResult(IntFlag):
    WHITE_WINS = 1 << 0
    BLACK_WINS = 1 << 1
    DRAW = 1 << 2
    REPETITION = 1 << 3
    CHECKMATE = 1 << 4
    STALEMATE = 1 << 5
    IN_PROGRESS = 1 << 6
    MOVE_COUNT = 1 << 7


@dataclass
class Move:
    """A piece moving between 1-based rank/file coordinates."""

    piece: Optional[Piece] = None
    rank_from: int = 0
    file_from: int = 0
    rank_to: int = 0
    file_to: int = 0
    result_bits: MoveResult = MoveResult(0)
    captured_piece: Optional[Piece] = field(default=None, compare=False)
    promoted_piece: Optional[Piece] = field(default=None, compare=False)

    @classmethod
    def from_squares(cls, piece: Piece, from_square: int, to_square: int) -> "Move":
        return cls(
            piece,
            square_to_rank(from_square),
            square_to_file(from_square),
            square_to_rank(to_square),
            square_to_file(to_square),
        )

    def to_uci(self) -> str:
        text = (
            f"{chr(ord('a') + self.file_from - 1)}{self.rank_from}"
            f"{chr(ord('a') + self.file_to - 1)}{self.rank_to}"
        )
        if self.promoted_piece is not None:
            text += piece_to_char(self.promoted_piece)
        return text

    def is_inverse_of(self, other: "Move") -> bool:
        """True if ``other`` moves the same piece back along the same path."""
        return (
            self.piece == other.piece
            and self.rank_from == other.rank_to
            and self.file_from == other.file_to
            and self.rank_to == other.rank_from
            and self.file_to == other.file_from
        )


def _parse_square(text: str, uci: str) -> tuple[int, int]:
    file_char, rank_char = text
    if not ("a" <= file_char <= "h") or not ("1" <= rank_char <= "8"):
        raise ValueError(f"bad square in move: {uci!r}")
    return int(rank_char), ord(file_char) - ord("a") + 1


def create_move(piece: Piece, move_uci: str) -> Move:
    """Build a move from UCI text such as ``e2e4`` or ``a7a8Q``."""
    if len(move_uci) not in (4, 5):
        raise ValueError(f"bad move text: {move_uci!r}")
    rank_from, file_from = _parse_square(move_uci[0:2], move_uci)
    rank_to, file_to = _parse_square(move_uci[2:4], move_uci)
    move = Move(piece, rank_from, file_from, rank_to, file_to)
    if len(move_uci) == 5:
        move.promoted_piece = piece_from_char(move_uci[4])
    return move