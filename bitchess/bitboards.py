"""Bitboard primitives: pieces, colours, squares and the per-piece board set."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Iterator, Optional, Union

BOARD_MASK = (1 << 64) - 1


class Colour(Enum):
    """Side to move or owner of a piece."""

    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> "Colour":
        return Colour.BLACK if self is Colour.WHITE else Colour.WHITE


class Piece(IntEnum):
    """Every piece kind, white first."""

    WP = 0
    WN = 1
    WB = 2
    WR = 3
    WQ = 4
    WK = 5
    BP = 6
    BN = 7
    BB = 8
    BR = 9
    BQ = 10
    BK = 11

    @property
    def colour(self) -> Colour:
        return piece_colour(self)


_PIECE_CHARS = "PNBRQKpnbrqk"


def piece_colour(piece: Piece) -> Colour:
    """Return the colour that owns ``piece``."""
    return Colour.WHITE if int(piece) < 6 else Colour.BLACK


def piece_from_char(char: str) -> Piece:
    """Map a FEN letter to its piece; upper case is white."""
    index = _PIECE_CHARS.find(char) if len(char) == 1 else -1
    if index < 0:
        raise ValueError(f"not a piece letter: {char!r}")
    return Piece(index)


def piece_to_char(piece: Piece) -> str:
    """Map a piece to its FEN letter."""
    return _PIECE_CHARS[int(piece)]


def rank_and_file_to_square(rank: int, file: int) -> int:
    """Square index (0 = a1, 63 = h8) for a 1-based rank and file."""
    return (rank - 1) * 8 + (file - 1)


def square_to_rank_and_file(square: int) -> tuple[int, int]:
    """Return the 1-based ``(rank, file)`` of a square."""
    return square // 8 + 1, square % 8 + 1


def square_to_file(square: int) -> int:
    return square % 8 + 1


def square_to_rank(square: int) -> int:
    return square // 8 + 1


def format_bitboard(board: int) -> str:
    """Render a bitboard as a grid, rank 8 at the top, set squares as ``x``."""
    lines = []
    for rank in range(8, 0, -1):
        cells = "".join(
            "x " if board & (1 << rank_and_file_to_square(rank, file)) else ". "
            for file in range(1, 9)
        )
        lines.append(f"{rank} {cells}")
    lines.append("r " + "".join(f"{chr(ord('a') + i)} " for i in range(8)))
    return "\n".join(lines) + "\n"


def print_bitboard(board: int) -> None:
    print(format_bitboard(board), end="")


def lowest_set_bit(board: int) -> int:
    """Index of the least significant set bit."""
    if board == 0:
        raise ValueError("empty bitboard has no set bit")
    return (board & -board).bit_length() - 1


def pop_lowest_set_bit(board: int) -> tuple[int, int]:
    """Return ``(square, remaining_board)`` with the lowest bit removed."""
    square = lowest_set_bit(board)
    return square, board & (board - 1)


def iter_squares(board: int) -> Iterator[int]:
    """Yield the indices of set bits, lowest first."""
    while board:
        square, board = pop_lowest_set_bit(board)
        yield square


def build_file_board(file: str) -> int:
    """Bitboard of a whole file given its letter ``a``..``h``."""
    index = ord(file) - ord("a")
    result = 0
    for i in range(8):
        result |= 1 << (index + 8 * i)
    return result


def build_rank_board(rank: int) -> int:
    """Bitboard of a whole rank given its number 1..8."""
    return 0xFF << ((rank - 1) * 8)


FILES = tuple(build_file_board(c) for c in "abcdefgh")
RANKS = tuple(build_rank_board(r) for r in range(1, 9))


def north(board: int) -> int:
    return (board << 8) & BOARD_MASK


def south(board: int) -> int:
    return board >> 8


def east(board: int) -> int:
    return board >> 1


def west(board: int) -> int:
    return (board << 1) & BOARD_MASK


def north_east(board: int) -> int:
    return board >> 9


def north_west(board: int) -> int:
    return board >> 7


def south_east(board: int) -> int:
    return (board << 7) & BOARD_MASK


def south_west(board: int) -> int:
    return (board << 9) & BOARD_MASK


RANK_1 = 0xFF
RANK_2 = 0xFF00
RANK_3 = 0xFF0000
RANK_4 = 0xFF000000
RANK_5 = 0xFF00000000
RANK_6 = 0xFF0000000000
RANK_7 = 0xFF000000000000
RANK_8 = 0xFF00000000000000

FILE_A = 0x101010101010101
FILE_B = 0x202020202020202
FILE_C = 0x404040404040404
FILE_D = 0x808080808080808
FILE_E = 0x1010101010101010
FILE_F = 0x2020202020202020
FILE_G = 0x4040404040404040
FILE_H = 0x8080808080808080

KING_SIDE_CASTLING = 0x6000000000000060
QUEEN_SIDE_CASTLING = 0xE0000000000000E

WHITE_KS_CASTLING = KING_SIDE_CASTLING & RANK_1
WHITE_QS_CASTLING = QUEEN_SIDE_CASTLING & RANK_1
BLACK_KS_CASTLING = KING_SIDE_CASTLING & RANK_8
BLACK_QS_CASTLING = QUEEN_SIDE_CASTLING & RANK_8

C1 = 0x4
G1 = 0x40
C8 = 0x400000000000000
G8 = 0x4000000000000000


class BitBoards:
    """One bitboard per piece kind."""

    def __init__(self) -> None:
        self._boards = [0] * len(Piece)
        self._fen = ""

    def set_fen_position_only(self, fen: str) -> None:
        """Load the piece-placement field of a FEN string; the rest is ignored."""
        boards = [0] * len(Piece)
        placement = fen.split(" ", 1)[0]
        rank, file = 8, 1
        for char in placement:
            if char == "/":
                rank -= 1
                file = 1
                if rank < 1:
                    raise ValueError(f"too many ranks in FEN: {fen!r}")
            elif char.isdigit():
                file += int(char)
            else:
                if file > 8:
                    raise ValueError(f"rank overflows in FEN: {fen!r}")
                piece = piece_from_char(char)
                boards[piece] |= 1 << rank_and_file_to_square(rank, file)
                file += 1
        self._boards = boards
        self._fen = placement

    def to_fen(self) -> str:
        """Piece-placement field of the current position."""
        rows = []
        for rank in range(8, 0, -1):
            row = ""
            empty = 0
            for file in range(1, 9):
                piece = self.get_piece(rank, file)
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece_to_char(piece)
            if empty:
                row += str(empty)
            rows.append(row)
        self._fen = "/".join(rows)
        return self._fen

    def get_bitboard(self, piece: Piece) -> int:
        return self._boards[piece]

    def __getitem__(self, piece: Piece) -> int:
        return self._boards[piece]

    def __setitem__(self, piece: Piece, board: int) -> None:
        self._boards[piece] = board & BOARD_MASK

    def get_piece(self, rank: int, file: int) -> Optional[Piece]:
        return self.get_piece_at(rank_and_file_to_square(rank, file))

    def get_piece_at(self, square: int) -> Optional[Piece]:
        bit = 1 << square
        return next((piece for piece in Piece if self._boards[piece] & bit), None)

    def set_zero(self, rank: int, file: int) -> None:
        """Clear the square on every board."""
        keep = ~(1 << rank_and_file_to_square(rank, file)) & BOARD_MASK
        self._boards = [board & keep for board in self._boards]

    def set_one(self, piece: Piece, rank: int, file: int) -> None:
        self._boards[piece] |= 1 << rank_and_file_to_square(rank, file)

    def test_board(self, board: int) -> bool:
        """True if any piece stands on a square of ``board``."""
        return bool(self.get_occupancy() & board)

    def test_square(self, square: int) -> bool:
        return self.test_board(1 << square)

    def count_piece(self, piece: Piece) -> int:
        return bin(self._boards[piece]).count("1")

    def get_occupancy(self, side: Union[None, Piece, Colour] = None) -> int:
        """Occupied squares: all, of one piece kind, or of one colour."""
        if side is None:
            result = 0
            for board in self._boards:
                result |= board
            return result
        if isinstance(side, Piece):
            return self._boards[side]
        if isinstance(side, Colour):
            result = 0
            for piece in Piece:
                if piece_colour(piece) is side:
                    result |= self._boards[piece]
            return result
        raise TypeError(f"cannot take occupancy of {side!r}")