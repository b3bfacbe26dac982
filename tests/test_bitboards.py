import pytest

from bitchess.bitboards import (
    FILE_A,
    FILE_H,
    RANK_1,
    RANK_8,
    BitBoards,
    Colour,
    Piece,
    build_file_board,
    build_rank_board,
    east,
    format_bitboard,
    iter_squares,
    lowest_set_bit,
    north,
    north_east,
    piece_colour,
    piece_from_char,
    piece_to_char,
    pop_lowest_set_bit,
    rank_and_file_to_square,
    south,
    south_west,
    square_to_file,
    square_to_rank,
    square_to_rank_and_file,
    west,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
KIWI_PETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"


def test_square_conversions():
    assert rank_and_file_to_square(1, 1) == 0
    assert rank_and_file_to_square(8, 8) == 63
    assert rank_and_file_to_square(6, 6) == 45
    assert square_to_rank_and_file(18) == (3, 3)
    assert square_to_file(7) == 8
    assert square_to_rank(56) == 8


@pytest.mark.parametrize("square", range(64))
def test_square_round_trip(square):
    rank, file = square_to_rank_and_file(square)
    assert rank_and_file_to_square(rank, file) == square


def test_piece_chars():
    assert piece_from_char("Q") is Piece.WQ
    assert piece_from_char("n") is Piece.BN
    assert piece_to_char(Piece.BK) == "k"
    assert piece_colour(Piece.WR) is Colour.WHITE
    assert piece_colour(Piece.BP) is Colour.BLACK
    assert Colour.WHITE.opponent is Colour.BLACK


def test_piece_from_bad_char():
    with pytest.raises(ValueError):
        piece_from_char("x")


def test_file_and_rank_boards():
    assert build_file_board("a") == FILE_A
    assert build_file_board("h") == FILE_H
    assert build_rank_board(1) == RANK_1
    assert build_rank_board(8) == RANK_8


def test_shifts():
    assert north(1) == 256
    assert north(1 << 63) == 0
    assert south(256) == 1
    assert east(2) == 1
    assert west(1) == 2
    assert north_east(1 << 9) == 1
    assert south_west(1 << 60) == 0


def test_bit_helpers():
    assert lowest_set_bit(0b1010) == 1
    assert pop_lowest_set_bit(0b1010) == (1, 0b1000)
    assert list(iter_squares(0x8000000000000081)) == [0, 7, 63]
    with pytest.raises(ValueError):
        lowest_set_bit(0)


def test_format_bitboard():
    text = format_bitboard(1)
    lines = text.splitlines()
    assert lines[0] == "8 . . . . . . . . "
    assert lines[7] == "1 x . . . . . . . "
    assert lines[8] == "r a b c d e f g h "


@pytest.mark.parametrize("fen", [STARTING_FEN, KIWI_PETE_FEN, "8/8/8/8/3P4/8/8/8"])
def test_fen_round_trip(fen):
    boards = BitBoards()
    boards.set_fen_position_only(fen)
    assert boards.to_fen() == fen


def test_fen_ignores_extra_fields():
    boards = BitBoards()
    boards.set_fen_position_only(STARTING_FEN + " w KQkq - 0 1")
    assert boards.to_fen() == STARTING_FEN


def test_get_piece():
    boards = BitBoards()
    boards.set_fen_position_only("8/8/8/8/3P4/8/8/8")
    assert boards.get_piece(4, 4) is Piece.WP
    assert boards.get_piece(4, 5) is None
    assert boards.get_piece_at(27) is Piece.WP


def test_occupancy_of_starting_position():
    boards = BitBoards()
    boards.set_fen_position_only(STARTING_FEN)
    assert boards.get_occupancy() == 0xFFFF00000000FFFF
    assert boards.get_occupancy(Colour.WHITE) == 0xFFFF
    assert boards.get_occupancy(Colour.BLACK) == 0xFFFF000000000000
    assert boards.get_occupancy(Piece.WP) == 0xFF00
    assert boards.count_piece(Piece.BP) == 8
    assert boards.count_piece(Piece.WK) == 1


def test_set_zero_and_set_one():
    boards = BitBoards()
    boards.set_fen_position_only(STARTING_FEN)
    boards.set_zero(2, 5)
    boards.set_one(Piece.WP, 4, 5)
    assert boards.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"


def test_item_access():
    boards = BitBoards()
    boards[Piece.BN] = 1
    assert boards[Piece.BN] == 1
    assert boards.get_bitboard(Piece.BN) == 1
    assert boards.test_square(0)
    assert not boards.test_square(1)
    assert boards.test_board(0b11)


def test_bad_occupancy_argument():
    with pytest.raises(TypeError):
        BitBoards().get_occupancy("white")