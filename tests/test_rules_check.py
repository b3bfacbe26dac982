import pytest

from bitchess.bitboards import BitBoards, Colour, Piece, rank_and_file_to_square
from bitchess.rules_check import (
    attack_moves,
    castling_moves,
    en_passant_vulnerable_squares,
    pseudo_legal_moves,
    push_moves,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
KIWI_PETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"


def boards_from(fen):
    boards = BitBoards()
    boards.set_fen_position_only(fen)
    return boards


@pytest.mark.parametrize(
    "fen, square, piece, expected",
    [
        ("8/8/8/8/8/8/8/k7", 0, Piece.WN, 0x20400),
        ("8/8/8/8/3n4/8/8/8", rank_and_file_to_square(4, 4), Piece.BN, 0x142200221400),
        ("8/8/8/8/8/8/8/1n6", rank_and_file_to_square(1, 2), Piece.WN, 0x50800),
    ],
)
def test_knight_moves(fen, square, piece, expected):
    assert pseudo_legal_moves(square, piece, boards_from(fen)) == expected


def test_bishop_moves():
    boards = boards_from("8/8/8/8/8/8/8/B7")
    assert pseudo_legal_moves(rank_and_file_to_square(1, 1), Piece.WB, boards) == 0x8040201008040200
    boards = boards_from("8/8/8/5b2/8/8/8/8")
    assert pseudo_legal_moves(rank_and_file_to_square(5, 6), Piece.BB, boards) == 0x488500050880402


def test_attack_doesnt_jump():
    boards = boards_from(STARTING_FEN)
    assert pseudo_legal_moves(rank_and_file_to_square(8, 3), Piece.BB, boards) == 0
    boards = boards_from(KIWI_PETE_FEN)
    assert pseudo_legal_moves(rank_and_file_to_square(7, 7), Piece.BB, boards) == 0x2000800000000000


@pytest.mark.parametrize(
    "fen, rank, file, expected",
    [
        ("8/8/8/8/8/8/8/R7", 1, 1, 0x1010101010101FE),
        ("8/8/5R2/8/8/8/8/8", 6, 6, 0x2020DF2020202020),
        ("8/8/8/8/8/8/R7/8", 2, 1, 0x10101010101FE01),
    ],
)
def test_rook_moves(fen, rank, file, expected):
    square = rank_and_file_to_square(rank, file)
    assert pseudo_legal_moves(square, Piece.WR, boards_from(fen)) == expected


@pytest.mark.parametrize(
    "fen, rank, file, piece, expected",
    [
        ("8/8/8/8/4Q3/8/8/8", 4, 5, Piece.WQ, 0x11925438EF385492),
        ("8/8/8/8/4q3/8/8/8", 4, 5, Piece.BQ, 0x11925438EF385492),
        ("8/8/8/8/8/8/8/7Q", 1, 8, Piece.WQ, 0x8182848890A0C07F),
        ("8/8/8/8/8/8/8/7q", 1, 8, Piece.BQ, 0x8182848890A0C07F),
    ],
)
def test_queen_moves(fen, rank, file, piece, expected):
    square = rank_and_file_to_square(rank, file)
    assert pseudo_legal_moves(square, piece, boards_from(fen)) == expected


@pytest.mark.parametrize(
    "fen, rank, file, piece, expected",
    [
        ("8/8/8/8/4K3/8/8/8", 4, 5, Piece.WK, 0x3828380000),
        ("8/8/8/8/8/8/8/7k", 1, 8, Piece.BK, 0xC040),
        ("8/8/8/8/8/8/1k6/8", 2, 2, Piece.BK, 0x70507),
    ],
)
def test_king_moves(fen, rank, file, piece, expected):
    square = rank_and_file_to_square(rank, file)
    assert pseudo_legal_moves(square, piece, boards_from(fen)) == expected


def test_castling_moves_from_source():
    boards = boards_from("rnbqkbnr/p2ppppp/1pp5/8/4P3/3B1N2/PPPP1PPP/RNBQK2R")
    assert castling_moves(4, Piece.WK, boards) == 0x40


def test_castling_both_sides_on_open_rank():
    boards = boards_from("4k3/8/8/8/8/8/8/4K2R")
    assert castling_moves(4, Piece.WK, boards) == 0x44


def test_castling_blocked_when_crossing_attacked_square():
    boards = boards_from("4kr2/8/8/8/8/8/8/4K2R")
    assert castling_moves(4, Piece.WK, boards) == 0x4


def test_castling_requires_king_on_start_square():
    boards = boards_from("4k3/8/8/8/8/8/8/3K3R")
    assert castling_moves(3, Piece.WK, boards) == 0
    assert castling_moves(4, Piece.WR, boards) == 0
    assert castling_moves(60, Piece.WK, boards) == 0


def test_en_passant_vulnerable():
    boards = boards_from("rnbqkbnr/ppppp1pp/8/4Pp2/8/8/PPPP1PPP/RNBQKBNR")
    assert en_passant_vulnerable_squares(boards, Colour.WHITE) == 0x200000000000
    boards = boards_from("rnbqkbnr/ppppp1pp/5p2/4P3/8/8/PPPP1PPP/RNBQKBNR")
    assert en_passant_vulnerable_squares(boards, Colour.WHITE) == 0


def test_white_pawn_double_push():
    boards = boards_from("8/8/8/8/8/8/3P4/8")
    assert push_moves(11, Piece.WP, boards) == (1 << 19) | (1 << 27)


def test_white_pawn_push_blocked_directly():
    boards = boards_from("8/8/8/8/8/3p4/3P4/8")
    assert push_moves(11, Piece.WP, boards) == 0


def test_white_pawn_double_push_blocked_on_target():
    boards = boards_from("8/8/8/8/3p4/8/3P4/8")
    assert push_moves(11, Piece.WP, boards) == 1 << 19


def test_black_pawn_double_push():
    boards = boards_from("8/3p4/8/8/8/8/8/8")
    assert push_moves(51, Piece.BP, boards) == (1 << 43) | (1 << 35)


def test_pawn_attacks_only_diagonal_captures():
    boards = boards_from("8/8/8/8/8/2p1p3/3P4/8")
    assert attack_moves(11, Piece.WP, boards) == (1 << 18) | (1 << 20)


def test_pawn_cannot_capture_straight():
    boards = boards_from("8/8/8/8/8/3p4/3P4/8")
    assert pseudo_legal_moves(11, Piece.WP, boards) == 0


def test_black_pawn_on_first_rank_has_no_moves():
    boards = boards_from("8/8/8/8/8/8/8/3p4")
    assert attack_moves(3, Piece.BP, boards) == 0
    assert push_moves(3, Piece.BP, boards) == 0


def test_attack_moves_exclude_friendly_pieces():
    boards = boards_from("8/8/8/8/8/8/P7/R7")
    assert attack_moves(0, Piece.WR, boards) == 0


def test_rook_captures_enemy_at_end_of_ray():
    boards = boards_from("r7/8/8/8/8/8/8/R7")
    assert attack_moves(0, Piece.WR, boards) == 1 << 56
    assert push_moves(0, Piece.WR, boards) & (1 << 56) == 0