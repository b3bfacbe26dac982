# bitchess

Chess board representation and move rules built on 64-bit bitboards.

Squares are numbered 0 (a1) to 63 (h8). Ranks and files are numbered 1 to 8.
Each board is a plain Python `int` with one bit set per occupied square.

## What is included

- `bitchess.bitboards`: the `Piece` and `Colour` enums, square helpers
  (`rank_and_file_to_square`, `square_to_rank_and_file`, `iter_squares`,
  `pop_lowest_set_bit`, ...), shift helpers (`north`, `south`, ...),
  `format_bitboard` / `print_bitboard`, and the `BitBoards` class.
  `BitBoards` holds one bitboard per piece. It reads the placement field of a
  FEN string with `set_fen_position_only` and writes it with `to_fen`.
- `bitchess.moves`: the `Move` dataclass, the `MoveResult` and `GameResult`
  flags, and `create_move` for UCI strings such as `"e2e4"` or `"a7a8Q"`.
- `bitchess.patterns`: empty-board move tables for every square (`Rules`)
  and the `build_*` functions that fill them.
- `bitchess.sliders`: single steps, knight hops and sliding rays that take
  occupancy and colour into account.
- `bitchess.rules_check`: push, attack, en passant target and castling move
  sets, combined by `pseudo_legal_moves`.
- `bitchess.magic_shared`: rook and bishop masks, reference slider attacks and
  `occupancy_from_index`.
- `bitchess.magic_bitboards`: `Magic` lookup entries and `MagicBitBoards`,
  which generates moves with table lookup for rooks, bishops and queens.
  Pass 64 rook and 64 bishop multipliers to use magic indexing. A multiplier
  that collides raises `ValueError`. Without multipliers the tables are
  indexed by extracting the masked occupancy bits directly.
- `bitchess.magic_generator`: `MagicNumberGenerator`, a randomised search for
  collision-free multipliers.

## Installing

    pip install .

## Example

```python
from bitchess.bitboards import BitBoards, Piece, rank_and_file_to_square
from bitchess.rules_check import pseudo_legal_moves
from bitchess.moves import create_move

boards = BitBoards()
boards.set_fen_position_only("8/8/8/8/3n4/8/8/8")
moves = pseudo_legal_moves(rank_and_file_to_square(4, 4), Piece.BN, boards)
print(hex(moves))            # 0x142200221400

move = create_move(Piece.WP, "a7a8Q")
print(move.to_uci())         # a7a8Q
```

## Generating magic numbers

The `bitchess-magics` command searches for rook and bishop multipliers and
prints each set as a 64-entry array declaration:

    bitchess-magics --seed 1 --attempts 100000

`--seed` makes the output repeatable. `--attempts` limits the tries per
square (default 400,000,000). A square with no multiplier found in that many
tries is reported and given 0.

From Python, `MagicNumberGenerator(seed=..., attempts=...)` offers
`find_magic_number`, `generate_rook_magics`, `generate_bishop_magics`,
`generate_magic_numbers` and `format_table`.

## What it does not do

The package generates pseudo-legal moves only. It does not keep a game: there
is no move history, no making or undoing of moves, no turn tracking, and no
detection of check, checkmate, stalemate or repetition. `GameResult` is only
a set of flags. It has no engine or search, no UCI protocol handling, and no
graphical board.

## Running the tests

    pip install ".[test]"
    pytest