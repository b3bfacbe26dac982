"""Search for magic multipliers for rook and bishop attack lookup."""

from __future__ import annotations

import argparse
import random
import time
from typing import Optional, Sequence

from bitchess.magic_shared import (
    bishop_attacks,
    generate_bishop_mask,
    generate_rook_mask,
    occupancy_from_index,
    rook_attacks,
)

BOARD_MASK = (1 << 64) - 1
DEFAULT_ATTEMPTS = 400_000_000
_TOP_RANK = 0xFF00000000000000


def _table_header(name: str) -> str:
    return f"const Bitboard {name}[64] = {{"


def _table_line(square: int, magic: int) -> str:
    comma = "," if square < 63 else ""
    return f"    0x{magic:X}ULL{comma} // {square}"


class MagicNumberGenerator:
    """Randomised search for collision-free magic multipliers."""

    def __init__(self, seed: Optional[int] = None, attempts: int = DEFAULT_ATTEMPTS) -> None:
        self._rng = random.Random(time.monotonic_ns() if seed is None else seed)
        self.attempts = attempts

    def random_bitboard(self) -> int:
        """A random 64-bit number with few bits set."""
        bits = self._rng.getrandbits
        return bits(64) & bits(64) & bits(64)

    def find_magic_number(self, square: int, is_rook: bool) -> int:
        """Return a working magic for ``square``, or 0 if none is found in time."""
        mask = generate_rook_mask(square) if is_rook else generate_bishop_mask(square)
        attack_of = rook_attacks if is_rook else bishop_attacks
        mask_bits = mask.bit_count()
        size = 1 << mask_bits
        shift = 64 - mask_bits

        occupancies = [occupancy_from_index(index, mask) for index in range(size)]
        attacks = [attack_of(square, occupancy) for occupancy in occupancies]

        for _ in range(self.attempts):
            magic = self.random_bitboard()
            if ((mask * magic) & _TOP_RANK).bit_count() < 6:
                continue
            used = [0] * size
            for occupancy, attack in zip(occupancies, attacks):
                index = ((occupancy * magic) & BOARD_MASK) >> shift
                if used[index] == 0:
                    used[index] = attack
                elif used[index] != attack:
                    break
            else:
                return magic

        print(f"Failed to find magic for {'rook' if is_rook else 'bishop'} square {square}")
        return 0

    def _generate(self, label: str, name: str, is_rook: bool) -> list[int]:
        print(f"Generating {label} magic numbers...")
        print(_table_header(name))
        magics = []
        for square in range(64):
            magic = self.find_magic_number(square, is_rook)
            magics.append(magic)
            print(_table_line(square, magic))
        print("};")
        return magics

    def generate_rook_magics(self) -> list[int]:
        """Find and print magics for every rook square."""
        return self._generate("rook", "rookMagicNumbers", True)

    def generate_bishop_magics(self) -> list[int]:
        """Find and print magics for every bishop square."""
        return self._generate("bishop", "bishopMagicNumbers", False)

    def format_table(self, name: str, magics: Sequence[int]) -> str:
        """Render 64 magics as a constant array declaration."""
        if len(magics) != 64:
            raise ValueError(f"expected 64 magics, got {len(magics)}")
        lines = [_table_header(name)]
        lines.extend(_table_line(square, magic) for square, magic in enumerate(magics))
        lines.append("};")
        return "\n".join(lines)

    def generate_magic_numbers(self) -> tuple[list[int], list[int]]:
        """Generate rook then bishop magics."""
        return self.generate_rook_magics(), self.generate_bishop_magics()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate magic bitboard multipliers.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--attempts", type=int, default=DEFAULT_ATTEMPTS, help="attempts per square"
    )
    args = parser.parse_args(argv)
    MagicNumberGenerator(seed=args.seed, attempts=args.attempts).generate_magic_numbers()
    return 0