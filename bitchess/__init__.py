"""Bitboard chess: board state, pseudo-legal move rules, magic bitboards and a magic-number search."""

__version__ = "0.1.0"