"""
Constant tables for the contract ID check digit.

Source: "Check Digit Calculation for Contract-IDs" (OCHP / eMI3).

- ALPHABET: character -> (q1, q2, r1, r2), q in {0, 1}, r in {0, 1, 2}.
  A character of value v ('0'..'9' = 0..9, 'A'..'Z' = 10..35) satisfies
  v = 18*q1 + 9*q2 + 3*r1 + r2.
- P1: row i is P1^(i+1) flattened as [a, b, c, d], P1 = [[0, 1], [1, 1]] mod 2.
- P2: row i is P2^(i+1) flattened as [a, b, c, d], P2 = [[0, 1], [1, 2]] mod 3.
- REVERSE: combined index q1 + 2*q2 + 4*r1 + 16*r2 -> character.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

Vector = Tuple[int, int, int, int]

ALPHABET: Mapping[str, Vector] = MappingProxyType({
    "0": (0, 0, 0, 0),
    "1": (0, 0, 0, 1),
    "2": (0, 0, 0, 2),
    "3": (0, 0, 1, 0),
    "4": (0, 0, 1, 1),
    "5": (0, 0, 1, 2),
    "6": (0, 0, 2, 0),
    "7": (0, 0, 2, 1),
    "8": (0, 0, 2, 2),
    "9": (0, 1, 0, 0),
    "A": (0, 1, 0, 1),
    "B": (0, 1, 0, 2),
    "C": (0, 1, 1, 0),
    "D": (0, 1, 1, 1),
    "E": (0, 1, 1, 2),
    "F": (0, 1, 2, 0),
    "G": (0, 1, 2, 1),
    "H": (0, 1, 2, 2),
    "I": (1, 0, 0, 0),
    "J": (1, 0, 0, 1),
    "K": (1, 0, 0, 2),
    "L": (1, 0, 1, 0),
    "M": (1, 0, 1, 1),
    "N": (1, 0, 1, 2),
    "O": (1, 0, 2, 0),
    "P": (1, 0, 2, 1),
    "Q": (1, 0, 2, 2),
    "R": (1, 1, 0, 0),
    "S": (1, 1, 0, 1),
    "T": (1, 1, 0, 2),
    "U": (1, 1, 1, 0),
    "V": (1, 1, 1, 1),
    "W": (1, 1, 1, 2),
    "X": (1, 1, 2, 0),
    "Y": (1, 1, 2, 1),
    "Z": (1, 1, 2, 2),
})

P1: Tuple[Vector, ...] = (
    (0, 1, 1, 1),
    (1, 1, 1, 0),
    (1, 0, 0, 1),
    (0, 1, 1, 1),
    (1, 1, 1, 0),
    (1, 0, 0, 1),
    (0, 1, 1, 1),
    (1, 1, 1, 0),
    (1, 0, 0, 1),
    (0, 1, 1, 1),
    (1, 1, 1, 0),
    (1, 0, 0, 1),
    (0, 1, 1, 1),
    (1, 1, 1, 0),
)

P2: Tuple[Vector, ...] = (
    (0, 1, 1, 2),
    (1, 2, 2, 2),
    (2, 2, 2, 0),
    (2, 0, 0, 2),
    (0, 2, 2, 1),
    (2, 1, 1, 1),
    (1, 1, 1, 0),
    (1, 0, 0, 1),
    (0, 1, 1, 2),
    (1, 2, 2, 2),
    (2, 2, 2, 0),
    (2, 0, 0, 2),
    (0, 2, 2, 1),
    (2, 1, 1, 1),
)


def combined_index(q1: int, q2: int, r1: int, r2: int) -> int:
    """Index of a (q1, q2, r1, r2) vector in REVERSE."""
    return q1 + 2 * q2 + 4 * r1 + 16 * r2


REVERSE: Mapping[int, str] = MappingProxyType(
    {combined_index(*vector): char for char, vector in ALPHABET.items()}
)
