"""Balanced square providers and the letter codec at their boundary."""

from __future__ import annotations

import string
from dataclasses import dataclass
from math import gcd
from typing import Protocol


MIN_SQUARE_SIZE = 4
MAX_SQUARE_SIZE = 26
ALPHABET = string.ascii_uppercase

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class SquareGenerationError(ValueError):
    """Raised when a square cannot be generated for the requested size."""


class SquareProvider(Protocol):
    def generate(self, n: int, seed: int) -> list[list[str]]:
        """Return an n x n grid of participant letters, deterministic per (n, seed)."""


def supports_balanced_square(n: int) -> bool:
    return MIN_SQUARE_SIZE <= n <= MAX_SQUARE_SIZE


def letter_for_position(position: int) -> str:
    if not 0 <= position < len(ALPHABET):
        raise ValueError(f"No participant letter for position {position}")
    return ALPHABET[position]


def position_for_letter(letter: object, n: int) -> int | None:
    """Decode a square cell into a participant position, or None when it does not name one of n."""
    if not isinstance(letter, str) or len(letter) != 1:
        return None
    position = ALPHABET.find(letter)
    if position == -1 or position >= n:
        return None
    return position


@dataclass
class SeededRandom:
    """Linear congruential generator driving square variation per seed."""

    state: int

    def next_int(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state

    def next_int_in_range(self, low: int, high: int) -> int:
        span = high - low + 1
        return low + (self.next_int() % span)


def find_coprimes(n: int) -> list[int]:
    return [candidate for candidate in range(1, n) if gcd(candidate, n) == 1]


def williams_permutation(n: int) -> list[int]:
    """Base column permutation satisfying the adjacent-pair balance constraint."""
    permutation = [0] * n
    if n % 2 == 0:
        for j in range(n):
            permutation[j] = j // 2 if j % 2 == 0 else n - (j + 1) // 2
    else:
        for j in range(1, n):
            permutation[j] = (j + 1) // 2 if j % 2 == 1 else n - j // 2
    return permutation


class WilliamsSquareProvider:
    """Seeded Williams-design square generator.

    The grid satisfies:

    1. row ``i`` starts with letter ``i``;
    2. every row and column is a permutation of the first ``n`` letters;
    3. each letter is balanced between odd and even columns;
    4. an ordered adjacent pair appears at most once per column parity.

    The seed picks a multiplier coprime to ``n`` that scrambles the base
    permutation while keeping column 0 fixed.
    """

    def generate(self, n: int, seed: int) -> list[list[str]]:
        if n < MIN_SQUARE_SIZE:
            raise SquareGenerationError(f"n must be at least {MIN_SQUARE_SIZE}, got {n}")
        if n > MAX_SQUARE_SIZE:
            raise SquareGenerationError(
                f"n cannot exceed {MAX_SQUARE_SIZE} as only single letters are available, got {n}"
            )

        coprimes = find_coprimes(n)
        if not coprimes:
            raise SquareGenerationError(f"Could not find any coprimes for n={n}")

        rng = SeededRandom(state=seed)
        multiplier = coprimes[rng.next_int_in_range(0, len(coprimes) - 1)]
        columns = [(value * multiplier) % n for value in williams_permutation(n)]

        return [[ALPHABET[(row + columns[col]) % n] for col in range(n)] for row in range(n)]


@dataclass
class PairingCounts:
    odd_to_even: int = 0
    even_to_odd: int = 0


def analyze_pairings(grid: list[list[str]]) -> dict[str, dict[str, PairingCounts]]:
    """Count adjacent letter pairs per row, split by column parity of the transition.

    Column 0 is the first (odd) column, so a pair starting at index 0 is an
    odd-to-even transition.
    """
    n = len(grid)
    letters = ALPHABET[:n]
    analysis = {source: {target: PairingCounts() for target in letters} for source in letters}

    for row in grid:
        for col in range(len(row) - 1):
            counts = analysis[row[col]][row[col + 1]]
            if col % 2 == 0:
                counts.odd_to_even += 1
            else:
                counts.even_to_odd += 1
    return analysis


def format_pairing_analysis(analysis: dict[str, dict[str, PairingCounts]]) -> str:
    if not analysis:
        return "Pairing analysis is not available for an empty grid."

    letters = sorted(analysis)
    lines = [
        "Pairing Analysis (Odd->Even, Even->Odd counts):",
        "",
        "From".ljust(6) + "".join(letter.rjust(8) for letter in letters),
        "To ->".ljust(6) + "-" * (len(letters) * 8),
    ]
    for source in letters:
        cells: list[str] = []
        for target in letters:
            if source == target:
                cells.append("-".rjust(8))
                continue
            counts = analysis[source][target]
            cells.append(f"({counts.odd_to_even},{counts.even_to_odd})".rjust(8))
        lines.append(source.ljust(6) + "".join(cells))
    return "\n".join(lines) + "\n"
