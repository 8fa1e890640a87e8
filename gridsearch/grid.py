from __future__ import annotations

import math
import re
from typing import Sequence

from gridsearch.dictionary import LETTERS
from gridsearch.errors import InvalidGridError

_SEPARATORS = re.compile(r"[\s,]+")


def parse_letters(text: str) -> list[str]:
    """Split free text like "cats oren glad xyzq" or "c,a,t,s,..." into cells."""
    text = text.strip()
    if not text:
        return []
    if _SEPARATORS.search(text) is None:
        return list(text)
    parts = [p for p in _SEPARATORS.split(text) if p]
    # Whole rows ("cats oren ...") are split per character
    if all(len(p) > 1 for p in parts):
        return [ch for p in parts for ch in p]
    return parts


class Grid:
    """Immutable NxN matrix of lowercase letters.

    Cells are stripped and lowercased, then each must be exactly one letter
    a-z; size*size cells are required.
    """

    __slots__ = ("_size", "_cells")

    def __init__(self, size: int, cells: Sequence[str]):
        cells = list(cells)
        if size < 1:
            raise InvalidGridError(f"grid size must be positive, got {size}")
        if len(cells) != size * size:
            raise InvalidGridError(f"expected {size * size} letters for a {size}x{size} grid, got {len(cells)}")

        letters = []
        for i, raw in enumerate(cells):
            letter = str(raw).strip().lower()
            if len(letter) != 1 or letter not in LETTERS:
                r, c = divmod(i, size)
                raise InvalidGridError(f"cell ({r},{c}) must be a single letter a-z, got {raw!r}")
            letters.append(letter)

        self._size = size
        self._cells = tuple(letters)

    @property
    def size(self) -> int:
        return self._size

    @classmethod
    def from_letters(cls, letters: Sequence[str], size: int | None = None) -> Grid:
        """Build a grid from size*size single letters in row-major order.

        When size is omitted it is inferred from a square letter count.
        """
        letters = list(letters)
        if size is None:
            size = math.isqrt(len(letters))
        return cls(size, letters)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> Grid:
        for row in rows:
            if len(row) != len(rows):
                raise InvalidGridError(f"grid must be square, got a row of {len(row)} in {len(rows)} rows")
        return cls.from_letters([ch for row in rows for ch in row], len(rows))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def letter_at(self, row: int, col: int) -> str:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row},{col}) is outside a {self.size}x{self.size} grid")
        return self._cells[row * self.size + col]

    def rows(self) -> list[list[str]]:
        return [list(self._cells[r * self.size:(r + 1) * self.size]) for r in range(self.size)]

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __hash__(self):
        return hash((self.size, self._cells))

    def __str__(self):
        return " / ".join(" ".join(row) for row in self.rows())
