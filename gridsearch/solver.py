from __future__ import annotations

from dataclasses import dataclass

from gridsearch.dictionary import DictionaryIndex
from gridsearch.grid import Grid

# Neighbor offsets, visited in this order
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


@dataclass(frozen=True)
class SearchReport:
    found: dict[tuple[int, int], list[str]]
    unique_word_count: int
    total_instance_count: int

    @property
    def unique_words(self) -> list[str]:
        return sorted({w for words in self.found.values() for w in words})


def _neighbors(grid: Grid, row: int, col: int) -> list[tuple[int, int, int]]:
    adj = []
    for dr, dc in DIRECTIONS:
        nr, nc = row + dr, col + dc
        if grid.in_bounds(nr, nc):
            adj.append((nr, nc, nr * grid.size + nc))
    return adj


def search_from_cell(row: int, col: int, grid: Grid, index: DictionaryIndex) -> list[str]:
    """Find every word spelled by a path starting at (row, col).

    Depth-first over an explicit stack of (row, col, candidate, visited) frames
    where visited is a bitmask of row*size+col. A branch is dropped as soon as
    its candidate is not a dictionary prefix. Returns the words sorted.
    """
    words, prefixes = index.words, index.prefixes
    min_length, max_length = index.min_length, index.max_length

    start = grid.letter_at(row, col)
    if start not in prefixes:
        return []

    found: set[str] = set()
    stack = [(row, col, start, 1 << (row * grid.size + col))]

    while stack:
        r, c, candidate, visited = stack.pop()
        length = len(candidate)

        if min_length <= length <= max_length and candidate in words:
            found.add(candidate)

        if length >= max_length:
            continue

        for nr, nc, bit_index in _neighbors(grid, r, c):
            bit = 1 << bit_index
            if visited & bit:
                continue
            next_candidate = candidate + grid.letter_at(nr, nc)
            if next_candidate not in prefixes:
                continue
            stack.append((nr, nc, next_candidate, visited | bit))

    return sorted(found)


def search_all(grid: Grid, index: DictionaryIndex) -> SearchReport:
    """Search from every cell in row-major order and collect the non-empty results."""
    found: dict[tuple[int, int], list[str]] = {}
    unique: set[str] = set()
    total = 0

    for r in range(grid.size):
        for c in range(grid.size):
            words = search_from_cell(r, c, grid, index)
            if words:
                found[(r, c)] = words
                unique.update(words)
                total += len(words)

    return SearchReport(found, len(unique), total)


def format_report(report: SearchReport, grid: Grid) -> str:
    if not report.found:
        return "No words found."

    lines = [f"Found {report.unique_word_count} unique word(s) ({report.total_instance_count} instances total):"]
    for (r, c), words in sorted(report.found.items()):
        lines.append(f"Start ({r},{c}) '{grid.letter_at(r, c).upper()}': {', '.join(words)}")
    return "\n".join(lines)
