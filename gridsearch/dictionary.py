from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import httpx

from gridsearch.errors import DictionaryNotLoadedError, DictionarySourceError, EmptyDictionaryError

logger = logging.getLogger("gridsearch")

LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")


@dataclass(frozen=True)
class DictionaryIndex:
    words: frozenset[str]
    prefixes: frozenset[str]
    min_length: int
    max_length: int


def clean_word(line: str) -> str | None:
    """Trim and lowercase a raw line. Returns None unless it is made of a-z only."""
    word = line.strip().lower()
    if not word or not LETTERS.issuperset(word):
        return None
    return word


def build_index(lines: Iterable[str], min_length: int = 4, max_length: int = 8) -> DictionaryIndex:
    """Build the word and prefix sets from raw dictionary lines.

    Entries inside [min_length, max_length] become words. Every entry, whatever
    its length, contributes its prefixes up to max_length characters so that
    pruning only rejects strings no dictionary entry continues.
    """
    if min_length < 1 or max_length < 1:
        raise ValueError(f"word lengths must be positive (got {min_length}, {max_length})")
    if min_length > max_length:
        raise ValueError(f"min_length {min_length} exceeds max_length {max_length}")

    words: set[str] = set()
    prefixes: set[str] = set()
    skipped = 0

    for line in lines:
        word = clean_word(line)
        if word is None:
            skipped += 1
            continue

        if min_length <= len(word) <= max_length:
            words.add(word)
        for i in range(1, min(len(word), max_length) + 1):
            prefixes.add(word[:i])

    if not words:
        logger.warning(
            "Dictionary has no words of length %d-%d (%d prefixes, %d lines skipped)",
            min_length, max_length, len(prefixes), skipped,
        )
        raise EmptyDictionaryError(
            f"no valid words of length {min_length}-{max_length} in dictionary"
        )

    logger.info(
        "Dictionary built: %d words, %d prefixes, %d lines skipped",
        len(words), len(prefixes), skipped,
    )
    return DictionaryIndex(frozenset(words), frozenset(prefixes), min_length, max_length)


def read_lines(source: str | Path, timeout: float = 10.0, transport: httpx.BaseTransport | None = None) -> list[str]:
    """Read raw dictionary lines from a file path or an http(s) URL."""
    source = str(source)
    if source.startswith(("http://", "https://")):
        logger.info("Fetching dictionary from %s", source)
        try:
            with httpx.Client(timeout=timeout, transport=transport) as client:
                resp = client.get(source)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise DictionarySourceError(f"could not fetch {source}: {e}") from e
        return resp.text.splitlines()

    logger.info("Reading dictionary from %s", source)
    try:
        with open(source, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except OSError as e:
        raise DictionarySourceError(f"could not read {source}: {e}") from e


def load_index(source: str | Path, min_length: int = 4, max_length: int = 8, timeout: float = 10.0) -> DictionaryIndex:
    return build_index(read_lines(source, timeout), min_length, max_length)


class DictionaryStore:
    """Process-wide holder of the current index.

    Reloads are serialized and publish a fully built index with one
    assignment, so a search that grabbed ``current`` keeps a complete index
    for its whole run.
    """

    def __init__(self):
        self._index: DictionaryIndex | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._index is not None

    @property
    def current(self) -> DictionaryIndex:
        index = self._index
        if index is None:
            raise DictionaryNotLoadedError("dictionary has not been loaded")
        return index

    def publish(self, index: DictionaryIndex) -> DictionaryIndex:
        with self._lock:
            self._index = index
        return index

    def reload(self, lines: Iterable[str], min_length: int, max_length: int) -> DictionaryIndex:
        # A failed build raises before publish, leaving the previous index live.
        with self._lock:
            index = build_index(lines, min_length, max_length)
            self._index = index
        return index

    def clear(self):
        with self._lock:
            self._index = None


store = DictionaryStore()
