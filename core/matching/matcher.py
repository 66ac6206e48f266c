"""Brute-force contiguous-substring dictionary search.

Every window length from the shortest dictionary word up to ``max_word_len``
is slid across the letter string and each substring is checked against the
dictionary's hash set. Cost is O((max_word_len - min_len) * len(text)) set
lookups, which dominates the pipeline for large images.
"""

from __future__ import annotations

from loguru import logger

from core.matching.dictionary import Dictionary
from core.types import DEFAULT_MAX_RESULTS, DEFAULT_MAX_WORD_LENGTH


class DictionaryMatcher:
    """Find dictionary words embedded in a letter string.

    Stateless and thread-safe; the dictionary is only read.

    Usage:
        >>> matcher = DictionaryMatcher(max_word_len=10)
        >>> matcher.match("xcatx", Dictionary(frozenset({"cat", "dog"})))
        ['cat']
    """

    def __init__(
        self,
        max_word_len: int = DEFAULT_MAX_WORD_LENGTH,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        if max_word_len < 0:
            raise ValueError(f"max_word_len must be non-negative, got {max_word_len}")
        if max_results < 0:
            raise ValueError(f"max_results must be non-negative, got {max_results}")
        self._max_word_len = max_word_len
        self._max_results = max_results

    @property
    def max_word_len(self) -> int:
        return self._max_word_len

    @property
    def max_results(self) -> int:
        return self._max_results

    def window_sizes(self, text: str, dictionary: Dictionary) -> range:
        """Window lengths scanned for ``text``; empty when nothing can match."""
        min_len = dictionary.min_length
        if min_len == 0:
            return range(0)
        return range(min_len, min(self._max_word_len, len(text)) + 1)

    def find_all(self, text: str, dictionary: Dictionary) -> set[str]:
        """Every distinct dictionary word occurring in ``text``."""
        found: set[str] = set()
        words = dictionary.words
        n = len(text)

        for size in self.window_sizes(text, dictionary):
            for i in range(n - size + 1):
                candidate = text[i : i + size]
                if candidate in words:
                    found.add(candidate)

        return found

    def match(self, text: str, dictionary: Dictionary) -> list[str]:
        """Return up to ``max_results`` matches, longest first.

        Equal-length matches are ordered alphabetically.
        """
        if dictionary.is_empty:
            return []

        found = self.find_all(text, dictionary)
        ranked = sorted(found, key=lambda w: (-len(w), w))

        logger.debug("Matched {} distinct words in {} letters", len(found), len(text))
        return ranked[: self._max_results]
