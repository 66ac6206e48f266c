"""Immutable word dictionary shared by every request.

The dictionary is built once at startup and never modified afterwards, so it
is handed to concurrent requests by reference without any locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from core.errors import DictionaryLoadError
from core.types import DEFAULT_MAX_WORD_LENGTH


@dataclass(frozen=True, slots=True)
class Dictionary:
    """Set of unique, lowercase, non-empty words.

    Attributes:
        words: The words themselves.
        max_length: Longest entry allowed at load time (None = unbounded).
    """
    words: frozenset[str] = frozenset()
    max_length: int | None = None
    min_length: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_length", min(map(len, self.words), default=0))

    @classmethod
    def from_words(cls, words: Iterable[str], max_length: int | None = None) -> Dictionary:
        """Normalize raw entries into a dictionary.

        Entries are stripped; blank entries and entries longer than
        ``max_length`` (measured before lowercasing) are dropped; the rest
        are lowercased and de-duplicated.
        """
        kept: set[str] = set()
        for raw in words:
            word = raw.strip()
            if not word:
                continue
            if max_length is not None and len(word) > max_length:
                continue
            kept.add(word.lower())
        return cls(words=frozenset(kept), max_length=max_length)

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    @property
    def is_empty(self) -> bool:
        return not self.words


def load_dictionary(
    path: str | Path,
    max_length: int | None = DEFAULT_MAX_WORD_LENGTH,
) -> Dictionary:
    """Load a word-per-line UTF-8 file.

    Args:
        path: Dictionary file.
        max_length: Drop entries longer than this.

    Returns:
        Immutable Dictionary.

    Raises:
        DictionaryLoadError: If the file is missing, unreadable or not UTF-8.
    """
    path = Path(path)
    logger.info("Loading dictionary from {}", path)

    try:
        with path.open(encoding="utf-8") as f:
            dictionary = Dictionary.from_words(f, max_length=max_length)
    except FileNotFoundError as e:
        raise DictionaryLoadError(
            f"Dictionary file not found: {path}", context={"path": str(path)}
        ) from e
    except UnicodeDecodeError as e:
        raise DictionaryLoadError(
            f"Dictionary file is not valid UTF-8: {path}",
            context={"path": str(path), "position": e.start},
        ) from e
    except OSError as e:
        raise DictionaryLoadError(
            f"Cannot read dictionary file {path}: {e.strerror or e}",
            context={"path": str(path)},
        ) from e

    if dictionary.is_empty:
        logger.warning("Dictionary {} contains no usable words", path)
    else:
        logger.info(
            "Dictionary loaded with {} words | lengths {}-{}",
            len(dictionary),
            dictionary.min_length,
            max(map(len, dictionary.words)),
        )
    return dictionary
