"""Shared types, protocols, and constants for PixelWords core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import numpy as np

from core.errors import InvariantViolation

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from core.matching.dictionary import Dictionary


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

INTENSITY_LEVELS = 256
MAX_INTENSITY = INTENSITY_LEVELS - 1

# Reference order only; it is shuffled uniformly before use.
CANONICAL_ALPHABET: tuple[str, ...] = (
    "e", "a", "r", "i", "o", "t", "n", "s", "l", "c", "u", "d", "p",
    "m", "h", "g", "b", "f", "y", "w", "k", "v", "x", "z", "j", "q",
)
NUM_BINS = len(CANONICAL_ALPHABET)  # one bin per letter

DEFAULT_MAX_WORD_LENGTH = 10
DEFAULT_MAX_CONSECUTIVE = 2
DEFAULT_MAX_RESULTS = 10

# Marks a lookup-table slot that no bin filled.
UNASSIGNED = ""


# ---------------------------------------------------------------------------
# Core Data Structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Bin:
    """Closed intensity interval [start, end].

    Attributes:
        index: Position of the bin in the unranked partition (0-25).
        start: First intensity in the bin.
        end: Last intensity in the bin (inclusive).
    """
    index: int
    start: int
    end: int

    def __post_init__(self) -> None:
        assert 0 <= self.start <= self.end <= MAX_INTENSITY, (
            f"Invalid bin [{self.start}, {self.end}]"
        )

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True, slots=True)
class RankedBin:
    """A bin together with the number of pixels that fell into it."""
    bin: Bin
    pixel_count: int


@dataclass(frozen=True, slots=True)
class BinAssignment:
    """Letter chosen for one bin."""
    bin: Bin
    letter: str
    pixel_count: int = 0


@dataclass(frozen=True, slots=True)
class LetterMapping:
    """Intensity → letter lookup built for a single request.

    Attributes:
        table: (256,) array of one-character strings, indexed by intensity.
        assignments: Bin/letter pairs in rank order (most populous first).
    """
    table: NDArray[np.str_]
    assignments: tuple[BinAssignment, ...] = ()

    def __post_init__(self) -> None:
        assert self.table.shape == (INTENSITY_LEVELS,), (
            f"Expected shape ({INTENSITY_LEVELS},), got {self.table.shape}"
        )
        self.table.setflags(write=False)

    @property
    def missing_values(self) -> list[int]:
        """Intensities that have no letter (empty for a valid mapping)."""
        return [int(v) for v in np.flatnonzero(self.table == UNASSIGNED)]

    @property
    def is_total(self) -> bool:
        return not self.missing_values

    def letter_for(self, intensity: int) -> str:
        """Return the letter for one intensity value.

        Raises:
            InvariantViolation: If the value has no letter.
        """
        letter = str(self.table[intensity])
        if letter == UNASSIGNED:
            raise InvariantViolation(
                f"No letter mapped for intensity {intensity}",
                context={"intensity": intensity},
            )
        return letter

    def ensure_total(self) -> None:
        missing = self.missing_values
        if missing:
            raise InvariantViolation(
                f"Letter mapping is missing {len(missing)} intensity values",
                context={"missing": missing},
            )


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Complete result for one image.

    Attributes:
        words: Up to 10 dictionary words, longest first.
        letter_string: Run-capped, row-major letter string the words came from.
        mapping: Letter mapping used for this image.
        width: Source image width in pixels.
        height: Source image height in pixels.
        inference_time_ms: Wall time spent in the pipeline.
    """
    words: list[str] = field(default_factory=list)
    letter_string: str = ""
    mapping: LetterMapping | None = None
    width: int = 0
    height: int = 0
    inference_time_ms: float = 0.0


# ---------------------------------------------------------------------------
# Protocols (Interfaces)
# ---------------------------------------------------------------------------

class WordMatcher(Protocol):
    """Protocol for strategies that find dictionary words in a letter string."""

    def match(self, text: str, dictionary: Dictionary) -> list[str]:
        """Return matched words, longest first."""
        ...
