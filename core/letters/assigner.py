"""Random letter-to-bin assignment.

The alphabet is shuffled uniformly for every image; the most populous bin gets
the first shuffled letter, the next bin the second, and so on. Letter
frequencies in natural language play no role.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from core.types import (
    CANONICAL_ALPHABET,
    INTENSITY_LEVELS,
    UNASSIGNED,
    BinAssignment,
    LetterMapping,
    RankedBin,
)


class LetterAssigner:
    """Build a total intensity → letter mapping from a bin ranking.

    The random source is always passed in, so a seeded
    ``numpy.random.Generator`` gives a reproducible mapping.

    Usage:
        >>> assigner = LetterAssigner()
        >>> mapping = assigner.assign(ranking, np.random.default_rng(42))
        >>> mapping.letter_for(128)
    """

    def __init__(self, alphabet: Sequence[str] = CANONICAL_ALPHABET) -> None:
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Alphabet letters must be distinct")
        if any(len(letter) != 1 for letter in alphabet):
            raise ValueError("Alphabet entries must be single characters")
        self._alphabet = np.array(list(alphabet), dtype="<U1")

    @property
    def alphabet(self) -> tuple[str, ...]:
        return tuple(str(letter) for letter in self._alphabet)

    def shuffle(self, rng: np.random.Generator) -> list[str]:
        """Return a uniformly random permutation of the alphabet."""
        return [str(letter) for letter in rng.permutation(self._alphabet)]

    def assign(
        self,
        ranking: Sequence[RankedBin],
        rng: np.random.Generator,
    ) -> LetterMapping:
        """Pair ranked bins with shuffled letters.

        Args:
            ranking: Bins ordered most populous first.
            rng: Random generator, consumed once.

        Returns:
            Immutable mapping covering every intensity 0-255.

        Raises:
            ValueError: If the ranking and alphabet sizes differ.
            InvariantViolation: If the bins leave an intensity unmapped.
        """
        if len(ranking) != len(self._alphabet):
            raise ValueError(
                f"Ranking has {len(ranking)} bins but alphabet has {len(self._alphabet)} letters"
            )

        letters = self.shuffle(rng)
        table = np.full(INTENSITY_LEVELS, UNASSIGNED, dtype="<U1")
        assignments: list[BinAssignment] = []

        for ranked, letter in zip(ranking, letters):
            b = ranked.bin
            table[b.start : b.end + 1] = letter
            assignments.append(BinAssignment(bin=b, letter=letter, pixel_count=ranked.pixel_count))

        mapping = LetterMapping(table=table, assignments=tuple(assignments))
        mapping.ensure_total()

        logger.debug("Letter order for this image: {}", "".join(letters))
        return mapping
