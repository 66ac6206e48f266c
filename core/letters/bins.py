"""Partitioning of the 0-255 intensity range into letter bins.

Bins are contiguous and near-equal in width (256 / 26 ≈ 9.85). Boundaries use
integer floor division so each bin ends exactly one value before the next
starts, and the last bin always ends at 255.
"""

from __future__ import annotations

import numpy as np

from core.types import INTENSITY_LEVELS, MAX_INTENSITY, NUM_BINS, Bin, RankedBin


class BinPartitioner:
    """Split the intensity range into bins and rank them by population.

    Stateless after construction and thread-safe.

    Usage:
        >>> partitioner = BinPartitioner()
        >>> ranking = partitioner.rank(build_histogram(gray))
        >>> ranking[0].bin  # most populous bin
    """

    def __init__(self, num_bins: int = NUM_BINS) -> None:
        if not 1 <= num_bins <= INTENSITY_LEVELS:
            raise ValueError(f"num_bins must be in [1, {INTENSITY_LEVELS}], got {num_bins}")
        self._num_bins = num_bins
        self._bins = self._compute_bins(num_bins)
        self._starts = np.array([b.start for b in self._bins], dtype=np.intp)

    @property
    def num_bins(self) -> int:
        return self._num_bins

    def partition(self) -> tuple[Bin, ...]:
        """Return the bins in index order."""
        return self._bins

    def bin_counts(self, histogram: np.ndarray) -> np.ndarray:
        """Sum histogram counts per bin.

        Args:
            histogram: (256,) pixel counts per intensity.

        Returns:
            (num_bins,) int64 array of per-bin totals.
        """
        if histogram.shape != (INTENSITY_LEVELS,):
            raise ValueError(
                f"Expected histogram shape ({INTENSITY_LEVELS},), got {histogram.shape}"
            )
        return np.add.reduceat(histogram.astype(np.int64), self._starts)

    def rank(self, histogram: np.ndarray) -> tuple[RankedBin, ...]:
        """Order bins by descending pixel count.

        Ties keep index order, so an all-zero histogram ranks bins 0..25.
        """
        counts = self.bin_counts(histogram)
        order = np.argsort(-counts, kind="stable")
        return tuple(RankedBin(bin=self._bins[i], pixel_count=int(counts[i])) for i in order)

    @staticmethod
    def _compute_bins(num_bins: int) -> tuple[Bin, ...]:
        starts = [i * INTENSITY_LEVELS // num_bins for i in range(num_bins)]
        ends = [s - 1 for s in starts[1:]] + [MAX_INTENSITY]
        return tuple(Bin(index=i, start=s, end=e) for i, (s, e) in enumerate(zip(starts, ends)))
