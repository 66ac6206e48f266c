"""Row-major flattening of a letter grid with a run-length cap.

A run of identical letters contributes at most ``max_consecutive`` characters
to the output, while the true run length keeps being tracked. Row boundaries
do not break a run: the last letter of one row and the first of the next
belong to the same run when they are equal.
"""

from __future__ import annotations

import numpy as np

from core.types import DEFAULT_MAX_CONSECUTIVE


class RunFlattener:
    """Serialize a letter grid into a run-capped string.

    All operations are vectorized with numpy.

    Usage:
        >>> RunFlattener(max_consecutive=2).flatten(np.array([["a", "a", "a", "b"]]))
        'aab'
    """

    def __init__(self, max_consecutive: int = DEFAULT_MAX_CONSECUTIVE) -> None:
        if isinstance(max_consecutive, bool) or not isinstance(max_consecutive, int):
            raise ValueError(f"max_consecutive must be an integer, got {max_consecutive!r}")
        if max_consecutive < 1:
            raise ValueError(f"max_consecutive must be positive, got {max_consecutive}")
        self._max_consecutive = max_consecutive

    @property
    def max_consecutive(self) -> int:
        return self._max_consecutive

    def flatten(self, grid: np.ndarray) -> str:
        """Flatten ``grid`` row-major, emitting at most ``max_consecutive`` per run."""
        flat = np.asarray(grid).ravel()
        n = flat.size
        if n == 0:
            return ""

        run_start = np.ones(n, dtype=bool)
        run_start[1:] = flat[1:] != flat[:-1]

        # Offset of each position from the start of its (uncapped) run
        idx = np.arange(n)
        start_idx = np.maximum.accumulate(np.where(run_start, idx, 0))
        keep = (idx - start_idx) < self._max_consecutive

        return "".join(flat[keep].tolist())


def wrap_letter_string(text: str, chars_per_line: int = 50) -> list[str]:
    """Split a letter string into fixed-width display lines."""
    if chars_per_line < 1:
        raise ValueError(f"chars_per_line must be positive, got {chars_per_line}")
    return [text[i : i + chars_per_line] for i in range(0, len(text), chars_per_line)]
