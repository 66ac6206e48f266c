"""Grid module — letter grid construction and run-capped flattening."""

from core.grid.flattener import RunFlattener, wrap_letter_string
from core.grid.matrix import MatrixBuilder

__all__ = ["MatrixBuilder", "RunFlattener", "wrap_letter_string"]
