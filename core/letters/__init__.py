"""Letters module — histogram binning and per-request letter assignment."""

from core.letters.assigner import LetterAssigner
from core.letters.bins import BinPartitioner
from core.letters.histogram import build_histogram

__all__ = ["BinPartitioner", "LetterAssigner", "build_histogram"]
