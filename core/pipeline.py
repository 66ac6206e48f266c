"""End-to-end image-to-words pipeline.

Orchestrates the full flow: grayscale image → histogram → bin ranking →
letter assignment → letter grid → run-capped letter string → dictionary
matches.

This is the main entry point for the API server and the CLI. One call to
``process`` is a self-contained, CPU-bound computation; the only shared
state is the read-only dictionary.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import numpy as np
from loguru import logger

from core.grid.flattener import RunFlattener
from core.grid.matrix import MatrixBuilder
from core.letters.assigner import LetterAssigner
from core.letters.bins import BinPartitioner
from core.letters.histogram import build_histogram
from core.matching.dictionary import Dictionary
from core.matching.matcher import DictionaryMatcher
from core.types import (
    DEFAULT_MAX_CONSECUTIVE,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MAX_WORD_LENGTH,
    ExtractionResult,
    WordMatcher,
)
from core.vision.decoder import ImageDecoder


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the word extraction pipeline.

    Attributes:
        max_word_len: Longest window scanned for dictionary words.
        max_consecutive: Cap on identical consecutive letters in the string.
        max_results: Number of words returned.
        random_seed: Seed for letter assignment (None = system entropy).
    """
    max_word_len: int = DEFAULT_MAX_WORD_LENGTH
    max_consecutive: int = DEFAULT_MAX_CONSECUTIVE
    max_results: int = DEFAULT_MAX_RESULTS
    random_seed: int | None = None


class WordExtractionPipeline:
    """Image → words pipeline.

    Combines all core modules into a single interface. Holds no per-request
    state, so one instance can serve concurrent requests.

    Usage:
        >>> pipeline = WordExtractionPipeline(dictionary, PipelineConfig(random_seed=7))
        >>> result = pipeline.process(gray)
        >>> result.words, result.letter_string
    """

    def __init__(
        self,
        dictionary: Dictionary,
        config: PipelineConfig | None = None,
        matcher: WordMatcher | None = None,
        decoder: ImageDecoder | None = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._dictionary = dictionary
        self._partitioner = BinPartitioner()
        self._assigner = LetterAssigner()
        self._matrix_builder = MatrixBuilder()
        self._flattener = RunFlattener(self._config.max_consecutive)
        self._matcher: WordMatcher = matcher or DictionaryMatcher(
            max_word_len=self._config.max_word_len,
            max_results=self._config.max_results,
        )
        self._decoder = decoder or ImageDecoder()

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def new_rng(self) -> np.random.Generator:
        """Fresh generator for one request (seeded if configured)."""
        return np.random.default_rng(self._config.random_seed)

    def process(
        self,
        image: np.ndarray,
        rng: np.random.Generator | None = None,
    ) -> ExtractionResult:
        """Run one image through the full pipeline.

        Args:
            image: Grayscale image (H, W) or BGR/BGRA frame, dtype uint8.
            rng: Random generator for letter assignment; a fresh one from
                ``new_rng()`` is used when omitted.

        Returns:
            ExtractionResult with matched words and the letter string.

        Raises:
            InputError: If the image is empty or not uint8.
            InvariantViolation: If the letter mapping is incomplete.
        """
        t_start = time.perf_counter()
        rng = rng if rng is not None else self.new_rng()
        image = self._decoder.to_grayscale(image)

        # 1. Histogram and bin ranking
        histogram = build_histogram(image)
        ranking = self._partitioner.rank(histogram)

        # 2. Random letter per bin
        mapping = self._assigner.assign(ranking, rng)

        # 3. Letter grid and run-capped string
        grid = self._matrix_builder.build(image, mapping)
        letter_string = self._flattener.flatten(grid)

        # 4. Dictionary search
        words = self._matcher.match(letter_string, self._dictionary)

        inference_ms = (time.perf_counter() - t_start) * 1000.0
        height, width = image.shape
        logger.debug(
            "Processed {}x{} image | letters={} words={} | {:.1f}ms",
            width,
            height,
            len(letter_string),
            len(words),
            inference_ms,
        )

        return ExtractionResult(
            words=words,
            letter_string=letter_string,
            mapping=mapping,
            width=width,
            height=height,
            inference_time_ms=inference_ms,
        )

    def process_bytes(
        self,
        data: bytes | None,
        rng: np.random.Generator | None = None,
    ) -> ExtractionResult:
        """Decode an encoded image and process it."""
        return self.process(self._decoder.decode(data), rng=rng)
