"""Tests for core.letters — histogram, bin partitioning, letter assignment."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays

from core.errors import InputError
from core.letters.assigner import LetterAssigner
from core.letters.bins import BinPartitioner
from core.letters.histogram import build_histogram
from core.types import CANONICAL_ALPHABET, INTENSITY_LEVELS, NUM_BINS


class TestBuildHistogram:
    """Tests for build_histogram."""

    def test_gradient_counts_each_level_once(self, gradient_image: np.ndarray) -> None:
        hist = build_histogram(gradient_image)
        assert hist.shape == (INTENSITY_LEVELS,)
        assert (hist == 1).all()

    def test_solid_image(self, solid_image: np.ndarray) -> None:
        hist = build_histogram(solid_image)
        assert hist[128] == 20
        assert hist.sum() == 20

    def test_empty_image(self) -> None:
        hist = build_histogram(np.zeros((0, 0), dtype=np.uint8))
        assert hist.shape == (INTENSITY_LEVELS,)
        assert hist.sum() == 0

    def test_color_image_raises(self) -> None:
        with pytest.raises(InputError, match="grayscale"):
            build_histogram(np.zeros((4, 4, 3), dtype=np.uint8))

    def test_wrong_dtype_raises(self) -> None:
        with pytest.raises(InputError, match="uint8"):
            build_histogram(np.zeros((4, 4), dtype=np.float32))

    @given(
        arrays(
            dtype=np.uint8,
            shape=st.tuples(st.integers(1, 20), st.integers(1, 20)),
        )
    )
    @settings(max_examples=50)
    def test_total_equals_pixel_count(self, image: np.ndarray) -> None:
        assert build_histogram(image).sum() == image.size


class TestBinPartitioner:
    """Tests for BinPartitioner."""

    def test_default_has_26_bins(self) -> None:
        assert len(BinPartitioner().partition()) == NUM_BINS

    def test_known_boundaries(self) -> None:
        bins = BinPartitioner().partition()
        assert (bins[0].start, bins[0].end) == (0, 8)
        assert (bins[1].start, bins[1].end) == (9, 18)
        assert bins[13].start == 128
        assert (bins[-1].start, bins[-1].end) == (246, 255)

    def test_partition_covers_range_exactly(self) -> None:
        covered = [v for b in BinPartitioner().partition() for v in range(b.start, b.end + 1)]
        assert covered == list(range(INTENSITY_LEVELS))

    def test_near_equal_widths(self) -> None:
        widths = {b.width for b in BinPartitioner().partition()}
        assert widths <= {9, 10}

    @given(st.integers(1, 256))
    @settings(max_examples=50)
    def test_any_bin_count_partitions_exactly(self, num_bins: int) -> None:
        bins = BinPartitioner(num_bins).partition()
        assert len(bins) == num_bins
        assert bins[0].start == 0
        assert bins[-1].end == 255
        for prev, nxt in zip(bins, bins[1:]):
            assert nxt.start == prev.end + 1

    def test_invalid_bin_count_raises(self) -> None:
        with pytest.raises(ValueError):
            BinPartitioner(0)
        with pytest.raises(ValueError):
            BinPartitioner(257)

    def test_bin_counts_sum_to_pixels(self, gray_image: np.ndarray) -> None:
        counts = BinPartitioner().bin_counts(build_histogram(gray_image))
        assert counts.shape == (NUM_BINS,)
        assert counts.sum() == gray_image.size

    def test_rank_orders_by_count(self) -> None:
        image = np.zeros((10, 10), dtype=np.uint8)
        image[:, :3] = 250  # 30 px in last bin
        image[:, 3:8] = 130  # 50 px in bin 13
        ranking = BinPartitioner().rank(build_histogram(image))

        assert ranking[0].bin.index == 13
        assert ranking[0].pixel_count == 50
        assert ranking[1].bin.index == 25
        assert ranking[2].bin.index == 0
        assert ranking[2].pixel_count == 20

    def test_ties_keep_index_order(self) -> None:
        ranking = BinPartitioner().rank(np.zeros(INTENSITY_LEVELS, dtype=np.int64))
        assert [r.bin.index for r in ranking] == list(range(NUM_BINS))

    def test_ties_after_populated_bins(self) -> None:
        image = np.full((2, 2), 255, dtype=np.uint8)
        ranking = BinPartitioner().rank(build_histogram(image))
        assert [r.bin.index for r in ranking] == [25, *range(25)]

    def test_wrong_histogram_shape_raises(self) -> None:
        with pytest.raises(ValueError, match="histogram"):
            BinPartitioner().bin_counts(np.zeros(10, dtype=np.int64))

    @given(arrays(dtype=np.uint8, shape=st.tuples(st.integers(1, 16), st.integers(1, 16))))
    @settings(max_examples=50)
    def test_ranking_is_non_increasing(self, image: np.ndarray) -> None:
        ranking = BinPartitioner().rank(build_histogram(image))
        counts = [r.pixel_count for r in ranking]
        assert counts == sorted(counts, reverse=True)
        assert sum(counts) == image.size


class TestLetterAssigner:
    """Tests for LetterAssigner."""

    def _ranking(self, image: np.ndarray):
        return BinPartitioner().rank(build_histogram(image))

    def test_mapping_is_total(self, gray_image: np.ndarray, rng: np.random.Generator) -> None:
        mapping = LetterAssigner().assign(self._ranking(gray_image), rng)
        assert mapping.is_total
        assert set(mapping.table.tolist()) == set(CANONICAL_ALPHABET)

    def test_each_letter_owns_one_full_bin(self, gray_image: np.ndarray, rng: np.random.Generator) -> None:
        mapping = LetterAssigner().assign(self._ranking(gray_image), rng)

        letters = [a.letter for a in mapping.assignments]
        assert len(letters) == NUM_BINS
        assert len(set(letters)) == NUM_BINS
        for a in mapping.assignments:
            assert set(mapping.table[a.bin.start : a.bin.end + 1].tolist()) == {a.letter}

    def test_most_populous_bin_gets_first_shuffled_letter(self, solid_image: np.ndarray) -> None:
        assigner = LetterAssigner()
        expected = assigner.shuffle(np.random.default_rng(3))
        mapping = assigner.assign(self._ranking(solid_image), np.random.default_rng(3))

        assert mapping.assignments[0].bin.index == 13
        assert mapping.assignments[0].letter == expected[0]
        assert mapping.letter_for(128) == expected[0]
        assert [a.letter for a in mapping.assignments] == expected

    def test_same_seed_same_mapping(self, gray_image: np.ndarray) -> None:
        ranking = self._ranking(gray_image)
        a = LetterAssigner().assign(ranking, np.random.default_rng(7))
        b = LetterAssigner().assign(ranking, np.random.default_rng(7))
        assert (a.table == b.table).all()

    def test_different_seeds_vary(self, gray_image: np.ndarray) -> None:
        ranking = self._ranking(gray_image)
        tables = {
            "".join(LetterAssigner().assign(ranking, np.random.default_rng(seed)).table.tolist())
            for seed in range(5)
        }
        assert len(tables) > 1

    def test_shuffle_is_a_permutation(self, rng: np.random.Generator) -> None:
        letters = LetterAssigner().shuffle(rng)
        assert sorted(letters) == sorted(CANONICAL_ALPHABET)

    def test_ranking_size_mismatch_raises(self, gray_image: np.ndarray, rng: np.random.Generator) -> None:
        ranking = self._ranking(gray_image)[:10]
        with pytest.raises(ValueError, match="10 bins"):
            LetterAssigner().assign(ranking, rng)

    def test_duplicate_letters_rejected(self) -> None:
        with pytest.raises(ValueError, match="distinct"):
            LetterAssigner(alphabet=["a", "a", "b"])

    @given(
        arrays(dtype=np.uint8, shape=st.tuples(st.integers(1, 12), st.integers(1, 12))),
        st.integers(0, 2**32 - 1),
    )
    @settings(max_examples=50)
    def test_total_for_any_image(self, image: np.ndarray, seed: int) -> None:
        mapping = LetterAssigner().assign(self._ranking(image), np.random.default_rng(seed))
        assert mapping.is_total
        assert len({a.letter for a in mapping.assignments}) == NUM_BINS
