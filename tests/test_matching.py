"""Tests for core.matching — dictionary loading and substring matching."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from core.errors import DictionaryLoadError
from core.matching.dictionary import Dictionary, load_dictionary
from core.matching.matcher import DictionaryMatcher


class TestDictionary:
    """Tests for Dictionary."""

    def test_from_words_normalizes(self) -> None:
        d = Dictionary.from_words([" Cat\n", "DOG", "dog", "", "   ", "toolongword"], max_length=10)
        assert d.words == frozenset({"cat", "dog"})
        assert d.min_length == 3
        assert len(d) == 2

    def test_length_limit_is_inclusive(self) -> None:
        d = Dictionary.from_words(["abcdefghij", "abcdefghijk"], max_length=10)
        assert d.words == frozenset({"abcdefghij"})

    def test_unbounded(self) -> None:
        d = Dictionary.from_words(["abcdefghijklmnop"])
        assert "abcdefghijklmnop" in d

    def test_empty(self) -> None:
        d = Dictionary()
        assert d.is_empty
        assert d.min_length == 0

    def test_immutable(self) -> None:
        d = Dictionary.from_words(["cat"])
        with pytest.raises(AttributeError):
            d.words = frozenset()  # type: ignore[misc]
        assert not hasattr(d.words, "add")


class TestLoadDictionary:
    """Tests for load_dictionary."""

    def test_loads_word_per_line(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.txt"
        path.write_bytes(b"Apple\r\nbanana\n\ncherry\nextraordinary\n")
        d = load_dictionary(path, max_length=10)
        assert d.words == frozenset({"apple", "banana", "cherry"})
        assert d.max_length == 10

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DictionaryLoadError, match="not found"):
            load_dictionary(tmp_path / "nope.txt")

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.txt"
        path.write_bytes(b"cat\n\xff\xfe\xfa\n")
        with pytest.raises(DictionaryLoadError, match="UTF-8"):
            load_dictionary(path)

    def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DictionaryLoadError):
            load_dictionary(tmp_path)

    def test_empty_file_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.txt"
        path.write_text("")
        assert load_dictionary(path).is_empty

    def test_bundled_dictionary(self) -> None:
        path = Path(__file__).resolve().parent.parent / "assets" / "dict.txt"
        d = load_dictionary(path)
        assert "cat" in d
        assert all(len(w) <= 10 for w in d)


class TestDictionaryMatcher:
    """Tests for DictionaryMatcher."""

    def test_finds_embedded_word(self) -> None:
        d = Dictionary.from_words(["cat", "dog"])
        assert DictionaryMatcher().match("xcatx", d) == ["cat"]

    def test_empty_dictionary(self) -> None:
        assert DictionaryMatcher().match("xcatxdog", Dictionary()) == []

    def test_empty_text(self) -> None:
        assert DictionaryMatcher().match("", Dictionary.from_words(["a"])) == []

    def test_text_shorter_than_words(self) -> None:
        assert DictionaryMatcher().match("ca", Dictionary.from_words(["cat"])) == []

    def test_words_longer_than_limit_never_match(self) -> None:
        d = Dictionary.from_words(["cat", "catalogue"])
        assert DictionaryMatcher(max_word_len=5).match("xcataloguex", d) == ["cat"]

    def test_limit_below_shortest_word(self) -> None:
        d = Dictionary.from_words(["abcdef"])
        matcher = DictionaryMatcher(max_word_len=3)
        assert len(matcher.window_sizes("abcdef", d)) == 0
        assert matcher.match("abcdef", d) == []

    def test_window_range(self) -> None:
        d = Dictionary.from_words(["ab", "abcd"])
        matcher = DictionaryMatcher(max_word_len=10)
        assert list(matcher.window_sizes("abcde", d)) == [2, 3, 4, 5]

    def test_sorted_longest_first(self) -> None:
        d = Dictionary.from_words(["a", "at", "cat", "cats"])
        assert DictionaryMatcher().match("cats", d) == ["cats", "cat", "at", "a"]

    def test_word_at_both_ends(self) -> None:
        d = Dictionary.from_words(["ab", "yz"])
        assert sorted(DictionaryMatcher().match("abxyz", d)) == ["ab", "yz"]

    def test_duplicates_counted_once(self) -> None:
        d = Dictionary.from_words(["cat"])
        assert DictionaryMatcher().match("catcatcat", d) == ["cat"]

    def test_at_most_ten_results(self) -> None:
        d = Dictionary.from_words(list("abcdefghijklmnopqrstuvwxyz"))
        result = DictionaryMatcher().match("abcdefghijklmnopqrstuvwxyz", d)
        assert result == list("abcdefghij")

    def test_custom_result_limit(self) -> None:
        d = Dictionary.from_words(["a", "b", "c"])
        assert len(DictionaryMatcher(max_results=2).match("abc", d)) == 2

    def test_case_sensitive(self) -> None:
        d = Dictionary.from_words(["cat"])
        assert DictionaryMatcher().match("xCATx", d) == []

    def test_invalid_limits_raise(self) -> None:
        with pytest.raises(ValueError):
            DictionaryMatcher(max_word_len=-1)
        with pytest.raises(ValueError):
            DictionaryMatcher(max_results=-1)

    @given(
        st.text(alphabet="abc", max_size=40),
        st.sets(st.text(alphabet="abc", min_size=1, max_size=6), max_size=30),
        st.integers(0, 6),
    )
    @settings(max_examples=100)
    def test_matches_reference(self, text: str, words: set[str], max_word_len: int) -> None:
        d = Dictionary.from_words(words)
        result = DictionaryMatcher(max_word_len=max_word_len).match(text, d)

        reference = {w for w in words if len(w) <= max_word_len and w in text}
        assert len(result) == len(set(result))
        assert len(result) == min(10, len(reference))
        assert set(result) <= reference
        lengths = [len(w) for w in result]
        assert lengths == sorted(lengths, reverse=True)
        # Truncation keeps the longest matches
        if result:
            assert all(len(w) <= lengths[-1] for w in reference - set(result))
