"""Matching module — dictionary loading and substring word search."""

from core.matching.dictionary import Dictionary, load_dictionary
from core.matching.matcher import DictionaryMatcher

__all__ = ["Dictionary", "DictionaryMatcher", "load_dictionary"]
