"""Tokenizer implementations for string encoding."""

from .base import TextView, Tokenizer
from .char_extract import CharExtract
from .pattern import PatternTokenizer, TokenPattern, list_patterns
from .split_by_any_of import SplitByAnyOf


__all__ = [
    "TextView",
    "Tokenizer",
    "SplitByAnyOf",
    "CharExtract",
    "PatternTokenizer",
    "TokenPattern",
    "list_patterns",
]
