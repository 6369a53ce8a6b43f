"""Regex-based tokenizer and its built-in patterns."""

from enum import Enum
from typing import override

import regex as re

from ..errors import TokenizationError
from ..types import Token
from .base import TextView, Tokenizer


class TokenPattern(str, Enum):
    """
    Pre-defined regex patterns for pattern tokenization.

    Sources:
    - GPT2: https://github.com/openai/tiktoken/blob/main/tiktoken_ext/openai_public.py
    """

    # runs of letters
    WORDS = r"\p{L}+"

    # runs of letters or digits
    ALNUM = r"[\p{L}\p{N}]+"

    # anything between whitespace
    NON_SPACE = r"\S+"

    # OpenAI models
    GPT2 = (
        r"'(?:[sdmt]|ll|ve|re)|"
        r" ?\p{L}+|"
        r" ?\p{N}+|"
        r" ?[^\s\p{L}\p{N}]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise TokenizationError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name for pat in cls)}"
            )


def list_patterns() -> list[str]:
    """Return names of all available built-in tokenization patterns."""
    return [pat.name.lower().replace("_", "-") for pat in TokenPattern]


def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` and wrap regex failures in ``TokenizationError``."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise TokenizationError("invalid regex pattern", pattern=pattern, regex_err=e)


class PatternTokenizer(Tokenizer):
    """Tokenizer whose tokens are the successive non-empty matches of a regex."""

    TOKENIZER_TYPE = "pattern"

    def __init__(self, pattern: str | None = None) -> None:
        """Initialize tokenizer with a provided or default (``words``) pattern."""
        super().__init__()
        if pattern is None:
            self.pat = TokenPattern.get("words")
        else:
            self.pat = pattern
        self.compiled_pat: re.Pattern[str] = _compile_pattern(self.pat)

    @override
    def next_token(self, view: TextView) -> Token:
        """Return the next non-empty match and move the view past it."""
        pos = view.pos
        while pos <= len(view.text):
            match = self.compiled_pat.search(view.text, pos)
            if match is None:
                break
            if match.end() > match.start():
                view.pos = match.end()
                return match.group()
            # zero-width match: step over one character
            pos = match.end() + 1
        view.clear()
        return ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.pat!r})"
