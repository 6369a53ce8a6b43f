"""Single-character tokenizer."""

from typing import override

from ..types import Token
from .base import TextView, Tokenizer


class CharExtract(Tokenizer):
    """Tokenizer that returns one character of the input per call."""

    TOKENIZER_TYPE = "char"

    @override
    def next_token(self, view: TextView) -> Token:
        if view.empty():
            return ""
        token = view.text[view.pos]
        view.advance(1)
        return token
