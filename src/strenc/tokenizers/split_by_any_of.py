"""Delimiter-set tokenizer."""

import logging
from typing import Final, override

from ..types import Token
from .base import TextView, Tokenizer

log = logging.getLogger(__name__)

MASK_SIZE: Final[int] = 256


class SplitByAnyOf(Tokenizer):
    """
    Tokenizer that splits text on any of a given set of delimiter characters.

    Delimiters with code points below 256 are stored in a fixed-size presence
    mask, wider characters in a separate set. Runs of consecutive delimiters
    never produce empty tokens.
    """

    TOKENIZER_TYPE = "split"

    def __init__(self, delimiters: str) -> None:
        """Build the delimiter mask from the characters of ``delimiters``."""
        super().__init__()
        self.mask: list[bool] = [False] * MASK_SIZE
        self.wide_delimiters: set[str] = set()

        for symbol in delimiters:
            code = ord(symbol)
            if code < MASK_SIZE:
                self.mask[code] = True
            else:
                self.wide_delimiters.add(symbol)

        if not delimiters:
            log.warning("no delimiters given, every input will be a single token")

    def is_delimiter(self, symbol: str) -> bool:
        """Return ``True`` if ``symbol`` is one of the delimiters."""
        code = ord(symbol)
        if code < MASK_SIZE:
            return self.mask[code]
        return symbol in self.wide_delimiters

    @override
    def next_token(self, view: TextView) -> Token:
        """
        Extract the first token from ``view`` and drop it and its delimiter.

        If no delimiter is left the rest of the view is returned and the view
        is emptied.
        """
        token = ""
        while not token:
            if view.empty():
                return ""
            pos = self._find_first_delimiter(view)
            if pos is None:
                token = view.remaining
                view.clear()
                return token
            token = view.text[view.pos : pos]
            view.pos = pos + 1
        return token

    def _find_first_delimiter(self, view: TextView) -> int | None:
        """Return the absolute position of the next delimiter in ``view``."""
        text = view.text
        for pos in range(view.pos, len(text)):
            if self.is_delimiter(text[pos]):
                return pos
        return None

    @property
    def delimiters(self) -> str:
        """Return the delimiter characters currently set in the mask."""
        narrow = "".join(chr(code) for code in range(MASK_SIZE) if self.mask[code])
        return narrow + "".join(sorted(self.wide_delimiters))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.delimiters!r})"
