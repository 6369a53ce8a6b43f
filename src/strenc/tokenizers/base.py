"""
Base tokenizer interface for string encoding.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ..types import Token


class TextView:
    """
    Mutable cursor over the unconsumed part of one input string.

    Tokenizers read from ``remaining`` and move the cursor forward with
    ``advance`` or ``clear``. The view never copies the underlying string.
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def remaining(self) -> str:
        """Return the unconsumed text."""
        return self.text[self.pos :]

    def empty(self) -> bool:
        """Return ``True`` once every character has been consumed."""
        return self.pos >= len(self.text)

    def advance(self, n: int) -> None:
        """Consume ``n`` characters (clamped to the end of the text)."""
        self.pos = min(self.pos + n, len(self.text))

    def clear(self) -> None:
        """Consume the rest of the text."""
        self.pos = len(self.text)

    def __len__(self) -> int:
        return len(self.text) - self.pos

    def __repr__(self) -> str:
        return f"TextView({self.remaining!r})"


class Tokenizer(ABC):
    """
    Abstract base class for tokenizers.

    A tokenizer extracts one token at a time from a ``TextView`` and advances
    the view past everything it consumed. An empty token signals that the
    view is exhausted.
    """

    TOKENIZER_TYPE: str = "base"

    @abstractmethod
    def next_token(self, view: TextView) -> Token:
        """Return the next token in ``view`` or ``""`` when it is exhausted."""
        ...

    def __call__(self, view: TextView) -> Token:
        return self.next_token(view)

    @staticmethod
    def is_token_empty(token: Token) -> bool:
        """Return ``True`` if ``token`` marks the end of input."""
        return not token

    def tokenize(self, text: str) -> Iterator[Token]:
        """Lazily yield the tokens of ``text`` in order."""
        view = TextView(text)
        token = self.next_token(view)
        while not self.is_token_empty(token):
            yield token
            token = self.next_token(view)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
