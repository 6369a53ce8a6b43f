"""Bag-of-words encoding policy."""

from typing import Any, override

import numpy as np

from ..types import TokenId
from .base import EncodingPolicy


class BagOfWordsEncodingPolicy(EncodingPolicy):
    """
    Policy that counts token occurrences per row.

    Column ``j`` of a row holds the number of times the token with id ``j``
    occurs in that row, or only whether it occurs when ``binary`` is set.
    The output is as wide as the dictionary.
    """

    POLICY_TYPE = "bow"

    def __init__(self, binary: bool = False) -> None:
        super().__init__()
        self.binary = binary

    @override
    def output_width(self, max_tokens: int, vocab_size: int) -> int:
        return vocab_size

    @override
    def max_value(self, max_tokens: int, vocab_size: int) -> int:
        # a count never exceeds the length of its row
        return 1 if self.binary else max_tokens

    @override
    def encode(self, token_id: TokenId, output: np.ndarray, row: int, col: int) -> None:
        # col is the token position; the column written is the token id
        self._check_bounds(output, row, token_id)
        if self.binary:
            output[row, token_id] = 1
        else:
            output[row, token_id] += 1

    @override
    def params(self) -> dict[str, Any]:
        return {"binary": self.binary}
