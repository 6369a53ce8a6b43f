"""Dictionary (index) encoding policy."""

from typing import ClassVar, override

import numpy as np

from ..types import TokenId
from .base import EncodingPolicy


class DictionaryEncodingPolicy(EncodingPolicy):
    """
    Policy that writes each token's dictionary id at its position in the row.

    Dense output is as wide as the longest row. Ids are shifted by one so
    that 0 always means padding. Ragged output keeps the raw zero-based ids.
    """

    POLICY_TYPE = "dictionary"
    output_with_no_padding: ClassVar[bool] = True

    # dense value of a token id; 0 is reserved for padding
    PADDING_OFFSET: ClassVar[int] = 1

    @override
    def output_width(self, max_tokens: int, vocab_size: int) -> int:
        return max_tokens

    @override
    def max_value(self, max_tokens: int, vocab_size: int) -> int:
        return vocab_size - 1 + self.PADDING_OFFSET

    @override
    def encode(self, token_id: TokenId, output: np.ndarray, row: int, col: int) -> None:
        self._check_bounds(output, row, col)
        output[row, col] = token_id + self.PADDING_OFFSET

    @override
    def encode_ragged(self, output_row: list[TokenId], token_id: TokenId) -> None:
        output_row.append(token_id)
