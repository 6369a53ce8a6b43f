"""TF-IDF encoding policy."""

import math
from collections import Counter
from enum import Enum
from typing import Any, ClassVar, override

import numpy as np

from ..errors import PolicyError, StrategyError
from ..types import TokenId
from .base import EncodingPolicy


class TfType(str, Enum):
    """Term frequency variants."""

    # 1 if the token occurs in the row
    BINARY = "binary"
    # number of occurrences in the row
    RAW_COUNT = "raw-count"
    # occurrences divided by the number of tokens in the row
    TERM_FREQUENCY = "term-frequency"
    # log(occurrences) + 1
    SUBLINEAR = "sublinear"

    @classmethod
    def get(cls, name: "str | TfType") -> "TfType":
        """Get term frequency type by name (case-insensitive)."""
        if isinstance(name, TfType):
            return name
        try:
            if not isinstance(name, str):
                raise KeyError(name)
            return cls[name.upper().replace("-", "_")]
        except KeyError:
            raise StrategyError(
                "unknown term frequency type",
                invalid_name=name,
                available=[tf.value for tf in cls],
            )


class TfIdfEncodingPolicy(EncodingPolicy):
    """
    Policy that writes ``tf(row, token) * idf(token)`` at ``(row, token id)``.

    Term and document frequencies are collected through ``preprocess_token``
    while the rows are tokenized, so the idf only covers the rows of the
    current encoding run. With ``smooth_idf`` the idf is
    ``log((n + 1) / (df + 1)) + 1``, otherwise ``log(n / df) + 1``, where
    ``n`` is the number of rows and ``df`` the number of rows holding the token.
    """

    POLICY_TYPE = "tfidf"
    requires_float_output: ClassVar[bool] = True
    default_dtype = np.float64

    def __init__(
        self, tf_type: "TfType | str" = TfType.RAW_COUNT, smooth_idf: bool = True
    ) -> None:
        super().__init__()
        self.tf_type = TfType.get(tf_type)
        self.smooth_idf = smooth_idf
        # row -> token id -> occurrences
        self._token_freqs: dict[int, Counter[TokenId]] = {}
        # token id -> number of rows holding it
        self._doc_freqs: Counter[TokenId] = Counter()
        # row -> number of tokens
        self._row_sizes: dict[int, int] = {}

    @override
    def reset(self) -> None:
        self._token_freqs.clear()
        self._doc_freqs.clear()
        self._row_sizes.clear()

    @override
    def output_width(self, max_tokens: int, vocab_size: int) -> int:
        return vocab_size

    @override
    def preprocess_token(self, row: int, n_tokens: int, token_id: TokenId) -> None:
        freqs = self._token_freqs.setdefault(row, Counter())
        if freqs[token_id] == 0:
            self._doc_freqs[token_id] += 1
        freqs[token_id] += 1
        self._row_sizes[row] = n_tokens

    def term_frequency(self, row: int, token_id: TokenId) -> float:
        freq = self._token_freqs.get(row, Counter())[token_id]
        if freq == 0:
            raise PolicyError(
                "token was not preprocessed for this row", row=row, col=token_id
            )

        match self.tf_type:
            case TfType.BINARY:
                return 1.0
            case TfType.RAW_COUNT:
                return float(freq)
            case TfType.TERM_FREQUENCY:
                return freq / self._row_sizes[row]
            case TfType.SUBLINEAR:
                return math.log(freq) + 1.0

    def inverse_document_frequency(self, n_rows: int, token_id: TokenId) -> float:
        doc_freq = self._doc_freqs[token_id]
        if self.smooth_idf:
            return math.log((n_rows + 1) / (doc_freq + 1)) + 1.0
        return math.log(n_rows / doc_freq) + 1.0

    @override
    def encode(self, token_id: TokenId, output: np.ndarray, row: int, col: int) -> None:
        self._check_bounds(output, row, token_id)
        tf = self.term_frequency(row, token_id)
        output[row, token_id] = tf * self.inverse_document_frequency(
            output.shape[0], token_id
        )

    @override
    def params(self) -> dict[str, Any]:
        return {"tf_type": self.tf_type.value, "smooth_idf": self.smooth_idf}
