"""
Base encoding policy interface.

A policy decides how the token ids of every input row are written into the
encoder output. The encoder inspects ``output_with_no_padding`` to decide
whether a ragged single-pass output is possible or whether a dense matrix has
to be sized after all rows are tokenized.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np
from numpy.typing import DTypeLike

from ..errors import PolicyError
from ..types import TokenId

log = logging.getLogger(__name__)


class EncodingPolicy(ABC):
    """Base strategy for placing token ids into an output container."""

    POLICY_TYPE: ClassVar[str] = "base"
    # policies that can emit one variable-length sequence per row
    output_with_no_padding: ClassVar[bool] = False
    # policies whose values are not integral
    requires_float_output: ClassVar[bool] = False
    default_dtype: ClassVar[DTypeLike] = np.int64

    def reset(self) -> None:
        """Drop any statistics collected during a previous encoding run."""

    @abstractmethod
    def output_width(self, max_tokens: int, vocab_size: int) -> int:
        """Return the number of columns of the dense output."""
        ...

    def resolve_dtype(self, dtype: DTypeLike | None) -> np.dtype:
        """
        Return the dtype to build the dense output with.

        :raises PolicyError: If ``dtype`` cannot hold the values of this policy.
        """
        resolved = np.dtype(self.default_dtype if dtype is None else dtype)
        if not np.issubdtype(resolved, np.number):
            raise PolicyError(f"{self.POLICY_TYPE} output needs a numeric dtype, got {resolved}")
        if self.requires_float_output and not np.issubdtype(resolved, np.floating):
            raise PolicyError(f"{self.POLICY_TYPE} output needs a float dtype, got {resolved}")
        return resolved

    def max_value(self, max_tokens: int, vocab_size: int) -> int | None:
        """Return the largest integer this policy writes, or None if unbounded."""
        return None

    def init_matrix(
        self,
        n_rows: int,
        max_tokens: int,
        vocab_size: int,
        dtype: DTypeLike | None = None,
    ) -> np.ndarray:
        """
        Return a zero matrix of shape ``(n_rows, output_width)``.

        :raises PolicyError: If an integer ``dtype`` is too narrow for the
                             largest value the policy will write.
        """
        resolved = self.resolve_dtype(dtype)
        largest = self.max_value(max_tokens, vocab_size)
        if largest is not None and np.issubdtype(resolved, np.integer):
            limit = int(np.iinfo(resolved).max)
            if largest > limit:
                raise PolicyError(
                    f"{self.POLICY_TYPE} output needs values up to {largest}, "
                    f"{resolved} holds at most {limit}"
                )

        shape = (n_rows, self.output_width(max_tokens, vocab_size))
        log.debug(f"{self.POLICY_TYPE}: allocating output of shape {shape}")
        return np.zeros(shape, dtype=resolved)

    def preprocess_token(self, row: int, n_tokens: int, token_id: TokenId) -> None:
        """Observe one token of ``row`` (which has ``n_tokens`` tokens) before placement."""

    @abstractmethod
    def encode(self, token_id: TokenId, output: np.ndarray, row: int, col: int) -> None:
        """Write ``token_id``, the ``col``-th token of ``row``, into ``output``."""
        ...

    def encode_ragged(self, output_row: list[TokenId], token_id: TokenId) -> None:
        """
        Append ``token_id`` to a ragged output row.

        :raises PolicyError: If the policy needs a padded output.
        """
        raise PolicyError(f"{self.POLICY_TYPE} policy cannot produce unpadded output")

    def params(self) -> dict[str, Any]:
        """Return the constructor arguments needed to rebuild this policy."""
        return {}

    @staticmethod
    def _check_bounds(output: np.ndarray, row: int, col: int) -> None:
        """Raise ``PolicyError`` if ``(row, col)`` lies outside ``output``."""
        if output.ndim != 2:
            raise PolicyError("output must be a 2-D matrix", shape=output.shape)
        n_rows, n_cols = output.shape
        if not (0 <= row < n_rows and 0 <= col < n_cols):
            raise PolicyError(
                "placement outside the output matrix",
                row=row,
                col=col,
                shape=output.shape,
            )

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params().items())
        return f"{self.__class__.__name__}({args})"
