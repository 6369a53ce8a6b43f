"""
String encoder orchestrating tokenizer, dictionary and encoding policy.
"""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path
from typing import Literal, overload

import numpy as np
from numpy.typing import DTypeLike
from typing_extensions import deprecated

from ._decorators import measure_time
from ._model_file import ModelFile, read_model, write_model
from .dictionary import StringEncodingDictionary
from .errors import DictionaryError, ModelLoadError, StrategyError
from .policies import (
    BagOfWordsEncodingPolicy,
    DictionaryEncodingPolicy,
    EncodingPolicy,
    TfIdfEncodingPolicy,
    TfType,
)
from .tokenizers import Tokenizer
from .types import EncodedRow, RaggedOutput, Token, TokenId

log = logging.getLogger(__name__)


class OutputKind(str, Enum):
    """Containers an encoder can produce."""

    # dense numpy matrix, zero padded
    MATRIX = "matrix"
    # list of python lists; ragged when the policy allows it
    LIST = "list"

    @classmethod
    def get(cls, name: "str | OutputKind") -> "OutputKind":
        """Get output kind by name (case-insensitive)."""
        if isinstance(name, OutputKind):
            return name
        try:
            if not isinstance(name, str):
                raise KeyError(name)
            return cls[name.upper()]
        except KeyError:
            raise StrategyError(
                "unknown output kind",
                invalid_name=name,
                available=[kind.value for kind in cls],
            )


class StringEncoder:
    """
    Encode strings into numeric rows with a swappable encoding policy.

    Every ``encode`` call tokenizes each input, assigns dictionary ids to the
    tokens and lets the policy place the ids into the output. The dictionary
    is kept between calls, so vocabularies grow across batches until
    ``reset`` is called. Instances are not safe to share between threads.
    """

    def __init__(
        self,
        policy: EncodingPolicy,
        dictionary: StringEncodingDictionary | None = None,
    ) -> None:
        self.policy = policy
        self._dictionary = (
            dictionary if dictionary is not None else StringEncodingDictionary()
        )

    @property
    def dictionary(self) -> StringEncodingDictionary:
        return self._dictionary

    def reset(self) -> None:
        """Clear the dictionary and any policy statistics."""
        self._dictionary.reset()
        self.policy.reset()

    def vocab_size(self) -> int:
        """Return the number of tokens in the dictionary."""
        return len(self._dictionary)

    def fit(self, inputs: Iterable[str], tokenizer: Tokenizer) -> None:
        """Add every token of ``inputs`` to the dictionary without encoding."""
        for text in inputs:
            for token in tokenizer.tokenize(text):
                self._dictionary.insert(token)
        log.debug(f"dictionary holds {len(self._dictionary)} tokens after fit")

    @deprecated("Use `fit([text], tokenizer)` instead.")
    def create_map(self, text: str, tokenizer: Tokenizer) -> None:
        """Add every token of a single string to the dictionary."""
        self.fit([text], tokenizer)

    @overload
    def encode(
        self,
        inputs: Sequence[str],
        tokenizer: Tokenizer,
        output: Literal["matrix"] = "matrix",
        dtype: DTypeLike | None = None,
    ) -> np.ndarray: ...

    @overload
    def encode(
        self,
        inputs: Sequence[str],
        tokenizer: Tokenizer,
        output: Literal["list"],
        dtype: DTypeLike | None = None,
    ) -> list[list]: ...

    @measure_time
    def encode(
        self,
        inputs: Sequence[str],
        tokenizer: Tokenizer,
        output: "OutputKind | str" = OutputKind.MATRIX,
        dtype: DTypeLike | None = None,
    ) -> np.ndarray | list[list]:
        """
        Encode ``inputs`` into a dense matrix or a list of rows.

        Policies flagged ``output_with_no_padding`` produce ragged rows of raw
        token ids in a single pass when ``output="list"``. All other
        combinations tokenize every row first, then size the output from the
        longest row and the final dictionary size and place the ids.

        :param inputs: Strings to encode, one output row each.
        :param tokenizer: Tokenizer used to split every input.
        :param output: ``"matrix"`` for a numpy array, ``"list"`` for lists.
        :param dtype: Element type of the dense output; defaults per policy.
        :return: The encoded rows. An empty ``inputs`` gives a ``(0, 0)``
                 matrix or an empty list.
        :raises StrategyError: If ``output`` is not a known output kind.
        :raises PolicyError: If ``dtype`` cannot hold the policy's values.
        """
        kind = OutputKind.get(output)
        # fail before touching the dictionary
        resolved_dtype = self.policy.resolve_dtype(dtype)
        self.policy.reset()

        if len(inputs) == 0:
            log.warning("encoding an empty input list")
            if kind is OutputKind.LIST:
                return []
            return np.zeros((0, 0), dtype=resolved_dtype)

        if kind is OutputKind.LIST and self.policy.output_with_no_padding:
            return self._encode_ragged(inputs, tokenizer)

        rows: list[EncodedRow] = []
        for row, text in enumerate(inputs):
            ids = [self._dictionary.insert(token) for token in tokenizer.tokenize(text)]
            for token_id in ids:
                self.policy.preprocess_token(row, len(ids), token_id)
            rows.append(ids)

        max_tokens = max(len(ids) for ids in rows)
        matrix = self.policy.init_matrix(
            len(rows), max_tokens, len(self._dictionary), resolved_dtype
        )
        for row, ids in enumerate(rows):
            for col, token_id in enumerate(ids):
                self.policy.encode(token_id, matrix, row, col)

        log.debug(
            f"encoded {len(rows)} rows into shape {matrix.shape} "
            f"(vocab size: {len(self._dictionary)})"
        )

        if kind is OutputKind.LIST:
            return matrix.tolist()
        return matrix

    def _encode_ragged(
        self, inputs: Sequence[str], tokenizer: Tokenizer
    ) -> RaggedOutput:
        """Single pass encoding into one unpadded id sequence per input."""
        output: RaggedOutput = []
        for text in inputs:
            ids: list[TokenId] = []
            for token in tokenizer.tokenize(text):
                self.policy.encode_ragged(ids, self._dictionary.insert(token))
            output.append(ids)

        log.debug(
            f"encoded {len(output)} ragged rows (vocab size: {len(self._dictionary)})"
        )
        return output

    def decode(self, row: Iterable[int], padded: bool = False) -> list[Token]:
        """
        Map a row of ids back to its tokens.

        :param row: Ragged row of raw ids, or a dense dictionary-encoded row
                    when ``padded`` is set.
        :param padded: Skip padding zeros and undo the padding offset.
        :raises DictionaryError: If an id is not in the dictionary.
        """
        tokens: list[Token] = []
        for value in row:
            token_id = int(value)
            if padded:
                if token_id == 0:
                    continue
                token_id -= DictionaryEncodingPolicy.PADDING_OFFSET
            tokens.append(self._dictionary.token(token_id))
        return tokens

    def save(self, file_prefix: str) -> None:
        """
        Save the dictionary and policy configuration to disk.

        Creates ``<file_prefix>.model`` and a human-readable ``.vocab`` file.
        """
        log.info(f"saving {self.policy.POLICY_TYPE} encoder to {file_prefix}")
        write_model(
            file_prefix,
            ModelFile(
                kind=self.policy.POLICY_TYPE,
                mapping=self._dictionary.mapping,
                params=self.policy.params(),
            ),
        )
        log.info("encoder saved successfully")

    def load(self, model_filename: str | Path) -> None:
        """
        Restore the dictionary and policy configuration from a .model file.

        :raises ModelLoadError: If the file cannot be read, was saved by an
                                encoder with another policy, or is corrupt.
        """
        model = read_model(model_filename)
        if model.kind != self.policy.POLICY_TYPE:
            raise ModelLoadError(
                f"policy type mismatch: (expected {self.policy.POLICY_TYPE}) (got {model.kind})",
                model_path=str(model_filename),
            )

        try:
            dictionary = StringEncodingDictionary.from_dict(model.mapping)
            policy = type(self.policy)(**model.params)
        except (DictionaryError, StrategyError, TypeError) as e:
            raise ModelLoadError("corrupt model", model_path=str(model_filename)) from e

        # update state only after the whole file was validated
        self._dictionary = dictionary
        self.policy = policy

        log.info(
            f"encoder loaded successfully: {len(self._dictionary)} tokens, policy {self.policy!r}"
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.policy!r}, vocab_size={len(self._dictionary)})"


class DictionaryEncoding(StringEncoder):
    """Encoder mapping every token to its dictionary id."""

    def __init__(self, dictionary: StringEncodingDictionary | None = None) -> None:
        super().__init__(DictionaryEncodingPolicy(), dictionary)


class BagOfWordsEncoding(StringEncoder):
    """Encoder counting token occurrences per input."""

    def __init__(
        self,
        binary: bool = False,
        dictionary: StringEncodingDictionary | None = None,
    ) -> None:
        super().__init__(BagOfWordsEncodingPolicy(binary=binary), dictionary)


class TfIdfEncoding(StringEncoder):
    """Encoder weighting token counts by inverse document frequency."""

    def __init__(
        self,
        tf_type: TfType | str = TfType.RAW_COUNT,
        smooth_idf: bool = True,
        dictionary: StringEncodingDictionary | None = None,
    ) -> None:
        super().__init__(TfIdfEncodingPolicy(tf_type, smooth_idf), dictionary)
