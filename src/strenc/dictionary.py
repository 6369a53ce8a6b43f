"""Token dictionary used by the string encoders."""

import logging
from collections.abc import Iterator
from pathlib import Path

from ._model_file import ModelFile, read_model, write_model
from .errors import DictionaryError, ModelLoadError
from .types import Mapping, Token, TokenId

log = logging.getLogger(__name__)


class StringEncodingDictionary:
    """
    Bidirectional mapping between tokens and dense integer ids.

    Ids are assigned in first-seen order starting at 0 and stay stable until
    ``reset`` is called. The dictionary keeps its own list of tokens, so the
    id of a token can always be mapped back to it. Single entries cannot be
    removed.
    """

    DICTIONARY_TYPE: str = "mapping"

    def __init__(self) -> None:
        # token -> id
        self._mapping: Mapping = {}
        # id -> token
        self._tokens: list[Token] = []

    def insert(self, token: Token) -> TokenId:
        """Return the id of ``token``, assigning the next free id if it is new."""
        token_id = self._mapping.get(token)
        if token_id is None:
            token_id = len(self._tokens)
            self._mapping[token] = token_id
            self._tokens.append(token)
        return token_id

    def find(self, token: Token) -> TokenId | None:
        """Return the id of ``token`` or ``None`` if it has not been seen."""
        return self._mapping.get(token)

    def token(self, token_id: TokenId) -> Token:
        """
        Return the token that was assigned ``token_id``.

        :raises DictionaryError: If no token has that id.
        """
        if not 0 <= token_id < len(self._tokens):
            raise DictionaryError("unknown token id", token_id=token_id)
        return self._tokens[token_id]

    def reset(self) -> None:
        """Remove every entry and restart id assignment at 0."""
        log.debug(f"resetting dictionary with {len(self._tokens)} entries")
        self._mapping.clear()
        self._tokens.clear()

    def size(self) -> int:
        """Return the number of tokens in the dictionary."""
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._mapping

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringEncodingDictionary):
            return NotImplemented
        return self._tokens == other._tokens

    @property
    def mapping(self) -> Mapping:
        """Return a copy of the token -> id mapping."""
        return dict(self._mapping)

    @mapping.setter
    def mapping(self, mapping: Mapping) -> None:
        """
        Replace the whole dictionary with ``mapping``.

        :raises DictionaryError: If the ids are not exactly ``0 .. len - 1``.
        """
        tokens: list[Token | None] = [None] * len(mapping)
        for token, token_id in mapping.items():
            if not isinstance(token_id, int) or not 0 <= token_id < len(mapping):
                raise DictionaryError(
                    "mapping ids must be dense and zero-based",
                    token=token,
                    token_id=token_id,
                )
            if tokens[token_id] is not None:
                raise DictionaryError(
                    "mapping id assigned twice", token=token, token_id=token_id
                )
            tokens[token_id] = token

        self._mapping = dict(mapping)
        self._tokens = tokens  # type: ignore[assignment]

    @property
    def tokens(self) -> list[Token]:
        """Return the tokens in id order."""
        return list(self._tokens)

    def to_dict(self) -> Mapping:
        return self.mapping

    @classmethod
    def from_dict(cls, mapping: Mapping) -> "StringEncodingDictionary":
        dictionary = cls()
        dictionary.mapping = mapping
        return dictionary

    def save(self, file_prefix: str) -> None:
        """
        Save the dictionary to disk.

        Creates two files: a .model file with the token mapping and a .vocab
        file with human-readable token representations.

        :param file_prefix: Path prefix for output files.
        """
        log.info(f"saving dictionary to {file_prefix}")
        write_model(file_prefix, ModelFile(kind=self.DICTIONARY_TYPE, mapping=self._mapping))

    def load(self, model_filename: str | Path) -> None:
        """
        Restore the dictionary from a .model file.

        The current entries are replaced only after the whole file was read.

        :raises ModelLoadError: If the file cannot be read or its ids are invalid.
        """
        model = read_model(model_filename)
        try:
            self.mapping = model.mapping
        except DictionaryError as e:
            raise ModelLoadError("corrupt dictionary", model_path=str(model_filename)) from e
        log.info(f"dictionary loaded successfully: {len(self._tokens)} tokens")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self._tokens)})"
