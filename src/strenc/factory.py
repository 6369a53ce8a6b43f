"""Factory functions for creating tokenizers, policies and encoders."""

from pathlib import Path
from typing import Any, Final, Literal, overload

from ._model_file import read_kind
from .encoder import StringEncoder
from .errors import ModelLoadError, StrategyError
from .policies import (
    BagOfWordsEncodingPolicy,
    DictionaryEncodingPolicy,
    EncodingPolicy,
    TfIdfEncodingPolicy,
)
from .tokenizers import CharExtract, PatternTokenizer, SplitByAnyOf, Tokenizer
from .dictionary import StringEncodingDictionary


# Tokenizer factory
# ===================================================================================

TokenizerName = Literal["split", "char", "pattern"]

_TOKENIZER_REGISTRY: Final[dict[str, type[Tokenizer]]] = {
    cls.TOKENIZER_TYPE: cls for cls in (SplitByAnyOf, CharExtract, PatternTokenizer)
}


def list_tokenizers() -> list[str]:
    """Return available tokenizer names."""
    return list(_TOKENIZER_REGISTRY.keys())


@overload
def get_tokenizer(name: Literal["split"], delimiters: str) -> SplitByAnyOf: ...


@overload
def get_tokenizer(name: Literal["char"]) -> CharExtract: ...


@overload
def get_tokenizer(name: Literal["pattern"], pattern: str | None = None) -> PatternTokenizer: ...


def get_tokenizer(name: TokenizerName = "split", *args: Any, **kwargs: Any) -> Tokenizer:
    """
    Create a tokenizer by name.

    :param name: "split" splits on any of the given delimiter characters,
                 "char" yields one character at a time, "pattern" yields the
                 matches of a regex (built-in pattern by default).
    :return: Configured tokenizer instance.
    :raises StrategyError: If the tokenizer name is unknown.

    .. code-block:: python

        tokenizer = get_tokenizer("split", " ,")
        tokenizer = get_tokenizer("char")
        tokenizer = get_tokenizer("pattern", r"\\p{L}+")
    """
    if name not in _TOKENIZER_REGISTRY:
        raise StrategyError(
            "unknown tokenizer name",
            invalid_name=name,
            available=list_tokenizers(),
        )
    # "split" defaults to whitespace delimiters
    if name == "split" and not args and "delimiters" not in kwargs:
        return SplitByAnyOf(" \t\r\n")
    return _TOKENIZER_REGISTRY[name](*args, **kwargs)


# ===================================================================================


# Policy / encoder factory
# ===================================================================================

PolicyName = Literal["dictionary", "bow", "tfidf"]

_POLICY_REGISTRY: Final[dict[str, type[EncodingPolicy]]] = {
    cls.POLICY_TYPE: cls
    for cls in (DictionaryEncodingPolicy, BagOfWordsEncodingPolicy, TfIdfEncodingPolicy)
}


def list_policies() -> list[str]:
    """Return available encoding policy names."""
    return list(_POLICY_REGISTRY.keys())


def get_policy(name: PolicyName = "dictionary", **params: Any) -> EncodingPolicy:
    """
    Create an encoding policy by name.

    :param name: "dictionary", "bow" or "tfidf".
    :param params: Policy arguments, e.g. ``binary=True`` for "bow" or
                   ``tf_type="sublinear"`` for "tfidf".
    :raises StrategyError: If the policy name is unknown.
    """
    if name not in _POLICY_REGISTRY:
        raise StrategyError(
            "unknown policy name",
            invalid_name=name,
            available=list_policies(),
        )
    return _POLICY_REGISTRY[name](**params)


def get_encoder(name: PolicyName = "dictionary", **params: Any) -> StringEncoder:
    """
    Create an encoder with a fresh dictionary and the named policy.

    .. code-block:: python

        encoder = get_encoder("bow")
        matrix = encoder.encode(["a b", "b c"], get_tokenizer("split", " "))
    """
    return StringEncoder(get_policy(name, **params))


def from_pretrained(model_path: str | Path) -> StringEncoder:
    """
    Load an encoder saved with ``StringEncoder.save``.

    The policy is detected from the model file header.

    :param model_path: Path to the .model file.
    :return: Encoder with the saved dictionary and policy configuration.
    :raises ModelLoadError: If the file cannot be read or names an unknown policy.
    """
    # extract policy type from file
    kind = read_kind(model_path)

    # look up class from registry
    if kind not in _POLICY_REGISTRY:
        raise ModelLoadError(
            f"unknown policy type in model file: {kind}",
            model_path=str(model_path),
        )

    encoder = get_encoder(kind)  # type: ignore[arg-type]
    encoder.load(model_path)
    return encoder


def load_dictionary(model_path: str | Path) -> StringEncodingDictionary:
    """Load only the dictionary of any strenc .model file."""
    dictionary = StringEncodingDictionary()
    dictionary.load(model_path)
    return dictionary


# ===================================================================================
