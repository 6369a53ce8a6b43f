"""Encoding policies deciding how token ids populate the encoder output."""

from .bag_of_words import BagOfWordsEncodingPolicy
from .base import EncodingPolicy
from .dictionary_encoding import DictionaryEncodingPolicy
from .tf_idf import TfIdfEncodingPolicy, TfType


__all__ = [
    "EncodingPolicy",
    "DictionaryEncodingPolicy",
    "BagOfWordsEncodingPolicy",
    "TfIdfEncodingPolicy",
    "TfType",
]
