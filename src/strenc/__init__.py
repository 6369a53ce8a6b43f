"""strenc: string and categorical encoders."""

from ._timing import disable_timing, enable_timing
from .dictionary import StringEncodingDictionary
from .encoder import (
    BagOfWordsEncoding,
    DictionaryEncoding,
    OutputKind,
    StringEncoder,
    TfIdfEncoding,
)
from .factory import (
    from_pretrained,
    get_encoder,
    get_policy,
    get_tokenizer,
    list_policies,
    list_tokenizers,
    load_dictionary,
)
from .one_hot import one_hot_encode, one_hot_encode_rows
from .policies import (
    BagOfWordsEncodingPolicy,
    DictionaryEncodingPolicy,
    EncodingPolicy,
    TfIdfEncodingPolicy,
    TfType,
)
from .tokenizers import (
    CharExtract,
    PatternTokenizer,
    SplitByAnyOf,
    TextView,
    Tokenizer,
    TokenPattern,
    list_patterns,
)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("strenc")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "TextView",
    "SplitByAnyOf",
    "CharExtract",
    "PatternTokenizer",
    "TokenPattern",
    "StringEncodingDictionary",
    "EncodingPolicy",
    "DictionaryEncodingPolicy",
    "BagOfWordsEncodingPolicy",
    "TfIdfEncodingPolicy",
    "TfType",
    "StringEncoder",
    "DictionaryEncoding",
    "BagOfWordsEncoding",
    "TfIdfEncoding",
    "OutputKind",
    "one_hot_encode",
    "one_hot_encode_rows",
    "get_tokenizer",
    "get_policy",
    "get_encoder",
    "from_pretrained",
    "load_dictionary",
    "list_tokenizers",
    "list_policies",
    "list_patterns",
    "enable_timing",
    "disable_timing",
]
