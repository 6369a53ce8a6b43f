"""Unit tests for StringEncoder: dense, padded and ragged encoding."""

import logging

import numpy as np
import pytest

import strenc as se
from strenc.errors import DictionaryError, PolicyError, StrategyError


INPUT = [
    "hello how are you",
    "i am good",
    "Good how are you",
]

CHAR_INPUT = [
    "GACCA",
    "ABCABCD",
    "GAB",
]


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tokenizer():
    """Return a tokenizer splitting on single spaces."""
    return se.SplitByAnyOf(" ")


@pytest.fixture
def bow_encoder():
    """Return a fresh bag-of-words encoder."""
    return se.BagOfWordsEncoding()


@pytest.fixture
def dict_encoder():
    """Return a fresh dictionary encoder."""
    return se.DictionaryEncoding()


# Bag of words
# ---------------------------------------------------------------------------


def test_bow_dense(bow_encoder, tokenizer):
    """Bag-of-words matrix has one column per distinct token."""
    output = bow_encoder.encode(INPUT, tokenizer)

    expected = np.array(
        [
            [1, 1, 1, 1, 0, 0, 0, 0],
            [0, 0, 0, 0, 1, 1, 1, 0],
            [0, 1, 1, 1, 0, 0, 0, 1],
        ]
    )
    np.testing.assert_array_equal(output, expected)
    assert output.dtype == np.int64


def test_bow_vocabulary(bow_encoder, tokenizer):
    """Every distinct token maps to exactly one id; case matters."""
    bow_encoder.encode(INPUT, tokenizer)

    mapping = bow_encoder.dictionary.mapping
    assert sorted(mapping.values()) == list(range(8))
    assert bow_encoder.dictionary.tokens == [
        "hello", "how", "are", "you", "i", "am", "good", "Good",
    ]
    assert bow_encoder.vocab_size() == 8


def test_bow_list_output(bow_encoder, tokenizer):
    """List output of a padded policy is a fixed-width list of rows."""
    output = bow_encoder.encode(INPUT, tokenizer, output="list")
    assert output == [
        [1, 1, 1, 1, 0, 0, 0, 0],
        [0, 0, 0, 0, 1, 1, 1, 0],
        [0, 1, 1, 1, 0, 0, 0, 1],
    ]


def test_bow_counts_characters(bow_encoder):
    """Repeated characters are counted."""
    output = bow_encoder.encode(CHAR_INPUT, se.CharExtract())

    assert bow_encoder.dictionary.tokens == ["G", "A", "C", "B", "D"]
    np.testing.assert_array_equal(
        output,
        [
            [1, 2, 2, 0, 0],
            [0, 2, 2, 2, 1],
            [1, 1, 0, 1, 0],
        ],
    )


def test_bow_binary_characters():
    """Binary bag-of-words only records presence."""
    encoder = se.BagOfWordsEncoding(binary=True)
    output = encoder.encode(CHAR_INPUT, se.CharExtract(), output=se.OutputKind.LIST)
    assert output == [
        [1, 1, 1, 0, 0],
        [0, 1, 1, 1, 1],
        [1, 1, 0, 1, 0],
    ]


def test_bow_float_dtype(bow_encoder, tokenizer):
    """A float dtype can be requested for the dense output."""
    output = bow_encoder.encode(INPUT, tokenizer, dtype=np.float32)
    assert output.dtype == np.float32
    assert output.sum() == 11


# Dictionary encoding
# ---------------------------------------------------------------------------


def test_dictionary_ragged_characters(dict_encoder):
    """Ragged rows hold raw zero-based ids in token order."""
    output = dict_encoder.encode(["GACCA"], se.CharExtract(), output="list")
    assert output == [[0, 1, 2, 2, 1]]


def test_dictionary_ragged_rows(dict_encoder, tokenizer):
    """Ragged rows are not padded."""
    output = dict_encoder.encode(INPUT, tokenizer, output="list")
    assert output == [[0, 1, 2, 3], [4, 5, 6], [7, 1, 2, 3]]


def test_dictionary_dense_is_padded(dict_encoder, tokenizer):
    """Dense rows are as wide as the longest row; 0 is padding."""
    output = dict_encoder.encode(INPUT, tokenizer)
    np.testing.assert_array_equal(
        output,
        [
            [1, 2, 3, 4],
            [5, 6, 7, 0],
            [8, 2, 3, 4],
        ],
    )


def test_padding_entries_are_zero(dict_encoder, tokenizer):
    """Every entry past a row's last token is zero."""
    inputs = ["a", "a b c d", "", "b c"]
    output = dict_encoder.encode(inputs, tokenizer)
    for row, text in enumerate(inputs):
        n_tokens = len(text.split())
        assert np.all(output[row, n_tokens:] == 0)
        assert np.all(output[row, :n_tokens] > 0)


def test_row_fidelity(dict_encoder, tokenizer):
    """Decoding a ragged row gives back the tokens of its input."""
    output = dict_encoder.encode(INPUT, tokenizer, output="list")
    assert [dict_encoder.decode(row) for row in output] == [s.split(" ") for s in INPUT]


def test_decode_padded_row(dict_encoder, tokenizer):
    """Padded dense rows decode without their padding."""
    output = dict_encoder.encode(INPUT, tokenizer)
    assert dict_encoder.decode(output[1], padded=True) == ["i", "am", "good"]


def test_decode_unknown_id_raises(dict_encoder, tokenizer):
    """Ids outside the dictionary raise DictionaryError."""
    dict_encoder.encode(INPUT, tokenizer)
    with pytest.raises(DictionaryError):
        dict_encoder.decode([0, 99])


# Determinism, accumulation and reset
# ---------------------------------------------------------------------------


def test_deterministic_on_fresh_encoders(tokenizer):
    """Fresh encoders produce identical dictionaries and outputs."""
    first, second = se.BagOfWordsEncoding(), se.BagOfWordsEncoding()
    np.testing.assert_array_equal(
        first.encode(INPUT, tokenizer), second.encode(INPUT, tokenizer)
    )
    assert first.dictionary == second.dictionary


def test_dictionary_accumulates_across_calls(dict_encoder, tokenizer):
    """Ids from earlier calls persist until reset."""
    assert dict_encoder.encode(["a b"], tokenizer, output="list") == [[0, 1]]
    assert dict_encoder.encode(["b c"], tokenizer, output="list") == [[1, 2]]
    assert dict_encoder.vocab_size() == 3


def test_bow_width_grows_with_dictionary(bow_encoder, tokenizer):
    """Bag-of-words width is the vocabulary size seen so far."""
    bow_encoder.encode(["a b"], tokenizer)
    output = bow_encoder.encode(["c"], tokenizer)
    np.testing.assert_array_equal(output, [[0, 0, 1]])


def test_reset_reproduces_mapping(bow_encoder, tokenizer):
    """Reset followed by the same input reproduces the original run."""
    first = bow_encoder.encode(INPUT, tokenizer)
    mapping = bow_encoder.dictionary.mapping

    bow_encoder.encode(["something else entirely"], tokenizer)
    bow_encoder.reset()
    second = bow_encoder.encode(INPUT, tokenizer)

    np.testing.assert_array_equal(first, second)
    assert bow_encoder.dictionary.mapping == mapping


def test_fit_only_grows_dictionary(bow_encoder, tokenizer):
    """fit fills the dictionary; a later encode uses its ids."""
    bow_encoder.fit(INPUT, tokenizer)
    assert bow_encoder.vocab_size() == 8

    output = bow_encoder.encode(["Good good"], tokenizer)
    np.testing.assert_array_equal(output, [[0, 0, 0, 0, 0, 0, 1, 1]])


def test_create_map_is_deprecated(dict_encoder, tokenizer):
    """create_map still works but warns."""
    with pytest.warns(DeprecationWarning):
        dict_encoder.create_map("a b a", tokenizer)
    assert dict_encoder.dictionary.mapping == {"a": 0, "b": 1}


# Edge cases
# ---------------------------------------------------------------------------


def test_empty_input_list(bow_encoder, dict_encoder, tokenizer):
    """No inputs give an empty output."""
    assert bow_encoder.encode([], tokenizer).shape == (0, 0)
    assert bow_encoder.encode([], tokenizer, output="list") == []
    assert dict_encoder.encode([], tokenizer, output="list") == []


def test_whitespace_only_row(bow_encoder, tokenizer):
    """Delimiter-only rows never reach the dictionary."""
    output = bow_encoder.encode(["   ", "a"], tokenizer)
    assert bow_encoder.dictionary.tokens == ["a"]
    np.testing.assert_array_equal(output, [[0], [1]])


def test_all_rows_empty(dict_encoder, tokenizer):
    """Rows without tokens give zero-width dense output or empty ragged rows."""
    assert dict_encoder.encode(["", " "], tokenizer).shape == (2, 0)
    assert dict_encoder.encode(["", " "], tokenizer, output="list") == [[], []]


def test_unknown_output_kind_raises(bow_encoder, tokenizer):
    """Unknown output kinds raise StrategyError before encoding."""
    with pytest.raises(StrategyError):
        bow_encoder.encode(INPUT, tokenizer, output="sparse")
    assert bow_encoder.vocab_size() == 0


@pytest.mark.parametrize("output", [None, 3, ["list"]])
def test_non_string_output_kind_raises(bow_encoder, tokenizer, output):
    """Output kinds that are not names raise StrategyError."""
    with pytest.raises(StrategyError):
        bow_encoder.encode(INPUT, tokenizer, output=output)


def test_narrow_dtype_count_overflow_raises(bow_encoder, tokenizer):
    """Counts that do not fit the requested integer dtype raise PolicyError."""
    with pytest.raises(PolicyError):
        bow_encoder.encode([" ".join(["a"] * 256)], tokenizer, dtype=np.uint8)


def test_narrow_dtype_count_at_limit(bow_encoder, tokenizer):
    """A count equal to the dtype maximum is kept."""
    output = bow_encoder.encode([" ".join(["a"] * 255)], tokenizer, dtype=np.uint8)
    assert output.dtype == np.uint8
    np.testing.assert_array_equal(output, [[255]])


def test_narrow_dtype_binary_bow_fits(tokenizer):
    """Binary bag-of-words only writes ones, so long rows still fit."""
    encoder = se.BagOfWordsEncoding(binary=True)
    output = encoder.encode([" ".join(["a"] * 300)], tokenizer, dtype=np.int8)
    np.testing.assert_array_equal(output, [[1]])


def test_narrow_dtype_dictionary_overflow_raises(dict_encoder, tokenizer):
    """Dictionary ids that do not fit the requested integer dtype raise PolicyError."""
    inputs = [" ".join(f"t{i}" for i in range(300))]
    with pytest.raises(PolicyError):
        dict_encoder.encode(inputs, tokenizer, dtype=np.uint8)


def test_narrow_dtype_dictionary_at_limit(dict_encoder, tokenizer):
    """255 distinct tokens fill a uint8 dense output exactly."""
    output = dict_encoder.encode(
        [" ".join(f"t{i}" for i in range(255))], tokenizer, dtype=np.uint8
    )
    assert output.max() == 255
    assert dict_encoder.decode(output[0], padded=True)[-1] == "t254"


def test_integer_dtype_rejected_for_tfidf(tokenizer):
    """TF-IDF values need a float output."""
    encoder = se.TfIdfEncoding()
    with pytest.raises(PolicyError):
        encoder.encode(INPUT, tokenizer, dtype=np.int32)
    assert encoder.vocab_size() == 0


def test_non_numeric_dtype_rejected(bow_encoder, tokenizer):
    """Non-numeric dtypes raise PolicyError."""
    with pytest.raises(PolicyError):
        bow_encoder.encode(INPUT, tokenizer, dtype=str)


# Logging
# ---------------------------------------------------------------------------


def test_encode_logs_timing(bow_encoder, tokenizer, caplog):
    """encode logs its elapsed time at INFO level."""
    caplog.set_level(logging.INFO, logger="strenc")
    bow_encoder.encode(INPUT, tokenizer)
    assert "StringEncoder.encode completed in" in caplog.text


def test_timing_can_be_disabled(bow_encoder, tokenizer, caplog):
    """disable_timing silences the timing log."""
    caplog.set_level(logging.INFO, logger="strenc")
    se.disable_timing()
    try:
        bow_encoder.encode(INPUT, tokenizer)
    finally:
        se.enable_timing()
    assert "completed in" not in caplog.text


def test_timing_env_override(bow_encoder, tokenizer, caplog, monkeypatch):
    """STRENC_DISABLE_TIMING=1 silences the timing log."""
    monkeypatch.setenv("STRENC_DISABLE_TIMING", "1")
    caplog.set_level(logging.INFO, logger="strenc")
    bow_encoder.encode(INPUT, tokenizer)
    assert "completed in" not in caplog.text
