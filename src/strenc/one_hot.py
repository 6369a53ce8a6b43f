"""One-hot encoding of categorical values."""

import logging
from collections.abc import Hashable, Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from .errors import PolicyError

log = logging.getLogger(__name__)


def _label_indices(values: Iterable[Hashable]) -> tuple[list[int], int]:
    """Map ``values`` to category indices in first-seen order."""
    categories: dict[Hashable, int] = {}
    labels: list[int] = []
    for value in values:
        # numpy scalars hash like their python values
        labels.append(categories.setdefault(value, len(categories)))
    return labels, len(categories)


def one_hot_encode(labels: ArrayLike, dtype: DTypeLike = np.int64) -> np.ndarray:
    """
    Convert a sequence of categorical labels into binary vectors.

    Each distinct label gets a column in first-seen order; row ``i`` of the
    result is all zeros except for a 1 in the column of ``labels[i]``.

    :param labels: One-dimensional labels of any hashable type.
    :return: Matrix of shape ``(len(labels), n_distinct_labels)``.

    .. code-block:: python

        one_hot_encode(["cat", "dog", "cat"])
        # array([[1, 0],
        #        [0, 1],
        #        [1, 0]])
    """
    values = np.asarray(labels)
    if values.ndim != 1:
        raise PolicyError("labels must be one-dimensional", shape=values.shape)

    indices, n_categories = _label_indices(values.tolist())
    output = np.zeros((len(indices), n_categories), dtype=dtype)
    if indices:
        output[np.arange(len(indices)), indices] = 1
    return output


def one_hot_encode_rows(data: ArrayLike, indices: Sequence[int]) -> np.ndarray:
    """
    Replace selected rows of ``data`` by their one-hot expansion.

    Row ``r`` listed in ``indices`` is treated as a categorical feature over
    the columns of ``data``: its ``k`` distinct values (first-seen order)
    become ``k`` binary rows, where row ``j`` has a 1 in every column whose
    value is the ``j``-th category. Rows not listed are copied unchanged, so
    the result has ``n_rows - len(indices) + sum(k)`` rows.

    :param data: Two-dimensional numeric matrix.
    :param indices: Positions (in ``data``) of the rows to expand; duplicates
                    are expanded once.
    :raises PolicyError: If ``data`` is not a numeric 2-D matrix or an index
                         is out of range.
    """
    matrix = np.asarray(data)
    if matrix.ndim != 2:
        raise PolicyError("data must be a 2-D matrix", shape=matrix.shape)

    if not np.issubdtype(matrix.dtype, np.number):
        raise PolicyError(f"data must be numeric, got {matrix.dtype}")

    n_rows, n_cols = matrix.shape
    selected: set[int] = set()
    for index in indices:
        index = int(index)
        if not 0 <= index < n_rows:
            raise PolicyError(
                "row index outside the data matrix", row=index, col=0, shape=matrix.shape
            )
        selected.add(index)

    blocks: list[np.ndarray] = []
    for index in range(n_rows):
        if index not in selected:
            blocks.append(matrix[index : index + 1])
            continue

        labels, n_categories = _label_indices(matrix[index].tolist())
        block = np.zeros((n_categories, n_cols), dtype=matrix.dtype)
        block[labels, np.arange(n_cols)] = 1
        log.debug(f"row {index} expanded into {n_categories} one-hot rows")
        blocks.append(block)

    if not blocks:
        return matrix.copy()
    return np.vstack(blocks)
