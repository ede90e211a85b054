from collections.abc import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...dataset import Dataset
from ...errors import InvalidInput
from ...models.interfaces import Label

__all__ = ["filter_class", "iter_batches"]


def filter_class(X: ArrayLike, y: ArrayLike, label: Label) -> NDArray:
    """Select the rows of X whose target equals a given class label.

    Rows keep their original order and all columns are retained. A label with
    no matching rows yields an empty matrix with the original number of
    columns, which callers estimating per-class statistics must expect for
    rare classes.

    Args:
        X: Feature matrix, shape (n_samples, n_features).
        y: Target labels, shape (n_samples,).
        label: Class label to keep.

    Returns:
        Newly allocated array of shape (n_matching_rows, n_features).

    Raises:
        InvalidInput: If X is not 2D or y's length differs from X's rows.

    Examples:
        >>> X = [[1, 2], [3, 4], [5, 6]]
        >>> y = ["a", "b", "a"]
        >>> filter_class(X, y, "a").tolist()
        [[1, 2], [5, 6]]
        >>> filter_class(X, y, "b").tolist()
        [[3, 4]]
        >>> filter_class(X, y, "c").shape
        (0, 2)
    """
    X, y = np.asarray(X), np.asarray(y)

    if X.ndim != 2:
        raise InvalidInput(f"X must be a 2d array, got {X.ndim} dimensions.")

    if (n := X.shape[0]) != (m := len(y)):
        raise InvalidInput(
            "Features and targets must have the same number of rows, "
            f"X has {n} rows and y has {m}"
        )

    mask = np.fromiter((target == label for target in y.tolist()), bool, count=n)
    return X[mask]


def iter_batches(dataset: Dataset, batch_size: int) -> Iterator[Dataset]:
    """Split a dataset into consecutive batches for incremental fitting.

    Every batch holds ``batch_size`` rows except possibly the last one, and
    no batch is empty.

    Args:
        dataset: Dataset to split.
        batch_size: Maximum number of rows per batch.

    Yields:
        Datasets covering the original rows in order.

    Raises:
        InvalidInput: If batch_size is not positive.

    Examples:
        >>> import numpy as np
        >>> dataset = Dataset(X=np.zeros((5, 2)), y=np.arange(5))
        >>> [batch.y.tolist() for batch in iter_batches(dataset, 2)]
        [[0, 1], [2, 3], [4]]
    """
    if batch_size <= 0:
        raise InvalidInput(f"batch_size must be positive, got {batch_size}")

    for start in range(0, dataset.n_samples, batch_size):
        yield dataset.take(slice(start, start + batch_size))
