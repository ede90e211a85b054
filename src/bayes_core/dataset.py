import warnings
from dataclasses import dataclass, field
from typing import Any, Self

import numpy as np
import pandas as pd  # type: ignore[import-untyped]
from numpy.typing import ArrayLike, NDArray

from .errors import InvalidInput

__all__ = ["Dataset"]


@dataclass(frozen=True, slots=True)
class Dataset:
    """Feature matrix paired with the target vector it is labelled by.

    A frozen dataclass consumed by estimators for fitting. Rows of ``X`` are
    independent observations and ``y[i]`` is the class label of row ``i``.
    Labels need not be numeric, only orderable and hashable.

    Attributes:
        X: Features as 2D numpy array, shape (n_samples, n_features)
        y: Class labels as 1D numpy array, shape (n_samples,)

    Examples:
        >>> import numpy as np
        >>> X = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> y = np.array(["a", "b", "a"])
        >>> dataset = Dataset(X=X, y=y)
        >>> dataset.n_samples, dataset.n_features
        (3, 2)
        >>> sorted(dataset.labels())
        ['a', 'b']
    """

    X: NDArray
    y: NDArray

    _X_cols: list[str] = field(init=False)
    _y_col: str = field(init=False)

    def __post_init__(self) -> None:
        """Validate array shapes and initialize column names."""
        if not isinstance(self.X, np.ndarray) or not isinstance(self.y, np.ndarray):
            raise TypeError(
                "X and y must be numpy arrays, "
                f"got X as {type(self.X)} and y as {type(self.y)}."
            )

        if (n := self.X.ndim) != 2:
            raise InvalidInput(f"X must be a 2d array, got {n} dimensions.")

        if (n := self.y.ndim) != 1:
            raise InvalidInput(f"y must be a 1d array, got {n} dimensions.")

        if (n := self.X.shape[0]) != (m := self.y.shape[0]):
            raise InvalidInput(
                "Features and targets must have the same number of rows, "
                f"X has {n} rows and y has {m}"
            )

        if not hasattr(self, "_X_cols"):
            X_cols = [f"x_{i}" for i in range(self.X.shape[1])]
            object.__setattr__(self, "_X_cols", X_cols)
        if not hasattr(self, "_y_col"):
            object.__setattr__(self, "_y_col", "y")

    def __repr__(self) -> str:
        """Return string representation with dimensions and class count.

        Examples:
            >>> import numpy as np
            >>> dataset = Dataset(X=np.zeros((4, 3)), y=np.array([0, 1, 1, 0]))
            >>> print(repr(dataset))
            Dataset(
              X: shape=(4, 3), columns=['x_0', 'x_1', 'x_2']
              y: shape=(4,), name='y', n_classes=2
            )
        """
        if len(self._X_cols) <= 5:
            X_cols_str = str(self._X_cols)
        else:
            first_cols = [repr(c) for c in self._X_cols[:3]]
            last_col = repr(self._X_cols[-1])
            X_cols_str = f"[{', '.join(first_cols)}, ..., {last_col}]"

        return (
            f"Dataset(\n"
            f"  X: shape=({self.n_samples}, {self.n_features}), columns={X_cols_str}\n"
            f"  y: shape=({self.n_samples},), name={self._y_col!r}, "
            f"n_classes={len(self.labels())}\n"
            f")"
        )

    @property
    def n_samples(self) -> int:
        """Number of rows."""
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        """Number of feature columns."""
        return self.X.shape[1]

    def labels(self) -> set[Any]:
        """Return the distinct class labels occurring in the targets.

        Examples:
            >>> import numpy as np
            >>> dataset = Dataset(X=np.zeros((3, 1)), y=np.array([2, 0, 2]))
            >>> sorted(dataset.labels())
            [0, 2]
            >>> Dataset(X=np.zeros((0, 1)), y=np.array([])).labels()
            set()
        """
        return set(self.y.tolist())

    @classmethod
    def from_array(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        X_names: list[str] | None = None,
        y_name: str | None = None,
    ) -> Self:
        """Create a Dataset from array-like objects with optional column names.

        Args:
            X: Feature array-like object, shape (n_samples, n_features)
            y: Target array-like object, shape (n_samples,)
            X_names: Optional list of feature column names. If None, auto-generates
                names like ['x_0', 'x_1', ...]
            y_name: Optional target column name. If None, defaults to 'y'

        Returns:
            Dataset instance holding the provided data and names.

        Raises:
            InvalidInput: If shapes are inconsistent or X_names doesn't match
                the number of features in X.

        Examples:
            >>> dataset = Dataset.from_array([[1, 2], [3, 4]], ["a", "b"])
            >>> dataset._X_cols
            ['x_0', 'x_1']
            >>> dataset = Dataset.from_array(
            ...     [[1, 2], [3, 4]], ["a", "b"], X_names=["f1", "f2"], y_name="label"
            ... )
            >>> dataset._X_cols, dataset._y_col
            (['f1', 'f2'], 'label')
        """
        X, y = np.asarray(X, dtype=float), np.asarray(y)
        instance = cls(X=X, y=y)

        if X_names is not None:
            if (n := len(X_names)) != (m := X.shape[1]):
                raise InvalidInput(
                    "List X_names must have the same length as size of second "
                    f"dimension of array X, got {n} names for {m} columns."
                )
            object.__setattr__(instance, "_X_cols", list(X_names))

        if y_name is not None:
            object.__setattr__(instance, "_y_col", y_name)

        return instance

    @classmethod
    def from_pandas(
        cls,
        df: pd.DataFrame,
        X_cols: list[str] | None = None,
        y_col: str | None = None,
    ) -> Self:
        """Create a Dataset from a pandas DataFrame.

        Args:
            df: DataFrame containing feature and target columns
            X_cols: Columns to use as features. If None and y_col is provided,
                uses all columns except y_col
            y_col: Column to use as target. If None and X_cols is provided,
                uses the first remaining column. If both None, uses the last
                column as target and all others as features

        Returns:
            Dataset instance with data from the DataFrame.

        Raises:
            TypeError: If df is not a pandas DataFrame.

        Examples:
            >>> import pandas as pd
            >>> df = pd.DataFrame({
            ...     "length": [1.0, 2.0, 3.0],
            ...     "width": [4.0, 5.0, 6.0],
            ...     "species": ["a", "b", "a"],
            ... })
            >>> dataset = Dataset.from_pandas(df, y_col="species")
            >>> dataset._X_cols
            ['length', 'width']
            >>> sorted(dataset.labels())
            ['a', 'b']
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"df must be a pandas dataframe, got {type(df)}")

        if X_cols is None and y_col is None:
            warnings.warn(
                "Features and target will be assumed by column position. "
                "Column at the last position will be set as target, "
                "everything else will be set as features.",
                UserWarning,
                stacklevel=2,
            )
            X, y = df.iloc[:, :-1], df.iloc[:, -1]
            X_cols, y_col = X.columns.tolist(), y.name
        else:
            if X_cols is None and y_col is not None:
                X_cols = [c for c in df.columns if c != y_col]
            if y_col is None and X_cols is not None:
                y_col = [c for c in df.columns if c not in X_cols][0]
            X, y = df.filter(X_cols), df.get(y_col)

        instance = cls(X=X.to_numpy(dtype=float), y=y.to_numpy())
        object.__setattr__(instance, "_X_cols", list(X_cols))
        object.__setattr__(instance, "_y_col", y_col)

        return instance

    def as_array(self) -> tuple[NDArray, NDArray]:
        """Return data as numpy arrays.

        Examples:
            >>> import numpy as np
            >>> dataset = Dataset(X=np.ones((2, 2)), y=np.array([0, 1]))
            >>> X, y = dataset.as_array()
            >>> X.shape, y.shape
            ((2, 2), (2,))
        """
        return np.asarray(self.X), np.asarray(self.y)

    def as_pandas(self) -> tuple[pd.DataFrame, pd.Series]:
        """Return data as a pandas DataFrame and Series, using stored column names.

        Examples:
            >>> dataset = Dataset.from_array(
            ...     [[1, 2], [3, 4]], [0, 1], X_names=["f1", "f2"], y_name="label"
            ... )
            >>> X, y = dataset.as_pandas()
            >>> list(X.columns), y.name
            (['f1', 'f2'], 'label')
        """
        return (
            pd.DataFrame(self.X, columns=self._X_cols),
            pd.Series(self.y, name=self._y_col),
        )

    def take(self, rows: slice | NDArray) -> Self:
        """Return a new Dataset restricted to ``rows``, keeping column names.

        Examples:
            >>> import numpy as np
            >>> dataset = Dataset(X=np.arange(6.0).reshape(3, 2), y=np.array([0, 1, 2]))
            >>> dataset.take(slice(1, 3)).y.tolist()
            [1, 2]
        """
        instance = type(self)(X=self.X[rows], y=self.y[rows])
        object.__setattr__(instance, "_X_cols", self._X_cols)
        object.__setattr__(instance, "_y_col", self._y_col)
        return instance
