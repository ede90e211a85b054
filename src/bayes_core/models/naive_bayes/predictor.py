import logging
import warnings
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableSequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...errors import InvalidInput
from ..interfaces import Label
from ._generics import ClassScores

__all__ = ["NaiveBayes"]

logger = logging.getLogger(__name__)


class NaiveBayes(ABC):
    """Prediction machinery shared by fitted Naive Bayes models.

    Concrete variants learn per-class parameters and implement
    :meth:`joint_log_likelihood`; everything that turns those scores into
    labels and posteriors lives here. Classes are always laid out in
    ascending label order, so when several classes share the maximal score
    for a sample the smallest label wins.

    Attributes:
        n_features: Number of features the model was fitted on.

    Examples:
        >>> import numpy as np
        >>> class Fixed(NaiveBayes):
        ...     n_features = 1
        ...     def joint_log_likelihood(self, X):
        ...         return {"a": np.array([0.1, -5.0]), "b": np.array([-0.2, -1.0])}
        >>> Fixed().predict(np.zeros((2, 1))).tolist()
        ['a', 'b']
    """

    n_features: int

    @abstractmethod
    def joint_log_likelihood(self, X: NDArray) -> Mapping[Label, NDArray]:
        """Score every sample against every learned class.

        Args:
            X: Validated features, shape (n_samples, n_features).

        Returns:
            Mapping from each learned class label to a 1D array of length
            n_samples with the unnormalized log-likelihood of each sample.
        """

    def class_scores(self, X: ArrayLike) -> ClassScores:
        """Return the joint log-likelihoods as a table in canonical class order.

        Raises:
            InvalidInput: If X is not 2D, has the wrong number of features, or
                the model returns score arrays of inconsistent length.
        """
        return self._scores(self._check_X(X))

    def predict_into(self, X: ArrayLike, y: MutableSequence[Any] | NDArray) -> None:
        """Write the most probable class of each sample of X into y.

        The output buffer is filled only once every sample has been resolved,
        so on failure its previous content is left untouched.

        Args:
            X: Input features, shape (n_samples, n_features).
            y: Output buffer of length n_samples, written in place.

        Raises:
            AssertionError: If len(y) differs from the number of rows of X.
            InvalidInput: If X is malformed for this model.
            TypeError: If y is a numpy array whose dtype cannot hold the labels,
                e.g. a fixed-width string buffer shorter than some label.
            NumericFailure: If any score is NaN and cannot be ordered.

        Examples:
            >>> import numpy as np
            >>> class Fixed(NaiveBayes):
            ...     n_features = 2
            ...     def joint_log_likelihood(self, X):
            ...         return {0: np.array([0.0, 1.0, 2.0]), 1: np.array([1.0, 1.0, 0.0])}
            >>> y = np.zeros(3, dtype=int)
            >>> Fixed().predict_into(np.zeros((3, 2)), y)
            >>> y.tolist()  # the tie on the second sample goes to the smaller label
            [1, 0, 0]
        """
        X = self._check_X(X)
        if len(y) != X.shape[0]:
            raise AssertionError(
                "The number of data points must match the number of output targets, "
                f"got {X.shape[0]} rows and an output of length {len(y)}."
            )

        labels = self._select(X)
        if isinstance(y, np.ndarray):
            if not np.can_cast(labels.dtype, y.dtype):
                raise TypeError(
                    f"Output buffer of dtype {y.dtype} cannot hold labels of "
                    f"dtype {labels.dtype} without loss."
                )
            y[:] = labels
        else:
            y[:] = labels.tolist()

    def predict(self, X: ArrayLike) -> NDArray:
        """Return the most probable class of each sample of X.

        Args:
            X: Input features, shape (n_samples, n_features).

        Returns:
            Predicted labels, shape (n_samples,).
        """
        return self._select(self._check_X(X))

    def predict_log_proba(self, X: ArrayLike) -> NDArray:
        """Return log posterior probabilities, normalized over the classes.

        Columns follow the ascending class order. To get the labels of the
        columns without scoring twice, call :meth:`class_scores` and use
        ``table.classes`` with ``table.log_posterior()``.

        Args:
            X: Input features, shape (n_samples, n_features).

        Returns:
            Log-probabilities, shape (n_samples, n_classes).

        Examples:
            >>> import numpy as np
            >>> class Fixed(NaiveBayes):
            ...     n_features = 1
            ...     def joint_log_likelihood(self, X):
            ...         return {"b": np.log([0.2, 0.6]), "a": np.log([0.2, 0.2])}
            >>> np.exp(Fixed().predict_log_proba(np.zeros((2, 1)))).round(2).tolist()
            [[0.5, 0.5], [0.25, 0.75]]
        """
        return self._scores(self._check_X(X)).log_posterior().T

    def predict_proba(self, X: ArrayLike) -> NDArray:
        """Return posterior probabilities, shape (n_samples, n_classes)."""
        return np.exp(self._scores(self._check_X(X)).log_posterior().T)

    def _scores(self, X: NDArray) -> ClassScores:
        table = ClassScores.from_mapping(self.joint_log_likelihood(X), X.shape[0])
        logger.debug(
            "Scored %d samples against %d classes", table.n_samples, table.n_classes
        )
        return table

    def _select(self, X: NDArray) -> NDArray:
        table = self._scores(X)
        table.check_orderable()
        # argmax keeps the first maximum, i.e. the smallest tied label
        return table.classes[np.argmax(table.scores, axis=0)]

    def _check_X(self, X: ArrayLike) -> NDArray:
        X = np.asarray(X, dtype=np.float64)

        if X.ndim != 2:
            raise InvalidInput(f"X must be a 2d array, got {X.ndim} dimensions.")

        if (n := X.shape[1]) != self.n_features:
            raise InvalidInput(
                f"X has {n} features, but the model was fitted on {self.n_features}."
            )

        if not np.isfinite(X).all():
            warnings.warn(
                "X contains non-finite values, scores of the affected samples "
                "may not be comparable.",
                RuntimeWarning,
                stacklevel=3,
            )

        return X

