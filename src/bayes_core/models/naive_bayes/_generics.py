from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, Self, TypeAlias, TypeVar

import numpy as np
from numpy.typing import NDArray
from scipy.special import logsumexp  # type: ignore

from ...errors import InvalidInput, NumericFailure
from ..interfaces import Label

Model = TypeVar("Model")


@dataclass(frozen=True, slots=True)
class Absent:
    """Marker for the first batch of an incremental fit: no prior model exists.

    Examples:
        >>> Absent() == Absent()
        True
    """


@dataclass(frozen=True, slots=True)
class Present(Generic[Model]):
    """A model produced by an earlier fit, to be updated with a new batch.

    Attributes:
        model: The previously fitted model.
    """

    model: Model


PriorModel: TypeAlias = Absent | Present[Model]

ABSENT = Absent()


def prior(model: Model | None) -> "PriorModel[Model]":
    """Wrap an optional fitted model into the explicit prior-model type.

    Examples:
        >>> prior(None)
        Absent()
        >>> prior("fitted")
        Present(model='fitted')
    """
    return ABSENT if model is None else Present(model)


@dataclass(frozen=True, slots=True)
class ClassScores:
    """Per-class joint log-likelihoods laid out in canonical class order.

    Row ``i`` of ``scores`` holds the scores of ``classes[i]`` for every
    sample, and ``classes`` is sorted ascending. Arg-maxing a column therefore
    resolves ties towards the smallest label.

    Attributes:
        classes: Class labels sorted ascending, shape (n_classes,)
        scores: Joint log-likelihoods, shape (n_classes, n_samples)

    Examples:
        >>> import numpy as np
        >>> table = ClassScores.from_mapping(
        ...     {"b": np.array([-0.2, -1.0]), "a": np.array([0.1, -5.0])}
        ... )
        >>> table.classes.tolist()
        ['a', 'b']
        >>> table.scores.shape
        (2, 2)
    """

    classes: NDArray
    scores: NDArray

    @classmethod
    def from_mapping(
        cls, joint_log_likelihood: Mapping[Label, NDArray], n_samples: int | None = None
    ) -> Self:
        """Build the ordered table from a label-keyed score mapping.

        Args:
            joint_log_likelihood: Mapping from class label to 1D scores.
            n_samples: Expected length of every score array. Defaults to the
                length of the first array.

        Raises:
            InvalidInput: If the mapping is empty or its arrays disagree in length.

        Examples:
            >>> import numpy as np
            >>> ClassScores.from_mapping({0: np.zeros(2), 1: np.zeros(3)})
            Traceback (most recent call last):
            ...
            bayes_core.errors.InvalidInput: Scores of class 1 have shape (3,), expected (2,)
        """
        if not joint_log_likelihood:
            raise InvalidInput("Joint log-likelihood holds no classes")

        ordered = sorted(joint_log_likelihood.items(), key=lambda item: item[0])
        if n_samples is None:
            n_samples = len(ordered[0][1])

        scores = np.empty((len(ordered), n_samples), dtype=np.float64)
        for i, (label, values) in enumerate(ordered):
            values = np.asarray(values, dtype=np.float64)
            if values.shape != (n_samples,):
                raise InvalidInput(
                    f"Scores of class {label!r} have shape {values.shape}, "
                    f"expected {(n_samples,)}"
                )
            scores[i] = values

        return cls(classes=_label_array([label for label, _ in ordered]), scores=scores)

    @property
    def n_classes(self) -> int:
        return self.scores.shape[0]

    @property
    def n_samples(self) -> int:
        return self.scores.shape[1]

    def check_orderable(self) -> None:
        """Raise NumericFailure for the first sample holding a NaN score."""
        nan_mask = np.isnan(self.scores)
        if nan_mask.any():
            sample_idx, class_idx = np.argwhere(nan_mask.T)[0]
            label = self.classes.tolist()[class_idx]
            raise NumericFailure(
                f"Score of class {label!r} for sample {sample_idx} "
                "is NaN and cannot be ordered."
            )

    def log_posterior(self) -> NDArray:
        """Normalize the scores into log posterior probabilities.

        Returns:
            Log-probabilities, shape (n_classes, n_samples), rows following
            ``classes``.

        Raises:
            NumericFailure: If a score is NaN, or the scores of a sample sum to
                zero or infinite likelihood and cannot be normalized.

        Examples:
            >>> import numpy as np
            >>> table = ClassScores.from_mapping(
            ...     {"a": np.log([0.2, 0.2]), "b": np.log([0.2, 0.6])}
            ... )
            >>> np.exp(table.log_posterior()).round(2).tolist()
            [[0.5, 0.25], [0.5, 0.75]]
            >>> ClassScores.from_mapping(
            ...     {"a": np.array([-np.inf]), "b": np.array([-np.inf])}
            ... ).log_posterior()
            Traceback (most recent call last):
            ...
            bayes_core.errors.NumericFailure: Scores of sample 0 sum to -inf and cannot be normalized.
        """
        self.check_orderable()
        normalizer = logsumexp(self.scores, axis=0)
        if not (finite := np.isfinite(normalizer)).all():
            sample_idx = np.flatnonzero(~finite)[0]
            raise NumericFailure(
                f"Scores of sample {sample_idx} sum to {normalizer[sample_idx]} "
                "and cannot be normalized."
            )
        return self.scores - normalizer


def _label_array(labels: list[Label]) -> NDArray:
    """Pack labels into a 1D array, typed only when all share one scalar type.

    Examples:
        >>> _label_array(["a", "b"]).dtype.kind
        'U'
        >>> _label_array([True, 2]).tolist()
        [True, 2]
    """
    kinds = {type(label) for label in labels}
    if len(kinds) == 1 and issubclass(kinds.pop(), (str, int, float, np.generic)):
        return np.asarray(labels)
    packed = np.empty(len(labels), dtype=object)
    packed[:] = labels
    return packed
