from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable  # pragma: no cover

from numpy.typing import ArrayLike, NDArray  # pragma: no cover

from ...dataset import Dataset  # pragma: no cover

__all__ = ["IncrementalUpdate", "JointLogLikelihood", "Label"]


@runtime_checkable
class Label(Protocol):  # pragma: no cover
    """Capabilities a class label must provide.

    Labels are compared for equality when filtering rows, hashed when used as
    mapping keys and totally ordered to build the canonical class order.
    Python's ``str``, ``int`` and numpy scalars all qualify; labels are
    immutable so sharing them stands in for cloning.

    Examples:
        >>> isinstance("spam", Label), isinstance(3, Label)
        (True, True)
    """

    def __hash__(self) -> int: ...

    def __eq__(self, other: Any, /) -> bool: ...

    def __lt__(self, other: Any, /) -> bool: ...


Model_co = TypeVar("Model_co", covariant=True)


@runtime_checkable
class JointLogLikelihood(Protocol):  # pragma: no cover
    """Protocol for fitted models able to score samples against every class."""

    n_features: int

    def joint_log_likelihood(self, X: ArrayLike) -> Mapping[Label, NDArray]:
        """Compute the unnormalized log-likelihood of each sample per class.

        Args:
            X: Input features, shape (n_samples, n_features)

        Returns:
            Mapping from every learned class label to a 1D array of length
            n_samples holding that class's joint log-likelihood per sample.
        """
        ...


@runtime_checkable
class IncrementalUpdate(Protocol[Model_co]):  # pragma: no cover
    """Protocol for variant-specific parameter updates over one batch."""

    def incremental_update(self, model: Any, dataset: Dataset) -> Model_co:
        """Fold one batch into the sufficient statistics of a model.

        Args:
            model: ``Absent()`` on the first batch, ``Present(model)`` after.
            dataset: The current batch.

        Returns:
            Model reflecting the previous state and the new batch.
        """
        ...
