import logging
from abc import ABC, abstractmethod
from typing import Generic, Self, TypeVar

from ...dataset import Dataset
from ...errors import InvalidInput
from ._generics import ABSENT, Absent, Present, PriorModel
from .predictor import NaiveBayes

__all__ = ["NaiveBayesValidParams"]

logger = logging.getLogger(__name__)

Model = TypeVar("Model", bound=NaiveBayes)


class NaiveBayesValidParams(ABC, Generic[Model]):
    """Hyper-parameters of a Naive Bayes variant, ready for estimation.

    Subclasses hold their hyper-parameters (usually as a frozen dataclass),
    validate them in :meth:`check` and implement :meth:`incremental_update`,
    which folds one batch of data into the sufficient statistics of a model.
    Fitting on the whole dataset and fitting batch by batch share that single
    update step:

    * :meth:`fit` starts from scratch, or continues from a given prior model.
    * :meth:`fit_with` takes the explicit prior model, ``Absent()`` on the
      first batch and ``Present(model)`` afterwards, so a model can be grown
      over data that does not fit in memory at once.

    For variants whose statistics add up (counts, sums), threading the
    returned model through successive :meth:`fit_with` calls yields the same
    parameters as a single :meth:`fit` over the concatenated batches.

    Calls updating the same model must not run concurrently.
    """

    def check(self) -> Self:
        """Validate the hyper-parameters, returning self when they are usable.

        Raises:
            InvalidInput: If a hyper-parameter is out of range.
        """
        return self

    @abstractmethod
    def incremental_update(
        self, model: PriorModel[Model], dataset: Dataset
    ) -> Model:
        """Return a model updated with the statistics of one non-empty batch.

        Args:
            model: ``Absent()`` on the first batch, otherwise ``Present`` wrapping
                the model returned by the previous call.
            dataset: The current batch, already validated.
        """

    def fit(self, dataset: Dataset, model: PriorModel[Model] = ABSENT) -> Model:
        """Fit a model on a dataset, optionally continuing from a prior model.

        Args:
            dataset: Features with their target labels.
            model: Prior model to update, ``Absent()`` to start from scratch.

        Returns:
            The fitted model.

        Raises:
            InvalidInput: If the dataset holds no samples, its dimensionality
                disagrees with the prior model, or a hyper-parameter is invalid.
        """
        unique_classes = sorted(dataset.labels())
        logger.debug("Fitting on %d classes: %s", len(unique_classes), unique_classes)
        return self.fit_with(model, dataset)

    def fit_with(self, model: PriorModel[Model], dataset: Dataset) -> Model:
        """Update a prior model with one batch of data.

        Args:
            model: ``Absent()`` for the first batch, ``Present(model)`` after.
            dataset: The batch to learn from.

        Returns:
            A model reflecting every batch seen so far.

        Raises:
            InvalidInput: If the batch is empty, or its number of features
                differs from the one the prior model was fitted on.
        """
        self.check()

        if dataset.n_samples == 0:
            raise InvalidInput("Cannot fit on a batch with zero samples")

        if isinstance(model, Absent):
            logger.debug(
                "Starting a new model from a batch of %d samples", dataset.n_samples
            )
        elif isinstance(model, Present):
            if (n := dataset.n_features) != (m := model.model.n_features):
                raise InvalidInput(
                    f"Batch has {n} features, but the model was fitted on {m}."
                )
            logger.debug(
                "Updating model with a batch of %d samples", dataset.n_samples
            )
        else:
            raise TypeError(
                f"model must be Absent() or Present(model), got {type(model)}"
            )

        return self.incremental_update(model, dataset)
