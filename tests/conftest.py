from dataclasses import dataclass, field

import numpy as np
import pytest
from numpy.typing import NDArray

from bayes_core import Absent, Dataset, InvalidInput, NaiveBayes, NaiveBayesValidParams
from bayes_core.utils.data import filter_class


@dataclass
class CentroidNB(NaiveBayes):
    """Isotropic unit-variance Gaussian variant built from running counts and sums."""

    n_features: int
    class_count: dict = field(default_factory=dict)
    feature_sum: dict = field(default_factory=dict)

    def means(self) -> dict:
        return {c: self.feature_sum[c] / n for c, n in self.class_count.items()}

    def joint_log_likelihood(self, X: NDArray) -> dict:
        total = sum(self.class_count.values())
        return {
            label: np.log(self.class_count[label] / total)
            - 0.5 * self.squared_distance(X, mean)
            for label, mean in self.means().items()
        }

    @staticmethod
    def squared_distance(X: NDArray, mean: NDArray) -> NDArray:
        return np.sum((X - mean) ** 2, axis=1)


@dataclass(frozen=True)
class CentroidNBParams(NaiveBayesValidParams[CentroidNB]):
    min_count: int = 0

    def check(self):
        if self.min_count < 0:
            raise InvalidInput(f"min_count must be non-negative, got {self.min_count}")
        return self

    def incremental_update(self, model, dataset: Dataset) -> CentroidNB:
        if isinstance(model, Absent):
            fitted = CentroidNB(n_features=dataset.n_features)
        else:
            previous = model.model
            fitted = CentroidNB(
                n_features=previous.n_features,
                class_count=dict(previous.class_count),
                feature_sum={c: s.copy() for c, s in previous.feature_sum.items()},
            )

        for label in sorted(dataset.labels()):
            subset = filter_class(dataset.X, dataset.y, label)
            fitted.class_count[label] = fitted.class_count.get(label, 0) + len(subset)
            fitted.feature_sum[label] = fitted.feature_sum.get(
                label, np.zeros(dataset.n_features)
            ) + subset.sum(axis=0)

        return fitted


@dataclass
class FixedScores(NaiveBayes):
    """Model returning precomputed scores regardless of input."""

    scores: dict
    n_features: int = 1

    def joint_log_likelihood(self, X: NDArray) -> dict:
        return self.scores


@pytest.fixture
def params() -> CentroidNBParams:
    return CentroidNBParams()


@pytest.fixture
def blobs() -> Dataset:
    rng = np.random.default_rng(42)
    centers = {"a": (0.0, 0.0), "b": (5.0, 5.0), "c": (-5.0, 5.0)}
    X = np.vstack([rng.normal(center, 0.5, size=(30, 2)) for center in centers.values()])
    y = np.repeat(list(centers), 30)
    order = rng.permutation(len(y))
    return Dataset(X=X[order], y=y[order])
