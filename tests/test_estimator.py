"""Unit tests for the estimation side: fit, incremental fit_with and their errors."""

import logging

import numpy as np
import pytest

from bayes_core import ABSENT, Absent, Dataset, InvalidInput, Present, prior
from bayes_core.models.interfaces import IncrementalUpdate
from bayes_core.utils.data import iter_batches

from conftest import CentroidNB, CentroidNBParams


def assert_same_parameters(left: CentroidNB, right: CentroidNB) -> None:
    assert left.n_features == right.n_features
    assert left.class_count == right.class_count
    assert left.feature_sum.keys() == right.feature_sum.keys()
    for label in left.feature_sum:
        np.testing.assert_allclose(left.feature_sum[label], right.feature_sum[label])


def test_fit_learns_every_class(params, blobs):
    model = params.fit(blobs)
    assert set(model.class_count) == blobs.labels()
    assert sum(model.class_count.values()) == blobs.n_samples


def test_fitted_model_recovers_training_labels(params, blobs):
    model = params.fit(blobs)
    predictions = model.predict(blobs.X)
    assert set(predictions.tolist()) <= blobs.labels()
    assert np.mean(predictions == blobs.y) > 0.95


@pytest.mark.parametrize("batch_size", [1, 7, 45, 89, 90, 500])
def test_fit_with_over_batches_matches_single_fit(params, blobs, batch_size):
    model = ABSENT
    for batch in iter_batches(blobs, batch_size):
        model = Present(params.fit_with(model, batch))

    assert_same_parameters(model.model, params.fit(blobs))


def test_fit_with_uneven_batches_matches_single_fit(params, blobs):
    rng = np.random.default_rng(0)
    cuts = np.sort(rng.choice(np.arange(1, blobs.n_samples), size=6, replace=False))
    bounds = [0, *cuts.tolist(), blobs.n_samples]

    model = None
    for start, stop in zip(bounds[:-1], bounds[1:]):
        model = params.fit(blobs.take(slice(start, stop)), prior(model))

    assert_same_parameters(model, params.fit(blobs))


def test_fit_with_does_not_mutate_prior_model(params, blobs):
    first = params.fit(blobs.take(slice(0, 10)))
    counts = dict(first.class_count)
    params.fit_with(Present(first), blobs.take(slice(10, 20)))
    assert first.class_count == counts


def test_classes_only_in_later_batches_are_added(params):
    first = Dataset.from_array([[0.0], [1.0]], ["a", "a"])
    second = Dataset.from_array([[5.0]], ["b"])
    model = params.fit_with(Present(params.fit(first)), second)
    assert model.class_count == {"a": 2, "b": 1}
    assert model.predict([[4.0]]).tolist() == ["b"]


def test_empty_batch_is_rejected(params):
    empty = Dataset(X=np.zeros((0, 2)), y=np.array([]))
    with pytest.raises(InvalidInput, match="zero samples"):
        params.fit(empty)


def test_empty_batch_is_rejected_after_first_fit(params, blobs):
    model = params.fit(blobs)
    with pytest.raises(InvalidInput, match="zero samples"):
        params.fit_with(Present(model), blobs.take(slice(0, 0)))


def test_dimensionality_drift_is_rejected(params, blobs):
    model = params.fit(blobs)
    narrow = Dataset.from_array([[1.0, 2.0, 3.0]], ["a"])
    with pytest.raises(InvalidInput, match="fitted on 2"):
        params.fit_with(Present(model), narrow)


def test_invalid_hyper_parameters_are_rejected(blobs):
    with pytest.raises(InvalidInput, match="min_count"):
        CentroidNBParams(min_count=-1).fit(blobs)


def test_unknown_prior_model_kind_is_rejected(params, blobs):
    with pytest.raises(TypeError, match="Absent"):
        params.fit_with(params.fit(blobs), blobs)


def test_prior_wraps_optional_models():
    assert isinstance(prior(None), Absent)
    wrapped = prior("model")
    assert isinstance(wrapped, Present) and wrapped.model == "model"


def test_fit_logs_canonical_class_order(params, blobs, caplog):
    with caplog.at_level(logging.DEBUG, logger="bayes_core"):
        params.fit(blobs)
    assert "['a', 'b', 'c']" in caplog.text
    assert "Starting a new model" in caplog.text


def test_fit_then_predict_into(params, blobs):
    model = params.fit(blobs)
    y = np.empty(blobs.n_samples, dtype=object)
    model.predict_into(blobs.X, y)
    assert np.array_equal(y, model.predict(blobs.X))


def test_params_satisfy_update_protocol(params):
    assert isinstance(params, IncrementalUpdate)
