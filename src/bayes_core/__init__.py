"""Shared prediction and estimation machinery for Naive Bayes classifiers."""

from .dataset import Dataset
from .errors import InvalidInput, NaiveBayesError, NumericFailure
from .models import (
    ABSENT,
    Absent,
    ClassScores,
    NaiveBayes,
    NaiveBayesValidParams,
    Present,
    prior,
)
from .utils.data import filter_class, iter_batches

__all__ = [
    "ABSENT",
    "Absent",
    "ClassScores",
    "Dataset",
    "InvalidInput",
    "NaiveBayes",
    "NaiveBayesError",
    "NaiveBayesValidParams",
    "NumericFailure",
    "Present",
    "filter_class",
    "iter_batches",
    "prior",
]

__version__ = "0.1.0"
