from ._generics import ABSENT, Absent, ClassScores, Present, PriorModel, prior
from .estimator import NaiveBayesValidParams
from .predictor import NaiveBayes

__all__ = [
    "ABSENT",
    "Absent",
    "ClassScores",
    "NaiveBayes",
    "NaiveBayesValidParams",
    "Present",
    "PriorModel",
    "prior",
]
