from .naive_bayes import (
    ABSENT,
    Absent,
    ClassScores,
    NaiveBayes,
    NaiveBayesValidParams,
    Present,
    prior,
)

__all__ = [
    "ABSENT",
    "Absent",
    "ClassScores",
    "NaiveBayes",
    "NaiveBayesValidParams",
    "Present",
    "prior",
]
