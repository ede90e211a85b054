"""Error kinds raised while fitting and predicting with Naive Bayes models."""

__all__ = ["InvalidInput", "NaiveBayesError", "NumericFailure"]


class NaiveBayesError(Exception):
    """Base class for every recoverable error raised by this package."""


class InvalidInput(NaiveBayesError, ValueError):
    """Input data is unusable for the requested operation.

    Raised for row-count mismatches between features and targets, empty
    batches, feature dimensionality drifting across incremental fits and
    invalid hyper-parameters.

    Examples:
        >>> issubclass(InvalidInput, ValueError)
        True
    """


class NumericFailure(InvalidInput, ArithmeticError):
    """A score could not be ordered against the others during prediction.

    Examples:
        >>> err = NumericFailure("score of sample 3 is NaN")
        >>> isinstance(err, InvalidInput), isinstance(err, ArithmeticError)
        (True, True)
    """
