"""Exceptions raised by minilearn."""


class MinilearnError(Exception):
    """Base class for every error raised by the library."""


class DomainError(MinilearnError, ValueError):
    """An elementary function was evaluated outside its domain.

    Raised for log and sqrt of invalid values, asin/acos outside [-1, 1],
    reciprocals of zero, derivatives that are undefined at a point, and for
    non-finite values produced while building a learner update.
    """


class UnsupportedOperationError(MinilearnError, NotImplementedError):
    """A combinator was asked for behavior that has no definition."""


class DimensionMismatchError(MinilearnError, ValueError):
    """Vector lengths or pair shapes do not line up."""
