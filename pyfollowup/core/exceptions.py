"""
Exception and warning hierarchy for pyfollowup.

All exceptions inherit from PyFollowupError to allow catching any
library-specific error. Non-fatal conditions are reported through the
warning categories below rather than raised.

Design principles:
    - Invalid input aborts the call before any computation
    - Error messages are actionable with actual vs expected values
    - Conditions local to one output (a single query time, a single
      resample) degrade to NaN plus a warning, never an exception
"""


class PyFollowupError(Exception):
    """Base exception for all pyfollowup errors."""
    pass


class ValidationError(PyFollowupError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: negative
    times, unknown event-type codes, non-finite values, out-of-range
    confidence levels.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when per-subject vectors have different lengths or an input
    that must be a vector is not one-dimensional.

    Attributes:
        lengths: Mapping of parameter name to observed length, if known
    """

    def __init__(
        self,
        message: str,
        lengths: dict[str, int] | None = None,
    ):
        super().__init__(message)
        self.lengths = lengths


class UndefinedEstimateWarning(UserWarning):
    """
    A confidence interval could not be resolved at some query times.

    Issued when a query time coincides with an observed event time, or
    when the closed-form interval is numerically undefined (S = 0).
    The affected rows are flagged; the rest of the batch is unaffected.
    """
    pass


class DegenerateSubsetWarning(UserWarning):
    """
    A derived sample or subset was empty or otherwise degenerate.

    The corresponding value resolves to its boundary convention (NaN
    median, probability 0, unchanged scenario) instead of raising.
    """
    pass
