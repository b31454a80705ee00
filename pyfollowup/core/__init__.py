"""
Core infrastructure for pyfollowup.

This module provides shared abstractions and utilities used by all
domain-specific submodules (survival, followup, montecarlo).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    compute: Timing utilities
"""

from pyfollowup.core.result import Result
from pyfollowup.core.exceptions import (
    PyFollowupError,
    ValidationError,
    DimensionError,
    UndefinedEstimateWarning,
    DegenerateSubsetWarning,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyFollowupError",
    "ValidationError",
    "DimensionError",
    # Warnings
    "UndefinedEstimateWarning",
    "DegenerateSubsetWarning",
]
