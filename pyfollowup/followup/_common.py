"""
Common data structures for follow-up quantification.

EventType is the three-valued subject outcome; StepFunction is the
empirical distribution carried for every follow-up definition;
FollowUpParams is the payload wrapped by Result[P].
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyfollowup.survival._common import KMParams


class EventType(IntEnum):
    """How a subject's observation ended.

    The integer codes are the conventional ones used in trial datasets:
    0 = event, 1 = lost to follow-up, 2 = administratively censored.
    """

    EVENT = 0
    LOST_TO_FOLLOWUP = 1
    ADMIN_CENSORED = 2


@dataclass(frozen=True)
class StepFunction:
    """
    Right-continuous step function on sorted abscissas.

    For survivor-type functions ``y[k]`` is the value on
    ``[x[k], x[k+1])`` and ``left`` is the value before ``x[0]``.
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    left: float = 1.0

    def __call__(self, t) -> NDArray:
        t = np.asarray(t, dtype=np.float64)
        padded = np.concatenate(([self.left], self.y))
        return padded[np.searchsorted(self.x, t, side="right")]

    def __len__(self) -> int:
        return len(self.x)

    @property
    def is_nonincreasing(self) -> bool:
        values = np.concatenate(([self.left], self.y))
        return bool(np.all(np.diff(values) <= 0))

    def to_array(self) -> NDArray:
        """(k, 2) array of (x, y) rows."""
        return np.column_stack([self.x, self.y])


@dataclass(frozen=True)
class FollowUpParams:
    """
    Parameter payload for follow-up quantification.

    All tuples are indexed by definition, in DEFINITION_KEYS order.
    Definition 3 (time to censoring) is a Kaplan-Meier curve; its
    StepFunction carries the curve's event times and survival values and
    the full fit is kept in ``censoring_km``.
    """
    keys: tuple[str, ...]
    labels: tuple[str, ...]
    distributions: tuple[StepFunction, ...]
    medians: NDArray[np.floating[Any]]         # shape (7,)
    censoring_km: KMParams
    potential_followup: NDArray[np.floating[Any]]
    time_unit: str
