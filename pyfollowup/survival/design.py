"""
SurvivalDesign: immutable container for right-censored (time, status) data.

Validates inputs at construction time; all downstream code trusts clean data.
The same subject-level records are reinterpreted under different status
definitions by different measures (primary event, censoring, loss to
follow-up), so a design is cheap to build and to subset.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.validation import (
    check_1d,
    check_array,
    check_binary,
    check_consistent_length,
    check_finite,
    check_min_samples,
    check_non_negative,
)


@dataclass(frozen=True)
class SurvivalDesign:
    """Immutable censored-sample container.

    Parameters
    ----------
    time : NDArray
        Time to event or censoring. Non-negative.
    event : NDArray
        Status indicator: 1 = event of interest observed, 0 = censored.
    """

    time: NDArray
    event: NDArray

    @classmethod
    def for_survival(cls, time, event) -> SurvivalDesign:
        """Create and validate a censored sample.

        Parameters
        ----------
        time : array-like
            Time to event or censoring.
        event : array-like
            Event indicator (0/1 or False/True).

        Returns
        -------
        SurvivalDesign

        Raises
        ------
        ValidationError
            If times are negative or non-finite, or event is not 0/1.
        DimensionError
            If time and event differ in length or are not vectors.
        """
        time = check_array(time, "time")
        event = check_array(event, "event")
        time = np.atleast_1d(time)
        event = np.atleast_1d(event)

        check_1d(time, "time")
        check_1d(event, "event")
        check_min_samples(time, 1, "time")
        check_consistent_length(time, event, names=("time", "event"))
        check_finite(time, "time")
        check_non_negative(time, "time")
        check_finite(event, "event")
        check_binary(event, "event")

        return cls(
            time=time.astype(np.float64),
            event=event.astype(np.float64),
        )

    def subset(self, mask) -> SurvivalDesign:
        """Return a new design restricted to ``mask`` (boolean or index array)."""
        return SurvivalDesign(time=self.time[mask], event=self.event[mask])

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.time)

    @property
    def n_events(self) -> int:
        """Number of observed events."""
        return int(np.sum(self.event))

    @property
    def n_censored(self) -> int:
        return self.n - self.n_events
