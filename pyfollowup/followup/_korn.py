"""
Korn's potential follow-up distribution.

For a potential follow-up value t' (time from randomization to the
clinical cutoff), the probability that a subject could have been
followed beyond t' is

    P(t') = p(t') * q(t')

    p(t') = proportion of subjects with potential follow-up > t'
    q(t') = Kaplan-Meier probability of not being lost to follow-up,
            fitted on subjects with potential follow-up >= t' and read
            at the first observed time strictly after t'
            (0 if no such time exists)

The reported median is the largest t' with P(t') >= 0.5.

References:
    Schemper, M., & Smith, T. L. (1996). A note on quantifying follow-up
        in studies of failure time. Controlled Clinical Trials, 17(4),
        343-346.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyfollowup.followup._common import StepFunction
from pyfollowup.survival._km import kaplan_meier_fit, survival_at


def korn_curve(
    potential_followup: NDArray,
    event_time: NDArray,
    lost_to_followup: NDArray,
) -> tuple[StepFunction, float]:
    """Korn potential follow-up step function and its median.

    Parameters
    ----------
    potential_followup : NDArray
        (n,) time from randomization to cutoff.
    event_time : NDArray
        (n,) observed time to event or censoring.
    lost_to_followup : NDArray
        (n,) 1 where the subject was lost to follow-up, else 0.

    Returns
    -------
    (StepFunction, float)
        Curve over the distinct potential follow-up values, and the
        median (NaN when P(t') never reaches 0.5).
    """
    n = len(potential_followup)
    ltfu = np.asarray(lost_to_followup, dtype=np.float64)

    grid = np.unique(potential_followup)
    spfu = np.sort(potential_followup)
    p = 1.0 - np.searchsorted(spfu, grid, side="right") / n

    # Subsets {pfu >= t'} shrink along the sorted grid; refit per value.
    q = np.zeros(len(grid), dtype=np.float64)
    for k, t_prime in enumerate(grid):
        in_subset = potential_followup >= t_prime
        times = event_time[in_subset]
        later = times[times > t_prime]
        if len(later) == 0:
            continue
        km = kaplan_meier_fit(times, ltfu[in_subset])
        q[k] = survival_at(km, later.min())

    product = p * q

    reached = grid[product >= 0.5]
    median = float(reached.max()) if len(reached) else float("nan")

    return StepFunction(x=grid, y=product), median
