"""
One-parameter exponential model for right-censored data.

The maximum likelihood rate is events / total time at risk, which is what
R's survreg(Surv(time, event) ~ 1, dist = "exponential") returns as
exp(-intercept).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def exponential_rate(time: NDArray, event: NDArray) -> NDArray:
    """MLE of the exponential hazard.

    Accepts a single sample, shape (n,), or a stack of samples,
    shape (R, n), in which case one rate per row is returned. Rows with
    zero total time give NaN.
    """
    total_time = np.sum(time, axis=-1)
    n_events = np.sum(event, axis=-1)
    with np.errstate(divide="ignore", invalid="ignore"):
        rate = np.where(total_time > 0, n_events / total_time, np.nan)
    return rate


def exponential_survival(rate, t) -> NDArray:
    """S(t) = exp(-rate * t)."""
    return np.exp(-np.asarray(rate, dtype=np.float64) * t)
