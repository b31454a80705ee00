"""
Bootstrap confidence interval computation.

Percentile method, as R's quantile(..., na.rm = TRUE) on the replicate
statistics: undefined replicates are dropped, not retried.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def percentile_ci(t: NDArray, conf_level: float) -> NDArray:
    """
    Percentile bootstrap CI.

    CI = [Q(alpha/2), Q(1-alpha/2)] over the finite replicates, with the
    default (linear, R type 7) quantile rule. All-NaN input gives
    [NaN, NaN].
    """
    alpha = 1.0 - conf_level
    finite = t[np.isfinite(t)]
    if len(finite) == 0:
        return np.array([np.nan, np.nan])
    return np.quantile(finite, [alpha / 2.0, 1.0 - alpha / 2.0])


def bootstrap_se(t: NDArray) -> float:
    """Standard deviation of the finite replicates (NaN if fewer than 2)."""
    finite = t[np.isfinite(t)]
    if len(finite) < 2:
        return float("nan")
    return float(np.std(finite, ddof=1))
