"""
Empirical survivor functions.

survivor_step_function() turns a sample into 1 - ECDF evaluated at the
distinct sorted sample values, i.e. the proportion of the sample strictly
greater than each abscissa. Computed directly from sorted values and
counts, no estimator object involved.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyfollowup.followup._common import StepFunction


def survivor_step_function(sample: NDArray) -> StepFunction:
    """1 - ECDF of ``sample`` as a right-continuous StepFunction.

    An empty sample gives an empty StepFunction (constant 1).
    """
    sample = np.asarray(sample, dtype=np.float64)
    n = len(sample)
    if n == 0:
        empty = np.array([], dtype=np.float64)
        return StepFunction(x=empty, y=empty)

    x, counts = np.unique(sample, return_counts=True)
    y = 1.0 - np.cumsum(counts) / n
    # Guard the last step against round-off
    y[-1] = 0.0
    return StepFunction(x=x, y=y)


def sample_median(sample: NDArray) -> float:
    """Ordinary sample median; NaN for an empty sample."""
    if len(sample) == 0:
        return float("nan")
    return float(np.median(sample))
