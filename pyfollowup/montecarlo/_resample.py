"""
Case resampling of right-censored data.

Resampling draws whole (time, status) pairs with replacement, following
Efron (1981); the joint structure of each unit is preserved, the margins
are never resampled separately.

References:
    Efron, B. (1981). Censored data and the bootstrap. JASA, 76(374),
        312-319.
    Akritas, M. G. (1986). Bootstrapping the Kaplan-Meier estimator.
        JASA, 81(396), 1032-1038.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def draw_indices(n: int, size: int, rng: np.random.Generator) -> NDArray:
    """One resample: ``size`` indices drawn uniformly from range(n)."""
    return rng.choice(n, size=size, replace=True)


def resample_pairs(
    time: NDArray,
    event: NDArray,
    size: int,
    R: int,
    rng: np.random.Generator,
) -> tuple[NDArray, NDArray]:
    """Draw R resamples of ``size`` (time, event) pairs.

    Returns
    -------
    (times, events)
        Arrays of shape (R, size); row b is resample b.
    """
    n = len(time)
    indices = np.empty((R, size), dtype=np.intp)
    for b in range(R):
        indices[b] = draw_indices(n, size, rng)
    return time[indices], event[indices]
