"""
Common data structures for the milestone bootstrap.

MilestoneDiffParams is the parameter payload wrapped by Result[P] and
exposed through MilestoneDiffSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class MilestoneDiffParams:
    """
    Parameter payload for the milestone difference bootstrap.

    Differences are always group A minus group B.
    - t0_*: difference on the original samples
    - t_*: difference per bootstrap replicate (NaN where undefined)
    - ci_*: percentile interval over the defined replicates
    """
    milestone: float
    R: int
    conf_level: float
    t0_km: float
    t0_exponential: float
    t_km: NDArray[np.floating[Any]]            # shape (R,)
    t_exponential: NDArray[np.floating[Any]]   # shape (R,)
    ci_km: NDArray[np.floating[Any]]           # shape (2,)
    ci_exponential: NDArray[np.floating[Any]]  # shape (2,)
    n_valid_km: int
    n_valid_exponential: int
