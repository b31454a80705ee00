"""
pyfollowup Monte Carlo methods.

Provides case resampling of censored data and percentile bootstrap
intervals for between-group differences in milestone survival.

Usage:
    from pyfollowup.montecarlo import milestone_difference_ci

    result = milestone_difference_ci(time_a, event_a, time_b, event_b,
                                     milestone=36, R=1000, seed=42)
    result.km            # (lower, upper)
    result.exponential   # (lower, upper)
"""

from pyfollowup.montecarlo.solvers import milestone_difference_ci, resample_censored
from pyfollowup.montecarlo.solution import MilestoneDiffSolution

__all__ = [
    "milestone_difference_ci",
    "resample_censored",
    "MilestoneDiffSolution",
]
