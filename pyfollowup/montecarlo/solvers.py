"""
Public API for Monte Carlo methods.

    resample_censored(time, event) → (times, events)
    milestone_difference_ci(time_a, event_a, time_b, event_b, milestone)
        → MilestoneDiffSolution
"""

from __future__ import annotations

import warnings
from numbers import Integral

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.exceptions import UndefinedEstimateWarning, ValidationError
from pyfollowup.montecarlo._resample import resample_pairs
from pyfollowup.montecarlo.backends.cpu import CPUMilestoneBootstrapBackend
from pyfollowup.montecarlo.design import MilestoneDiffDesign, SeedLike
from pyfollowup.montecarlo.solution import MilestoneDiffSolution
from pyfollowup.survival.design import SurvivalDesign


def resample_censored(
    time,
    event,
    *,
    size: int | None = None,
    R: int = 1000,
    seed: SeedLike = None,
) -> tuple[NDArray, NDArray]:
    """
    Case resampling of a censored sample.

    Args:
        time: Time to event or censoring.
        event: Event indicator (1=event, 0=censored).
        size: Pairs per resample (default: the sample size).
        R: Number of resamples.
        seed: Random seed (int), SeedSequence, Generator, or None.

    Returns:
        (times, events), each of shape (R, size).

    Examples:
        >>> times, events = resample_censored(time, event, R=500, seed=1)
        >>> times.shape
        (500, 120)
    """
    design = SurvivalDesign.for_survival(time, event)
    if size is None:
        size = design.n
    for name, value in (("size", size), ("R", R)):
        if not isinstance(value, Integral) or isinstance(value, bool) or value < 1:
            raise ValidationError(f"{name} must be an integer >= 1, got {value!r}")

    rng = np.random.default_rng(seed)
    return resample_pairs(design.time, design.event, int(size), int(R), rng)


def milestone_difference_ci(
    time_a,
    event_a,
    time_b,
    event_b,
    milestone: float,
    *,
    R: int = 1000,
    conf_level: float = 0.95,
    seed: SeedLike = None,
) -> MilestoneDiffSolution:
    """
    Percentile bootstrap interval for a difference in milestone survival.

    Each replicate resamples both groups with replacement (keeping their
    sizes), then computes S_A(milestone) - S_B(milestone) twice: from
    Kaplan-Meier curves and from exponential fits. Replicates where an
    estimate is undefined are dropped before taking quantiles. No test is
    performed.

    Args:
        time_a, event_a: First group (event: 1=event, 0=censored).
        time_b, event_b: Second group.
        milestone: Time at which survival is compared.
        R: Number of bootstrap replicates.
        conf_level: Confidence level of the interval.
        seed: Random seed (int), SeedSequence, Generator, or None.
            Passing a Generator consumes its stream.

    Returns:
        MilestoneDiffSolution with ``km`` and ``exponential`` intervals.

    Examples:
        >>> res = milestone_difference_ci(t_g, e_g, t_r, e_r, 36, R=1000, seed=2021)
        >>> lower, upper = res.km
    """
    design = MilestoneDiffDesign.for_milestone_difference(
        time_a, event_a, time_b, event_b, milestone, R,
        conf_level=conf_level, seed=seed,
    )

    backend = CPUMilestoneBootstrapBackend()
    result = backend.solve(design)

    for msg in result.warnings:
        warnings.warn(msg, UndefinedEstimateWarning, stacklevel=2)

    return MilestoneDiffSolution(_result=result, _design=design)
