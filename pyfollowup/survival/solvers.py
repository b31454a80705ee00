"""
Public API for survival analysis.

    kaplan_meier(time, event) → KMSolution
    km_confint(time, event, t0) → KMConfintSolution
    stability_bounds(time, event) → StabilitySolution

Each function validates inputs, creates a SurvivalDesign, runs the
computation, and wraps the Result in a Solution.
"""

from __future__ import annotations

import warnings

import numpy as np

from pyfollowup.core.exceptions import (
    DegenerateSubsetWarning,
    UndefinedEstimateWarning,
    ValidationError,
)
from pyfollowup.core.result import Result
from pyfollowup.core.compute.timing import Timer
from pyfollowup.core.validation import (
    check_1d,
    check_array,
    check_conf_level,
    check_consistent_length,
    check_finite,
)
from pyfollowup.survival.design import SurvivalDesign
from pyfollowup.survival._common import CIStatus
from pyfollowup.survival._km import kaplan_meier_fit, peto_confint
from pyfollowup.survival._stability import extreme_scenarios
from pyfollowup.survival.solution import (
    KMConfintSolution,
    KMSolution,
    StabilitySolution,
)


def kaplan_meier(
    time,
    event,
    *,
    subset=None,
) -> KMSolution:
    """Kaplan-Meier survival curve estimation.

    Matches R's survival::survfit(Surv(time, event) ~ 1, subset = ...).

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    subset : array-like of bool or None
        Restrict the fit to the flagged observations.

    Returns
    -------
    KMSolution
    """
    design = SurvivalDesign.for_survival(time, event)

    if subset is not None:
        mask = np.asarray(subset)
        if mask.dtype != np.bool_:
            raise ValidationError(
                f"subset must be a boolean mask, got dtype {mask.dtype}"
            )
        check_1d(mask, "subset")
        check_consistent_length(design.time, mask, names=("time", "subset"))
        design = design.subset(mask)

    timer = Timer()
    timer.start()

    with timer.section('fit'):
        params = kaplan_meier_fit(design.time, design.event)

    timer.stop()

    result = Result(
        params=params,
        info={"method": "Kaplan-Meier", "n": design.n},
        timing=timer.result(),
        backend_name="cpu_km",
        warnings=(),
    )

    return KMSolution(_result=result)


def km_confint(
    time,
    event,
    t0,
    *,
    conf_level: float = 0.95,
) -> KMConfintSolution:
    """Kaplan-Meier estimate with Peto-type interval at fixed times.

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    t0 : float or array-like
        Query times (e.g. milestones). Evaluated independently.
    conf_level : float
        Confidence level for the two-sided interval (default 0.95).

    Returns
    -------
    KMConfintSolution
        Query times that coincide with an observed event time, or where
        the estimate is 0, are flagged and left unset; the remaining
        query times are unaffected.
    """
    design = SurvivalDesign.for_survival(time, event)
    check_conf_level(conf_level)

    t0_arr = np.atleast_1d(check_array(t0, "t0"))
    check_1d(t0_arr, "t0")
    check_finite(t0_arr, "t0")

    timer = Timer()
    timer.start()

    with timer.section('fit'):
        km = kaplan_meier_fit(design.time, design.event)

    with timer.section('confint'):
        params = peto_confint(km, t0_arr, conf_level)

    timer.stop()

    warnings_list: list[str] = []
    n_at_event = sum(s == CIStatus.AT_EVENT_TIME for s in params.status)
    n_degenerate = sum(s == CIStatus.DEGENERATE for s in params.status)
    if n_at_event:
        warnings_list.append(
            f"{n_at_event} query time(s) coincide with an observed event time; "
            f"interval left undefined"
        )
    if n_degenerate:
        warnings_list.append(
            f"{n_degenerate} query time(s) have S = 0; interval left undefined"
        )
    for msg in warnings_list:
        warnings.warn(msg, UndefinedEstimateWarning, stacklevel=2)

    fit_result = Result(
        params=km,
        info={"method": "Kaplan-Meier", "n": design.n},
        timing=None,
        backend_name="cpu_km",
    )
    result = Result(
        params=params,
        info={"method": "Peto", "n": design.n, "conf_level": conf_level},
        timing=timer.result(),
        backend_name="cpu_km_peto",
        warnings=tuple(warnings_list),
    )

    return KMConfintSolution(_result=result, _fit=KMSolution(_result=fit_result))


def stability_bounds(time, event) -> StabilitySolution:
    """Extreme censoring scenarios bounding the Kaplan-Meier curve.

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).

    Returns
    -------
    StabilitySolution
        ``lower``: every censored subject has the event at its censoring
        time. ``upper``: censored subjects observed before the last event
        time are carried, still censored, to that time. Fit each with
        ``kaplan_meier`` (or ``StabilitySolution.fit()``) for the bounding
        curves.
    """
    design = SurvivalDesign.for_survival(time, event)

    timer = Timer()
    timer.start()
    with timer.section('scenarios'):
        params = extreme_scenarios(design)
    timer.stop()

    warnings_list: list[str] = []
    if design.n_events == 0:
        warnings_list.append(
            "no events observed; upper scenario equals the input sample"
        )
        warnings.warn(warnings_list[-1], DegenerateSubsetWarning, stacklevel=2)

    result = Result(
        params=params,
        info={"method": "extreme scenarios", "n": design.n},
        timing=timer.result(),
        backend_name="cpu_stability",
        warnings=tuple(warnings_list),
    )

    return StabilitySolution(_result=result)
