"""
Kaplan-Meier product-limit estimator and fixed-time confidence intervals.

Matches R's survival::survfit(Surv(time, event) ~ 1):
- Product-limit survival estimate: S(t) = ∏(1 - d_j / n_j)
- Greenwood variance: Var(S(t)) = S(t)^2 * Σ(d_j / (n_j * (n_j - d_j)))

Fixed-time intervals use Peto's variance S^2 (1 - S) / n together with
the transform of survfit(..., conf.lower = "peto"), evaluated at the left
limit S(t0-):

    C     = exp(z * sqrt(Var) / (S^(3/2) (1 - S)))
    lower = S / ((1 - C) S + C)
    upper = C S / ((C - 1) S + 1)

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
    Peto, R. et al. (1977). Design and analysis of randomized clinical
        trials requiring prolonged observation of each patient. II.
        Br J Cancer, 35, 1-39.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyfollowup.survival._common import CIStatus, KMConfintParams, KMParams

# Tolerance for "S equals 0.5 exactly" in the median rule, as in survival.
_MEDIAN_TOL = np.sqrt(np.finfo(np.float64).eps)


def kaplan_meier_fit(time: NDArray, event: NDArray) -> KMParams:
    """Compute the Kaplan-Meier survival curve.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator (1=event, 0=censored).

    Returns
    -------
    KMParams
        Rows only at distinct event times; censored-only times reduce the
        risk set without producing a row.
    """
    n_total = len(time)
    n_events_total = int(np.sum(event))

    # Sort by time, with events before censoring at tied times
    order = np.lexsort((-event, time))
    t_sorted = time[order]
    e_sorted = event[order]

    unique_event_times = np.unique(t_sorted[e_sorted == 1])

    if len(unique_event_times) == 0:
        # No events: survival is 1 everywhere
        empty = np.array([], dtype=np.float64)
        return KMParams(
            time=empty,
            survival=empty,
            n_risk=empty,
            n_events=empty,
            n_censored=empty,
            se=empty,
            n_observations=n_total,
            n_events_total=0,
        )

    m = len(unique_event_times)
    out_n_risk = np.zeros(m, dtype=np.float64)
    out_n_events = np.zeros(m, dtype=np.float64)
    out_n_censored = np.zeros(m, dtype=np.float64)

    n_at_risk = n_total
    idx = 0

    for j, t_j in enumerate(unique_event_times):
        # Everything strictly before t_j leaves the risk set
        cens_count = 0
        while idx < n_total and t_sorted[idx] < t_j:
            if e_sorted[idx] == 0:
                cens_count += 1
            n_at_risk -= 1
            idx += 1

        out_n_censored[j] = cens_count
        out_n_risk[j] = n_at_risk

        d_j = 0
        c_j = 0
        while idx < n_total and t_sorted[idx] == t_j:
            if e_sorted[idx] == 1:
                d_j += 1
            else:
                c_j += 1
            idx += 1

        out_n_events[j] = d_j
        # Censoring tied with t_j was at risk at t_j and leaves afterwards
        n_at_risk -= (d_j + c_j)

    survival = np.cumprod(1.0 - out_n_events / out_n_risk)

    # Avoid division by zero when n_j == d_j (all at risk die)
    denom = out_n_risk * (out_n_risk - out_n_events)
    denom = np.where(denom > 0, denom, np.inf)
    se = survival * np.sqrt(np.cumsum(out_n_events / denom))

    return KMParams(
        time=unique_event_times,
        survival=survival,
        n_risk=out_n_risk,
        n_events=out_n_events,
        n_censored=out_n_censored,
        se=se,
        n_observations=n_total,
        n_events_total=n_events_total,
    )


def survival_at(params: KMParams, t) -> NDArray:
    """Right-continuous evaluation S(t); 1 before the first event time."""
    t = np.asarray(t, dtype=np.float64)
    padded = np.concatenate(([1.0], params.survival))
    return padded[np.searchsorted(params.time, t, side="right")]


def median_survival(params: KMParams) -> float:
    """Median time, survfit convention.

    Smallest event time with S(t) <= 0.5. When S is exactly 0.5 on a flat
    segment the median is the midpoint of that segment (up to the next
    event time). NaN when the curve never reaches 0.5.
    """
    surv = params.survival
    if len(surv) == 0:
        return float("nan")
    hit = np.flatnonzero(surv <= 0.5 + _MEDIAN_TOL)
    if len(hit) == 0:
        return float("nan")
    j = hit[0]
    if abs(surv[j] - 0.5) < _MEDIAN_TOL and j + 1 < len(surv):
        return float((params.time[j] + params.time[j + 1]) / 2.0)
    return float(params.time[j])


def peto_confint(params: KMParams, t0: NDArray, conf_level: float) -> KMConfintParams:
    """Closed-form confidence interval for S at each query time.

    Parameters
    ----------
    params : KMParams
        Fitted curve.
    t0 : NDArray
        (q,) query times.
    conf_level : float
        Two-sided confidence level.

    Returns
    -------
    KMConfintParams
        One row per query time, in input order. Rows whose status is not
        OK carry NaN in the unresolved fields.
    """
    t0 = np.atleast_1d(np.asarray(t0, dtype=np.float64))
    q = len(t0)
    z = stats.norm.ppf(1.0 - (1.0 - conf_level) / 2.0)

    estimate = np.full(q, np.nan)
    lower = np.full(q, np.nan)
    upper = np.full(q, np.nan)
    n_risk = np.full(q, np.nan)

    if len(params.time) == 0:
        before = np.ones(q, dtype=bool)
    else:
        before = t0 < params.time[0]
    at_event = ~before & np.isin(t0, params.time)
    inside = ~before & ~at_event

    estimate[before] = 1.0

    # Last event time strictly before each query
    j = np.searchsorted(params.time, t0[inside], side="left") - 1
    s = params.survival[j]
    n = params.n_risk[j]
    estimate[inside] = s
    n_risk[inside] = n

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        var_peto = s ** 2 * (1.0 - s) / n
        c = np.exp(z * np.sqrt(var_peto) / (s ** 1.5 * (1.0 - s)))
        lo = s / ((1.0 - c) * s + c)
        hi = c * s / ((c - 1.0) * s + 1.0)

    ok = np.isfinite(lo) & np.isfinite(hi) & (s > 0.0) & (s < 1.0)
    inside_idx = np.flatnonzero(inside)
    lower[inside_idx[ok]] = lo[ok]
    upper[inside_idx[ok]] = hi[ok]
    degenerate = np.zeros(q, dtype=bool)
    degenerate[inside_idx[~ok]] = True

    # Plain list: numpy would coerce the str-valued members to str
    status = [CIStatus.OK] * q
    for k in np.flatnonzero(before):
        status[k] = CIStatus.BEFORE_FIRST_EVENT
    for k in np.flatnonzero(at_event):
        status[k] = CIStatus.AT_EVENT_TIME
    for k in np.flatnonzero(degenerate):
        status[k] = CIStatus.DEGENERATE

    return KMConfintParams(
        t0=t0,
        estimate=estimate,
        lower=lower,
        upper=upper,
        n_risk=n_risk,
        status=tuple(status),
        conf_level=conf_level,
    )
