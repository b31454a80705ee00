"""
Solution wrappers for survival analysis results.

Each Solution wraps a Result[Params] and exposes user-friendly properties
with R-style summary() methods.
"""

from __future__ import annotations

import numpy as np

from pyfollowup.core.result import Result
from pyfollowup.survival._common import (
    CIStatus,
    KMConfintParams,
    KMParams,
    StabilityParams,
)
from pyfollowup.survival._km import median_survival, survival_at


class KMSolution:
    """Kaplan-Meier survival curve solution.

    Properties mirror R's survfit() output.
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[KMParams]) -> None:
        self._result = _result

    # -- Properties delegating to KMParams --

    @property
    def params(self) -> KMParams:
        return self._result.params

    @property
    def time(self):
        """Distinct event times."""
        return self._result.params.time

    @property
    def survival(self):
        """S(t) at each event time."""
        return self._result.params.survival

    @property
    def n_risk(self):
        """Number at risk just before each event time."""
        return self._result.params.n_risk

    @property
    def n_events(self):
        """Number of events at each event time."""
        return self._result.params.n_events

    @property
    def n_censored(self):
        """Number censored in each interval."""
        return self._result.params.n_censored

    @property
    def se(self):
        """Greenwood standard error of S(t)."""
        return self._result.params.se

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events_total(self) -> int:
        return self._result.params.n_events_total

    @property
    def median_survival(self) -> float:
        """Median time (NaN if S never drops to 0.5)."""
        return median_survival(self._result.params)

    def evaluate(self, t):
        """Right-continuous S(t) at arbitrary times."""
        return survival_at(self._result.params, t)

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """R-style summary of Kaplan-Meier fit."""
        lines = []
        lines.append("Call: kaplan_meier()")
        lines.append("")
        lines.append(
            f"  n={self.n_observations}, "
            f"events={self.n_events_total}"
        )
        lines.append("")

        median = self.median_survival
        median_str = "NA" if np.isnan(median) else f"{median:.4g}"
        lines.append(f"  median survival = {median_str}")
        lines.append("")

        lines.append(
            f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{'survival':>10s}  {'std.err':>10s}"
        )

        # Show up to 20 rows
        m = len(self.time)
        show = min(m, 20)
        for i in range(show):
            lines.append(
                f"  {self.time[i]:8.4g}  {self.n_risk[i]:8.0f}  "
                f"{self.n_events[i]:8.0f}  "
                f"{self.survival[i]:10.6f}  {self.se[i]:10.6f}"
            )
        if m > 20:
            lines.append(f"  ... ({m - 20} more rows)")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KMSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"median={self.median_survival})"
        )


class KMConfintSolution:
    """Survival estimate and Peto-type interval at fixed times.

    Rows that could not be resolved keep NaN in the unresolved fields and
    are identified by ``status`` (see CIStatus) and ``defined``.
    """

    __slots__ = ('_result', '_fit')

    def __init__(self, _result: Result[KMConfintParams], _fit: KMSolution) -> None:
        self._result = _result
        self._fit = _fit

    @property
    def t0(self):
        return self._result.params.t0

    @property
    def estimate(self):
        """S(t0-) at each query time."""
        return self._result.params.estimate

    @property
    def lower(self):
        return self._result.params.lower

    @property
    def upper(self):
        return self._result.params.upper

    @property
    def n_risk(self):
        return self._result.params.n_risk

    @property
    def status(self) -> tuple[CIStatus, ...]:
        return self._result.params.status

    @property
    def defined(self):
        """Boolean mask of rows with a resolved interval."""
        return np.array([s == CIStatus.OK for s in self.status], dtype=bool)

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def fit(self) -> KMSolution:
        """The underlying Kaplan-Meier curve."""
        return self._fit

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def to_array(self):
        """(q, 4) array with columns t0, S at t0, lower, upper."""
        return np.column_stack([self.t0, self.estimate, self.lower, self.upper])

    def summary(self) -> str:
        ci_pct = f"{self.conf_level * 100:g}"
        lines = [
            "Call: km_confint()",
            "",
            f"  {'t0':>8s}  {'S at t0':>10s}  {'lower ' + ci_pct + '%':>12s}  "
            f"{'upper ' + ci_pct + '%':>12s}  status",
        ]
        for t, s, lo, hi, st in zip(
            self.t0, self.estimate, self.lower, self.upper, self.status
        ):
            lines.append(
                f"  {t:8.4g}  {_fmt(s):>10s}  {_fmt(lo):>12s}  {_fmt(hi):>12s}  {st}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KMConfintSolution(q={len(self.t0)}, "
            f"defined={int(self.defined.sum())}, conf_level={self.conf_level})"
        )


class StabilitySolution:
    """Lower and upper extreme censoring scenarios for one sample."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[StabilityParams]) -> None:
        self._result = _result

    @property
    def lower(self):
        """Lower-bound scenario (SurvivalDesign)."""
        return self._result.params.lower

    @property
    def upper(self):
        """Upper-bound scenario (SurvivalDesign)."""
        return self._result.params.upper

    @property
    def t_low(self):
        return self._result.params.lower.time

    @property
    def c_low(self):
        return self._result.params.lower.event

    @property
    def t_up(self):
        return self._result.params.upper.time

    @property
    def c_up(self):
        return self._result.params.upper.event

    @property
    def max_event_time(self) -> float:
        return self._result.params.max_event_time

    @property
    def n_extended(self) -> int:
        return self._result.params.n_extended

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def fit(self) -> tuple[KMSolution, KMSolution]:
        """Kaplan-Meier curves of the (lower, upper) scenarios."""
        from pyfollowup.survival.solvers import kaplan_meier

        return (
            kaplan_meier(self.t_low, self.c_low),
            kaplan_meier(self.t_up, self.c_up),
        )

    def summary(self) -> str:
        lower, upper = self.lower, self.upper
        max_str = "NA" if np.isnan(self.max_event_time) else f"{self.max_event_time:.4g}"
        return "\n".join([
            "Call: stability_bounds()",
            "",
            f"  n={lower.n}, max event time={max_str}",
            f"  lower scenario: {lower.n_events} events, 0 censored",
            f"  upper scenario: {upper.n_events} events, {upper.n_censored} censored "
            f"({self.n_extended} extended)",
        ])

    def __repr__(self) -> str:
        return (
            f"StabilitySolution(n={self.lower.n}, "
            f"max_event_time={self.max_event_time})"
        )


def _fmt(value: float) -> str:
    return "NA" if np.isnan(value) else f"{value:.6f}"
