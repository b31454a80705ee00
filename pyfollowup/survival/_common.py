"""
Parameter payloads for survival analysis results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from numpy.typing import NDArray

from pyfollowup.survival.design import SurvivalDesign


class CIStatus(str, Enum):
    """Resolution status of a fixed-time confidence interval."""

    OK = "ok"
    BEFORE_FIRST_EVENT = "before_first_event"   # S = 1, bounds unset
    AT_EVENT_TIME = "at_event_time"             # everything unset
    DEGENERATE = "degenerate"                   # S = 0, bounds unset

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KMParams:
    """Kaplan-Meier survival curve parameters.

    Matches the event-time rows of R's summary(survfit(Surv(time, event) ~ 1)).
    """

    time: NDArray                # (m,) distinct event times
    survival: NDArray            # (m,) S(t) at each event time
    n_risk: NDArray              # (m,) number at risk just before each time
    n_events: NDArray            # (m,) events at each time
    n_censored: NDArray          # (m,) censored in [previous event time, this time)
    se: NDArray                  # (m,) Greenwood standard error
    n_observations: int          # total n
    n_events_total: int          # total events


@dataclass(frozen=True)
class KMConfintParams:
    """Peto-type confidence intervals at fixed query times."""

    t0: NDArray                  # (q,) query times, in input order
    estimate: NDArray            # (q,) S just before t0 (NaN if undefined)
    lower: NDArray               # (q,)
    upper: NDArray               # (q,)
    n_risk: NDArray              # (q,) risk set used for the variance
    status: tuple[CIStatus, ...]
    conf_level: float


@dataclass(frozen=True)
class StabilityParams:
    """Extreme censoring scenarios bounding a Kaplan-Meier curve."""

    lower: SurvivalDesign        # every censored subject fails at censoring
    upper: SurvivalDesign        # censored subjects carried to max event time
    max_event_time: float        # NaN when the sample has no events
    n_extended: int              # censored subjects moved in the upper scenario
