"""
Extreme censoring scenarios for a Kaplan-Meier curve.

Following Betensky (2015), the sensitivity of a KM curve to the
(unverifiable) independent-censoring assumption is bounded by two
deterministic re-resolutions of every censored observation:

- lower: the subject fails at its censoring time
- upper: the subject stays event-free through the last observed event
  time (its censoring time is extended to that time, still censored)

References:
    Betensky, R. A. (2015). Measures of follow-up in time-to-event
        studies: Why provide them and what should they be?
        Clinical Trials, 12(4), 403-408.
"""

from __future__ import annotations

import numpy as np

from pyfollowup.survival._common import StabilityParams
from pyfollowup.survival.design import SurvivalDesign


def extreme_scenarios(design: SurvivalDesign) -> StabilityParams:
    """Build the lower and upper censoring scenarios of ``design``."""
    censored = design.event == 0

    lower = SurvivalDesign(
        time=design.time.copy(),
        event=np.ones_like(design.event),
    )

    if design.n_events == 0:
        return StabilityParams(
            lower=lower,
            upper=SurvivalDesign(time=design.time.copy(), event=design.event.copy()),
            max_event_time=float("nan"),
            n_extended=0,
        )

    max_event_time = float(np.max(design.time[design.event == 1]))
    extend = censored & (design.time < max_event_time)

    t_up = design.time.copy()
    t_up[extend] = max_event_time

    return StabilityParams(
        lower=lower,
        upper=SurvivalDesign(time=t_up, event=design.event.copy()),
        max_event_time=max_event_time,
        n_extended=int(np.sum(extend)),
    )
