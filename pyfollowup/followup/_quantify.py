"""
The seven follow-up definitions.

Each definition reinterprets the same per-subject records:

    1. observed time, everybody
    2. observed time, subjects censored for any reason
    3. Kaplan-Meier of observed time with "censored" as the event
    4. potential follow-up (cutoff - randomization), everybody
    5. censored: observed time;   event: potential follow-up
    6. Korn potential follow-up
    7. censored: potential follow-up;   event: observed time

References:
    Betensky, R. A. (2015). Measures of follow-up in time-to-event
        studies. Clinical Trials, 12(4), 403-408.
    Schemper, M., & Smith, T. L. (1996). Controlled Clinical Trials,
        17(4), 343-346.
"""

from __future__ import annotations

import numpy as np

from pyfollowup.core.compute.timing import Timer
from pyfollowup.followup._common import FollowUpParams, StepFunction
from pyfollowup.followup._ecdf import sample_median, survivor_step_function
from pyfollowup.followup._korn import korn_curve
from pyfollowup.followup._units import DEFINITION_KEYS, DEFINITION_LABELS
from pyfollowup.followup.design import FollowUpDesign
from pyfollowup.survival._km import kaplan_meier_fit, median_survival


def quantify(
    design: FollowUpDesign,
    timer: Timer,
) -> tuple[FollowUpParams, list[str]]:
    """Compute all seven distributions and medians.

    Returns the payload and a list of non-fatal diagnostics.
    """
    warnings_list: list[str] = []

    time = design.event_time
    pfu = design.potential_followup
    censored = design.censored

    distributions: list[StepFunction] = []
    medians: list[float] = []

    with timer.section('empirical_distributions'):
        # 1. observation time regardless of censoring
        distributions.append(survivor_step_function(time))
        medians.append(sample_median(time))

        # 2. observation time for those event-free
        event_free = time[censored]
        if len(event_free) == 0:
            warnings_list.append(
                "no censored subjects; observation time for those event-free is undefined"
            )
        distributions.append(survivor_step_function(event_free))
        medians.append(sample_median(event_free))

    with timer.section('censoring_km'):
        # 3. time to censoring, reverse Kaplan-Meier
        censoring_km = kaplan_meier_fit(time, censored.astype(np.float64))
        distributions.append(
            StepFunction(x=censoring_km.time, y=censoring_km.survival)
        )
        medians.append(median_survival(censoring_km))

    with timer.section('empirical_distributions'):
        # 4. time to cutoff
        distributions.append(survivor_step_function(pfu))
        medians.append(sample_median(pfu))

        # 5. known function time
        known = np.where(censored, time, pfu)
        distributions.append(survivor_step_function(known))
        medians.append(sample_median(known))

    with timer.section('korn_curve'):
        # 6. Korn potential follow-up
        korn, korn_median = korn_curve(pfu, time, design.lost_to_followup)
        if np.isnan(korn_median):
            warnings_list.append(
                "Korn potential follow-up never reaches 0.5; median undefined"
            )
        distributions.append(korn)
        medians.append(korn_median)

    with timer.section('empirical_distributions'):
        # 7. potential follow-up considering events
        considering_events = np.where(censored, pfu, time)
        distributions.append(survivor_step_function(considering_events))
        medians.append(sample_median(considering_events))

    params = FollowUpParams(
        keys=DEFINITION_KEYS,
        labels=DEFINITION_LABELS,
        distributions=tuple(distributions),
        medians=np.array(medians, dtype=np.float64),
        censoring_km=censoring_km,
        potential_followup=pfu,
        time_unit=design.time_unit,
    )

    return params, warnings_list
