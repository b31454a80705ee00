"""
Public API for follow-up quantification.

    quantify_followup(randomization_dates, event_times, event_types, cutoff_date)
        → FollowUpSolution
"""

from __future__ import annotations

import warnings

from pyfollowup.core.exceptions import DegenerateSubsetWarning
from pyfollowup.core.result import Result
from pyfollowup.core.compute.timing import Timer
from pyfollowup.followup._quantify import quantify
from pyfollowup.followup.design import FollowUpDesign
from pyfollowup.followup.solution import FollowUpSolution


def quantify_followup(
    randomization_dates,
    event_times,
    event_types,
    cutoff_date,
    *,
    time_unit: str = "months",
) -> FollowUpSolution:
    """Quantify follow-up under seven definitions.

    Parameters
    ----------
    randomization_dates : array-like of dates
        Date of randomization per subject.
    event_times : array-like
        Time from randomization to event or censoring, in ``time_unit``.
    event_types : array-like
        EventType per subject: 0/"event", 1/"lost_to_followup",
        2/"admin_censored".
    cutoff_date : date or array-like of dates
        Clinical cutoff date (one for all subjects, or one per subject).
    time_unit : str
        Unit of ``event_times``; potential follow-up is converted to it.

    Returns
    -------
    FollowUpSolution
        Seven distributions with their medians.

    Examples
    --------
    >>> fu = quantify_followup(rando, pfs, event_type, ccod)
    >>> print(fu.summary())
    >>> fu.median("korn")
    """
    design = FollowUpDesign.for_followup(
        randomization_dates, event_times, event_types, cutoff_date,
        time_unit=time_unit,
    )

    timer = Timer()
    timer.start()
    params, warnings_list = quantify(design, timer)
    timer.stop()

    for msg in warnings_list:
        warnings.warn(msg, DegenerateSubsetWarning, stacklevel=2)

    result = Result(
        params=params,
        info={
            'n': design.n,
            'n_events': int(design.primary_event.sum()),
            'n_lost_to_followup': int(design.lost_to_followup.sum()),
            'n_admin_censored': int(design.admin_censored.sum()),
            'time_unit': time_unit,
        },
        timing=timer.result(),
        backend_name='cpu_followup',
        warnings=tuple(warnings_list),
    )

    return FollowUpSolution(_result=result, _design=design)
