"""
Follow-up quantification for time-to-event trials.

Usage:
    from pyfollowup.followup import quantify_followup, EventType

    fu = quantify_followup(rando, event_time, event_type, ccod)
    print(fu.summary())
    fu.distribution("korn")
"""

from pyfollowup.followup.solvers import quantify_followup
from pyfollowup.followup.solution import FollowUpSolution
from pyfollowup.followup.design import FollowUpDesign
from pyfollowup.followup._common import EventType, StepFunction
from pyfollowup.followup._ecdf import survivor_step_function

__all__ = [
    "quantify_followup",
    "FollowUpSolution",
    "FollowUpDesign",
    "EventType",
    "StepFunction",
    "survivor_step_function",
]
