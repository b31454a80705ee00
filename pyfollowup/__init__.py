"""
pyfollowup: quantifying follow-up in time-to-event clinical trials.

Computes the competing definitions of "how long have subjects been
followed" (including Korn's potential follow-up), Kaplan-Meier milestone
estimates with closed-form intervals, bootstrap intervals for
between-group milestone differences, and extreme censoring scenarios.

Submodules:
    followup: Seven follow-up definitions and their medians
    survival: Kaplan-Meier, Peto-type intervals, stability bounds
    montecarlo: Case resampling and milestone difference bootstrap
"""

__version__ = "0.1.0"

from pyfollowup import followup
from pyfollowup import survival
from pyfollowup import montecarlo

from pyfollowup.followup import EventType, quantify_followup
from pyfollowup.survival import kaplan_meier, km_confint, stability_bounds
from pyfollowup.montecarlo import milestone_difference_ci, resample_censored

__all__ = [
    "__version__",
    "followup",
    "survival",
    "montecarlo",
    "EventType",
    "quantify_followup",
    "kaplan_meier",
    "km_confint",
    "stability_bounds",
    "milestone_difference_ci",
    "resample_censored",
]
