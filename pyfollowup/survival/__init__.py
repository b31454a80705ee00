"""
Survival analysis.

Public API:
    kaplan_meier(time, event) -> KMSolution
    km_confint(time, event, t0) -> KMConfintSolution
    stability_bounds(time, event) -> StabilitySolution
"""

from pyfollowup.survival.solvers import kaplan_meier, km_confint, stability_bounds
from pyfollowup.survival.solution import (
    KMSolution,
    KMConfintSolution,
    StabilitySolution,
)
from pyfollowup.survival.design import SurvivalDesign
from pyfollowup.survival._common import CIStatus

__all__ = [
    "kaplan_meier",
    "km_confint",
    "stability_bounds",
    "KMSolution",
    "KMConfintSolution",
    "StabilitySolution",
    "SurvivalDesign",
    "CIStatus",
]
