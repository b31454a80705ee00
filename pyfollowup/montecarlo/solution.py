"""
Solution wrapper for milestone bootstrap results.

MilestoneDiffSolution wraps Result[MilestoneDiffParams] and provides
convenient accessors and R-style summary output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.result import Result
from pyfollowup.montecarlo._ci import bootstrap_se
from pyfollowup.montecarlo._common import MilestoneDiffParams

if TYPE_CHECKING:
    from pyfollowup.montecarlo.design import MilestoneDiffDesign


@dataclass
class MilestoneDiffSolution:
    """
    User-facing milestone bootstrap results.

    ``km`` and ``exponential`` are the (lower, upper) percentile
    intervals for S_A(milestone) - S_B(milestone).
    """
    _result: Result[MilestoneDiffParams]
    _design: 'MilestoneDiffDesign'

    # --- Intervals ---

    @property
    def km(self) -> tuple[float, float]:
        lo, hi = self._result.params.ci_km
        return float(lo), float(hi)

    @property
    def exponential(self) -> tuple[float, float]:
        lo, hi = self._result.params.ci_exponential
        return float(lo), float(hi)

    @property
    def ci(self) -> dict[str, tuple[float, float]]:
        """Intervals keyed by model: {'km': ..., 'exponential': ...}."""
        return {"km": self.km, "exponential": self.exponential}

    # --- Replicates ---

    @property
    def t0_km(self) -> float:
        """Kaplan-Meier difference on the original samples."""
        return self._result.params.t0_km

    @property
    def t0_exponential(self) -> float:
        """Exponential-model difference on the original samples."""
        return self._result.params.t0_exponential

    @property
    def t_km(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_km

    @property
    def t_exponential(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_exponential

    @property
    def se_km(self) -> float:
        return bootstrap_se(self.t_km)

    @property
    def se_exponential(self) -> float:
        return bootstrap_se(self.t_exponential)

    @property
    def n_valid_km(self) -> int:
        return self._result.params.n_valid_km

    @property
    def n_valid_exponential(self) -> int:
        return self._result.params.n_valid_exponential

    # --- Metadata ---

    @property
    def milestone(self) -> float:
        return self._result.params.milestone

    @property
    def R(self) -> int:
        return self._result.params.R

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def seed(self):
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """
        Bootstrap summary.

        Produces:
            MILESTONE DIFFERENCE BOOTSTRAP (R = 1000, milestone = 36)

                         original   std. error    2.5%     97.5%
            km            0.08123     0.03710   0.00912   0.15301
            exponential   0.07450     0.02544   0.02417   0.12398
        """
        alpha = 1.0 - self.conf_level
        lo_pct = f"{100 * alpha / 2:g}%"
        hi_pct = f"{100 * (1 - alpha / 2):g}%"
        lines = [
            f"MILESTONE DIFFERENCE BOOTSTRAP (R = {self.R}, "
            f"milestone = {self.milestone:g})",
            "",
            f"{'':<12s}{'original':>10s}  {'std. error':>10s}  "
            f"{lo_pct:>9s}  {hi_pct:>9s}  {'valid':>6s}",
        ]
        rows = [
            ("km", self.t0_km, self.se_km, self.km, self.n_valid_km),
            ("exponential", self.t0_exponential, self.se_exponential,
             self.exponential, self.n_valid_exponential),
        ]
        for name, t0, se, (lo, hi), valid in rows:
            lines.append(
                f"{name:<12s}{_fmt(t0):>10s}  {_fmt(se):>10s}  "
                f"{_fmt(lo):>9s}  {_fmt(hi):>9s}  {valid:>6d}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MilestoneDiffSolution(milestone={self.milestone}, R={self.R}, "
            f"km={self.km}, exponential={self.exponential})"
        )


def _fmt(value: float) -> str:
    return "NA" if np.isnan(value) else f"{value:.5f}"
