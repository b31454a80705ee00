"""
Solution wrapper for follow-up quantification results.

FollowUpSolution wraps Result[FollowUpParams] and provides keyed access
to the seven distributions and their medians, plus an R-style table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.result import Result
from pyfollowup.followup._common import FollowUpParams, StepFunction
from pyfollowup.survival.solution import KMSolution

if TYPE_CHECKING:
    from pyfollowup.followup.design import FollowUpDesign


@dataclass
class FollowUpSolution:
    """
    User-facing follow-up quantification.

    Definitions are addressable by position (0-6), short key
    (e.g. "korn") or full label (e.g. "Korn potential follow-up").
    """
    _result: Result[FollowUpParams]
    _design: 'FollowUpDesign'

    # --- Core fields ---

    @property
    def keys(self) -> tuple[str, ...]:
        return self._result.params.keys

    @property
    def labels(self) -> tuple[str, ...]:
        return self._result.params.labels

    @property
    def medians(self) -> dict[str, float]:
        """Median per definition, keyed by label, in reporting order."""
        return {
            label: float(m)
            for label, m in zip(self.labels, self._result.params.medians)
        }

    @property
    def median_values(self) -> NDArray[np.floating[Any]]:
        """Medians as an array of shape (7,)."""
        return self._result.params.medians

    @property
    def distributions(self) -> tuple[StepFunction, ...]:
        return self._result.params.distributions

    def distribution(self, which: int | str) -> StepFunction:
        return self.distributions[self._index(which)]

    def median(self, which: int | str) -> float:
        return float(self._result.params.medians[self._index(which)])

    @property
    def censoring_km(self) -> KMSolution:
        """Kaplan-Meier fit behind definition 3 (time to censoring)."""
        return KMSolution(_result=Result(
            params=self._result.params.censoring_km,
            info={"method": "Kaplan-Meier", "event": "censoring"},
            timing=None,
            backend_name="cpu_km",
        ))

    @property
    def potential_followup(self) -> NDArray[np.floating[Any]]:
        return self._result.params.potential_followup

    @property
    def time_unit(self) -> str:
        return self._result.params.time_unit

    # --- Metadata ---

    @property
    def n(self) -> int:
        return self._design.n

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

    def _index(self, which: int | str) -> int:
        if isinstance(which, str):
            if which in self.keys:
                return self.keys.index(which)
            if which in self.labels:
                return self.labels.index(which)
            raise KeyError(
                f"Unknown follow-up definition {which!r}. "
                f"Available keys: {list(self.keys)}"
            )
        if not 0 <= which < len(self.keys):
            raise IndexError(
                f"definition index must be in [0, {len(self.keys) - 1}], got {which}"
            )
        return int(which)

    # --- Display ---

    def summary(self) -> str:
        """
        Median table.

        Produces:
            FOLLOW-UP QUANTIFICATION (n = 1000, time unit: months)

                                                       median
            Observation time regardless of censoring   27.41
            ...
        """
        width = max(len(label) for label in self.labels)
        lines = [
            f"FOLLOW-UP QUANTIFICATION (n = {self.n}, time unit: {self.time_unit})",
            "",
            f"{'':<{width}s}  {'median':>10s}",
        ]
        for label, m in self.medians.items():
            m_str = "NA" if np.isnan(m) else f"{m:.4f}"
            lines.append(f"{label:<{width}s}  {m_str:>10s}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"FollowUpSolution(n={self.n}, time_unit={self.time_unit!r}, "
            f"korn_median={self.median('korn')})"
        )
