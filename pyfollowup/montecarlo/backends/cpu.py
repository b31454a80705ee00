"""
CPU backend for the two-group milestone bootstrap.

CPUMilestoneBootstrapBackend: case resampling of both groups, Kaplan-Meier
and exponential milestone survival per replicate, percentile intervals
for the between-group difference.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.result import Result
from pyfollowup.core.compute.timing import Timer
from pyfollowup.montecarlo._ci import percentile_ci
from pyfollowup.montecarlo._common import MilestoneDiffParams
from pyfollowup.montecarlo._resample import draw_indices
from pyfollowup.montecarlo.design import MilestoneDiffDesign
from pyfollowup.survival._exponential import exponential_rate, exponential_survival
from pyfollowup.survival._km import kaplan_meier_fit, peto_confint


class CPUMilestoneBootstrapBackend:
    """
    CPU backend for the milestone difference bootstrap.

    The random stream is consumed sequentially in a fixed order (for each
    replicate: group A, then group B), so a fixed seed reproduces the
    replicates exactly.
    """

    @property
    def name(self) -> str:
        return 'cpu_milestone_bootstrap'

    def solve(self, design: MilestoneDiffDesign) -> Result[MilestoneDiffParams]:
        """Run the bootstrap and return Result[MilestoneDiffParams]."""
        timer = Timer()
        timer.start()

        a, b = design.group_a, design.group_b
        milestone = design.milestone
        R = design.R
        rng = np.random.default_rng(design.seed)

        # Observed differences on the original samples
        with timer.section('t0_computation'):
            t0_km = (
                _km_milestone(a.time, a.event, milestone, design.conf_level)
                - _km_milestone(b.time, b.event, milestone, design.conf_level)
            )
            t0_exp = float(
                exponential_survival(exponential_rate(a.time, a.event), milestone)
                - exponential_survival(exponential_rate(b.time, b.event), milestone)
            )

        with timer.section('resampling'):
            idx_a = np.empty((R, a.n), dtype=np.intp)
            idx_b = np.empty((R, b.n), dtype=np.intp)
            for r in range(R):
                idx_a[r] = draw_indices(a.n, a.n, rng)
                idx_b[r] = draw_indices(b.n, b.n, rng)
            time_a, event_a = a.time[idx_a], a.event[idx_a]
            time_b, event_b = b.time[idx_b], b.event[idx_b]

        with timer.section('bootstrap_replicates'):
            t_km = np.empty(R, dtype=np.float64)
            for r in range(R):
                t_km[r] = (
                    _km_milestone(time_a[r], event_a[r], milestone, design.conf_level)
                    - _km_milestone(time_b[r], event_b[r], milestone, design.conf_level)
                )

            t_exp = (
                exponential_survival(exponential_rate(time_a, event_a), milestone)
                - exponential_survival(exponential_rate(time_b, event_b), milestone)
            )

        with timer.section('percentile_ci'):
            ci_km = percentile_ci(t_km, design.conf_level)
            ci_exp = percentile_ci(t_exp, design.conf_level)

        timer.stop()

        n_valid_km = int(np.sum(np.isfinite(t_km)))
        n_valid_exp = int(np.sum(np.isfinite(t_exp)))

        warnings_list: list[str] = []
        if n_valid_km < R:
            warnings_list.append(
                f"{R - n_valid_km} of {R} Kaplan-Meier replicates undefined at "
                f"milestone {milestone:g} (excluded from the interval)"
            )
        if n_valid_exp < R:
            warnings_list.append(
                f"{R - n_valid_exp} of {R} exponential replicates undefined "
                f"(excluded from the interval)"
            )

        params = MilestoneDiffParams(
            milestone=milestone,
            R=R,
            conf_level=design.conf_level,
            t0_km=t0_km,
            t0_exponential=t0_exp,
            t_km=t_km,
            t_exponential=t_exp,
            ci_km=ci_km,
            ci_exponential=ci_exp,
            n_valid_km=n_valid_km,
            n_valid_exponential=n_valid_exp,
        )

        return Result(
            params=params,
            info={
                'n_a': a.n,
                'n_b': b.n,
                'R': R,
                'seed': design.seed,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _km_milestone(
    time: NDArray,
    event: NDArray,
    milestone: float,
    conf_level: float,
) -> float:
    """Kaplan-Meier milestone estimate; NaN if the milestone is an event time."""
    km = kaplan_meier_fit(time, event)
    return float(peto_confint(km, np.array([milestone]), conf_level).estimate[0])
