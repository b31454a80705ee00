"""
Design class for the milestone bootstrap.

MilestoneDiffDesign encapsulates all inputs needed by backends to
resample two censored samples. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Union

import numpy as np

from pyfollowup.core.exceptions import ValidationError
from pyfollowup.core.validation import check_conf_level
from pyfollowup.survival.design import SurvivalDesign

SeedLike = Union[int, np.random.SeedSequence, np.random.Generator, None]


@dataclass(frozen=True)
class MilestoneDiffDesign:
    """
    Frozen design for the two-group milestone bootstrap.

    Attributes:
        group_a: Censored sample of the first group.
        group_b: Censored sample of the second group.
        milestone: Time at which survival is compared.
        R: Number of bootstrap replicates.
        conf_level: Confidence level of the percentile interval.
        seed: Seed, SeedSequence or Generator for the random stream.
    """
    group_a: SurvivalDesign
    group_b: SurvivalDesign
    milestone: float
    R: int
    conf_level: float
    seed: SeedLike

    @classmethod
    def for_milestone_difference(
        cls,
        time_a,
        event_a,
        time_b,
        event_b,
        milestone: float,
        R: int = 1000,
        *,
        conf_level: float = 0.95,
        seed: SeedLike = None,
    ) -> MilestoneDiffDesign:
        """
        Create a milestone bootstrap design with validation.

        Args:
            time_a, event_a: First group's times and event indicators.
            time_b, event_b: Second group's times and event indicators.
            milestone: Comparison time. Must be finite and >= 0.
            R: Number of bootstrap replicates. Must be >= 1.
            conf_level: Confidence level in (0, 1).
            seed: Random seed (int), SeedSequence, Generator, or None.

        Returns:
            Validated MilestoneDiffDesign.

        Raises:
            ValidationError: If inputs are invalid.
        """
        group_a = SurvivalDesign.for_survival(time_a, event_a)
        group_b = SurvivalDesign.for_survival(time_b, event_b)

        milestone = float(milestone)
        if not np.isfinite(milestone) or milestone < 0:
            raise ValidationError(
                f"milestone must be finite and non-negative, got {milestone}"
            )

        if not isinstance(R, Integral) or isinstance(R, bool) or R < 1:
            raise ValidationError(f"R must be an integer >= 1, got {R!r}")

        check_conf_level(conf_level)

        if seed is not None and not isinstance(
            seed, (Integral, np.random.SeedSequence, np.random.Generator)
        ):
            raise ValidationError(
                f"seed must be an int, SeedSequence, Generator or None, "
                f"got {type(seed).__name__}"
            )

        return cls(
            group_a=group_a,
            group_b=group_b,
            milestone=milestone,
            R=int(R),
            conf_level=conf_level,
            seed=seed,
        )
