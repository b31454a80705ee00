"""
FollowUpDesign: immutable per-subject records for follow-up quantification.

Validates the four parallel inputs (randomization date, observed time,
event type, clinical cutoff date) and derives each subject's potential
follow-up in the unit of the observed times. All downstream code trusts
clean data.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real

import numpy as np
from numpy.typing import NDArray

from pyfollowup.core.exceptions import ValidationError
from pyfollowup.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_min_samples,
    check_non_negative,
)
from pyfollowup.followup._common import EventType
from pyfollowup.followup._units import DAYS_PER_UNIT


@dataclass(frozen=True)
class FollowUpDesign:
    """
    Frozen per-subject design for quantify_followup().

    Attributes:
        randomization: Randomization dates, datetime64[D], shape (n,).
        cutoff: Clinical cutoff date per subject, datetime64[D], shape (n,).
        event_time: Time from randomization to event or censoring.
        event_type: EventType codes (int8), shape (n,).
        potential_followup: (cutoff - randomization) in ``time_unit``.
        time_unit: One of DAYS_PER_UNIT.
    """
    randomization: NDArray[np.datetime64]
    cutoff: NDArray[np.datetime64]
    event_time: NDArray[np.floating]
    event_type: NDArray[np.int8]
    potential_followup: NDArray[np.floating]
    time_unit: str

    @classmethod
    def for_followup(
        cls,
        randomization_dates,
        event_times,
        event_types,
        cutoff_date,
        *,
        time_unit: str = "months",
    ) -> FollowUpDesign:
        """
        Create a follow-up design with validation.

        Args:
            randomization_dates: Dates (datetime.date, numpy datetime64 or
                ISO strings), one per subject.
            event_times: Observed time to event or censoring, in
                ``time_unit``.
            event_types: EventType members, their integer codes (0, 1, 2)
                or their names ("event", "lost_to_followup",
                "admin_censored").
            cutoff_date: A single clinical cutoff date, or one per subject.
            time_unit: Unit of ``event_times``: "days", "weeks", "months"
                or "years".

        Returns:
            Validated FollowUpDesign.

        Raises:
            ValidationError: On unknown event types or time units,
                negative or non-finite times, missing dates, or a cutoff
                before randomization.
            DimensionError: If the per-subject inputs differ in length.
        """
        if time_unit not in DAYS_PER_UNIT:
            raise ValidationError(
                f"time_unit must be one of {sorted(DAYS_PER_UNIT)}, got {time_unit!r}"
            )

        rando = _as_dates(randomization_dates, "randomization_dates")
        times = np.atleast_1d(check_array(event_times, "event_times"))
        types = _as_event_types(event_types)

        check_1d(rando, "randomization_dates")
        check_1d(times, "event_times")
        check_1d(types, "event_types")
        check_min_samples(times, 1, "event_times")
        check_consistent_length(
            rando, times, types,
            names=("randomization_dates", "event_times", "event_types"),
        )
        check_finite(times, "event_times")
        check_non_negative(times, "event_times")

        n = len(times)
        cutoff = _as_dates(cutoff_date, "cutoff_date")
        if cutoff.ndim == 0 or cutoff.shape == (1,):
            cutoff = np.full(n, cutoff.reshape(-1)[0], dtype="datetime64[D]")
        check_1d(cutoff, "cutoff_date")
        check_consistent_length(
            rando, cutoff, names=("randomization_dates", "cutoff_date"),
        )

        days = (cutoff - rando).astype(np.float64)
        pfu = days / DAYS_PER_UNIT[time_unit]
        check_non_negative(pfu, "potential follow-up (cutoff_date - randomization_dates)")

        return cls(
            randomization=rando,
            cutoff=cutoff,
            event_time=times.astype(np.float64),
            event_type=types,
            potential_followup=pfu,
            time_unit=time_unit,
        )

    @property
    def n(self) -> int:
        """Number of subjects."""
        return len(self.event_time)

    @property
    def primary_event(self) -> NDArray[np.bool_]:
        return self.event_type == EventType.EVENT

    @property
    def censored(self) -> NDArray[np.bool_]:
        """Censored for any reason."""
        return self.event_type != EventType.EVENT

    @property
    def lost_to_followup(self) -> NDArray[np.bool_]:
        return self.event_type == EventType.LOST_TO_FOLLOWUP

    @property
    def admin_censored(self) -> NDArray[np.bool_]:
        return self.event_type == EventType.ADMIN_CENSORED


def _as_dates(values, name: str) -> NDArray[np.datetime64]:
    """Convert to datetime64[D]; reject unparseable input and NaT."""
    try:
        dates = np.asarray(values, dtype="datetime64[D]")
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot interpret as dates: {e}") from e
    if np.any(np.isnat(dates)):
        raise ValidationError(f"{name}: contains missing dates (NaT)")
    return dates


def _as_event_types(values) -> NDArray[np.int8]:
    """Map members, integer codes or names onto EventType codes."""
    raw = np.atleast_1d(np.asarray(values, dtype=object))
    if raw.ndim != 1:
        raise ValidationError(
            f"event_types: expected 1D input, got shape {raw.shape}"
        )

    codes = np.empty(len(raw), dtype=np.int8)
    for i, value in enumerate(raw):
        codes[i] = _event_type_code(value, i)
    return codes


def _event_type_code(value, position: int) -> int:
    if isinstance(value, EventType):
        return int(value)
    if isinstance(value, str):
        try:
            return int(EventType[value.strip().upper()])
        except KeyError:
            pass
    elif isinstance(value, Real) and not isinstance(value, (bool, np.bool_)):
        if isinstance(value, Integral) or float(value).is_integer():
            code = int(value)
            if code in EventType._value2member_map_:
                return code
    raise ValidationError(
        f"event_types: unrecognized event type {value!r} at position {position}; "
        f"expected one of {[m.name.lower() for m in EventType]} "
        f"or codes {[int(m) for m in EventType]}"
    )
