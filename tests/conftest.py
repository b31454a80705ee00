"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pyfollowup.followup._units import DAYS_PER_UNIT

DAYS_PER_MONTH = DAYS_PER_UNIT["months"]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


def _simulate_trial(
    rng,
    n=400,
    accrual_months=24.0,
    cutoff_month=48.0,
    event_rate=np.log(2) / 30.0,
    dropout_rate=0.01,
    day0="2016-01-31",
):
    """Single-arm trial with uniform accrual, exponential events and dropout.

    Observation ends at the earliest of event, dropout and the cutoff.
    Returns a dict of per-subject inputs for quantify_followup().
    """
    day0 = np.datetime64(day0, "D")
    accrual = rng.uniform(0.0, accrual_months, n)
    rando = day0 + np.round(accrual * DAYS_PER_MONTH).astype("timedelta64[D]")
    cutoff = day0 + np.timedelta64(int(round(cutoff_month * DAYS_PER_MONTH)), "D")

    admin = (cutoff - rando).astype(np.float64) / DAYS_PER_MONTH
    event = rng.exponential(1.0 / event_rate, n)
    # Always consume the dropout draws so accrual and events stay fixed
    # across dropout rates for the same seed.
    unit_dropout = rng.exponential(1.0, n)
    if dropout_rate > 0:
        dropout = unit_dropout / dropout_rate
    else:
        dropout = np.full(n, np.inf)

    time = np.minimum(np.minimum(event, dropout), admin)
    event_type = np.where(
        event == time, 0, np.where(dropout == time, 1, 2)
    )

    return {
        "randomization_dates": rando,
        "event_times": time,
        "event_types": event_type,
        "cutoff_date": cutoff,
    }


@pytest.fixture
def simulate_trial():
    """Factory fixture: simulate_trial(rng, **kwargs) -> dict of inputs."""
    return _simulate_trial


@pytest.fixture
def trial(simulate_trial):
    """A 400-subject trial with some loss to follow-up."""
    return simulate_trial(np.random.default_rng(2021))
