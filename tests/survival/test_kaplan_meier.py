"""
Tests for kaplan_meier() and km_confint().

The curve matches R survival::survfit(Surv(time, event) ~ 1). The fixed-time
interval matches survfit(..., conf.lower = "peto") read at the left limit
S(t0-), i.e. the value of the curve at the last event time strictly before
t0.

R reference code:
    library(survival)
    fit <- survfit(Surv(time, event) ~ 1)
    summary(fit)
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats

from pyfollowup.core.exceptions import (
    DimensionError,
    UndefinedEstimateWarning,
    ValidationError,
)
from pyfollowup.survival import (
    CIStatus,
    KMConfintSolution,
    KMSolution,
    kaplan_meier,
    km_confint,
)


# ── Fixtures ─────────────────────────────────────────────────────────

# Classic textbook: 6 subjects, 2 censored
#   time <- c(1, 2, 3, 4, 5, 6)
#   event <- c(1, 0, 1, 0, 1, 1)
BASIC_TIME = np.array([1, 2, 3, 4, 5, 6], dtype=np.float64)
BASIC_EVENT = np.array([1, 0, 1, 0, 1, 1], dtype=np.float64)

# Two deaths tied at 10, one subject censored at 20
#   S(5) = 4/5, S(10) = 4/5 * 2/4 = 0.4, S(15) = 0.4 * 1/2 = 0.2
TIED_TIME = np.array([5, 10, 10, 15, 20], dtype=np.float64)
TIED_EVENT = np.array([1, 1, 1, 1, 0], dtype=np.float64)


def _logit(p):
    return np.log(p / (1.0 - p))


# ═══════════════════════════════════════════════════════════════════════
# Curve
# ═══════════════════════════════════════════════════════════════════════


class TestKaplanMeierCurve:
    """Product-limit estimate at distinct event times."""

    def test_basic_survival_curve(self):
        """
        R:
            summary(survfit(Surv(time, event) ~ 1))
            # time n.risk n.event survival std.err
            #    1      6       1    0.833   0.152
            #    3      4       1    0.625   0.196
            #    5      2       1    0.312   0.226
            #    6      1       1    0.000   NaN
        """
        result = kaplan_meier(BASIC_TIME, BASIC_EVENT)

        assert isinstance(result, KMSolution)
        assert result.n_observations == 6
        assert result.n_events_total == 4
        assert_allclose(result.time, [1, 3, 5, 6])
        assert_allclose(result.n_risk, [6, 4, 2, 1])
        assert_allclose(result.n_censored, [0, 1, 1, 0])
        assert_allclose(result.survival, [5/6, 5/8, 5/16, 0.0], rtol=1e-10)

    def test_greenwood_se(self):
        result = kaplan_meier(BASIC_TIME, BASIC_EVENT)
        # S(1) * sqrt(1 / (6 * 5))
        assert result.se[0] == pytest.approx(5/6 * np.sqrt(1/30), rel=1e-10)
        # S(3) * sqrt(1/30 + 1/(4 * 3))
        assert result.se[1] == pytest.approx(5/8 * np.sqrt(1/30 + 1/12), rel=1e-10)

    def test_tied_events(self):
        result = kaplan_meier(TIED_TIME, TIED_EVENT)
        assert_allclose(result.time, [5, 10, 15])
        assert_allclose(result.n_events, [1, 2, 1])
        assert_allclose(result.n_risk, [5, 4, 2])
        assert_allclose(result.survival, [0.8, 0.4, 0.2], rtol=1e-12)

    def test_one_death_one_censoring_tied(self):
        """Same times with the subject at 10 censored.

        The censored subject is still at risk at 10, so only one of four
        dies there: S(10) = 4/5 * 3/4 = 0.6, S(15) = 0.6 * 1/2 = 0.3.
        """
        result = kaplan_meier(TIED_TIME, [1, 1, 0, 1, 0])
        assert_allclose(result.time, [5, 10, 15])
        assert_allclose(result.n_risk, [5, 4, 2])
        assert_allclose(result.survival, [0.8, 0.6, 0.3], rtol=1e-12)
        assert_allclose(result.evaluate([5.0, 10.0, 15.0]), [0.8, 0.6, 0.3])

    def test_censoring_tied_with_event_stays_at_risk(self):
        time = np.array([1, 2, 2, 3], dtype=np.float64)
        event = np.array([1, 1, 0, 1], dtype=np.float64)
        result = kaplan_meier(time, event)
        assert_allclose(result.n_risk, [4, 3, 1])
        assert_allclose(result.survival, [0.75, 0.5, 0.0], rtol=1e-12)

    def test_all_censored(self):
        result = kaplan_meier([1, 2, 3], [0, 0, 0])
        assert len(result.time) == 0
        assert np.isnan(result.median_survival)
        assert_allclose(result.evaluate([0.5, 10.0]), [1.0, 1.0])

    def test_boolean_event(self):
        a = kaplan_meier(BASIC_TIME, BASIC_EVENT.astype(bool))
        b = kaplan_meier(BASIC_TIME, BASIC_EVENT)
        assert_allclose(a.survival, b.survival)


class TestEvaluate:
    """Right-continuous lookup S(t)."""

    def test_step_values(self):
        result = kaplan_meier(TIED_TIME, TIED_EVENT)
        assert_allclose(
            result.evaluate([0.0, 4.99, 5.0, 9.9, 10.0, 15.0, 100.0]),
            [1.0, 1.0, 0.8, 0.8, 0.4, 0.2, 0.2],
        )

    def test_scalar(self):
        result = kaplan_meier(TIED_TIME, TIED_EVENT)
        assert float(result.evaluate(12.0)) == pytest.approx(0.4)


class TestMedian:

    def test_first_time_at_or_below_half(self):
        result = kaplan_meier(TIED_TIME, TIED_EVENT)
        assert result.median_survival == 10.0

    def test_exact_half_takes_midpoint(self):
        """
        R:
            survfit(Surv(c(1, 2, 3, 4), rep(1, 4)) ~ 1)
            # median 2.5
        """
        result = kaplan_meier([1, 2, 3, 4], [1, 1, 1, 1])
        assert result.median_survival == pytest.approx(2.5)

    def test_never_reaches_half(self):
        result = kaplan_meier([1, 2, 3, 4, 5], [1, 0, 0, 0, 0])
        assert np.isnan(result.median_survival)


class TestSubset:

    def test_subset_matches_direct_fit(self):
        mask = np.array([True, False, True, True, False, True])
        sub = kaplan_meier(BASIC_TIME, BASIC_EVENT, subset=mask)
        direct = kaplan_meier(BASIC_TIME[mask], BASIC_EVENT[mask])
        assert_allclose(sub.time, direct.time)
        assert_allclose(sub.survival, direct.survival)
        assert sub.n_observations == 4

    def test_subset_must_be_boolean(self):
        with pytest.raises(ValidationError, match="boolean"):
            kaplan_meier(BASIC_TIME, BASIC_EVENT, subset=[0, 2, 3])

    def test_subset_length(self):
        with pytest.raises(DimensionError):
            kaplan_meier(BASIC_TIME, BASIC_EVENT, subset=np.ones(3, dtype=bool))


class TestKaplanMeierSolution:

    def test_repr(self):
        r = repr(kaplan_meier(BASIC_TIME, BASIC_EVENT))
        assert "KMSolution" in r
        assert "n=6" in r

    def test_summary(self):
        s = kaplan_meier(BASIC_TIME, BASIC_EVENT).summary()
        assert "kaplan_meier" in s
        assert "n.risk" in s
        assert "median survival = 5" in s

    def test_summary_truncates_long_output(self, rng):
        time = rng.exponential(10, 100)
        result = kaplan_meier(time, np.ones(100))
        assert "more rows" in result.summary()

    def test_backend_and_timing(self):
        result = kaplan_meier(BASIC_TIME, BASIC_EVENT)
        assert result.backend_name == "cpu_km"
        assert "fit" in result.timing


class TestKaplanMeierValidation:

    def test_negative_time(self):
        with pytest.raises(ValidationError, match="non-negative"):
            kaplan_meier([1, -2, 3], [1, 0, 1])

    def test_non_binary_event(self):
        with pytest.raises(ValidationError, match="0 and 1"):
            kaplan_meier([1, 2, 3], [1, 2, 0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            kaplan_meier([1, 2, 3], [1, 0])

    def test_nan_time(self):
        with pytest.raises(ValidationError, match="NaN"):
            kaplan_meier([1, np.nan, 3], [1, 0, 1])

    def test_empty(self):
        with pytest.raises(ValidationError):
            kaplan_meier([], [])


# ═══════════════════════════════════════════════════════════════════════
# Fixed-time intervals
# ═══════════════════════════════════════════════════════════════════════


class TestKMConfint:
    """Peto-type interval at query times."""

    def test_left_limit_estimate(self):
        res = km_confint(TIED_TIME, TIED_EVENT, [7.0, 12.0, 17.0, 25.0])
        assert isinstance(res, KMConfintSolution)
        assert_allclose(res.estimate, [0.8, 0.4, 0.2, 0.2], rtol=1e-12)
        # Risk set at the last event time before t0
        assert_allclose(res.n_risk, [5, 4, 2, 2])
        assert all(s is CIStatus.OK for s in res.status)
        assert res.defined.all()

    def test_peto_formula(self):
        """The bounds are symmetric on the log-odds scale with
        half-width z / sqrt(n S (1 - S))."""
        res = km_confint(TIED_TIME, TIED_EVENT, [7.0, 12.0, 17.0])
        z = stats.norm.ppf(0.975)
        s = res.estimate
        n = res.n_risk
        half = z / np.sqrt(n * s * (1.0 - s))
        assert_allclose(_logit(s) - _logit(res.lower), half, rtol=1e-10)
        assert_allclose(_logit(res.upper) - _logit(s), half, rtol=1e-10)

    def test_closed_form_value(self):
        res = km_confint(TIED_TIME, TIED_EVENT, 12.0)
        z = stats.norm.ppf(0.975)
        s, n = 0.4, 4.0
        c = np.exp(z * np.sqrt(s**2 * (1 - s) / n) / (s**1.5 * (1 - s)))
        assert res.lower[0] == pytest.approx(s / ((1 - c) * s + c), rel=1e-12)
        assert res.upper[0] == pytest.approx(c * s / ((c - 1) * s + 1), rel=1e-12)

    def test_bounds_inside_unit_interval(self, rng):
        time = rng.exponential(10, 200)
        event = (rng.uniform(size=200) < 0.7).astype(float)
        t0 = np.linspace(0.5, 20, 40)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UndefinedEstimateWarning)
            res = km_confint(time, event, t0)
        ok = res.defined
        assert ok.sum() > 30
        assert np.all(res.lower[ok] > 0)
        assert np.all(res.lower[ok] < res.estimate[ok])
        assert np.all(res.estimate[ok] < res.upper[ok])
        assert np.all(res.upper[ok] < 1)

    def test_wider_at_higher_level(self):
        r90 = km_confint(TIED_TIME, TIED_EVENT, 12.0, conf_level=0.90)
        r99 = km_confint(TIED_TIME, TIED_EVENT, 12.0, conf_level=0.99)
        assert r99.lower[0] < r90.lower[0]
        assert r99.upper[0] > r90.upper[0]
        assert r90.conf_level == 0.90

    def test_before_first_event(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            res = km_confint(TIED_TIME, TIED_EVENT, 3.0)
        assert res.status == (CIStatus.BEFORE_FIRST_EVENT,)
        assert res.estimate[0] == 1.0
        assert np.isnan(res.lower[0])
        assert np.isnan(res.upper[0])

    def test_no_events(self):
        res = km_confint([1, 2, 3], [0, 0, 0], [0.5, 5.0])
        assert res.status == (CIStatus.BEFORE_FIRST_EVENT,) * 2
        assert_allclose(res.estimate, [1.0, 1.0])

    def test_at_event_time_is_undefined(self):
        with pytest.warns(UndefinedEstimateWarning, match="coincide"):
            res = km_confint(TIED_TIME, TIED_EVENT, [10.0, 12.0])
        assert res.status == (CIStatus.AT_EVENT_TIME, CIStatus.OK)
        assert np.isnan(res.estimate[0])
        assert np.isnan(res.lower[0])
        assert np.isnan(res.upper[0])
        # The other query is unaffected
        assert res.estimate[1] == pytest.approx(0.4)
        np.testing.assert_array_equal(res.defined, [False, True])
        assert len(res.warnings) == 1

    def test_status_members_are_enum(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UndefinedEstimateWarning)
            res = km_confint(TIED_TIME, TIED_EVENT, [3.0, 7.0, 10.0, 12.0])
        assert all(type(s) is CIStatus for s in res.status)
        assert res.status == (
            CIStatus.BEFORE_FIRST_EVENT,
            CIStatus.OK,
            CIStatus.AT_EVENT_TIME,
            CIStatus.OK,
        )
        np.testing.assert_array_equal(res.defined, [False, True, False, True])
        assert "defined=2" in repr(res)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_every_event_time_flagged(self, seed):
        rng = np.random.default_rng(seed)
        n = 60
        # Rounded times so ties between events and censoring occur
        time = np.round(rng.exponential(8.0, n), 1)
        event = (rng.uniform(size=n) < 0.7).astype(float)
        fit = kaplan_meier(time, event)
        assert len(fit.time) > 0
        with pytest.warns(UndefinedEstimateWarning, match="coincide"):
            res = km_confint(time, event, fit.time)
        assert all(s == CIStatus.AT_EVENT_TIME for s in res.status)
        assert not res.defined.any()
        assert np.all(np.isnan(res.estimate))
        assert np.all(np.isnan(res.lower))
        assert np.all(np.isnan(res.upper))

    def test_zero_survival_is_degenerate(self):
        with pytest.warns(UndefinedEstimateWarning, match="S = 0"):
            res = km_confint([1, 2], [1, 1], 3.0)
        assert res.status == (CIStatus.DEGENERATE,)
        assert res.estimate[0] == 0.0
        assert np.isnan(res.lower[0])

    def test_preserves_query_order(self):
        res = km_confint(TIED_TIME, TIED_EVENT, [17.0, 7.0, 12.0])
        assert_allclose(res.t0, [17.0, 7.0, 12.0])
        assert_allclose(res.estimate, [0.2, 0.8, 0.4])

    def test_to_array(self):
        res = km_confint(TIED_TIME, TIED_EVENT, [7.0, 12.0])
        arr = res.to_array()
        assert arr.shape == (2, 4)
        assert_allclose(arr[:, 0], [7.0, 12.0])
        assert_allclose(arr[:, 1], res.estimate)

    def test_fit_exposed(self):
        res = km_confint(TIED_TIME, TIED_EVENT, 12.0)
        assert_allclose(res.fit.survival, [0.8, 0.4, 0.2])

    def test_summary_marks_undefined(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UndefinedEstimateWarning)
            res = km_confint(TIED_TIME, TIED_EVENT, [10.0, 12.0])
        s = res.summary()
        assert "NA" in s
        assert "at_event_time" in s

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.2])
    def test_invalid_conf_level(self, level):
        with pytest.raises(ValidationError, match="conf_level"):
            km_confint(TIED_TIME, TIED_EVENT, 12.0, conf_level=level)

    def test_non_finite_query(self):
        with pytest.raises(ValidationError, match="t0"):
            km_confint(TIED_TIME, TIED_EVENT, [np.inf])
