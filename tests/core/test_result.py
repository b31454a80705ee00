"""
Tests for the Result[P] envelope and the Timer.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default factory for warnings
    - has_warning() method
    - Timer sections accumulate and require start/stop
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyfollowup.core.compute.timing import Timer, timed
from pyfollowup.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResult:

    def test_fields(self):
        r = Result(params=FakeParams(1.0), info={"method": "x"},
                   timing=None, backend_name="cpu_test")
        assert r.params.value == 1.0
        assert r.info["method"] == "x"
        assert r.warnings == ()

    def test_frozen(self):
        r = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            r.backend_name = "gpu"

    def test_has_warning(self):
        r = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu",
                   warnings=("3 of 100 replicates undefined",))
        assert r.has_warning("replicates undefined")
        assert not r.has_warning("converge")


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section("fit"):
            pass
        with timer.section("fit"):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {"total_seconds", "fit"}
        assert result["total_seconds"] >= 0.0

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_timed_context(self):
        with timed() as timer:
            sum(range(10))
        assert "total_seconds" in timer.result()
