"""Tests for the processing step registry."""

import pytest

from gesturelab.steps import ProcessingStep, get_processing_steps, processing_step


class _TwoSteps:
    def __init__(self):
        self._step_timings = None

    @processing_step("second", "Runs after first", depends_on=["first"])
    def _second(self, x):
        return x * 2

    @processing_step("first", backend="numpy")
    def _first(self, x):
        """Add one."""
        return x + 1


class TestProcessingStep:
    def test_str(self):
        step = ProcessingStep(name="a", description="does a", backend="cv2")
        assert str(step) == "a: does a (cv2)"
        assert str(ProcessingStep(name="b", description="does b")) == "b: does b"


class TestProcessingStepDecorator:
    def test_step_info_attached(self):
        info = _TwoSteps._first._step_info
        assert info.name == "first"
        assert info.description == "Add one."
        assert info.backend == "numpy"
        assert info.method_name == "_first"

    def test_no_timing_without_dict(self):
        obj = _TwoSteps()
        assert obj._first(1) == 2
        assert obj._step_timings is None

    def test_timing_recorded(self):
        obj = _TwoSteps()
        obj._step_timings = {}
        obj._second(obj._first(1))
        assert set(obj._step_timings) == {"first", "second"}
        assert all(v >= 0 for v in obj._step_timings.values())


class TestGetProcessingSteps:
    def test_dependencies_first(self):
        assert [s.name for s in get_processing_steps(_TwoSteps)] == ["first", "second"]

    def test_instance_and_class_agree(self):
        assert get_processing_steps(_TwoSteps()) == get_processing_steps(_TwoSteps)

    def test_cycle_raises(self):
        class Cyclic:
            @processing_step("a", depends_on=["b"])
            def _a(self):
                pass

            @processing_step("b", depends_on=["a"])
            def _b(self):
                pass

        with pytest.raises(ValueError, match="Circular"):
            get_processing_steps(Cyclic)
