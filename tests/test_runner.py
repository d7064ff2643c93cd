"""Tests for GestureRunner over in-memory frame sources."""

import logging

import pytest

from gesturelab.analyzer import GestureAnalyzer
from gesturelab.backends.base import HandLandmarks
from gesturelab.config import GestureConfig
from gesturelab.runner import GestureRunner, RunResult, VideoSource
from gesturelab.testing import FakeFrame, MockHandBackend


class _FpsSource:
    """Iterable frame source reporting a native frame rate."""

    def __init__(self, count, fps):
        self.fps = fps
        self._frames = FakeFrame.sequence(count)

    def __iter__(self):
        return iter(self._frames)


@pytest.fixture
def backend(fist):
    return MockHandBackend([HandLandmarks(fist, "Right", 0.9)])


@pytest.fixture
def analyzer(backend):
    return GestureAnalyzer(hand_backend=backend, config=GestureConfig(stability_threshold=2))


class TestGestureRunner:
    def test_processes_frame_list_in_order(self, analyzer):
        result = GestureRunner(analyzer).run(FakeFrame.sequence(4))
        assert isinstance(result, RunResult)
        assert result.frame_count == 4
        assert [o.frame_id for o in result.observations] == [0, 1, 2, 3]
        assert result.gestures == ["", "fist", "fist", "fist"]

    def test_initializes_and_cleans_up(self, analyzer, backend):
        GestureRunner(analyzer).run(FakeFrame.sequence(2))
        assert backend.device == "cpu"
        assert backend.initialized is False

    def test_max_frames(self, analyzer):
        result = GestureRunner(analyzer).run(FakeFrame.sequence(10), max_frames=3)
        assert result.frame_count == 3

    def test_on_observation_called_per_frame(self, analyzer):
        seen = []
        GestureRunner(analyzer, on_observation=seen.append).run(FakeFrame.sequence(3))
        assert [o.frame_id for o in seen] == [0, 1, 2]

    def test_on_frame_false_stops(self, analyzer):
        def on_frame(frame, obs):
            return frame.frame_id < 1

        result = GestureRunner(analyzer, on_frame=on_frame).run(FakeFrame.sequence(5))
        assert result.frame_count == 2

    def test_fps_skips_frames(self, analyzer):
        result = GestureRunner(analyzer).run(_FpsSource(7, fps=30.0), fps=10)
        assert [o.frame_id for o in result.observations] == [0, 3, 6]

    def test_fps_higher_than_source_keeps_all(self, analyzer):
        result = GestureRunner(analyzer).run(_FpsSource(3, fps=10.0), fps=30)
        assert result.frame_count == 3

    def test_cleanup_after_error(self, backend):
        class Boom(GestureAnalyzer):
            def process(self, frame, deps=None):
                raise ValueError("bad frame")

        analyzer = Boom(hand_backend=backend)
        with pytest.raises(ValueError):
            GestureRunner(analyzer).run(FakeFrame.sequence(2))
        assert backend.initialized is False

    def test_max_frames_zero(self, analyzer):
        result = GestureRunner(analyzer).run(FakeFrame.sequence(3), max_frames=0)
        assert result.frame_count == 0

    def test_fps_without_source_rate_keeps_all(self, analyzer, caplog):
        with caplog.at_level(logging.DEBUG, logger="gesturelab.runner"):
            result = GestureRunner(analyzer).run(FakeFrame.sequence(4), fps=10)
        assert result.frame_count == 4
        assert "no FPS" in caplog.text

    def test_missing_source_fails_before_initialize(self, analyzer, backend, tmp_path):
        with pytest.raises(FileNotFoundError):
            GestureRunner(analyzer).run(str(tmp_path / "missing.mp4"))
        assert backend.device is None

    def test_string_source_becomes_video_source(self, analyzer):
        assert isinstance(GestureRunner(analyzer)._resolve_source("clip.mp4"), VideoSource)


class TestVideoSource:
    def test_missing_file_raises(self, tmp_path):
        source = VideoSource(str(tmp_path / "missing.mp4"))
        with pytest.raises(FileNotFoundError):
            source.open()
        assert source.fps is None
