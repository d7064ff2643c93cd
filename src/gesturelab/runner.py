"""GestureRunner - drives a GestureAnalyzer over a video file, camera or frame list.

Example:
    >>> from gesturelab.runner import GestureRunner
    >>> runner = GestureRunner(GestureAnalyzer())
    >>> result = runner.run(0, fps=15, max_frames=300)  # camera 0
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Union

import numpy as np

from gesturelab.observation import Observation

logger = logging.getLogger(__name__)

ObservationCallback = Callable[[Observation], None]
# Return False to stop the run
FrameCallback = Callable[[Any, Observation], Optional[bool]]


@dataclass
class Frame:
    """A decoded video frame.

    Attributes:
        data: BGR image (H, W, 3).
        frame_id: Sequential index within the source.
        t_src_ns: Source timestamp in nanoseconds.
    """

    data: np.ndarray
    frame_id: int
    t_src_ns: int


class VideoSource:
    """Reads frames from a video file or camera index with cv2.VideoCapture.

    Args:
        source: File path, or an int camera index.
    """

    def __init__(self, source: Union[str, int]):
        self._source = source
        self._cap = None

    @property
    def fps(self) -> Optional[float]:
        if self._cap is None:
            return None
        import cv2

        fps = self._cap.get(cv2.CAP_PROP_FPS)
        return fps if fps and fps > 0 else None

    def open(self) -> None:
        import cv2

        self._cap = cv2.VideoCapture(self._source)
        if not self._cap.isOpened():
            self._cap.release()
            self._cap = None
            raise FileNotFoundError(f"Cannot open video source: {self._source!r}")
        logger.info("Opened video source %r", self._source)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def __iter__(self) -> Iterator[Frame]:
        import cv2

        if self._cap is None:
            self.open()
        frame_id = 0
        try:
            while True:
                ok, image = self._cap.read()
                if not ok:
                    break
                t_ns = int(self._cap.get(cv2.CAP_PROP_POS_MSEC) * 1_000_000)
                yield Frame(data=image, frame_id=frame_id, t_src_ns=t_ns)
                frame_id += 1
        finally:
            self.close()


@dataclass
class RunResult:
    """Result of a GestureRunner.run() invocation.

    Attributes:
        observations: Observation per processed frame, in order.
        frame_count: Total frames processed.
    """

    observations: List[Observation] = field(default_factory=list)
    frame_count: int = 0

    @property
    def gestures(self) -> List[str]:
        """Detected gesture per processed frame ("" when none)."""
        return [obs.metadata.get("gesture_type", "") for obs in self.observations]


class GestureRunner:
    """Runs a gesture analyzer frame by frame.

    Frames are processed strictly in source order. FPS limiting drops
    frames but never reorders them.

    Args:
        analyzer: GestureAnalyzer (or anything with initialize/process/cleanup).
        on_observation: Callback ``(obs)`` per processed frame.
        on_frame: Callback ``(frame, obs)``; returning False stops the run.
    """

    def __init__(
        self,
        analyzer: Any,
        *,
        on_observation: Optional[ObservationCallback] = None,
        on_frame: Optional[FrameCallback] = None,
    ):
        self._analyzer = analyzer
        self._on_observation = on_observation
        self._on_frame = on_frame

    def run(
        self,
        source: Any,
        *,
        fps: Optional[float] = None,
        max_frames: Optional[int] = None,
    ) -> RunResult:
        """Run the analyzer on a source.

        Args:
            source: File path (str), camera index (int), VideoSource, or list of frames.
            fps: Target analysis FPS (None = every frame).
            max_frames: Stop after this many processed frames (0 processes none).

        Returns:
            RunResult with per-frame observations.
        """
        result = RunResult()
        frames = self._resolve_source(source)
        # Fail on a bad source before loading models
        if isinstance(frames, VideoSource):
            frames.open()

        try:
            self._analyzer.initialize()
        except Exception:
            if isinstance(frames, VideoSource):
                frames.close()
            raise

        try:
            skip_interval = None
            frame_index = 0
            for frame in frames:
                if max_frames is not None and result.frame_count >= max_frames:
                    break
                if frame_index == 0:
                    skip_interval = self._compute_skip_interval(fps, frames)
                if skip_interval and frame_index % skip_interval != 0:
                    frame_index += 1
                    continue
                frame_index += 1

                obs = self._analyzer.process(frame)
                result.observations.append(obs)
                result.frame_count += 1

                if self._on_observation:
                    self._on_observation(obs)
                if self._on_frame and self._on_frame(frame, obs) is False:
                    logger.info("Run stopped by frame callback")
                    break
        finally:
            if isinstance(frames, VideoSource):
                frames.close()
            try:
                self._analyzer.cleanup()
            except Exception:
                logger.debug("Cleanup error", exc_info=True)

        return result

    def _resolve_source(self, source: Any):
        if isinstance(source, (list, tuple)):
            return list(source)
        if isinstance(source, (str, int)):
            return VideoSource(source)
        return source

    def _compute_skip_interval(self, target_fps: Optional[float], source: Any) -> Optional[int]:
        if target_fps is None:
            return None
        source_fps = getattr(source, "fps", None)
        if not source_fps:
            logger.debug("Source reports no FPS, processing every frame")
            return None
        if source_fps > target_fps:
            return max(1, round(source_fps / target_fps))
        return None


__all__ = ["Frame", "VideoSource", "RunResult", "GestureRunner"]
