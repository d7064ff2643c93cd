"""Testing utilities: synthetic hands, fake frames and observation checks.

Nothing here needs MediaPipe or a camera.

Example:
    >>> from gesturelab.testing import FakeFrame, MockHandBackend, make_hand_landmarks
    >>> hand = make_hand_landmarks(index=True, middle=True)      # peace
    >>> backend = MockHandBackend([HandLandmarks(hand, "Right", 0.9)])
    >>> obs = GestureAnalyzer(hand_backend=backend).process(FakeFrame.create())
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from gesturelab.backends.base import HandLandmarks
from gesturelab.fingers import FINGER_JOINTS
from gesturelab.types import HandLandmarkIndex, NUM_HAND_LANDMARKS

# Column x per finger on a synthetic upright right hand
_FINGER_X = {"index": 0.40, "middle": 0.50, "ring": 0.60, "pinky": 0.70}


def make_hand_landmarks(
    thumb: bool = False,
    index: bool = False,
    middle: bool = False,
    ring: bool = False,
    pinky: bool = False,
) -> np.ndarray:
    """Build an upright hand whose fingers pass/fail the extension tests.

    Extended fingers go straight up (tip.y < pip.y < mcp.y); curled ones
    fold back down below the PIP. An extended thumb swings out sideways,
    a tucked one stays beside the index knuckle.

    Returns:
        Array of shape (21, 3), normalized coordinates.
    """
    lms = np.full((NUM_HAND_LANDMARKS, 3), 0.5, dtype=np.float32)
    lms[:, 2] = 0.0
    lms[HandLandmarkIndex.WRIST] = [0.5, 0.9, 0.0]

    lms[HandLandmarkIndex.THUMB_CMC] = [0.45, 0.80, 0.0]
    if thumb:
        lms[HandLandmarkIndex.THUMB_MCP] = [0.35, 0.70, 0.0]
        lms[HandLandmarkIndex.THUMB_IP] = [0.25, 0.60, 0.0]
        lms[HandLandmarkIndex.THUMB_TIP] = [0.15, 0.50, 0.0]
    else:
        lms[HandLandmarkIndex.THUMB_MCP] = [0.42, 0.75, 0.0]
        lms[HandLandmarkIndex.THUMB_IP] = [0.40, 0.72, 0.0]
        lms[HandLandmarkIndex.THUMB_TIP] = [0.38, 0.70, 0.0]

    extended = {"index": index, "middle": middle, "ring": ring, "pinky": pinky}
    for name, (tip, pip, mcp) in FINGER_JOINTS.items():
        x = _FINGER_X[name]
        dip = tip - 1
        lms[mcp] = [x, 0.60, 0.0]
        if extended[name]:
            lms[pip] = [x, 0.40, 0.0]
            lms[dip] = [x, 0.30, 0.0]
            lms[tip] = [x, 0.20, 0.0]
        else:
            lms[pip] = [x, 0.55, 0.0]
            lms[dip] = [x, 0.60, 0.0]
            lms[tip] = [x, 0.65, 0.0]
    return lms


class MockHandBackend:
    """Hand backend returning scripted detections.

    Args:
        hands: Detections returned on every call.
        script: One detection list per call, overriding ``hands``; once
            exhausted, no hands are returned.
    """

    def __init__(
        self,
        hands: Optional[List[HandLandmarks]] = None,
        script: Optional[Sequence[List[HandLandmarks]]] = None,
    ):
        self._hands = hands or []
        self._script = list(script) if script is not None else None
        self._calls = 0
        self.initialized = False
        self.device: Optional[str] = None

    def initialize(self, device: str = "cpu") -> None:
        self.initialized = True
        self.device = device

    def detect(self, image: np.ndarray) -> List[HandLandmarks]:
        if self._script is None:
            return list(self._hands)
        hands = self._script[self._calls] if self._calls < len(self._script) else []
        self._calls += 1
        return list(hands)

    def cleanup(self) -> None:
        self.initialized = False


@dataclass
class FakeFrame:
    """Lightweight stand-in for a decoded frame.

    Example:
        >>> frame = FakeFrame.create()                  # 640x480 black
        >>> frames = FakeFrame.sequence(3)              # 3 sequential frames
    """

    data: np.ndarray
    frame_id: int
    t_src_ns: int

    @classmethod
    def create(
        cls,
        width: int = 640,
        height: int = 480,
        frame_id: int = 0,
        t_src_ns: int = 0,
    ) -> "FakeFrame":
        data = np.zeros((height, width, 3), dtype=np.uint8)
        return cls(data=data, frame_id=frame_id, t_src_ns=t_src_ns)

    @classmethod
    def sequence(
        cls,
        count: int,
        width: int = 640,
        height: int = 480,
        interval_ns: int = 33_333_333,
    ) -> List["FakeFrame"]:
        """Frames with incrementing IDs, ~30fps timestamps by default."""
        return [
            cls.create(width, height, frame_id=i, t_src_ns=i * interval_ns)
            for i in range(count)
        ]


def assert_valid_observation(obs: Any, *, module: Optional[Any] = None) -> None:
    """Assert that an Observation is structurally valid.

    Raises:
        AssertionError: If any check fails.
    """
    from gesturelab.observation import Observation

    assert isinstance(obs, Observation), (
        f"Expected Observation, got {type(obs).__name__}"
    )
    assert isinstance(obs.source, str) and obs.source, (
        "Observation.source must be a non-empty string"
    )
    assert isinstance(obs.frame_id, int), "Observation.frame_id must be int"
    assert isinstance(obs.t_ns, int), "Observation.t_ns must be int"
    assert isinstance(obs.signals, dict), "Observation.signals must be dict"
    assert isinstance(obs.metadata, dict), "Observation.metadata must be dict"

    if module is not None:
        assert obs.source == module.name, (
            f"Observation.source '{obs.source}' != module.name '{module.name}'"
        )

    if obs.timing is not None:
        for key, val in obs.timing.items():
            assert isinstance(key, str), f"timing key must be str, got {type(key).__name__}"
            assert isinstance(val, (int, float)), f"timing['{key}'] must be numeric"


__all__ = [
    "make_hand_landmarks",
    "MockHandBackend",
    "FakeFrame",
    "assert_valid_observation",
]
