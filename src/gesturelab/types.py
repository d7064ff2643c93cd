"""Gesture recognition domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Sequence

import numpy as np


class HandLandmarkIndex:
    """MediaPipe hand landmark indices.

    21 landmarks per hand: the wrist, then four points per finger from
    the palm outwards (thumb, index, middle, ring, pinky).

    Example:
        >>> lms = hand.landmarks
        >>> thumb_tip = lms[HandLandmarkIndex.THUMB_TIP]
        >>> index_tip = lms[HandLandmarkIndex.INDEX_FINGER_TIP]
    """

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_HAND_LANDMARKS = 21

# Skeleton edges for drawing: finger bones, then the palm line
HAND_CONNECTIONS = (
    (HandLandmarkIndex.WRIST, HandLandmarkIndex.THUMB_CMC),
    (HandLandmarkIndex.THUMB_CMC, HandLandmarkIndex.THUMB_MCP),
    (HandLandmarkIndex.THUMB_MCP, HandLandmarkIndex.THUMB_IP),
    (HandLandmarkIndex.THUMB_IP, HandLandmarkIndex.THUMB_TIP),
    (HandLandmarkIndex.WRIST, HandLandmarkIndex.INDEX_FINGER_MCP),
    (HandLandmarkIndex.INDEX_FINGER_MCP, HandLandmarkIndex.INDEX_FINGER_PIP),
    (HandLandmarkIndex.INDEX_FINGER_PIP, HandLandmarkIndex.INDEX_FINGER_DIP),
    (HandLandmarkIndex.INDEX_FINGER_DIP, HandLandmarkIndex.INDEX_FINGER_TIP),
    (HandLandmarkIndex.WRIST, HandLandmarkIndex.MIDDLE_FINGER_MCP),
    (HandLandmarkIndex.MIDDLE_FINGER_MCP, HandLandmarkIndex.MIDDLE_FINGER_PIP),
    (HandLandmarkIndex.MIDDLE_FINGER_PIP, HandLandmarkIndex.MIDDLE_FINGER_DIP),
    (HandLandmarkIndex.MIDDLE_FINGER_DIP, HandLandmarkIndex.MIDDLE_FINGER_TIP),
    (HandLandmarkIndex.WRIST, HandLandmarkIndex.RING_FINGER_MCP),
    (HandLandmarkIndex.RING_FINGER_MCP, HandLandmarkIndex.RING_FINGER_PIP),
    (HandLandmarkIndex.RING_FINGER_PIP, HandLandmarkIndex.RING_FINGER_DIP),
    (HandLandmarkIndex.RING_FINGER_DIP, HandLandmarkIndex.RING_FINGER_TIP),
    (HandLandmarkIndex.WRIST, HandLandmarkIndex.PINKY_MCP),
    (HandLandmarkIndex.PINKY_MCP, HandLandmarkIndex.PINKY_PIP),
    (HandLandmarkIndex.PINKY_PIP, HandLandmarkIndex.PINKY_DIP),
    (HandLandmarkIndex.PINKY_DIP, HandLandmarkIndex.PINKY_TIP),
    (HandLandmarkIndex.INDEX_FINGER_MCP, HandLandmarkIndex.MIDDLE_FINGER_MCP),
    (HandLandmarkIndex.MIDDLE_FINGER_MCP, HandLandmarkIndex.RING_FINGER_MCP),
    (HandLandmarkIndex.RING_FINGER_MCP, HandLandmarkIndex.PINKY_MCP),
)


class GestureType(Enum):
    """Recognized gesture types.

    ``NONE`` doubles as the initial value and as "nothing stable yet".

    Example:
        >>> gesture, confidence = classify_gesture(landmarks)
        >>> if gesture == GestureType.PEACE:
        ...     print("Peace sign detected!")
    """

    NONE = "none"
    OPEN_HAND = "open_hand"
    FIST = "fist"
    POINT = "point"
    PEACE = "peace"
    THUMBS_UP = "thumbs_up"


# Display text shown next to the detected gesture
GESTURE_LABELS = {
    GestureType.NONE: "No gesture detected",
    GestureType.OPEN_HAND: "Open Hand",
    GestureType.FIST: "Fist",
    GestureType.POINT: "Point",
    GestureType.PEACE: "Peace",
    GestureType.THUMBS_UP: "Thumbs Up",
}


@dataclass(frozen=True)
class FingerState:
    """Extended/flexed state of each finger in one frame."""

    thumb: bool = False
    index: bool = False
    middle: bool = False
    ring: bool = False
    pinky: bool = False

    def as_tuple(self) -> tuple[bool, bool, bool, bool, bool]:
        return (self.thumb, self.index, self.middle, self.ring, self.pinky)


class GestureResult(NamedTuple):
    """Per-frame classification before debouncing."""

    gesture: GestureType
    confidence: float


def as_landmark_array(landmarks: Any) -> np.ndarray:
    """Coerce a landmark list into an (N, 3) float array.

    Accepts numpy arrays, sequences of ``(x, y, z)`` triples, and
    MediaPipe landmark objects exposing ``.x``, ``.y``, ``.z``.
    Arrays are returned as-is (no copy). Length is not checked.
    """
    if isinstance(landmarks, np.ndarray):
        return landmarks
    points: Sequence[Any] = list(landmarks)
    if points and hasattr(points[0], "x"):
        return np.array(
            [[p.x, p.y, getattr(p, "z", 0.0)] for p in points],
            dtype=np.float32,
        )
    return np.asarray(points, dtype=np.float32)


__all__ = [
    "HandLandmarkIndex",
    "NUM_HAND_LANDMARKS",
    "HAND_CONNECTIONS",
    "GestureType",
    "GESTURE_LABELS",
    "FingerState",
    "GestureResult",
    "as_landmark_array",
]
