"""Finger extension state from 21 hand landmarks.

Image coordinates grow downwards, so an upright finger pointing at the
ceiling has decreasing y from knuckle to tip. The heuristics assume a
roughly upright hand facing the camera.
"""

from __future__ import annotations

from typing import Any

from gesturelab.types import FingerState, HandLandmarkIndex, as_landmark_array

# Thumb tip must sit this much farther from the index knuckle than the
# thumb base does. Both distances scale with the hand, so no absolute
# threshold is needed.
THUMB_EXTENSION_RATIO = 1.2

# (tip, pip, mcp) per non-thumb finger
FINGER_JOINTS = {
    "index": (
        HandLandmarkIndex.INDEX_FINGER_TIP,
        HandLandmarkIndex.INDEX_FINGER_PIP,
        HandLandmarkIndex.INDEX_FINGER_MCP,
    ),
    "middle": (
        HandLandmarkIndex.MIDDLE_FINGER_TIP,
        HandLandmarkIndex.MIDDLE_FINGER_PIP,
        HandLandmarkIndex.MIDDLE_FINGER_MCP,
    ),
    "ring": (
        HandLandmarkIndex.RING_FINGER_TIP,
        HandLandmarkIndex.RING_FINGER_PIP,
        HandLandmarkIndex.RING_FINGER_MCP,
    ),
    "pinky": (
        HandLandmarkIndex.PINKY_TIP,
        HandLandmarkIndex.PINKY_PIP,
        HandLandmarkIndex.PINKY_MCP,
    ),
}


def is_finger_extended(
    landmarks: Any, tip_index: int, pip_index: int, mcp_index: int
) -> bool:
    """Check whether a finger is straightened upwards.

    True iff tip.y < pip.y < mcp.y (strict).

    Args:
        landmarks: Hand landmarks, shape (21, 3).
        tip_index: Landmark index of the fingertip.
        pip_index: Landmark index of the PIP joint.
        mcp_index: Landmark index of the MCP joint.
    """
    lms = as_landmark_array(landmarks)
    tip_y = lms[tip_index][1]
    pip_y = lms[pip_index][1]
    mcp_y = lms[mcp_index][1]
    return bool(tip_y < pip_y and pip_y < mcp_y)


def is_thumb_extended(landmarks: Any) -> bool:
    """Check whether the thumb is splayed away from the palm.

    Compares horizontal distances to the index MCP: the thumb is
    extended when its tip is more than ``THUMB_EXTENSION_RATIO`` times
    as far from the index knuckle as the thumb MCP is.
    """
    lms = as_landmark_array(landmarks)
    thumb_tip = lms[HandLandmarkIndex.THUMB_TIP]
    thumb_mcp = lms[HandLandmarkIndex.THUMB_MCP]
    index_mcp = lms[HandLandmarkIndex.INDEX_FINGER_MCP]

    tip_distance = abs(thumb_tip[0] - index_mcp[0])
    base_distance = abs(thumb_mcp[0] - index_mcp[0])
    return bool(tip_distance > base_distance * THUMB_EXTENSION_RATIO)


def get_finger_states(landmarks: Any) -> FingerState:
    """Extension state of all five fingers."""
    lms = as_landmark_array(landmarks)
    return FingerState(
        thumb=is_thumb_extended(lms),
        **{
            name: is_finger_extended(lms, tip, pip, mcp)
            for name, (tip, pip, mcp) in FINGER_JOINTS.items()
        },
    )


def count_extended_fingers(state: FingerState) -> int:
    return sum(state.as_tuple())


__all__ = [
    "THUMB_EXTENSION_RATIO",
    "FINGER_JOINTS",
    "is_finger_extended",
    "is_thumb_extended",
    "get_finger_states",
    "count_extended_fingers",
]
