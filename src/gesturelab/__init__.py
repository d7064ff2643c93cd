"""gesturelab - rule-based hand gesture recognition with temporal debouncing.

Turns one hand's 21 landmarks into a finger-state record, a gesture
with a confidence score, and finally a stable gesture once it has held
for a few consecutive frames.

Example:
    >>> from gesturelab import classify_gesture, GestureTracker
    >>> gesture, confidence = classify_gesture(landmarks)
    >>> tracker = GestureTracker(stability_threshold=3)
    >>> state = tracker.update(landmarks, "Right")
"""

from gesturelab.types import (
    FingerState,
    GESTURE_LABELS,
    GestureResult,
    GestureType,
    HAND_CONNECTIONS,
    HandLandmarkIndex,
)
from gesturelab.fingers import (
    count_extended_fingers,
    get_finger_states,
    is_finger_extended,
    is_thumb_extended,
)
from gesturelab.classifier import (
    GESTURE_RULES,
    GestureRule,
    classify_fingers,
    classify_gesture,
    match_rule,
)
from gesturelab.debounce import GestureDebouncer, create_gesture_debouncer
from gesturelab.tracker import GestureState, GestureTracker
from gesturelab.config import GestureConfig
from gesturelab.backends.base import HandLandmarks, HandLandmarkBackend
from gesturelab.observation import Observation
from gesturelab.output import GestureOutput
from gesturelab.analyzer import GestureAnalyzer

__version__ = "0.1.0"

__all__ = [
    # Types
    "FingerState",
    "GESTURE_LABELS",
    "GestureResult",
    "GestureType",
    "HAND_CONNECTIONS",
    "HandLandmarkIndex",
    # Finger states
    "count_extended_fingers",
    "get_finger_states",
    "is_finger_extended",
    "is_thumb_extended",
    # Classification
    "GESTURE_RULES",
    "GestureRule",
    "classify_fingers",
    "classify_gesture",
    "match_rule",
    # Debouncing / tracking
    "GestureDebouncer",
    "create_gesture_debouncer",
    "GestureState",
    "GestureTracker",
    # Analyzer
    "GestureConfig",
    "HandLandmarks",
    "HandLandmarkBackend",
    "Observation",
    "GestureOutput",
    "GestureAnalyzer",
]
