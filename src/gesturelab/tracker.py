"""Per-stream gesture state: classification plus debouncing across frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from gesturelab.backends.base import HandLandmarks
from gesturelab.classifier import classify_gesture
from gesturelab.debounce import DEFAULT_STABILITY_THRESHOLD, GestureDebouncer
from gesturelab.types import GestureType, as_landmark_array


@dataclass(frozen=True)
class GestureState:
    """Gesture state after the latest frame.

    ``gesture == NONE`` alone is ambiguous; the other fields tell the
    cases apart:

    - no hand in frame: ``has_hand`` is False
    - hand shape matched no rule: ``raw_gesture`` is NONE
    - gesture not stable yet: ``raw_gesture`` is set, ``gesture`` is NONE

    Attributes:
        gesture: Debounced gesture.
        confidence: Raw confidence when ``gesture`` is set, else 0.0.
        hand: Landmarks and handedness of the tracked hand, if any.
        raw_gesture: This frame's classification before debouncing.
        raw_confidence: This frame's classification confidence.
    """

    gesture: GestureType = GestureType.NONE
    confidence: float = 0.0
    hand: Optional[HandLandmarks] = None
    raw_gesture: GestureType = GestureType.NONE
    raw_confidence: float = 0.0

    @property
    def has_hand(self) -> bool:
        return self.hand is not None

    @property
    def is_pending(self) -> bool:
        """A gesture is seen but has not been confirmed yet."""
        return self.raw_gesture != GestureType.NONE and self.gesture == GestureType.NONE


class GestureTracker:
    """Tracks one hand stream: classify each frame, debounce, keep state.

    Args:
        stability_threshold: Frames a gesture must repeat before it is reported.
        reset_on_hand_lost: Restart the debouncer when a frame has no hand.

    Example:
        >>> tracker = GestureTracker()
        >>> for landmarks in frames:
        ...     state = tracker.update(landmarks, "Right")
        ...     print(state.gesture.value, state.confidence)
    """

    def __init__(
        self,
        stability_threshold: int = DEFAULT_STABILITY_THRESHOLD,
        reset_on_hand_lost: bool = True,
    ):
        self._debouncer = GestureDebouncer(stability_threshold)
        self._reset_on_hand_lost = reset_on_hand_lost
        self._state = GestureState()

    @property
    def debouncer(self) -> GestureDebouncer:
        return self._debouncer

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def current_gesture(self) -> GestureType:
        return self._state.gesture

    @property
    def confidence(self) -> float:
        return self._state.confidence

    def update(
        self,
        landmarks: Optional[Any],
        handedness: str = "Right",
        detection_confidence: float = 1.0,
    ) -> GestureState:
        """Feed one frame.

        Args:
            landmarks: 21 hand landmarks, or None / empty when no hand is seen.
            handedness: "Left" or "Right".
            detection_confidence: Detector score, kept on ``state.hand``.

        Returns:
            The new state.
        """
        if landmarks is None or len(landmarks) == 0:
            if self._reset_on_hand_lost:
                self._debouncer.reset()
            self._state = GestureState()
            return self._state

        lms = as_landmark_array(landmarks)
        raw_gesture, raw_confidence = classify_gesture(lms)
        stable = self._debouncer.feed(raw_gesture)

        self._state = GestureState(
            gesture=stable,
            confidence=0.0 if stable == GestureType.NONE else raw_confidence,
            hand=HandLandmarks(
                landmarks=lms,
                handedness=handedness,
                confidence=detection_confidence,
            ),
            raw_gesture=raw_gesture,
            raw_confidence=raw_confidence,
        )
        return self._state

    def reset(self) -> None:
        """Start over: clear the debouncer run and the current state."""
        self._debouncer.reset()
        self._state = GestureState()


__all__ = ["GestureState", "GestureTracker"]
