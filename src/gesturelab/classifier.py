"""Rule-based gesture classification from finger states.

Rules are evaluated top to bottom and the first match wins. Several
conditions overlap (an open hand also has "index and middle up"), so
the order is part of the contract.

Example:
    >>> result = classify_gesture(landmarks)
    >>> result.gesture, result.confidence
    (<GestureType.PEACE: 'peace'>, 0.85)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from gesturelab.fingers import count_extended_fingers, get_finger_states
from gesturelab.types import FingerState, GestureResult, GestureType

# Predicate receives the finger states and the extended-finger count
RulePredicate = Callable[[FingerState, int], bool]


@dataclass(frozen=True)
class GestureRule:
    """One row of the decision table.

    Attributes:
        name: Short identifier shown by ``gesturelab rules``.
        predicate: Match condition.
        gesture: Gesture reported on match.
        confidence: Heuristic confidence reported on match.
    """

    name: str
    predicate: RulePredicate
    gesture: GestureType
    confidence: float

    def matches(self, state: FingerState, extended_count: int) -> bool:
        return self.predicate(state, extended_count)


def _exactly(**extended: bool) -> RulePredicate:
    """Predicate matching one exact finger pattern (unnamed fingers down)."""
    pattern = FingerState(**extended).as_tuple()

    def predicate(state: FingerState, extended_count: int) -> bool:
        return state.as_tuple() == pattern

    return predicate


GESTURE_RULES: tuple[GestureRule, ...] = (
    GestureRule(
        "all_extended", lambda s, n: n == 5, GestureType.OPEN_HAND, 0.9
    ),
    GestureRule(
        "none_extended", lambda s, n: n == 0, GestureType.FIST, 0.9
    ),
    GestureRule(
        "thumb_only", _exactly(thumb=True), GestureType.THUMBS_UP, 0.85
    ),
    GestureRule(
        "index_only", _exactly(index=True), GestureType.POINT, 0.85
    ),
    GestureRule(
        "index_middle",
        _exactly(index=True, middle=True),
        GestureType.PEACE,
        0.85,
    ),
    # Users often can't fully tuck the thumb while making a peace sign
    GestureRule(
        "index_middle_thumb",
        _exactly(thumb=True, index=True, middle=True),
        GestureType.PEACE,
        0.7,
    ),
)

UNKNOWN_RESULT = GestureResult(GestureType.NONE, 0.5)


def match_rule(
    state: FingerState, rules: Sequence[GestureRule] = GESTURE_RULES
) -> Optional[GestureRule]:
    """Return the first rule matching ``state``, or None."""
    extended_count = count_extended_fingers(state)
    for rule in rules:
        if rule.matches(state, extended_count):
            return rule
    return None


def classify_fingers(
    state: FingerState, rules: Sequence[GestureRule] = GESTURE_RULES
) -> GestureResult:
    """Classify a finger-state record into a gesture and confidence."""
    rule = match_rule(state, rules)
    if rule is None:
        return UNKNOWN_RESULT
    return GestureResult(rule.gesture, rule.confidence)


def classify_gesture(landmarks: Any) -> GestureResult:
    """Classify one hand's 21 landmarks.

    Pure function of the landmarks; the input is not modified.

    Args:
        landmarks: Hand landmarks, shape (21, 3), normalized coordinates.

    Returns:
        GestureResult(gesture, confidence).
    """
    return classify_fingers(get_finger_states(landmarks))


__all__ = [
    "GestureRule",
    "GESTURE_RULES",
    "UNKNOWN_RESULT",
    "match_rule",
    "classify_fingers",
    "classify_gesture",
]
