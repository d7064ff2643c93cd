"""Tests for the gesture decision table."""

import itertools

import pytest

from gesturelab.classifier import (
    GESTURE_RULES,
    GestureRule,
    classify_fingers,
    classify_gesture,
    match_rule,
)
from gesturelab.testing import make_hand_landmarks
from gesturelab.types import FingerState, GestureResult, GestureType


# Every finger pattern the table recognizes, with its expected result
KNOWN_PATTERNS = {
    (True, True, True, True, True): (GestureType.OPEN_HAND, 0.9),
    (False, False, False, False, False): (GestureType.FIST, 0.9),
    (True, False, False, False, False): (GestureType.THUMBS_UP, 0.85),
    (False, True, False, False, False): (GestureType.POINT, 0.85),
    (False, True, True, False, False): (GestureType.PEACE, 0.85),
    (True, True, True, False, False): (GestureType.PEACE, 0.7),
}


class TestClassifyGesture:
    def test_open_hand(self, open_hand):
        assert classify_gesture(open_hand) == (GestureType.OPEN_HAND, 0.9)

    def test_fist(self, fist):
        assert classify_gesture(fist) == (GestureType.FIST, 0.9)

    def test_thumbs_up(self, thumbs_up):
        assert classify_gesture(thumbs_up) == (GestureType.THUMBS_UP, 0.85)

    def test_point(self, point):
        assert classify_gesture(point) == (GestureType.POINT, 0.85)

    def test_peace(self, peace):
        assert classify_gesture(peace) == (GestureType.PEACE, 0.85)

    def test_peace_with_thumb_has_lower_confidence(self):
        lms = make_hand_landmarks(thumb=True, index=True, middle=True)
        assert classify_gesture(lms) == (GestureType.PEACE, 0.7)

    def test_unmatched_shape_is_none(self):
        lms = make_hand_landmarks(index=True, pinky=True)
        assert classify_gesture(lms) == (GestureType.NONE, 0.5)

    def test_result_unpacks(self, peace):
        gesture, confidence = classify_gesture(peace)
        assert gesture is GestureType.PEACE
        assert confidence == 0.85

    def test_repeat_calls_are_identical(self, open_hand):
        before = open_hand.copy()
        first = classify_gesture(open_hand)
        second = classify_gesture(open_hand)
        assert first == second
        assert (open_hand == before).all()


class TestClassifyFingers:
    @pytest.mark.parametrize(
        "flags", list(itertools.product([False, True], repeat=5))
    )
    def test_all_32_patterns(self, flags):
        result = classify_fingers(FingerState(*flags))
        expected = KNOWN_PATTERNS.get(flags, (GestureType.NONE, 0.5))
        assert result == GestureResult(*expected)

    def test_rule_order(self):
        names = [r.name for r in GESTURE_RULES]
        assert names == [
            "all_extended",
            "none_extended",
            "thumb_only",
            "index_only",
            "index_middle",
            "index_middle_thumb",
        ]

    def test_first_match_wins(self):
        """A custom catch-all placed first shadows everything after it."""
        catch_all = GestureRule("any", lambda s, n: True, GestureType.POINT, 0.1)
        rules = (catch_all,) + GESTURE_RULES
        assert classify_fingers(FingerState(True, True, True, True, True), rules) == (
            GestureType.POINT,
            0.1,
        )

    def test_empty_rules_fall_back_to_none(self):
        assert classify_fingers(FingerState(), rules=()) == (GestureType.NONE, 0.5)


class TestMatchRule:
    def test_returns_matching_rule(self):
        rule = match_rule(FingerState(thumb=True, index=True, middle=True))
        assert rule.name == "index_middle_thumb"

    def test_returns_none_when_unmatched(self):
        assert match_rule(FingerState(ring=True)) is None

    def test_predicate_sees_extended_count(self):
        seen = []
        rule = GestureRule(
            "spy", lambda s, n: seen.append(n) or False, GestureType.FIST, 1.0
        )
        match_rule(FingerState(index=True, middle=True, ring=True), rules=(rule,))
        assert seen == [3]
