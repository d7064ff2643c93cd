"""Tests for GestureTracker and GestureState."""

import pytest

from gesturelab.tracker import GestureState, GestureTracker
from gesturelab.testing import make_hand_landmarks
from gesturelab.types import GestureType


class TestGestureState:
    def test_initial(self):
        state = GestureState()
        assert state.gesture is GestureType.NONE
        assert state.confidence == 0.0
        assert state.has_hand is False
        assert state.is_pending is False


class TestGestureTracker:
    def test_initial_state(self):
        tracker = GestureTracker()
        assert tracker.current_gesture is GestureType.NONE
        assert tracker.confidence == 0.0
        assert tracker.state.hand is None

    def test_confirms_after_threshold(self, open_hand):
        tracker = GestureTracker(stability_threshold=3)
        states = [tracker.update(open_hand, "Right") for _ in range(3)]

        assert [s.gesture for s in states] == [
            GestureType.NONE,
            GestureType.NONE,
            GestureType.OPEN_HAND,
        ]
        assert [s.confidence for s in states] == [0.0, 0.0, 0.9]
        assert all(s.raw_gesture is GestureType.OPEN_HAND for s in states)

    def test_pending_until_stable(self, fist):
        tracker = GestureTracker(stability_threshold=2)
        state = tracker.update(fist)
        assert state.is_pending is True
        assert state.has_hand is True
        state = tracker.update(fist)
        assert state.is_pending is False
        assert state.gesture is GestureType.FIST

    def test_ambiguous_shape(self):
        tracker = GestureTracker(stability_threshold=1)
        state = tracker.update(make_hand_landmarks(ring=True))
        assert state.has_hand is True
        assert state.raw_gesture is GestureType.NONE
        assert state.raw_confidence == 0.5
        assert state.gesture is GestureType.NONE
        assert state.confidence == 0.0

    def test_keeps_hand_info(self, peace):
        tracker = GestureTracker()
        state = tracker.update(peace, "Left", detection_confidence=0.8)
        assert state.hand.handedness == "Left"
        assert state.hand.confidence == 0.8
        assert state.hand.landmarks.shape == (21, 3)

    @pytest.mark.parametrize("missing", [None, []])
    def test_no_hand_clears_state(self, open_hand, missing):
        tracker = GestureTracker(stability_threshold=1)
        tracker.update(open_hand)
        state = tracker.update(missing)
        assert state.gesture is GestureType.NONE
        assert state.confidence == 0.0
        assert state.has_hand is False

    def test_hand_lost_resets_run(self, open_hand):
        tracker = GestureTracker(stability_threshold=3)
        tracker.update(open_hand)
        tracker.update(open_hand)
        tracker.update(None)
        assert tracker.debouncer.consecutive_count == 0
        assert tracker.update(open_hand).gesture is GestureType.NONE

    def test_hand_lost_keeps_run_when_disabled(self, open_hand):
        tracker = GestureTracker(stability_threshold=3, reset_on_hand_lost=False)
        tracker.update(open_hand)
        tracker.update(open_hand)
        tracker.update(None)
        assert tracker.update(open_hand).gesture is GestureType.OPEN_HAND

    def test_reset(self, fist):
        tracker = GestureTracker(stability_threshold=1)
        tracker.update(fist)
        tracker.reset()
        assert tracker.state == GestureState()
        assert tracker.debouncer.last_gesture is GestureType.NONE

    def test_accepts_nested_lists(self, point):
        tracker = GestureTracker(stability_threshold=1)
        assert tracker.update(point.tolist()).gesture is GestureType.POINT
