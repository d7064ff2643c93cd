"""Shared fixtures for gesturelab tests.

All landmarks are synthetic - NO MediaPipe or camera needed.
"""

import numpy as np
import pytest

from gesturelab.testing import make_hand_landmarks
from gesturelab.types import HandLandmarkIndex


@pytest.fixture
def open_hand():
    return make_hand_landmarks(thumb=True, index=True, middle=True, ring=True, pinky=True)


@pytest.fixture
def fist():
    return make_hand_landmarks()


@pytest.fixture
def point():
    return make_hand_landmarks(index=True)


@pytest.fixture
def peace():
    return make_hand_landmarks(index=True, middle=True)


@pytest.fixture
def thumbs_up():
    """Fist with the thumb swung out, as a user would raise it."""
    lms = make_hand_landmarks()
    lms[HandLandmarkIndex.THUMB_IP] = [0.2, 0.5, 0.0]
    lms[HandLandmarkIndex.THUMB_TIP] = [0.1, 0.4, 0.0]
    return lms


@pytest.fixture
def flat_hand():
    """All 21 points at the same spot."""
    lms = np.zeros((21, 3), dtype=np.float32)
    lms[:, :2] = 0.5
    return lms
