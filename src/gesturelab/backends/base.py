"""Backend protocol definitions for hand landmark detection."""

from dataclasses import dataclass
from typing import Protocol, List
import numpy as np


@dataclass
class HandLandmarks:
    """One detected hand.

    Attributes:
        landmarks: Array of shape (21, 3) with normalized (x, y, z).
        handedness: "Left" or "Right".
        confidence: Detection confidence [0, 1].
    """

    landmarks: np.ndarray
    handedness: str = "Right"
    confidence: float = 1.0


class HandLandmarkBackend(Protocol):
    """Protocol for hand landmark detection backends.

    The gesture logic only consumes the landmarks; any detector that
    yields 21 points per hand plus a handedness label fits.
    """

    def initialize(self, device: str = "cpu") -> None:
        """Load models."""
        ...

    def detect(self, image: np.ndarray) -> List[HandLandmarks]:
        """Detect hands in a BGR image."""
        ...

    def cleanup(self) -> None:
        """Release resources."""
        ...


__all__ = ["HandLandmarks", "HandLandmarkBackend"]
