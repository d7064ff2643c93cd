"""Output type for the gesture analyzer."""

from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass
class GestureOutput:
    """Output from GestureAnalyzer.

    Attributes:
        gestures: Stable gesture value per tracked hand.
        hand_landmarks: Per-hand landmarks and gesture details.
    """
    gestures: List[str] = field(default_factory=list)
    hand_landmarks: List[Dict[str, Any]] = field(default_factory=list)


__all__ = ["GestureOutput"]
