"""Configuration for gesture tracking and the analyzer.

Example:
    >>> from gesturelab.config import GestureConfig
    >>> config = GestureConfig(stability_threshold=5, max_hands=2)
    >>> config = GestureConfig.from_yaml("gesture.yaml")
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional
import logging

from gesturelab.debounce import DEFAULT_STABILITY_THRESHOLD

logger = logging.getLogger(__name__)

_DEVICES = ("cpu", "gpu")


@dataclass
class GestureConfig:
    """Settings for a gesture detection session.

    Attributes:
        stability_threshold: Consecutive frames a gesture must repeat
            before it is reported.
        reset_on_hand_lost: Restart the debouncer when the hand disappears.
        max_hands: Maximum hands detected and tracked per frame.
        min_detection_confidence: Hand detector score threshold.
        min_tracking_confidence: Hand tracker score threshold.
        min_gesture_confidence: Stable gestures below this confidence do
            not raise the ``gesture_detected`` signal.
        device: "cpu" or "gpu" (MediaPipe delegate).
        fps: Target analysis rate; None processes every frame.

    Example:
        >>> config = GestureConfig.from_dict({"stability_threshold": 2})
        >>> config.to_dict()["stability_threshold"]
        2
    """

    stability_threshold: int = DEFAULT_STABILITY_THRESHOLD
    reset_on_hand_lost: bool = True
    max_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    min_gesture_confidence: float = 0.6
    device: str = "cpu"
    fps: Optional[float] = None

    def __post_init__(self) -> None:
        self._check_types()
        if self.stability_threshold < 1:
            raise ValueError(
                f"stability_threshold must be >= 1, got {self.stability_threshold}"
            )
        if self.max_hands < 1:
            raise ValueError(f"max_hands must be >= 1, got {self.max_hands}")
        for name in (
            "min_detection_confidence",
            "min_tracking_confidence",
            "min_gesture_confidence",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        self.device = self.device.lower()
        if self.device not in _DEVICES:
            raise ValueError(f"device must be one of {_DEVICES}, got {self.device!r}")
        if self.fps is not None and self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")

    def _check_types(self) -> None:
        # bool is an int subclass; reject it for numeric fields
        def is_number(value: Any) -> bool:
            return isinstance(value, (int, float)) and not isinstance(value, bool)

        for name in ("stability_threshold", "max_hands"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in (
            "min_detection_confidence",
            "min_tracking_confidence",
            "min_gesture_confidence",
        ):
            if not is_number(getattr(self, name)):
                raise ValueError(f"{name} must be a number, got {getattr(self, name)!r}")
        if not isinstance(self.reset_on_hand_lost, bool):
            raise ValueError(
                f"reset_on_hand_lost must be true or false, got {self.reset_on_hand_lost!r}"
            )
        if not isinstance(self.device, str):
            raise ValueError(f"device must be a string, got {self.device!r}")
        if self.fps is not None and not is_number(self.fps):
            raise ValueError(f"fps must be a number, got {self.fps!r}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GestureConfig":
        """Create a config from a dictionary (e.g. loaded from YAML).

        Unknown keys are ignored with a warning.
        """
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "GestureConfig":
        """Load a config from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not a mapping or values are invalid.
        """
        import yaml

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"{yaml_path}: expected a mapping at top level")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["GestureConfig"]
