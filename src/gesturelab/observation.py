"""Observation dataclass for analyzer outputs."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class Observation:
    """Per-frame output of an analyzer.

    Attributes:
        source: Name of the analyzer that produced this observation.
        frame_id: Frame identifier from the source.
        t_ns: Timestamp in nanoseconds (source timeline).
        signals: Flat numeric signals (hand_count, gesture_detected, ...).
        data: Typed output (e.g. GestureOutput), or a dict once serialized.
        metadata: Additional metadata about the observation.
        timing: Optional per-step timing in milliseconds.
    """

    source: str
    frame_id: int
    t_ns: int
    signals: Dict[str, Any] = field(default_factory=dict)
    data: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    timing: Optional[Dict[str, float]] = None


__all__ = ["Observation"]
