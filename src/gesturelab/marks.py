"""Declarative visualization marks.

Marks describe *what* to draw; ``gesturelab.viz.render_marks`` turns
them into pixels. Frozen dataclasses, so tests can compare with ``==``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeypointsMark:
    """Keypoints with optional connection lines.

    Each point is ``(x, y, confidence)``.
    """

    points: tuple[tuple[float, float, float], ...]
    connections: tuple[tuple[int, int], ...] = ()
    normalized: bool = False
    line_color: tuple[int, int, int] = (0, 255, 0)
    point_color: tuple[int, int, int] = (0, 0, 255)
    point_radius: int = 3
    min_confidence: float = 0.3


@dataclass(frozen=True)
class BarMark:
    """Progress bar. Position is normalized [0, 1]."""

    x: float
    y: float
    w: float
    value: float  # [0, 1] fill ratio
    color: tuple[int, int, int] = (0, 255, 255)
    height_px: int = 6


@dataclass(frozen=True)
class LabelMark:
    """Text label."""

    text: str
    x: float
    y: float
    normalized: bool = True
    color: tuple[int, int, int] = (255, 255, 255)
    background: tuple[int, int, int] | None = None
    font_scale: float = 0.45


Mark = KeypointsMark | BarMark | LabelMark

__all__ = ["Mark", "KeypointsMark", "BarMark", "LabelMark"]
