"""Mark renderer: draws Mark objects onto frames using cv2.

Example:
    >>> from gesturelab.viz import render_marks
    >>> output = render_marks(frame, analyzer.annotate(obs))
"""

from __future__ import annotations

import cv2
import numpy as np

from gesturelab.marks import BarMark, KeypointsMark, LabelMark, Mark

FONT = cv2.FONT_HERSHEY_SIMPLEX


def render_marks(frame: np.ndarray, marks: list[Mark]) -> np.ndarray:
    """Render marks onto a copy of ``frame``.

    Returns the input unchanged (same object) when there is nothing to draw.
    """
    if not marks:
        return frame

    output = frame.copy()
    h, w = output.shape[:2]

    for mark in marks:
        if isinstance(mark, KeypointsMark):
            _render_keypoints(output, mark, w, h)
        elif isinstance(mark, BarMark):
            _render_bar(output, mark, w, h)
        elif isinstance(mark, LabelMark):
            _render_label(output, mark, w, h)

    return output


def _to_pixel(x: float, y: float, normalized: bool, w: int, h: int) -> tuple[int, int]:
    if normalized:
        return int(x * w), int(y * h)
    return int(x), int(y)


def _render_keypoints(image: np.ndarray, mark: KeypointsMark, w: int, h: int) -> None:
    points = mark.points
    for idx1, idx2 in mark.connections:
        if idx1 >= len(points) or idx2 >= len(points):
            continue
        p1, p2 = points[idx1], points[idx2]
        if p1[2] < mark.min_confidence or p2[2] < mark.min_confidence:
            continue
        cv2.line(
            image,
            _to_pixel(p1[0], p1[1], mark.normalized, w, h),
            _to_pixel(p2[0], p2[1], mark.normalized, w, h),
            mark.line_color,
            2,
        )

    for p in points:
        if p[2] < mark.min_confidence:
            continue
        pt = _to_pixel(p[0], p[1], mark.normalized, w, h)
        cv2.circle(image, pt, mark.point_radius, mark.point_color, -1)


def _render_bar(image: np.ndarray, mark: BarMark, w: int, h: int) -> None:
    x = int(mark.x * w)
    y = int(mark.y * h)
    bar_w = int(mark.w * w)
    fill = min(1.0, max(0.0, mark.value))

    cv2.rectangle(image, (x, y), (x + bar_w, y + mark.height_px), (20, 20, 20), -1)
    if fill > 0:
        cv2.rectangle(
            image, (x, y), (x + int(bar_w * fill), y + mark.height_px), mark.color, -1
        )


def _render_label(image: np.ndarray, mark: LabelMark, w: int, h: int) -> None:
    x, y = _to_pixel(mark.x, mark.y, mark.normalized, w, h)

    if mark.background is not None:
        label_size = cv2.getTextSize(mark.text, FONT, mark.font_scale, 1)[0]
        cv2.rectangle(
            image,
            (x - 2, y - label_size[1] - 4),
            (x + label_size[0] + 4, y + 4),
            mark.background,
            -1,
        )

    cv2.putText(image, mark.text, (x, y), FONT, mark.font_scale, mark.color, 1)
