"""FrameDisplay - live cv2 window showing gesture overlays."""

from typing import Any, Optional

import cv2
import numpy as np

from gesturelab.types import GESTURE_LABELS, GestureType
from gesturelab.viz.renderer import FONT, render_marks

_ESC = 27


class FrameDisplay:
    """Live display window using cv2.imshow. ESC to quit.

    Args:
        title: Window title.
        annotator: Object with ``annotate(obs)`` (usually the analyzer).
        wait_ms: cv2.waitKey delay in milliseconds.
    """

    def __init__(self, title: str = "gesturelab", annotator: Optional[Any] = None, wait_ms: int = 1):
        self._title = title
        self._annotator = annotator
        self._wait_ms = wait_ms
        self._window_open = False

    def compose(self, frame: Any, obs: Any) -> np.ndarray:
        """Draw marks and the gesture caption; returns a new image."""
        img = frame if isinstance(frame, np.ndarray) else frame.data
        marks = self._annotator.annotate(obs) if self._annotator is not None else []
        output = render_marks(img, marks)
        if output is img:
            output = img.copy()

        gesture = GestureType(obs.metadata.get("gesture_type") or GestureType.NONE.value)
        caption = GESTURE_LABELS[gesture]
        confidence = obs.signals.get("gesture_confidence", 0.0)
        if confidence > 0:
            caption = f"{caption} ({round(confidence * 100)}%)"
        cv2.putText(output, caption, (10, 30), FONT, 0.7, (255, 255, 255), 2)
        return output

    def update(self, frame: Any, obs: Any) -> bool:
        """Show the frame. Returns False if the user pressed ESC."""
        cv2.imshow(self._title, self.compose(frame, obs))
        self._window_open = True
        key = cv2.waitKey(self._wait_ms) & 0xFF
        return key != _ESC

    def close(self) -> None:
        """Destroy the window if one was ever shown."""
        if self._window_open:
            cv2.destroyWindow(self._title)
            self._window_open = False
