"""Visualization: mark rendering and live display.

Example:
    >>> from gesturelab.viz import FrameDisplay, render_marks
    >>> display = FrameDisplay(annotator=analyzer)
"""

from gesturelab.viz.renderer import render_marks
from gesturelab.viz.display import FrameDisplay

__all__ = ["render_marks", "FrameDisplay"]
