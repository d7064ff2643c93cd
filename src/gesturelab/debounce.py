"""Run-length debouncing of per-frame gesture classifications."""

from __future__ import annotations

from gesturelab.types import GestureType

DEFAULT_STABILITY_THRESHOLD = 3


class GestureDebouncer:
    """Reports a gesture only after it repeats for N consecutive frames.

    A single differing frame restarts the run. Frames must be fed in
    temporal order; one instance per tracking stream.

    Args:
        stability_threshold: Consecutive identical classifications needed
            before the gesture is reported instead of ``NONE``.

    Example:
        >>> debouncer = GestureDebouncer(stability_threshold=3)
        >>> [debouncer.feed(GestureType.FIST) for _ in range(3)]
        [<GestureType.NONE: 'none'>, <GestureType.NONE: 'none'>, <GestureType.FIST: 'fist'>]
    """

    def __init__(self, stability_threshold: int = DEFAULT_STABILITY_THRESHOLD) -> None:
        if stability_threshold < 1:
            raise ValueError(
                f"stability_threshold must be >= 1, got {stability_threshold}"
            )
        self._threshold = stability_threshold
        self._last_gesture = GestureType.NONE
        self._count = 0

    @property
    def stability_threshold(self) -> int:
        return self._threshold

    @property
    def last_gesture(self) -> GestureType:
        """Most recent raw gesture."""
        return self._last_gesture

    @property
    def consecutive_count(self) -> int:
        """Length of the current run of ``last_gesture`` (current frame included)."""
        return self._count

    @property
    def is_stable(self) -> bool:
        return self._count >= self._threshold

    def feed(self, gesture: GestureType) -> GestureType:
        """Add one frame's raw gesture and return the stable gesture."""
        if gesture == self._last_gesture:
            self._count += 1
        else:
            self._last_gesture = gesture
            self._count = 1

        return self._last_gesture if self.is_stable else GestureType.NONE

    __call__ = feed

    def reset(self) -> None:
        """Forget the current run."""
        self._last_gesture = GestureType.NONE
        self._count = 0

    def __repr__(self) -> str:
        return (
            f"GestureDebouncer(last={self._last_gesture.value}, "
            f"count={self._count}, threshold={self._threshold})"
        )


def create_gesture_debouncer(
    stability_threshold: int = DEFAULT_STABILITY_THRESHOLD,
) -> GestureDebouncer:
    return GestureDebouncer(stability_threshold)


__all__ = [
    "DEFAULT_STABILITY_THRESHOLD",
    "GestureDebouncer",
    "create_gesture_debouncer",
]
