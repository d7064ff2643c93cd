from gesturelab.backends.base import HandLandmarks, HandLandmarkBackend

__all__ = ["HandLandmarks", "HandLandmarkBackend"]
