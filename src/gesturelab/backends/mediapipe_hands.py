"""MediaPipe Tasks hand landmark backend."""

from typing import List, Optional
from pathlib import Path
import logging
import os
import urllib.request

import numpy as np

from gesturelab.backends.base import HandLandmarks

logger = logging.getLogger(__name__)

HAND_LANDMARKER_MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)


def get_model_path(cache_dir: Optional[Path] = None) -> Path:
    """Path to the hand landmarker model, downloading it on first use."""
    if cache_dir is None:
        cache_dir = Path.home() / ".cache" / "gesturelab" / "models"
    cache_dir.mkdir(parents=True, exist_ok=True)

    model_path = cache_dir / "hand_landmarker.task"

    if not model_path.exists():
        logger.info("Downloading hand landmarker model to %s", model_path)
        # Only a complete download is moved into place
        partial_path = model_path.with_name(model_path.name + ".part")
        try:
            urllib.request.urlretrieve(HAND_LANDMARKER_MODEL_URL, partial_path)
            os.replace(partial_path, model_path)
        except OSError as e:
            partial_path.unlink(missing_ok=True)
            raise RuntimeError(
                f"Failed to download hand landmarker model: {e}\n"
                f"Download it manually from {HAND_LANDMARKER_MODEL_URL}\n"
                f"and save it to {model_path}"
            ) from e
        logger.info("Download complete")

    return model_path


class MediaPipeHandsBackend:
    """Hand landmarks via MediaPipe Tasks ``HandLandmarker``.

    With ``device="gpu"`` the GPU delegate is tried first; if it cannot
    be created the backend falls back to CPU.

    Args:
        max_num_hands: Maximum number of hands to detect.
        min_detection_confidence: Minimum hand detection score.
        min_tracking_confidence: Minimum tracking score.
        model_path: Explicit .task file (skips the download).
    """

    def __init__(
        self,
        max_num_hands: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        model_path: Optional[Path] = None,
    ):
        self._max_num_hands = max_num_hands
        self._min_detection_confidence = min_detection_confidence
        self._min_tracking_confidence = min_tracking_confidence
        self._model_path = model_path
        self._landmarker: Optional[object] = None
        self._initialized = False

    def initialize(self, device: str = "cpu") -> None:
        if self._initialized:
            return

        try:
            from mediapipe.tasks import python
            from mediapipe.tasks.python import vision
        except ImportError as e:
            raise ImportError(
                "MediaPipe is required for hand detection. "
                "Install it with: pip install mediapipe"
            ) from e

        model_path = self._model_path or get_model_path()

        def create(delegate):
            base_options = python.BaseOptions(
                model_asset_path=str(model_path),
                delegate=delegate,
            )
            options = vision.HandLandmarkerOptions(
                base_options=base_options,
                running_mode=vision.RunningMode.IMAGE,
                num_hands=self._max_num_hands,
                min_hand_detection_confidence=self._min_detection_confidence,
                min_tracking_confidence=self._min_tracking_confidence,
            )
            return vision.HandLandmarker.create_from_options(options)

        cpu = python.BaseOptions.Delegate.CPU
        if device.lower() == "gpu":
            try:
                self._landmarker = create(python.BaseOptions.Delegate.GPU)
            except (RuntimeError, ValueError, NotImplementedError) as e:
                logger.warning("GPU delegate unavailable (%s), falling back to CPU", e)
                self._landmarker = create(cpu)
        else:
            self._landmarker = create(cpu)

        self._initialized = True
        logger.info("MediaPipe hand landmarker initialized (device=%s)", device)

    def detect(self, image: np.ndarray) -> List[HandLandmarks]:
        """Detect hands and landmarks in a BGR image (H, W, 3)."""
        if not self._initialized or self._landmarker is None:
            raise RuntimeError("Backend not initialized. Call initialize() first.")

        import cv2
        import mediapipe as mp

        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image_rgb)
        result = self._landmarker.detect(mp_image)

        hands = []
        for idx, hand_lms in enumerate(result.hand_landmarks or []):
            handedness = "Right"
            confidence = 1.0
            if result.handedness and idx < len(result.handedness):
                categories = result.handedness[idx]
                if categories:
                    handedness = categories[0].category_name
                    confidence = categories[0].score

            landmarks = np.array(
                [[lm.x, lm.y, lm.z] for lm in hand_lms],
                dtype=np.float32,
            )
            hands.append(
                HandLandmarks(
                    landmarks=landmarks,
                    handedness=handedness,
                    confidence=confidence,
                )
            )

        return hands

    def cleanup(self) -> None:
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None
        self._initialized = False
        logger.info("MediaPipe hand landmarker closed")


__all__ = ["HAND_LANDMARKER_MODEL_URL", "get_model_path", "MediaPipeHandsBackend"]
