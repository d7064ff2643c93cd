"""Gesture analyzer: hand detection, classification and debouncing per frame."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from gesturelab.backends.base import HandLandmarkBackend, HandLandmarks
from gesturelab.config import GestureConfig
from gesturelab.marks import BarMark, KeypointsMark, LabelMark
from gesturelab.observation import Observation
from gesturelab.output import GestureOutput
from gesturelab.steps import ProcessingStep, get_processing_steps, processing_step
from gesturelab.tracker import GestureState, GestureTracker
from gesturelab.types import (
    HAND_CONNECTIONS,
    NUM_HAND_LANDMARKS,
    GestureType,
    HandLandmarkIndex,
)

logger = logging.getLogger(__name__)


class GestureAnalyzer:
    """Analyzer for hand gestures on video frames.

    Recognizes open hand, fist, point, peace and thumbs up from the
    21 landmarks a hand backend produces. Each hand label ("Left",
    "Right") has its own GestureTracker, so the debounce runs of two
    hands never mix.

    Args:
        hand_backend: Hand landmark backend (default: MediaPipeHandsBackend).
        config: Session settings (default: GestureConfig()).

    Example:
        >>> with GestureAnalyzer() as analyzer:
        ...     obs = analyzer.process(frame)
        ...     if obs.signals["gesture_detected"]:
        ...         print(obs.metadata["gesture_type"])
    """

    def __init__(
        self,
        hand_backend: Optional[HandLandmarkBackend] = None,
        config: Optional[GestureConfig] = None,
    ):
        self._config = config or GestureConfig()
        self._hand_backend = hand_backend
        self._trackers: Dict[str, GestureTracker] = {}
        self._initialized = False

        # Filled by @processing_step while process() runs
        self._step_timings: Optional[Dict[str, float]] = None

    @property
    def name(self) -> str:
        return "hand.gesture"

    @property
    def config(self) -> GestureConfig:
        return self._config

    @property
    def trackers(self) -> Dict[str, GestureTracker]:
        """Active trackers keyed by hand label."""
        return dict(self._trackers)

    @property
    def processing_steps(self) -> List[ProcessingStep]:
        return get_processing_steps(self)

    def initialize(self) -> None:
        """Create and initialize the hand backend."""
        if self._initialized:
            return

        if self._hand_backend is None:
            from gesturelab.backends.mediapipe_hands import MediaPipeHandsBackend

            self._hand_backend = MediaPipeHandsBackend(
                max_num_hands=self._config.max_hands,
                min_detection_confidence=self._config.min_detection_confidence,
                min_tracking_confidence=self._config.min_tracking_confidence,
            )

        self._hand_backend.initialize(self._config.device)
        self._initialized = True
        logger.info(
            "GestureAnalyzer initialized (stability_threshold=%d)",
            self._config.stability_threshold,
        )

    def cleanup(self) -> None:
        """Release backend resources and drop tracking state."""
        if self._hand_backend is not None:
            self._hand_backend.cleanup()
        self._trackers.clear()
        self._initialized = False
        logger.info("GestureAnalyzer cleaned up")

    def reset(self) -> None:
        """Restart every tracking stream (e.g. when the session restarts)."""
        for tracker in self._trackers.values():
            tracker.reset()
        logger.debug("GestureAnalyzer trackers reset")

    def __enter__(self) -> "GestureAnalyzer":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def _tracker_for(self, key: str) -> GestureTracker:
        tracker = self._trackers.get(key)
        if tracker is None:
            tracker = GestureTracker(
                stability_threshold=self._config.stability_threshold,
                reset_on_hand_lost=self._config.reset_on_hand_lost,
            )
            self._trackers[key] = tracker
        return tracker

    # ========== Processing Steps ==========

    @processing_step(
        name="hand_detection",
        description="Detect hands with 21 landmarks each",
        backend="MediaPipe HandLandmarker",
    )
    def _detect_hands(self, image) -> List[HandLandmarks]:
        hands = list(self._hand_backend.detect(image))
        if len(hands) > self._config.max_hands:
            hands.sort(key=lambda h: h.confidence, reverse=True)
            hands = hands[: self._config.max_hands]
        return hands

    @processing_step(
        name="gesture_tracking",
        description="Classify finger states and debounce per hand",
        backend="Rule-based classifier",
        depends_on=["hand_detection"],
    )
    def _track_gestures(self, hands: List[HandLandmarks]) -> List[GestureState]:
        states = []
        seen = set()
        for i, hand in enumerate(hands):
            key = hand.handedness if hand.handedness not in seen else f"{hand.handedness}#{i}"
            seen.add(key)
            states.append(
                self._tracker_for(key).update(
                    hand.landmarks, hand.handedness, hand.confidence
                )
            )

        for key, tracker in self._trackers.items():
            if key not in seen and tracker.state.has_hand:
                tracker.update(None)
        return states

    @processing_step(
        name="aggregation",
        description="Aggregate per-hand gestures into frame signals",
        depends_on=["gesture_tracking"],
    )
    def _aggregate(self, states: List[GestureState], image_size: tuple) -> Dict[str, Any]:
        best = max(states, key=lambda s: s.confidence, default=GestureState())
        gesture_detected = (
            best.gesture != GestureType.NONE
            and best.confidence >= self._config.min_gesture_confidence
        )

        signals = {
            "hand_count": float(len(states)),
            "gesture_detected": 1.0 if gesture_detected else 0.0,
            "gesture_confidence": best.confidence if gesture_detected else 0.0,
        }
        for gesture_type in GestureType:
            if gesture_type != GestureType.NONE:
                signals[f"gesture_{gesture_type.value}"] = (
                    1.0 if gesture_detected and best.gesture == gesture_type else 0.0
                )

        hand_data = [
            {
                "handedness": s.hand.handedness,
                "landmarks": s.hand.landmarks.tolist(),
                "confidence": float(s.hand.confidence),
                "gesture": s.gesture.value,
                "gesture_confidence": s.confidence,
                "raw_gesture": s.raw_gesture.value,
                "raw_confidence": s.raw_confidence,
                "image_size": image_size,
            }
            for s in states
        ]

        return {
            "signals": signals,
            "hand_landmarks": hand_data,
            "gesture_type": best.gesture.value if gesture_detected else "",
            "all_gestures": [
                {
                    "handedness": d["handedness"],
                    "gesture": d["gesture"],
                    "confidence": d["gesture_confidence"],
                }
                for d in hand_data
            ],
        }

    # ========== Main process method ==========

    def process(self, frame, deps=None) -> Observation:
        """Analyze one frame.

        Frames must arrive in temporal order; the debouncers count
        consecutive frames.

        Args:
            frame: Object with ``data`` (BGR ndarray), ``frame_id`` and ``t_src_ns``.
            deps: Unused.

        Returns:
            Observation with gesture signals.

        Raises:
            RuntimeError: If called before initialize().
        """
        if not self._initialized or self._hand_backend is None:
            raise RuntimeError("Analyzer not initialized. Call initialize() first.")

        image = frame.data
        h, w = image.shape[:2]

        self._step_timings = {}
        try:
            hands = self._detect_hands(image)
            states = self._track_gestures(hands)
            result = self._aggregate(states, (w, h))
            timing = dict(self._step_timings)
        finally:
            self._step_timings = None

        gestures_recognized = sum(
            1 for g in result["all_gestures"] if g["gesture"] != GestureType.NONE.value
        )
        if result["gesture_type"]:
            logger.debug("frame %s: %s", frame.frame_id, result["gesture_type"])

        return Observation(
            source=self.name,
            frame_id=frame.frame_id,
            t_ns=frame.t_src_ns,
            signals=result["signals"],
            data=GestureOutput(
                gestures=[g["gesture"] for g in result["all_gestures"]],
                hand_landmarks=result["hand_landmarks"],
            ),
            metadata={
                "gesture_type": result["gesture_type"],
                "hands_detected": len(hands),
                "all_gestures": result["all_gestures"],
                "_metrics": {
                    "hands_detected": len(hands),
                    "gestures_recognized": gestures_recognized,
                },
            },
            timing=timing,
        )

    def annotate(self, obs: Optional[Observation]) -> list:
        """Keypoints for every hand, plus label and confidence bar when a gesture is stable."""
        if obs is None or obs.data is None:
            return []

        if hasattr(obs.data, "hand_landmarks"):
            hand_landmarks = obs.data.hand_landmarks
        elif isinstance(obs.data, dict) and "hand_landmarks" in obs.data:
            hand_landmarks = obs.data["hand_landmarks"]
        else:
            return []

        marks = []
        for hand in hand_landmarks:
            landmarks = hand.get("landmarks", [])
            if len(landmarks) < NUM_HAND_LANDMARKS:
                continue
            hand_conf = float(hand.get("confidence", 1.0))
            marks.append(KeypointsMark(
                points=tuple((float(p[0]), float(p[1]), hand_conf) for p in landmarks),
                connections=HAND_CONNECTIONS,
                normalized=True,
                point_radius=4,
                min_confidence=0.0,
            ))

            gesture = hand.get("gesture", GestureType.NONE.value)
            if not gesture or gesture == GestureType.NONE.value:
                continue
            confidence = float(hand.get("gesture_confidence", 0.0))
            wrist = landmarks[HandLandmarkIndex.WRIST]
            handedness = hand.get("handedness", "")
            prefix = handedness[0] if handedness else "?"
            marks.append(LabelMark(
                text=f"{prefix}:{gesture} {round(confidence * 100)}%",
                x=wrist[0], y=wrist[1] + 0.03,
                normalized=True,
                color=(0, 255, 0),
                background=(40, 40, 40),
            ))
            marks.append(BarMark(
                x=wrist[0], y=wrist[1] + 0.045,
                w=0.1,
                value=confidence,
                color=(0, 255, 0),
            ))
        return marks


__all__ = ["GestureAnalyzer"]
