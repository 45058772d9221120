"""
Landmark estimators wrapping MediaPipe Pose and MediaPipe Hands.

Each estimator is configured once, submitted frames asynchronously, and
reports every result to a single completion callback.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

import cv2
import mediapipe as mp
import numpy as np

from .landmarks import HandResult, PoseResult, landmarks_from_proto

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any], None]

CONFIDENCE_OPTIONS = ('min_detection_confidence', 'min_tracking_confidence')


class LandmarkEstimator:
    """Base class for an asynchronous, callback-driven landmark estimator."""

    default_options: Dict[str, Any] = {}

    def __init__(self, **options):
        """
        Initialize the estimator.

        Args:
            **options: Model options overriding ``default_options``
        """
        self.options: Dict[str, Any] = dict(self.default_options)
        self._model = None
        self._callback: Optional[ResultCallback] = None
        # The model is always driven from this one worker thread
        self._executor = ThreadPoolExecutor(max_workers=1,
                                            thread_name_prefix=type(self).__name__)
        self.configure(**options)

    def configure(self, **options):
        """
        Merge new options and rebuild the underlying model.

        Args:
            **options: Model options, e.g. confidence thresholds

        Raises:
            ValueError: If a confidence threshold is outside [0, 1]
        """
        merged = dict(self.options)
        merged.update(options)
        for name in CONFIDENCE_OPTIONS:
            value = merged.get(name)
            if value is not None and not 0.0 <= float(value) <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
        self._validate(merged)

        self._close_model()
        self.options = merged
        self._model = self._create_model(merged)
        logger.debug("%s configured with %s", type(self).__name__, merged)

    def on_result(self, callback: ResultCallback):
        """Register the completion callback; replaces any previous one."""
        self._callback = callback

    async def submit(self, frame: np.ndarray):
        """
        Run the estimator on a frame and deliver the result.

        Args:
            frame: Input frame as numpy array (BGR format)

        Returns:
            The converted result, also passed to the completion callback
        """
        loop = asyncio.get_running_loop()
        raw = await loop.run_in_executor(self._executor, self._process, frame)
        result = self._convert(frame, raw)
        if self._callback is not None:
            self._callback(result)
        return result

    def _process(self, frame: np.ndarray) -> Any:
        rgb_image = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_image.flags.writeable = False
        return self._model.process(rgb_image)

    def _validate(self, options: Dict[str, Any]):
        pass

    def _create_model(self, options: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def _convert(self, frame: np.ndarray, raw: Any) -> Any:
        raise NotImplementedError

    def _close_model(self):
        if self._model is not None:
            self._model.close()
            self._model = None

    def close(self):
        """Clean up resources."""
        self._close_model()
        self._executor.shutdown(wait=False)


class PoseEstimator(LandmarkEstimator):
    """Full-body pose estimator (33 keypoints) using MediaPipe Pose."""

    default_options = {
        'static_image_mode': False,
        'model_complexity': 1,
        'min_detection_confidence': 0.6,
        'min_tracking_confidence': 0.6
    }

    def _create_model(self, options: Dict[str, Any]) -> Any:
        return mp.solutions.pose.Pose(**options)

    def _convert(self, frame: np.ndarray, raw: Any) -> PoseResult:
        pose_landmarks = getattr(raw, 'pose_landmarks', None)
        if not pose_landmarks:
            return PoseResult(image=frame, landmarks=None)
        return PoseResult(image=frame,
                          landmarks=landmarks_from_proto(pose_landmarks),
                          raw_landmarks=pose_landmarks)


class HandEstimator(LandmarkEstimator):
    """Hand estimator (21 keypoints per hand) using MediaPipe Hands."""

    default_options = {
        'static_image_mode': False,
        'max_num_hands': 2,
        'model_complexity': 1,
        'min_detection_confidence': 0.6,
        'min_tracking_confidence': 0.6
    }

    def _validate(self, options: Dict[str, Any]):
        if int(options.get('max_num_hands', 1)) < 1:
            raise ValueError("max_num_hands must be at least 1")

    def _create_model(self, options: Dict[str, Any]) -> Any:
        return mp.solutions.hands.Hands(**options)

    def _convert(self, frame: np.ndarray, raw: Any) -> HandResult:
        multi_hand_landmarks = getattr(raw, 'multi_hand_landmarks', None) or []
        hands = [landmarks_from_proto(hand) for hand in multi_hand_landmarks]
        return HandResult(image=frame, hands=hands, raw_hands=list(multi_hand_landmarks))
