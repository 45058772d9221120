"""
Per-frame driver submitting camera frames to the pose and hand estimators.
"""

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def mirror_frame(frame: np.ndarray) -> np.ndarray:
    """Return a horizontally flipped copy of the frame (same shape)."""
    return cv2.flip(frame, 1)


class FrameScheduler:
    """
    Runs pose estimation on every frame and hand estimation on every
    ``hand_frame_interval``-th frame, on a mirrored copy.
    """

    def __init__(self, pose_estimator, hand_estimator, hand_frame_interval: int = 2):
        """
        Initialize the scheduler.

        Args:
            pose_estimator: Estimator exposing ``async submit(frame)``
            hand_estimator: Estimator exposing ``async submit(frame)``
            hand_frame_interval: Hands run when the frame counter is a
                multiple of this value
        """
        if hand_frame_interval < 1:
            raise ValueError("hand_frame_interval must be at least 1")
        self.pose_estimator = pose_estimator
        self.hand_estimator = hand_estimator
        self.hand_frame_interval = hand_frame_interval
        self.frame_count = 0
        self.camera_started = False

    def mark_camera_started(self):
        """Start submitting frames; called once the camera has opened."""
        self.camera_started = True

    async def on_frame(self, frame: np.ndarray):
        """
        Process one camera frame.

        Frames are dropped until the camera has started. Pose errors
        propagate to the caller; hand errors only skip the hand frame.

        Args:
            frame: Current camera frame (BGR)
        """
        if not self.camera_started:
            return

        await self.pose_estimator.submit(frame)

        self.frame_count += 1
        if self.frame_count % self.hand_frame_interval == 0:
            try:
                flipped = mirror_frame(frame)
                await self.hand_estimator.submit(flipped)
            except Exception as err:
                logger.warning("Hands frame skipped: %s", err)
