"""
Application wiring camera, estimators, result cells and the render loop.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import cv2

from .camera import Camera
from .frame_scheduler import FrameScheduler
from .gesture_classifier import GestureClassifier, GestureType
from .landmark_source import HandEstimator, PoseEstimator
from .render_loop import RenderLoop, StatusDisplay
from .snapshot import SnapshotCell

logger = logging.getLogger(__name__)

CAMERA_STARTED_TEXT = "Camera started!"


class MotionGesturesApp:
    """Real-time pose and hand gesture overlay for a webcam feed."""

    def __init__(self,
                 camera_config: Optional[Dict[str, Any]] = None,
                 pose_config: Optional[Dict[str, Any]] = None,
                 hand_config: Optional[Dict[str, Any]] = None,
                 gesture_config: Optional[Dict[str, Any]] = None,
                 display_config: Optional[Dict[str, Any]] = None,
                 pose_estimator=None,
                 hand_estimator=None):
        """
        Initialize the application.

        Args:
            camera_config: Camera index and frame size
            pose_config: Options for the pose estimator
            hand_config: Options for the hand estimator
            gesture_config: Classifier threshold and hand frame interval
            display_config: Window, fps, colors and text style
            pose_estimator: Prebuilt pose estimator (built from pose_config if None)
            hand_estimator: Prebuilt hand estimator (built from hand_config if None)
        """
        camera_config = camera_config or {}
        gesture_config = gesture_config or {}
        display_config = display_config or {}

        width = camera_config.get('frame_width', 480)
        height = camera_config.get('frame_height', 360)

        # Latest results, each written only by its estimator's callback
        self.pose_results = SnapshotCell()
        self.hand_results = SnapshotCell()

        self.pose_estimator = pose_estimator or PoseEstimator(**(pose_config or {}))
        self.hand_estimator = hand_estimator or HandEstimator(**(hand_config or {}))
        self.pose_estimator.on_result(self.pose_results.set)
        self.hand_estimator.on_result(self.hand_results.set)

        self.scheduler = FrameScheduler(
            self.pose_estimator,
            self.hand_estimator,
            hand_frame_interval=gesture_config.get('hand_frame_interval', 2)
        )
        self.camera = Camera(
            self.scheduler.on_frame,
            camera_index=camera_config.get('camera_index', 0),
            width=width,
            height=height
        )

        self.classifier = GestureClassifier(
            touch_head_threshold=gesture_config.get('touch_head_threshold', 0.1)
        )
        self.status = StatusDisplay(
            text_color=display_config.get('text_color', (255, 255, 255)),
            background=display_config.get('text_background', (0, 0, 0)),
            text_scale=display_config.get('text_scale', 0.7),
            text_thickness=display_config.get('text_thickness', 2)
        )
        self.render_loop = RenderLoop(
            self.pose_results,
            self.hand_results,
            self.classifier,
            self.status,
            width=width,
            height=height,
            fps=display_config.get('fps', 60),
            window_name=display_config.get('window_name', "Motion Gestures"),
            connector_color=display_config.get('connector_color', (255, 255, 255)),
            pose_point_color=display_config.get('pose_point_color', (255, 255, 0)),
            hand_point_color=display_config.get('hand_point_color', (0, 255, 255))
        )

    async def start_camera(self):
        """Start the camera and enable frame submission."""
        try:
            await self.camera.start()
        except Exception:
            logger.exception("Error starting camera")
            raise
        if not self.camera.is_running:
            return
        self.scheduler.mark_camera_started()
        self.status.set_text(CAMERA_STARTED_TEXT)

    async def _capture(self):
        await self.start_camera()
        await self.camera.run()

    async def run(self, show: bool = True):
        """
        Run capture and rendering until the user quits.

        Args:
            show: Whether to open a display window

        Raises:
            Exception: Whatever stopped the capture path, e.g. a pose failure
        """
        render_task = asyncio.create_task(self.render_loop.run(show=show))
        capture_task = asyncio.create_task(self._capture())

        done, _ = await asyncio.wait({render_task, capture_task},
                                     return_when=asyncio.FIRST_COMPLETED)

        if render_task in done:
            self.camera.stop()
            try:
                await capture_task
            finally:
                render_task.result()
        else:
            self.render_loop.stop()
            try:
                capture_task.result()
            finally:
                await render_task

    def get_current_gesture(self) -> GestureType:
        """Return the gesture shown on the last render tick."""
        return self.render_loop.current_gesture

    def cleanup(self):
        """Clean up resources."""
        self.camera.release()
        self.pose_estimator.close()
        self.hand_estimator.close()
        cv2.destroyAllWindows()
