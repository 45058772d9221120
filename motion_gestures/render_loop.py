"""
Render loop drawing the camera image, landmark overlays and the status label.

Hand landmarks come from the mirrored frame but are drawn over the unmirrored
pose image, so the hand skeleton shows on the opposite side of the body.
"""

import asyncio
import logging
from typing import Tuple

import cv2
import mediapipe as mp
import numpy as np

from .gesture_classifier import GestureClassifier, GestureType
from .landmarks import HandResult, PoseResult
from .snapshot import SnapshotCell

logger = logging.getLogger(__name__)

mp_drawing = mp.solutions.drawing_utils
mp_pose = mp.solutions.pose
mp_hands = mp.solutions.hands

Color = Tuple[int, int, int]

WHITE = (255, 255, 255)
CYAN = (255, 255, 0)
YELLOW = (0, 255, 255)


class StatusDisplay:
    """Single-line status label painted over the frame."""

    def __init__(self,
                 text: str = GestureType.NONE.value,
                 text_color: Color = WHITE,
                 background: Color = (0, 0, 0),
                 text_scale: float = 0.7,
                 text_thickness: int = 2):
        self.text = text
        self.text_color = text_color
        self.background = background
        self.text_scale = text_scale
        self.text_thickness = text_thickness

    def set_text(self, text: str):
        """Replace the status text, logging the change."""
        if text != self.text:
            logger.debug("Status: %s -> %s", self.text, text)
        self.text = text

    def draw(self, image: np.ndarray) -> np.ndarray:
        """Paint the status text on a filled banner in the top left corner."""
        (text_w, text_h), baseline = cv2.getTextSize(
            self.text, cv2.FONT_HERSHEY_SIMPLEX, self.text_scale, self.text_thickness)
        cv2.rectangle(image, (10, 10), (20 + text_w, 20 + text_h + baseline), self.background, -1)
        cv2.putText(image, self.text, (15, 15 + text_h),
                    cv2.FONT_HERSHEY_SIMPLEX, self.text_scale, self.text_color, self.text_thickness)
        return image


class RenderLoop:
    """Redraws the latest available results once per display tick."""

    def __init__(self,
                 pose_slot: SnapshotCell,
                 hand_slot: SnapshotCell,
                 classifier: GestureClassifier,
                 status: StatusDisplay,
                 width: int = 480,
                 height: int = 360,
                 fps: float = 60.0,
                 window_name: str = "Motion Gestures",
                 connector_color: Color = WHITE,
                 pose_point_color: Color = CYAN,
                 hand_point_color: Color = YELLOW):
        """
        Initialize the render loop.

        Args:
            pose_slot: Cell holding the latest PoseResult
            hand_slot: Cell holding the latest HandResult
            classifier: Gesture classifier run on every tick
            status: Status label written on every tick
            width: Canvas width in pixels
            height: Canvas height in pixels
            fps: Target ticks per second
            window_name: Name of the display window
        """
        self.pose_slot = pose_slot
        self.hand_slot = hand_slot
        self.classifier = classifier
        self.status = status
        self.width = width
        self.height = height
        self.fps = fps
        self.window_name = window_name

        self.connection_style = mp_drawing.DrawingSpec(color=connector_color, thickness=2)
        self.pose_landmark_style = mp_drawing.DrawingSpec(color=pose_point_color, circle_radius=2)
        self.hand_landmark_style = mp_drawing.DrawingSpec(color=hand_point_color, circle_radius=2)

        self.is_running = False
        self.current_gesture = GestureType.NONE

    def render_once(self) -> Tuple[np.ndarray, GestureType]:
        """
        Draw one frame from whatever results are currently available.

        Returns:
            Tuple of (canvas, detected_gesture)
        """
        canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        pose_result: PoseResult = self.pose_slot.get()
        hand_result: HandResult = self.hand_slot.get()

        if pose_result is not None and pose_result.image is not None:
            canvas[:] = cv2.resize(pose_result.image, (self.width, self.height))
            if pose_result.raw_landmarks is not None:
                mp_drawing.draw_landmarks(
                    canvas,
                    pose_result.raw_landmarks,
                    mp_pose.POSE_CONNECTIONS,
                    self.pose_landmark_style,
                    self.connection_style
                )

        if hand_result is not None and hand_result.has_hands:
            for hand_landmarks in hand_result.raw_hands:
                mp_drawing.draw_landmarks(
                    canvas,
                    hand_landmarks,
                    mp_hands.HAND_CONNECTIONS,
                    self.hand_landmark_style,
                    self.connection_style
                )

        gesture = self.classifier.classify(pose_result, hand_result)
        self.current_gesture = gesture
        self.status.set_text(gesture.value)
        self.status.draw(canvas)

        return canvas, gesture

    async def run(self, show: bool = True):
        """
        Render until stopped or until the user presses 'q' / Esc.

        Args:
            show: Whether to display frames in an OpenCV window
        """
        self.is_running = True
        delay = 1.0 / self.fps
        try:
            while self.is_running:
                canvas, _ = self.render_once()
                if show:
                    cv2.imshow(self.window_name, canvas)
                    key = cv2.waitKey(1) & 0xFF
                    if key in (ord('q'), 27):
                        logger.info("Quit requested")
                        break
                await asyncio.sleep(delay)
        finally:
            self.is_running = False

    def stop(self):
        """Ask the loop to exit after the current tick."""
        self.is_running = False
