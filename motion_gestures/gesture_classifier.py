"""
Gesture classification module for body-pose and hand gestures.

Every predicate is a pure function of landmark coordinates. Coordinates are
normalized image coordinates, so a smaller y means higher on screen.
"""

import numpy as np
from typing import Optional, Sequence
from enum import Enum

from .landmarks import HandLandmark, HandResult, Landmark, PoseLandmark, PoseResult


TOUCH_HEAD_THRESHOLD = 0.1

# (tip, pip) pairs for the four non-thumb fingers
CURLED_FINGER_JOINTS = (
    (HandLandmark.INDEX_FINGER_TIP, HandLandmark.INDEX_FINGER_PIP),
    (HandLandmark.MIDDLE_FINGER_TIP, HandLandmark.MIDDLE_FINGER_PIP),
    (HandLandmark.RING_FINGER_TIP, HandLandmark.RING_FINGER_PIP),
    (HandLandmark.PINKY_TIP, HandLandmark.PINKY_PIP),
)


class GestureType(Enum):
    """Enumeration of supported gestures; values are the status labels."""
    NONE = "Waiting..."
    LEFT_ARM_RAISED = "Left Arm Raised"
    RIGHT_ARM_RAISED = "Right Arm Raised"
    TOUCHING_HEAD = "Touching Head"
    THUMBS_UP = "Thumbs Up"
    THUMBS_DOWN = "Thumbs Down"


def is_finger_up(hand: Sequence[Landmark], tip: int, pip: int) -> bool:
    """Check if a finger is extended (tip above its PIP joint)."""
    return hand[tip].y < hand[pip].y


def are_fingers_curled(hand: Sequence[Landmark]) -> bool:
    """Check if index, middle, ring and pinky tips are all below their PIP joints."""
    return all(hand[tip].y > hand[pip].y for tip, pip in CURLED_FINGER_JOINTS)


def is_thumbs_up(hand: Sequence[Landmark]) -> bool:
    """Check if gesture is thumbs up (thumb pointing up, other fingers curled)."""
    thumb_up = hand[HandLandmark.THUMB_TIP].y < hand[HandLandmark.THUMB_MCP].y
    return thumb_up and are_fingers_curled(hand)


def is_thumbs_down(hand: Sequence[Landmark]) -> bool:
    """Check if gesture is thumbs down (thumb pointing down, other fingers curled)."""
    thumb_down = hand[HandLandmark.THUMB_TIP].y > hand[HandLandmark.THUMB_MCP].y
    return thumb_down and are_fingers_curled(hand)


def is_left_arm_raised(pose: Sequence[Landmark]) -> bool:
    return pose[PoseLandmark.LEFT_WRIST].y < pose[PoseLandmark.LEFT_SHOULDER].y


def is_right_arm_raised(pose: Sequence[Landmark]) -> bool:
    return pose[PoseLandmark.RIGHT_WRIST].y < pose[PoseLandmark.RIGHT_SHOULDER].y


def _distance_2d(a: Landmark, b: Landmark) -> float:
    return float(np.hypot(a.x - b.x, a.y - b.y))


def is_touching_head(pose: Sequence[Landmark], threshold: float = TOUCH_HEAD_THRESHOLD) -> bool:
    """
    Check if either wrist is close to the nose.

    Args:
        pose: Pose landmarks
        threshold: Maximum (exclusive) x/y distance between wrist and nose

    Returns:
        True if the left or right wrist is strictly within the threshold
    """
    nose = pose[PoseLandmark.NOSE]
    return (_distance_2d(pose[PoseLandmark.LEFT_WRIST], nose) < threshold or
            _distance_2d(pose[PoseLandmark.RIGHT_WRIST], nose) < threshold)


class GestureClassifier:
    """Classifier combining pose gestures and hand gestures into one label."""

    def __init__(self, touch_head_threshold: float = TOUCH_HEAD_THRESHOLD):
        """
        Initialize the gesture classifier.

        Args:
            touch_head_threshold: Wrist-to-nose distance below which the
                pose counts as touching the head
        """
        self.touch_head_threshold = touch_head_threshold

    def classify_pose(self, landmarks: Optional[Sequence[Landmark]]) -> GestureType:
        """
        Classify arm and head gestures from pose landmarks.

        Later checks overwrite earlier ones: right arm over left arm, head
        touch over both.

        Args:
            landmarks: Pose landmarks, or None when no pose was detected

        Returns:
            Detected gesture type
        """
        gesture = GestureType.NONE
        if not landmarks:
            return gesture

        if is_left_arm_raised(landmarks):
            gesture = GestureType.LEFT_ARM_RAISED
        if is_right_arm_raised(landmarks):
            gesture = GestureType.RIGHT_ARM_RAISED
        if is_touching_head(landmarks, self.touch_head_threshold):
            gesture = GestureType.TOUCHING_HEAD

        return gesture

    def classify_hands(self, hands: Optional[Sequence[Sequence[Landmark]]]) -> GestureType:
        """
        Classify thumb gestures, stopping at the first hand that matches.

        Args:
            hands: Hand landmark sets in detection order

        Returns:
            THUMBS_UP / THUMBS_DOWN for the first matching hand, else NONE
        """
        for hand in hands or []:
            if is_thumbs_up(hand):
                return GestureType.THUMBS_UP
            if is_thumbs_down(hand):
                return GestureType.THUMBS_DOWN
        return GestureType.NONE

    def classify(self,
                 pose_result: Optional[PoseResult],
                 hand_result: Optional[HandResult]) -> GestureType:
        """
        Classify the latest pose and hand results into a single gesture.

        Either result may be absent, stale, or carry no landmarks. A thumb
        gesture overrides any pose gesture.

        Args:
            pose_result: Latest pose estimator output
            hand_result: Latest hand estimator output

        Returns:
            The gesture to display
        """
        gesture = GestureType.NONE

        if pose_result is not None and pose_result.has_pose:
            gesture = self.classify_pose(pose_result.landmarks)

        if hand_result is not None and hand_result.has_hands:
            hand_gesture = self.classify_hands(hand_result.hands)
            if hand_gesture != GestureType.NONE:
                gesture = hand_gesture

        return gesture
