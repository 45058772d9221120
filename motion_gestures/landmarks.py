"""
Landmark data model shared by the estimators, the classifier and the overlay.

All coordinates are normalized to [0, 1] relative to the image width/height,
origin top-left, y increasing downward. Keypoint indices come from MediaPipe.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import mediapipe as mp
import numpy as np

PoseLandmark = mp.solutions.pose.PoseLandmark
HandLandmark = mp.solutions.hands.HandLandmark


@dataclass(frozen=True)
class Landmark:
    """A single normalized keypoint."""
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


@dataclass(frozen=True)
class PoseResult:
    """
    Latest pose estimator output.

    ``landmarks`` holds the 33 converted keypoints used for classification,
    ``raw_landmarks`` the estimator's NormalizedLandmarkList used for drawing.
    """
    image: Optional[np.ndarray] = None
    landmarks: Optional[List[Landmark]] = None
    raw_landmarks: Any = None

    @property
    def has_pose(self) -> bool:
        return bool(self.landmarks)


@dataclass(frozen=True)
class HandResult:
    """Latest hand estimator output: the source frame and up to two hands."""
    image: Optional[np.ndarray] = None
    hands: List[List[Landmark]] = field(default_factory=list)
    raw_hands: List[Any] = field(default_factory=list)

    @property
    def has_hands(self) -> bool:
        return len(self.hands) > 0


def landmarks_from_proto(landmark_list: Any) -> List[Landmark]:
    """
    Convert a MediaPipe NormalizedLandmarkList into plain landmarks.

    Args:
        landmark_list: Object exposing a ``landmark`` sequence with x/y/z
            and an optional visibility field

    Returns:
        List of Landmark in the estimator's index order
    """
    landmarks = []
    for point in landmark_list.landmark:
        visibility = getattr(point, 'visibility', None)
        landmarks.append(Landmark(
            x=float(point.x),
            y=float(point.y),
            z=float(getattr(point, 'z', 0.0) or 0.0),
            visibility=float(visibility) if visibility is not None else None
        ))
    return landmarks
