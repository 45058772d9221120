"""
Motion Gestures
Overlays body-pose and hand landmarks on a webcam feed and recognizes a few
static gestures: arm raised, touching head, thumbs up and thumbs down.
"""

from .gesture_classifier import GestureClassifier, GestureType
from .frame_scheduler import FrameScheduler
from .render_loop import RenderLoop, StatusDisplay
from .snapshot import SnapshotCell
from .app import MotionGesturesApp

__version__ = "1.0.0"
__all__ = [
    "GestureClassifier",
    "GestureType",
    "FrameScheduler",
    "RenderLoop",
    "StatusDisplay",
    "SnapshotCell",
    "MotionGesturesApp",
]
