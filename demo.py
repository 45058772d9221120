#!/usr/bin/env python3
"""
Motion Gestures Demo
Shows pose and hand landmarks over the webcam feed and the detected gesture.
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the current directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import (CAMERA_CONFIG, DISPLAY_CONFIG, GESTURE_CONFIG, HAND_TRACKING_CONFIG,
                    LOGGING_CONFIG, POSE_TRACKING_CONFIG)
from motion_gestures import MotionGesturesApp


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Real-time pose and hand gesture overlay")
    parser.add_argument("--camera", type=int, default=CAMERA_CONFIG['camera_index'],
                        help="camera device index")
    parser.add_argument("--width", type=int, default=CAMERA_CONFIG['frame_width'])
    parser.add_argument("--height", type=int, default=CAMERA_CONFIG['frame_height'])
    parser.add_argument("--debug", action="store_true", help="log status changes")
    return parser.parse_args(argv)


def main(argv=None):
    """Main demonstration function."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else LOGGING_CONFIG['level'],
        format=LOGGING_CONFIG['format']
    )

    print("=" * 60)
    print("MOTION GESTURES")
    print("=" * 60)
    print()
    print("Supported gestures:")
    print("  🙋 Left Arm Raised / Right Arm Raised - wrist above shoulder")
    print("  🤦 Touching Head - wrist next to your nose")
    print("  👍 Thumbs Up - thumb up, other fingers curled")
    print("  👎 Thumbs Down - thumb down, other fingers curled")
    print()
    print("Press 'q' in the camera window to quit.")
    print()

    camera_config = dict(CAMERA_CONFIG, camera_index=args.camera,
                         frame_width=args.width, frame_height=args.height)

    app = MotionGesturesApp(
        camera_config=camera_config,
        pose_config=POSE_TRACKING_CONFIG,
        hand_config=HAND_TRACKING_CONFIG,
        gesture_config=GESTURE_CONFIG,
        display_config=DISPLAY_CONFIG
    )

    exit_code = 0
    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    except Exception as e:
        print(f"Error running demo: {e}")
        exit_code = 1
    finally:
        app.cleanup()
        print("\nDemo finished.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
