"""
Tests for the render loop and the status display.
"""

import asyncio

import numpy as np

from motion_gestures.gesture_classifier import GestureClassifier, GestureType
from motion_gestures.landmarks import HandResult, PoseResult
from motion_gestures.render_loop import RenderLoop, StatusDisplay
from motion_gestures.snapshot import SnapshotCell

from test_gesture_classifier import make_hand, make_pose, to_proto

WIDTH, HEIGHT = 320, 240


def make_loop():
    pose_slot, hand_slot = SnapshotCell(), SnapshotCell()
    status = StatusDisplay()
    loop = RenderLoop(pose_slot, hand_slot, GestureClassifier(), status,
                      width=WIDTH, height=HEIGHT, fps=200)
    return loop, pose_slot, hand_slot, status


def color_mask(canvas, color):
    """Pixels close to a BGR color."""
    return np.all(np.abs(canvas.astype(int) - np.array(color)) < 40, axis=-1)


def black_frame():
    return np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)


def test_status_display_draws_text():
    image = np.zeros((96, 256, 3), dtype=np.uint8)
    status = StatusDisplay()
    status.set_text("Thumbs Up")
    status.draw(image)
    assert status.text == "Thumbs Up"
    assert image.any()


def test_empty_slots_render_waiting():
    loop, _, _, status = make_loop()
    canvas, gesture = loop.render_once()
    assert canvas.shape == (HEIGHT, WIDTH, 3)
    assert gesture == GestureType.NONE
    assert status.text == "Waiting..."


def test_pose_image_is_background():
    loop, pose_slot, _, _ = make_loop()
    image = np.full((HEIGHT * 2, WIDTH * 2, 3), 90, dtype=np.uint8)
    pose_slot.set(PoseResult(image=image, landmarks=None))
    canvas, gesture = loop.render_once()
    assert gesture == GestureType.NONE
    # bottom right corner is away from the status banner
    assert tuple(canvas[HEIGHT - 1, WIDTH - 1]) == (90, 90, 90)


def test_pose_skeleton_drawn_in_cyan():
    loop, pose_slot, _, _ = make_loop()
    landmarks = make_pose()
    pose_slot.set(PoseResult(image=black_frame(), landmarks=landmarks,
                             raw_landmarks=to_proto(landmarks)))
    canvas, _ = loop.render_once()
    assert color_mask(canvas, (255, 255, 0))[HEIGHT // 2:].any()


def test_pose_without_raw_landmarks_draws_nothing():
    loop, pose_slot, _, _ = make_loop()
    pose_slot.set(PoseResult(image=black_frame(), landmarks=make_pose()))
    canvas, _ = loop.render_once()
    assert not canvas[HEIGHT // 2:].any()


def test_hand_skeleton_drawn_in_yellow():
    loop, _, hand_slot, _ = make_loop()
    hand = make_hand()
    hand_slot.set(HandResult(hands=[hand], raw_hands=[to_proto(hand)]))
    canvas, gesture = loop.render_once()
    assert gesture == GestureType.THUMBS_UP
    assert color_mask(canvas, (0, 255, 255))[HEIGHT // 2:].any()


def test_pose_landmarks_classified():
    loop, pose_slot, _, status = make_loop()
    pose_slot.set(PoseResult(image=black_frame(), landmarks=make_pose(left_wrist=(0.8, 0.2))))
    _, gesture = loop.render_once()
    assert gesture == GestureType.LEFT_ARM_RAISED
    assert status.text == "Left Arm Raised"


def test_hands_without_pose():
    loop, _, hand_slot, status = make_loop()
    hand_slot.set(HandResult(hands=[make_hand(thumb_tip_y=0.5, thumb_joint_y=0.4)]))
    _, gesture = loop.render_once()
    assert gesture == GestureType.THUMBS_DOWN
    assert status.text == "Thumbs Down"


def test_hand_label_overrides_pose_label():
    loop, pose_slot, hand_slot, _ = make_loop()
    pose_slot.set(PoseResult(image=None, landmarks=make_pose(right_wrist=(0.2, 0.2))))
    hand_slot.set(HandResult(hands=[make_hand()]))
    _, gesture = loop.render_once()
    assert gesture == GestureType.THUMBS_UP


def test_stale_results_are_reused():
    loop, pose_slot, _, _ = make_loop()
    pose_slot.set(PoseResult(image=black_frame(), landmarks=make_pose(right_wrist=(0.2, 0.2))))
    first = loop.render_once()[1]
    second = loop.render_once()[1]
    assert first == second == GestureType.RIGHT_ARM_RAISED
    assert pose_slot.version == 1


def test_next_tick_overwrites_camera_started():
    loop, _, _, status = make_loop()
    status.set_text("Camera started!")
    loop.render_once()
    assert status.text == "Waiting..."


def test_run_until_stopped():
    loop, _, hand_slot, _ = make_loop()

    async def scenario():
        task = asyncio.create_task(loop.run(show=False))
        await asyncio.sleep(0.02)
        hand_slot.set(HandResult(hands=[make_hand()]))
        await asyncio.sleep(0.05)
        assert loop.is_running
        loop.stop()
        await asyncio.wait_for(task, timeout=1.0)

    asyncio.run(scenario())
    assert not loop.is_running
    assert loop.current_gesture == GestureType.THUMBS_UP
