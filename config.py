"""
Configuration settings for Motion Gestures
"""

# Camera settings
CAMERA_CONFIG = {
    'camera_index': 0,
    'frame_width': 480,
    'frame_height': 360
}

# Pose estimator settings (MediaPipe Pose)
POSE_TRACKING_CONFIG = {
    'static_image_mode': False,
    'model_complexity': 1,  # 0-2, higher = more accurate but slower
    'min_detection_confidence': 0.6,
    'min_tracking_confidence': 0.6
}

# Hand estimator settings (MediaPipe Hands)
HAND_TRACKING_CONFIG = {
    'static_image_mode': False,
    'max_num_hands': 2,
    'model_complexity': 1,
    'min_detection_confidence': 0.6,
    'min_tracking_confidence': 0.6
}

# Gesture recognition settings
GESTURE_CONFIG = {
    'touch_head_threshold': 0.1,  # normalized wrist-to-nose distance
    'hand_frame_interval': 2  # run hands on every 2nd frame
}

# Display settings (colors are BGR)
DISPLAY_CONFIG = {
    'window_name': 'Motion Gestures',
    'fps': 60,
    'connector_color': (255, 255, 255),
    'pose_point_color': (255, 255, 0),
    'hand_point_color': (0, 255, 255),
    'text_color': (255, 255, 255),
    'text_background': (0, 0, 0),
    'text_scale': 0.7,
    'text_thickness': 2
}

# Logging settings
LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'
}
