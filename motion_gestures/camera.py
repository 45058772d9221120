"""
Webcam capture delivering frames to an async per-frame handler.
"""

import asyncio
import logging
from typing import Awaitable, Callable

import cv2
import numpy as np

logger = logging.getLogger(__name__)

FrameHandler = Callable[[np.ndarray], Awaitable[None]]


class CameraError(RuntimeError):
    """Raised when the capture device cannot be opened."""


class Camera:
    """OpenCV video capture driving a frame handler."""

    def __init__(self,
                 on_frame: FrameHandler,
                 camera_index: int = 0,
                 width: int = 480,
                 height: int = 360):
        """
        Initialize the camera.

        Args:
            on_frame: Coroutine function awaited with every captured frame
            camera_index: Camera device index
            width: Requested frame width
            height: Requested frame height
        """
        self.on_frame = on_frame
        self.camera_index = camera_index
        self.width = width
        self.height = height

        self.cap = None
        self.is_running = False
        self._stopped = False

    async def start(self):
        """
        Open the capture device.

        If stop() is called while the device is opening, the device is
        released again and the camera does not start.

        Raises:
            CameraError: If the device cannot be opened
        """
        loop = asyncio.get_running_loop()
        self.cap = await loop.run_in_executor(None, cv2.VideoCapture, self.camera_index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        if not self.cap.isOpened():
            self.release()
            raise CameraError(f"Could not open camera {self.camera_index}")

        if self._stopped:
            logger.info("Camera %s stopped while opening", self.camera_index)
            self.release()
            return

        self.is_running = True
        logger.info("Camera %s started (%dx%d)", self.camera_index, self.width, self.height)

    async def run(self):
        """Read frames and hand each to the frame handler until stopped."""
        loop = asyncio.get_running_loop()
        while self.is_running and not self._stopped:
            ret, frame = await loop.run_in_executor(None, self.cap.read)
            if not ret:
                logger.warning("Camera %s returned no frame, stopping", self.camera_index)
                break
            await self.on_frame(frame)
        self.is_running = False

    def stop(self):
        """Stop capturing; takes effect even if start() is still opening the device."""
        self._stopped = True
        self.is_running = False

    def release(self):
        """Stop capturing and release the device."""
        self.is_running = False
        if self.cap is not None:
            self.cap.release()
            self.cap = None
