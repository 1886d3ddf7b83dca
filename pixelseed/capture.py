import logging

import cv2
import numpy as np

from pixelseed.config import CAMERA_INDEX, CAMERA_WARMUP_FRAMES, IMAGE_EXTENSION
from pixelseed.errors import PixelSourceError
from pixelseed.utils import to_rgba, rgba_to_bgra

logger = logging.getLogger(__name__)


def seed_path(seed_file):
    """The extension is always appended, even when the name already carries it."""
    return seed_file + IMAGE_EXTENSION


def encode_png(pixels):
    """RGBA PixelBuffer -> PNG bytes."""
    ok, buf = cv2.imencode(".png", rgba_to_bgra(pixels))
    if not ok:
        raise PixelSourceError("Failed to encode captured image to PNG")
    return buf.tobytes()


def decode_png(data):
    """PNG bytes -> RGBA PixelBuffer."""
    arr = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED) if arr.size else None
    if img is None:
        raise PixelSourceError("Failed to decode image")
    try:
        return to_rgba(img)
    except ValueError as e:
        raise PixelSourceError(f"Failed to decode image: {e}") from e


def grab_frame(camera_index=CAMERA_INDEX, warmup_frames=CAMERA_WARMUP_FRAMES):
    """Reads a single BGR frame from the camera, discarding warmup frames."""
    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        raise PixelSourceError(f"Failed to open camera {camera_index}")

    try:
        # Let auto exposure settle before keeping a frame
        for _ in range(warmup_frames):
            cap.read()
        ret, frame = cap.read()
    finally:
        cap.release()

    if not ret or frame is None:
        raise PixelSourceError(f"Failed to capture a frame from camera {camera_index}")
    logger.debug("Captured %dx%d frame from camera %d", frame.shape[1], frame.shape[0], camera_index)
    return frame


def save_frame(frame, path):
    """
    Persists a camera frame as the seed file and returns the pixels decoded
    back from the written PNG bytes, so a later load derives the same seed.
    """
    try:
        rgba = to_rgba(frame)
    except ValueError as e:
        raise PixelSourceError(f"Failed to decode the frame: {e}") from e

    data = encode_png(rgba)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise PixelSourceError(f"Failed to save captured image: '{path}'") from e
    logger.info("Saved seed image to %s (%d bytes)", path, len(data))

    return decode_png(data)


def capture_image(path, camera_index=CAMERA_INDEX, warmup_frames=CAMERA_WARMUP_FRAMES):
    frame = grab_frame(camera_index, warmup_frames)
    return save_frame(frame, path)


def load_image(path):
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise PixelSourceError(f"Unable to read image: '{path}'") from e
    logger.debug("Loaded %d bytes from %s", len(data), path)
    return decode_png(data)
