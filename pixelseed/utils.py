import cv2
import numpy as np


def to_rgba(img):
    """Converts an OpenCV image (GRAY, BGR or BGRA) into an RGBA uint8 PixelBuffer."""
    if img.dtype == np.uint16:
        img = reduce_to_8bit(img)
    elif img.dtype != np.uint8:
        raise ValueError(f"Unsupported pixel depth: {img.dtype}")

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img[..., 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise ValueError(f"Unsupported channel count: {channels}")


def rgba_to_bgra(pixels):
    """OpenCV writes BGRA, so PixelBuffers are flipped back before encoding."""
    return cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)


def reduce_to_8bit(img):
    # Rounded 16 -> 8 bit scale (65535 maps to 255)
    return ((img.astype(np.uint32) + 128) // 257).astype(np.uint8)


def solid_image(width, height, rgba=(0, 0, 0, 0)):
    """Builds a single-colour PixelBuffer (height x width x 4)."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[...] = np.array(rgba, dtype=np.uint8)
    return pixels
