import logging

import numpy as np

from pixelseed.config import SEED_CHUNKS
from pixelseed.errors import InsufficientPixels

logger = logging.getLogger(__name__)


def pixel_bytes(pixels):
    """Folds each RGBA pixel into one byte (channel sum modulo 256), row-major."""
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected an RGBA pixel buffer, got shape {pixels.shape}")
    flat = pixels.reshape(-1, 4).astype(np.uint32)
    return (flat.sum(axis=1) % 256).astype(np.uint8)


def derive_seed(pixels, chunks=SEED_CHUNKS):
    """
    Reduces an RGBA PixelBuffer to a 32-byte seed and its checksum.

    1. Each pixel becomes one byte (wrapping sum of its 4 channels)
    2. Those bytes are split into 32 equal contiguous chunks of
       pixel_count // 32; trailing pixels that don't fill a chunk are ignored
    3. Each chunk is folded with wrapping addition into one seed byte

    This is a deterministic reduction, not a cryptographic hash. Trailing
    pixels must stay ignored or previously saved seed files stop matching.
    """
    per_pixel = pixel_bytes(pixels)
    count = len(per_pixel)
    chunk = count // chunks
    if chunk == 0:
        raise InsufficientPixels(count, chunks)

    folded = per_pixel[:chunk * chunks].reshape(chunks, chunk).astype(np.uint64)
    seed = bytes((folded.sum(axis=1) % 256).astype(np.uint8).tolist())
    checksum = seed_checksum(seed)

    logger.debug("Derived seed from %d pixels (chunk=%d, dropped=%d): checksum %d",
                 count, chunk, count - chunk * chunks, checksum)
    return seed, checksum


def seed_checksum(seed: bytes) -> int:
    """Plain sum of the seed bytes, for display only."""
    return sum(seed)
