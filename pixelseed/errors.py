"""Failure taxonomy. Every error names the stage of the run that produced it."""

ACQUISITION = "acquisition"
DERIVATION = "derivation"
CRYPTO = "crypto"
INPUT = "input"


class PixelSeedError(Exception):
    stage = "pipeline"

    def __init__(self, message, stage=None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class PixelSourceError(PixelSeedError):
    """Camera or seed file could not produce a pixel buffer."""
    stage = ACQUISITION


class InsufficientPixels(PixelSeedError):
    stage = DERIVATION

    def __init__(self, pixel_count, required):
        super().__init__(f"Need at least {required} pixels to derive a seed, got {pixel_count}")
        self.pixel_count = pixel_count
        self.required = required


class KeyGenerationError(PixelSeedError):
    stage = CRYPTO


class EncryptionError(PixelSeedError):
    stage = CRYPTO


class DecryptionError(PixelSeedError):
    stage = CRYPTO


class InvalidHexEncoding(PixelSeedError):
    stage = INPUT


class InvalidUtf8(PixelSeedError):
    stage = CRYPTO
