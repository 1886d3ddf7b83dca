from dataclasses import dataclass

# --- CONFIGURATION ---
DEFAULT_SEED_FILE = "seed"
IMAGE_EXTENSION = ".png"

CAMERA_INDEX = 1
CAMERA_WARMUP_FRAMES = 3

SEED_CHUNKS = 32

RNG_DRAWS = 10
RNG_RANGE = (0, 10)
RNG_BOOL_PROBABILITY = 0.5

# --- KEY SIZE ---
# DEMO_KEY_BITS keeps key generation fast enough for interactive use.
# It is NOT a secure size: real deployments must use SECURE_KEY_BITS or more.
DEMO_KEY_BITS = 1024
SECURE_KEY_BITS = 2048
MIN_KEY_BITS = 1024


@dataclass
class PipelineConfig:
    seed_file: str = DEFAULT_SEED_FILE
    camera_index: int = CAMERA_INDEX
    warmup_frames: int = CAMERA_WARMUP_FRAMES
    key_bits: int = DEMO_KEY_BITS
    rng_draws: int = RNG_DRAWS
    rng_range: tuple = RNG_RANGE
    bool_probability: float = RNG_BOOL_PROBABILITY
