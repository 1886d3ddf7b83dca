import binascii
import logging
from dataclasses import dataclass, field
from typing import Any

from pixelseed.config import PipelineConfig
from pixelseed.conditioner import hash_message
from pixelseed.entropy import seed_checksum
from pixelseed.errors import InvalidHexEncoding, InvalidUtf8
from pixelseed.keys import generate_keypair, encrypt_bytes, decrypt_bytes
from pixelseed.rng import new_generator

logger = logging.getLogger(__name__)


# --- OPERATIONS ---
@dataclass(frozen=True)
class Rng:
    pass


@dataclass(frozen=True)
class Hash:
    message: str


@dataclass(frozen=True)
class Encrypt:
    plaintext: str


@dataclass(frozen=True)
class Decrypt:
    ciphertext: str  # hex


@dataclass(frozen=True)
class OperationResult:
    name: str
    text: str
    values: dict = field(default_factory=dict)

    def __str__(self):
        return self.text


def run_rng(seed, config):
    """Integers first, then booleans, from one generator. Swapping the batches changes every value."""
    rng = new_generator(seed)
    lo, hi = config.rng_range
    numbers = [rng.gen_range(lo, hi) for _ in range(config.rng_draws)]
    bools = [rng.gen_bool(config.bool_probability) for _ in range(config.rng_draws)]
    checksum = seed_checksum(seed)

    text = "\n".join([
        f"seed: {checksum}",
        f"random numbers: {numbers}",
        f"random bools: {bools}",
    ])
    return OperationResult("rng", text, {"checksum": checksum, "numbers": numbers, "bools": bools})


def run_hash(seed, message):
    digest = hash_message(seed, message)
    return OperationResult("hash", digest, {"digest": digest})


def run_encrypt(seed, plaintext, config):
    rng = new_generator(seed)
    private_key = generate_keypair(rng, config.key_bits)
    public_key = private_key.publickey()
    # Padding randomness continues the same stream that produced the key
    ciphertext = encrypt_bytes(public_key, plaintext.encode("utf-8"), rng).hex()
    return OperationResult("encrypt", ciphertext, {"ciphertext": ciphertext})


def run_decrypt(seed, ciphertext_hex, config):
    # Validate input before spending time on key generation
    try:
        ciphertext = binascii.unhexlify(ciphertext_hex)
    except (binascii.Error, ValueError) as e:
        raise InvalidHexEncoding(f"Ciphertext is not valid hex: {e}") from e

    private_key = generate_keypair(new_generator(seed), config.key_bits)
    data = decrypt_bytes(private_key, ciphertext)
    try:
        plaintext = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8(f"Decrypted bytes are not valid UTF-8: {e}") from e
    return OperationResult("decrypt", plaintext, {"plaintext": plaintext})


def execute(seed: bytes, op: Any, config: PipelineConfig = None) -> OperationResult:
    """Runs exactly one operation against the seed. Each call builds its own generator."""
    config = config or PipelineConfig()
    logger.debug("Executing %s", type(op).__name__)

    if isinstance(op, Rng):
        return run_rng(seed, config)
    if isinstance(op, Hash):
        return run_hash(seed, op.message)
    if isinstance(op, Encrypt):
        return run_encrypt(seed, op.plaintext, config)
    if isinstance(op, Decrypt):
        return run_decrypt(seed, op.ciphertext, config)
    raise TypeError(f"Unknown operation: {op!r}")
