import logging

from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA

from pixelseed.config import DEMO_KEY_BITS, MIN_KEY_BITS, SECURE_KEY_BITS
from pixelseed.errors import KeyGenerationError, EncryptionError, DecryptionError

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


def generate_keypair(generator, bits=DEMO_KEY_BITS):
    """
    RSA private key drawn entirely from the seeded generator.
    Same seed + same bit size -> bit-identical key, so nothing is persisted.
    """
    if bits < MIN_KEY_BITS:
        raise KeyGenerationError(f"RSA modulus must be at least {MIN_KEY_BITS} bits, got {bits}")
    if bits < SECURE_KEY_BITS:
        logger.warning("Using a %d-bit demonstration key; use %d bits or more for real data",
                       bits, SECURE_KEY_BITS)
    try:
        key = RSA.generate(bits, randfunc=generator.read, e=PUBLIC_EXPONENT)
    except ValueError as e:
        raise KeyGenerationError(f"Failed to generate a {bits}-bit key: {e}") from e
    logger.debug("Generated %d-bit key, modulus ends ...%x", key.size_in_bits(), key.n & 0xffff)
    return key


def max_payload(key):
    """OAEP-SHA256 payload limit: k - 2*hLen - 2 bytes."""
    return key.size_in_bytes() - 2 * SHA256.digest_size - 2


def encrypt_bytes(public_key, data, generator):
    """RSA-OAEP(SHA-256) with the padding seed drawn from the generator."""
    limit = max_payload(public_key)
    if len(data) > limit:
        raise EncryptionError(f"Plaintext is {len(data)} bytes, the key allows at most {limit}")
    cipher = PKCS1_OAEP.new(public_key, hashAlgo=SHA256, randfunc=generator.read)
    try:
        return cipher.encrypt(data)
    except ValueError as e:
        raise EncryptionError(f"Encryption failed: {e}") from e


def decrypt_bytes(private_key, ciphertext):
    cipher = PKCS1_OAEP.new(private_key, hashAlgo=SHA256)
    try:
        return cipher.decrypt(ciphertext)
    except ValueError as e:
        raise DecryptionError(f"Decryption failed, wrong seed or corrupted ciphertext: {e}") from e
