import hashlib


def sha256_digest(seed_bytes: bytes) -> bytes:
    """Standard SHA-256 hashing."""
    return hashlib.sha256(seed_bytes).digest()


def hash_message(seed_bytes: bytes, message: str) -> str:
    """
    SHA-256 over the raw seed followed by the UTF-8 message.
    Seed first: swapping the order changes the digest.
    """
    return sha256_digest(seed_bytes + message.encode("utf-8")).hex()
