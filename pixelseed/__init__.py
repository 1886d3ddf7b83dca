"""Image-seeded RNG, hashing and RSA pipeline."""
