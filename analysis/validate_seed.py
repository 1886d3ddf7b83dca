import sys
import os
import time
import argparse
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from scipy.stats import chisquare
from math import erfc, sqrt

# Fix imports to ensure 'pixelseed' is found when run as a script
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from pixelseed.capture import load_image, encode_png, decode_png
from pixelseed.entropy import derive_seed
from pixelseed.conditioner import hash_message
from pixelseed.rng import new_generator

RESULTS_DIR = "results/validation"


def bit_distance(a: bytes, b: bytes) -> int:
    return bin(int.from_bytes(a, 'big') ^ int.from_bytes(b, 'big')).count('1')


# PART 1: DERIVATION
def test_roundtrip(pixels):
    print("\n[TEST 1] PNG Round-Trip Determinism...")
    seed, checksum = derive_seed(pixels)
    seed_rt, checksum_rt = derive_seed(decode_png(encode_png(pixels)))
    if seed == seed_rt:
        print(f"   PASS: Seed reproduced after save/load (checksum {checksum}).")
    else:
        print(f"   FAIL: Seed changed after save/load ({checksum} -> {checksum_rt}).")
    return seed


def test_sensitivity(pixels):
    print("\n[TEST 2] Single-Pixel Sensitivity (Seed vs Hash)...")
    seed_a, _ = derive_seed(pixels)
    mod = pixels.copy(); mod[0, 0, 0] ^= 1
    seed_b, _ = derive_seed(mod)

    seed_bits = bit_distance(seed_a, seed_b)
    hash_bits = bit_distance(bytes.fromhex(hash_message(seed_a, "")), bytes.fromhex(hash_message(seed_b, "")))
    print(f"   Seed bits flipped: {seed_bits}/256 (fold is local, not a hash)")
    print(f"   Hash bits flipped: {hash_bits}/256 (Ideal: ~128)")


# PART 2: GENERATOR
def test_rng_uniformity(seed, draws=10000, hi=10):
    print("\n[TEST 3] RNG Integer Uniformity...")
    rng = new_generator(seed)
    values = np.array([rng.gen_range(0, hi) for _ in range(draws)])
    hist = np.bincount(values, minlength=hi)
    chi, p = chisquare(hist, f_exp=[draws / hi] * hi)
    print(f"   Chi-Square: {chi:.2f} | P-Value: {p:.4f}")

    plt.figure(figsize=(6, 4))
    plt.bar(range(hi), hist, color='black')
    plt.title("gen_range(0, 10) Histogram")
    plt.xlabel("Value")
    plt.ylabel("Frequency")
    filename = f"{RESULTS_DIR}/rng_histogram.png"
    plt.savefig(filename)
    plt.close()
    print(f"   Saved plot to {filename}")


def test_rng_monobit(seed, draws=10000):
    print("\n[TEST 4] RNG Bool Monobit...")
    rng = new_generator(seed)
    ones = sum(rng.gen_bool(0.5) for _ in range(draws))
    p_mono = erfc(abs(ones - (draws - ones)) / sqrt(draws) / sqrt(2))
    print(f"   Monobit P-Value: {p_mono:.4f}")


# PART 3: STATISTICS
def test_seed_statistics(pixels, trials=50, sigma=2.0):
    print("\n[TEST 5] Seed Statistics Under Sensor Noise...")
    rows = []
    base, _ = derive_seed(pixels)
    noise_rng = np.random.default_rng()
    for i in range(trials):
        noise = noise_rng.normal(0, sigma, pixels.shape)
        noisy = np.clip(pixels.astype(np.float32) + noise, 0, 255).astype(np.uint8)
        seed, checksum = derive_seed(noisy)
        rows.append({"Trial": i, "Checksum": checksum, "BitsFromBase": bit_distance(base, seed),
                     "SeedHex": seed.hex()})

    df = pd.DataFrame(rows)
    df.to_csv(f"{RESULTS_DIR}/seed_statistics.csv", index=False)
    print(f"   Unique seeds: {df['SeedHex'].nunique()}/{trials}")
    print(f"   Avg Hamming Dist from base: {df['BitsFromBase'].mean():.2f} bits")

    plt.figure(figsize=(6, 4))
    plt.hist(df["Checksum"], bins=20, color='black')
    plt.title("Checksum Distribution")
    plt.savefig(f"{RESULTS_DIR}/checksum_distribution.png")
    plt.close()


def test_throughput(pixels, runs=30):
    print("\n[TEST 6] Derivation Throughput...")
    start = time.time()
    for _ in range(runs): derive_seed(pixels)
    print(f"   Throughput: {runs / (time.time() - start):.2f} images/s")


# MAIN EXECUTION
if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("image", nargs="?", default="seed.png")
    args = parser.parse_args()

    print("SEED VALIDATION")
    os.makedirs(RESULTS_DIR, exist_ok=True)
    pixels = load_image(args.image)

    seed = test_roundtrip(pixels)
    test_sensitivity(pixels)
    test_rng_uniformity(seed)
    test_rng_monobit(seed)
    test_seed_statistics(pixels)
    test_throughput(pixels)
