import argparse
import logging
import sys

from pixelseed.capture import capture_image, load_image, seed_path
from pixelseed.config import PipelineConfig, DEFAULT_SEED_FILE, CAMERA_INDEX, CAMERA_WARMUP_FRAMES, DEMO_KEY_BITS
from pixelseed.entropy import derive_seed
from pixelseed.errors import PixelSeedError
from pixelseed.log import setup_logging
from pixelseed.operations import Rng, Hash, Encrypt, Decrypt, execute

logger = logging.getLogger("pixelseed.main")


def add_operations(parser):
    ops = parser.add_subparsers(dest="operation", required=True)
    ops.add_parser("rng", help="Print the seed checksum, 10 random numbers and 10 random bools.")
    ops.add_parser("hash", help="SHA-256 of the seed followed by MESSAGE.").add_argument("message")
    ops.add_parser("encrypt", help="RSA-encrypt PLAINTEXT with the seed-derived key.").add_argument("plaintext")
    ops.add_parser("decrypt", help="Decrypt hex CIPHERTEXT with the seed-derived key.").add_argument("ciphertext")


def build_parser():
    parser = argparse.ArgumentParser(description="Derive a deterministic seed from an image and use it.")
    parser.add_argument("-v", "--verbose", action="store_true")
    modes = parser.add_subparsers(dest="mode", required=True)

    save = modes.add_parser("save", help="Capture an image, save it as the seed file and use its seed.")
    save.add_argument("--camera", type=int, default=CAMERA_INDEX)
    save.add_argument("--warmup", type=int, default=CAMERA_WARMUP_FRAMES)
    load = modes.add_parser("load", help="Load a saved seed file and use its seed.")

    for sub in (save, load):
        # The image is always read and written as PNG
        sub.add_argument("-f", "--seed-file", default=DEFAULT_SEED_FILE)
        sub.add_argument("--key-bits", type=int, default=DEMO_KEY_BITS)
        add_operations(sub)
    return parser


def build_operation(args):
    if args.operation == "rng":
        return Rng()
    if args.operation == "hash":
        return Hash(args.message)
    if args.operation == "encrypt":
        return Encrypt(args.plaintext)
    return Decrypt(args.ciphertext)


def run(args):
    config = PipelineConfig(seed_file=args.seed_file, key_bits=args.key_bits)
    path = seed_path(config.seed_file)

    if args.mode == "save":
        config.camera_index, config.warmup_frames = args.camera, args.warmup
        pixels = capture_image(path, config.camera_index, config.warmup_frames)
    else:
        pixels = load_image(path)

    seed, _ = derive_seed(pixels)
    return execute(seed, build_operation(args), config)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        result = run(args)
    except PixelSeedError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"error [{e.stage}]: {e}", file=sys.stderr)
        return 1

    print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
