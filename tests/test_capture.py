"""
Tests for the pixel source: PNG encode/decode, seed file read/write and
camera capture against a fake cv2.VideoCapture.
"""

import numpy as np
import pytest

import pixelseed.capture as capture
from pixelseed.capture import (
    capture_image, decode_png, encode_png, load_image, save_frame, seed_path,
)
from pixelseed.entropy import derive_seed
from pixelseed.errors import PixelSourceError
from pixelseed.utils import to_rgba


class FakeCapture:
    """Stands in for cv2.VideoCapture; hands out the same BGR frame."""

    def __init__(self, frame, opened=True):
        self.frame = frame
        self.opened = opened
        self.reads = 0
        self.released = False

    def isOpened(self):
        return self.opened

    def read(self):
        self.reads += 1
        if self.frame is None:
            return False, None
        return True, self.frame.copy()

    def release(self):
        self.released = True


@pytest.fixture
def bgr_frame():
    rng = np.random.default_rng(99)
    return rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)


def install_camera(monkeypatch, fake):
    opened = []

    def factory(index):
        opened.append(index)
        return fake

    monkeypatch.setattr(capture.cv2, "VideoCapture", factory)
    return opened


class TestPng:

    def test_roundtrip_pixels(self, noise_image):
        decoded = decode_png(encode_png(noise_image))
        assert decoded.dtype == np.uint8
        np.testing.assert_array_equal(decoded, noise_image)

    def test_roundtrip_seed(self, noise_image):
        assert derive_seed(decode_png(encode_png(noise_image))) == derive_seed(noise_image)

    def test_png_signature(self, black_image):
        assert encode_png(black_image).startswith(b"\x89PNG")

    @pytest.mark.parametrize("data", [b"", b"not a png at all"])
    def test_garbage_rejected(self, data):
        with pytest.raises(PixelSourceError):
            decode_png(data)


class TestSeedFile:

    def test_extension_always_appended(self):
        assert seed_path("seed") == "seed.png"
        assert seed_path("shot.png") == "shot.png.png"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(PixelSourceError) as exc:
            load_image(str(tmp_path / "missing.png"))
        assert exc.value.stage == "acquisition"

    def test_save_then_load(self, tmp_path, bgr_frame):
        path = str(tmp_path / "seed.png")
        saved = save_frame(bgr_frame, path)
        loaded = load_image(path)
        np.testing.assert_array_equal(saved, loaded)
        assert derive_seed(saved) == derive_seed(loaded)

    def test_save_converts_channel_order(self, tmp_path, bgr_frame):
        saved = save_frame(bgr_frame, str(tmp_path / "seed.png"))
        np.testing.assert_array_equal(saved[..., 0], bgr_frame[..., 2])
        np.testing.assert_array_equal(saved[..., 2], bgr_frame[..., 0])
        assert (saved[..., 3] == 255).all()

    def test_save_unwritable(self, tmp_path, bgr_frame):
        with pytest.raises(PixelSourceError):
            save_frame(bgr_frame, str(tmp_path / "no_such_dir" / "seed.png"))


class TestCamera:

    def test_capture_writes_seed_file(self, monkeypatch, tmp_path, bgr_frame):
        fake = FakeCapture(bgr_frame)
        opened = install_camera(monkeypatch, fake)
        path = tmp_path / "seed.png"

        pixels = capture_image(str(path), camera_index=2, warmup_frames=4)

        assert opened == [2]
        assert fake.reads == 5
        assert fake.released
        assert path.exists()
        np.testing.assert_array_equal(pixels, to_rgba(bgr_frame))

    def test_camera_not_opened(self, monkeypatch, tmp_path):
        install_camera(monkeypatch, FakeCapture(None, opened=False))
        with pytest.raises(PixelSourceError):
            capture_image(str(tmp_path / "seed.png"))
        assert not (tmp_path / "seed.png").exists()

    def test_no_frame(self, monkeypatch, tmp_path):
        fake = FakeCapture(None)
        install_camera(monkeypatch, fake)
        with pytest.raises(PixelSourceError):
            capture_image(str(tmp_path / "seed.png"), warmup_frames=0)
        assert fake.released


class TestToRgba:

    def test_gray(self):
        gray = np.full((4, 8), 7, dtype=np.uint8)
        rgba = to_rgba(gray)
        assert rgba.shape == (4, 8, 4)
        assert (rgba[..., :3] == 7).all()
        assert (rgba[..., 3] == 255).all()

    def test_bgra(self):
        bgra = np.zeros((2, 2, 4), dtype=np.uint8)
        bgra[..., 0] = 1
        bgra[..., 3] = 9
        rgba = to_rgba(bgra)
        assert (rgba[..., 2] == 1).all()
        assert (rgba[..., 3] == 9).all()

    def test_16_bit_scaled(self):
        img = np.full((2, 2, 3), 65535, dtype=np.uint16)
        assert (to_rgba(img) == 255).all()

    def test_float_rejected(self):
        with pytest.raises(ValueError):
            to_rgba(np.zeros((2, 2, 3), dtype=np.float32))
