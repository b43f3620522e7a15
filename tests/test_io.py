"""Tests for image I/O functionality."""

import numpy as np
import pytest
from PIL import Image

from color_adapt.io.image_loader import (
    SUPPORTED_EXTENSIONS,
    is_supported_file,
    load_image,
    read_orientation,
)
from color_adapt.io.image_saver import save_image
from color_adapt.processing.buffer import PixelBuffer
from color_adapt.processing.orientation import EXIF_ORIENTATION_TAG, Orientation


def write_jpeg_with_orientation(path, orientation, size=(4, 2)):
    img = Image.new("RGB", size, (200, 100, 50))
    exif = Image.Exif()
    exif[EXIF_ORIENTATION_TAG] = orientation
    img.save(path, exif=exif.tobytes())


class TestImageLoader:
    """Tests for image loading functionality."""

    def test_load_nonexistent_file(self):
        assert load_image("/nonexistent/path/to/image.jpg") == (None, None)

    def test_load_invalid_path(self):
        assert load_image("") == (None, None)
        assert load_image(None) == (None, None)

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"this is not an image")
        assert load_image(str(path)) == (None, None)

    def test_load_over_pixel_limit(self, tmp_path, monkeypatch, random_buffer):
        """Pillow's decompression-bomb guard is reported as a failed load."""
        path = str(tmp_path / "large.png")
        assert save_image(random_buffer, path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 2)
        assert load_image(path) == (None, None)

    def test_supported_extensions(self):
        assert ".jpg" in SUPPORTED_EXTENSIONS
        assert ".png" in SUPPORTED_EXTENSIONS
        assert is_supported_file("photo.JPG")
        assert is_supported_file("photo.webp")
        assert not is_supported_file("photo.txt")
        assert not is_supported_file("")
        assert not is_supported_file(None)

    def test_png_without_exif_is_undefined(self, tmp_path, sample_buffer):
        path = str(tmp_path / "plain.png")
        assert save_image(sample_buffer, path)
        _, orientation = load_image(path)
        assert orientation is Orientation.UNDEFINED

    def test_reads_exif_orientation_without_applying_it(self, tmp_path):
        path = str(tmp_path / "rotated.jpg")
        write_jpeg_with_orientation(path, 6)

        buffer, orientation = load_image(path)
        assert orientation is Orientation.ROTATE_90
        # Stored layout, not transposed
        assert buffer.shape == (4, 2)

    def test_read_orientation_from_path_and_image(self, tmp_path):
        path = str(tmp_path / "upside_down.jpg")
        write_jpeg_with_orientation(path, 3)
        assert read_orientation(path) is Orientation.ROTATE_180
        with Image.open(path) as img:
            assert read_orientation(img) is Orientation.ROTATE_180

    def test_read_orientation_missing_file(self):
        assert read_orientation("/nonexistent/image.jpg") is Orientation.UNDEFINED

    def test_mirrored_orientation_is_undefined(self, tmp_path):
        path = str(tmp_path / "mirrored.jpg")
        write_jpeg_with_orientation(path, 2)
        assert read_orientation(path) is Orientation.UNDEFINED

    def test_grayscale_is_converted(self, tmp_path):
        path = str(tmp_path / "gray.png")
        Image.new("L", (3, 3), 77).save(path)
        buffer, _ = load_image(path)
        assert buffer.pixel(1, 1) == (255, 77, 77, 77)


class TestImageSaver:
    """Tests for image saving functionality."""

    def test_save_none_image(self, tmp_path):
        assert save_image(None, str(tmp_path / "test.png")) is False

    def test_save_raw_array_is_rejected(self, tmp_path):
        assert save_image(np.zeros((2, 2, 4), dtype=np.uint8), str(tmp_path / "test.png")) is False

    def test_save_empty_image(self, tmp_path):
        assert save_image(PixelBuffer.empty(), str(tmp_path / "test.png")) is False

    def test_save_invalid_path(self, sample_buffer):
        assert save_image(sample_buffer, "") is False

    def test_save_invalid_quality(self, sample_buffer, tmp_path):
        assert save_image(sample_buffer, str(tmp_path / "q.jpg"), quality="high") is False

    def test_save_unknown_extension(self, sample_buffer, tmp_path):
        assert save_image(sample_buffer, str(tmp_path / "image.unknownext")) is False

    def test_png_round_trip_is_lossless(self, tmp_path, random_buffer):
        path = str(tmp_path / "round_trip.png")
        assert save_image(random_buffer, path, png_compression=9)

        loaded, _ = load_image(path)
        assert loaded == random_buffer

    def test_jpeg_drops_alpha(self, tmp_path, sample_buffer):
        path = str(tmp_path / "opaque.jpg")
        assert save_image(sample_buffer, path, quality=90)

        loaded, _ = load_image(path)
        assert loaded.shape == sample_buffer.shape
        assert np.all(loaded.alpha == 255)

    def test_save_creates_directory(self, tmp_path, sample_buffer):
        nested = tmp_path / "subdir" / "nested" / "image.png"
        assert save_image(sample_buffer, str(nested))
        assert nested.exists()
