import logging

import cv2
import numpy as np
import pytest

from floatspace.input.reference_image import ReferenceImage


def gradient(h, w):
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[..., 0] = np.arange(w, dtype=np.uint8)[None, :]
    img[..., 1] = np.arange(h, dtype=np.uint8)[:, None]
    return img


def test_cover_fit_for_wide_image():
    ref = ReferenceImage(gradient(100, 200), (400, 400))
    # height limits: 400/100 = 4 > 400/200 = 2
    assert ref.scale == pytest.approx(4.0)
    assert ref.offset_x == pytest.approx((400 - 800) / 2)
    assert ref.offset_y == pytest.approx(0.0)


def test_canvas_centre_maps_to_image_centre():
    ref = ReferenceImage(gradient(100, 200), (400, 400))
    assert ref.to_image(200, 200) == (100, 50)


def test_coordinates_are_clamped_to_image():
    ref = ReferenceImage(gradient(50, 60), (60, 50))
    assert ref.to_image(-100, -100) == (0, 0)
    assert ref.to_image(1e6, 1e6) == (59, 49)


def test_sample_pixel_returns_rgb_ints():
    ref = ReferenceImage(gradient(50, 60), (60, 50))
    color = ref.sample_pixel(12.7, 30.2)
    assert color == (12, 30, 0)
    assert all(isinstance(c, int) for c in color)


def test_fit_recomputes_on_resize():
    ref = ReferenceImage(gradient(100, 100), (100, 100))
    ref.fit((300, 100))
    assert ref.scale == pytest.approx(3.0)
    assert ref.offset_y == pytest.approx(-100.0)


def test_empty_reference_has_no_image():
    assert not ReferenceImage().has_image()


def test_load_missing_file_warns(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="floatspace.input.reference_image"):
        ref = ReferenceImage.load(tmp_path / "nope.jpg")
    assert not ref.has_image()
    assert "could not read" in caplog.text


def test_load_converts_bgr_to_rgb(tmp_path):
    bgr = np.zeros((8, 8, 3), dtype=np.uint8)
    bgr[..., 0] = 255  # blue in OpenCV order
    path = tmp_path / "F00.png"
    cv2.imwrite(str(path), bgr)
    ref = ReferenceImage.load(path, (8, 8))
    assert ref.sample_pixel(4, 4) == (0, 0, 255)


def test_load_random_picks_matching_file(tmp_path):
    cv2.imwrite(str(tmp_path / "F01.png"), np.full((4, 4, 3), 10, dtype=np.uint8))
    cv2.imwrite(str(tmp_path / "other.png"), np.full((4, 4, 3), 200, dtype=np.uint8))
    ref = ReferenceImage.load_random(tmp_path, (4, 4), pattern="F*.png", rng=np.random.default_rng(0))
    assert ref.sample_pixel(1, 1) == (10, 10, 10)


def test_load_random_without_images_falls_back(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        ref = ReferenceImage.load_random(tmp_path / "missing", (10, 10))
    assert not ref.has_image()
    assert "no reference images" in caplog.text


def test_load_random_with_no_directory():
    assert not ReferenceImage.load_random(None).has_image()
