"""Tests for grayscale I/O, synthetic hole generation and overlays."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from hole_filling.config import MISSING_VALUE
from hole_filling.finder import calculate_hole
from hole_filling.image_io import (
    BOUNDARY_COLOR,
    INTERIOR_COLOR,
    apply_mask,
    carve_pixels,
    carve_rectangle,
    load_grayscale,
    random_rectangle,
    render_boundary_overlay,
    save_grayscale,
    to_uint8,
)
from hole_filling.pixel import Pixel


def _save_rgb_stripes(path, rows: int = 8, cols: int = 10) -> None:
    """Write an RGB image with a black left half and a white right half."""
    pixels = np.zeros((rows, cols, 3), dtype=np.uint8)
    pixels[:, cols // 2:] = 255
    Image.fromarray(pixels).save(path)


class TestGrayscaleIO:
    def test_load_normalises_to_unit_range(self, tmp_path):
        path = tmp_path / "stripes.png"
        _save_rgb_stripes(path)
        grid = load_grayscale(path)
        assert grid.shape == (8, 10)
        assert grid.dtype == np.float32
        assert grid[:, :5].max() == 0.0
        assert grid[:, 5:].min() == pytest.approx(1.0)

    def test_save_then_load(self, tmp_path):
        grid = np.linspace(0.0, 1.0, 20, dtype=np.float32).reshape(4, 5)
        path = save_grayscale(grid, tmp_path / "nested" / "ramp.png")
        assert path.exists()
        np.testing.assert_allclose(load_grayscale(path), grid, atol=1.0 / 255)

    def test_remaining_holes_encoded_as_black(self):
        grid = np.array([[MISSING_VALUE, 0.5, 1.0]])
        assert to_uint8(grid).tolist() == [[0, 128, 255]]


class TestSyntheticHoles:
    def test_apply_mask(self, tmp_path):
        mask_path = tmp_path / "mask.png"
        _save_rgb_stripes(mask_path)
        grid = np.full((8, 10), 0.3, dtype=np.float32)
        apply_mask(grid, mask_path)
        assert np.all(grid[:, :5] == MISSING_VALUE)
        np.testing.assert_allclose(grid[:, 5:], 0.3)

    def test_apply_mask_shape_mismatch(self, tmp_path):
        mask_path = tmp_path / "mask.png"
        _save_rgb_stripes(mask_path)
        with pytest.raises(ValueError):
            apply_mask(np.zeros((4, 4), dtype=np.float32), mask_path)

    def test_carve_rectangle_is_clipped(self):
        grid = np.zeros((5, 5))
        carve_rectangle(grid, 3, 3, 10, 10)
        assert int(np.count_nonzero(grid == MISSING_VALUE)) == 4

    def test_carve_rectangle_outside_grid(self):
        with pytest.raises(ValueError):
            carve_rectangle(np.zeros((5, 5)), 7, 0, 2, 2)

    def test_carve_pixels(self):
        grid = np.zeros((3, 4))
        carve_pixels(grid, [Pixel(1, 1), Pixel(1, 2), Pixel(2, 2)])
        assert np.argwhere(grid == MISSING_VALUE).tolist() == [[1, 1], [1, 2], [2, 2]]
        with pytest.raises(ValueError):
            carve_pixels(grid, [Pixel(3, 0)])

    @pytest.mark.parametrize("seed", range(10))
    def test_random_rectangle_stays_off_border(self, seed):
        rows, cols = 20, 30
        top, left, height, width = random_rectangle((rows, cols), np.random.RandomState(seed))
        assert height >= 1 and width >= 1
        assert top >= 1 and left >= 1
        assert top + height <= rows - 1
        assert left + width <= cols - 1

    def test_random_rectangle_is_reproducible(self):
        first = random_rectangle((40, 40), np.random.RandomState(42))
        second = random_rectangle((40, 40), np.random.RandomState(42))
        assert first == second

    def test_random_rectangle_needs_room(self):
        with pytest.raises(ValueError):
            random_rectangle((2, 10))


class TestOverlay:
    def test_marks_interior_and_boundary(self):
        grid = np.full((3, 4), 0.5)
        grid[1, 1] = MISSING_VALUE
        hole = calculate_hole(grid, Pixel(1, 1), 4)
        overlay = render_boundary_overlay(grid, hole)
        assert overlay.shape == (3, 4, 3)
        assert overlay.dtype == np.uint8
        assert tuple(overlay[1, 1]) == INTERIOR_COLOR
        for pixel in hole.boundary:
            assert tuple(overlay[pixel.x, pixel.y]) == BOUNDARY_COLOR
        assert tuple(overlay[0, 0]) == (128, 128, 128)
