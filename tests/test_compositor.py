"""Tests for emoji compositing."""

import numpy as np
import pytest

from helpers import BLUE, RED, solid_rgba

from emojify.compositor import (
    SCALE_FACTOR,
    FaceGeometry,
    InvalidGeometry,
    blend_at,
    composite,
    overlay_position,
    overlay_size,
)


SCENARIO_FACE = FaceGeometry(x=100.0, y=100.0, width=200.0, height=200.0)


class TestOverlayGeometry:
    def test_scale_factor(self):
        assert SCALE_FACTOR == 0.9

    def test_scenario_size(self):
        # 100x50 emoji on a 200x200 face
        assert overlay_size((50, 100, 4), SCENARIO_FACE) == (180, 81)

    def test_scenario_position(self):
        assert overlay_position((180, 81), SCENARIO_FACE) == (110.0, 173.0)

    def test_height_gets_scale_factor_twice(self):
        face = FaceGeometry(x=0, y=0, width=100, height=100)
        # A square emoji is not square once scaled
        assert overlay_size((100, 100, 4), face) == (90, 81)

    def test_size_truncates_like_integer_arithmetic(self):
        face = FaceGeometry(x=0, y=0, width=100, height=100)
        # 30 * 90 // 70 = 38, then 38 * 0.9 = 34.2
        assert overlay_size((30, 70, 4), face) == (90, 34)

    def test_position_uses_a_third_of_the_height(self):
        face = FaceGeometry(x=0, y=0, width=100, height=100)
        assert overlay_position((91, 82), face) == (5.0, 23.0)

    def test_face_center(self):
        assert SCENARIO_FACE.center == (200.0, 200.0)
        assert SCENARIO_FACE.position == (100.0, 100.0)


class TestComposite:
    def test_scenario_placement(self, background):
        result = composite(background, solid_rgba(50, 100, RED), SCENARIO_FACE)

        red = np.all(result == RED, axis=2)
        rows, cols = np.nonzero(red)
        assert rows.min() == 173 and rows.max() == 253
        assert cols.min() == 110 and cols.max() == 289
        assert red.sum() == 180 * 81

    def test_output_has_background_shape(self, noisy_background):
        faces = [
            FaceGeometry(x=10, y=10, width=50, height=60),
            FaceGeometry(x=-20, y=90, width=80, height=80),
            FaceGeometry(x=150, y=-30, width=33.3, height=40.7),
        ]
        for face in faces:
            result = composite(noisy_background, solid_rgba(20, 30), face)
            assert result.shape == noisy_background.shape
            assert result.dtype == noisy_background.dtype

    def test_inputs_not_mutated(self, noisy_background):
        overlay = solid_rgba(40, 40, BLUE, alpha=200)
        background_before = noisy_background.copy()
        overlay_before = overlay.copy()

        result = composite(noisy_background, overlay, FaceGeometry(20, 20, 60, 60))

        assert result is not noisy_background
        assert np.array_equal(noisy_background, background_before)
        assert np.array_equal(overlay, overlay_before)

    def test_transparent_overlay_is_a_no_op(self, noisy_background):
        overlay = solid_rgba(64, 64, RED, alpha=0)
        result = composite(noisy_background, overlay, FaceGeometry(30, 20, 80, 80))
        assert np.array_equal(result, noisy_background)

    def test_transparent_overlay_on_rgba_background(self):
        rng = np.random.default_rng(1)
        background = rng.integers(0, 256, size=(80, 80, 4), dtype=np.uint8)
        result = composite(background, solid_rgba(32, 32, alpha=0), FaceGeometry(10, 10, 50, 50))
        assert np.array_equal(result, background)

    def test_half_transparent_overlay_blends(self, background):
        overlay = solid_rgba(50, 100, (200, 200, 200), alpha=128)
        result = composite(background, overlay, SCENARIO_FACE)
        assert tuple(result[200, 200]) == (100, 100, 100)
        assert tuple(result[0, 0]) == (0, 0, 0)

    def test_rgb_overlay_is_opaque(self, noisy_background):
        overlay = np.full((20, 20, 3), 7, dtype=np.uint8)
        result = composite(noisy_background, overlay, FaceGeometry(40, 40, 50, 50))
        # 45x40 emoji at (43, 52)
        assert np.all(result[52:92, 43:88] == 7)

    def test_rgba_background_keeps_alpha_channel(self):
        background = np.zeros((100, 100, 4), dtype=np.uint8)
        overlay = solid_rgba(10, 10, RED, alpha=128)
        result = composite(background, overlay, FaceGeometry(0, 0, 100, 100))

        assert result.shape == (100, 100, 4)
        # Half transparent red over a fully transparent picture stays pure red
        assert tuple(result[50, 50]) == (255, 0, 0, 128)
        assert tuple(result[99, 99]) == (0, 0, 0, 0)

    def test_accepts_integer_geometry(self, background):
        face = FaceGeometry(x=100, y=100, width=200, height=200)
        result = composite(background, solid_rgba(50, 100, RED), face)
        assert tuple(result[173, 110]) == RED


class TestClipping:
    def test_top_left_clipped(self):
        background = np.zeros((100, 100, 3), dtype=np.uint8)
        # 90x81 emoji at (-45, -27)
        result = composite(background, solid_rgba(10, 10), FaceGeometry(-50, -50, 100, 100))

        assert tuple(result[0, 0]) == RED
        assert tuple(result[53, 44]) == RED
        assert tuple(result[54, 0]) == (0, 0, 0)
        assert tuple(result[0, 45]) == (0, 0, 0)

    def test_bottom_right_clipped(self):
        background = np.zeros((100, 100, 3), dtype=np.uint8)
        # 90x81 emoji at (65, 23)
        result = composite(background, solid_rgba(10, 10), FaceGeometry(60, 0, 100, 100))

        assert tuple(result[99, 99]) == RED
        assert tuple(result[23, 65]) == RED
        assert tuple(result[22, 65]) == (0, 0, 0)
        assert tuple(result[23, 64]) == (0, 0, 0)

    def test_completely_outside(self, noisy_background):
        result = composite(noisy_background, solid_rgba(10, 10), FaceGeometry(500, 500, 100, 100))
        assert np.array_equal(result, noisy_background)

    def test_face_too_small_for_emoji_draws_nothing(self, noisy_background):
        # int(1 * 0.9) == 0
        result = composite(noisy_background, solid_rgba(10, 10), FaceGeometry(5, 5, 1.0, 1.0))

        assert result is not noisy_background
        assert np.array_equal(result, noisy_background)

    def test_very_wide_emoji_draws_nothing(self, background):
        # 180 wide, 1 * 180 // 1000 * 0.9 == 0 high
        result = composite(background, solid_rgba(1, 1000), SCENARIO_FACE)

        assert result.shape == background.shape
        assert np.array_equal(result, background)

    def test_blend_at_outside_returns_destination(self):
        dst = np.zeros((10, 10, 3), dtype=np.uint8)
        assert blend_at(dst, solid_rgba(5, 5), -20, 3) is dst
        assert not dst.any()


class TestInvalidGeometry:
    def test_is_value_error(self):
        assert issubclass(InvalidGeometry, ValueError)

    @pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 100), (100, -1)])
    def test_face_size(self, background, width, height):
        with pytest.raises(InvalidGeometry):
            composite(background, solid_rgba(10, 10), FaceGeometry(10, 10, width, height))

    def test_empty_background(self):
        background = np.zeros((0, 10, 3), dtype=np.uint8)
        with pytest.raises(InvalidGeometry):
            composite(background, solid_rgba(10, 10), FaceGeometry(0, 0, 10, 10))

    def test_empty_overlay(self, background):
        overlay = np.zeros((10, 0, 4), dtype=np.uint8)
        with pytest.raises(InvalidGeometry):
            composite(background, overlay, FaceGeometry(0, 0, 10, 10))

    def test_unsupported_image_shape(self):
        with pytest.raises(ValueError):
            composite(np.zeros((10, 10), dtype=np.uint8), solid_rgba(4, 4), FaceGeometry(0, 0, 10, 10))
