"""Tests for the colour filters."""

import numpy as np
import pytest

from conftest import solid_photo
from filters import ColorMatrixFilter, FilterManager, MONO_MATRIX


@pytest.fixture
def fm():
    return FilterManager()


@pytest.fixture
def gradient():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(32, 48, 3), dtype=np.uint8)


class TestFilterManager:
    def test_available_filters(self, fm):
        assert fm.get_available_filters() == ["none", "sepia", "mono"]
        assert fm.label("mono") == "Black & White"

    def test_none_is_identity(self, fm, gradient):
        out = fm.apply_filter(gradient, "none")

        np.testing.assert_array_equal(out, gradient)
        assert out is not gradient

    def test_mono_equal_channels(self, fm, gradient):
        out = fm.apply_filter(gradient, "mono")

        assert out.shape == gradient.shape
        assert out.dtype == np.uint8
        np.testing.assert_array_equal(out[..., 0], out[..., 1])
        np.testing.assert_array_equal(out[..., 1], out[..., 2])

    def test_mono_luma_of_pure_red(self, fm):
        red = np.zeros((2, 2, 3), dtype=np.uint8)
        red[..., 0] = 255

        out = fm.apply_filter(red, "mono")

        assert tuple(out[0, 0]) == (76, 76, 76)

    def test_sepia_white(self, fm):
        white = np.full((2, 2, 3), 255, dtype=np.uint8)

        out = fm.apply_filter(white, "sepia")

        assert tuple(out[1, 1]) == (255, 255, 239)

    def test_sepia_is_warm(self, fm, gradient):
        out = fm.apply_filter(gradient, "sepia").astype(int)

        assert np.all(out[..., 0] >= out[..., 1])
        assert np.all(out[..., 1] >= out[..., 2])

    def test_strength_zero_keeps_source(self, fm, gradient):
        out = fm.apply_filter(gradient, "sepia", strength=0.0)

        np.testing.assert_array_equal(out, gradient)

    def test_unknown_filter_unchanged(self, fm, gradient):
        assert fm.apply_filter(gradient, "vintage") is gradient

    def test_apply_to_photo(self, fm):
        photo = solid_photo(4, 4, (200, 30, 30))

        mono = fm.apply_to_photo(photo, "mono")

        assert mono is not photo
        r, g, b = mono.pixels[0, 0]
        assert r == g == b
        # source untouched
        assert tuple(photo.pixels[0, 0]) == (200, 30, 30)
        assert fm.apply_to_photo(photo, "bogus") is photo

    def test_apply_to_photo_goes_through_apply_filter(self, fm, caplog):
        photo = solid_photo(4, 4)

        fm.apply_to_photo(photo, "bogus")

        assert caplog.text.count("Unknown filter: bogus") == 1


class TestColorMatrixFilter:
    def test_rejects_bad_matrix(self):
        with pytest.raises(ValueError):
            ColorMatrixFilter("broken", [[1, 0], [0, 1]])

    def test_mono_matrix_rows_sum_to_one(self):
        assert np.allclose(np.sum(MONO_MATRIX, axis=1), 1.0)


class TestPerformance:
    def test_filter_full_frame(self, fm):
        """Mono on a 1280x720 frame stays interactive"""
        import time

        frame = np.random.default_rng(0).integers(0, 256, size=(720, 1280, 3), dtype=np.uint8)

        start = time.perf_counter()
        fm.apply_filter(frame, "mono")
        elapsed_ms = (time.perf_counter() - start) * 1000

        assert elapsed_ms < 1000
