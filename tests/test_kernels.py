# -*- coding: utf-8 -*-
"""
Tests for kernel grid construction.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import math

import numpy as np
import pytest

from destretch.exceptions import (
    InvalidKernelSizeError,
    InvalidParameterError,
    ValidationError,
)
from destretch.kernels import (
    KernelGrid,
    KernelWindow,
    as_image,
    kernel_grid_shape,
    kernel_spacing,
    slice_kernels,
)
from destretch.offset import estimate_offsets
from destretch.vector import Vec2


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ramp_image():
    """256x128 image where each sample encodes its own position."""
    x, y = np.meshgrid(np.arange(256), np.arange(128), indexing='ij')
    return (x + y * 256).astype(np.int64)


# ---------------------------------------------------------------------------
# as_image
# ---------------------------------------------------------------------------

class TestAsImage:

    def test_returns_read_only_view(self, ramp_image):
        image = as_image(ramp_image)
        assert np.shares_memory(image, ramp_image)
        assert not image.flags.writeable
        assert ramp_image.flags.writeable

    def test_accepts_nested_lists(self):
        image = as_image([[1, 2], [3, 4]])
        assert image.shape == (2, 2)

    def test_rejects_3d(self):
        with pytest.raises(ValidationError, match="2D"):
            as_image(np.zeros((2, 3, 4)))

    @pytest.mark.parametrize('dtype', ['>f4', '>f8', '>i2', '>u4', '<i4'])
    def test_accepts_either_byte_order(self, dtype):
        source = np.arange(16).reshape(4, 4).astype(dtype)
        image = as_image(source)
        assert image.dtype == np.dtype(dtype)
        assert np.shares_memory(image, source)

    @pytest.mark.parametrize('dtype', [np.complex128, np.bool_, '>c16'])
    def test_rejects_unsupported_dtype(self, dtype):
        with pytest.raises(ValidationError, match="element type"):
            as_image(np.zeros((4, 4), dtype=dtype))


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------

class TestKernelSpacing:

    def test_half_ratio(self):
        assert kernel_spacing(32, 0.5) == 16

    def test_rounds_half_up(self):
        assert kernel_spacing(5, 0.5) == 3
        assert kernel_spacing(3, 0.5) == 2

    def test_clamped_to_one(self):
        assert kernel_spacing(4, 0.01) == 1

    @pytest.mark.parametrize('ratio', [0, -0.5, float('nan'), float('inf')])
    def test_invalid_ratio_raises(self, ratio):
        with pytest.raises(InvalidParameterError):
            kernel_spacing(8, ratio)


# ---------------------------------------------------------------------------
# slice_kernels
# ---------------------------------------------------------------------------

class TestSliceKernels:

    def test_grid_shape_256x128(self, ramp_image):
        grid = slice_kernels(ramp_image, 32, 0.5)
        assert grid.shape == (14, 6)
        assert grid.shape == ((256 - 32) // 16, (128 - 32) // 16)
        assert len(grid) == 84
        assert grid.kernel_shape == (32, 32)

    def test_windows_are_views(self, ramp_image):
        grid = slice_kernels(ramp_image, 32, 0.5)
        window = grid[3, 2]
        assert isinstance(window, KernelWindow)
        assert np.shares_memory(window.data, ramp_image)
        assert not window.data.flags.writeable

    def test_window_contents_match_source(self, ramp_image):
        grid = slice_kernels(ramp_image, 32, 0.5)
        window = grid[3, 2]
        assert (window.x0, window.y0) == (48, 32)
        np.testing.assert_array_equal(
            window.data, ramp_image[48:80, 32:64]
        )

    def test_leftover_margin_is_centered(self):
        image = np.zeros((103, 97))
        grid = slice_kernels(image, 10, 0.5)
        # spacing 5; 93 % 5 = 3 -> offset 1; 87 % 5 = 2 -> offset 1
        assert grid.shape == (18, 17)
        assert (grid[0, 0].x0, grid[0, 0].y0) == (1, 1)
        assert (grid[2, 3].x0, grid[2, 3].y0) == (11, 16)
        assert grid.offset == Vec2(1, 1, dtype='int64')
        assert grid.spacing == Vec2(5, 5, dtype='int64')

    def test_source_not_modified(self, ramp_image):
        before = ramp_image.copy()
        slice_kernels(ramp_image, 16, 0.25)
        np.testing.assert_array_equal(ramp_image, before)
        assert ramp_image.flags.writeable

    @pytest.mark.parametrize('width,height,k,ratio', [
        (64, 64, 8, 0.5),
        (100, 37, 7, 0.3),
        (50, 80, 50, 0.5),
        (33, 45, 1, 1.0),
        (20, 20, 4, 0.01),
        (90, 60, 12, 1.7),
    ])
    def test_shape_and_bounds_property(self, width, height, k, ratio):
        image = np.arange(width * height, dtype=np.float32).reshape(width, height)
        grid = slice_kernels(image, k, ratio)
        s = max(1, math.floor(k * ratio + 0.5))
        assert grid.shape == ((width - k) // s, (height - k) // s)
        assert grid.shape == kernel_grid_shape((width, height), k, ratio)
        for window in grid:
            assert window.shape == (k, k)
            assert 0 <= window.x0 and window.x1 <= width
            assert 0 <= window.y0 and window.y1 <= height

    def test_spacing_clamp_produces_dense_grid(self):
        grid = slice_kernels(np.zeros((10, 10)), 4, 0.01)
        assert grid.shape == (6, 6)

    def test_marginal_image_gives_empty_grid(self):
        grid = slice_kernels(np.zeros((40, 40)), 32, 0.5)
        assert grid.shape == (0, 0)
        assert grid.is_empty
        assert grid.kernel_shape is None
        assert list(grid) == []

    def test_kernel_equal_to_width_gives_empty_axis(self):
        grid = slice_kernels(np.zeros((32, 64)), 32, 0.5)
        assert grid.shape == (0, 2)
        assert grid.is_empty

    @pytest.mark.parametrize('k', [0, -1, 129, 300])
    def test_invalid_kernel_size_raises(self, ramp_image, k):
        with pytest.raises(InvalidKernelSizeError):
            slice_kernels(ramp_image, k, 0.5)

    def test_invalid_kernel_size_is_value_error(self, ramp_image):
        with pytest.raises(ValueError):
            slice_kernels(ramp_image, 0, 0.5)

    def test_float_kernel_size_raises(self, ramp_image):
        with pytest.raises(InvalidKernelSizeError, match="must be int"):
            slice_kernels(ramp_image, 8.0, 0.5)

    def test_invalid_spacing_ratio_raises(self, ramp_image):
        with pytest.raises(InvalidParameterError):
            slice_kernels(ramp_image, 8, 0.0)

    @pytest.mark.parametrize('dtype', ['>f4', '>i2'])
    def test_big_endian_image_slices_and_estimates(self, dtype):
        rng = np.random.default_rng(11)
        native = (rng.standard_normal((64, 64)) * 1000).astype(dtype[1:])
        reference = native.astype(dtype)
        scene = np.roll(native, (2, 3), axis=(0, 1)).astype(dtype)

        ref_grid = slice_kernels(reference, 16, 0.5)
        scene_grid = slice_kernels(scene, 16, 0.5)
        assert ref_grid.shape == (6, 6)
        np.testing.assert_array_equal(ref_grid[1, 2].data, native[8:24, 16:32])

        offsets = estimate_offsets(ref_grid, scene_grid)
        np.testing.assert_array_equal(offsets.dx, 2.0)
        np.testing.assert_array_equal(offsets.dy, 3.0)

    def test_row_major_iteration(self):
        grid = slice_kernels(np.zeros((12, 12)), 4, 1.0)
        origins = [(w.x0, w.y0) for w in grid]
        assert origins[:3] == [(0, 0), (0, 4), (4, 0)]


# ---------------------------------------------------------------------------
# KernelGrid
# ---------------------------------------------------------------------------

class TestKernelGrid:

    def test_from_stack(self):
        stack = np.arange(3 * 2 * 4 * 4, dtype=np.float64).reshape(3, 2, 4, 4)
        grid = KernelGrid.from_stack(stack)
        assert grid.shape == (3, 2)
        assert grid.kernel_shape == (4, 4)
        assert (grid[1, 1].x0, grid[1, 1].y0) == (4, 4)
        np.testing.assert_array_equal(grid[2, 1].data, stack[2, 1])
        assert grid.spacing is None

    def test_from_stack_requires_4d(self):
        with pytest.raises(ValidationError, match="4D"):
            KernelGrid.from_stack(np.zeros((4, 4, 4)))

    def test_mixed_window_shapes_rejected(self):
        windows = np.empty((1, 2), dtype=object)
        windows[0, 0] = KernelWindow(np.zeros((4, 4)), 0, 0)
        windows[0, 1] = KernelWindow(np.zeros((3, 3)), 0, 4)
        with pytest.raises(ValidationError, match="share one shape"):
            KernelGrid(windows)

    def test_non_window_entries_rejected(self):
        windows = np.empty((1, 1), dtype=object)
        windows[0, 0] = np.zeros((4, 4))
        with pytest.raises(ValidationError, match="KernelWindow"):
            KernelGrid(windows)

    def test_repr(self):
        grid = KernelGrid.from_stack(np.zeros((2, 2, 4, 4)))
        assert repr(grid) == "KernelGrid(shape=(2, 2), kernel_shape=(4, 4))"
