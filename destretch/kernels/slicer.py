# -*- coding: utf-8 -*-
"""
Kernel Slicer - Partition an image into a centered grid of square kernels.

Lays a regular grid of ``kernel_size x kernel_size`` windows over an image
with a stride derived from ``spacing_ratio``. Any leftover margin (at most
``spacing - 1`` pixels per axis) is split as evenly as integer division
allows, so the grid sits centered in the image. Windows are numpy views;
no samples are copied.

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

# Standard library
import logging
import math
from typing import Annotated, Any, Tuple

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import InvalidKernelSizeError
from destretch.kernels.base import KernelGrid, KernelWindow, as_image
from destretch.params import Desc, Range, param_spec

logger = logging.getLogger(__name__)

SPACING_RATIO = param_spec('spacing_ratio', Annotated[
    float, Range(min=0.0, min_inclusive=False),
    Desc('Stride between kernels as a fraction of kernel size'),
])


def kernel_spacing(kernel_size: int, spacing_ratio: float) -> int:
    """Stride between adjacent kernels in pixels.

    ``max(1, round(kernel_size * spacing_ratio))`` with halves rounded away
    from zero.

    Raises
    ------
    TypeError
        If ``spacing_ratio`` is not a number.
    InvalidParameterError
        If ``spacing_ratio`` is not a finite positive number.
    """
    SPACING_RATIO.validate(spacing_ratio)
    return max(1, int(math.floor(kernel_size * spacing_ratio + 0.5)))


def _validate_kernel_size(kernel_size: int, width: int, height: int) -> None:
    if isinstance(kernel_size, bool) or \
            not isinstance(kernel_size, (int, np.integer)):
        raise InvalidKernelSizeError(
            f"kernel_size must be int, got {type(kernel_size).__name__}"
        )
    if kernel_size < 1 or kernel_size > min(width, height):
        raise InvalidKernelSizeError(
            f"kernel_size must be in [1, {min(width, height)}] for a "
            f"{width}x{height} image, got {kernel_size}"
        )


def _layout(
    width: int, height: int, kernel_size: int, spacing: int
) -> Tuple[int, int, int, int]:
    """Grid counts and centering offsets along both axes."""
    centered_width = width - kernel_size
    centered_height = height - kernel_size
    kernels_x = centered_width // spacing
    kernels_y = centered_height // spacing
    offset_x = (centered_width % spacing) // 2
    offset_y = (centered_height % spacing) // 2
    return kernels_x, kernels_y, offset_x, offset_y


def kernel_grid_shape(
    image_shape: Tuple[int, int],
    kernel_size: int,
    spacing_ratio: float,
) -> Tuple[int, int]:
    """Shape of the grid ``slice_kernels`` would produce.

    Computes ``(kernels_x, kernels_y)`` from dimensions alone, without
    touching pixel data.

    Parameters
    ----------
    image_shape : Tuple[int, int]
        Image ``(width, height)``.
    kernel_size : int
        Kernel side length in pixels.
    spacing_ratio : float
        Stride as a fraction of ``kernel_size``.

    Returns
    -------
    Tuple[int, int]

    Raises
    ------
    InvalidKernelSizeError
        If ``kernel_size`` is outside ``[1, min(width, height)]``.
    InvalidParameterError
        If ``spacing_ratio`` is not a finite positive number.
    """
    width, height = image_shape
    _validate_kernel_size(kernel_size, width, height)
    spacing = kernel_spacing(kernel_size, spacing_ratio)
    kernels_x, kernels_y, _, _ = _layout(width, height, kernel_size, spacing)
    return kernels_x, kernels_y


def slice_kernels(
    image: Any,
    kernel_size: int,
    spacing_ratio: float,
) -> KernelGrid:
    """Slice an image into a grid of square kernel views.

    Window ``(i, j)`` covers axis-0 indices
    ``[i * spacing + offset_x, i * spacing + offset_x + kernel_size)`` and
    axis-1 indices ``[j * spacing + offset_y, ... + kernel_size)``.

    Parameters
    ----------
    image : array-like
        2D sample array, shape ``(width, height)``.
    kernel_size : int
        Kernel side length in pixels. Must satisfy
        ``1 <= kernel_size <= min(width, height)``.
    spacing_ratio : float
        Stride between kernels as a fraction of ``kernel_size``.

    Returns
    -------
    KernelGrid
        Grid of shape ``(kernels_x, kernels_y)``. Empty along an axis when
        the image is less than one stride larger than a kernel there.

    Raises
    ------
    InvalidKernelSizeError
        If ``kernel_size`` is not an int in ``[1, min(width, height)]``.
    InvalidParameterError
        If ``spacing_ratio`` is not a finite positive number.
    ValidationError
        If ``image`` is not a 2D array of a supported element type.

    Examples
    --------
    >>> grid = slice_kernels(np.zeros((256, 128)), 32, 0.5)
    >>> grid.shape
    (14, 6)
    """
    data = as_image(image)
    width, height = data.shape
    _validate_kernel_size(kernel_size, width, height)
    kernel_size = int(kernel_size)
    spacing = kernel_spacing(kernel_size, spacing_ratio)

    kernels_x, kernels_y, offset_x, offset_y = _layout(
        width, height, kernel_size, spacing
    )

    windows = np.empty((kernels_x, kernels_y), dtype=object)
    for i in range(kernels_x):
        x0 = i * spacing + offset_x
        for j in range(kernels_y):
            y0 = j * spacing + offset_y
            windows[i, j] = KernelWindow(
                data[x0:x0 + kernel_size, y0:y0 + kernel_size], x0, y0
            )

    logger.debug(
        "Sliced %dx%d image into %dx%d kernels (size=%d, spacing=%d, "
        "offset=(%d, %d))",
        width, height, kernels_x, kernels_y, kernel_size, spacing,
        offset_x, offset_y,
    )
    return KernelGrid(windows, spacing=spacing, offset=(offset_x, offset_y))
