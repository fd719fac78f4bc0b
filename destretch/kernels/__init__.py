# -*- coding: utf-8 -*-
"""
Kernels Module - Kernel grid construction over 2D sample arrays.

Partitions an image into a centered, regular grid of square subwindows
("kernels"). Windows are non-owning numpy views into the source image.

Key Classes
-----------
- KernelWindow: Named tuple holding one window view and its origin
- KernelGrid: 2D container of equally sized windows
- slice_kernels: Build a ``KernelGrid`` from an image
- kernel_grid_shape: Grid shape from dimensions alone

Usage
-----
    >>> from destretch.kernels import slice_kernels
    >>> grid = slice_kernels(image, kernel_size=32, spacing_ratio=0.5)
    >>> grid.shape
    (14, 6)
    >>> window = grid[0, 0]
    >>> window.data.shape
    (32, 32)

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

from destretch.kernels.base import KernelGrid, KernelWindow, as_image
from destretch.kernels.slicer import (
    kernel_grid_shape,
    kernel_spacing,
    slice_kernels,
)

__all__ = [
    'KernelGrid',
    'KernelWindow',
    'as_image',
    'kernel_grid_shape',
    'kernel_spacing',
    'slice_kernels',
]
