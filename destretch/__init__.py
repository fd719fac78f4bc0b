# -*- coding: utf-8 -*-
"""
destretch - Local displacement estimation for image co-registration.

Measures local geometric distortion between a reference image and a scene
image of the same field by slicing both into matching grids of square
kernels and locating, per kernel pair, the FFT cross-correlation peak.
The resulting displacement field feeds a downstream warp/resample stage.

Dependencies
------------
numpy
scipy

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from destretch.exceptions import (
    DestretchError,
    ValidationError,
    InvalidKernelSizeError,
    MismatchedKernelsError,
    MismatchedKernelSizesError,
    InvalidParameterError,
    HandlerLengthError,
    DivideByZeroError,
)
from destretch.vector import Vec2, offset_vector, grid_vector
from destretch.kernels import KernelGrid, KernelWindow, slice_kernels
from destretch.spectral import HandlerCache, TransformHandler, forward, inverse
from destretch.offset import (
    CrossCorrelationEstimator,
    OffsetEstimator,
    OffsetMap,
    estimate_offsets,
)

__all__ = [
    'DestretchError',
    'ValidationError',
    'InvalidKernelSizeError',
    'MismatchedKernelsError',
    'MismatchedKernelSizesError',
    'InvalidParameterError',
    'HandlerLengthError',
    'DivideByZeroError',
    'Vec2',
    'offset_vector',
    'grid_vector',
    'KernelGrid',
    'KernelWindow',
    'slice_kernels',
    'HandlerCache',
    'TransformHandler',
    'forward',
    'inverse',
    'CrossCorrelationEstimator',
    'OffsetEstimator',
    'OffsetMap',
    'estimate_offsets',
]
