# -*- coding: utf-8 -*-
"""
Offset Module - Per-kernel displacement estimation between two images.

Pairs a reference ``KernelGrid`` with a scene ``KernelGrid`` cell by cell
and measures, for each pair, the integer shift that maximizes their FFT
cross-correlation.

Key Classes
-----------
- OffsetEstimator: Abstract base class for offset estimators
- CrossCorrelationEstimator: FFT cross-correlation estimator
- OffsetMap: Displacement field, one ``(dx, dy)`` per grid cell
- estimate_offsets: Functional form of the cross-correlation estimator
- correlate: Correlation surface of a single window pair
- find_peak: First row-major maximum of a correlation surface

Usage
-----
    >>> from destretch.kernels import slice_kernels
    >>> from destretch.offset import estimate_offsets
    >>> from destretch.spectral import HandlerCache
    >>> ref = slice_kernels(reference_image, 32, 0.5)
    >>> scene = slice_kernels(scene_image, 32, 0.5)
    >>> cache = HandlerCache()
    >>> offsets = estimate_offsets(ref, scene, apod_factor=0.0, handlers=cache)
    >>> offsets.shape
    (14, 6)

Dependencies
------------
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

from destretch.offset.base import OffsetEstimator, check_pairing
from destretch.offset.cross_correlation import (
    CrossCorrelationEstimator,
    correlate,
    estimate_offsets,
)
from destretch.offset.offset_map import OffsetMap
from destretch.offset.peak import find_peak, refine_peak

__all__ = [
    'OffsetEstimator',
    'CrossCorrelationEstimator',
    'OffsetMap',
    'check_pairing',
    'correlate',
    'estimate_offsets',
    'find_peak',
    'refine_peak',
]
