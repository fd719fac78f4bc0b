# -*- coding: utf-8 -*-
"""
Spectral Module - Separable 2D FFTs with reusable per-axis handlers.

Key Classes
-----------
- TransformHandler: 1D FFT along one axis, bound to a fixed length
- HandlerCache: One handler per length, built on first request
- forward: 2D FFT of a window (axis 0, then axis 1)
- inverse: 2D inverse FFT of a spectrum (axis 0, then axis 1)

Usage
-----
    >>> from destretch.spectral import HandlerCache, forward, inverse
    >>> cache = HandlerCache()
    >>> hx, hy = cache.pair(window.shape)
    >>> spectrum = forward(window, hx, hy)
    >>> restored = inverse(spectrum, hx, hy).real

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

from destretch.spectral.handler import HandlerCache, TransformHandler
from destretch.spectral.transform import forward, inverse

__all__ = [
    'HandlerCache',
    'TransformHandler',
    'forward',
    'inverse',
]
