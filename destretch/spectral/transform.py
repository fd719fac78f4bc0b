# -*- coding: utf-8 -*-
"""
Spectral Transform - Separable 2D forward and inverse FFTs over a window.

Applies two 1D transforms in a fixed order, axis 0 with ``handler_x`` and
then axis 1 with ``handler_y``, using handlers built once per window size.
The inverse mirrors the same axis order and returns the full complex
spatial array; callers take the real part or magnitude themselves.

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
from typing import Union

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import ValidationError
from destretch.kernels.base import KernelWindow
from destretch.spectral.handler import TransformHandler


def _complex_dtype(dtype: np.dtype) -> type:
    """Single precision stays single; everything else lifts to complex128."""
    if dtype in (np.float32, np.complex64):
        return np.complex64
    return np.complex128


def _as_2d(data: Union[KernelWindow, np.ndarray], name: str) -> np.ndarray:
    if isinstance(data, KernelWindow):
        data = data.data
    data = np.asarray(data)
    if data.ndim != 2:
        raise ValidationError(f"{name} must be 2D, got {data.ndim}D")
    return data


def forward(
    window: Union[KernelWindow, np.ndarray],
    handler_x: TransformHandler,
    handler_y: TransformHandler,
) -> np.ndarray:
    """2D FFT of a real or complex window.

    Samples are lifted to complex (imaginary part zero), transformed along
    axis 0 with *handler_x*, then along axis 1 with *handler_y*. The input
    is not modified.

    Parameters
    ----------
    window : KernelWindow or np.ndarray
        2D samples.
    handler_x : TransformHandler
        Bound to ``window.shape[0]``.
    handler_y : TransformHandler
        Bound to ``window.shape[1]``.

    Returns
    -------
    np.ndarray
        Complex spectrum, same shape as *window*. ``complex64`` for
        ``float32`` input, ``complex128`` otherwise.

    Raises
    ------
    HandlerLengthError
        If a handler's length differs from the matching window axis.
    ValidationError
        If *window* is not 2D.
    """
    samples = _as_2d(window, 'window')
    lifted = samples.astype(_complex_dtype(samples.dtype))
    intermediate = handler_x.forward(lifted, axis=0)
    return handler_y.forward(intermediate, axis=1)


def inverse(
    spectrum: np.ndarray,
    handler_x: TransformHandler,
    handler_y: TransformHandler,
) -> np.ndarray:
    """2D inverse FFT of a complex spectrum.

    Inverse-transforms axis 0 with *handler_x*, then axis 1 with
    *handler_y*. Conjugate symmetry is not collapsed: the result is the
    full complex spatial array.

    Parameters
    ----------
    spectrum : np.ndarray
        2D complex array.
    handler_x : TransformHandler
        Bound to ``spectrum.shape[0]``.
    handler_y : TransformHandler
        Bound to ``spectrum.shape[1]``.

    Returns
    -------
    np.ndarray
        Complex spatial array, same shape as *spectrum*.

    Raises
    ------
    HandlerLengthError
        If a handler's length differs from the matching axis.
    ValidationError
        If *spectrum* is not 2D.
    """
    data = _as_2d(spectrum, 'spectrum')
    intermediate = handler_x.inverse(data, axis=0)
    return handler_y.inverse(intermediate, axis=1)
