# -*- coding: utf-8 -*-
"""
Correlation Peak Location - Integer peak search on a correlation surface.

``find_peak`` scans the real part of a correlation surface in row-major
order and returns the first index holding the maximum. NaN samples never
win a comparison, so a surface with isolated NaNs still yields a
deterministic peak, and an all-NaN surface yields ``(0, 0)``.

``refine_peak`` is the hook for sub-pixel interpolation around an integer
peak. No refinement policy ships with this module.

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
from typing import Tuple

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import ValidationError


def find_peak(surface: np.ndarray) -> Tuple[int, int]:
    """Index of the maximum real component of a 2D surface.

    Surfaces follow the image convention: axis 0 is x (column), axis 1
    is y (row). The scan is row-major in image terms, so y is the outer
    loop and x varies fastest. Among equal maxima the one with the
    smallest y wins, then the smallest x. NaN never wins.

    Parameters
    ----------
    surface : np.ndarray
        2D real or complex correlation surface.

    Returns
    -------
    Tuple[int, int]
        ``(x, y)``, i.e. ``(axis0_index, axis1_index)``, of the first
        maximum.

    Raises
    ------
    ValidationError
        If *surface* is not a non-empty 2D array.

    Examples
    --------
    >>> find_peak(np.array([[1.0, 3.0], [3.0, np.nan]]))
    (1, 0)
    """
    values = np.real(np.asarray(surface))
    if values.ndim != 2 or values.size == 0:
        raise ValidationError(
            f"Correlation surface must be a non-empty 2D array, "
            f"got shape {values.shape}"
        )
    ranked = np.where(np.isnan(values), -np.inf, values)
    by_row = ranked.T
    flat = int(np.argmax(by_row))
    iy, ix = np.unravel_index(flat, by_row.shape)
    return int(ix), int(iy)


def refine_peak(
    surface: np.ndarray, peak: Tuple[int, int]
) -> Tuple[float, float]:
    """Sub-pixel location of a correlation peak.

    Extension point for interpolating the peak found by ``find_peak``
    (parabolic, Gaussian, centroid fits and the like). No policy is
    implemented; offset estimates are integer-pixel only.

    Raises
    ------
    NotImplementedError
        Always.
    """
    raise NotImplementedError(
        "Sub-pixel peak refinement is not implemented; "
        "use the integer peak from find_peak()"
    )
