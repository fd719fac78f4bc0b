# -*- coding: utf-8 -*-
"""
Transform Handlers - Reusable per-axis FFT state bound to a fixed length.

A ``TransformHandler`` performs 1D forward and inverse complex transforms
along one axis of a 2D array whose length along that axis equals the
handler's bound length. Building a handler computes the ``scipy.fft``
plan for that length once; every later call with the same handler reuses
it. ``HandlerCache`` hands out one handler per length so callers can share
handlers across every kernel pair of the same size.

Handlers are not meant for simultaneous use from several threads. Give
each worker its own ``HandlerCache``.

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

# Standard library
import logging
from typing import Dict, Optional, Tuple

# Third-party
import numpy as np
from scipy import fft as sp_fft

# Destretch internal
from destretch.exceptions import HandlerLengthError, ValidationError

logger = logging.getLogger(__name__)


class TransformHandler:
    """1D complex FFT along one axis, bound to a fixed length.

    Parameters
    ----------
    length : int
        Axis length this handler transforms. Must be positive.
    workers : int, optional
        Worker threads ``scipy.fft`` may use for a single transform.
        ``None`` uses the ``scipy.fft`` default (one).

    Raises
    ------
    ValidationError
        If ``length`` is not a positive int.

    Examples
    --------
    >>> hx = TransformHandler(16)
    >>> spectrum = hx.forward(np.ones((16, 8), dtype=complex), axis=0)
    >>> hx.forward(np.ones((8, 8), dtype=complex), axis=0)
    Traceback (most recent call last):
        ...
    HandlerLengthError: ...
    """

    def __init__(self, length: int, workers: Optional[int] = None) -> None:
        if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
            raise ValidationError(
                f"Handler length must be int, got {type(length).__name__}"
            )
        if length < 1:
            raise ValidationError(
                f"Handler length must be positive, got {length}"
            )
        self._length = int(length)
        self._workers = workers

        # Builds and caches the pocketfft plan for this length.
        sp_fft.fft(np.zeros(self._length, dtype=np.complex128))
        logger.debug("Built transform handler for length %d", self._length)

    @property
    def length(self) -> int:
        """Axis length this handler is bound to."""
        return self._length

    def _check(self, data: np.ndarray, axis: int) -> None:
        if data.shape[axis] != self._length:
            raise HandlerLengthError(
                f"Handler bound to length {self._length} applied to axis "
                f"{axis} of length {data.shape[axis]}"
            )

    def forward(self, data: np.ndarray, axis: int) -> np.ndarray:
        """Forward FFT of *data* along *axis*.

        Parameters
        ----------
        data : np.ndarray
            Complex array. ``data.shape[axis]`` must equal ``length``.
        axis : int
            Axis to transform.

        Returns
        -------
        np.ndarray
            New complex array, same shape as *data*.

        Raises
        ------
        HandlerLengthError
            If the axis length differs from the bound length.
        """
        self._check(data, axis)
        return sp_fft.fft(data, axis=axis, workers=self._workers)

    def inverse(self, data: np.ndarray, axis: int) -> np.ndarray:
        """Inverse FFT of *data* along *axis*, scaled by ``1 / length``.

        Raises
        ------
        HandlerLengthError
            If the axis length differs from the bound length.
        """
        self._check(data, axis)
        return sp_fft.ifft(data, axis=axis, workers=self._workers)

    def __repr__(self) -> str:
        return f"TransformHandler(length={self._length})"


class HandlerCache:
    """Per-length cache of ``TransformHandler`` instances.

    ``get(n)`` builds a handler for length ``n`` on first request and
    returns the same instance afterwards. Pass one cache to repeated
    estimator calls to reuse handlers across calls as well as across
    kernel pairs within a call.

    Parameters
    ----------
    workers : int, optional
        Forwarded to every handler the cache builds.
    """

    def __init__(self, workers: Optional[int] = None) -> None:
        self._workers = workers
        self._handlers: Dict[int, TransformHandler] = {}

    def get(self, length: int) -> TransformHandler:
        """Return the handler bound to *length*, building it if needed."""
        handler = self._handlers.get(length)
        if handler is None:
            handler = TransformHandler(length, workers=self._workers)
            self._handlers[handler.length] = handler
        return handler

    def pair(
        self, shape: Tuple[int, int]
    ) -> Tuple[TransformHandler, TransformHandler]:
        """Handlers for axis 0 and axis 1 of a window of *shape*."""
        return self.get(shape[0]), self.get(shape[1])

    def __contains__(self, length: object) -> bool:
        return length in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerCache(lengths={sorted(self._handlers)})"
