# -*- coding: utf-8 -*-
"""
Offset Map - Per-kernel displacement field produced by offset estimation.

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
from typing import Iterator, Optional, Tuple

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import ValidationError
from destretch.vector import Vec2, offset_vector


class OffsetMap:
    """Grid of ``(dx, dy)`` displacement estimates, one per kernel pair.

    Backed by a ``float64`` array of shape ``(kernels_x, kernels_y, 2)``.
    Indexing returns a ``float64`` ``Vec2``.

    Parameters
    ----------
    shape : Tuple[int, int]
        Grid shape ``(kernels_x, kernels_y)``.
    kernel_shape : Tuple[int, int], optional
        Shape of the kernels the offsets were measured on. Required by
        ``signed()``.
    values : np.ndarray, optional
        Initial ``(kernels_x, kernels_y, 2)`` values. Zeros when omitted.

    Attributes
    ----------
    shape : Tuple[int, int]
    kernel_shape : Tuple[int, int] or None
    """

    def __init__(
        self,
        shape: Tuple[int, int],
        kernel_shape: Optional[Tuple[int, int]] = None,
        values: Optional[np.ndarray] = None,
    ) -> None:
        shape = tuple(int(n) for n in shape)
        if len(shape) != 2:
            raise ValidationError(f"OffsetMap shape must be 2D, got {shape}")
        if values is None:
            values = np.zeros(shape + (2,), dtype=np.float64)
        else:
            values = np.array(values, dtype=np.float64)
            if values.shape != shape + (2,):
                raise ValidationError(
                    f"OffsetMap values must have shape {shape + (2,)}, "
                    f"got {values.shape}"
                )
        self._shape = shape
        self._kernel_shape = kernel_shape
        self._values = values

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def kernel_shape(self) -> Optional[Tuple[int, int]]:
        return self._kernel_shape

    @property
    def dx(self) -> np.ndarray:
        """Axis-0 displacements, shape ``(kernels_x, kernels_y)`` (copy)."""
        return self._values[..., 0].copy()

    @property
    def dy(self) -> np.ndarray:
        """Axis-1 displacements, shape ``(kernels_x, kernels_y)`` (copy)."""
        return self._values[..., 1].copy()

    def as_array(self) -> np.ndarray:
        """Copy of the backing ``(kernels_x, kernels_y, 2)`` array."""
        return self._values.copy()

    def _set(self, i: int, j: int, dx: float, dy: float) -> None:
        self._values[i, j, 0] = dx
        self._values[i, j, 1] = dy

    def signed(self) -> 'OffsetMap':
        """Map circular peak indices to signed displacements.

        A correlation peak at index ``d`` of a length-``k`` axis is the
        same displacement as ``d - k``. Indices at or above ``(k + 1) // 2``
        are mapped to the negative side, matching ``numpy.fft.fftfreq``
        ordering.

        Returns
        -------
        OffsetMap
            New map with displacements in ``[-k // 2, (k - 1) // 2]``.

        Raises
        ------
        ValidationError
            If the map does not know its kernel shape.
        """
        if self._kernel_shape is None:
            if self.size == 0:
                return OffsetMap(self._shape)
            raise ValidationError(
                "signed() requires the kernel shape the offsets were "
                "measured on"
            )
        kx, ky = self._kernel_shape
        values = self._values.copy()
        dx = values[..., 0]
        dy = values[..., 1]
        dx[dx >= (kx + 1) // 2] -= kx
        dy[dy >= (ky + 1) // 2] -= ky
        return OffsetMap(self._shape, self._kernel_shape, values)

    @property
    def size(self) -> int:
        return self._shape[0] * self._shape[1]

    def __getitem__(self, index: Tuple[int, int]) -> Vec2:
        i, j = index
        dx, dy = self._values[i, j]
        return offset_vector(dx, dy)

    def __iter__(self) -> Iterator[Vec2]:
        """Iterate offsets in row-major order."""
        for dx, dy in self._values.reshape(-1, 2):
            yield offset_vector(dx, dy)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OffsetMap):
            return NotImplemented
        return (
            self._shape == other._shape
            and np.array_equal(self._values, other._values, equal_nan=True)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"OffsetMap(shape={self._shape}, "
            f"kernel_shape={self._kernel_shape})"
        )
