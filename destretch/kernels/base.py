# -*- coding: utf-8 -*-
"""
Kernel Base Types - Read-only image views and the kernel grid container.

Defines ``as_image`` for turning caller-supplied sample arrays into
read-only 2D views, the ``KernelWindow`` named tuple describing one square
subwindow, and the ``KernelGrid`` container holding a 2D arrangement of
equally sized windows.

Axis convention: an image has shape ``(width, height)``; axis 0 is ``x``
and axis 1 is ``y``. Grid index ``(i, j)`` follows the same order.

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
from typing import Any, Iterator, NamedTuple, Optional, Tuple

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import ValidationError
from destretch.vector import ELEMENT_TYPES, Vec2, grid_vector


def as_image(source: Any) -> np.ndarray:
    """Return a read-only 2D view of *source*.

    No samples are copied when *source* is already an ``np.ndarray``; the
    returned array is a view whose ``writeable`` flag is cleared, so the
    caller's array is left untouched.

    Parameters
    ----------
    source : array-like
        2D sample array with an element type from
        ``destretch.vector.ELEMENT_TYPES``, in either byte order.

    Returns
    -------
    np.ndarray
        Read-only view, shape ``(width, height)``.

    Raises
    ------
    ValidationError
        If *source* is not 2D or its element type is unsupported.
    """
    image = np.asarray(source).view()
    if image.ndim != 2:
        raise ValidationError(
            f"Image must be 2D (width, height), got {image.ndim}D "
            f"with shape {image.shape}"
        )
    # Either byte order; FITS samples arrive big-endian.
    if image.dtype.newbyteorder('=') not in ELEMENT_TYPES:
        raise ValidationError(
            f"Unsupported image element type '{image.dtype}'"
        )
    image.flags.writeable = False
    return image


class KernelWindow(NamedTuple):
    """Square subwindow of an image, held as a non-owning view.

    Attributes
    ----------
    data : np.ndarray
        Read-only view into the source image, shape ``(k, k)``.
    x0 : int
        First axis-0 index covered (inclusive).
    y0 : int
        First axis-1 index covered (inclusive).
    """

    data: np.ndarray
    x0: int
    y0: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def size(self) -> int:
        """Side length ``k`` of the window."""
        return self.data.shape[0]

    @property
    def x1(self) -> int:
        """Last axis-0 index covered (exclusive)."""
        return self.x0 + self.data.shape[0]

    @property
    def y1(self) -> int:
        """Last axis-1 index covered (exclusive)."""
        return self.y0 + self.data.shape[1]

    @property
    def origin(self) -> Vec2:
        return grid_vector(self.x0, self.y0)


class KernelGrid:
    """2D grid of equally sized ``KernelWindow`` views.

    Parameters
    ----------
    windows : np.ndarray
        Object array of ``KernelWindow``, shape ``(kernels_x, kernels_y)``.
        May be empty along either axis.
    spacing : int, optional
        Stride between adjacent windows, in pixels.
    offset : Tuple[int, int], optional
        Origin of window ``(0, 0)`` within the source image.

    Raises
    ------
    ValidationError
        If *windows* is not a 2D array of ``KernelWindow`` or the windows
        differ in shape.
    """

    def __init__(
        self,
        windows: np.ndarray,
        spacing: Optional[int] = None,
        offset: Tuple[int, int] = (0, 0),
    ) -> None:
        if not isinstance(windows, np.ndarray) or windows.ndim != 2:
            raise ValidationError(
                "KernelGrid windows must be a 2D object array"
            )
        kernel_shape = None
        for window in windows.flat:
            if not isinstance(window, KernelWindow):
                raise ValidationError(
                    f"KernelGrid entries must be KernelWindow, "
                    f"got {type(window).__name__}"
                )
            if kernel_shape is None:
                kernel_shape = window.shape
            elif window.shape != kernel_shape:
                raise ValidationError(
                    f"All windows in a KernelGrid must share one shape, "
                    f"got {window.shape} and {kernel_shape}"
                )
        self._windows = windows
        self._kernel_shape = kernel_shape
        self._spacing = spacing
        self._offset = offset

    @classmethod
    def from_stack(cls, stack: Any) -> 'KernelGrid':
        """Build a grid from a 4D ``(kernels_x, kernels_y, k, k)`` array.

        Each window is a view into *stack*. Window ``(i, j)`` is placed at
        ``(i * k, j * k)``, as if the stack were tiled into one mosaic.

        Parameters
        ----------
        stack : array-like
            4D array of window samples.

        Returns
        -------
        KernelGrid
        """
        stack = np.asarray(stack).view()
        if stack.ndim != 4:
            raise ValidationError(
                f"Kernel stack must be 4D (kx, ky, k, k), got {stack.ndim}D"
            )
        stack.flags.writeable = False
        kx, ky, kw, kh = stack.shape
        windows = np.empty((kx, ky), dtype=object)
        for i in range(kx):
            for j in range(ky):
                windows[i, j] = KernelWindow(stack[i, j], i * kw, j * kh)
        return cls(windows)

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid shape ``(kernels_x, kernels_y)``."""
        return self._windows.shape

    @property
    def shape_vector(self) -> Vec2:
        return grid_vector(*self._windows.shape)

    @property
    def size(self) -> int:
        """Total number of windows."""
        return self._windows.size

    @property
    def is_empty(self) -> bool:
        return self._windows.size == 0

    @property
    def kernel_shape(self) -> Optional[Tuple[int, int]]:
        """Shape of every window, or ``None`` for an empty grid."""
        return self._kernel_shape

    @property
    def spacing(self) -> Optional[Vec2]:
        """Stride between window origins, or ``None`` when unknown."""
        if self._spacing is None:
            return None
        return grid_vector(self._spacing, self._spacing)

    @property
    def offset(self) -> Vec2:
        """Origin of window ``(0, 0)`` within the source image."""
        return grid_vector(*self._offset)

    def __getitem__(self, index: Tuple[int, int]) -> KernelWindow:
        return self._windows[index]

    def __iter__(self) -> Iterator[KernelWindow]:
        """Iterate windows in row-major order."""
        return iter(self._windows.flat)

    def __len__(self) -> int:
        return self._windows.size

    def __repr__(self) -> str:
        return (
            f"KernelGrid(shape={self.shape}, "
            f"kernel_shape={self._kernel_shape})"
        )
