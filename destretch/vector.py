# -*- coding: utf-8 -*-
"""
Vector Utility - Two-component numeric value with componentwise arithmetic.

Provides ``Vec2``, a small immutable ``(x, y)`` pair bound to one element
type from a closed set of numpy dtypes. The library uses two instantiations:
``int64`` vectors for kernel grid geometry and ``float64`` vectors for
displacement estimates.

Arithmetic policy depends on the element type:

- **Floating** (``float32``, ``float64``): IEEE semantics. Division by zero
  yields ``inf`` or ``nan`` without raising or warning.
- **Integer** (signed and unsigned, 8 to 64 bits): division is floor
  division and stays in the element type. A zero divisor component raises
  ``DivideByZeroError``.

Usage
-----
    >>> from destretch.vector import Vec2
    >>> Vec2(3, 8, dtype='int32') + Vec2(1, 7, dtype='int32')
    Vec2(4, 15, dtype='int32')
    >>> Vec2(1.0, 25.0) / 10.0
    Vec2(0.1, 2.5, dtype='float64')

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
import operator
from typing import Any, Callable, Iterator, Tuple, Union

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import DivideByZeroError, ValidationError


#: Closed set of element types a ``Vec2`` may hold.
ELEMENT_TYPES: Tuple[np.dtype, ...] = tuple(
    np.dtype(name) for name in (
        'float32', 'float64',
        'int8', 'int16', 'int32', 'int64',
        'uint8', 'uint16', 'uint32', 'uint64',
    )
)

DTypeLike = Union[str, type, np.dtype]


def resolve_element_type(dtype: DTypeLike) -> np.dtype:
    """Resolve *dtype* to a member of ``ELEMENT_TYPES``.

    Parameters
    ----------
    dtype : str, type, or np.dtype
        Anything ``np.dtype`` accepts.

    Returns
    -------
    np.dtype

    Raises
    ------
    ValidationError
        If the dtype is not one of the supported element types.
    """
    try:
        resolved = np.dtype(dtype).newbyteorder('=')
    except TypeError as exc:
        raise ValidationError(f"Unrecognized element type {dtype!r}") from exc
    if resolved not in ELEMENT_TYPES:
        names = ', '.join(dt.name for dt in ELEMENT_TYPES)
        raise ValidationError(
            f"Unsupported element type '{resolved.name}', "
            f"expected one of: {names}"
        )
    return resolved


def _coerce(value: Any, dtype: np.dtype) -> np.generic:
    """Convert a real scalar to *dtype* without silent truncation."""
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError("Vec2 components must be numeric, got bool")
    if not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValidationError(
            f"Vec2 components must be real scalars, got {type(value).__name__}"
        )
    if dtype.kind == 'f':
        return dtype.type(value)

    if isinstance(value, (float, np.floating)):
        if not np.isfinite(value) or not float(value).is_integer():
            raise ValidationError(
                f"Cannot represent {value!r} in integer element type "
                f"'{dtype.name}'"
            )
        value = int(value)
    info = np.iinfo(dtype)
    if not info.min <= int(value) <= info.max:
        raise ValidationError(
            f"Value {value!r} out of range for element type '{dtype.name}'"
        )
    return dtype.type(value)


class Vec2:
    """Immutable ``(x, y)`` pair of a single element type.

    Parameters
    ----------
    x : int or float
        First component (axis 0).
    y : int or float
        Second component (axis 1).
    dtype : str, type, or np.dtype
        Element type from ``ELEMENT_TYPES``. Default ``'float64'``.

    Integer arithmetic is checked like construction: a result outside the
    element type's range raises ``ValidationError`` instead of wrapping.
    Float arithmetic follows IEEE semantics (overflow gives ``inf``).

    Raises
    ------
    ValidationError
        If the dtype is unsupported or a component cannot be represented
        exactly in an integer element type.
    """

    __slots__ = ('_x', '_y', '_dtype')

    def __init__(self, x: Any, y: Any, dtype: DTypeLike = 'float64') -> None:
        self._dtype = resolve_element_type(dtype)
        self._x = _coerce(x, self._dtype)
        self._y = _coerce(y, self._dtype)

    @classmethod
    def _raw(cls, x: np.generic, y: np.generic, dtype: np.dtype) -> 'Vec2':
        vec = object.__new__(cls)
        vec._dtype = dtype
        vec._x = dtype.type(x)
        vec._y = dtype.type(y)
        return vec

    @classmethod
    def from_tuple(
        cls, value: Tuple[Any, Any], dtype: DTypeLike = 'float64'
    ) -> 'Vec2':
        """Build a vector from an ``(x, y)`` tuple."""
        x, y = value
        return cls(x, y, dtype=dtype)

    @property
    def x(self) -> np.generic:
        return self._x

    @property
    def y(self) -> np.generic:
        return self._y

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def is_integer(self) -> bool:
        """Whether the element type is an integer type."""
        return self._dtype.kind in 'iu'

    def astype(self, dtype: DTypeLike) -> 'Vec2':
        """Explicitly cast both components to another element type.

        Casting a float vector to an integer type truncates toward zero,
        the same as ``numpy.ndarray.astype``.
        """
        target = resolve_element_type(dtype)
        converted = np.array([self._x, self._y]).astype(target)
        return Vec2._raw(converted[0], converted[1], target)

    def __iter__(self) -> Iterator[np.generic]:
        yield self._x
        yield self._y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec2):
            return NotImplemented
        return (
            self._dtype == other._dtype
            and self._x == other._x
            and self._y == other._y
        )

    def __hash__(self) -> int:
        return hash((self._dtype.name, self._x.item(), self._y.item()))

    def __repr__(self) -> str:
        return (
            f"Vec2({self._x.item()!r}, {self._y.item()!r}, "
            f"dtype='{self._dtype.name}')"
        )

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def _operand(self, other: Any) -> Tuple[np.generic, np.generic]:
        if isinstance(other, Vec2):
            if other._dtype != self._dtype:
                raise ValidationError(
                    f"Element type mismatch: '{self._dtype.name}' vs "
                    f"'{other._dtype.name}'"
                )
            return other._x, other._y
        value = _coerce(other, self._dtype)
        return value, value

    def _combine(
        self,
        other: Any,
        op: Callable[[Any, Any], Any],
        reflected: bool = False,
    ) -> 'Vec2':
        if not isinstance(other, (Vec2, int, float, np.integer, np.floating)):
            return NotImplemented
        ox, oy = self._operand(other)
        ax, ay, bx, by = self._x, self._y, ox, oy
        if reflected:
            ax, ay, bx, by = bx, by, ax, ay

        if self.is_integer:
            if op is operator.floordiv and (bx == 0 or by == 0):
                raise DivideByZeroError(
                    f"Integer Vec2 division by zero component "
                    f"({bx.item()}, {by.item()})"
                )
            # Exact in Python ints, then range-checked: results never wrap.
            return Vec2(
                op(int(ax), int(bx)), op(int(ay), int(by)), self._dtype
            )

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return Vec2._raw(op(ax, bx), op(ay, by), self._dtype)

    def _division_op(self) -> Callable[[Any, Any], Any]:
        return operator.floordiv if self.is_integer else operator.truediv

    def __add__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.add)

    def __radd__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.add, reflected=True)

    def __sub__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.sub)

    def __rsub__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.sub, reflected=True)

    def __mul__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.mul)

    def __rmul__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.mul, reflected=True)

    def __truediv__(self, other: Any) -> 'Vec2':
        return self._combine(other, self._division_op())

    def __rtruediv__(self, other: Any) -> 'Vec2':
        return self._combine(other, self._division_op(), reflected=True)

    def __floordiv__(self, other: Any) -> 'Vec2':
        return self._combine(other, operator.floordiv)


def offset_vector(dx: float, dy: float) -> Vec2:
    """Build a ``float64`` displacement vector ``(dx, dy)``."""
    return Vec2(dx, dy, dtype='float64')


def grid_vector(x: int, y: int) -> Vec2:
    """Build an ``int64`` grid geometry vector ``(x, y)``."""
    return Vec2(x, y, dtype='int64')
