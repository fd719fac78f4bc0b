# -*- coding: utf-8 -*-
"""
Destretch Exception Hierarchy - Domain-specific exceptions for offset estimation.

Provides a small exception hierarchy that lets callers catch destretch
errors distinctly from Python built-in exceptions. Every exception
subclasses both ``DestretchError`` and the matching built-in exception so
existing ``except ValueError`` handlers keep working.

Author
------
Steven Siebert

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


class DestretchError(Exception):
    """Base exception for all destretch errors."""


class ValidationError(DestretchError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for unsupported element types, non-2D images, and other input
    validation failures not covered by a more specific subclass.
    """


class InvalidKernelSizeError(ValidationError):
    """Kernel size is zero or exceeds the smaller image dimension."""


class MismatchedKernelsError(ValidationError):
    """Reference and scene kernel grids differ in shape."""


class MismatchedKernelSizesError(ValidationError):
    """Non-empty kernel grids whose window dimensions differ."""


class InvalidParameterError(ValidationError):
    """A tunable parameter is outside its defined range.

    Raised for ``apod_factor`` outside ``[0, 1]``, a non-positive
    ``spacing_ratio``, or a worker count below one.
    """


class HandlerLengthError(ValidationError):
    """Transform handler applied to an axis of a different length."""


class DivideByZeroError(DestretchError, ZeroDivisionError):
    """Integer vector arithmetic with a zero divisor component."""
