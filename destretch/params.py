# -*- coding: utf-8 -*-
"""
Tunable Parameters - Validated numeric knobs declared with typing.Annotated.

Estimator settings (``apod_factor``, ``workers``) and slicing settings
(``spacing_ratio``) are declared once as ``Annotated`` hints carrying a
``Range`` and a ``Desc``. ``param_spec`` turns such a hint into a
``ParamSpec`` that validates values; ``collect_param_specs`` does the same
for every annotated field of an ``OffsetEstimator`` subclass, and
``_make_init`` generates the keyword-only constructor.

Numeric values are always finite: NaN and infinities are rejected before
any bound is tested.

Usage
-----
::

    from typing import Annotated
    from destretch.params import Range, Desc, param_spec

    RATIO = param_spec('spacing_ratio', Annotated[
        float, Range(min=0.0, min_inclusive=False), Desc('Stride / kernel'),
    ])
    RATIO.validate(0.5)

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
import inspect
import math
from typing import Annotated, Any, Optional, Tuple, get_origin, get_type_hints

# Third-party
import numpy as np

# Destretch internal
from destretch.exceptions import InvalidParameterError

_NUMERIC_TYPES = {
    float: (int, float, np.integer, np.floating),
    int: (int, np.integer),
}


class ParamMeta:
    """Marker base for metadata placed inside ``Annotated[...]``."""


class Range(ParamMeta):
    """Numeric bounds.

    Parameters
    ----------
    min, max : int or float, optional
        Bounds; ``None`` leaves that side open.
    min_inclusive : bool
        Whether ``min`` itself is allowed. Default True.
    """

    __slots__ = ('min', 'max', 'min_inclusive')

    def __init__(self, min=None, max=None, min_inclusive: bool = True) -> None:
        self.min = min
        self.max = max
        self.min_inclusive = min_inclusive

    def check(self, name: str, value: Any) -> None:
        """Raise ``InvalidParameterError`` if *value* is out of bounds."""
        if self.min is not None:
            if self.min_inclusive:
                below = value < self.min
            else:
                below = value <= self.min
            if below:
                bound = 'at least' if self.min_inclusive else 'greater than'
                raise InvalidParameterError(
                    f"Parameter '{name}' must be {bound} {self.min!r}, "
                    f"got {value!r}"
                )
        if self.max is not None and value > self.max:
            raise InvalidParameterError(
                f"Parameter '{name}' must be at most {self.max!r}, "
                f"got {value!r}"
            )

    def __repr__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"min={self.min!r}")
        if self.max is not None:
            parts.append(f"max={self.max!r}")
        if not self.min_inclusive:
            parts.append("min_inclusive=False")
        return f"Range({', '.join(parts)})"


class Desc(ParamMeta):
    """One-line description of a parameter."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


class ParamSpec:
    """Validator for one numeric parameter.

    Attributes
    ----------
    name : str
    param_type : type
        ``float`` (accepts any real number) or ``int`` (integers only).
    default : Any
        Value used when the parameter is not supplied.
    description : str
    range : Range or None
    """

    __slots__ = ('name', 'param_type', 'default', 'description', 'range')

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any = None,
        description: str = '',
        range: Optional[Range] = None,
    ) -> None:
        if param_type not in _NUMERIC_TYPES:
            raise TypeError(
                f"Parameter '{name}' must be declared float or int, "
                f"got {param_type!r}"
            )
        self.name = name
        self.param_type = param_type
        self.default = default
        self.description = description
        self.range = range

    def validate(self, value: Any) -> None:
        """Check type, finiteness and bounds of *value*.

        Raises
        ------
        TypeError
            If *value* is a bool or not a number of ``param_type``.
        InvalidParameterError
            If *value* is NaN, infinite or out of range.
        """
        if isinstance(value, (bool, np.bool_)) or \
                not isinstance(value, _NUMERIC_TYPES[self.param_type]):
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if isinstance(value, (float, np.floating)) and \
                not math.isfinite(value):
            raise InvalidParameterError(
                f"Parameter '{self.name}' must be finite, got {value!r}"
            )
        if self.range is not None:
            self.range.check(self.name, value)


def param_spec(name: str, hint: Any, default: Any = None) -> ParamSpec:
    """Build a ``ParamSpec`` from an ``Annotated[type, Range, Desc]`` hint.

    Raises
    ------
    TypeError
        If *hint* is not ``Annotated`` with at least one ``ParamMeta``.
    """
    metas = ()
    if get_origin(hint) is Annotated:
        metas = tuple(m for m in hint.__metadata__ if isinstance(m, ParamMeta))
    if not metas:
        raise TypeError(f"Parameter '{name}' has no Range/Desc annotation")
    range_meta = next((m for m in metas if isinstance(m, Range)), None)
    desc_meta = next((m for m in metas if isinstance(m, Desc)), None)
    return ParamSpec(
        name,
        hint.__origin__,
        default=default,
        description=desc_meta.text if desc_meta else '',
        range=range_meta,
    )


def _is_param_hint(hint: Any) -> bool:
    return get_origin(hint) is Annotated and any(
        isinstance(m, ParamMeta) for m in hint.__metadata__
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Specs for every annotated parameter of *cls*, base classes first.

    Raises
    ------
    TypeError
        If a parameter has no class-level default.
    """
    hints = get_type_hints(cls, include_extras=True)
    specs = []
    seen = set()
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in seen or not _is_param_hint(hints.get(name)):
                continue
            seen.add(name)
            if not hasattr(cls, name):
                raise TypeError(
                    f"{cls.__name__}.{name} needs a default value"
                )
            specs.append(param_spec(name, hints[name], getattr(cls, name)))
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Keyword-only ``__init__`` that validates and stores each parameter."""

    def __init__(self, **kwargs):
        unexpected = set(kwargs).difference(s.name for s in param_specs)
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in param_specs:
            value = kwargs.get(spec.name, spec.default)
            spec.validate(value)
            setattr(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [
            inspect.Parameter(
                s.name, inspect.Parameter.KEYWORD_ONLY, default=s.default
            )
            for s in param_specs
        ]
    )
    __init__.__qualname__ = '__init__'
    return __init__
