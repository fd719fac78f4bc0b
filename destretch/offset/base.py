# -*- coding: utf-8 -*-
"""
Offset Estimator Base Class - Abstract interface for kernel offset estimators.

Defines the ``OffsetEstimator`` ABC shared by all algorithms that turn a
pair of kernel grids into an ``OffsetMap``. Tunable parameters are declared
as ``typing.Annotated`` class-body fields using the markers in
:mod:`destretch.params`; ``__init_subclass__`` collects them into
``__param_specs__`` and generates a keyword-only ``__init__`` (unless the
subclass defines its own). Per-call overrides flow through ``**kwargs`` and
are resolved by ``_resolve_params``.

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
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Destretch internal
from destretch.exceptions import (
    MismatchedKernelSizesError,
    MismatchedKernelsError,
)
from destretch.kernels.base import KernelGrid
from destretch.offset.offset_map import OffsetMap
from destretch.params import ParamSpec, _make_init, collect_param_specs


def check_pairing(reference_grid: KernelGrid, scene_grid: KernelGrid) -> None:
    """Verify two kernel grids can be paired cell by cell.

    Raises
    ------
    MismatchedKernelsError
        If the grid shapes differ.
    MismatchedKernelSizesError
        If the grids are non-empty and their first windows differ in shape.
    """
    if reference_grid.shape != scene_grid.shape:
        raise MismatchedKernelsError(
            f"Reference grid shape {reference_grid.shape} does not match "
            f"scene grid shape {scene_grid.shape}"
        )
    if not reference_grid.is_empty:
        ref_shape = reference_grid[0, 0].shape
        scene_shape = scene_grid[0, 0].shape
        if ref_shape != scene_shape:
            raise MismatchedKernelSizesError(
                f"Reference kernel shape {ref_shape} does not match "
                f"scene kernel shape {scene_shape}"
            )


class OffsetEstimator(ABC):
    """Abstract base class for kernel offset estimators.

    Subclasses implement ``estimate``, which pairs each reference window
    with the scene window at the same grid index and returns one
    displacement per cell.
    """

    #: Tuple of :class:`~destretch.params.ParamSpec` built automatically by
    #: ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    @classmethod
    def param_spec(cls, name: str) -> ParamSpec:
        """Look up the declared spec for parameter *name*.

        Raises
        ------
        KeyError
            If the class declares no such parameter.
        """
        for spec in cls.__param_specs__:
            if spec.name == name:
                return spec
        raise KeyError(f"{cls.__qualname__} has no parameter '{name}'")

    def _check_overrides(self, kwargs: Dict[str, Any]) -> None:
        """Reject *kwargs* keys that are not declared parameters."""
        known = {spec.name for spec in type(self).__param_specs__}
        unexpected = set(kwargs) - known
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}.estimate() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance defaults with runtime *kwargs* overrides.

        Every resolved value is validated against its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments. Keys that are not declared
            parameters are rejected.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type or a key is not a parameter.
        InvalidParameterError
            If a value violates its range constraint.
        """
        self._check_overrides(kwargs)
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    @abstractmethod
    def estimate(
        self,
        reference_grid: KernelGrid,
        scene_grid: KernelGrid,
        **kwargs: Any,
    ) -> OffsetMap:
        """Estimate one displacement per kernel pair.

        Parameters
        ----------
        reference_grid : KernelGrid
            Kernels the displacements are measured from.
        scene_grid : KernelGrid
            Kernels the displacements are measured to. Same shape and
            kernel size as *reference_grid*.
        **kwargs
            Per-call overrides of declared tunable parameters.

        Returns
        -------
        OffsetMap
            Same shape as the input grids.

        Raises
        ------
        MismatchedKernelsError
            If the grid shapes differ.
        MismatchedKernelSizesError
            If the window shapes differ.
        InvalidParameterError
            If a parameter is out of range.
        """
        ...

    def __repr__(self) -> str:
        params = ', '.join(
            f"{spec.name}={getattr(self, spec.name)!r}"
            for spec in type(self).__param_specs__
        )
        return f"{type(self).__name__}({params})"
