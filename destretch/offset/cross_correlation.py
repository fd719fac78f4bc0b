# -*- coding: utf-8 -*-
"""
Cross-Correlation Offset Estimator - FFT correlation peak per kernel pair.

For every cell of a pair of kernel grids, correlates the reference window
with the scene window through the Fourier domain and records the integer
location of the correlation peak as that cell's displacement.

Algorithm
---------
For reference window ``r`` and scene window ``s`` of shape ``(kx, ky)``:

1. ``R = FFT2(r)``, ``S = FFT2(s)`` (axis 0, then axis 1)
2. Cross-power spectrum ``conj(R) * S``, unnormalized (no phase-only
   whitening)
3. ``c = IFFT2(conj(R) * S)``, the circular correlation surface
4. Peak = first row-major maximum of ``real(c)``; NaN never wins
5. ``offset = (peak_axis0, peak_axis1)``

If ``s`` is ``r`` circularly shifted by ``(dx, dy)``, the peak sits at
``(dx mod kx, dy mod ky)``. Offsets are integer pixels; no sub-pixel
refinement is applied.

Transform handlers are built once per window size, before the per-cell
loop, and reused for every pair. Callers that run the estimator many times
on the same kernel size can pass a ``HandlerCache`` to reuse handlers
across calls too.

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
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Annotated, Any, Callable, Optional, Union

# Third-party
import numpy as np

# Destretch internal
from destretch.kernels.base import KernelGrid, KernelWindow
from destretch.offset.base import OffsetEstimator, check_pairing
from destretch.offset.offset_map import OffsetMap
from destretch.offset.peak import find_peak
from destretch.params import Desc, Range
from destretch.spectral import HandlerCache, TransformHandler, forward, inverse

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def correlate(
    reference: Union[KernelWindow, np.ndarray],
    scene: Union[KernelWindow, np.ndarray],
    handler_x: TransformHandler,
    handler_y: TransformHandler,
) -> np.ndarray:
    """Circular cross-correlation surface of two equally sized windows.

    Parameters
    ----------
    reference : KernelWindow or np.ndarray
        Reference window.
    scene : KernelWindow or np.ndarray
        Scene window, same shape as *reference*.
    handler_x : TransformHandler
        Bound to the window's axis-0 length.
    handler_y : TransformHandler
        Bound to the window's axis-1 length.

    Returns
    -------
    np.ndarray
        Complex correlation surface, same shape as the windows.
    """
    reference_spectrum = forward(reference, handler_x, handler_y)
    scene_spectrum = forward(scene, handler_x, handler_y)
    return inverse(
        np.conj(reference_spectrum) * scene_spectrum, handler_x, handler_y
    )


def _estimate_cells(
    reference_grid: KernelGrid,
    scene_grid: KernelGrid,
    offsets: OffsetMap,
    begin: int,
    end: int,
    handler_x: TransformHandler,
    handler_y: TransformHandler,
) -> int:
    """Fill offsets for flat (row-major) cell indices ``[begin, end)``."""
    ky = reference_grid.shape[1]
    for flat in range(begin, end):
        i, j = divmod(flat, ky)
        surface = correlate(
            reference_grid[i, j], scene_grid[i, j], handler_x, handler_y
        )
        peak_x, peak_y = find_peak(surface)
        offsets._set(i, j, peak_x, peak_y)
    return end - begin


def _estimate_chunk(
    reference_grid: KernelGrid,
    scene_grid: KernelGrid,
    offsets: OffsetMap,
    begin: int,
    end: int,
) -> int:
    """Worker entry point: builds a private handler pair for its chunk."""
    handler_x, handler_y = HandlerCache().pair(reference_grid.kernel_shape)
    return _estimate_cells(
        reference_grid, scene_grid, offsets, begin, end, handler_x, handler_y
    )


def estimate_offsets(
    reference_grid: KernelGrid,
    scene_grid: KernelGrid,
    apod_factor: float = 0.0,
    handlers: Optional[HandlerCache] = None,
    workers: int = 1,
    progress_callback: Optional[ProgressCallback] = None,
) -> OffsetMap:
    """Estimate the displacement of every scene kernel from its reference.

    Preconditions are checked in order: grid shapes, kernel shapes, empty
    grids (which return an empty map), then parameters.

    Parameters
    ----------
    reference_grid : KernelGrid
        Kernels the displacements are measured from.
    scene_grid : KernelGrid
        Kernels the displacements are measured to.
    apod_factor : float
        Width of the edge taper as a fraction of kernel size, in
        ``[0, 1]``. Range-checked but not applied: windows are correlated
        without apodization.
    handlers : HandlerCache, optional
        Source of the transform handler pair on the serial path. Pass the
        same cache to repeated calls to reuse handlers across calls. When
        omitted, a cache is created for this call. Parallel workers always
        build their own handlers.
    workers : int
        Number of threads splitting the grid cells. Default 1 (serial).
    progress_callback : callable, optional
        Called with the completed fraction in ``[0, 1]``: once with 1.0
        on the serial path, after each finished chunk otherwise.

    Returns
    -------
    OffsetMap
        ``(dx, dy)`` peak indices per cell, same shape as the grids.

    Raises
    ------
    MismatchedKernelsError
        If the grid shapes differ.
    MismatchedKernelSizesError
        If the grids are non-empty and their window shapes differ.
    InvalidParameterError
        If ``apod_factor`` is outside ``[0, 1]`` or ``workers < 1``.
    TypeError
        If ``apod_factor`` or ``workers`` has the wrong type.

    Examples
    --------
    >>> ref = slice_kernels(reference_image, 32, 0.5)
    >>> scene = slice_kernels(scene_image, 32, 0.5)
    >>> offsets = estimate_offsets(ref, scene, apod_factor=0.08)
    >>> offsets[0, 0]
    Vec2(2.0, 1.0, dtype='float64')
    """
    check_pairing(reference_grid, scene_grid)
    if reference_grid.is_empty:
        return OffsetMap(reference_grid.shape)

    CrossCorrelationEstimator.param_spec('apod_factor').validate(apod_factor)
    CrossCorrelationEstimator.param_spec('workers').validate(workers)
    if apod_factor > 0.0:
        logger.debug(
            "apod_factor=%.3f accepted; apodization is not applied",
            apod_factor,
        )

    kernel_shape = reference_grid.kernel_shape
    offsets = OffsetMap(reference_grid.shape, kernel_shape)
    cells = reference_grid.size
    logger.debug(
        "Estimating offsets for %dx%d kernel pairs of shape %s "
        "(workers=%d)",
        reference_grid.shape[0], reference_grid.shape[1], kernel_shape,
        workers,
    )

    n_chunks = min(workers, cells)
    if n_chunks == 1:
        cache = handlers if handlers is not None else HandlerCache()
        handler_x, handler_y = cache.pair(kernel_shape)
        _estimate_cells(
            reference_grid, scene_grid, offsets, 0, cells,
            handler_x, handler_y,
        )
        if progress_callback is not None:
            progress_callback(1.0)
    else:
        bounds = np.linspace(0, cells, n_chunks + 1).astype(int)
        done = 0
        with ThreadPoolExecutor(max_workers=n_chunks) as ex:
            futs = [
                ex.submit(
                    _estimate_chunk, reference_grid, scene_grid, offsets,
                    int(begin), int(end),
                )
                for begin, end in zip(bounds[:-1], bounds[1:])
                if end > begin
            ]
            for fut in as_completed(futs):
                done += fut.result()
                if progress_callback is not None:
                    progress_callback(done / cells)

    logger.debug("Estimated %d kernel offsets", cells)
    return offsets


class CrossCorrelationEstimator(OffsetEstimator):
    """FFT cross-correlation offset estimator.

    Configuration object around ``estimate_offsets``. Holds a
    ``HandlerCache`` so repeated ``estimate`` calls on the same kernel
    size reuse their transform handlers.

    Parameters
    ----------
    apod_factor : float
        Edge taper width as a fraction of kernel size, in ``[0, 1]``.
        Range-checked, not applied. Default 0.0.
    workers : int
        Threads splitting the grid cells. Default 1.

    Examples
    --------
    >>> estimator = CrossCorrelationEstimator(apod_factor=0.08)
    >>> offsets = estimator.estimate(reference_grid, scene_grid)

    Per-call override:

    >>> offsets = estimator.estimate(reference_grid, scene_grid, workers=4)
    """

    apod_factor: Annotated[float, Range(min=0.0, max=1.0),
                           Desc('Edge taper width (fraction of kernel)')] = 0.0
    workers: Annotated[int, Range(min=1),
                       Desc('Threads splitting the grid cells')] = 1

    def __post_init__(self) -> None:
        self._handlers = HandlerCache()

    @property
    def handlers(self) -> HandlerCache:
        """Handler cache shared by this estimator's serial calls."""
        return self._handlers

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
            Kernels the displacements are measured to.
        **kwargs
            ``apod_factor`` or ``workers`` overrides for this call, and an
            optional ``progress_callback``.

        Returns
        -------
        OffsetMap
        """
        progress_callback = kwargs.pop('progress_callback', None)
        self._check_overrides(kwargs)
        check_pairing(reference_grid, scene_grid)
        if reference_grid.is_empty:
            return OffsetMap(reference_grid.shape)
        params = self._resolve_params(kwargs)
        return estimate_offsets(
            reference_grid,
            scene_grid,
            apod_factor=params['apod_factor'],
            handlers=self._handlers,
            workers=params['workers'],
            progress_callback=progress_callback,
        )
