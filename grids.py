# grids.py
"""
Construction and transformation of rectangular grids.

A grid is a row-major NumPy array with h rows of w cells: shape (h, w) for
scalar grids, (h, w, k) when every cell holds a k-component value such as a
2D vector. Every function here returns a freshly allocated array and never
modifies its input.
"""
import logging
from typing import Any, Callable, Union

import numpy as np
from numba import jit

# --- Data Contracts ---
#
# make_grid(w: int, h: int, fill) -> np.ndarray:
#   - fill: a constant (scalar or fixed-length sequence) or a callable
#     fill(x, y) returning the cell value.
#   - Outputs: array of shape (h, w) or (h, w, k).
#
# map_grid(grid, fn) -> np.ndarray:
#   - fn(value, x, y) is called once per cell in row-major order.
#
# mirror(grid) -> np.ndarray:
#   - Column w-1-x takes the value of column x for every x < w/2. The
#     right half of the input is discarded.
#
# convolve(grid, kernel) -> np.ndarray:
#   - 2D correlation (kernel is not flipped) with zero padding.
#   - Output has the grid's shape. The kernel is centred on each cell by
#     offsets (kw // 2, kh // 2).
#
# freeze(array) -> np.ndarray:
#   - Marks the array read-only in place and returns it.

Fill = Union[Any, Callable[[int, int], Any]]


def check_dimensions(w: int, h: int) -> None:
    """Rejects grids without at least one cell."""
    if w <= 0 or h <= 0:
        msg = f"Grid dimensions must be positive, got {w}x{h}."
        logging.error(msg)
        raise ValueError(msg)


def _check_grid(grid: np.ndarray) -> None:
    if grid.ndim < 2 or grid.shape[0] == 0 or grid.shape[1] == 0:
        msg = f"Expected a non-empty grid of at least two dimensions, got shape {grid.shape}."
        logging.error(msg)
        raise ValueError(msg)


def freeze(array: np.ndarray) -> np.ndarray:
    """Makes array read-only and returns it."""
    array.flags.writeable = False
    return array


def frozen_copy(array: np.ndarray) -> np.ndarray:
    """A read-only copy of array."""
    return freeze(array.copy())


def make_grid(w: int, h: int, fill: Fill = 0.0) -> np.ndarray:
    """Allocates a w x h grid filled with a constant or per-cell values."""
    check_dimensions(w, h)
    if callable(fill):
        return np.array([[fill(x, y) for x in range(w)] for y in range(h)])
    cell = np.asarray(fill)
    return np.full((h, w) + cell.shape, cell)


def map_grid(grid: np.ndarray, fn: Callable[[Any, int, int], Any]) -> np.ndarray:
    """Applies fn(value, x, y) to every cell and returns the new grid."""
    grid = np.asarray(grid)
    _check_grid(grid)
    h, w = grid.shape[:2]
    return make_grid(w, h, lambda x, y: fn(grid[y, x], x, y))


def mirror(grid: np.ndarray) -> np.ndarray:
    """Makes the right half of the grid a mirror image of the left half."""
    grid = np.asarray(grid)
    _check_grid(grid)
    w = grid.shape[1]
    out = grid.copy()
    left = np.arange((w + 1) // 2)
    out[:, w - 1 - left] = grid[:, left]
    return out


@jit(nopython=True)
def _convolve_numba(grid, kernel):
    """Numba-jitted zero-padded correlation of a scalar grid with a kernel."""
    h, w = grid.shape
    kh, kw = kernel.shape
    ox = kw // 2
    oy = kh // 2
    out = np.zeros((h, w), dtype=np.float64)
    for y in range(h):
        for x in range(w):
            s = 0.0
            for ky in range(kh):
                gy = y + ky - oy
                if gy < 0 or gy >= h:
                    continue
                for kx in range(kw):
                    gx = x + kx - ox
                    if 0 <= gx < w:
                        s += grid[gy, gx] * kernel[ky, kx]
            out[y, x] = s
    return out


def convolve(grid: np.ndarray, kernel) -> np.ndarray:
    """
    Correlates a scalar grid with a kernel, treating cells outside the grid
    as zero.

    Kernels may have independent odd or even width and height, but must be
    rectangular, non-empty and no larger than the grid.
    """
    grid = np.asarray(grid, dtype=np.float64)
    try:
        kernel = np.asarray(kernel, dtype=np.float64)
    except ValueError as e:
        msg = f"Kernel rows must all have the same length: {e}"
        logging.error(msg)
        raise ValueError(msg) from e

    if grid.ndim != 2:
        msg = f"convolve expects a scalar grid of shape (h, w), got {grid.shape}."
        logging.error(msg)
        raise ValueError(msg)
    _check_grid(grid)
    if kernel.ndim != 2 or kernel.size == 0:
        msg = f"Kernel must be a non-empty 2D array, got shape {kernel.shape}."
        logging.error(msg)
        raise ValueError(msg)
    if kernel.shape[0] > grid.shape[0] or kernel.shape[1] > grid.shape[1]:
        msg = f"Kernel shape {kernel.shape} is larger than grid shape {grid.shape}."
        logging.error(msg)
        raise ValueError(msg)

    return _convolve_numba(grid, kernel)
