# noise_field.py
"""
Gradient (Perlin-style) noise over a rectangular grid.

A freq x freq lattice is laid over the grid. Each lattice point receives a
random unit gradient, drawn from the session stream the first time the point
is needed. Every cell's value is the faded bilinear blend of the dot products
between its offset from the four surrounding lattice points and their
gradients, remapped from [-1, 1] to [0, 1].
"""
import logging
import math
import numbers

import numpy as np

from constants import DEFAULT_NOISE_FREQ, DEFAULT_NOISE_AMP
from grids import check_dimensions, freeze
from random_stream import RandomStream

# --- Data Contracts ---
#
# perlin_noise(stream, w, h, freq=6, amp=1.0) -> np.ndarray:
#   - Inputs:
#     - freq: positive integer lattice density. Integral floats such as
#       4.0 are accepted; other values raise ValueError.
#   - Outputs: read-only (h, w) float64 grid.
#   - Side Effects: draws one value from the stream for every lattice point
#     the grid touches, in first-use order.
#   - Invariants: a lattice point's gradient is drawn once per call.


def fade(t: float) -> float:
    """The quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


class _GradientLattice:
    """
    Lazily drawn gradients for one noise call.

    Gradients are kept in a (freq+1, freq+1, 2) array indexed by lattice
    coordinate, so a point that is visited again reuses its first gradient.
    The lattice is discarded when the call returns.
    """
    def __init__(self, stream: RandomStream, freq: int):
        self.stream = stream
        self.vectors = np.zeros((freq + 1, freq + 1, 2), dtype=np.float64)
        self.drawn = np.zeros((freq + 1, freq + 1), dtype=bool)

    def gradient(self, ix: int, iy: int) -> np.ndarray:
        if not self.drawn[iy, ix]:
            angle = self.stream.next() * math.pi * 2
            self.vectors[iy, ix] = (math.cos(angle), math.sin(angle))
            self.drawn[iy, ix] = True
        return self.vectors[iy, ix]

    def dot(self, ix: int, iy: int, px: float, py: float) -> float:
        g = self.gradient(ix, iy)
        return g[0] * (px - ix) + g[1] * (py - iy)


def _lattice_density(freq) -> int:
    """Validates freq as a positive whole number of lattice cells."""
    if isinstance(freq, float) and freq.is_integer():
        freq = int(freq)
    if isinstance(freq, bool) or not isinstance(freq, numbers.Integral):
        msg = f"Noise frequency must be a whole number, got {freq!r}."
        logging.error(msg)
        raise ValueError(msg)
    if freq <= 0:
        msg = f"Noise frequency must be positive, got {freq}."
        logging.error(msg)
        raise ValueError(msg)
    return int(freq)


def perlin_noise(
    stream: RandomStream,
    w: int,
    h: int,
    freq: int = DEFAULT_NOISE_FREQ,
    amp: float = DEFAULT_NOISE_AMP,
) -> np.ndarray:
    """
    Samples gradient noise on a w x h grid.

    Args:
        stream (RandomStream): The session stream gradients are drawn from.
        w (int): Grid width.
        h (int): Grid height.
        freq (int): Lattice cells along each axis.
        amp (float): Scale applied to the signed value before the remap.

    Returns:
        np.ndarray: (h, w) float64 grid, within [0, 1] for amp <= 1.
    """
    check_dimensions(w, h)
    freq = _lattice_density(freq)

    lattice = _GradientLattice(stream, freq)
    grid = np.zeros((h, w), dtype=np.float64)

    for y in range(h):
        fy = y / h * freq
        y0 = math.floor(fy)
        y1 = y0 + 1
        sy = fade(fy - y0)
        for x in range(w):
            fx = x / w * freq
            x0 = math.floor(fx)
            x1 = x0 + 1
            sx = fade(fx - x0)

            n0 = lattice.dot(x0, y0, fx, fy)
            n1 = lattice.dot(x1, y0, fx, fy)
            ix0 = n0 + (n1 - n0) * sx
            n2 = lattice.dot(x0, y1, fx, fy)
            n3 = lattice.dot(x1, y1, fx, fy)
            ix1 = n2 + (n3 - n2) * sx
            v = ix0 + (ix1 - ix0) * sy
            grid[y, x] = (v * amp + 1) / 2

    logging.debug(
        f"Noise {w}x{h} (freq={freq}, amp={amp}): "
        f"{int(lattice.drawn.sum())} gradients drawn, "
        f"range [{grid.min():.4f}, {grid.max():.4f}]."
    )
    return freeze(grid)
