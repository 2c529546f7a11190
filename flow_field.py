# flow_field.py
"""
Vector flow fields derived from gradient noise.

Each cell's noise value in [0, 1] is read as a fraction of a full turn and
stored as the unit vector (cos, sin) of that angle. The field is computed
once and only read afterwards.
"""
import logging
import math

import numpy as np

from grids import freeze, map_grid
from noise_field import perlin_noise
from random_stream import RandomStream

# --- Data Contracts ---
#
# flow_field(stream, w, h, scale) -> np.ndarray:
#   - Inputs: scale is the noise lattice density, validated like freq.
#   - Outputs: read-only (h, w, 2) float64 grid of unit vectors.
#
# sample_flow(field, ix, iy) -> np.ndarray:
#   - Outputs: the vector at integer cell (ix, iy), or a read-only zero
#     vector when the cell is outside the field.

ZERO_VECTOR = np.zeros(2, dtype=np.float64)
ZERO_VECTOR.flags.writeable = False


def flow_field(stream: RandomStream, w: int, h: int, scale: int) -> np.ndarray:
    """Returns an (h, w, 2) grid of unit vectors steered by noise at the given lattice scale."""
    noise = perlin_noise(stream, w, h, freq=scale, amp=1.0)
    field = map_grid(
        noise, lambda v, x, y: (math.cos(v * math.pi * 2), math.sin(v * math.pi * 2))
    )
    logging.debug(f"Flow field {w}x{h} derived at scale {scale}.")
    return freeze(field)


def sample_flow(field: np.ndarray, ix: int, iy: int) -> np.ndarray:
    """The vector at cell (ix, iy), or the zero vector when the cell is outside the field."""
    h, w = field.shape[:2]
    if 0 <= ix < w and 0 <= iy < h:
        return field[iy, ix]
    return ZERO_VECTOR
