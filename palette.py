# palette.py
"""
Random HSL colour palettes.
"""
import logging
import math
from typing import List

from constants import (
    HUE_RANGE, MIN_SATURATION, SATURATION_SPREAD, MIN_LIGHTNESS, LIGHTNESS_SPREAD
)
from random_stream import RandomStream

# --- Data Contracts ---
#
# build_palette(stream: RandomStream, n: int) -> List[str]:
#   - Outputs: n strings "hsl(H S% L%)" with integer H in [0, 360),
#     S in [40, 100) and L in [20, 80).
#   - Side Effects: draws three values per colour (hue, saturation,
#     lightness) from the stream.


def build_palette(stream: RandomStream, n: int) -> List[str]:
    """
    Draws n colours as CSS 'hsl(H S% L%)' strings.

    Hue is an integer in [0, 360), saturation in [40, 100) and lightness in
    [20, 80), each drawn independently in that order.
    """
    if n < 0:
        msg = f"Palette size must not be negative, got {n}."
        logging.error(msg)
        raise ValueError(msg)

    palette = []
    for _ in range(n):
        hue = math.floor(stream.next() * HUE_RANGE)
        saturation = math.floor(MIN_SATURATION + stream.next() * SATURATION_SPREAD)
        lightness = math.floor(MIN_LIGHTNESS + stream.next() * LIGHTNESS_SPREAD)
        palette.append(f"hsl({hue} {saturation}% {lightness}%)")

    logging.debug(f"Built palette of {n} colours.")
    return palette
