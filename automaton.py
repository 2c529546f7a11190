# automaton.py
"""
Binary cellular automata with a randomised Moore-neighbourhood rule.

A run starts from a random grid (each cell alive with probability 0.45) and
a random rule table that maps each of the 512 possible 3x3 neighbourhoods to
a next state. Every generation is computed into a fresh buffer from the
previous one, with toroidal wrap-around at the edges.
"""
import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np
from numba import jit

from constants import ALIVE_PROBABILITY, RULE_TABLE_SIZE
from grids import check_dimensions, freeze, frozen_copy
from random_stream import RandomStream

# --- Data Contracts ---
#
# neighborhood_index(cells, x, y) -> int:
#   - The 9 states of (x, y) and its neighbours, read row by row from the
#     top-left (dy = -1..1, dx = -1..1) with wrap-around, as the bits of a
#     number from most to least significant.
#
# step_automaton(cells, rule) -> np.ndarray:
#   - Outputs: the next generation. The input is not modified.
#
# run_automaton(stream, w, h, iterations) -> AutomatonRun:
#   - Draws the initial grid row by row, then the rule outcomes for keys
#     0..511 in order.
#   - snapshots[t] is the grid before generation t is applied; a run of
#     zero iterations has no snapshots and an untouched initial grid.
#   - initial, rule and every snapshot are read-only arrays.


@dataclass
class AutomatonRun:
    initial: np.ndarray
    rule: np.ndarray
    snapshots: List[np.ndarray] = field(default_factory=list)


@jit(nopython=True)
def _neighborhood_index_numba(cells, x, y):
    h, w = cells.shape
    key = 0
    for dy in range(-1, 2):
        ny = (y + dy + h) % h
        for dx in range(-1, 2):
            nx = (x + dx + w) % w
            key = (key << 1) | (1 if cells[ny, nx] else 0)
    return key


@jit(nopython=True)
def _step_numba(cells, rule):
    """Numba-jitted computation of one generation into a fresh buffer."""
    h, w = cells.shape
    out = np.zeros((h, w), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            out[y, x] = rule[_neighborhood_index_numba(cells, x, y)]
    return out


def neighborhood_index(cells: np.ndarray, x: int, y: int) -> int:
    """The 9-bit rule table key of cell (x, y)."""
    return int(_neighborhood_index_numba(np.asarray(cells, dtype=np.uint8), x, y))


def random_rule(stream: RandomStream) -> np.ndarray:
    """A 512-entry table of uniformly random next states."""
    return np.array(
        [1 if stream.next() > 0.5 else 0 for _ in range(RULE_TABLE_SIZE)],
        dtype=np.uint8,
    )


def random_cells(stream: RandomStream, w: int, h: int) -> np.ndarray:
    check_dimensions(w, h)
    cells = np.zeros((h, w), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            cells[y, x] = 1 if stream.next() < ALIVE_PROBABILITY else 0
    return cells


def step_automaton(cells: np.ndarray, rule: np.ndarray) -> np.ndarray:
    """Applies the rule table to every cell at once."""
    rule = np.asarray(rule, dtype=np.uint8)
    if rule.shape != (RULE_TABLE_SIZE,):
        msg = f"Rule table must have {RULE_TABLE_SIZE} entries, got shape {rule.shape}."
        logging.error(msg)
        raise ValueError(msg)
    return _step_numba(np.asarray(cells, dtype=np.uint8), rule)


def run_automaton(
    stream: RandomStream,
    w: int,
    h: int,
    iterations: int,
    log_throttle: int = 10,
) -> AutomatonRun:
    """
    Evolves a random grid under a random rule.

    Args:
        stream (RandomStream): The session stream.
        w (int): Grid width.
        h (int): Grid height.
        iterations (int): Number of generations to record.
        log_throttle (int): Generations between progress log lines.

    Returns:
        AutomatonRun: The initial grid, the rule table, and one snapshot per
        iteration taken before that iteration's update.
    """
    if iterations < 0:
        msg = f"Iteration count must not be negative, got {iterations}."
        logging.error(msg)
        raise ValueError(msg)

    cells = random_cells(stream, w, h)
    rule = freeze(random_rule(stream))
    run = AutomatonRun(initial=frozen_copy(cells), rule=rule)

    for t in range(iterations):
        run.snapshots.append(frozen_copy(cells))
        cells = step_automaton(cells, rule)

        if log_throttle > 0 and (t + 1) % log_throttle == 0:
            logging.debug(f"Generation {t + 1}/{iterations} | Alive: {int(cells.sum())}")

    logging.info(
        f"Automaton {w}x{h}: {iterations} generations recorded, "
        f"{int(rule.sum())}/{RULE_TABLE_SIZE} rule entries alive."
    )
    return run
