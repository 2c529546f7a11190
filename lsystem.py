# lsystem.py
"""
L-system rewriting and turtle interpretation.

An axiom is rewritten a fixed number of times by single-character production
rules, then read as turtle commands:

    F, G   move forward one step and trace the new point
    +, -   turn by the fixed angle (degrees)
    [      push position and heading
    ]      pop the last pushed state and continue drawing from it

All other characters are carried through rewriting and ignored by the
turtle. The traced path is an explicit sequence of PathOp records, so branch
breaks are flagged instead of being left for consumers to infer.
"""
import logging
import math
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from random_stream import RandomStream

# A rule maps to a fixed replacement, or to weighted alternatives picked
# from the session stream on every rewrite.
Production = Union[str, Sequence[Tuple[str, float]]]
Point = Tuple[float, float]

# --- Data Contracts ---
#
# rewrite(axiom, rules, iterations, stream=None) -> str:
#   - Inputs:
#     - rules: single-character keys mapped to a replacement string or to
#       a non-empty list of (replacement, weight) pairs.
#     - stream: required when any rule is weighted; one draw per weighted
#       character per iteration.
#
# interpret(symbols, angle, step) -> LSystemPath:
#   - The turtle starts at (0, 0) facing +x. The first op is always a
#     MOVE_TO at the origin.
#   - Raises ValueError on a ']' with no saved state.
#
# LSystemPath:
#   - ops: tuple of PathOp. symbols: the string that was traced.
#   - points() drops PEN_UP ops; polylines() splits at them.

MOVE_TO = 'move_to'
PEN_UP = 'pen_up'
RESTORE = 'restore'


class PathOp(NamedTuple):
    kind: str
    x: float = 0.0
    y: float = 0.0


class LSystemPath:
    """The traced turtle path: points, breaks, and restores, in drawing order."""

    def __init__(self, ops: List[PathOp], symbols: str = ''):
        self.ops = tuple(ops)
        self.symbols = symbols

    def __len__(self) -> int:
        return len(self.ops)

    def points(self) -> List[Point]:
        """Every traced or restored point, with breaks dropped."""
        return [(op.x, op.y) for op in self.ops if op.kind != PEN_UP]

    def polylines(self) -> List[List[Point]]:
        """The path split into separate polylines at each pen-up."""
        lines: List[List[Point]] = [[]]
        for op in self.ops:
            if op.kind == PEN_UP:
                if lines[-1]:
                    lines.append([])
            else:
                lines[-1].append((op.x, op.y))
        if not lines[-1]:
            lines.pop()
        return lines


def _validate_rules(rules: Dict[str, Production]) -> None:
    for key, production in rules.items():
        if not isinstance(key, str) or len(key) != 1:
            msg = f"Rule keys must be single characters, got {key!r}."
            logging.error(msg)
            raise ValueError(msg)
        if not isinstance(production, str) and len(production) == 0:
            msg = f"Rule for {key!r} has no alternatives."
            logging.error(msg)
            raise ValueError(msg)


def rewrite(
    axiom: str,
    rules: Dict[str, Production],
    iterations: int,
    stream: Optional[RandomStream] = None,
) -> str:
    """
    Applies the production rules to every character, iterations times.

    Weighted rules need a stream; plain string rules are deterministic.
    """
    if iterations < 0:
        msg = f"Iteration count must not be negative, got {iterations}."
        logging.error(msg)
        raise ValueError(msg)
    _validate_rules(rules)
    stochastic = any(not isinstance(p, str) for p in rules.values())
    if stochastic and stream is None:
        msg = "Weighted rules need a RandomStream to choose alternatives."
        logging.error(msg)
        raise ValueError(msg)

    s = axiom
    for _ in range(iterations):
        parts = []
        for ch in s:
            production = rules.get(ch)
            if production is None:
                parts.append(ch)
            elif isinstance(production, str):
                parts.append(production)
            else:
                replacements = [r for r, _ in production]
                weights = [w for _, w in production]
                parts.append(stream.weighted_pick(replacements, weights))
        s = ''.join(parts)
    return s


def interpret(symbols: str, angle: float, step: float) -> LSystemPath:
    """Runs the turtle over a symbol string, starting at the origin facing +x."""
    turn = math.radians(angle)
    x, y, heading = 0.0, 0.0, 0.0
    stack: List[Tuple[float, float, float]] = []
    ops = [PathOp(MOVE_TO, x, y)]

    for ch in symbols:
        if ch == 'F' or ch == 'G':
            x += math.cos(heading) * step
            y += math.sin(heading) * step
            ops.append(PathOp(MOVE_TO, x, y))
        elif ch == '+':
            heading += turn
        elif ch == '-':
            heading -= turn
        elif ch == '[':
            stack.append((x, y, heading))
        elif ch == ']':
            if not stack:
                msg = "Unbalanced ']' in L-system string: no saved state to restore."
                logging.error(msg)
                raise ValueError(msg)
            x, y, heading = stack.pop()
            ops.append(PathOp(PEN_UP))
            ops.append(PathOp(RESTORE, x, y))

    return LSystemPath(ops, symbols)


def lsystem(
    iterations: int,
    axiom: str,
    rules: Dict[str, Production],
    angle: float,
    step: float,
    stream: Optional[RandomStream] = None,
) -> LSystemPath:
    """Rewrites the axiom and traces the result."""
    symbols = rewrite(axiom, rules, iterations, stream)
    path = interpret(symbols, angle, step)
    logging.info(
        f"L-system: {len(symbols)} symbols after {iterations} iterations, "
        f"{len(path.points())} points in {len(path.polylines())} polylines."
    )
    return path
