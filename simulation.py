# simulation.py
"""
Handles the particle simulation logic and physics.

This module defines the ParticleSimulation class, which advances a
ParticleSystem through a flow field one frame at a time, and
simulate_particles, which precomputes a fixed number of frames as a
replayable sequence of snapshots.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from constants import (
    FRAME_COUNT, TIME_STEP, DAMPING, FLOW_STRENGTH, KICK_PROBABILITY, KICK_STRENGTH
)
from flow_field import sample_flow
from grids import frozen_copy
from particle import ParticleSystem
from random_stream import RandomStream, clamp

# --- Data Contracts ---
#
# class ParticleSimulation:
#   - __init__(self, particles: ParticleSystem, field: np.ndarray):
#     - Inputs:
#       - particles: An initialized ParticleSystem.
#       - field: (fh, fw, 2) flow field. Shared, never modified.
#
#   - snapshot(self) -> ParticleFrame:
#     - Outputs: read-only copies of positions, sizes and colours, in
#       particle order.
#
#   - step(self) -> None:
#     - Side Effects: advances every particle by one frame, in index order,
#       drawing kicks and respawns from the particle system's stream.
#     - Invariants: Particle count remains constant. Positions stay in
#       [0, width) x [0, height). Each lifetime drops by exactly one,
#       unless the particle respawns.
#
# simulate_particles(stream, count, field, frames=120, width=None, height=None)
#   -> List[ParticleFrame]:
#   - Frame t is recorded before the t-th step is applied.


@dataclass(frozen=True)
class ParticleFrame:
    """The drawable state of every particle at one frame."""
    positions: np.ndarray
    sizes: np.ndarray
    colors: np.ndarray

    def __len__(self) -> int:
        return len(self.sizes)


def wrap(value: float, extent: float) -> float:
    """Wraps a coordinate onto [0, extent)."""
    value %= extent
    # Tiny negative values round up to extent under float modulo.
    if value >= extent:
        value -= extent
    return value


class ParticleSimulation:
    """
    Advances particles through a flow field with damping, random kicks,
    toroidal wrap-around and respawning.
    """
    def __init__(self, particles: ParticleSystem, field: np.ndarray):
        """
        Args:
            particles (ParticleSystem): The particle system to simulate.
            field (np.ndarray): Flow field of shape (fh, fw, 2).
        """
        field = np.asarray(field, dtype=np.float64)
        if field.ndim != 3 or field.shape[2] != 2 or field.shape[0] == 0 or field.shape[1] == 0:
            msg = f"Flow field must have shape (h, w, 2) with h, w > 0, got {field.shape}."
            logging.critical(msg)
            raise ValueError(msg)

        self.particles = particles
        self.stream = particles.stream
        self.field = field
        self.field_height, self.field_width = field.shape[:2]
        self.frame = 0
        self.respawn_count = 0

        logging.info(
            f"Particle simulation initialized: {particles.particle_count} particles, "
            f"{self.field_width}x{self.field_height} flow field."
        )

    def snapshot(self) -> ParticleFrame:
        p = self.particles
        return ParticleFrame(
            positions=frozen_copy(p.positions),
            sizes=frozen_copy(p.sizes),
            colors=frozen_copy(p.colors),
        )

    def step(self):
        """
        Executes one frame of the simulation.
        """
        p = self.particles
        width, height = p.width, p.height

        for i in range(p.particle_count):
            vx, vy = p.velocities[i]

            # 1. Rare random kick
            if self.stream.next() < KICK_PROBABILITY:
                vx += (self.stream.next() - 0.5) * KICK_STRENGTH
                vy += (self.stream.next() - 0.5) * KICK_STRENGTH

            # 2. Advect by the field vector under the particle's clamped cell
            x, y = p.positions[i]
            fx = clamp(math.floor(x), 0, self.field_width - 1)
            fy = clamp(math.floor(y), 0, self.field_height - 1)
            flow = sample_flow(self.field, fx, fy)
            vx += flow[0] * FLOW_STRENGTH
            vy += flow[1] * FLOW_STRENGTH

            # 3. Integrate, then damp
            x += vx * TIME_STEP
            y += vy * TIME_STEP
            vx *= DAMPING
            vy *= DAMPING

            p.positions[i] = (wrap(x, width), wrap(y, height))
            p.velocities[i] = (vx, vy)
            p.lifetimes[i] -= 1

            # 4. Respawn
            if p.lifetimes[i] <= 0:
                p.respawn(i)
                self.respawn_count += 1

        self.frame += 1


def simulate_particles(
    stream: RandomStream,
    count: int,
    field: np.ndarray,
    frames: int = FRAME_COUNT,
    width: Optional[float] = None,
    height: Optional[float] = None,
    log_throttle: int = 30,
) -> List[ParticleFrame]:
    """
    Precomputes a particle animation.

    Args:
        stream (RandomStream): The session stream.
        count (int): Number of particles.
        field (np.ndarray): Flow field steering the particles.
        frames (int): Number of frames to record.
        width (float): World width. Defaults to the field width.
        height (float): World height. Defaults to the field height.
        log_throttle (int): Frames between progress log lines.

    Returns:
        List[ParticleFrame]: One snapshot per frame, taken before that
        frame's update.
    """
    if frames < 0:
        msg = f"Frame count must not be negative, got {frames}."
        logging.critical(msg)
        raise ValueError(msg)

    field = np.asarray(field, dtype=np.float64)
    if width is None:
        width = field.shape[1]
    if height is None:
        height = field.shape[0]

    particles = ParticleSystem(stream, count, width, height)
    sim = ParticleSimulation(particles, field)

    steps = []
    for t in range(frames):
        steps.append(sim.snapshot())
        sim.step()

        # Hot loops must throttle logs
        if log_throttle > 0 and (t + 1) % log_throttle == 0:
            avg_speed = np.mean(np.linalg.norm(particles.velocities, axis=1))
            logging.debug(f"Frame {t + 1}/{frames} | Average speed: {avg_speed:.4f}")

    logging.info(f"Recorded {len(steps)} particle frames ({sim.respawn_count} respawns).")
    return steps
