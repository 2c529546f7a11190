# particle.py
"""
Manages the state of all particles in a flow-field simulation.

This module defines the ParticleSystem class, which is responsible for
creating and respawning particles and storing their data (id, position,
velocity, lifetime, colour, size) in NumPy arrays.
"""
import logging
import math
from typing import List

import numpy as np

from constants import (
    VELOCITY_SPREAD, MIN_LIFETIME, LIFETIME_SPREAD, MIN_PARTICLE_SIZE,
    PARTICLE_SIZE_SPREAD, COLOR_CHANNEL_RANGE
)
from random_stream import RandomStream

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, stream: RandomStream, count: int, width: float, height: float):
#     - Inputs:
#       - stream: the session's RandomStream. Every draw comes from it.
#       - count: int, number of particles. Constant for the system's life.
#       - width, height: extent of the world particles are spawned into.
#     - Side Effects: draws the initial state of every particle, in index
#       order, from the stream.
#     - Invariants:
#       - self.ids is a list of N unique strings.
#       - self.positions, self.velocities are float64 arrays of shape (N, 2).
#       - self.lifetimes is an int64 array of shape (N,).
#       - self.colors is an int64 array of shape (N, 3), channels in [0, 255).
#       - self.sizes is a float64 array of shape (N,).
#
#   - respawn(self, i: int) -> None:
#     - Side Effects: redraws position, lifetime, velocity, colour and size
#       of particle i. The id is kept.


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, stream: RandomStream, count: int, width: float, height: float):
        """
        Initializes the particle system.

        Args:
            stream (RandomStream): The session stream.
            count (int): Number of particles.
            width (float): The width of the simulation area.
            height (float): The height of the simulation area.
        """
        if count <= 0:
            msg = f"Particle count must be positive, got {count}."
            logging.critical(msg)
            raise ValueError(msg)
        if width <= 0 or height <= 0:
            msg = f"Simulation area must be positive, got {width}x{height}."
            logging.critical(msg)
            raise ValueError(msg)

        self.stream = stream
        self.particle_count = count
        self.width = width
        self.height = height

        self.ids: List[str] = []
        self.positions = np.zeros((count, 2), dtype=np.float64)
        self.velocities = np.zeros((count, 2), dtype=np.float64)
        self.lifetimes = np.zeros(count, dtype=np.int64)
        self.colors = np.zeros((count, 3), dtype=np.int64)
        self.sizes = np.zeros(count, dtype=np.float64)

        for i in range(count):
            self.ids.append(stream.make_id(i))
            self.positions[i] = (stream.next() * width, stream.next() * height)
            self.velocities[i] = self._draw_velocity()
            self.lifetimes[i] = self._draw_lifetime()
            self.colors[i] = self._draw_color()
            self.sizes[i] = self._draw_size()

        logging.info(f"ParticleSystem initialized with {count} particles in a {width}x{height} area.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}, "
            f"Colors shape: {self.colors.shape}"
        )

    def _draw_velocity(self):
        return ((self.stream.next() - 0.5) * VELOCITY_SPREAD,
                (self.stream.next() - 0.5) * VELOCITY_SPREAD)

    def _draw_lifetime(self) -> int:
        return MIN_LIFETIME + math.floor(self.stream.next() * LIFETIME_SPREAD)

    def _draw_color(self):
        return tuple(math.floor(self.stream.next() * COLOR_CHANNEL_RANGE) for _ in range(3))

    def _draw_size(self) -> float:
        return MIN_PARTICLE_SIZE + self.stream.next() * PARTICLE_SIZE_SPREAD

    def respawn(self, i: int) -> None:
        """Gives particle i a fresh random state, keeping only its id."""
        self.positions[i] = (self.stream.next() * self.width, self.stream.next() * self.height)
        self.lifetimes[i] = self._draw_lifetime()
        self.velocities[i] = self._draw_velocity()
        self.colors[i] = self._draw_color()
        self.sizes[i] = self._draw_size()
