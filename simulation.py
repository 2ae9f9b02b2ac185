# simulation.py
"""
Handles the per-tick physics of both effects.

This module defines the CircleSimulation and OrbitSimulation classes, which
advance every entity of a pool by one tick given the current pointer
position. The hot loops are Numba-jitted kernels operating directly on the
pools' NumPy arrays.
"""
import logging
import math
import numpy as np
from typing import Tuple
from numba import jit

from config import EffectConfig
from geometry import Surface
from particle import CirclePool, OrbitPool

# --- Data Contracts ---
#
# class CircleSimulation:
#   - step(self, pool: CirclePool, surface: Surface, pointer: Tuple[float, float]) -> None:
#     - Inputs:
#       - pointer: surface-local pointer position. NaN means "unknown",
#         which is never inside the proximity box.
#     - Side Effects: mutates pool.positions, pool.velocities, pool.radii.
#     - Invariants: min_radii <= radii <= max_radius after every step.
#       A circle over an edge at the start of a step has its velocity
#       component on that axis negated.
#
# class OrbitSimulation:
#   - step(self, pool: OrbitPool, pointer: Tuple[float, float]) -> None:
#     - Side Effects: mutates pool.last_points, pool.last_mouse,
#       pool.radians, pool.positions.
#     - Invariants: distance_from_center and angular_velocity never change;
#       radians never decreases.

Pointer = Tuple[float, float]


@jit(nopython=True)
def _step_circles_numba(
    positions, velocities, radii, min_radii, width, height,
    pointer_x, pointer_y, half_width, max_radius, growth_step, shrink_step
):
    """
    Numba-jitted bounce, integrate and grow/shrink pass over all circles.
    """
    for i in range(positions.shape[0]):
        x = positions[i, 0]
        y = positions[i, 1]
        radius = radii[i]

        # 1. Reflect off the surface edges, each axis independently
        if x + radius > width or x - radius < 0.0:
            velocities[i, 0] = -velocities[i, 0]
        if y + radius > height or y - radius < 0.0:
            velocities[i, 1] = -velocities[i, 1]

        # 2. Integrate position
        x += velocities[i, 0]
        y += velocities[i, 1]
        positions[i, 0] = x
        positions[i, 1] = y

        # 3. Grow inside the proximity box around the pointer, shrink outside.
        # Comparisons against a NaN pointer are False, so circles shrink.
        dx = pointer_x - x
        dy = pointer_y - y
        if -half_width < dx < half_width and -half_width < dy < half_width:
            radii[i] = min(radius + growth_step, max_radius)
        else:
            radii[i] = max(radius - shrink_step, min_radii[i])


@jit(nopython=True)
def _step_orbit_numba(
    positions, last_points, last_mouse, radians, angular_velocity,
    distance_from_center, pointer_x, pointer_y, follow_rate
):
    """
    Numba-jitted chase and orbit pass over all particles.
    """
    for i in range(positions.shape[0]):
        last_points[i, 0] = positions[i, 0]
        last_points[i, 1] = positions[i, 1]

        # Each particle has its own low-pass follower of the pointer
        last_mouse[i, 0] += (pointer_x - last_mouse[i, 0]) * follow_rate
        last_mouse[i, 1] += (pointer_y - last_mouse[i, 1]) * follow_rate

        radians[i] += angular_velocity[i]
        positions[i, 0] = last_mouse[i, 0] + math.cos(radians[i]) * distance_from_center[i]
        positions[i, 1] = last_mouse[i, 1] + math.sin(radians[i]) * distance_from_center[i]


class CircleSimulation:
    """
    Advances the floating dots: edge bounce, drift and pointer proximity growth.
    """
    def __init__(self, config: EffectConfig):
        # Pre-convert scalars once, not every tick.
        self.max_radius = np.float64(config.max_radius)
        self.half_width = np.float64(config.proximity_half_width)
        self.growth_step = np.float64(config.growth_step)
        self.shrink_step = np.float64(config.shrink_step)
        logging.info(
            f"Circle physics initialized: max radius {config.max_radius}, "
            f"proximity box {2 * config.proximity_half_width}px."
        )

    def step(self, pool: CirclePool, surface: Surface, pointer: Pointer) -> None:
        """
        Executes one tick for every circle of the pool.
        """
        _step_circles_numba(
            pool.positions, pool.velocities, pool.radii, pool.min_radii,
            np.float64(surface.width), np.float64(surface.height),
            np.float64(pointer[0]), np.float64(pointer[1]),
            self.half_width, self.max_radius, self.growth_step, self.shrink_step
        )


class OrbitSimulation:
    """
    Advances the circulating pixels around their lagging pointer followers.
    """
    def __init__(self, config: EffectConfig):
        self.follow_rate = np.float64(config.follow_rate)
        logging.info(f"Orbit physics initialized: follow rate {config.follow_rate}.")

    def step(self, pool: OrbitPool, pointer: Pointer) -> None:
        """
        Executes one tick for every particle of the pool.
        """
        _step_orbit_numba(
            pool.positions, pool.last_points, pool.last_mouse, pool.radians,
            pool.angular_velocity, pool.distance_from_center,
            np.float64(pointer[0]), np.float64(pointer[1]), self.follow_rate
        )
