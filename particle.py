# particle.py
"""
Manages the live set of simulated entities.

This module defines the two entity pools, one per effect. Each pool stores
its entity state in NumPy arrays and is spawned from scratch whenever the
drawing surface is (re)built. Pools are never resized in place.
"""
import logging
import numpy as np

from config import EffectConfig
from constants import VELOCITY_RANGE, FULL_TURN
from geometry import Surface

# --- Data Contracts ---
#
# class CirclePool:
#   - __init__(self, config: EffectConfig, surface: Surface, rng: np.random.Generator):
#     - Side Effects: Initializes internal NumPy arrays for circle state.
#     - Invariants:
#       - self.positions, self.velocities: (N, 2) float64.
#       - self.radii, self.min_radii: (N,) float64, radii >= min_radii.
#       - self.color_indices: (N,) int64 into config.palette.
#       - Each circle spawns at least its own radius away from every edge.
#
# class OrbitPool:
#   - __init__(self, config: EffectConfig, surface: Surface, rng: np.random.Generator):
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions, self.last_points, self.last_mouse: (N, 2) float64,
#         all starting at the surface center.
#       - self.angular_velocity in [0.02, 0.05), self.distance_from_center
#         in [50, 120) by default; both never change after construction.
#       - self.radians: (N,) float64, non-decreasing.


class CirclePool:
    """
    The bouncing, pointer-reactive circles of the floating dots effect.
    """
    def __init__(self, config: EffectConfig, surface: Surface, rng: np.random.Generator):
        """
        Spawns config.entity_count circles inside the surface.

        Args:
            config (EffectConfig): Effect tuning.
            surface (Surface): The surface the circles live on.
            rng (np.random.Generator): Source of all randomness for the pool.
        """
        count = config.entity_count
        self.count = count

        self.radii = rng.random(count) * config.radius_jitter_min + config.radius_jitter_base
        self.min_radii = self.radii.copy()

        # Exclude a margin of one radius on each side of each axis.
        size = np.array([surface.width, surface.height], dtype=np.float64)
        radii = self.radii[:, np.newaxis]
        self.positions = rng.random((count, 2)) * (size - 2 * radii) + radii

        self.velocities = rng.random((count, 2)) - VELOCITY_RANGE
        self.color_indices = rng.integers(0, len(config.palette), size=count)

        logging.info(
            f"CirclePool initialized with {count} circles "
            f"on a {surface.width:.1f}x{surface.height:.1f} surface."
        )
        logging.debug(
            f"Circle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Radius range: [{self.radii.min():.2f}, {self.radii.max():.2f}]"
        )


class OrbitPool:
    """
    The ring of pixels of the circulating pixels effect.

    Each particle orbits its own lagging follower of the pointer, which is
    what makes the ring stretch and stagger as the pointer moves.
    """
    def __init__(self, config: EffectConfig, surface: Surface, rng: np.random.Generator):
        count = config.entity_count
        self.count = count

        self.radii = rng.random(count) * config.radius_jitter_min + config.radius_jitter_base
        self.radians = rng.random(count) * FULL_TURN
        self.angular_velocity = (
            rng.random(count) * config.angular_velocity_jitter + config.angular_velocity_min
        )
        self.distance_from_center = (
            rng.random(count) * config.orbit_distance_jitter + config.orbit_distance_min
        )
        # Freeze the per-particle constants.
        self.angular_velocity.flags.writeable = False
        self.distance_from_center.flags.writeable = False

        center = np.array(surface.center, dtype=np.float64)
        self.positions = np.tile(center, (count, 1))
        self.last_points = self.positions.copy()
        self.last_mouse = self.positions.copy()
        self.color_indices = rng.integers(0, len(config.palette), size=count)

        logging.info(
            f"OrbitPool initialized with {count} particles "
            f"around ({center[0]:.1f}, {center[1]:.1f})."
        )
