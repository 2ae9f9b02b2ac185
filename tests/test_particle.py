import dataclasses
import math

import numpy as np

from geometry import Surface
from particle import CirclePool, OrbitPool


def test_circle_pool_spawns_configured_count(circle_config, surface, rng):
    pool = CirclePool(circle_config, surface, rng)
    assert pool.count == 500
    assert pool.positions.shape == (500, 2)
    assert pool.velocities.shape == (500, 2)
    assert np.all((pool.radii >= 2) & (pool.radii < 6))
    np.testing.assert_array_equal(pool.radii, pool.min_radii)
    assert np.all((pool.velocities > -0.5) & (pool.velocities < 0.5))
    assert np.all((pool.color_indices >= 0) & (pool.color_indices < len(circle_config.palette)))


def test_circle_spawn_keeps_one_radius_from_every_edge(circle_config, rng):
    # Fixed radius of 5 on a 668.8 x 400 surface.
    config = dataclasses.replace(
        circle_config, entity_count=1000, radius_jitter_min=0, radius_jitter_base=5
    )
    surface = Surface(668.8, 400.0, 0.0, 0.0, False)
    pool = CirclePool(config, surface, rng)
    assert np.all(pool.radii == 5)
    xs, ys = pool.positions[:, 0], pool.positions[:, 1]
    assert xs.min() >= 5 and xs.max() <= 663.8
    assert ys.min() >= 5 and ys.max() <= 395


def test_same_seed_spawns_same_pool(circle_config, surface):
    a = CirclePool(circle_config, surface, np.random.default_rng(42))
    b = CirclePool(circle_config, surface, np.random.default_rng(42))
    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.color_indices, b.color_indices)


def test_orbit_pool_spawns_at_surface_center(orbit_config, surface, rng):
    pool = OrbitPool(orbit_config, surface, rng)
    assert pool.count == 50
    center = np.array(surface.center)
    for array in (pool.positions, pool.last_points, pool.last_mouse):
        np.testing.assert_allclose(array, np.tile(center, (50, 1)))
    assert np.all((pool.angular_velocity >= 0.02) & (pool.angular_velocity < 0.05))
    assert np.all((pool.distance_from_center >= 50) & (pool.distance_from_center < 120))
    assert np.all((pool.radii >= 1) & (pool.radii < 3))
    assert np.all((pool.radians >= 0) & (pool.radians < 2 * math.pi))


def test_orbit_constants_are_frozen(orbit_config, surface, rng):
    pool = OrbitPool(orbit_config, surface, rng)
    assert not pool.angular_velocity.flags.writeable
    assert not pool.distance_from_center.flags.writeable
