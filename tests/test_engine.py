import dataclasses
import math

import numpy as np
import pytest

from config import EffectConfig, CIRCLES, ORBIT
from engine import FloatingDotsEngine, CirculatingPixelsEngine
from pointer import ScrollService
from scheduler import FrameScheduler


class FakeClock:
    def tick(self, fps):
        return 16


@pytest.fixture
def service():
    return ScrollService()


@pytest.fixture
def dots(service):
    config = dataclasses.replace(EffectConfig.defaults(CIRCLES), entity_count=40, seed=3)
    return FloatingDotsEngine(config, service)


@pytest.fixture
def pixels(service):
    config = dataclasses.replace(EffectConfig.defaults(ORBIT), seed=3)
    return CirculatingPixelsEngine(config, service)


def test_tick_before_start_is_a_no_op(dots):
    dots.tick()
    assert dots.tick_count == 0
    assert dots.surface is None


def test_start_builds_surface_pool_and_canvas(dots):
    dots.start(1024, 1000)
    assert dots.surface.width == pytest.approx(668.8)
    assert dots.pool.count == 40
    assert dots.canvas.get_size() == (668, 400)
    dots.tick()
    dots.tick()
    assert dots.tick_count == 2


def test_pointer_is_translated_into_surface_space(dots, service):
    dots.start(1024, 1000)
    assert all(math.isnan(v) for v in dots.pointer)
    service.move_pointer(300, 200)
    assert dots.pointer == pytest.approx((300 - 177.6, 200 - 141.0))
    service.set_scroll_y(100)
    assert dots.pointer == pytest.approx((300 - 177.6, 200 - 141.0 + 100))


def test_orbit_pointer_starts_at_surface_center(pixels):
    pixels.start(1024, 1000)
    assert pixels.pointer == pytest.approx(pixels.surface.center)


def test_resize_is_applied_at_next_tick(dots):
    dots.start(1024, 1000)
    old_surface, old_pool = dots.surface, dots.pool
    dots.request_resize(500, 800)
    assert dots.surface is old_surface
    assert dots.pool is old_pool

    dots.tick()
    assert dots.surface.small
    assert dots.surface.width == pytest.approx(439.0)
    assert dots.pool is not old_pool
    assert dots.canvas.get_size() == (439, 320)


def test_pointer_survives_rebuild(pixels, service):
    pixels.start(1024, 1000)
    service.move_pointer(400, 600)
    raw_local = pixels.pointer
    pixels.request_resize(1024, 1000)
    pixels.tick()
    assert pixels.pointer == pytest.approx(raw_local)


def test_rebuild_respawns_circles_inside_new_surface(dots):
    dots.start(1600, 1000)
    dots.request_resize(400, 300)
    dots.tick()
    pool, surface = dots.pool, dots.surface
    # Positions are checked after one tick of drift, at most 0.5px per axis.
    assert np.all(pool.positions[:, 0] <= surface.width - pool.min_radii + 0.5)
    assert np.all(pool.positions[:, 1] <= surface.height - pool.min_radii + 0.5)


def test_teardown_stops_ticks_and_is_idempotent(dots, pixels, service):
    scheduler = FrameScheduler(clock=FakeClock())
    dots.start(1024, 1000, scheduler=scheduler)
    pixels.start(1024, 1000, scheduler=scheduler)
    for _ in range(3):
        scheduler.run_frame()
    assert dots.tick_count == 3
    assert pixels.tick_count == 3

    dots.teardown()
    dots.teardown()
    for _ in range(3):
        scheduler.run_frame()
    assert dots.tick_count == 3
    assert pixels.tick_count == 6
    assert dots.pool is None and dots.canvas is None and dots.surface is None

    pixels.teardown()
    assert service.pointer.subscriber_count == 0
    assert service.scroll_y.subscriber_count == 0
    scheduler.max_frames = scheduler.frame_count + 5
    scheduler.start()
    assert pixels.tick_count == 6


def test_tick_after_teardown_is_a_no_op(pixels):
    pixels.start(1024, 1000)
    pixels.teardown()
    pixels.request_resize(800, 600)
    pixels.tick()
    assert pixels.tick_count == 0
    assert pixels.surface is None


def test_circles_stay_within_radius_bounds_under_engine(dots, service):
    dots.start(1024, 1000)
    for i in range(120):
        x, y = dots.pool.positions[i % dots.pool.count]
        service.move_pointer(x + dots.surface.offset_x, y + dots.surface.offset_y)
        dots.tick()
        assert np.all(dots.pool.radii >= dots.pool.min_radii)
        assert np.all(dots.pool.radii <= dots.config.max_radius)


def test_start_viewport_wins_over_earlier_resize(dots):
    dots.request_resize(500, 400)
    dots.start(1024, 1000)
    dots.tick()
    assert not dots.surface.small
    assert dots.surface.width == pytest.approx(668.8)


def test_teardown_before_start_drops_pending_resize(dots):
    dots.request_resize(500, 400)
    dots.teardown()
    assert dots._pending_viewport is None
    dots.tick()
    assert dots.tick_count == 0
