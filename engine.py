# engine.py
"""
The animation engine shared by both effects.

An engine owns one drawing surface, its entity pool and the physics and
rendering steps for that pool. It is driven by a FrameScheduler and fed by a
ScrollService; it never reads input devices itself.
"""
import logging
import math
import numpy as np
from typing import Callable, Optional, Tuple

import pygame

from config import EffectConfig, CIRCLES, ORBIT
from geometry import Surface, resolve_surface
from particle import CirclePool, OrbitPool
from pointer import PointerTracker, ScrollService
from scheduler import FrameScheduler
from simulation import CircleSimulation, OrbitSimulation
from visualization import CircleRenderer, TrailRenderer

# --- Data Contracts ---
#
# class AnimationEngine:
#   - start(self, viewport_width: int, viewport_height: int,
#           scheduler: Optional[FrameScheduler] = None) -> None:
#     - Side Effects: builds the surface, pool and canvas, subscribes to the
#       scroll service and registers tick() with the scheduler.
#   - request_resize(self, viewport_width: int, viewport_height: int) -> None:
#     - Side Effects: records the new viewport. The rebuild happens at the
#       start of the next tick, never in the middle of one.
#   - tick(self) -> None:
#     - Side Effects: one physics step followed by one render pass. No-op
#       before start() and after teardown().
#   - teardown(self) -> None:
#     - Side Effects: unregisters from the scheduler, unsubscribes from the
#       scroll service and releases pool, canvas and renderer caches.
#       Idempotent.


class AnimationEngine:
    """
    Base engine: surface lifecycle, pointer tracking and the tick.

    Subclasses pick the pool, physics step and renderer.
    """
    variant = ""

    def __init__(self, config: EffectConfig, scroll_service: ScrollService):
        self.config = config
        self.scroll_service = scroll_service
        # All randomness of an engine comes from one seeded generator.
        self.rng = np.random.default_rng(config.seed)
        self.simulation = self._create_simulation()
        self.renderer = self._create_renderer()

        self.surface: Optional[Surface] = None
        self.pool = None
        self.canvas: Optional[pygame.Surface] = None
        self.tick_count = 0

        self._tracker: Optional[PointerTracker] = None
        self._pending_viewport: Optional[Tuple[int, int]] = None
        self._remove_tick: Optional[Callable[[], None]] = None

    # --- Variant hooks ---

    def _create_simulation(self):
        raise NotImplementedError

    def _create_renderer(self):
        raise NotImplementedError

    def _create_pool(self, surface: Surface):
        raise NotImplementedError

    def _initial_pointer(self, surface: Surface) -> Tuple[float, float]:
        raise NotImplementedError

    def _step(self, pool, surface: Surface, pointer: Tuple[float, float]) -> None:
        raise NotImplementedError

    # --- Lifecycle ---

    @property
    def started(self) -> bool:
        return self.surface is not None

    @property
    def pointer(self) -> Tuple[float, float]:
        if self._tracker is not None:
            return self._tracker.local
        return (math.nan, math.nan)

    def start(self, viewport_width: int, viewport_height: int,
              scheduler: Optional[FrameScheduler] = None) -> None:
        if self.started:
            logging.warning(f"{self.variant} engine is already started.")
            return

        # The viewport given here supersedes any resize requested earlier.
        self._pending_viewport = None
        self._rebuild(viewport_width, viewport_height)
        self._tracker = PointerTracker(self.scroll_service, self._initial_pointer(self.surface))
        self._tracker.attach(self.surface)
        if scheduler is not None:
            self._remove_tick = scheduler.add(self.tick)
        logging.info(f"{self.variant} engine started.")

    def request_resize(self, viewport_width: int, viewport_height: int) -> None:
        self._pending_viewport = (viewport_width, viewport_height)

    def _rebuild(self, viewport_width: int, viewport_height: int) -> None:
        """Replaces surface, pool and canvas for a new viewport."""
        surface = resolve_surface(viewport_width, viewport_height, self.config.layout)
        if self.surface is not None and self.surface.small != surface.small:
            layout_name = "small" if surface.small else "large"
            logging.info(f"{self.variant} engine crossed the breakpoint, using the {layout_name} layout.")

        self.surface = surface
        self.pool = self._create_pool(surface)
        self.canvas = self.renderer.new_canvas(surface.pixel_size)
        if self._tracker is not None:
            self._tracker.attach(surface)

        logging.info(
            f"{self.variant} surface rebuilt for viewport {viewport_width}x{viewport_height}: "
            f"{surface.width:.1f}x{surface.height:.1f} at "
            f"({surface.offset_x:.1f}, {surface.offset_y:.1f})."
        )

    def tick(self) -> None:
        """Runs one physics step and one render pass."""
        if self._pending_viewport is not None and self.started:
            viewport = self._pending_viewport
            self._pending_viewport = None
            self._rebuild(*viewport)

        surface, pool, canvas = self.surface, self.pool, self.canvas
        if surface is None or pool is None or canvas is None:
            return

        self._step(pool, surface, self.pointer)
        self.renderer.render(canvas, pool)
        self.tick_count += 1

    def teardown(self) -> None:
        if self._remove_tick is not None:
            self._remove_tick()
            self._remove_tick = None
        if self._tracker is not None:
            self._tracker.close()
            self._tracker = None
        self._pending_viewport = None
        if self.surface is None:
            return

        self.renderer.release()
        self.surface = None
        self.pool = None
        self.canvas = None
        logging.info(f"{self.variant} engine torn down after {self.tick_count} ticks.")


class FloatingDotsEngine(AnimationEngine):
    """Bouncing circles that swell near the pointer."""
    variant = CIRCLES

    def _create_simulation(self):
        return CircleSimulation(self.config)

    def _create_renderer(self):
        return CircleRenderer(self.config)

    def _create_pool(self, surface: Surface):
        return CirclePool(self.config, surface, self.rng)

    def _initial_pointer(self, surface: Surface) -> Tuple[float, float]:
        # No pointer until the first move: every circle shrinks.
        return (math.nan, math.nan)

    def _step(self, pool, surface, pointer):
        self.simulation.step(pool, surface, pointer)


class CirculatingPixelsEngine(AnimationEngine):
    """A ring of pixels orbiting a point that trails the pointer."""
    variant = ORBIT

    def _create_simulation(self):
        return OrbitSimulation(self.config)

    def _create_renderer(self):
        return TrailRenderer(self.config)

    def _create_pool(self, surface: Surface):
        return OrbitPool(self.config, surface, self.rng)

    def _initial_pointer(self, surface: Surface) -> Tuple[float, float]:
        return surface.center

    def _step(self, pool, surface, pointer):
        self.simulation.step(pool, pointer)
