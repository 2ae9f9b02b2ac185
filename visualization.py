# visualization.py
"""
Handles drawing of both effects and of the hosting page using Pygame.
"""
import logging
import pygame
from typing import Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from config import EffectConfig, LayoutConfig
from constants import (
    DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, WINDOW_CAPTION,
    PAGE_BACKGROUND_COLOR, CARD_COLOR, CARD_BORDER_RADIUS, SCROLL_STEP,
    TRAIL_OVERLAY_COLOR
)
from geometry import Surface
from particle import CirclePool, OrbitPool
from pointer import ScrollService

# Forward reference for type hinting to avoid circular import
if TYPE_CHECKING:
    from engine import AnimationEngine


# --- Data Contracts ---
#
# class CircleRenderer / TrailRenderer:
#   - new_canvas(self, size: Tuple[int, int]) -> pygame.Surface
#   - render(self, canvas: pygame.Surface, pool) -> None:
#     - Side Effects: paints the pool's current state onto the canvas.
#       CircleRenderer clears the canvas to transparent first;
#       TrailRenderer fades it with a translucent overlay instead.
#
# class PageVisualizer:
#   - handle_events(self, scroll_service, on_resize) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: forwards pointer moves and scroll offsets to the
#       scroll service and window sizes to on_resize.
#   - draw(self, engines) -> None:
#     - Side Effects: paints the page, one card per engine, and flips.


def _sprite_radius(radius: float) -> int:
    return max(1, int(round(radius)))


def _sprite_origin(x: float, y: float, radius: int) -> Tuple[int, int]:
    """Top-left corner of a sprite centred on the nearest pixel to (x, y)."""
    return int(round(x)) - radius, int(round(y)) - radius


class CircleRenderer:
    """
    Paints filled circles, one pre-rendered sprite per colour and radius.

    Blitting sprites rather than drawing straight onto the canvas lets
    overlapping translucent circles blend with each other.
    """
    def __init__(self, config: EffectConfig):
        self.colors = [
            pygame.Color(c.r, c.g, c.b, round(c.a * config.opacity))
            for c in config.palette
        ]
        self._sprites: Dict[Tuple[int, int], pygame.Surface] = {}

    def new_canvas(self, size: Tuple[int, int]) -> pygame.Surface:
        return pygame.Surface(size, pygame.SRCALPHA)

    def _sprite(self, color_index: int, radius: int) -> pygame.Surface:
        key = (color_index, radius)
        sprite = self._sprites.get(key)
        if sprite is None:
            sprite = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(sprite, self.colors[color_index], (radius, radius), radius)
            self._sprites[key] = sprite
        return sprite

    def render(self, canvas: pygame.Surface, pool: CirclePool) -> None:
        canvas.fill((0, 0, 0, 0))
        positions = pool.positions
        radii = pool.radii
        color_indices = pool.color_indices
        for i in range(pool.count):
            radius = _sprite_radius(radii[i])
            sprite = self._sprite(int(color_indices[i]), radius)
            canvas.blit(sprite, _sprite_origin(positions[i, 0], positions[i, 1], radius))

    def release(self) -> None:
        logging.debug(f"Releasing {len(self._sprites)} cached circle sprites.")
        self._sprites.clear()


class TrailRenderer:
    """
    Strokes each particle's last segment over a slowly fading canvas.
    """
    def __init__(self, config: EffectConfig, background=CARD_COLOR):
        self.colors = [pygame.Color(c) for c in config.palette]
        self.background = background
        self._overlay: Optional[pygame.Surface] = None

    def new_canvas(self, size: Tuple[int, int]) -> pygame.Surface:
        canvas = pygame.Surface(size)
        canvas.fill(self.background)
        return canvas

    def _overlay_for(self, canvas: pygame.Surface) -> pygame.Surface:
        if self._overlay is None or self._overlay.get_size() != canvas.get_size():
            self._overlay = pygame.Surface(canvas.get_size(), pygame.SRCALPHA)
            self._overlay.fill(TRAIL_OVERLAY_COLOR)
        return self._overlay

    def render(self, canvas: pygame.Surface, pool: OrbitPool) -> None:
        # Fade the previous frame instead of clearing it, leaving trails.
        canvas.blit(self._overlay_for(canvas), (0, 0))
        for i in range(pool.count):
            start = (float(pool.last_points[i, 0]), float(pool.last_points[i, 1]))
            end = (float(pool.positions[i, 0]), float(pool.positions[i, 1]))
            pygame.draw.line(
                canvas,
                self.colors[int(pool.color_indices[i])],
                start,
                end,
                _sprite_radius(pool.radii[i])
            )

    def release(self) -> None:
        self._overlay = None


def card_rect(surface: Surface, layout: LayoutConfig, scroll_y: float) -> pygame.Rect:
    """The card behind a surface, in window coordinates."""
    padding_x = layout.padding_small if surface.small else layout.padding_large
    padding_y = layout.vertical_padding
    return pygame.Rect(
        int(surface.offset_x - padding_x / 2),
        int(surface.offset_y - padding_y / 2 - scroll_y),
        int(surface.width + padding_x),
        int(surface.height + padding_y)
    )


class PageVisualizer:
    """
    The window hosting the effects: a scrollable page of cards.
    """
    def __init__(self, width: int = DEFAULT_WINDOW_WIDTH, height: int = DEFAULT_WINDOW_HEIGHT):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_CAPTION)
        self.viewport_size = (width, height)
        self.scroll_y = 0.0
        self.content_height = float(height)
        logging.info(f"PageVisualizer initialized with Pygame display ({width}x{height}).")

    def _max_scroll(self) -> float:
        return max(0.0, self.content_height - self.viewport_size[1])

    def handle_events(
        self, scroll_service: ScrollService, on_resize: Callable[[int, int], None]
    ) -> bool:
        """
        Pumps the Pygame event queue.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                self.viewport_size = (event.w, event.h)
                logging.info(f"Window resized to {event.w}x{event.h}.")
                on_resize(event.w, event.h)

            if event.type == pygame.MOUSEMOTION:
                scroll_service.move_pointer(*event.pos)

            if event.type == pygame.MOUSEWHEEL:
                # event.y is 1 for scroll up, -1 for scroll down
                new_scroll = min(max(self.scroll_y - event.y * SCROLL_STEP, 0.0), self._max_scroll())
                if new_scroll != self.scroll_y:
                    self.scroll_y = new_scroll
                    scroll_service.set_scroll_y(new_scroll)
        return True

    def draw(self, engines: List["AnimationEngine"]) -> None:
        self.screen.fill(PAGE_BACKGROUND_COLOR)

        bottom = 0.0
        for engine in engines:
            surface = engine.surface
            canvas = engine.canvas
            if surface is None or canvas is None:
                continue
            layout = engine.config.layout
            rect = card_rect(surface, layout, self.scroll_y)
            pygame.draw.rect(self.screen, CARD_COLOR, rect, border_radius=CARD_BORDER_RADIUS)
            self.screen.blit(canvas, (int(surface.offset_x), int(surface.offset_y - self.scroll_y)))
            bottom = max(bottom, rect.bottom + self.scroll_y + layout.base_page_margin)

        self.content_height = bottom
        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
