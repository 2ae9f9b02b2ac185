# config.py
"""
Immutable tuning for both effects.

The values in config.json are read once into frozen dataclasses. Invalid
entries never abort the program: they are logged and replaced by the
documented defaults from constants.py.
"""
import logging
import math
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any, Optional, Tuple

import pygame

from constants import (
    BREAKPOINT_PX, HEIGHT_FRACTION, BASE_PAGE_MARGIN, BASE_HEADING,
    CARD_PADDING_Y, WIDTH_FRACTION_LARGE, WIDTH_FRACTION_SMALL,
    CARD_PADDING_X_LARGE, CARD_PADDING_X_SMALL, OFFSET_FRACTION_LARGE,
    OFFSET_FRACTION_SMALL, ORBIT_BASE_PAGE_MARGIN, ORBIT_BASE_HEADING, ORBIT_OFFSET_HEIGHT_FRACTION,
    CIRCLE_COUNT, CIRCLE_RADIUS_JITTER, CIRCLE_RADIUS_BASE, CIRCLE_MAX_RADIUS,
    PROXIMITY_HALF_WIDTH, GROWTH_STEP, SHRINK_STEP, CIRCLE_OPACITY,
    PARTICLE_COUNT, PARTICLE_RADIUS_JITTER, PARTICLE_RADIUS_BASE, FOLLOW_RATE,
    ANGULAR_VELOCITY_MIN, ANGULAR_VELOCITY_JITTER, ORBIT_DISTANCE_MIN,
    ORBIT_DISTANCE_JITTER, CIRCLE_PALETTE, PARTICLE_PALETTE
)
from utils import parse_color

# --- Data Contracts ---
#
# EffectConfig.from_params(params: Dict[str, Any], variant: str) -> EffectConfig:
#   - Inputs:
#     - params: one effect section of config.json ("floating_dots" or
#       "circulating_pixels"). May contain any EffectConfig field name, any
#       LayoutConfig field name, "palette", "seed" and "opacity".
#     - variant: CIRCLES or ORBIT, selects the defaults.
#   - Outputs: a frozen EffectConfig.
#   - Invariants:
#     - palette is a non-empty tuple of pygame.Color.
#     - entity_count > 0.
#     - 0 <= opacity <= 1.
#     - max_radius >= radius_jitter_min + radius_jitter_base.
#     - every other field is a finite int or float; seed is an int or None.
#       A value of the wrong type falls back to that field's default.

CIRCLES = "circles"
ORBIT = "orbit"


@dataclass(frozen=True)
class LayoutConfig:
    """Breakpoint policy and page constants used to size a drawing surface."""
    breakpoint_px: int = BREAKPOINT_PX
    width_fraction_large: float = WIDTH_FRACTION_LARGE
    width_fraction_small: float = WIDTH_FRACTION_SMALL
    padding_large: float = CARD_PADDING_X_LARGE
    padding_small: float = CARD_PADDING_X_SMALL
    offset_fraction_large: float = OFFSET_FRACTION_LARGE
    offset_fraction_small: float = OFFSET_FRACTION_SMALL
    height_fraction: float = HEIGHT_FRACTION
    base_page_margin: float = BASE_PAGE_MARGIN
    base_heading: float = BASE_HEADING
    vertical_padding: float = CARD_PADDING_Y
    offset_height_fraction: float = 0.0


@dataclass(frozen=True)
class EffectConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    entity_count: int = CIRCLE_COUNT
    radius_jitter_min: float = CIRCLE_RADIUS_JITTER
    radius_jitter_base: float = CIRCLE_RADIUS_BASE
    max_radius: float = CIRCLE_MAX_RADIUS
    proximity_half_width: float = PROXIMITY_HALF_WIDTH
    growth_step: float = GROWTH_STEP
    shrink_step: float = SHRINK_STEP
    follow_rate: float = FOLLOW_RATE
    angular_velocity_min: float = ANGULAR_VELOCITY_MIN
    angular_velocity_jitter: float = ANGULAR_VELOCITY_JITTER
    orbit_distance_min: float = ORBIT_DISTANCE_MIN
    orbit_distance_jitter: float = ORBIT_DISTANCE_JITTER
    palette: Tuple[pygame.Color, ...] = ()
    opacity: float = CIRCLE_OPACITY
    seed: Optional[int] = None

    @classmethod
    def defaults(cls, variant: str) -> "EffectConfig":
        """Returns the built-in tuning of an effect."""
        if variant == CIRCLES:
            return cls(palette=tuple(parse_color(c) for c in CIRCLE_PALETTE))
        if variant == ORBIT:
            return cls(
                layout=LayoutConfig(
                    base_page_margin=ORBIT_BASE_PAGE_MARGIN,
                    base_heading=ORBIT_BASE_HEADING,
                    offset_height_fraction=ORBIT_OFFSET_HEIGHT_FRACTION,
                ),
                entity_count=PARTICLE_COUNT,
                radius_jitter_min=PARTICLE_RADIUS_JITTER,
                radius_jitter_base=PARTICLE_RADIUS_BASE,
                palette=tuple(parse_color(c) for c in PARTICLE_PALETTE),
            )
        raise ValueError(f"Unknown effect variant: {variant!r}")

    @classmethod
    def from_params(cls, params: Optional[Dict[str, Any]], variant: str) -> "EffectConfig":
        """
        Builds an effect configuration from a config.json section.

        Values that fail validation fall back to the variant defaults and a
        warning is logged, so a bad config never stops the animation.
        """
        base = cls.defaults(variant)
        params = dict(params or {})

        layout_names = {f.name for f in fields(LayoutConfig)}
        effect_names = {f.name for f in fields(cls)} - {'layout', 'palette'}

        layout_overrides = {}
        overrides: Dict[str, Any] = {}
        for key, value in params.items():
            if key in layout_names:
                target, default = layout_overrides, getattr(base.layout, key)
            elif key in effect_names:
                target, default = overrides, getattr(base, key)
            else:
                if key != 'palette':
                    logging.warning(f"Ignoring unknown {variant} setting '{key}'.")
                continue

            if key == 'seed':
                valid = value is None or (isinstance(value, int) and not isinstance(value, bool))
            else:
                valid = _is_number(value)
            if not valid:
                logging.warning(
                    f"Invalid {variant} {key} {value!r}. Falling back to {default!r}."
                )
                continue
            target[key] = value

        config = replace(
            base,
            layout=replace(base.layout, **layout_overrides),
            **overrides
        )

        palette = _load_palette(params.get('palette'), base.palette, variant)
        entity_count = config.entity_count
        if not isinstance(entity_count, int) or entity_count <= 0:
            logging.warning(
                f"Invalid {variant} entity_count {entity_count!r}. "
                f"Falling back to {base.entity_count}."
            )
            entity_count = base.entity_count

        opacity = float(config.opacity)
        if not 0.0 <= opacity <= 1.0:
            clamped = min(max(opacity, 0.0), 1.0)
            logging.warning(f"Opacity {opacity} is outside [0, 1]. Clamping to {clamped}.")
            opacity = clamped

        max_radius = config.max_radius
        largest_spawn = config.radius_jitter_min + config.radius_jitter_base
        if max_radius < largest_spawn:
            logging.warning(
                f"max_radius {max_radius} is below the largest spawn radius "
                f"{largest_spawn}. Falling back to {base.max_radius}."
            )
            max_radius = base.max_radius

        config = replace(
            config,
            palette=palette,
            entity_count=entity_count,
            opacity=opacity,
            max_radius=max_radius,
        )
        logging.debug(f"{variant} configuration: {config}")
        return config


def _load_palette(raw: Any, fallback: Tuple[pygame.Color, ...], variant: str) -> Tuple[pygame.Color, ...]:
    """Parses a configured palette, falling back to the default one."""
    if not raw:
        logging.info(f"No palette found for {variant}. Using default palette.")
        return fallback

    try:
        colors = tuple(parse_color(c) for c in raw)
    except (ValueError, TypeError) as e:
        logging.error(
            f"Could not parse {variant} palette due to invalid format: {e}. "
            "Falling back to default palette."
        )
        return fallback

    logging.info(f"Loaded {len(colors)} {variant} colors from configuration.")
    return colors


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
