# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They describe the
hosting page (margins, headings, card paddings), rendering properties and the
default tuning of both effects. Anything an experiment might want to change
is overridable from config.json; these are the fallbacks.
"""
import math

# Visualization settings
FPS = 60
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 800
WINDOW_CAPTION = "Floating Dots & Circulating Pixels"
PAGE_BACKGROUND_COLOR = (236, 239, 241)  # Blue Grey 50
CARD_COLOR = (255, 255, 255)
CARD_BORDER_RADIUS = 6
SCROLL_STEP = 40  # Pixels scrolled per mouse wheel notch

# --- Page layout (fixed by the hosting page) ---
BREAKPOINT_PX = 768
HEIGHT_FRACTION = 0.40
BASE_PAGE_MARGIN = 60
BASE_HEADING = 33 + 24
CARD_PADDING_Y = 48

# Values chosen according to the screen type.
WIDTH_FRACTION_LARGE = 0.70
WIDTH_FRACTION_SMALL = 0.95
CARD_PADDING_X_LARGE = 48
CARD_PADDING_X_SMALL = 36
OFFSET_FRACTION_LARGE = 0.15
OFFSET_FRACTION_SMALL = 0.025

# The circulating pixels card sits below the floating dots card, so its
# vertical offset carries a term proportional to the viewport height.
# It starts where the floating dots card ends. The original page measured
# this offset as 60 + 76 + 24 (160 + 0.4 * height), which puts both cards on
# top of each other when they share one page.
ORBIT_BASE_PAGE_MARGIN = BASE_PAGE_MARGIN + BASE_HEADING + CARD_PADDING_Y
ORBIT_BASE_HEADING = 76
ORBIT_OFFSET_HEIGHT_FRACTION = 0.40

# --- Floating dots (circle field) ---
CIRCLE_COUNT = 500
CIRCLE_RADIUS_JITTER = 4
CIRCLE_RADIUS_BASE = 2  # Spawn radius lies in [2, 6)
CIRCLE_MAX_RADIUS = 50
PROXIMITY_HALF_WIDTH = 50
GROWTH_STEP = 1
SHRINK_STEP = 1
VELOCITY_RANGE = 0.5  # Initial velocity components lie in (-0.5, 0.5)
CIRCLE_OPACITY = 1.0

# --- Circulating pixels (orbiting ring) ---
PARTICLE_COUNT = 50
PARTICLE_RADIUS_JITTER = 2
PARTICLE_RADIUS_BASE = 1
FOLLOW_RATE = 0.05
ANGULAR_VELOCITY_MIN = 0.02
ANGULAR_VELOCITY_JITTER = 0.03
ORBIT_DISTANCE_MIN = 50
ORBIT_DISTANCE_JITTER = 70
FULL_TURN = 2 * math.pi

# Alpha for the trail overlay (0-255). Lower is a longer trail.
TRAIL_OVERLAY_COLOR = (255, 255, 255, 26)

# Material "A100" accents, used when the config file does not provide a
# palette. Floating dots draw them half transparent.
DEFAULT_RGB_PALETTE = [
    (255, 138, 128),  # Red
    (255, 128, 171),  # Pink
    (234, 128, 252),  # Purple
    (179, 136, 255),  # Deep purple
    (140, 158, 255),  # Indigo
    (130, 177, 255),  # Blue
    (128, 216, 255),  # Light blue
    (132, 255, 255),  # Cyan
    (167, 255, 235),  # Teal
]
CIRCLE_PALETTE = [f"rgba({r},{g},{b},0.5)" for r, g, b in DEFAULT_RGB_PALETTE]
PARTICLE_PALETTE = [f"rgba({r},{g},{b},1)" for r, g, b in DEFAULT_RGB_PALETTE]
