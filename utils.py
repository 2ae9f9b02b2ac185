# utils.py
"""
Utility functions for the animation framework.

This module provides helpers that are used across different parts of the
application but do not belong to a specific domain like physics or
rendering: logging setup, configuration loading and colour parsing.
"""
import logging
import logging.handlers
import json
import os
import re
from typing import Dict, Any, Sequence, Union

import pygame

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# parse_color(value: str | Sequence[int | float]) -> pygame.Color:
#   - Inputs: a CSS colour string ("rgba(r,g,b,a)", "rgb(r,g,b)", "#rrggbb",
#     a colour name) or a 3/4-tuple of channel values.
#   - Outputs: a pygame.Color. CSS alpha is a float in [0, 1], tuple alpha
#     is an int in [0, 255].
#   - Raises: ValueError for anything that cannot be read as a colour.

ColorSpec = Union[str, Sequence[Union[int, float]]]

_CSS_FUNCTION = re.compile(r"^\s*rgba?\(\s*([^)]*)\)\s*$", re.IGNORECASE)


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/canvas.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path or "")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # A null log_file keeps logging on the console only.
    if log_file_path:
        # Rotates when the log reaches 1MB, keeps 5 backup logs.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Numba logs every compilation pass at DEBUG.
    logging.getLogger("numba").setLevel(max(logger.level, logging.INFO))

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise


def _channel(text: str) -> int:
    value = int(float(text))
    if not 0 <= value <= 255:
        raise ValueError(f"Colour channel out of range: {text}")
    return value


def parse_color(value: ColorSpec) -> pygame.Color:
    """Converts a CSS colour string or an RGB(A) tuple into a pygame.Color."""
    if isinstance(value, str):
        match = _CSS_FUNCTION.match(value)
        if match is None:
            # Hex codes and colour names are understood by pygame itself.
            try:
                return pygame.Color(value.strip())
            except ValueError as e:
                raise ValueError(f"Unknown colour {value!r}") from e

        parts = [p.strip() for p in match.group(1).split(',')]
        if len(parts) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 channels in {value!r}")
        r, g, b = (_channel(p) for p in parts[:3])
        alpha = 255
        if len(parts) == 4:
            opacity = float(parts[3])
            if not 0.0 <= opacity <= 1.0:
                raise ValueError(f"Alpha out of range in {value!r}")
            alpha = round(opacity * 255)
        return pygame.Color(r, g, b, alpha)

    channels = list(value)
    if len(channels) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 channels, got {channels!r}")
    return pygame.Color(*(_channel(str(c)) for c in channels))
