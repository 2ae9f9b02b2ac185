# geometry.py
"""
Derives drawing-surface dimensions and pointer offsets from the viewport.

Pure functions only: everything here is recomputed from scratch whenever the
window is resized or crosses the small/large breakpoint.
"""
from typing import NamedTuple

from config import LayoutConfig


class Surface(NamedTuple):
    """Addressable drawing region and its position on the page."""
    width: float
    height: float
    offset_x: float
    offset_y: float
    small: bool

    @property
    def center(self):
        return self.width / 2, self.height / 2

    @property
    def pixel_size(self):
        """Integer size for allocating a pygame surface (at least 1x1)."""
        return max(1, int(self.width)), max(1, int(self.height))


def is_small_viewport(viewport_width: float, layout: LayoutConfig) -> bool:
    return viewport_width <= layout.breakpoint_px


def resolve_surface(viewport_width: float, viewport_height: float, layout: LayoutConfig) -> Surface:
    """
    Computes the surface size and offset for the given viewport.

    Args:
        viewport_width (float): Width of the window in pixels.
        viewport_height (float): Height of the window in pixels.
        layout (LayoutConfig): Breakpoint policy and page constants.

    Returns:
        Surface: width, height and the offset that maps page coordinates
        into surface-local coordinates.
    """
    small = is_small_viewport(viewport_width, layout)
    if small:
        width_fraction = layout.width_fraction_small
        padding = layout.padding_small
        offset_fraction = layout.offset_fraction_small
    else:
        width_fraction = layout.width_fraction_large
        padding = layout.padding_large
        offset_fraction = layout.offset_fraction_large

    width = viewport_width * width_fraction - padding
    height = viewport_height * layout.height_fraction
    offset_x = viewport_width * offset_fraction + padding / 2
    offset_y = (
        layout.base_page_margin
        + layout.base_heading
        + layout.vertical_padding / 2
        + viewport_height * layout.offset_height_fraction
    )
    return Surface(width, height, offset_x, offset_y, small)
