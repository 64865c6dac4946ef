"""Planar polygon clipping and grid tiling."""

from .core.grid_tiler import cut_by_grid, tile_by_grid
from .core.shape_tiler import cut_by_shape, tile_by_shape
from .core.regular_polygon import regular_polygon
from .models import AxisAlignedRect, ClipShape, Point

__all__ = [
    "AxisAlignedRect",
    "ClipShape",
    "Point",
    "cut_by_grid",
    "cut_by_shape",
    "regular_polygon",
    "tile_by_grid",
    "tile_by_shape",
]
