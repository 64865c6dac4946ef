"""Polygon clipping against an axis-aligned rectangle."""

import numpy as np

from ..models import AxisAlignedRect
from .edge_clip import HalfPlane, clip_polygon_with_half_plane
from .polygon import as_vertex_array


def rect_half_planes(rect: AxisAlignedRect) -> list[HalfPlane]:
    """The rect's four half-planes in clip order: left, right, bottom, top."""
    return [
        HalfPlane.min_x(rect.min_x),
        HalfPlane.max_x(rect.max_x),
        HalfPlane.min_y(rect.min_y),
        HalfPlane.max_y(rect.max_y),
    ]


def clip_polygon_to_rect(polygon, rect: AxisAlignedRect) -> np.ndarray:
    """Clip ``polygon`` to ``rect`` with four sequential half-plane passes.

    Each pass consumes the previous pass's output. z is interpolated along
    with the in-plane coordinate. The result may have fewer than 3 vertices.
    """
    output = as_vertex_array(polygon)
    for half_plane in rect_half_planes(rect):
        if len(output) == 0:
            break
        output = clip_polygon_with_half_plane(output, half_plane)
    return output
