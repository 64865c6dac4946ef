"""Polygon clipping against an arbitrary convex window."""

import numpy as np

from .edge_clip import HalfPlane, clip_polygon_with_half_plane
from .polygon import as_vertex_array, signed_area


def convex_half_planes(window) -> list[HalfPlane]:
    """One half-plane per window edge, interior side taken from the winding.

    Raises:
        ValueError: if the window has fewer than 3 points or zero area.
    """
    vertices = as_vertex_array(window)
    if len(vertices) < 3:
        raise ValueError(f"Clip window needs at least 3 points, got {len(vertices)}")

    area = signed_area(vertices)
    if area == 0:
        raise ValueError("Clip window has zero area")
    ccw = area > 0

    half_planes = []
    n = len(vertices)
    for i in range(n):
        start = vertices[i]
        end = vertices[(i + 1) % n]
        # Repeated vertices contribute no edge.
        if start[0] == end[0] and start[1] == end[1]:
            continue
        half_planes.append(HalfPlane.from_edge(start, end, ccw=ccw))
    return half_planes


def clip_polygon_to_convex(polygon, window) -> np.ndarray:
    """Clip ``polygon`` to a convex ``window``, one pass per window edge.

    Same sequential discipline as clip_polygon_to_rect: each edge clips the
    accumulated result. The result may have fewer than 3 vertices.
    """
    output = as_vertex_array(polygon)
    for half_plane in convex_half_planes(window):
        if len(output) == 0:
            break
        output = clip_polygon_with_half_plane(output, half_plane)
    return output
