"""Single half-plane Sutherland-Hodgman clipping.

A clip window is described as a list of ``HalfPlane`` descriptors. Each
descriptor is plain data: a normal, an offset and an optional snapping axis.
``clip_polygon_with_half_plane`` keeps the part of a polygon on the inside of
one descriptor; clipping against a convex window applies it once per edge.
"""

from typing import Literal, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator

from .polygon import as_vertex_array


class HalfPlane(BaseModel):
    """The closed half-plane ``normal . p >= offset`` in the XY plane.

    When ``axis`` is set the boundary is the line ``x = offset / normal_x``
    (or the y equivalent), and intersections are snapped exactly onto it.
    """

    model_config = ConfigDict(frozen=True)

    normal_x: float
    normal_y: float
    offset: float
    axis: Optional[Literal["x", "y"]] = None

    @model_validator(mode="after")
    def check_normal(self) -> "HalfPlane":
        if self.normal_x == 0 and self.normal_y == 0:
            raise ValueError("Half-plane normal must be non-zero")
        if self.axis == "x" and (self.normal_x == 0 or self.normal_y != 0):
            raise ValueError("An x-axis half-plane needs a normal along x")
        if self.axis == "y" and (self.normal_y == 0 or self.normal_x != 0):
            raise ValueError("A y-axis half-plane needs a normal along y")
        return self

    @classmethod
    def min_x(cls, value: float) -> "HalfPlane":
        return cls(normal_x=1.0, normal_y=0.0, offset=value, axis="x")

    @classmethod
    def max_x(cls, value: float) -> "HalfPlane":
        return cls(normal_x=-1.0, normal_y=0.0, offset=-value, axis="x")

    @classmethod
    def min_y(cls, value: float) -> "HalfPlane":
        return cls(normal_x=0.0, normal_y=1.0, offset=value, axis="y")

    @classmethod
    def max_y(cls, value: float) -> "HalfPlane":
        return cls(normal_x=0.0, normal_y=-1.0, offset=-value, axis="y")

    @classmethod
    def from_edge(cls, start, end, ccw: bool = True) -> "HalfPlane":
        """Half-plane bounded by the line through ``start`` -> ``end``.

        The interior is on the left of the edge for a counter-clockwise
        window, on the right for a clockwise one.
        """
        x1, y1 = float(start[0]), float(start[1])
        x2, y2 = float(end[0]), float(end[1])
        dx = x2 - x1
        dy = y2 - y1
        if dx == 0 and dy == 0:
            raise ValueError(f"Clip edge has zero length at ({x1}, {y1})")

        nx, ny = (-dy, dx) if ccw else (dy, -dx)
        return cls(normal_x=nx, normal_y=ny, offset=nx * x1 + ny * y1)

    @property
    def boundary(self) -> Optional[float]:
        """Boundary coordinate for axis-aligned half-planes, else None."""
        if self.axis == "x":
            return self.offset / self.normal_x
        if self.axis == "y":
            return self.offset / self.normal_y
        return None

    def signed_distance(self, points: np.ndarray) -> np.ndarray:
        """Scaled signed distance of each (N, 3) row; >= 0 means inside."""
        return points[:, 0] * self.normal_x + points[:, 1] * self.normal_y - self.offset

    def is_inside(self, points) -> np.ndarray:
        return self.signed_distance(as_vertex_array(points)) >= 0

    def intersect(self, p1: np.ndarray, p2: np.ndarray,
                  d1: float, d2: float) -> Optional[np.ndarray]:
        """Point where segment p1 -> p2 crosses the boundary.

        ``d1``/``d2`` are the endpoints' signed distances. Returns None when
        the segment is parallel to the boundary (it cannot cross it).
        """
        denom = d1 - d2
        if denom == 0:
            return None

        t = min(1.0, max(0.0, d1 / denom))
        point = p1 + t * (p2 - p1)
        if self.axis == "x":
            point[0] = self.boundary
        elif self.axis == "y":
            point[1] = self.boundary
        return point


def clip_polygon_with_half_plane(polygon, half_plane: HalfPlane) -> np.ndarray:
    """Clip a polygon against one half-plane (one Sutherland-Hodgman pass).

    For each cyclic edge (current, next):
    both inside emits current; inside -> outside emits current and the
    crossing; outside -> inside emits the crossing; both outside emits
    nothing. Consecutive duplicates at tangencies are kept.

    Args:
        polygon: Sequence of (x, y) / (x, y, z) points or an (N, 2|3) array.
        half_plane: The half-plane to keep.

    Returns:
        numpy array of shape (M, 3); M may be 0.
    """
    vertices = as_vertex_array(polygon)
    n = len(vertices)
    if n == 0:
        return vertices.copy()

    distances = half_plane.signed_distance(vertices)
    inside = distances >= 0

    output = []
    for i in range(n):
        j = (i + 1) % n
        current = vertices[i]
        following = vertices[j]

        if inside[i]:
            output.append(current)
            if not inside[j]:
                crossing = half_plane.intersect(current, following, distances[i], distances[j])
                if crossing is not None:
                    output.append(crossing)
        elif inside[j]:
            crossing = half_plane.intersect(current, following, distances[i], distances[j])
            if crossing is not None:
                output.append(crossing)

    if not output:
        return np.empty((0, 3), dtype=float)
    return np.array(output, dtype=float)
