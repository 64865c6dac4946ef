"""Vertex-array helpers shared by the clip and tiling functions."""

import numpy as np


def as_vertex_array(points) -> np.ndarray:
    """Coerce a point sequence to a float array of shape (N, 3).

    Accepts (x, y) or (x, y, z) rows; 2D input gets z = 0. An empty
    sequence yields an empty (0, 3) array.
    """
    if len(points) == 0:
        return np.empty((0, 3), dtype=float)

    arr = np.asarray(points, dtype=float)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError(
            f"Points must have shape (N, 2) or (N, 3), got {arr.shape}"
        )
    if arr.shape[1] == 2:
        arr = np.column_stack([arr, np.zeros(len(arr))])
    if not np.all(np.isfinite(arr)):
        raise ValueError("Points must be finite")
    return arr


def signed_area(points) -> float:
    """Shoelace area in the XY plane; positive for counter-clockwise winding."""
    arr = as_vertex_array(points)
    if len(arr) < 3:
        return 0.0
    x = arr[:, 0]
    y = arr[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def polygon_area(points) -> float:
    return abs(signed_area(points))
