"""Axis-aligned bounding box of a point sequence."""

import numpy as np

from .models import BoundingBox
from .polygon import as_vertex_array


def calculate_bounding_box(points) -> BoundingBox:
    """Return the XY bounding box of ``points``.

    Raises:
        ValueError: if ``points`` is empty.
    """
    arr = as_vertex_array(points)
    if len(arr) == 0:
        raise ValueError("Cannot compute the bounding box of an empty point sequence")

    mins = np.min(arr[:, :2], axis=0)
    maxs = np.max(arr[:, :2], axis=0)
    return BoundingBox(
        min_x=float(mins[0]),
        min_y=float(mins[1]),
        max_x=float(maxs[0]),
        max_y=float(maxs[1]),
    )
