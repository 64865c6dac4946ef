"""Regular polygon vertex generation."""

import numpy as np


def regular_polygon(center, radius: float, sides: int) -> np.ndarray:
    """Vertices of a regular polygon, counter-clockwise from angle 0.

    The first vertex is at ``center + (radius, 0)``; every vertex has z = 0.

    Args:
        center: (x, y) or (x, y, z); z is ignored.
        radius: Circumradius, > 0.
        sides: Number of vertices, >= 3.

    Returns:
        numpy array of shape (sides, 3).
    """
    if int(sides) != sides or sides < 3:
        raise ValueError(f"sides must be an integer >= 3, got {sides}")
    if not np.isfinite(radius) or radius <= 0:
        raise ValueError(f"radius must be a positive finite number, got {radius}")

    sides = int(sides)
    angles = 2 * np.pi * np.arange(sides) / sides
    cx, cy = float(center[0]), float(center[1])
    return np.column_stack([
        cx + radius * np.cos(angles),
        cy + radius * np.sin(angles),
        np.zeros(sides),
    ])
