"""Cut a polygon into per-cell fragments along a regular rectangular grid."""

import logging
import math

import numpy as np

from ..models import AxisAlignedRect
from .bounding_box import calculate_bounding_box
from .models import BoundingBox, Fragment, TilingResult
from .polygon import as_vertex_array, polygon_area
from .rect_clip import clip_polygon_to_rect

logger = logging.getLogger(__name__)

# Upper bound on cells walked by one tiling call.
MAX_CELLS = 1_000_000


def check_positive(name: str, value: float) -> float:
    """Return ``value`` as float, or raise ValueError unless it is finite and > 0."""
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value}")
    return value


def check_cell_count(grid_count_x: int, grid_count_y: int) -> None:
    """Raise ValueError if a grid of this size exceeds MAX_CELLS."""
    if grid_count_x * grid_count_y > MAX_CELLS:
        raise ValueError(
            f"Grid of {grid_count_x}x{grid_count_y} cells exceeds the limit of "
            f"{MAX_CELLS} cells; use a larger cell size"
        )


def keep_fragment(clipped: np.ndarray, min_area: float | None) -> bool:
    """A clip result is kept if it has >= 3 vertices and, when given, area > min_area."""
    if len(clipped) < 3:
        return False
    return min_area is None or polygon_area(clipped) > min_area


def _grid_counts(bbox: BoundingBox, grid_size_x: float, grid_size_y: float) -> tuple[int, int]:
    counts = math.ceil(bbox.width / grid_size_x), math.ceil(bbox.height / grid_size_y)
    check_cell_count(*counts)
    return counts


def _grid_cells(subject: np.ndarray, bbox: BoundingBox,
                grid_size_x: float, grid_size_y: float, min_area: float | None):
    """Yield (i, j, fragment) for every cell whose clip is kept."""
    grid_count_x, grid_count_y = _grid_counts(bbox, grid_size_x, grid_size_y)
    logger.debug(
        "Grid %dx%d cells of %.6g x %.6g over bbox (%.6g, %.6g)-(%.6g, %.6g)",
        grid_count_x, grid_count_y, grid_size_x, grid_size_y,
        bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y,
    )

    for i in range(grid_count_x):
        for j in range(grid_count_y):
            cell_x = bbox.min_x + i * grid_size_x
            cell_y = bbox.min_y + j * grid_size_y
            rect = AxisAlignedRect(
                min_x=cell_x, max_x=cell_x + grid_size_x,
                min_y=cell_y, max_y=cell_y + grid_size_y,
            )
            clipped = clip_polygon_to_rect(subject, rect)
            if keep_fragment(clipped, min_area):
                yield i, j, clipped


def cut_by_grid(vertices, grid_size_x: float, grid_size_y: float,
                min_area: float | None = None) -> list[np.ndarray]:
    """Partition a polygon into fragments, one per non-empty grid cell.

    Cells are anchored at the polygon's bounding-box minimum corner and
    enumerated column by column (i outer, j inner). The last row and column
    may extend past the bounding box. Cells whose clip result has fewer
    than 3 vertices are dropped.

    Args:
        vertices: Subject polygon as (x, y) / (x, y, z) points.
        grid_size_x: Cell width, > 0.
        grid_size_y: Cell height, > 0.
        min_area: If set, also drop fragments whose area is <= this value
            (zero-area slivers where the subject only touches a cell).

    Returns:
        List of (M, 3) numpy arrays. Empty for an empty subject.

    Raises:
        ValueError: if a grid size is not a positive finite number, or the
            grid would exceed MAX_CELLS cells.
    """
    grid_size_x = check_positive("grid_size_x", grid_size_x)
    grid_size_y = check_positive("grid_size_y", grid_size_y)
    subject = as_vertex_array(vertices)
    if len(subject) == 0:
        return []

    bbox = calculate_bounding_box(subject)
    cells = _grid_cells(subject, bbox, grid_size_x, grid_size_y, min_area)
    return [clipped for _, _, clipped in cells]


def tile_by_grid(vertices, grid_size_x: float, grid_size_y: float,
                 min_area: float | None = None) -> TilingResult:
    """Like cut_by_grid, but returns a TilingResult with each fragment's cell."""
    grid_size_x = check_positive("grid_size_x", grid_size_x)
    grid_size_y = check_positive("grid_size_y", grid_size_y)
    subject = as_vertex_array(vertices)
    if len(subject) == 0:
        return TilingResult(mode="grid")

    bbox = calculate_bounding_box(subject)
    grid_count_x, grid_count_y = _grid_counts(bbox, grid_size_x, grid_size_y)
    fragments = [
        Fragment(cell=(i, j), points=clipped.tolist(), area=polygon_area(clipped))
        for i, j, clipped in _grid_cells(subject, bbox, grid_size_x, grid_size_y, min_area)
    ]
    logger.debug("Grid tiling kept %d of %d cells", len(fragments), grid_count_x * grid_count_y)
    return TilingResult(
        mode="grid",
        grid_count_x=grid_count_x,
        grid_count_y=grid_count_y,
        fragments=fragments,
    )
