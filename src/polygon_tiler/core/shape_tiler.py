"""Cut a polygon by a convex clip shape repeated across a grid.

Replicas are laid out at a pitch of the shape's own extent plus the
explicit step on each axis. A normalized shape (points relative to its
bounding-box corner) is anchored at the subject's bounding-box minimum;
a non-normalized shape keeps its absolute position for replica (0, 0).
"""

import logging
import math

import numpy as np

from ..models import ClipShape
from .bounding_box import calculate_bounding_box
from .convex_clip import clip_polygon_to_convex, convex_half_planes
from .grid_tiler import check_cell_count, check_positive, keep_fragment
from .models import BoundingBox, Fragment, TilingResult
from .polygon import as_vertex_array, polygon_area

logger = logging.getLogger(__name__)


def _replica_origin(clip_shape: ClipShape, bbox: BoundingBox) -> np.ndarray:
    if clip_shape.normalize:
        return np.array([bbox.min_x, bbox.min_y, 0.0])
    return np.zeros(3)


def _shape_cells(subject: np.ndarray, clip_shape: ClipShape, min_area: float | None):
    """Yield (i, j, fragment) for every replica whose clip is kept."""
    pitch_x = check_positive("clip shape pitch_x", clip_shape.pitch_x)
    pitch_y = check_positive("clip shape pitch_y", clip_shape.pitch_y)
    shape = as_vertex_array(clip_shape.vertex_list())
    # Fail on a degenerate shape before walking the grid.
    convex_half_planes(shape)

    bbox = calculate_bounding_box(subject)
    grid_count_x = math.ceil(bbox.width / pitch_x)
    grid_count_y = math.ceil(bbox.height / pitch_y)
    check_cell_count(grid_count_x, grid_count_y)
    origin = _replica_origin(clip_shape, bbox)
    logger.debug(
        "Shape grid %dx%d replicas at pitch %.6g x %.6g",
        grid_count_x, grid_count_y, pitch_x, pitch_y,
    )

    for i in range(grid_count_x):
        for j in range(grid_count_y):
            replica = shape + origin + np.array([i * pitch_x, j * pitch_y, 0.0])
            clipped = clip_polygon_to_convex(subject, replica)
            if keep_fragment(clipped, min_area):
                yield i, j, clipped


def cut_by_shape(vertices, clip_shape: ClipShape,
                 min_area: float | None = None) -> list[np.ndarray]:
    """Partition a polygon by replicas of ``clip_shape``.

    ``min_area`` works as in cut_by_grid.

    Returns:
        List of (M, 3) numpy arrays, one per replica with a >= 3 vertex clip.
        Empty for an empty subject.

    Raises:
        ValueError: if a pitch is not positive, the shape has zero area, or
            the replica grid would exceed MAX_CELLS cells.
    """
    subject = as_vertex_array(vertices)
    if len(subject) == 0:
        return []
    return [clipped for _, _, clipped in _shape_cells(subject, clip_shape, min_area)]


def tile_by_shape(vertices, clip_shape: ClipShape,
                  min_area: float | None = None) -> TilingResult:
    """Like cut_by_shape, but returns a TilingResult with each fragment's cell."""
    subject = as_vertex_array(vertices)
    if len(subject) == 0:
        return TilingResult(mode="shape")

    fragments = [
        Fragment(cell=(i, j), points=clipped.tolist(), area=polygon_area(clipped))
        for i, j, clipped in _shape_cells(subject, clip_shape, min_area)
    ]
    bbox = calculate_bounding_box(subject)
    result = TilingResult(
        mode="shape",
        grid_count_x=math.ceil(bbox.width / clip_shape.pitch_x),
        grid_count_y=math.ceil(bbox.height / clip_shape.pitch_y),
        fragments=fragments,
    )
    logger.debug("Shape tiling kept %d of %d replicas", len(fragments), result.cell_count)
    return result
