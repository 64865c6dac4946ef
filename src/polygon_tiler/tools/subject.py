"""Subject polygon tools: set_subject_polygon, set_subject_regular_polygon."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.bounding_box import calculate_bounding_box
from ..core.polygon import as_vertex_array, polygon_area
from ..core.regular_polygon import regular_polygon


def _set_subject(vertices) -> str:
    """Store the subject and clear the previous result."""
    state.subject = vertices.tolist()
    state.result = None

    bbox = calculate_bounding_box(vertices)
    return (
        f"Subject set: {len(vertices)} vertices, "
        f"bbox ({bbox.min_x:g}, {bbox.min_y:g})-({bbox.max_x:g}, {bbox.max_y:g}), "
        f"area {polygon_area(vertices):g}"
    )


def register_subject_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_subject_polygon(points: list[list[float]]) -> str:
        """Set the polygon to be tiled.

        The polygon is implicitly closed (last point connects to the first).
        It must be simple (not self-intersecting) and planar in x/y.
        **Next:** set_grid then tile_by_grid, or set_clip_shape then tile_by_shape.

        Args:
            points: Ordered vertices as [x, y] or [x, y, z] pairs (at least 3).
        """
        try:
            vertices = as_vertex_array(points)
        except ValueError as e:
            return f"Error: {e}"
        if len(vertices) < 3:
            return f"Error: A subject polygon needs at least 3 points, got {len(vertices)}."
        return _set_subject(vertices)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_subject_regular_polygon(
        center_x: float, center_y: float, radius: float, sides: int,
    ) -> str:
        """Set the subject to a regular polygon.

        Vertices run counter-clockwise from (center_x + radius, center_y).
        **Next:** set_grid then tile_by_grid, or set_clip_shape then tile_by_shape.

        Args:
            center_x/center_y: Center of the polygon.
            radius: Distance from center to each vertex (> 0).
            sides: Number of sides (>= 3).
        """
        try:
            vertices = regular_polygon((center_x, center_y), radius, sides)
        except ValueError as e:
            return f"Error: {e}"
        return _set_subject(vertices)
