"""Tiling tools: set_grid, set_clip_shape, set_regular_clip_shape, set_palette,
tile_by_grid, tile_by_shape."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state, GridParams, Palette
from ..models import ClipShape
from ..core.grid_tiler import tile_by_grid as do_tile_by_grid
from ..core.shape_tiler import tile_by_shape as do_tile_by_shape
from ..core.regular_polygon import regular_polygon
from ._prereqs import require_state


def _describe_result() -> str:
    r = state.result
    return (
        f"{len(r.fragments)} fragments from {r.grid_count_x}x{r.grid_count_y} cells "
        f"(total area {r.total_area:g})"
    )


def register_tiling_tools(mcp: FastMCP):

    @mcp.tool()
    def set_grid(
        grid_size_x: float | None = None,
        grid_size_y: float | None = None,
        min_fragment_area: float | None = None,
    ) -> str:
        """Set the grid cell size used by tile_by_grid.

        **Next:** tile_by_grid (re-run after changing the grid).

        Args:
            grid_size_x: Cell width (> 0, default 1).
            grid_size_y: Cell height (> 0, default 1).
            min_fragment_area: Drop fragments with area at or below this (default 1e-12;
                0 keeps everything but exactly flat slivers). Applies to both tilers.
        """
        g = state.grid
        try:
            state.grid = GridParams(
                grid_size_x=g.grid_size_x if grid_size_x is None else grid_size_x,
                grid_size_y=g.grid_size_y if grid_size_y is None else grid_size_y,
                min_fragment_area=(
                    g.min_fragment_area if min_fragment_area is None else min_fragment_area
                ),
            )
        except ValueError as e:
            return f"Error: {e}"

        return f"Grid: {state.grid.grid_size_x:g} x {state.grid.grid_size_y:g}"

    @mcp.tool()
    def set_clip_shape(
        points: list[list[float]],
        step_x: float = 0.0,
        step_y: float = 0.0,
        normalize: bool = True,
    ) -> str:
        """Set the convex clip shape that tile_by_shape repeats across the subject.

        Replicas are spaced by the shape's own width/height plus step_x/step_y.
        **Next:** tile_by_shape.

        Args:
            points: Convex polygon vertices as [x, y] pairs (at least 3).
            step_x: Gap between replicas along x (may be negative while the pitch stays positive).
            step_y: Gap between replicas along y.
            normalize: Shift the shape so its bounding box starts at the origin;
                replicas are then anchored at the subject's bounding-box corner.
        """
        try:
            state.clip_shape = ClipShape(
                points=points, step_x=step_x, step_y=step_y, normalize=normalize,
            )
        except ValueError as e:
            return f"Error: {e}"

        s = state.clip_shape
        return (
            f"Clip shape: {len(s.points)} vertices, {s.width:g} x {s.height:g}, "
            f"pitch {s.pitch_x:g} x {s.pitch_y:g}"
        )

    @mcp.tool()
    def set_regular_clip_shape(
        radius: float, sides: int, step_x: float = 0.0, step_y: float = 0.0,
    ) -> str:
        """Use a regular polygon as the repeating clip shape.

        **Next:** tile_by_shape.

        Args:
            radius: Circumradius of the shape (> 0).
            sides: Number of sides (>= 3).
            step_x/step_y: Gaps between replicas.
        """
        try:
            vertices = regular_polygon((0.0, 0.0), radius, sides)
        except ValueError as e:
            return f"Error: {e}"
        return set_clip_shape(vertices.tolist(), step_x=step_x, step_y=step_y)

    @mcp.tool()
    def set_palette(fills: list[str] | None = None, outline: str | None = None) -> str:
        """Set render colors (hex #RRGGBB). Fills cycle by fragment index.

        **Next:** export_svg.

        Args:
            fills: Fill colors, at least one.
            outline: Outline color.
        """
        p = state.palette
        try:
            state.palette = Palette(
                fills=p.fills if fills is None else fills,
                outline=p.outline if outline is None else outline,
                outline_width=p.outline_width,
            )
        except ValueError as e:
            return f"Error: {e}"

        return f"Palette: fills={state.palette.fills}, outline={state.palette.outline}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def tile_by_grid() -> str:
        """Cut the subject polygon into per-cell fragments on the current grid.

        **Requires:** set_subject_polygon (or set_subject_regular_polygon).
        **Next:** export_svg or export_json.
        """
        try:
            require_state(state, subject=True)
            state.result = do_tile_by_grid(
                state.subject, state.grid.grid_size_x, state.grid.grid_size_y,
                min_area=state.grid.min_fragment_area,
            )
        except ValueError as e:
            return f"Error: {e}"
        return f"Grid tiling: {_describe_result()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def tile_by_shape() -> str:
        """Cut the subject polygon by replicas of the current clip shape.

        **Requires:** a subject polygon and set_clip_shape (or set_regular_clip_shape).
        **Next:** export_svg or export_json.
        """
        try:
            require_state(state, subject=True, clip_shape=True)
            state.result = do_tile_by_shape(
                state.subject, state.clip_shape, min_area=state.grid.min_fragment_area,
            )
        except ValueError as e:
            return f"Error: {e}"
        return f"Shape tiling: {_describe_result()}"
