"""Export tools: export_svg, export_json."""

import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..exporters.svg import export_svg as do_export_svg
from ..exporters.fragments_json import export_fragments_json
from ._prereqs import require_state


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_svg(output_path: str) -> str:
        """Export the current fragments as an SVG drawing.

        Each fragment is drawn as a filled polygon (palette colors, cycled by
        fragment index) with an outline on top.

        Args:
            output_path: Where to save the .svg file (absolute path)
        """
        try:
            require_state(state, result=True)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        result = do_export_svg(state.result.polygons(), state.palette, output_path)
        return f"SVG exported to {output_path} ({result['fragments']} fragments)"

    @mcp.tool()
    def export_json(output_path: str) -> str:
        """Export the current fragments as JSON (cell index, points and area per fragment).

        Args:
            output_path: Where to save the .json file (absolute path)
        """
        try:
            require_state(state, result=True)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        result = export_fragments_json(state.result, output_path)
        return f"JSON exported to {output_path} ({result['fragments']} fragments)"
