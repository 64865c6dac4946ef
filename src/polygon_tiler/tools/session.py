"""Session persistence tools: save_session, load_session."""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state, GridParams, Palette
from ..models import ClipShape
from ..core.polygon import as_vertex_array

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "polygon-tiler" / "session.json"


def register_session_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_session(path: str | None = None) -> str:
        """Save the current session to a JSON file for later resumption.

        Saves the subject polygon, grid, clip shape and palette.
        Does NOT save fragments (re-run tiling after loading).
        **Next:** load_session in a future session to restore this configuration.

        Args:
            path: Where to save. Default: ~/.cache/polygon-tiler/session.json
        """
        save_path = Path(path) if path else _default_path()
        save_path.parent.mkdir(parents=True, exist_ok=True)

        data: dict = {
            "subject": state.subject,
            "grid": state.grid.model_dump(),
            "clip_shape": None,
            "palette": state.palette.model_dump(),
        }

        if state.clip_shape is not None:
            data["clip_shape"] = {
                "points": state.clip_shape.vertex_list(),
                "step_x": state.clip_shape.step_x,
                "step_y": state.clip_shape.step_y,
                "normalize": state.clip_shape.normalize,
            }

        with open(save_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Session saved to %s", save_path)
        return f"Session saved to {save_path}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_session(path: str | None = None) -> str:
        """Load a previously saved session from a JSON file.

        Restores the subject polygon, grid, clip shape and palette.
        Clears fragments: re-run tile_by_grid or tile_by_shape after loading.

        Args:
            path: Path to load from. Default: ~/.cache/polygon-tiler/session.json
        """
        load_path = Path(path) if path else _default_path()

        if not load_path.exists():
            return f"Error: Session file not found at {load_path}"

        try:
            with open(load_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse session file %s: %s", load_path, e)
            return f"Error: Invalid session file — {e}"

        if not isinstance(data, dict):
            logger.warning("Session file %s does not hold a JSON object", load_path)
            return "Error: Invalid session file — expected a JSON object"

        try:
            subject = as_vertex_array(data.get("subject") or []).tolist()
            grid = GridParams(**data["grid"]) if data.get("grid") else GridParams()
            clip_shape = ClipShape(**data["clip_shape"]) if data.get("clip_shape") else None
            palette = Palette(**data["palette"]) if data.get("palette") else Palette()
        except (ValueError, TypeError) as e:
            logger.warning("Invalid values in session file %s: %s", load_path, e)
            return f"Error: Invalid session file — {e}"

        state.subject = subject
        state.grid = grid
        state.clip_shape = clip_shape
        state.palette = palette
        state.result = None

        restored = []
        if state.subject:
            restored.append(f"subject ({len(state.subject)} vertices)")
        restored.append("grid")
        if state.clip_shape is not None:
            restored.append("clip_shape")
        restored.append("palette")

        return (
            f"Session restored from {load_path}. "
            f"Restored: {', '.join(restored)}. "
            "Still needed: tile_by_grid or tile_by_shape."
        )
