"""JSON export of a tiling result."""

import json
import logging

from ..core.models import TilingResult

logger = logging.getLogger(__name__)


def export_fragments_json(result: TilingResult, output_path: str) -> dict:
    """Write a tiling result as JSON.

    The document holds the tiling mode, grid counts and, per fragment, its
    (i, j) cell, points ([x, y, z] each) and area.
    """
    data = {
        "mode": result.mode,
        "grid_count_x": result.grid_count_x,
        "grid_count_y": result.grid_count_y,
        "fragments": [
            {"cell": list(f.cell), "points": f.points, "area": f.area}
            for f in result.fragments
        ],
    }
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    logger.info("Wrote %d fragments to %s", len(result.fragments), output_path)
    return {"success": True, "filepath": output_path, "fragments": len(result.fragments)}
