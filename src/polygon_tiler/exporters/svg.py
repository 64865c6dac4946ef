"""SVG rendering of tiled fragments.

Each fragment becomes a filled polygon plus an outline polygon. All fills
are written before all outlines so no outline is hidden under a later fill.
Fill colors cycle through the palette by fragment index.
"""

import logging

from ..core.bounding_box import calculate_bounding_box
from ..core.polygon import as_vertex_array
from ..state import Palette

logger = logging.getLogger(__name__)


def _points_attr(vertices) -> str:
    # SVG y grows downward; flip so +y is up as in model space.
    return " ".join(f"{x:.6g},{-y:.6g}" for x, y in vertices[:, :2])


def render_fragments_svg(fragments: list, palette: Palette, padding: float = 0.05) -> str:
    """Render fragments to an SVG document string.

    Args:
        fragments: Point sequences, each with >= 3 vertices.
        palette: Fill colors (cycled by index) and outline style.
        padding: Margin around the fragments, as a fraction of the larger extent.

    Raises:
        ValueError: if there are no fragments.
    """
    polygons = [as_vertex_array(f) for f in fragments]
    if not polygons:
        raise ValueError("No fragments to export")

    bbox = calculate_bounding_box([p for poly in polygons for p in poly])
    margin = max(bbox.width, bbox.height, 1e-9) * padding
    view_x = bbox.min_x - margin
    view_y = -bbox.max_y - margin
    view_w = bbox.width + 2 * margin
    view_h = bbox.height + 2 * margin

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="{view_x:.6g} {view_y:.6g} {view_w:.6g} {view_h:.6g}">',
        '<g id="fills" stroke="none">',
    ]
    for index, poly in enumerate(polygons):
        parts.append(f'<polygon points="{_points_attr(poly)}" fill="{palette.fill_for(index)}"/>')
    parts.append("</g>")

    parts.append(
        f'<g id="outlines" fill="none" stroke="{palette.outline}" '
        f'stroke-width="{palette.outline_width:g}" stroke-linejoin="round">'
    )
    for poly in polygons:
        parts.append(f'<polygon points="{_points_attr(poly)}"/>')
    parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts)


def export_svg(fragments: list, palette: Palette, output_path: str) -> dict:
    """Write fragments as an SVG file."""
    svg_content = render_fragments_svg(fragments, palette)
    with open(output_path, "w") as f:
        f.write(svg_content)
    logger.info("Wrote %d fragments to %s", len(fragments), output_path)
    return {"success": True, "filepath": output_path, "fragments": len(fragments)}
