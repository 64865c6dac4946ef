"""Tests for SVG and JSON exporters."""

import json
import os
import xml.etree.ElementTree as ET

import pytest

SVG_NS = "{http://www.w3.org/2000/svg}"

SQUARES = [
    [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]],
    [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [2.0, 1.0, 0.0], [1.0, 1.0, 0.0]],
    [[2.0, 0.0, 0.0], [3.0, 0.0, 0.0], [3.0, 1.0, 0.0], [2.0, 1.0, 0.0]],
]


def _palette():
    from polygon_tiler.state import Palette
    return Palette(fills=["#FF0000", "#00FF00"], outline="#101010")


class TestRenderSVG:
    def _root(self, fragments=SQUARES):
        from polygon_tiler.exporters.svg import render_fragments_svg
        return ET.fromstring(render_fragments_svg(fragments, _palette()))

    def test_is_svg(self):
        assert self._root().tag == f"{SVG_NS}svg"

    def test_one_fill_and_one_outline_per_fragment(self):
        root = self._root()
        fills = root.find(f"{SVG_NS}g[@id='fills']")
        outlines = root.find(f"{SVG_NS}g[@id='outlines']")
        assert len(fills.findall(f"{SVG_NS}polygon")) == 3
        assert len(outlines.findall(f"{SVG_NS}polygon")) == 3

    def test_outlines_drawn_after_fills(self):
        groups = [g.get("id") for g in self._root().findall(f"{SVG_NS}g")]
        assert groups == ["fills", "outlines"]

    def test_fill_colors_cycle_through_palette(self):
        fills = self._root().find(f"{SVG_NS}g[@id='fills']")
        colors = [p.get("fill") for p in fills.findall(f"{SVG_NS}polygon")]
        assert colors == ["#FF0000", "#00FF00", "#FF0000"]

    def test_outline_style(self):
        outlines = self._root().find(f"{SVG_NS}g[@id='outlines']")
        assert outlines.get("stroke") == "#101010"
        assert outlines.get("fill") == "none"

    def test_viewbox_covers_fragments(self):
        x, y, w, h = (float(v) for v in self._root().get("viewBox").split())
        assert x < 0.0 and x + w > 3.0
        # y is flipped: model y in [0, 1] maps to [-1, 0]
        assert y < -1.0 and y + h > 0.0

    def test_accepts_numpy_fragments(self):
        from polygon_tiler.core.grid_tiler import cut_by_grid
        fragments = cut_by_grid([(0, 0), (2, 0), (2, 2), (0, 2)], 1.0, 1.0)
        root = self._root(fragments)
        assert len(root.find(f"{SVG_NS}g[@id='fills']")) == 4

    def test_raises_on_empty(self):
        from polygon_tiler.exporters.svg import render_fragments_svg
        with pytest.raises(ValueError, match="No fragments"):
            render_fragments_svg([], _palette())


class TestExportSVG:
    def test_output_file_is_created(self, tmp_path):
        from polygon_tiler.exporters.svg import export_svg
        out = str(tmp_path / "test.svg")
        result = export_svg(SQUARES, _palette(), out)
        assert os.path.exists(out)
        assert result["fragments"] == 3
        assert result["filepath"] == out

    def test_output_is_valid_xml(self, tmp_path):
        from polygon_tiler.exporters.svg import export_svg
        out = str(tmp_path / "test.svg")
        export_svg(SQUARES, _palette(), out)
        root = ET.parse(out).getroot()
        assert "svg" in root.tag.lower()


class TestExportJSON:
    def _result(self):
        from polygon_tiler.core.grid_tiler import tile_by_grid
        return tile_by_grid([(0, 0), (2, 0), (2, 1), (0, 1)], 1.0, 1.0)

    def test_document_structure(self, tmp_path):
        from polygon_tiler.exporters.fragments_json import export_fragments_json
        out = str(tmp_path / "fragments.json")
        result = export_fragments_json(self._result(), out)
        assert result["fragments"] == 2

        with open(out) as f:
            data = json.load(f)
        assert data["mode"] == "grid"
        assert data["grid_count_x"] == 2
        assert data["grid_count_y"] == 1
        assert [frag["cell"] for frag in data["fragments"]] == [[0, 0], [1, 0]]
        assert data["fragments"][0]["area"] == pytest.approx(1.0)
        assert all(len(p) == 3 for p in data["fragments"][0]["points"])


def test_validate_output_path_rejects_outside_home():
    """_validate_output_path should raise ValueError for paths outside home directory."""
    from polygon_tiler.tools.export import _validate_output_path

    # /etc/ is almost certainly outside home directory
    with pytest.raises(ValueError, match="outside"):
        _validate_output_path("/etc/polygon_tiler_test.svg")


def test_validate_output_path_accepts_home_subdirectory():
    """_validate_output_path should accept paths inside the home directory."""
    from polygon_tiler.tools.export import _validate_output_path
    from pathlib import Path

    home_subpath = str(Path.home() / "polygon_tiler_output.svg")
    # Should not raise
    _validate_output_path(home_subpath)


def test_export_logs_written_file(tmp_path, caplog):
    import logging
    from polygon_tiler.exporters.svg import export_svg

    out = str(tmp_path / "logged.svg")
    with caplog.at_level(logging.INFO, logger="polygon_tiler.exporters.svg"):
        export_svg(SQUARES, _palette(), out)

    assert any(
        r.name == "polygon_tiler.exporters.svg" and out in r.message
        for r in caplog.records
    ), f"Expected INFO record naming {out}. Got: {[(r.name, r.message) for r in caplog.records]}"
