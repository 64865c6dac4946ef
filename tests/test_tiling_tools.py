"""Tests for subject, tiling and export tools."""
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from polygon_tiler.state import state, GridParams, Palette


def _register(*registrars):
    """Register tool groups against a mock MCP and return the captured tools."""
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    for register in registrars:
        register(mock_mcp)
    return tools


def _all_tools():
    from polygon_tiler.tools.subject import register_subject_tools
    from polygon_tiler.tools.tiling import register_tiling_tools
    from polygon_tiler.tools.export import register_export_tools
    return _register(register_subject_tools, register_tiling_tools, register_export_tools)


@pytest.fixture(autouse=True)
def reset_state():
    state.subject = []
    state.grid = GridParams()
    state.clip_shape = None
    state.palette = Palette()
    state.result = None
    yield


SCENARIO = [[1.5, 0.0], [4.6, 0.0], [5.0, 2.0], [0.0, 2.0], [0.0, 1.6]]


class TestSubjectTools:
    def test_set_subject_polygon(self):
        tools = _all_tools()
        result = tools["set_subject_polygon"](points=SCENARIO)
        assert "5 vertices" in result
        assert state.subject[0] == [1.5, 0.0, 0.0]

    def test_set_subject_clears_result(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        tools["tile_by_grid"]()
        assert state.result is not None
        tools["set_subject_polygon"](points=SCENARIO)
        assert state.result is None

    def test_set_subject_polygon_too_few_points(self):
        tools = _all_tools()
        result = tools["set_subject_polygon"](points=[[0, 0], [1, 1]])
        assert result.startswith("Error")
        assert state.subject == []

    def test_set_subject_polygon_malformed(self):
        tools = _all_tools()
        result = tools["set_subject_polygon"](points=[[0], [1], [2]])
        assert result.startswith("Error")

    def test_set_subject_regular_polygon(self):
        tools = _all_tools()
        result = tools["set_subject_regular_polygon"](
            center_x=1.0, center_y=1.0, radius=2.0, sides=6,
        )
        assert "6 vertices" in result
        assert state.subject[0] == pytest.approx([3.0, 1.0, 0.0])

    def test_set_subject_regular_polygon_invalid(self):
        tools = _all_tools()
        result = tools["set_subject_regular_polygon"](
            center_x=0.0, center_y=0.0, radius=1.0, sides=2,
        )
        assert result.startswith("Error")


class TestTilingTools:
    def test_set_grid(self):
        tools = _all_tools()
        result = tools["set_grid"](grid_size_x=0.5)
        assert state.grid.grid_size_x == 0.5
        assert state.grid.grid_size_y == 1.0
        assert "0.5 x 1" in result

    def test_set_grid_rejects_non_positive(self):
        tools = _all_tools()
        result = tools["set_grid"](grid_size_x=0.0)
        assert result.startswith("Error")
        assert state.grid.grid_size_x == 1.0

    def test_set_grid_min_fragment_area(self):
        tools = _all_tools()
        tools["set_grid"](min_fragment_area=0.01)
        assert state.grid.min_fragment_area == 0.01
        assert state.grid.grid_size_x == 1.0
        result = tools["set_grid"](min_fragment_area=-1.0)
        assert result.startswith("Error")
        assert state.grid.min_fragment_area == 0.01

    def test_tile_by_grid_drops_touch_only_slivers(self):
        tools = _all_tools()
        tools["set_subject_polygon"](
            points=[[0, 0], [3, 0], [3, 1.5], [1.5, 1.5], [1.5, 3], [0, 3]],
        )
        tools["set_grid"](grid_size_x=0.5, grid_size_y=0.5)
        tools["tile_by_grid"]()
        assert len(state.result.fragments) == 27
        assert all(f.area > 0 for f in state.result.fragments)

    def test_tile_by_grid_reports_too_many_cells(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        tools["set_grid"](grid_size_x=1e-9, grid_size_y=1e-9)
        result = tools["tile_by_grid"]()
        assert result.startswith("Error")
        assert "exceeds" in result
        assert state.result is None

    def test_tile_by_grid_requires_subject(self):
        tools = _all_tools()
        result = tools["tile_by_grid"]()
        assert result.startswith("Error")
        assert "subject" in result

    def test_tile_by_grid(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        result = tools["tile_by_grid"]()
        assert "5x2 cells" in result
        assert state.result.mode == "grid"
        assert state.result.total_area == pytest.approx(8.4)

    def test_tile_by_shape_requires_clip_shape(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        result = tools["tile_by_shape"]()
        assert result.startswith("Error")
        assert "clip shape" in result

    def test_set_clip_shape_and_tile(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=[[0, 0], [4, 0], [4, 4], [0, 4]])
        msg = tools["set_clip_shape"](
            points=[[0, 0], [1, 0], [1, 1], [0, 1]], step_x=1.0, step_y=1.0,
        )
        assert "pitch 2 x 2" in msg
        result = tools["tile_by_shape"]()
        assert result.startswith("Shape tiling: 4 fragments")
        assert state.result.mode == "shape"

    def test_set_clip_shape_invalid(self):
        tools = _all_tools()
        result = tools["set_clip_shape"](points=[[0, 0], [1, 0]])
        assert result.startswith("Error")
        assert state.clip_shape is None

    def test_tile_by_shape_reports_bad_pitch(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        tools["set_clip_shape"](points=[[0, 0], [1, 0], [1, 1], [0, 1]], step_x=-2.0)
        result = tools["tile_by_shape"]()
        assert result.startswith("Error")
        assert "pitch" in result

    def test_set_regular_clip_shape(self):
        tools = _all_tools()
        result = tools["set_regular_clip_shape"](radius=1.0, sides=4)
        assert "4 vertices" in result
        assert state.clip_shape.width == pytest.approx(2.0)

    def test_set_palette(self):
        tools = _all_tools()
        result = tools["set_palette"](fills=["#abcdef"])
        assert state.palette.fills == ["#ABCDEF"]
        assert state.palette.outline == "#000000"
        assert "ABCDEF" in result

    def test_set_palette_invalid(self):
        tools = _all_tools()
        result = tools["set_palette"](outline="black")
        assert result.startswith("Error")
        assert state.palette.outline == "#000000"


class TestExportTools:
    def test_export_requires_fragments(self):
        tools = _all_tools()
        result = tools["export_svg"](output_path=str(Path.home() / "x.svg"))
        assert result.startswith("Error")

    def test_export_rejects_path_outside_home(self):
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        tools["tile_by_grid"]()
        result = tools["export_json"](output_path="/etc/fragments.json")
        assert result.startswith("Error")
        assert "outside" in result

    def test_export_svg_and_json(self, tmp_path, monkeypatch):
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
        tools = _all_tools()
        tools["set_subject_polygon"](points=SCENARIO)
        tools["tile_by_grid"]()

        svg_path = tmp_path / "out" / "tiles.svg"
        json_path = tmp_path / "out" / "tiles.json"
        svg_msg = tools["export_svg"](output_path=str(svg_path))
        json_msg = tools["export_json"](output_path=str(json_path))

        n = len(state.result.fragments)
        assert f"({n} fragments)" in svg_msg
        assert f"({n} fragments)" in json_msg
        assert svg_path.exists()
        assert json_path.exists()
