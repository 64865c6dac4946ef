"""Session state for the polygon-tiler MCP server.

Holds everything for the current tiling job: the subject polygon, grid
parameters, the repeating clip shape, render palette and the last result.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from polygon_tiler.core.models import TilingResult
from polygon_tiler.models import ClipShape

_HEX_COLOR = re.compile(r'^#[0-9A-Fa-f]{6}$')

DEFAULT_FILLS = ["#E6194B", "#3CB44B", "#FFE119", "#4363D8", "#F58231", "#911EB4"]


def _normalize_hex(v) -> str:
    if not isinstance(v, str):
        raise ValueError("Color must be a string")
    v = v.strip()
    if not _HEX_COLOR.match(v):
        raise ValueError(f"Invalid hex color '{v}'. Must be #RRGGBB format.")
    return f"#{v[1:].upper()}"


class GridParams(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    grid_size_x: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    grid_size_y: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    # Fragments with area at or below this are dropped as touch-only slivers.
    min_fragment_area: float = Field(default=1e-12, ge=0, allow_inf_nan=False)


class Palette(BaseModel):
    """Rendering colors: fills cycle by fragment index, one outline color."""
    model_config = ConfigDict(validate_assignment=True)

    fills: list[str] = Field(default_factory=lambda: list(DEFAULT_FILLS), min_length=1)
    outline: str = "#000000"
    outline_width: float = Field(default=0.02, gt=0)

    @field_validator("fills", mode="before")
    @classmethod
    def validate_fills(cls, v):
        if isinstance(v, str):
            v = [v]
        return [_normalize_hex(c) for c in v]

    @field_validator("outline", mode="before")
    @classmethod
    def validate_outline(cls, v) -> str:
        return _normalize_hex(v)

    def fill_for(self, index: int) -> str:
        return self.fills[index % len(self.fills)]


class SessionState(BaseModel):
    subject: list[list[float]] = []
    grid: GridParams = Field(default_factory=GridParams)
    clip_shape: Optional[ClipShape] = None
    palette: Palette = Field(default_factory=Palette)
    result: Optional[TilingResult] = None

    def summary(self) -> dict:
        return {
            "subject": {
                "vertices": len(self.subject),
                "set": bool(self.subject),
            },
            "grid": {
                "grid_size_x": self.grid.grid_size_x,
                "grid_size_y": self.grid.grid_size_y,
                "min_fragment_area": self.grid.min_fragment_area,
            },
            "clip_shape": {
                "vertices": len(self.clip_shape.points),
                "step_x": self.clip_shape.step_x,
                "step_y": self.clip_shape.step_y,
                "pitch_x": self.clip_shape.pitch_x,
                "pitch_y": self.clip_shape.pitch_y,
                "normalize": self.clip_shape.normalize,
            } if self.clip_shape is not None else None,
            "palette": {
                "fills": self.palette.fills,
                "outline": self.palette.outline,
            },
            "result": {
                "mode": self.result.mode,
                "grid_count_x": self.result.grid_count_x,
                "grid_count_y": self.result.grid_count_y,
                "fragments": len(self.result.fragments),
                "total_area": round(self.result.total_area, 6),
            } if self.result is not None else None,
        }


# Global session state — one per MCP server process
state = SessionState()
