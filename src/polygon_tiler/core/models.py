"""Pydantic return models for core clipping and tiling functions."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BoundingBox(BaseModel):
    """Return type for calculate_bounding_box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class Fragment(BaseModel):
    """One clipped piece of the subject, confined to a single grid cell."""
    cell: tuple[int, int]
    points: list[list[float]] = Field(min_length=3)
    area: float = Field(default=0.0, ge=0)

    @field_validator("points")
    @classmethod
    def points_must_be_3d(cls, v: list[list[float]]) -> list[list[float]]:
        for i, point in enumerate(v):
            if len(point) != 3:
                raise ValueError(f"Point {i} must have exactly 3 components, got {len(point)}")
        return v


class TilingResult(BaseModel):
    """Return type for tile_by_grid and tile_by_shape."""
    mode: Literal["grid", "shape"]
    grid_count_x: int = Field(default=0, ge=0)
    grid_count_y: int = Field(default=0, ge=0)
    fragments: list[Fragment] = []

    @property
    def cell_count(self) -> int:
        return self.grid_count_x * self.grid_count_y

    @property
    def total_area(self) -> float:
        return sum(f.area for f in self.fragments)

    def polygons(self) -> list[list[list[float]]]:
        return [f.points for f in self.fragments]
