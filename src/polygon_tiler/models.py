"""Pydantic domain models for tiling input: points, cell rects and clip shapes."""

import math

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

_BOOL = TypeAdapter(bool)


def _coerce_points(v) -> list["Point"]:
    """Accept Point models, dicts, or (x, y) / (x, y, z) sequences."""
    coerced = []
    for i, p in enumerate(v):
        if isinstance(p, Point):
            coerced.append(p)
            continue
        if isinstance(p, dict):
            coerced.append(Point(**p))
            continue
        p = list(p)
        if len(p) not in (2, 3):
            raise ValueError(f"Point {i} must have 2 or 3 components, got {len(p)}")
        coerced.append(Point(x=p[0], y=p[1], z=p[2] if len(p) == 3 else 0.0))
    return coerced


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class AxisAlignedRect(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @model_validator(mode="after")
    def check_extent(self) -> "AxisAlignedRect":
        if not self.min_x < self.max_x:
            raise ValueError(f"min_x ({self.min_x}) must be less than max_x ({self.max_x})")
        if not self.min_y < self.max_y:
            raise ValueError(f"min_y ({self.min_y}) must be less than max_y ({self.max_y})")
        return self

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class ClipShape(BaseModel):
    """A convex clip window replicated across a grid.

    With ``normalize`` set (the default) the points are shifted at construction
    so the shape's bounding box starts at the origin; z is reset to 0.
    """

    model_config = ConfigDict(frozen=True)

    points: list[Point] = Field(min_length=3)
    step_x: float = 0.0
    step_y: float = 0.0
    normalize: bool = True
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def derive_box(cls, data):
        # The box is always recomputed from the raw points, never trusted from input.
        if not isinstance(data, dict) or data.get("points") is None or len(data["points"]) == 0:
            return data
        points = _coerce_points(data["points"])
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        min_x, min_y = min(xs), min(ys)
        max_x, max_y = max(xs), max(ys)
        data = dict(data)
        # Coerce the flag the same way the field will, so "false" means False here too.
        data["normalize"] = _BOOL.validate_python(data.get("normalize", True))
        if data["normalize"]:
            points = [Point(x=x - min_x, y=y - min_y) for x, y in zip(xs, ys)]
            max_x, max_y = max_x - min_x, max_y - min_y
            min_x, min_y = 0.0, 0.0
        data.update(points=points, min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
        return data

    @model_validator(mode="after")
    def check_steps_finite(self) -> "ClipShape":
        if not (math.isfinite(self.step_x) and math.isfinite(self.step_y)):
            raise ValueError("step_x and step_y must be finite")
        return self

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def pitch_x(self) -> float:
        return self.step_x + self.width

    @property
    def pitch_y(self) -> float:
        return self.step_y + self.height

    def vertex_list(self) -> list[list[float]]:
        return [[p.x, p.y, p.z] for p in self.points]
