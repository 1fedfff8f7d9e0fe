"""Built-in shape variants.

Angles are in degrees and measured clockwise from north: at angle 0 a
point sits directly above the center (y decreases upwards in the target
coordinate system, matching the "^x ^ ^y" local offsets of the exporter).
"""

import math
from collections.abc import Iterator

from pydantic import Field, model_validator

from particlegen.core.shapes import ShapeParameters, ShapeVariant

MAX_POINTS = 10_000
MAX_SIDES = 360


def _on_circle(
    center_x: float, center_y: float, radius: float, degrees: float
) -> tuple[float, float]:
    theta = math.radians(degrees)
    return (center_x + math.sin(theta) * radius, center_y - math.cos(theta) * radius)


class CircleParameters(ShapeParameters):
    """Parameters of a circle of evenly spaced points."""

    count: int = Field(
        default=12,
        ge=1,
        le=MAX_POINTS,
        title="Count",
        description="Number of points on the circle",
    )
    center_x: float = Field(default=0.0, title="Center X", description="X of the circle center")
    center_y: float = Field(default=0.0, title="Center Y", description="Y of the circle center")
    radius: float = Field(
        default=5.0,
        ge=0.0,
        title="Radius",
        description="Distance of the points from the center",
    )
    start: float = Field(
        default=0.0, title="Start angle", description="Angle of the first point in degrees"
    )
    # Accepted and stored but not applied to the coordinates yet.
    ellipse: float = Field(
        default=100.0, ge=0.0, title="Ellipse", description="Strength of the ellipse distortion"
    )
    rotate: float = Field(
        default=0.0,
        title="Rotation",
        description="Rotation in degrees; does not move the start angle",
    )


def generate_circle(params: CircleParameters) -> Iterator[tuple[float, float]]:
    """Yield count points on the circle, starting at the start angle.

    Point i sits at start + i * (360 / count) degrees, so the points come
    out in strictly increasing angular order.

    Args:
        params: Validated circle parameters

    Yields:
        (x, y) coordinates
    """
    step = 360.0 / params.count
    for i in range(params.count):
        yield _on_circle(params.center_x, params.center_y, params.radius, params.start + i * step)


class LineParameters(ShapeParameters):
    """Parameters of a straight run of evenly spaced points."""

    count: int = Field(
        default=10, ge=1, le=MAX_POINTS, title="Count", description="Number of points on the line"
    )
    start_x: float = Field(default=0.0, title="Start X", description="X of the first point")
    start_y: float = Field(default=0.0, title="Start Y", description="Y of the first point")
    end_x: float = Field(default=5.0, title="End X", description="X of the last point")
    end_y: float = Field(default=0.0, title="End Y", description="Y of the last point")


def generate_line(params: LineParameters) -> Iterator[tuple[float, float]]:
    """Yield count points from start to end, both ends included.

    A single point sits at the start.
    """
    if params.count == 1:
        yield (params.start_x, params.start_y)
        return

    dx = params.end_x - params.start_x
    dy = params.end_y - params.start_y
    last = params.count - 1
    for i in range(params.count):
        t = i / last
        yield (params.start_x + dx * t, params.start_y + dy * t)


class PolygonParameters(ShapeParameters):
    """Parameters of a regular polygon outline."""

    sides: int = Field(
        default=5, ge=3, le=MAX_SIDES, title="Sides", description="Number of polygon sides"
    )
    count: int = Field(
        default=4,
        ge=1,
        le=MAX_POINTS,
        title="Points per side",
        description="Number of points on each side",
    )
    center_x: float = Field(default=0.0, title="Center X", description="X of the polygon center")
    center_y: float = Field(default=0.0, title="Center Y", description="Y of the polygon center")
    radius: float = Field(
        default=5.0,
        ge=0.0,
        title="Radius",
        description="Distance of the vertices from the center",
    )
    start: float = Field(
        default=0.0, title="Start angle", description="Angle of the first vertex in degrees"
    )

    @model_validator(mode="after")
    def check_total_points(self) -> "PolygonParameters":
        if self.sides * self.count > MAX_POINTS:
            raise ValueError(f"sides * count must be at most {MAX_POINTS}")
        return self


def generate_polygon(params: PolygonParameters) -> Iterator[tuple[float, float]]:
    """Yield the outline of a regular polygon, side by side.

    Each side contributes count points starting at its vertex and stopping
    short of the next vertex, which belongs to the following side.
    """
    step = 360.0 / params.sides
    vertices = [
        _on_circle(params.center_x, params.center_y, params.radius, params.start + k * step)
        for k in range(params.sides)
    ]
    for k, (x0, y0) in enumerate(vertices):
        x1, y1 = vertices[(k + 1) % params.sides]
        for j in range(params.count):
            t = j / params.count
            yield (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)


CIRCLE = ShapeVariant(
    tag="circle",
    label="Circle",
    parameters_model=CircleParameters,
    generator=generate_circle,
)

LINE = ShapeVariant(
    tag="line",
    label="Line",
    parameters_model=LineParameters,
    generator=generate_line,
)

POLYGON = ShapeVariant(
    tag="polygon",
    label="Polygon",
    parameters_model=PolygonParameters,
    generator=generate_polygon,
)

BUILTIN_VARIANTS: tuple[ShapeVariant, ...] = (CIRCLE, LINE, POLYGON)
