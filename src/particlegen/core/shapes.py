"""Shape contract and variant registry.

Every shape variant is a ShapeVariant: a type tag, a pydantic model that
declares the parameters (defaults, bounds, labels) and a pure function
turning validated parameters into coordinates. The ShapeRegistry maps tags
to variants and is the only place Shape instances are built, which keeps
every point set the exact image of its shape's parameters.
"""

import logging
import math
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from particlegen.domain import (
    ParameterMetadata,
    ParameterValue,
    Point,
    PointIdAllocator,
    Shape,
)
from particlegen.exceptions import InvalidParameterError, UnknownShapeTypeError

logger = logging.getLogger(__name__)


class ShapeParameters(BaseModel):
    """Base class for the parameter models of shape variants.

    Unknown parameter names and non-finite numbers are rejected; numeric
    strings are coerced.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False, frozen=True)


Generator = Callable[[Any], Iterable[tuple[float, float]]]


@dataclass(frozen=True)
class ShapeVariant:
    """A registered kind of shape.

    Attributes:
        tag: Type tag stored in tokens (e.g. "circle")
        label: Human readable name
        parameters_model: Pydantic model declaring the parameters
        generator: Pure function from validated parameters to coordinates
    """

    tag: str
    label: str
    parameters_model: type[ShapeParameters]
    generator: Generator

    def defaults(self) -> dict[str, ParameterValue]:
        """Return the default parameter values."""
        return self.parameters_model().model_dump()

    def metadata(self) -> dict[str, ParameterMetadata]:
        """Return display metadata for every parameter."""
        return {
            name: ParameterMetadata(
                label=info.title or name,
                description=info.description or "",
            )
            for name, info in self.parameters_model.model_fields.items()
        }

    def validate(self, parameters: Mapping[str, Any]) -> ShapeParameters:
        """Validate a complete or partial parameter mapping.

        Missing parameters take their default values.

        Args:
            parameters: Parameter values by name

        Returns:
            Validated parameter model

        Raises:
            InvalidParameterError: If any value is outside its domain
        """
        try:
            return self.parameters_model.model_validate(dict(parameters))
        except ValidationError as e:
            first = e.errors()[0]
            name = ".".join(str(part) for part in first["loc"]) or "parameters"
            raise InvalidParameterError(self.tag, name, first["msg"]) from e
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(self.tag, "parameters", str(e)) from e

    def generate(
        self, parameters: Mapping[str, Any], allocator: PointIdAllocator
    ) -> tuple[Point, ...]:
        """Generate the point set for the given parameters.

        Parameters are validated and every coordinate is computed before
        the first id is allocated, so a failure never consumes ids.

        Args:
            parameters: Parameter values by name
            allocator: Source of point ids

        Returns:
            Points in generation order

        Raises:
            InvalidParameterError: If any value is outside its domain or the
                coordinates overflow
        """
        model = self.validate(parameters)
        coordinates = list(self.generator(model))
        if not all(math.isfinite(x) and math.isfinite(y) for x, y in coordinates):
            raise InvalidParameterError(self.tag, "parameters", "coordinates are not finite")
        return tuple(Point(allocator.next(), x, y) for x, y in coordinates)


class ShapeRegistry:
    """Maps type tags to shape variants and builds shapes.

    Example:
        registry = default_registry()
        shape = registry.create("circle", {"count": 8}, allocator)
        len(shape.point_set)  # 8
    """

    def __init__(self, variants: Iterable[ShapeVariant] = ()) -> None:
        self._variants: dict[str, ShapeVariant] = {}
        for variant in variants:
            self.register(variant)

    def register(self, variant: ShapeVariant) -> None:
        """Register a variant under its tag.

        Raises:
            ValueError: If the tag is already registered
        """
        if variant.tag in self._variants:
            raise ValueError(f"Shape type '{variant.tag}' is already registered")
        self._variants[variant.tag] = variant

    def get(self, tag: str) -> ShapeVariant:
        """Return the variant for a tag.

        Raises:
            UnknownShapeTypeError: If no variant is registered under tag
        """
        try:
            return self._variants[tag]
        except KeyError:
            raise UnknownShapeTypeError(tag) from None

    def __contains__(self, tag: object) -> bool:
        return tag in self._variants

    @property
    def tags(self) -> list[str]:
        """Registered tags in registration order."""
        return list(self._variants)

    def create(
        self,
        tag: str,
        parameters: Mapping[str, Any] | None,
        allocator: PointIdAllocator,
        name: str | None = None,
        shape_id: str | None = None,
        is_manipulate: bool = False,
    ) -> Shape:
        """Build a new shape and generate its point set.

        Args:
            tag: Variant tag
            parameters: Parameter overrides; missing ones take defaults
            allocator: Source of point ids
            name: Display name (defaults to the tag)
            shape_id: Shape id (a random one when omitted)
            is_manipulate: Mark the shape as an auxiliary editing shape

        Returns:
            New Shape

        Raises:
            UnknownShapeTypeError: If tag is not registered
            InvalidParameterError: If any parameter is outside its domain
        """
        variant = self.get(tag)
        merged = {**variant.defaults(), **(parameters or {})}
        model = variant.validate(merged)
        points = variant.generate(model.model_dump(), allocator)
        shape = Shape(
            id=shape_id or uuid.uuid4().hex,
            shape_type=tag,
            name=name or tag,
            parameters=model.model_dump(),
            point_set=points,
            is_manipulate=is_manipulate,
        )
        logger.debug("Created shape %s (%s) with %d points", shape.id, tag, len(points))
        return shape

    def regenerate(
        self,
        shape: Shape,
        parameters: Mapping[str, Any],
        allocator: PointIdAllocator,
    ) -> Shape:
        """Return a copy of shape with updated parameters and fresh points.

        Args:
            shape: Shape to update
            parameters: Parameter overrides applied on top of the current values
            allocator: Source of point ids

        Returns:
            New Shape with the same id, name and flags

        Raises:
            InvalidParameterError: If any parameter is outside its domain
        """
        variant = self.get(shape.shape_type)
        model = variant.validate({**shape.parameters, **parameters})
        values = model.model_dump()
        return replace(
            shape,
            parameters=values,
            point_set=variant.generate(values, allocator),
        )


def default_registry() -> ShapeRegistry:
    """Create a registry holding the built-in variants."""
    from particlegen.core.variants import BUILTIN_VARIANTS

    return ShapeRegistry(BUILTIN_VARIANTS)
