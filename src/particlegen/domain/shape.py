"""Shape records and parameter metadata.

A Shape is a plain immutable record: its type tag, its parameters and the
point set generated from them. Point generation lives with the shape
variants in particlegen.core.shapes; nothing else builds a point set.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from particlegen.domain.point import Point

ParameterValue = int | float


@dataclass(frozen=True, slots=True)
class ParameterMetadata:
    """Presentation metadata for a single shape parameter.

    Attributes:
        label: Short display label
        description: Longer help text
    """

    label: str
    description: str


@dataclass(frozen=True)
class Shape:
    """A parametric shape and its generated point set.

    Instances are created by ShapeRegistry.create() and replaced, never
    mutated, when parameters change. point_set is always the image of
    parameters under the variant's generate function.

    Attributes:
        id: Unique id, stable across edits
        shape_type: Registered variant tag (e.g. "circle")
        name: Display name used for grouping exported commands
        parameters: Parameter values by name
        point_set: Points generated from parameters, in generation order
        is_selected: Whether the shape is currently selected
        is_manipulate: Auxiliary editing shape excluded from export
    """

    id: str
    shape_type: str
    name: str
    parameters: Mapping[str, ParameterValue]
    point_set: tuple[Point, ...] = field(default=())
    is_selected: bool = False
    is_manipulate: bool = False

    @property
    def point_ids(self) -> tuple[int, ...]:
        """Ids of the generated points, in order."""
        return tuple(p.id for p in self.point_set)

    def to_record(self) -> dict[str, Any]:
        """Serialize the persistent part of the shape.

        Only the type and the parameters are persisted; ids, names,
        flags and points are rebuilt on decode.

        Returns:
            Dictionary with type and parameters fields
        """
        return {
            "type": self.shape_type,
            "parameters": dict(self.parameters),
        }
