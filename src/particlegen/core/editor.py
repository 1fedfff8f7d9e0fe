"""Pure composition editing.

apply_edit() is the single reduction step of the authoring loop: it takes
a Composition and an Edit and returns the next Composition. Shapes an edit
does not touch are carried over unchanged, point ids included.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from particlegen.core.shapes import ShapeRegistry
from particlegen.domain import Composition, Shape
from particlegen.exceptions import ShapeNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddShape:
    """Append a new shape built from defaults plus overrides."""

    shape_type: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    is_manipulate: bool = False
    select: bool = False


@dataclass(frozen=True)
class RemoveShapes:
    """Remove shapes by id."""

    shape_ids: tuple[str, ...]


@dataclass(frozen=True)
class UpdateParameters:
    """Change parameters of one shape, regenerating its points."""

    shape_id: str
    parameters: Mapping[str, Any]


@dataclass(frozen=True)
class SelectShapes:
    """Replace or extend the selection."""

    shape_ids: tuple[str, ...]
    extend: bool = False


@dataclass(frozen=True)
class DuplicateShapes:
    """Insert a copy of each shape right after the original."""

    shape_ids: tuple[str, ...]


@dataclass(frozen=True)
class MoveShape:
    """Move a shape to a new position in the composition."""

    shape_id: str
    index: int


Edit = AddShape | RemoveShapes | UpdateParameters | SelectShapes | DuplicateShapes | MoveShape


def next_shape_name(composition: Composition, shape_type: str) -> str:
    """Return the display name for the next shape of a type.

    Names are "<type>_<n>" with n one past the highest number in use.
    """
    prefix = f"{shape_type}_"
    highest = 0
    for shape in composition:
        suffix = shape.name[len(prefix):]
        if shape.name.startswith(prefix) and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1}"


def _require(composition: Composition, shape_ids: tuple[str, ...]) -> None:
    for shape_id in shape_ids:
        if composition.index_of(shape_id) is None:
            raise ShapeNotFoundError(shape_id)


def apply_edit(composition: Composition, edit: Edit, registry: ShapeRegistry) -> Composition:
    """Apply an edit and return the resulting composition.

    Args:
        composition: Current composition (left untouched)
        edit: Edit to apply
        registry: Registry used to build and regenerate shapes

    Returns:
        New composition

    Raises:
        ShapeNotFoundError: If the edit names a shape that does not exist
        InvalidParameterError: If new parameters are outside their domain
        UnknownShapeTypeError: If AddShape names an unregistered type
        TypeError: If edit is not a known edit type
    """
    shapes = composition.shapes
    allocator = composition.allocator

    if isinstance(edit, AddShape):
        shape = registry.create(
            edit.shape_type,
            edit.parameters,
            allocator,
            name=next_shape_name(composition, edit.shape_type),
            is_manipulate=edit.is_manipulate,
        )
        if edit.select:
            shape = replace(shape, is_selected=True)
        result = shapes + (shape,)

    elif isinstance(edit, RemoveShapes):
        _require(composition, edit.shape_ids)
        removed = set(edit.shape_ids)
        result = tuple(s for s in shapes if s.id not in removed)

    elif isinstance(edit, UpdateParameters):
        _require(composition, (edit.shape_id,))
        result = tuple(
            registry.regenerate(s, edit.parameters, allocator) if s.id == edit.shape_id else s
            for s in shapes
        )

    elif isinstance(edit, SelectShapes):
        _require(composition, edit.shape_ids)
        chosen = set(edit.shape_ids)
        result = tuple(
            _with_selection(s, s.id in chosen or (edit.extend and s.is_selected))
            for s in shapes
        )

    elif isinstance(edit, DuplicateShapes):
        _require(composition, edit.shape_ids)
        duplicated = set(edit.shape_ids)
        out: list[Shape] = []
        working = composition
        for s in shapes:
            out.append(s)
            if s.id in duplicated:
                copy = registry.create(
                    s.shape_type,
                    s.parameters,
                    allocator,
                    name=next_shape_name(working, s.shape_type),
                    is_manipulate=s.is_manipulate,
                )
                out.append(copy)
                working = working.with_shapes(working.shapes + (copy,))
        result = tuple(out)

    elif isinstance(edit, MoveShape):
        idx = composition.index_of(edit.shape_id)
        if idx is None:
            raise ShapeNotFoundError(edit.shape_id)
        remaining = list(shapes)
        moving = remaining.pop(idx)
        target = max(0, min(edit.index, len(remaining)))
        remaining.insert(target, moving)
        result = tuple(remaining)

    else:
        raise TypeError(f"Unsupported edit: {type(edit).__name__}")

    logger.debug("Applied %s: %d -> %d shapes", type(edit).__name__, len(shapes), len(result))
    return composition.with_shapes(result)


def _with_selection(shape: Shape, selected: bool) -> Shape:
    if shape.is_selected == selected:
        return shape
    return replace(shape, is_selected=selected)


def build_composition(
    registry: ShapeRegistry,
    records: list[tuple[str, Mapping[str, Any]]],
    composition: Composition | None = None,
) -> Composition:
    """Build a composition by adding shapes in order.

    Args:
        registry: Registry used to build shapes
        records: (type tag, parameter overrides) pairs
        composition: Composition to extend (a new empty one when omitted)

    Returns:
        Composition holding the added shapes
    """
    result = composition if composition is not None else Composition()
    for shape_type, parameters in records:
        result = apply_edit(result, AddShape(shape_type, parameters), registry)
    return result
