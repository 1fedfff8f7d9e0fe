"""Tests for pure composition editing."""

import pytest

from particlegen.core.editor import (
    AddShape,
    DuplicateShapes,
    MoveShape,
    RemoveShapes,
    SelectShapes,
    UpdateParameters,
    apply_edit,
    build_composition,
    next_shape_name,
)
from particlegen.core.shapes import ShapeRegistry, default_registry
from particlegen.domain import Composition
from particlegen.exceptions import (
    InvalidParameterError,
    ShapeNotFoundError,
    UnknownShapeTypeError,
)


@pytest.fixture
def registry() -> ShapeRegistry:
    """Create a registry with the built-in variants."""
    return default_registry()


@pytest.fixture
def composition(registry: ShapeRegistry) -> Composition:
    """Create a composition with two circles and a line."""
    return build_composition(
        registry,
        [
            ("circle", {"count": 4, "radius": 10}),
            ("circle", {"count": 6, "radius": 2}),
            ("line", {"count": 3}),
        ],
    )


class TestAddShape:
    """Tests for AddShape."""

    def test_names_count_per_type(self, composition: Composition) -> None:
        """Test display names number shapes per type."""
        assert [s.name for s in composition] == ["circle_1", "circle_2", "line_1"]

    def test_add_appends(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test a new shape is appended and the input is untouched."""
        result = apply_edit(composition, AddShape("polygon", {"sides": 3}), registry)
        assert len(result) == 4
        assert len(composition) == 3
        assert result.shapes[-1].shape_type == "polygon"
        assert result.shapes[-1].name == "polygon_1"
        assert result.shapes[:3] == composition.shapes

    def test_add_selected_manipulate(
        self, composition: Composition, registry: ShapeRegistry
    ) -> None:
        """Test flags on added shapes."""
        result = apply_edit(
            composition, AddShape("circle", is_manipulate=True, select=True), registry
        )
        added = result.shapes[-1]
        assert added.is_manipulate
        assert added.is_selected
        assert added.name == "circle_3"

    def test_add_unknown_type(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test unknown types are rejected."""
        with pytest.raises(UnknownShapeTypeError):
            apply_edit(composition, AddShape("spiral"), registry)

    def test_name_after_removal(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test names continue after the highest number in use."""
        first = composition.shapes[0]
        result = apply_edit(composition, RemoveShapes((first.id,)), registry)
        assert next_shape_name(result, "circle") == "circle_3"
        assert next_shape_name(result, "polygon") == "polygon_1"


class TestUpdateParameters:
    """Tests for UpdateParameters."""

    def test_regenerates_only_target(
        self, composition: Composition, registry: ShapeRegistry
    ) -> None:
        """Test the edited shape regenerates and the others are reused."""
        target = composition.shapes[1]
        result = apply_edit(composition, UpdateParameters(target.id, {"count": 9}), registry)

        updated = result.shapes[1]
        assert updated.id == target.id
        assert len(updated.point_set) == 9
        assert set(updated.point_ids).isdisjoint(target.point_ids)
        assert result.shapes[0] is composition.shapes[0]
        assert result.shapes[2] is composition.shapes[2]

    def test_invalid_update(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test an invalid update raises and leaves the input intact."""
        target = composition.shapes[0]
        with pytest.raises(InvalidParameterError):
            apply_edit(composition, UpdateParameters(target.id, {"radius": -1}), registry)
        assert composition.shapes[0] is target

    def test_unknown_shape(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test updating a missing shape raises ShapeNotFoundError."""
        with pytest.raises(ShapeNotFoundError):
            apply_edit(composition, UpdateParameters("missing", {"count": 2}), registry)


class TestRemoveShapes:
    """Tests for RemoveShapes."""

    def test_remove(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test shapes are removed and others keep their point ids."""
        a, b, c = composition.shapes
        result = apply_edit(composition, RemoveShapes((a.id, c.id)), registry)
        assert [s.id for s in result] == [b.id]
        assert result.shapes[0].point_ids == b.point_ids

    def test_remove_missing(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test removing a missing shape raises."""
        with pytest.raises(ShapeNotFoundError):
            apply_edit(composition, RemoveShapes(("missing",)), registry)


class TestSelectShapes:
    """Tests for SelectShapes."""

    def test_replace_selection(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test selection replaces the previous one."""
        a, b, c = composition.shapes
        first = apply_edit(composition, SelectShapes((a.id,)), registry)
        second = apply_edit(first, SelectShapes((c.id,)), registry)
        assert [s.is_selected for s in second] == [False, False, True]

    def test_extend_selection(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test extending keeps the previous selection."""
        a, b, c = composition.shapes
        first = apply_edit(composition, SelectShapes((a.id,)), registry)
        second = apply_edit(first, SelectShapes((b.id,), extend=True), registry)
        assert [s.is_selected for s in second] == [True, True, False]

    def test_selection_keeps_points(
        self, composition: Composition, registry: ShapeRegistry
    ) -> None:
        """Test selection does not regenerate points."""
        a = composition.shapes[0]
        result = apply_edit(composition, SelectShapes((a.id,)), registry)
        assert result.shapes[0].point_ids == a.point_ids


class TestDuplicateShapes:
    """Tests for DuplicateShapes."""

    def test_duplicate(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test copies are inserted after their originals."""
        a, b, c = composition.shapes
        result = apply_edit(composition, DuplicateShapes((a.id, c.id)), registry)

        assert [s.name for s in result] == [
            "circle_1",
            "circle_3",
            "circle_2",
            "line_1",
            "line_2",
        ]
        copy = result.shapes[1]
        assert copy.id != a.id
        assert copy.parameters == a.parameters
        assert [p.to_tuple() for p in copy.point_set] == [p.to_tuple() for p in a.point_set]
        assert set(copy.point_ids).isdisjoint(a.point_ids)


class TestMoveShape:
    """Tests for MoveShape."""

    def test_move_to_front(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test moving a shape to the front."""
        a, b, c = composition.shapes
        result = apply_edit(composition, MoveShape(c.id, 0), registry)
        assert [s.id for s in result] == [c.id, a.id, b.id]

    def test_move_clamps_index(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test out-of-range targets are clamped."""
        a, b, c = composition.shapes
        result = apply_edit(composition, MoveShape(a.id, 99), registry)
        assert [s.id for s in result] == [b.id, c.id, a.id]

    def test_move_missing(self, composition: Composition, registry: ShapeRegistry) -> None:
        """Test moving a missing shape raises."""
        with pytest.raises(ShapeNotFoundError):
            apply_edit(composition, MoveShape("missing", 0), registry)


def test_unsupported_edit(composition: Composition, registry: ShapeRegistry) -> None:
    """Test unknown edit objects are rejected."""
    with pytest.raises(TypeError):
        apply_edit(composition, "delete everything", registry)  # type: ignore[arg-type]


def test_allocator_shared(composition: Composition, registry: ShapeRegistry) -> None:
    """Test ids stay unique across the whole editing session."""
    result = apply_edit(composition, AddShape("circle"), registry)
    all_ids = [pid for shape in result for pid in shape.point_ids]
    assert len(all_ids) == len(set(all_ids))
    assert result.allocator is composition.allocator
