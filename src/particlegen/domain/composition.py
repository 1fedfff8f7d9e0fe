"""Composition: the ordered set of shapes a user has authored."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from particlegen.domain.point import PointIdAllocator
from particlegen.domain.shape import Shape


@dataclass(frozen=True)
class Composition:
    """An immutable, ordered sequence of shapes.

    Shape order is the export order. The allocator is shared by every
    composition derived from this one through edits, so point ids stay
    unique for the lifetime of the authoring session.

    Attributes:
        shapes: Shapes in composition order
        allocator: Point id allocator used when regenerating point sets
    """

    shapes: tuple[Shape, ...] = ()
    allocator: PointIdAllocator = field(
        default_factory=PointIdAllocator, compare=False, repr=False
    )

    def __len__(self) -> int:
        return len(self.shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def index_of(self, shape_id: str) -> int | None:
        """Return the position of a shape, or None if absent."""
        for i, shape in enumerate(self.shapes):
            if shape.id == shape_id:
                return i
        return None

    def get(self, shape_id: str) -> Shape | None:
        """Return the shape with the given id, or None if absent."""
        idx = self.index_of(shape_id)
        return self.shapes[idx] if idx is not None else None

    def selected_shapes(self) -> list[Shape]:
        """Return the currently selected shapes in composition order."""
        return [s for s in self.shapes if s.is_selected]

    def with_shapes(self, shapes: tuple[Shape, ...]) -> "Composition":
        """Return a composition with new shapes and the same allocator."""
        return replace(self, shapes=shapes)

    @property
    def point_count(self) -> int:
        """Total number of generated points before duplicate removal."""
        return sum(len(s.point_set) for s in self.shapes)
