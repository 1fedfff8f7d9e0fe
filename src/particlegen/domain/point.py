"""Point types and point identity allocation.

This module defines the value types flowing out of shape generation and
duplicate removal:
- Point: A generated 2D point with a transient identity
- PointIdAllocator: Monotonic source of point identities
- ProcessedPoint: A point after cross-shape duplicate removal
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A generated point in 2D space.

    Immutable. The id gives the point a stable identity for the lifetime of
    the point set that produced it and carries no geometric meaning.

    Attributes:
        id: Identity allocated when the point was generated
        x: X coordinate
        y: Y coordinate
    """

    id: int
    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


class PointIdAllocator:
    """Monotonic counter handing out point ids.

    Ids are strictly increasing and never reused by the same allocator.
    A regenerated point set always receives fresh ids; the ids of the
    replaced set are abandoned.

    Example:
        allocator = PointIdAllocator()
        allocator.next()  # 0
        allocator.next()  # 1
    """

    def __init__(self, start: int = 0) -> None:
        self._next_id = start

    def next(self) -> int:
        """Return the next unused id."""
        value = self._next_id
        self._next_id += 1
        return value

    @property
    def issued(self) -> int:
        """Number of ids handed out so far (or the next id to be issued)."""
        return self._next_id

    def __repr__(self) -> str:
        return f"PointIdAllocator(next={self._next_id})"


@dataclass(frozen=True, slots=True)
class ProcessedPoint:
    """Output unit of duplicate removal.

    Has no identity of its own and is never serialized.

    Attributes:
        position: (x, y) coordinates of the first accepted point of a cluster
        selected: True if any merged point came from a selected shape
        source_shape_name: Display name of the shape that contributed the position
    """

    position: tuple[float, float]
    selected: bool
    source_shape_name: str

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]
