"""Cross-shape duplicate point removal.

Points of all shapes are clustered greedily in one pass: a point closer
than the tolerance to an already accepted point is folded into the first
such point, otherwise it is accepted. The accepted point keeps its own
position; merging only ORs the selection flag. Worst case is quadratic
in the number of points, which is fine for compositions of a few hundred
points and keeps the tie-breaking fully deterministic.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from particlegen.domain import Composition, Point, ProcessedPoint
from particlegen.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShapeContext:
    """Per-shape information attached to every point fed to dedupe().

    Attributes:
        selected: Whether the owning shape is selected
        is_manipulate: Whether the owning shape is an auxiliary editing shape
        shape_name: Display name of the owning shape
    """

    selected: bool
    is_manipulate: bool
    shape_name: str


DedupeEntry = tuple[Point, ShapeContext]


def collect_points(composition: Composition) -> list[DedupeEntry]:
    """Flatten a composition into dedupe() input.

    Order is composition order, then point order within each shape.
    """
    entries: list[DedupeEntry] = []
    for shape in composition:
        context = ShapeContext(
            selected=shape.is_selected,
            is_manipulate=shape.is_manipulate,
            shape_name=shape.name,
        )
        entries.extend((point, context) for point in shape.point_set)
    return entries


def check_tolerance(tolerance: float) -> None:
    """Validate a merge tolerance.

    Raises:
        InvalidParameterError: If tolerance is negative or not finite
    """
    if not math.isfinite(tolerance) or tolerance < 0:
        raise InvalidParameterError(
            "dedupe", "tolerance", f"must be a finite number >= 0, got {tolerance}"
        )


def dedupe(entries: Iterable[DedupeEntry], tolerance: float) -> list[ProcessedPoint]:
    """Merge points that lie within tolerance of an earlier accepted point.

    Points of manipulate shapes are skipped entirely: they are never
    accepted and never absorb another point. Distances are compared with
    <=, so tolerance 0 merges exact duplicates only and points exactly
    tolerance apart are merged.

    Args:
        entries: (point, context) pairs in processing order
        tolerance: Maximum merge distance (>= 0)

    Returns:
        Accepted points in the order they were first accepted

    Raises:
        InvalidParameterError: If tolerance is negative

    Examples:
        >>> ctx = ShapeContext(selected=False, is_manipulate=False, shape_name="a")
        >>> pts = [(Point(0, 0.0, 0.0), ctx), (Point(1, 0.04, 0.0), ctx)]
        >>> [p.position for p in dedupe(pts, 0.05)]
        [(0.0, 0.0)]
    """
    check_tolerance(tolerance)

    positions: list[tuple[float, float]] = []
    selected: list[bool] = []
    names: list[str] = []
    candidates = 0

    for point, context in entries:
        if context.is_manipulate:
            continue
        candidates += 1
        candidate = point.to_tuple()

        for idx, accepted in enumerate(positions):
            if math.dist(candidate, accepted) <= tolerance:
                selected[idx] = selected[idx] or context.selected
                break
        else:
            positions.append(candidate)
            selected.append(context.selected)
            names.append(context.shape_name)

    logger.debug(
        "Deduplicated %d points to %d (tolerance=%s)", candidates, len(positions), tolerance
    )
    return [
        ProcessedPoint(position=pos, selected=sel, source_shape_name=name)
        for pos, sel, name in zip(positions, selected, names)
    ]


def as_entries(points: Sequence[ProcessedPoint]) -> list[DedupeEntry]:
    """Turn dedupe() output back into dedupe() input.

    Each point gets its index as id and a context carrying its own flag
    and source shape name.
    """
    return [
        (
            Point(idx, p.x, p.y),
            ShapeContext(selected=p.selected, is_manipulate=False, shape_name=p.source_shape_name),
        )
        for idx, p in enumerate(points)
    ]


def manipulate_points(entries: Iterable[DedupeEntry]) -> list[ProcessedPoint]:
    """Return the points of manipulate shapes, unmerged, for on-screen accounting."""
    return [
        ProcessedPoint(
            position=point.to_tuple(),
            selected=context.selected,
            source_shape_name=context.shape_name,
        )
        for point, context in entries
        if context.is_manipulate
    ]


def group_by_shape(points: Iterable[ProcessedPoint]) -> list[tuple[str, list[ProcessedPoint]]]:
    """Group points by source shape name, in order of first appearance.

    Shapes whose points were all merged into earlier shapes do not appear.
    """
    groups: dict[str, list[ProcessedPoint]] = {}
    for point in points:
        groups.setdefault(point.source_shape_name, []).append(point)
    return list(groups.items())
