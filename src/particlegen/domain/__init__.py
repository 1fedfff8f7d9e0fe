"""Domain models for particlegen.

This module contains the core domain models representing points, shapes
and compositions. All models are designed to be:

- Immutable (frozen dataclasses); edits produce new values
- Independent of the shape variants that generate point sets
- Independent of the token and file formats

Key classes:
- Point: A generated point with a transient identity
- PointIdAllocator: Monotonic point id source
- ProcessedPoint: A point after duplicate removal
- ParameterMetadata: Display label and description of a parameter
- Shape: A parametric shape and its generated points
- Composition: An ordered sequence of shapes
"""

from particlegen.domain.composition import Composition
from particlegen.domain.point import Point, PointIdAllocator, ProcessedPoint
from particlegen.domain.shape import ParameterMetadata, ParameterValue, Shape

__all__: list[str] = [
    # Points
    "Point",
    "PointIdAllocator",
    "ProcessedPoint",
    # Shapes
    "ParameterMetadata",
    "ParameterValue",
    "Shape",
    "Composition",
]
