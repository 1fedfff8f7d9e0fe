"""Core algorithms for particlegen.

This module contains the core algorithms for:

- Numeric formatting (half-away rounding, minimal decimal strings)
- Shape variants and point generation
- Composition editing
- Cross-shape duplicate point removal
- Import key encoding and decoding

All functions are designed to be:
- Pure (aside from point id allocation)
- Deterministic: recomputing from scratch always gives the same result
- Synchronous; nothing here performs I/O

Key functions:
- round_half_away: Round to n decimals, halves away from zero
- to_minimal_decimal_string: Shortest fixed-point rendering of a number
- apply_edit: Reduce a composition by one edit
- dedupe: Merge points within a tolerance
- encode / decode: Import key round trip

Key classes:
- ShapeRegistry: Maps type tags to shape variants and builds shapes
- CompositionProcessor: Memoized duplicate removal
"""

from particlegen.core.codec import decode, decode_partial, encode
from particlegen.core.dedupe import (
    ShapeContext,
    as_entries,
    collect_points,
    dedupe,
    group_by_shape,
)
from particlegen.core.editor import (
    AddShape,
    DuplicateShapes,
    MoveShape,
    RemoveShapes,
    SelectShapes,
    UpdateParameters,
    apply_edit,
    build_composition,
)
from particlegen.core.numeric import (
    format_coordinate,
    round_half_away,
    to_minimal_decimal_string,
)
from particlegen.core.processor import (
    CompositionProcessor,
    ProcessedComposition,
    composition_fingerprint,
)
from particlegen.core.shapes import (
    ShapeParameters,
    ShapeRegistry,
    ShapeVariant,
    default_registry,
)

__all__ = [
    # Edits
    "AddShape",
    # Processor classes
    "CompositionProcessor",
    "DuplicateShapes",
    "MoveShape",
    "ProcessedComposition",
    "RemoveShapes",
    "SelectShapes",
    # Dedupe
    "ShapeContext",
    # Shape classes
    "ShapeParameters",
    "ShapeRegistry",
    "ShapeVariant",
    "UpdateParameters",
    "apply_edit",
    "as_entries",
    "build_composition",
    "collect_points",
    "composition_fingerprint",
    # Codec
    "decode",
    "decode_partial",
    "dedupe",
    "default_registry",
    "encode",
    # Numeric functions
    "format_coordinate",
    "group_by_shape",
    "round_half_away",
    "to_minimal_decimal_string",
]
