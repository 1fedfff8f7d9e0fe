"""Import key encoding and decoding.

A composition is persisted as its ordered shape records only (type and
parameters). The records are written as compact JSON and compressed with
lz-string into the URI-safe alphabet A-Za-z0-9+-$, so the token can sit on
a single comment line of the exported file.

Payload layout (version 1):
    {"version": 1, "shapes": [{"type": "circle", "parameters": {...}}, ...]}

A bare JSON list of records is read as version 0.
"""

import json
import logging
from typing import Any

from lzstring import LZString
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from particlegen.core.editor import next_shape_name
from particlegen.core.shapes import ShapeRegistry
from particlegen.domain import Composition, PointIdAllocator
from particlegen.exceptions import (
    CorruptTokenError,
    DecodeError,
    InvalidParameterError,
    MalformedPayloadError,
    UnknownShapeTypeError,
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_lz = LZString()


class ShapeRecord(BaseModel):
    """Persisted form of one shape."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(min_length=1)
    # strict so JSON booleans are not read as 0 and 1
    parameters: dict[str, StrictInt | StrictFloat | StrictStr] = Field(default_factory=dict)


class TokenPayload(BaseModel):
    """Persisted form of a composition."""

    model_config = ConfigDict(extra="ignore")

    version: int = Field(ge=0)
    shapes: list[Any]


def encode(composition: Composition) -> str:
    """Encode a composition into an import key.

    Args:
        composition: Composition to encode

    Returns:
        URI-safe token
    """
    payload = {
        "version": FORMAT_VERSION,
        "shapes": [shape.to_record() for shape in composition],
    }
    text = json.dumps(payload, separators=(",", ":"), allow_nan=False)
    token = _lz.compressToEncodedURIComponent(text)
    logger.debug("Encoded %d shapes into %d characters", len(composition), len(token))
    return token


def _decompress(token: str) -> str:
    cleaned = token.strip()
    if not cleaned:
        raise CorruptTokenError("token is empty")
    try:
        text = _lz.decompressFromEncodedURIComponent(cleaned)
    except Exception as e:
        raise CorruptTokenError(f"cannot decompress token ({type(e).__name__})") from e
    if not text:
        raise CorruptTokenError("token decompresses to nothing")
    return text


def _parse_payload(text: str) -> TokenPayload:
    try:
        data: Any = json.loads(text)
    except ValueError as e:
        raise MalformedPayloadError(f"not JSON: {e}") from e
    except RecursionError as e:
        raise MalformedPayloadError("JSON is nested too deeply") from e

    if isinstance(data, list):
        data = {"version": 0, "shapes": data}

    try:
        payload = TokenPayload.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise MalformedPayloadError(f"{where}: {first['msg']}" if where else first["msg"]) from e

    if payload.version > FORMAT_VERSION:
        raise MalformedPayloadError(f"unsupported format version {payload.version}")
    return payload


def _build(
    payload: TokenPayload,
    registry: ShapeRegistry,
    allocator: PointIdAllocator | None,
    skip_invalid: bool,
) -> tuple[Composition, list[DecodeError]]:
    composition = Composition(allocator=allocator or PointIdAllocator())
    shapes = []
    errors: list[DecodeError] = []

    for index, raw in enumerate(payload.shapes):
        try:
            try:
                record = ShapeRecord.model_validate(raw)
            except ValidationError as e:
                first = e.errors()[0]
                raise MalformedPayloadError(first["msg"], index=index) from e
            if record.type not in registry:
                raise UnknownShapeTypeError(record.type, index=index)
            try:
                shape = registry.create(
                    record.type,
                    record.parameters,
                    composition.allocator,
                    name=next_shape_name(composition.with_shapes(tuple(shapes)), record.type),
                )
            except InvalidParameterError as e:
                raise MalformedPayloadError(str(e), index=index) from e
        except DecodeError as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping shape #%d: %s", index, e)
            errors.append(e)
            continue
        shapes.append(shape)

    return composition.with_shapes(tuple(shapes)), errors


def decode(
    token: str,
    registry: ShapeRegistry,
    allocator: PointIdAllocator | None = None,
) -> Composition:
    """Decode an import key into a composition.

    Shapes get fresh ids, names and point sets; only types and parameters
    come from the token.

    Args:
        token: Token produced by encode()
        registry: Registry holding the shape variants
        allocator: Point id allocator for the new composition

    Returns:
        Reconstructed composition

    Raises:
        CorruptTokenError: If the token cannot be decompressed
        MalformedPayloadError: If the payload is not a valid record list
        UnknownShapeTypeError: If a record names an unregistered shape type
    """
    payload = _parse_payload(_decompress(token))
    composition, _ = _build(payload, registry, allocator, skip_invalid=False)
    logger.debug("Decoded %d shapes", len(composition))
    return composition


def decode_partial(
    token: str,
    registry: ShapeRegistry,
    allocator: PointIdAllocator | None = None,
) -> tuple[Composition, list[DecodeError]]:
    """Decode an import key, skipping shape records that cannot be built.

    Args:
        token: Token produced by encode()
        registry: Registry holding the shape variants
        allocator: Point id allocator for the new composition

    Returns:
        Tuple of (composition of the valid shapes, per-record errors)

    Raises:
        CorruptTokenError: If the token cannot be decompressed
        MalformedPayloadError: If the payload as a whole is not a record list
    """
    payload = _parse_payload(_decompress(token))
    return _build(payload, registry, allocator, skip_invalid=True)
