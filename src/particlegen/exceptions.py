"""Exception hierarchy for ParticleGen."""


class ParticleGenError(Exception):
    """Base exception for all ParticleGen errors."""

    pass


class ShapeError(ParticleGenError):
    """Errors related to shapes and their parameters."""

    pass


class InvalidParameterError(ShapeError):
    """A shape parameter or tolerance is outside its domain."""

    def __init__(self, shape_type: str, parameter: str, reason: str) -> None:
        self.shape_type = shape_type
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid parameter '{parameter}' for '{shape_type}': {reason}")


class ShapeNotFoundError(ShapeError):
    """Requested shape is not part of the composition."""

    def __init__(self, shape_id: str) -> None:
        self.shape_id = shape_id
        super().__init__(f"Shape '{shape_id}' not found in composition")


class DecodeError(ParticleGenError):
    """Errors raised while decoding an import key."""

    pass


class CorruptTokenError(DecodeError):
    """The token cannot be decompressed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Corrupt import key: {reason}")


class MalformedPayloadError(DecodeError):
    """The decompressed text is not a valid shape record list."""

    def __init__(self, reason: str, index: int | None = None) -> None:
        self.reason = reason
        self.index = index
        where = f" (shape #{index})" if index is not None else ""
        super().__init__(f"Malformed import payload{where}: {reason}")


class UnknownShapeTypeError(DecodeError):
    """A record names a shape type that has no registered factory."""

    def __init__(self, shape_type: str, index: int | None = None) -> None:
        self.shape_type = shape_type
        self.index = index
        where = f" (shape #{index})" if index is not None else ""
        super().__init__(f"Unknown shape type '{shape_type}'{where}")


class ExportError(ParticleGenError):
    """Error writing or reading an exported function file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to access '{path}': {reason}")
