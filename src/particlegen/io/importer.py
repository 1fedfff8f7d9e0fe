"""Function file importer.

Finds the import key line in an exported file and rebuilds the
composition from it. The rest of the file is ignored.
"""

from pathlib import Path

from particlegen.core.codec import decode, decode_partial
from particlegen.core.shapes import ShapeRegistry
from particlegen.domain import Composition
from particlegen.exceptions import DecodeError, ExportError
from particlegen.io.exporter import IMPORT_KEY_PREFIX


def find_import_key(text: str) -> str | None:
    """Return the token of the first import key line, or None.

    Args:
        text: Contents of a function file (or any free-form text)

    Returns:
        Token without the comment prefix, or None if no line carries one
    """
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(IMPORT_KEY_PREFIX):
            token = stripped[len(IMPORT_KEY_PREFIX):].strip()
            if token:
                return token
    return None


class FunctionImporter:
    """Restores compositions from exported function files.

    Example:
        importer = FunctionImporter(default_registry())
        composition = importer.load(Path("particle.mcfunction"))
    """

    def __init__(self, registry: ShapeRegistry) -> None:
        self._registry = registry

    def read_token(self, path: Path) -> str:
        """Read a file and return its import key.

        Raises:
            ExportError: If the file cannot be read or has no import key
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExportError(str(path), str(e)) from e

        token = find_import_key(text)
        if token is None:
            raise ExportError(str(path), "no import key line found")
        return token

    def load(self, path: Path) -> Composition:
        """Restore the composition embedded in a file.

        Raises:
            ExportError: If the file cannot be read or has no import key
            DecodeError: If the import key cannot be decoded
        """
        return decode(self.read_token(path), self._registry)

    def load_partial(self, path: Path) -> tuple[Composition, list[DecodeError]]:
        """Restore the valid shapes of a file, collecting per-shape errors.

        Raises:
            ExportError: If the file cannot be read or has no import key
            DecodeError: If the import key as a whole cannot be decoded
        """
        return decode_partial(self.read_token(path), self._registry)
