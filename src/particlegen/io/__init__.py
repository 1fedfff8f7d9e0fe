"""Function file I/O layer for particlegen.

This module writes exported particle command files and reads the import
key back out of them.

Key responsibilities:
- Render deduplicated points as particle commands
- Embed the composition's import key as the first line
- Locate and decode the import key of an existing file

Key classes:
- FunctionExporter: Render and write function files
- FunctionImporter: Restore compositions from function files
"""

from particlegen.io.exporter import IMPORT_KEY_PREFIX, FunctionExporter, import_key_line
from particlegen.io.importer import FunctionImporter, find_import_key

__all__ = [
    "IMPORT_KEY_PREFIX",
    "FunctionExporter",
    "FunctionImporter",
    "find_import_key",
    "import_key_line",
]
