"""Function file exporter.

This module renders deduplicated points as Minecraft particle commands.
The first line of every exported file carries the import key, so the
composition can be restored from the file alone:

    # [ImportKey]: <token>
    # circle_1
    particle end_rod ^0 ^ ^-5 0 0 0 0 1
    ...
"""

from collections.abc import Sequence
from pathlib import Path

from particlegen.config import ExportConfig
from particlegen.core.codec import encode
from particlegen.core.dedupe import group_by_shape
from particlegen.core.numeric import format_coordinate, to_minimal_decimal_string
from particlegen.domain import Composition, ProcessedPoint
from particlegen.exceptions import ExportError

IMPORT_KEY_PREFIX = "# [ImportKey]:"


def import_key_line(token: str) -> str:
    """Return the comment line that embeds an import key."""
    return f"{IMPORT_KEY_PREFIX} {token}"


class FunctionExporter:
    """Renders and writes function files.

    Example:
        exporter = FunctionExporter(ExportConfig(particle="flame"))
        text = exporter.render(result.points, encode(composition))
        exporter.write(text, Path("ring.mcfunction"))
    """

    def __init__(self, config: ExportConfig | None = None) -> None:
        """Initialize the exporter.

        Args:
            config: Export settings (defaults if None)
        """
        self.config = config or ExportConfig()

    def command(self, x: float, y: float) -> str:
        """Render the placement command for one point.

        Coordinates are rounded to the configured precision and written
        as local offsets: x to the left axis, y to the forward axis.
        """
        precision = self.config.precision
        return (
            f"particle {self.config.particle.strip()} "
            f"^{format_coordinate(x, precision)} ^ ^{format_coordinate(y, precision)} "
            f"0 0 0 {to_minimal_decimal_string(self.config.speed)} 1"
        )

    def render_lines(self, points: Sequence[ProcessedPoint], token: str) -> list[str]:
        """Render the lines of a function file.

        Args:
            points: Deduplicated export points
            token: Import key of the composition

        Returns:
            Lines without trailing newlines
        """
        lines = [import_key_line(token)]
        for name, group in group_by_shape(points):
            if self.config.name_comments:
                lines.append(f"# {name}")
            lines.extend(self.command(p.x, p.y) for p in group)
        return lines

    def render(self, points: Sequence[ProcessedPoint], token: str) -> str:
        """Render a function file as a single string."""
        return "\n".join(self.render_lines(points, token))

    def write(self, content: str, path: Path) -> Path:
        """Write rendered content to a file.

        If path is a directory, the configured file name is used inside it.

        Raises:
            ExportError: If the file cannot be written
        """
        target = path / self.config.filename if path.is_dir() else path
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExportError(str(target), str(e)) from e
        return target

    def export(
        self,
        composition: Composition,
        points: Sequence[ProcessedPoint],
        path: Path,
    ) -> Path:
        """Encode, render and write a composition in one step.

        Args:
            composition: Composition to embed as import key
            points: Deduplicated export points of the composition
            path: Output file or directory

        Returns:
            Path of the written file
        """
        return self.write(self.render(points, encode(composition)), path)
