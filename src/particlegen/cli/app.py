"""CLI application entry point for particlegen.

This module provides the main CLI interface using Typer.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from particlegen import __version__
from particlegen.cli.output import (
    console,
    print_composition,
    print_error,
    print_header,
    print_step,
    print_success,
    print_variants,
    print_warning,
)
from particlegen.config import (
    DedupeConfig,
    ExportConfig,
    LoggingConfig,
    ParticleGenSettings,
)
from particlegen.core import (
    CompositionProcessor,
    build_composition,
    decode,
    default_registry,
)
from particlegen.domain import Composition
from particlegen.exceptions import DecodeError, ParticleGenError
from particlegen.io import FunctionExporter, FunctionImporter, find_import_key
from particlegen.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="particlegen",
    help="Compose parametric shapes into particle placement commands.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ParticleGen[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compose parametric shapes into particle placement commands."""


def parse_shape_spec(spec: str) -> tuple[str, dict[str, Any]]:
    """Parse a shape argument of the form TYPE[:NAME=VALUE,...].

    Values are passed on as strings; the shape's parameter model coerces
    and validates them.

    Args:
        spec: Shape argument, e.g. "circle:count=24,radius=3"

    Returns:
        Tuple of (type tag, parameter overrides)

    Raises:
        typer.BadParameter: If the argument is not well formed
    """
    tag, _, rest = spec.partition(":")
    tag = tag.strip().lower()
    if not tag:
        raise typer.BadParameter(f"Missing shape type in '{spec}'")

    params: dict[str, Any] = {}
    for item in filter(None, (part.strip() for part in rest.split(","))):
        name, sep, value = item.partition("=")
        if not sep or not name.strip() or not value.strip():
            raise typer.BadParameter(f"Expected NAME=VALUE, got '{item}' in '{spec}'")
        params[name.strip()] = value.strip()
    return tag, params


def _build_settings(
    tolerance: float,
    precision: int,
    particle: str,
    speed: float,
    name_comments: bool,
    log_file: Path | None,
    log_level: str,
) -> ParticleGenSettings:
    try:
        return ParticleGenSettings(
            export=ExportConfig(
                particle=particle,
                speed=speed,
                precision=precision,
                name_comments=name_comments,
            ),
            dedupe=DedupeConfig(tolerance=tolerance),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


def _export(
    composition: Composition,
    settings: ParticleGenSettings,
    output: Path | None,
    quiet: bool,
    verbose: bool,
    decode_errors: Sequence[DecodeError] = (),
) -> None:
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=not verbose,
    )
    processor = CompositionProcessor(settings, logger=logger)
    for error in decode_errors:
        processor.export_logger.log_decode_error(error, getattr(error, "index", None))
    result = processor.process(composition)

    exporter = FunctionExporter(settings.export)
    target = exporter.export(composition, result.points, output or Path(settings.export.filename))
    processor.export_logger.log_export(target, len(result.points))

    if not quiet:
        print_success(
            output_path=str(target),
            shapes=len(composition),
            exported=len(result.points),
            merged=processor.stats.merged_points,
        )


ToleranceOption = Annotated[
    float,
    typer.Option(
        "--tolerance",
        "-t",
        help="Merge points closer than this distance (0 = exact duplicates only)",
        min=0.0,
        max=0.5,
    ),
]
PrecisionOption = Annotated[
    int,
    typer.Option("--precision", "-p", help="Decimal digits of exported coordinates", min=1, max=5),
]
ParticleOption = Annotated[str, typer.Option("--particle", help="Particle id")]
SpeedOption = Annotated[
    float, typer.Option("--speed", help="Particle speed", min=0.0, max=1.0)
]
NameCommentsOption = Annotated[
    bool,
    typer.Option(
        "--name-comments/--no-name-comments",
        help="Separate commands with a comment per shape",
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output file or directory (default: particle.mcfunction)"),
]
LogFileOption = Annotated[
    Path | None, typer.Option("--log-file", help="Write detailed logs to file")
]
LogLevelOption = Annotated[
    str, typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose console output")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Minimal console output")]


@app.command()
def generate(
    shapes: Annotated[
        list[str],
        typer.Argument(
            help="Shapes as TYPE[:NAME=VALUE,...], e.g. circle:count=24,radius=3",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    tolerance: ToleranceOption = 0.0,
    precision: PrecisionOption = 5,
    particle: ParticleOption = "end_rod",
    speed: SpeedOption = 0.0,
    name_comments: NameCommentsOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Build a composition from shape arguments and export it.

    Example:
        particlegen generate circle:count=24,radius=3 line:end_x=3 -t 0.05
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    records = [parse_shape_spec(spec) for spec in shapes]

    if not quiet:
        print_header(__version__)
        print_step("Building shapes")

    try:
        settings = _build_settings(
            tolerance, precision, particle, speed, name_comments, log_file, log_level
        )
        composition = build_composition(default_registry(), records)
        if not quiet:
            print_composition(composition)
            print_step("Exporting")
        _export(composition, settings, output, quiet, verbose)
    except ParticleGenError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def inspect(
    source: Annotated[
        str,
        typer.Argument(help="Function file with an import key, or a bare import key"),
    ],
) -> None:
    """Show the shapes stored in an import key."""
    registry = default_registry()
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # bare tokens can exceed the file name length limit
        is_file = False

    try:
        if is_file:
            composition = FunctionImporter(registry).load(path)
        else:
            token = find_import_key(source) or source
            composition = decode(token, registry)
    except ParticleGenError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_composition(composition)


@app.command()
def reexport(
    source: Annotated[
        Path,
        typer.Argument(help="Previously exported function file", show_default=False),
    ],
    output: OutputOption = None,
    tolerance: ToleranceOption = 0.0,
    precision: PrecisionOption = 5,
    particle: ParticleOption = "end_rod",
    speed: SpeedOption = 0.0,
    name_comments: NameCommentsOption = True,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Restore the composition of a function file and export it again.

    Shapes that cannot be restored are skipped with a warning. The source
    file is overwritten unless --output is given.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not source.is_file():
        print_error(
            f"Input file not found: {source}",
            details=f"The file '{source}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Restoring shapes")

    try:
        settings = _build_settings(
            tolerance, precision, particle, speed, name_comments, log_file, log_level
        )
        composition, errors = FunctionImporter(default_registry()).load_partial(source)
        for error in errors:
            print_warning(str(error))
        if not quiet:
            print_composition(composition)
            print_step("Exporting")
        _export(composition, settings, output or source, quiet, verbose, errors)
    except ParticleGenError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def shapes() -> None:
    """List the available shape types and their parameters."""
    print_variants(default_registry())


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
