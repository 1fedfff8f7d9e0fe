"""Logging utilities for ParticleGen."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging() call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ExportStats:
    """Statistics from processing a composition."""

    shape_count: int = 0
    raw_points: int = 0
    exported_points: int = 0
    manipulate_points: int = 0
    decode_errors: list[tuple[int | None, str]] = field(default_factory=list)

    @property
    def merged_points(self) -> int:
        """Number of points folded into earlier points."""
        return max(0, self.raw_points - self.manipulate_points - self.exported_points)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Handlers installed by a previous call are removed and closed first,
    so repeated calls never stack output.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("particlegen")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ExportLogger:
    """Logger for tracking composition processing and export statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ExportStats()

    def log_processed(
        self,
        shape_count: int,
        raw_points: int,
        exported_points: int,
        manipulate_points: int,
        cached: bool,
    ) -> None:
        """Log a finished duplicate removal pass."""
        self._stats.shape_count = shape_count
        self._stats.raw_points = raw_points
        self._stats.exported_points = exported_points
        self._stats.manipulate_points = manipulate_points
        self._logger.info(
            "Composition processed",
            shapes=shape_count,
            raw_points=raw_points,
            exported=exported_points,
            merged=self._stats.merged_points,
            manipulate=manipulate_points,
            cached=cached,
        )

    def log_decode_error(self, error: Exception, index: int | None = None) -> None:
        """Log a shape record that could not be imported."""
        self._logger.warning(
            "Shape import failed",
            index=index,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.decode_errors.append((index, str(error)))

    def log_export(self, path: Path, lines: int) -> None:
        """Log a written function file."""
        self._logger.info("Function file written", path=str(path), lines=lines)

    @property
    def stats(self) -> ExportStats:
        """Get current statistics."""
        return self._stats
