"""Configuration settings for ParticleGen."""

from pathlib import Path

from pydantic import BaseModel, Field


class ExportConfig(BaseModel):
    """Configuration for the exported function file."""

    particle: str = Field(
        default="end_rod",
        min_length=1,
        description="Particle id used in every placement command",
    )
    speed: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Particle speed written into every command",
    )
    precision: int = Field(
        default=5,
        ge=1,
        le=5,
        description="Decimal digits kept for exported coordinates",
    )
    name_comments: bool = Field(
        default=True,
        description="Separate exported commands with a '# <shape name>' comment per shape",
    )
    filename: str = Field(
        default="particle.mcfunction",
        description="Default output file name",
    )


class DedupeConfig(BaseModel):
    """Configuration for duplicate point removal."""

    tolerance: float = Field(
        default=0.0,
        ge=0.0,
        le=0.5,
        description="Points closer than this distance are merged (0 = exact duplicates only)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ParticleGenSettings(BaseModel):
    """Main application settings."""

    export: ExportConfig = Field(default_factory=ExportConfig)
    dedupe: DedupeConfig = Field(default_factory=DedupeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ParticleGenSettings:
    """Get default application settings."""
    return ParticleGenSettings()
