"""Configuration management for particlegen.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ExportConfig: Function file export settings
- DedupeConfig: Duplicate point removal settings
- LoggingConfig: Logging settings
- ParticleGenSettings: Main application settings
"""

from particlegen.config.settings import (
    DedupeConfig,
    ExportConfig,
    LoggingConfig,
    ParticleGenSettings,
    get_default_settings,
)

__all__ = [
    "DedupeConfig",
    "ExportConfig",
    "LoggingConfig",
    "ParticleGenSettings",
    "get_default_settings",
]
