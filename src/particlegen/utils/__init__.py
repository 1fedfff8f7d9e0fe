"""Utility functions for particlegen.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics
"""

from particlegen.utils.logging import (
    ExportLogger,
    ExportStats,
    configure_logging,
)

__all__ = [
    "ExportLogger",
    "ExportStats",
    "configure_logging",
]
