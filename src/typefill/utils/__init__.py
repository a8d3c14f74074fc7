"""Utility functions for typefill.

This module provides utility functions including:

- Logging setup and configuration
- Layout statistics collection
"""

from typefill.utils.logging import (
    LayoutLogger,
    LayoutStats,
    configure_logging,
)

__all__ = [
    "LayoutLogger",
    "LayoutStats",
    "configure_logging",
]
