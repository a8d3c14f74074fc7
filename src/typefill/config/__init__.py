"""Configuration management for typefill.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RegionConfig: Threshold, target class and buffer settings
- LayoutConfig: Output size, font size and line spacing
- PackingConfig: Justification and whitespace policy
- RenderConfig: Renderer colours and debug overlays
- LoggingConfig: Logging settings
- TypefillSettings: Main application settings
"""

from typefill.config.settings import (
    LayoutConfig,
    LoggingConfig,
    PackingConfig,
    RegionConfig,
    RenderConfig,
    TypefillSettings,
    get_default_settings,
)

__all__ = [
    "LayoutConfig",
    "LoggingConfig",
    "PackingConfig",
    "RegionConfig",
    "RenderConfig",
    "TypefillSettings",
    "get_default_settings",
]
