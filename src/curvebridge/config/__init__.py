"""Configuration management for curvebridge.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, scene files or defaults.

Key classes:
- GeometryConfig: Geometry engine settings
- ViewConfig: Host view settings mirrored into the engine view
- LoggingConfig: Logging settings
- CurveBridgeSettings: Main application settings
"""

from curvebridge.config.settings import (
    CurveBridgeSettings,
    GeometryConfig,
    LoggingConfig,
    ViewConfig,
    get_default_settings,
)

__all__ = [
    "CurveBridgeSettings",
    "GeometryConfig",
    "LoggingConfig",
    "ViewConfig",
    "get_default_settings",
]
