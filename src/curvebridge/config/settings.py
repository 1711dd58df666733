"""Configuration settings for Curvebridge."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class GeometryConfig(BaseModel):
    """Configuration for the geometry engine.

    Curves are sampled for the boolean operation and rebuilt afterwards;
    these settings trade accuracy of intersections against speed.
    """

    curve_steps: int = Field(
        default=64,
        ge=4,
        le=1024,
        description="Number of uniform samples per cubic segment during polygonization",
    )
    match_precision: int = Field(
        default=9,
        ge=3,
        le=12,
        description="Decimal places used when matching result vertices to curve samples",
    )
    min_ring_area: float = Field(
        default=0.0,
        ge=0.0,
        description="Result rings with a smaller absolute area are dropped",
    )


class ViewConfig(BaseModel):
    """Host view settings shared with the engine view."""

    view_transform: tuple[float, float, float, float, float, float] = Field(
        default=(1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
        description="Host view transform (a, b, c, d, tx, ty)",
    )
    device_pixel_scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Device pixels per host pixel",
    )
    width: float = Field(
        default=1.0,
        ge=0.0,
        description="Host view width in host pixels",
    )
    height: float = Field(
        default=1.0,
        ge=0.0,
        description="Host view height in host pixels",
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

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


class CurveBridgeSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CurveBridgeSettings:
    """Get default application settings."""
    return CurveBridgeSettings()
