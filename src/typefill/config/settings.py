"""Configuration settings for Typefill."""

from pathlib import Path

from pydantic import BaseModel, Field

from typefill.domain.region import ToneClass


class RegionConfig(BaseModel):
    """Configuration for region extraction and buffering."""

    threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Tone threshold separating dark from light cells",
    )
    target: ToneClass = Field(
        default=ToneClass.DARK,
        description="Tonal class that receives text",
    )
    buffer: float = Field(
        default=0.0,
        description="Signed offset applied to the target area (negative shrinks)",
    )
    cell_size: float = Field(
        default=4.0,
        gt=0.0,
        description="Raster cell size in output units",
    )


class LayoutConfig(BaseModel):
    """Configuration for output geometry and slot generation."""

    width: float = Field(
        default=800.0,
        gt=0.0,
        description="Output width in output units",
    )
    height: float = Field(
        default=800.0,
        gt=0.0,
        description="Output height in output units",
    )
    font_size: float = Field(
        default=12.0,
        gt=0.0,
        description="Font size in output units",
    )
    line_height: float | None = Field(
        default=None,
        gt=0.0,
        description="Slot height and scanline spacing (None = font size)",
    )
    row_precision: int = Field(
        default=3,
        ge=0,
        le=9,
        description="Decimals kept when comparing slot tops for reading order",
    )

    @property
    def effective_line_height(self) -> float:
        """Line height, falling back to the font size."""
        return self.line_height if self.line_height is not None else self.font_size


class PackingConfig(BaseModel):
    """Configuration for character packing and justification."""

    justify_spaces: bool = Field(
        default=True,
        description="Give spaces a share of the justification width",
    )
    collapse_whitespace: bool = Field(
        default=True,
        description="Replace runs of whitespace (including newlines) with one space",
    )


class RenderConfig(BaseModel):
    """Configuration for the raster renderer."""

    show_slots: bool = Field(
        default=False,
        description="Outline slot rectangles for debugging",
    )
    background: str = Field(default="white", description="Background colour")
    foreground: str = Field(default="black", description="Text colour")
    slot_color: str = Field(default="#e05050", description="Slot outline colour")


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


class TypefillSettings(BaseModel):
    """Main application settings."""

    region: RegionConfig = Field(default_factory=RegionConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    packing: PackingConfig = Field(default_factory=PackingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TypefillSettings:
    """Get default application settings."""
    return TypefillSettings()
