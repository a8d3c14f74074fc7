"""Raster renderer for placement plans.

This module draws a placement plan with Pillow. Layout coordinates have
the y-axis pointing up; image coordinates point down, so every y is
flipped against the output height.
"""

import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from typefill.config import RenderConfig
from typefill.domain import Placement, Slot
from typefill.exceptions import FontLoadError, RenderError


class LayoutRenderer:
    """Draws placements (and optionally slots) onto an image.

    Example:
        renderer = LayoutRenderer(Path("font.ttf"), font_size=12, width=800, height=600)
        renderer.save(Path("out.png"), result.placements, slots)
    """

    def __init__(
        self,
        font_path: Path,
        font_size: float,
        width: float,
        height: float,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            font_path: Font used to draw glyphs (same file used for metrics)
            font_size: Font size in output units (one unit is one pixel)
            width: Output width
            height: Output height
            config: Colours and debug overlay settings

        Raises:
            FontLoadError: If Pillow cannot open the font
        """
        self._width = width
        self._height = height
        self._config = config or RenderConfig()
        try:
            self._font = ImageFont.truetype(str(font_path), size=font_size)
        except OSError as e:
            raise FontLoadError(str(font_path), str(e)) from e

    @property
    def font_size(self) -> float:
        """Size the glyphs are drawn at, matching the measured size."""
        return self._font.size

    def _flip(self, y: float) -> float:
        return self._height - y

    def render(self, placements: list[Placement], slots: list[Slot] | None = None) -> Image.Image:
        """Draw a placement plan.

        Args:
            placements: Characters to draw, anchored at their left baseline
            slots: Slots to outline when the config enables it

        Returns:
            New RGB image of the output size
        """
        image = Image.new(
            "RGB",
            (max(1, math.ceil(self._width)), max(1, math.ceil(self._height))),
            self._config.background,
        )
        draw = ImageDraw.Draw(image)

        if slots and self._config.show_slots:
            for slot in slots:
                draw.rectangle(
                    [slot.left, self._flip(slot.top), slot.right, self._flip(slot.bottom)],
                    outline=self._config.slot_color,
                )

        for placement in placements:
            draw.text(
                (placement.x, self._flip(placement.y)),
                placement.char,
                font=self._font,
                fill=self._config.foreground,
                anchor="ls",
            )

        return image

    def save(
        self,
        output_path: Path,
        placements: list[Placement],
        slots: list[Slot] | None = None,
    ) -> None:
        """Render and save to a file (format inferred from the extension).

        Raises:
            RenderError: If the image cannot be written
        """
        image = self.render(placements, slots)
        try:
            image.save(output_path)
        except (OSError, ValueError) as e:
            raise RenderError(str(output_path), str(e)) from e
