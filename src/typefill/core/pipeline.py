"""Layout pipeline orchestration.

This module runs the layout stages strictly in sequence, each consuming
the previous stage's output:

1. Region extraction (raster to tonal polygons)
2. Region buffering (usable placement area)
3. Slot generation (reading-ordered line rectangles)
4. Width table construction
5. Packing and justification

Key components:
- LayoutResult: Everything a run produced
- LayoutPipeline: Main orchestrator, with file-based wiring for the CLI
"""

import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from shapely.geometry.base import BaseGeometry

from typefill.config import TypefillSettings
from typefill.core.buffer import buffer_area
from typefill.core.metrics import MeasureFunc, MetricsCache
from typefill.core.packer import Packer
from typefill.core.regions import extract_regions, validate_threshold
from typefill.core.slots import SlotGenerator
from typefill.domain import PackResult, Raster, RegionMap, Slot
from typefill.exceptions import ConfigurationError, EmptyAreaError, TypefillError
from typefill.io import FontMetrics, ImageReader, LayoutRenderer, write_layout_json
from typefill.utils import LayoutLogger, LayoutStats, configure_logging

T = TypeVar("T")

_WHITESPACE = re.compile(r"\s+")


@dataclass
class LayoutResult:
    """Output of one layout run.

    Attributes:
        region_map: Tonal partition of the raster
        usable_area: Buffered target area (None if it was eroded away)
        slots: Slots in reading order
        pack: Placement plan and consumption summary
        stats: Run statistics
    """

    region_map: RegionMap
    usable_area: BaseGeometry | None
    slots: list[Slot]
    pack: PackResult
    stats: LayoutStats


class LayoutPipeline:
    """Orchestrates a full text layout run.

    Example:
        settings = TypefillSettings()
        pipeline = LayoutPipeline(settings)
        result = pipeline.run_files(
            image_path=Path("portrait.png"),
            text=Path("speech.txt").read_text(),
            font_path=Path("font.ttf"),
            output_path=Path("portrait-typefill.png"),
        )
    """

    def __init__(self, config: TypefillSettings, quiet: bool = False) -> None:
        """Initialize the pipeline with configuration.

        Args:
            config: Typefill settings
            quiet: Suppress console logging below ERROR
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.layout_logger = LayoutLogger(self.logger)

    def validate(self) -> None:
        """Fail fast on non-physical parameters before any geometry work.

        Raises:
            ConfigurationError: If a parameter is out of range
        """
        layout = self.config.layout
        validate_threshold(self.config.region.threshold)
        if not layout.effective_line_height > 0:
            raise ConfigurationError("line_height", layout.effective_line_height, "must be positive")
        if not layout.font_size > 0:
            raise ConfigurationError("font_size", layout.font_size, "must be positive")
        if not (layout.width > 0 and layout.height > 0):
            raise ConfigurationError(
                "output size", (layout.width, layout.height), "width and height must be positive"
            )

    def prepare_text(self, text: str) -> str:
        """Normalize the character stream according to the packing config."""
        if self.config.packing.collapse_whitespace:
            return _WHITESPACE.sub(" ", text)
        return text

    def _stage(self, name: str, func: Callable[[], T]) -> T:
        """Run one stage, timing it and logging failures before re-raising.

        An empty area is an expected outcome and is left to the caller to log.
        """
        start = time.perf_counter()
        try:
            value = func()
        except EmptyAreaError:
            raise
        except TypefillError as e:
            self.layout_logger.log_error(name, e)
            raise
        self.layout_logger.log_stage(name, (time.perf_counter() - start) * 1000)
        return value

    def run(self, raster: Raster, text: str, measure: MeasureFunc) -> LayoutResult:
        """Lay out text over a raster.

        Args:
            raster: Sampled image in output space
            text: Character stream to place
            measure: Width-measurement capability (one character in, width out)

        Returns:
            LayoutResult with slots and the placement plan

        Raises:
            ConfigurationError: If a parameter is out of range
            GeometryError: If an area operation fails (an eroded-away area is
                not an error; it produces zero slots)
            UnmeasurableCharacterError: If a character has no width
        """
        self.validate()
        self.layout_logger = LayoutLogger(self.logger)
        stats = self.layout_logger.stats
        stats.start_time = time.time()

        region_cfg = self.config.region
        layout_cfg = self.config.layout
        stream = self.prepare_text(text)

        region_map = self._stage(
            "regions",
            lambda: extract_regions(raster, region_cfg.threshold, region_cfg.target),
        )
        self.layout_logger.log_regions(
            len(region_map.regions),
            len(region_map.target_regions()),
            region_map.target_area.area,
        )

        usable_area: BaseGeometry | None
        try:
            usable_area = self._stage("buffer", lambda: buffer_area(region_map.target_area, region_cfg.buffer))
        except EmptyAreaError:
            self.layout_logger.log_empty_area(region_cfg.buffer)
            usable_area = None

        generator = SlotGenerator(
            line_height=layout_cfg.effective_line_height,
            width=layout_cfg.width,
            height=layout_cfg.height,
            row_precision=layout_cfg.row_precision,
        )
        slots: list[Slot] = []
        if usable_area is not None:
            area = usable_area
            slots = self._stage("slots", lambda: generator.generate(area))
        self.layout_logger.log_slots(len(slots), generator.line_height)

        metrics = self._stage("metrics", lambda: MetricsCache(stream, measure))
        self.layout_logger.log_metrics(len(metrics), metrics.min_width)

        packer = Packer(justify_spaces=self.config.packing.justify_spaces)
        pack = self._stage("packing", lambda: packer.pack(slots, metrics))
        self.layout_logger.log_packing(
            placed=pack.placed_count,
            consumed=pack.consumed,
            remaining=len(pack.remaining),
            filled_slots=len(pack.filled_slots),
            skipped_slots=len(pack.skipped_slots),
        )

        stats.end_time = time.time()
        return LayoutResult(
            region_map=region_map,
            usable_area=usable_area,
            slots=slots,
            pack=pack,
            stats=stats,
        )

    def run_files(
        self,
        image_path: Path,
        text: str,
        font_path: Path,
        output_path: Path | None = None,
        json_path: Path | None = None,
    ) -> LayoutResult:
        """Run the pipeline with file-based collaborators.

        Args:
            image_path: Source image
            text: Character stream to place
            font_path: Font used for both measuring and drawing
            output_path: Rendered image destination (skipped if None)
            json_path: Layout JSON destination (skipped if None)

        Returns:
            LayoutResult of the run
        """
        layout_cfg = self.config.layout

        with ImageReader(image_path) as reader:
            raster = reader.to_raster(layout_cfg.width, layout_cfg.height, self.config.region.cell_size)

        with FontMetrics(font_path, layout_cfg.font_size) as metrics:
            result = self.run(raster, text, metrics)

        if output_path is not None:
            renderer = LayoutRenderer(
                font_path,
                layout_cfg.font_size,
                layout_cfg.width,
                layout_cfg.height,
                self.config.render,
            )
            self._stage("render", lambda: renderer.save(output_path, result.pack.placements, result.slots))
            self.logger.info("Layout rendered", output=str(output_path))

        if json_path is not None:
            write_layout_json(json_path, result.slots, result.pack, layout_cfg.width, layout_cfg.height)
            self.logger.info("Layout written", output=str(json_path))

        return result
