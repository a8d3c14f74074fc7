"""Logging utilities for Typefill."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "typefill"


@dataclass
class LayoutStats:
    """Statistics from one layout run."""

    region_count: int = 0
    target_region_count: int = 0
    slot_count: int = 0
    filled_slot_count: int = 0
    skipped_slot_count: int = 0
    distinct_chars: int = 0
    placed_count: int = 0
    consumed_count: int = 0
    remaining_count: int = 0
    stage_times_ms: dict[str, float] = field(default_factory=dict)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("typefill")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class LayoutLogger:
    """Logger for tracking layout stages and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = LayoutStats()

    def log_stage(self, stage: str, duration_ms: float) -> None:
        """Log completion of a pipeline stage."""
        self._logger.debug("Stage complete", stage=stage, duration_ms=round(duration_ms, 2))
        self._stats.stage_times_ms[stage] = duration_ms

    def log_regions(self, region_count: int, target_count: int, target_area: float) -> None:
        """Log region extraction results."""
        self._logger.info(
            "Regions extracted",
            regions=region_count,
            target_regions=target_count,
            target_area=round(target_area, 2),
        )
        self._stats.region_count = region_count
        self._stats.target_region_count = target_count

    def log_empty_area(self, offset: float) -> None:
        """Log that buffering removed the whole target area."""
        self._logger.warning("Usable area is empty, no slots generated", buffer=offset)

    def log_slots(self, slot_count: int, line_height: float) -> None:
        """Log slot generation results."""
        self._logger.info("Slots generated", slots=slot_count, line_height=line_height)
        self._stats.slot_count = slot_count

    def log_metrics(self, distinct_chars: int, min_width: float) -> None:
        """Log width table construction."""
        self._logger.info(
            "Width table built",
            distinct_chars=distinct_chars,
            min_width=round(min_width, 3),
        )
        self._stats.distinct_chars = distinct_chars

    def log_packing(
        self,
        placed: int,
        consumed: int,
        remaining: int,
        filled_slots: int,
        skipped_slots: int,
    ) -> None:
        """Log packing results."""
        self._logger.info(
            "Text packed",
            placed=placed,
            consumed=consumed,
            remaining=remaining,
            filled_slots=filled_slots,
            skipped_slots=skipped_slots,
        )
        self._stats.placed_count = placed
        self._stats.consumed_count = consumed
        self._stats.remaining_count = remaining
        self._stats.filled_slot_count = filled_slots
        self._stats.skipped_slot_count = skipped_slots

    def log_error(self, stage: str, error: Exception) -> None:
        """Log a failed stage."""
        self._logger.error(
            "Stage failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> LayoutStats:
        """Get current layout statistics."""
        return self._stats
