"""JSON output of slots and placement plans.

The JSON document lets external renderers draw a layout without
re-running the pipeline.
"""

import json
from pathlib import Path
from typing import Any

from typefill.domain import PackResult, Placement, Slot
from typefill.exceptions import RenderError


def layout_to_dict(
    slots: list[Slot],
    result: PackResult,
    width: float,
    height: float,
) -> dict[str, Any]:
    """Serialize a layout to a plain dictionary.

    Args:
        slots: Slots in reading order
        result: Packing result
        width: Output width
        height: Output height

    Returns:
        Dictionary with size, slots, placements and the unconsumed text
    """
    return {
        "width": width,
        "height": height,
        "slots": [s.to_dict() for s in slots],
        "placements": [p.to_dict() for p in result.placements],
        "consumed": result.consumed,
        "remaining": result.remaining,
    }


def write_layout_json(
    output_path: Path,
    slots: list[Slot],
    result: PackResult,
    width: float,
    height: float,
) -> None:
    """Write a layout as JSON.

    Raises:
        RenderError: If the file cannot be written
    """
    data = layout_to_dict(slots, result, width, height)
    try:
        with output_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise RenderError(str(output_path), str(e)) from e


def read_layout_json(path: Path) -> tuple[list[Slot], list[Placement]]:
    """Read slots and placements back from a layout JSON file."""
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    slots = [Slot.from_dict(s) for s in data["slots"]]
    placements = [Placement.from_dict(p) for p in data["placements"]]
    return slots, placements
