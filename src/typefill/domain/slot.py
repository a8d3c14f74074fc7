"""Slot type: one bounded line of the layout.

A slot is the axis-aligned bounding box of one connected piece of a
scanline band clipped to the usable area. Slots are produced once by the
slot generator and consumed read-only by the packer.
"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Slot:
    """An axis-aligned rectangle that receives one line of text.

    Attributes:
        left: Minimum x in output units
        bottom: Minimum y in output units
        right: Maximum x in output units
        top: Maximum y in output units
        index: Position in reading order (-1 until assigned)
    """

    left: float
    bottom: float
    right: float
    top: float
    index: int = -1

    @property
    def width(self) -> float:
        """Slot width (right - left)."""
        return self.right - self.left

    @property
    def height(self) -> float:
        """Slot height (top - bottom)."""
        return self.top - self.bottom

    def with_index(self, index: int) -> "Slot":
        """Return a copy of this slot carrying a reading-order index."""
        return replace(self, index=index)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (left, bottom, right, top)."""
        return (self.left, self.bottom, self.right, self.top)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with index, bounds and derived size
        """
        return {
            "index": self.index,
            "left": self.left,
            "bottom": self.bottom,
            "right": self.right,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Slot":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with index and bounds

        Returns:
            Slot instance
        """
        return cls(
            left=data["left"],
            bottom=data["bottom"],
            right=data["right"],
            top=data["top"],
            index=data.get("index", -1),
        )
