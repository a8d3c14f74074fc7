"""Placement plan produced by the packer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Placement:
    """One character placed in one slot.

    Attributes:
        slot_index: Reading-order index of the slot
        char: The character to draw
        x: Left edge of the character's advance in output units
        y: Baseline position in output units (the slot's bottom)
    """

    slot_index: int
    char: str
    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"slot": self.slot_index, "char": self.char, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Placement":
        """Deserialize from dictionary."""
        return cls(slot_index=data["slot"], char=data["char"], x=data["x"], y=data["y"])


@dataclass
class PackResult:
    """Outcome of packing a character stream into slots.

    Attributes:
        placements: Placements in drawing order
        consumed: Number of characters consumed from the front of the stream
        remaining: The unconsumed tail of the stream
        filled_slots: Indices of slots that received at least one character
        skipped_slots: Indices of slots visited but left empty
    """

    placements: list[Placement] = field(default_factory=list)
    consumed: int = 0
    remaining: str = ""
    filled_slots: list[int] = field(default_factory=list)
    skipped_slots: list[int] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        """Number of characters drawn (trimmed spaces are consumed but not drawn)."""
        return len(self.placements)

    def is_exhausted(self) -> bool:
        """Check if the whole stream was consumed."""
        return not self.remaining

    def placements_for_slot(self, slot_index: int) -> list[Placement]:
        """Get the placements that belong to one slot."""
        return [p for p in self.placements if p.slot_index == slot_index]
