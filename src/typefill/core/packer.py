"""Greedy, width-aware packing of a character stream into slots.

For every slot in reading order the packer takes the longest run of
upcoming characters that fits the slot width, trims one boundary space at
each end from what is drawn, spreads the leftover width across the
remaining characters and advances a cursor past the whole run.

Consumption and drawing differ: trimmed spaces are consumed but never
drawn. A run made only of spaces skips the slot without consuming
anything, so a long run of spaces that fills a slot is retried on the
next slot.
"""

import logging
import math
from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate

from typefill.core.metrics import MetricsCache
from typefill.domain import PackResult, Placement, Slot

logger = logging.getLogger(__name__)

SPACE = " "

# Relative slack when comparing a run's width with its slot width
WIDTH_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Line:
    """One packed line before it is turned into placements.

    Attributes:
        consumed: Number of stream characters the line consumes
        chars: Characters to draw (boundary spaces trimmed)
        advances: Justified advance width of each drawn character
    """

    consumed: int
    chars: str
    advances: tuple[float, ...]


def window_size(slot_width: float, min_width: float, available: int) -> int:
    """Upper bound on how many characters could fit in a slot.

    Args:
        slot_width: Width of the slot
        min_width: Narrowest character width in the table
        available: Characters left in the stream

    Returns:
        Number of upcoming characters worth examining
    """
    if min_width <= 0:
        return available
    return min(available, math.ceil(slot_width / min_width))


def fit_count(widths: list[float], slot_width: float) -> int:
    """Largest k such that the first k widths sum to at most slot_width.

    Widths are non-negative, so prefix sums are non-decreasing and the
    threshold can be found by bisection.
    """
    sums = list(accumulate(widths))
    return bisect_right(sums, slot_width + WIDTH_TOLERANCE * max(1.0, abs(slot_width)))


def trim_spaces(chars: str, widths: list[float]) -> tuple[str, list[float]]:
    """Drop one leading and one trailing space from a candidate line."""
    start, end = 0, len(chars)
    if chars[start] == SPACE:
        start += 1
    if end > start and chars[end - 1] == SPACE:
        end -= 1
    return chars[start:end], widths[start:end]


class Packer:
    """Packs a character stream into reading-ordered slots.

    Example:
        packer = Packer()
        result = packer.pack(slots, cache)
        for placement in result.placements:
            draw(placement.char, placement.x, placement.y)
    """

    def __init__(self, justify_spaces: bool = True) -> None:
        """Initialize the packer.

        Args:
            justify_spaces: If True every drawn character but the last
                receives a share of the leftover width. If False spaces are
                left at their natural width and only the other characters
                (again excluding the last) are widened.
        """
        self.justify_spaces = justify_spaces

    def justify(self, chars: str, widths: list[float], slot_width: float) -> tuple[float, ...]:
        """Widen characters so the line spans the slot width.

        A single character is never widened.

        Args:
            chars: Drawn characters
            widths: Natural widths of the drawn characters
            slot_width: Target line width

        Returns:
            Advance width per character
        """
        count = len(chars)
        if count <= 1:
            return tuple(widths)

        if self.justify_spaces:
            stretch = list(range(count - 1))
        else:
            stretch = [i for i in range(count - 1) if chars[i] != SPACE]
        if not stretch:
            return tuple(widths)

        extra = (slot_width - sum(widths)) / len(stretch)
        advances = list(widths)
        for i in stretch:
            advances[i] += extra
        return tuple(advances)

    def fit_line(
        self,
        text: str,
        widths: tuple[float, ...],
        cursor: int,
        slot_width: float,
        min_width: float,
    ) -> Line | None:
        """Work out the line a slot receives.

        Args:
            text: Full character stream
            widths: Width of every character of the stream
            cursor: Index of the first unconsumed character
            slot_width: Width of the slot
            min_width: Narrowest character width, bounds the search window

        Returns:
            The line to draw, or None if the slot must be skipped
        """
        window = window_size(slot_width, min_width, len(text) - cursor)
        window_widths = list(widths[cursor:cursor + window])
        k = fit_count(window_widths, slot_width)
        if k == 0:
            return None

        candidate = text[cursor:cursor + k]
        if candidate.strip(SPACE) == "":
            return None

        chars, drawn_widths = trim_spaces(candidate, window_widths[:k])
        return Line(
            consumed=k,
            chars=chars,
            advances=self.justify(chars, drawn_widths, slot_width),
        )

    def pack(self, slots: list[Slot], metrics: MetricsCache) -> PackResult:
        """Pack the metrics cache's text into slots.

        Stops when every slot has been visited or the text is used up.

        Args:
            slots: Slots in reading order
            metrics: Width table built for the text to place

        Returns:
            PackResult with placements and the unconsumed tail of the text
        """
        text = metrics.text
        widths = metrics.occurrence_widths
        cursor = 0
        result = PackResult()

        for slot in slots:
            if cursor >= len(text):
                break

            line = self.fit_line(text, widths, cursor, slot.width, metrics.min_width)
            if line is None:
                result.skipped_slots.append(slot.index)
                continue

            x = slot.left
            for char, advance in zip(line.chars, line.advances):
                result.placements.append(Placement(slot_index=slot.index, char=char, x=x, y=slot.bottom))
                x += advance

            cursor += line.consumed
            result.filled_slots.append(slot.index)

        result.consumed = cursor
        result.remaining = text[cursor:]

        logger.debug(
            "Packed %d of %d characters into %d slots (%d skipped)",
            cursor, len(text), len(result.filled_slots), len(result.skipped_slots)
        )
        return result
