"""Width table for the character stream.

The measurement capability is called once per distinct character, never
per occurrence; the same letter can appear thousands of times in a text.
"""

import logging
import math
from collections.abc import Callable, Mapping
from types import MappingProxyType

from typefill.exceptions import UnmeasurableCharacterError

logger = logging.getLogger(__name__)

MeasureFunc = Callable[[str], float]


def _measure_one(char: str, measure: MeasureFunc) -> float:
    """Measure one character, normalizing every failure to UnmeasurableCharacterError."""
    try:
        width = measure(char)
    except UnmeasurableCharacterError:
        raise
    except (LookupError, ValueError, TypeError) as e:
        raise UnmeasurableCharacterError(char, str(e) or type(e).__name__) from e

    if width is None:
        raise UnmeasurableCharacterError(char, "no width returned")
    width = float(width)
    if math.isnan(width) or math.isinf(width):
        raise UnmeasurableCharacterError(char, f"width is not finite ({width})")
    if width < 0:
        raise UnmeasurableCharacterError(char, f"width is negative ({width})")
    return width


class MetricsCache:
    """Character widths for a text, measured once per distinct character.

    The table is complete and read-only once construction returns.

    Example:
        cache = MetricsCache("hello world", font_metrics.measure)
        cache.widths["l"]
        cache.occurrence_widths  # one entry per character of the text
    """

    def __init__(self, text: str, measure: MeasureFunc) -> None:
        """Build the width table.

        Args:
            text: Character stream to be packed
            measure: Returns the width of a single character in output units

        Raises:
            UnmeasurableCharacterError: If any character cannot be measured
        """
        self._text = text
        table: dict[str, float] = {}
        for char in dict.fromkeys(text):
            table[char] = _measure_one(char, measure)

        self._widths = MappingProxyType(table)
        self._occurrence_widths = tuple(table[char] for char in text)
        self._min_width = min(table.values()) if table else 0.0

        logger.debug(
            "Measured %d distinct characters for %d occurrences (min width %.3f)",
            len(table), len(text), self._min_width
        )

    @property
    def text(self) -> str:
        """The character stream the table was built for."""
        return self._text

    @property
    def widths(self) -> Mapping[str, float]:
        """Read-only mapping from distinct character to width."""
        return self._widths

    @property
    def occurrence_widths(self) -> tuple[float, ...]:
        """Width of every character of the stream, in stream order."""
        return self._occurrence_widths

    @property
    def min_width(self) -> float:
        """Smallest width across the distinct characters (0.0 for an empty text)."""
        return self._min_width

    def width_of(self, char: str) -> float:
        """Get the width of one character.

        Raises:
            UnmeasurableCharacterError: If the character is not in the table
        """
        try:
            return self._widths[char]
        except KeyError:
            raise UnmeasurableCharacterError(char, "not present in the width table") from None

    def __len__(self) -> int:
        return len(self._widths)

    def __contains__(self, char: object) -> bool:
        return char in self._widths
