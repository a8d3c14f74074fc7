"""Exception hierarchy for Typefill."""


class TypefillError(Exception):
    """Base exception for all Typefill errors."""

    pass


class ConfigurationError(TypefillError):
    """A layout parameter is not physically meaningful."""

    def __init__(self, parameter: str, value: object, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {parameter}={value!r}: {reason}")


class GeometryError(TypefillError):
    """An area operation produced an empty or invalid result."""

    def __init__(self, stage: str, reason: str) -> None:
        self.stage = stage
        self.reason = reason
        super().__init__(f"Geometry error in {stage}: {reason}")


class EmptyAreaError(GeometryError):
    """The usable area vanished (e.g. eroded away by a negative buffer)."""

    def __init__(self, stage: str, offset: float) -> None:
        self.offset = offset
        super().__init__(stage, f"area is empty after offset {offset}")


class MetricsError(TypefillError):
    """Errors related to character width measurement."""

    pass


class UnmeasurableCharacterError(MetricsError):
    """A character in the text has no measurable width."""

    def __init__(self, char: str, reason: str) -> None:
        self.char = char
        self.reason = reason
        super().__init__(f"Cannot measure character {char!r} (U+{ord(char):04X}): {reason}")


class ImageLoadError(TypefillError):
    """Error loading the source image."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class FontLoadError(TypefillError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class RenderError(TypefillError):
    """Error drawing or saving the rendered layout."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to render '{path}': {reason}")
