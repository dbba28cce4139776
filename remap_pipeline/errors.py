from __future__ import annotations


class RemapError(ValueError):
    """Base class for every error raised by the remapping engine."""


class MalformedInterval(RemapError):
    pass


class OverlappingRanges(RemapError):
    pass


class CompositionDomainMismatch(RemapError):
    pass


class EmptyReduction(RemapError):
    pass


class IntegerOverflow(RemapError):
    """Raised when a vectorised image would leave the int64 range."""


class AlmanacParseError(RemapError):
    """Raised for almanac text that cannot be turned into seeds and stages."""

    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
