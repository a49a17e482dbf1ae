"""Exceptions raised by the geometry core."""


class CircularGeometryError(Exception):
    """Base class for circular_slider geometry errors."""


class InvalidRangeError(CircularGeometryError, ValueError):
    """Raised when an angle range does not satisfy ``end_angle > start_angle``."""

    def __init__(self, start_angle: float, end_angle: float) -> None:
        super().__init__(
            f"end_angle must be greater than start_angle "
            f"(start_angle={start_angle!r}, end_angle={end_angle!r})"
        )
        self.start_angle = start_angle
        self.end_angle = end_angle


class InternalInvariantError(CircularGeometryError, RuntimeError):
    """Raised when an angle conversion reaches a combination it does not know."""


__all__ = ["CircularGeometryError", "InvalidRangeError", "InternalInvariantError"]
