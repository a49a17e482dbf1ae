"""Pure angle and arc geometry behind the circular slider."""

from ..errors import CircularGeometryError, InternalInvariantError, InvalidRangeError
from .angles import (
    angle_to_position,
    angle_to_value,
    position_to_angle,
    value_to_angle,
)
from .paths import ArcPath, ArcTo, ClosePath, MoveTo, arc_path_with_rounded_ends

__all__ = [
    "angle_to_value",
    "value_to_angle",
    "angle_to_position",
    "position_to_angle",
    "arc_path_with_rounded_ends",
    "ArcPath",
    "ArcTo",
    "ClosePath",
    "MoveTo",
    "CircularGeometryError",
    "InvalidRangeError",
    "InternalInvariantError",
]
