"""Value/angle mapping and conversions between angle conventions and positions.

Angles are in degrees and only meaningful together with an
:class:`~circular_slider.models.AngleDescription`. Screen positions use the
canvas convention (origin top-left, y down); the trigonometry in between uses
the geometric one (origin at the canvas centre, y up, counterclockwise from +x).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import math

import numpy as np

from ..errors import InternalInvariantError, InvalidRangeError
from ..models import CANONICAL, Angle, AngleDescription, Axis, Direction, Position


def _check_range(start_angle: float, end_angle: float) -> None:
    if end_angle <= start_angle:
        raise InvalidRangeError(start_angle, end_angle)


def angle_to_value(
    angle: float,
    min_value: float,
    max_value: float,
    start_angle: float,
    end_angle: float,
) -> float:
    """Map ``angle`` in ``[start_angle, end_angle]`` onto ``[min_value, max_value]``.

    Angles before the range give ``min_value`` and angles past it give
    ``max_value``; there is no extrapolation. ``max_value`` may be smaller than
    ``min_value`` to invert the scale.

    Raises:
        InvalidRangeError: if ``end_angle <= start_angle``.
    """
    _check_range(start_angle, end_angle)

    if angle < start_angle:
        return min_value
    if angle > end_angle:
        return max_value
    ratio = (angle - start_angle) / (end_angle - start_angle)
    return ratio * (max_value - min_value) + min_value


def value_to_angle(
    value: float,
    min_value: float,
    max_value: float,
    start_angle: float,
    end_angle: float,
) -> float:
    """Map ``value`` linearly so ``min_value -> start_angle`` and ``max_value -> end_angle``.

    Unlike :func:`angle_to_value` the result is not clamped: values outside
    ``[min_value, max_value]`` land outside ``[start_angle, end_angle]``. An
    empty value range yields ``inf`` or ``nan``.

    Raises:
        InvalidRangeError: if ``end_angle <= start_angle``.
    """
    _check_range(start_angle, end_angle)

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = np.float64(value - min_value) / np.float64(max_value - min_value)
        angle = ratio * (end_angle - start_angle) + start_angle
    return float(angle)


# (target direction, source axis, target axis) -> offset for perpendicular axes.
_PERPENDICULAR_OFFSETS: Dict[Tuple[Direction, Axis, Axis], float] = {
    (Direction.CCW, Axis.POS_X, Axis.NEG_Y): 90.0,
    (Direction.CCW, Axis.NEG_X, Axis.POS_Y): 90.0,
    (Direction.CCW, Axis.POS_Y, Axis.POS_X): 90.0,
    (Direction.CCW, Axis.NEG_Y, Axis.NEG_X): 90.0,
    (Direction.CW, Axis.POS_Y, Axis.NEG_X): 90.0,
    (Direction.CW, Axis.NEG_Y, Axis.POS_X): 90.0,
    (Direction.CW, Axis.NEG_X, Axis.NEG_Y): 90.0,
    (Direction.CW, Axis.POS_X, Axis.POS_Y): 90.0,
    (Direction.CCW, Axis.POS_Y, Axis.NEG_X): 270.0,
    (Direction.CCW, Axis.NEG_Y, Axis.POS_X): 270.0,
    (Direction.CCW, Axis.POS_X, Axis.POS_Y): 270.0,
    (Direction.CCW, Axis.NEG_X, Axis.NEG_Y): 270.0,
    (Direction.CW, Axis.POS_X, Axis.NEG_Y): 270.0,
    (Direction.CW, Axis.NEG_X, Axis.POS_Y): 270.0,
    (Direction.CW, Axis.POS_Y, Axis.POS_X): 270.0,
    (Direction.CW, Axis.NEG_Y, Axis.NEG_X): 270.0,
}


def convert_angle(
    degree: float,
    from_desc: AngleDescription,
    to_desc: Optional[AngleDescription] = None,
) -> float:
    """Re-express ``degree`` measured under ``from_desc`` in terms of ``to_desc``.

    ``to_desc`` defaults to counterclockwise from +x.
    """
    if to_desc is None:
        to_desc = CANONICAL

    if from_desc.direction != to_desc.direction:
        # 0° is the same physical direction in either sense.
        degree = 0 if degree == 0 else 360 - degree

    if from_desc.axis == to_desc.axis:
        return degree

    if from_desc.axis.line == to_desc.axis.line:
        return (180 + degree) % 360

    key = (to_desc.direction, from_desc.axis, to_desc.axis)
    try:
        offset = _PERPENDICULAR_OFFSETS[key]
    except KeyError:
        raise InternalInvariantError(
            f"Unhandled angle conversion {from_desc!r} -> {to_desc!r}"
        ) from None
    return (offset + degree) % 360


def angle_to_position(angle: Angle, radius: float, svg_size: float) -> Position:
    """Return the canvas position at ``radius`` from the centre along ``angle``.

    A non-finite angle gives a ``nan`` position rather than an error.
    """
    degree = convert_angle(angle.degree, angle.description, CANONICAL)
    theta = math.radians(degree)

    # Relative to the centre, y up.
    with np.errstate(invalid="ignore"):
        dx = float(np.cos(theta)) * radius
        dy = float(np.sin(theta)) * radius

    half = svg_size / 2.0
    return Position(dx + half, half - dy)


def position_to_angle(
    position: Tuple[float, float], svg_size: float, angle_type: AngleDescription
) -> float:
    """Return the angle of ``position`` around the canvas centre under ``angle_type``."""
    x, y = position
    half = svg_size / 2.0
    dx = x - half
    dy = half - y  # canvas y grows downward

    theta = math.atan2(dy, dx)
    if theta < 0:
        theta += 2 * math.pi
    degree = math.degrees(theta)
    return convert_angle(degree, CANONICAL, angle_type)


__all__ = [
    "angle_to_value",
    "value_to_angle",
    "convert_angle",
    "angle_to_position",
    "position_to_angle",
]
