"""Rounded-end arc outlines described as a sequence of path segments.

The outline is renderer agnostic: :mod:`circular_slider.utils.svg` turns it
into SVG path data and :mod:`circular_slider.utils.qt` into a
``QPainterPath``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import logging
import math

from ..models import Angle, AngleDescription, Direction, DirectionLike, Position
from .angles import angle_to_position

logger = logging.getLogger(__name__)

# Subtracted from the end angle of a full circle; an arc whose endpoints
# coincide is not drawn at all.
FULL_CIRCLE_EPSILON = 0.001


@dataclass(frozen=True)
class MoveTo:
    point: Position


@dataclass(frozen=True)
class ArcTo:
    """Circular/elliptical arc from the current point to ``end``."""

    rx: float
    ry: float
    large_arc: bool
    sweep: bool  # True: positive-angle (clockwise on screen) direction
    end: Position
    rotation: float = 0.0


@dataclass(frozen=True)
class ClosePath:
    pass


PathSegment = Union[MoveTo, ArcTo, ClosePath]


@dataclass(frozen=True)
class ArcPath:
    """A closed outline made of a move, four arcs and a close."""

    segments: Tuple[PathSegment, ...]
    large_arc: bool
    start_angle: float
    end_angle: float  # after the full-circle adjustment

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def arcs(self) -> Tuple[ArcTo, ...]:
        return tuple(s for s in self.segments if isinstance(s, ArcTo))

    def points(self) -> Tuple[Position, ...]:
        """Destination point of every move and arc, in drawing order."""
        pts = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                pts.append(seg.point)
            elif isinstance(seg, ArcTo):
                pts.append(seg.end)
        return tuple(pts)


def adjusted_end_angle(start_angle: float, end_angle: float) -> float:
    """Pull ``end_angle`` back slightly when the arc would be a closed circle."""
    if start_angle % 360 == end_angle % 360 and start_angle != end_angle:
        logger.debug(
            "Full circle arc %s..%s, nudging end angle by %s",
            start_angle,
            end_angle,
            FULL_CIRCLE_EPSILON,
        )
        return end_angle - FULL_CIRCLE_EPSILON
    return end_angle


def arc_path_with_rounded_ends(
    start_angle: float,
    end_angle: float,
    angle_type: AngleDescription,
    inner_radius: float,
    thickness: float,
    svg_size: float,
    direction: DirectionLike,
) -> ArcPath:
    """Build the outline of a track from ``start_angle`` to ``end_angle`` with round caps.

    The outline runs along the inner radius from start to end, turns out to
    the outer radius through a half-thickness cap, runs back along the outer
    radius and closes with a second cap.

    Args:
        start_angle: Start of the track in degrees under ``angle_type``.
        end_angle: End of the track in degrees under ``angle_type``.
        angle_type: Convention the two angles are measured in.
        inner_radius: Radius of the inner edge of the track.
        thickness: Width of the track; the caps have radius ``thickness / 2``.
        svg_size: Side length of the square canvas.
        direction: Rotational sense the inner arc is drawn in.

    Returns:
        The outline as an :class:`ArcPath`. Degenerate inputs give a
        degenerate (possibly zero-area) outline rather than an error.
    """
    clockwise = Direction(direction) is Direction.CW
    end_angle = adjusted_end_angle(start_angle, end_angle)
    large_arc = end_angle - start_angle >= 180
    outer_radius = inner_radius + thickness
    cap_radius = thickness / 2.0

    def at(degree: float, radius: float) -> Position:
        return angle_to_position(Angle(degree, angle_type), radius, svg_size)

    inner_start = at(start_angle, inner_radius)
    inner_end = at(end_angle, inner_radius)
    outer_end = at(end_angle, outer_radius)
    outer_start = at(start_angle, outer_radius)

    segments: Tuple[PathSegment, ...] = (
        MoveTo(inner_start),
        ArcTo(inner_radius, inner_radius, large_arc, clockwise, inner_end),
        ArcTo(cap_radius, cap_radius, large_arc, not clockwise, outer_end),
        ArcTo(outer_radius, outer_radius, large_arc, not clockwise, outer_start),
        ArcTo(cap_radius, cap_radius, large_arc, not clockwise, inner_start),
        ClosePath(),
    )
    return ArcPath(segments, large_arc, start_angle, end_angle)


@dataclass(frozen=True)
class ArcGeometry:
    """Centre parameterisation of an arc segment, angles in screen orientation."""

    center: Position
    radius: float
    start_deg: float
    sweep_deg: float  # positive is clockwise on screen


def arc_center(start: Tuple[float, float], arc: ArcTo) -> Optional[ArcGeometry]:
    """Convert an endpoint-parameterised circular arc into centre form.

    Follows the SVG endpoint-to-centre conversion with ``rx == ry`` and no
    rotation (``arc.rx`` is used). A radius too small for the chord is scaled
    up to half the chord. Returns ``None`` when the endpoints coincide or are
    not finite, in which case the arc draws nothing.
    """
    x1, y1 = float(start[0]), float(start[1])
    x2, y2 = float(arc.end[0]), float(arc.end[1])
    hx = (x1 - x2) / 2.0
    hy = (y1 - y2) / 2.0
    d2 = hx * hx + hy * hy
    if not math.isfinite(d2) or d2 <= 1e-18:
        return None

    r = abs(float(arc.rx))
    if r * r < d2:
        r = math.sqrt(d2)

    coef = math.sqrt(max(0.0, (r * r - d2) / d2))
    if arc.large_arc == arc.sweep:
        coef = -coef
    cx_p = coef * hy
    cy_p = -coef * hx
    cx = cx_p + (x1 + x2) / 2.0
    cy = cy_p + (y1 + y2) / 2.0

    theta1 = math.degrees(math.atan2(hy - cy_p, hx - cx_p))
    theta2 = math.degrees(math.atan2(-hy - cy_p, -hx - cx_p))
    sweep = (theta2 - theta1) % 360.0
    if not arc.sweep and sweep > 0:
        sweep -= 360.0

    return ArcGeometry(Position(cx, cy), r, theta1, sweep)


__all__ = [
    "FULL_CIRCLE_EPSILON",
    "MoveTo",
    "ArcTo",
    "ClosePath",
    "PathSegment",
    "ArcPath",
    "ArcGeometry",
    "adjusted_end_angle",
    "arc_path_with_rounded_ends",
    "arc_center",
]
