"""Qt helper utilities."""

from typing import Tuple

import math

from PySide6 import QtCore, QtGui

from ..geometry.paths import ArcPath, ArcTo, ClosePath, MoveTo, arc_center
from ..style import GRADIENT_FROM_DEG


def arc_path_to_qpainterpath(path: ArcPath) -> QtGui.QPainterPath:
    """Convert an :class:`~circular_slider.geometry.paths.ArcPath` into a :class:`~PySide6.QtGui.QPainterPath`."""
    qpath = QtGui.QPainterPath()
    current = (0.0, 0.0)
    for seg in path:
        if isinstance(seg, MoveTo):
            if not (math.isfinite(seg.point.x) and math.isfinite(seg.point.y)):
                return QtGui.QPainterPath()  # degenerate angles draw nothing
            qpath.moveTo(seg.point.x, seg.point.y)
            current = (seg.point.x, seg.point.y)
        elif isinstance(seg, ArcTo):
            geom = arc_center(current, seg)
            if geom is not None:
                r = geom.radius
                rect = QtCore.QRectF(
                    geom.center.x - r, geom.center.y - r, 2.0 * r, 2.0 * r
                )
                # Qt measures angles counter-clockwise on screen.
                qpath.arcTo(rect, -geom.start_deg, -geom.sweep_deg)
            current = (seg.end.x, seg.end.y)
        elif isinstance(seg, ClosePath):
            qpath.closeSubpath()
    return qpath


def conical_gradient(
    center: QtCore.QPointF, stops: Tuple[Tuple[float, str], ...]
) -> QtGui.QConicalGradient:
    """Qt rendition of a CSS ``conic-gradient(from ...)`` with degree stops.

    CSS runs clockwise from 12 o'clock, Qt counter-clockwise from 3 o'clock,
    so positions are mirrored. Stops outside one turn are dropped.
    """
    gradient = QtGui.QConicalGradient(center, 90.0 - GRADIENT_FROM_DEG)
    inside = [(deg / 360.0, color) for deg, color in stops if 0.0 <= deg <= 360.0]
    if inside:
        gradient.setColorAt(0.0, QtGui.QColor(inside[-1][1]))
        gradient.setColorAt(1.0, QtGui.QColor(inside[0][1]))
    for pos, color in inside:
        gradient.setColorAt(1.0 - pos, QtGui.QColor(color))
    return gradient


__all__ = ["arc_path_to_qpainterpath", "conical_gradient"]
