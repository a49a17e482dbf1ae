"""Colours shared by the Qt widget and the SVG export."""

from typing import Tuple

KNOB_COLOR = "#364F6B"
DISABLED_COLOR = "#999999"
GRIP_COLOR = "#FFFFFF"

# Conic gradient for the value track when no arc colour is configured:
# (position in degrees clockwise from ``GRADIENT_FROM_DEG``, colour).
GRADIENT_FROM_DEG = 150.0
GRADIENT_STOPS: Tuple[Tuple[float, str], ...] = (
    (-41.78, "#008e77"),
    (94.31, "#fc5185"),
    (148.26, "#ffb961"),
    (231.17, "#71c9ce"),
    (318.22, "#008e77"),
    (454.31, "#fc5185"),
)
DISABLED_GRADIENT_STOPS: Tuple[Tuple[float, str], ...] = (
    (-41.78, "#474747"),
    (94.31, "#8a8a8a"),
    (148.26, "#b0b0b0"),
    (231.17, "#9f9f9f"),
    (318.22, "#474747"),
    (454.31, "#a6a6a6"),
)


def css_conic_gradient(stops: Tuple[Tuple[float, str], ...]) -> str:
    parts = ", ".join(f"{color} {deg}deg" for deg, color in stops)
    return f"conic-gradient(from {GRADIENT_FROM_DEG:g}deg at center, {parts})"


__all__ = [
    "KNOB_COLOR",
    "DISABLED_COLOR",
    "GRIP_COLOR",
    "GRADIENT_FROM_DEG",
    "GRADIENT_STOPS",
    "DISABLED_GRADIENT_STOPS",
    "css_conic_gradient",
]
