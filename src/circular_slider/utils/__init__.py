"""Helpers shared by the widget shell and the renderers."""

from .numeric import clamp, coerce_value, round_half_up

__all__ = ["clamp", "coerce_value", "round_half_up"]
