"""Everything a renderer needs to draw a slider for a given value."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import (
    ArcPath,
    angle_to_position,
    angle_to_value,
    arc_path_with_rounded_ends,
    position_to_angle,
    value_to_angle,
)
from .models import Angle, Position, SliderConfig
from .utils import coerce_value


@dataclass(frozen=True)
class SliderLayout:
    knob_angle: float
    knob_position: Position
    value_path: ArcPath  # start angle -> knob
    background_path: ArcPath  # knob -> end angle


def compute_layout(cfg: SliderConfig, value: float) -> SliderLayout:
    """Place the knob for ``value`` and build both track outlines."""
    knob_angle = value_to_angle(
        value, cfg.min_value, cfg.max_value, cfg.start_angle, cfg.end_angle
    )
    knob_position = angle_to_position(
        Angle(knob_angle, cfg.angle_type), cfg.knob_radius, cfg.size
    )
    value_path = arc_path_with_rounded_ends(
        cfg.start_angle,
        knob_angle,
        cfg.angle_type,
        cfg.track_inner_radius,
        cfg.track_width,
        cfg.size,
        cfg.angle_type.direction,
    )
    background_path = arc_path_with_rounded_ends(
        knob_angle,
        cfg.end_angle,
        cfg.angle_type,
        cfg.track_inner_radius,
        cfg.track_width,
        cfg.size,
        cfg.angle_type.direction,
    )
    return SliderLayout(knob_angle, knob_position, value_path, background_path)


def value_at(cfg: SliderConfig, x: float, y: float) -> float:
    """Slider value selected by a pointer at canvas coordinates ``(x, y)``."""
    angle = position_to_angle((x, y), cfg.size, cfg.angle_type)
    value = angle_to_value(
        angle, cfg.min_value, cfg.max_value, cfg.start_angle, cfg.end_angle
    )
    return coerce_value(
        value, cfg.coerce_to_int, cfg.coerce_to_half, cfg.coerce_to_quarter
    )


__all__ = ["SliderLayout", "compute_layout", "value_at"]
