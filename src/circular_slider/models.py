"""Dataclasses describing angles, positions and configuration for circular_slider."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union

import json
import math

from .errors import InvalidRangeError


class Direction(str, Enum):
    """Rotational sense in which angles increase on screen."""

    CW = "cw"
    CCW = "ccw"


class Axis(str, Enum):
    """Screen axis treated as the zero-degree reference."""

    POS_X = "+x"
    NEG_X = "-x"
    POS_Y = "+y"
    NEG_Y = "-y"

    @property
    def line(self) -> str:
        """The axis letter, shared by ``+x``/``-x`` and ``+y``/``-y``."""
        return self.value[1]


@dataclass(frozen=True)
class AngleDescription:
    """Which axis is 0° and which rotational sense is positive."""

    direction: Direction = Direction.CCW
    axis: Axis = Axis.POS_X

    def __post_init__(self) -> None:
        # Accept the plain string tags ("cw", "+x", ...) as well as members.
        object.__setattr__(self, "direction", Direction(self.direction))
        object.__setattr__(self, "axis", Axis(self.axis))

    def to_dict(self) -> Dict[str, str]:
        return {"direction": self.direction.value, "axis": self.axis.value}

    @staticmethod
    def from_dict(data: Dict) -> "AngleDescription":
        return AngleDescription(
            direction=data.get("direction", Direction.CCW.value),
            axis=data.get("axis", Axis.POS_X.value),
        )


CANONICAL = AngleDescription(Direction.CCW, Axis.POS_X)


@dataclass(frozen=True)
class Angle:
    """A degree value together with the description it is measured in."""

    degree: float
    description: AngleDescription = CANONICAL


class Position(NamedTuple):
    """Canvas coordinates: origin top-left, y growing downward."""

    x: float
    y: float


DirectionLike = Union[Direction, str]


@dataclass
class SliderConfig:
    """Appearance and behaviour of a single slider instance."""

    angle_type: AngleDescription = field(
        default_factory=lambda: AngleDescription(Direction.CW, Axis.NEG_Y)
    )
    start_angle: float = 45.0
    end_angle: float = 315.0
    min_value: float = 0.0
    max_value: float = 100.0
    size: int = 200
    track_width: int = 16
    arc_color: Optional[str] = None  # None -> conical gradient
    arc_background_color: str = "#cccccc"
    coerce_to_int: bool = False
    coerce_to_half: bool = False
    coerce_to_quarter: bool = False
    disabled: bool = False
    animated: bool = False
    no_control: bool = False
    read_only: bool = False

    @property
    def track_inner_radius(self) -> float:
        return self.size / 2.0 - self.track_width

    @property
    def knob_radius(self) -> float:
        """Distance from the centre to the middle of the track."""
        return self.track_inner_radius + self.track_width / 2.0

    @property
    def canvas_padding(self) -> int:
        """Margin around the canvas so the rounded caps and knob are not clipped."""
        return int(math.ceil(self.track_width * 0.45))

    @property
    def knob_size(self) -> int:
        return int(math.ceil(self.track_width * 1.7))

    def validate(self) -> None:
        """Raise if the configuration cannot be drawn or mapped."""
        if self.end_angle <= self.start_angle:
            raise InvalidRangeError(self.start_angle, self.end_angle)
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.track_width <= 0 or self.track_width * 2 > self.size:
            raise ValueError(
                f"track_width must be in (0, size / 2], got {self.track_width}"
            )

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["angle_type"] = self.angle_type.to_dict()
        return data

    @staticmethod
    def from_dict(data: Dict) -> "SliderConfig":
        arc_color = data.get("arc_color")
        return SliderConfig(
            angle_type=AngleDescription.from_dict(
                data.get("angle_type", {"direction": "cw", "axis": "-y"})
            ),
            start_angle=float(data.get("start_angle", 45.0)),
            end_angle=float(data.get("end_angle", 315.0)),
            min_value=float(data.get("min_value", 0.0)),
            max_value=float(data.get("max_value", 100.0)),
            size=int(data.get("size", 200)),
            track_width=int(data.get("track_width", 16)),
            arc_color=None if arc_color is None else str(arc_color),
            arc_background_color=str(data.get("arc_background_color", "#cccccc")),
            coerce_to_int=bool(data.get("coerce_to_int", False)),
            coerce_to_half=bool(data.get("coerce_to_half", False)),
            coerce_to_quarter=bool(data.get("coerce_to_quarter", False)),
            disabled=bool(data.get("disabled", False)),
            animated=bool(data.get("animated", False)),
            no_control=bool(data.get("no_control", False)),
            read_only=bool(data.get("read_only", False)),
        )


@dataclass
class UIState:
    """User-interface level preferences for the demo window."""

    value: float = 50.0
    always_on_top: bool = False


@dataclass
class AppConfig:
    """Persisted configuration for the demo application."""

    slider: SliderConfig = field(default_factory=SliderConfig)
    ui: UIState = field(default_factory=UIState)

    def to_json(self) -> str:
        return json.dumps(
            {"slider": self.slider.to_dict(), "ui": asdict(self.ui)}, indent=2
        )

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict = json.loads(text)
        u = data.get("ui", {})
        return AppConfig(
            slider=SliderConfig.from_dict(data.get("slider", {})),
            ui=UIState(
                value=float(u.get("value", 50.0)),
                always_on_top=bool(u.get("always_on_top", False)),
            ),
        )


__all__ = [
    "Direction",
    "Axis",
    "AngleDescription",
    "CANONICAL",
    "Angle",
    "Position",
    "DirectionLike",
    "SliderConfig",
    "UIState",
    "AppConfig",
]
