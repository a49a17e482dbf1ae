"""SVG output for arc paths and complete sliders."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import uuid
import xml.dom.minidom as dom

from ..geometry.paths import ArcPath, ArcTo, ClosePath, MoveTo
from ..layout import compute_layout
from ..models import SliderConfig
from ..style import (
    DISABLED_COLOR,
    DISABLED_GRADIENT_STOPS,
    GRADIENT_STOPS,
    GRIP_COLOR,
    KNOB_COLOR,
    css_conic_gradient,
)

SVG_NS = "http://www.w3.org/2000/svg"


def _num(v: float) -> str:
    text = f"{float(v):.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _flag(b: bool) -> str:
    return "1" if b else "0"


def to_svg_path(path: ArcPath) -> str:
    """Translate an :class:`ArcPath` into SVG path data."""
    parts = []
    for seg in path:
        if isinstance(seg, MoveTo):
            parts.append(f"M {_num(seg.point.x)},{_num(seg.point.y)}")
        elif isinstance(seg, ArcTo):
            parts.append(
                f"A {_num(seg.rx)} {_num(seg.ry)} {_num(seg.rotation)} "
                f"{_flag(seg.large_arc)} {_flag(seg.sweep)} "
                f"{_num(seg.end.x)} {_num(seg.end.y)}"
            )
        elif isinstance(seg, ClosePath):
            parts.append("Z")
        else:  # pragma: no cover - PathSegment is a closed union
            raise TypeError(f"Unknown path segment {seg!r}")
    return " ".join(parts)


def _element_under(
    parent: dom.Node,
    name: str,
    attributes: Iterable[Tuple[str, str]] = (),
) -> dom.Element:
    doc = parent if isinstance(parent, dom.Document) else parent.ownerDocument
    el = doc.createElement(name)
    for key, value in attributes:
        el.setAttribute(key, value)
    parent.appendChild(el)
    return el


def _cursor(cfg: SliderConfig) -> str:
    if cfg.no_control:
        return "default"
    return "not-allowed" if cfg.disabled else "pointer"


KNOB_SHADOW_ID = "knob-shadow"
_HARD_ALPHA = "0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 127 0"
_SHADOW_TINT = "0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0.1 0"


def _knob_shadow(defs: dom.Element) -> dom.Element:
    """Two stacked soft drop shadows under the knob disc."""
    flt = _element_under(
        defs,
        "filter",
        (
            ("id", KNOB_SHADOW_ID),
            ("x", "0"),
            ("y", "0"),
            ("width", "46"),
            ("height", "46"),
            ("filterUnits", "userSpaceOnUse"),
            ("color-interpolation-filters", "sRGB"),
        ),
    )
    _element_under(flt, "feFlood", (("flood-opacity", "0"), ("result", "bg")))
    below = "bg"
    for n, (erode, dy, blur) in enumerate((("2", "2", "2"), ("1", "4", "3")), 1):
        result = f"shadow{n}"
        _element_under(
            flt,
            "feColorMatrix",
            (
                ("in", "SourceAlpha"),
                ("type", "matrix"),
                ("values", _HARD_ALPHA),
                ("result", "hardAlpha"),
            ),
        )
        _element_under(
            flt,
            "feMorphology",
            (
                ("radius", erode),
                ("operator", "erode"),
                ("in", "SourceAlpha"),
                ("result", result),
            ),
        )
        _element_under(flt, "feOffset", (("dy", dy),))
        _element_under(flt, "feGaussianBlur", (("stdDeviation", blur),))
        _element_under(flt, "feComposite", (("in2", "hardAlpha"), ("operator", "out")))
        _element_under(
            flt, "feColorMatrix", (("type", "matrix"), ("values", _SHADOW_TINT))
        )
        _element_under(
            flt,
            "feBlend",
            (("mode", "normal"), ("in2", below), ("result", result)),
        )
        below = result
    _element_under(
        flt,
        "feBlend",
        (
            ("mode", "normal"),
            ("in", "SourceGraphic"),
            ("in2", below),
            ("result", "shape"),
        ),
    )
    return flt


def slider_document(
    cfg: SliderConfig, value: float, clip_id: Optional[str] = None
) -> dom.Document:
    """Build a standalone SVG document showing the slider at ``value``."""
    layout = compute_layout(cfg, value)
    pad = cfg.canvas_padding
    size = cfg.size

    document = dom.Document()
    top = _element_under(
        document,
        "svg",
        (
            ("xmlns", SVG_NS),
            ("width", str(size)),
            ("height", str(size)),
            ("viewBox", f"{_num(-pad / 2)} {_num(-pad / 2)} {size + pad} {size + pad}"),
        ),
    )

    _element_under(
        top,
        "path",
        (
            ("d", to_svg_path(layout.background_path)),
            ("fill", cfg.arc_background_color),
        ),
    )

    value_d = to_svg_path(layout.value_path)
    if cfg.arc_color:
        _element_under(
            top,
            "path",
            (("d", value_d), ("fill", DISABLED_COLOR if cfg.disabled else cfg.arc_color)),
        )
    else:
        # Several sliders can share a page, so the clip id must be unique.
        clip_id = clip_id or f"arc-background-clip-{uuid.uuid4()}"
        defs = _element_under(top, "defs")
        clip = _element_under(defs, "clipPath", (("id", clip_id),))
        _element_under(clip, "path", (("d", value_d),))
        fo = _element_under(
            top,
            "foreignObject",
            (
                ("width", str(size)),
                ("height", str(size)),
                ("clip-path", f"url(#{clip_id})"),
            ),
        )
        stops = DISABLED_GRADIENT_STOPS if cfg.disabled else GRADIENT_STOPS
        _element_under(
            fo,
            "div",
            (
                ("xmlns", "http://www.w3.org/1999/xhtml"),
                (
                    "style",
                    "width: 100%; height: 100%; background-image: "
                    + css_conic_gradient(stops),
                ),
            ),
        )

    knob = cfg.knob_size
    kx, ky = layout.knob_position
    knob_svg = _element_under(
        top,
        "svg",
        (
            ("x", _num(kx - knob / 2)),
            ("y", _num(ky - knob / 2)),
            ("width", str(knob)),
            ("height", str(knob)),
            ("viewBox", "0 0 46 46"),
            ("fill", "none"),
            ("preserveAspectRatio", "xMidYMid meet"),
            ("style", f"cursor: {_cursor(cfg)}"),
        ),
    )
    # The disc sits above centre to leave room for the shadow below it.
    body = _element_under(knob_svg, "g", (("filter", f"url(#{KNOB_SHADOW_ID})"),))
    _element_under(
        body,
        "circle",
        (
            ("cx", "23"),
            ("cy", "19"),
            ("r", "18"),
            ("fill", DISABLED_COLOR if cfg.disabled else KNOB_COLOR),
        ),
    )
    _element_under(
        body,
        "circle",
        (
            ("cx", "23"),
            ("cy", "19"),
            ("r", "17.25"),
            ("stroke", GRIP_COLOR),
            ("stroke-width", "1.5"),
        ),
    )
    for y in (14, 19, 24):
        _element_under(
            knob_svg,
            "path",
            (
                ("d", f"M15 {y}H31"),
                ("stroke", GRIP_COLOR),
                ("stroke-width", "1.5"),
                ("stroke-linecap", "round"),
            ),
        )
    _knob_shadow(_element_under(knob_svg, "defs"))
    return document


def slider_svg(cfg: SliderConfig, value: float, clip_id: Optional[str] = None) -> str:
    """Return :func:`slider_document` serialised as SVG text."""
    return slider_document(cfg, value, clip_id).toprettyxml(indent="  ")


__all__ = ["to_svg_path", "slider_document", "slider_svg"]
