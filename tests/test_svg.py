"""SVG rendering of arc outlines and whole sliders."""

from __future__ import annotations

from dataclasses import replace
import re
import xml.dom.minidom as dom

import pytest

from circular_slider.geometry import arc_path_with_rounded_ends
from circular_slider.models import CANONICAL, SliderConfig
from circular_slider.utils.svg import slider_document, slider_svg, to_svg_path


def test_quarter_path_data() -> None:
    path = arc_path_with_rounded_ends(0, 90, CANONICAL, 40, 10, 200, "ccw")
    assert to_svg_path(path) == (
        "M 140,100 "
        "A 40 40 0 0 0 100 60 "
        "A 5 5 0 0 1 100 50 "
        "A 50 50 0 0 1 150 100 "
        "A 5 5 0 0 1 140 100 Z"
    )


def test_path_data_commands() -> None:
    path = arc_path_with_rounded_ends(10, 300, CANONICAL, 33.3, 7.7, 120, "cw")
    d = to_svg_path(path)
    commands = re.findall(r"[A-Za-z]", d)
    assert commands == ["M", "A", "A", "A", "A", "Z"]
    assert "e" not in d  # no exponent notation


def _children(node: dom.Node, name: str) -> list:
    return [c for c in node.childNodes if getattr(c, "tagName", None) == name]


def test_slider_document_structure_with_gradient() -> None:
    doc = slider_document(SliderConfig(), 50.0, clip_id="clip-1")
    top = doc.documentElement
    assert top.tagName == "svg"
    assert top.getAttribute("width") == "200"
    assert top.getAttribute("viewBox") == "-4 -4 208 208"

    paths = _children(top, "path")
    assert len(paths) == 1  # background track
    assert paths[0].getAttribute("fill") == "#cccccc"

    clip = doc.getElementsByTagName("clipPath")[0]
    assert clip.getAttribute("id") == "clip-1"
    fo = _children(top, "foreignObject")[0]
    assert fo.getAttribute("clip-path") == "url(#clip-1)"
    assert "conic-gradient" in fo.getElementsByTagName("div")[0].getAttribute("style")


def test_slider_document_knob_position() -> None:
    doc = slider_document(SliderConfig(), 50.0)
    knob = _children(doc.documentElement, "svg")[0]
    # Value 50 sits at the top of the default 45..315 clock dial.
    assert float(knob.getAttribute("x")) == pytest.approx(86)
    assert float(knob.getAttribute("y")) == pytest.approx(-6)
    assert knob.getAttribute("width") == "28"
    assert len(knob.getElementsByTagName("path")) == 3


def test_slider_document_solid_colour_and_disabled() -> None:
    cfg = replace(SliderConfig(), arc_color="#ff0000")
    fills = [
        p.getAttribute("fill")
        for p in _children(slider_document(cfg, 20.0).documentElement, "path")
    ]
    assert fills == ["#cccccc", "#ff0000"]

    disabled = replace(cfg, disabled=True)
    doc = slider_document(disabled, 20.0)
    fills = [p.getAttribute("fill") for p in _children(doc.documentElement, "path")]
    assert fills == ["#cccccc", "#999999"]
    knob = _children(doc.documentElement, "svg")[0]
    assert "not-allowed" in knob.getAttribute("style")


def test_slider_svg_is_parseable_and_unique_clip_ids() -> None:
    first = slider_svg(SliderConfig(), 10.0)
    second = slider_svg(SliderConfig(), 10.0)
    ids = [
        dom.parseString(text).getElementsByTagName("clipPath")[0].getAttribute("id")
        for text in (first, second)
    ]
    assert ids[0] != ids[1]


def test_knob_glyph_with_drop_shadow() -> None:
    doc = slider_document(SliderConfig(), 50.0)
    knob = _children(doc.documentElement, "svg")[0]
    group = _children(knob, "g")[0]
    assert group.getAttribute("filter") == "url(#knob-shadow)"
    circles = group.getElementsByTagName("circle")
    assert [c.getAttribute("cy") for c in circles] == ["19", "19"]
    assert [c.getAttribute("r") for c in circles] == ["18", "17.25"]
    grips = [p.getAttribute("d") for p in _children(knob, "path")]
    assert grips == ["M15 14H31", "M15 19H31", "M15 24H31"]

    flt = knob.getElementsByTagName("filter")[0]
    assert flt.getAttribute("id") == "knob-shadow"
    offsets = [o.getAttribute("dy") for o in flt.getElementsByTagName("feOffset")]
    assert offsets == ["2", "4"]
    assert flt.getElementsByTagName("feBlend")[-1].getAttribute("in") == "SourceGraphic"


def test_empty_value_range_still_renders() -> None:
    cfg = replace(SliderConfig(), min_value=5, max_value=5)
    text = slider_svg(cfg, 7.0)
    assert dom.parseString(text).documentElement.tagName == "svg"
