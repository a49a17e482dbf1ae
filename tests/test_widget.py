"""Interaction tests for the Qt slider widget, run on the offscreen platform."""

from __future__ import annotations

from dataclasses import replace
import json

import pytest

pytest.importorskip("PySide6")

from PySide6 import QtCore, QtGui  # noqa: E402

from circular_slider.app import (  # noqa: E402
    CircularSlider,
    ControlDialog,
    MainController,
    cursor_shape,
)
from circular_slider.geometry import arc_path_with_rounded_ends  # noqa: E402
from circular_slider.models import (  # noqa: E402
    CANONICAL,
    AngleDescription,
    AppConfig,
    SliderConfig,
)
from circular_slider.utils.qt import arc_path_to_qpainterpath  # noqa: E402

Type = QtCore.QEvent.Type
# With a 208x208 widget the default canvas maps 1:1 with a 4px offset.
TOP = QtCore.QPointF(104, 12)
RIGHT = QtCore.QPointF(196, 104)


def _slider(qapp, **changes) -> CircularSlider:
    slider = CircularSlider(replace(SliderConfig(), **changes), 10.0)
    slider.resize(208, 208)
    return slider


def _record(slider: CircularSlider):
    values: list = []
    finished: list = []
    slider.valueChanged.connect(values.append)
    slider.controlFinished.connect(lambda: finished.append(True))
    return values, finished


def _mouse(kind: QtCore.QEvent.Type, pos: QtCore.QPointF) -> QtGui.QMouseEvent:
    buttons = (
        QtCore.Qt.MouseButton.NoButton
        if kind == Type.MouseButtonRelease
        else QtCore.Qt.MouseButton.LeftButton
    )
    return QtGui.QMouseEvent(
        kind,
        pos,
        pos,
        QtCore.Qt.MouseButton.LeftButton,
        buttons,
        QtCore.Qt.KeyboardModifier.NoModifier,
    )


def test_canvas_transform_offsets_by_half_padding(qapp) -> None:
    slider = _slider(qapp)
    mapped = slider.map_to_canvas(TOP)
    assert (mapped.x(), mapped.y()) == pytest.approx((100, 8))


def test_process_selection_emits_value(qapp) -> None:
    slider = _slider(qapp)
    values, _ = _record(slider)
    slider.process_selection(TOP)
    assert values == [pytest.approx(50)]
    assert slider.value() == pytest.approx(50)


def test_process_selection_coerces(qapp) -> None:
    slider = _slider(qapp, coerce_to_quarter=True)
    values, _ = _record(slider)
    slider.process_selection(RIGHT)
    assert values == [83.25]


@pytest.mark.parametrize("flag", ["disabled", "read_only"])
def test_locked_slider_keeps_value(qapp, flag: str) -> None:
    slider = _slider(qapp, **{flag: True})
    values, _ = _record(slider)
    slider.process_selection(TOP)
    assert values == []
    assert slider.value() == 10.0


@pytest.mark.parametrize("flag", ["animated", "no_control"])
def test_pointer_input_ignored(qapp, flag: str) -> None:
    slider = _slider(qapp, **{flag: True})
    values, finished = _record(slider)
    slider.mousePressEvent(_mouse(Type.MouseButtonPress, TOP))
    slider.handle_touch(Type.TouchBegin, 1, TOP)
    slider.handle_touch(Type.TouchEnd, 0, TOP)
    assert values == []
    assert finished == []


def test_mouse_drag_cycle(qapp) -> None:
    slider = _slider(qapp)
    values, finished = _record(slider)

    slider.mouseMoveEvent(_mouse(Type.MouseMove, TOP))
    assert values == []  # not dragging yet

    slider.mousePressEvent(_mouse(Type.MouseButtonPress, TOP))
    assert slider.is_dragging()
    slider.mouseMoveEvent(_mouse(Type.MouseMove, RIGHT))
    slider.mouseReleaseEvent(_mouse(Type.MouseButtonRelease, RIGHT))

    assert values == [pytest.approx(50), pytest.approx(250 / 3)]
    assert finished == [True]
    assert not slider.is_dragging()

    slider.mouseReleaseEvent(_mouse(Type.MouseButtonRelease, RIGHT))
    assert finished == [True]


def test_single_touch_sequence(qapp) -> None:
    slider = _slider(qapp)
    values, finished = _record(slider)
    slider.handle_touch(Type.TouchBegin, 1, TOP)
    slider.handle_touch(Type.TouchUpdate, 1, RIGHT)
    slider.handle_touch(Type.TouchEnd, 0, RIGHT)
    assert values == [
        pytest.approx(50),
        pytest.approx(250 / 3),
        pytest.approx(250 / 3),
    ]
    assert finished == [True]


def test_multi_touch_is_ignored(qapp) -> None:
    slider = _slider(qapp)
    values, finished = _record(slider)
    slider.handle_touch(Type.TouchUpdate, 2, TOP)
    slider.handle_touch(Type.TouchEnd, 1, TOP)
    assert values == []
    assert finished == []


def test_touch_cancel_finishes_control(qapp) -> None:
    slider = _slider(qapp)
    values, finished = _record(slider)
    slider.handle_touch(Type.TouchCancel, 0, None)
    assert values == []
    assert finished == [True]


@pytest.mark.parametrize(
    ("changes", "shape"),
    [
        ({}, QtCore.Qt.CursorShape.PointingHandCursor),
        ({"animated": True}, QtCore.Qt.CursorShape.OpenHandCursor),
        ({"disabled": True}, QtCore.Qt.CursorShape.ForbiddenCursor),
        ({"disabled": True, "no_control": True}, QtCore.Qt.CursorShape.ArrowCursor),
    ],
)
def test_cursor_shape(changes: dict, shape: QtCore.Qt.CursorShape) -> None:
    assert cursor_shape(replace(SliderConfig(), **changes)) == shape


def test_set_config_validates(qapp) -> None:
    slider = _slider(qapp)
    with pytest.raises(ValueError):
        slider.set_config(replace(SliderConfig(), end_angle=0))
    assert slider.config().end_angle == 315


def test_widget_paints_offscreen(qapp) -> None:
    slider = _slider(qapp, arc_color="#ff0000")
    image = slider.grab().toImage()
    assert image.width() > 0
    slider.set_config(SliderConfig())
    assert not slider.grab().isNull()


@pytest.mark.parametrize(
    ("end", "angle_type", "bounds"),
    [
        (90, CANONICAL, (95, 50, 150, 105)),
        (90, AngleDescription("cw", "+x"), (95, 95, 150, 150)),
        (270, CANONICAL, (50, 50, 150, 150)),
    ],
)
def test_qt_path_outline(end: float, angle_type: AngleDescription, bounds) -> None:
    path = arc_path_with_rounded_ends(
        0, end, angle_type, 40, 10, 200, angle_type.direction
    )
    qpath = arc_path_to_qpainterpath(path)

    first = qpath.elementAt(0)
    last = qpath.elementAt(qpath.elementCount() - 1)
    assert first.isMoveTo()
    assert (first.x, first.y) == pytest.approx((140, 100))
    assert (last.x, last.y) == pytest.approx((140, 100), abs=1e-4)

    rect = qpath.boundingRect()
    left, top, right, bottom = bounds
    assert rect.left() == pytest.approx(left, abs=0.5)
    assert rect.top() == pytest.approx(top, abs=0.5)
    assert rect.right() == pytest.approx(right, abs=0.5)
    assert rect.bottom() == pytest.approx(bottom, abs=0.5)


def test_qt_path_for_non_finite_angle_is_empty() -> None:
    path = arc_path_with_rounded_ends(float("inf"), 90, CANONICAL, 40, 10, 200, "ccw")
    assert arc_path_to_qpainterpath(path).isEmpty()


def test_widget_paints_empty_value_range(qapp) -> None:
    slider = _slider(qapp, angle_type=CANONICAL, min_value=0, max_value=0)
    slider.set_value(50)
    assert not slider.grab().isNull()


def test_control_dialog_reports_invalid_range(qapp) -> None:
    dialog = ControlDialog(AppConfig(), "1.0")
    emitted: list = []
    dialog.configChanged.connect(emitted.append)
    dialog.end_spin.setValue(10.0)
    assert emitted == []
    assert "end_angle" in dialog.status_label.text()

    dialog.end_spin.setValue(300.0)
    assert emitted[-1].end_angle == 300.0


def test_controller_persists_and_exports(qapp, tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("not json", encoding="utf-8")
    ctrl = MainController(qapp, config_path=config_path)
    assert ctrl.cfg == AppConfig()

    ctrl.window.slider.process_selection(TOP)
    ctrl.window.slider.controlFinished.emit()
    saved = json.loads(config_path.read_text(encoding="utf-8"))
    assert saved["ui"]["value"] == pytest.approx(ctrl.window.slider.value())

    out = tmp_path / "slider.svg"
    ctrl.export_svg(str(out))
    assert out.read_text(encoding="utf-8").lstrip().startswith("<?xml")
    assert "Exported" in ctrl.ctrl.status_label.text()

    ctrl.window.close()
    ctrl.ctrl.close()
