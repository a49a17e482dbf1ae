"""Qt widget and demo application for the circular slider."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import logging
import math
import sys

from PySide6 import QtCore, QtGui, QtWidgets

from . import __version__ as APP_VERSION
from .layout import compute_layout, value_at
from .logging_config import setup_logging
from .models import AngleDescription, AppConfig, Axis, Direction, SliderConfig
from .style import (
    DISABLED_COLOR,
    DISABLED_GRADIENT_STOPS,
    GRADIENT_STOPS,
    GRIP_COLOR,
    KNOB_COLOR,
)
from .utils import clamp
from .utils.qt import arc_path_to_qpainterpath, conical_gradient
from .utils.svg import slider_svg

logger = logging.getLogger(__name__)

# Knob glyph is drawn in a 46x46 box: an 18 unit disc centred at (23, 19).
_KNOB_BOX = 46.0
_KNOB_RADIUS = 18.0
_KNOB_RAISE = 4.0


def cursor_shape(cfg: SliderConfig) -> QtCore.Qt.CursorShape:
    """Cursor shown over the slider for the given behaviour flags."""
    if cfg.no_control:
        return QtCore.Qt.CursorShape.ArrowCursor
    if cfg.disabled:
        return QtCore.Qt.CursorShape.ForbiddenCursor
    if cfg.animated:
        return QtCore.Qt.CursorShape.OpenHandCursor
    return QtCore.Qt.CursorShape.PointingHandCursor


# ------------------------------ Slider Widget ---------------------------------


class CircularSlider(QtWidgets.QWidget):
    """A knob dragged along an arc, emitting the value under the pointer."""

    valueChanged = QtCore.Signal(float)
    controlFinished = QtCore.Signal()

    def __init__(
        self,
        cfg: Optional[SliderConfig] = None,
        value: float = 0.0,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._cfg = cfg if cfg is not None else SliderConfig()
        self._cfg.validate()
        self._value = float(value)
        self._dragging = False

        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding,
        )
        self.setMinimumSize(48, 48)
        self.setCursor(cursor_shape(self._cfg))

    # ----------------------------- Properties ---------------------------------

    def config(self) -> SliderConfig:
        return self._cfg

    def set_config(self, cfg: SliderConfig) -> None:
        cfg.validate()
        self._cfg = cfg
        self.setCursor(cursor_shape(cfg))
        self.updateGeometry()
        self.update()

    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        self._value = float(value)
        self.update()

    def is_dragging(self) -> bool:
        return self._dragging

    def sizeHint(self) -> QtCore.QSize:
        side = self._cfg.size + self._cfg.canvas_padding
        return QtCore.QSize(side, side)

    # ------------------------- Coordinate transforms --------------------------

    def canvas_transform(self) -> QtGui.QTransform:
        """Transform from canvas coordinates to widget coordinates.

        The canvas plus its padding is scaled uniformly and centred in the widget.
        """
        pad = float(self._cfg.canvas_padding)
        extent = self._cfg.size + pad
        w = float(self.width())
        h = float(self.height())
        scale = min(w, h) / extent if extent > 0 else 1.0
        tx = (w - extent * scale) / 2.0 + (pad / 2.0) * scale
        ty = (h - extent * scale) / 2.0 + (pad / 2.0) * scale
        t = QtGui.QTransform()
        t.translate(tx, ty)
        t.scale(scale, scale)
        return t

    def map_to_canvas(self, pos: QtCore.QPointF) -> QtCore.QPointF:
        inverse, ok = self.canvas_transform().inverted()
        if not ok:
            return QtCore.QPointF(pos)
        return inverse.map(QtCore.QPointF(pos))

    # ----------------------------- Interaction --------------------------------

    def _pointer_enabled(self) -> bool:
        return not (self._cfg.animated or self._cfg.no_control)

    def process_selection(self, pos: QtCore.QPointF) -> None:
        """Turn a pointer position in widget coordinates into a new value."""
        if self._cfg.read_only:
            return
        canvas = self.map_to_canvas(pos)
        value = value_at(self._cfg, canvas.x(), canvas.y())
        if self._cfg.disabled:
            return
        self._value = value
        self.update()
        self.valueChanged.emit(value)

    def _begin_drag(self, pos: QtCore.QPointF) -> None:
        self._dragging = True
        self.handle_pointer(pos)

    def _end_drag(self) -> None:
        if not self._dragging:
            return
        self._dragging = False
        self.controlFinished.emit()

    def handle_pointer(self, pos: QtCore.QPointF) -> None:
        if not self._pointer_enabled():
            return
        self.process_selection(pos)

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self._begin_drag(e.position())
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        if self._dragging:
            self.handle_pointer(e.position())
        e.accept()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        self._end_drag()
        e.accept()

    def enterEvent(self, e: QtGui.QEnterEvent) -> None:
        # Entering with the left button held acts like a press.
        if e.buttons() & QtCore.Qt.MouseButton.LeftButton:
            self._begin_drag(e.position())
        super().enterEvent(e)

    def leaveEvent(self, e: QtCore.QEvent) -> None:
        self._end_drag()
        super().leaveEvent(e)

    def handle_touch(
        self,
        kind: QtCore.QEvent.Type,
        active_touches: int,
        pos: Optional[QtCore.QPointF],
    ) -> None:
        """Process one touch event.

        Only single touches are handled: the event is dropped when more than
        one touch is active, or when a touch ends while another one remains.
        """
        if not self._pointer_enabled():
            return
        ending = kind in (QtCore.QEvent.Type.TouchEnd, QtCore.QEvent.Type.TouchCancel)
        if active_touches > 1 or (
            kind == QtCore.QEvent.Type.TouchEnd and active_touches > 0
        ):
            return
        if pos is not None:
            self.process_selection(pos)
        if ending:
            self.controlFinished.emit()

    def event(self, e: QtCore.QEvent) -> bool:
        if e.type() in (
            QtCore.QEvent.Type.TouchBegin,
            QtCore.QEvent.Type.TouchUpdate,
            QtCore.QEvent.Type.TouchEnd,
            QtCore.QEvent.Type.TouchCancel,
        ):
            points = e.points()  # type: ignore[attr-defined]
            released = QtGui.QEventPoint.State.Released
            stationary = QtGui.QEventPoint.State.Stationary
            active = sum(1 for p in points if p.state() != released)
            changed = [p for p in points if p.state() != stationary]
            pos = changed[0].position() if changed else None
            self.handle_touch(e.type(), active, pos)
            e.accept()
            return True
        return super().event(e)

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        cfg = self._cfg
        layout = compute_layout(cfg, self._value)

        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.setTransform(self.canvas_transform())
        painter.setPen(QtCore.Qt.PenStyle.NoPen)

        painter.setBrush(QtGui.QBrush(QtGui.QColor(cfg.arc_background_color)))
        painter.drawPath(arc_path_to_qpainterpath(layout.background_path))

        if cfg.arc_color:
            color = DISABLED_COLOR if cfg.disabled else cfg.arc_color
            brush = QtGui.QBrush(QtGui.QColor(color))
        else:
            stops = DISABLED_GRADIENT_STOPS if cfg.disabled else GRADIENT_STOPS
            center = QtCore.QPointF(cfg.size / 2.0, cfg.size / 2.0)
            brush = QtGui.QBrush(conical_gradient(center, stops))
        painter.setBrush(brush)
        painter.drawPath(arc_path_to_qpainterpath(layout.value_path))

        self._paint_knob(painter, layout.knob_position.x, layout.knob_position.y)
        painter.end()

    def _paint_knob(self, painter: QtGui.QPainter, x: float, y: float) -> None:
        cfg = self._cfg
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        unit = cfg.knob_size / _KNOB_BOX
        radius = _KNOB_RADIUS * unit
        # Same glyph as the SVG export: disc raised above the box centre
        # with a faint shadow underneath.
        y -= _KNOB_RAISE * unit
        shadow = QtGui.QColor(0, 0, 0, 26)
        painter.setBrush(QtGui.QBrush(shadow))
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.drawEllipse(QtCore.QPointF(x, y + 3.0 * unit), radius, radius)

        fill = DISABLED_COLOR if cfg.disabled else KNOB_COLOR
        pen = QtGui.QPen(QtGui.QColor(GRIP_COLOR))
        pen.setWidthF(1.5 * unit)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(fill)))
        painter.setPen(pen)
        painter.drawEllipse(QtCore.QPointF(x, y), radius, radius)

        pen.setCapStyle(QtCore.Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        half = 8.0 * unit
        for dy in (-5.0, 0.0, 5.0):
            yy = y + dy * unit
            painter.drawLine(QtCore.QPointF(x - half, yy), QtCore.QPointF(x + half, yy))


# ------------------------------ Slider Window ---------------------------------


class SliderWindow(QtWidgets.QWidget):
    """Top level window showing the slider and its current value."""

    def __init__(self, cfg: AppConfig) -> None:
        super().__init__(None)
        self.setWindowTitle("Circular slider")
        self.setWindowFlag(
            QtCore.Qt.WindowType.WindowStaysOnTopHint, cfg.ui.always_on_top
        )
        self.slider = CircularSlider(cfg.slider, cfg.ui.value, self)
        self.value_label = QtWidgets.QLabel(self)
        self.value_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        font = self.value_label.font()
        font.setPointSizeF(font.pointSizeF() * 1.6)
        self.value_label.setFont(font)

        v = QtWidgets.QVBoxLayout(self)
        v.addWidget(self.slider, stretch=1)
        v.addWidget(self.value_label, stretch=0)

        self.slider.valueChanged.connect(self.show_value)
        self.show_value(cfg.ui.value)

    def show_value(self, value: float) -> None:
        self.value_label.setText(f"{value:.2f}")


# ---------------------------- Control Dialog UI -------------------------------


class ControlDialog(QtWidgets.QDialog):
    configChanged = QtCore.Signal(object)  # SliderConfig
    valueEdited = QtCore.Signal(float)
    exportRequested = QtCore.Signal()
    alwaysOnTopToggled = QtCore.Signal(bool)

    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__(None)
        self._app_version = app_version or "unknown"
        self.setWindowTitle(f"circular_slider {self._app_version} — Settings")
        self.setMinimumWidth(420)
        s = cfg.slider

        self.direction_combo = QtWidgets.QComboBox()
        for d in Direction:
            self.direction_combo.addItem(d.value, userData=d.value)
        self.direction_combo.setCurrentIndex(
            self.direction_combo.findData(s.angle_type.direction.value)
        )

        self.axis_combo = QtWidgets.QComboBox()
        for a in Axis:
            self.axis_combo.addItem(a.value, userData=a.value)
        self.axis_combo.setCurrentIndex(self.axis_combo.findData(s.angle_type.axis.value))

        self.start_spin = self._angle_spin(s.start_angle)
        self.end_spin = self._angle_spin(s.end_angle)
        self.min_spin = self._value_spin(s.min_value)
        self.max_spin = self._value_spin(s.max_value)
        self.value_spin = self._value_spin(cfg.ui.value)

        self.size_spin = QtWidgets.QSpinBox()
        self.size_spin.setRange(48, 2000)
        self.size_spin.setValue(s.size)

        self.track_spin = QtWidgets.QSpinBox()
        self.track_spin.setRange(1, max(1, s.size // 2))
        self.track_spin.setValue(int(clamp(s.track_width, 1, max(1, s.size // 2))))

        self.color_edit = QtWidgets.QLineEdit(s.arc_color or "")
        self.color_edit.setPlaceholderText("empty: gradient")
        self.background_edit = QtWidgets.QLineEdit(s.arc_background_color)

        self.int_check = QtWidgets.QCheckBox("Whole")
        self.int_check.setChecked(s.coerce_to_int)
        self.half_check = QtWidgets.QCheckBox("Half")
        self.half_check.setChecked(s.coerce_to_half)
        self.quarter_check = QtWidgets.QCheckBox("Quarter")
        self.quarter_check.setChecked(s.coerce_to_quarter)

        self.disabled_check = QtWidgets.QCheckBox("Disabled")
        self.disabled_check.setChecked(s.disabled)
        self.animated_check = QtWidgets.QCheckBox("Animated")
        self.animated_check.setChecked(s.animated)
        self.no_control_check = QtWidgets.QCheckBox("No control")
        self.no_control_check.setChecked(s.no_control)
        self.read_only_check = QtWidgets.QCheckBox("Read only")
        self.read_only_check.setChecked(s.read_only)

        self.topmost_check = QtWidgets.QCheckBox("Enable")
        self.topmost_check.setChecked(cfg.ui.always_on_top)
        self.topmost_check.toggled.connect(self.alwaysOnTopToggled)

        self.export_btn = QtWidgets.QPushButton("Export SVG…")
        self.export_btn.clicked.connect(self.exportRequested)

        self.status_label = QtWidgets.QLabel("Drag the knob or edit the settings.")
        self.status_label.setWordWrap(True)

        coerce_row = QtWidgets.QHBoxLayout()
        for w in (self.int_check, self.half_check, self.quarter_check):
            coerce_row.addWidget(w)
        flags_row = QtWidgets.QGridLayout()
        flags_row.addWidget(self.disabled_check, 0, 0)
        flags_row.addWidget(self.animated_check, 0, 1)
        flags_row.addWidget(self.no_control_check, 1, 0)
        flags_row.addWidget(self.read_only_check, 1, 1)

        form = QtWidgets.QFormLayout()
        form.setFieldGrowthPolicy(
            QtWidgets.QFormLayout.FieldGrowthPolicy.AllNonFixedFieldsGrow
        )
        form.addRow("Direction:", self.direction_combo)
        form.addRow("Zero axis:", self.axis_combo)
        form.addRow("Start angle (°):", self.start_spin)
        form.addRow("End angle (°):", self.end_spin)
        form.addRow("Minimum value:", self.min_spin)
        form.addRow("Maximum value:", self.max_spin)
        form.addRow("Value:", self.value_spin)
        form.addRow("Size (px):", self.size_spin)
        form.addRow("Track width (px):", self.track_spin)
        form.addRow("Arc colour:", self.color_edit)
        form.addRow("Background colour:", self.background_edit)
        form.addRow("Snap to:", coerce_row)
        form.addRow("Behaviour:", flags_row)
        form.addRow("Always on top:", self.topmost_check)
        form.addRow(self.export_btn)

        v = QtWidgets.QVBoxLayout(self)
        v.addLayout(form)
        v.addWidget(self.status_label)

        for combo in (self.direction_combo, self.axis_combo):
            combo.currentIndexChanged.connect(self._emit_config)
        for spin in (
            self.start_spin,
            self.end_spin,
            self.min_spin,
            self.max_spin,
            self.size_spin,
            self.track_spin,
        ):
            spin.valueChanged.connect(self._emit_config)
        for edit in (self.color_edit, self.background_edit):
            edit.editingFinished.connect(self._emit_config)
        for check in (
            self.int_check,
            self.half_check,
            self.quarter_check,
            self.disabled_check,
            self.animated_check,
            self.no_control_check,
            self.read_only_check,
        ):
            check.toggled.connect(self._emit_config)
        self.size_spin.valueChanged.connect(self._on_size_change)
        self.value_spin.valueChanged.connect(self.valueEdited)

    # --- helpers ---
    @staticmethod
    def _angle_spin(value: float) -> QtWidgets.QDoubleSpinBox:
        spin = QtWidgets.QDoubleSpinBox()
        spin.setRange(-720.0, 720.0)
        spin.setDecimals(1)
        spin.setValue(value)
        return spin

    @staticmethod
    def _value_spin(value: float) -> QtWidgets.QDoubleSpinBox:
        spin = QtWidgets.QDoubleSpinBox()
        spin.setRange(-1e6, 1e6)
        spin.setDecimals(2)
        spin.setValue(value)
        return spin

    def _on_size_change(self, size: int) -> None:
        self.track_spin.setMaximum(max(1, size // 2))

    def build_config(self) -> SliderConfig:
        return SliderConfig(
            angle_type=AngleDescription(
                self.direction_combo.currentData(), self.axis_combo.currentData()
            ),
            start_angle=self.start_spin.value(),
            end_angle=self.end_spin.value(),
            min_value=self.min_spin.value(),
            max_value=self.max_spin.value(),
            size=self.size_spin.value(),
            track_width=self.track_spin.value(),
            arc_color=self.color_edit.text().strip() or None,
            arc_background_color=self.background_edit.text().strip() or "#cccccc",
            coerce_to_int=self.int_check.isChecked(),
            coerce_to_half=self.half_check.isChecked(),
            coerce_to_quarter=self.quarter_check.isChecked(),
            disabled=self.disabled_check.isChecked(),
            animated=self.animated_check.isChecked(),
            no_control=self.no_control_check.isChecked(),
            read_only=self.read_only_check.isChecked(),
        )

    def _emit_config(self, *_args: object) -> None:
        cfg = self.build_config()
        try:
            cfg.validate()
        except ValueError as exc:  # InvalidRangeError included
            self.set_status(str(exc))
            return
        self.set_status("Drag the knob or edit the settings.")
        self.configChanged.emit(cfg)

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def show_value(self, value: float) -> None:
        self.value_spin.blockSignals(True)
        self.value_spin.setValue(value)
        self.value_spin.blockSignals(False)


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(
        self, app: QtWidgets.QApplication, config_path: Optional[Path] = None
    ) -> None:
        super().__init__(None)
        self.app = app
        self._path = config_path or Path.home() / ".circular_slider_config.json"
        self.cfg = self._load_config()

        self.window = SliderWindow(self.cfg)
        self._app_version = app.applicationVersion() or APP_VERSION
        self.ctrl = ControlDialog(self.cfg, self._app_version)

        # Wire signals
        self.window.slider.valueChanged.connect(self._on_value_changed)
        self.window.slider.controlFinished.connect(self._save_config)
        self.ctrl.configChanged.connect(self._on_config_changed)
        self.ctrl.valueEdited.connect(self._on_value_edited)
        self.ctrl.exportRequested.connect(self.export_svg)
        self.ctrl.alwaysOnTopToggled.connect(self._on_topmost_toggle)

        self.window.show()
        self.ctrl.show()
        self.ctrl.move(self.window.x() + self.window.width() + 40, self.window.y())

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        return self._path

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                cfg = AppConfig.from_json(p.read_text(encoding="utf-8"))
                cfg.slider.validate()
                return cfg
            except (OSError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", p, exc)
        return AppConfig()

    def _save_config(self) -> None:
        p = self._config_path()
        try:
            p.write_text(self.cfg.to_json(), encoding="utf-8")
            logger.debug("Saved config to %s", p)
        except OSError as exc:
            logger.warning("Could not save config to %s: %s", p, exc)

    # ---------------------------- Event Handlers ------------------------------

    def _on_value_changed(self, value: float) -> None:
        self.cfg.ui.value = float(value)
        self.ctrl.show_value(value)

    def _on_value_edited(self, value: float) -> None:
        self.cfg.ui.value = float(value)
        self.window.slider.set_value(value)
        self.window.show_value(value)

    def _on_config_changed(self, slider_cfg: SliderConfig) -> None:
        self.cfg = replace(self.cfg, slider=slider_cfg)
        self.window.slider.set_config(slider_cfg)
        self._save_config()

    def _on_topmost_toggle(self, enabled: bool) -> None:
        self.cfg.ui.always_on_top = bool(enabled)
        self.window.setWindowFlag(QtCore.Qt.WindowType.WindowStaysOnTopHint, enabled)
        self.window.show()
        self._save_config()

    # ----------------------------- Core Actions --------------------------------

    def export_svg(self, path: Optional[str] = None) -> None:
        """Write the slider as drawn right now to an SVG file."""
        if not path:
            path, _ = QtWidgets.QFileDialog.getSaveFileName(
                self.ctrl, "Export SVG", "circular_slider.svg", "SVG files (*.svg)"
            )
            if not path:
                return
        text = slider_svg(self.cfg.slider, self.window.slider.value())
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.exception("SVG export to %s failed", path)
            self.ctrl.set_status(f"Export failed: {exc}")
            return
        logger.info("Exported slider to %s", path)
        self.ctrl.set_status(f"Exported to {path}")


# ---------------------------------- Main --------------------------------------


def main() -> None:
    setup_logging()
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("circular_slider")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)
    ret = app.exec()
    ctrl._save_config()
    sys.exit(ret)


if __name__ == "__main__":
    main()
