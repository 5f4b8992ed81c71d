from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QGroupBox, QHBoxLayout, QLabel, QPushButton, QSlider, QVBoxLayout, QWidget,
)

from simgallery.core.controls import ControlDescriptor, ControlKind

logger = logging.getLogger(__name__)


def _format_value(value: float, step: float) -> str:
    if float(step).is_integer() and float(value).is_integer():
        return f"{int(value)}"
    return f"{value:g}"


class ControlPanel(QGroupBox):
    """
    Materializes control descriptors into Qt widgets.

    slider -> QSlider (integer ticks mapped onto min/max/step),
    checkbox -> QCheckBox, button -> QPushButton, select -> QComboBox.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(self.tr("Controls"), parent)
        self._layout = QVBoxLayout(self)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._widgets: dict[str, QWidget] = {}
        self._builders: dict[ControlKind, Callable[[ControlDescriptor], QWidget]] = {
            ControlKind.SLIDER: self._build_slider,
            ControlKind.CHECKBOX: self._build_checkbox,
            ControlKind.BUTTON: self._build_button,
            ControlKind.SELECT: self._build_select,
        }

    # ---- ControlSurface protocol ----

    def add_control(self, descriptor: ControlDescriptor) -> None:
        row = self._builders[descriptor.kind](descriptor)
        # with duplicate labels the last widget wins the lookup
        self._widgets[descriptor.label] = row
        self._layout.addWidget(row)

    def clear(self) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()
        self._widgets.clear()

    # ---- lookup ----

    def widget_for(self, label: str) -> QWidget | None:
        return self._widgets.get(label)

    def count(self) -> int:
        return self._layout.count()

    # ---- builders ----

    def _build_slider(self, d: ControlDescriptor) -> QWidget:
        cfg = d.config
        row = QWidget(self)
        v = QVBoxLayout(row)
        v.setContentsMargins(0, 0, 0, 0)

        head = QHBoxLayout()
        name = QLabel(d.label, row)
        value_label = QLabel(_format_value(cfg.value, cfg.step), row)
        value_label.setObjectName("value")
        value_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        head.addWidget(name)
        head.addWidget(value_label)
        v.addLayout(head)

        ticks = max(1, round((cfg.max - cfg.min) / cfg.step))
        slider = QSlider(Qt.Orientation.Horizontal, row)
        slider.setRange(0, ticks)
        slider.setValue(round((cfg.value - cfg.min) / cfg.step))
        v.addWidget(slider)

        def on_moved(tick: int) -> None:
            value = min(round(cfg.min + tick * cfg.step, 10), cfg.max)
            value_label.setText(_format_value(value, cfg.step))
            d.emit(value)

        slider.valueChanged.connect(on_moved)
        row.setProperty("control_kind", d.kind.value)
        return row

    def _build_checkbox(self, d: ControlDescriptor) -> QWidget:
        box = QCheckBox(d.label, self)
        box.setChecked(bool(d.config.checked))
        box.toggled.connect(d.emit)
        box.setProperty("control_kind", d.kind.value)
        return box

    def _build_button(self, d: ControlDescriptor) -> QWidget:
        btn = QPushButton(d.label, self)
        btn.clicked.connect(lambda *_: d.emit())
        btn.setProperty("control_kind", d.kind.value)
        return btn

    def _build_select(self, d: ControlDescriptor) -> QWidget:
        row = QWidget(self)
        v = QVBoxLayout(row)
        v.setContentsMargins(0, 0, 0, 0)
        v.addWidget(QLabel(d.label, row))
        combo = QComboBox(row)
        # populate before wiring so filling the list does not fire on_change
        combo.addItems(list(d.config.options))
        if d.config.value is not None:
            idx = combo.findText(str(d.config.value))
            if idx >= 0:
                combo.setCurrentIndex(idx)
        combo.currentTextChanged.connect(d.emit)
        v.addWidget(combo)
        row.setProperty("control_kind", d.kind.value)
        return row
