"""
Coefficient Input Row
Slider + editable value label (+ include checkbox for A, B, C).
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal, Qt, QEvent, QObject
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QLabel, QSlider, QCheckBox, QLineEdit, QStackedWidget
)

from quadricexplorer.config import SLIDER_MIN, SLIDER_MAX, SLIDER_STEP
from quadricexplorer.model.parsing import format_display_value, parse_coefficient

# QSlider works on integers
SLIDER_SCALE: int = round(1 / SLIDER_STEP)


# ==========================================
# HELPER WIDGETS
# ==========================================

class EditableValueLabel(QStackedWidget):
    """
    Shows a value; double-click turns it into a line edit.

    Enter or focus-out commits the text (fractions like "3/4" accepted,
    anything unparsable becomes 0). Escape restores the previous value.
    """
    value_committed = Signal(float)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._value: float = 0.0
        self._cancelled: bool = False

        self.label = QLabel(format_display_value(self._value))
        self.label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self.label.setToolTip("Double-click to type a value (e.g. 3/4)")
        self.label.installEventFilter(self)

        self.editor = QLineEdit()
        self.editor.setAlignment(Qt.AlignRight)
        self.editor.installEventFilter(self)
        self.editor.editingFinished.connect(self._on_editing_finished)

        self.addWidget(self.label)   # Index 0
        self.addWidget(self.editor)  # Index 1
        self.setFixedWidth(70)

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_editing(self) -> bool:
        return self.currentWidget() is self.editor

    def set_value(self, value: float) -> None:
        self._value = float(value)
        self.label.setText(format_display_value(self._value))

    def start_editing(self) -> None:
        self._cancelled = False
        self.editor.setText(format_display_value(self._value))
        self.setCurrentWidget(self.editor)
        self.editor.setFocus()
        self.editor.selectAll()

    def cancel_editing(self) -> None:
        self._cancelled = True
        self.setCurrentWidget(self.label)

    def commit(self) -> None:
        if not self.is_editing:
            return
        value = parse_coefficient(self.editor.text())
        self.setCurrentWidget(self.label)
        self.set_value(value)
        self.value_committed.emit(value)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.label and event.type() == QEvent.MouseButtonDblClick:
            self.start_editing()
            return True
        if watched is self.editor and event.type() == QEvent.KeyPress and event.key() == Qt.Key_Escape:
            self.cancel_editing()
            return True
        return super().eventFilter(watched, event)

    def _on_editing_finished(self) -> None:
        # editingFinished also fires when the editor loses focus after Escape
        if self._cancelled:
            self._cancelled = False
            return
        self.commit()


# ==========================================
# ROW
# ==========================================

class CoefficientRow(QWidget):
    value_changed = Signal(str, float)
    included_changed = Signal(str, bool)

    def __init__(self, name: str, toggleable: bool = True, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.name = name

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # 1. Include toggle (quadratic terms only)
        self.chk_include: Optional[QCheckBox] = None
        if toggleable:
            self.chk_include = QCheckBox()
            self.chk_include.setChecked(True)
            self.chk_include.setToolTip(f"Include the {name.upper()} term")
            self.chk_include.toggled.connect(self.on_include_toggled)
            layout.addWidget(self.chk_include)

        layout.addWidget(QLabel(f"{name.upper()}:"))

        # 2. Slider
        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(round(SLIDER_MIN * SLIDER_SCALE), round(SLIDER_MAX * SLIDER_SCALE))
        self.slider.setSingleStep(1)
        self.slider.valueChanged.connect(self.on_slider_moved)
        layout.addWidget(self.slider, 1)

        # 3. Value
        self.value_label = EditableValueLabel()
        self.value_label.value_committed.connect(self.on_value_typed)
        layout.addWidget(self.value_label)

    # --- PROPERTIES ---

    @property
    def is_included(self) -> bool:
        return self.chk_include is None or self.chk_include.isChecked()

    # --- PUBLIC ---

    def load_value(self, value: float, included: bool = True) -> None:
        """Show `value` without emitting signals (state -> widget sync)."""
        self.blockSignals(True)
        self.slider.blockSignals(True)
        try:
            self.slider.setValue(self._to_slider(value))
            self.value_label.set_value(value)
            if self.chk_include is not None:
                self.chk_include.blockSignals(True)
                self.chk_include.setChecked(included)
                self.chk_include.blockSignals(False)
            self._apply_enabled()
        finally:
            self.slider.blockSignals(False)
            self.blockSignals(False)

    # --- SLOTS ---

    def on_slider_moved(self, position: int) -> None:
        value = position / SLIDER_SCALE
        self.value_label.set_value(value)
        self.value_changed.emit(self.name, value)

    def on_value_typed(self, value: float) -> None:
        # out-of-range values are kept, the slider just pins to its end
        self.slider.blockSignals(True)
        self.slider.setValue(self._to_slider(value))
        self.slider.blockSignals(False)
        self.value_changed.emit(self.name, value)

    def on_include_toggled(self, checked: bool) -> None:
        self._apply_enabled()
        self.included_changed.emit(self.name, checked)

    # --- HELPERS ---

    def _apply_enabled(self) -> None:
        included = self.is_included
        self.slider.setEnabled(included)
        self.value_label.setEnabled(included)

    @staticmethod
    def _to_slider(value: float) -> int:
        clamped = min(max(value, SLIDER_MIN), SLIDER_MAX)
        return round(clamped * SLIDER_SCALE)
