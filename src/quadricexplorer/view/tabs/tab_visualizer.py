"""
Visualizer Tab
==============
Coefficient sliders and presets on the left, live 3D plot on the right.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QGridLayout, QLabel,
    QPushButton, QComboBox, QSplitter, QFormLayout
)

from quadricexplorer.controller.visualizer import VisualizerController
from quadricexplorer.model.coefficients import COEFFICIENT_NAMES, PRESETS
from quadricexplorer.model.state import DisplayMode, TOGGLEABLE, VisualizerState
from quadricexplorer.view.widgets.coefficient_row import CoefficientRow
from quadricexplorer.view.widgets.plot_3d import PyVistaWidget


PRESET_LABELS: dict[str, str] = {
    "sphere": "Sphere",
    "ellipsoid": "Ellipsoid",
    "one-sheet": "One-Sheet Hyperboloid",
    "two-sheet": "Two-Sheet Hyperboloid",
    "cone": "Cone",
    "cylinder": "Cylinder",
}

DISPLAY_MODE_LABELS: dict[DisplayMode, str] = {
    DisplayMode.SURFACE: "Surface",
    DisplayMode.POINTS: "Point cloud",
}


class VisualizerControlPanel(QWidget):
    def __init__(self, controller: VisualizerController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Equation ---
        self.lbl_equation = QLabel()
        self.lbl_equation.setAlignment(Qt.AlignCenter)
        self.lbl_equation.setStyleSheet("font-size: 18px; font-weight: bold; padding: 8px;")
        self.lbl_equation.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.lbl_equation)

        # --- Coefficients ---
        grp_coeffs = QGroupBox("Coefficients")
        coeff_layout = QVBoxLayout(grp_coeffs)
        self.rows: dict[str, CoefficientRow] = {}
        for name in COEFFICIENT_NAMES:
            row = CoefficientRow(name, toggleable=name in TOGGLEABLE)
            row.value_changed.connect(self.controller.set_coefficient)
            row.included_changed.connect(self.controller.set_included)
            coeff_layout.addWidget(row)
            self.rows[name] = row
        layout.addWidget(grp_coeffs)

        # --- Presets ---
        grp_presets = QGroupBox("Presets")
        preset_grid = QGridLayout(grp_presets)
        for i, (key, label) in enumerate(PRESET_LABELS.items()):
            btn = QPushButton(label)
            btn.clicked.connect(lambda _checked=False, k=key: self.controller.load_preset(k))
            preset_grid.addWidget(btn, i // 2, i % 2)
        layout.addWidget(grp_presets)

        # --- Classification ---
        grp_info = QGroupBox("Surface")
        form = QFormLayout(grp_info)
        self.lbl_family = QLabel()
        self.lbl_family.setStyleSheet("font-weight: bold;")
        self.lbl_signs = QLabel()
        self.lbl_rule = QLabel()
        self.lbl_rule.setWordWrap(True)
        self.lbl_rule.setStyleSheet("color: gray;")
        form.addRow("Type:", self.lbl_family)
        form.addRow("Signs:", self.lbl_signs)
        form.addRow(self.lbl_rule)
        layout.addWidget(grp_info)

        # --- Display ---
        display_row = QHBoxLayout()
        display_row.addWidget(QLabel("Display:"))
        self.combo_display = QComboBox()
        for mode, label in DISPLAY_MODE_LABELS.items():
            self.combo_display.addItem(label, mode)
        self.combo_display.currentIndexChanged.connect(self.on_display_mode_changed)
        display_row.addWidget(self.combo_display, 1)
        layout.addLayout(display_row)

        # --- Status ---
        self.lbl_status = QLabel("")
        self.lbl_status.setStyleSheet("color: red;")
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        layout.addStretch()

        self.controller.state_changed.connect(self.load_from_state)
        self.controller.surface_updated.connect(self.on_surface_updated)
        self.controller.render_failed.connect(self.on_render_failed)
        self.load_from_state(self.controller.state)

    # --- SLOTS ---

    def load_from_state(self, state: VisualizerState) -> None:
        """Push the state back into the widgets (presets, toggles, typed values)."""
        for name, row in self.rows.items():
            included = state.included.get(name, True)
            row.load_value(getattr(state.coefficients, name), included)

        self.lbl_equation.setText(state.equation_text())
        info = state.info
        self.lbl_family.setText(info.name)
        self.lbl_signs.setText(state.description)
        self.lbl_rule.setText(info.description)

        index = self.combo_display.findData(state.display_mode)
        if index != self.combo_display.currentIndex():
            self.combo_display.blockSignals(True)
            self.combo_display.setCurrentIndex(index)
            self.combo_display.blockSignals(False)

    def on_display_mode_changed(self, index: int) -> None:
        self.controller.set_display_mode(self.combo_display.itemData(index))

    def on_surface_updated(self, _surface) -> None:
        self.lbl_status.setText("")

    def on_render_failed(self, message: str) -> None:
        self.lbl_status.setText(f"Plot could not be drawn: {message}")


class VisualizerTab(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        layout.addWidget(splitter)

        self.plot = PyVistaWidget()
        self.controller = VisualizerController(self.plot, parent=self)
        self.panel = VisualizerControlPanel(self.controller)

        splitter.addWidget(self.panel)
        splitter.addWidget(self.plot)
        # 1 part sidebar : 3 parts 3D view
        splitter.setSizes([350, 1050])

    def draw_initial(self) -> None:
        """Queue the first plot; it is drawn once the event loop runs and the window is laid out."""
        self.controller.request_plot()

    def close_plot(self) -> None:
        self.plot.plotter.close()
