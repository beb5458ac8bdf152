"""
Visualizer Controller
=====================
Owns the VisualizerState and keeps the live 3D plot in sync with it.

Every mutation is published immediately through `state_changed` (equation,
labels) while the expensive mesh + render step is debounced: a burst of slider
moves results in one recomputation using the last coefficients.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from quadricexplorer.config import DEBOUNCE_MS, VISUALIZER_MESH
from quadricexplorer.controller.debounce import Debouncer
from quadricexplorer.controller.rendering import (
    SurfaceRenderer, Surface, VISUALIZER_STYLE, render_surface,
)
from quadricexplorer.model.mesh import generate_mesh, generate_point_cloud
from quadricexplorer.model.state import DisplayMode, VisualizerState

logger = logging.getLogger(__name__)


class VisualizerController(QObject):
    state_changed = Signal(object)   # VisualizerState
    surface_updated = Signal(object)  # Mesh | PointCloud
    render_failed = Signal(str)

    def __init__(
        self,
        renderer: SurfaceRenderer,
        state: Optional[VisualizerState] = None,
        delay_ms: int = DEBOUNCE_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.renderer = renderer
        self.state = state if state is not None else VisualizerState()

        self._plot_exists = False
        self._plotted_mode: Optional[DisplayMode] = None
        self._debouncer = Debouncer(delay_ms, self._recompute, self)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_coefficient(self, name: str, value: float) -> None:
        self.state.set_value(name, value)
        self._on_state_changed()

    def set_included(self, name: str, included: bool) -> None:
        self.state.set_included(name, included)
        self._on_state_changed()

    def load_preset(self, key: str) -> None:
        self.state.load_preset(key)
        self._on_state_changed()

    def set_display_mode(self, mode: DisplayMode) -> None:
        mode = DisplayMode(mode)
        if mode == self.state.display_mode:
            return
        self.state.display_mode = mode
        self._on_state_changed()

    def request_plot(self) -> None:
        """Schedule a recomputation, restarting any pending one."""
        self._debouncer.trigger()

    @property
    def is_pending(self) -> bool:
        return self._debouncer.is_pending

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _on_state_changed(self) -> None:
        self.state_changed.emit(self.state)
        self.request_plot()

    def _build_surface(self) -> Surface:
        coefficients = self.state.coefficients
        if self.state.display_mode == DisplayMode.POINTS:
            return generate_point_cloud(coefficients)
        return generate_mesh(coefficients, VISUALIZER_MESH)

    def _recompute(self) -> None:
        mode = self.state.display_mode
        surface = self._build_surface()
        logger.debug(f"Recomputed {mode} surface ({surface.family}).")

        # switching between surface and points needs a fresh plot
        replace_existing = self._plot_exists and self._plotted_mode == mode
        result = render_surface(self.renderer, surface, VISUALIZER_STYLE, replace_existing=replace_existing)

        if result.ok:
            self._plot_exists = True
            self._plotted_mode = mode
        else:
            self._plot_exists = False
            self.render_failed.emit(result.error or "")

        self.surface_updated.emit(surface)
