"""
3D Visualization Widget (PyVista Wrapper)
=========================================
Draws a Mesh as a coloured surface or a PointCloud as spheres.

Implements the SurfaceRenderer contract used by the controllers:
`create_plot` builds a fresh scene, `replace_plot` swaps the data of the
existing actor in place (no flicker while dragging sliders) and `purge`
clears the target.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt
import pyvista as pv
from pyvistaqt import QtInteractor

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent

from quadricexplorer.controller.rendering import PlotStyle, Surface
from quadricexplorer.model.mesh import Mesh, PointCloud

logger = logging.getLogger(__name__)

SCALARS_NAME = "z"
TITLE_ACTOR_NAME = "plot_title"
POINT_SIZE = 5.0


def _structured_grid(mesh: Mesh) -> pv.StructuredGrid:
    """
    Build a StructuredGrid from the mesh matrices.

    NaN nodes (outside the real domain) are moved to the origin and blanked,
    so VTK never sees a non-finite coordinate.
    """
    valid = mesh.valid_mask()
    x = np.where(valid, mesh.x, 0.0)
    y = np.where(valid, mesh.y, 0.0)
    z = np.where(valid, mesh.z, 0.0)

    grid = pv.StructuredGrid(x, y, z)
    # StructuredGrid flattens in Fortran order
    grid.point_data[SCALARS_NAME] = z.ravel(order="F")

    hidden = np.flatnonzero(~valid.ravel(order="F"))
    if hidden.size:
        grid.hide_points(hidden)
    return grid


def _point_polydata(cloud: PointCloud) -> pv.PolyData:
    cloud_points: npt.NDArray[np.float64] = np.asarray(cloud.points, dtype=float)
    poly = pv.PolyData(cloud_points)
    poly.point_data[SCALARS_NAME] = cloud_points[:, 2]
    return poly


def _scalar_range(dataset: pv.DataSet) -> tuple[float, float]:
    values = np.asarray(dataset.point_data[SCALARS_NAME])
    if values.size == 0:
        return 0.0, 1.0
    low, high = float(np.min(values)), float(np.max(values))
    if low == high:
        high = low + 1.0
    return low, high


class PyVistaWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._surface_actor: Optional[pv.Actor] = None
        self._is_point_cloud: bool = False

    # ------------------------------------------------------------------------------
    # Public API (SurfaceRenderer)
    # ------------------------------------------------------------------------------

    def create_plot(self, surface: Surface, style: PlotStyle) -> None:
        """Clear the scene and draw `surface` from scratch."""
        logger.debug(f"Creating plot for {surface.family} surface.")
        self._clear_scene()

        dataset = self._to_dataset(surface)
        if dataset.n_points == 0:
            # nothing real to draw, keep the empty axes
            self._decorate(style)
            self.plotter.render()
            return

        self._is_point_cloud = isinstance(surface, PointCloud)
        if self._is_point_cloud:
            self._surface_actor = self.plotter.add_mesh(
                dataset,
                scalars=SCALARS_NAME,
                cmap=style.colormap,
                opacity=style.opacity,
                point_size=POINT_SIZE,
                render_points_as_spheres=True,
                show_scalar_bar=False,
            )
        else:
            self._surface_actor = self.plotter.add_mesh(
                dataset,
                scalars=SCALARS_NAME,
                cmap=style.colormap,
                opacity=style.opacity,
                ambient=style.ambient,
                diffuse=style.diffuse,
                specular=style.specular,
                smooth_shading=True,
                show_scalar_bar=False,
            )

        self._decorate(style)
        self.plotter.view_vector(style.camera_eye, viewup=(0, 0, 1))
        self.plotter.reset_camera()
        self.plotter.render()

    def replace_plot(self, surface: Surface, style: PlotStyle) -> None:
        """
        Update the existing actor with new data, keeping the camera.
        Falls back to `create_plot` when there is nothing compatible to update.
        """
        if self._surface_actor is None or self._is_point_cloud != isinstance(surface, PointCloud):
            self.create_plot(surface, style)
            return

        dataset = self._to_dataset(surface)
        if dataset.n_points == 0:
            self.create_plot(surface, style)
            return

        # Update existing data in-place to prevent blinking
        self._surface_actor.mapper.dataset.copy_from(dataset)
        self._surface_actor.mapper.scalar_range = _scalar_range(dataset)
        self._decorate(style)
        self.plotter.render()

    def purge(self) -> None:
        self._clear_scene()
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    @staticmethod
    def _to_dataset(surface: Surface) -> pv.DataSet:
        if isinstance(surface, PointCloud):
            return _point_polydata(surface)
        return _structured_grid(surface)

    def _clear_scene(self) -> None:
        self.plotter.clear()
        self._surface_actor = None
        self._is_point_cloud = False

    def _decorate(self, style: PlotStyle) -> None:
        self.plotter.show_grid(
            xtitle="X",
            ytitle="Y",
            ztitle="Z",
            show_xlabels=style.show_tick_labels,
            show_ylabels=style.show_tick_labels,
            show_zlabels=style.show_tick_labels,
            color="gray",
        )
        self.plotter.add_text(style.title, position="upper_edge", font_size=10, color="black", name=TITLE_ACTOR_NAME)

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.add_axes()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
