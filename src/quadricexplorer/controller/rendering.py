"""
Renderer Contract
=================
The 3D plotting backend is a black box to the controllers. They hand it a
surface (Mesh or PointCloud) plus a PlotStyle and get a RenderResult back.

Why is this file needed?
------------------------
1. Decoupling: Controllers can be exercised with a fake renderer in tests.
2. Robustness: A failing backend call is reported as a RenderResult failure and
   logged, the application stays interactive.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Union

from quadricexplorer.model.families import SURFACE_INFO, SurfaceFamily
from quadricexplorer.model.mesh import Mesh, PointCloud

logger = logging.getLogger(__name__)

Surface = Union[Mesh, PointCloud]


@dataclass(frozen=True)
class PlotStyle:
    colormap: str = "viridis"
    opacity: float = 0.8
    ambient: float = 0.8
    diffuse: float = 0.8
    specular: float = 0.1
    camera_eye: tuple[float, float, float] = (1.5, 1.5, 1.5)
    show_tick_labels: bool = True
    title: str = "Quadric Surface Visualization"


VISUALIZER_STYLE = PlotStyle()

QUIZ_STYLE = PlotStyle(camera_eye=(1.2, 1.2, 1.2), show_tick_labels=False, title="Quadric Surface")


def quiz_style(family: SurfaceFamily) -> PlotStyle:
    """Quiz plots are titled with the display name of the expected family."""
    return replace(QUIZ_STYLE, title=SURFACE_INFO[family].name)


class SurfaceRenderer(Protocol):
    def create_plot(self, surface: Surface, style: PlotStyle) -> None: ...
    def replace_plot(self, surface: Surface, style: PlotStyle) -> None: ...
    def purge(self) -> None: ...


@dataclass(frozen=True)
class RenderResult:
    ok: bool
    error: Optional[str] = None


def render_surface(
    renderer: SurfaceRenderer,
    surface: Surface,
    style: PlotStyle,
    replace_existing: bool = False,
) -> RenderResult:
    """
    Draw `surface`, never raising.

    Args:
        renderer: Target backend.
        surface: Mesh or PointCloud to draw.
        style: Colours, lighting and camera.
        replace_existing: Update the existing plot instead of creating a new one.
    """
    try:
        if replace_existing:
            renderer.replace_plot(surface, style)
        else:
            renderer.create_plot(surface, style)
    except Exception as e:
        logger.warning(f"Rendering {surface.family} surface failed: {e}")
        return RenderResult(ok=False, error=str(e))
    return RenderResult(ok=True)


def purge_plot(renderer: SurfaceRenderer) -> RenderResult:
    """Clear the target, never raising."""
    try:
        renderer.purge()
    except Exception as e:
        logger.warning(f"Clearing the plot failed: {e}")
        return RenderResult(ok=False, error=str(e))
    return RenderResult(ok=True)
