"""
Mesh Generator
==============
Turns a coefficient tuple into a structured (resolution+1) x (resolution+1)
grid of 3D points that a surface renderer can draw directly.

The family is taken from `families.classify` and dispatched through a lookup
table, so the drawing can never disagree with the label shown to the user.

Numeric policy
--------------
Nothing in here raises on bad input. A negative radicand or a divisor smaller
than NEAR_ZERO yields NaN, and infinities are turned into NaN before the mesh is
returned. The renderer shows NaN points as gaps.

Grid convention: row index i sweeps the angle (phi / theta over [0, 2pi]),
column index j sweeps the second parameter (theta, t or height).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

import numpy as np

from quadricexplorer.config import MeshConfig, NEAR_ZERO, POINT_CLOUD, VISUALIZER_MESH
from quadricexplorer.model.coefficients import Coefficients
from quadricexplorer.model.families import SurfaceFamily, canonical_sign, classify

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Three parallel (rows, cols) coordinate matrices plus the family they draw."""
    x: npt.NDArray[np.float64]
    y: npt.NDArray[np.float64]
    z: npt.NDArray[np.float64]
    family: SurfaceFamily

    @property
    def shape(self) -> tuple[int, int]:
        return self.x.shape

    def points(self) -> npt.NDArray[np.float64]:
        """(N, 3) array in row-major order."""
        return np.column_stack((self.x.ravel(), self.y.ravel(), self.z.ravel()))

    def valid_mask(self) -> npt.NDArray[np.bool_]:
        """True where all three coordinates are finite."""
        return np.isfinite(self.x) & np.isfinite(self.y) & np.isfinite(self.z)


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Scattered (N, 3) points, used by the 'points' display mode."""
    points: npt.NDArray[np.float64]
    family: SurfaceFamily

    def __len__(self) -> int:
        return len(self.points)


Grid = tuple[np.ndarray, np.ndarray, np.ndarray]
Parametrization = Callable[[Coefficients, MeshConfig, np.ndarray, np.ndarray], Grid]


# ------------------------------------------------------------------------------
# Scalar helpers
# ------------------------------------------------------------------------------

def _semi_axis(numerator: float, denominator: float) -> float:
    """sqrt(numerator / denominator), NaN for a near-zero divisor or negative ratio."""
    if abs(denominator) < NEAR_ZERO:
        return math.nan
    ratio = numerator / denominator
    return math.sqrt(ratio) if ratio >= 0 else math.nan


def _odd_axis(quadratic: tuple[float, float, float]) -> int:
    """
    Index of the coefficient whose sign differs from the other two.

    With one positive value it is the positive one, with two positives it is the
    remaining one. Uniform sign patterns default to the z axis.
    """
    positive = [v > 0 for v in quadratic]
    count = sum(positive)
    if count == 1:
        return positive.index(True)
    if count == 2:
        return positive.index(False)
    return 2


def _place(p: np.ndarray, q: np.ndarray, u: np.ndarray, axis: int) -> Grid:
    """Map local (p, q, u) coordinates so that u runs along `axis`."""
    if axis == 0:
        return u, p, q
    if axis == 1:
        return p, u, q
    return p, q, u


def _others(axis: int) -> tuple[int, int]:
    first, second = (k for k in range(3) if k != axis)
    return first, second


def _grid_fractions(resolution: int) -> tuple[np.ndarray, np.ndarray]:
    """i / resolution and j / resolution as (rows, cols) matrices."""
    steps = np.arange(resolution + 1, dtype=np.float64) / resolution
    return np.meshgrid(steps, steps, indexing="ij")


def _sweep(fraction: np.ndarray, span: float) -> np.ndarray:
    """Map [0, 1] onto [-span/2, span/2]."""
    return (fraction - 0.5) * span


# ------------------------------------------------------------------------------
# Parametrizations
# ------------------------------------------------------------------------------

def _ellipsoid(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    a, b, c, d = coefficients.as_tuple()
    ra = _semi_axis(-d, a)
    rb = _semi_axis(-d, b)
    rc = _semi_axis(-d, c)

    phi = si * 2.0 * np.pi
    theta = sj * np.pi

    x = ra * np.sin(theta) * np.cos(phi)
    y = rb * np.sin(theta) * np.sin(phi)
    z = rc * np.cos(theta)
    return x, y, z


def _one_sheet(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    canonical = canonical_sign(coefficients)
    quadratic = canonical.as_tuple()[:3]
    d = canonical.d

    # the negative coefficient is the axis of the hyperboloid
    axis = _odd_axis(quadratic)
    first, second = _others(axis)
    ra = _semi_axis(abs(d), abs(quadratic[first]))
    rb = _semi_axis(abs(d), abs(quadratic[second]))
    rc = _semi_axis(abs(d), abs(quadratic[axis]))

    phi = si * 2.0 * np.pi
    t = _sweep(sj, config.one_sheet_span)

    p = ra * np.cosh(t) * np.cos(phi)
    q = rb * np.cosh(t) * np.sin(phi)
    u = rc * np.sinh(t)
    return _place(p, q, u, axis)


def _sheet_sweep(config: MeshConfig, sj: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-point (sheet, s) for the two-sheet grid.

    Columns left of the middle one draw the upper sheet (sheet = +1) with s
    running from span/2 down to 0, columns right of it draw the lower sheet
    (sheet = -1) with s running back up. The middle column gets sheet = NaN so
    no grid cell joins the two sheets.
    """
    n = config.resolution
    middle = n // 2
    half = config.two_sheet_span / 2.0
    column = np.rint(sj * n)

    upper = column < middle
    lower = column > middle
    s = np.where(
        upper,
        half * (middle - 1 - column) / max(middle - 1, 1),
        half * (column - middle - 1) / max(n - middle - 1, 1),
    )
    sheet = np.where(upper, 1.0, np.where(lower, -1.0, np.nan))
    return sheet, s


def _two_sheet(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    a, b, c, d = coefficients.as_tuple()
    phi = si * 2.0 * np.pi
    sheet, s = _sheet_sweep(config, sj)

    if a > 0 and b > 0 and c > 0 and d > 0:
        ra = _semi_axis(d, a)
        rb = _semi_axis(d, b)
        rc = _semi_axis(d, c)
        spread = np.sqrt(1.0 + s * s)

        x = ra * spread * np.cos(phi)
        y = rb * spread * np.sin(phi)
        z = sheet * rc * (1.0 + s)
        return x, y, z

    # One positive, two negative (after sign normalisation): a real two-sheet
    # hyperboloid opening along the positive axis, P*u^2 = |D| + |N1|*p^2 + |N2|*q^2
    canonical = canonical_sign(coefficients)
    quadratic = canonical.as_tuple()[:3]
    d = canonical.d

    axis = _odd_axis(quadratic)
    first, second = _others(axis)
    ra = _semi_axis(abs(d), abs(quadratic[first]))
    rb = _semi_axis(abs(d), abs(quadratic[second]))
    rc = _semi_axis(abs(d), quadratic[axis])

    p = ra * np.sinh(s) * np.cos(phi)
    q = rb * np.sinh(s) * np.sin(phi)
    u = sheet * rc * np.cosh(s)
    return _place(p, q, u, axis)


def _cone(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    quadratic = coefficients.as_tuple()[:3]
    axis = _odd_axis(quadratic)
    first, second = _others(axis)
    ra = _semi_axis(1.0, abs(quadratic[first]))
    rb = _semi_axis(1.0, abs(quadratic[second]))
    rc = _semi_axis(1.0, abs(quadratic[axis]))

    phi = si * 2.0 * np.pi
    t = _sweep(sj, config.cone_span)

    # t = 0 collapses to the vertex
    p = ra * t * np.cos(phi)
    q = rb * t * np.sin(phi)
    u = rc * t
    return _place(p, q, u, axis)


def _cylinder(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    a, b, _, d = coefficients.as_tuple()
    ra = _semi_axis(-d, a)
    rb = _semi_axis(-d, b)

    theta = si * 2.0 * np.pi
    height = _sweep(sj, config.cylinder_span)

    x = ra * np.cos(theta)
    y = rb * np.sin(theta)
    z = height
    return x, y, z


def _implicit_z(coefficients: Coefficients, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Positive root z of A*u^2 + B*v^2 + C*z^2 + D = 0, NaN where there is none."""
    a, b, c, d = coefficients.as_tuple()
    if abs(c) <= NEAR_ZERO:
        return np.full_like(u, np.nan)
    z_squared = -(a * u * u + b * v * v + d) / c
    return np.where(z_squared >= 0, np.sqrt(np.maximum(z_squared, 0.0)), np.nan)


def _implicit(coefficients: Coefficients, config: MeshConfig, si: np.ndarray, sj: np.ndarray) -> Grid:
    r = config.implicit_range
    u = -r + si * 2.0 * r
    v = -r + sj * 2.0 * r
    return u, v, _implicit_z(coefficients, u, v)


_PARAMETRIZATIONS: dict[SurfaceFamily, Parametrization] = {
    SurfaceFamily.SPHERE: _ellipsoid,
    SurfaceFamily.ELLIPSOID: _ellipsoid,
    SurfaceFamily.ONE_SHEET: _one_sheet,
    SurfaceFamily.TWO_SHEET: _two_sheet,
    SurfaceFamily.CONE: _cone,
    SurfaceFamily.CYLINDER: _cylinder,
}


def _finite_or_nan(values: np.ndarray, shape: tuple[int, int]) -> np.ndarray:
    out = np.array(np.broadcast_to(np.asarray(values, dtype=np.float64), shape))
    out[np.isinf(out)] = np.nan
    return out


# ------------------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------------------

def generate_mesh(coefficients: Coefficients, config: MeshConfig = VISUALIZER_MESH) -> Mesh:
    """
    Build the surface grid for `coefficients`.

    Args:
        coefficients: The quadric to draw.
        config: Resolution and parameter spans of the calling view.

    Returns:
        A fresh Mesh with (resolution + 1, resolution + 1) matrices. Invalid points are NaN.
    """
    family = classify(coefficients)
    build = _PARAMETRIZATIONS.get(family, _implicit)
    si, sj = _grid_fractions(config.resolution)

    with np.errstate(all="ignore"):
        x, y, z = build(coefficients, config, si, sj)

    shape = si.shape
    mesh = Mesh(
        x=_finite_or_nan(x, shape),
        y=_finite_or_nan(y, shape),
        z=_finite_or_nan(z, shape),
        family=family,
    )
    logger.debug(
        f"Generated {family} mesh {shape} for {coefficients} "
        f"({int(mesh.valid_mask().sum())} valid points)."
    )
    return mesh


def generate_point_cloud(coefficients: Coefficients, config: MeshConfig = POINT_CLOUD) -> PointCloud:
    """
    Scattered-point variant of `generate_mesh`.

    Parametrised families return their finite mesh points. For the general
    implicit case both roots +z and -z are kept. All-zero quadratic
    coefficients give an empty cloud.
    """
    family = classify(coefficients)
    a, b, c, _ = coefficients.as_tuple()
    if a == 0 and b == 0 and c == 0:
        return PointCloud(points=np.empty((0, 3)), family=family)

    if family in _PARAMETRIZATIONS:
        mesh = generate_mesh(coefficients, config)
        return PointCloud(points=mesh.points()[mesh.valid_mask().ravel()], family=family)

    si, sj = _grid_fractions(config.resolution)
    r = config.implicit_range
    u = -r + si * 2.0 * r
    v = -r + sj * 2.0 * r
    with np.errstate(all="ignore"):
        z = _implicit_z(coefficients, u, v)

    keep = np.isfinite(z)
    u, v, z = u[keep], v[keep], z[keep]
    upper = np.column_stack((u, v, z))
    lower = np.column_stack((u, v, -z))
    return PointCloud(points=np.vstack((upper, lower)), family=family)
