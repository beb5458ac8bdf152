"""Tests for quadricexplorer.model.mesh."""

import numpy as np
import numpy.testing as npt
import pytest

from quadricexplorer.config import POINT_CLOUD, QUIZ_MESH, VISUALIZER_MESH
from quadricexplorer.model.coefficients import Coefficients, PRESETS
from quadricexplorer.model.families import SurfaceFamily
from quadricexplorer.model.mesh import generate_mesh, generate_point_cloud


def residual(coeffs, x, y, z):
    a, b, c, d = coeffs.as_tuple()
    return a * x ** 2 + b * y ** 2 + c * z ** 2 + d


def valid_points(mesh):
    return mesh.points()[mesh.valid_mask().ravel()]


# ---------------------------------------------------------------------------
# Grid shape & numeric policy
# ---------------------------------------------------------------------------

class TestGrid:
    def test_visualizer_shape(self):
        mesh = generate_mesh(PRESETS["sphere"], VISUALIZER_MESH)
        assert mesh.shape == (26, 26)
        assert mesh.y.shape == mesh.z.shape == (26, 26)

    def test_quiz_shape(self):
        assert generate_mesh(PRESETS["cone"], QUIZ_MESH).shape == (21, 21)

    def test_family_tag(self):
        for key, coeffs in PRESETS.items():
            assert generate_mesh(coeffs).family == SurfaceFamily(key)

    @pytest.mark.parametrize("coeffs", [
        (0, 0, 0, 0),
        (0, 0, 0, -1),
        (0, 1, 1, -1),
        (1e-9, 1, 1, -1),
        (1, -1, 0, -1),
        (1, 1, 1, 1),
        (-1, -1, -1, -1),
        (1, 0, -1, -1),
        (1e6, 1e-6, -1e6, 5),
        (1, 1, 1e-5, -1),
    ])
    def test_never_infinite(self, coeffs):
        mesh = generate_mesh(Coefficients(*coeffs))
        for values in (mesh.x, mesh.y, mesh.z):
            assert not np.isinf(values).any()

    def test_near_zero_divisor_is_nan(self):
        mesh = generate_mesh(Coefficients(1e-9, 1, 1, -1))
        assert mesh.family == SurfaceFamily.ELLIPSOID
        assert not mesh.valid_mask().any()


# ---------------------------------------------------------------------------
# Points lie on the surface
# ---------------------------------------------------------------------------

class TestSurfaces:
    def test_sphere_radius(self):
        mesh = generate_mesh(Coefficients(1, 1, 1, -4))
        radii = np.sqrt(mesh.x ** 2 + mesh.y ** 2 + mesh.z ** 2)
        npt.assert_allclose(radii, 2.0)

    @pytest.mark.parametrize("coeffs", [
        (1, 2, 0.5, -1),
        (1, 1, -1, -1),
        (2, 1, -3, -2),
        (1, 1, -1, 0),
        (1, 4, 0, -4),
        (-1, -1, 1, -1),
        (1, 1, -1, 1),
        (-2, -1, 3, -2),
        (2, -1, -1, -4),
        (-1, 2, -3, -1),
    ])
    def test_points_satisfy_equation(self, coeffs):
        coeffs = Coefficients(*coeffs)
        mesh = generate_mesh(coeffs)
        points = valid_points(mesh)
        assert len(points) > 0
        scale = 1.0 + np.abs(points).max() ** 2
        npt.assert_allclose(residual(coeffs, *points.T) / scale, 0.0, atol=1e-9)

    def test_one_sheet_axis_follows_negative_coefficient(self):
        mesh = generate_mesh(Coefficients(-1, 1, 1, -1))
        # waist radius 1 in the y-z plane, x sweeps along the axis
        assert np.nanmax(np.abs(mesh.x)) > 1.5
        waist = np.nanmin(mesh.y ** 2 + mesh.z ** 2)
        assert 1.0 - 1e-9 <= waist < 1.01

    def test_two_sheet_has_two_separate_sheets(self):
        mesh = generate_mesh(Coefficients(1, 1, -1, 1))
        z = mesh.z[mesh.valid_mask()]
        assert (z >= 1.0 - 1e-9).any()
        assert (z <= -1.0 + 1e-9).any()
        assert not ((z > -1.0 + 1e-9) & (z < 1.0 - 1e-9)).any()

    @pytest.mark.parametrize("config", [VISUALIZER_MESH, QUIZ_MESH])
    @pytest.mark.parametrize("coeffs", [(1, 1, -1, 1), (-2, -1, 3, -2), (1, 1, 1, 1)])
    def test_no_cell_joins_the_sheets(self, config, coeffs):
        mesh = generate_mesh(Coefficients(*coeffs), config)
        middle = config.resolution // 2
        valid = mesh.valid_mask()
        assert not valid[:, middle].any()
        assert (mesh.z[:, :middle][valid[:, :middle]] > 0).all()
        assert (mesh.z[:, middle + 1:][valid[:, middle + 1:]] < 0).all()
        # both sheets reach their vertex beside the gap
        assert valid[:, middle - 1].all() and valid[:, middle + 1].all()
        npt.assert_allclose(mesh.z[:, middle - 1], -mesh.z[:, middle + 1])

    def test_all_positive_two_sheet_construction(self):
        # all positive, D > 0 keeps the sheet construction even though no real points exist
        mesh = generate_mesh(Coefficients(1, 1, 1, 1))
        assert mesh.family == SurfaceFamily.TWO_SHEET
        middle = VISUALIZER_MESH.resolution // 2
        valid = mesh.valid_mask()
        assert not valid[:, middle].any()
        assert np.delete(valid, middle, axis=1).all()
        assert (mesh.z[:, 0] > 0).all()
        assert (mesh.z[:, -1] < 0).all()

    def test_cone_has_vertex_at_origin(self):
        mesh = generate_mesh(Coefficients(1, 1, -1, 0), QUIZ_MESH)
        # even resolution puts t = 0 on the middle column
        middle = QUIZ_MESH.resolution // 2
        npt.assert_allclose(mesh.z[:, middle], 0.0, atol=1e-12)

    def test_unknown_uses_implicit_upper_root(self):
        coeffs = Coefficients(-1, -1, -1, 1)
        mesh = generate_mesh(coeffs)
        assert mesh.family == SurfaceFamily.UNKNOWN
        z = mesh.z[mesh.valid_mask()]
        assert len(z) > 0
        assert (z >= 0).all()


# ---------------------------------------------------------------------------
# Point clouds
# ---------------------------------------------------------------------------

class TestPointCloud:
    def test_empty_without_quadratic_terms(self):
        cloud = generate_point_cloud(Coefficients(0, 0, 0, -1))
        assert cloud.points.shape == (0, 3)
        assert len(cloud) == 0

    def test_parametrised_family_uses_mesh_points(self):
        coeffs = PRESETS["sphere"]
        cloud = generate_point_cloud(coeffs)
        mesh = generate_mesh(coeffs, POINT_CLOUD)
        assert len(cloud) == int(mesh.valid_mask().sum())
        assert cloud.family == SurfaceFamily.SPHERE

    def test_implicit_keeps_both_roots(self):
        coeffs = Coefficients(-1, -1, -1, 1)
        cloud = generate_point_cloud(coeffs)
        assert len(cloud) > 0
        assert len(cloud) % 2 == 0
        half = len(cloud) // 2
        upper, lower = cloud.points[:half], cloud.points[half:]
        npt.assert_allclose(upper[:, :2], lower[:, :2])
        npt.assert_allclose(upper[:, 2], -lower[:, 2])
        npt.assert_allclose(residual(coeffs, *cloud.points.T), 0.0, atol=1e-9)
        assert np.isfinite(cloud.points).all()
