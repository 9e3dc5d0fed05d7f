import numpy as np
import pytest

from horizon_engine.cameras import OrthographicCamera, PerspectiveCamera

ASPECT = 1280.0 / 720.0


def apply(matrix, point):
    v = matrix @ np.append(np.asarray(point, dtype=float), 1.0)
    return v[:3] / v[3]


def test_ortho_maps_bounds_to_clip_space():
    camera = OrthographicCamera(-ASPECT, ASPECT, -1.0, 1.0)
    lower = apply(camera.projection_matrix, (-ASPECT, -1.0, 0.0))
    upper = apply(camera.projection_matrix, (ASPECT, 1.0, 0.0))
    assert lower[:2] == pytest.approx([-1.0, -1.0])
    assert upper[:2] == pytest.approx([1.0, 1.0])


def test_ortho_starts_with_identity_view():
    camera = OrthographicCamera(-2.0, 2.0, -1.0, 1.0)
    assert np.allclose(camera.view_matrix, np.identity(4))
    assert np.allclose(camera.view_projection_matrix, camera.projection_matrix)


def test_ortho_view_moves_position_to_origin():
    camera = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    camera.position = (2.0, 3.0, 0.0)
    camera.rotation = 30.0
    assert apply(camera.view_matrix, (2.0, 3.0, 0.0)) == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)
    assert np.allclose(camera.view_projection_matrix, camera.projection_matrix @ camera.view_matrix)


def test_ortho_rotation_turns_view():
    camera = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    camera.position = (2.0, 3.0, 0.0)
    camera.rotation = 90.0
    assert apply(camera.view_matrix, (2.0, 4.0, 0.0)) == pytest.approx([1.0, 0.0, 0.0], abs=1e-9)
    assert camera.rotation == 90.0


def test_ortho_set_projection_keeps_view():
    camera = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    camera.position = (0.5, 0.0, 0.0)
    view = camera.view_matrix.copy()
    camera.set_projection(-4.0, 4.0, -2.0, 2.0)
    assert np.allclose(camera.view_matrix, view)
    assert apply(camera.projection_matrix, (4.0, 2.0, 0.0))[:2] == pytest.approx([1.0, 1.0])


def test_ortho_rejects_degenerate_bounds():
    with pytest.raises(ValueError):
        OrthographicCamera(1.0, 1.0, -1.0, 1.0)


def test_position_requires_three_components():
    camera = OrthographicCamera(-1.0, 1.0, -1.0, 1.0)
    with pytest.raises(ValueError):
        camera.position = (1.0, 2.0)
    assert np.allclose(camera.position, [0.0, 0.0, 0.0])


def test_matrices_are_read_only():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    with pytest.raises(ValueError):
        camera.view_matrix[0, 0] = 5.0
    assert camera.view_matrix[0, 0] == pytest.approx(1.0)


def test_perspective_maps_clip_planes_to_depth_range():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    assert apply(camera.projection_matrix, (0.0, 0.0, -0.1))[2] == pytest.approx(-1.0)
    assert apply(camera.projection_matrix, (0.0, 0.0, -100.0))[2] == pytest.approx(1.0)


def test_perspective_aspect_ratio():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    proj = camera.projection_matrix
    assert proj[1, 1] / proj[0, 0] == pytest.approx(ASPECT)


def test_wider_fov_zooms_out():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    narrow = camera.projection_matrix[1, 1]
    camera.set_projection(90.0, ASPECT, 0.1, 100.0)
    assert camera.projection_matrix[1, 1] < narrow
    assert camera.fov == 90.0


def test_perspective_default_basis():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    assert camera.front == pytest.approx([0.0, 0.0, -1.0])
    assert camera.right == pytest.approx([1.0, 0.0, 0.0])
    assert camera.up == pytest.approx([0.0, 1.0, 0.0])


def test_perspective_basis_stays_orthonormal():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    camera.rotation = (30.0, 45.0, 10.0)
    front, right, up = camera.front, camera.right, camera.up
    for v in (front, right, up):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    assert np.dot(front, right) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(front, up) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(right, up) == pytest.approx(0.0, abs=1e-9)


def test_perspective_view_moves_position_to_origin():
    camera = PerspectiveCamera(45.0, ASPECT, 0.1, 100.0)
    camera.position = (1.0, -2.0, 5.0)
    camera.rotation = (20.0, -35.0, 0.0)
    assert apply(camera.view_matrix, (1.0, -2.0, 5.0)) == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)
    assert np.allclose(camera.view_projection_matrix, camera.projection_matrix @ camera.view_matrix)
    assert camera.position.tolist() == [1.0, -2.0, 5.0]


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        PerspectiveCamera(45.0, 0.0, 0.1, 100.0)