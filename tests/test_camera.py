import numpy as np
import pytest
from sphere_renders.camera import Camera, screen_offsets

from conftest import assert_vec_close


def test_basis_is_orthonormal():
    camera = Camera((3.0, 1.5, -4.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))

    assert float(camera.up.magnitude()) == pytest.approx(1.0, rel=1e-6)
    assert float(camera.right.magnitude()) == pytest.approx(1.0, rel=1e-6)
    assert float(camera.up.dot(camera.right)) == pytest.approx(0.0, abs=1e-6)
    assert float(camera.forward.dot(camera.up)) == pytest.approx(0.0, abs=1e-6)
    assert float(camera.forward.dot(camera.right)) == pytest.approx(0.0, abs=1e-6)


def test_forward_points_at_target():
    camera = Camera((3.0, 1.5, -4.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))
    expected = np.array([-3.0, -1.5, 4.0]) / np.sqrt(27.25)
    assert_vec_close(camera.forward, expected, rtol=1e-5, atol=1e-6)


def test_basis_vectors_stability(front_camera):
    """
    Verify that the camera basis doesn't flip: screen up is world up and
    screen right is the viewer's right in a right-handed frame.
    """
    assert_vec_close(front_camera.forward, (0.0, 0.0, 1.0))
    assert_vec_close(front_camera.up, (0.0, 1.0, 0.0))
    assert_vec_close(front_camera.right, (-1.0, 0.0, 0.0))


def test_tilted_camera_keeps_up_toward_world_up():
    camera = Camera((3.0, 1.5, -4.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))
    assert camera.up.y > 0.9
    assert abs(float(camera.right.y)) < 1e-6, "Right vector should stay horizontal"


def test_center_ray_is_forward(front_camera):
    ray = front_camera.ray_with_offset(0.5, 0.5)
    assert ray.origin == front_camera.position
    assert_vec_close(ray.direction, (0.0, 0.0, 1.0))


def test_top_row_looks_up_and_right_column_looks_right(front_camera):
    top = front_camera.ray_with_offset(0.5, 0.0)
    bottom = front_camera.ray_with_offset(0.5, 1.0)
    right = front_camera.ray_with_offset(1.0, 0.5)

    assert top.direction.y > 0
    assert bottom.direction.y < 0
    assert right.direction.dot(front_camera.right) > 0
    assert_vec_close(top.direction, np.array([0.0, 0.5, 1.0]) / np.sqrt(1.25))


def test_vectorized_directions_match_scalar_rays():
    camera = Camera((3.0, 1.5, -4.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))
    xs = np.array([0.0, 0.25, 0.5, 0.9, -0.1667], dtype=np.float32)
    ys = np.array([0.0, 0.75, 0.5, 0.1, 1.0], dtype=np.float32)

    dirs = camera.ray_directions(xs, ys)

    assert dirs.shape == (5, 3)
    assert dirs.dtype == np.float32
    for i in range(len(xs)):
        ray = camera.ray_with_offset(xs[i], ys[i])
        assert_vec_close(dirs[i], ray.direction)


def test_square_image_offsets_are_plain_fractions():
    """For width == height no aspect stretching is applied."""
    for px, py in [(0, 0), (50, 50), (99, 13), (37, 81)]:
        x_offset, y_offset = screen_offsets(px, py, 100, 100)
        assert x_offset == pytest.approx(px / 100.0)
        assert y_offset == pytest.approx(py / 100.0)


def test_wide_image_stretches_x_around_center():
    x_offset, y_offset = screen_offsets(400, 300, 800, 600)
    assert x_offset == pytest.approx(0.5)
    assert y_offset == pytest.approx(0.5)

    x_left, y_top = screen_offsets(0, 0, 800, 600)
    assert x_left == pytest.approx(-400.0 / 600.0 + 0.5)
    assert y_top == pytest.approx(0.0)


def test_tall_image_stretches_y_around_center():
    x_offset, y_offset = screen_offsets(300, 400, 600, 800)
    assert x_offset == pytest.approx(0.5)
    assert y_offset == pytest.approx(0.5)

    x_left, y_top = screen_offsets(0, 0, 600, 800)
    assert x_left == pytest.approx(0.0)
    assert y_top == pytest.approx(-400.0 / 600.0 + 0.5)


def test_offsets_accept_arrays():
    py, px = np.indices((3, 4))
    x_offset, y_offset = screen_offsets(px, py, 4, 3)

    assert x_offset.shape == (3, 4)
    assert x_offset.dtype == np.float32
    np.testing.assert_allclose(x_offset[0], (np.arange(4) - 2.0) / 3.0 + 0.5, rtol=1e-6)
    np.testing.assert_allclose(y_offset[:, 0], np.arange(3) / 3.0, rtol=1e-6)
