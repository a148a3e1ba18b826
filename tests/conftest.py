"""
Pytest fixtures and configuration for Sphere Renderer tests.

This module provides shared fixtures and utilities to reduce test code duplication.
"""

import numpy as np
import pytest
from sphere_renders.camera import Camera
from sphere_renders.core import Scene
from sphere_renders.primitives import Light, Sphere


@pytest.fixture
def unit_sphere():
    """Radius 1 sphere at the world origin."""
    return Sphere((0.0, 0.0, 0.0), 1.0)


@pytest.fixture
def overhead_light():
    """Light straight above the origin."""
    return Light((0.0, 5.0, 0.0))


@pytest.fixture
def front_camera():
    """Camera on the -Z axis looking at the origin, +Y up."""
    return Camera((0.0, 0.0, -5.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))


@pytest.fixture
def single_sphere_scene(unit_sphere):
    """One unit sphere, light at (5,5,5), camera at (3,1.5,-4), 800x600."""
    return Scene(
        camera=Camera((3.0, 1.5, -4.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0)),
        spheres=[unit_sphere],
        light=Light((5.0, 5.0, 5.0)),
        width=800,
        height=600,
    )


@pytest.fixture
def small_default_scene():
    """The stock scene at a resolution cheap enough for per-pixel checks."""
    return Scene.default(width=40, height=30)


def assert_vec_close(actual, expected, rtol=1e-6, atol=1e-6, err_msg=""):
    """Assert that a Vec3 (or array) matches expected components."""
    np.testing.assert_allclose(
        np.asarray(list(actual), dtype=np.float64), np.asarray(list(expected), dtype=np.float64),
        rtol=rtol, atol=atol, err_msg=f"Vector mismatch: {err_msg}"
    )
