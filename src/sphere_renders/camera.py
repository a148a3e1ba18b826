"""
Pinhole camera: builds an orthonormal basis from a look-at target and maps
normalized screen coordinates to world-space rays.
"""
import numpy as np

from sphere_renders.primitives import Ray
from sphere_renders.vector import as_vec3


class Camera:
    """
    Look-at camera.

    Coordinate convention (right-handed):
    - forward: unit vector from `position` toward the look-at target
    - right: forward x world_up, so screen x grows to the viewer's right
    - up: right x forward, the component of world_up orthogonal to forward

    forward == up x right, so the basis can be recovered from (up, right).
    """

    def __init__(self, position, world_up, look_at):
        self.position = as_vec3(position)
        direction = (as_vec3(look_at) - self.position).normalized()
        self.right = direction.cross(as_vec3(world_up)).normalized()
        self.up = self.right.cross(direction)

    @property
    def forward(self):
        return self.up.cross(self.right)

    def ray_with_offset(self, x, y) -> Ray:
        """
        Ray through screen point (x, y).

        Args:
            x: Horizontal screen coordinate, 0 = left edge, 0.5 = center
            y: Vertical screen coordinate, 0 = top edge, 0.5 = center
        """
        direction = self.forward + (
            self.right.scale(x - 0.5) + self.up.scale(1.0 - y - 0.5)
        )
        return Ray(self.position, direction)

    def ray_directions(self, x_offsets, y_offsets):
        """
        Vectorized `ray_with_offset` for arrays of screen coordinates.

        Returns:
            (N, 3) float32 array of unit ray directions
        """
        x = np.asarray(x_offsets, dtype=np.float32).reshape(-1)
        y = np.asarray(y_offsets, dtype=np.float32).reshape(-1)

        forward = self.forward.to_array()
        right = self.right.to_array()
        up = self.up.to_array()

        dirs = forward[None, :] + (
            right[None, :] * (x - 0.5)[:, None] + up[None, :] * (1.0 - y - 0.5)[:, None]
        )
        mag = np.sqrt(dirs[:, 0] * dirs[:, 0] + dirs[:, 1] * dirs[:, 1] + dirs[:, 2] * dirs[:, 2])
        with np.errstate(divide="ignore", invalid="ignore"):
            return dirs / mag[:, None]


def screen_offsets(px, py, width, height):
    """
    Map pixel coordinates to normalized screen coordinates.

    The larger image dimension is stretched around the center so the scene
    keeps its proportions; square images map to plain px/width, py/height.
    Works on scalars and on numpy arrays of pixel coordinates.

    Returns:
        tuple: (x_offset, y_offset) as float32
    """
    px = np.asarray(px, dtype=np.float32)
    py = np.asarray(py, dtype=np.float32)
    w = np.float32(width)
    h = np.float32(height)

    if width > height:
        x_offset = (px - w / 2.0) / h + 0.5
        y_offset = py / h
    elif height > width:
        x_offset = px / w
        y_offset = (py - h / 2.0) / w + 0.5
    else:
        x_offset = px / w
        y_offset = py / h
    return x_offset, y_offset
