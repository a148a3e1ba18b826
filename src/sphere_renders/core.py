import functools
import logging
import time
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sphere_renders import constants
from sphere_renders.camera import Camera, screen_offsets
from sphere_renders.primitives import Light, Sphere
from sphere_renders.rendering import HitSelector, LambertShader

logger = logging.getLogger(__name__)

__all__ = ["Scene", "Renderer", "render", "screen_offsets"]


@dataclass
class Scene:
    """
    Everything needed to render one image.

    Attributes:
        camera: Pinhole camera
        spheres: Ordered spheres; on exact distance ties the lower index wins
        light: The single point light
        width: Image width in pixels
        height: Image height in pixels
    """
    camera: Camera
    spheres: Tuple[Sphere, ...]
    light: Light
    width: int = constants.DEFAULT_WIDTH
    height: int = constants.DEFAULT_HEIGHT

    def __post_init__(self):
        self.spheres = tuple(self.spheres)
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def default(cls, width=None, height=None):
        """Build the stock scene from the values in `constants`."""
        camera = Camera(constants.CAMERA_POSITION, constants.CAMERA_WORLD_UP, constants.CAMERA_LOOK_AT)
        spheres = [Sphere(center, radius) for center, radius in constants.SPHERES]
        return cls(
            camera=camera,
            spheres=spheres,
            light=Light(constants.LIGHT_POSITION),
            width=width if width is not None else constants.DEFAULT_WIDTH,
            height=height if height is not None else constants.DEFAULT_HEIGHT,
        )


class Renderer:
    def __init__(self, scene: Scene):
        """
        Initialize the renderer for a fixed scene.

        The scene is treated as read-only; renders are memoized per
        resolution, so mutate a scene only before handing it over.
        """
        self.scene = scene
        self.hit_selector = HitSelector(scene)
        self.shader = LambertShader(scene)

    def pixel_rays(self, width, height):
        """
        Camera ray directions for every pixel, row-major from the top-left.

        Returns:
            (height * width, 3) float32 array of unit directions
        """
        py, px = np.indices((height, width))
        x_offset, y_offset = screen_offsets(px.reshape(-1), py.reshape(-1), width, height)
        return self.scene.camera.ray_directions(x_offset, y_offset)

    def get_intensity(self, ray_directions):
        """
        Calculate the intensity for each camera ray.
        vectorized for N rays.
        """
        is_single = np.ndim(ray_directions) == 1
        ray_origin = self.scene.camera.position.to_array()
        hits = self.hit_selector.select_primary(ray_origin, ray_directions)
        intensity = self.shader.shade(hits)
        return intensity[0] if is_single else intensity

    def render_pixels(self, width, height):
        """
        Uncached render at the given size.

        Returns:
            Writable (height, width) uint8 array
        """
        t0 = time.perf_counter()
        ray_dirs = self.pixel_rays(width, height)
        pixels = self.get_intensity(ray_dirs).reshape(height, width)
        logger.debug("Rendered %dx%d, %d spheres, in %.3fs",
                     width, height, len(self.scene.spheres), time.perf_counter() - t0)
        return pixels

    @functools.lru_cache(maxsize=8)
    def _render_cached(self, width, height):
        """
        Internal cached render call using hashable arguments.
        """
        pixels = self.render_pixels(width, height)
        # Cached arrays are shared between callers
        pixels.setflags(write=False)
        return pixels

    def render(self, width=None, height=None):
        """
        Render a grayscale image of the scene using NumPy vectorization.

        Args:
            width: Override for the scene width
            height: Override for the scene height

        Returns:
            (height, width) uint8 array, row-major with row 0 at the top
        """
        width = int(width if width is not None else self.scene.width)
        height = int(height if height is not None else self.scene.height)
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        return self._render_cached(width, height)


def render(scene: Scene) -> np.ndarray:
    """Render `scene` to a (height, width) uint8 pixel buffer."""
    return Renderer(scene).render_pixels(scene.width, scene.height)
