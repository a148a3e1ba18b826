"""
Data structures and stages of the Sphere rendering pipeline.

Two renditions of the same per-pixel algorithm live here:

- the scalar path (`trace_pixel` and helpers) works on `Vec3`/`Ray`/`Sphere`
  objects one pixel at a time;
- the batch path (`HitSelector`, `LambertShader`) evaluates the same math
  with numpy over every pixel of an image at once.

Both use float32 throughout and agree pixel for pixel up to rounding.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from sphere_renders import constants
from sphere_renders.camera import screen_offsets
from sphere_renders.intersections import dot_rows, intersect_spheres, valid_hits
from sphere_renders.primitives import Light, Ray, Sphere
from sphere_renders.vector import Vec3

logger = logging.getLogger(__name__)

FLOAT32_MAX = np.finfo(np.float32).max
NO_HIT = -1


# Scalar path

def _is_hit(t) -> bool:
    return t is not None and not np.signbit(t) and bool(t < FLOAT32_MAX)


def nearest_hit_index(distances: Sequence[Optional[float]]) -> Optional[int]:
    """
    Index of the smallest valid distance.

    Misses may be given as None or as any negative value (e.g. MISS). On
    exact ties the lowest index wins.
    """
    last = FLOAT32_MAX
    ret_index = None
    for index, t in enumerate(distances):
        if _is_hit(t) and t < last:
            last = t
            ret_index = index
    return ret_index


def any_sphere_before_light(spheres: Sequence[Sphere], ray: Ray, light_distance) -> bool:
    """True if any sphere intersects `ray` closer than the light."""
    for sphere in spheres:
        t = sphere.hit_distance(ray)
        if t is not None and t < light_distance:
            return True
    return False


def shade_point(spheres: Sequence[Sphere], sphere: Sphere, point: Vec3, light: Light) -> int:
    """
    Lambertian intensity (0-255) of `point` on `sphere`.

    The shadow ray starts slightly outside the surface, at
    point + normal / SHADOW_BIAS_DIVISOR.
    """
    normal = sphere.normal_at(point)
    ray_origin = point + normal.divide(constants.SHADOW_BIAS_DIVISOR)
    ray_direction = light.position - ray_origin
    light_distance = ray_direction.magnitude()
    ray = Ray(ray_origin, ray_direction)

    if any_sphere_before_light(spheres, ray, light_distance):
        return 0

    cos_theta = ray.direction.dot(normal)
    if not cos_theta > 0.0:
        return 0
    return int(min(cos_theta * constants.MAX_INTENSITY, constants.MAX_INTENSITY))


def trace_pixel(scene, px: int, py: int) -> int:
    """
    Intensity of pixel (px, py) of `scene`, traced through the scalar path.

    Args:
        scene: Scene with camera, spheres, light, width and height
        px: Column, 0 = left
        py: Row, 0 = top
    """
    x_offset, y_offset = screen_offsets(px, py, scene.width, scene.height)
    cam_ray = scene.camera.ray_with_offset(x_offset, y_offset)

    distances = [sphere.hit_distance(cam_ray) for sphere in scene.spheres]
    index = nearest_hit_index(distances)
    if index is None:
        return 0

    hit_point = cam_ray.point_at(distances[index])
    return shade_point(scene.spheres, scene.spheres[index], hit_point, scene.light)


# Batch path

@dataclass
class HitResult:
    """
    Result of primary ray intersection.

    Attributes:
        distance: Distance to hit point (N,) shape, inf where nothing was hit
        sphere_index: Index of the sphere hit (N,) shape, NO_HIT (-1) for background
        hit_point: 3D coordinates of hit point (N, 3) shape, NaN for background
        normal: Outward unit surface normal (N, 3) shape, NaN for background
    """
    distance: np.ndarray  # (N,) shape
    sphere_index: np.ndarray  # (N,) shape
    hit_point: np.ndarray  # (N, 3) shape
    normal: np.ndarray  # (N, 3) shape

    def __post_init__(self):
        """Validate array shapes."""
        if self.distance.ndim != 1:
            raise ValueError(f"distance must be 1D array, got shape {self.distance.shape}")
        if self.sphere_index.ndim != 1:
            raise ValueError(f"sphere_index must be 1D array, got shape {self.sphere_index.shape}")
        if self.hit_point.ndim != 2 or self.hit_point.shape[1] != 3:
            raise ValueError(f"hit_point must be (N,3) array, got shape {self.hit_point.shape}")
        if self.normal.ndim != 2 or self.normal.shape[1] != 3:
            raise ValueError(f"normal must be (N,3) array, got shape {self.normal.shape}")

        n_rays = self.distance.shape[0]
        for name in ("sphere_index", "hit_point", "normal"):
            shape = getattr(self, name).shape
            if shape[0] != n_rays:
                raise ValueError(f"{name} shape {shape} doesn't match distance shape {self.distance.shape}")

    @property
    def hit_mask(self):
        return self.sphere_index != NO_HIT


class _SceneArrays:
    """Sphere centers and radii of a scene packed as float32 arrays."""

    def __init__(self, scene):
        self.scene = scene
        self.centers = np.array([s.center.to_array() for s in scene.spheres],
                                dtype=np.float32).reshape(-1, 3)
        self.radii = np.array([s.radius for s in scene.spheres], dtype=np.float32)


class HitSelector(_SceneArrays):
    """
    Responsible for determining which sphere each ray hits first.
    """

    def select_primary(self, ray_origin: np.ndarray, ray_directions: np.ndarray) -> HitResult:
        """
        Find the primary intersection for each ray.

        Args:
            ray_origin: (3,) origin point (the camera position)
            ray_directions: (N, 3) array of unit ray directions

        Returns:
            HitResult with primary intersections for all rays
        """
        ray_directions = np.atleast_2d(np.asarray(ray_directions, dtype=np.float32))
        ray_origin = np.asarray(ray_origin, dtype=np.float32)
        n_rays = ray_directions.shape[0]

        distance = np.full(n_rays, np.inf, dtype=np.float32)
        sphere_index = np.full(n_rays, NO_HIT, dtype=np.int64)
        hit_points = np.full((n_rays, 3), np.nan, dtype=np.float32)
        normals = np.full((n_rays, 3), np.nan, dtype=np.float32)

        if self.radii.shape[0] == 0:
            return HitResult(distance, sphere_index, hit_points, normals)

        t_all = intersect_spheres(ray_origin, ray_directions, self.centers, self.radii)
        masked = np.where(valid_hits(t_all), t_all, np.inf)

        # argmin returns the first minimum, so ties go to the lowest index
        nearest = np.argmin(masked, axis=1)
        t_min = masked[np.arange(n_rays), nearest]
        hits = np.isfinite(t_min)

        if np.any(hits):
            distance[hits] = t_min[hits]
            sphere_index[hits] = nearest[hits]
            origins = np.broadcast_to(ray_origin, ray_directions.shape)[hits]
            hit_points[hits] = origins + ray_directions[hits] * t_min[hits, None]

            outward = hit_points[hits] - self.centers[nearest[hits]]
            mag = np.sqrt(dot_rows(outward, outward))
            with np.errstate(divide="ignore", invalid="ignore"):
                normals[hits] = outward / mag[:, None]

        return HitResult(distance=distance, sphere_index=sphere_index,
                         hit_point=hit_points, normal=normals)


class LambertShader(_SceneArrays):
    """
    Responsible for hard shadows and Lambertian intensity at hit points.
    """

    def __init__(self, scene):
        super().__init__(scene)
        self.light_position = scene.light.position.to_array()

    def shadow_rays(self, points: np.ndarray, normals: np.ndarray):
        """
        Shadow rays toward the light.

        Returns:
            tuple: (origins, unit directions, light distances)
        """
        origins = points + normals / np.float32(constants.SHADOW_BIAS_DIVISOR)
        to_light = self.light_position[None, :] - origins
        light_distance = np.sqrt(dot_rows(to_light, to_light))
        with np.errstate(divide="ignore", invalid="ignore"):
            directions = to_light / light_distance[:, None]
        return origins, directions, light_distance

    def occluded(self, points: np.ndarray, normals: np.ndarray) -> np.ndarray:
        """
        Vectorized shadow test.

        Returns:
            (N,) bool array, True where a sphere sits between point and light
        """
        return self._blocked(*self.shadow_rays(points, normals))

    def _blocked(self, origins, directions, light_distance):
        if self.radii.shape[0] == 0:
            return np.zeros(origins.shape[0], dtype=bool)

        t_all = intersect_spheres(origins, directions, self.centers, self.radii)
        with np.errstate(invalid="ignore"):
            blocking = valid_hits(t_all) & (t_all < light_distance[:, None])
        return np.any(blocking, axis=1)

    def shade(self, hits: HitResult) -> np.ndarray:
        """
        Calculate intensities for all hits.

        Args:
            hits: HitResult from HitSelector

        Returns:
            (N,) uint8 array; 0 for background, occluded points and
            surfaces facing away from the light
        """
        n_rays = hits.distance.shape[0]
        intensity = np.zeros(n_rays, dtype=np.uint8)

        mask = hits.hit_mask
        if not np.any(mask):
            return intensity

        normals = hits.normal[mask]
        origins, directions, light_distance = self.shadow_rays(hits.hit_point[mask], normals)
        in_shadow = self._blocked(origins, directions, light_distance)

        cos_theta = dot_rows(directions, normals)
        with np.errstate(invalid="ignore"):
            lit = ~in_shadow & (cos_theta > 0.0)
        values = np.zeros(cos_theta.shape, dtype=np.float32)
        values[lit] = np.clip(cos_theta[lit] * constants.MAX_INTENSITY, 0.0, constants.MAX_INTENSITY)

        intensity[mask] = values.astype(np.uint8)
        logger.debug("Shaded %d hits, %d in shadow", int(mask.sum()), int(in_shadow.sum()))
        return intensity
