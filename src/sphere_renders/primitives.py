"""
Scene primitives: rays, spheres and the point light.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from sphere_renders import constants
from sphere_renders.vector import Vec3, as_vec3


class Ray:
    """
    Half-line in world space.

    The direction is normalized here, once, at construction. The vector
    passed in is left untouched.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin, direction):
        self.origin = as_vec3(origin)
        self.direction = as_vec3(direction).normalized()

    def point_at(self, t) -> Vec3:
        return self.origin + self.direction.scale(t)

    def __repr__(self):
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"


@dataclass
class Sphere:
    """
    Sphere primitive.

    Attributes:
        center: Sphere center in world space
        radius: Sphere radius; expected to be positive, not checked
    """
    center: Vec3
    radius: float

    def __post_init__(self):
        self.center = as_vec3(self.center)
        self.radius = np.float32(self.radius)

    def intersects(self, ray: Ray):
        """
        Distance along `ray` to the nearer intersection.

        Returns `constants.MISS` (-1.0) when the ray misses. Hits are biased
        toward the ray origin by `constants.EPSILON`; any negative value
        must be read as a miss.
        """
        q = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(q)
        c = q.dot(q) - self.radius * self.radius
        d = b * b - 4.0 * a * c  # discriminant

        if d < 0.0:
            return np.float32(constants.MISS)
        if d == 0.0:
            return -b / (2.0 * a) - constants.EPSILON
        with np.errstate(invalid="ignore"):
            return (-b - np.sqrt(d)) / (2.0 * a) - constants.EPSILON

    def hit_distance(self, ray: Ray) -> Optional[float]:
        """Same as `intersects`, with every miss reported as None."""
        t = self.intersects(ray)
        if np.signbit(t) or np.isnan(t):
            return None
        return t

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal; `point` should lie on the surface."""
        normal = point - self.center
        normal.normalize()
        return normal


@dataclass
class Light:
    """Point light. Brightness comes only from the cosine term."""
    position: Vec3

    def __post_init__(self):
        self.position = as_vec3(self.position)
