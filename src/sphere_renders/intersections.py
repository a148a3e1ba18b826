"""
Vectorized ray-sphere intersection for the Sphere renderer.

These are the batch counterparts of `Sphere.intersects`: same quadratic,
same EPSILON bias, same MISS sentinel, evaluated in float32 over arrays of
rays so a whole image can be traced at once.
"""
import numpy as np

from sphere_renders import constants


def dot_rows(u, v):
    """Row-wise dot product of two (N, 3) arrays, summed in x, y, z order."""
    return u[..., 0] * v[..., 0] + u[..., 1] * v[..., 1] + u[..., 2] * v[..., 2]


def solve_quadratic_vectorized(a, b, c):
    """
    Nearer root of at^2 + bt + c = 0 for vectorized arrays.

    Args:
        a, b, c: Arrays of quadratic coefficients

    Returns:
        tuple: (t_near, valid_mask) where t_near is (-b - sqrt(disc)) / 2a and
        valid_mask is False where the discriminant is negative. NaN
        coefficients give NaN roots with valid_mask True.
    """
    discriminant = b * b - 4.0 * a * c
    valid_mask = ~(discriminant < 0)

    with np.errstate(invalid="ignore", divide="ignore"):
        sqrt_disc = np.sqrt(np.where(valid_mask, discriminant, 0.0))
        t_near = (-b - sqrt_disc) / (2.0 * a)

    return t_near, valid_mask


def intersect_sphere(ray_origins, ray_directions, center, radius):
    """
    Vectorized intersection of rays and one sphere.

    Args:
        ray_origins: (3,) shared origin or (N, 3) per-ray origins
        ray_directions: (N, 3) array of unit ray directions, or a single (3,)
        center: (3,) sphere center
        radius: Sphere radius

    Returns:
        Array of biased hit distances (MISS where the ray misses)
    """
    is_single = np.ndim(ray_directions) == 1
    ray_directions = np.atleast_2d(np.asarray(ray_directions, dtype=np.float32))
    ray_origins = np.asarray(ray_origins, dtype=np.float32)
    center = np.asarray(center, dtype=np.float32)
    radius = np.float32(radius)

    q = ray_origins - center
    if q.ndim == 1:
        q = np.broadcast_to(q, ray_directions.shape)

    a = dot_rows(ray_directions, ray_directions)
    b = 2.0 * dot_rows(ray_directions, q)
    c = dot_rows(q, q) - radius * radius

    t_near, valid_mask = solve_quadratic_vectorized(a, b, c)
    t = np.where(valid_mask, t_near - constants.EPSILON, constants.MISS).astype(np.float32)

    return t[0] if is_single else t


def intersect_spheres(ray_origins, ray_directions, centers, radii):
    """
    Intersect every ray against every sphere.

    Args:
        ray_origins: (3,) or (N, 3) ray origins
        ray_directions: (N, 3) unit ray directions
        centers: (S, 3) sphere centers
        radii: (S,) sphere radii

    Returns:
        (N, S) float32 matrix of hit distances, column order = sphere order
    """
    ray_directions = np.atleast_2d(np.asarray(ray_directions, dtype=np.float32))
    centers = np.asarray(centers, dtype=np.float32).reshape(-1, 3)
    radii = np.asarray(radii, dtype=np.float32).reshape(-1)

    t = np.full((ray_directions.shape[0], centers.shape[0]), constants.MISS, dtype=np.float32)
    for i in range(centers.shape[0]):
        t[:, i] = intersect_sphere(ray_origins, ray_directions, centers[i], radii[i])
    return t


def valid_hits(t):
    """
    Mask of distances that count as hits.

    A hit is non-negative (sign bit clear, so -0.0 is a miss), not NaN and
    below the float32 maximum.
    """
    with np.errstate(invalid="ignore"):
        return ~np.signbit(t) & (t < np.finfo(np.float32).max)
