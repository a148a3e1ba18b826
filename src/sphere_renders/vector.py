"""
Single-precision 3D vector algebra for the Sphere Renderer.

Components are stored as numpy.float32 so scalar math matches the batch
pipeline bit for bit. Nothing is validated: dividing or normalizing a zero
vector yields nan/inf components that propagate through later math.
"""
import numpy as np


class Vec3:
    """
    3D vector of float32 components.

    All algebraic operations return new vectors; only `normalize` mutates.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.x = np.float32(x)
        self.y = np.float32(y)
        self.z = np.float32(z)

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values):
        """Build a vector from any length-3 sequence or array."""
        x, y, z = values
        return cls(x, y, z)

    def to_array(self):
        """Return the components as a (3,) float32 array."""
        return np.array([self.x, self.y, self.z], dtype=np.float32)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return f"Vec3({float(self.x)!r}, {float(self.y)!r}, {float(self.z)!r})"

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z)

    __hash__ = None

    # Arithmetic

    def add(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def mul(self, other: "Vec3") -> "Vec3":
        """Component-wise product."""
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def scale(self, s) -> "Vec3":
        s = np.float32(s)
        return Vec3(self.x * s, self.y * s, self.z * s)

    def divide(self, s) -> "Vec3":
        s = np.float32(s)
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vec3(self.x / s, self.y / s, self.z / s)

    def negate(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __mul__(self, other):
        if isinstance(other, Vec3):
            return self.mul(other)
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, s):
        return self.divide(s)

    def __neg__(self):
        return self.negate()

    # Products and length

    def dot(self, other: "Vec3"):
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self):
        return np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "Vec3":
        """Return a unit-length copy of this vector."""
        m = self.magnitude()
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vec3(self.x / m, self.y / m, self.z / m)

    def normalize(self) -> None:
        """Scale this vector to unit length in place."""
        m = self.magnitude()
        with np.errstate(divide="ignore", invalid="ignore"):
            self.x = self.x / m
            self.y = self.y / m
            self.z = self.z / m


def as_vec3(value):
    """Return `value` unchanged if it is a Vec3, else convert a length-3 sequence."""
    return value if isinstance(value, Vec3) else Vec3.from_array(value)
