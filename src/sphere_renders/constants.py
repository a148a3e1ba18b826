"""
Numerical constants and default scene configuration for the Sphere Renderer.
"""

# Intersection
MISS = -1.0
EPSILON = 1e-5  # Subtracted from every hit distance
SHADOW_BIAS_DIVISOR = 1000.0  # Shadow ray origin = hit + normal / divisor

# Output
MAX_INTENSITY = 255.0
DEFAULT_OUTPUT_PATH = "out.png"

# Image
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

# Camera
CAMERA_POSITION = (3.0, 1.5, -4.0)
CAMERA_WORLD_UP = (0.0, 1.0, 0.0)
CAMERA_LOOK_AT = (0.0, 0.0, 0.0)

# Light
LIGHT_POSITION = (5.0, 5.0, 5.0)

# Spheres as (center, radius)
SPHERES = [
    ((1.25, -0.25, 0.0), 0.5),  # Small satellite
    ((0.0, 0.0, 0.0), 1.0),     # Main sphere
    ((0.0, -100.0, 0.0), 99.0), # Ground
    ((0.0, 0.0, 0.0), 20.0),    # Enclosing dome, shadows ground beyond radius 20
]
