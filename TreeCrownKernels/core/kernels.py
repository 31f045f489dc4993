"""
Scalar kernel and cylinder primitives for weighting point cloud returns.

The kernels describe a tree-crown shaped neighborhood around a candidate mode:
a Gaussian profile in the horizontal plane and an asymmetric Epanechnikov
profile along z, with a compact base below the center and a fuller top above.

All functions compute in float64 and let degenerate inputs (zero width or
height) produce inf/nan instead of raising.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float

    def as_array(self):
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class CylinderRegion:
    """
    Right circular cylinder centered on a point.

    Attributes:
        radius (float): Horizontal radius around the center.
        height (float): Total height, half of it above and half below the center.
        center (Point3D): Center of the cylinder.
    """

    radius: float
    height: float
    center: Point3D

    def contains(self, point):
        return in_cylinder(point, self.radius, self.height, self.center)


def in_cylinder(point, radius, height, center):
    """
    Check whether a point lies within a cylinder around a center point.

    Both the radial and the vertical tests are inclusive.

    Args:
        point (Point3D): The point to test.
        radius (float): Horizontal radius of the cylinder.
        height (float): Total height of the cylinder.
        center (Point3D): Center of the cylinder.

    Returns:
        bool: True if the point is inside or on the boundary.
    """
    with np.errstate(invalid="ignore", over="ignore"):
        dx = np.float64(point.x) - center.x
        dy = np.float64(point.y) - center.y
        half_height = 0.5 * np.float64(height)
        inside = (
            dx ** 2 + dy ** 2 <= np.float64(radius) ** 2
            and point.z >= center.z - half_height
            and point.z <= center.z + half_height
        )
    return bool(inside)


def vertical_distance(height, ctr_z, point_z):
    """
    Normalized distance from point_z to the nearer of the two kernel planes.

    The bottom plane sits at ctr_z - height/4 and the top plane at
    ctr_z + height/2; both distances are scaled by 3*height/8. The result is a
    shape parameter for the vertical kernel and may exceed 1.
    """
    height = np.float64(height)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        scale = 3.0 * height / 8.0
        bottom = abs((ctr_z - height / 4.0 - point_z) / scale)
        top = abs((ctr_z + height / 2.0 - point_z) / scale)
        # np.minimum keeps a nan from either side
        return float(np.minimum(bottom, top))


def epanechnikov_weight(height, ctr_z, point_z):
    """
    Vertical Epanechnikov-type weight of a point relative to a kernel center.

    The support window is [ctr_z - height/4, ctr_z + height/2]; outside of it
    the weight is exactly 0. Inside, the weight is
    1 - (1 - vertical_distance)**2, which peaks at ctr_z + height/8.

    Args:
        height (float): Kernel height (crown length).
        ctr_z (float): z coordinate of the kernel center.
        point_z (float): z coordinate of the point.

    Returns:
        float: The vertical weight. Not clamped.
    """
    height = np.float64(height)
    if point_z >= ctr_z - height / 4.0 and point_z <= ctr_z + height / 2.0:
        return float(1.0 - (1.0 - vertical_distance(height, ctr_z, point_z)) ** 2)
    return 0.0


def gauss_weight(width, ctr_x, ctr_y, point_x, point_y):
    """
    Horizontal Gaussian-type weight, exp(-5 * (d / (width/2))**2).

    Equals 1 at the center and decays smoothly with planar distance d; there is
    no cutoff.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        distance = np.sqrt((np.float64(point_x) - ctr_x) ** 2 + (np.float64(point_y) - ctr_y) ** 2)
        norm_distance = distance / (np.float64(width) / 2.0)
        result = np.exp(-5.0 * norm_distance ** 2)
    return float(result)
