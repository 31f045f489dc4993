"""
Array helpers for point cloud returns.

Points are handled as (num_points, 3) float arrays of x, y, z. Anything with a
``points`` attribute (such as an open3d point cloud) is accepted as input.
"""

import math

import numpy as np


def as_points(points):
    """
    Convert a point cloud or array-like to a (num_points, 3) float array.

    Args:
        points: Array-like of shape (num_points, 3), or an object with a
            ``points`` attribute such as o3d.geometry.PointCloud.

    Returns:
        np.ndarray: Float array of shape (num_points, 3).

    Raises:
        ValueError: If the input does not have three columns.
    """
    if hasattr(points, "points"):
        points = points.points
    points = np.asarray(points, dtype=float)
    if points.ndim == 1 and points.size == 0:
        return points.reshape(0, 3)
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"Points must have shape (num_points, 3), got {points.shape}")
    return points


def as_center(center):
    """Convert a Point3D or a length 3 sequence to a float array."""
    if hasattr(center, "as_array"):
        return center.as_array()
    center = np.asarray(center, dtype=float)
    if center.shape != (3,):
        raise ValueError(f"Center must have 3 coordinates, got shape {center.shape}")
    return center


def points_within_distance(x, y, points, distance):
    """
    Find all points within a planar distance of a given (x, y) location.

    Args:
        x (float): The x coordinate of the reference location.
        y (float): The y coordinate of the reference location.
        points (np.ndarray): Array of shape (num_points, 3).
        distance (float): Maximum planar distance, inclusive.

    Returns:
        np.ndarray: Points within the distance, in input order.
    """
    points = as_points(points)
    distances = np.linalg.norm(points[:, :2] - np.array([x, y], dtype=float), axis=1)
    return points[distances <= distance]


def filter_min_height(points, minz):
    """Drop ground and near-ground returns with z below minz."""
    points = as_points(points)
    return points[points[:, 2] >= minz]


def shift_to_origin(points):
    """
    Shift points so x and y start near zero.

    The offset is the floor of the minimum x and y, so shifted coordinates keep
    their fractional part.

    Returns:
        tuple: (shifted points, offset array of length 3 with a zero z offset)
    """
    points = as_points(points)
    if len(points) == 0:
        return points.copy(), np.zeros(3)
    offset = np.array([math.floor(points[:, 0].min()), math.floor(points[:, 1].min()), 0.0])
    return points - offset, offset
