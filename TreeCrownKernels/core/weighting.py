"""
Vectorised kernel weights of many returns against one candidate center.

These mirror the scalar primitives in kernels.py element-wise and are what a
mode finder calls when it estimates the local density around a center.
"""

import logging

import numpy as np

from TreeCrownKernels.utils.utils import as_center, as_points, points_within_distance

logger = logging.getLogger(__name__)


def cylinder_mask(points, center, radius, height):
    """
    Boolean mask of points inside a cylinder around center (boundaries inclusive).

    Args:
        points (np.ndarray): Array of shape (num_points, 3).
        center: Point3D or length 3 sequence.
        radius (float): Horizontal radius.
        height (float): Total height, split evenly above and below center.

    Returns:
        np.ndarray: Boolean array of length num_points.
    """
    points = as_points(points)
    center = as_center(center)
    with np.errstate(invalid="ignore", over="ignore"):
        planar_sq = (points[:, 0] - center[0]) ** 2 + (points[:, 1] - center[1]) ** 2
        half_height = 0.5 * np.float64(height)
        return (
            (planar_sq <= np.float64(radius) ** 2)
            & (points[:, 2] >= center[2] - half_height)
            & (points[:, 2] <= center[2] + half_height)
        )


def vertical_distances(height, ctr_z, point_z):
    height = np.float64(height)
    point_z = np.asarray(point_z, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        scale = 3.0 * height / 8.0
        bottom = np.abs((ctr_z - height / 4.0 - point_z) / scale)
        top = np.abs((ctr_z + height / 2.0 - point_z) / scale)
        return np.minimum(bottom, top)


def epanechnikov_weights(height, ctr_z, point_z):
    """Vertical weights for an array of z values; 0 outside the support window."""
    height = np.float64(height)
    point_z = np.asarray(point_z, dtype=float)
    in_window = (point_z >= ctr_z - height / 4.0) & (point_z <= ctr_z + height / 2.0)
    with np.errstate(invalid="ignore", over="ignore"):
        weights = 1.0 - (1.0 - vertical_distances(height, ctr_z, point_z)) ** 2
    return np.where(in_window, weights, 0.0)


def gauss_weights(width, ctr_x, ctr_y, point_x, point_y):
    """Horizontal Gaussian weights for arrays of x and y values."""
    point_x = np.asarray(point_x, dtype=float)
    point_y = np.asarray(point_y, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        distance = np.sqrt((point_x - ctr_x) ** 2 + (point_y - ctr_y) ** 2)
        norm_distance = distance / (np.float64(width) / 2.0)
        return np.exp(-5.0 * norm_distance ** 2)


def kernel_weights(points, center, width, height):
    """
    Combined crown kernel weight of each point: horizontal Gaussian times
    vertical Epanechnikov.

    Args:
        points (np.ndarray): Array of shape (num_points, 3).
        center: Point3D or length 3 sequence.
        width (float): Kernel width (crown diameter).
        height (float): Kernel height (crown length).

    Returns:
        np.ndarray: Float array of length num_points.
    """
    points = as_points(points)
    center = as_center(center)
    horizontal = gauss_weights(width, center[0], center[1], points[:, 0], points[:, 1])
    vertical = epanechnikov_weights(height, center[2], points[:, 2])
    with np.errstate(invalid="ignore"):
        return horizontal * vertical


def local_density(points, center, width, height, max_distance=None):
    """
    Sum of the combined kernel weights of the points around center.

    If max_distance is given, only points within that planar distance of the
    center contribute, which truncates the horizontal kernel.
    """
    if max_distance is not None:
        center = as_center(center)
        points = points_within_distance(center[0], center[1], points, max_distance)
    weights = kernel_weights(points, center, width, height)
    density = float(weights.sum())
    logger.debug("Local density %.4f from %d points", density, len(weights))
    return density


def allometric_kernel_weights(points, center, params):
    """
    Kernel weights with width and height taken from the center's height.

    Points below params.minz get weight 0.

    Args:
        points (np.ndarray): Array of shape (num_points, 3).
        center: Point3D or length 3 sequence.
        params (KernelParameters): Allometric sizing.

    Returns:
        np.ndarray: Float array of length num_points.
    """
    points = as_points(points)
    center = as_center(center)
    width = params.crown_width(center[2])
    height = params.crown_length(center[2])
    weights = kernel_weights(points, center, width, height)
    return np.where(points[:, 2] >= params.minz, weights, 0.0)
