"""
open3d helpers for looking at clustered modes or returns.
"""

import numpy as np
import open3d as o3d


def cluster_colors(ids):
    """
    Deterministic random RGB color per cluster id.

    Args:
        ids (np.ndarray): Cluster id per point.

    Returns:
        np.ndarray: Array of shape (num_points, 3) with values in [0, 1).
    """
    ids = np.asarray(ids, dtype=np.int64)
    colors = np.zeros((len(ids), 3))
    for cluster in np.unique(ids):
        # +2 keeps the seed non-negative for dbscan noise (-1)
        colors[ids == cluster] = np.random.RandomState(cluster + 2).rand(3)
    return colors


def clusters_to_pcd(clusters):
    """
    Build a colored point cloud from a clustering result.

    Args:
        clusters (pd.DataFrame): Frame with columns X, Y, Z and ID.

    Returns:
        o3d.geometry.PointCloud: One point per row, colored by ID.
    """
    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(clusters[["X", "Y", "Z"]].to_numpy(dtype=float))
    pcd.colors = o3d.utility.Vector3dVector(cluster_colors(clusters["ID"].to_numpy()))
    return pcd
