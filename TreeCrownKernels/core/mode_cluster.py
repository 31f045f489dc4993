"""
Merging of mode centroids into tree clusters.

A mode finder leaves one centroid per return; returns whose centroids end up
close together belong to the same crown. The default leader rule attaches each
centroid to the first earlier centroid within eps, in input order. It is a
single pass, not a transitive closure, so the partition depends on the order
of the input.
"""

import logging

import numpy as np
import pandas as pd
from sklearn.cluster import DBSCAN
from tqdm.auto import tqdm

from TreeCrownKernels.config import ClusterParameters
from TreeCrownKernels.utils.utils import as_points

logger = logging.getLogger(__name__)

COLUMNS = ["X", "Y", "Z", "ID"]


def _cluster_frame(ctr, ids):
    return pd.DataFrame(
        {
            "X": ctr[:, 0],
            "Y": ctr[:, 1],
            "Z": ctr[:, 2],
            "ID": np.asarray(ids, dtype=np.int64),
        },
        columns=COLUMNS,
    )


def find_cluster(centroids, epsilon, progress=False):
    """
    Find clusters of modes that are less than epsilon apart.

    For each centroid i the earlier centroids j = 0 .. i-1 are scanned in order
    and the first one with a Euclidean distance strictly below epsilon becomes
    its cluster id. A centroid without such a neighbor keeps its own index.

    Args:
        centroids (np.ndarray): Mode coordinates of shape (num_modes, 3).
        epsilon (float): Merge distance. Values <= 0 leave every mode alone.
        progress (bool): Show a progress bar over the modes.

    Returns:
        pd.DataFrame: Columns X, Y, Z and ID, one row per centroid in input order.
    """
    ctr = as_points(centroids)
    ids = np.arange(len(ctr), dtype=np.int64)

    for i in tqdm(range(len(ctr)), disable=not progress, desc="Merging modes"):
        deltas = np.sqrt(np.sum((ctr[:i] - ctr[i]) ** 2, axis=1))
        matches = np.flatnonzero(deltas < epsilon)
        if matches.size:
            ids[i] = matches[0]

    logger.debug("Merged %d modes into %d clusters", len(ctr), len(np.unique(ids)))
    return _cluster_frame(ctr, ids)


def round_any(values, accuracy):
    """Round values to the nearest multiple of accuracy (ties to even)."""
    return np.round(np.asarray(values, dtype=float) / accuracy) * accuracy


def cluster_by_rounding(centroids, accuracy):
    """
    Assign one id per distinct rounded centroid position.

    Ids are numbered from 0 in order of first appearance.
    """
    ctr = as_points(centroids)
    rounded = pd.DataFrame(round_any(ctr, accuracy), columns=["X", "Y", "Z"])
    ids = rounded.groupby(["X", "Y", "Z"], sort=False, dropna=False).ngroup().to_numpy()
    logger.debug("Rounded %d modes into %d clusters", len(ctr), len(np.unique(ids)))
    return _cluster_frame(ctr, ids)


def dbscan_cluster(centroids, eps, min_samples=5):
    """
    Cluster centroids with DBSCAN.

    Noise centroids get the id -1.
    """
    ctr = as_points(centroids)
    if len(ctr) == 0:
        return _cluster_frame(ctr, [])
    model = DBSCAN(eps=eps, min_samples=min_samples).fit(ctr)
    return _cluster_frame(ctr, model.labels_)


def cluster_modes(centroids, params=None, progress=False):
    """
    Merge centroids with the method selected in params.

    Args:
        centroids (np.ndarray): Mode coordinates of shape (num_modes, 3).
        params (ClusterParameters, optional): Defaults to the leader rule with eps 1.0.
        progress (bool): Show a progress bar for the leader rule.

    Returns:
        pd.DataFrame: Columns X, Y, Z and ID.
    """
    params = params or ClusterParameters()
    if params.method == "leader":
        return find_cluster(centroids, params.eps, progress=progress)
    if params.method == "rounding":
        return cluster_by_rounding(centroids, params.accuracy)
    return dbscan_cluster(centroids, params.eps, params.min_samples)


def cluster_centers(clusters):
    """
    Median position and size of each cluster.

    Args:
        clusters (pd.DataFrame): Output of one of the clustering functions.

    Returns:
        pd.DataFrame: Indexed by ID, with columns X, Y, Z (medians) and N.
    """
    grouped = clusters.groupby("ID", sort=True)
    centers = grouped[["X", "Y", "Z"]].median()
    centers["N"] = grouped.size()
    return centers
