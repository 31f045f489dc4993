"""
Parameter objects for kernel sizing and mode merging.

Defaults follow the values commonly used for adaptive mean shift crown
delineation on airborne LiDAR with heights above ground in meters.
"""

from dataclasses import dataclass

CLUSTER_METHODS = ("leader", "rounding", "dbscan")


@dataclass
class KernelParameters:
    """
    Allometric kernel sizing.

    Kernel width (crown diameter) and kernel height (crown length) grow
    linearly with the height of the kernel center above ground.

    Attributes:
        cw_inter (float): Intercept for crown width.
        h2cw (float): Ratio of height to crown width.
        cl_inter (float): Intercept for crown length.
        h2cl (float): Ratio of height to crown length.
        minz (float): Minimum height above ground for a return to be used.
    """

    cw_inter: float = 0.1
    h2cw: float = 0.3
    cl_inter: float = 0.1
    h2cl: float = 0.4
    minz: float = 2.0

    def crown_width(self, z):
        return self.cw_inter + self.h2cw * z

    def crown_length(self, z):
        return self.cl_inter + self.h2cl * z


@dataclass
class ClusterParameters:
    """
    Settings for merging mode centroids into tree clusters.

    Attributes:
        method (str): One of "leader", "rounding" or "dbscan".
        eps (float): Merge distance for the leader and dbscan methods.
        accuracy (float): Rounding accuracy for the rounding method.
        min_samples (int): Core point neighborhood size for dbscan.
    """

    method: str = "leader"
    eps: float = 1.0
    accuracy: float = 2.0
    min_samples: int = 5

    def __post_init__(self):
        if self.method not in CLUSTER_METHODS:
            raise ValueError(f"Unknown clustering method {self.method!r}, expected one of {CLUSTER_METHODS}")
        if not self.accuracy > 0:
            raise ValueError("Rounding accuracy must be positive")
        if self.min_samples < 1:
            raise ValueError("min_samples must be at least 1")
