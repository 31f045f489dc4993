"""
TreeCrownKernels.core - Kernel primitives and mode clustering

This module contains the numeric core of the TreeCrownKernels package: the
cylinder membership test and the crown kernels used to weight returns around
a candidate center, and the merging of mode centroids into tree clusters.

Modules:
    kernels: Scalar cylinder and kernel primitives, Point3D and CylinderRegion
    weighting: Vectorised kernel weights and local density for many returns
    mode_cluster: Leader, rounding and DBSCAN merging of mode centroids
"""
