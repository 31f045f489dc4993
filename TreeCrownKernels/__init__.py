"""
TreeCrownKernels - Crown-shaped kernel weights and mode merging for LiDAR point clouds
"""

__version__ = "0.1.0"
