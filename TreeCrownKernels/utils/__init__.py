"""
TreeCrownKernels.utils - Point array helpers and visualisation

Functions:
    as_points: Coerce point clouds and array-likes to (num_points, 3) arrays
    as_center: Coerce a Point3D or sequence to a coordinate array
    points_within_distance: Select points within a planar radius
    filter_min_height: Drop near-ground returns
    shift_to_origin: Shift x and y close to the coordinate origin

The visualize module (requires open3d) colors clustering results.
"""
