"""Minimal kinematics: quaternions, angle-axis rotations, rigid, similarity and planar transformations."""

__version__ = "0.1.0"

__all__ = [
    "common",
    "so3",
    "quaternion",
    "angle_axis",
    "transformation",
    "sim3",
    "transform2d",
    "factories",
]