import math

import numpy as np


def normalize_angle(angle):
    """Normalize angle to [-pi, pi] range."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle < -math.pi:
        angle += 2 * math.pi
    return angle


def distance_between_points(p1, p2):
    """Calculate Euclidean distance between two 2D points."""
    return float(np.hypot(p2[0] - p1[0], p2[1] - p1[1]))


def is_pose_close(pose_a, pose_b, translation_tolerance=0.01, yaw_tolerance=0.01):
    """
    Check whether two planar poses are within tolerance of each other.

    Poses are anything with x, y and yaw attributes.
    """
    translation = np.array([pose_a.x - pose_b.x, pose_a.y - pose_b.y])
    if np.linalg.norm(translation) > translation_tolerance:
        return False
    return abs(normalize_angle(pose_a.yaw - pose_b.yaw)) <= yaw_tolerance
