"""Quaternion and rotation helpers. Quaternions are ``(x, y, z, w)`` tuples."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Quaternion = tuple[float, float, float, float]


def quat_to_rpy(quaternion: Sequence[float]) -> tuple[float, float, float]:
    """Return ``(roll, pitch, yaw)`` of a quaternion given as ``(x, y, z, w)``."""
    x, y, z, w = quaternion
    s = min(-2.0 * (x * z - w * y), 0.99999)
    yaw = math.atan2(2 * (x * y + w * z), w * w + x * x - y * y - z * z)
    pitch = math.asin(s) if s >= -1.0 else math.nan
    roll = math.atan2(2 * (y * z + w * x), w * w - x * x - y * y + z * z)
    return roll, pitch, yaw


def yaw_from_quat(quaternion: Sequence[float]) -> float:
    """Return the yaw angle of a quaternion given as ``(x, y, z, w)``."""
    return quat_to_rpy(quaternion)[2]


def average_quaternion(
    quaternions: Sequence[Sequence[float]], weights: Sequence[float]
) -> Quaternion:
    """Weighted average orientation: the principal eigenvector of sum(w q q^T)."""
    if len(quaternions) != len(weights):
        raise ValueError("quaternions and weights must have the same length")
    q = np.array(
        [[c * w for c in quat] for quat, w in zip(quaternions, weights)], dtype=float
    ).reshape(len(weights), 4).T
    eigenvalues, eigenvectors = np.linalg.eigh(q @ q.T)
    vec = eigenvectors[:, int(np.argmax(eigenvalues))]
    vec = vec / np.linalg.norm(vec)
    return float(vec[0]), float(vec[1]), float(vec[2]), float(vec[3])


def rotation_matrix_to_quaternion(rotation: Sequence) -> Quaternion:
    """Convert a 3x3 rotation matrix (nested rows or 9 row-major values)."""
    r = np.asarray(rotation, dtype=float).reshape(3, 3)
    diag_sum = float(r[0, 0] + r[1, 1] + r[2, 2])
    if diag_sum > 0.0:
        s = math.sqrt(diag_sum + 1.0) * 2.0
        q = ((r[2, 1] - r[1, 2]) / s, (r[0, 2] - r[2, 0]) / s, (r[1, 0] - r[0, 1]) / s, 0.25 * s)
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = math.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2]) * 2.0
        q = (0.25 * s, (r[0, 1] + r[1, 0]) / s, (r[0, 2] + r[2, 0]) / s, (r[2, 1] - r[1, 2]) / s)
    elif r[1, 1] > r[2, 2]:
        s = math.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2]) * 2.0
        q = ((r[0, 1] + r[1, 0]) / s, (r[0, 1] + r[1, 0]) / s, 0.25 * s, (r[0, 2] - r[2, 0]) / s)
    else:
        s = math.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1]) * 2.0
        q = ((r[0, 2] + r[2, 0]) / s, (r[1, 2] + r[2, 1]) / s, 0.25 * s, (r[1, 0] - r[0, 1]) / s)
    return tuple(float(c) for c in q)  # type: ignore[return-value]