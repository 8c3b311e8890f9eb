"""
Quaternion utility functions for BVH playback.

All quaternions are in (w, x, y, z) format and every function accepts
arrays with arbitrary leading dimensions (..., 4).
"""

import numpy as np

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])

# Below this dot product slerp switches to normalized lerp
SLERP_LINEAR_THRESHOLD = 0.9995


def quat_normalize(q):
    """
    Normalize quaternions (w, x, y, z format).

    Degenerate (near zero) quaternions become the identity.

    Args:
        q: tensor of quaternions of shape (..., 4)

    Returns:
        Unit quaternions of the same shape
    """
    q = np.asarray(q, dtype=np.float64)
    norm = np.sqrt(np.sum(q * q, axis=-1, keepdims=True))
    safe = np.where(norm < 1e-8, 1.0, norm)
    return np.where(norm < 1e-8, IDENTITY_QUAT, q / safe)


def quat_mul_batch(x, y):
    """
    Performs quaternion multiplication on arrays of quaternions.

    Args:
        x: tensor of quaternions of shape (..., 4) in (w, x, y, z) format
        y: tensor of quaternions of shape (..., 4) in (w, x, y, z) format

    Returns:
        The resulting quaternions x * y
    """
    x0, x1, x2, x3 = x[..., 0:1], x[..., 1:2], x[..., 2:3], x[..., 3:4]
    y0, y1, y2, y3 = y[..., 0:1], y[..., 1:2], y[..., 2:3], y[..., 3:4]

    res = np.concatenate([
        y0 * x0 - y1 * x1 - y2 * x2 - y3 * x3,
        y0 * x1 + y1 * x0 - y2 * x3 + y3 * x2,
        y0 * x2 + y1 * x3 + y2 * x0 - y3 * x1,
        y0 * x3 - y1 * x2 + y2 * x1 + y3 * x0], axis=-1)

    return res


def quat_mul_vec_batch(q, x):
    """
    Rotates an array of 3D vectors by an array of quaternions.

    Args:
        q: tensor of quaternions of shape (..., 4) in (w, x, y, z) format
        x: tensor of vectors of shape (..., 3)

    Returns:
        The resulting array of rotated vectors
    """
    t = 2.0 * np.cross(q[..., 1:], x)
    res = x + q[..., 0][..., np.newaxis] * t + np.cross(q[..., 1:], t)
    return res


def angle_axis_to_quat(angle, axis):
    """
    Converts from angle-axis representation to quaternion representation.

    Args:
        angle: angles tensor (radians)
        axis: axis tensor

    Returns:
        quaternion tensor in (w, x, y, z) format
    """
    c = np.cos(angle / 2.0)[..., np.newaxis]
    s = np.sin(angle / 2.0)[..., np.newaxis]
    q = np.concatenate([c, s * axis], axis=-1)
    return q


def euler_to_quat(e, order='zxy'):
    """
    Converts from euler representation to quaternion representation.

    The elementary rotations are composed left to right, so order 'zxy'
    yields qZ * qX * qY.

    Args:
        e: euler tensor (..., 3) in radians, components in `order`
        order: order of euler rotations

    Returns:
        quaternion tensor in (w, x, y, z) format
    """
    axis = {
        'x': np.asarray([1, 0, 0], dtype=np.float64),
        'y': np.asarray([0, 1, 0], dtype=np.float64),
        'z': np.asarray([0, 0, 1], dtype=np.float64)}

    q0 = angle_axis_to_quat(e[..., 0], axis[order[0]])
    q1 = angle_axis_to_quat(e[..., 1], axis[order[1]])
    q2 = angle_axis_to_quat(e[..., 2], axis[order[2]])

    return quat_mul_batch(q0, quat_mul_batch(q1, q2))


def lerp(a, b, t):
    """Linear interpolation between arrays a and b."""
    return a + (b - a) * t


def quat_slerp(q0, q1, t):
    """
    Shortest-arc spherical interpolation of quaternion arrays.

    Args:
        q0: tensor of quaternions (..., 4) at t = 0
        q1: tensor of quaternions (..., 4) at t = 1
        t: interpolation factor in [0, 1]

    Returns:
        Unit quaternions (..., 4)
    """
    t = float(np.clip(t, 0.0, 1.0))
    q0 = quat_normalize(q0)
    q1 = quat_normalize(q1)

    d = np.sum(q0 * q1, axis=-1, keepdims=True)
    # shortest path
    q1 = np.where(d < 0.0, -q1, q1)
    d = np.abs(d)

    # If very close, lerp + normalize to avoid numerical issues
    linear = quat_normalize(lerp(q0, q1, t))

    theta_0 = np.arccos(np.clip(d, -1.0, 1.0))
    sin_theta_0 = np.sin(theta_0)
    near = (d > SLERP_LINEAR_THRESHOLD) | (np.abs(sin_theta_0) < 1e-12)
    sin_theta_0 = np.where(near, 1.0, sin_theta_0)

    s0 = np.sin((1.0 - t) * theta_0) / sin_theta_0
    s1 = np.sin(t * theta_0) / sin_theta_0
    spherical = quat_normalize(q0 * s0 + q1 * s1)

    return np.where(near, linear, spherical)
