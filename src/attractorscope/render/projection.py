"""
Orthographic 3D → 2D projection of trail points.
"""

import math
from typing import Tuple

import numpy as np

Norm = Tuple[np.ndarray, float]


def rotation_matrix(az: float, el: float) -> np.ndarray:
    """Camera orbit as one 3x3 matrix.

    The camera circles the vertical axis by ``az`` and then tilts by ``el``.
    The third row is depth toward the viewer.
    """
    ca, sa = math.cos(az), math.sin(az)
    ce, se = math.cos(el), math.sin(el)
    return np.array(
        [
            [ca, 0.0, sa],
            [se * sa, ce, -se * ca],
            [-ce * sa, se, ce * ca],
        ],
        dtype=np.float64,
    )


def compute_norm(pts: np.ndarray) -> Norm:
    """Return (center, scale) such that (pts - center)/scale lies in the unit ball.

    Scaling by the largest radius keeps every rotation of the cloud on screen.
    """
    if len(pts) == 0:
        return np.zeros(3), 1.0
    center = pts.mean(axis=0)
    scale = float(np.linalg.norm(pts - center, axis=1).max()) * 1.1
    return center, max(scale, 1e-6)


def project(
    pts: np.ndarray,
    norm: Norm,
    az: float,
    el: float,
    W: int,
    H: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Normalise → rotate → map to pixel coords.

    Attractor z is the vertical axis on screen, so (x, y, z) is reordered to
    (x, z, y) before rotating.

    Returns:
        x_px, y_px : float64 pixel coordinates
        z_depth    : float32 depth in [0, 1], 1 nearest the viewer
    """
    center, scale = norm
    pts_n = (pts - center) / scale
    pts_n = pts_n[:, [0, 2, 1]]

    rot = rotation_matrix(az, el)
    pts_rot = pts_n @ rot.T

    half_side = min(W, H) / 2.0 * 0.9
    x_px = W / 2.0 + pts_rot[:, 0] * half_side
    y_px = H / 2.0 - pts_rot[:, 1] * half_side  # flip Y for screen coords
    z_depth = np.clip((pts_rot[:, 2] + 1.0) / 2.0, 0.0, 1.0).astype(np.float32)
    return x_px, y_px, z_depth
