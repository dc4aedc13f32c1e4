"""
Trail splatting onto an RGB accumulation buffer.

Points arrive oldest first, as the trail buffer hands them out. Each one is
shaded by depth (nearer is brighter) and by age along the trail, then spread
bilinearly over the four pixels around its projected position.
"""

import numpy as np

# Brightness of the farthest point relative to the nearest
DEPTH_FLOOR = 0.35


def trail_weights(
    depth: np.ndarray,
    brightness: float = 1.0,
    tail_fade: float = 0.0,
) -> np.ndarray:
    """Per-point intensity for an oldest-first trail.

    Args:
        depth: (N,) in [0, 1], 1 nearest the camera.
        brightness: Overall multiplier.
        tail_fade: How much the oldest point is dimmed (0 = none, 1 = nearly
            invisible). The newest point is never dimmed.

    Returns:
        (N,) float32 weights.
    """
    n = len(depth)
    shade = DEPTH_FLOOR + (1.0 - DEPTH_FLOOR) * depth
    age = np.arange(1, n + 1, dtype=np.float64) / max(n, 1)
    fade = 1.0 - tail_fade * (1.0 - age)
    return (brightness * shade * fade).astype(np.float32)


def splat_trail(
    x_px: np.ndarray,
    y_px: np.ndarray,
    colors: np.ndarray,
    weights: np.ndarray,
    accum: np.ndarray,
) -> None:
    """Add N weighted colours to ``accum`` (H, W, 3) in place.

    All four bilinear corners are gathered at once and summed per channel with
    ``np.bincount``; corners outside the buffer are dropped.
    """
    if len(x_px) == 0:
        return
    H, W = accum.shape[:2]

    x0 = np.floor(x_px).astype(np.int64)
    y0 = np.floor(y_px).astype(np.int64)
    fx = x_px - x0
    fy = y_px - y0

    # (4, N) corner coordinates and bilinear factors: 00, 10, 01, 11
    xs = np.stack([x0, x0 + 1, x0, x0 + 1])
    ys = np.stack([y0, y0, y0 + 1, y0 + 1])
    bil = np.stack([(1 - fx) * (1 - fy), fx * (1 - fy), (1 - fx) * fy, fx * fy])
    bil = bil * weights[np.newaxis, :]

    inside = (xs >= 0) & (xs < W) & (ys >= 0) & (ys < H)
    if not inside.any():
        return

    flat = (ys * W + xs)[inside]
    corner_w = bil[inside]
    point_idx = np.broadcast_to(np.arange(len(x_px)), xs.shape)[inside]

    for c in range(3):
        channel = np.bincount(
            flat, weights=corner_w * colors[point_idx, c], minlength=H * W
        )
        accum[..., c] += channel.reshape(H, W).astype(np.float32)
