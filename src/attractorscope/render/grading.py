"""
Post-processing for rendered trails: bloom, tone mapping and vignette.
"""

from typing import Tuple

import numpy as np
from scipy.ndimage import gaussian_filter


def bloom(accum: np.ndarray, radius: float) -> np.ndarray:
    """Add a two-scale gaussian glow to an (H, W, 3) float accumulation buffer."""
    if radius <= 0:
        return accum
    core = gaussian_filter(accum, sigma=[radius, radius, 0])
    halo = gaussian_filter(accum, sigma=[radius * 4.0, radius * 4.0, 0])
    return accum + 0.6 * core + 0.25 * halo


def tone_map(
    hdr: np.ndarray,
    exposure: float = 1.0,
    background: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """
    Reinhard tone-map an HDR buffer over a solid background.

    Args:
        hdr: (H, W, 3) non-negative float buffer.
        exposure: Multiplier applied before compression.
        background: RGB colour shown where nothing was drawn.

    Returns:
        (H, W, 3) uint8 RGB array.
    """
    x = np.maximum(hdr, 0.0) * exposure
    mapped = x / (1.0 + x)
    # Stretch so a single full-weight splat reaches mid-bright rather than 0.5
    mapped = np.clip(mapped * 1.6, 0.0, 1.0)

    bg = np.asarray(background, dtype=np.float32) / 255.0
    out = bg + (1.0 - bg) * mapped
    return (out * 255.0 + 0.5).astype(np.uint8)


def vignette(frame: np.ndarray, strength: float = 0.25) -> np.ndarray:
    """Darken an (H, W, 3) uint8 frame toward its corners.

    Falloff is elliptical so it follows the frame's aspect ratio; at
    ``strength`` 1 the corners go fully black.
    """
    if strength <= 0:
        return frame

    h, w = frame.shape[:2]
    rows, cols = np.ogrid[:h, :w]
    # 0 at the centre, 1 at the corners
    r = np.hypot((cols - w / 2) / (w / 2), (rows - h / 2) / (h / 2)) / np.sqrt(2.0)
    falloff = 1.0 - np.clip(r * strength, 0.0, 1.0) ** 2
    return (frame * falloff[..., np.newaxis].astype(np.float32)).astype(np.uint8)
