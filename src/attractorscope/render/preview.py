"""
Offscreen renderer for the simulation trail.

Acts as the host side of the engine: each frame it steps the controller, reads
the trail's positions and slot colours back, projects them to the screen and
splats them into a glowing RGB image. Used by the CLI for stills and videos
and by the interactive viewer.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple, Union

import numpy as np
from PIL import Image

from attractorscope.engine.controller import SimulationController
from attractorscope.render.grading import bloom, tone_map, vignette
from attractorscope.render.projection import Norm, compute_norm, project
from attractorscope.render.splat import splat_trail, trail_weights

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Configuration for trail rendering."""

    width: int = 960
    height: int = 720
    fps: int = 60

    # Simulation pacing
    steps_per_frame: int = 1       # controller.step() calls per rendered frame

    # Camera
    azimuth: float = 0.6           # radians around the vertical axis
    elevation: float = 0.35        # radians above the horizon
    rotation_speed: float = 0.0    # azimuth drift (rad/s)
    norm_smoothing: float = 0.1    # lerp rate for framing as the trail grows

    # Visuals
    point_brightness: float = 1.0
    tail_fade: float = 0.5         # dimming of the oldest trail point (0-1)
    glow_enabled: bool = True
    glow_radius: float = 2.0
    vignette_strength: float = 0.25
    background: Tuple[int, int, int] = (0, 0, 0)


ProgressCallback = Callable[[int, int], None]


class TrailRenderer:
    """
    Projects a trail buffer into RGB frames.

    Framing (center and scale) follows the live trail, smoothed between frames
    so the picture does not jump while the trail is still growing.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.cfg = config or RenderConfig()
        self.azimuth = self.cfg.azimuth
        self.elevation = self.cfg.elevation
        self._norm: Optional[Norm] = None

    def reset_view(self) -> None:
        """Forget the framing; the next frame re-fits to the trail."""
        self._norm = None
        self.azimuth = self.cfg.azimuth
        self.elevation = self.cfg.elevation

    def _lerp(self, current: float, target: float, factor: float) -> float:
        return current + (target - current) * factor

    def _update_norm(self, pts: np.ndarray) -> Norm:
        center, scale = compute_norm(pts)
        if self._norm is None:
            self._norm = (center, scale)
        else:
            f = self.cfg.norm_smoothing
            old_center, old_scale = self._norm
            self._norm = (
                old_center + (center - old_center) * f,
                self._lerp(old_scale, scale, f),
            )
        return self._norm

    def render(self, points: np.ndarray, colors: np.ndarray) -> np.ndarray:
        """
        Render points with their colours.

        Args:
            points: (N, 3) positions, oldest first.
            colors: (N, 3) RGB in [0, 1].

        Returns:
            (height, width, 3) uint8 RGB frame.
        """
        H, W = self.cfg.height, self.cfg.width
        accum = np.zeros((H, W, 3), dtype=np.float32)

        # Diverged points cannot be framed or drawn
        finite = np.isfinite(points).all(axis=1)
        points = points[finite]
        colors = colors[finite]

        if len(points):
            norm = self._update_norm(points)
            x_px, y_px, depth = project(points, norm, self.azimuth, self.elevation, W, H)
            weights = trail_weights(depth, self.cfg.point_brightness, self.cfg.tail_fade)
            splat_trail(x_px, y_px, colors, weights, accum)

        if self.cfg.glow_enabled:
            accum = bloom(accum, float(self.cfg.glow_radius))

        frame = tone_map(accum, background=self.cfg.background)
        if self.cfg.vignette_strength > 0:
            frame = vignette(frame, strength=self.cfg.vignette_strength)
        return frame

    def render_controller(self, controller: SimulationController) -> np.ndarray:
        """Render the controller's current trail."""
        n = controller.live_count
        points = controller.points_view()[: n * 3].reshape(n, 3).astype(np.float64)
        colors = controller.colors_view()[: n * 3].reshape(n, 3)
        return self.render(points, colors)

    def advance(self, controller: SimulationController) -> np.ndarray:
        """One host frame: step the engine, drift the camera, render."""
        for _ in range(self.cfg.steps_per_frame):
            controller.step()
        self.azimuth += self.cfg.rotation_speed / max(self.cfg.fps, 1)
        return self.render_controller(controller)

    def render_frames(
        self,
        controller: SimulationController,
        n_frames: int,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Iterator[np.ndarray]:
        """Yield ``n_frames`` frames, advancing the simulation before each."""
        logger.debug(
            "Rendering %d frames of %s (%d steps/frame)",
            n_frames, controller.model, self.cfg.steps_per_frame,
        )
        for i in range(n_frames):
            yield self.advance(controller)
            if progress_callback:
                progress_callback(i + 1, n_frames)


def save_png(frame: np.ndarray, path: Union[str, Path]) -> Path:
    """Write an (H, W, 3) uint8 frame to ``path`` as PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(frame)).save(path, format="PNG")
    return path
