"""
Interactive pygame viewer.

The window is the host frame loop: each frame it applies pending parameter
edits, steps the engine, renders the trail and draws a small HUD.

Keys:
    1-6         select lorenz, aizawa, rossler, chen, thomas, dadras
    R           reset trajectory and trail
    D           restore the active model's default parameters
    TAB         cycle the edited parameter
    UP / DOWN   nudge the edited parameter within its slider range
    LEFT/RIGHT  rotate the camera
    ESC         quit
"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np
import pygame

from attractorscope.cli import positive_int
from attractorscope.engine import EngineConfig, Model, SimulationController, parameter_names
from attractorscope.engine.models import PARAMETER_RANGES
from attractorscope.logging_config import setup_logging
from attractorscope.render.preview import RenderConfig, TrailRenderer

logger = logging.getLogger(__name__)

MODEL_KEYS = {
    pygame.K_1: Model.LORENZ,
    pygame.K_2: Model.AIZAWA,
    pygame.K_3: Model.ROSSLER,
    pygame.K_4: Model.CHEN,
    pygame.K_5: Model.THOMAS,
    pygame.K_6: Model.DADRAS,
}

# Fraction of a parameter's slider range moved per key press
NUDGE_FRACTION = 0.01


class AttractorViewer:
    """Owns the window, the controller and the renderer for one session."""

    def __init__(self, controller: SimulationController, config: Optional[RenderConfig] = None):
        self.controller = controller
        self.renderer = TrailRenderer(config)
        self.cfg = self.renderer.cfg
        self._param_index = 0
        self.running = False

    @property
    def edited_parameter(self) -> str:
        names = parameter_names(self.controller.model)
        return names[self._param_index % len(names)]

    def nudge(self, direction: int) -> None:
        """Move the edited parameter one notch up (+1) or down (-1), clamped to its range."""
        model = self.controller.model
        name = self.edited_parameter
        lo, hi = PARAMETER_RANGES[model][name]
        current = getattr(self.controller.parameters(), name)
        value = min(max(current + direction * (hi - lo) * NUDGE_FRACTION, lo), hi)
        self.controller.set_parameter(model, name, value)

    def handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in MODEL_KEYS:
            self.controller.select_model(MODEL_KEYS[key])
            self.renderer.reset_view()
            self._param_index = 0
        elif key == pygame.K_r:
            self.controller.reset()
            self.renderer.reset_view()
        elif key == pygame.K_d:
            self.controller.restore_defaults(self.controller.model)
        elif key == pygame.K_TAB:
            self._param_index += 1
        elif key == pygame.K_UP:
            self.nudge(+1)
        elif key == pygame.K_DOWN:
            self.nudge(-1)

    def _draw_hud(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        params = self.controller.parameters()
        lines = [f"{self.controller.model}  points {self.controller.live_count}"]
        for name in parameter_names(self.controller.model):
            marker = ">" if name == self.edited_parameter else " "
            lines.append(f"{marker} {name:<6} {getattr(params, name):.6g}")
        for i, text in enumerate(lines):
            surface.blit(font.render(text, True, (220, 220, 220)), (10, 10 + i * 18))

    def run(self) -> None:
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.cfg.width, self.cfg.height))
            pygame.display.set_caption("attractorscope")
            font = pygame.font.SysFont("monospace", 14)
            clock = pygame.time.Clock()

            self.running = True
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)

                keys = pygame.key.get_pressed()
                if keys[pygame.K_LEFT]:
                    self.renderer.azimuth -= 1.5 / max(self.cfg.fps, 1)
                if keys[pygame.K_RIGHT]:
                    self.renderer.azimuth += 1.5 / max(self.cfg.fps, 1)

                frame = self.renderer.advance(self.controller)
                if self.controller.is_diverged():
                    logger.warning("%s diverged; resetting", self.controller.model)
                    self.controller.reset()
                    self.renderer.reset_view()

                # pygame uses (width, height); frames are (height, width)
                surface = pygame.surfarray.make_surface(np.transpose(frame, (1, 0, 2)))
                screen.blit(surface, (0, 0))
                self._draw_hud(screen, font)
                pygame.display.flip()
                clock.tick(self.cfg.fps)
        finally:
            pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="attractorscope-view",
        description="Interactive strange-attractor viewer",
    )
    parser.add_argument(
        "-m", "--model", type=str, default="lorenz",
        choices=[m.value for m in Model],
        help="Initial attractor system (default: lorenz)",
    )
    parser.add_argument("--capacity", type=int, default=10000, help="Trail capacity (default: 10000)")
    parser.add_argument("--steps-per-frame", type=positive_int, default=2, help="Engine steps per frame (default: 2)")
    parser.add_argument("--aizawa-scaled", action="store_true", help="Run aizawa magnified 10x")
    parser.add_argument("--width", type=positive_int, default=960)
    parser.add_argument("--height", type=positive_int, default=720)
    parser.add_argument("-f", "--fps", type=positive_int, default=60)
    parser.add_argument("--no-glow", action="store_true", help="Disable glow")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        controller = SimulationController(
            EngineConfig(
                capacity=args.capacity,
                model=args.model,
                aizawa_scaled=args.aizawa_scaled,
            )
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    viewer = AttractorViewer(
        controller,
        RenderConfig(
            width=args.width,
            height=args.height,
            fps=args.fps,
            steps_per_frame=args.steps_per_frame,
            glow_enabled=not args.no_glow,
        ),
    )
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
