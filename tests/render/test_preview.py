"""Tests for the offscreen trail renderer."""

import numpy as np
import pytest
from PIL import Image

from attractorscope.engine import EngineConfig, SimulationController
from attractorscope.render.grading import bloom, tone_map, vignette
from attractorscope.render.preview import RenderConfig, TrailRenderer, save_png


@pytest.fixture
def small_config() -> RenderConfig:
    return RenderConfig(width=120, height=90, fps=30, steps_per_frame=20)


@pytest.fixture
def running_controller() -> SimulationController:
    ctrl = SimulationController(EngineConfig(capacity=500))
    ctrl.run(800)
    return ctrl


class TestTrailRenderer:
    def test_frame_shape_and_dtype(self, small_config, running_controller):
        frame = TrailRenderer(small_config).render_controller(running_controller)
        assert frame.shape == (90, 120, 3)
        assert frame.dtype == np.uint8

    def test_trail_is_visible(self, small_config, running_controller):
        frame = TrailRenderer(small_config).render_controller(running_controller)
        assert frame.max() > 50

    def test_empty_trail_is_background(self, small_config):
        cfg = RenderConfig(width=40, height=30, background=(10, 20, 30), vignette_strength=0.0)
        frame = TrailRenderer(cfg).render_controller(SimulationController(EngineConfig(capacity=10)))
        assert (frame == np.array([10, 20, 30], dtype=np.uint8)).all()

    def test_non_finite_points_skipped(self, small_config):
        points = np.array([[0.0, 0.0, 0.0], [np.nan, 1.0, 1.0], [1.0, np.inf, 2.0], [2.0, 1.0, 3.0]])
        colors = np.ones((4, 3), dtype=np.float32)
        frame = TrailRenderer(small_config).render(points, colors)
        assert frame.shape == (90, 120, 3)

    def test_glow_toggle_changes_output(self, running_controller):
        base = RenderConfig(width=80, height=60)
        with_glow = TrailRenderer(base).render_controller(running_controller)
        no_glow = TrailRenderer(RenderConfig(width=80, height=60, glow_enabled=False)).render_controller(
            running_controller
        )
        assert not np.array_equal(with_glow, no_glow)

    def test_tail_fade_dims_trail(self, running_controller):
        def render(fade):
            cfg = RenderConfig(
                width=80, height=60, tail_fade=fade, glow_enabled=False, vignette_strength=0.0
            )
            return TrailRenderer(cfg).render_controller(running_controller).astype(np.int64)

        faded, full = render(0.9), render(0.0)
        assert (faded <= full).all()
        assert faded.sum() < full.sum()

    def test_diverging_model_keeps_rendering(self):
        cfg = RenderConfig(width=48, height=36, steps_per_frame=100)
        ctrl = SimulationController(EngineConfig(capacity=50, model="thomas"))
        ctrl.update_parameters({"b": 1.0, "dt": 10.0})
        frames = list(TrailRenderer(cfg).render_frames(ctrl, 20))
        assert ctrl.is_diverged()
        assert frames[-1].shape == (36, 48, 3)

    def test_render_frames_steps_controller(self, small_config):
        ctrl = SimulationController(EngineConfig(capacity=1000))
        progress = []
        frames = list(
            TrailRenderer(small_config).render_frames(
                ctrl, 4, progress_callback=lambda c, t: progress.append((c, t))
            )
        )
        assert len(frames) == 4
        assert ctrl.steps_taken == 4 * small_config.steps_per_frame
        assert progress == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_rotation_speed_advances_azimuth(self):
        cfg = RenderConfig(width=40, height=30, fps=10, rotation_speed=1.0)
        renderer = TrailRenderer(cfg)
        ctrl = SimulationController(EngineConfig(capacity=50))
        renderer.advance(ctrl)
        assert renderer.azimuth == pytest.approx(cfg.azimuth + 0.1)
        renderer.reset_view()
        assert renderer.azimuth == cfg.azimuth

    def test_deterministic(self, small_config):
        a = SimulationController(EngineConfig(capacity=300))
        b = SimulationController(EngineConfig(capacity=300))
        fa = list(TrailRenderer(small_config).render_frames(a, 3))
        fb = list(TrailRenderer(small_config).render_frames(b, 3))
        for x, y in zip(fa, fb):
            np.testing.assert_array_equal(x, y)


class TestGrading:
    def test_tone_map_range(self):
        hdr = np.array([[[0.0, 1.0, 100.0]]], dtype=np.float32)
        out = tone_map(hdr)
        assert out.dtype == np.uint8
        assert out[0, 0, 0] == 0
        assert out[0, 0, 2] == 255

    def test_bloom_spreads_energy(self):
        accum = np.zeros((21, 21, 3), dtype=np.float32)
        accum[10, 10] = 1.0
        glowing = bloom(accum, 2.0)
        assert glowing[10, 13, 0] > 0.0
        assert bloom(accum, 0.0) is accum

    def test_vignette_darkens_corners(self):
        frame = np.full((50, 50, 3), 200, dtype=np.uint8)
        out = vignette(frame, strength=0.8)
        assert out[0, 0, 0] < out[25, 25, 0]


class TestSavePng:
    def test_writes_readable_png(self, tmp_path, small_config, running_controller):
        frame = TrailRenderer(small_config).render_controller(running_controller)
        path = save_png(frame, tmp_path / "nested" / "trail.png")
        assert path.exists()
        with Image.open(path) as img:
            assert img.size == (120, 90)
            assert img.mode == "RGB"
