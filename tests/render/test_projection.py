"""Tests for projection and splatting helpers."""

import numpy as np
import pytest

from attractorscope.render.projection import compute_norm, project, rotation_matrix
from attractorscope.render.splat import DEPTH_FLOOR, splat_trail, trail_weights


class TestRotation:
    def test_identity_at_zero(self):
        np.testing.assert_allclose(rotation_matrix(0.0, 0.0), np.eye(3), atol=1e-12)

    def test_orthonormal(self):
        rot = rotation_matrix(0.7, -0.3)
        np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)


class TestNorm:
    def test_centered_and_scaled(self, lorenz_cloud):
        center, scale = compute_norm(lorenz_cloud)
        normed = (lorenz_cloud - center) / scale
        assert np.abs(normed).max() <= 1.0

    def test_empty_cloud(self):
        center, scale = compute_norm(np.zeros((0, 3)))
        assert scale == 1.0
        np.testing.assert_array_equal(center, 0)

    def test_single_point_has_positive_scale(self):
        _, scale = compute_norm(np.array([[1.0, 2.0, 3.0]]))
        assert scale > 0


class TestProject:
    def test_stays_on_screen(self, lorenz_cloud):
        norm = compute_norm(lorenz_cloud)
        x_px, y_px, depth = project(lorenz_cloud, norm, 0.4, 0.3, 320, 240)
        assert x_px.min() >= 0 and x_px.max() < 320
        assert y_px.min() >= 0 and y_px.max() < 240
        assert depth.dtype == np.float32
        assert depth.min() >= 0.0 and depth.max() <= 1.0

    def test_center_maps_to_screen_center(self):
        pts = np.array([[1.0, 1.0, 1.0]])
        x_px, y_px, _ = project(pts, (np.array([1.0, 1.0, 1.0]), 1.0), 0.5, 0.5, 200, 100)
        assert x_px[0] == pytest.approx(100.0)
        assert y_px[0] == pytest.approx(50.0)

    def test_vertical_axis_is_z(self):
        pts = np.array([[0.0, 0.0, 1.0]])
        _, y_px, _ = project(pts, (np.zeros(3), 1.0), 0.0, 0.0, 100, 100)
        assert y_px[0] < 50.0


class TestSplat:
    def test_integer_position_hits_one_pixel(self):
        accum = np.zeros((10, 10, 3), dtype=np.float32)
        splat_trail(
            np.array([4.0]), np.array([6.0]),
            np.array([[1.0, 0.5, 0.0]], dtype=np.float32),
            np.array([2.0], dtype=np.float32),
            accum,
        )
        np.testing.assert_allclose(accum[6, 4], [2.0, 1.0, 0.0])
        assert accum.sum() == pytest.approx(3.0)

    def test_energy_conserved_between_pixels(self):
        accum = np.zeros((10, 10, 3), dtype=np.float32)
        splat_trail(
            np.array([3.5]), np.array([3.25]),
            np.array([[1.0, 1.0, 1.0]], dtype=np.float32),
            np.array([1.0], dtype=np.float32),
            accum,
        )
        assert accum[..., 0].sum() == pytest.approx(1.0)
        assert np.count_nonzero(accum[..., 0]) == 4

    def test_offscreen_points_dropped(self):
        accum = np.zeros((5, 5, 3), dtype=np.float32)
        splat_trail(
            np.array([-10.0, 50.0]), np.array([2.0, 2.0]),
            np.ones((2, 3), dtype=np.float32),
            np.ones(2, dtype=np.float32),
            accum,
        )
        assert accum.sum() == 0.0

    def test_partial_offscreen_point_keeps_inside_share(self):
        accum = np.zeros((5, 5, 3), dtype=np.float32)
        splat_trail(
            np.array([4.5]), np.array([2.0]),
            np.ones((1, 3), dtype=np.float32),
            np.ones(1, dtype=np.float32),
            accum,
        )
        assert accum[2, 4, 0] == pytest.approx(0.5)
        assert accum.sum() == pytest.approx(1.5)

    def test_overlapping_points_accumulate(self):
        accum = np.zeros((4, 4, 3), dtype=np.float32)
        splat_trail(
            np.array([1.0, 1.0, 1.0]), np.array([2.0, 2.0, 2.0]),
            np.ones((3, 3), dtype=np.float32),
            np.full(3, 0.5, dtype=np.float32),
            accum,
        )
        np.testing.assert_allclose(accum[2, 1], [1.5, 1.5, 1.5])

    def test_empty_trail_is_noop(self):
        accum = np.zeros((4, 4, 3), dtype=np.float32)
        splat_trail(np.zeros(0), np.zeros(0), np.zeros((0, 3)), np.zeros(0), accum)
        assert accum.sum() == 0.0


class TestTrailWeights:
    def test_nearer_points_are_brighter(self):
        w = trail_weights(np.array([0.0, 1.0], dtype=np.float32))
        assert w[0] == pytest.approx(DEPTH_FLOOR)
        assert w[1] == pytest.approx(1.0)

    def test_tail_fades_toward_oldest(self):
        w = trail_weights(np.ones(4, dtype=np.float32), tail_fade=0.8)
        assert np.all(np.diff(w) > 0)
        assert w[-1] == pytest.approx(1.0)
        assert w[0] == pytest.approx(1.0 - 0.8 * 0.75)

    def test_no_fade_by_default(self):
        w = trail_weights(np.ones(5, dtype=np.float32), brightness=2.0)
        np.testing.assert_allclose(w, 2.0)
        assert w.dtype == np.float32
