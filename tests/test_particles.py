"""Tests for the JAX particle field."""

import numpy as np
import pytest

from pvx_arcade import config
from pvx_arcade.core.particles import ParticleField
from pvx_arcade.errors import InvalidArgument


class TestParticleField:

    def test_initial_layout(self):
        field = ParticleField(count=50, seed=11)
        pos = field.positions
        assert pos.shape == (50, 2)
        assert pos.dtype == np.float32
        assert (pos[:, 0] >= 0).all() and (pos[:, 0] <= config.CANVAS_WIDTH).all()
        assert (pos[:, 1] >= 0).all() and (pos[:, 1] <= config.CANVAS_HEIGHT).all()

    def test_sizes_and_colors(self):
        field = ParticleField(count=200, seed=5)
        assert (field.sizes >= 1).all() and (field.sizes < 4).all()
        assert len(field.colors) == 200
        assert all(c.startswith("rgba(0, ") for c in field.colors)

    def test_velocity_range(self):
        field = ParticleField(count=200, seed=5)
        assert (np.abs(field.velocities) <= config.PARTICLE_MAX_SPEED).all()

    def test_seed_determinism(self):
        a = ParticleField(count=20, seed=42)
        b = ParticleField(count=20, seed=42)
        np.testing.assert_array_equal(a.positions, b.positions)
        assert a.colors == b.colors

        a.step(16.7)
        b.step(16.7)
        np.testing.assert_array_equal(a.positions, b.positions)

    def test_step_moves_by_velocity(self):
        field = ParticleField(count=1, seed=0)
        field._pos = np.array([[300.0, 200.0]], dtype=np.float32)
        field._vel = np.array([[1.0, -0.5]], dtype=np.float32)

        field.step(config.REFERENCE_FRAME_MS)
        np.testing.assert_allclose(field.positions, [[301.0, 199.5]], rtol=1e-5)

    def test_step_scales_with_delta(self):
        """Two reference frames of delta move twice as far."""
        field = ParticleField(count=1, seed=0)
        field._pos = np.array([[300.0, 200.0]], dtype=np.float32)
        field._vel = np.array([[1.0, 1.0]], dtype=np.float32)

        field.step(2 * config.REFERENCE_FRAME_MS)
        np.testing.assert_allclose(field.positions, [[302.0, 202.0]], rtol=1e-5)

    def test_bounce_off_right_edge(self):
        field = ParticleField(count=1, seed=0)
        field._pos = np.array([[599.5, 200.0]], dtype=np.float32)
        field._vel = np.array([[1.0, 0.0]], dtype=np.float32)

        field.step(config.REFERENCE_FRAME_MS)
        np.testing.assert_allclose(field.positions, [[600.0, 200.0]])
        np.testing.assert_allclose(field.velocities, [[-1.0, 0.0]])

    def test_bounce_off_top_edge(self):
        field = ParticleField(count=1, seed=0)
        field._pos = np.array([[10.0, 0.2]], dtype=np.float32)
        field._vel = np.array([[0.0, -0.5]], dtype=np.float32)

        field.step(config.REFERENCE_FRAME_MS)
        np.testing.assert_allclose(field.positions, [[10.0, 0.0]])
        np.testing.assert_allclose(field.velocities, [[0.0, 0.5]])

    def test_stays_in_bounds(self):
        field = ParticleField(count=64, seed=9)
        for _ in range(500):
            field.step(50.0)
        pos = field.positions
        assert (pos >= 0).all()
        assert (pos[:, 0] <= config.CANVAS_WIDTH).all()
        assert (pos[:, 1] <= config.CANVAS_HEIGHT).all()

    @pytest.mark.parametrize("delta", [0.0, -16.7])
    def test_non_positive_delta_is_noop(self, delta):
        field = ParticleField(count=10, seed=2)
        before = field.positions
        field.step(delta)
        np.testing.assert_array_equal(before, field.positions)

    @pytest.mark.parametrize("delta", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_delta_is_noop(self, delta):
        """A NaN or infinite frame delta must not poison particle state."""
        field = ParticleField(count=10, seed=2)
        before = field.positions
        field.step(delta)
        np.testing.assert_array_equal(before, field.positions)
        assert np.isfinite(field.velocities).all()

    def test_reset_rescatters(self):
        field = ParticleField(count=10, seed=2)
        before = field.positions
        field.reset()
        assert not np.array_equal(before, field.positions)

    def test_particles_iterator(self):
        field = ParticleField(count=3, seed=2)
        items = list(field.particles())
        assert len(items) == 3
        x, y, size, color = items[0]
        assert isinstance(x, float) and isinstance(size, float)
        assert color == field.colors[0]

    def test_empty_field(self):
        field = ParticleField(count=0)
        field.step(16.7)
        assert list(field.particles()) == []

    def test_invalid_parameters(self):
        with pytest.raises(InvalidArgument):
            ParticleField(count=-1)
        with pytest.raises(InvalidArgument):
            ParticleField(width=0)
