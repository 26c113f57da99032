"""
Ambient particle field for the mining canvas.

Particle state lives in two (N, 2) float32 arrays (positions, velocities).
The per-frame step runs as a JIT-compiled JAX kernel:

  1. pos += vel * frames           (frames = delta_ms / reference frame)
  2. velocity components that left [0, bound] are negated
  3. positions are clamped back into [0, bound]

The field owns its own numpy Generator. Nothing here reads or writes game
state, so a host can skip updating or drawing it without changing any
game result.
"""

import math
from typing import List, Optional

import numpy as np
import jax
import jax.numpy as jnp

from .. import config
from ..errors import InvalidArgument


def _build_step_kernel():
    """
    Build the JIT-compiled particle step.

    Returns a function taking:
      - pos: (N, 2) float32 positions
      - vel: (N, 2) float32 velocities (per reference frame)
      - bounds: (2,) float32 canvas width/height
      - frames: scalar number of reference frames to advance
    and returning the new (pos, vel).
    """

    @jax.jit
    def step_kernel(pos, vel, bounds, frames):
        moved = pos + vel * frames
        out_of_bounds = (moved < 0.0) | (moved > bounds)
        new_vel = jnp.where(out_of_bounds, -vel, vel)
        new_pos = jnp.clip(moved, 0.0, bounds)
        return new_pos, new_vel

    return step_kernel


_STEP_KERNEL = _build_step_kernel()


class ParticleField:
    """
    Bouncing particle swarm drawn behind the Hashlord text overlay.

    Usage:
        field = ParticleField(seed=7)
        field.step(16.7)        # advance one 60 fps frame
        for x, y, size, color in field.particles(): ...
    """

    def __init__(
        self,
        count: int = config.PARTICLE_COUNT,
        width: float = config.CANVAS_WIDTH,
        height: float = config.CANVAS_HEIGHT,
        seed: Optional[int] = None,
        device=None,
    ):
        """
        Args:
            count: Number of particles (>= 0)
            width: Canvas width in logical pixels (> 0)
            height: Canvas height in logical pixels (> 0)
            seed: Optional seed for the field's private RNG
            device: Optional JAX device to keep particle state on
        """
        if count < 0:
            raise InvalidArgument(f"particle count must be >= 0, got {count}")
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"canvas size must be positive, got {width}x{height}")

        self.count = count
        self.width = float(width)
        self.height = float(height)
        self._device = device
        self._rng = np.random.default_rng(seed)
        self._bounds = np.array([self.width, self.height], dtype=np.float32)

        self._pos = np.zeros((count, 2), dtype=np.float32)
        self._vel = np.zeros((count, 2), dtype=np.float32)
        self.sizes = np.zeros(count, dtype=np.float32)
        self.colors: List[str] = []
        self.reset()

    def reset(self):
        """Scatter a fresh set of particles over the canvas."""
        rng = self._rng
        n = self.count
        self._pos = (rng.random((n, 2)) * self._bounds).astype(np.float32)
        speed = config.PARTICLE_MAX_SPEED
        self._vel = ((rng.random((n, 2)) - 0.5) * 2 * speed).astype(np.float32)
        self.sizes = (rng.random(n) * 3 + 1).astype(np.float32)

        greens = rng.integers(100, 255, size=n)
        blues = rng.integers(100, 255, size=n)
        alphas = rng.random(n) * 0.5 + 0.5
        self.colors = [
            f"rgba(0, {g}, {b}, {a:.2f})" for g, b, a in zip(greens, blues, alphas)
        ]

    def step(self, delta_ms: float):
        """
        Advance every particle by ``delta_ms`` of animation time.

        Non-positive or non-finite deltas (paused tab, clock hiccup) leave
        the field as is.
        """
        if not math.isfinite(delta_ms) or delta_ms <= 0 or self.count == 0:
            return
        frames = np.float32(delta_ms / config.REFERENCE_FRAME_MS)

        pos, vel, bounds = self._pos, self._vel, self._bounds
        if self._device is not None:
            pos, vel, bounds = jax.device_put((pos, vel, bounds), self._device)

        new_pos, new_vel = _STEP_KERNEL(pos, vel, bounds, frames)

        # Back to host memory for drawing
        self._pos = np.asarray(new_pos, dtype=np.float32)
        self._vel = np.asarray(new_vel, dtype=np.float32)

    @property
    def positions(self) -> np.ndarray:
        """(N, 2) float32 particle positions (read-only copy)."""
        return self._pos.copy()

    @property
    def velocities(self) -> np.ndarray:
        """(N, 2) float32 particle velocities per reference frame (read-only copy)."""
        return self._vel.copy()

    def particles(self):
        """Yield ``(x, y, size, color)`` for every particle."""
        for (x, y), size, color in zip(self._pos, self.sizes, self.colors):
            yield float(x), float(y), float(size), color
