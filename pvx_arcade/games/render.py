"""
Hashlord canvas renderer.

Draws, back to front:
  1. Black background
  2. Particle field
  3. Difficulty and target prefix
  4. Last nonce and hash, prefix segment green if it meets the target, red if not
  5. Attempt counter and elapsed time

The renderer only reads the session and the particle field.
"""

from .. import config
from ..core.particles import ParticleField
from ..core.surface import Surface
from .session import MiningSession

BACKGROUND = "#000000"
TEXT_COLOR = "#ffffff"
MUTED_COLOR = "#999999"
MATCH_COLOR = "#00ff00"
MISS_COLOR = "#ff0000"

MAIN_FONT = "16px monospace"
FOOTER_FONT = "14px monospace"

MARGIN_X = 20
HASH_PREFIX_X = MARGIN_X + 46   # just past the "Hash: " label


class HashlordRenderer:
    """Paints a MiningSession and its ParticleField onto a Surface."""

    def __init__(self, width: float = config.CANVAS_WIDTH, height: float = config.CANVAS_HEIGHT):
        self.width = width
        self.height = height

    def draw(self, surface: Surface, session: MiningSession, field: ParticleField):
        surface.fill_rect(0, 0, self.width, self.height, BACKGROUND)

        for x, y, size, color in field.particles():
            surface.fill_circle(x, y, size, color)

        surface.fill_text(
            f"Difficulty: {session.difficulty} ({session.target_prefix})",
            MARGIN_X, 30, TEXT_COLOR, MAIN_FONT,
        )

        if session.last_nonce is not None:
            surface.fill_text(f"Nonce: {session.last_nonce}", MARGIN_X, 60, TEXT_COLOR, MAIN_FONT)
            surface.fill_text(f"Hash: {session.current_hash}", MARGIN_X, 90, TEXT_COLOR, MAIN_FONT)

            if session.current_hash:
                color = MATCH_COLOR if session.target.is_satisfied_by(session.current_hash) else MISS_COLOR
                surface.fill_text(
                    session.current_hash[:session.difficulty],
                    HASH_PREFIX_X, 90, color, MAIN_FONT,
                )

        footer_y = self.height - 20
        surface.fill_text(f"Attempts: {session.attempts}", MARGIN_X, footer_y, MUTED_COLOR, FOOTER_FONT)
        surface.fill_text(f"Time: {session.elapsed():.1f}s", 150, footer_y, MUTED_COLOR, FOOTER_FONT)
