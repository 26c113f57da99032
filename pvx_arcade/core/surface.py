"""
2D drawing surface contract used by game renderers.

The engine only ever writes to a surface. Any canvas-like backend works as
long as it provides the three primitives of ``Surface``.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Surface(Protocol):
    """Write-only 2D canvas."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        """Fill an axis-aligned rectangle."""

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        """Fill a circle centred on (x, y)."""

    def fill_text(self, text: str, x: float, y: float, color: str, font: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""


@dataclass(frozen=True)
class DrawCommand:
    """One recorded drawing primitive."""
    op: str                      # 'rect', 'circle' or 'text'
    args: Tuple
    color: str
    font: Optional[str] = None


@dataclass
class RecordingSurface:
    """Surface that stores every draw call; used by headless hosts and tests."""
    commands: List[DrawCommand] = field(default_factory=list)

    def fill_rect(self, x, y, width, height, color):
        self.commands.append(DrawCommand('rect', (x, y, width, height), color))

    def fill_circle(self, x, y, radius, color):
        self.commands.append(DrawCommand('circle', (x, y, radius), color))

    def fill_text(self, text, x, y, color, font):
        self.commands.append(DrawCommand('text', (text, x, y), color, font))

    def texts(self) -> List[str]:
        """All text drawn so far, in draw order."""
        return [c.args[0] for c in self.commands if c.op == 'text']

    def clear(self):
        self.commands.clear()
