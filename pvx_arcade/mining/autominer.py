"""
Auto-miner: a headless host that plays a learning game by brute force.

Frame loop, one iteration per simulated display refresh:
  1. update(frame_ms)          -- cosmetic animation
  2. handle_input(nonce) x N   -- N sequential nonces
  3. render(surface)           -- only if a surface was supplied
  4. stats callback            -- every ``stats_interval`` seconds

The loop ends when the game completes, ``max_attempts`` nonces have been
tried, or stop() is called (e.g. from the stats callback).
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .. import config
from ..core.rewards import hash_rate
from ..core.surface import Surface
from ..crypto.pow_hash import DifficultyTarget
from ..errors import InvalidArgument
from ..games.engine import LearningGame
from ..games.session import GameResult

logger = logging.getLogger(__name__)

_RATE_PREFIXES = ("k", "M", "G")


def format_nonce_rate(rate: float) -> str:
    """Render a nonce rate, e.g. ``"840 nonces/s"`` or ``"1.50 k nonces/s"``."""
    if rate < 1000:
        return f"{rate:.0f} nonces/s"
    scaled = float(rate)
    for prefix in _RATE_PREFIXES:
        scaled /= 1000
        if scaled < 1000:
            break
    return f"{scaled:.2f} {prefix} nonces/s"


@dataclass
class MiningStats:
    """
    Progress of one auto-miner run in game terms.

    Rates use the same rule as ``GameStats.hash_rate``: attempts per second,
    rounded half up, 0 before any time has passed.
    """
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)
    attempts: int = 0
    frames: int = 0
    best_zeros: int = 0
    best_hash: Optional[str] = None
    started_at: float = field(init=False, default=0.0)
    _window_start: float = field(init=False, default=0.0, repr=False)
    _window_attempts: int = field(init=False, default=0, repr=False)

    def __post_init__(self):
        self.started_at = self._window_start = self.clock()

    def record(self, digest: Optional[str]):
        """Count one submitted nonce and keep the digest closest to a block."""
        self.attempts += 1
        if digest is None:
            return
        zeros = DifficultyTarget.leading_zeros(digest)
        if self.best_hash is None or zeros > self.best_zeros:
            self.best_zeros = zeros
            self.best_hash = digest

    @property
    def elapsed(self) -> float:
        return self.clock() - self.started_at

    @property
    def nonce_rate(self) -> int:
        """Average nonces per second since the run started."""
        return hash_rate(self.attempts, self.elapsed)

    @property
    def frames_per_second(self) -> float:
        elapsed = self.elapsed
        return self.frames / elapsed if elapsed > 0 else 0.0

    def window_rate(self) -> int:
        """Nonces per second since the previous call, then start a new window."""
        now = self.clock()
        rate = hash_rate(self.attempts - self._window_attempts, now - self._window_start)
        self._window_start = now
        self._window_attempts = self.attempts
        return rate


def log_stats(stats: MiningStats):
    logger.info(
        f"{format_nonce_rate(stats.window_rate())} "
        f"(avg {format_nonce_rate(stats.nonce_rate)}) | "
        f"attempts {stats.attempts:,} | best {stats.best_zeros} zero(s) | "
        f"{stats.frames_per_second:.1f} fps"
    )


class AutoMiner:
    """
    Drives a LearningGame with sequential nonces until it completes.

    Usage:
        miner = AutoMiner(create_game("hashlord", 3), nonces_per_frame=256)
        result = miner.run()
    """

    def __init__(
        self,
        game: LearningGame,
        nonce_start: int = 0,
        nonces_per_frame: int = config.NONCES_PER_FRAME,
        frame_ms: float = config.REFERENCE_FRAME_MS,
        max_attempts: Optional[int] = None,
        surface: Optional[Surface] = None,
        on_stats: Optional[Callable[[MiningStats], None]] = log_stats,
        stats_interval: float = config.STATS_INTERVAL,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Args:
            game: Game to play; init() is called by run()
            nonce_start: First nonce to submit
            nonces_per_frame: Nonces submitted per frame (>= 1)
            frame_ms: Animation time passed to update() each frame
            max_attempts: Give up after this many nonces (None = never)
            surface: Optional surface rendered once per frame
            on_stats: Called with MiningStats every ``stats_interval`` seconds
            stats_interval: Seconds between stats callbacks
            clock: Monotonic clock in seconds
        """
        if nonces_per_frame < 1:
            raise InvalidArgument(f"nonces_per_frame must be >= 1, got {nonces_per_frame}")
        if max_attempts is not None and max_attempts < 1:
            raise InvalidArgument(f"max_attempts must be >= 1, got {max_attempts}")

        self.game = game
        self.nonce_start = nonce_start
        self.nonces_per_frame = nonces_per_frame
        self.frame_ms = frame_ms
        self.max_attempts = max_attempts
        self.surface = surface
        self.on_stats = on_stats
        self.stats_interval = stats_interval
        self._clock = clock
        self._running = False
        self._stats = MiningStats(clock=clock)

    def run(self) -> GameResult:
        """
        Play one full session.

        Returns:
            The game's result; ``success`` is False if the run was stopped
            or exhausted ``max_attempts`` before finding a block.
        """
        self.game.init()
        self._running = True
        self._stats = MiningStats(clock=self._clock)
        nonce = self.nonce_start
        last_stats_time = self._stats.started_at

        logger.info(
            f"Auto-miner started: nonce_start={self.nonce_start}, "
            f"nonces_per_frame={self.nonces_per_frame}, "
            f"max_attempts={self.max_attempts or 'unlimited'}"
        )

        while self._running and not self.game.is_completed():
            if self.max_attempts is not None and self._stats.attempts >= self.max_attempts:
                logger.info(f"Giving up after {self._stats.attempts:,} attempts")
                break

            self.game.update(self.frame_ms)

            budget = self.nonces_per_frame
            if self.max_attempts is not None:
                budget = min(budget, self.max_attempts - self._stats.attempts)

            for _ in range(budget):
                self.game.handle_input(nonce)
                nonce += 1
                self._stats.record(self.game.last_digest())
                if self.game.is_completed():
                    break

            if self.surface is not None:
                self.game.render(self.surface)
            self._stats.frames += 1

            now = self._clock()
            if self.on_stats and now - last_stats_time >= self.stats_interval:
                self.on_stats(self._stats)
                last_stats_time = now

        self._running = False
        return self.game.get_result()

    def stop(self):
        """Stop after the current frame."""
        self._running = False
        logger.info("Auto-miner stopping...")

    @property
    def stats(self) -> MiningStats:
        """Statistics of the current (or last) run."""
        return self._stats
