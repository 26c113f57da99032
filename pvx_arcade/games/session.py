"""Mining session state and game result types."""

import logging
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Callable, Optional

from .. import config
from ..core.rewards import RewardPolicy, DEFAULT_POLICY, calculate_reward, hash_rate
from ..crypto.pow_hash import DifficultyTarget, coerce_int, hash_attempt
from ..errors import SessionNotStarted

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GameStats:
    """Statistics attached to a game result."""
    score: int
    attempts: int
    completion_time: float  # seconds
    difficulty: int
    hash_rate: int = 0


@dataclass(frozen=True)
class GameResult:
    """Outcome of a learning game. Produced once per completed session."""
    success: bool
    message: str
    reward: int
    stats: GameStats

    def to_dict(self) -> dict:
        """JSON shape used by the dashboard and leaderboard clients."""
        stats = asdict(self.stats)
        return {
            "success": self.success,
            "message": self.message,
            "reward": self.reward,
            "stats": {
                "score": stats["score"],
                "attempts": stats["attempts"],
                "completionTime": stats["completion_time"],
                "difficulty": stats["difficulty"],
                "hashRate": stats["hash_rate"],
            },
        }


class MiningSession:
    """
    State machine for one Hashlord run.

    IDLE --reset()--> RUNNING --submit(nonce) hits target--> COMPLETED

    ``reset()`` is valid from any state and starts a fresh run. The reward is
    computed exactly once, on the transition into COMPLETED.
    """

    def __init__(
        self,
        difficulty: int,
        label: str = config.SESSION_LABEL,
        clock: Callable[[], float] = time.perf_counter,
        policy: RewardPolicy = DEFAULT_POLICY,
    ):
        """
        Args:
            difficulty: Leading zero hex chars required (>= 1)
            label: Session label mixed into every hashed input
            clock: Monotonic clock in seconds
            policy: Reward balance constants

        Raises:
            InvalidArgument: if ``difficulty`` is not an integer >= 1
        """
        self.target = DifficultyTarget(difficulty)
        self.label = label
        self.policy = policy
        self._clock = clock

        self.state = GameState.IDLE
        self.attempts = 0
        self.start_time: Optional[float] = None
        self.last_nonce: Optional[int] = None
        self.current_hash: Optional[str] = None
        self.result: Optional[GameResult] = None

    @property
    def difficulty(self) -> int:
        return self.target.difficulty

    @property
    def target_prefix(self) -> str:
        return self.target.prefix

    @property
    def completed(self) -> bool:
        return self.state is GameState.COMPLETED

    def elapsed(self) -> float:
        """Seconds since reset(), 0 before the first reset."""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def reset(self):
        """Start a fresh run: zero attempts, clear hash and result, restart the clock."""
        self.attempts = 0
        self.last_nonce = None
        self.current_hash = None
        self.result = None
        self.start_time = self._clock()
        self.state = GameState.RUNNING
        logger.debug(f"Session started: difficulty={self.difficulty} target={self.target_prefix}")

    def submit(self, nonce: int) -> bool:
        """
        Record one attempt with ``nonce``.

        Returns:
            True if this attempt completed the session

        Raises:
            SessionNotStarted: if reset() was never called
            InvalidArgument: if ``nonce`` is not an integer
        """
        if self.state is GameState.IDLE:
            raise SessionNotStarted("call init() before submitting nonces")
        nonce = coerce_int(nonce, "nonce")

        if self.state is GameState.COMPLETED:
            logger.warning(f"Ignoring nonce {nonce}: session already completed")
            return False

        self.attempts += 1
        self.last_nonce = nonce
        self.current_hash = hash_attempt(self.label, self.attempts, nonce)

        if not self.target.is_satisfied_by(self.current_hash):
            return False

        self._complete(nonce)
        return True

    def _complete(self, nonce: int):
        elapsed = self.elapsed()
        breakdown = calculate_reward(self.difficulty, self.attempts, elapsed, self.policy)
        self.result = GameResult(
            success=True,
            message=(
                f"You found a valid nonce ({nonce}) that produces a hash starting "
                f"with {self.target_prefix}. This is how miners secure the "
                f"blockchain through computation!"
            ),
            reward=breakdown.reward,
            stats=GameStats(
                score=breakdown.score,
                attempts=self.attempts,
                completion_time=elapsed,
                difficulty=self.difficulty,
                hash_rate=breakdown.hash_rate,
            ),
        )
        self.state = GameState.COMPLETED
        logger.info(
            f"*** BLOCK FOUND! nonce={nonce} attempts={self.attempts} "
            f"hash={self.current_hash[:16]}... reward={breakdown.reward} ***"
        )

    def partial_result(self) -> GameResult:
        """Best-effort result for a session that has not completed yet."""
        elapsed = self.elapsed()
        return GameResult(
            success=False,
            message="Game not completed yet",
            reward=0,
            stats=GameStats(
                score=0,
                attempts=self.attempts,
                completion_time=elapsed,
                difficulty=self.difficulty,
                hash_rate=hash_rate(self.attempts, elapsed),
            ),
        )
