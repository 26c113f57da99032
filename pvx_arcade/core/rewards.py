"""
Score and token-reward model for completed mining sessions.

  score       = round(1000 / (attempts * 0.5) * difficulty * (60 / max(10, t)))
  base_reward = 50 * difficulty
  penalty     = min(0.8, (attempts / 50) * 0.5)
  reward      = round(base_reward * (1 - penalty))
  hash_rate   = round(attempts / t)

Rounding is half-up so the numbers match the browser version of the game.
"""

import math
from dataclasses import dataclass

from .. import config


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (JS Math.round)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class RewardPolicy:
    """Tunable game-balance constants. The defaults are the shipped balance."""
    score_numerator: float = config.SCORE_NUMERATOR
    score_attempt_weight: float = config.SCORE_ATTEMPT_WEIGHT
    score_time_scale: float = config.SCORE_TIME_SCALE
    score_min_seconds: float = config.SCORE_MIN_SECONDS
    base_reward_per_difficulty: float = config.BASE_REWARD_PER_DIFFICULTY
    penalty_attempt_span: float = config.PENALTY_ATTEMPT_SPAN
    penalty_rate: float = config.PENALTY_RATE
    max_attempt_penalty: float = config.MAX_ATTEMPT_PENALTY


DEFAULT_POLICY = RewardPolicy()


@dataclass(frozen=True)
class RewardBreakdown:
    """Everything computed at the moment a session completes."""
    score: int
    base_reward: float
    attempt_penalty: float
    reward: int
    hash_rate: int


def hash_rate(attempts: int, elapsed_seconds: float) -> int:
    """Attempts per second, 0 when no time has elapsed."""
    if elapsed_seconds <= 0:
        return 0
    return round_half_up(attempts / elapsed_seconds)


def calculate_reward(
    difficulty: int,
    attempts: int,
    elapsed_seconds: float,
    policy: RewardPolicy = DEFAULT_POLICY,
) -> RewardBreakdown:
    """
    Compute score, reward and hash rate for a completed session.

    Args:
        difficulty: Session difficulty (>= 1)
        attempts: Attempts needed to find the block; clamped to >= 1
        elapsed_seconds: Wall time from init() to completion
        policy: Balance constants

    Returns:
        RewardBreakdown with ``0 <= reward <= base_reward``
    """
    attempts = max(1, attempts)

    time_factor = policy.score_time_scale / max(policy.score_min_seconds, elapsed_seconds)
    score = round_half_up(
        policy.score_numerator / (attempts * policy.score_attempt_weight)
        * difficulty * time_factor
    )

    base_reward = policy.base_reward_per_difficulty * difficulty
    attempt_penalty = min(
        policy.max_attempt_penalty,
        (attempts / policy.penalty_attempt_span) * policy.penalty_rate,
    )
    reward = max(0, round_half_up(base_reward * (1 - attempt_penalty)))

    return RewardBreakdown(
        score=score,
        base_reward=base_reward,
        attempt_penalty=attempt_penalty,
        reward=reward,
        hash_rate=hash_rate(attempts, elapsed_seconds),
    )
