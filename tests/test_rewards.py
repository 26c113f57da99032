"""Tests for the score / reward model."""

import pytest

from pvx_arcade.core.rewards import (
    DEFAULT_POLICY,
    RewardPolicy,
    calculate_reward,
    hash_rate,
    round_half_up,
)


class TestRounding:

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(42.5) == 43
        assert round_half_up(0.5) == 1

    def test_non_halves(self):
        assert round_half_up(2.4) == 2
        assert round_half_up(2.6) == 3
        assert round_half_up(0.0) == 0


class TestCalculateReward:
    """Test the completion-time reward formulas."""

    def test_first_attempt_fast(self):
        """One attempt under the 10 s floor: score uses the floor."""
        r = calculate_reward(difficulty=2, attempts=1, elapsed_seconds=3.0)
        # 1000 / 0.5 * 2 * (60 / 10)
        assert r.score == 24000
        assert r.base_reward == 100
        assert r.attempt_penalty == pytest.approx(0.01)
        assert r.reward == 99
        assert r.hash_rate == 0  # round(1 / 3)

    def test_time_floor(self):
        """Anything faster than 10 s scores like 10 s."""
        assert calculate_reward(1, 4, 0.1).score == calculate_reward(1, 4, 10.0).score

    def test_slow_completion_scores_less(self):
        fast = calculate_reward(1, 4, 10.0)
        slow = calculate_reward(1, 4, 60.0)
        assert slow.score < fast.score
        # 1000 / 2 * 1 * (60 / 60)
        assert slow.score == 500

    def test_nine_attempts(self):
        r = calculate_reward(difficulty=1, attempts=9, elapsed_seconds=5.0)
        assert r.score == 1333
        assert r.reward == 46   # 50 * 0.91 = 45.5
        assert r.hash_rate == 2  # 9 / 5 = 1.8

    def test_reward_half_rounds_up(self):
        """50 * (1 - 0.15) = 42.5 rounds to 43, not banker's 42."""
        assert calculate_reward(1, 15, 10.0).reward == 43

    def test_penalty_capped(self):
        r = calculate_reward(difficulty=3, attempts=10_000, elapsed_seconds=30.0)
        assert r.attempt_penalty == pytest.approx(0.8)
        assert r.reward == 30   # 150 * 0.2

    def test_penalty_cap_reached_at_80_attempts(self):
        assert calculate_reward(1, 80, 10.0).attempt_penalty == pytest.approx(0.8)
        assert calculate_reward(1, 79, 10.0).attempt_penalty < 0.8

    def test_zero_attempts_clamped(self):
        """attempts=0 must not divide by zero."""
        assert calculate_reward(1, 0, 10.0) == calculate_reward(1, 1, 10.0)

    def test_score_scales_with_difficulty(self):
        base = calculate_reward(1, 10, 20.0).score
        assert calculate_reward(4, 10, 20.0).score == 4 * base

    def test_reward_bounded(self):
        """0 <= reward <= 50 * difficulty for every difficulty and attempt count."""
        for difficulty in range(1, 9):
            for attempts in list(range(1, 120)) + [500, 10_000, 10**6]:
                for elapsed in (0.0, 1.0, 10.0, 300.0):
                    r = calculate_reward(difficulty, attempts, elapsed)
                    assert 0 <= r.reward <= 50 * difficulty
                    assert r.score >= 0

    def test_custom_policy(self):
        policy = RewardPolicy(base_reward_per_difficulty=10, max_attempt_penalty=0.5)
        r = calculate_reward(2, 1000, 10.0, policy)
        assert r.base_reward == 20
        assert r.reward == 10

    def test_default_policy_constants(self):
        assert DEFAULT_POLICY.score_numerator == 1000
        assert DEFAULT_POLICY.score_attempt_weight == 0.5
        assert DEFAULT_POLICY.max_attempt_penalty == 0.8


class TestHashRate:

    def test_rate(self):
        assert hash_rate(100, 4.0) == 25

    def test_no_elapsed_time(self):
        assert hash_rate(100, 0.0) == 0
        assert hash_rate(100, -1.0) == 0
