"""Tests for the in-memory leaderboard."""

import pytest

from pvx_arcade.errors import InvalidArgument
from pvx_arcade.games.engine import GameType
from pvx_arcade.games.leaderboard import Leaderboard, LeaderboardStats
from pvx_arcade.games.session import GameResult, GameStats


def make_result(score, success=True, difficulty=2, reward=80):
    return GameResult(
        success=success,
        message="",
        reward=reward,
        stats=GameStats(score=score, attempts=3, completion_time=12.5,
                        difficulty=difficulty, hash_rate=0),
    )


@pytest.fixture
def board():
    b = Leaderboard()
    b.register("alice", GameType.HASHLORD, make_result(500))
    b.register("bob", GameType.HASHLORD, make_result(900))
    b.register("carol", GameType.HASHLORD, make_result(700))
    b.register("alice", GameType.HASHLORD, make_result(1200))
    return b


class TestLeaderboard:

    def test_register_entry(self):
        entry = Leaderboard().register("dave", "HASHLORD", make_result(321, difficulty=4))
        assert entry.player == "dave"
        assert entry.game_type == "hashlord"
        assert entry.score == 321
        assert entry.difficulty == 4
        assert entry.time_spent == 12.5
        assert entry.reward == 80

    def test_rejects_unsuccessful_result(self):
        with pytest.raises(InvalidArgument):
            Leaderboard().register("eve", GameType.HASHLORD, make_result(100, success=False))

    def test_top(self, board):
        top = board.top(GameType.HASHLORD)
        assert [(e.player, e.score) for e in top] == [
            ("alice", 1200), ("bob", 900), ("carol", 700), ("alice", 500),
        ]

    def test_top_limit(self, board):
        assert len(board.top("hashlord", limit=2)) == 2
        assert board.top("hashlord", limit=0) == []

    def test_top_ties_keep_registration_order(self):
        b = Leaderboard()
        b.register("first", GameType.HASHLORD, make_result(400))
        b.register("second", GameType.HASHLORD, make_result(400))
        assert [e.player for e in b.top(GameType.HASHLORD)] == ["first", "second"]
        assert b.rank("first", GameType.HASHLORD) == 1
        assert b.rank("second", GameType.HASHLORD) == 2

    def test_rank_uses_best_score(self, board):
        assert board.rank("alice", GameType.HASHLORD) == 1
        assert board.rank("bob", GameType.HASHLORD) == 2
        assert board.rank("carol", GameType.HASHLORD) == 3

    def test_rank_unknown_player(self, board):
        assert board.rank("zed", GameType.HASHLORD) == 0
        assert board.rank("alice", GameType.GAS_ESCAPE) == 0

    def test_game_types_are_separate(self, board):
        board.register("zed", GameType.STAKING_WARS, make_result(50))
        assert [e.player for e in board.top(GameType.STAKING_WARS)] == ["zed"]
        assert all(e.player != "zed" for e in board.top(GameType.HASHLORD))

    def test_stats(self, board):
        stats = board.stats(GameType.HASHLORD)
        assert stats.total_players == 3
        assert stats.highest_score == 1200
        assert stats.average_score == pytest.approx(825.0)
        assert stats.total_games_played == 4

    def test_stats_empty(self):
        assert Leaderboard().stats(GameType.RUG_GAME) == LeaderboardStats()

    @pytest.mark.parametrize("tag", ["tetris", "", "hash lord"])
    def test_unknown_game_type_rejected(self, board, tag):
        with pytest.raises(InvalidArgument):
            board.register("dave", tag, make_result(100))
        with pytest.raises(InvalidArgument):
            board.top(tag)
        with pytest.raises(InvalidArgument):
            board.rank("alice", tag)
        with pytest.raises(InvalidArgument):
            board.stats(tag)

    def test_package_exports(self):
        import pvx_arcade

        assert pvx_arcade.Leaderboard is Leaderboard
        assert pvx_arcade.LeaderboardStats is LeaderboardStats
