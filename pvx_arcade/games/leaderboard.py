"""In-memory leaderboard for arcade game results."""

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Union

from ..errors import InvalidArgument
from .engine import GameType, resolve_game_type
from .session import GameResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    """One registered score."""
    player: str
    game_type: str
    score: int
    difficulty: int
    time_spent: float
    reward: int
    sequence: int  # registration order, breaks score ties


@dataclass(frozen=True)
class LeaderboardStats:
    total_players: int = 0
    highest_score: int = 0
    average_score: float = 0.0
    total_games_played: int = 0


def _tag(game_type: Union[GameType, str]) -> str:
    return resolve_game_type(game_type).value


class Leaderboard:
    """
    Ranks successful game results per game type.

    Each player's rank is decided by their best score; ties go to whoever
    registered that score first.
    """

    def __init__(self):
        self._entries: Dict[str, List[ScoreEntry]] = defaultdict(list)
        self._sequence = itertools.count()

    def register(self, player: str, game_type: Union[GameType, str], result: GameResult) -> ScoreEntry:
        """
        Record a completed game.

        Raises:
            InvalidArgument: if the result is not a success or the game
                type is unknown
        """
        if not result.success:
            raise InvalidArgument("only successful results can be registered")

        entry = ScoreEntry(
            player=player,
            game_type=_tag(game_type),
            score=result.stats.score,
            difficulty=result.stats.difficulty,
            time_spent=result.stats.completion_time,
            reward=result.reward,
            sequence=next(self._sequence),
        )
        self._entries[entry.game_type].append(entry)
        logger.info(f"Score registered: {player} {entry.game_type} score={entry.score}")
        return entry

    def top(self, game_type: Union[GameType, str], limit: int = 10) -> List[ScoreEntry]:
        """Highest scores for a game type, best first."""
        entries = self._entries.get(_tag(game_type), [])
        return sorted(entries, key=lambda e: (-e.score, e.sequence))[:max(0, limit)]

    def _best_per_player(self, tag: str) -> List[ScoreEntry]:
        best: Dict[str, ScoreEntry] = {}
        for entry in self._entries.get(tag, []):
            current = best.get(entry.player)
            if current is None or (entry.score, -entry.sequence) > (current.score, -current.sequence):
                best[entry.player] = entry
        return sorted(best.values(), key=lambda e: (-e.score, e.sequence))

    def rank(self, player: str, game_type: Union[GameType, str]) -> int:
        """1-based rank of the player's best score, 0 if they have none."""
        for position, entry in enumerate(self._best_per_player(_tag(game_type)), start=1):
            if entry.player == player:
                return position
        return 0

    def stats(self, game_type: Union[GameType, str]) -> LeaderboardStats:
        entries = self._entries.get(_tag(game_type), [])
        if not entries:
            return LeaderboardStats()
        scores = [e.score for e in entries]
        return LeaderboardStats(
            total_players=len({e.player for e in entries}),
            highest_score=max(scores),
            average_score=sum(scores) / len(scores),
            total_games_played=len(entries),
        )
