"""PixelVault Arcade: a proof-of-work learning game engine."""

__version__ = "0.1.0"

from .errors import PixelVaultError, InvalidArgument, SessionNotStarted
from .games.engine import GameType, HashlordGame, LearningGame, create_game, resolve_game_type
from .games.leaderboard import Leaderboard, LeaderboardStats, ScoreEntry
from .games.session import GameResult, GameStats, GameState
