"""
Learning game engine: the game interface, the Hashlord miner, and the factory.

A host drives any LearningGame the same way:

    game = create_game(GameType.HASHLORD, difficulty=3)
    game.init()
    while not game.is_completed():
        game.update(delta_ms)
        game.render(surface)
        game.handle_input(next_nonce)   # whenever the player submits one
    result = game.get_result()

update() and render() never change the game outcome, so they may run at a
different cadence from handle_input().
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Union

from .. import config
from ..core.particles import ParticleField
from ..core.rewards import RewardPolicy, DEFAULT_POLICY
from ..core.surface import Surface
from ..errors import InvalidArgument
from .render import HashlordRenderer
from .session import GameResult, GameState, MiningSession

logger = logging.getLogger(__name__)


class GameType(Enum):
    HASHLORD = "hashlord"
    GAS_ESCAPE = "gas_escape"
    STAKING_WARS = "staking_wars"
    PACKET_PANIC = "packet_panic"
    RUG_GAME = "rug_game"


class LearningGame(ABC):
    """Capability interface every arcade game implements."""

    @abstractmethod
    def init(self) -> None:
        """Start (or restart) the game."""

    @abstractmethod
    def update(self, delta_ms: float) -> None:
        """Advance cosmetic animation by ``delta_ms`` milliseconds."""

    @abstractmethod
    def render(self, surface: Surface) -> None:
        """Draw the current state. Must not change the game outcome."""

    @abstractmethod
    def is_completed(self) -> bool:
        ...

    @abstractmethod
    def get_result(self) -> GameResult:
        """Final result once completed, a partial one before."""

    @abstractmethod
    def handle_input(self, value) -> None:
        """Feed one player action into the game."""

    def last_digest(self) -> Optional[str]:
        """Digest produced by the latest input, for games that hash one."""
        return None


class HashlordGame(LearningGame):
    """
    Proof-of-work mining simulation.

    Every nonce the player submits is hashed as
    SHA3-256("<label>_<attempt>_Nonce_<nonce>"); the block is mined when the
    digest starts with ``difficulty`` hex zeros.
    """

    game_type = GameType.HASHLORD

    def __init__(
        self,
        difficulty: int = config.DEFAULT_DIFFICULTY,
        clock: Callable[[], float] = time.perf_counter,
        particle_count: int = config.PARTICLE_COUNT,
        seed: Optional[int] = None,
        policy: RewardPolicy = DEFAULT_POLICY,
        label: str = config.SESSION_LABEL,
        on_complete: Optional[Callable[[GameResult], None]] = None,
    ):
        """
        Args:
            difficulty: Leading zero hex chars required (>= 1)
            clock: Monotonic clock in seconds
            particle_count: Size of the ambient particle field
            seed: Seed for the particle field only; never affects hashing
            policy: Reward balance constants
            label: Session label mixed into hashed inputs
            on_complete: Called once with the result when a block is mined

        Raises:
            InvalidArgument: if ``difficulty`` is not an integer >= 1
        """
        self.session = MiningSession(difficulty, label=label, clock=clock, policy=policy)
        self.particles = ParticleField(count=particle_count, seed=seed)
        self.renderer = HashlordRenderer(self.particles.width, self.particles.height)
        self.on_complete = on_complete

    @property
    def difficulty(self) -> int:
        return self.session.difficulty

    @property
    def state(self) -> GameState:
        return self.session.state

    def init(self):
        self.session.reset()
        self.particles.reset()

    def update(self, delta_ms: float):
        self.particles.step(delta_ms)

    def render(self, surface: Surface):
        self.renderer.draw(surface, self.session, self.particles)

    def is_completed(self) -> bool:
        return self.session.completed

    def get_result(self) -> GameResult:
        if self.session.result is None:
            return self.session.partial_result()
        return self.session.result

    def handle_input(self, nonce: int):
        if self.session.submit(nonce) and self.on_complete:
            self.on_complete(self.session.result)

    def last_digest(self) -> Optional[str]:
        return self.session.current_hash


_GAME_CLASSES = {
    GameType.HASHLORD: HashlordGame,
}


def resolve_game_type(game_type: Union[GameType, str]) -> GameType:
    """
    Map a GameType or its case-insensitive string value to a GameType.

    Raises:
        InvalidArgument: for an unknown tag
    """
    if isinstance(game_type, GameType):
        return game_type
    try:
        return GameType(str(game_type).lower())
    except ValueError:
        raise InvalidArgument(f"unknown game type: {game_type!r}") from None


def create_game(
    game_type: Union[GameType, str],
    difficulty: int = config.DEFAULT_DIFFICULTY,
    **options,
) -> LearningGame:
    """
    Build a learning game from its type tag.

    Tags without their own implementation yet fall back to Hashlord.

    Args:
        game_type: GameType member or its string value (e.g. "hashlord")
        difficulty: Game difficulty (>= 1)
        **options: Extra keyword arguments for the game constructor

    Raises:
        InvalidArgument: for an unknown tag or an invalid difficulty
    """
    game_type = resolve_game_type(game_type)
    game_cls = _GAME_CLASSES.get(game_type)
    if game_cls is None:
        logger.debug(f"{game_type.value} is not implemented yet, using Hashlord")
        game_cls = HashlordGame

    return game_cls(difficulty, **options)
