"""
Bot Policy - Interface for computer move selection.

A BotPolicy takes a session and returns a decision.
Decisions include:
- The move to play
- Explanation (for logs and the CLI)
- How many candidate cells were considered
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random

from ..engine_core.errors import RejectKind, SelectionError
from ..engine_core.state import Computer, Move, Player, Session
from ..engine_core.validator import empty_positions


@dataclass
class BotDecision:
    """A move chosen by a bot, with the reason it was chosen."""
    move: Move
    explanation: str = ""
    evaluated_positions: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations must be deterministic for a given session (and seed,
    where one applies) so games can be replayed.
    """

    @abstractmethod
    def select_move(self, session: Session, acting_player: Player = Computer()) -> BotDecision:
        """
        Select the next move for acting_player.

        Raises:
            SelectionError: if the board has no empty position
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - picks uniformly among empty positions.

    Used for:
    - Reproducing the historical opponent
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(self, session: Session, acting_player: Player = Computer()) -> BotDecision:
        candidates = empty_positions(session)
        if not candidates:
            raise SelectionError(RejectKind.NO_MOVES_AVAILABLE)

        position = self.rng.choice(candidates)
        return BotDecision(
            move=Move(player=acting_player, position=position, turn=session.next_turn),
            explanation="Selected randomly",
            evaluated_positions=len(candidates),
        )


def create_policy(name: str = "heuristic", seed: int | None = None) -> BotPolicy:
    """Build a policy by name ("heuristic" or "random")."""
    from .heuristic import HeuristicPolicy

    if name == "heuristic":
        return HeuristicPolicy()
    if name == "random":
        return RandomPolicy(seed=seed)
    raise ValueError(f"Unknown bot policy: {name}")
