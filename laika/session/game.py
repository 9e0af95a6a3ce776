"""
Game - Orchestrates moves on a single session.

A player move runs:
1. Validate and commit the human move (reducer)
2. Evaluate the outcome
3. If the game goes on and the computer participates:
   - Select the computer's reply (bot policy)
   - Validate and commit it, evaluate again
4. Return the updated session

Every function here takes a Session and returns a new one. A rejected
operation raises and leaves the caller's session as it was.
"""

from __future__ import annotations
import logging

from ..bots import BotPolicy, HeuristicPolicy
from ..engine_core.errors import MoveRejected, PlayerRejected, RejectKind, SelectionError
from ..engine_core.outcome import Outcome, evaluate
from ..engine_core.reducer import Reducer
from ..engine_core.state import MAX_PLAYERS, Computer, Human, Move, Player, Session

logger = logging.getLogger(__name__)

_reducer = Reducer()


def start(first_player_id: str) -> Session:
    """
    Create a session for a human against the computer.

    The human joins first, so they hold the first turn.
    """
    session = Session.new()
    session = add_player(session, Human(first_player_id))
    return add_player(session, Computer())


def add_player(session: Session, player: Player) -> Session:
    """
    Add a participant.

    Raises:
        PlayerRejected: MAX_PLAYERS_REACHED at two players,
            DUPLICATE_PLAYER if an equal player already joined,
            INVALID_PLAYER_ID for a human with an empty id
    """
    if isinstance(player, Human) and not player.id:
        raise PlayerRejected(RejectKind.INVALID_PLAYER_ID)
    if len(session.players) >= MAX_PLAYERS:
        raise PlayerRejected(RejectKind.MAX_PLAYERS_REACHED)
    if session.has_player(player):
        raise PlayerRejected(RejectKind.DUPLICATE_PLAYER)

    players = list(session.players)
    players.append(player)
    return session._copy_with(players=players)


def apply_player_move(
    session: Session,
    position: int,
    player_id: str,
    policy: BotPolicy | None = None,
) -> Session:
    """
    Play a move for a human, then let the computer reply.

    Returns the session with up to two new moves.

    Raises:
        PlayerRejected: UNKNOWN_PLAYER if player_id has not joined
        MoveRejected: if the human move fails validation
        SelectionError: if the computer cannot reply
    """
    player = Human(player_id)
    if not session.has_player(player):
        raise PlayerRejected(RejectKind.UNKNOWN_PLAYER)

    move = Move(player=player, position=position, turn=session.next_turn)
    result = _reducer.apply(session, move)
    if not result.success:
        raise MoveRejected(result.error_code)

    session = result.new_session
    logger.debug("Game %s: %s", session.id, "; ".join(result.changes))

    if result.outcome.is_terminal or not session.has_player(Computer()):
        return session

    return apply_computer_move(session, policy)


def apply_computer_move(session: Session, policy: BotPolicy | None = None) -> Session:
    """
    Let the computer choose and play its move.

    A failure here means the engine reached a state it should never reach,
    so it is logged and raised as SelectionError.
    """
    policy = policy or HeuristicPolicy()

    try:
        decision = policy.select_move(session, Computer())
    except SelectionError:
        logger.exception("Game %s: %s found no move", session.id, policy.get_name())
        raise

    result = _reducer.apply(session, decision.move)
    if not result.success:
        logger.error(
            "Game %s: %s chose rejected move %s (%s)",
            session.id,
            policy.get_name(),
            decision.move.position,
            result.error_code.value,
        )
        raise SelectionError(
            RejectKind.NO_MOVES_AVAILABLE,
            f"Computer chose an illegal move: {result.error}",
        )

    logger.debug("Game %s: %s (%s)", session.id, "; ".join(result.changes), decision.explanation)
    return result.new_session


def evaluate_outcome(session: Session) -> Outcome:
    """Evaluate the session's committed moves."""
    return evaluate(session)
