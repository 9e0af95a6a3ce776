"""
Heuristic opponent - A fixed-priority Tic-Tac-Toe player.

Priority, first match wins:
1. WIN     - complete a line holding two of our marks
2. BLOCK   - fill the gap in a line holding two of the opponent's marks
3. CENTER  - take position 5
4. CORNER  - take the first free of 1, 3, 7, 9
5. SIDE    - take the first free of 2, 4, 6, 8

Ties are broken by board order, never randomly: the same board always
produces the same move.
"""

from __future__ import annotations
from enum import Enum

from .policy import BotDecision, BotPolicy
from ..engine_core.board import CENTER, CORNERS, LINES, SIDES
from ..engine_core.errors import RejectKind, SelectionError
from ..engine_core.state import Computer, Move, Player, Session
from ..engine_core.validator import empty_positions


class Rule(Enum):
    """The heuristic rule that produced a move."""
    WIN = "win"
    BLOCK = "block"
    CENTER = "center"
    CORNER = "corner"
    SIDE = "side"


class HeuristicPolicy(BotPolicy):
    """
    Win, block, then positional preference.

    The opponent is looked up in the session's player list rather than
    assumed to sit in a particular slot.
    """

    def select_move(self, session: Session, acting_player: Player = Computer()) -> BotDecision:
        empty = empty_positions(session)
        if not empty:
            raise SelectionError(RejectKind.NO_MOVES_AVAILABLE)

        position, rule = self._choose(session, acting_player, empty)
        return BotDecision(
            move=Move(player=acting_player, position=position, turn=session.next_turn),
            explanation=f"{rule.value}: position {position}",
            evaluated_positions=len(empty),
        )

    def _choose(
        self,
        session: Session,
        acting_player: Player,
        empty: list[int],
    ) -> tuple[int, Rule]:
        board = session.board

        position = completing_position(board, acting_player)
        if position is not None:
            return position, Rule.WIN

        opponent = session.opponent_of(acting_player)
        if opponent is not None:
            position = completing_position(board, opponent)
            if position is not None:
                return position, Rule.BLOCK

        if CENTER in empty:
            return CENTER, Rule.CENTER

        for rule, preferred in ((Rule.CORNER, CORNERS), (Rule.SIDE, SIDES)):
            for position in preferred:
                if position in empty:
                    return position, rule

        # CENTER + CORNERS + SIDES cover the board, so a free cell was found above
        raise SelectionError(RejectKind.NO_MOVES_AVAILABLE)


def completing_position(board: dict[int, Player], player: Player) -> int | None:
    """
    Find the empty position that would give player a full line.

    Lines are scanned in board order; the first hit is returned.
    """
    for line in LINES:
        owned = [p for p in line if board.get(p) == player]
        empty = [p for p in line if p not in board]
        if len(owned) == 2 and len(empty) == 1:
            return empty[0]
    return None
