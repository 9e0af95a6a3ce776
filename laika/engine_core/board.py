"""
Board Geometry - The fixed layout of a 3x3 Tic-Tac-Toe board.

Positions are numbered 1-9 in row-major order:

     1 | 2 | 3
    ---+---+---
     4 | 5 | 6
    ---+---+---
     7 | 8 | 9

A line is three positions that win the game when one player owns all of them.
Line order matters: the detector and the heuristic both scan rows, then
columns, then diagonals.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Session, Player


BOARD_SIZE = 3
POSITIONS: tuple[int, ...] = tuple(range(1, BOARD_SIZE * BOARD_SIZE + 1))
MIN_POSITION = POSITIONS[0]
MAX_POSITION = POSITIONS[-1]

LINES: tuple[tuple[int, int, int], ...] = (
    # Rows
    (1, 2, 3),
    (4, 5, 6),
    (7, 8, 9),
    # Columns
    (1, 4, 7),
    (2, 5, 8),
    (3, 6, 9),
    # Diagonals
    (1, 5, 9),
    (3, 5, 7),
)

CENTER = 5
CORNERS: tuple[int, ...] = (1, 3, 7, 9)
SIDES: tuple[int, ...] = (2, 4, 6, 8)


def is_on_board(position: int) -> bool:
    """Check if a position number names one of the 9 cells."""
    return MIN_POSITION <= position <= MAX_POSITION


def position_to_cell(position: int) -> tuple[int, int]:
    """Convert a 1-9 position into a zero-based (row, col) pair."""
    if not is_on_board(position):
        raise ValueError(f"Position {position} is not on the board")
    return divmod(position - 1, BOARD_SIZE)


def cell_to_position(row: int, col: int) -> int:
    """Convert a zero-based (row, col) pair into a 1-9 position."""
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Cell ({row}, {col}) is not on the board")
    return row * BOARD_SIZE + col + 1


def render(session: Session, marks: dict[Player, str] | None = None) -> str:
    """
    Draw the session's board as text.

    The first player to join is drawn as X and the second as O unless
    `marks` says otherwise. Empty cells show their position number.
    """
    if marks is None:
        marks = {}
        for player, symbol in zip(session.players, ("X", "O")):
            marks[player] = symbol

    owners = {move.position: move.player for move in session.moves}
    rows = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            position = cell_to_position(row, col)
            owner = owners.get(position)
            cells.append(marks.get(owner, "?") if owner is not None else str(position))
        rows.append("|".join(f" {cell} " for cell in cells))
    return "\n---+---+---\n".join(rows)
