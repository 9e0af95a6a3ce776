"""
Session Module - Game lifecycle on top of the engine.

A session is one game of Tic-Tac-Toe:
- Started by a human, with the computer as second player
- Advanced one human move (plus the computer's reply) at a time
- Loaded from and saved to a storage backend around every move

game.py holds the pure orchestration; manager.py adds storage and locking.
"""

from .game import start, add_player, apply_player_move, apply_computer_move, evaluate_outcome
from .manager import SessionManager

__all__ = [
    "start",
    "add_player",
    "apply_player_move",
    "apply_computer_move",
    "evaluate_outcome",
    "SessionManager",
]
