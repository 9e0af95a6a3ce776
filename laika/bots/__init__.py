"""
Bots module - Computer opponent implementations.

Provides:
- BotPolicy: Interface for bot move selection
- HeuristicPolicy: Fixed-priority win/block/center/corner/side opponent
- RandomPolicy: Seeded uniform choice among empty cells
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, create_policy
from .heuristic import HeuristicPolicy, Rule

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "create_policy",
    "HeuristicPolicy",
    "Rule",
]
