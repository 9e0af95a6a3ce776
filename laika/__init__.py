"""
Laika - Tic-Tac-Toe Game Service

A deterministic engine for playing Tic-Tac-Toe against a human or the
computer, served over a small REST API. The package provides:
- Session state and move validation
- Win/draw detection
- A fixed-priority computer opponent
- Pluggable session storage
"""

__version__ = "0.1.0"
