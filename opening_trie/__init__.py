"""Index chess games by the moves played and query them by opening."""

from .game import Game, GameResult
from .move_tree import MoveTree, MoveTreeView
from .moves import AlgebraicMove, Move, NotationError

__all__ = [
    "AlgebraicMove",
    "Game",
    "GameResult",
    "Move",
    "MoveTree",
    "MoveTreeView",
    "NotationError",
]
