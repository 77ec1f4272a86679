"""TicTac package exposing the board model, the minimax AI, and the web application."""

from .ai import MinimaxAI
from .game import Board, CellAlreadyOccupied, Player
from .ui import app

__all__ = ["Board", "CellAlreadyOccupied", "MinimaxAI", "Player", "app"]
