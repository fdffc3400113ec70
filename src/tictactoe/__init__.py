"""Tic-tac-toe package exposing the game engine and the web application."""

from .game import (
    CellOccupied,
    GameOver,
    GameStatus,
    InvalidCell,
    Mark,
    MoveError,
    State,
    TicTacToeGame,
    calculate_winner,
    status,
)
from .ui import app

__all__ = [
    "CellOccupied",
    "GameOver",
    "GameStatus",
    "InvalidCell",
    "Mark",
    "MoveError",
    "State",
    "TicTacToeGame",
    "app",
    "calculate_winner",
    "status",
]
