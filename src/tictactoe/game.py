"""Core rules for classic 3x3 tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Mark(str, Enum):
    """Contents of a single cell; also used for whose turn it is."""

    X = "X"
    O = "O"
    EMPTY = ""

    def other(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("An empty cell has no opponent")


Board = Tuple[Mark, ...]

BOARD_SIZE = 9
EMPTY_BOARD: Board = (Mark.EMPTY,) * BOARD_SIZE

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class State(str, Enum):
    """Derived progress of a game; Won and Draw are terminal."""

    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


# ---------- Errors ----------


class MoveError(ValueError):
    """Base class for rejected moves. The board is never changed."""

    code = "invalid_move"


class InvalidCell(MoveError):
    code = "invalid_cell"


class GameOver(MoveError):
    code = "game_over"


class CellOccupied(MoveError):
    code = "cell_occupied"


# ---------- Pure helpers ----------


def _winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    for line in WINNING_LINES:
        a, b, c = line
        v = board[a]
        if v != Mark.EMPTY and v == board[b] == board[c]:
            return line
    return None


def calculate_winner(board: Board) -> Optional[Mark]:
    """Return the mark of the first completed line, or ``None``.

    Lines are checked in ``WINNING_LINES`` order. Draws are not reported here.
    """
    line = _winning_line(board)
    if line is None:
        return None
    return Mark(board[line[0]])


def is_full(board: Board) -> bool:
    return all(c != Mark.EMPTY for c in board)


@dataclass(frozen=True)
class GameStatus:
    state: State
    winner: Optional[Mark] = None
    next_player: Optional[Mark] = None

    @property
    def is_over(self) -> bool:
        return self.state is not State.IN_PROGRESS

    @property
    def label(self) -> str:
        if self.state is State.WON:
            return f"Winner: {self.winner.value}"
        if self.state is State.DRAW:
            return "Draw"
        return f"Next player: {self.next_player.value}"


def status(board: Board, turn: Mark) -> GameStatus:
    """Derive the game status from the board; never stored."""
    winner = calculate_winner(board)
    if winner is not None:
        return GameStatus(state=State.WON, winner=winner)
    if is_full(board):
        return GameStatus(state=State.DRAW)
    return GameStatus(state=State.IN_PROGRESS, next_player=turn)


# ---------- Game ----------


@dataclass
class TicTacToeGame:
    board: Board = EMPTY_BOARD
    turn: Mark = Mark.X
    _moves: List[Tuple[Mark, int]] = field(default_factory=list, repr=False)

    @classmethod
    def from_moves(cls, indices: Iterable[int]) -> "TicTacToeGame":
        """Replay a sequence of cell indices from a fresh game."""
        game = cls()
        for index in indices:
            game.apply_move(index)
        return game

    # ---- API used by UI ----

    @property
    def winner(self) -> Optional[Mark]:
        return calculate_winner(self.board)

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return _winning_line(self.board)

    @property
    def status(self) -> GameStatus:
        return status(self.board, self.turn)

    @property
    def moves(self) -> Tuple[Tuple[Mark, int], ...]:
        return tuple(self._moves)

    def apply_move(self, index: int) -> Board:
        """Place the current player's mark at ``index`` and pass the turn.

        Raises ``InvalidCell``, ``GameOver`` or ``CellOccupied`` without
        touching the board.
        """
        if type(index) is not int or not 0 <= index < BOARD_SIZE:
            raise InvalidCell(f"Cell index must be between 0 and 8, got {index!r}")
        if calculate_winner(self.board) is not None:
            raise GameOver("Game already won")
        if self.board[index] != Mark.EMPTY:
            raise CellOccupied(f"Cell {index} is already occupied")

        player = self.turn
        cells = list(self.board)
        cells[index] = player
        self.board = tuple(cells)
        self.turn = player.other()
        self._moves.append((player, index))
        logger.debug("%s played cell %d", player.value, index)
        return self.board

    def reset(self) -> None:
        """Start a new game, replacing all state."""
        self.board = EMPTY_BOARD
        self.turn = Mark.X
        self._moves = []

    def snapshot(self) -> Dict[str, object]:
        current = self.status
        line = self.winning_line
        return {
            "board": [c.value for c in self.board],
            "turn": self.turn.value,
            "status": current.state.value,
            "statusText": current.label,
            "winner": current.winner.value if current.winner else None,
            "winningLine": list(line) if line else None,
            "moves": [
                {"player": player.value, "index": index}
                for player, index in self._moves
            ],
        }
