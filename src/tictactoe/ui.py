"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Tuple

from fastapi import FastAPI, HTTPException, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .config import Settings
from .game import MoveError, TicTacToeGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one browser's active game."""

    game: TicTacToeGame = field(default_factory=TicTacToeGame)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SETTINGS = Settings.from_env()
SESSIONS: "OrderedDict[str, GameSession]" = OrderedDict()
SESSIONS_LOCK = threading.Lock()
app = FastAPI(title="Tic-Tac-Toe", description="Tic-tac-toe played in the browser")


class MoveRequest(BaseModel):
    """Request payload for clicking a square."""

    index: int = Field(ge=0, le=8, description="Cell index, row * 3 + col")


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session, evicting the oldest when full."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    with SESSIONS_LOCK:
        while len(SESSIONS) >= SETTINGS.max_sessions:
            evicted, _ = SESSIONS.popitem(last=False)
            logger.info("Evicted game %s", evicted)
        SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(
    game_id: str, session: GameSession, accepted: bool = True
) -> Dict[str, object]:
    with session.lock:
        state = session.game.snapshot()
    state["id"] = game_id
    state["accepted"] = accepted
    return state


def _apply_player_move(session: GameSession, index: int) -> bool:
    """Apply a click. Illegal moves are ignored and reported as not accepted."""

    with session.lock:
        try:
            session.game.apply_move(index)
        except MoveError as exc:
            logger.debug("Ignored move at %d: %s", index, exc)
            return False
    return True


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    accepted = _apply_player_move(session, request.index)
    return _serialize_session(game_id, session, accepted=accepted)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.game.reset()
    logger.info("Reset game %s", game_id)
    return _serialize_session(game_id, session)


@app.delete("/api/game/{game_id}", status_code=204)
def delete_game(game_id: str) -> Response:
    with SESSIONS_LOCK:
        if SESSIONS.pop(game_id, None) is None:
            raise HTTPException(status_code=404, detail="Game not found")
    logger.info("Deleted game %s", game_id)
    return Response(status_code=204)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      body {
        font: 14px \"Century Gothic\", Futura, sans-serif;
        margin: 20px;
      }
      ol, ul {
        padding-left: 30px;
      }
      .board-row:after {
        clear: both;
        content: \"\";
        display: table;
      }
      .status {
        margin-bottom: 10px;
      }
      .square {
        background: #fff;
        border: 1px solid #999;
        float: left;
        font-size: 24px;
        font-weight: bold;
        line-height: 34px;
        height: 34px;
        margin-right: -1px;
        margin-top: -1px;
        padding: 0;
        text-align: center;
        width: 34px;
      }
      .square.winning {
        background: #ffe9a8;
      }
      .square:focus {
        outline: none;
      }
      .game {
        display: flex;
        flex-direction: row;
      }
      .game-info {
        margin-left: 20px;
      }
    </style>
  </head>
  <body>
    <div class=\"game\">
      <div class=\"game-board\">
        <div class=\"status\" id=\"status\">Loading…</div>
        <div id=\"board\"></div>
      </div>
      <div class=\"game-info\">
        <button id=\"new-game\" type=\"button\">New game</button>
        <ol id=\"moves\"></ol>
      </div>
    </div>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const movesEl = document.getElementById('moves');
      let gameId = null;
      let gameState = null;

      function renderSquare(index) {
        const button = document.createElement('button');
        button.className = 'square';
        button.type = 'button';
        button.textContent = gameState.board[index];
        if (gameState.winningLine && gameState.winningLine.includes(index)) {
          button.classList.add('winning');
        }
        button.addEventListener('click', () => sendMove(index));
        return button;
      }

      function renderBoard() {
        boardEl.innerHTML = '';
        for (let row = 0; row < 3; row += 1) {
          const rowEl = document.createElement('div');
          rowEl.className = 'board-row';
          for (let col = 0; col < 3; col += 1) {
            rowEl.appendChild(renderSquare(row * 3 + col));
          }
          boardEl.appendChild(rowEl);
        }
      }

      function renderGame() {
        statusEl.textContent = gameState.statusText;
        renderBoard();
        movesEl.innerHTML = '';
        gameState.moves.forEach((move) => {
          const item = document.createElement('li');
          const row = Math.floor(move.index / 3) + 1;
          const col = (move.index % 3) + 1;
          item.textContent = `${move.player} at (${row}, ${col})`;
          movesEl.appendChild(item);
        });
      }

      async function startGame() {
        const response = await fetch('/api/game', { method: 'POST' });
        gameState = await response.json();
        gameId = gameState.id;
        renderGame();
      }

      async function sendMove(index) {
        if (!gameId) {
          return;
        }
        const response = await fetch(`/api/game/${gameId}/move`, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ index }),
        });
        if (!response.ok) {
          return;
        }
        const data = await response.json();
        if (data.accepted) {
          gameState = data;
          renderGame();
        }
      }

      async function resetGame() {
        if (!gameId) {
          await startGame();
          return;
        }
        const response = await fetch(`/api/game/${gameId}/reset`, { method: 'POST' });
        if (response.status === 404) {
          await startGame();
          return;
        }
        gameState = await response.json();
        renderGame();
      }

      document.getElementById('new-game').addEventListener('click', resetGame);
      startGame();
    </script>
  </body>
</html>
"""
