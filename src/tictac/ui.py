"""FastAPI JSON API and browser page for playing against the minimax AI."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .ai import MinimaxAI
from .game import Board, CellAlreadyOccupied, Player

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game and its AI opponent."""

    board: Board
    ai: MinimaxAI
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def human(self) -> Player:
        return self.ai.player.swap()


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="TicTac", description="Tic-tac-toe against a perfect opponent")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    human_player: Player = Field(
        default=Player.X,
        alias="humanPlayer",
        description="Side played by the human; X always moves first",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_session(human: Player) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession(board=Board(Player.X), ai=MinimaxAI(player=human.swap()))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s (human plays %s)", session_id, human)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _record(session: GameSession, player: Player, cell_index: int) -> None:
    session.move_log.append({"player": player.value, "cellIndex": cell_index})


def _run_ai_turn(session: GameSession) -> None:
    board = session.board
    if board.is_over() or board.current_player != session.ai.player:
        return
    player = board.current_player
    cell_index = session.ai.next_move(board)
    board.play(cell_index)
    _record(session, player, cell_index)


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        board = session.board
        winner: Optional[Player] = board.winner()
        over = board.is_over()
        state: Dict[str, object] = {
            "id": game_id,
            "cells": [owner.value if owner else "" for owner in board.owners()],
            "currentPlayer": board.current_player.value,
            "humanPlayer": session.human.value,
            "aiPlayer": session.ai.player.value,
            "winner": winner.value if winner else None,
            "drawn": over and winner is None,
            "over": over,
            "availableMoves": [] if over else board.available_moves(),
            "moveLog": list(session.move_log),
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(session: GameSession, cell_index: int) -> None:
    with session.lock:
        board = session.board
        if board.is_over():
            raise HTTPException(status_code=400, detail="Game already finished")
        if board.current_player != session.human:
            raise HTTPException(status_code=400, detail="It is not your turn")

        player = board.current_player
        try:
            board.play(cell_index)
        except CellAlreadyOccupied as exc:
            logger.warning("Rejected move on cell %d: %s", cell_index, exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        _record(session, player, cell_index)

        _run_ai_turn(session)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.human_player)
    with session.lock:
        # An AI opening searches the whole game tree and holds the lock for seconds.
        if session.ai.player == session.board.current_player:
            logger.info("Game %s: AI opens, searching full game tree", game_id)
        _run_ai_turn(session)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.cell_index)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>TicTac</title>
    <style>
      body {
        font-family: system-ui, sans-serif;
        display: flex;
        flex-direction: column;
        align-items: center;
        background: #f5f5f7;
        color: #1d1d1f;
      }
      #board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        grid-gap: 6px;
        margin: 24px 0;
      }
      #board button {
        width: 96px;
        height: 96px;
        font-size: 48px;
        font-weight: 600;
        border: none;
        border-radius: 12px;
        background: #ffffff;
        cursor: pointer;
      }
      #board button:disabled {
        cursor: default;
      }
      .controls button {
        margin: 0 6px;
        padding: 8px 16px;
        font-size: 16px;
      }
    </style>
  </head>
  <body>
    <h1>TicTac</h1>
    <div class=\"controls\">
      <button data-human=\"X\">Play as X</button>
      <button data-human=\"O\">Play as O</button>
    </div>
    <div id=\"board\"></div>
    <p id=\"status\">Pick a side to start.</p>
    <script>
      // Keypad layout: cell 0 is bottom-left.
      const ORDER = [6, 7, 8, 3, 4, 5, 0, 1, 2];
      const boardEl = document.getElementById("board");
      const statusEl = document.getElementById("status");
      let state = null;

      function render() {
        boardEl.innerHTML = "";
        for (const index of ORDER) {
          const button = document.createElement("button");
          button.textContent = state.cells[index];
          button.disabled =
            state.over ||
            state.currentPlayer !== state.humanPlayer ||
            !state.availableMoves.includes(index);
          button.addEventListener("click", () => play(index));
          boardEl.appendChild(button);
        }
        if (state.winner) {
          statusEl.textContent = `Player ${state.winner} won!`;
        } else if (state.drawn) {
          statusEl.textContent = "It's a draw!";
        } else {
          statusEl.textContent = `You are ${state.humanPlayer}. Your move.`;
        }
      }

      async function request(url, body) {
        const response = await fetch(url, {
          method: "POST",
          headers: { "Content-Type": "application/json" },
          body: JSON.stringify(body),
        });
        const payload = await response.json();
        if (!response.ok) {
          statusEl.textContent = payload.detail;
          return;
        }
        state = payload;
        render();
      }

      function play(index) {
        request(`/api/game/${state.id}/move`, { cellIndex: index });
      }

      for (const button of document.querySelectorAll(".controls button")) {
        button.addEventListener("click", () => {
          statusEl.textContent = "Thinking...";
          request("/api/game", { humanPlayer: button.dataset.human });
        });
      }
    </script>
  </body>
</html>
"""
