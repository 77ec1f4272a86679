"""Exhaustive minimax AI for tic-tac-toe."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .game import Board, Player

logger = logging.getLogger(__name__)

WIN, DRAW, LOSS = 1, 0, -1


@contextmanager
def _trial(board: Board, index: int, player: Player) -> Iterator[None]:
    """Temporarily give ``index`` to ``player``; the cell is emptied on exit."""
    cell = board.cells[index]
    if cell.owner is not None:
        raise RuntimeError(f"Speculative move on occupied cell {index}")
    cell.owner = player
    try:
        yield
    finally:
        cell.owner = None


@dataclass
class MinimaxAI:
    """AI player that searches the full game tree.

    Values are always scored from ``player``'s point of view: +1 for a win,
    0 for a draw, -1 for a loss. The board is mutated during evaluation but
    every cell is restored before :meth:`next_move` returns, and
    ``current_player`` is never touched.
    """

    player: Player

    # ---- public API ----

    def next_move(self, board: Board) -> int:
        """Return the best empty cell for this AI; the caller commits it.

        Among equally valued moves the lowest index wins.
        """
        scored = self.score_moves(board)
        if not scored:
            raise RuntimeError("No available moves, but no game over was detected")
        index, value = max(scored, key=lambda move: move[1])
        logger.debug("%s chooses cell %d (value %+d)", self.player, index, value)
        return index

    def score_moves(self, board: Board) -> List[Tuple[int, int]]:
        """Minimax value of every empty cell, in ascending index order."""
        if board.is_over():
            raise RuntimeError("Evaluating position, but game is over")
        if board.current_player != self.player:
            raise RuntimeError(
                "Evaluating position, but AI isn't the current player"
            )
        return [
            (index, self._eval_max(board, self.player, index))
            for index in board.available_moves()
        ]

    # ---- core search ----

    def _eval_max(self, board: Board, player: Player, index: int) -> int:
        # ``player`` moves at ``index``; the opponent then picks the worst reply for us.
        with _trial(board, index, player):
            if board.is_over():
                return self._terminal_value(board)
            return min(
                self._eval_min(board, player.swap(), reply)
                for reply in board.available_moves()
            )

    def _eval_min(self, board: Board, player: Player, index: int) -> int:
        with _trial(board, index, player):
            if board.is_over():
                return self._terminal_value(board)
            return max(
                self._eval_max(board, player.swap(), reply)
                for reply in board.available_moves()
            )

    def _terminal_value(self, board: Board) -> int:
        winner = board.winner()
        if winner is None:
            return DRAW
        return WIN if winner == self.player else LOSS
