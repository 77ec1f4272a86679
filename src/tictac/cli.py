"""Text-prompt front end: board rendering, move input and the game loop."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .ai import MinimaxAI
from .game import Board, CellAlreadyOccupied, Player

logger = logging.getLogger(__name__)

# Top row first, laid out like a numeric keypad (1 is bottom-left).
DISPLAY_ROWS = ((6, 7, 8), (3, 4, 5), (0, 1, 2))
ROW_SEPARATOR = "---+---+---"

Reader = Callable[[str], str]


def render_board(board: Board) -> str:
    rows = []
    for row in DISPLAY_ROWS:
        marks = [str(board.cells[i].owner or " ") for i in row]
        rows.append(" " + " | ".join(marks) + " ")
    return f"\n{ROW_SEPARATOR}\n".join(rows)


def read_move(text: str) -> Optional[int]:
    """Parse a 1-based cell number into a board index, or report why not."""
    text = text.strip()
    try:
        number = int(text)
    except ValueError:
        print(
            "Your move must be a valid number between 1 and 9. "
            f"Received: '{text}'"
        )
        return None
    if not 1 <= number <= 9:
        print("Your move must be a valid number between 1 and 9.")
        return None
    return number - 1


def prompt(board: Board, read: Reader = input) -> bool:
    """Ask the current player for one move; returns True if it was played."""
    index = read_move(read(f"Player {board.current_player} -- enter your move: "))
    if index is None:
        return False
    try:
        board.play(index)
    except CellAlreadyOccupied as exc:
        logger.info("Rejected move: %s", exc)
        print("Cell already occupied!")
        return False
    return True


def play_game(human: Player = Player.X, read: Reader = input) -> Optional[Player]:
    """Play one game between a human on ``read`` and the AI; returns the winner."""
    board = Board(Player.X)
    ai = MinimaxAI(player=human.swap())

    while not board.is_over():
        print(render_board(board))
        if board.current_player == human:
            prompt(board, read)
            continue
        index = ai.next_move(board)
        board.play(index)
        print(f"Computer plays {index + 1}")

    print(render_board(board))
    winner = board.winner()
    if winner is not None:
        print(f"Player {winner} won!")
    else:
        print("It's a draw!")
    return winner
