"""Board model and rules for 3x3 tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

BOARD_SIZE = 9

# Rows, then columns, then the two diagonals.
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


class Player(str, Enum):
    X = "X"
    O = "O"

    def swap(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    def __str__(self) -> str:
        return self.value


class CellAlreadyOccupied(ValueError):
    """Raised by :meth:`Board.play` when the target cell already has an owner."""

    def __init__(self, index: int, owner: Player):
        super().__init__(f"Cell {index} already occupied by player {owner}")
        self.index = index
        self.owner = owner


@dataclass
class Cell:
    owner: Optional[Player] = None


# ---------- Board ----------


@dataclass
class Board:
    """Nine cells in row-major order plus the player whose turn it is.

    ``cells`` is writable directly so the search can make speculative moves
    without advancing the turn; everything else should go through :meth:`play`.
    """

    current_player: Player = Player.X
    cells: List[Cell] = field(
        default_factory=lambda: [Cell() for _ in range(BOARD_SIZE)]
    )

    # ---- moves ----

    def play(self, index: int) -> None:
        """Claim ``index`` for the current player and pass the turn."""
        if not 0 <= index < BOARD_SIZE:
            raise ValueError(f"Cell index must be between 0 and {BOARD_SIZE - 1}")
        owner = self.cells[index].owner
        if owner is not None:
            raise CellAlreadyOccupied(index, owner)
        self.cells[index].owner = self.current_player
        self.current_player = self.current_player.swap()

    def available_moves(self) -> List[int]:
        return [i for i, cell in enumerate(self.cells) if cell.owner is None]

    # ---- state queries ----

    def is_full(self) -> bool:
        return all(cell.owner is not None for cell in self.cells)

    def winner(self) -> Optional[Player]:
        cells = self.cells
        for a, b, c in WINNING_LINES:
            owner = cells[a].owner
            if owner is not None and owner == cells[b].owner == cells[c].owner:
                return owner
        return None

    def is_over(self) -> bool:
        return self.winner() is not None or self.is_full()

    def clone(self) -> "Board":
        return Board(
            current_player=self.current_player,
            cells=[Cell(owner=cell.owner) for cell in self.cells],
        )

    def owners(self) -> List[Optional[Player]]:
        return [cell.owner for cell in self.cells]
