"""
Board state implementation for the N-Queens problem.

This module provides:
- Location: immutable (col, row) coordinate
- BoardConfig: initialization policies
- NQueensBoard: N×N occupancy grid owning all conflict-counting logic
"""

from collections import Counter
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from .interfaces import BoardInterface


class Location(NamedTuple):
    """Zero-based board coordinate; col increases left to right, row top to bottom."""
    col: int
    row: int


class BoardConfig(Enum):
    """Parameters for board initialization."""
    EMPTY = 'empty'
    QUEENS_IN_FIRST_ROW = 'queens_in_first_row'
    QUEEN_IN_EVERY_COL = 'queen_in_every_col'
    QUEEN_IN_EVERY_COL_ROW = 'queen_in_every_col_row'

    @property
    def is_random(self) -> bool:
        return self in (BoardConfig.QUEEN_IN_EVERY_COL, BoardConfig.QUEEN_IN_EVERY_COL_ROW)


def get_board_config(name: str) -> BoardConfig:
    """
    Get initialization policy by name.

    Args:
        name: Policy name ('empty', 'queens_in_first_row', ...)

    Returns:
        Matching BoardConfig member.
    """
    try:
        return BoardConfig(name)
    except ValueError:
        raise ValueError(f"Unknown board config: {name}. "
                         f"Valid options: {[c.value for c in BoardConfig]}") from None


class NQueensBoard(BoardInterface):
    """
    Square board on which queens can be placed (one per square) and moved.

    The grid is stored as a boolean array indexed ``[col, row]``. Boards are
    mutated in place; callers that branch (search algorithms) must work on
    copies. Equality and hashing are structural over the full grid.

    Attributes:
        _size: Board dimension N
        _squares: Boolean array of shape (N, N)
    """

    def __init__(
        self,
        size: int,
        config: BoardConfig = BoardConfig.EMPTY,
        key: Optional[jnp.ndarray] = None
    ):
        """
        Initialize board according to an initialization policy.

        Args:
            size: Board dimension
            config: Initialization policy
            key: JAX random key, required by the random policies
        """
        if size < 0:
            raise ValueError(f"Board size must be non-negative, got {size}")
        if config.is_random and key is None:
            raise ValueError(f"Board config {config.value} requires a random key")

        self._size = size
        self._squares = np.zeros((size, size), dtype=bool)

        if size == 0:
            return
        if config == BoardConfig.QUEENS_IN_FIRST_ROW:
            self._squares[:, 0] = True
        elif config == BoardConfig.QUEEN_IN_EVERY_COL:
            rows = np.asarray(jax.random.randint(key, (size,), 0, size))
            self._squares[np.arange(size), rows] = True
        elif config == BoardConfig.QUEEN_IN_EVERY_COL_ROW:
            rows = np.asarray(jax.random.permutation(key, size))
            self._squares[np.arange(size), rows] = True

    @classmethod
    def from_rows(cls, rows: Iterable[int]) -> 'NQueensBoard':
        """Build a one-queen-per-column board; column i holds its queen at rows[i]."""
        rows = list(rows)
        board = cls(len(rows))
        for col, row in enumerate(rows):
            board.add_queen_at(Location(col, int(row)))
        return board

    @property
    def size(self) -> int:
        return self._size

    def get_squares(self) -> np.ndarray:
        """Get a read-only view of the occupancy grid."""
        view = self._squares.view()
        view.flags.writeable = False
        return view

    def _check_location(self, location: Tuple[int, int]) -> Location:
        col, row = location
        if not (0 <= col < self._size and 0 <= row < self._size):
            raise ValueError(f"Location {tuple(location)} outside {self._size}x{self._size} board")
        return Location(int(col), int(row))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        self._squares[:, :] = False

    def set_queens_at(self, locations: Iterable[Tuple[int, int]]) -> None:
        """Replace the board contents with queens at ``locations``."""
        checked = [self._check_location(loc) for loc in locations]
        self.clear()
        for loc in checked:
            self._squares[loc.col, loc.row] = True

    def add_queen_at(self, location: Tuple[int, int]) -> None:
        col, row = self._check_location(location)
        self._squares[col, row] = True

    def remove_queen_from(self, location: Tuple[int, int]) -> None:
        col, row = self._check_location(location)
        self._squares[col, row] = False

    def move_queen(self, from_location: Tuple[int, int], to_location: Tuple[int, int]) -> None:
        """
        Empty the whole column of ``from_location``, then occupy ``to_location``.

        This is the complete-state move: the column's queen is re-homed, so any
        other queen in that column disappears too.
        """
        from_col, _ = self._check_location(from_location)
        to_col, to_row = self._check_location(to_location)
        self._squares[from_col, :] = False
        self._squares[to_col, to_row] = True

    def move_queen_to(self, location: Tuple[int, int]) -> None:
        """Move the queen in ``location``'s column to ``location``'s row."""
        self.move_queen(location, location)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def queen_exists_at(self, location: Tuple[int, int]) -> bool:
        col, row = self._check_location(location)
        return bool(self._squares[col, row])

    def queen_count(self) -> int:
        return int(self._squares.sum())

    def queen_positions(self) -> List[Location]:
        """Queen locations ordered by column, then row."""
        return [Location(int(c), int(r)) for c, r in np.argwhere(self._squares)]

    def has_queen_in_every_column(self) -> bool:
        """True iff every column holds exactly one queen."""
        return bool(np.all(self._squares.sum(axis=1) == 1))

    def attacks_on(self, location: Tuple[int, int]) -> int:
        """
        Number of queens attacking ``location``.

        Sums horizontal, vertical and diagonal attacks. A queen standing on
        ``location`` itself is not counted.
        """
        col, row = self._check_location(location)
        squares = self._squares
        own = int(squares[col, row])

        horizontal = int(squares[:, row].sum()) - own
        vertical = int(squares[col, :].sum()) - own
        # Down-diagonal: row - col constant; up-diagonal: col + row constant
        down = int(np.diagonal(squares, offset=row - col).sum()) - own
        up = int(np.diagonal(np.fliplr(squares), offset=self._size - 1 - col - row).sum()) - own
        return horizontal + vertical + down + up

    def is_under_attack(self, location: Tuple[int, int]) -> bool:
        return self.attacks_on(location) > 0

    def attacking_pairs(self) -> int:
        """Number of attacking pairs; every pair is seen from both of its queens."""
        return sum(self.attacks_on(q) for q in self.queen_positions()) // 2

    def attacked_queen_count(self) -> int:
        return sum(1 for q in self.queen_positions() if self.attacks_on(q) > 0)

    def max_aligned_run(self) -> int:
        """
        Largest number of queens sharing a column, row or diagonal.

        Queens are grouped independently along each axis: column, row,
        down-diagonal (col - row) and up-diagonal (col + row).
        """
        queens = self.queen_positions()
        if not queens:
            return 0
        axes = (
            Counter(q.col for q in queens),
            Counter(q.row for q in queens),
            Counter(q.col - q.row for q in queens),
            Counter(q.col + q.row for q in queens),
        )
        return max(max(axis.values()) for axis in axes)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def copy(self) -> 'NQueensBoard':
        """Create a deep copy."""
        new_board = NQueensBoard.__new__(NQueensBoard)
        new_board._size = self._size
        new_board._squares = self._squares.copy()
        return new_board

    def __eq__(self, other) -> bool:
        if not isinstance(other, NQueensBoard):
            return NotImplemented
        return self._size == other._size and np.array_equal(self._squares, other._squares)

    def __hash__(self) -> int:
        return hash((self._size, self._squares.tobytes()))

    def __str__(self) -> str:
        lines = []
        for row in range(self._size):
            lines.append(''.join('Q' if self._squares[col, row] else '-'
                                 for col in range(self._size)))
        return ''.join(line + '\n' for line in lines)

    def __repr__(self) -> str:
        return f"NQueensBoard(size={self._size}, queens={self.queen_positions()})"
