"""
Eight-Puzzle sliding-tile problem.

The board holds tiles 1..8 and a gap (0) on a 3x3 grid, stored row-major.
Actions move the gap LEFT, RIGHT, UP or DOWN; since the goal is a single
concrete board, the problem can be searched from both ends.
"""

from enum import Enum
from typing import List, Optional, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from .board import Location
from .interfaces import BoardInterface
from .problem import BidirectionalProblem, StepCostFunction


WIDTH = 3


class EightPuzzleAction(Enum):
    LEFT = 'Left'
    RIGHT = 'Right'
    UP = 'Up'
    DOWN = 'Down'


class EightPuzzleBoard(BoardInterface):
    """
    3x3 tile arrangement.

    Attributes:
        _state: Integer array of shape (9,), row-major, gap encoded as 0
    """

    def __init__(self, state: Sequence[int]):
        """
        Initialize board from a row-major tile sequence.

        Args:
            state: Permutation of 0..8, 0 marking the gap
        """
        tiles = np.array([int(v) for v in state], dtype=np.int8)
        if sorted(tiles.tolist()) != list(range(WIDTH * WIDTH)):
            raise ValueError(f"Eight-puzzle state must be a permutation of 0..8, got {list(state)}")
        self._state = tiles

    @property
    def size(self) -> int:
        return WIDTH

    def get_state(self) -> List[int]:
        return self._state.tolist()

    @staticmethod
    def _location(index: int) -> Location:
        return Location(index % WIDTH, index // WIDTH)

    def get_location_of(self, value: int) -> Location:
        return self._location(int(np.flatnonzero(self._state == value)[0]))

    def get_value_at(self, location: Location) -> int:
        col, row = location
        if not (0 <= col < WIDTH and 0 <= row < WIDTH):
            raise ValueError(f"Location {tuple(location)} outside 3x3 board")
        return int(self._state[row * WIDTH + col])

    def get_gap_location(self) -> Location:
        return self.get_location_of(0)

    def can_move_gap(self, action: EightPuzzleAction) -> bool:
        col, row = self.get_gap_location()
        if action == EightPuzzleAction.LEFT:
            return col > 0
        if action == EightPuzzleAction.RIGHT:
            return col < WIDTH - 1
        if action == EightPuzzleAction.UP:
            return row > 0
        return row < WIDTH - 1

    def _swap_gap(self, d_col: int, d_row: int) -> None:
        col, row = self.get_gap_location()
        gap = row * WIDTH + col
        other = (row + d_row) * WIDTH + (col + d_col)
        self._state[gap], self._state[other] = self._state[other], self._state[gap]

    def move_gap(self, action: EightPuzzleAction) -> None:
        """Slide the gap in the given direction; illegal moves raise ValueError."""
        if not self.can_move_gap(action):
            raise ValueError(f"Cannot move gap {action.value} from {tuple(self.get_gap_location())}")
        d_col, d_row = {
            EightPuzzleAction.LEFT: (-1, 0),
            EightPuzzleAction.RIGHT: (1, 0),
            EightPuzzleAction.UP: (0, -1),
            EightPuzzleAction.DOWN: (0, 1),
        }[action]
        self._swap_gap(d_col, d_row)

    def move_gap_left(self) -> None:
        self.move_gap(EightPuzzleAction.LEFT)

    def move_gap_right(self) -> None:
        self.move_gap(EightPuzzleAction.RIGHT)

    def move_gap_up(self) -> None:
        self.move_gap(EightPuzzleAction.UP)

    def move_gap_down(self) -> None:
        self.move_gap(EightPuzzleAction.DOWN)

    def copy(self) -> 'EightPuzzleBoard':
        new_board = EightPuzzleBoard.__new__(EightPuzzleBoard)
        new_board._state = self._state.copy()
        return new_board

    def __eq__(self, other) -> bool:
        if not isinstance(other, EightPuzzleBoard):
            return NotImplemented
        return np.array_equal(self._state, other._state)

    def __hash__(self) -> int:
        return hash(self._state.tobytes())

    def __str__(self) -> str:
        rows = self._state.reshape(WIDTH, WIDTH)
        return ''.join(' '.join(str(v) for v in row) + '\n' for row in rows)

    def __repr__(self) -> str:
        return f"EightPuzzleBoard({self.get_state()})"


GOAL_STATE = EightPuzzleBoard([0, 1, 2, 3, 4, 5, 6, 7, 8])


# =============================================================================
# Problem Functions
# =============================================================================

def get_actions(state: EightPuzzleBoard) -> List[EightPuzzleAction]:
    return [action for action in EightPuzzleAction if state.can_move_gap(action)]


def get_result(state: EightPuzzleBoard, action: EightPuzzleAction) -> EightPuzzleBoard:
    result = state.copy()
    result.move_gap(action)
    return result


def misplaced_tile_heuristic(state: EightPuzzleBoard) -> int:
    """Number of tiles (gap excluded) not on their goal square."""
    tiles = np.asarray(state.get_state())
    return int(np.sum((tiles != np.arange(WIDTH * WIDTH)) & (tiles != 0)))


def manhattan_heuristic(state: EightPuzzleBoard) -> int:
    """Sum of the tiles' row and column distances to their goal squares."""
    total = 0
    for index, value in enumerate(state.get_state()):
        if value == 0:
            continue
        total += abs(index % WIDTH - value % WIDTH) + abs(index // WIDTH - value // WIDTH)
    return total


def random_board(key: jnp.ndarray, moves: int) -> EightPuzzleBoard:
    """
    Scramble the goal board with ``moves`` random gap moves.

    Boards reached this way are always solvable.
    """
    board = GOAL_STATE.copy()
    if moves <= 0:
        return board
    for subkey in jax.random.split(key, moves):
        actions = get_actions(board)
        choice = int(jax.random.randint(subkey, (), 0, len(actions)))
        board.move_gap(actions[choice])
    return board


def create_bidirectional_eight_puzzle_problem(
    initial_state: EightPuzzleBoard,
    step_cost_fn: Optional[StepCostFunction] = None
) -> BidirectionalProblem:
    """
    Eight-puzzle problem searchable from the initial state and from the goal.

    Args:
        initial_state: Scrambled board
        step_cost_fn: Optional custom step cost; uniform cost 1 when omitted

    Returns:
        BidirectionalProblem whose reverse starts at GOAL_STATE.
    """
    return BidirectionalProblem.from_functions(
        initial_state.copy(), GOAL_STATE.copy(), get_actions, get_result, step_cost_fn
    )
