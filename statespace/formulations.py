"""
N-Queens problem formulations and heuristics.

Two state encodings are provided:
- Incremental: start from an empty board, place one queen per step in the
  leftmost empty column
- Complete-state: start with one queen in every column, move one queen to
  another row of its column per step

Both share the same goal test: N queens on the board and no attacking pair.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

import jax.numpy as jnp

from .board import BoardConfig, Location, NQueensBoard
from .problem import Problem, StepCostFunction, uniform_step_cost


class ActionKind(Enum):
    PLACE = 'placeQueenAt'
    MOVE = 'moveQueenTo'


@dataclass(frozen=True)
class QueenAction:
    """
    Queen placement or move.

    Attributes:
        kind: PLACE (incremental) or MOVE (complete-state)
        location: Target square
    """
    kind: ActionKind
    location: Location

    def __str__(self) -> str:
        return f"Action[name={self.kind.value}, location=({self.location.col}, {self.location.row})]"


def place_queen(col: int, row: int) -> QueenAction:
    return QueenAction(ActionKind.PLACE, Location(col, row))


def move_queen(col: int, row: int) -> QueenAction:
    return QueenAction(ActionKind.MOVE, Location(col, row))


# =============================================================================
# Goal Test
# =============================================================================

def is_goal(state: NQueensBoard) -> bool:
    """N queens on the board and none of them attacked."""
    return state.queen_count() == state.size and state.attacking_pairs() == 0


# =============================================================================
# Incremental Formulation
# =============================================================================

def first_empty_column(state: NQueensBoard) -> Optional[int]:
    """Leftmost column without a queen, or None when every column is filled."""
    occupied = state.get_squares().any(axis=1)
    for col in range(state.size):
        if not occupied[col]:
            return col
    return None


def get_incremental_actions(state: NQueensBoard) -> List[QueenAction]:
    """One placement per row in the leftmost empty column."""
    col = first_empty_column(state)
    if col is None:
        return []
    return [place_queen(col, row) for row in range(state.size)]


def get_incremental_result(state: NQueensBoard, action: QueenAction) -> NQueensBoard:
    """New board with the placement applied."""
    if action.kind != ActionKind.PLACE:
        raise ValueError(f"Incremental formulation cannot apply {action}")
    col = action.location.col
    if 0 <= col < state.size and state.get_squares()[col].any():
        raise ValueError(f"Column {col} already holds a queen")
    result = state.copy()
    result.add_queen_at(action.location)
    return result


def create_incremental_formulation_problem(
    size: int,
    step_cost_fn: Optional[StepCostFunction] = None
) -> Problem:
    """
    Incremental N-Queens problem starting from an empty board.

    Args:
        size: Board dimension
        step_cost_fn: Optional custom step cost; uniform cost 1 when omitted

    Returns:
        Problem instance.
    """
    return Problem(
        NQueensBoard(size, BoardConfig.EMPTY),
        get_incremental_actions,
        get_incremental_result,
        is_goal,
        step_cost_fn or uniform_step_cost,
    )


# =============================================================================
# Complete-State Formulation
# =============================================================================

def get_complete_state_actions(state: NQueensBoard) -> List[QueenAction]:
    """One move per column and per row other than the column's current row."""
    squares = state.get_squares()
    return [
        move_queen(col, row)
        for col in range(state.size)
        for row in range(state.size)
        if not squares[col, row]
    ]


def get_complete_state_result(state: NQueensBoard, action: QueenAction) -> NQueensBoard:
    """New board with the column's queen moved to the action's row."""
    if action.kind != ActionKind.MOVE:
        raise ValueError(f"Complete-state formulation cannot apply {action}")
    result = state.copy()
    result.move_queen_to(action.location)
    return result


def create_complete_state_formulation_problem(
    size: int,
    config: BoardConfig = BoardConfig.QUEENS_IN_FIRST_ROW,
    key: Optional[jnp.ndarray] = None,
    step_cost_fn: Optional[StepCostFunction] = None
) -> Problem:
    """
    Complete-state N-Queens problem.

    Args:
        size: Board dimension
        config: Initialization policy; must place a queen in every column
        key: JAX random key for the random policies
        step_cost_fn: Optional custom step cost; uniform cost 1 when omitted

    Returns:
        Problem instance.
    """
    if config == BoardConfig.EMPTY:
        raise ValueError("Complete-state formulation requires a queen in every column")
    return complete_state_problem(NQueensBoard(size, config, key), step_cost_fn)


def complete_state_problem(
    initial_state: NQueensBoard,
    step_cost_fn: Optional[StepCostFunction] = None
) -> Problem:
    """Complete-state problem starting from a given one-queen-per-column board."""
    if not initial_state.has_queen_in_every_column():
        raise ValueError("Complete-state formulation requires exactly one queen per column")
    return Problem(
        initial_state.copy(),
        get_complete_state_actions,
        get_complete_state_result,
        is_goal,
        step_cost_fn or uniform_step_cost,
    )


# =============================================================================
# Heuristics
# =============================================================================

def attacking_pairs(state: NQueensBoard) -> int:
    return state.attacking_pairs()


def attacked_queen_count(state: NQueensBoard) -> int:
    return state.attacked_queen_count()


def max_aligned_minus_one(state: NQueensBoard) -> int:
    """
    At least run - 1 queens of the largest aligned group must still move.

    Boards without queens score 0.
    """
    return max(state.max_aligned_run() - 1, 0)


def zero_heuristic(state: NQueensBoard) -> int:
    return 0


HEURISTICS: Dict[str, Callable[[NQueensBoard], int]] = {
    'zero': zero_heuristic,
    'attacking_pairs': attacking_pairs,
    'attacked_queens': attacked_queen_count,
    'aligned': max_aligned_minus_one,
}


def get_heuristic(name: str) -> Callable[[NQueensBoard], int]:
    """
    Get heuristic function by name.

    Args:
        name: Heuristic name ('zero', 'attacking_pairs', 'attacked_queens', 'aligned')

    Returns:
        Heuristic function mapping a board to an integer estimate.
    """
    if name not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {name}. "
                         f"Valid options: {list(HEURISTICS.keys())}")
    return HEURISTICS[name]
