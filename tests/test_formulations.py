"""
Test suite for the N-Queens problem formulations.

Tests verify:
1. Incremental formulation (actions, result, goal)
2. Complete-state formulation
3. Step costs and heuristics
4. That a plain search over the Problem contract reaches a goal
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from collections import deque

import jax
import pytest

from statespace.board import BoardConfig, Location, NQueensBoard
from statespace.formulations import (
    ActionKind,
    QueenAction,
    complete_state_problem,
    create_complete_state_formulation_problem,
    create_incremental_formulation_problem,
    get_heuristic,
    is_goal,
    max_aligned_minus_one,
    move_queen,
    place_queen,
)
from statespace.problem import Problem


def breadth_first_goal(problem: Problem, limit: int = 100000):
    """Minimal graph search used only to exercise the Problem contract."""
    frontier = deque([problem.initial_state])
    explored = {problem.initial_state}
    while frontier and limit > 0:
        limit -= 1
        state = frontier.popleft()
        if problem.is_goal(state):
            return state
        for _, child in problem.successors(state):
            if child not in explored:
                explored.add(child)
                frontier.append(child)
    return None


# =============================================================================
# Incremental Formulation Tests
# =============================================================================

def test_incremental_initial_state_is_empty():
    problem = create_incremental_formulation_problem(4)
    assert problem.initial_state == NQueensBoard(4)
    assert not problem.is_goal(problem.initial_state)


def test_incremental_actions_fill_leftmost_column():
    problem = create_incremental_formulation_problem(4)
    actions = problem.actions(problem.initial_state)
    assert actions == [place_queen(0, r) for r in range(4)], "Branching factor should be N"

    state = problem.result(problem.initial_state, place_queen(0, 1))
    actions = problem.actions(state)
    assert len(actions) == 4
    assert all(a.kind == ActionKind.PLACE and a.location.col == 1 for a in actions)


def test_incremental_actions_use_first_empty_column():
    board = NQueensBoard(5)
    board.set_queens_at([Location(0, 0), Location(2, 4)])
    problem = create_incremental_formulation_problem(5)
    assert {a.location.col for a in problem.actions(board)} == {1}


def test_incremental_no_actions_on_full_board():
    problem = create_incremental_formulation_problem(4)
    assert problem.actions(NQueensBoard.from_rows([1, 3, 0, 2])) == []


def test_incremental_result_returns_new_board():
    problem = create_incremental_formulation_problem(4)
    initial = problem.initial_state
    child = problem.result(initial, place_queen(0, 2))
    assert child.queen_exists_at(Location(0, 2))
    assert initial.queen_count() == 0, "result must not mutate its input"


def test_incremental_result_rejects_filled_column():
    problem = create_incremental_formulation_problem(4)
    state = problem.result(problem.initial_state, place_queen(0, 0))
    with pytest.raises(ValueError):
        problem.result(state, place_queen(0, 3))
    with pytest.raises(ValueError):
        problem.result(state, move_queen(1, 3))


def test_goal_requires_all_queens():
    board = NQueensBoard(4)
    board.set_queens_at([Location(0, 1), Location(1, 3), Location(2, 0)])
    assert board.attacking_pairs() == 0
    assert not is_goal(board), "Three non-attacking queens on a 4x4 board are not a goal"
    board.add_queen_at(Location(3, 2))
    assert is_goal(board)


def test_incremental_search_finds_solution():
    problem = create_incremental_formulation_problem(5)
    solution = breadth_first_goal(problem)
    assert solution is not None
    assert solution.queen_count() == 5
    assert solution.attacking_pairs() == 0

    print("Incremental search test passed")


# =============================================================================
# Complete-State Formulation Tests
# =============================================================================

def test_complete_actions():
    problem = create_complete_state_formulation_problem(4, BoardConfig.QUEENS_IN_FIRST_ROW)
    actions = problem.actions(problem.initial_state)
    assert len(actions) == 4 * 3, "One move per column and per other row"
    assert all(a.kind == ActionKind.MOVE for a in actions)
    assert all(a.location.row != 0 for a in actions)


def test_complete_result_moves_queen():
    problem = create_complete_state_formulation_problem(4, BoardConfig.QUEENS_IN_FIRST_ROW)
    initial = problem.initial_state
    child = problem.result(initial, move_queen(2, 3))

    assert [r for r in range(4) if child.queen_exists_at(Location(2, r))] == [3]
    assert child.has_queen_in_every_column()
    assert initial == NQueensBoard(4, BoardConfig.QUEENS_IN_FIRST_ROW), "Initial state unchanged"
    with pytest.raises(ValueError):
        problem.result(initial, place_queen(2, 3))


def test_complete_random_policies():
    for config in (BoardConfig.QUEEN_IN_EVERY_COL, BoardConfig.QUEEN_IN_EVERY_COL_ROW):
        problem = create_complete_state_formulation_problem(6, config, jax.random.PRNGKey(1))
        assert problem.initial_state.has_queen_in_every_column()
        assert len(problem.actions(problem.initial_state)) == 6 * 5


def test_complete_requires_queen_in_every_column():
    with pytest.raises(ValueError):
        create_complete_state_formulation_problem(4, BoardConfig.EMPTY)

    board = NQueensBoard(4)
    board.set_queens_at([Location(0, 0), Location(1, 2), Location(3, 1)])
    with pytest.raises(ValueError):
        complete_state_problem(board)

    board.set_queens_at([Location(0, 0), Location(0, 1), Location(1, 2), Location(2, 0), Location(3, 1)])
    with pytest.raises(ValueError):
        complete_state_problem(board)


def test_complete_search_finds_solution():
    problem = create_complete_state_formulation_problem(4, BoardConfig.QUEENS_IN_FIRST_ROW)
    solution = breadth_first_goal(problem)
    assert solution is not None
    assert solution.attacking_pairs() == 0
    assert solution in {NQueensBoard.from_rows([1, 3, 0, 2]), NQueensBoard.from_rows([2, 0, 3, 1])}


# =============================================================================
# Step Cost Tests
# =============================================================================

def test_uniform_step_cost():
    problem = create_incremental_formulation_problem(4)
    action = place_queen(0, 0)
    child = problem.result(problem.initial_state, action)
    assert problem.step_cost(problem.initial_state, action, child) == 1.0


def test_custom_step_cost():
    def row_cost(state, action, next_state):
        return 1.0 + action.location.row

    problem = create_complete_state_formulation_problem(
        4, BoardConfig.QUEENS_IN_FIRST_ROW, step_cost_fn=row_cost
    )
    action = move_queen(1, 3)
    child = problem.result(problem.initial_state, action)
    assert problem.step_cost(problem.initial_state, action, child) == 4.0
    assert len(problem.actions(problem.initial_state)) == 12, "Other semantics unchanged"


# =============================================================================
# Heuristic Tests
# =============================================================================

def test_heuristics():
    board = NQueensBoard.from_rows([0, 0, 0, 0])
    assert get_heuristic('attacking_pairs')(board) == 6
    assert get_heuristic('attacked_queens')(board) == 4
    assert get_heuristic('aligned')(board) == 3
    assert get_heuristic('zero')(board) == 0

    solution = NQueensBoard.from_rows([1, 3, 0, 2])
    for name in ('attacking_pairs', 'attacked_queens', 'aligned'):
        assert get_heuristic(name)(solution) == 0, f"{name} should be 0 on a solution"


def test_aligned_heuristic_on_empty_board():
    assert max_aligned_minus_one(NQueensBoard(4)) == 0


def test_unknown_heuristic():
    with pytest.raises(ValueError):
        get_heuristic('manhattan')


def test_action_rendering():
    action = QueenAction(ActionKind.MOVE, Location(2, 5))
    assert str(action) == "Action[name=moveQueenTo, location=(2, 5)]"
    assert action == move_queen(2, 5)
    assert hash(action) == hash(move_queen(2, 5))
