"""
N-Queens / Eight-Puzzle State-Space Package

This package provides state representations, successor generation, goal
predicates and fitness signals for combinatorial search problems. Search
algorithms themselves live outside the package and consume problems
through one uniform contract.

Modules:
    - interfaces: Abstract base classes for boards and bidirectional problems
    - board: N-Queens board state and conflict analysis
    - problem: Problem record and bidirectional adapter
    - formulations: Incremental and complete-state N-Queens formulations
    - genetic: Permutation encoding and fitness functions
    - eightpuzzle: Eight-puzzle board and bidirectional problem
    - utils: Attack checks, JIT kernels and solvability info
    - config: Configuration management
    - visualize: Board and fitness plots, result saving
"""

from .interfaces import BoardInterface, BidirectionalProblemInterface
from .board import Location, BoardConfig, NQueensBoard, get_board_config
from .problem import Problem, BidirectionalProblem, uniform_step_cost
from .formulations import (
    ActionKind,
    QueenAction,
    create_incremental_formulation_problem,
    create_complete_state_formulation_problem,
    complete_state_problem,
    get_heuristic,
)
from .genetic import (
    Individual,
    board_from_individual,
    individual_from_board,
    non_attacking_pairs_fitness,
    not_attacked_fitness,
    generate_random_individual,
    finite_alphabet,
)
from .eightpuzzle import (
    EightPuzzleAction,
    EightPuzzleBoard,
    create_bidirectional_eight_puzzle_problem,
)
from .config import Config

__all__ = [
    'BoardInterface',
    'BidirectionalProblemInterface',
    'Location',
    'BoardConfig',
    'NQueensBoard',
    'get_board_config',
    'Problem',
    'BidirectionalProblem',
    'uniform_step_cost',
    'ActionKind',
    'QueenAction',
    'create_incremental_formulation_problem',
    'create_complete_state_formulation_problem',
    'complete_state_problem',
    'get_heuristic',
    'Individual',
    'board_from_individual',
    'individual_from_board',
    'non_attacking_pairs_fitness',
    'not_attacked_fitness',
    'generate_random_individual',
    'finite_alphabet',
    'EightPuzzleAction',
    'EightPuzzleBoard',
    'create_bidirectional_eight_puzzle_problem',
    'Config',
]
