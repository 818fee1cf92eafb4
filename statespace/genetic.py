"""
Permutation encoding and fitness functions for genetic search.

An individual is a sequence of N row indices: position i is the column,
the value at position i the row of that column's queen. Every individual
therefore decodes to a board with exactly one queen per column.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from .board import Location, NQueensBoard
from .formulations import is_goal as board_is_goal
from .utils import population_attacked_queens, population_non_attacking_pairs


@dataclass(frozen=True)
class Individual:
    """
    Permutation-style encoding of a one-queen-per-column board.

    Attributes:
        representation: Row of the queen in each column
    """
    representation: Tuple[int, ...]

    def __post_init__(self):
        rep = tuple(int(v) for v in self.representation)
        n = len(rep)
        for value in rep:
            if not 0 <= value < n:
                raise ValueError(f"Row value {value} outside [0, {n}) for individual {rep}")
        object.__setattr__(self, 'representation', rep)

    def __len__(self) -> int:
        return len(self.representation)

    def __iter__(self):
        return iter(self.representation)

    def __getitem__(self, index: int) -> int:
        return self.representation[index]


# =============================================================================
# Conversions
# =============================================================================

def board_from_individual(individual: Individual) -> NQueensBoard:
    """Board with the queen of column i at row individual[i]."""
    return NQueensBoard.from_rows(individual.representation)


def individual_from_board(board: NQueensBoard) -> Individual:
    """
    Encode a one-queen-per-column board.

    Raises:
        ValueError: If some column holds zero or several queens.
    """
    if not board.has_queen_in_every_column():
        raise ValueError("Only boards with exactly one queen per column can be encoded")
    rows = np.argmax(board.get_squares(), axis=1)
    return Individual(tuple(int(r) for r in rows))


# =============================================================================
# Fitness Functions
# =============================================================================

def _attacks(col_a: int, row_a: int, col_b: int, row_b: int) -> bool:
    # same row, down-diagonal or up-diagonal
    return (row_a == row_b
            or col_a - row_a == col_b - row_b
            or col_a + row_a == col_b + row_b)


def non_attacking_pairs_fitness(individual: Individual) -> float:
    """
    Number of non-attacking queen pairs.

    Ranges over [0, N(N-1)/2]; the maximum is reached exactly by solutions.
    """
    rows = individual.representation
    n = len(rows)
    fitness = 0.0
    for i in range(n - 1):
        for j in range(i + 1, n):
            if not _attacks(i, rows[i], j, rows[j]):
                fitness += 1.0
    return fitness


def not_attacked_fitness(individual: Individual) -> float:
    """N minus the number of queens attacked by at least one other queen."""
    rows = individual.representation
    n = len(rows)
    attacked = sum(
        1 for i in range(n)
        if any(_attacks(i, rows[i], j, rows[j]) for j in range(n) if j != i)
    )
    return float(n - attacked)


def is_goal(individual: Individual) -> bool:
    """True iff the decoded board has no attacking pair."""
    return board_is_goal(board_from_individual(individual))


def population_fitness(population: Iterable[Individual]) -> np.ndarray:
    """
    Non-attacking-pairs fitness of every individual (vectorised).

    All individuals must share the same length.
    """
    rows = _population_rows(population)
    if rows.size == 0:
        return np.zeros(rows.shape[0], dtype=np.float32)
    return np.asarray(population_non_attacking_pairs(rows), dtype=np.float32)


def population_not_attacked_fitness(population: Iterable[Individual]) -> np.ndarray:
    """Not-attacked fitness of every individual (vectorised)."""
    rows = _population_rows(population)
    if rows.size == 0:
        return np.zeros(rows.shape[0], dtype=np.float32)
    attacked = np.asarray(population_attacked_queens(rows))
    return (rows.shape[1] - attacked).astype(np.float32)


def _population_rows(population: Iterable[Individual]) -> jnp.ndarray:
    return jnp.array([ind.representation for ind in population], dtype=jnp.int32)


# =============================================================================
# Random Individuals
# =============================================================================

def generate_random_individual(key: jnp.ndarray, board_size: int) -> Individual:
    """Uniformly shuffled permutation of the rows 0..N-1."""
    rows = jax.random.permutation(key, board_size)
    return Individual(tuple(int(r) for r in np.asarray(rows)))


def random_population(key: jnp.ndarray, board_size: int, count: int) -> List[Individual]:
    """``count`` random permutation individuals drawn from independent subkeys."""
    if count <= 0:
        return []
    keys = jax.random.split(key, count)
    return [generate_random_individual(k, board_size) for k in keys]


def finite_alphabet(board_size: int) -> List[int]:
    """Value domain of every position: {0, ..., N-1}."""
    return list(range(board_size))


def queen_locations(individual: Individual) -> List[Location]:
    return [Location(col, row) for col, row in enumerate(individual.representation)]
