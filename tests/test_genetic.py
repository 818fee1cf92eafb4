"""
Test suite for the permutation encoding used by genetic search.

Tests verify:
1. Fitness functions on known individuals
2. Board <-> individual conversions
3. Random individuals and vectorised population fitness
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import jax
import numpy as np
import pytest

from statespace.board import BoardConfig, Location, NQueensBoard
from statespace.genetic import (
    Individual,
    board_from_individual,
    finite_alphabet,
    generate_random_individual,
    individual_from_board,
    is_goal,
    non_attacking_pairs_fitness,
    not_attacked_fitness,
    population_fitness,
    population_not_attacked_fitness,
    queen_locations,
    random_population,
)
from statespace.utils import attacked_queens_jit, max_non_attacking_pairs


# =============================================================================
# Fitness Tests
# =============================================================================

def test_non_attacking_pairs_fitness():
    assert non_attacking_pairs_fitness(Individual((1, 3, 0, 2))) == 6.0, "Solution scores N(N-1)/2"
    assert non_attacking_pairs_fitness(Individual((0, 1, 2, 3))) == 0.0
    assert non_attacking_pairs_fitness(Individual((0, 0, 0, 0))) == 0.0
    assert non_attacking_pairs_fitness(Individual((1, 3, 0, 0))) == 5.0


def test_fitness_matches_board_attacks():
    """Fitness is the pair count minus the board's attacking pairs."""
    for seed in range(10):
        key = jax.random.PRNGKey(seed)
        board = NQueensBoard(7, BoardConfig.QUEEN_IN_EVERY_COL, key)
        individual = individual_from_board(board)
        expected = max_non_attacking_pairs(7) - board.attacking_pairs()
        assert non_attacking_pairs_fitness(individual) == expected, f"Mismatch for seed {seed}"

    print("Fitness consistency test passed")


def test_not_attacked_fitness():
    assert not_attacked_fitness(Individual((1, 3, 0, 2))) == 4.0
    assert not_attacked_fitness(Individual((0, 1, 2, 3))) == 0.0
    assert not_attacked_fitness(Individual((1, 3, 0, 0))) == 2.0, "Queens sharing a row are attacked"


def test_not_attacked_matches_board():
    for seed in range(10):
        board = NQueensBoard(6, BoardConfig.QUEEN_IN_EVERY_COL, jax.random.PRNGKey(seed))
        individual = individual_from_board(board)
        assert not_attacked_fitness(individual) == 6 - board.attacked_queen_count()
        assert int(attacked_queens_jit(np.array(individual.representation))) == board.attacked_queen_count()


def test_goal_test():
    assert is_goal(Individual((1, 3, 0, 2)))
    assert is_goal(Individual((2, 0, 3, 1)))
    assert not is_goal(Individual((0, 1, 2, 3)))
    assert not is_goal(Individual((0, 2, 0, 2)))


# =============================================================================
# Conversion Tests
# =============================================================================

def test_board_from_individual():
    board = board_from_individual(Individual((1, 3, 0, 2)))
    assert board.queen_positions() == [Location(0, 1), Location(1, 3), Location(2, 0), Location(3, 2)]
    assert queen_locations(Individual((1, 3, 0, 2))) == board.queen_positions()


def test_round_trip_from_board():
    for seed in range(10):
        key = jax.random.PRNGKey(seed)
        for config in (BoardConfig.QUEEN_IN_EVERY_COL, BoardConfig.QUEEN_IN_EVERY_COL_ROW):
            board = NQueensBoard(8, config, key)
            assert board_from_individual(individual_from_board(board)) == board

    board = NQueensBoard(5, BoardConfig.QUEENS_IN_FIRST_ROW)
    assert board_from_individual(individual_from_board(board)) == board


def test_round_trip_from_individual():
    individual = Individual((4, 0, 3, 3, 1))
    assert individual_from_board(board_from_individual(individual)) == individual


def test_individual_from_invalid_board():
    board = NQueensBoard(4)
    board.set_queens_at([Location(0, 0), Location(1, 2)])
    with pytest.raises(ValueError):
        individual_from_board(board)

    board = NQueensBoard(4, BoardConfig.QUEENS_IN_FIRST_ROW)
    board.add_queen_at(Location(2, 3))
    with pytest.raises(ValueError):
        individual_from_board(board)


def test_invalid_individual():
    with pytest.raises(ValueError):
        Individual((0, 4, 1, 2))
    with pytest.raises(ValueError):
        Individual((-1, 0))


def test_individual_value_semantics():
    ind = Individual([2, 0, 1])
    assert ind == Individual((2, 0, 1))
    assert len(ind) == 3
    assert list(ind) == [2, 0, 1]
    assert ind[0] == 2
    assert len({ind, Individual((2, 0, 1))}) == 1


# =============================================================================
# Random Individual Tests
# =============================================================================

def test_generate_random_individual_is_permutation():
    for seed in range(10):
        individual = generate_random_individual(jax.random.PRNGKey(seed), 8)
        assert sorted(individual.representation) == list(range(8))

    key = jax.random.PRNGKey(5)
    assert generate_random_individual(key, 8) == generate_random_individual(key, 8)


def test_random_population():
    population = random_population(jax.random.PRNGKey(0), 6, 20)
    assert len(population) == 20
    assert all(len(ind) == 6 for ind in population)
    assert random_population(jax.random.PRNGKey(0), 6, 0) == []


def test_population_fitness_matches_scalar():
    population = random_population(jax.random.PRNGKey(11), 8, 30)
    population.append(Individual((0, 0, 0, 0, 0, 0, 0, 0)))
    fitnesses = population_fitness(population)

    assert fitnesses.shape == (31,)
    for individual, fitness in zip(population, fitnesses):
        assert fitness == non_attacking_pairs_fitness(individual)

    print("Population fitness test passed")


def test_finite_alphabet():
    assert finite_alphabet(4) == [0, 1, 2, 3]
    assert finite_alphabet(0) == []


def test_population_not_attacked_fitness():
    population = random_population(jax.random.PRNGKey(3), 7, 15)
    fitnesses = population_not_attacked_fitness(population)
    assert fitnesses.shape == (15,)
    for individual, fitness in zip(population, fitnesses):
        assert fitness == not_attacked_fitness(individual)
    assert len(population_not_attacked_fitness([])) == 0
