"""
Test suite for configuration loading and result saving.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json

import matplotlib
matplotlib.use('Agg')

import jax
import numpy as np

from statespace.board import NQueensBoard
from statespace.config import Config
from statespace.genetic import population_fitness, random_population
from statespace.visualize import find_attacking_pairs, save_run_results


# =============================================================================
# Configuration Tests
# =============================================================================

def test_default_config_is_valid():
    config = Config()
    assert config.validate() == []
    assert config.sizes == [8]


def test_from_dict_single_size():
    config = Config.from_dict({'size': 6, 'mode': 'genetic', 'population_size': 10})
    assert config.sizes == [6]
    assert config.mode == 'genetic'
    assert config.population_size == 10
    assert config.validate() == []


def test_to_dict_round_trip():
    config = Config(sizes=[4, 5], seed=3, mode='random_walk', max_attempts=50)
    assert Config.from_dict(config.to_dict()) == config


def test_validate_reports_errors():
    config = Config(sizes=[0], mode='annealing', formulation='reverse',
                    heuristic='manhattan', population_size=0)
    errors = config.validate()
    assert len(errors) == 5, f"Expected 5 errors, got {errors}"


def test_complete_formulation_rejects_empty_policy():
    config = Config(formulation='complete', initial_config='empty')
    assert len(config.validate()) == 1
    config.formulation = 'incremental'
    assert config.validate() == []


def test_from_yaml(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("sizes: [4, 6]\nseed: 9\nmode: evaluate\nheuristic: aligned\n")
    config = Config.from_yaml(str(path))
    assert config.sizes == [4, 6]
    assert config.seed == 9
    assert config.heuristic == 'aligned'

    empty = tmp_path / 'empty.yaml'
    empty.write_text("")
    assert Config.from_yaml(str(empty)) == Config()


# =============================================================================
# Saving Tests
# =============================================================================

def test_find_attacking_pairs():
    board = NQueensBoard.from_rows([1, 3, 0, 0])
    pairs = find_attacking_pairs(board.queen_positions())
    assert pairs == [(2, 3)]


def test_save_run_results(tmp_path):
    board = NQueensBoard.from_rows([1, 3, 0, 2])
    metadata = {'board_size': 4, 'seed': 1, 'mode': 'evaluate', 'heuristic_value': np.int64(0)}
    saved = save_run_results(str(tmp_path), board, metadata, save_plots=False)

    with open(saved['solution']) as f:
        assert f.read() == str(board)
    with open(saved['metadata']) as f:
        data = json.load(f)
    assert data['attacking_pairs'] == 0
    assert data['queens'] == [[0, 1], [1, 3], [2, 0], [3, 2]]
    assert data['heuristic_value'] == 0.0
    assert 'board_plot' not in saved


def test_save_run_results_with_plots(tmp_path):
    population = random_population(jax.random.PRNGKey(0), 5, 12)
    fitnesses = population_fitness(population)
    board = NQueensBoard.from_rows([0, 0, 1, 4, 2])
    saved = save_run_results(str(tmp_path), board, {'board_size': 5, 'seed': 0, 'mode': 'genetic'},
                             fitnesses=fitnesses, save_plots=True)
    assert os.path.exists(saved['board_plot'])
    assert os.path.exists(saved['fitness_plot'])
