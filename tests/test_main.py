"""
Test suite for the demo driver.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


from main import DemoRunner
from statespace.config import Config
from statespace.eightpuzzle import GOAL_STATE
from statespace.utils import max_non_attacking_pairs


def test_evaluate_complete():
    config = Config(sizes=[4], formulation='complete', initial_config='queens_in_first_row')
    results = DemoRunner(config, verbose=False).run()
    assert results[4]['branching_factor'] == 12
    assert results[4]['heuristic'] == 6
    assert not results[4]['is_goal']


def test_evaluate_incremental():
    config = Config(sizes=[5, 6], formulation='incremental', heuristic='aligned')
    results = DemoRunner(config, verbose=False).run()
    assert results[5]['branching_factor'] == 5
    assert results[6]['branching_factor'] == 6
    assert results[6]['heuristic'] == 0


def test_random_walk():
    config = Config(sizes=[4], mode='random_walk', max_attempts=3000)
    result = DemoRunner(config, verbose=False).run()[4]
    assert 1 <= result['attempts'] <= 3000
    assert result['is_goal'] == (result['board'].attacking_pairs() == 0)


def test_genetic():
    config = Config(sizes=[6], mode='genetic', population_size=25)
    result = DemoRunner(config, verbose=False).run()[6]
    assert len(result['fitnesses']) == 25
    assert result['best_fitness'] <= max_non_attacking_pairs(6)
    assert result['best_fitness'] >= result['avg_fitness']
    assert result['board'].has_queen_in_every_column()


def test_eightpuzzle():
    config = Config(mode='eightpuzzle', scramble_moves=10)
    result = DemoRunner(config, verbose=False).run()[3]
    assert result['goal'] == GOAL_STATE
    assert result['manhattan'] >= result['misplaced']


def test_runs_are_reproducible():
    config = Config(sizes=[6], mode='genetic', population_size=10, seed=123)
    first = DemoRunner(config, verbose=False).run()[6]
    second = DemoRunner(config, verbose=False).run()[6]
    assert first['individual'] == second['individual']
