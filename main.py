"""
Main entry point for the N-Queens state-space demo.

This script wires a problem formulation, a heuristic or fitness function
and an initialization policy together and reports what a search
algorithm would see: initial states, branching factors, heuristic values
and goal status.

Usage:
    python main.py --config config.yaml
    python main.py --size 8 --mode random_walk
    python main.py --size 8 --mode genetic --population-size 200 --save
    python main.py --mode eightpuzzle --scramble-moves 40
"""

import argparse
import sys
import time
from typing import Dict

import jax
import numpy as np

from statespace.board import BoardConfig, NQueensBoard, get_board_config
from statespace.config import Config
from statespace.eightpuzzle import (
    create_bidirectional_eight_puzzle_problem,
    manhattan_heuristic,
    misplaced_tile_heuristic,
    random_board,
)
from statespace.formulations import (
    create_complete_state_formulation_problem,
    create_incremental_formulation_problem,
    get_heuristic,
)
from statespace.genetic import (
    board_from_individual,
    is_goal,
    population_fitness,
    random_population,
)
from statespace.utils import check_solvability, max_non_attacking_pairs
from statespace.visualize import save_run_results, visualize_board, plot_fitness_distribution


# =============================================================================
# Runner Classes
# =============================================================================

class DemoRunner:
    """
    Orchestrates demo execution based on configuration.
    """

    def __init__(self, config: Config, verbose: bool = True):
        """
        Initialize runner with configuration.

        Args:
            config: Configuration instance
            verbose: Whether to print progress
        """
        self.config = config
        self.verbose = verbose

    def run_evaluate(self, size: int, key) -> Dict:
        """
        Build the configured formulation and score its initial state.

        Args:
            size: Board dimension N
            key: JAX random key for random initialization policies

        Returns:
            Dictionary with the initial board and its evaluation
        """
        if self.config.formulation == 'incremental':
            problem = create_incremental_formulation_problem(size)
        else:
            policy = get_board_config(self.config.initial_config)
            problem = create_complete_state_formulation_problem(size, policy, key)

        heuristic = get_heuristic(self.config.heuristic)
        board = problem.initial_state
        actions = problem.actions(board)

        result = {
            'board': board,
            'branching_factor': len(actions),
            'heuristic': heuristic(board),
            'attacking_pairs': board.attacking_pairs(),
            'is_goal': problem.is_goal(board),
        }

        if self.verbose:
            print(f"Formulation: {self.config.formulation}")
            print(f"Initial state:\n{board}")
            print(f"Branching factor: {result['branching_factor']}")
            print(f"Heuristic ({self.config.heuristic}): {result['heuristic']}")
            print(f"Attacking pairs: {result['attacking_pairs']}")
            print(f"Is goal: {result['is_goal']}")
            if actions:
                best_action = min(actions, key=lambda a: heuristic(problem.result(board, a)))
                print(f"Best first action: {best_action}")
        return result

    def run_random_walk(self, size: int, key) -> Dict:
        """
        Generate random one-queen-per-column boards until one is a solution.

        Args:
            size: Board dimension N
            key: JAX random key

        Returns:
            Dictionary with the last board and attempt count
        """
        start_time = time.time()
        board = None
        attempts = 0
        for attempts, subkey in enumerate(jax.random.split(key, self.config.max_attempts), start=1):
            board = NQueensBoard(size, BoardConfig.QUEEN_IN_EVERY_COL, subkey)
            if board.attacking_pairs() == 0:
                break
        elapsed = time.time() - start_time
        solved = board.attacking_pairs() == 0

        if self.verbose:
            if solved:
                print(f"Solution found after generating {attempts} random configurations "
                      f"({elapsed * 1000:.0f} ms).")
            else:
                print(f"No solution in {attempts} random configurations ({elapsed:.1f}s).")
            print(board)
        return {'board': board, 'attempts': attempts, 'is_goal': solved, 'elapsed': elapsed}

    def run_genetic(self, size: int, key) -> Dict:
        """
        Score a random permutation population.

        Args:
            size: Board dimension N
            key: JAX random key

        Returns:
            Dictionary with the best individual's board and fitness statistics
        """
        population = random_population(key, size, self.config.population_size)
        fitnesses = population_fitness(population)
        best_idx = int(np.argmax(fitnesses))
        best = population[best_idx]

        result = {
            'board': board_from_individual(best),
            'individual': list(best.representation),
            'fitnesses': fitnesses,
            'best_fitness': float(fitnesses[best_idx]),
            'avg_fitness': float(np.mean(fitnesses)),
            'is_goal': is_goal(best),
        }

        if self.verbose:
            print(f"Best Individual:\n{result['board']}")
            print(f"Board Size      = {size}")
            print(f"# Board Layouts = {size ** size}")
            print(f"Fitness         = {result['best_fitness']:.0f} / {max_non_attacking_pairs(size)}")
            print(f"Avg Fitness     = {result['avg_fitness']:.2f}")
            print(f"Is Goal         = {result['is_goal']}")
            print(f"Population Size = {len(population)}")
        return result

    def run_eightpuzzle(self, key) -> Dict:
        """
        Scramble the eight-puzzle and build its bidirectional problem.

        Args:
            key: JAX random key

        Returns:
            Dictionary with both directions' initial states
        """
        initial = random_board(key, self.config.scramble_moves)
        bidirectional = create_bidirectional_eight_puzzle_problem(initial)
        forward, backward = bidirectional.original(), bidirectional.reverse()

        result = {
            'initial': forward.initial_state,
            'goal': backward.initial_state,
            'manhattan': manhattan_heuristic(forward.initial_state),
            'misplaced': misplaced_tile_heuristic(forward.initial_state),
            'is_goal': forward.is_goal(forward.initial_state),
        }

        if self.verbose:
            print(f"Forward initial state:\n{forward.initial_state}")
            print(f"Reverse initial state:\n{backward.initial_state}")
            print(f"Forward actions: {[a.value for a in forward.actions(forward.initial_state)]}")
            print(f"Reverse actions: {[a.value for a in backward.actions(backward.initial_state)]}")
            print(f"Manhattan distance: {result['manhattan']}")
            print(f"Misplaced tiles: {result['misplaced']}")
        return result

    def run(self) -> dict:
        """
        Execute the demo based on configuration.

        Returns:
            Dictionary with results for each board size
        """
        all_results = {}
        key = jax.random.PRNGKey(self.config.seed)

        if self.config.mode == 'eightpuzzle':
            if self.verbose:
                print(f"\n{'#'*60}")
                print("# Eight-Puzzle")
                print(f"{'#'*60}")
            all_results[3] = self.run_eightpuzzle(key)
            return all_results

        for size in self.config.sizes:
            key, subkey = jax.random.split(key)
            if self.verbose:
                print(f"\n{'#'*60}")
                print(f"# Board Size N = {size}")
                print(f"{'#'*60}")
                self._print_solvability(check_solvability(size))

            if self.config.mode == 'evaluate':
                all_results[size] = self.run_evaluate(size, subkey)
            elif self.config.mode == 'random_walk':
                all_results[size] = self.run_random_walk(size, subkey)
            else:
                all_results[size] = self.run_genetic(size, subkey)

        return all_results

    def _print_solvability(self, info: dict) -> None:
        """Print solvability information."""
        print(f"\nSolvability Check for N={info['N']}:")
        print(f"  Queens: {info['queens']}, Cells: {info['cells']}")
        print(f"  Layouts: {info['layouts']:,}, Permutations: {info['permutations']:,}")
        if info['solvable']:
            print(f"  ✓ SOLVABLE: A non-attacking placement exists")
        else:
            print(f"  ✗ UNSOLVABLE: No non-attacking placement for N={info['N']}")
        print()


# =============================================================================
# CLI Interface
# =============================================================================

def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='N-Queens state-space demo',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Config file
    parser.add_argument(
        '--config', '-c',
        type=str,
        default='config.yaml',
        help='Path to YAML configuration file'
    )

    # Override options
    parser.add_argument(
        '--size', '-n',
        type=int,
        nargs='+',
        help='Board size(s) N (overrides config)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed (overrides config)'
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['evaluate', 'random_walk', 'genetic', 'eightpuzzle'],
        help='Demo mode (overrides config)'
    )

    parser.add_argument(
        '--formulation',
        type=str,
        choices=['incremental', 'complete'],
        help='Problem formulation for evaluate mode (overrides config)'
    )

    parser.add_argument(
        '--initial-config',
        type=str,
        choices=[c.value for c in BoardConfig],
        help='Initialization policy for the complete formulation (overrides config)'
    )

    parser.add_argument(
        '--heuristic',
        type=str,
        choices=['zero', 'attacking_pairs', 'attacked_queens', 'aligned'],
        help='Heuristic for evaluate mode (overrides config)'
    )

    parser.add_argument(
        '--max-attempts',
        type=int,
        help='Board generations allowed in random_walk mode (overrides config)'
    )

    parser.add_argument(
        '--population-size',
        type=int,
        help='Population size in genetic mode (overrides config)'
    )

    parser.add_argument(
        '--scramble-moves',
        type=int,
        help='Random gap moves in eightpuzzle mode (overrides config)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only print the final summary'
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help='Save results (plots and data)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Output directory for saved results'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Show plots interactively'
    )

    return parser.parse_args()


def load_config_with_overrides(args: argparse.Namespace) -> Config:
    """
    Load configuration from file and apply CLI overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        Configuration with overrides applied
    """
    try:
        config = Config.from_yaml(args.config)
    except FileNotFoundError:
        print(f"Warning: Config file '{args.config}' not found, using defaults")
        config = Config()
    except Exception as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    # Apply CLI overrides
    if args.size:
        config.sizes = args.size
    if args.seed is not None:
        config.seed = args.seed
    if args.mode:
        config.mode = args.mode
    if args.formulation:
        config.formulation = args.formulation
    if args.initial_config:
        config.initial_config = args.initial_config
    if args.heuristic:
        config.heuristic = args.heuristic
    if args.max_attempts:
        config.max_attempts = args.max_attempts
    if args.population_size:
        config.population_size = args.population_size
    if args.scramble_moves is not None:
        config.scramble_moves = args.scramble_moves
    if args.save:
        config.save = True
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.show:
        config.show = True

    return config


def main():
    """Main entry point."""
    args = parse_args()

    # Load configuration
    config = load_config_with_overrides(args)

    # Validate
    errors = config.validate()
    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    # Print configuration
    config.print_summary()

    # Run demo
    runner = DemoRunner(config, verbose=not args.quiet)
    results = runner.run()

    # Final summary
    print(f"\n{'#'*60}")
    print("# Final Results")
    print(f"{'#'*60}")

    for size, result in results.items():
        status = "✓ GOAL" if result['is_goal'] else "not a goal"
        if config.mode == 'evaluate':
            print(f"N={size}: h={result['heuristic']}, "
                  f"branching={result['branching_factor']}, {status}")
        elif config.mode == 'random_walk':
            print(f"N={size}: {result['attempts']} attempts, {status}")
        elif config.mode == 'genetic':
            print(f"N={size}: Best={result['best_fitness']:.0f}, "
                  f"Avg={result['avg_fitness']:.2f}, {status}")
        else:
            print(f"Eight-puzzle: manhattan={result['manhattan']}, "
                  f"misplaced={result['misplaced']}, {status}")

    if config.mode == 'eightpuzzle' or not (config.save or config.show):
        print()
        return

    print(f"\n{'#'*60}")
    print("# Saving Results")
    print(f"{'#'*60}")

    for size, result in results.items():
        metadata = {
            'board_size': size,
            'seed': config.seed,
            'mode': config.mode,
        }
        if config.mode == 'evaluate':
            metadata.update(formulation=config.formulation,
                            initial_config=config.initial_config,
                            heuristic=config.heuristic,
                            heuristic_value=result['heuristic'],
                            branching_factor=result['branching_factor'])
        elif config.mode == 'random_walk':
            metadata['attempts'] = result['attempts']
        else:
            metadata.update(population_size=config.population_size,
                            individual=result['individual'],
                            best_fitness=result['best_fitness'],
                            avg_fitness=result['avg_fitness'])

        fitnesses = result.get('fitnesses')
        if config.save:
            saved = save_run_results(
                config.output_dir, result['board'], metadata,
                fitnesses=fitnesses, save_plots=True
            )
            print(f"N={size}: Saved to {saved['run_folder']}/")

        if config.show:
            visualize_board(result['board'], show=True, metadata=metadata)
            if fitnesses is not None:
                plot_fitness_distribution(fitnesses, size, show=True, metadata=metadata)

    print()


if __name__ == "__main__":
    main()
