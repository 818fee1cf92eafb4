"""
Visualization functions for the N-Queens state-space demo.

This module provides:
- 2D board visualization with attacked queens and attack lines
- Fitness distribution plots for genetic populations
- Save functionality with metadata in timestamped run folders
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import NQueensBoard
from .utils import check_attack_python, check_solvability, max_non_attacking_pairs


def find_attacking_pairs(queens: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """Index pairs (i, j), i < j, of queens that attack each other."""
    pairs = []
    for i in range(len(queens)):
        for j in range(i + 1, len(queens)):
            if check_attack_python(queens[i], queens[j]):
                pairs.append((i, j))
    return pairs


def draw_board_grid(ax, N: int) -> None:
    """Draw a checkered N×N board."""
    colors = np.indices((N, N)).sum(axis=0) % 2
    ax.imshow(colors, cmap='Greys', alpha=0.15, extent=(0, N, N, 0))
    for i in range(N + 1):
        ax.plot([i, i], [0, N], color='gray', linewidth=0.5, alpha=0.5)
        ax.plot([0, N], [i, i], color='gray', linewidth=0.5, alpha=0.5)


def draw_attack_lines(ax, queens: Sequence[Tuple[int, int]], attacking_pairs: List[Tuple[int, int]]) -> None:
    """Draw lines between attacking queen pairs."""
    for i, j in attacking_pairs:
        q1, q2 = queens[i], queens[j]
        ax.plot(
            [q1[0] + 0.5, q2[0] + 0.5],
            [q1[1] + 0.5, q2[1] + 0.5],
            color='red', linewidth=0.8, alpha=0.4, linestyle='--'
        )


def visualize_board(
    board: NQueensBoard,
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Create 2D visualization of queen positions.

    Features:
    - Checkered board with cell grid
    - Green markers: Safe queens (not attacked)
    - Red markers: Attacked queens
    - Attack lines between conflicting queens

    Args:
        board: NQueensBoard to draw
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    N = board.size
    queens = board.queen_positions()
    pairs = find_attacking_pairs(queens)

    attacked = {i for pair in pairs for i in pair}
    safe = np.array([q for i, q in enumerate(queens) if i not in attacked]).reshape(-1, 2)
    danger = np.array([q for i, q in enumerate(queens) if i in attacked]).reshape(-1, 2)

    fig, ax = plt.subplots(figsize=(8, 8))
    draw_board_grid(ax, N)

    # Attack lines get cluttered quickly
    if len(pairs) <= 50:
        draw_attack_lines(ax, queens, pairs)

    marker_size = max(40, min(600, 4000 / max(N, 1)))

    if len(safe) > 0:
        ax.scatter(safe[:, 0] + 0.5, safe[:, 1] + 0.5, s=marker_size, c='limegreen',
                   marker='o', edgecolors='darkgreen', linewidths=1.5,
                   label=f'Safe Queens ({len(safe)})')
    if len(danger) > 0:
        ax.scatter(danger[:, 0] + 0.5, danger[:, 1] + 0.5, s=marker_size, c='tomato',
                   marker='o', edgecolors='darkred', linewidths=1.5,
                   label=f'Attacked Queens ({len(danger)})')

    ax.set_xlim(0, N)
    ax.set_ylim(N, 0)
    ax.set_aspect('equal')
    ax.set_xlabel('Column', fontsize=12, fontweight='bold')
    ax.set_ylabel('Row', fontsize=12, fontweight='bold')

    status = "SOLVED!" if len(pairs) == 0 and len(queens) == N else f"{len(pairs)} attacking pairs"
    title = f'N-Queens: {N}×{N} Board\n{len(queens)} Queens | {status}'
    if metadata and 'mode' in metadata:
        title += f" | mode={metadata['mode']}"
    ax.set_title(title, fontsize=13, fontweight='bold')
    if len(queens) > 0:
        ax.legend(loc='upper right', fontsize=9)

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        if not show:
            plt.close(fig)
        return filename

    if show:
        plt.show()

    return None


def plot_fitness_distribution(
    fitnesses: np.ndarray,
    board_size: int,
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Plot the fitness histogram of a genetic population.

    Args:
        fitnesses: Array of non-attacking-pairs fitness values
        board_size: Board dimension N
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    best_possible = max_non_attacking_pairs(board_size)

    plt.figure(figsize=(12, 7))
    bins = np.arange(0, best_possible + 2) - 0.5
    plt.hist(fitnesses, bins=bins, color='steelblue', alpha=0.8, edgecolor='black')
    plt.axvline(best_possible, color='green', linestyle='--', linewidth=1.5, label='Solution')

    plt.xlabel('Non-attacking pairs', fontsize=12)
    plt.ylabel('Individuals', fontsize=12)

    title = 'Population Fitness Distribution'
    if metadata:
        subtitle_parts = []
        if 'board_size' in metadata:
            subtitle_parts.append(f"N={metadata['board_size']}")
        if 'population_size' in metadata:
            subtitle_parts.append(f"Population={metadata['population_size']}")
        if 'seed' in metadata:
            subtitle_parts.append(f"Seed={metadata['seed']}")
        if subtitle_parts:
            title += '\n' + ' | '.join(subtitle_parts)
    plt.title(title, fontsize=13, fontweight='bold')
    plt.grid(True, alpha=0.3)
    plt.legend()

    stats_text = f'Best: {np.max(fitnesses):.0f} / {best_possible}\n'
    stats_text += f'Mean: {np.mean(fitnesses):.2f}\n'
    stats_text += f'Worst: {np.min(fitnesses):.0f}'
    plt.gca().text(0.02, 0.98, stats_text, transform=plt.gca().transAxes,
                   fontsize=10, verticalalignment='top', horizontalalignment='left',
                   fontfamily='monospace',
                   bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        if not show:
            plt.close()
        return filename

    if show:
        plt.show()

    return None


def create_run_output_folder(
    base_output_dir: str,
    board_size: int,
    seed: int
) -> str:
    """
    Create a timestamped output folder for a run.

    Structure: base_output_dir/N{board_size}/run_{datetime}_seed{seed}/

    Args:
        base_output_dir: Base output directory
        board_size: Board dimension N
        seed: Random seed used

    Returns:
        Path to created folder
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_folder = Path(base_output_dir) / f"N{board_size}" / f"run_{timestamp}_seed{seed}"
    run_folder.mkdir(parents=True, exist_ok=True)
    return str(run_folder)


def save_run_results(
    output_dir: str,
    board: NQueensBoard,
    metadata: Dict,
    fitnesses: Optional[np.ndarray] = None,
    save_plots: bool = True
) -> Dict[str, str]:
    """
    Save all results for a single run to a timestamped folder.

    Creates: output_dir/N{size}/run_{datetime}_seed{seed}/

    Always saves:
    - solution.txt: Board rendering ('Q' / '-' per square)
    - metadata.json: Run parameters and results

    Optionally saves:
    - board.png: Board visualization
    - fitness.png: Population fitness histogram (genetic runs)

    Args:
        output_dir: Base output directory
        board: Final board state
        metadata: Dict with all run parameters
        fitnesses: Optional population fitness values
        save_plots: Whether to save visualization plots

    Returns:
        Dict mapping result type to filename
    """
    N = metadata.get('board_size', board.size)
    seed = metadata.get('seed', 0)

    run_folder = Path(create_run_output_folder(output_dir, N, seed))
    saved_files = {'run_folder': str(run_folder)}

    solution_file = run_folder / 'solution.txt'
    solution_file.write_text(str(board))
    saved_files['solution'] = str(solution_file)

    # Convert non-serializable types
    json_metadata = {}
    for k, v in metadata.items():
        if isinstance(v, np.ndarray):
            json_metadata[k] = v.tolist()
        elif isinstance(v, (np.integer, np.floating)):
            json_metadata[k] = float(v)
        else:
            json_metadata[k] = v
    json_metadata['attacking_pairs'] = board.attacking_pairs()
    json_metadata['queens'] = [list(q) for q in board.queen_positions()]
    json_metadata['solvable'] = check_solvability(N)['solvable']
    json_metadata['timestamp'] = datetime.now().isoformat()

    json_file = run_folder / 'metadata.json'
    with open(json_file, 'w') as f:
        json.dump(json_metadata, f, indent=2)
    saved_files['metadata'] = str(json_file)

    if save_plots:
        board_file = run_folder / 'board.png'
        visualize_board(board, filename=str(board_file), metadata=metadata)
        saved_files['board_plot'] = str(board_file)

        if fitnesses is not None and len(fitnesses) > 0:
            fitness_file = run_folder / 'fitness.png'
            plot_fitness_distribution(fitnesses, N, filename=str(fitness_file), metadata=metadata)
            saved_files['fitness_plot'] = str(fitness_file)

    return saved_files
