"""
Utility functions for the N-Queens state-space core.

This module contains:
- Pure-Python pairwise attack checks (ground truth for testing)
- JIT-compiled attack kernels over the permutation encoding
- Solvability information
"""

import math
from typing import Dict, Sequence, Tuple

import jax
import jax.numpy as jnp


# =============================================================================
# Attack Checking Functions
# =============================================================================

def check_attack_python(q1: Tuple[int, int], q2: Tuple[int, int]) -> bool:
    """
    Check if two queens attack each other (pure Python for testing).

    Attack types:
    - Rook-type: same column or same row
    - Diagonal: |col-col'| = |row-row'| != 0

    Args:
        q1: First queen position (col, row)
        q2: Second queen position (col, row)

    Returns:
        Boolean indicating if queens attack each other.
    """
    c1, r1 = q1
    c2, r2 = q2
    if (c1, r1) == (c2, r2):
        return False

    # Rook-type
    if c1 == c2 or r1 == r2:
        return True

    # Diagonal
    return abs(c1 - c2) == abs(r1 - r2)


def count_attacking_pairs(queens: Sequence[Tuple[int, int]]) -> int:
    """
    Count attacking pairs using the naive pairwise algorithm.

    This is the ground truth for testing.

    Args:
        queens: List of queen positions as (col, row) tuples.

    Returns:
        Number of attacking pairs.
    """
    count = 0
    n = len(queens)
    for i in range(n):
        for j in range(i + 1, n):
            if check_attack_python(queens[i], queens[j]):
                count += 1
    return count


def count_attacked_queens(queens: Sequence[Tuple[int, int]]) -> int:
    """Count queens attacked by at least one other queen (pairwise)."""
    n = len(queens)
    attacked = set()
    for i in range(n):
        for j in range(i + 1, n):
            if check_attack_python(queens[i], queens[j]):
                attacked.add(i)
                attacked.add(j)
    return len(attacked)


# =============================================================================
# Permutation Encoding Kernels
# =============================================================================

@jax.jit
def attack_matrix_jit(rows: jnp.ndarray) -> jnp.ndarray:
    """
    Pairwise attack matrix for a one-queen-per-column encoding (JIT-compiled).

    Column i holds its queen at row rows[i]. Two queens attack each other
    when they share a row or either diagonal; the diagonal test
    |col-col'| = |row-row'| covers both the up- and down-diagonal.

    Args:
        rows: Integer array of shape (N,)

    Returns:
        Boolean array of shape (N, N), False on the main diagonal.
    """
    cols = jnp.arange(rows.shape[0])
    d_col = jnp.abs(cols[:, None] - cols[None, :])
    d_row = jnp.abs(rows[:, None] - rows[None, :])
    same_row = d_row == 0
    same_diag = d_col == d_row
    distinct = d_col != 0
    return (same_row | same_diag) & distinct


@jax.jit
def non_attacking_pairs_jit(rows: jnp.ndarray) -> jnp.ndarray:
    """
    Number of column pairs i < j whose queens do not attack each other.

    Args:
        rows: Integer array of shape (N,)

    Returns:
        Scalar integer array in [0, N(N-1)/2].
    """
    cols = jnp.arange(rows.shape[0])
    upper = cols[:, None] < cols[None, :]
    return jnp.sum(upper & ~attack_matrix_jit(rows))


@jax.jit
def attacked_queens_jit(rows: jnp.ndarray) -> jnp.ndarray:
    """Number of queens attacked by at least one other queen."""
    return jnp.sum(jnp.any(attack_matrix_jit(rows), axis=1))


# Vectorised over a population of shape (P, N)
population_non_attacking_pairs = jax.jit(jax.vmap(non_attacking_pairs_jit))
population_attacked_queens = jax.jit(jax.vmap(attacked_queens_jit))


# =============================================================================
# Solvability Check
# =============================================================================

def max_non_attacking_pairs(N: int) -> int:
    """Best possible non-attacking-pairs fitness: N(N-1)/2."""
    return N * (N - 1) // 2


def check_solvability(N: int) -> Dict[str, any]:
    """
    Check if the N-Queens problem is solvable.

    A placement of N non-attacking queens exists for N = 1 and every N >= 4
    (and trivially for N = 0).

    Args:
        N: Board dimension

    Returns:
        Dictionary with solvability information.
    """
    solvable = N in (0, 1) or N >= 4
    return {
        'N': N,
        'solvable': solvable,
        'queens': N,
        'cells': N ** 2,
        'max_pairs': max_non_attacking_pairs(N),
        'layouts': N ** N,
        'permutations': math.factorial(N),
    }
