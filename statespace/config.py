"""
Configuration management for the N-Queens state-space demo.

This module provides a clean interface for loading and validating
configuration from YAML files.
"""

import yaml
from dataclasses import dataclass, field
from typing import List

from .board import BoardConfig
from .formulations import HEURISTICS


VALID_MODES = ['evaluate', 'random_walk', 'genetic', 'eightpuzzle']
VALID_FORMULATIONS = ['incremental', 'complete']


@dataclass
class Config:
    """
    Configuration container for the demo driver.

    Attributes:
        sizes: List of board sizes to run
        seed: Random seed
        mode: Demo mode ('evaluate', 'random_walk', 'genetic', 'eightpuzzle')
        formulation: Problem formulation ('incremental' or 'complete')
        initial_config: Board initialization policy for the complete formulation
        heuristic: Heuristic used to score states
        max_attempts: Board generations allowed in random_walk mode
        population_size: Number of individuals in genetic mode
        scramble_moves: Random gap moves applied in eightpuzzle mode
        show: Whether to show plots
        save: Whether to save results
        output_dir: Directory to save results
    """

    # Board configuration
    sizes: List[int] = field(default_factory=lambda: [8])

    # Formulation configuration
    seed: int = 42
    mode: str = 'evaluate'
    formulation: str = 'complete'
    initial_config: str = 'queens_in_first_row'
    heuristic: str = 'attacking_pairs'

    # Mode-specific limits
    max_attempts: int = 100000
    population_size: int = 50
    scramble_moves: int = 30

    # Visualization and output
    show: bool = False
    save: bool = False
    output_dir: str = 'results'

    @classmethod
    def from_yaml(cls, path: str) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        # Accept a single 'size' as well as a 'sizes' list
        sizes = data.get('sizes')
        if sizes is None:
            size = data.get('size')
            sizes = [size] if size is not None else [8]
        if not isinstance(sizes, list):
            sizes = [sizes]

        return cls(
            sizes=sizes,
            seed=data.get('seed', 42),
            mode=data.get('mode', 'evaluate'),
            formulation=data.get('formulation', 'complete'),
            initial_config=data.get('initial_config', 'queens_in_first_row'),
            heuristic=data.get('heuristic', 'attacking_pairs'),
            max_attempts=data.get('max_attempts', 100000),
            population_size=data.get('population_size', 50),
            scramble_moves=data.get('scramble_moves', 30),
            show=data.get('show', False),
            save=data.get('save', False),
            output_dir=data.get('output_dir', 'results'),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'sizes': self.sizes,
            'seed': self.seed,
            'mode': self.mode,
            'formulation': self.formulation,
            'initial_config': self.initial_config,
            'heuristic': self.heuristic,
            'max_attempts': self.max_attempts,
            'population_size': self.population_size,
            'scramble_moves': self.scramble_moves,
            'show': self.show,
            'save': self.save,
            'output_dir': self.output_dir,
        }

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate sizes
        if not self.sizes:
            errors.append("At least one board size must be specified")
        for size in self.sizes:
            if int(size) < 1:
                errors.append(f"Board size must be positive, got {size}")

        # Validate mode
        if self.mode not in VALID_MODES:
            errors.append(f"Invalid mode '{self.mode}', must be one of {VALID_MODES}")

        # Validate formulation
        if self.formulation not in VALID_FORMULATIONS:
            errors.append(f"Invalid formulation '{self.formulation}', must be one of {VALID_FORMULATIONS}")

        # Validate initial config
        valid_configs = [c.value for c in BoardConfig]
        if self.initial_config not in valid_configs:
            errors.append(f"Invalid initial_config '{self.initial_config}', must be one of {valid_configs}")
        elif self.formulation == 'complete' and self.initial_config == BoardConfig.EMPTY.value:
            errors.append("The complete formulation needs a queen in every column, "
                          "initial_config cannot be 'empty'")

        # Validate heuristic
        valid_heuristics = list(HEURISTICS.keys())
        if self.heuristic not in valid_heuristics:
            errors.append(f"Invalid heuristic '{self.heuristic}', must be one of {valid_heuristics}")

        # Validate limits
        if self.max_attempts < 1:
            errors.append(f"max_attempts must be positive, got {self.max_attempts}")
        if self.population_size < 1:
            errors.append(f"population_size must be positive, got {self.population_size}")
        if self.scramble_moves < 0:
            errors.append(f"scramble_moves must be non-negative, got {self.scramble_moves}")

        return errors

    def print_summary(self) -> None:
        """Print configuration summary."""
        print("=" * 60)
        print("Configuration Summary")
        print("=" * 60)
        print(f"Board sizes: {self.sizes}")
        print(f"Seed: {self.seed}")
        print(f"Mode: {self.mode}")
        if self.mode == 'evaluate':
            print(f"Formulation: {self.formulation}"
                  + (f" ({self.initial_config})" if self.formulation == 'complete' else ""))
            print(f"Heuristic: {self.heuristic}")
        elif self.mode == 'random_walk':
            print(f"Max attempts: {self.max_attempts:,}")
        elif self.mode == 'genetic':
            print(f"Population size: {self.population_size}")
        else:
            print(f"Scramble moves: {self.scramble_moves}")
        print(f"Save: {self.save}" + (f" → {self.output_dir}" if self.save else ""))
        print("=" * 60)
