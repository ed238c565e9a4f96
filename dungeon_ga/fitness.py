"""
Fitness evaluation for dungeon levels.

Fitness is an int computed from a tile grid: a density score for the
fraction of wall tiles and a path score for the length of the shortest
spawn-to-exit path. Each score peaks at its target value and falls
linearly to 0 at the maximum allowed error.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class FitnessConfig:
    """
    Weights and targets for level fitness.

    Attributes:
        density_weight: Score for hitting the density target exactly
        density_target: Target fraction of wall tiles
        max_density_error: Density error at which the density score reaches 0
        path_weight: Score for hitting the path target exactly
        path_target: Target number of tiles on the path (endpoints included)
        max_path_error: Path length error at which the path score reaches 0
        no_path_penalty: Subtracted from fitness when the exit is unreachable
    """
    density_weight: float = 0.0
    density_target: float = 0.3
    max_density_error: float = 0.1
    path_weight: float = 100.0
    path_target: int = 30
    max_path_error: int = 10
    no_path_penalty: int = 100

    def __post_init__(self):
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _scaled_score(weight: float, delta: float, max_error: float) -> int:
    """Weight scaled down linearly by error; 0 beyond the max error."""
    if delta > max_error:
        return 0
    if max_error == 0:
        # Only an exact match scores
        return int(weight)
    return int(weight * (1.0 - delta / max_error))


def density_fitness(grid, config: FitnessConfig) -> int:
    """Fitness gained from level density."""
    if config.density_weight <= 0:
        return 0
    delta = abs(grid.density() - config.density_target)
    return _scaled_score(config.density_weight, delta, config.max_density_error)


def path_fitness(grid, config: FitnessConfig) -> int:
    """
    Fitness gained from path length.

    Negative (the no-path penalty) when the exit cannot be reached.
    """
    if config.path_weight <= 0:
        return 0
    path = grid.get_path()
    if path is None:
        return -int(config.no_path_penalty)
    delta = abs(len(path) - config.path_target)
    return _scaled_score(config.path_weight, delta, config.max_path_error)


def get_fitness(grid, config: FitnessConfig) -> int:
    """Overall fitness, never negative."""
    fitness = density_fitness(grid, config) + path_fitness(grid, config)
    return max(0, fitness)


def fitness_breakdown(grid, config: FitnessConfig) -> Dict[str, int]:
    """
    Compute every fitness component for a grid.

    Returns:
        Dictionary with density, path and total fitness
    """
    return {
        'density_fitness': density_fitness(grid, config),
        'path_fitness': path_fitness(grid, config),
        'total_fitness': get_fitness(grid, config),
    }
