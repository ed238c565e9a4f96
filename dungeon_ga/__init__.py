"""
Evolutionary Dungeon Generator

This package evolves dungeon levels with a genetic algorithm. A level
genotype is a bag of wall segments; it is rasterized into a tile grid,
an A* search finds the shortest spawn-to-exit path, and fitness rewards
levels whose wall density and path length are close to their targets.

Modules:
- data_models: Wall and WallSet (the genotype)
- crossover: Spatial cut-and-swap crossover
- mutation: Add/remove-wall mutation
- tile_grid: Rasterization of a genotype into a tile grid
- pathfinder: A* search on a tile grid
- fitness: Density and path fitness
- evolution: Generational evolution loop
- io_utils: Diagnostic fitness log
- config_loader: YAML configuration loading and validation
- visualization_utils: Text map, level report and plots
- cli: Run orchestration from a configuration file
"""

__version__ = "0.1.0"
__author__ = "Dungeon Generation Team"

from .data_models import Direction, Wall, WallSet, create_wallset
from .crossover import spatial_crossover
from .mutation import mutate
from .tile_grid import Tile, TileGrid, rasterize
from .pathfinder import AStarPathfinder, find_path, manhattan_distance
from .fitness import FitnessConfig, density_fitness, path_fitness, get_fitness
from .evolution import (
    Evolution,
    EvolutionConfig,
    EvolutionResult,
    GenerationRecord,
    NoViableLevelError,
    evolve_dungeon
)

__all__ = [
    "Direction",
    "Wall",
    "WallSet",
    "create_wallset",
    "spatial_crossover",
    "mutate",
    "Tile",
    "TileGrid",
    "rasterize",
    "AStarPathfinder",
    "find_path",
    "manhattan_distance",
    "FitnessConfig",
    "density_fitness",
    "path_fitness",
    "get_fitness",
    "Evolution",
    "EvolutionConfig",
    "EvolutionResult",
    "GenerationRecord",
    "NoViableLevelError",
    "evolve_dungeon",
]
