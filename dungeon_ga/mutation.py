"""
Mutation operators for the dungeon GA.

A mutation copies a genotype and either adds one random wall or
removes one existing wall.
"""

from typing import Dict, List, Tuple
import numpy as np

from .data_models import WallSet

# Out of ADD_WALL_RANGE equally likely outcomes, ADD_WALL_THRESHOLD add a wall
ADD_WALL_THRESHOLD = 8
ADD_WALL_RANGE = 11


def mutate_with_log(
    genotype: WallSet,
    min_length: int,
    max_length: int,
    rng: np.random.Generator
) -> Tuple[WallSet, List[str]]:
    """
    Mutate a genotype and describe what happened.

    Args:
        genotype: Genotype to mutate (left unchanged)
        min_length: Minimum length for an added wall
        max_length: Maximum length for an added wall
        rng: Random number generator

    Returns:
        Tuple of (mutated_genotype, operation_log)
    """
    mutation = genotype.copy()

    if int(rng.integers(0, ADD_WALL_RANGE)) < ADD_WALL_THRESHOLD:
        wall = mutation.add_random_wall(min_length, max_length, rng)
        op_log = [f"add_wall: ({wall.x}, {wall.y}) len={wall.length} {wall.direction.name.lower()}"]
    else:
        wall = mutation.remove_random_wall(rng)
        if wall is None:
            op_log = ["remove_wall: no walls to remove"]
        else:
            op_log = [f"remove_wall: ({wall.x}, {wall.y}) len={wall.length} {wall.direction.name.lower()}"]

    return mutation, op_log


def mutate(
    genotype: WallSet,
    min_length: int,
    max_length: int,
    rng: np.random.Generator
) -> WallSet:
    """
    Return a mutated copy of a genotype.

    With probability 8/11 a random wall is appended, otherwise a uniformly
    chosen wall is removed (nothing happens if there are no walls).
    """
    mutation, _ = mutate_with_log(genotype, min_length, max_length, rng)
    return mutation


def mutation_statistics(original: WallSet, mutated: WallSet) -> Dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Genotype before mutation
        mutated: Genotype after mutation

    Returns:
        Dictionary with wall counts and added/removed totals
    """
    remaining = list(original.walls)
    added = 0
    for wall in mutated.walls:
        if wall in remaining:
            remaining.remove(wall)
        else:
            added += 1

    return {
        'original_walls': original.wall_count(),
        'mutated_walls': mutated.wall_count(),
        'walls_added': added,
        'walls_removed': len(remaining),
    }
