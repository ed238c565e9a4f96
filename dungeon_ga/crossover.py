"""
Crossover operators for the dungeon GA.

Implements single-point spatial crossover: both parents are cut along
the same vertical or horizontal line and the halves are swapped.
"""

from typing import Tuple
import numpy as np

from .data_models import Wall, WallSet


def wall_coordinate(wall: Wall, vertical_cut: bool) -> int:
    """Coordinate of a wall's origin along the cut axis."""
    return wall.x if vertical_cut else wall.y


def choose_cut(width: int, height: int, rng: np.random.Generator) -> Tuple[bool, int]:
    """
    Pick the cut line for a crossover.

    Draws the axis first (0 cuts vertically, 1 horizontally), then the
    cut index in the chosen dimension.

    Returns:
        Tuple of (vertical_cut, cut_index)
    """
    vertical = int(rng.integers(0, 2)) == 0
    cut_index = int(rng.integers(0, width if vertical else height))
    return vertical, cut_index


def spatial_crossover(
    parent_a: WallSet,
    parent_b: WallSet,
    rng: np.random.Generator
) -> Tuple[WallSet, WallSet]:
    """
    Combine two parents by cutting both levels in half and swapping halves.

    child_a keeps parent_a's spawn/exit and the walls of parent_a that start
    before the cut, plus the walls of parent_b that start on or after it.
    child_b gets the remaining walls and parent_b's spawn/exit. Neither
    parent is modified.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator

    Returns:
        Tuple of (child_a, child_b)
    """
    vertical, cut_index = choose_cut(parent_a.width, parent_a.height, rng)

    child_a = WallSet(parent_a.width, parent_a.height)
    child_a.set_spawn(*parent_a.spawn)
    child_a.set_exit(*parent_a.exit)

    child_b = WallSet(parent_b.width, parent_b.height)
    child_b.set_spawn(*parent_b.spawn)
    child_b.set_exit(*parent_b.exit)

    for wall in parent_a.walls:
        if wall_coordinate(wall, vertical) < cut_index:
            child_a.walls.append(wall)
        else:
            child_b.walls.append(wall)

    # The foreign halves are swapped
    for wall in parent_b.walls:
        if wall_coordinate(wall, vertical) < cut_index:
            child_b.walls.append(wall)
        else:
            child_a.walls.append(wall)

    return child_a, child_b


def crossover_statistics(
    parent_a: WallSet,
    parent_b: WallSet,
    child_a: WallSet,
    child_b: WallSet
) -> dict:
    """
    Summarize how walls were shared between two children.

    Returns:
        Dictionary with parent and child wall counts and whether
        the total was conserved
    """
    parent_total = parent_a.wall_count() + parent_b.wall_count()
    child_total = child_a.wall_count() + child_b.wall_count()
    return {
        'parent_a_walls': parent_a.wall_count(),
        'parent_b_walls': parent_b.wall_count(),
        'child_a_walls': child_a.wall_count(),
        'child_b_walls': child_b.wall_count(),
        'conserved': parent_total == child_total,
    }
