"""
Tile grid (phenotype) for a dungeon level.

A WallSet is rasterized into a width x height grid of tiles, indexed
tiles[x, y]. Building a grid is done in two steps: build() places walls
and endpoints, finalize() pathfinds from spawn to exit, caches the path
and freezes the tiles.
"""

from enum import IntEnum
from typing import List, Optional, Tuple
import numpy as np

from .data_models import Wall, WallSet
from .pathfinder import AStarPathfinder


class Tile(IntEnum):
    """Tile values"""
    EMPTY = 0
    SPAWN = 1
    GOAL = 2
    WALL = 3


class TileGrid:
    """A rectangular grid of tiles representing a dungeon level"""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.tile_count = width * height
        self.tiles: Optional[np.ndarray] = np.full((width, height), Tile.EMPTY, dtype=np.int8)
        self.spawn: Optional[Tuple[int, int]] = None
        self.exit: Optional[Tuple[int, int]] = None
        self.path: Optional[List[Tuple[int, int]]] = None
        self.finalized = False

    @classmethod
    def build(cls, genotype: WallSet) -> "TileGrid":
        """
        Rasterize a genotype without pathfinding.

        Walls are drawn in order; each one stops at the first cell outside
        the grid. Spawn and exit are stamped last so they are never walls.
        """
        grid = cls(genotype.width, genotype.height)
        for wall in genotype.walls:
            grid.place_wall(wall)
        grid.set_spawn(genotype.spawn)
        grid.set_exit(genotype.exit)
        return grid

    @classmethod
    def from_wallset(cls, genotype: WallSet) -> "TileGrid":
        """Rasterize a genotype and compute its path."""
        return cls.build(genotype).finalize()

    def finalize(self) -> "TileGrid":
        """Pathfind from spawn to exit, cache the path and freeze the tiles."""
        if self.finalized:
            return self
        if self.spawn is not None and self.exit is not None:
            self.path = AStarPathfinder(self).find_path(self.spawn, self.exit)
        self.tiles.flags.writeable = False
        self.finalized = True
        return self

    def place_wall(self, wall: Wall) -> int:
        """
        Mark the in-bounds cells of a wall.

        Returns:
            Number of cells marked
        """
        marked = 0
        for x, y in wall.cells():
            if not self.is_within_bounds(x, y):
                # Wall goes outside the level
                break
            self.tiles[x, y] = Tile.WALL
            marked += 1
        return marked

    def set_spawn(self, position: Tuple[int, int]) -> None:
        x, y = position
        if self.is_within_bounds(x, y):
            self.spawn = (x, y)
            self.tiles[x, y] = Tile.SPAWN

    def set_exit(self, position: Tuple[int, int]) -> None:
        x, y = position
        if self.is_within_bounds(x, y):
            self.exit = (x, y)
            self.tiles[x, y] = Tile.GOAL

    def get_path(self) -> Optional[List[Tuple[int, int]]]:
        """Cached spawn-to-exit path, or None if the exit is unreachable."""
        if self.path is None:
            return None
        return list(self.path)

    def has_path(self) -> bool:
        return self.path is not None

    def path_length(self) -> Optional[int]:
        """Number of tiles on the path (both endpoints included)."""
        if self.path is None:
            return None
        return len(self.path)

    def is_within_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        if self.tiles is None or not self.is_within_bounds(x, y):
            return None
        return Tile(int(self.tiles[x, y]))

    def is_wall(self, x: int, y: int) -> bool:
        # Called for every neighbour the pathfinder looks at
        if self.tiles is None or not self.is_within_bounds(x, y):
            return False
        return bool(self.tiles[x, y] == Tile.WALL)

    def is_spawn(self, x: int, y: int) -> bool:
        return self.tile_at(x, y) == Tile.SPAWN

    def is_exit(self, x: int, y: int) -> bool:
        return self.tile_at(x, y) == Tile.GOAL

    def count(self, tile: Tile) -> int:
        """Count the tiles of one kind."""
        return int(np.count_nonzero(self.tiles == tile))

    def density(self) -> float:
        """Fraction of tiles that are walls."""
        return self.count(Tile.WALL) / self.tile_count

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.tiles, other.tiles)
            and self.path == other.path
        )

    __hash__ = None


def rasterize(genotype: WallSet) -> TileGrid:
    """Rasterize a genotype into a finalized tile grid."""
    return TileGrid.from_wallset(genotype)
