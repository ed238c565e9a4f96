"""
A* pathfinding on a tile grid.

Computes the least cost 4-connected path between two tiles. Every step
costs 1 and the Manhattan distance to the target is used as heuristic.

Tiles are referred to both by position (x, y) and by index
(x + y * width); indices are used as dictionary keys.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

Position = Tuple[int, int]

# Predecessor recorded for the start tile
NO_TILE: Position = (-1, -1)


def manhattan_distance(a: Position, b: Position) -> int:
    """Sum of absolute coordinate differences."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class AStarPathfinder:
    """
    A* search over a grid exposing width, height, is_wall(x, y),
    spawn and exit.

    The frontier holds (priority, insertion order, position) entries;
    the lowest estimated total cost is popped first and ties go to the
    earliest entry. A tile may sit in the frontier several times if a
    cheaper route to it was found later.
    """

    def __init__(self, grid):
        self.grid = grid
        self.start: Optional[Position] = None
        self.target: Optional[Position] = None
        self.frontier: List[Tuple[int, int, Position]] = []
        self.arrived_from: Dict[int, Position] = {}
        self.cost_so_far: Dict[int, int] = {}
        self._counter = itertools.count()

    def tile_index(self, tile: Position) -> int:
        """Integer key for a tile position."""
        return tile[0] + tile[1] * self.grid.width

    def find_path(
        self,
        start: Optional[Position] = None,
        target: Optional[Position] = None
    ) -> Optional[List[Position]]:
        """
        Find the shortest path between two tiles.

        Args:
            start: Start tile (defaults to the grid's spawn)
            target: Target tile (defaults to the grid's exit)

        Returns:
            List of positions from start to target inclusive, or None
            if the target cannot be reached
        """
        self.start = tuple(start) if start is not None else tuple(self.grid.spawn)
        self.target = tuple(target) if target is not None else tuple(self.grid.exit)

        self._initialise()

        found_path = False
        while self.frontier:
            _, _, current = heapq.heappop(self.frontier)

            if current == self.target:
                found_path = True
                break

            current_cost = self.cost_so_far[self.tile_index(current)]

            for tile in self.neighbouring_tiles(current):
                index = self.tile_index(tile)
                known_cost = current_cost + 1

                encountered = index in self.cost_so_far
                cheaper = encountered and known_cost < self.cost_so_far[index]

                if not encountered or cheaper:
                    priority = known_cost + manhattan_distance(tile, self.target)
                    self._enqueue(tile, priority)
                    self.arrived_from[index] = current
                    self.cost_so_far[index] = known_cost

        return self._reconstruct_path(found_path)

    def neighbouring_tiles(self, tile: Position) -> List[Position]:
        """In-bounds, non-wall neighbours in W, E, S, N order."""
        x, y = tile
        neighbours = []
        if x > 0:
            self._add_non_wall(neighbours, x - 1, y)
        if x < self.grid.width - 1:
            self._add_non_wall(neighbours, x + 1, y)
        if y > 0:
            self._add_non_wall(neighbours, x, y - 1)
        if y < self.grid.height - 1:
            self._add_non_wall(neighbours, x, y + 1)
        return neighbours

    def _add_non_wall(self, neighbours: List[Position], x: int, y: int) -> None:
        if not self.grid.is_wall(x, y):
            neighbours.append((x, y))

    def _initialise(self) -> None:
        self.frontier = []
        self.arrived_from = {}
        self.cost_so_far = {}
        self._counter = itertools.count()

        self._enqueue(self.start, 0)
        start_index = self.tile_index(self.start)
        self.arrived_from[start_index] = NO_TILE
        self.cost_so_far[start_index] = 0

    def _enqueue(self, tile: Position, priority: int) -> None:
        heapq.heappush(self.frontier, (priority, next(self._counter), tile))

    def _reconstruct_path(self, found_path: bool) -> Optional[List[Position]]:
        if not found_path:
            return None

        path = []
        tile = self.target
        while True:
            path.append(tile)
            if tile == self.start:
                break
            tile = self.arrived_from[self.tile_index(tile)]

        path.reverse()
        return path


def find_path(grid, start: Optional[Position] = None, target: Optional[Position] = None) -> Optional[List[Position]]:
    """Convenience wrapper around AStarPathfinder.find_path."""
    return AStarPathfinder(grid).find_path(start, target)
