"""
Tests for rasterizing wall sets into tile grids.
"""

import unittest
import numpy as np

from dungeon_ga.data_models import Direction, Wall, WallSet, create_wallset
from dungeon_ga.tile_grid import Tile, TileGrid, rasterize


def wall_cells(grid: TileGrid) -> set:
    return {(x, y) for x in range(grid.width) for y in range(grid.height) if grid.is_wall(x, y)}


class TestRasterization(unittest.TestCase):
    """Test wall placement."""

    def test_empty_genotype(self):
        grid = rasterize(WallSet(6, 4))
        self.assertEqual(grid.count(Tile.WALL), 0)
        self.assertEqual(grid.count(Tile.EMPTY), 22)
        self.assertTrue(grid.is_spawn(0, 0))
        self.assertTrue(grid.is_exit(5, 3))

    def test_vertical_and_horizontal_walls(self):
        genotype = create_wallset(8, 8, (0, 0), (7, 7), [
            Wall(2, 1, 3, Direction.VERTICAL),
            Wall(4, 6, 2, Direction.HORIZONTAL),
        ])
        grid = rasterize(genotype)
        self.assertEqual(wall_cells(grid), {(2, 1), (2, 2), (2, 3), (4, 6), (5, 6)})

    def test_wall_clipped_at_right_edge(self):
        # Length 5 starting two cells from the edge marks exactly two cells
        genotype = create_wallset(10, 10, (0, 0), (9, 9), [Wall(8, 4, 5, Direction.HORIZONTAL)])
        grid = rasterize(genotype)
        self.assertEqual(wall_cells(grid), {(8, 4), (9, 4)})

    def test_wall_clipped_at_top_edge(self):
        genotype = create_wallset(10, 10, (0, 0), (9, 0), [Wall(3, 8, 5, Direction.VERTICAL)])
        grid = rasterize(genotype)
        self.assertEqual(wall_cells(grid), {(3, 8), (3, 9)})

    def test_wall_outside_grid_marks_nothing(self):
        genotype = create_wallset(5, 5, (0, 0), (4, 4), [
            Wall(7, 1, 3, Direction.HORIZONTAL),
            Wall(-1, 2, 4, Direction.HORIZONTAL),
        ])
        grid = TileGrid.build(genotype)
        self.assertEqual(grid.count(Tile.WALL), 0)
        self.assertEqual(grid.place_wall(Wall(3, 3, 4, Direction.VERTICAL)), 2)

    def test_overlapping_walls(self):
        genotype = create_wallset(6, 6, (0, 0), (5, 5), [
            Wall(1, 2, 4, Direction.HORIZONTAL),
            Wall(2, 0, 5, Direction.VERTICAL),
            Wall(1, 2, 4, Direction.HORIZONTAL),
        ])
        grid = rasterize(genotype)
        # (2, 2) is shared and counted once
        self.assertEqual(grid.count(Tile.WALL), 8)

    def test_endpoints_override_walls(self):
        genotype = create_wallset(5, 5, (0, 0), (4, 4), [
            Wall(0, 0, 5, Direction.HORIZONTAL),
            Wall(4, 0, 5, Direction.VERTICAL),
        ])
        grid = rasterize(genotype)
        self.assertTrue(grid.is_spawn(0, 0))
        self.assertTrue(grid.is_exit(4, 4))
        self.assertFalse(grid.is_wall(0, 0))
        self.assertFalse(grid.is_wall(4, 4))
        self.assertEqual(grid.count(Tile.WALL), 7)

    def test_density(self):
        genotype = create_wallset(10, 10, (0, 0), (9, 9), [
            Wall(0, 2, 10, Direction.HORIZONTAL),
            Wall(0, 4, 10, Direction.HORIZONTAL),
            Wall(0, 6, 10, Direction.HORIZONTAL),
        ])
        grid = rasterize(genotype)
        self.assertEqual(grid.density(), 0.3)


class TestTileQueries(unittest.TestCase):
    """Test bounds-checked queries."""

    def setUp(self):
        genotype = create_wallset(4, 3, (0, 1), (3, 2), [Wall(1, 0, 3, Direction.VERTICAL)])
        self.grid = rasterize(genotype)

    def test_out_of_bounds_queries_are_false(self):
        for x, y in [(-1, 0), (4, 0), (0, -1), (0, 3), (10, 10)]:
            self.assertFalse(self.grid.is_wall(x, y))
            self.assertFalse(self.grid.is_spawn(x, y))
            self.assertFalse(self.grid.is_exit(x, y))
            self.assertIsNone(self.grid.tile_at(x, y))

    def test_unbuilt_grid_queries_are_false(self):
        grid = TileGrid(3, 3)
        grid.tiles = None
        self.assertFalse(grid.is_wall(1, 1))
        self.assertFalse(grid.is_spawn(0, 0))
        self.assertFalse(grid.is_exit(2, 2))

    def test_tile_at(self):
        self.assertEqual(self.grid.tile_at(0, 1), Tile.SPAWN)
        self.assertEqual(self.grid.tile_at(3, 2), Tile.GOAL)
        self.assertEqual(self.grid.tile_at(1, 2), Tile.WALL)
        self.assertEqual(self.grid.tile_at(2, 2), Tile.EMPTY)

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            TileGrid(0, 5)


class TestConstruction(unittest.TestCase):
    """Test two-step construction and caching."""

    def setUp(self):
        self.genotype = create_wallset(6, 6, (0, 0), (5, 5), [
            Wall(2, 0, 4, Direction.VERTICAL),
            Wall(3, 3, 3, Direction.HORIZONTAL),
        ])

    def test_build_does_not_pathfind(self):
        grid = TileGrid.build(self.genotype)
        self.assertFalse(grid.finalized)
        self.assertIsNone(grid.get_path())

        grid.finalize()
        self.assertTrue(grid.finalized)
        self.assertIsNotNone(grid.get_path())

    def test_from_wallset_is_eager(self):
        grid = TileGrid.from_wallset(self.genotype)
        self.assertTrue(grid.finalized)
        path = grid.get_path()
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (5, 5))
        self.assertEqual(grid.path_length(), len(path))

    def test_finalized_grid_is_read_only(self):
        grid = rasterize(self.genotype)
        with self.assertRaises(ValueError):
            grid.tiles[1, 1] = Tile.WALL

    def test_get_path_returns_copy(self):
        grid = rasterize(self.genotype)
        grid.get_path().clear()
        self.assertTrue(grid.has_path())
        self.assertGreater(grid.path_length(), 0)

    def test_rasterize_is_deterministic(self):
        first = rasterize(self.genotype)
        second = rasterize(self.genotype)
        self.assertEqual(first, second)
        self.assertTrue(np.array_equal(first.tiles, second.tiles))
        self.assertEqual(first.get_path(), second.get_path())

    def test_random_genotypes_are_deterministic(self):
        rng = np.random.default_rng(99)
        for _ in range(20):
            genotype = WallSet(12, 9)
            genotype.generate_random_walls(15, 1, 6, rng)
            self.assertEqual(rasterize(genotype), rasterize(genotype))

    def test_rasterize_leaves_genotype_unchanged(self):
        walls = list(self.genotype.walls)
        rasterize(self.genotype)
        self.assertEqual(self.genotype.walls, walls)


if __name__ == '__main__':
    unittest.main()
