"""
Tests for data models and GA operations: crossover and mutation.
"""

import unittest
from collections import Counter
import numpy as np

from dungeon_ga.data_models import Direction, Wall, WallSet, create_wallset
from dungeon_ga.crossover import spatial_crossover, choose_cut, crossover_statistics
from dungeon_ga.mutation import mutate, mutate_with_log, mutation_statistics
from dungeon_ga.tile_grid import rasterize


class ScriptedRng:
    """Stand-in for np.random.Generator returning preset integer draws."""

    def __init__(self, integers):
        self._integers = list(integers)

    def integers(self, low, high=None):
        value = self._integers.pop(0)
        if not low <= value < high:
            raise AssertionError(f"Scripted draw {value} outside [{low}, {high})")
        return value

    def exhausted(self) -> bool:
        return not self._integers


class TestDataModels(unittest.TestCase):
    """Test Wall and WallSet."""

    def test_wall_requires_positive_length(self):
        with self.assertRaises(ValueError):
            Wall(0, 0, 0, Direction.VERTICAL)

    def test_wall_cells(self):
        self.assertEqual(Wall(1, 2, 3, Direction.VERTICAL).cells(), [(1, 2), (1, 3), (1, 4)])
        self.assertEqual(Wall(1, 2, 2, Direction.HORIZONTAL).cells(), [(1, 2), (2, 2)])

    def test_default_endpoints(self):
        genotype = WallSet(8, 6)
        self.assertEqual(genotype.spawn, (0, 0))
        self.assertEqual(genotype.exit, (7, 5))
        self.assertEqual(genotype.wall_count(), 0)

    def test_out_of_bounds_endpoints_are_ignored(self):
        genotype = WallSet(5, 5)
        genotype.set_spawn(2, 3)
        genotype.set_spawn(5, 0)
        genotype.set_spawn(-1, 2)
        genotype.set_exit(3, 7)
        self.assertEqual(genotype.spawn, (2, 3))
        self.assertEqual(genotype.exit, (4, 4))

    def test_constructor_ignores_out_of_bounds_endpoints(self):
        genotype = WallSet(5, 5, spawn=(9, 9), exit=(-1, 7))
        self.assertEqual(genotype.spawn, (0, 0))
        self.assertEqual(genotype.exit, (4, 4))

        grid = rasterize(genotype)
        self.assertEqual(grid.spawn, (0, 0))
        self.assertEqual(grid.exit, (4, 4))
        self.assertEqual(grid.path_length(), 9)

    def test_constructor_keeps_in_bounds_endpoints(self):
        genotype = WallSet(5, 5, spawn=[1, 2], exit=(3, 3))
        self.assertEqual(genotype.spawn, (1, 2))
        self.assertEqual(genotype.exit, (3, 3))
        self.assertTrue(genotype.copy().same_layout(genotype))

    def test_create_wallset(self):
        walls = [Wall(1, 1, 2, Direction.VERTICAL)]
        genotype = create_wallset(6, 6, (1, 0), (4, 5), walls)
        self.assertEqual(genotype.spawn, (1, 0))
        self.assertEqual(genotype.exit, (4, 5))
        self.assertEqual(genotype.walls, walls)

    def test_walls_are_not_bounds_checked(self):
        genotype = WallSet(5, 5)
        genotype.add_wall(10, 10, 3, Direction.HORIZONTAL)
        self.assertEqual(genotype.walls, [Wall(10, 10, 3, Direction.HORIZONTAL)])

    def test_add_random_wall_draw_order(self):
        genotype = WallSet(10, 8)
        rng = ScriptedRng([7, 3, 4, 1])
        wall = genotype.add_random_wall(2, 5, rng)
        self.assertEqual(wall, Wall(7, 3, 4, Direction.HORIZONTAL))
        self.assertTrue(rng.exhausted())

    def test_generate_random_walls_ranges(self):
        genotype = WallSet(10, 8)
        genotype.generate_random_walls(200, 2, 5, np.random.default_rng(42))
        self.assertEqual(genotype.wall_count(), 200)
        for wall in genotype.walls:
            self.assertTrue(0 <= wall.x < 10)
            self.assertTrue(0 <= wall.y < 8)
            self.assertTrue(2 <= wall.length <= 5)
        # Both directions and both length extremes show up
        self.assertEqual({w.direction for w in genotype.walls}, set(Direction))
        self.assertEqual({w.length for w in genotype.walls}, {2, 3, 4, 5})

    def test_remove_random_wall(self):
        genotype = create_wallset(5, 5, (0, 0), (4, 4), [
            Wall(0, 1, 2, Direction.VERTICAL),
            Wall(1, 1, 2, Direction.VERTICAL),
            Wall(2, 1, 2, Direction.VERTICAL),
        ])
        removed = genotype.remove_random_wall(ScriptedRng([1]))
        self.assertEqual(removed, Wall(1, 1, 2, Direction.VERTICAL))
        self.assertEqual([w.x for w in genotype.walls], [0, 2])

    def test_remove_from_empty_makes_no_draw(self):
        genotype = WallSet(5, 5)
        rng = ScriptedRng([])
        self.assertIsNone(genotype.remove_random_wall(rng))

    def test_copy_is_independent(self):
        genotype = create_wallset(5, 5, (0, 0), (4, 4), [Wall(1, 1, 2, Direction.VERTICAL)])
        clone = genotype.copy()
        clone.add_wall(2, 2, 1, Direction.HORIZONTAL)
        self.assertEqual(genotype.wall_count(), 1)
        self.assertEqual(clone.wall_count(), 2)
        self.assertTrue(genotype.same_layout(genotype.copy()))
        self.assertFalse(genotype.same_layout(clone))

    def test_str(self):
        genotype = create_wallset(5, 4, (0, 0), (4, 3), [
            Wall(0, 0, 3, Direction.VERTICAL),
            Wall(1, 1, 2, Direction.HORIZONTAL),
        ])
        self.assertEqual(str(genotype), "Dungeon 5x4 3 2")


class TestCrossover(unittest.TestCase):
    """Test spatial crossover."""

    def setUp(self):
        self.parent_a = create_wallset(10, 10, (0, 0), (9, 9), [
            Wall(1, 5, 3, Direction.VERTICAL),
            Wall(4, 2, 2, Direction.HORIZONTAL),
            Wall(7, 8, 4, Direction.VERTICAL),
        ])
        self.parent_b = create_wallset(10, 10, (1, 1), (8, 8), [
            Wall(2, 9, 2, Direction.HORIZONTAL),
            Wall(6, 0, 5, Direction.VERTICAL),
            Wall(9, 3, 1, Direction.HORIZONTAL),
            Wall(5, 5, 2, Direction.VERTICAL),
        ])

    def test_vertical_cut_partition(self):
        # Axis 0 cuts vertically, at x = 5
        child_a, child_b = spatial_crossover(self.parent_a, self.parent_b, ScriptedRng([0, 5]))

        self.assertEqual(child_a.walls, [
            Wall(1, 5, 3, Direction.VERTICAL),
            Wall(4, 2, 2, Direction.HORIZONTAL),
            Wall(6, 0, 5, Direction.VERTICAL),
            Wall(9, 3, 1, Direction.HORIZONTAL),
            Wall(5, 5, 2, Direction.VERTICAL),
        ])
        self.assertEqual(child_b.walls, [
            Wall(7, 8, 4, Direction.VERTICAL),
            Wall(2, 9, 2, Direction.HORIZONTAL),
        ])

    def test_horizontal_cut_partition(self):
        # Axis 1 cuts horizontally, at y = 5
        child_a, child_b = spatial_crossover(self.parent_a, self.parent_b, ScriptedRng([1, 5]))

        self.assertEqual(child_a.walls, [
            Wall(4, 2, 2, Direction.HORIZONTAL),
            Wall(2, 9, 2, Direction.HORIZONTAL),
            Wall(5, 5, 2, Direction.VERTICAL),
        ])
        self.assertEqual(child_b.walls, [
            Wall(1, 5, 3, Direction.VERTICAL),
            Wall(7, 8, 4, Direction.VERTICAL),
            Wall(6, 0, 5, Direction.VERTICAL),
            Wall(9, 3, 1, Direction.HORIZONTAL),
        ])

    def test_children_inherit_endpoints(self):
        child_a, child_b = spatial_crossover(self.parent_a, self.parent_b, np.random.default_rng(1))
        self.assertEqual((child_a.spawn, child_a.exit), ((0, 0), (9, 9)))
        self.assertEqual((child_b.spawn, child_b.exit), ((1, 1), (8, 8)))

    def test_walls_are_conserved(self):
        rng = np.random.default_rng(42)
        for _ in range(50):
            child_a, child_b = spatial_crossover(self.parent_a, self.parent_b, rng)
            parents = Counter(self.parent_a.walls + self.parent_b.walls)
            children = Counter(child_a.walls + child_b.walls)
            self.assertEqual(parents, children)

            stats = crossover_statistics(self.parent_a, self.parent_b, child_a, child_b)
            self.assertTrue(stats['conserved'])

    def test_parents_unchanged(self):
        walls_a = list(self.parent_a.walls)
        walls_b = list(self.parent_b.walls)
        spatial_crossover(self.parent_a, self.parent_b, np.random.default_rng(3))
        self.assertEqual(self.parent_a.walls, walls_a)
        self.assertEqual(self.parent_b.walls, walls_b)

    def test_self_crossover(self):
        child_a, child_b = spatial_crossover(self.parent_a, self.parent_a, np.random.default_rng(5))
        self.assertEqual(
            Counter(child_a.walls + child_b.walls),
            Counter(self.parent_a.walls * 2)
        )

    def test_choose_cut_matches_crossover_draws(self):
        vertical, cut_index = choose_cut(10, 10, np.random.default_rng(11))
        child_a, _ = spatial_crossover(self.parent_a, self.parent_b, np.random.default_rng(11))

        def coordinate(wall):
            return wall.x if vertical else wall.y

        expected = [w for w in self.parent_a.walls if coordinate(w) < cut_index]
        expected += [w for w in self.parent_b.walls if coordinate(w) >= cut_index]
        self.assertEqual(child_a.walls, expected)


class TestMutation(unittest.TestCase):
    """Test mutation operators."""

    def setUp(self):
        self.genotype = create_wallset(10, 10, (0, 0), (9, 9), [
            Wall(1, 1, 3, Direction.VERTICAL),
            Wall(5, 5, 2, Direction.HORIZONTAL),
        ])

    def test_add_wall(self):
        # 7 < 8 adds a wall at (3, 4), length 2, vertical
        mutated = mutate(self.genotype, 2, 5, ScriptedRng([7, 3, 4, 2, 0]))
        self.assertEqual(mutated.walls, self.genotype.walls + [Wall(3, 4, 2, Direction.VERTICAL)])

    def test_remove_wall(self):
        # 8 removes, index 0
        mutated, log = mutate_with_log(self.genotype, 2, 5, ScriptedRng([8, 0]))
        self.assertEqual(mutated.walls, [Wall(5, 5, 2, Direction.HORIZONTAL)])
        self.assertTrue(log[0].startswith("remove_wall"))

    def test_remove_from_empty_is_noop(self):
        empty = WallSet(10, 10)
        rng = ScriptedRng([10])
        mutated, log = mutate_with_log(empty, 2, 5, rng)
        self.assertTrue(mutated.same_layout(empty))
        self.assertIsNot(mutated, empty)
        self.assertTrue(rng.exhausted())
        self.assertEqual(log, ["remove_wall: no walls to remove"])

    def test_original_never_modified(self):
        original_walls = list(self.genotype.walls)
        rng = np.random.default_rng(0)
        for _ in range(30):
            mutated = mutate(self.genotype, 2, 5, rng)
            self.assertEqual(self.genotype.walls, original_walls)
            self.assertEqual(mutated.spawn, self.genotype.spawn)
            self.assertEqual(mutated.exit, self.genotype.exit)

    def test_differs_by_exactly_one_wall(self):
        rng = np.random.default_rng(7)
        for _ in range(30):
            mutated = mutate(self.genotype, 2, 5, rng)
            stats = mutation_statistics(self.genotype, mutated)
            self.assertEqual(stats['walls_added'] + stats['walls_removed'], 1)
            self.assertEqual(abs(stats['mutated_walls'] - stats['original_walls']), 1)

    def test_add_probability(self):
        rng = np.random.default_rng(123)
        added = 0
        trials = 2200
        for _ in range(trials):
            mutated = mutate(self.genotype, 2, 5, rng)
            if mutated.wall_count() > self.genotype.wall_count():
                added += 1
        # Expected 8/11 of trials, about 1600
        self.assertAlmostEqual(added / trials, 8 / 11, delta=0.05)


if __name__ == '__main__':
    unittest.main()
