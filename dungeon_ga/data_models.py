"""
Data models for the dungeon GA.

Core data structures representing walls and wall sets (the genotype
bred by the genetic algorithm).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional
import numpy as np


class Direction(Enum):
    """Direction a wall extends from its origin"""
    VERTICAL = 0
    HORIZONTAL = 1


@dataclass(frozen=True)
class Wall:
    """
    A straight wall segment.

    Attributes:
        x: Origin column
        y: Origin row
        length: Number of tiles covered (may run past the grid edge)
        direction: VERTICAL steps along y, HORIZONTAL along x
    """
    x: int
    y: int
    length: int
    direction: Direction

    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Wall length must be positive, got {self.length}")

    def cells(self) -> list[tuple[int, int]]:
        """All cells this wall would cover on an unbounded grid."""
        if self.direction == Direction.VERTICAL:
            return [(self.x, self.y + i) for i in range(self.length)]
        return [(self.x + i, self.y) for i in range(self.length)]


@dataclass(eq=False)
class WallSet:
    """
    Represents a dungeon level genotype.

    Technically a bag rather than a set: walls may repeat, and their
    order matters when rasterizing (later walls overwrite earlier ones).

    Attributes:
        width: Level width in tiles
        height: Level height in tiles
        walls: Ordered list of walls
        spawn: Spawn tile, defaults to (0, 0)
        exit: Exit tile, defaults to (width - 1, height - 1)

    Out-of-bounds spawn or exit values are ignored, leaving the default.
    """
    width: int
    height: int
    walls: list[Wall] = field(default_factory=list)
    spawn: tuple[int, int] = (0, 0)
    exit: Optional[tuple[int, int]] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Level size must be positive, got {self.width}x{self.height}")
        self.walls = list(self.walls)

        # Requested endpoints go through the setters so they are always in bounds
        spawn, exit_ = self.spawn, self.exit
        self.spawn = (0, 0)
        self.exit = (self.width - 1, self.height - 1)
        self.set_spawn(*spawn)
        if exit_ is not None:
            self.set_exit(*exit_)

    def is_within_bounds(self, x: int, y: int) -> bool:
        """Check a position is within the level."""
        return 0 <= x < self.width and 0 <= y < self.height

    def set_spawn(self, x: int, y: int) -> None:
        """Move the spawn; out-of-bounds positions are ignored."""
        if self.is_within_bounds(x, y):
            self.spawn = (x, y)

    def set_exit(self, x: int, y: int) -> None:
        """Move the exit; out-of-bounds positions are ignored."""
        if self.is_within_bounds(x, y):
            self.exit = (x, y)

    def add_wall(self, x: int, y: int, length: int, direction: Direction) -> None:
        """Append a wall. Walls are not bounds-checked."""
        self.walls.append(Wall(x, y, length, direction))

    def extend_walls(self, walls: Iterable[Wall]) -> None:
        self.walls.extend(walls)

    def add_random_wall(self, min_length: int, max_length: int, rng: np.random.Generator) -> Wall:
        """
        Append a uniformly random wall.

        Draws x, y, length and direction in that order.

        Args:
            min_length: Minimum wall length (inclusive)
            max_length: Maximum wall length (inclusive)
            rng: Random number generator

        Returns:
            The wall that was added
        """
        x = int(rng.integers(0, self.width))
        y = int(rng.integers(0, self.height))
        length = int(rng.integers(min_length, max_length + 1))
        direction = Direction(int(rng.integers(0, 2)))
        wall = Wall(x, y, length, direction)
        self.walls.append(wall)
        return wall

    def generate_random_walls(
        self,
        count: int,
        min_length: int,
        max_length: int,
        rng: np.random.Generator
    ) -> None:
        """Append `count` random walls."""
        for _ in range(count):
            self.add_random_wall(min_length, max_length, rng)

    def remove_random_wall(self, rng: np.random.Generator) -> Optional[Wall]:
        """
        Remove one uniformly chosen wall.

        Returns:
            The removed wall, or None if there were no walls (no random draw is made)
        """
        if not self.walls:
            return None
        index = int(rng.integers(0, len(self.walls)))
        return self.walls.pop(index)

    def copy(self) -> "WallSet":
        """Create a copy with its own wall list."""
        return WallSet(
            width=self.width,
            height=self.height,
            walls=list(self.walls),
            spawn=self.spawn,
            exit=self.exit
        )

    def same_layout(self, other: "WallSet") -> bool:
        """True if both genotypes have identical size, endpoints and walls."""
        return (
            self.width == other.width
            and self.height == other.height
            and self.spawn == other.spawn
            and self.exit == other.exit
            and self.walls == other.walls
        )

    def wall_count(self) -> int:
        return len(self.walls)

    def __str__(self) -> str:
        lengths = " ".join(str(w.length) for w in self.walls)
        return f"Dungeon {self.width}x{self.height} {lengths}".rstrip()


def create_wallset(
    width: int,
    height: int,
    spawn: tuple[int, int],
    exit: tuple[int, int],
    walls: Optional[Iterable[Wall]] = None
) -> WallSet:
    """
    Create a wall set with the given endpoints.

    Endpoints go through set_spawn/set_exit, so out-of-range requests
    leave the defaults in place.
    """
    genotype = WallSet(width, height)
    genotype.set_spawn(*spawn)
    genotype.set_exit(*exit)
    if walls is not None:
        genotype.extend_walls(walls)
    return genotype
