"""
Evolution of dungeon levels.

Runs a generational genetic algorithm over WallSet genotypes:
fitness-proportionate selection, spatial crossover and add/remove-wall
mutation, with no elitism. The best genotype seen in any generation is
kept as the result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import numpy as np

from .data_models import WallSet, create_wallset
from .crossover import spatial_crossover
from .mutation import mutate
from .fitness import FitnessConfig, get_fitness
from .tile_grid import TileGrid


class NoViableLevelError(Exception):
    """Raised when evolution never produced a level with fitness above 0."""
    pass


class EvolutionState(Enum):
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    BREEDING = "breeding"
    DONE = "done"


@dataclass
class EvolutionConfig:
    """
    Parameters for a single evolution run.

    Attributes:
        width: Level width in tiles
        height: Level height in tiles
        spawn: Fixed spawn tile for every genotype
        exit: Fixed exit tile (defaults to the far corner)
        initial_walls: Number of random walls in each initial genotype
        min_wall_length: Minimum random wall length
        max_wall_length: Maximum random wall length
        population_size: Individuals per generation
        generations: Number of breeding rounds after the initial generation
        mutation_rate: Chance for each child to be mutated
        fitness: Fitness weights and targets
        random_seed: Seed for the run's random number generator
    """
    width: int = 10
    height: int = 10
    spawn: Tuple[int, int] = (0, 0)
    exit: Optional[Tuple[int, int]] = None
    initial_walls: int = 10
    min_wall_length: int = 2
    max_wall_length: int = 5
    population_size: int = 20
    generations: int = 10
    mutation_rate: float = 0.1
    fitness: FitnessConfig = field(default_factory=FitnessConfig)
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.exit is None:
            self.exit = (self.width - 1, self.height - 1)
        self.spawn = tuple(self.spawn)
        self.exit = tuple(self.exit)

        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Level size must be positive, got {self.width}x{self.height}")
        if self.population_size <= 0:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if self.initial_walls < 0:
            raise ValueError(f"initial_walls must be non-negative, got {self.initial_walls}")
        if self.min_wall_length < 1:
            raise ValueError(f"min_wall_length must be positive, got {self.min_wall_length}")
        if self.min_wall_length > self.max_wall_length:
            raise ValueError(
                f"min_wall_length ({self.min_wall_length}) exceeds max_wall_length ({self.max_wall_length})"
            )


@dataclass
class GenerationRecord:
    """Fitness summary of one generation."""
    generation: int
    max_fitness: int
    total_fitness: int

    def to_dict(self) -> dict:
        return {
            'generation': self.generation,
            'max_fitness': self.max_fitness,
            'total_fitness': self.total_fitness,
        }


@dataclass
class EvolutionResult:
    """
    Outcome of an evolution run.

    Attributes:
        best_genotype: Best genotype over all generations (None if nothing scored above 0)
        best_fitness: Fitness of best_genotype
        history: One record per evaluated generation
        seed: Random seed used, if known
    """
    best_genotype: Optional[WallSet]
    best_fitness: int
    history: List[GenerationRecord] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.best_genotype is not None

    def best_grid(self) -> TileGrid:
        """Rasterize the best genotype."""
        if self.best_genotype is None:
            raise NoViableLevelError("Evolution failed to generate non-zero fitness.")
        return TileGrid.from_wallset(self.best_genotype)


class Evolution:
    """
    Evolves a dungeon level.

    One random number generator is owned by the driver and handed to
    every genetic operator, so a seeded run is fully reproducible.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        rng: Optional[np.random.Generator] = None,
        verbose: bool = False
    ):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.random_seed)
        self.verbose = verbose

        self.state = EvolutionState.INITIALIZING
        self.population: List[WallSet] = []
        # Evaluated generation, in population order
        self.fit_population: List[Tuple[WallSet, int]] = []
        self.generation_fitness = 0

        self.best_genotype: Optional[WallSet] = None
        self.best_fitness = 0
        self.history: List[GenerationRecord] = []

    def new_genotype(self) -> WallSet:
        """A random genotype with the configured endpoints."""
        config = self.config
        genotype = create_wallset(config.width, config.height, config.spawn, config.exit)
        genotype.generate_random_walls(
            config.initial_walls, config.min_wall_length, config.max_wall_length, self.rng
        )
        return genotype

    def initialise_population(self) -> None:
        """Generate random genotypes to start the evolutionary process."""
        self.state = EvolutionState.INITIALIZING
        self.population = [self.new_genotype() for _ in range(self.config.population_size)]
        self.fit_population = []

    def calculate_fitness(self) -> int:
        """
        Score every genotype in the population.

        Returns:
            Total fitness of the population
        """
        self.fit_population = []
        for genotype in self.population:
            grid = TileGrid.build(genotype)
            grid.finalize()
            self.fit_population.append((genotype, get_fitness(grid, self.config.fitness)))

        self.generation_fitness = sum(fitness for _, fitness in self.fit_population)
        return self.generation_fitness

    def evaluate_population(self) -> int:
        """
        Score the population and update the best genotype.

        The first genotype with the highest fitness wins ties, both within
        a generation and against earlier generations.

        Returns:
            Max fitness in this generation
        """
        self.state = EvolutionState.EVALUATING
        self.calculate_fitness()

        max_fitness = 0
        generation_best = None
        for genotype, fitness in self.fit_population:
            if fitness > max_fitness:
                generation_best = genotype
                max_fitness = fitness

        if generation_best is not None and max_fitness > self.best_fitness:
            self.best_genotype = generation_best
            self.best_fitness = max_fitness

        return max_fitness

    def select(self) -> WallSet:
        """
        Fitness proportionate selection.

        An individual's chance of being chosen is proportional to its
        fitness. If the whole population scored 0, an individual is
        chosen uniformly at random instead.

        Raises:
            RuntimeError: If the population has not been evaluated
        """
        if not self.fit_population:
            raise RuntimeError("Population must be evaluated before selection")

        if self.generation_fitness <= 0:
            index = int(self.rng.integers(0, len(self.fit_population)))
            return self.fit_population[index][0]

        # Amount of fitness consumed before we choose
        remaining = int(self.rng.integers(0, self.generation_fitness)) + 1
        selected = None
        for genotype, fitness in self.fit_population:
            selected = genotype
            remaining -= fitness
            if remaining <= 0:
                break
        return selected

    def add_to_population(self, genotype: WallSet) -> None:
        """Add an individual to the next generation, possibly mutated."""
        if self.rng.random() < self.config.mutation_rate:
            genotype = mutate(
                genotype, self.config.min_wall_length, self.config.max_wall_length, self.rng
            )
        self.population.append(genotype)

    def breed(self) -> None:
        """Replace the population with children of the evaluated generation."""
        self.state = EvolutionState.BREEDING
        self.population = []
        required = self.config.population_size
        while required > 0:
            parent_a = self.select()
            parent_b = self.select()
            child_a, child_b = spatial_crossover(parent_a, parent_b, self.rng)
            self.add_to_population(child_a)
            if required > 1:
                self.add_to_population(child_b)
            required -= 2

    def evolve(self) -> EvolutionResult:
        """
        Run the genetic algorithm.

        Evaluates a random initial generation, then breeds and evaluates
        `generations` more.

        Returns:
            EvolutionResult with the best genotype and per-generation history
        """
        self.log_message("Evolving...")
        self.best_genotype = None
        self.best_fitness = 0
        self.history = []

        self.initialise_population()
        max_fitness = self.evaluate_population()
        self.log_generation(0, max_fitness, self.generation_fitness)

        for gen in range(self.config.generations):
            self.breed()
            max_fitness = self.evaluate_population()
            self.log_generation(gen + 1, max_fitness, self.generation_fitness)

        self.state = EvolutionState.DONE

        if self.best_genotype is None:
            self.log_message("Evolution failed to generate non-zero fitness.")
        else:
            self.log_message(f"Best fitness: {self.best_fitness}")

        return EvolutionResult(
            best_genotype=self.best_genotype,
            best_fitness=self.best_fitness,
            history=list(self.history),
            seed=self.config.random_seed
        )

    def get_dungeon(self) -> WallSet:
        """
        Best genotype found.

        Raises:
            NoViableLevelError: If no genotype ever scored above 0
        """
        if self.best_genotype is None:
            raise NoViableLevelError("Evolution failed to generate non-zero fitness.")
        return self.best_genotype

    def log_message(self, message: str) -> None:
        if self.verbose:
            print(message)

    def log_generation(self, generation: int, max_fitness: int, total_fitness: int) -> None:
        self.history.append(GenerationRecord(generation, max_fitness, total_fitness))
        if self.verbose:
            print(f"  Generation {generation}: max fitness {max_fitness}, total fitness {total_fitness}")


def evolve_dungeon(config: EvolutionConfig, verbose: bool = False) -> WallSet:
    """
    Evolve a level and return its best genotype.

    Raises:
        NoViableLevelError: If no genotype ever scored above 0
    """
    evolver = Evolution(config, verbose=verbose)
    evolver.evolve()
    return evolver.get_dungeon()
