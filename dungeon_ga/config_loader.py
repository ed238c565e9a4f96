"""
Configuration Loading System

Loads YAML configuration files and converts them to the evolution and
fitness settings used by the dungeon GA.
"""

import time
import yaml
from typing import Dict, List, Any, Optional
from pathlib import Path

from .fitness import FitnessConfig
from .evolution import EvolutionConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


FITNESS_KEYS = [
    "density_weight", "density_target", "max_density_error",
    "path_weight", "path_target", "max_path_error", "no_path_penalty",
]


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigurationError(f"Configuration file is empty: {config_path}")
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration must be a mapping: {config_path}")
    return config


def _is_int(value: Any) -> bool:
    # YAML booleans load as bool, a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_int(value) or isinstance(value, float)


def _seed_issue(random_seed: Any) -> Optional[str]:
    """Describe what is wrong with a configured seed, or None if it is usable"""
    if random_seed is None or random_seed == "random":
        return None
    if isinstance(random_seed, str) and random_seed.isdigit():
        return None
    if _is_int(random_seed) and random_seed >= 0:
        return None
    return f"random_seed must be a non-negative integer or \"random\", got {random_seed!r}"


def parse_point(value: Any, default: Optional[tuple]) -> Optional[tuple]:
    """Read a grid position given as [x, y] or {x:, y:}; None gives the default"""
    if value is None:
        return default
    if isinstance(value, dict):
        return (value.get("x"), value.get("y"))
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    grid_config = config.get("grid", {}) or {}
    width = grid_config.get("width", 10)
    height = grid_config.get("height", 10)

    if not _is_int(width) or width <= 0:
        issues.append("Grid width must be a positive integer")
    if not _is_int(height) or height <= 0:
        issues.append("Grid height must be a positive integer")

    if not issues:
        spawn = parse_point(grid_config.get("spawn"), (0, 0))
        exit_ = parse_point(grid_config.get("exit"), (width - 1, height - 1))
        for name, point in (("spawn", spawn), ("exit", exit_)):
            if len(point) != 2 or not all(_is_int(c) for c in point):
                issues.append(f"Grid {name} must be a pair of integers")
            elif not (0 <= point[0] < width and 0 <= point[1] < height):
                issues.append(f"Grid {name} {point} is outside the {width}x{height} grid")
        if spawn == exit_:
            issues.append("Spawn and exit must be different tiles")

    init_config = config.get("initial_population", {}) or {}
    initial_walls = init_config.get("initial_walls", 10)
    min_len = init_config.get("min_wall_length", 2)
    max_len = init_config.get("max_wall_length", 5)

    if not _is_int(initial_walls) or initial_walls < 0:
        issues.append("initial_walls must be a non-negative integer")
    if not _is_int(min_len) or min_len <= 0:
        issues.append("min_wall_length must be a positive integer")
    if not _is_int(max_len) or max_len <= 0:
        issues.append("max_wall_length must be a positive integer")
    elif _is_int(min_len) and min_len > max_len:
        issues.append(f"min_wall_length ({min_len}) exceeds max_wall_length ({max_len})")

    fitness_config = config.get("fitness", {}) or {}
    for key in FITNESS_KEYS:
        if key in fitness_config:
            value = fitness_config[key]
            if not _is_number(value) or value < 0:
                issues.append(f"fitness.{key} must be a non-negative number")

    evolution_config = config.get("evolution", {}) or {}
    population_size = evolution_config.get("population_size", 20)
    generations = evolution_config.get("generations", 10)
    mutation_rate = evolution_config.get("mutation_rate", 0.1)

    if not _is_int(population_size) or population_size <= 0:
        issues.append("population_size must be a positive integer")
    if not _is_int(generations) or generations < 0:
        issues.append("generations must be a non-negative integer")
    if not _is_number(mutation_rate) or not 0 <= mutation_rate <= 1:
        issues.append("mutation_rate must be between 0 and 1")

    seed_issue = _seed_issue(evolution_config.get("random_seed", 0))
    if seed_issue:
        issues.append(seed_issue)

    return issues


def resolve_seed(random_seed: Any) -> int:
    """Turn a configured seed into an int, drawing one from the clock if needed"""
    issue = _seed_issue(random_seed)
    if issue:
        raise ConfigurationError(issue)
    if random_seed is None or random_seed == "random":
        return int(time.time() * 1000000) % 2147483647
    return int(random_seed)


def create_evolution_config(config: Dict[str, Any]) -> EvolutionConfig:
    """
    Create a configured EvolutionConfig from a configuration dictionary

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("Invalid configuration: " + "; ".join(issues))

    grid_config = config.get("grid", {}) or {}
    width = grid_config.get("width", 10)
    height = grid_config.get("height", 10)

    fitness_config = config.get("fitness", {}) or {}
    fitness = FitnessConfig(**{k: fitness_config[k] for k in FITNESS_KEYS if k in fitness_config})

    init_config = config.get("initial_population", {}) or {}
    evolution_config = config.get("evolution", {}) or {}

    return EvolutionConfig(
        width=width,
        height=height,
        spawn=parse_point(grid_config.get("spawn"), (0, 0)),
        exit=parse_point(grid_config.get("exit"), (width - 1, height - 1)),
        initial_walls=init_config.get("initial_walls", 10),
        min_wall_length=init_config.get("min_wall_length", 2),
        max_wall_length=init_config.get("max_wall_length", 5),
        population_size=evolution_config.get("population_size", 20),
        generations=evolution_config.get("generations", 10),
        mutation_rate=float(evolution_config.get("mutation_rate", 0.1)),
        fitness=fitness,
        random_seed=resolve_seed(evolution_config.get("random_seed", 0)),
    )


def create_evolution_config_from_file(config_path: str = "config.yaml") -> EvolutionConfig:
    """Load a YAML file and build an EvolutionConfig from it"""
    return create_evolution_config(load_config(config_path))


def get_output_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Get output configuration (fitness log, plot, verbosity)"""
    output_config = config.get("output", {}) or {}
    return {
        "fitness_log": output_config.get("fitness_log"),
        "plot": output_config.get("plot"),
        "verbose": bool(output_config.get("verbose", True)),
        "overwrite": bool(output_config.get("overwrite", False)),
    }


def print_config_summary(config_path: str = "config.yaml"):
    """Print a summary of the configuration"""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
        return

    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)

    grid_config = config.get("grid", {}) or {}
    print(f"Grid Size: {grid_config.get('width', 'N/A')} x {grid_config.get('height', 'N/A')}")
    print(f"Spawn: {grid_config.get('spawn', 'default')}  Exit: {grid_config.get('exit', 'default')}")

    init_config = config.get("initial_population", {}) or {}
    print(f"\nInitial walls: {init_config.get('initial_walls', 10)} "
          f"(length {init_config.get('min_wall_length', 2)}-{init_config.get('max_wall_length', 5)})")

    fitness_config = config.get("fitness", {}) or {}
    print("\nFitness:")
    for key in FITNESS_KEYS:
        if key in fitness_config:
            print(f"  {key}: {fitness_config[key]}")

    evolution_config = config.get("evolution", {}) or {}
    print(f"\nPopulation: {evolution_config.get('population_size', 20)}")
    print(f"Generations: {evolution_config.get('generations', 10)}")
    print(f"Mutation rate: {evolution_config.get('mutation_rate', 0.1)}")
    print(f"Random seed: {evolution_config.get('random_seed', 0)}")

    issues = validate_config(config)
    if issues:
        print(f"\nValidation Issues ({len(issues)}):")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("\nConfiguration is valid ✓")

    print("=" * 50)
