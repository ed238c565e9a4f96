"""
CLI module for the dungeon GA.

Loads a run configuration, evolves a level and reports the result.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from .config_loader import (
    ConfigurationError,
    load_config,
    create_evolution_config,
    get_output_config
)
from .evolution import Evolution, EvolutionResult, NoViableLevelError
from .io_utils import save_fitness_log, resolve_fitness_log_path
from .visualization_utils import render_ascii, level_report, format_level_report, plot_level


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply command-line overrides on top of a loaded configuration.

    Supported keys: generations, population_size, random_seed (evolution
    section) and fitness_log, plot, verbose (output section). None values
    are ignored.
    """
    if not overrides:
        return config

    config = dict(config)
    evolution = dict(config.get('evolution', {}) or {})
    output = dict(config.get('output', {}) or {})

    for key in ('generations', 'population_size', 'random_seed'):
        if overrides.get(key) is not None:
            evolution[key] = overrides[key]
    for key in ('fitness_log', 'plot', 'verbose'):
        if overrides.get(key) is not None:
            output[key] = overrides[key]

    config['evolution'] = evolution
    config['output'] = output
    return config


def run_from_config(config_path: str, overrides: Optional[Dict[str, Any]] = None) -> EvolutionResult:
    """
    Load run configuration, evolve a level and report it.

    Args:
        config_path: Path to run configuration YAML file
        overrides: Optional values replacing those in the file

    Returns:
        EvolutionResult of the run

    Raises:
        ConfigurationError: If config is missing or invalid, or the fitness
            log already exists and overwrite is off
        NoViableLevelError: If no level with fitness above 0 was found
    """
    config = apply_overrides(load_config(config_path), overrides)
    evolution_config = create_evolution_config(config)
    output = get_output_config(config)
    verbose = output['verbose']

    # An existing log is rejected before the run starts
    log_path = None
    if output['fitness_log']:
        log_path = resolve_fitness_log_path(output['fitness_log'])
        if log_path.exists() and not output['overwrite']:
            raise ConfigurationError(
                f"Fitness log already exists: {log_path} (set output.overwrite to replace it)"
            )

    if verbose:
        print("=" * 70)
        print("DUNGEON EVOLUTION")
        print("=" * 70)
        print(f"Configuration: {config_path}")
        print(f"Grid: {evolution_config.width}x{evolution_config.height}, "
              f"spawn {evolution_config.spawn}, exit {evolution_config.exit}")
        print(f"Population: {evolution_config.population_size}, "
              f"generations: {evolution_config.generations}, "
              f"mutation rate: {evolution_config.mutation_rate}")
        print(f"Random seed: {evolution_config.random_seed}\n")

    evolver = Evolution(evolution_config, verbose=verbose)
    result = evolver.evolve()

    if log_path is not None:
        save_fitness_log(result.history, log_path, overwrite=output['overwrite'])
        if verbose:
            print(f"\nFitness log: {log_path}")

    if not result.succeeded:
        raise NoViableLevelError(
            f"No viable level found after {evolution_config.generations} generations"
        )

    grid = result.best_grid()
    report = level_report(grid, evolution_config.fitness)

    if verbose:
        print()
        print("=" * 70)
        print("BEST LEVEL")
        print("=" * 70)
        print(render_ascii(grid))
        print()
        print(format_level_report(report))
        print(f"Walls: {result.best_genotype.wall_count()}")

    if output['plot']:
        plot_path = Path(output['plot'])
        plot_path.parent.mkdir(parents=True, exist_ok=True)
        plot_level(grid, save_path=plot_path,
                   title=f"Evolved Dungeon (fitness {report['total_fitness']})")
        if verbose:
            print(f"Plot saved: {plot_path}")

    return result


__all__ = [
    'ConfigurationError',
    'NoViableLevelError',
    'apply_overrides',
    'run_from_config',
]
