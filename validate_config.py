#!/usr/bin/env python3
"""
Configuration Validation Tool

Validates YAML configuration files for the dungeon generator and
provides detailed feedback about parameter values and potential issues.
"""

import sys
import argparse
from typing import Dict, Any

from dungeon_ga.config_loader import load_config, validate_config, parse_point, ConfigurationError


class ConfigValidator:
    """Advanced configuration validator with detailed feedback"""

    def __init__(self):
        self.warnings = []
        self.errors = []
        self.recommendations = []

    def validate_comprehensive(self, config_path: str) -> Dict[str, Any]:
        """Perform comprehensive validation with detailed feedback"""
        try:
            config = load_config(config_path)
        except ConfigurationError as e:
            return {
                'valid': False,
                'errors': [f"Failed to load configuration: {e}"],
                'warnings': [],
                'recommendations': [],
                'summary': {}
            }
        return self.validate_dict(config)

    def validate_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate an already loaded configuration"""
        self.warnings = []
        self.errors = []
        self.recommendations = []

        # Basic validation
        self.errors.extend(validate_config(config))

        if not self.errors:
            # Advanced validation
            self._validate_grid(config.get('grid', {}) or {})
            self._validate_initial_population(config.get('initial_population', {}) or {},
                                              config.get('grid', {}) or {})
            self._validate_fitness(config.get('fitness', {}) or {}, config.get('grid', {}) or {})
            self._validate_evolution(config.get('evolution', {}) or {})

        summary = self._generate_summary(config) if not self.errors else {}

        return {
            'valid': len(self.errors) == 0,
            'errors': self.errors,
            'warnings': self.warnings,
            'recommendations': self.recommendations,
            'summary': summary
        }

    def _validate_grid(self, grid_config: Dict[str, Any]):
        """Validate grid configuration"""
        width = grid_config.get('width', 10)
        height = grid_config.get('height', 10)

        if width * height > 10000:
            self.warnings.append(f"Large grid size ({width}x{height}) makes every pathfind slower")
        elif width < 5 or height < 5:
            self.warnings.append(f"Small grid size ({width}x{height}) limits level variety")

        aspect_ratio = max(width, height) / min(width, height)
        if aspect_ratio > 5:
            self.warnings.append(f"Extreme aspect ratio ({aspect_ratio:.1f}:1) leaves little room for walls")

    def _validate_initial_population(self, init_config: Dict[str, Any], grid_config: Dict[str, Any]):
        """Validate initial population configuration"""
        width = grid_config.get('width', 10)
        height = grid_config.get('height', 10)
        initial_walls = init_config.get('initial_walls', 10)
        max_len = init_config.get('max_wall_length', 5)

        if initial_walls == 0:
            self.warnings.append("initial_walls is 0: every initial level is empty")
        if max_len > max(width, height):
            self.warnings.append(
                f"max_wall_length ({max_len}) exceeds the grid size; long walls are always clipped"
            )
        if initial_walls * max_len > width * height:
            self.recommendations.append(
                "Initial walls could cover the whole grid; consider fewer or shorter walls"
            )

    def _validate_fitness(self, fitness_config: Dict[str, Any], grid_config: Dict[str, Any]):
        """Validate fitness configuration"""
        width = grid_config.get('width', 10)
        height = grid_config.get('height', 10)
        spawn = parse_point(grid_config.get('spawn'), (0, 0))
        exit_ = parse_point(grid_config.get('exit'), (width - 1, height - 1))

        density_weight = fitness_config.get('density_weight', 0.0)
        path_weight = fitness_config.get('path_weight', 100.0)

        if density_weight <= 0 and path_weight <= 0:
            self.errors.append("At least one of density_weight and path_weight must be positive")
            return

        if density_weight > 0:
            density_target = fitness_config.get('density_target', 0.3)
            max_density_error = fitness_config.get('max_density_error', 0.1)
            if density_target > 1:
                self.errors.append(f"density_target ({density_target}) cannot exceed 1")
            elif density_target > 0.6:
                self.warnings.append(f"High density_target ({density_target}) rarely leaves a path open")
            if max_density_error == 0:
                self.warnings.append("max_density_error is 0: only an exact density scores")

        if path_weight > 0:
            path_target = fitness_config.get('path_target', 30)
            max_path_error = fitness_config.get('max_path_error', 10)
            shortest = abs(spawn[0] - exit_[0]) + abs(spawn[1] - exit_[1]) + 1
            if path_target + max_path_error < shortest:
                self.errors.append(
                    f"path_target ({path_target}) + max_path_error ({max_path_error}) is below "
                    f"the shortest possible path ({shortest} tiles)"
                )
            elif path_target < shortest:
                self.warnings.append(
                    f"path_target ({path_target}) is below the shortest possible path ({shortest} tiles)"
                )
            if path_target > width * height:
                self.warnings.append(f"path_target ({path_target}) exceeds the number of tiles")
            if fitness_config.get('no_path_penalty', 100) == 0:
                self.recommendations.append("no_path_penalty is 0: unreachable exits are not penalised")

    def _validate_evolution(self, evolution_config: Dict[str, Any]):
        """Validate evolution configuration"""
        population_size = evolution_config.get('population_size', 20)
        generations = evolution_config.get('generations', 10)
        mutation_rate = evolution_config.get('mutation_rate', 0.1)

        if population_size < 10:
            self.warnings.append(f"Small population ({population_size}) may converge prematurely")
        if generations == 0:
            self.warnings.append("generations is 0: only the random initial population is evaluated")
        if population_size * generations > 100000:
            self.warnings.append(
                f"Large search budget ({population_size * generations} evaluations) may be slow"
            )
        if mutation_rate == 0:
            self.recommendations.append("mutation_rate is 0: walls can only be recombined, never added")
        elif mutation_rate > 0.5:
            self.recommendations.append(f"High mutation_rate ({mutation_rate}) makes the search close to random")

    def _generate_summary(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Generate configuration summary"""
        grid_config = config.get('grid', {}) or {}
        evolution_config = config.get('evolution', {}) or {}
        width = grid_config.get('width', 10)
        height = grid_config.get('height', 10)
        population_size = evolution_config.get('population_size', 20)
        generations = evolution_config.get('generations', 10)

        return {
            'grid': {
                'size': f"{width}x{height}",
                'total_tiles': width * height,
                'spawn': list(parse_point(grid_config.get('spawn'), (0, 0))),
                'exit': list(parse_point(grid_config.get('exit'), (width - 1, height - 1))),
            },
            'evolution': {
                'population_size': population_size,
                'generations': generations,
                'evaluations': population_size * (generations + 1),
            },
        }


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Validate dungeon generator configuration files"
    )
    parser.add_argument(
        'config_file',
        nargs='?',
        default='config.yaml',
        help='Configuration file to validate (default: config.yaml)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed validation information'
    )
    parser.add_argument(
        '--warnings-only', '-w',
        action='store_true',
        help='Show only warnings and errors (no recommendations)'
    )

    args = parser.parse_args()

    validator = ConfigValidator()
    result = validator.validate_comprehensive(args.config_file)

    print("=" * 60)
    print("CONFIGURATION VALIDATION REPORT")
    print("=" * 60)
    print(f"File: {args.config_file}")
    print(f"Status: {'VALID' if result['valid'] else 'INVALID'}")
    print()

    if result['errors']:
        print("ERRORS:")
        for error in result['errors']:
            print(f"  - {error}")
        print()

    if result['warnings']:
        print("WARNINGS:")
        for warning in result['warnings']:
            print(f"  - {warning}")
        print()

    if result['recommendations'] and not args.warnings_only:
        print("RECOMMENDATIONS:")
        for rec in result['recommendations']:
            print(f"  - {rec}")
        print()

    if result['summary'] and args.verbose:
        print("SUMMARY:")
        for section, data in result['summary'].items():
            print(f"  {section.title()}:")
            for key, value in data.items():
                print(f"    {key}: {value}")
        print()
    elif result['summary']:
        grid_info = result['summary']['grid']
        evolution_info = result['summary']['evolution']
        print(f"Grid: {grid_info['size']}, Evaluations: {evolution_info['evaluations']}")

    print("=" * 60)

    sys.exit(0 if result['valid'] else 1)


if __name__ == "__main__":
    main()
