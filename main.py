#!/usr/bin/env python3
"""
Evolutionary Dungeon Generator

Main entry point for evolving a dungeon level from a YAML configuration.
"""

import sys
import argparse
import time

from dungeon_ga.cli import run_from_config
from dungeon_ga.config_loader import ConfigurationError, print_config_summary
from dungeon_ga.evolution import NoViableLevelError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evolutionary Dungeon Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py                               # Evolve with config.yaml
  python3 main.py --generations 100 --seed 7    # Override run length and seed
  python3 main.py --log out/fitness.csv         # Write per-generation fitness CSV
  python3 main.py --plot out/dungeon.png        # Save a plot of the best level
  python3 main.py --summary-only                # Print the configuration and exit
        """
    )

    parser.add_argument(
        '--config', '-c',
        default='config.yaml',
        help='Configuration file path (default: config.yaml)'
    )
    parser.add_argument(
        '--generations', '-g',
        type=int,
        metavar='N',
        help='Number of generations (overrides config)'
    )
    parser.add_argument(
        '--population', '-p',
        type=int,
        metavar='N',
        help='Population size (overrides config)'
    )
    parser.add_argument(
        '--seed', '-s',
        type=int,
        help='Random seed (overrides config)'
    )
    parser.add_argument(
        '--log', '-l',
        metavar='PATH',
        help='Write the fitness log CSV to PATH (a directory gets a timestamped file name)'
    )
    parser.add_argument(
        '--plot',
        metavar='PATH',
        help='Save a plot of the best level to PATH'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress progress output'
    )
    parser.add_argument(
        '--summary-only',
        action='store_true',
        help='Print the configuration summary and exit'
    )
    return parser


def main(argv=None) -> int:
    """Main entry point with command-line argument parsing"""
    args = build_parser().parse_args(argv)

    if args.summary_only:
        print_config_summary(args.config)
        return 0

    overrides = {
        'generations': args.generations,
        'population_size': args.population,
        'random_seed': args.seed,
        'fitness_log': args.log,
        'plot': args.plot,
        'verbose': False if args.quiet else None,
    }

    try:
        start_time = time.time()
        result = run_from_config(args.config, overrides)
        if not args.quiet:
            print(f"\nEvolution completed in {time.time() - start_time:.3f} seconds")
            print(f"Best fitness: {result.best_fitness}")
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
        return 1
    except FileExistsError as e:
        print(f"Output Error: {e}")
        return 1
    except NoViableLevelError as e:
        print(f"Generation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
