"""
Visualization utilities for the dungeon GA.

Turns a tile grid into a text map, a fitness report and matplotlib
plots of the level and of fitness over generations.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import matplotlib.patches as patches

from .evolution import GenerationRecord
from .fitness import FitnessConfig, density_fitness, path_fitness, get_fitness
from .tile_grid import TileGrid

TILE_COLORS = {
    'wall': "dimgray",
    'spawn': "yellow",
    'exit': "red",
    'path': "royalblue",
}


def render_ascii(grid: TileGrid, show_path: bool = True) -> str:
    """
    Draw a grid as text, top row (highest y) first.

    Legend: '#' wall, 'S' spawn, 'E' exit, '*' path, '.' empty
    """
    path_cells = set(grid.get_path() or []) if show_path else set()
    rows = []
    for y in range(grid.height - 1, -1, -1):
        row = []
        for x in range(grid.width):
            if grid.is_wall(x, y):
                row.append('#')
            elif grid.is_spawn(x, y):
                row.append('S')
            elif grid.is_exit(x, y):
                row.append('E')
            elif (x, y) in path_cells:
                row.append('*')
            else:
                row.append('.')
        rows.append("".join(row))
    return "\n".join(rows)


def level_report(grid: TileGrid, fitness_config: FitnessConfig) -> Dict[str, Any]:
    """
    Collect the display values for a level.

    Returns:
        Dictionary with density, path length and the fitness breakdown
    """
    return {
        'density': grid.density(),
        'density_fitness': density_fitness(grid, fitness_config),
        'path_length': grid.path_length(),
        'path_fitness': path_fitness(grid, fitness_config),
        'total_fitness': get_fitness(grid, fitness_config),
    }


def format_level_report(report: Dict[str, Any]) -> str:
    """Format a level report as display text."""
    lines = [f"Density: {report['density']:.3f} (Fitness: {report['density_fitness']})"]
    if report['path_length'] is None:
        lines.append(f"No path (Fitness: {report['path_fitness']})")
    else:
        lines.append(f"Path length: {report['path_length']} (Fitness: {report['path_fitness']})")
    lines.append(f"Total fitness: {report['total_fitness']}")
    return "\n".join(lines)


def plot_level(
    grid: TileGrid,
    ax: plt.Axes = None,
    save_path: Optional[Union[str, Path]] = None,
    title: str = "Evolved Dungeon",
    figsize: Tuple[int, int] = (8, 8)
) -> plt.Axes:
    """
    Plot walls, spawn, exit and the path of a level.

    Args:
        grid: Level to draw
        ax: Axes to draw on (a new figure is created if None)
        save_path: Optional path to save the figure
        title: Plot title
        figsize: Figure size when creating a new figure

    Returns:
        The axes drawn on
    """
    fig = None
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    # Draw grid
    for x in range(grid.width + 1):
        ax.axvline(x - 0.5, color="lightgray", linewidth=0.5, alpha=0.5)
    for y in range(grid.height + 1):
        ax.axhline(y - 0.5, color="lightgray", linewidth=0.5, alpha=0.5)

    for x in range(grid.width):
        for y in range(grid.height):
            if grid.is_wall(x, y):
                ax.add_patch(patches.Rectangle(
                    (x - 0.5, y - 0.5), 1, 1, facecolor=TILE_COLORS['wall'], edgecolor="black"
                ))

    path = grid.get_path()
    if path:
        # Crumbs between the endpoints
        crumbs = path[1:-1]
        if crumbs:
            xs, ys = zip(*crumbs)
            ax.scatter(xs, ys, c=TILE_COLORS['path'], s=40, marker="o",
                       label=f"path ({len(path)})", alpha=0.8)

    if grid.spawn is not None:
        ax.scatter([grid.spawn[0]], [grid.spawn[1]], c=TILE_COLORS['spawn'], s=150,
                   marker="s", edgecolors="black", label="spawn")
    if grid.exit is not None:
        ax.scatter([grid.exit[0]], [grid.exit[1]], c=TILE_COLORS['exit'], s=150,
                   marker="s", edgecolors="black", label="exit")

    ax.set_xlim(-0.5, grid.width - 0.5)
    ax.set_ylim(-0.5, grid.height - 0.5)
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.legend(bbox_to_anchor=(1.05, 1), loc='upper left')

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        if fig is not None:
            plt.close(fig)

    return ax


def plot_fitness_history(
    records: List[GenerationRecord],
    ax: plt.Axes = None,
    save_path: Optional[Union[str, Path]] = None
) -> plt.Axes:
    """Plot max and total fitness per generation."""
    fig = None
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    generations = [r.generation for r in records]
    ax.plot(generations, [r.max_fitness for r in records], label="max fitness", marker="o")
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.set_title("Fitness by Generation")
    ax.grid(True, alpha=0.3)

    ax_total = ax.twinx()
    ax_total.plot(generations, [r.total_fitness for r in records], color="orange",
                  linestyle="--", label="total fitness")
    ax_total.set_ylabel("Total fitness")

    lines = ax.get_lines() + ax_total.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc="lower right")

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        if fig is not None:
            plt.close(fig)

    return ax
