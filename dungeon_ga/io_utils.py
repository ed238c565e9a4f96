"""
I/O utilities for the dungeon GA.

Handles the optional diagnostic fitness log: one CSV row per generation
with its max and total fitness.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .evolution import GenerationRecord

FITNESS_LOG_FIELDS = ['generation', 'max_fitness', 'total_fitness']


def save_fitness_log(
    records: list[GenerationRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save generation records to a CSV file.

    Args:
        records: Generation records, in generation order
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved fitness log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Fitness log already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=FITNESS_LOG_FIELDS)
        writer.writeheader()

        for record in records:
            writer.writerow(record.to_dict())

    return output_path


def load_fitness_log(log_path: Union[str, Path]) -> list[GenerationRecord]:
    """
    Load generation records from a fitness log CSV.

    Raises:
        FileNotFoundError: If the log doesn't exist
        ValueError: If the CSV header is not a fitness log header
    """
    log_path = Path(log_path)

    if not log_path.exists():
        raise FileNotFoundError(f"Fitness log not found: {log_path}")

    records = []
    with open(log_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None or not all(col in reader.fieldnames for col in FITNESS_LOG_FIELDS):
            raise ValueError(
                f"Invalid fitness log format in {log_path}. Expected columns: {','.join(FITNESS_LOG_FIELDS)}"
            )

        for row in reader:
            records.append(
                GenerationRecord(
                    generation=int(row['generation']),
                    max_fitness=int(row['max_fitness']),
                    total_fitness=int(row['total_fitness'])
                )
            )

    return records


def timestamped_log_path(directory: Union[str, Path], prefix: str = "fitness", now: Optional[datetime] = None) -> Path:
    """
    Build a log path such as fitness20260101120000.csv inside a directory.
    """
    now = now or datetime.now()
    return Path(directory) / f"{prefix}{now.strftime('%Y%m%d%H%M%S')}.csv"


def resolve_fitness_log_path(target: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """
    Resolve the configured fitness log location.

    A directory (an existing one, or a path ending in a separator) gets a
    timestamped file name inside it; anything else is used as given.
    """
    path = Path(target)
    if path.is_dir() or str(target).endswith(('/', '\\')):
        return timestamped_log_path(path, now=now)
    return path
