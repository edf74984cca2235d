# src/bioenergetic/utils/io.py
"""I/O utilities for simulation runs.

This module provides functions for:
- Creating timestamped run directories
- Saving biomass trajectories as CSV
- Saving community summaries as JSON
"""

import json
import logging
import math
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Union

from ..evaluation.measures import FoodWebSummary
from ..simulation.integrate import SimulationResult

logger = logging.getLogger(__name__)


def create_run_dir(save_dir: Union[str, Path], experiment_name: str = "foodweb") -> Path:
    """Create a timestamped run directory.

    Creates directory structure:
        <save_dir>/<timestamp>_<experiment_name>/
            meta/

    Args:
        save_dir: Base directory for simulation runs.
        experiment_name: Name to append to timestamp.

    Returns:
        Path to created run directory.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(save_dir) / f"{timestamp}_{experiment_name}"
    (run_dir / "meta").mkdir(parents=True, exist_ok=True)

    logger.info(f"Created run directory: {run_dir}")
    return run_dir


def save_trajectory(
    result: SimulationResult,
    run_dir: Union[str, Path],
    filename: str = "trajectory.csv",
) -> Path:
    """Save the simulated trajectory to CSV (columns t, B0..., N1, N2).

    Returns:
        Path to saved CSV file.
    """
    path = Path(run_dir) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    result.to_frame().to_csv(path, index=False)
    logger.info(f"Saved trajectory ({len(result.t)} time points) to {path}")
    return path


def save_summary(
    summary: FoodWebSummary,
    run_dir: Union[str, Path],
    filename: str = "summary.json",
) -> Path:
    """Save community measures to JSON.

    NaN measures are written as null.

    Returns:
        Path to saved JSON file.
    """
    payload = {
        key: (None if isinstance(value, float) and math.isnan(value) else value)
        for key, value in asdict(summary).items()
    }
    path = Path(run_dir) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Saved summary to {path}")
    return path
