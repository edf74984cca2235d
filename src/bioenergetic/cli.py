# src/bioenergetic/cli.py
"""Command-line entry point for food-web simulations.

Workflow:
1. Load configuration from YAML and merge it over the packaged default,
   so a file only needs the keys it changes
2. Apply dotted-key overrides and validate
3. Create run directory with timestamp and setup logging
4. Save resolved configuration and run manifest
5. Build model parameters and integrate
6. Save trajectory CSV and community summary JSON

Usage:
    bioenergetic-simulate --config path/to/foodweb.yaml
    bioenergetic-simulate --override productivity.mode=competitive --override temperature=298.15
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np
from omegaconf import DictConfig, OmegaConf

from .evaluation import summarize
from .models.factory import build_parameters
from .simulation import SimulationResult, simulate
from .utils.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    get_value,
    load_config,
    merge_configs,
    save_config,
    to_dict,
    validate_config,
)
from .utils.io import create_run_dir, save_summary, save_trajectory
from .utils.logging import setup_logging
from .utils.reproducibility import save_run_manifest

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Simulate a bioenergetic consumer-resource food web"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Dotted config override, may be repeated",
    )
    return parser.parse_args(argv)


def run(cfg: DictConfig, run_dir: Path) -> SimulationResult:
    """Build parameters from ``cfg``, integrate and save outputs into ``run_dir``."""
    parameters = build_parameters(cfg)

    initial = get_value(cfg, "simulation.initial_biomass")
    if initial is None:
        biomass = np.random.default_rng(get_value(cfg, "simulation.seed")).uniform(0.0, 1.0, parameters.S)
        logger.info(f"Drew random initial biomass: {np.round(biomass, 4)}")
    else:
        biomass = np.asarray(list(initial), dtype=float)
    if biomass.shape != (parameters.S,):
        raise ConfigError(
            f"simulation.initial_biomass must have {parameters.S} entries, got {biomass.size}"
        )

    nutrients = get_value(cfg, "nutrients.initial")
    result = simulate(
        parameters,
        biomass,
        start=get_value(cfg, "simulation.start", 0.0),
        stop=cfg.simulation.stop,
        steps=get_value(cfg, "simulation.steps"),
        nutrients=None if nutrients is None else np.asarray(list(nutrients), dtype=float),
        method=cfg.simulation.method,
        rtol=get_value(cfg, "simulation.rtol", 1e-6),
        atol=get_value(cfg, "simulation.atol", 1e-9),
    )

    save_trajectory(result, run_dir)
    last = min(get_value(cfg, "simulation.last", 100), len(result.t))
    summary = summarize(result, last=last)
    logger.info(f"Summary over last {last} points: {summary}")
    save_summary(summary, run_dir)
    return result


def main(argv: Optional[List[str]] = None) -> Path:
    """Main simulation function.

    Returns:
        Path to the run directory.
    """
    args = parse_args(argv)

    cfg = merge_configs(
        load_config(DEFAULT_CONFIG_PATH, resolve=False),
        load_config(args.config, overrides=args.override, resolve=False),
    )
    OmegaConf.resolve(cfg)
    validate_config(cfg)

    run_dir = create_run_dir(
        get_value(cfg, "logging.save_dir", "outputs"),
        experiment_name=get_value(cfg, "logging.experiment_name", "foodweb"),
    )
    setup_logging(run_dir, level=get_value(cfg, "logging.level", "INFO"))
    logger.info(f"Run directory: {run_dir}")

    save_config(cfg, run_dir / "config_resolved.yaml")
    save_run_manifest(run_dir, to_dict(cfg), args.config)

    run(cfg, run_dir)
    logger.info("Simulation complete")
    return run_dir


if __name__ == "__main__":
    main()
