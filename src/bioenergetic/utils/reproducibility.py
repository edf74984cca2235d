# src/bioenergetic/utils/reproducibility.py
"""Reproducibility utilities for simulation runs.

Records the git state, the numerical stack and a hash of the configuration
next to every run so that trajectories can be traced back to their inputs.
"""

import hashlib
import json
import logging
import platform
import subprocess
import sys
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
import scipy

logger = logging.getLogger(__name__)


@dataclass
class GitInfo:
    """Git repository state."""
    commit: str
    branch: str
    dirty: bool


@dataclass
class EnvironmentInfo:
    """Runtime environment information."""
    python_version: str
    hostname: str
    platform: str
    numpy_version: str
    scipy_version: str
    pandas_version: str


@dataclass
class RunManifest:
    """Complete run manifest for reproducibility."""
    started_at: str
    command: str
    config_path: Optional[str]
    git: Optional[GitInfo]
    environment: EnvironmentInfo
    config_hash: str


def _git(args, cwd: Optional[str]) -> str:
    return subprocess.check_output(["git", *args], cwd=cwd, stderr=subprocess.DEVNULL).decode().strip()


def get_git_info(repo_path: Optional[Path] = None) -> Optional[GitInfo]:
    """Get current git repository state.

    Args:
        repo_path: Path to repository. If None, uses current directory.

    Returns:
        GitInfo or None if not a git repo.
    """
    cwd = str(repo_path) if repo_path else None
    try:
        return GitInfo(
            commit=_git(["rev-parse", "HEAD"], cwd),
            branch=_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd),
            dirty=len(_git(["status", "--porcelain"], cwd)) > 0,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def get_environment_info() -> EnvironmentInfo:
    """Get current runtime environment information."""
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        hostname=platform.node(),
        platform=platform.platform(),
        numpy_version=np.__version__,
        scipy_version=scipy.__version__,
        pandas_version=pd.__version__,
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """Compute hash of configuration for quick comparison."""
    config_str = json.dumps(config, sort_keys=True, default=str)
    return hashlib.md5(config_str.encode()).hexdigest()[:12]


def create_run_manifest(
    config: Dict[str, Any],
    config_path: Optional[Union[str, Path]] = None,
) -> RunManifest:
    """Create a complete run manifest.

    Args:
        config: Simulation configuration dict.
        config_path: Path to config file.

    Returns:
        RunManifest with all reproducibility info.
    """
    return RunManifest(
        started_at=datetime.now().isoformat(),
        command=" ".join(sys.argv),
        config_path=str(config_path) if config_path is not None else None,
        git=get_git_info(),
        environment=get_environment_info(),
        config_hash=compute_config_hash(config),
    )


def save_run_manifest(
    run_dir: Union[str, Path],
    config: Dict[str, Any],
    config_path: Optional[Union[str, Path]] = None,
) -> Path:
    """Write ``meta/run_manifest.json`` into the run directory.

    Returns:
        Path to the manifest file.
    """
    meta_dir = Path(run_dir) / "meta"
    meta_dir.mkdir(parents=True, exist_ok=True)

    manifest = create_run_manifest(config, config_path)
    manifest_path = meta_dir / "run_manifest.json"
    with open(manifest_path, "w") as f:
        json.dump(asdict(manifest), f, indent=2)

    if manifest.git is None:
        logger.debug("Not inside a git repository, manifest has no git info")
    logger.info(f"Saved run manifest to {manifest_path}")
    return manifest_path
