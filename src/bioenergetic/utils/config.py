# src/bioenergetic/utils/config.py
"""OmegaConf configuration loading and validation utilities.

This module provides:
- Config loading from YAML with optional CLI overrides
- Schema validation for required fields
- Saving, merging and conversion helpers
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from omegaconf import DictConfig, MissingMandatoryValue, OmegaConf

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default.yaml"

Number = (int, float)


class ConfigError(Exception):
    """Configuration validation error."""

    pass


def load_config(
    config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
    overrides: Optional[List[str]] = None,
    resolve: bool = True,
) -> DictConfig:
    """Load configuration from YAML file with optional CLI overrides.

    Args:
        config_path: Path to YAML configuration file. Defaults to the
            packaged ``config/default.yaml``.
        overrides: List of CLI overrides in "key=value" format.
            Example: ["productivity.mode=competitive", "temperature=298.15"]
        resolve: If True, resolve interpolations (${...}).

    Returns:
        OmegaConf DictConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If config loading fails.

    Example:
        >>> cfg = load_config("foodweb.yaml", overrides=["simulation.stop=1000"])
        >>> print(cfg.simulation.stop)
        1000
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        cfg = OmegaConf.load(config_path)
        logger.info(f"Loaded config from: {config_path}")

        if overrides:
            override_cfg = OmegaConf.from_dotlist(overrides)
            cfg = OmegaConf.merge(cfg, override_cfg)
            logger.info(f"Applied {len(overrides)} config overrides")

        if resolve:
            OmegaConf.resolve(cfg)

        return cfg

    except Exception as e:
        raise ConfigError(f"Failed to load config from {config_path}: {e}") from e


def _type_name(expected_type: Union[type, Tuple[type, ...]]) -> str:
    if isinstance(expected_type, tuple):
        return " or ".join(t.__name__ for t in expected_type)
    return expected_type.__name__


def validate_config(
    cfg: DictConfig,
    schema: Optional[Dict[str, Any]] = None,
) -> None:
    """Validate configuration against schema.

    Args:
        cfg: Configuration to validate.
        schema: Optional schema dict mapping dotted paths to expected types
            (a type or a tuple of types). If None, uses the default food-web
            schema.

    Raises:
        ConfigError: If validation fails with detailed error messages.

    Example:
        >>> validate_config(cfg)  # Uses default schema
        >>> validate_config(cfg, {"custom.field": str})  # Custom schema
    """
    if schema is None:
        schema = _get_default_schema()

    errors = []
    for path, expected_type in schema.items():
        try:
            value = OmegaConf.select(cfg, path)
            if value is None:
                errors.append(f"Missing required field: {path}")
            elif expected_type is list:
                # OmegaConf returns ListConfig, check if it's list-like
                if not hasattr(value, "__iter__") or isinstance(value, (str, dict, DictConfig)):
                    errors.append(f"Invalid type for {path}: expected list, got {type(value).__name__}")
            elif expected_type is not None and (
                not isinstance(value, expected_type) or isinstance(value, bool) and bool not in _as_tuple(expected_type)
            ):
                errors.append(
                    f"Invalid type for {path}: expected {_type_name(expected_type)}, "
                    f"got {type(value).__name__}"
                )
        except MissingMandatoryValue:
            errors.append(f"Missing required field: {path}")
        except Exception as e:
            errors.append(f"Error validating {path}: {e}")

    if errors:
        error_msg = "Configuration validation failed:\n  " + "\n  ".join(errors)
        raise ConfigError(error_msg)

    logger.info("Configuration validation passed")


def _as_tuple(expected_type: Union[type, Tuple[type, ...]]) -> Tuple[type, ...]:
    return expected_type if isinstance(expected_type, tuple) else (expected_type,)


def _get_default_schema() -> Dict[str, Any]:
    """Get default schema for food-web config.

    Returns:
        Dictionary mapping dotted paths to expected types.
    """
    return {
        # Community
        "foodweb.A": list,
        "temperature": Number,
        # Producer growth
        "productivity.mode": str,
        "productivity.K": Number,
        # Rates
        "rates.growth.model": str,
        "rates.metabolism.model": str,
        "rates.handling_time.model": str,
        "rates.attack_rate.model": str,
        # Simulation
        "simulation.stop": Number,
        "simulation.method": str,
    }


def to_dict(cfg: DictConfig, resolve: bool = True) -> Dict[str, Any]:
    """Convert OmegaConf DictConfig to plain Python dict.

    Args:
        cfg: OmegaConf DictConfig to convert.
        resolve: If True, resolve interpolations before converting.

    Returns:
        Plain Python dictionary.
    """
    return OmegaConf.to_container(cfg, resolve=resolve)


def merge_configs(*configs: DictConfig) -> DictConfig:
    """Merge multiple configs with later configs taking precedence.

    Args:
        *configs: Variable number of DictConfig objects to merge.

    Returns:
        Merged DictConfig.
    """
    return OmegaConf.merge(*configs)


def save_config(
    cfg: DictConfig,
    save_path: Union[str, Path],
    resolve: bool = True,
) -> Path:
    """Save configuration to YAML file.

    Args:
        cfg: Configuration to save.
        save_path: Path to save YAML file.
        resolve: If True, resolve interpolations before saving.

    Returns:
        Path to saved config file.
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        OmegaConf.save(cfg, f, resolve=resolve)

    logger.info(f"Saved config to: {save_path}")
    return save_path


def get_value(
    cfg: DictConfig,
    path: str,
    default: Any = None,
) -> Any:
    """Get a nested config value, or ``default`` when it is missing or null.

    Args:
        cfg: Configuration object.
        path: Dotted path to value (e.g., "simulation.stop").
        default: Default value if path doesn't exist.

    Returns:
        Config value or default.

    Example:
        >>> rtol = get_value(cfg, "simulation.rtol", default=1e-6)
    """
    value = OmegaConf.select(cfg, path, default=None)
    return value if value is not None else default
