# src/bioenergetic/models/factory.py
"""Build model parameters from an OmegaConf configuration.

Maps the ``foodweb``, ``temperature``, ``productivity``,
``functional_response``, ``nutrients``, ``mortality``, ``rates`` and
``numerics`` sections onto ``model_parameters``. Rate models are looked up
by constructor name (e.g. ``exponential_ba_x``) with optional coefficient
overrides.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np
from omegaconf import DictConfig, OmegaConf

from ..utils.config import ConfigError, get_value
from .parameters import ParameterBundle, ParameterError, model_parameters
from .rates import RateModel, get_rate_model

logger = logging.getLogger(__name__)

# Config section under ``rates`` -> model_parameters keyword
RATE_SLOTS = {
    "growth": "growthrate",
    "metabolism": "metabolicrate",
    "handling_time": "handlingtime",
    "attack_rate": "attackrate",
}


def _plain(value: Any) -> Any:
    if isinstance(value, DictConfig) or OmegaConf.is_list(value):
        return OmegaConf.to_container(value, resolve=True)
    return value


def build_rate_model(section: Optional[DictConfig], slot: str) -> Optional[RateModel]:
    """Instantiate the rate model described by one ``rates.<slot>`` section.

    Raises:
        ConfigError: If the model name or its coefficients are invalid.
    """
    if section is None:
        return None
    name = section.get("model")
    coefficients: Dict[str, Any] = _plain(section.get("coefficients")) or {}
    try:
        model = get_rate_model(name, **coefficients)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid rate model for rates.{slot}: {e}") from e
    logger.debug(f"rates.{slot} -> {model!r}")
    return model


def build_parameters(cfg: DictConfig) -> ParameterBundle:
    """Create a ParameterBundle from configuration.

    Args:
        cfg: Configuration with at least ``foodweb.A``.

    Returns:
        ParameterBundle.

    Raises:
        ConfigError: If the configuration describes invalid parameters.
    """
    kwargs: Dict[str, Any] = {
        "bodymass": _plain(get_value(cfg, "foodweb.bodymass")),
        "vertebrates": _plain(get_value(cfg, "foodweb.vertebrates")),
        "Z": get_value(cfg, "foodweb.Z", 1.0),
        "temperature": get_value(cfg, "temperature", 293.15),
        "productivity": get_value(cfg, "productivity.mode", "species"),
        "K": get_value(cfg, "productivity.K", 1.0),
        "alpha": get_value(cfg, "productivity.alpha", 1.0),
        "h": get_value(cfg, "functional_response.h", 1.0),
        "c": _plain(get_value(cfg, "functional_response.c", 0.0)),
        "e_herbivore": get_value(cfg, "functional_response.e_herbivore", 0.45),
        "e_carnivore": get_value(cfg, "functional_response.e_carnivore", 0.85),
        "cost_matrix": _plain(get_value(cfg, "functional_response.cost_matrix")),
        "K1": _plain(get_value(cfg, "nutrients.K1", 0.15)),
        "K2": _plain(get_value(cfg, "nutrients.K2", 0.15)),
        "D": get_value(cfg, "nutrients.D", 0.25),
        "supply": _plain(get_value(cfg, "nutrients.supply", [10.0, 10.0])),
        "upsilon": _plain(get_value(cfg, "nutrients.upsilon", [1.0, 0.5])),
        "mortality": get_value(cfg, "mortality.rate"),
    }
    epsilon = get_value(cfg, "numerics.extinction_epsilon")
    if epsilon is not None:
        kwargs["extinction_epsilon"] = epsilon

    rates = get_value(cfg, "rates")
    if rates is not None:
        for slot, keyword in RATE_SLOTS.items():
            kwargs[keyword] = build_rate_model(rates.get(slot), slot)

    A = _plain(get_value(cfg, "foodweb.A"))
    if A is None:
        raise ConfigError("Missing required field: foodweb.A")

    try:
        return model_parameters(np.asarray(A), **kwargs)
    except ParameterError as e:
        raise ConfigError(f"Invalid model parameters: {e}") from e
