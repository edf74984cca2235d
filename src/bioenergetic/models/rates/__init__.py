# src/bioenergetic/models/rates/__init__.py
"""
Biological rate models and their temperature dependence.

Four rate slots are filled when a parameter bundle is built:
- metabolic rate x
- producer growth rate r
- handling time (1 / maximum consumption rate y)
- attack rate (together with handling time sets the half-saturation density)

Five interchangeable families implement the RateModel interface: no effect
of temperature, extended Eppley, exponential Boltzmann-Arrhenius, extended
Boltzmann-Arrhenius and (inverted) Gaussian.
"""

from typing import Any, Callable, Dict

from .base import BOLTZMANN, ZERO_CELSIUS, RateModel, RoleCoefficients
from .boltzmann import (
    ExponentialBA,
    ExtendedBA,
    exponential_ba_attackr,
    exponential_ba_handlingt,
    exponential_ba_r,
    exponential_ba_x,
    extended_ba_attackr,
    extended_ba_r,
    extended_ba_x,
)
from .eppley import ExtendedEppley, extended_eppley_r, extended_eppley_x
from .gaussian import Gaussian, gaussian_attackr, gaussian_handlingt, gaussian_r, gaussian_x
from .no_effect import (
    NoEffect,
    NoEffectAttackRate,
    no_effect_attackr,
    no_effect_handlingt,
    no_effect_r,
    no_effect_x,
)

RATE_MODELS: Dict[str, Callable[..., RateModel]] = {
    fn.__name__: fn
    for fn in (
        no_effect_x,
        no_effect_r,
        no_effect_handlingt,
        no_effect_attackr,
        extended_eppley_r,
        extended_eppley_x,
        exponential_ba_r,
        exponential_ba_x,
        exponential_ba_attackr,
        exponential_ba_handlingt,
        extended_ba_r,
        extended_ba_x,
        extended_ba_attackr,
        gaussian_r,
        gaussian_x,
        gaussian_attackr,
        gaussian_handlingt,
    )
}


def get_rate_model(name: str, **coefficients: Any) -> RateModel:
    """Build a rate model from its constructor name.

    Raises:
        KeyError: If ``name`` is not a registered constructor.
    """
    if name not in RATE_MODELS:
        raise KeyError(f"Unknown rate model {name!r}; available: {sorted(RATE_MODELS)}")
    return RATE_MODELS[name](**coefficients)


__all__ = [
    # Base
    "BOLTZMANN",
    "ZERO_CELSIUS",
    "RateModel",
    "RoleCoefficients",
    # Families
    "NoEffect",
    "NoEffectAttackRate",
    "ExtendedEppley",
    "ExponentialBA",
    "ExtendedBA",
    "Gaussian",
    # Constructors
    "RATE_MODELS",
    "get_rate_model",
    *RATE_MODELS,
]
