# src/bioenergetic/models/rates/no_effect.py
"""Temperature-independent rates (Brose, Williams & Martinez 2006).

Defaults reproduce the allometric bioenergetic model without temperature:

| Rate          | Coefficient     | Default | Reference                       |
|---------------|-----------------|---------|---------------------------------|
| metabolism x  | a_vertebrate    | 0.88    | Brose, Williams & Martinez 2006 |
|               | a_invertebrate  | 0.3141  | Brose, Williams & Martinez 2006 |
|               | a_producer      | 0.138   | Brose, Williams & Martinez 2006 |
| growth r      | r               | 1.0     | Brose, Williams & Martinez 2006 |
| handling time | y_vertebrate    | 4.0     | Brose, Williams & Martinez 2006 |
|               | y_invertebrate  | 8.0     | Brose, Williams & Martinez 2006 |
| attack rate   | gamma           | 0.5     | Brose, Williams & Martinez 2006 |
"""

from typing import Any

import numpy as np

from ..foodweb import FoodWeb
from .base import RateModel, RoleCoefficients, merge_coefficients


class NoEffect(RateModel):
    """Role-keyed constant scaled by body mass; temperature is ignored."""

    def __init__(self, constant, beta=0.0, beta_resource=None) -> None:
        super().__init__(beta, beta_resource)
        self.constant = RoleCoefficients.coerce(constant)

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        return self.constant.lookup(roles)


class NoEffectAttackRate(RateModel):
    """Attack rate 1 / (gamma * handling time), with gamma the half-saturation density.

    Reads the handling time already evaluated on the food web, so it must be
    evaluated after the handling-time model.
    """

    def __init__(self, gamma: float = 0.5) -> None:
        super().__init__(beta=0.0)
        self.gamma = float(gamma)

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        return np.ones(len(roles))

    def evaluate(self, bodymass: np.ndarray, temperature: float, web: FoodWeb) -> np.ndarray:
        if web.handling_time is None:
            raise ValueError("NoEffectAttackRate needs the handling time to be evaluated first")
        handling_time = np.asarray(web.handling_time, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            rate = 1.0 / (self.gamma * handling_time)
        if rate.ndim == 2:
            rate = np.where(web.A, rate, 0.0)
        rate = np.array(rate, dtype=float)
        rate[~np.isfinite(rate)] = 0.0
        return rate


def no_effect_x(**coefficients: Any) -> NoEffect:
    """Metabolic rate ``a_role * M^-0.25``."""
    params = merge_coefficients(
        {"a_vertebrate": 0.88, "a_invertebrate": 0.3141, "a_producer": 0.138},
        coefficients,
    )
    return NoEffect(RoleCoefficients.from_flat(params, "a"), beta=-0.25)


def no_effect_r(**coefficients: Any) -> NoEffect:
    """Constant producer growth rate ``r`` for every species."""
    params = merge_coefficients({"r": 1.0}, coefficients)
    return NoEffect(params["r"])


def no_effect_handlingt(**coefficients: Any) -> NoEffect:
    """Handling time ``1 / y_role``; producers do not feed (infinite handling time)."""
    params = merge_coefficients({"y_vertebrate": 4.0, "y_invertebrate": 8.0}, coefficients)
    return NoEffect(
        RoleCoefficients(
            producer=np.inf,
            invertebrate=1.0 / params["y_invertebrate"],
            vertebrate=1.0 / params["y_vertebrate"],
        )
    )


def no_effect_attackr(**coefficients: Any) -> NoEffectAttackRate:
    """Attack rate consistent with a constant half-saturation density."""
    params = merge_coefficients({"gamma": 0.5}, coefficients)
    return NoEffectAttackRate(params["gamma"])
