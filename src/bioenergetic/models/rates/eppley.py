# src/bioenergetic/models/rates/eppley.py
"""Extended Eppley temperature dependence (Eppley 1972, Thomas et al. 2012).

    rate = M^beta * maxrate_0 * exp(b * (T - 273.15)) * (1 - ((T - 273.15 - z) / (w / 2))^2)

with z the optimum temperature in Celsius and w the thermal breadth.

| Coefficient     | Meaning                                   | Default | Reference            |
|-----------------|-------------------------------------------|---------|----------------------|
| maxrate_0       | maximum rate at 273.15 K                  | 0.81    | Eppley 1972          |
| eppley_exponent | exponential rate of increase              | 0.0631  | Eppley 1972          |
| T_opt           | location of the quadratic maximum (K)     | 298.15  | NA                   |
| range           | thermal breadth                           | 35      | NA                   |
| beta            | allometric exponent                       | -0.25   | Gillooly et al. 2002 |
"""

from typing import Any

import numpy as np

from .base import ROLE_SUFFIXES, ZERO_CELSIUS, RateModel, RoleCoefficients, merge_coefficients

_DEFAULTS = {
    "maxrate_0": 0.81,
    "eppley_exponent": 0.0631,
    "T_opt": 298.15,
    "range": 35.0,
    "beta": -0.25,
}


class ExtendedEppley(RateModel):
    """Exponential increase truncated by a quadratic thermal window."""

    def __init__(self, maxrate_0, eppley_exponent, T_opt, thermal_range, beta, beta_resource=None) -> None:
        super().__init__(beta, beta_resource)
        self.maxrate_0 = RoleCoefficients.coerce(maxrate_0)
        self.eppley_exponent = RoleCoefficients.coerce(eppley_exponent)
        self.T_opt = RoleCoefficients.coerce(T_opt)
        self.thermal_range = RoleCoefficients.coerce(thermal_range)

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        celsius = temperature - ZERO_CELSIUS
        optimum = self.T_opt.lookup(roles) - ZERO_CELSIUS
        half_range = self.thermal_range.lookup(roles) / 2.0
        window = 1.0 - ((celsius - optimum) / half_range) ** 2
        return self.maxrate_0.lookup(roles) * np.exp(self.eppley_exponent.lookup(roles) * celsius) * window


def extended_eppley_r(**coefficients: Any) -> ExtendedEppley:
    """Extended Eppley curve for producer growth rate."""
    p = merge_coefficients(_DEFAULTS, coefficients)
    return ExtendedEppley(p["maxrate_0"], p["eppley_exponent"], p["T_opt"], p["range"], p["beta"])


def extended_eppley_x(**coefficients: Any) -> ExtendedEppley:
    """Extended Eppley curve for metabolic rate, one coefficient set per role.

    Coefficients are named ``<name>_<role>``, e.g. ``maxrate_0_vertebrate``.
    """
    defaults = {f"{name}_{role}": value for name, value in _DEFAULTS.items() for role in ROLE_SUFFIXES}
    p = merge_coefficients(defaults, coefficients)
    return ExtendedEppley(
        RoleCoefficients.from_flat(p, "maxrate_0"),
        RoleCoefficients.from_flat(p, "eppley_exponent"),
        RoleCoefficients.from_flat(p, "T_opt"),
        RoleCoefficients.from_flat(p, "range"),
        RoleCoefficients.from_flat(p, "beta"),
    )
