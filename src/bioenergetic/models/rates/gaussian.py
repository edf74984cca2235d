# src/bioenergetic/models/rates/gaussian.py
"""Gaussian and inverted Gaussian temperature dependence (Amarasekare 2015).

    rate = M^beta * norm_constant * exp(-/+ (T - T_opt)^2 / (2 range^2))

The "hump" shape (minus sign) suits growth, metabolism and attack rate; the
"U" shape (plus sign) suits handling time, which is shortest at the optimum.
"""

from typing import Any

import numpy as np

from .base import ROLE_SUFFIXES, RateModel, RoleCoefficients, merge_coefficients

SHAPES = {"hump": -1.0, "U": 1.0}

_DEFAULTS = {"norm_constant": 0.5, "range": 20.0, "T_opt": 295.0, "beta": -0.25}


class Gaussian(RateModel):
    """Hump-shaped or U-shaped thermal performance curve."""

    def __init__(self, norm_constant, T_opt, thermal_range, beta, beta_resource=None, shape: str = "hump") -> None:
        if shape not in SHAPES:
            raise ValueError(f"Unknown Gaussian shape {shape!r}; expected one of {sorted(SHAPES)}")
        super().__init__(beta, beta_resource)
        self.norm_constant = RoleCoefficients.coerce(norm_constant)
        self.T_opt = RoleCoefficients.coerce(T_opt)
        self.thermal_range = RoleCoefficients.coerce(thermal_range)
        self.shape = shape

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        spread = self.thermal_range.lookup(roles)
        deviation = (temperature - self.T_opt.lookup(roles)) ** 2 / (2.0 * spread**2)
        return self.norm_constant.lookup(roles) * np.exp(SHAPES[self.shape] * deviation)


def gaussian_r(**coefficients: Any) -> Gaussian:
    """Gaussian producer growth rate."""
    p = merge_coefficients({**_DEFAULTS, "shape": "hump"}, coefficients)
    return Gaussian(p["norm_constant"], p["T_opt"], p["range"], p["beta"], shape=p["shape"])


def gaussian_x(**coefficients: Any) -> Gaussian:
    """Gaussian metabolic rate, coefficients per role."""
    defaults = {f"{name}_{role}": value for name, value in _DEFAULTS.items() for role in ROLE_SUFFIXES}
    p = merge_coefficients(defaults, coefficients)
    return Gaussian(
        RoleCoefficients.from_flat(p, "norm_constant"),
        RoleCoefficients.from_flat(p, "T_opt"),
        RoleCoefficients.from_flat(p, "range"),
        RoleCoefficients.from_flat(p, "beta"),
    )


def _link_gaussian(shape: str, coefficients) -> Gaussian:
    defaults = {"shape": shape}
    for name in ("norm_constant", "range", "T_opt"):
        defaults.update({f"{name}_{role}": _DEFAULTS[name] for role in ("invertebrate", "vertebrate")})
    defaults.update({f"beta_consumer_{role}": -0.25 for role in ("invertebrate", "vertebrate")})
    defaults.update({f"beta_resource_{role}": -0.25 for role in ROLE_SUFFIXES})
    p = merge_coefficients(defaults, coefficients)
    return Gaussian(
        RoleCoefficients.from_flat(p, "norm_constant"),
        RoleCoefficients.from_flat(p, "T_opt"),
        RoleCoefficients.from_flat(p, "range"),
        beta=RoleCoefficients.from_flat(p, "beta_consumer"),
        beta_resource=RoleCoefficients.from_flat(p, "beta_resource"),
        shape=p["shape"],
    )


def gaussian_attackr(**coefficients: Any) -> Gaussian:
    """Hump-shaped attack rate over feeding links."""
    return _link_gaussian("hump", coefficients)


def gaussian_handlingt(**coefficients: Any) -> Gaussian:
    """U-shaped handling time over feeding links."""
    return _link_gaussian("U", coefficients)
