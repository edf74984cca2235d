# src/bioenergetic/models/rates/boltzmann.py
"""Boltzmann-Arrhenius temperature dependence.

Two families:
- Exponential Boltzmann-Arrhenius (Gillooly et al. 2001, Brown et al. 2004):
      rate = exp(norm_constant) * M^beta * exp(E * (T0 - T) / (k * T * T0))
- Extended Boltzmann-Arrhenius, Johnson-Lewin form (Dell et al. 2011):
      rate = norm_constant * M^beta * exp(-Ea / (k T))
             / (1 + exp(-(Ed - (Ed / T_opt + k ln(Ea / (Ed - Ea))) T) / (k T)))

k is the Boltzmann constant in eV/K and all temperatures are in Kelvin.
Default coefficients come from Ehnes et al. 2011 and Binzer et al. 2012
(exponential form) and Dell et al. 2011 (extended form).
"""

from typing import Any

import numpy as np

from .base import BOLTZMANN, ROLE_SUFFIXES, RateModel, RoleCoefficients, merge_coefficients

CONSUMER_SUFFIXES = ("invertebrate", "vertebrate")


class ExponentialBA(RateModel):
    """Exponential Boltzmann-Arrhenius rate normalized at T0."""

    def __init__(self, norm_constant, activation_energy, T0, beta, beta_resource=None) -> None:
        super().__init__(beta, beta_resource)
        self.norm_constant = RoleCoefficients.coerce(norm_constant)
        self.activation_energy = RoleCoefficients.coerce(activation_energy)
        self.T0 = RoleCoefficients.coerce(T0)

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        T0 = self.T0.lookup(roles)
        energy = self.activation_energy.lookup(roles)
        return np.exp(self.norm_constant.lookup(roles)) * np.exp(
            energy * (T0 - temperature) / (BOLTZMANN * temperature * T0)
        )


class ExtendedBA(RateModel):
    """Boltzmann-Arrhenius rise with a logistic high-temperature deactivation."""

    def __init__(
        self, norm_constant, activation_energy, deactivation_energy, T_opt, beta, beta_resource=None
    ) -> None:
        super().__init__(beta, beta_resource)
        self.norm_constant = RoleCoefficients.coerce(norm_constant)
        self.activation_energy = RoleCoefficients.coerce(activation_energy)
        self.deactivation_energy = RoleCoefficients.coerce(deactivation_energy)
        self.T_opt = RoleCoefficients.coerce(T_opt)

    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        Ea = self.activation_energy.lookup(roles)
        Ed = self.deactivation_energy.lookup(roles)
        T_opt = self.T_opt.lookup(roles)
        kT = BOLTZMANN * temperature
        activation = np.exp(-Ea / kT)
        exponent = -(Ed - (Ed / T_opt + BOLTZMANN * np.log(Ea / (Ed - Ea))) * temperature) / kT
        deactivation = 1.0 / (1.0 + np.exp(exponent))
        return self.norm_constant.lookup(roles) * activation * deactivation


def _species_model(cls, defaults, coefficients, names):
    p = merge_coefficients(defaults, coefficients)
    return cls(*(p[name] for name in names))


def _role_model(cls, defaults, coefficients, names):
    flat = {f"{name}_{role}": value for name, value in defaults.items() for role in ROLE_SUFFIXES}
    p = merge_coefficients(flat, coefficients)
    return cls(*(RoleCoefficients.from_flat(p, name) for name in names))


def _link_model(cls, defaults, beta_consumer, beta_resource, coefficients, names):
    flat = {f"{name}_{role}": value for name, value in defaults.items() for role in CONSUMER_SUFFIXES}
    flat.update({f"beta_consumer_{role}": beta_consumer for role in CONSUMER_SUFFIXES})
    flat.update({f"beta_resource_{role}": value for role, value in beta_resource.items()})
    p = merge_coefficients(flat, coefficients)
    return cls(
        *(RoleCoefficients.from_flat(p, name) for name in names),
        beta=RoleCoefficients.from_flat(p, "beta_consumer"),
        beta_resource=RoleCoefficients.from_flat(p, "beta_resource"),
    )


_EXPONENTIAL = {"norm_constant": -16.54, "activation_energy": -0.69, "T0": 293.15, "beta": -0.31}
_EXPONENTIAL_NAMES = ("norm_constant", "activation_energy", "T0", "beta")
_EXPONENTIAL_LINK_NAMES = ("norm_constant", "activation_energy", "T0")

_EXTENDED = {
    "norm_constant": 3e8,
    "activation_energy": 0.53,
    "deactivation_energy": 1.15,
    "T_opt": 298.15,
    "beta": -0.25,
}
_EXTENDED_NAMES = ("norm_constant", "activation_energy", "deactivation_energy", "T_opt", "beta")
_EXTENDED_LINK_NAMES = ("norm_constant", "activation_energy", "deactivation_energy", "T_opt")


def exponential_ba_r(**coefficients: Any) -> ExponentialBA:
    """Exponential Boltzmann-Arrhenius producer growth rate."""
    return _species_model(ExponentialBA, _EXPONENTIAL, coefficients, _EXPONENTIAL_NAMES)


def exponential_ba_x(**coefficients: Any) -> ExponentialBA:
    """Exponential Boltzmann-Arrhenius metabolic rate, coefficients per role."""
    return _role_model(ExponentialBA, _EXPONENTIAL, coefficients, _EXPONENTIAL_NAMES)


def exponential_ba_attackr(**coefficients: Any) -> ExponentialBA:
    """Exponential Boltzmann-Arrhenius attack rate over feeding links."""
    return _link_model(
        ExponentialBA,
        {"norm_constant": -13.1, "activation_energy": -0.38, "T0": 293.15},
        -0.8,
        {"producer": 0.25, "invertebrate": -0.8, "vertebrate": -0.8},
        coefficients,
        _EXPONENTIAL_LINK_NAMES,
    )


def exponential_ba_handlingt(**coefficients: Any) -> ExponentialBA:
    """Exponential Boltzmann-Arrhenius handling time over feeding links."""
    return _link_model(
        ExponentialBA,
        {"norm_constant": 9.66, "activation_energy": 0.26, "T0": 293.15},
        0.47,
        {"producer": -0.45, "invertebrate": 0.47, "vertebrate": 0.47},
        coefficients,
        _EXPONENTIAL_LINK_NAMES,
    )


def extended_ba_r(**coefficients: Any) -> ExtendedBA:
    """Extended Boltzmann-Arrhenius producer growth rate."""
    return _species_model(ExtendedBA, _EXTENDED, coefficients, _EXTENDED_NAMES)


def extended_ba_x(**coefficients: Any) -> ExtendedBA:
    """Extended Boltzmann-Arrhenius metabolic rate, coefficients per role."""
    return _role_model(ExtendedBA, _EXTENDED, coefficients, _EXTENDED_NAMES)


def extended_ba_attackr(**coefficients: Any) -> ExtendedBA:
    """Extended Boltzmann-Arrhenius attack rate over feeding links."""
    defaults = {k: v for k, v in _EXTENDED.items() if k != "beta"}
    return _link_model(
        ExtendedBA,
        defaults,
        -0.25,
        {role: -0.25 for role in ROLE_SUFFIXES},
        coefficients,
        _EXTENDED_LINK_NAMES,
    )
