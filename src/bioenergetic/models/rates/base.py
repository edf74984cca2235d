# src/bioenergetic/models/rates/base.py
"""Base classes for biological rate models.

Every rate model (metabolic rate x, growth rate r, attack rate, handling
time) shares the same interface:
- evaluate(bodymass, temperature, web) -> rate

A model splits into a size-independent thermal response, computed per
species from its role coefficients, and allometric scaling with body mass.
Models built with ``beta_resource`` are per-link: the consumer term is
multiplied by the resource body mass raised to an exponent chosen by the
resource's role, giving an [S, S] matrix that is zero outside the diet
matrix.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from ..foodweb import FoodWeb, Role

# Boltzmann constant (eV/K)
BOLTZMANN = 8.617e-5
# 0 degrees Celsius in Kelvin
ZERO_CELSIUS = 273.15

ROLE_SUFFIXES = ("producer", "invertebrate", "vertebrate")


@dataclass(frozen=True)
class RoleCoefficients:
    """One coefficient value per species role."""

    producer: float
    invertebrate: float
    vertebrate: float

    @classmethod
    def uniform(cls, value: float) -> "RoleCoefficients":
        return cls(float(value), float(value), float(value))

    @classmethod
    def coerce(cls, value: Union["RoleCoefficients", Mapping[str, float], float]) -> "RoleCoefficients":
        if isinstance(value, RoleCoefficients):
            return value
        if isinstance(value, Mapping):
            return cls(**{k: float(v) for k, v in value.items()})
        return cls.uniform(value)

    @classmethod
    def from_flat(cls, params: Mapping[str, Any], name: str) -> "RoleCoefficients":
        """Collect ``<name>_producer``, ``<name>_invertebrate``, ``<name>_vertebrate``.

        Missing producer values fall back to the invertebrate value, which is
        the case for consumer-only coefficients of attack rate and handling
        time models.
        """
        invertebrate = float(params[f"{name}_invertebrate"])
        return cls(
            producer=float(params.get(f"{name}_producer", invertebrate)),
            invertebrate=invertebrate,
            vertebrate=float(params[f"{name}_vertebrate"]),
        )

    def lookup(self, roles: np.ndarray) -> np.ndarray:
        """Coefficient value for each entry of a Role index array."""
        table = np.empty(len(Role), dtype=float)
        table[Role.PRODUCER] = self.producer
        table[Role.INVERTEBRATE] = self.invertebrate
        table[Role.VERTEBRATE] = self.vertebrate
        return table[roles]


def merge_coefficients(defaults: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay user coefficients on literature defaults.

    Raises:
        TypeError: If an override names a coefficient the model does not have.
    """
    unknown = sorted(set(overrides) - set(defaults))
    if unknown:
        raise TypeError(f"Unknown coefficients {unknown}; expected a subset of {sorted(defaults)}")
    return {**defaults, **overrides}


class RateModel(ABC):
    """Abstract rate model: allometric scaling times a thermal response."""

    def __init__(
        self,
        beta: Union[RoleCoefficients, Mapping[str, float], float],
        beta_resource: Optional[Union[RoleCoefficients, Mapping[str, float], float]] = None,
    ) -> None:
        self.beta = RoleCoefficients.coerce(beta)
        self.beta_resource = None if beta_resource is None else RoleCoefficients.coerce(beta_resource)

    @property
    def per_link(self) -> bool:
        """True if the model yields an [S, S] consumer-resource matrix."""
        return self.beta_resource is not None

    @abstractmethod
    def thermal_response(self, temperature: float, roles: np.ndarray) -> np.ndarray:
        """Size-independent rate for each species at ``temperature`` (Kelvin)."""

    def evaluate(self, bodymass: np.ndarray, temperature: float, web: FoodWeb) -> np.ndarray:
        """Materialize the rate for every species (or every feeding link).

        NaN values, e.g. from degenerate logistic terms, are set to 0.
        """
        bodymass = np.asarray(bodymass, dtype=float)
        roles = web.roles
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            rate = self.thermal_response(temperature, roles) * bodymass ** self.beta.lookup(roles)
            if self.per_link:
                resource_scaling = bodymass ** self.beta_resource.lookup(roles)
                rate = np.where(web.A, rate[:, np.newaxis] * resource_scaling[np.newaxis, :], 0.0)
        rate = np.array(rate, dtype=float)
        rate[np.isnan(rate)] = 0.0
        return rate

    def __call__(self, bodymass: np.ndarray, temperature: float, web: FoodWeb) -> np.ndarray:
        return self.evaluate(bodymass, temperature, web)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"
