# src/bioenergetic/models/mortality.py
"""Density-dependent mortality of consumers.

Producers are regulated by their growth-limitation regime, so mortality only
applies to consumers:

    death_i = d(B)_i * (1 - is_producer_i)
"""

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .parameters import ParameterBundle


class LinearMortality:
    """Mortality proportional to biomass, d(B) = rate * B."""

    def __init__(self, rate: float) -> None:
        if rate < 0:
            raise ValueError(f"Mortality rate must be non-negative, got {rate}")
        self.rate = float(rate)

    def __call__(self, biomass: np.ndarray) -> np.ndarray:
        return self.rate * np.asarray(biomass, dtype=float)

    def __repr__(self) -> str:
        return f"LinearMortality(rate={self.rate})"


def density_dependent_mortality(parameters: "ParameterBundle", biomass: np.ndarray) -> np.ndarray:
    """Biomass lost to mortality by each species (zero for producers)."""
    biomass = np.asarray(biomass, dtype=float)
    if parameters.mortality is None:
        return np.zeros_like(biomass)
    return np.asarray(parameters.mortality(biomass), dtype=float) * ~parameters.is_producer
