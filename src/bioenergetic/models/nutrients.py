# src/bioenergetic/models/nutrients.py
"""Nutrient pool dynamics for the nutrient-colimited producer model.

Chemostat relaxation towards the supply concentration, minus drawdown by
producer production:

    dN_k/dt = D * (supply_k - N_k) - upsilon_k * sum_i G_i * B_i
"""

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .parameters import ParameterBundle


def clamp_nutrients(nutrients: np.ndarray) -> np.ndarray:
    """Copy of ``nutrients`` with negative concentrations set to 0."""
    return np.maximum(np.asarray(nutrients, dtype=float), 0.0)


def nutrientuptake(
    parameters: "ParameterBundle",
    biomass: np.ndarray,
    nutrients: np.ndarray,
    G: np.ndarray,
) -> np.ndarray:
    """Rate of change of each nutrient concentration.

    Args:
        parameters: Model parameters.
        biomass: Species biomass [S].
        nutrients: Nutrient concentrations [2]; negative values are read as 0.
        G: Producer production from ``get_growth``.

    Returns:
        dN/dt [2].
    """
    nutrients = clamp_nutrients(nutrients)
    production = np.sum(np.asarray(G) * np.asarray(biomass))
    turnover = parameters.D * (parameters.supply - nutrients)
    return turnover - parameters.upsilon * production
