# src/bioenergetic/models/consumption.py
"""Multi-resource functional response.

Implements, for consumer i and resource j:

    bm[i, j]     = w[i, j] * B[j] * A[i, j]          (* cost[i, j] when rewiring)
    F[i, j]      = bm[i, j] / (Gamma*h * (1 + c * B[i]) + sum_j bm[i, j])
    transferred  = F[i, j] * x[i] * y[i] * B[i]
    consumed     = transferred / efficiency[i, j]

gain is summed over resources (rows), loss over consumers (columns): the
resource is charged with everything removed, the consumer only gains what it
assimilates.
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    from .parameters import ParameterBundle


def food_matrix(parameters: "ParameterBundle", biomass: np.ndarray) -> np.ndarray:
    """Preference-weighted biomass available to each consumer [S, S]."""
    bm = parameters.w * biomass[np.newaxis, :] * parameters.A
    if parameters.rewiring:
        bm = bm * parameters.cost_matrix
    return bm


def fluxes(parameters: "ParameterBundle", biomass: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Biomass flux matrices.

    Returns:
        Tuple of (transferred [S, S], consumed [S, S]). Entries that would be
        NaN (0/0 when a consumer has neither food nor a half-saturation term)
        are 0.
    """
    biomass = np.asarray(biomass, dtype=float)
    bm = food_matrix(parameters, biomass)
    food_available = bm.sum(axis=1)
    f_den = parameters.gamma_h * (1.0 + parameters.interference * biomass) + food_available

    with np.errstate(divide="ignore", invalid="ignore"):
        F = bm / f_den[:, np.newaxis]
        xyb = parameters.x * parameters.y * biomass
        transferred = F * xyb[:, np.newaxis]
        consumed = transferred / parameters.efficiency

    transferred[np.isnan(transferred)] = 0.0
    consumed[np.isnan(consumed)] = 0.0
    return transferred, consumed


def consumption(parameters: "ParameterBundle", biomass: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Biomass gained by feeding and lost to consumers, per species.

    Args:
        parameters: Model parameters.
        biomass: Species biomass [S].

    Returns:
        Tuple of (gain [S], loss [S]).
    """
    transferred, consumed = fluxes(parameters, biomass)
    gain = transferred.sum(axis=1)
    loss = consumed.sum(axis=0)
    return gain, loss
