# src/bioenergetic/models/dbdt.py
"""Right-hand side of the bioenergetic food-web ODE.

``dBdt`` is the function handed to the integrator. It is a pure function of
(state, parameters): it allocates a fresh derivative, never writes to its
inputs and keeps no state between calls, so rejected or repeated solver
steps see identical results.

Numerically degenerate or biologically invalid states (negative nutrients,
0/0 in the functional response, biomass vanishing below the extinction
tolerance) are repaired locally instead of raising, since the integrator
cannot recover from an exception in the middle of a step.
"""

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from .consumption import consumption
from .growth import get_growth
from .mortality import density_dependent_mortality
from .nutrients import clamp_nutrients, nutrientuptake
from .parameters import Productivity

if TYPE_CHECKING:
    from .parameters import ParameterBundle


def split_state(parameters: "ParameterBundle", state: np.ndarray) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """Split a state vector into species biomass and nutrients.

    Nutrients (if any) are returned as a clamped copy.
    """
    state = np.asarray(state, dtype=float)
    if parameters.productivity is Productivity.NUTRIENTS:
        return state[: parameters.S], clamp_nutrients(state[parameters.S :])
    return state, None


def extinction_snap(derivative: np.ndarray, biomass: np.ndarray, epsilon: float) -> np.ndarray:
    """Push biomasses about to land in (0, epsilon) cleanly through zero.

    If ``B_i + dB_i`` falls strictly between 0 and ``epsilon`` the derivative
    becomes ``-(B_i + epsilon)``, so extinction is reached in finite time and
    can be detected by the caller instead of lingering at a vanishing value.
    """
    projected = derivative + biomass
    vanishing = (projected > 0.0) & (projected < epsilon)
    return np.where(vanishing, -(biomass + epsilon), derivative)


def dBdt(state: np.ndarray, parameters: "ParameterBundle", t: float = 0.0) -> np.ndarray:
    """Derivative of species biomass (followed by nutrients) at ``state``.

    Args:
        state: Biomass [S], or biomass followed by nutrients [S + 2] under
            the "nutrients" productivity regime.
        parameters: Model parameters.
        t: Time. Unused since the model is autonomous; accepted so the
            function can be passed to generic integrators.

    Returns:
        New array of the same length and ordering as ``state``.
    """
    biomass, nutrients = split_state(parameters, state)

    gain, loss = consumption(parameters, biomass)
    growth, G = get_growth(parameters, biomass, nutrients)
    death = density_dependent_mortality(parameters, biomass)

    derivative = growth + gain - loss - death
    derivative = extinction_snap(derivative, biomass, parameters.extinction_epsilon)

    if nutrients is not None:
        derivative = np.concatenate([derivative, nutrientuptake(parameters, biomass, nutrients, G)])
    return derivative
