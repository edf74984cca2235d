# src/bioenergetic/models/growth.py
"""Producer growth and consumer respiration.

Producers grow logistically (or under nutrient colimitation) and consumers
lose biomass to respiration; gains of consumers come from the consumption
model.
"""

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from .parameters import Productivity

if TYPE_CHECKING:
    from .parameters import ParameterBundle


def growthrate(
    parameters: "ParameterBundle",
    biomass: np.ndarray,
    i: int,
    nutrients: Optional[np.ndarray] = None,
) -> float:
    """Growth-limitation multiplier of producer ``i``.

    Args:
        parameters: Model parameters.
        biomass: Species biomass [S].
        i: Index of a producer.
        nutrients: Nutrient concentrations [2], only read under the
            "nutrients" productivity regime.

    Returns:
        1 - B_i / K_eff for the logistic regimes, or the Liebig minimum of
        the two nutrient limitation terms.

    Raises:
        ValueError: If ``nutrients`` is missing under the "nutrients" regime.
    """
    productivity = parameters.productivity
    if productivity is Productivity.NUTRIENTS:
        if nutrients is None:
            raise ValueError("nutrients must be given under the 'nutrients' productivity regime")
        limit_n1 = nutrients[0] / (parameters.K1[i] + nutrients[0])
        limit_n2 = nutrients[1] / (parameters.K2[i] + nutrients[1])
        return float(min(limit_n1, limit_n2))

    compete_with = biomass[i]
    effective_K = parameters.K
    if productivity is Productivity.SYSTEM:
        effective_K = parameters.K / parameters.num_producers
    elif productivity is Productivity.COMPETITIVE:
        others = parameters.is_producer.copy()
        others[i] = False
        compete_with = compete_with + parameters.alpha * np.sum(biomass[others])
    return float(1.0 - compete_with / effective_K)


def get_growth(
    parameters: "ParameterBundle",
    biomass: np.ndarray,
    nutrients: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Net growth of every species.

    Returns:
        Tuple of (growth [S], G [S]) where G is the raw producer production
        r_i * growthrate_i * B_i (0 for consumers), used for nutrient uptake.
        Under the "nutrients" regime producers also respire.
    """
    biomass = np.asarray(biomass, dtype=float)
    growth = np.zeros(parameters.S)
    G = np.zeros(parameters.S)
    respiration = parameters.x * biomass
    respiring_producers = parameters.productivity is Productivity.NUTRIENTS

    for i in range(parameters.S):
        if parameters.is_producer[i]:
            G[i] = parameters.r[i] * growthrate(parameters, biomass, i, nutrients) * biomass[i]
            growth[i] = G[i] - respiration[i] if respiring_producers else G[i]
        else:
            growth[i] = -respiration[i]
    return growth, G
