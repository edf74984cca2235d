# src/bioenergetic/evaluation/measures.py
"""Community-level measures of a simulated food web.

All measures summarize the last ``last`` output times of a trajectory,
which are assumed to be past the transient dynamics.

Example:
    >>> from bioenergetic.evaluation.measures import summarize
    >>> summary = summarize(result, last=100)
    >>> print(summary)
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import stats

from ..models.growth import get_growth
from ..simulation.integrate import SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = np.finfo(np.float64).eps


def _window(result: SimulationResult, last: int) -> np.ndarray:
    if last < 1:
        raise ValueError(f"last must be >= 1, got {last}")
    if last > result.B.shape[0]:
        logger.warning(f"Requested last={last} points but trajectory has {result.B.shape[0]}")
    return result.B[-last:]


def total_biomass(result: SimulationResult, last: int = 100) -> float:
    """Mean total biomass over the window."""
    return float(np.mean(_window(result, last).sum(axis=1)))


def species_richness(result: SimulationResult, last: int = 100, threshold: float = DEFAULT_THRESHOLD) -> int:
    """Number of species whose mean biomass over the window exceeds ``threshold``."""
    return int(np.sum(_window(result, last).mean(axis=0) > threshold))


def species_persistence(result: SimulationResult, last: int = 100, threshold: float = DEFAULT_THRESHOLD) -> float:
    """Proportion of species that persist."""
    return species_richness(result, last, threshold) / result.B.shape[1]


def population_stability(result: SimulationResult, last: int = 100, threshold: float = DEFAULT_THRESHOLD) -> float:
    """Negative mean coefficient of variation of persisting populations.

    0 means every surviving population is constant; more negative values
    mean larger fluctuations. NaN if no species persists.
    """
    window = _window(result, last)
    mean = window.mean(axis=0)
    alive = mean > threshold
    if not np.any(alive):
        return float("nan")
    cv = window[:, alive].std(axis=0) / mean[alive]
    return float(-np.mean(cv))


def foodweb_evenness(result: SimulationResult, last: int = 100, threshold: float = DEFAULT_THRESHOLD) -> float:
    """Pielou evenness of the mean biomass distribution.

    Shannon entropy of relative biomasses divided by ln(richness); NaN when
    fewer than two species persist.
    """
    mean = _window(result, last).mean(axis=0)
    alive = mean[mean > threshold]
    if alive.size < 2:
        return float("nan")
    return float(stats.entropy(alive) / np.log(alive.size))


def producer_growth(result: SimulationResult, last: int = 100) -> np.ndarray:
    """Mean realized production G of each species over the window (0 for consumers)."""
    parameters = result.parameters
    window = _window(result, last)
    nutrients = result.N[-last:] if result.N is not None else None
    production = np.array(
        [
            get_growth(parameters, biomass, None if nutrients is None else nutrients[k])[1]
            for k, biomass in enumerate(window)
        ]
    )
    return production.mean(axis=0)


@dataclass
class FoodWebSummary:
    """Summary measures of a simulated food web.

    Attributes:
        richness: Number of persisting species.
        persistence: Proportion of persisting species.
        total_biomass: Mean total biomass.
        stability: Negative mean coefficient of variation.
        evenness: Pielou evenness of biomass.
        n_extinctions: Number of extinctions during the run.
        last: Window length used.
    """

    richness: int
    persistence: float
    total_biomass: float
    stability: float
    evenness: float
    n_extinctions: int
    last: int

    def __str__(self) -> str:
        return (
            f"richness={self.richness} (persistence={self.persistence:.2f}), "
            f"biomass={self.total_biomass:.4f}, stability={self.stability:.4f}, "
            f"evenness={self.evenness:.3f}, extinctions={self.n_extinctions}"
        )


def summarize(
    result: SimulationResult,
    last: int = 100,
    threshold: Optional[float] = None,
) -> FoodWebSummary:
    """Compute every community measure over the last ``last`` output times."""
    threshold = DEFAULT_THRESHOLD if threshold is None else threshold
    return FoodWebSummary(
        richness=species_richness(result, last, threshold),
        persistence=species_persistence(result, last, threshold),
        total_biomass=total_biomass(result, last),
        stability=population_stability(result, last, threshold),
        evenness=foodweb_evenness(result, last, threshold),
        n_extinctions=len(result.extinctions),
        last=last,
    )
