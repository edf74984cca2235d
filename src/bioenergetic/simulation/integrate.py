# src/bioenergetic/simulation/integrate.py
"""Numerical integration of the food-web model.

Wraps ``scipy.integrate.solve_ivp`` around ``dBdt``. Each species that is
alive at the start of an integration segment gets a terminal event at zero
biomass; when it fires the species is set to exactly 0 (extinct) and the
integration restarts from the event time.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd
from scipy.integrate import solve_ivp

from ..models.dbdt import dBdt
from ..models.parameters import ParameterBundle

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """Integrator failure."""

    pass


@dataclass
class SimulationResult:
    """Trajectory of a food-web simulation.

    Attributes:
        t: Output times [T].
        B: Species biomass [T, S]; extinct species are exactly 0.
        N: Nutrient concentrations [T, 2], or None without nutrient dynamics.
        extinctions: Species index -> time of extinction.
        parameters: Parameters the trajectory was computed with.
    """

    t: np.ndarray
    B: np.ndarray
    N: Optional[np.ndarray]
    parameters: ParameterBundle
    extinctions: Dict[int, float] = field(default_factory=dict)

    @property
    def survivors(self) -> np.ndarray:
        """Indices of species with positive final biomass that never went extinct."""
        alive = self.B[-1] > 0
        alive[list(self.extinctions)] = False
        return np.flatnonzero(alive)

    def to_frame(self) -> pd.DataFrame:
        """Long table with one column per species (and nutrient)."""
        columns = {"t": self.t}
        columns.update({f"B{i}": self.B[:, i] for i in range(self.B.shape[1])})
        if self.N is not None:
            columns.update({f"N{k + 1}": self.N[:, k] for k in range(self.N.shape[1])})
        return pd.DataFrame(columns)


def _extinction_event(species: int) -> Callable[[float, np.ndarray], float]:
    def event(t: float, y: np.ndarray) -> float:
        return y[species]

    event.terminal = True
    event.direction = -1
    return event


def simulate(
    parameters: ParameterBundle,
    biomass: np.ndarray,
    start: float = 0.0,
    stop: float = 500.0,
    steps: Optional[int] = None,
    nutrients: Optional[np.ndarray] = None,
    method: str = "LSODA",
    rtol: float = 1e-6,
    atol: float = 1e-9,
) -> SimulationResult:
    """Integrate the model from ``start`` to ``stop``.

    Args:
        parameters: Model parameters.
        biomass: Initial species biomass [S].
        start: Initial time.
        stop: Final time.
        steps: Number of output times, default one per time unit.
        nutrients: Initial nutrient concentrations [2] under the "nutrients"
            regime; defaults to the supply concentrations.
        method: Any ``solve_ivp`` method.
        rtol: Relative tolerance.
        atol: Absolute tolerance.

    Returns:
        SimulationResult.

    Raises:
        ValueError: If the initial state has the wrong length or ``stop <= start``.
        SimulationError: If the integrator fails.
    """
    S = parameters.S
    biomass = np.asarray(biomass, dtype=float)
    if biomass.shape != (S,):
        raise ValueError(f"Initial biomass must have length {S}, got shape {biomass.shape}")
    if stop <= start:
        raise ValueError(f"stop ({stop}) must be greater than start ({start})")

    state = biomass.copy()
    if parameters.n_nutrients:
        if nutrients is None:
            nutrients = parameters.supply
        state = np.concatenate([state, np.asarray(nutrients, dtype=float)])

    if steps is None:
        steps = int(round(stop - start)) + 1
    t_eval = np.linspace(start, stop, steps)

    # Extinct species are held at exactly zero
    extinct = biomass <= 0.0
    absent = extinct.copy()

    def rhs(t: float, y: np.ndarray) -> np.ndarray:
        y = y.copy()
        y[:S][extinct] = 0.0
        derivative = dBdt(y, parameters, t)
        derivative[:S][extinct] = 0.0
        return derivative

    times: List[np.ndarray] = []
    states: List[np.ndarray] = []
    extinctions: Dict[int, float] = {}
    t0 = start
    first = True

    logger.info(f"Integrating S={S} species from t={start} to t={stop} ({method})")
    while t0 < stop:
        alive = np.flatnonzero(~extinct)
        events = [_extinction_event(i) for i in alive]
        segment_eval = t_eval[t_eval >= t0] if first else t_eval[t_eval > t0]
        first = False

        sol = solve_ivp(
            rhs,
            (t0, stop),
            state,
            method=method,
            t_eval=segment_eval,
            events=events or None,
            rtol=rtol,
            atol=atol,
        )
        if not sol.success:
            raise SimulationError(f"Integration failed at t={sol.t[-1] if sol.t.size else t0}: {sol.message}")

        times.append(sol.t)
        states.append(sol.y.T)
        if sol.status != 1:
            break

        # Terminal event: the first species to reach zero goes extinct
        fired = [k for k, t_events in enumerate(sol.t_events) if len(t_events)]
        k = fired[0]
        species = int(alive[k])
        t0 = float(sol.t_events[k][0])
        state = np.array(sol.y_events[k][0], dtype=float)
        state[species] = 0.0
        extinct[species] = True
        extinctions[species] = t0
        logger.info(f"Species {species} went extinct at t={t0:.3f}")

    trajectory = np.vstack(states) if states else np.empty((0, state.size))
    t = np.concatenate(times) if times else np.empty(0)
    B = np.maximum(trajectory[:, :S], 0.0)
    # Solver drift must not revive extinct or absent species
    B[:, absent] = 0.0
    for species, t_extinct in extinctions.items():
        B[t >= t_extinct, species] = 0.0
    N = np.maximum(trajectory[:, S:], 0.0) if parameters.n_nutrients else None
    result = SimulationResult(
        t=t,
        B=B,
        N=N,
        parameters=parameters,
        extinctions=extinctions,
    )
    logger.info(f"Simulation finished: {len(result.survivors)}/{S} species persist")
    return result
