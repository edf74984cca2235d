# src/bioenergetic/models/parameters.py
"""Parameter bundle for the bioenergetic food-web model.

The bundle is built once per simulation by ``model_parameters`` and then
passed read-only to every derivative evaluation. All validation happens
here: the derivative function trusts a bundle to be well formed, since it is
called thousands of times per trajectory.

Example:
    >>> A = [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
    >>> p = model_parameters(A, productivity="competitive", alpha=0.5)
    >>> p.S, p.num_producers
    (3, 1)
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Sequence, Union

import numpy as np

from .foodweb import FoodWeb, freeze, homogeneous_preferences, trophic_rank
from .mortality import LinearMortality
from .rates import (
    RateModel,
    no_effect_attackr,
    no_effect_handlingt,
    no_effect_r,
    no_effect_x,
)

logger = logging.getLogger(__name__)

# Number of nutrient pools in the nutrient-colimited model
N_NUTRIENTS = 2
# Default extinction snap tolerance
DEFAULT_EXTINCTION_EPSILON = 100 * np.finfo(np.float64).eps

ArrayLike = Union[float, Sequence[float], np.ndarray]


class ParameterError(ValueError):
    """Invalid food web or model parameters."""

    pass


class Productivity(str, Enum):
    """Producer growth-limitation regime."""

    SPECIES = "species"  # each producer has its own carrying capacity K
    SYSTEM = "system"  # producers share K equally
    COMPETITIVE = "competitive"  # producers compete with strength alpha
    NUTRIENTS = "nutrients"  # Liebig colimitation by two nutrient pools


@dataclass(frozen=True, eq=False)
class ParameterBundle:
    """Immutable model parameters consumed by ``dBdt``.

    Attributes:
        web: Diet matrix, roles and body masses.
        temperature: Temperature (K) the rates were evaluated at.
        productivity: Producer growth-limitation regime.
        x: Metabolic rate [S].
        r: Intrinsic producer growth rate [S].
        y: Maximum mass-specific consumption rate [S].
        half_saturation: Half-saturation density Gamma, scalar or per consumer.
        hill_exponent: Functional response exponent h.
        interference: Consumer interference c, scalar or per species.
        efficiency: Assimilation efficiency per feeding link [S, S].
        w: Relative preference of consumer i for resource j [S, S].
        cost_matrix: Optional rewiring cost multiplier [S, S].
        K: Carrying capacity.
        alpha: Interspecific competition strength between producers.
        K1, K2: Nutrient half-saturation constants per species [S].
        supply: Nutrient supply concentrations [2].
        upsilon: Nutrient content of producer biomass [2].
        D: Chemostat turnover rate.
        mortality: Optional density-dependent mortality d(B) for consumers.
        extinction_epsilon: Tolerance below which a biomass is snapped through zero.
    """

    web: FoodWeb
    temperature: float
    productivity: Productivity
    x: np.ndarray
    r: np.ndarray
    y: np.ndarray
    half_saturation: np.ndarray
    hill_exponent: float
    interference: np.ndarray
    efficiency: np.ndarray
    w: np.ndarray
    cost_matrix: Optional[np.ndarray]
    K: float
    alpha: float
    K1: np.ndarray
    K2: np.ndarray
    supply: np.ndarray
    upsilon: np.ndarray
    D: float
    mortality: Optional[Callable[[np.ndarray], np.ndarray]] = None
    extinction_epsilon: float = DEFAULT_EXTINCTION_EPSILON

    @property
    def A(self) -> np.ndarray:
        return self.web.A

    @property
    def is_producer(self) -> np.ndarray:
        return self.web.is_producer

    @property
    def is_vertebrate(self) -> np.ndarray:
        return self.web.is_vertebrate

    @property
    def bodymass(self) -> np.ndarray:
        return self.web.bodymass

    @property
    def S(self) -> int:
        return self.web.S

    @property
    def num_producers(self) -> int:
        return self.web.num_producers

    @property
    def n_nutrients(self) -> int:
        return N_NUTRIENTS if self.productivity is Productivity.NUTRIENTS else 0

    @property
    def state_size(self) -> int:
        """Length of the state vector integrated by the ODE solver."""
        return self.S + self.n_nutrients

    @property
    def gamma_h(self) -> np.ndarray:
        """Half-saturation term of the functional response denominator."""
        return self.half_saturation * self.hill_exponent

    @property
    def rewiring(self) -> bool:
        return self.cost_matrix is not None


def _as_vector(value: ArrayLike, S: int, name: str) -> np.ndarray:
    vector = np.asarray(value, dtype=float)
    if vector.ndim == 0:
        vector = np.full(S, float(vector))
    if vector.shape != (S,):
        raise ParameterError(f"{name} must be a scalar or have length {S}, got shape {vector.shape}")
    return vector


def _as_scalar_or_vector(value: ArrayLike, S: int, name: str) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.ndim == 0:
        return array
    return _as_vector(array, S, name)


def _as_matrix(value, S: int, name: str) -> np.ndarray:
    matrix = np.asarray(value, dtype=float)
    if matrix.shape != (S, S):
        raise ParameterError(f"{name} must have shape ({S}, {S}), got {matrix.shape}")
    return matrix


def _validate_diet_matrix(A) -> np.ndarray:
    A = np.asarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ParameterError(f"Diet matrix must be square, got shape {A.shape}")
    if A.shape[0] == 0:
        raise ParameterError("Diet matrix is empty")
    if not np.all(np.isin(A, (0, 1))):
        raise ParameterError("Diet matrix entries must be 0/1 or boolean")
    A = A.astype(bool)
    if A.any(axis=1).all():
        raise ParameterError("Food web has no producer (every species has prey)")
    return A


def per_consumer(rate: np.ndarray, A: np.ndarray) -> np.ndarray:
    """Reduce a rate to one value per consumer.

    Link matrices are averaged over each consumer's feeding links; species
    without prey and non-finite values get 0.
    """
    rate = np.asarray(rate, dtype=float)
    if rate.ndim == 2:
        n_links = A.sum(axis=1)
        total = np.where(A, rate, 0.0).sum(axis=1)
        with np.errstate(divide="ignore", invalid="ignore"):
            rate = np.where(n_links > 0, total / n_links, 0.0)
    rate = np.where(A.any(axis=1), rate, 0.0)
    rate[~np.isfinite(rate)] = 0.0
    return rate


def _species_rate(model: RateModel, bodymass: np.ndarray, temperature: float, web: FoodWeb, name: str) -> np.ndarray:
    rate = np.asarray(model(bodymass, temperature, web), dtype=float)
    if rate.ndim == 0:
        rate = np.full(web.S, float(rate))
    if rate.shape != (web.S,):
        raise ParameterError(f"{name} model must return one value per species, got shape {rate.shape}")
    return rate


def model_parameters(
    A,
    *,
    bodymass: Optional[ArrayLike] = None,
    vertebrates: Optional[Sequence[bool]] = None,
    Z: float = 1.0,
    temperature: float = 293.15,
    productivity: Union[str, Productivity] = Productivity.SPECIES,
    K: float = 1.0,
    alpha: float = 1.0,
    h: float = 1.0,
    c: ArrayLike = 0.0,
    e_herbivore: float = 0.45,
    e_carnivore: float = 0.85,
    w=None,
    K1: ArrayLike = 0.15,
    K2: ArrayLike = 0.15,
    D: float = 0.25,
    supply: Sequence[float] = (10.0, 10.0),
    upsilon: Sequence[float] = (1.0, 0.5),
    cost_matrix=None,
    mortality: Optional[Union[float, Callable[[np.ndarray], np.ndarray]]] = None,
    extinction_epsilon: float = DEFAULT_EXTINCTION_EPSILON,
    growthrate: Optional[RateModel] = None,
    metabolicrate: Optional[RateModel] = None,
    handlingtime: Optional[RateModel] = None,
    attackrate: Optional[RateModel] = None,
) -> ParameterBundle:
    """Validate inputs and materialize a ParameterBundle.

    Args:
        A: Square 0/1 diet matrix, ``A[i, j] = 1`` when i eats j.
        bodymass: Standardized body masses. Defaults to ``Z ** (trophic_rank - 1)``.
        vertebrates: Vertebrate flags, default all invertebrates.
        Z: Consumer-resource body-mass ratio used for default body masses.
        temperature: Temperature in Kelvin at which rates are evaluated.
        productivity: Producer growth-limitation regime.
        K: Carrying capacity.
        alpha: Competition strength between producers ("competitive" only).
        h: Functional response exponent.
        c: Interference between consumers, scalar or per species.
        e_herbivore: Assimilation efficiency when eating producers.
        e_carnivore: Assimilation efficiency when eating consumers.
        w: Preference matrix; homogeneous (1 / number of prey) if None.
        K1, K2: Nutrient half-saturation constants ("nutrients" only).
        D: Nutrient turnover rate.
        supply: Supply concentration of each nutrient.
        upsilon: Nutrient content of producer biomass.
        cost_matrix: Rewiring cost multiplier applied to available food.
        mortality: Density-dependent mortality callable, or a linear rate.
        extinction_epsilon: Extinction snap tolerance.
        growthrate: Rate model for r. Defaults to ``no_effect_r()``.
        metabolicrate: Rate model for x. Defaults to ``no_effect_x()``.
        handlingtime: Rate model for handling time. Defaults to ``no_effect_handlingt()``.
        attackrate: Rate model for attack rate. Defaults to ``no_effect_attackr()``.

    Returns:
        ParameterBundle with read-only arrays.

    Raises:
        ParameterError: If the food web or any parameter is malformed.
    """
    A = _validate_diet_matrix(A)
    S = A.shape[0]

    try:
        productivity = Productivity(productivity)
    except ValueError as e:
        raise ParameterError(
            f"Unknown productivity {productivity!r}; expected one of {[p.value for p in Productivity]}"
        ) from e

    if vertebrates is None:
        vertebrates = np.zeros(S, dtype=bool)
    vertebrates = np.asarray(vertebrates, dtype=bool)
    if vertebrates.shape != (S,):
        raise ParameterError(f"vertebrates must have length {S}, got shape {vertebrates.shape}")

    if bodymass is None:
        try:
            bodymass = Z ** (trophic_rank(A) - 1.0)
        except np.linalg.LinAlgError as e:
            raise ParameterError("Cannot compute trophic rank: some consumers never reach a producer") from e
    bodymass = _as_vector(bodymass, S, "bodymass")
    if np.any(bodymass < 0):
        raise ParameterError("Body masses must be non-negative")

    supply = np.asarray(supply, dtype=float)
    upsilon = np.asarray(upsilon, dtype=float)
    if supply.shape != (N_NUTRIENTS,) or upsilon.shape != (N_NUTRIENTS,):
        raise ParameterError(f"supply and upsilon must each have {N_NUTRIENTS} values")
    if extinction_epsilon < 0:
        raise ParameterError("extinction_epsilon must be non-negative")

    for name, value in (("e_herbivore", e_herbivore), ("e_carnivore", e_carnivore)):
        if not 0.0 < value <= 1.0:
            raise ParameterError(f"{name} must be in (0, 1], got {value}")
    if K <= 0:
        raise ParameterError(f"Carrying capacity K must be positive, got {K}")
    if D < 0:
        raise ParameterError(f"Turnover rate D must be non-negative, got {D}")
    if h < 0:
        raise ParameterError(f"Functional response exponent h must be non-negative, got {h}")
    interference = _as_scalar_or_vector(c, S, "c")
    if np.any(interference < 0):
        raise ParameterError("Interference c must be non-negative")
    K1 = _as_vector(K1, S, "K1")
    K2 = _as_vector(K2, S, "K2")
    if np.any(K1 <= 0) or np.any(K2 <= 0):
        raise ParameterError("Half-saturation constants K1 and K2 must be positive")

    growthrate = growthrate or no_effect_r()
    metabolicrate = metabolicrate or no_effect_x()
    handlingtime = handlingtime or no_effect_handlingt()
    attackrate = attackrate or no_effect_attackr()

    web = FoodWeb.from_matrix(A, bodymass, vertebrates)

    # Attack rate may depend on handling time, so it is evaluated second
    handling = np.asarray(handlingtime(bodymass, temperature, web), dtype=float)
    web_with_handling = replace(web, handling_time=freeze(handling))
    attack = np.asarray(attackrate(bodymass, temperature, web_with_handling), dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        y = per_consumer(1.0 / handling, A)
        half_saturation = per_consumer(1.0 / (attack * handling), A)

    x = _species_rate(metabolicrate, bodymass, temperature, web, "Metabolic rate")
    r = _species_rate(growthrate, bodymass, temperature, web, "Growth rate")

    efficiency = np.where(A, np.where(web.is_producer[np.newaxis, :], e_herbivore, e_carnivore), 0.0)
    w = homogeneous_preferences(A) if w is None else _as_matrix(w, S, "w")
    if cost_matrix is not None:
        cost_matrix = freeze(_as_matrix(cost_matrix, S, "cost_matrix"))

    if mortality is not None and not callable(mortality):
        mortality = LinearMortality(float(mortality))

    bundle = ParameterBundle(
        web=web,
        temperature=float(temperature),
        productivity=productivity,
        x=freeze(x),
        r=freeze(r),
        y=freeze(y),
        half_saturation=freeze(half_saturation),
        hill_exponent=float(h),
        interference=freeze(interference),
        efficiency=freeze(efficiency),
        w=freeze(w),
        cost_matrix=cost_matrix,
        K=float(K),
        alpha=float(alpha),
        K1=freeze(K1),
        K2=freeze(K2),
        supply=freeze(supply),
        upsilon=freeze(upsilon),
        D=float(D),
        mortality=mortality,
        extinction_epsilon=float(extinction_epsilon),
    )
    logger.info(
        f"Built parameters: S={S}, producers={web.num_producers}, links={web.links}, "
        f"productivity={productivity.value}, T={temperature:.2f}K"
    )
    logger.debug(f"Rate models: r={growthrate!r}, x={metabolicrate!r}, ht={handlingtime!r}, ar={attackrate!r}")
    return bundle
