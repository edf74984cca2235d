# src/bioenergetic/models/__init__.py
"""
Bioenergetic consumer-resource food-web model (Yodzis & Innes 1992,
Brose, Williams & Martinez 2006).

Components:
- foodweb: diet matrix, species roles, trophic rank
- rates/: temperature-dependent biological rates
- parameters: immutable parameter bundle and its builder
- consumption: multi-resource functional response
- growth: producer growth limitation and respiration
- nutrients: nutrient pool dynamics
- mortality: density-dependent consumer mortality
- dbdt: derivative assembler handed to the ODE integrator
- factory: parameters from an OmegaConf configuration
"""

from .consumption import consumption, fluxes
from .dbdt import dBdt, extinction_snap, split_state
from .factory import build_parameters, build_rate_model
from .foodweb import FoodWeb, Role, trophic_rank
from .growth import get_growth, growthrate
from .mortality import LinearMortality, density_dependent_mortality
from .nutrients import nutrientuptake
from .parameters import (
    ParameterBundle,
    ParameterError,
    Productivity,
    model_parameters,
)

__all__ = [
    # Topology
    "FoodWeb",
    "Role",
    "trophic_rank",
    # Parameters
    "ParameterBundle",
    "ParameterError",
    "Productivity",
    "model_parameters",
    "build_parameters",
    "build_rate_model",
    # Submodels
    "consumption",
    "fluxes",
    "get_growth",
    "growthrate",
    "nutrientuptake",
    "LinearMortality",
    "density_dependent_mortality",
    # Assembler
    "dBdt",
    "extinction_snap",
    "split_state",
]
