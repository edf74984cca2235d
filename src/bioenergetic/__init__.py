# src/bioenergetic/__init__.py
"""
Bioenergetic food-web model: derivative core, simulation and community
measures.

Subpackages:
- models: rate functions, parameter bundle and the dB/dt assembler
- simulation: ODE integration with extinction handling
- evaluation: community measures of simulated trajectories
- utils: configuration, logging and run-directory helpers
"""

from .models import ParameterBundle, dBdt, model_parameters
from .simulation import SimulationResult, simulate

__version__ = "0.1.0"

__all__ = [
    "ParameterBundle",
    "SimulationResult",
    "dBdt",
    "model_parameters",
    "simulate",
]
