# src/bioenergetic/simulation/__init__.py
"""
ODE integration of the bioenergetic food-web model.
"""

from .integrate import SimulationError, SimulationResult, simulate

__all__ = [
    "SimulationError",
    "SimulationResult",
    "simulate",
]
