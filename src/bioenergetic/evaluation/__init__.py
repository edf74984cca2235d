# src/bioenergetic/evaluation/__init__.py
"""
Community measures computed from simulated trajectories.
"""

from .measures import (
    FoodWebSummary,
    foodweb_evenness,
    population_stability,
    producer_growth,
    species_persistence,
    species_richness,
    summarize,
    total_biomass,
)

__all__ = [
    "FoodWebSummary",
    "foodweb_evenness",
    "population_stability",
    "producer_growth",
    "species_persistence",
    "species_richness",
    "summarize",
    "total_biomass",
]
