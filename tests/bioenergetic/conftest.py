# tests/bioenergetic/conftest.py
"""Shared fixtures for food-web model tests."""

import tempfile
from pathlib import Path
from typing import Dict, Generator

import numpy as np
import pytest
import yaml

from bioenergetic.models import FoodWeb, model_parameters

CHAIN = [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
# Omnivore 0 eats 1 and 2, herbivore 1 eats producers 2 and 3
OMNIVORY = [[0, 1, 1, 0], [0, 0, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def chain_A() -> np.ndarray:
    """Three-species chain: 0 eats 1, 1 eats 2, 2 is the producer."""
    return np.array(CHAIN)


@pytest.fixture
def omnivory_A() -> np.ndarray:
    return np.array(OMNIVORY)


@pytest.fixture
def chain_web(chain_A: np.ndarray) -> FoodWeb:
    return FoodWeb.from_matrix(chain_A, np.ones(3))


@pytest.fixture
def chain_parameters(chain_A: np.ndarray):
    """Temperature-independent parameters with unit body masses."""
    return model_parameters(chain_A)


@pytest.fixture
def omnivory_parameters(omnivory_A: np.ndarray):
    return model_parameters(omnivory_A, Z=10.0, vertebrates=[True, False, False, False])


@pytest.fixture
def chain_biomass() -> np.ndarray:
    return np.array([0.5, 0.6, 0.8])


@pytest.fixture
def sample_config_dict() -> Dict:
    """Provide a sample configuration dictionary."""
    return {
        "foodweb": {
            "A": CHAIN,
            "vertebrates": None,
            "bodymass": None,
            "Z": 10.0,
        },
        "temperature": 293.15,
        "productivity": {"mode": "species", "K": 1.0, "alpha": 1.0},
        "functional_response": {
            "h": 1.0,
            "c": 0.0,
            "e_herbivore": 0.45,
            "e_carnivore": 0.85,
            "cost_matrix": None,
        },
        "nutrients": {
            "K1": 0.15,
            "K2": 0.15,
            "D": 0.25,
            "supply": [10.0, 10.0],
            "upsilon": [1.0, 0.5],
            "initial": None,
        },
        "mortality": {"rate": None},
        "rates": {
            "growth": {"model": "no_effect_r", "coefficients": {}},
            "metabolism": {"model": "no_effect_x", "coefficients": {}},
            "handling_time": {"model": "no_effect_handlingt", "coefficients": {}},
            "attack_rate": {"model": "no_effect_attackr", "coefficients": {}},
        },
        "numerics": {"extinction_epsilon": None},
        "simulation": {
            "initial_biomass": [0.5, 0.6, 0.8],
            "seed": None,
            "start": 0.0,
            "stop": 50.0,
            "steps": None,
            "method": "LSODA",
            "rtol": 1.0e-6,
            "atol": 1.0e-9,
            "last": 20,
        },
        "logging": {
            "save_dir": "/tmp/outputs",
            "experiment_name": "test",
            "level": "INFO",
        },
    }


@pytest.fixture
def sample_config_file(temp_dir: Path, sample_config_dict: Dict) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return config_path
