# tests/bioenergetic/test_config.py
"""Tests for configuration utilities and parameter building from config."""

from pathlib import Path
from typing import Dict

import numpy as np
import pytest
from omegaconf import DictConfig, OmegaConf

from bioenergetic.models import LinearMortality, Productivity, build_parameters
from bioenergetic.models.rates import exponential_ba_x
from bioenergetic.utils.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    get_value,
    load_config,
    merge_configs,
    save_config,
    to_dict,
    validate_config,
)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, sample_config_file: Path):
        """Test loading a valid configuration file."""
        cfg = load_config(sample_config_file)

        assert isinstance(cfg, DictConfig)
        assert cfg.foodweb.Z == 10.0
        assert cfg.productivity.mode == "species"
        assert cfg.rates.metabolism.model == "no_effect_x"

    def test_load_default_config(self):
        """Test the packaged default configuration loads and validates."""
        cfg = load_config(DEFAULT_CONFIG_PATH)
        validate_config(cfg)
        assert len(cfg.foodweb.A) == len(cfg.simulation.initial_biomass)

    def test_load_config_with_overrides(self, sample_config_file: Path):
        """Test loading config with CLI overrides."""
        cfg = load_config(
            sample_config_file,
            overrides=["productivity.mode=competitive", "temperature=298.15"],
        )

        assert cfg.productivity.mode == "competitive"
        assert cfg.temperature == 298.15

    def test_load_config_file_not_found(self, temp_dir: Path):
        """Test error on missing config file."""
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(temp_dir / "nonexistent.yaml")

    def test_load_config_invalid_yaml(self, temp_dir: Path):
        """Test error on invalid YAML syntax."""
        bad_config = temp_dir / "bad.yaml"
        bad_config.write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigError, match="Failed to load"):
            load_config(bad_config)

    def test_load_config_resolves_interpolations(self, temp_dir: Path):
        """Test that OmegaConf interpolations are resolved."""
        config_path = temp_dir / "interp.yaml"
        config_path.write_text("base: 293.15\ntemperature: ${base}\n")

        cfg = load_config(config_path, resolve=True)
        assert cfg.temperature == 293.15


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_validate_valid_config(self, sample_config_file: Path):
        """Test validation passes for valid config."""
        cfg = load_config(sample_config_file)
        # Should not raise
        validate_config(cfg)

    def test_validate_missing_field(self, sample_config_dict: Dict):
        """Test validation fails on missing required field."""
        del sample_config_dict["foodweb"]["A"]
        cfg = OmegaConf.create(sample_config_dict)

        with pytest.raises(ConfigError, match="foodweb.A"):
            validate_config(cfg)

    def test_validate_wrong_type(self, sample_config_dict: Dict):
        """Test validation fails on wrong type."""
        sample_config_dict["temperature"] = "warm"
        cfg = OmegaConf.create(sample_config_dict)

        with pytest.raises(ConfigError, match="Invalid type for temperature"):
            validate_config(cfg)

    def test_validate_bool_is_not_number(self, sample_config_dict: Dict):
        sample_config_dict["simulation"]["stop"] = True
        cfg = OmegaConf.create(sample_config_dict)

        with pytest.raises(ConfigError, match="simulation.stop"):
            validate_config(cfg)

    def test_validate_int_is_number(self, sample_config_dict: Dict):
        sample_config_dict["simulation"]["stop"] = 100
        validate_config(OmegaConf.create(sample_config_dict))

    def test_validate_custom_schema(self, sample_config_dict: Dict):
        """Test validation with custom schema."""
        cfg = OmegaConf.create(sample_config_dict)
        validate_config(cfg, {"logging.experiment_name": str})

        with pytest.raises(ConfigError, match="Missing required field"):
            validate_config(cfg, {"logging.nonexistent": str})


class TestConfigHelpers:
    """Tests for conversion, merging, saving and lookup."""

    def test_to_dict(self, sample_config_file: Path):
        d = to_dict(load_config(sample_config_file))
        assert isinstance(d, dict)
        assert d["foodweb"]["A"][0] == [0, 1, 0]

    def test_merge_configs(self):
        merged = merge_configs(
            OmegaConf.create({"simulation": {"stop": 10, "method": "LSODA"}}),
            OmegaConf.create({"simulation": {"stop": 20}}),
        )
        assert merged.simulation.stop == 20
        assert merged.simulation.method == "LSODA"

    def test_save_config_roundtrip(self, sample_config_file: Path, temp_dir: Path):
        cfg = load_config(sample_config_file)
        path = save_config(cfg, temp_dir / "nested" / "saved.yaml")
        assert path.exists()
        assert to_dict(load_config(path)) == to_dict(cfg)

    def test_get_value(self, sample_config_file: Path):
        cfg = load_config(sample_config_file)
        assert get_value(cfg, "simulation.rtol") == 1e-6
        assert get_value(cfg, "simulation.missing", default=3) == 3
        # Null values fall back to the default as well
        assert get_value(cfg, "mortality.rate", default=0.0) == 0.0


class TestBuildParameters:
    """Tests for building a ParameterBundle from configuration."""

    def test_default_build(self, sample_config_file: Path):
        p = build_parameters(load_config(sample_config_file))
        assert p.S == 3
        assert p.productivity is Productivity.SPECIES
        np.testing.assert_allclose(p.bodymass, [100.0, 10.0, 1.0])
        assert p.mortality is None

    def test_rate_model_by_name(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["rates.metabolism.model=exponential_ba_x"])
        p = build_parameters(cfg)
        expected = exponential_ba_x()(p.bodymass, 293.15, p.web)
        np.testing.assert_allclose(p.x, expected)

    def test_rate_coefficients(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["rates.growth.coefficients.r=2.0"])
        np.testing.assert_allclose(build_parameters(cfg).r, 2.0)

    def test_mortality_and_epsilon(self, sample_config_file: Path):
        cfg = load_config(
            sample_config_file,
            overrides=["mortality.rate=0.2", "numerics.extinction_epsilon=0.001"],
        )
        p = build_parameters(cfg)
        assert isinstance(p.mortality, LinearMortality)
        assert p.extinction_epsilon == 0.001

    def test_vertebrates(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["foodweb.vertebrates=[true,false,false]"])
        p = build_parameters(cfg)
        np.testing.assert_array_equal(p.is_vertebrate, [True, False, False])

    def test_unknown_rate_model(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["rates.growth.model=logistic_r"])
        with pytest.raises(ConfigError, match="rates.growth"):
            build_parameters(cfg)

    def test_unknown_coefficient(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["rates.metabolism.coefficients.a_plant=1.0"])
        with pytest.raises(ConfigError, match="rates.metabolism"):
            build_parameters(cfg)

    def test_invalid_productivity(self, sample_config_file: Path):
        cfg = load_config(sample_config_file, overrides=["productivity.mode=chemostat"])
        with pytest.raises(ConfigError, match="Invalid model parameters"):
            build_parameters(cfg)

    def test_missing_diet_matrix(self):
        with pytest.raises(ConfigError, match="foodweb.A"):
            build_parameters(OmegaConf.create({"temperature": 293.15}))
