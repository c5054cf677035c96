"""Tests for SimulationConfig validation and dict conversion."""

import pytest

from creatures.config.simulation_config import SimulationConfig
from creatures.exceptions import ConfigurationError


class TestValidate:
    def test_defaults_are_valid(self):
        SimulationConfig().validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"dt": 0.0},
            {"initial_population": -1},
            {"world_size": 0.0},
            {"food_energy": -1.0},
            {"warmup_ticks": -1},
            {"segment_length": 0.0},
        ],
    )
    def test_invalid_top_level(self, overrides):
        with pytest.raises(ConfigurationError):
            SimulationConfig(**overrides).validate()

    def test_invalid_section(self):
        config = SimulationConfig()
        config.metabolism.max_age = 0
        with pytest.raises(ConfigurationError):
            config.validate()


class TestFromDict:
    def test_partial_dict(self):
        config = SimulationConfig.from_dict({"dt": 0.05, "seed": 3})
        assert config.dt == 0.05
        assert config.seed == 3
        assert config.initial_population == SimulationConfig().initial_population

    def test_nested_sections(self):
        config = SimulationConfig.from_dict(
            {"metabolism": {"max_age": 60.0, "bogus": 1}, "reproduction": {"max_population": 8}}
        )
        assert config.metabolism.max_age == 60.0
        assert config.metabolism.max_energy == 100.0
        assert config.reproduction.max_population == 8

    def test_unknown_keys_ignored(self):
        assert SimulationConfig.from_dict({"gravity": 9.8}) == SimulationConfig()

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            SimulationConfig.from_dict({"sensors": 5})

    def test_round_trip(self):
        config = SimulationConfig(seed=11, dt=0.01)
        config.body_mutation.structural_rate = 0.2
        assert SimulationConfig.from_dict(config.to_dict()) == config
