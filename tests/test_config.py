"""
tests/test_config.py - QuantumConfig and config_schema Tests

CLAUDEME v3.1 Compliant: Every test has assert statements.
"""

import json
from dataclasses import FrozenInstanceError

import pytest
import yaml

import config_schema
from genetics import (
    MANDATORY_SCENARIOS,
    SCENARIO_BASELINE,
    SCENARIO_CLASSICAL,
    SCENARIO_UNCACHED,
    QuantumConfig,
)


# =============================================================================
# DATACLASS
# =============================================================================

class TestQuantumConfig:
    """Defaults, validation and immutability."""

    def test_defaults(self):
        config = QuantumConfig()
        assert config.coherence_time == 100.0
        assert config.decoherence_rate == 0.01
        assert config.enable_entanglement is True
        assert config.max_superposition_states == 8
        assert config.superposition_stability == 0.85
        assert config.collapse_probability == 0.1
        assert config.entanglement_strength == 0.3
        assert config.entanglement_decay_rate == 0.005
        assert config.cache_validity_time == 10.0

    @pytest.mark.parametrize("kwargs", [
        {"max_superposition_states": 0},
        {"superposition_stability": 0.0},
        {"superposition_stability": 1.2},
        {"collapse_probability": 1.5},
        {"entanglement_strength": -0.1},
        {"decoherence_rate": -0.01},
        {"cache_validity_time": -1.0},
        {"random_seed": -1},
    ])
    def test_invalid_rejected(self, kwargs):
        with pytest.raises(ValueError):
            QuantumConfig(**kwargs)

    def test_stability_one_allowed(self):
        """Full collapse is a valid setting."""
        assert QuantumConfig(superposition_stability=1.0).superposition_stability == 1.0

    def test_frozen(self):
        config = QuantumConfig()
        with pytest.raises(FrozenInstanceError):
            config.decoherence_rate = 0.5


class TestScenarios:
    """Preset configurations."""

    def test_names_unique(self):
        names = [s.scenario_name for s in MANDATORY_SCENARIOS]
        assert len(names) == len(set(names))
        assert SCENARIO_BASELINE.scenario_name == "BASELINE"

    def test_seeds_unique(self):
        seeds = [s.random_seed for s in MANDATORY_SCENARIOS]
        assert len(seeds) == len(set(seeds))

    def test_presets(self):
        assert SCENARIO_UNCACHED.cache_validity_time == 0.0
        assert SCENARIO_CLASSICAL.enable_entanglement is False


# =============================================================================
# SCHEMA / LOADER
# =============================================================================

class TestFromDict:
    """Strict and self-healing construction."""

    def test_empty_gives_default(self):
        assert config_schema.from_dict({}) == QuantumConfig()

    def test_valid_values(self):
        config = config_schema.from_dict({"decoherence_rate": 0.02, "max_superposition_states": 4})
        assert config.decoherence_rate == 0.02
        assert config.max_superposition_states == 4

    def test_integral_float_coerced(self):
        config = config_schema.from_dict({"max_superposition_states": 4.0}, strict=True)
        assert config.max_superposition_states == 4
        assert isinstance(config.max_superposition_states, int)

    def test_strict_out_of_range(self):
        with pytest.raises(ValueError):
            config_schema.from_dict({"collapse_probability": 1.5}, strict=True)

    def test_strict_unknown_field(self):
        with pytest.raises(ValueError):
            config_schema.from_dict({"warp_factor": 9}, strict=True)

    def test_heal_clamps(self):
        with pytest.warns(UserWarning, match="Clamped"):
            config = config_schema.from_dict({"collapse_probability": 1.5})
        assert config.collapse_probability == 1.0

    def test_heal_wrong_type(self):
        with pytest.warns(UserWarning, match="Invalid value"):
            config = config_schema.from_dict({"decoherence_rate": "fast"})
        assert config.decoherence_rate == 0.01

    def test_heal_unknown_field(self):
        with pytest.warns(UserWarning, match="unknown field"):
            config = config_schema.from_dict({"warp_factor": 9, "decoherence_rate": 0.03})
        assert config.decoherence_rate == 0.03

    def test_heal_non_integer_state_count(self):
        with pytest.warns(UserWarning):
            config = config_schema.from_dict({"max_superposition_states": 2.5})
        assert config.max_superposition_states == 8

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            config_schema.from_dict([1, 2, 3])

    def test_schema_copy(self):
        schema = config_schema.schema()
        schema["title"] = "changed"
        assert config_schema.schema()["title"] == "QuantumConfig"


class TestLoad:
    """File loading."""

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"entanglement_strength": 0.5}))
        assert config_schema.load(path).entanglement_strength == 0.5

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("enable_entanglement: false\ncoherence_time: 50\n")
        config = config_schema.load(path)
        assert config.enable_entanglement is False
        assert config.coherence_time == 50

    def test_empty_files(self, tmp_path):
        for name in ("empty.json", "empty.yaml"):
            path = tmp_path / name
            path.write_text("")
            assert config_schema.load(path) == QuantumConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            config_schema.load(tmp_path / "nope.yaml")

    def test_save_then_load(self, tmp_path):
        config = QuantumConfig(decoherence_rate=0.02, random_seed=9, scenario_name="TUNED")
        for name in ("saved.json", "saved.yml"):
            config_schema.save(config, tmp_path / name)
            assert config_schema.load(tmp_path / name, strict=True) == config

    def test_load_founders(self, tmp_path):
        path = tmp_path / "founders.yaml"
        path.write_text(yaml.safe_dump({"founders": [
            {"id": 1, "species": "Dragon", "traits": [["Size", 5.0, 0.1]]},
            {"id": 2, "species": "Dragon",
             "traits": [{"name": "Size", "value": 4.0, "mutation_rate": 0.2}]},
        ]}))
        founders = config_schema.load_founders(path)
        assert [f.id for f in founders] == [1, 2]
        assert founders[1].traits[0].mutation_rate == 0.2

    def test_load_founders_bad_shape(self, tmp_path):
        path = tmp_path / "founders.json"
        path.write_text(json.dumps("not a list"))
        with pytest.raises(ValueError):
            config_schema.load_founders(path)


class TestConfigHash:
    """Deterministic provenance hash."""

    def test_stable(self):
        assert config_schema.config_hash(QuantumConfig()) == config_schema.config_hash(QuantumConfig())
        assert len(config_schema.config_hash(QuantumConfig())) == 16

    def test_sensitive(self):
        assert (config_schema.config_hash(QuantumConfig())
                != config_schema.config_hash(QuantumConfig(decoherence_rate=0.02)))
