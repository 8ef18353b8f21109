"""
Quantum Genetics Lab CLI Tests

Verifies exit codes:
  - 0: success
  - 1: validation issue (actionable)
  - 2: fatal error (missing file, bad input)
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from genetics import ClassicalGenome, ClassicalTrait, QuantumGeneticProcessor
from lab import cli, run_session


@pytest.fixture
def cli_runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def founders_file(tmp_path):
    """Two single-trait founders in YAML."""
    path = tmp_path / "founders.yaml"
    path.write_text(yaml.safe_dump({"founders": [
        {"id": 1, "species": "Dragon", "traits": [["Size", 5.0, 0.1]]},
        {"id": 2, "species": "Dragon", "traits": [["Size", 4.0, 0.1]]},
    ]}))
    return path


class TestValidateConfig:
    """validate-config command."""

    def test_valid(self, cli_runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("decoherence_rate: 0.02\n")
        result = cli_runner.invoke(cli, ["validate-config", str(path), "-o", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["config"]["decoherence_rate"] == 0.02
        assert len(data["config_hash"]) == 16

    def test_valid_rich(self, cli_runner, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{}")
        result = cli_runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 0
        assert "PASSED" in result.stdout

    def test_invalid(self, cli_runner, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"collapse_probability": 3.0}))
        result = cli_runner.invoke(cli, ["validate-config", str(path), "-o", "json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["valid"] is False

    def test_missing(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["validate-config", str(tmp_path / "nope.json"), "-o", "json"])
        assert result.exit_code == 2


class TestRun:
    """run command."""

    def test_json_report(self, cli_runner, founders_file):
        result = cli_runner.invoke(cli, ["run", str(founders_file), "-n", "5", "-o", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["measurements"] == 5
        assert data["chain_valid"] is True
        assert data["report"]["total_genomes"] == 7
        assert data["report"]["max_generation"] >= 1

    def test_exports(self, cli_runner, founders_file, tmp_path):
        ledger = tmp_path / "ledger.jsonl"
        report = tmp_path / "report.json"
        result = cli_runner.invoke(cli, [
            "run", str(founders_file), "-n", "3",
            "--ledger", str(ledger), "--report", str(report), "-o", "json",
        ])
        assert result.exit_code == 0
        written = json.loads(result.stdout)["receipts_written"]
        assert len(ledger.read_text().splitlines()) == written
        assert json.loads(report.read_text())["total_genomes"] == 5

    def test_with_config(self, cli_runner, founders_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("enable_entanglement: false\nscenario_name: CLASSICAL\n")
        result = cli_runner.invoke(cli, [
            "run", str(founders_file), "-c", str(config), "-n", "4", "-o", "json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["report"]["active_entanglements"] == 0

    def test_rich_table(self, cli_runner, founders_file):
        result = cli_runner.invoke(cli, ["run", str(founders_file), "-n", "2"])
        assert result.exit_code == 0
        assert "Quantum Genetics Report" in result.stdout

    def test_missing_founders(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["run", str(tmp_path / "none.yaml"), "-o", "json"])
        assert result.exit_code == 2

    def test_negative_mutation_rate(self, cli_runner, tmp_path):
        path = tmp_path / "founders.yaml"
        path.write_text(yaml.safe_dump({"founders": [
            {"id": 1, "traits": [["Size", 5.0, -0.1]]},
        ]}))
        result = cli_runner.invoke(cli, ["run", str(path), "-o", "json"])
        assert result.exit_code == 2
        assert "mutation_rate" in json.loads(result.stdout)["error"]

    def test_empty_founders(self, cli_runner, tmp_path):
        path = tmp_path / "founders.json"
        path.write_text("[]")
        result = cli_runner.invoke(cli, ["run", str(path), "-o", "json"])
        assert result.exit_code == 2


class TestRunSession:
    """run_session helper."""

    def test_counts(self):
        processor = QuantumGeneticProcessor()
        for genome_id in (1, 2):
            processor.create_quantum_genome(ClassicalGenome(
                id=genome_id,
                traits=(ClassicalTrait("Size", 5.0, 0.1), ClassicalTrait("Speed", 2.0, 0.1)),
            ))
        assert run_session(processor, steps=4, delta_time=0.5) == 8
        assert len(processor.store) == 6
        assert processor.now == 2.0
