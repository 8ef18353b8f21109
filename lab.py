"""
lab.py - Quantum Genetics Lab CLI

Command-line driver for the genetics engine:
  validate-config  Check a config file against the schema
  run              Breed founders for a number of steps and print the report

Exit codes:
  0: success
  1: validation issue (actionable)
  2: fatal error (missing file, bad input)
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import config_schema
from genetics import QuantumGeneticProcessor, export_ledger, export_report

console = Console()
logger = logging.getLogger(__name__)


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def _fail(output: str, message: str, **extra) -> None:
    if output == "json":
        click.echo(json.dumps({"error": message, **extra}))
    else:
        print_error(message)
    sys.exit(2)


def run_session(processor: QuantumGeneticProcessor, steps: int, delta_time: float) -> int:
    """
    Breed random pairs of stored genomes, measure every offspring trait, tick.

    Returns:
        int: Number of measurements taken
    """
    measured = 0
    for _ in range(steps):
        ids = processor.store.ids()
        a = ids[int(processor.rng.next_float() * len(ids))]
        b = ids[int(processor.rng.next_float() * len(ids))]
        child = processor.breed(a, b)
        for trait_name in list(child.traits):
            processor.measure(child.id, trait_name)
            measured += 1
        processor.tick(delta_time)
    return measured


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log engine activity")
def cli(verbose: bool) -> None:
    """Quantum genetics lab."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


# --- validate-config ---

@cli.command("validate-config")
@click.argument("config_path", type=click.Path())
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def validate_config_cmd(config_path: str, output: str) -> None:
    """Validate a genetics config file (strict)."""
    try:
        config = config_schema.load(config_path, strict=True)
    except FileNotFoundError:
        _fail(output, "config not found", path=config_path)
    except ValueError as e:
        if output == "json":
            click.echo(json.dumps({"path": config_path, "valid": False, "errors": [str(e)]}))
        else:
            console.print(Panel(
                f"File: {config_path}\n\n[red]✗[/red] {e}",
                title="[bold red]Config Validation: FAILED[/bold red]",
                border_style="red",
            ))
        sys.exit(1)

    if output == "json":
        click.echo(json.dumps({
            "path": config_path,
            "valid": True,
            "config_hash": config_schema.config_hash(config),
            "config": config_schema.to_dict(config),
        }, indent=2))
        return

    console.print(Panel(
        f"File: {config_path}\n"
        f"Scenario: {config.scenario_name}    States: {config.max_superposition_states}\n"
        f"decoherence_rate: {config.decoherence_rate}    "
        f"entanglement: {'on' if config.enable_entanglement else 'off'}\n"
        f"Hash: {config_schema.config_hash(config)}",
        title="[bold green]Config Validation: PASSED[/bold green]",
        border_style="green",
    ))


# --- run ---

@cli.command("run")
@click.argument("founders_path", type=click.Path())
@click.option("--config", "-c", "config_path", type=click.Path(), help="Config JSON/YAML")
@click.option("--steps", "-n", default=20, show_default=True, type=click.IntRange(min=0))
@click.option("--dt", "delta_time", default=1.0, show_default=True, type=click.FloatRange(min=0.0))
@click.option("--ledger", type=click.Path(), help="Append event receipts to this JSONL file")
@click.option("--report", "report_path", type=click.Path(), help="Write the final report JSON here")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def run_cmd(founders_path: str, config_path: Optional[str], steps: int, delta_time: float,
            ledger: Optional[str], report_path: Optional[str], output: str) -> None:
    """Breed FOUNDERS_PATH genomes for STEPS generations of random pairings."""
    try:
        config = config_schema.load(config_path) if config_path else config_schema.default()
        founders = config_schema.load_founders(founders_path)
    except FileNotFoundError as e:
        _fail(output, str(e))
    except ValueError as e:
        _fail(output, f"invalid input: {e}")

    if not founders:
        _fail(output, "founders file holds no genomes", path=founders_path)

    processor = QuantumGeneticProcessor(config)
    for founder in founders:
        processor.create_quantum_genome(founder)

    measured = run_session(processor, steps, delta_time)
    report = processor.generate_report()
    logger.info("Session finished: %d genomes, %d measurements", report.total_genomes, measured)

    if report_path:
        export_report(report, report_path)
    written = export_ledger(processor.bus, ledger) if ledger else 0

    if output == "json":
        click.echo(json.dumps({
            "measurements": measured,
            "receipts_written": written,
            "chain_valid": processor.bus.verify()[0],
            "report": report.to_dict(),
        }, indent=2))
        return

    table = Table(title=f"Quantum Genetics Report ({config.scenario_name})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Genomes", str(report.total_genomes))
    table.add_row("Max generation", str(report.max_generation))
    table.add_row("Average coherence", f"{report.average_coherence:.3f}")
    table.add_row("Superposition complexity", f"{report.average_superposition_complexity:.3f}")
    table.add_row("Active entanglements", str(report.active_entanglements))
    table.add_row("Largest entangled cluster", str(report.largest_entangled_cluster))
    table.add_row("Measurements", str(measured))
    console.print(table)

    if ledger:
        print_success(f"{written} receipts appended to {ledger}")
    if report_path:
        print_success(f"Report written to {report_path}")


def main() -> int:
    """Console entry point."""
    try:
        cli(standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 2
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
