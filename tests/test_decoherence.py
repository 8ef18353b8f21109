"""
tests/test_decoherence.py - DecoherenceScheduler and tick() Tests

Validates:
- linear coherence decay with a 0.1 floor
- forced measurement below the low-coherence threshold
- exponential per-trait decoherence via apply_decoherence
- tick() argument checking
"""

import math

import pytest

from genetics import (
    ClassicalGenome,
    ClassicalTrait,
    GenomeNotFound,
    QuantumConfig,
    QuantumGeneticProcessor,
    TraitNotFound,
)
from genetics.constants import COHERENCE_FLOOR
from genetics.validation import validate_store


def _founder(processor, genome_id=1):
    return processor.create_quantum_genome(ClassicalGenome(
        id=genome_id,
        species="Dragon",
        traits=(ClassicalTrait("Size", 5.0, 0.1), ClassicalTrait("Speed", 2.0, 0.1)),
    ))


class TestCoherenceDecay:
    """Per-tick linear decay."""

    def test_linear(self):
        """coherence -= decoherence_rate * dt."""
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        processor.tick(10.0)
        assert genome.coherence_level == pytest.approx(0.9)
        processor.tick(5.0)
        assert genome.coherence_level == pytest.approx(0.85)

    def test_floor_holds_over_long_run(self):
        """1000 one-second ticks never push coherence below 0.1."""
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        for _ in range(1000):
            processor.tick(1.0)
            assert genome.coherence_level >= COHERENCE_FLOOR
        assert genome.coherence_level == pytest.approx(COHERENCE_FLOOR)
        validate_store(processor.store, 8)

    def test_zero_delta_is_noop(self):
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        processor.tick(0.0)
        assert genome.coherence_level == 1.0
        assert processor.now == 0.0

    def test_clock_advances(self):
        processor = QuantumGeneticProcessor(start_time=100.0)
        processor.tick(2.5)
        processor.tick(0.5)
        assert processor.now == 103.0

    def test_negative_delta_rejected(self):
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        with pytest.raises(ValueError):
            processor.tick(-1.0)
        assert processor.now == 0.0
        assert genome.coherence_level == 1.0


class TestForcedMeasurement:
    """Genomes below coherence 0.3 get traits measured at random."""

    def test_every_trait_forced_at_certain_chance(self):
        """collapse_probability * dt >= 1 forces every trait."""
        processor = QuantumGeneticProcessor(QuantumConfig(collapse_probability=1.0))
        genome = _founder(processor)
        genome.coherence_level = 0.2
        seen = []
        processor.subscribe("measurement_performed", seen.append)

        forced = processor.decoherence.tick(1.0, processor.now)

        assert forced == 2
        assert {r["trait_name"] for r in seen} == {"Size", "Speed"}
        assert processor.decoherence.forced_measurements == 2
        assert (1, "Size") in processor.cache

    def test_none_above_threshold(self):
        processor = QuantumGeneticProcessor(QuantumConfig(collapse_probability=1.0))
        genome = _founder(processor)
        genome.coherence_level = 0.5
        processor.tick(1.0)
        assert processor.decoherence.forced_measurements == 0
        assert processor.bus.receipts("measurement_performed") == []

    def test_zero_probability_never_forces(self):
        processor = QuantumGeneticProcessor(QuantumConfig(collapse_probability=0.0))
        genome = _founder(processor)
        genome.coherence_level = 0.1
        for _ in range(100):
            processor.tick(1.0)
        assert processor.decoherence.forced_measurements == 0

    def test_forced_measurement_collapses(self):
        """A forced measurement re-weights the trait like a normal one."""
        processor = QuantumGeneticProcessor(QuantumConfig(collapse_probability=1.0))
        genome = _founder(processor)
        genome.coherence_level = 0.2
        processor.tick(1.0)
        probs = genome.traits["Size"].probabilities()
        assert max(probs) == pytest.approx(0.99557, abs=1e-5)

    def test_offspring_inserted_mid_session_decays(self):
        processor = QuantumGeneticProcessor()
        _founder(processor, 1)
        _founder(processor, 2)
        child = processor.breed(1, 2)
        processor.tick(10.0)
        assert child.coherence_level == pytest.approx(0.8)


class TestApplyDecoherence:
    """Processor-level apply_decoherence()."""

    def test_exponential_after_tick(self):
        """tick(50) then apply_decoherence -> 0.5 * exp(-0.5)."""
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        processor.tick(50.0)
        decay = processor.apply_decoherence(1, "Size")
        assert decay == pytest.approx(math.exp(-0.5))
        assert genome.coherence_level == pytest.approx(0.5 * math.exp(-0.5))

    def test_trait_stays_normalized(self):
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        processor.tick(30.0)
        processor.apply_decoherence(1, "Speed")
        assert abs(sum(genome.traits["Speed"].probabilities()) - 1.0) < 1e-5

    @pytest.mark.parametrize("elapsed", [369.0, 371.0, 400.0, 800.0])
    def test_fast_rate_long_gap(self, elapsed):
        """Large elapsed * rate never breaks normalization."""
        processor = QuantumGeneticProcessor(QuantumConfig(decoherence_rate=1.0, collapse_probability=0.0))
        genome = _founder(processor)
        processor.tick(elapsed)
        processor.apply_decoherence(1, "Size")
        trait = genome.traits["Size"]
        assert math.fsum(trait.probabilities()) == pytest.approx(1.0, abs=1e-9)
        assert max(abs(s.probability - s.amplitude ** 2) for s in trait.states) < 1e-12
        validate_store(processor.store, 8)

    def test_unknown_genome(self):
        processor = QuantumGeneticProcessor()
        with pytest.raises(GenomeNotFound):
            processor.apply_decoherence(7, "Size")

    def test_unknown_trait(self):
        processor = QuantumGeneticProcessor()
        genome = _founder(processor)
        processor.tick(10.0)
        with pytest.raises(TraitNotFound):
            processor.apply_decoherence(1, "Color")
        assert genome.coherence_level == pytest.approx(0.9)
