"""
genetics/superposition.py - Superposition Factory

Turns a classical genome into a QuantumGenome: each concrete trait value is
spread into N candidate values around it, weighted by random amplitudes.
"""

import logging

from .constants import (
    AMPLITUDE_MEAN,
    AMPLITUDE_STD,
    COHERENCE_CEILING,
    EVENT_GENOME_CREATED,
    MUTATION_VARIANCE_SCALE,
    PHASE_MAX,
)
from .dynamics_quantum import normalize
from .types_state import ClassicalGenome, ClassicalTrait, QuantumGenome, QuantumState, QuantumTrait

logger = logging.getLogger(__name__)


class SuperpositionFactory:
    """Builds quantum genomes from classical input and registers them."""

    def __init__(self, config, store, rng, bus):
        self.config = config
        self.store = store
        self.rng = rng
        self.bus = bus

    def create_trait(self, classical_trait: ClassicalTrait, now: float) -> QuantumTrait:
        """
        One QuantumTrait with N states around the classical value.

        value = base + N(0, mutation_rate * 2), amplitude = N(0, 1),
        phase = U(0, 2pi), then normalized.
        """
        n = self.config.max_superposition_states
        spread = classical_trait.mutation_rate * MUTATION_VARIANCE_SCALE

        states = []
        for _ in range(n):
            amplitude = self.rng.next_gaussian(AMPLITUDE_MEAN, AMPLITUDE_STD)
            phase = self.rng.next_float(0.0, PHASE_MAX)
            value = classical_trait.value + self.rng.next_gaussian(0.0, spread)
            states.append(QuantumState(amplitude=amplitude, phase=phase, value=value))

        normalize(states)

        return QuantumTrait(
            name=classical_trait.name,
            states=states,
            entangled_with=set(),
            measurement_probability=1.0 / n,
            last_collapse=now,
        )

    def create_quantum_genome(self, classical: ClassicalGenome, now: float) -> QuantumGenome:
        """Convert and insert into the store. An empty trait list is valid."""
        genome = QuantumGenome(
            id=classical.id,
            generation=classical.generation,
            parent_a=classical.parent_a,
            parent_b=classical.parent_b,
            species=classical.species,
            birth_time=classical.birth_time,
            last_measurement=now,
            coherence_level=COHERENCE_CEILING,
        )

        for trait in classical.traits:
            genome.traits[trait.name] = self.create_trait(trait, now)

        self.store.add(genome)

        self.bus.publish(EVENT_GENOME_CREATED, {
            "genome_id": genome.id,
            "generation": genome.generation,
            "species": genome.species,
            "trait_count": len(genome.traits),
        })
        logger.debug("Quantum genome created for creature %d (%d traits)",
                     genome.id, len(genome.traits))
        return genome
