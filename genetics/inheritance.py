"""
genetics/inheritance.py - Inheritance Engine

Quantum breeding: two parent genomes combine into an offspring genome.
Traits carried by both parents interfere state by state; traits carried by one
parent are copied with small mutations. Parents are never modified except for
entanglement back-references.
"""

import logging
import math
from typing import List, Optional, Tuple

from .constants import (
    BREEDING_COHERENCE_COST,
    COHERENCE_FLOOR,
    EVENT_BREEDING,
    EVENT_SUPERPOSITION_DETECTED,
    INTERFERENCE_PHASE_JITTER,
    INTERFERENCE_STRENGTH,
    MUTATION_AMPLITUDE_STD,
    MUTATION_PHASE_JITTER,
    MUTATION_VALUE_STD,
    SUPERPOSITION_COMPLEXITY_THRESHOLD,
)
from .dynamics_quantum import normalize, superposition_complexity
from .errors import ParentNotFound
from .types_state import QuantumGenome, QuantumState, QuantumTrait

logger = logging.getLogger(__name__)


class InheritanceEngine:
    """Combines stored parent genomes into new stored offspring."""

    def __init__(self, config, store, rng, bus, tracker):
        self.config = config
        self.store = store
        self.rng = rng
        self.bus = bus
        self.tracker = tracker

    # -------------------------------------------------------------------------
    # Trait combination
    # -------------------------------------------------------------------------

    def mutate_trait(self, original: QuantumTrait, now: float) -> QuantumTrait:
        """Copy of a one-parent trait with Gaussian amplitude/value noise and phase jitter."""
        states = []
        for s in original.states:
            amplitude = s.amplitude + self.rng.next_gaussian(0.0, MUTATION_AMPLITUDE_STD)
            value = s.value + self.rng.next_gaussian(0.0, MUTATION_VALUE_STD)
            phase = s.phase + self.rng.next_float(-MUTATION_PHASE_JITTER, MUTATION_PHASE_JITTER)
            states.append(QuantumState(amplitude=amplitude, phase=phase, value=value,
                                       probability=amplitude * amplitude))
        normalize(states)

        return QuantumTrait(
            name=original.name,
            states=states,
            entangled_with=set(),
            measurement_probability=original.measurement_probability,
            last_collapse=now,
        )

    def interfere_traits(self, trait_a: QuantumTrait, trait_b: QuantumTrait,
                         trait_name: str, now: float) -> QuantumTrait:
        """
        Per-index interference of two parent superpositions.

        amplitude = sqrt(a^2 + b^2)
        phase     = mean phase + U(-0.1, 0.1)
        value     = mean value + cos(phase_b - phase_a) * 0.1
        """
        n = self.config.max_superposition_states
        states = []
        for i in range(n):
            a = trait_a.states[i] if i < len(trait_a.states) else QuantumState()
            b = trait_b.states[i] if i < len(trait_b.states) else QuantumState()

            amplitude = math.sqrt(a.amplitude * a.amplitude + b.amplitude * b.amplitude)
            interference = math.cos(b.phase - a.phase)
            value = (a.value + b.value) * 0.5 + interference * INTERFERENCE_STRENGTH
            phase = (a.phase + b.phase) * 0.5 + self.rng.next_float(
                -INTERFERENCE_PHASE_JITTER, INTERFERENCE_PHASE_JITTER)

            states.append(QuantumState(amplitude=amplitude, phase=phase, value=value,
                                       probability=amplitude * amplitude))
        normalize(states)

        return QuantumTrait(
            name=trait_name,
            states=states,
            entangled_with=set(),
            measurement_probability=1.0 / n,
            last_collapse=now,
        )

    def inherit_trait(self, trait_a: Optional[QuantumTrait], trait_b: Optional[QuantumTrait],
                      trait_name: str, now: float) -> QuantumTrait:
        if trait_a is None:
            return self.mutate_trait(trait_b, now)
        if trait_b is None:
            return self.mutate_trait(trait_a, now)
        return self.interfere_traits(trait_a, trait_b, trait_name, now)

    # -------------------------------------------------------------------------
    # Breeding
    # -------------------------------------------------------------------------

    def _new_id(self) -> int:
        genome_id = self.rng.next_uint()
        while genome_id in self.store:
            genome_id = self.rng.next_uint()
        return genome_id

    def breed(self, parent_a_id: int, parent_b_id: int, now: float) -> QuantumGenome:
        """
        Breed two stored genomes into a new stored offspring.

        Args:
            parent_a_id: First parent genome id
            parent_b_id: Second parent genome id
            now: Current simulation time

        Returns:
            QuantumGenome: The offspring, already inserted into the store

        Raises:
            ParentNotFound: Either parent is missing; nothing is modified
        """
        parent_a = self.store.get(parent_a_id)
        if parent_a is None:
            raise ParentNotFound(parent_a_id)
        parent_b = self.store.get(parent_b_id)
        if parent_b is None:
            raise ParentNotFound(parent_b_id)

        offspring = QuantumGenome(
            id=self._new_id(),
            generation=max(parent_a.generation, parent_b.generation) + 1,
            parent_a=parent_a_id,
            parent_b=parent_b_id,
            species=parent_a.species,
            birth_time=now,
            last_measurement=now,
            coherence_level=max(
                COHERENCE_FLOOR,
                min(parent_a.coherence_level, parent_b.coherence_level) * BREEDING_COHERENCE_COST,
            ),
        )

        # Union of trait names, parent A's order first
        trait_names = list(parent_a.traits)
        trait_names += [name for name in parent_b.traits if name not in parent_a.traits]

        detected: List[Tuple[str, List[float]]] = []
        entangle: List[str] = []
        for name in trait_names:
            trait = self.inherit_trait(parent_a.traits.get(name), parent_b.traits.get(name), name, now)
            offspring.traits[name] = trait

            if superposition_complexity(trait) > SUPERPOSITION_COMPLEXITY_THRESHOLD:
                detected.append((name, trait.amplitudes()))

            if self.config.enable_entanglement and self.rng.next_float() < self.config.entanglement_strength:
                entangle.append(name)

        self.store.add(offspring)

        for name, amplitudes in detected:
            self.bus.publish(EVENT_SUPERPOSITION_DETECTED, {
                "genome_id": offspring.id,
                "trait_name": name,
                "amplitudes": amplitudes,
            })

        for name in entangle:
            self.tracker.form(offspring.id, parent_a_id, name, now)
            self.tracker.form(offspring.id, parent_b_id, name, now)

        self.bus.publish(EVENT_BREEDING, {
            "offspring_id": offspring.id,
            "parent_a_id": parent_a_id,
            "parent_b_id": parent_b_id,
            "generation": offspring.generation,
            "coherence": offspring.coherence_level,
            "traits_inherited": len(offspring.traits),
            "entangled_traits": entangle,
        })
        logger.info("Quantum breeding successful: offspring %d, coherence %.3f",
                    offspring.id, offspring.coherence_level)
        return offspring
