"""
genetics/decoherence.py - Decoherence Scheduler

Advances simulation time for every genome: coherence leaks away linearly, and
genomes that have fallen below the low-coherence threshold get their traits
measured at random, modelling information loss from long unobserved
superposition.
"""

import logging

from .constants import COHERENCE_FLOOR, LOW_COHERENCE_THRESHOLD
from .dynamics_quantum import apply_decoherence

logger = logging.getLogger(__name__)


class DecoherenceScheduler:
    """Per-tick coherence decay and forced collapse."""

    def __init__(self, config, store, rng, measurement):
        self.config = config
        self.store = store
        self.rng = rng
        self.measurement = measurement
        self.forced_measurements = 0

    def tick(self, delta_time: float, now: float) -> int:
        """
        Decay coherence of every genome and force measurements where it is low.

        Returns:
            int: Number of forced measurements performed this tick
        """
        forced = 0
        chance = self.config.collapse_probability * delta_time

        for genome in self.store.genomes():
            genome.coherence_level = max(
                COHERENCE_FLOOR,
                genome.coherence_level - self.config.decoherence_rate * delta_time,
            )
            if genome.coherence_level >= LOW_COHERENCE_THRESHOLD:
                continue

            for trait_name in list(genome.traits):
                if self.rng.next_float() < chance:
                    self.measurement.measure(genome.id, trait_name, now)
                    forced += 1

        if forced:
            logger.debug("Decoherence forced %d measurements at t=%.2f", forced, now)
        self.forced_measurements += forced
        return forced

    def apply_decoherence(self, genome_id: int, trait_name: str, now: float) -> float:
        """Decohere one stored trait. Raises GenomeNotFound / TraitNotFound."""
        self.store.require_trait(genome_id, trait_name)
        genome = self.store.require(genome_id)
        return apply_decoherence(genome, trait_name, now, self.config.decoherence_rate, self.rng)
