"""
genetics/measurement.py - Measurement Engine

The only way to obtain a concrete trait value. Sampling follows the Born rule
(probability = amplitude ** 2) and partially collapses the trait toward the
sampled state. Results are cached for cache_validity_time seconds.
"""

import logging
from typing import Dict, Optional, Tuple

from .constants import EVENT_MEASUREMENT_PERFORMED
from .dynamics_quantum import (
    apply_decoherence,
    born_sample,
    collapse_to_state,
    max_probability_index,
)
from .types_state import QuantumTrait

logger = logging.getLogger(__name__)


class MeasurementCache:
    """(genome_id, trait_name) -> (value, timestamp). Not authoritative."""

    def __init__(self):
        self._entries: Dict[Tuple[int, str], Tuple[float, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[int, str]) -> bool:
        return key in self._entries

    def get(self, genome_id: int, trait_name: str) -> Optional[Tuple[float, float]]:
        return self._entries.get((genome_id, trait_name))

    def put(self, genome_id: int, trait_name: str, value: float, now: float) -> None:
        self._entries[(genome_id, trait_name)] = (value, now)

    def prune(self, now: float, validity: float) -> int:
        """Drop entries older than validity. Returns the number removed."""
        expired = [key for key, (_, ts) in self._entries.items() if now - ts > validity]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def drop_genome(self, genome_id: int) -> None:
        for key in [k for k in self._entries if k[0] == genome_id]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()


class MeasurementEngine:
    """Born-rule measurement with caching and post-measurement decoherence."""

    def __init__(self, config, store, rng, bus, cache: MeasurementCache = None):
        self.config = config
        self.store = store
        self.rng = rng
        self.bus = bus
        self.cache = cache if cache is not None else MeasurementCache()
        self.fallback_count = 0

    def sample(self, trait: QuantumTrait, now: float) -> float:
        """
        Draw one value from the trait and collapse toward it.

        The max-probability fallback only triggers when rounding leaves the
        cumulative probability short of the draw.
        """
        r = self.rng.next_float()
        index = born_sample(trait.states, r)
        if index is None:
            self.fallback_count += 1
            index = max_probability_index(trait.states)
            logger.warning("Born sampling fell through for trait '%s' (r=%.9f), using state %d",
                           trait.name, r, index)

        value = trait.states[index].value
        collapse_to_state(trait, index, self.config.superposition_stability, now)
        return value

    def measure(self, genome_id: int, trait_name: str, now: float) -> float:
        """
        Measure a trait and return its concrete value.

        Args:
            genome_id: Genome to measure
            trait_name: Trait to measure
            now: Current simulation time

        Returns:
            float: The sampled (or cached) trait value

        Raises:
            GenomeNotFound: Unknown genome; nothing is modified
            TraitNotFound: Genome has no such trait; nothing is modified
        """
        trait = self.store.require_trait(genome_id, trait_name)
        genome = self.store.require(genome_id)

        cached = self.cache.get(genome_id, trait_name)
        if cached is not None and now - genome.last_measurement < self.config.cache_validity_time:
            return cached[0]

        value = self.sample(trait, now)

        self.cache.put(genome_id, trait_name, value, now)
        genome.last_measurement = now

        apply_decoherence(genome, trait_name, now, self.config.decoherence_rate, self.rng)

        self.bus.publish(EVENT_MEASUREMENT_PERFORMED, {
            "genome_id": genome_id,
            "trait_name": trait_name,
            "value": value,
        })
        logger.debug("Quantum measurement: %s = %.3f for genome %d", trait_name, value, genome_id)
        return value
