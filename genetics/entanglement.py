"""
genetics/entanglement.py - Entanglement Tracker

Owns every QuantumEntanglement in one flat list. Traits only keep the id of
the genome on the other side, so there is never a reference cycle between
genomes. Links weaken every tick and are pruned once weak or too old.
"""

import logging
from typing import List

from .constants import (
    ENTANGLEMENT_PRUNE_STRENGTH,
    EVENT_ENTANGLEMENT_DECAYED,
    EVENT_ENTANGLEMENT_FORMED,
)
from .types_state import QuantumEntanglement

logger = logging.getLogger(__name__)


class EntanglementTracker:
    """Flat arena of entanglement records with id back-references in traits."""

    def __init__(self, config, store, bus):
        self.config = config
        self.store = store
        self.bus = bus
        self.entanglements: List[QuantumEntanglement] = []

    def __len__(self) -> int:
        return len(self.entanglements)

    def form(self, genome_a: int, genome_b: int, trait_name: str, now: float) -> QuantumEntanglement:
        """Record a link and add each genome's id to the other's trait."""
        entanglement = QuantumEntanglement(
            genome_a=genome_a,
            genome_b=genome_b,
            trait_name=trait_name,
            strength=self.config.entanglement_strength,
            created_at=now,
        )
        self.entanglements.append(entanglement)

        trait_a = self.store.find_trait(genome_a, trait_name)
        if trait_a is not None:
            trait_a.entangled_with.add(genome_b)
        trait_b = self.store.find_trait(genome_b, trait_name)
        if trait_b is not None:
            trait_b.entangled_with.add(genome_a)

        self.bus.publish(EVENT_ENTANGLEMENT_FORMED, {
            "genome_a": genome_a,
            "genome_b": genome_b,
            "trait_name": trait_name,
            "strength": entanglement.strength,
        })
        logger.debug("Quantum entanglement formed: %d <-> %d (%s)", genome_a, genome_b, trait_name)
        return entanglement

    def links_for(self, genome_id: int) -> List[QuantumEntanglement]:
        return [e for e in self.entanglements if e.involves(genome_id)]

    def tick(self, delta_time: float, now: float) -> List[QuantumEntanglement]:
        """
        Decay every link, prune weak or expired ones.

        strength *= 1 - entanglement_decay_rate * delta_time; a link is pruned
        when strength < 0.1 or its age exceeds coherence_time.

        Returns:
            list: The removed records
        """
        factor = max(0.0, 1.0 - self.config.entanglement_decay_rate * delta_time)

        kept = []
        removed = []
        for entanglement in list(self.entanglements):
            entanglement.strength *= factor
            expired = now - entanglement.created_at > self.config.coherence_time
            if entanglement.strength < ENTANGLEMENT_PRUNE_STRENGTH or expired:
                removed.append(entanglement)
            else:
                kept.append(entanglement)

        self.entanglements = kept
        for entanglement in removed:
            self._release(entanglement)
            self.bus.publish(EVENT_ENTANGLEMENT_DECAYED, {
                "genome_a": entanglement.genome_a,
                "genome_b": entanglement.genome_b,
                "trait_name": entanglement.trait_name,
                "strength": entanglement.strength,
            })
        return removed

    def drop_genome(self, genome_id: int) -> List[QuantumEntanglement]:
        """Remove every link touching genome_id (external genome cleanup)."""
        removed = self.links_for(genome_id)
        self.entanglements = [e for e in self.entanglements if not e.involves(genome_id)]
        for entanglement in removed:
            self._release(entanglement)
        return removed

    def _release(self, entanglement: QuantumEntanglement) -> None:
        # A duplicate edge (same pair, same trait) still justifies the back-reference
        if any(e.same_edge(entanglement) for e in self.entanglements):
            return

        trait_a = self.store.find_trait(entanglement.genome_a, entanglement.trait_name)
        if trait_a is not None:
            trait_a.entangled_with.discard(entanglement.genome_b)
        trait_b = self.store.find_trait(entanglement.genome_b, entanglement.trait_name)
        if trait_b is not None:
            trait_b.entangled_with.discard(entanglement.genome_a)
