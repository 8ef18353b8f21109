"""
genetics/store.py - Quantum Genome Store

Keyed registry genome_id -> QuantumGenome. Owns all genome and trait state;
other components look genomes up here by id and never hold them across calls.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .errors import GenomeNotFound, TraitNotFound
from .types_state import QuantumGenome, QuantumTrait

logger = logging.getLogger(__name__)


class QuantumGenomeStore:
    """Dict-backed genome registry. Insertion order is preserved."""

    def __init__(self):
        self._genomes: Dict[int, QuantumGenome] = {}

    def __len__(self) -> int:
        return len(self._genomes)

    def __contains__(self, genome_id: int) -> bool:
        return genome_id in self._genomes

    def __iter__(self) -> Iterator[QuantumGenome]:
        return iter(self._genomes.values())

    def add(self, genome: QuantumGenome) -> QuantumGenome:
        """Register a genome, replacing any previous genome with the same id."""
        if genome.id in self._genomes:
            logger.warning("Replacing quantum genome %d in store", genome.id)
        self._genomes[genome.id] = genome
        return genome

    def get(self, genome_id: int) -> Optional[QuantumGenome]:
        return self._genomes.get(genome_id)

    def require(self, genome_id: int) -> QuantumGenome:
        """Return the genome or raise GenomeNotFound."""
        genome = self._genomes.get(genome_id)
        if genome is None:
            raise GenomeNotFound(genome_id)
        return genome

    def require_trait(self, genome_id: int, trait_name: str) -> QuantumTrait:
        """Return the trait or raise GenomeNotFound / TraitNotFound."""
        genome = self.require(genome_id)
        trait = genome.traits.get(trait_name)
        if trait is None:
            raise TraitNotFound(genome_id, trait_name)
        return trait

    def find_trait(self, genome_id: int, trait_name: str) -> Optional[QuantumTrait]:
        genome = self._genomes.get(genome_id)
        if genome is None:
            return None
        return genome.traits.get(trait_name)

    def remove(self, genome_id: int) -> QuantumGenome:
        """Explicit external cleanup. The engine itself never deletes genomes."""
        genome = self.require(genome_id)
        del self._genomes[genome_id]
        return genome

    def ids(self) -> List[int]:
        return list(self._genomes)

    def genomes(self) -> List[QuantumGenome]:
        """Snapshot list, safe to iterate while genomes are mutated or added."""
        return list(self._genomes.values())
