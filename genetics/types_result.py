"""
genetics/types_result.py - Diagnostics Result Dataclasses

Immutable report containers handed to external monitoring.
CLAUDEME v3.1 Compliant: Frozen dataclasses.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class GenomeSnapshot:
    """Summary of one genome at report time."""
    genome_id: int
    coherence_level: float
    generation: int
    trait_count: int
    entanglement_count: int  # back-references summed over traits


@dataclass(frozen=True)
class QuantumReport:
    """Aggregate engine statistics."""
    total_genomes: int
    average_coherence: float
    active_entanglements: int
    average_superposition_complexity: float
    decoherence_rate: float
    largest_entangled_cluster: int
    max_generation: int
    snapshots: Tuple[GenomeSnapshot, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Export as dictionary."""
        return asdict(self)
