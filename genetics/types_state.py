"""
genetics/types_state.py - Quantum Genome Dataclasses

Mutable genome state plus the classical genome handed in by the host.
CLAUDEME v3.1 Compliant: Dataclasses for state, no engine behavior.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set

from .constants import COHERENCE_CEILING


# =============================================================================
# CLASSICAL INPUT DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class ClassicalTrait:
    """One concrete trait value from the host's genome store."""
    name: str
    value: float
    mutation_rate: float = 0.0

    def __post_init__(self) -> None:
        if not self.mutation_rate >= 0.0:
            raise ValueError(
                f"Trait '{self.name}': mutation_rate must be >= 0, got {self.mutation_rate}"
            )


@dataclass(frozen=True)
class ClassicalGenome:
    """Classical genome as produced by the host simulation.

    parent_a / parent_b are 0 for founder genomes.
    """
    id: int
    generation: int = 0
    parent_a: int = 0
    parent_b: int = 0
    species: str = ""
    birth_time: float = 0.0
    traits: tuple = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassicalGenome":
        """Build from a plain mapping, e.g. a founder entry in a YAML file.

        Traits may be given as [name, value, mutation_rate] lists or as
        {"name", "value", "mutation_rate"} mappings.
        """
        traits = []
        for raw in data.get("traits", []):
            if isinstance(raw, dict):
                traits.append(ClassicalTrait(
                    name=str(raw["name"]),
                    value=float(raw["value"]),
                    mutation_rate=float(raw.get("mutation_rate", 0.0)),
                ))
            else:
                name, value, *rest = raw
                traits.append(ClassicalTrait(
                    name=str(name),
                    value=float(value),
                    mutation_rate=float(rest[0]) if rest else 0.0,
                ))
        return cls(
            id=int(data["id"]),
            generation=int(data.get("generation", 0)),
            parent_a=int(data.get("parent_a", 0)),
            parent_b=int(data.get("parent_b", 0)),
            species=str(data.get("species", "")),
            birth_time=float(data.get("birth_time", 0.0)),
            traits=tuple(traits),
        )


# =============================================================================
# QUANTUM STATE DATACLASSES
# =============================================================================

@dataclass
class QuantumState:
    """One candidate value within a trait's superposition.

    probability is derived (amplitude ** 2) and refreshed by normalize().
    amplitude may be negative; only its square matters for sampling.
    """
    amplitude: float = 0.0
    phase: float = 0.0  # radians, interference only
    value: float = 0.0
    probability: float = 0.0


@dataclass
class QuantumTrait:
    """Named genetic trait held in superposition over a fixed number of states."""
    name: str
    states: List[QuantumState] = field(default_factory=list)
    entangled_with: Set[int] = field(default_factory=set)
    measurement_probability: float = 0.0
    last_collapse: float = 0.0

    def probabilities(self) -> List[float]:
        return [s.probability for s in self.states]

    def amplitudes(self) -> List[float]:
        return [s.amplitude for s in self.states]

    def values(self) -> List[float]:
        return [s.value for s in self.states]


@dataclass
class QuantumGenome:
    """One creature's full quantum-genetic state."""
    id: int
    generation: int = 0
    parent_a: int = 0
    parent_b: int = 0
    species: str = ""
    birth_time: float = 0.0
    last_measurement: float = 0.0
    coherence_level: float = COHERENCE_CEILING
    traits: Dict[str, QuantumTrait] = field(default_factory=dict)

    @property
    def is_founder(self) -> bool:
        return self.parent_a == 0 and self.parent_b == 0


@dataclass
class QuantumEntanglement:
    """Decaying trait-scoped link between two genomes.

    A single logical edge: the tracker owns the record, the two traits only
    hold each other's genome id.
    """
    genome_a: int
    genome_b: int
    trait_name: str
    strength: float
    created_at: float

    def involves(self, genome_id: int) -> bool:
        return genome_id in (self.genome_a, self.genome_b)

    def same_edge(self, other: "QuantumEntanglement") -> bool:
        """True if both records link the same pair over the same trait."""
        return (
            self.trait_name == other.trait_name
            and {self.genome_a, self.genome_b} == {other.genome_a, other.genome_b}
        )
