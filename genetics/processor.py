"""
genetics/processor.py - Quantum Genetic Processor

Explicitly constructed facade that owns one store, one randomness provider,
one event bus and the engines wired around them. Hosts hold a reference to a
processor and drive it with tick(); there is no global instance.

Single-threaded by contract: a multi-threaded host must serialize every call
behind one lock.
"""

import logging
from typing import Optional

from .decoherence import DecoherenceScheduler
from .diagnostics import DiagnosticsReporter
from .entanglement import EntanglementTracker
from .events import Callback, EventBus
from .inheritance import InheritanceEngine
from .measurement import MeasurementCache, MeasurementEngine
from .randomness import RandomnessProvider
from .store import QuantumGenomeStore
from .superposition import SuperpositionFactory
from .types_config import QuantumConfig
from .types_result import QuantumReport
from .types_state import ClassicalGenome, QuantumGenome

logger = logging.getLogger(__name__)


class QuantumGeneticProcessor:
    """Superposition, breeding, measurement and decay over one genome store."""

    def __init__(self, config: Optional[QuantumConfig] = None, rng=None,
                 bus: Optional[EventBus] = None, start_time: float = 0.0):
        self.config = config if config is not None else QuantumConfig()
        self.rng = rng if rng is not None else RandomnessProvider(self.config.random_seed)
        self.bus = bus if bus is not None else EventBus(self.config.receipt_ledger_size)
        self.now = start_time

        self.store = QuantumGenomeStore()
        self.cache = MeasurementCache()
        self.tracker = EntanglementTracker(self.config, self.store, self.bus)
        self.factory = SuperpositionFactory(self.config, self.store, self.rng, self.bus)
        self.inheritance = InheritanceEngine(self.config, self.store, self.rng, self.bus, self.tracker)
        self.measurement = MeasurementEngine(self.config, self.store, self.rng, self.bus, self.cache)
        self.decoherence = DecoherenceScheduler(self.config, self.store, self.rng, self.measurement)
        self.diagnostics = DiagnosticsReporter(self.config, self.store, self.tracker)

        logger.info("Quantum genetic processor initialized (scenario=%s, seed=%s, states=%d)",
                    self.config.scenario_name, getattr(self.rng, "seed", None),
                    self.config.max_superposition_states)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create_quantum_genome(self, classical: ClassicalGenome) -> QuantumGenome:
        return self.factory.create_quantum_genome(classical, self.now)

    def breed(self, parent_a_id: int, parent_b_id: int) -> QuantumGenome:
        """Raises ParentNotFound without touching state if a parent is missing."""
        return self.inheritance.breed(parent_a_id, parent_b_id, self.now)

    def measure(self, genome_id: int, trait_name: str) -> float:
        """Raises GenomeNotFound / TraitNotFound without touching state."""
        return self.measurement.measure(genome_id, trait_name, self.now)

    def apply_decoherence(self, genome_id: int, trait_name: str) -> float:
        return self.decoherence.apply_decoherence(genome_id, trait_name, self.now)

    def tick(self, delta_time: float) -> None:
        """
        Advance simulation time by delta_time and run every decay process.

        Order: genome coherence (with forced collapse), entanglement decay,
        cache pruning.
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")

        self.now += delta_time
        self.decoherence.tick(delta_time, self.now)
        self.tracker.tick(delta_time, self.now)
        self.cache.prune(self.now, self.config.cache_validity_time)

    def remove_genome(self, genome_id: int) -> QuantumGenome:
        """External cleanup: drop a genome with its cache entries and entanglements."""
        genome = self.store.remove(genome_id)
        self.tracker.drop_genome(genome_id)
        self.cache.drop_genome(genome_id)
        return genome

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def subscribe(self, event_type: str, callback: Callback) -> None:
        self.bus.subscribe(event_type, callback)

    def generate_report(self) -> QuantumReport:
        return self.diagnostics.generate_report()

    def get_genome(self, genome_id: int) -> QuantumGenome:
        return self.store.require(genome_id)
