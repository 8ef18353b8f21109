"""
genetics - Quantum Genetic Breeding Package

Public API for probabilistic trait inheritance: superposition, interference
breeding, Born-rule measurement, entanglement and decoherence.
CLAUDEME v3.1 Compliant: Flat, focused files. One file = one responsibility.
"""

# =============================================================================
# TYPES (Dataclasses)
# =============================================================================
from .types_config import (
    QuantumConfig,
    SCENARIO_BASELINE,
    SCENARIO_UNCACHED,
    SCENARIO_FAST_DECAY,
    SCENARIO_CLASSICAL,
    MANDATORY_SCENARIOS,
)
from .types_state import (
    ClassicalGenome,
    ClassicalTrait,
    QuantumEntanglement,
    QuantumGenome,
    QuantumState,
    QuantumTrait,
)
from .types_result import GenomeSnapshot, QuantumReport

# =============================================================================
# ERRORS
# =============================================================================
from .errors import (
    QuantumLookupError,
    GenomeNotFound,
    TraitNotFound,
    ParentNotFound,
)

# =============================================================================
# PRIMITIVES
# =============================================================================
from .dynamics_quantum import (
    normalize,
    superposition_complexity,
    born_sample,
    collapse_to_state,
    apply_decoherence,
)
from .validation import (
    check_normalization,
    check_genome,
    validate_store,
)

# =============================================================================
# COMPONENTS
# =============================================================================
from .randomness import RandomnessProvider
from .events import EventBus
from .store import QuantumGenomeStore
from .superposition import SuperpositionFactory
from .inheritance import InheritanceEngine
from .measurement import MeasurementCache, MeasurementEngine
from .entanglement import EntanglementTracker
from .decoherence import DecoherenceScheduler
from .diagnostics import DiagnosticsReporter
from .processor import QuantumGeneticProcessor

# =============================================================================
# EXPORT
# =============================================================================
from .export import report_to_json, export_report, export_ledger

# =============================================================================
# PUBLIC API
# =============================================================================
__all__ = [
    # Types
    "QuantumConfig",
    "SCENARIO_BASELINE",
    "SCENARIO_UNCACHED",
    "SCENARIO_FAST_DECAY",
    "SCENARIO_CLASSICAL",
    "MANDATORY_SCENARIOS",
    "ClassicalGenome",
    "ClassicalTrait",
    "QuantumEntanglement",
    "QuantumGenome",
    "QuantumState",
    "QuantumTrait",
    "GenomeSnapshot",
    "QuantumReport",
    # Errors
    "QuantumLookupError",
    "GenomeNotFound",
    "TraitNotFound",
    "ParentNotFound",
    # Primitives
    "normalize",
    "superposition_complexity",
    "born_sample",
    "collapse_to_state",
    "apply_decoherence",
    "check_normalization",
    "check_genome",
    "validate_store",
    # Components
    "RandomnessProvider",
    "EventBus",
    "QuantumGenomeStore",
    "SuperpositionFactory",
    "InheritanceEngine",
    "MeasurementCache",
    "MeasurementEngine",
    "EntanglementTracker",
    "DecoherenceScheduler",
    "DiagnosticsReporter",
    "QuantumGeneticProcessor",
    # Export
    "report_to_json",
    "export_report",
    "export_ledger",
]
