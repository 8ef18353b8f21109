"""
genetics/types_config.py - QuantumConfig Dataclass and Scenario Presets

Immutable configuration, fixed at processor construction.
CLAUDEME v3.1 Compliant: Frozen dataclass, no behavior beyond validation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class QuantumConfig:
    """Quantum genetics configuration (immutable)."""
    coherence_time: float = 100.0  # Max entanglement age, simulation seconds
    decoherence_rate: float = 0.01
    enable_entanglement: bool = True
    max_superposition_states: int = 8  # N, fixed per processor
    superposition_stability: float = 0.85  # Amplitude given to the measured state on collapse
    collapse_probability: float = 0.1  # Per-second forced collapse chance at low coherence
    entanglement_strength: float = 0.3  # Formation chance and initial strength
    entanglement_decay_rate: float = 0.005
    cache_validity_time: float = 10.0  # 0 disables the measurement cache
    random_seed: int = 42
    receipt_ledger_size: int = 10000
    scenario_name: str = "BASELINE"

    def __post_init__(self) -> None:
        if self.max_superposition_states < 1:
            raise ValueError(
                f"max_superposition_states must be >= 1, got {self.max_superposition_states}"
            )
        if not 0.0 < self.superposition_stability <= 1.0:
            raise ValueError(
                f"superposition_stability must be in (0, 1], got {self.superposition_stability}"
            )
        for name in ("collapse_probability", "entanglement_strength"):
            val = getattr(self, name)
            if not 0.0 <= val <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {val}")
        for name in ("coherence_time", "decoherence_rate",
                     "entanglement_decay_rate", "cache_validity_time"):
            val = getattr(self, name)
            if val < 0.0:
                raise ValueError(f"{name} must be >= 0, got {val}")
        if self.random_seed < 0:
            raise ValueError(f"random_seed must be >= 0, got {self.random_seed}")
        if self.receipt_ledger_size < 0:
            raise ValueError(
                f"receipt_ledger_size must be >= 0, got {self.receipt_ledger_size}"
            )


# =============================================================================
# SCENARIO PRESETS
# =============================================================================

SCENARIO_BASELINE = QuantumConfig(scenario_name="BASELINE")

# Every measure() samples; needed for distribution checks
SCENARIO_UNCACHED = QuantumConfig(
    cache_validity_time=0.0,
    random_seed=43,
    scenario_name="UNCACHED"
)

SCENARIO_FAST_DECAY = QuantumConfig(
    entanglement_decay_rate=0.1,
    random_seed=44,
    scenario_name="FAST_DECAY"
)

SCENARIO_CLASSICAL = QuantumConfig(
    enable_entanglement=False,
    random_seed=45,
    scenario_name="CLASSICAL"
)

MANDATORY_SCENARIOS = (
    SCENARIO_BASELINE,
    SCENARIO_UNCACHED,
    SCENARIO_FAST_DECAY,
    SCENARIO_CLASSICAL,
)
