"""
genetics/validation.py - Invariant Checks

Probability conservation, fixed state count and coherence bounds. A breach is
a programming error, so these raise StopRule rather than returning a flag.
CLAUDEME v3.1 Compliant: Pure functions, StopRule on violation.
"""

import math

from receipts import StopRule

from .constants import COHERENCE_CEILING, COHERENCE_FLOOR, NORMALIZATION_TOLERANCE


def probability_sum(trait) -> float:
    return math.fsum(s.probability for s in trait.states)


def is_degenerate(trait) -> bool:
    """All-zero amplitudes: normalization is skipped, not an error."""
    return all(s.amplitude == 0.0 for s in trait.states)


def check_normalization(trait, tolerance: float = NORMALIZATION_TOLERANCE) -> None:
    """Raise StopRule if |sum(p) - 1| >= tolerance or probability != amplitude^2."""
    if is_degenerate(trait):
        return
    total = probability_sum(trait)
    if abs(total - 1.0) >= tolerance:
        raise StopRule(f"Trait '{trait.name}' probabilities sum to {total:.9f}, expected 1.0")
    for i, s in enumerate(trait.states):
        if abs(s.probability - s.amplitude * s.amplitude) >= tolerance:
            raise StopRule(
                f"Trait '{trait.name}' state {i}: probability {s.probability} != amplitude^2"
            )


def check_genome(genome, n_states: int) -> None:
    """Raise StopRule on any invariant breach within one genome."""
    if not COHERENCE_FLOOR <= genome.coherence_level <= COHERENCE_CEILING:
        raise StopRule(
            f"Genome {genome.id} coherence {genome.coherence_level} outside "
            f"[{COHERENCE_FLOOR}, {COHERENCE_CEILING}]"
        )
    for name, trait in genome.traits.items():
        if name != trait.name:
            raise StopRule(f"Genome {genome.id} stores trait '{trait.name}' under key '{name}'")
        if len(trait.states) != n_states:
            raise StopRule(
                f"Genome {genome.id} trait '{name}' has {len(trait.states)} states, expected {n_states}"
            )
        check_normalization(trait)


def validate_store(store, n_states: int) -> int:
    """Check every stored genome. Returns the number of traits checked."""
    checked = 0
    for genome in store.genomes():
        check_genome(genome, n_states)
        checked += len(genome.traits)
    return checked
