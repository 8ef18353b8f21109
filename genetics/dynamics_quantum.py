"""
genetics/dynamics_quantum.py - Shared Superposition Primitives

Normalization, Born-rule sampling, partial collapse and decoherence on a
single trait. Every other component mutates trait states through these.
CLAUDEME v3.1 Compliant: Pure functions over explicit arguments.
"""

import logging
import math
from typing import List, Optional

from entropy import normalized_entropy

from .constants import COHERENCE_FLOOR, DECOHERENCE_PHASE_JITTER
from .types_state import QuantumGenome, QuantumState, QuantumTrait

logger = logging.getLogger(__name__)


def normalize(states: List[QuantumState]) -> bool:
    """
    Scale amplitudes so that sum(amplitude ** 2) == 1 and refresh probabilities.

    Args:
        states: State array, mutated in place

    Returns:
        bool: True if normalized, False for the degenerate all-zero case,
        in which the states are left exactly as they were
    """
    total = math.fsum(s.amplitude * s.amplitude for s in states)
    if total <= 0.0:
        logger.debug("Degenerate superposition (%d states), normalization skipped", len(states))
        return False

    factor = 1.0 / math.sqrt(total)
    for s in states:
        s.amplitude *= factor
        s.probability = s.amplitude * s.amplitude
    return True


def superposition_complexity(trait: QuantumTrait) -> float:
    """Normalized Shannon entropy of the trait's probabilities, in [0, 1]."""
    return normalized_entropy(s.amplitude * s.amplitude for s in trait.states)


def born_sample(states: List[QuantumState], r: float) -> Optional[int]:
    """
    Index of the first state whose cumulative probability reaches r.

    Returns None only if rounding leaves the cumulative sum short of r.
    """
    cumulative = 0.0
    for i, s in enumerate(states):
        cumulative += s.probability
        if r <= cumulative:
            return i
    return None


def max_probability_index(states: List[QuantumState]) -> int:
    """Index of the most probable state (lowest index wins ties)."""
    best = 0
    for i, s in enumerate(states):
        if s.probability > states[best].probability:
            best = i
    return best


def collapse_to_state(trait: QuantumTrait, index: int, stability: float, now: float) -> None:
    """
    Partial collapse toward states[index].

    The chosen amplitude becomes `stability` and every other amplitude
    (1 - stability) / (N - 1), then the trait is normalized. At the 0.85
    default with N = 8 the chosen state ends near 0.9956 probability.
    Amplitude signs are kept so later interference still sees them.
    """
    states = trait.states
    n = len(states)
    if n == 1:
        states[0].amplitude = 1.0 if states[0].amplitude >= 0.0 else -1.0
        states[0].probability = 1.0
        trait.last_collapse = now
        return

    rest = (1.0 - stability) / (n - 1)
    for i, s in enumerate(states):
        sign = -1.0 if s.amplitude < 0.0 else 1.0
        s.amplitude = sign * (stability if i == index else rest)
    normalize(states)
    trait.last_collapse = now


def apply_decoherence(genome: QuantumGenome, trait_name: str, now: float,
                      decoherence_rate: float, rng) -> float:
    """
    Decohere a trait and decay the genome's coherence by time since collapse.

    decay = exp(-(now - last_collapse) * decoherence_rate). Phases pick up
    noise proportional to 1 - decay. Amplitudes are not scaled: normalization
    cancels any uniform factor.

    Returns:
        float: The decay factor applied (1.0 if the trait is missing)
    """
    trait = genome.traits.get(trait_name)
    if trait is None:
        return 1.0

    elapsed = max(0.0, now - trait.last_collapse)
    decay = math.exp(-elapsed * decoherence_rate)

    genome.coherence_level = max(COHERENCE_FLOOR, genome.coherence_level * decay)

    for s in trait.states:
        s.phase += rng.next_float(-DECOHERENCE_PHASE_JITTER, DECOHERENCE_PHASE_JITTER) * (1.0 - decay)

    normalize(trait.states)
    return decay
