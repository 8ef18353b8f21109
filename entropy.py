"""
entropy.py - The Fundamental Module

Shannon entropy of superposition probability vectors. A trait whose
probability mass is spread over many candidate values has high entropy; a
trait that has collapsed toward one value has low entropy.

CLAUDEME v3.1 Compliant: Pure functions, no state.
"""

import math
from typing import Iterable

import numpy as np

# =============================================================================
# CONSTANTS
# =============================================================================

PROBABILITY_EPSILON = 1e-12  # Probabilities at or below this contribute nothing


# =============================================================================
# CORE FUNCTION 1: shannon_entropy
# =============================================================================

def shannon_entropy(probabilities: Iterable[float]) -> float:
    """
    Shannon entropy H = -sum(p * log2(p)) of a probability vector.

    Args:
        probabilities: Probability weights (expected to sum to 1)

    Returns:
        float: Entropy in bits, 0.0 for an empty vector

    Edge cases:
        - Zero (or negative rounding noise) entries are skipped
        - Single certain state -> 0.0
    """
    p = np.asarray(list(probabilities), dtype=np.float64)
    if p.size == 0:
        return 0.0

    p = p[p > PROBABILITY_EPSILON]
    if p.size == 0:
        return 0.0

    return float(-np.sum(p * np.log2(p)))


# =============================================================================
# CORE FUNCTION 2: normalized_entropy
# =============================================================================

def normalized_entropy(probabilities: Iterable[float]) -> float:
    """
    Entropy divided by log2(N), bounded to [0, 1].

    1.0 means a uniform spread over all N states, 0.0 means certainty.

    Args:
        probabilities: Probability weights of an N-state superposition

    Returns:
        float: Normalized entropy; 0.0 when N <= 1 (no spread is possible)
    """
    probs = list(probabilities)
    n = len(probs)
    if n <= 1:
        return 0.0

    h = shannon_entropy(probs)
    return min(1.0, max(0.0, h / math.log2(n)))
