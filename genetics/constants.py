"""
genetics/constants.py - Quantum Genetics Constants

Fixed thresholds and perturbation magnitudes for breeding, measurement and
decoherence. Tunable knobs live in QuantumConfig; these do not change per run.
CLAUDEME v3.1 Compliant: Pure data, no behavior.
"""

import math

# =============================================================================
# COHERENCE BOUNDS
# =============================================================================

COHERENCE_FLOOR = 0.1      # Genome coherence never drops below this
COHERENCE_CEILING = 1.0    # Fresh genomes start fully coherent
LOW_COHERENCE_THRESHOLD = 0.3  # Below this, ticks may force measurement
BREEDING_COHERENCE_COST = 0.9  # Offspring coherence = min(parents) * 0.9

# =============================================================================
# SUPERPOSITION GENERATION
# =============================================================================

MUTATION_VARIANCE_SCALE = 2.0  # Candidate value spread = mutation_rate * 2
AMPLITUDE_MEAN = 0.0
AMPLITUDE_STD = 1.0
PHASE_MAX = 2.0 * math.pi

# =============================================================================
# INHERITANCE PERTURBATIONS
# =============================================================================

MUTATION_AMPLITUDE_STD = 0.02  # One-parent trait: amplitude += N(0, 0.02)
MUTATION_VALUE_STD = 0.05      # One-parent trait: value += N(0, 0.05)
MUTATION_PHASE_JITTER = 0.2    # One-parent trait: phase += U(-0.2, 0.2)
INTERFERENCE_PHASE_JITTER = 0.1  # Two-parent trait: phase jitter
INTERFERENCE_STRENGTH = 0.1      # Value shift scale for cos(phase difference)

# =============================================================================
# DETECTION / DECAY THRESHOLDS
# =============================================================================

SUPERPOSITION_COMPLEXITY_THRESHOLD = 0.7  # Normalized entropy that triggers detection
ENTANGLEMENT_PRUNE_STRENGTH = 0.1         # Links weaker than this are removed
DECOHERENCE_PHASE_JITTER = 0.1            # Phase noise scale during decoherence

# =============================================================================
# NUMERICS
# =============================================================================

NORMALIZATION_TOLERANCE = 1e-5  # |sum(p) - 1| allowed after any mutation
GENOME_ID_MAX = 2 ** 32 - 1     # Genome ids are unsigned 32-bit
SNAPSHOT_LIMIT = 10             # Genomes included in a report snapshot

# =============================================================================
# EVENT TYPES
# =============================================================================

EVENT_SUPERPOSITION_DETECTED = "superposition_detected"
EVENT_ENTANGLEMENT_FORMED = "entanglement_formed"
EVENT_MEASUREMENT_PERFORMED = "measurement_performed"
EVENT_GENOME_CREATED = "quantum_genome_created"
EVENT_BREEDING = "quantum_breeding"
EVENT_ENTANGLEMENT_DECAYED = "entanglement_decayed"

# =============================================================================
# RECEIPT SCHEMA
# =============================================================================

RECEIPT_SCHEMA = [
    EVENT_SUPERPOSITION_DETECTED,
    EVENT_ENTANGLEMENT_FORMED,
    EVENT_MEASUREMENT_PERFORMED,
    EVENT_GENOME_CREATED,
    EVENT_BREEDING,
    EVENT_ENTANGLEMENT_DECAYED,
]
