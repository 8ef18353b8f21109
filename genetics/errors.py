"""
genetics/errors.py - Lookup Failures

Typed, non-fatal failures for store lookups. Raising any of these leaves the
engine state untouched, so callers may simply retry.
Invariant breaches are not lookup failures: they raise receipts.StopRule.
"""


class QuantumLookupError(LookupError):
    """Base class for missing genome / trait lookups."""
    pass


class GenomeNotFound(QuantumLookupError):
    """No genome with this id is registered."""

    def __init__(self, genome_id: int):
        self.genome_id = genome_id
        super().__init__(f"Quantum genome {genome_id} not found")


class TraitNotFound(QuantumLookupError):
    """The genome exists but carries no trait with this name."""

    def __init__(self, genome_id: int, trait_name: str):
        self.genome_id = genome_id
        self.trait_name = trait_name
        super().__init__(f"Trait '{trait_name}' not found on quantum genome {genome_id}")


class ParentNotFound(GenomeNotFound):
    """A breeding parent is missing from the store."""

    def __init__(self, genome_id: int):
        super().__init__(genome_id)
        self.args = (f"Breeding parent {genome_id} not found in quantum registry",)
