"""
genetics/diagnostics.py - Diagnostics Reporter

Read-only aggregate statistics over the store and the entanglement tracker.
Entanglements and lineage are projected into networkx graphs for cluster and
depth queries; the graphs are rebuilt on demand and never stored.
"""

from typing import List

import networkx as nx
import numpy as np

from .constants import SNAPSHOT_LIMIT
from .dynamics_quantum import superposition_complexity
from .types_result import GenomeSnapshot, QuantumReport


class DiagnosticsReporter:
    """Computes QuantumReport instances. Never mutates engine state."""

    def __init__(self, config, store, tracker):
        self.config = config
        self.store = store
        self.tracker = tracker

    def average_coherence(self) -> float:
        genomes = self.store.genomes()
        if not genomes:
            return 0.0
        return float(np.mean([g.coherence_level for g in genomes]))

    def average_superposition_complexity(self) -> float:
        """Mean normalized entropy over every trait of every genome (0.0 if none)."""
        values = [superposition_complexity(t) for g in self.store.genomes() for t in g.traits.values()]
        if not values:
            return 0.0
        return float(np.mean(values))

    def entanglement_graph(self) -> nx.Graph:
        """Undirected graph: genomes as nodes, one edge per linked pair."""
        graph = nx.Graph()
        for e in self.tracker.entanglements:
            if graph.has_edge(e.genome_a, e.genome_b):
                graph[e.genome_a][e.genome_b]["traits"].add(e.trait_name)
                graph[e.genome_a][e.genome_b]["strength"] = max(
                    graph[e.genome_a][e.genome_b]["strength"], e.strength)
            else:
                graph.add_edge(e.genome_a, e.genome_b, traits={e.trait_name}, strength=e.strength)
        return graph

    def lineage_graph(self) -> nx.DiGraph:
        """Directed parent -> offspring graph over stored genomes."""
        graph = nx.DiGraph()
        for genome in self.store.genomes():
            graph.add_node(genome.id, generation=genome.generation, species=genome.species)
            for parent in (genome.parent_a, genome.parent_b):
                if parent and parent in self.store:
                    graph.add_edge(parent, genome.id)
        return graph

    def largest_entangled_cluster(self) -> int:
        graph = self.entanglement_graph()
        if graph.number_of_nodes() == 0:
            return 0
        return max(len(c) for c in nx.connected_components(graph))

    def snapshots(self, limit: int = SNAPSHOT_LIMIT) -> List[GenomeSnapshot]:
        return [
            GenomeSnapshot(
                genome_id=g.id,
                coherence_level=g.coherence_level,
                generation=g.generation,
                trait_count=len(g.traits),
                entanglement_count=sum(len(t.entangled_with) for t in g.traits.values()),
            )
            for g in self.store.genomes()[:limit]
        ]

    def generate_report(self) -> QuantumReport:
        genomes = self.store.genomes()
        return QuantumReport(
            total_genomes=len(genomes),
            average_coherence=self.average_coherence(),
            active_entanglements=len(self.tracker),
            average_superposition_complexity=self.average_superposition_complexity(),
            decoherence_rate=self.config.decoherence_rate,
            largest_entangled_cluster=self.largest_entangled_cluster(),
            max_generation=max((g.generation for g in genomes), default=0),
            snapshots=tuple(self.snapshots()),
        )
