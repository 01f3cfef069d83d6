"""
Module: finder.search.scorer

Purpose:
    Score candidates by size and relation density.

        score = core_count**α * non_core_count**β * density**γ

    density is the fraction of realized relation-kind connections between
    core and non-core members over the maximum the schema allows, clamped
    to [0, 1]. When γ is None the density term is disabled.

Key Classes:
    - Scorer: Pure scoring function with weights and optional thresholds

Dependencies:
    - math (std)
    - core.models: Candidate, Graph
    - core.schemas.registry: Density normalizers

Used By:
    - finder.search.beam: Expansion scoring
    - finder.search.seeding: Seed scoring
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from quasiclique_toolkit.core.models.candidate import Candidate
from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.schemas.registry import TypeRegistry


INADMISSIBLE = -math.inf


@dataclass(frozen=True)
class Scorer:
    """
    Candidate scoring (immutable, no side effects).

    Attributes:
        registry: Type registry providing max relations per non-core type
        core_weight: Exponent α on the core count
        non_core_weight: Exponent β on the non-core count
        density_weight: Exponent γ on density, None to ignore density
        global_threshold: Minimum candidate density, None to disable
        local_threshold: Minimum density of every member, None to disable

    Example:
        >>> scorer = Scorer(registry, density_weight=1.0)
        >>> scorer.score(candidate, graph)
        4.0
    """

    registry: TypeRegistry
    core_weight: float = 1.0
    non_core_weight: float = 1.0
    density_weight: Optional[float] = None
    global_threshold: Optional[float] = None
    local_threshold: Optional[float] = None

    def max_relations(self, candidate: Candidate, graph: Graph) -> int:
        """Theoretical maximum relation connections for the candidate's membership."""
        per_core = sum(
            self.registry.max_relations_for(graph.nodes[node_id].type_id)
            for node_id in candidate.sorted_non_core
        )
        return candidate.core_count * per_core

    def density(self, candidate: Candidate, graph: Graph) -> float:
        """
        Realized over possible relation connections, clamped to [0, 1].

        A candidate without non-core members has vacuous density 1.0.
        """
        possible = self.max_relations(candidate, graph)
        if possible == 0:
            return 1.0
        return min(1.0, max(0.0, candidate.realized_relations / possible))

    def is_admissible(self, candidate: Candidate, graph: Graph, density: float) -> bool:
        """Check the global and local density thresholds."""
        if self.global_threshold is not None and density < self.global_threshold:
            return False
        if self.local_threshold is not None:
            return self._meets_local_threshold(candidate, graph)
        return True

    def score(self, candidate: Candidate, graph: Graph) -> float:
        """
        Score a candidate.

        Returns:
            The score, or -inf if the candidate fails a density threshold
        """
        density = self.density(candidate, graph)
        if not self.is_admissible(candidate, graph, density):
            return INADMISSIBLE
        return self._combine(candidate, density)

    def scored(self, candidate: Candidate, graph: Graph) -> Candidate:
        """Return a copy of candidate with score and density cached."""
        density = self.density(candidate, graph)
        if not self.is_admissible(candidate, graph, density):
            return candidate.with_score(INADMISSIBLE, density)
        return candidate.with_score(self._combine(candidate, density), density)

    def _combine(self, candidate: Candidate, density: float) -> float:
        value = (
            float(candidate.core_count) ** self.core_weight
            * float(candidate.non_core_count) ** self.non_core_weight
        )
        if self.density_weight is not None:
            value *= density ** self.density_weight
        return value

    def _meets_local_threshold(self, candidate: Candidate, graph: Graph) -> bool:
        """Every member must realize local_threshold of its possible relations."""
        threshold = self.local_threshold
        non_core_limits = {
            node_id: self.registry.max_relations_for(graph.nodes[node_id].type_id)
            for node_id in candidate.sorted_non_core
        }

        for node_id, count in candidate.coverage:
            possible = candidate.core_count * non_core_limits[node_id]
            if possible and count / possible < threshold:
                return False

        per_core_possible = sum(non_core_limits.values())
        if per_core_possible == 0:
            return True
        for core_id in candidate.sorted_core:
            core_node = graph.nodes[core_id]
            realized = sum(
                len(core_node.neighbors[node_id]) for node_id in non_core_limits
            )
            if realized / per_core_possible < threshold:
                return False
        return True
