"""
Module: candidate

Purpose:
    Immutable snapshot of a partial quasi-clique. Each expansion returns a
    new Candidate with copied id sets; nothing references back to the
    candidate it was expanded from.

Key Functions:
    - Candidate.seed(graph, node_id): Singleton core candidate
    - Candidate.from_members(graph, ...): Candidate from declared members
    - Candidate.with_core(graph, node_id): Add a core node
    - Candidate.with_non_core(graph, node_id): Add a non-core node
    - Candidate.frontier(graph): Legal one-node expansions

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .graph, .identifiers

Used By:
    - finder.search.scorer: Scoring
    - finder.search.beam: Expansion rounds
    - finder.search.seeding: Seed construction
    - finder.controller: Result packaging

Closure Rule:
    A non-core node is a member only while it connects to EVERY core member.
    Adding a core node drops the non-core members it does not connect to.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import FrozenSet, Iterable, Optional, Set, Tuple

from .graph import Graph
from .identifiers import NodeId


Coverage = Tuple[Tuple[NodeId, int], ...]


@dataclass(frozen=True)
class Candidate:
    """
    A core node set plus the non-core nodes attached to all of it.

    Attributes:
        core_ids: Core member ids (never empty)
        coverage: Sorted (non-core id, relation-coverage count) pairs. The
            count is the number of relation kinds between the node and the
            core members, summed over core members.
        score: Cached score, None until scored
        density: Cached density, None until scored

    Invariants:
        - core_ids and non_core_ids are disjoint
        - every coverage count is >= len(core_ids)

    Example:
        >>> c = Candidate.seed(graph, NodeId(1)).with_non_core(graph, NodeId(3))
        >>> sorted(c.non_core_ids)
        [NodeId(value=3)]
    """

    core_ids: FrozenSet[NodeId]
    coverage: Coverage = ()
    score: Optional[float] = None
    density: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate candidate on construction."""
        if not self.core_ids:
            raise ValueError("Candidate must have at least one core node")
        overlap = self.core_ids & self.non_core_ids
        if overlap:
            raise ValueError(f"Core and non-core sets overlap: {sorted(overlap)}")
        if len(self.non_core_ids) != len(self.coverage):
            raise ValueError("Duplicate non-core ids in coverage")
        for node_id, count in self.coverage:
            if count < len(self.core_ids):
                raise ValueError(
                    f"Non-core node {node_id} covers {count} relations but the "
                    f"candidate has {len(self.core_ids)} core nodes"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def non_core_ids(self) -> FrozenSet[NodeId]:
        return frozenset(node_id for node_id, _ in self.coverage)

    @property
    def core_count(self) -> int:
        return len(self.core_ids)

    @property
    def non_core_count(self) -> int:
        return len(self.coverage)

    @property
    def size(self) -> int:
        """Total membership (core + non-core)."""
        return len(self.core_ids) + len(self.coverage)

    @cached_property
    def realized_relations(self) -> int:
        """Relation-kind connections realized between core and non-core members."""
        return sum(count for _, count in self.coverage)

    @cached_property
    def sorted_core(self) -> Tuple[NodeId, ...]:
        return tuple(sorted(self.core_ids))

    @cached_property
    def sorted_non_core(self) -> Tuple[NodeId, ...]:
        return tuple(node_id for node_id, _ in self.coverage)

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    def coverage_of(self, node_id: NodeId) -> int:
        for member, count in self.coverage:
            if member == node_id:
                return count
        return 0

    def rank_key(self) -> Tuple[float, Tuple[NodeId, ...], Tuple[NodeId, ...]]:
        """
        Deterministic ordering: higher score first, then smaller ids.

        Raises:
            ValueError: If the candidate has not been scored
        """
        if self.score is None:
            raise ValueError(f"Candidate {self!r} has not been scored")
        return (-self.score, self.sorted_core, self.sorted_non_core)

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def seed(cls, graph: Graph, node_id: NodeId) -> Candidate:
        """
        Create a singleton-core candidate with no non-core members.

        Raises:
            ValueError: If node_id is not a core node of graph
        """
        _require_core(graph, node_id)
        return cls(core_ids=frozenset([node_id]))

    @classmethod
    def from_members(
        cls,
        graph: Graph,
        core_ids: Iterable[NodeId],
        non_core_ids: Iterable[NodeId] = (),
    ) -> Candidate:
        """
        Build a candidate from declared members.

        Core ids are added in ascending order, then every non-core id that
        satisfies the closure rule. Non-core ids that do not are skipped.

        Raises:
            ValueError: If core_ids is empty or names a non-core node
        """
        ordered_core = sorted(set(core_ids))
        if not ordered_core:
            raise ValueError("Candidate must have at least one core node")
        candidate = cls.seed(graph, ordered_core[0])
        for node_id in ordered_core[1:]:
            candidate = candidate.with_core(graph, node_id)
        for node_id in sorted(set(non_core_ids)):
            if candidate.can_add_non_core(graph, node_id):
                candidate = candidate.with_non_core(graph, node_id)
        return candidate

    # ─────────────────────────────────────────────────────────────────────────
    # Expansion (always returns a NEW candidate)
    # ─────────────────────────────────────────────────────────────────────────

    def can_add_non_core(self, graph: Graph, node_id: NodeId) -> bool:
        """Check that node_id is a non-core node connected to every core member."""
        node = graph.nodes.get(node_id)
        if node is None or node.is_core or node_id in self.non_core_ids:
            return False
        return all(node.is_adjacent(core_id) for core_id in self.core_ids)

    def with_non_core(self, graph: Graph, node_id: NodeId) -> Candidate:
        """
        Return a new candidate with node_id added to the non-core set.

        Raises:
            ValueError: If node_id does not satisfy the closure rule
        """
        if not self.can_add_non_core(graph, node_id):
            raise ValueError(
                f"Node {node_id} is not a non-core node adjacent to every core member"
            )
        node = graph.nodes[node_id]
        count = sum(len(node.neighbors[core_id]) for core_id in self.core_ids)
        coverage = tuple(sorted(self.coverage + ((node_id, count),)))
        return Candidate(core_ids=self.core_ids, coverage=coverage)

    def with_core(self, graph: Graph, node_id: NodeId) -> Candidate:
        """
        Return a new candidate with node_id added to the core set.

        Non-core members without an edge to node_id are dropped.

        Raises:
            ValueError: If node_id is not a core node or is already a member
        """
        node = _require_core(graph, node_id)
        if node_id in self.core_ids:
            raise ValueError(f"Node {node_id} is already a core member")
        coverage = tuple(
            (member, count + len(node.neighbors[member]))
            for member, count in self.coverage
            if node.is_adjacent(member)
        )
        return Candidate(core_ids=self.core_ids | {node_id}, coverage=coverage)

    def with_score(self, score: float, density: float) -> Candidate:
        return replace(self, score=score, density=density)

    def frontier(self, graph: Graph) -> Tuple[Set[NodeId], Set[NodeId]]:
        """
        Nodes that can legally extend this candidate by one.

        Returns:
            (core_frontier, non_core_frontier): core nodes sharing a non-core
            neighbor with a core member, and non-core nodes adjacent to every
            core member
        """
        core_frontier: Set[NodeId] = set()
        shared: Optional[Set[NodeId]] = None
        for core_id in self.sorted_core:
            core_node = graph.nodes[core_id]
            neighbor_ids = set(core_node.neighbors)
            shared = neighbor_ids if shared is None else shared & neighbor_ids
            for non_core_id in neighbor_ids:
                core_frontier.update(graph.nodes[non_core_id].neighbors)
        core_frontier -= self.core_ids
        non_core_frontier = (shared or set()) - self.non_core_ids
        return core_frontier, non_core_frontier

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        score = "unscored" if self.score is None else f"{self.score:.4f}"
        return (
            f"Candidate(core={[n.value for n in self.sorted_core]}, "
            f"non_core={[n.value for n in self.sorted_non_core]}, score={score})"
        )


def _require_core(graph: Graph, node_id: NodeId):
    node = graph.nodes.get(node_id)
    if node is None or not node.is_core:
        raise ValueError(f"Node {node_id} is not a core node of partition {graph.partition_id}")
    return node
