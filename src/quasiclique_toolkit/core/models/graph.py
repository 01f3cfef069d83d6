"""
Module: graph

Purpose:
    Typed bipartite multigraph for one partition. Nodes are owned by the
    Graph; edges always connect a core node to a non-core node and are
    recorded at both endpoints.

Key Classes:
    - Node: Vertex with type, core flag and neighbor -> relation kinds map
    - Graph: Node map for one partition with derived core/non-core split

Dependencies:
    - dataclasses (std)
    - .identifiers

Used By:
    - finder.loading.builder: Builds graphs from edge records
    - finder.loading.pruning: In-place k-core peeling
    - core.models.candidate: Expansion against a graph
    - finder.search: Scoring and seeding

Design Note:
    Unlike the frozen models, Node and Graph are mutable: edges are added
    during build and removed during pruning. Edges are never re-added once
    pruned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, Set

from .identifiers import NodeId, NodeTypeId, PartitionId, RelationId


_NO_RELATIONS: FrozenSet[RelationId] = frozenset()


@dataclass
class Node:
    """
    A vertex and its adjacency.

    Attributes:
        node_id: Identifier within the partition
        type_id: Node type (0 for the core type)
        is_core: Whether this node belongs to the core type
        neighbors: Neighbor id -> relation kinds connecting the two nodes
    """

    node_id: NodeId
    type_id: NodeTypeId
    is_core: bool
    neighbors: Dict[NodeId, Set[RelationId]] = field(default_factory=dict)

    @property
    def degree(self) -> int:
        """Incident edge count summed across neighbors and relation kinds."""
        return sum(len(relations) for relations in self.neighbors.values())

    @property
    def neighbor_count(self) -> int:
        return len(self.neighbors)

    def relations_to(self, other: NodeId) -> FrozenSet[RelationId]:
        """Relation kinds connecting this node to other (empty if none)."""
        relations = self.neighbors.get(other)
        return frozenset(relations) if relations else _NO_RELATIONS

    def is_adjacent(self, other: NodeId) -> bool:
        return bool(self.neighbors.get(other))

    def _add_relation(self, other: NodeId, relation: RelationId) -> bool:
        relations = self.neighbors.setdefault(other, set())
        if relation in relations:
            return False
        relations.add(relation)
        return True

    def __repr__(self) -> str:
        role = "core" if self.is_core else f"type={self.type_id.value}"
        return f"Node({self.node_id}, {role}, degree={self.degree})"


class Graph:
    """
    One partition's typed multigraph.

    Attributes:
        partition_id: Partition this graph was built for
        nodes: Node id -> Node (owned by the graph)

    Invariants:
        - Every edge joins a core node and a non-core node
        - Adjacency is symmetric
        - core_ids and non_core_ids partition nodes

    Example:
        >>> graph = Graph(PartitionId(0))
        >>> graph.add_edge(core, venue, RelationId(0))
        >>> graph.edge_count
        1
    """

    def __init__(self, partition_id: PartitionId):
        self.partition_id = partition_id
        self.nodes: Dict[NodeId, Node] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    def ensure_node(self, node_id: NodeId, type_id: NodeTypeId, is_core: bool) -> Node:
        """
        Return the node for node_id, creating it on first reference.

        Raises:
            ValueError: If the node exists with a different role or type
        """
        node = self.nodes.get(node_id)
        if node is None:
            node = Node(node_id=node_id, type_id=type_id, is_core=is_core)
            self.nodes[node_id] = node
            return node
        if node.is_core != is_core or node.type_id != type_id:
            raise ValueError(
                f"Node {node_id} already present as "
                f"{'core' if node.is_core else f'type {node.type_id.value}'}"
            )
        return node

    def add_edge(self, core: Node, non_core: Node, relation: RelationId) -> bool:
        """
        Record relation between a core and a non-core node at both ends.

        Returns:
            True if the relation was new for this pair
        """
        if not core.is_core or non_core.is_core:
            raise ValueError(
                f"Edges must join a core and a non-core node: "
                f"{core.node_id} -> {non_core.node_id}"
            )
        added = core._add_relation(non_core.node_id, relation)
        non_core._add_relation(core.node_id, relation)
        return added

    def remove_node(self, node_id: NodeId) -> Node:
        """Remove a node and its mirrored edges from every neighbor."""
        node = self.nodes.pop(node_id)
        for neighbor_id in node.neighbors:
            neighbor = self.nodes.get(neighbor_id)
            if neighbor is not None:
                neighbor.neighbors.pop(node_id, None)
        return node

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def get_node(self, node_id: NodeId) -> Node:
        """Raises KeyError if node_id is not in this graph."""
        return self.nodes[node_id]

    def relations_between(self, a: NodeId, b: NodeId) -> FrozenSet[RelationId]:
        node = self.nodes.get(a)
        return node.relations_to(b) if node is not None else _NO_RELATIONS

    @property
    def core_ids(self) -> Set[NodeId]:
        return {nid for nid, node in self.nodes.items() if node.is_core}

    @property
    def non_core_ids(self) -> Set[NodeId]:
        return {nid for nid, node in self.nodes.items() if not node.is_core}

    @property
    def edge_count(self) -> int:
        """Edges counted once per (core, non-core, relation) triple."""
        return sum(node.degree for node in self.nodes.values() if node.is_core)

    def is_empty(self) -> bool:
        return not self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __repr__(self) -> str:
        return (
            f"Graph(partition={self.partition_id}, nodes={len(self.nodes)}, "
            f"core={len(self.core_ids)}, edges={self.edge_count})"
        )
