"""
Module: finder.loading.pruning

Purpose:
    Shrink a graph before search by k-core peeling: repeatedly remove
    nodes whose degree is below a threshold until none remain.

Key Functions:
    - trim(): In-place peeling, returns excluded node ids
    - rebuild_pruned(): Build, peel and return a fresh compacted graph

Dependencies:
    - finder.loading.builder: build_graph()

Used By:
    - finder.controller: Pre-search pruning

Algorithm:
    Nodes below the threshold sit in buckets keyed by current degree.
    The lowest non-empty bucket is drained first; removing a node lowers
    each neighbor's degree by the number of relation kinds they shared,
    moving that neighbor to a lower bucket in O(1).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from quasiclique_toolkit.core.models.graph import Graph, Node
from quasiclique_toolkit.core.models.identifiers import NodeId, PartitionId
from quasiclique_toolkit.core.models.records import EdgeRecord
from quasiclique_toolkit.core.schemas.registry import TypeRegistry

from .builder import build_graph

logger = logging.getLogger(__name__)


def trim(graph: Graph, min_degree: int) -> Set[NodeId]:
    """
    Remove every node whose cascade degree falls below min_degree.

    Degree counts incident edges across all neighbors and relation kinds.
    Modifies graph in place.

    Args:
        graph: Graph to peel
        min_degree: Threshold; 0 or less removes nothing

    Returns:
        Ids of removed nodes

    Invariants:
        - every surviving node has degree >= min_degree
        - trimming again with the same threshold removes nothing

    Example:
        >>> excluded = trim(graph, 2)
        >>> all(node.degree >= 2 for node in graph)
        True
    """
    if min_degree <= 0 or graph.is_empty():
        return set()

    degrees: Dict[NodeId, int] = {node.node_id: node.degree for node in graph}
    # degrees only fall, so no node ever needs a bucket above the largest start degree
    bucket_count = min(min_degree, max(degrees.values()) + 1)
    # dicts keep insertion order, so each bucket drains deterministically
    buckets: List[Dict[NodeId, None]] = [{} for _ in range(bucket_count)]
    for node_id, degree in degrees.items():
        if degree < min_degree:
            buckets[degree][node_id] = None

    excluded: Set[NodeId] = set()
    level = 0
    while level < bucket_count:
        bucket = buckets[level]
        if not bucket:
            level += 1
            continue

        node_id = next(iter(bucket))
        del bucket[node_id]
        removed = graph.remove_node(node_id)
        excluded.add(node_id)

        for neighbor_id, relations in removed.neighbors.items():
            if neighbor_id not in graph:
                continue
            old = degrees[neighbor_id]
            new = old - len(relations)
            degrees[neighbor_id] = new
            if old < min_degree:
                del buckets[old][neighbor_id]
            if new < min_degree:
                buckets[new][neighbor_id] = None
                level = min(level, new)

    if excluded:
        logger.debug(
            f"Trimmed {len(excluded)} nodes below degree {min_degree} "
            f"from partition {graph.partition_id}"
        )
    return excluded


def rebuild_pruned(
    partition_id: PartitionId,
    records: Iterable[EdgeRecord],
    min_degree: int,
    registry: TypeRegistry,
) -> Graph:
    """
    Build a graph, peel it, and return a fresh graph of the survivors.

    The returned graph holds the same nodes and edges as build_graph()
    followed by trim(), in new Node objects.

    Returns:
        Compacted Graph
    """
    graph = build_graph(partition_id, records, registry)
    trim(graph, min_degree)
    return _compact(graph)


def _compact(graph: Graph) -> Graph:
    compacted = Graph(graph.partition_id)
    for node in graph:
        compacted.nodes[node.node_id] = Node(
            node_id=node.node_id,
            type_id=node.type_id,
            is_core=node.is_core,
            neighbors={
                neighbor_id: set(relations)
                for neighbor_id, relations in node.neighbors.items()
            },
        )
    return compacted
