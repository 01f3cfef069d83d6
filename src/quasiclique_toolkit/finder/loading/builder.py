"""
Module: finder.loading.builder

Purpose:
    Build one partition's typed bipartite graph from edge records,
    resolving type names against the registry.

Key Functions:
    - build_graph(): Records -> Graph

Dependencies:
    - quasiclique_toolkit.core.models: Graph, EdgeRecord
    - quasiclique_toolkit.core.schemas.registry: TypeRegistry

Used By:
    - finder.loading.pruning: rebuild_pruned()
    - finder.controller: QuasiCliqueFinder.build()

Record Handling:
    - Source type other than the core type: dropped (debug)
    - Target type not declared for the core type: SchemaError (fatal)
    - Relation not declared for the target type: dropped (warning)
    - Node id reused with another role or type: dropped (warning)
    - Record for another partition: dropped (warning)
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.models.identifiers import (
    CORE_TYPE_ID,
    NodeId,
    NodeTypeId,
    PartitionId,
)
from quasiclique_toolkit.core.models.records import EdgeRecord
from quasiclique_toolkit.core.schemas.registry import TypeRegistry

logger = logging.getLogger(__name__)


def build_graph(
    partition_id: PartitionId,
    records: Iterable[EdgeRecord],
    registry: TypeRegistry,
) -> Graph:
    """
    Build a graph from edge records.

    Args:
        partition_id: Partition being built
        records: Edge records (any order, duplicates allowed)
        registry: Type registry for the configured core type

    Returns:
        New Graph; adjacency is symmetric and strictly core <-> non-core

    Raises:
        SchemaError: If a core-sourced record names an undeclared target type
    """
    graph = Graph(partition_id)
    dropped = 0

    for record in records:
        if record.partition_id != partition_id:
            logger.warning(
                f"Dropping edge for partition {record.partition_id} "
                f"while building partition {partition_id}"
            )
            dropped += 1
            continue
        if not registry.is_core(record.source_type):
            logger.debug(
                f"Dropping edge {record.source_id}->{record.target_id}: "
                f"source type {record.source_type!r} is not the core type"
            )
            dropped += 1
            continue

        entry = registry.resolve(record.target_type)
        if not registry.allows(record.relation, record.target_type):
            logger.warning(
                f"Dropping edge {record.source_id}->{record.target_id}: relation "
                f"{record.relation!r} not declared for type {record.target_type!r}"
            )
            dropped += 1
            continue
        if record.source_id == record.target_id:
            logger.warning(f"Dropping self-loop on node {record.source_id}")
            dropped += 1
            continue

        conflict = _role_conflict(graph, record.source_id, CORE_TYPE_ID, True) or _role_conflict(
            graph, record.target_id, entry.type_id, False
        )
        if conflict:
            logger.warning(f"Dropping edge {record.source_id}->{record.target_id}: {conflict}")
            dropped += 1
            continue

        core = graph.ensure_node(record.source_id, CORE_TYPE_ID, is_core=True)
        non_core = graph.ensure_node(record.target_id, entry.type_id, is_core=False)
        graph.add_edge(core, non_core, registry.relation_id(record.relation))

    logger.debug(f"Built {graph!r} ({dropped} records dropped)")
    return graph


def _role_conflict(
    graph: Graph, node_id: NodeId, type_id: NodeTypeId, is_core: bool
) -> Optional[str]:
    """Describe why node_id cannot take this role, or None if it can."""
    node = graph.nodes.get(node_id)
    if node is None:
        return None
    if node.is_core != is_core:
        existing = "core" if node.is_core else "non-core"
        return f"node {node_id} is already a {existing} node"
    if node.type_id != type_id:
        return f"node {node_id} already has type id {node.type_id}"
    return None
