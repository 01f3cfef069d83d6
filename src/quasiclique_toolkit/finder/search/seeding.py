"""
Module: finder.search.seeding

Purpose:
    Choose the starting candidates of a beam search. Seeds are singleton
    core sets taken from the highest-degree core nodes, optionally preceded
    by a candidate assembled from membership records.

Key Functions:
    - rank_core_nodes(): Core ids by degree desc, id asc
    - membership_candidate(): Candidate from membership records
    - seed_candidates(): Scored seeds for one search

Dependencies:
    - core.models: Candidate, Graph, MembershipRecord
    - finder.search.scorer: Scorer

Used By:
    - finder.search.beam_search: BeamSearch.run()
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from quasiclique_toolkit.core.models.candidate import Candidate
from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.models.identifiers import NodeId
from quasiclique_toolkit.core.models.records import MembershipRecord

from .scorer import INADMISSIBLE, Scorer

logger = logging.getLogger(__name__)


def rank_core_nodes(graph: Graph) -> List[NodeId]:
    """
    Rank core nodes for seeding.

    Returns:
        Core node ids ordered by degree (highest first), ties by id
    """
    core_nodes = [node for node in graph.nodes.values() if node.is_core]
    core_nodes.sort(key=lambda node: (-node.degree, node.node_id))
    return [node.node_id for node in core_nodes]


def membership_candidate(
    graph: Graph,
    memberships: Sequence[MembershipRecord],
    core_type: str,
) -> Optional[Candidate]:
    """
    Assemble a candidate from membership records.

    Members missing from the graph (never seen, or pruned) are ignored, as
    are non-core members that do not connect to every core member.

    Returns:
        Candidate, or None if no declared core member is in the graph
    """
    core_ids = []
    non_core_ids = []
    for record in memberships:
        if record.partition_id != graph.partition_id:
            continue
        node = graph.nodes.get(record.node_id)
        if node is None:
            logger.debug(f"Membership node {record.node_id} not in graph {graph.partition_id}")
            continue
        declared_core = record.type_name == core_type
        if declared_core != node.is_core:
            logger.warning(
                f"Membership node {record.node_id} declared as {record.type_name!r} "
                f"conflicts with its role in graph {graph.partition_id}"
            )
            continue
        (core_ids if declared_core else non_core_ids).append(record.node_id)

    if not core_ids:
        if memberships:
            logger.warning(
                f"No membership core nodes found in graph {graph.partition_id}; "
                "seeding from degree ranking only"
            )
        return None
    return Candidate.from_members(graph, core_ids, non_core_ids)


def seed_candidates(
    graph: Graph,
    scorer: Scorer,
    width: int,
    *,
    memberships: Sequence[MembershipRecord] = (),
) -> List[Candidate]:
    """
    Build up to width scored seed candidates.

    Args:
        graph: Graph to search
        scorer: Scorer for seed scores
        width: Maximum number of seeds
        memberships: Optional membership records; if they name any core
            node in the graph, their candidate is the first seed

    Returns:
        Scored seeds (empty if the graph has no core nodes)
    """
    seeds: List[Candidate] = []
    declared = membership_candidate(graph, memberships, scorer.registry.core_type)
    if declared is not None:
        declared = scorer.scored(declared, graph)
        if declared.score == INADMISSIBLE:
            logger.warning(
                f"Membership candidate {declared!r} fails the density thresholds; ignoring it"
            )
            declared = None
        else:
            seeds.append(declared)

    for node_id in rank_core_nodes(graph):
        if len(seeds) >= width:
            break
        if declared is not None and declared.core_ids == frozenset([node_id]):
            continue
        seeds.append(scorer.scored(Candidate.seed(graph, node_id), graph))

    logger.debug(f"Seeded {len(seeds)} candidates for graph {graph.partition_id}")
    return seeds
