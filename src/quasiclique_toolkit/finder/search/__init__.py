"""
Module: finder.search

Purpose:
    Candidate scoring and bounded beam search. Starts from high-degree
    core seeds and grows candidates one node per round toward larger,
    denser quasi-cliques.

Key Functions:
    - search_graph(): Main entry point for one search
    - seed_candidates(): Starting candidates
    - expand_candidate(): One-node expansions of a candidate

Key Classes:
    - Scorer: Size and density scoring
    - Beam: Bounded deduplicated candidate set
    - BeamSearch: Search orchestrator
    - SearchResult, SearchState: Search outcome

Dependencies:
    - quasiclique_toolkit.core.models: Graph, Candidate
    - quasiclique_toolkit.core.schemas: TypeRegistry

Used By:
    - finder.controller: Per-partition orchestration
"""

from .scorer import INADMISSIBLE, Scorer
from .seeding import membership_candidate, rank_core_nodes, seed_candidates
from .beam import Beam, expand_candidate
from .beam_search import BeamSearch, SearchResult, SearchState, search_graph

__all__ = [
    "INADMISSIBLE",
    "Scorer",
    "membership_candidate",
    "rank_core_nodes",
    "seed_candidates",
    "Beam",
    "expand_candidate",
    "BeamSearch",
    "SearchResult",
    "SearchState",
    "search_graph",
]
