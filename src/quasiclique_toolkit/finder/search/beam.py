"""
Module: finder.search.beam

Purpose:
    Bounded, deduplicated, score-ordered set of candidates, and the single
    expansion round that replaces it.

Key Functions:
    - expand_candidate(): All scored one-node expansions of a candidate
    - Beam.select(): Rank, deduplicate by core set and truncate
    - Beam.expand(): One search step

Key Classes:
    - Beam: Immutable beam of candidates

Dependencies:
    - random (std)
    - core.models.candidate: Candidate
    - finder.search.scorer: Scorer

Used By:
    - finder.search.beam_search: BeamSearch.run()

Algorithm:
    1. For every member, list its frontier (core and non-core nodes that
       can legally extend it), optionally sampled down to num_to_search
    2. Score every one-node expansion; drop inadmissible ones
    3. Pool expansions with the current members
    4. Keep the best candidate per core set, then the top `width`
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from quasiclique_toolkit.core.models.candidate import Candidate
from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.models.identifiers import NodeId

from .scorer import INADMISSIBLE, Scorer

logger = logging.getLogger(__name__)


def expand_candidate(
    candidate: Candidate,
    graph: Graph,
    scorer: Scorer,
    *,
    rng: Optional[random.Random] = None,
    num_to_search: Optional[int] = None,
) -> List[Candidate]:
    """
    Produce the scored one-node expansions of a candidate.

    Args:
        candidate: Candidate to extend
        graph: Graph the candidate belongs to
        scorer: Scorer for new candidates
        rng: Random source, required when num_to_search is set
        num_to_search: Maximum frontier nodes to try, None for all

    Returns:
        Admissible expansions (each a new Candidate)
    """
    core_frontier, non_core_frontier = candidate.frontier(graph)
    moves: List[Tuple[NodeId, bool]] = [(node_id, True) for node_id in sorted(core_frontier)]
    moves.extend((node_id, False) for node_id in sorted(non_core_frontier))

    if num_to_search is not None and len(moves) > num_to_search:
        if rng is None:
            raise ValueError("num_to_search requires an explicit random source")
        moves = rng.sample(moves, num_to_search)

    expansions: List[Candidate] = []
    for node_id, is_core in moves:
        if is_core:
            expanded = candidate.with_core(graph, node_id)
        else:
            expanded = candidate.with_non_core(graph, node_id)
        expanded = scorer.scored(expanded, graph)
        if expanded.score != INADMISSIBLE:
            expansions.append(expanded)
    return expansions


@dataclass(frozen=True)
class Beam:
    """
    Ordered, bounded set of scored candidates (immutable).

    Attributes:
        candidates: Members, best first
        width: Maximum number of members

    Invariants:
        - len(candidates) <= width
        - no two members share a core-id set
        - members are sorted by Candidate.rank_key()

    Example:
        >>> beam = Beam.select(seeds, width=20)
        >>> beam = beam.expand(graph, scorer)
        >>> beam.best_score
        2.0
    """

    candidates: Tuple[Candidate, ...]
    width: int

    def __post_init__(self) -> None:
        """Validate beam on construction."""
        if self.width < 1:
            raise ValueError(f"width must be positive: {self.width}")
        if len(self.candidates) > self.width:
            raise ValueError(
                f"Beam holds {len(self.candidates)} candidates, width is {self.width}"
            )
        core_sets = {c.core_ids for c in self.candidates}
        if len(core_sets) != len(self.candidates):
            raise ValueError("Beam members must have distinct core sets")

    @classmethod
    def select(cls, pool: Iterable[Candidate], width: int) -> Beam:
        """
        Build a beam from scored candidates.

        Inadmissible candidates are dropped; for each core set only the
        best-ranked candidate is kept.
        """
        ranked = sorted(
            (c for c in pool if c.score != INADMISSIBLE),
            key=Candidate.rank_key,
        )
        kept: List[Candidate] = []
        seen: set[FrozenSet[NodeId]] = set()
        for candidate in ranked:
            if candidate.core_ids in seen:
                continue
            seen.add(candidate.core_ids)
            kept.append(candidate)
            if len(kept) == width:
                break
        return cls(candidates=tuple(kept), width=width)

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def best(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    @property
    def best_score(self) -> float:
        return self.candidates[0].score if self.candidates else INADMISSIBLE

    def is_empty(self) -> bool:
        return not self.candidates

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.candidates)

    # ─────────────────────────────────────────────────────────────────────────
    # Search Step
    # ─────────────────────────────────────────────────────────────────────────

    def expand(
        self,
        graph: Graph,
        scorer: Scorer,
        *,
        rng: Optional[random.Random] = None,
        num_to_search: Optional[int] = None,
    ) -> Beam:
        """
        Run one expansion round.

        Current members stay in the pool, so the best score of the
        returned beam is never lower than this one's.

        Returns:
            New Beam (this one is unchanged)
        """
        pool: List[Candidate] = list(self.candidates)
        for candidate in self.candidates:
            pool.extend(
                expand_candidate(
                    candidate, graph, scorer, rng=rng, num_to_search=num_to_search
                )
            )
        logger.debug(f"Expansion pool: {len(pool)} candidates from {len(self)} members")
        return Beam.select(pool, self.width)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        best = "empty" if self.is_empty() else f"{self.best_score:.4f}"
        return f"Beam(size={len(self)}/{self.width}, best={best})"
