"""
Module: finder.search.beam_search

Purpose:
    Bounded beam search over candidate expansions for one graph.
    Seeded → Expanding → Converged | Exhausted.

Key Functions:
    - search_graph(): Main entry point for a single search

Key Classes:
    - BeamSearch: Orchestrates rounds, patience and the epoch cap
    - SearchResult: Best candidate, rounds executed and terminal state
    - SearchState: State machine states

Dependencies:
    - random (std)
    - finder.search.beam: Beam
    - finder.search.seeding: seed_candidates
    - finder.search.scorer: Scorer

Used By:
    - finder.controller: Per-partition orchestration

Termination:
    - Converged: `patience` consecutive rounds without a strictly better
      best score
    - Exhausted: `max_epochs` rounds executed
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from quasiclique_toolkit.core.models.candidate import Candidate
from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.models.records import MembershipRecord

from .beam import Beam
from .scorer import INADMISSIBLE, Scorer
from .seeding import seed_candidates

logger = logging.getLogger(__name__)


class SearchState(Enum):
    """Beam search states."""

    SEEDED = auto()
    EXPANDING = auto()
    CONVERGED = auto()
    EXHAUSTED = auto()


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one beam search (immutable).

    Attributes:
        best: Highest-scoring candidate ever observed, None if no seeds
        num_steps: Expansion rounds executed
        state: Terminal state (CONVERGED or EXHAUSTED)
        history: Best beam score after seeding and after each round

    Example:
        >>> result = search_graph(graph, scorer, beam_width=20)
        >>> result.found, result.num_steps
        (True, 5)
    """

    best: Optional[Candidate]
    num_steps: int
    state: SearchState
    history: Tuple[float, ...] = ()

    @property
    def found(self) -> bool:
        return self.best is not None


@dataclass
class BeamSearch:
    """
    Beam search orchestrator for one graph.

    Attributes:
        graph: Graph to search (read only)
        scorer: Candidate scorer
        beam_width: Beam size
        max_epochs: Hard cap on expansion rounds
        patience: Non-improving rounds tolerated before stopping
        seed: Seed for the search's own random source
        num_to_search: Frontier sample size per member, None for all
        memberships: Optional membership records used as an extra seed
        verbose: Log per-round progress at INFO instead of DEBUG
    """

    graph: Graph
    scorer: Scorer
    beam_width: int = 20
    max_epochs: int = 100
    patience: int = 3
    seed: int = 42
    num_to_search: Optional[int] = None
    memberships: Sequence[MembershipRecord] = ()
    verbose: bool = False

    # Internal state
    _rng: random.Random = field(init=False)
    _state: SearchState = field(init=False, default=SearchState.SEEDED)

    def __post_init__(self) -> None:
        """Initialize internal state."""
        if self.beam_width < 1:
            raise ValueError(f"beam_width must be positive: {self.beam_width}")
        if self.max_epochs < 0:
            raise ValueError(f"max_epochs must be non-negative: {self.max_epochs}")
        if self.patience < 1:
            raise ValueError(f"patience must be positive: {self.patience}")
        self._rng = random.Random(self.seed)

    @property
    def state(self) -> SearchState:
        return self._state

    def run(self) -> SearchResult:
        """
        Execute the search.

        Returns:
            SearchResult with the best candidate ever observed
        """
        self._rng = random.Random(self.seed)
        self._state = SearchState.SEEDED
        level = logging.INFO if self.verbose else logging.DEBUG

        beam = Beam.select(
            seed_candidates(
                self.graph, self.scorer, self.beam_width, memberships=self.memberships
            ),
            self.beam_width,
        )
        if beam.is_empty():
            logger.info(f"No core nodes to seed graph {self.graph.partition_id}")
            self._state = SearchState.CONVERGED
            return SearchResult(best=None, num_steps=0, state=self._state)

        best = beam.best
        history: List[float] = [beam.best_score]
        stale_rounds = 0
        steps = 0

        self._state = SearchState.EXPANDING
        while steps < self.max_epochs:
            beam = beam.expand(
                self.graph,
                self.scorer,
                rng=self._rng,
                num_to_search=self.num_to_search,
            )
            steps += 1
            history.append(beam.best_score)

            if beam.best_score > best.score:
                best = beam.best
                stale_rounds = 0
            else:
                stale_rounds += 1

            logger.log(
                level,
                f"Graph {self.graph.partition_id} round {steps}: {beam!r}, "
                f"best so far {best!r}",
            )

            if stale_rounds >= self.patience:
                self._state = SearchState.CONVERGED
                break
        else:
            self._state = SearchState.EXHAUSTED

        logger.log(
            level,
            f"Graph {self.graph.partition_id} search {self._state.name.lower()} "
            f"after {steps} rounds: {best!r}",
        )
        return SearchResult(
            best=best,
            num_steps=steps,
            state=self._state,
            history=tuple(history),
        )


def search_graph(
    graph: Graph,
    scorer: Scorer,
    *,
    beam_width: int = 20,
    max_epochs: int = 100,
    patience: int = 3,
    seed: int = 42,
    num_to_search: Optional[int] = None,
    memberships: Sequence[MembershipRecord] = (),
    verbose: bool = False,
) -> SearchResult:
    """
    Run a beam search on graph.

    Main entry point for the search algorithm.

    Args:
        graph: Graph to search
        scorer: Candidate scorer
        beam_width: Beam size
        max_epochs: Maximum expansion rounds
        patience: Non-improving rounds before early stop
        seed: Random seed (only used when num_to_search is set)
        num_to_search: Frontier sample size per member, None for all
        memberships: Membership records used as an extra seed
        verbose: Log per-round progress at INFO

    Returns:
        SearchResult (best is None when the graph has no core nodes)

    Invariants:
        - result.history is non-decreasing
        - same graph, scorer and seed give the same result

    Example:
        >>> result = search_graph(graph, Scorer(registry), beam_width=20)
        >>> sorted(n.value for n in result.best.core_ids)
        [1, 2]
    """
    search = BeamSearch(
        graph=graph,
        scorer=scorer,
        beam_width=beam_width,
        max_epochs=max_epochs,
        patience=patience,
        seed=seed,
        num_to_search=num_to_search,
        memberships=memberships,
        verbose=verbose,
    )
    return search.run()
