"""
Module: finder.controller

Purpose:
    Orchestrate quasi-clique discovery for each partition.
    Parse → Build → Prune → Search → Write

Key Functions:
    - find_quasi_cliques(): Main entry point for one partition

Key Classes:
    - QuasiCliqueFinder: Per-run orchestrator owning the type registry
    - PartitionResult: Best candidate and search statistics for one partition
    - RunSummary: Counters and timings for a streamed run
    - FinderError: Exception for strict-mode failures

Dependencies:
    - finder.loading: Parsing, graph building and pruning
    - finder.search: Scoring and beam search
    - finder.output: Result lines

Used By:
    - scripts.benchmark_search: Synthetic benchmark
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from quasiclique_toolkit.core.models.candidate import Candidate
from quasiclique_toolkit.core.models.graph import Graph
from quasiclique_toolkit.core.models.identifiers import NodeId, PartitionId
from quasiclique_toolkit.core.models.records import EdgeRecord, MembershipRecord, ParsedLine

from .config import FinderConfig
from .loading import ParseError, build_graph, parse_line, rebuild_pruned, trim
from .output import write_result
from .search import Scorer, SearchState, search_graph
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


class FinderError(Exception):
    """Error while streaming input in strict mode."""
    pass


@dataclass(frozen=True)
class PartitionResult:
    """
    Outcome for one partition (immutable).

    A missing candidate is a normal outcome: the graph was empty, had no
    core nodes, or lost them all to pruning.

    Attributes:
        partition_id: Partition processed
        candidate: Best candidate found, None if nothing was found
        num_steps: Expansion rounds executed
        state: Terminal search state, None if the search never ran
        history: Best beam score after seeding and after each round
        excluded_count: Nodes removed by pre-search pruning
        member_types: (non-core id, type name) for each non-core member

    Example:
        >>> result = find_quasi_cliques(PartitionId(0), records, config)
        >>> result.found, result.num_steps
        (True, 3)
    """

    partition_id: PartitionId
    candidate: Optional[Candidate]
    num_steps: int
    state: Optional[SearchState] = None
    history: Tuple[float, ...] = ()
    excluded_count: int = 0
    member_types: Tuple[Tuple[NodeId, str], ...] = ()

    @property
    def found(self) -> bool:
        return self.candidate is not None

    def type_name_of(self, node_id: NodeId) -> str:
        """Type name of a non-core member; empty string if unknown."""
        for member, type_name in self.member_types:
            if member == node_id:
                return type_name
        return ""


@dataclass
class RunSummary:
    """
    Counters for one streamed run.

    Attributes:
        lines_read: Input lines seen
        lines_dropped: Malformed lines skipped
        partitions: Partition groups processed
        found: Partitions with a candidate
        lines_written: Output lines written to the sink
        timing: Per-partition phase timings
    """

    lines_read: int = 0
    lines_dropped: int = 0
    partitions: int = 0
    found: int = 0
    lines_written: int = 0
    timing: TimingLog = field(default_factory=TimingLog)

    def __str__(self) -> str:
        return (
            f"{self.partitions} partitions ({self.found} with results), "
            f"{self.lines_read} lines read, {self.lines_dropped} dropped, "
            f"{self.lines_written} written"
        )


class QuasiCliqueFinder:
    """
    Drives build, prune and search for each partition of a run.

    The type registry is resolved once at construction and shared
    read-only by the builder and scorer.

    Args:
        config: Finder configuration

    Raises:
        SchemaError: If the schema cannot be resolved for the core type

    Example:
        >>> finder = QuasiCliqueFinder(config)
        >>> with open("edges.tsv") as src, open("out.tsv", "w") as sink:
        ...     summary = finder.run(src, sink)
    """

    def __init__(self, config: FinderConfig):
        self.config = config
        self.registry = config.build_registry()
        self.scorer = Scorer(
            registry=self.registry,
            core_weight=config.core_weight,
            non_core_weight=config.non_core_weight,
            density_weight=config.density_weight,
            global_threshold=config.global_threshold,
            local_threshold=config.local_threshold,
        )
        logger.debug(f"Finder ready: {self.registry!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Single Steps
    # ─────────────────────────────────────────────────────────────────────────

    def process_line(self, line: str) -> ParsedLine:
        """
        Classify and parse one raw line.

        Raises:
            ParseError: If the line is neither an edge nor a membership record
        """
        return parse_line(line, id_width=self.config.id_width)

    def build(self, partition_id: PartitionId, records: Iterable[EdgeRecord]) -> Graph:
        """
        Build the partition graph, pruned when min_degree is set.

        Raises:
            SchemaError: If a record names an undeclared target type
        """
        if self.config.prunes:
            return rebuild_pruned(partition_id, records, self.config.min_degree, self.registry)
        return build_graph(partition_id, records, self.registry)

    def search_graph(
        self,
        graph: Graph,
        memberships: Sequence[MembershipRecord] = (),
    ) -> PartitionResult:
        """Run the configured beam search on an already-built graph."""
        config = self.config
        result = search_graph(
            graph,
            self.scorer,
            beam_width=config.beam_width,
            max_epochs=config.max_epochs,
            patience=config.patience,
            seed=config.seed,
            num_to_search=config.num_to_search,
            memberships=memberships,
            verbose=config.verbose,
        )
        member_types: Tuple[Tuple[NodeId, str], ...] = ()
        if result.best is not None:
            member_types = tuple(
                (node_id, self.registry.type_name(graph.nodes[node_id].type_id) or "")
                for node_id in result.best.sorted_non_core
            )
        return PartitionResult(
            partition_id=graph.partition_id,
            candidate=result.best,
            num_steps=result.num_steps,
            state=result.state,
            history=result.history,
            member_types=member_types,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Partition Pipeline
    # ─────────────────────────────────────────────────────────────────────────

    def process_partition(
        self,
        partition_id: PartitionId,
        records: Iterable[EdgeRecord],
        memberships: Sequence[MembershipRecord] = (),
        *,
        timing: Optional[TimingLog] = None,
    ) -> PartitionResult:
        """
        Build, prune and search one partition.

        Args:
            partition_id: Partition to process
            records: Edge records for the partition
            memberships: Membership records used as an extra seed
            timing: Optional log receiving build/prune/search durations

        Returns:
            PartitionResult; candidate is None when nothing was found

        Raises:
            SchemaError: If a record names an undeclared target type
        """
        timing = timing if timing is not None else TimingLog()
        label = str(partition_id)

        with timed_phase(timing, "build", label):
            graph = build_graph(partition_id, records, self.registry)

        excluded = 0
        if self.config.prunes:
            with timed_phase(timing, "prune", label):
                excluded = len(trim(graph, self.config.min_degree))
            logger.debug(
                f"Partition {partition_id}: pruning removed {excluded} nodes, "
                f"{len(graph)} remain"
            )

        if graph.is_empty():
            logger.info(f"Partition {partition_id}: empty graph, nothing to search")
            return PartitionResult(
                partition_id=partition_id,
                candidate=None,
                num_steps=0,
                excluded_count=excluded,
            )

        with timed_phase(timing, "search", label):
            result = self.search_graph(graph, memberships)

        if result.found:
            logger.info(f"Partition {partition_id}: {result.candidate!r} after {result.num_steps} rounds")
        else:
            logger.info(f"Partition {partition_id}: no candidate found")

        return PartitionResult(
            partition_id=result.partition_id,
            candidate=result.candidate,
            num_steps=result.num_steps,
            state=result.state,
            history=result.history,
            excluded_count=excluded,
            member_types=result.member_types,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Streaming
    # ─────────────────────────────────────────────────────────────────────────

    def run(self, lines: Iterable[str], sink: TextIO, *, strict: bool = False) -> RunSummary:
        """
        Process a stream of lines grouped by partition.

        Consecutive lines with the same partition id form one group.
        Blank lines are skipped; malformed lines are dropped with a warning.

        Args:
            lines: Raw input lines (e.g. an open file)
            sink: Text stream receiving result lines
            strict: Raise FinderError on the first malformed line

        Returns:
            RunSummary with counters and timings

        Raises:
            FinderError: In strict mode, on a malformed line
            SchemaError: If a record names an undeclared target type
        """
        summary = RunSummary()
        current: Optional[PartitionId] = None
        edges: List[EdgeRecord] = []
        memberships: List[MembershipRecord] = []

        for line_number, line in enumerate(lines, start=1):
            summary.lines_read += 1
            if not line.strip():
                continue
            try:
                parsed = self.process_line(line)
            except ParseError as e:
                if strict:
                    raise FinderError(f"Line {line_number}: {e}") from e
                logger.warning(f"Dropping line {line_number}: {e}")
                summary.lines_dropped += 1
                continue

            if current is not None and parsed.partition_id != current:
                self._flush(current, edges, memberships, sink, summary)
                edges, memberships = [], []
            current = parsed.partition_id
            if parsed.is_edge:
                edges.append(parsed.as_edge())
            else:
                memberships.append(parsed.as_membership())

        if current is not None:
            self._flush(current, edges, memberships, sink, summary)

        logger.info(f"Run complete: {summary}")
        return summary

    def _flush(
        self,
        partition_id: PartitionId,
        edges: List[EdgeRecord],
        memberships: List[MembershipRecord],
        sink: TextIO,
        summary: RunSummary,
    ) -> None:
        result = self.process_partition(
            partition_id, edges, memberships, timing=summary.timing
        )
        summary.partitions += 1
        if result.found:
            summary.found += 1
        summary.lines_written += write_result(
            result,
            sink,
            core_type=self.config.core_type,
            output_format=self.config.output_format,
            verbose=self.config.verbose,
        )


def find_quasi_cliques(
    partition_id: PartitionId,
    records: Iterable[EdgeRecord],
    config: FinderConfig,
    memberships: Sequence[MembershipRecord] = (),
) -> PartitionResult:
    """
    Find the best quasi-clique in one partition.

    Main entry point for library callers holding structured records.

    Args:
        partition_id: Partition to process
        records: Edge records for the partition
        config: Finder configuration
        memberships: Membership records used as an extra seed

    Returns:
        PartitionResult (candidate is None when nothing was found)

    Raises:
        SchemaError: If the schema or a record's target type is invalid

    Example:
        >>> result = find_quasi_cliques(PartitionId(0), records, config)
        >>> sorted(n.value for n in result.candidate.core_ids)
        [1, 2]
    """
    return QuasiCliqueFinder(config).process_partition(partition_id, records, memberships)
