"""
Module: finder.timing

Purpose:
    Per-partition phase timings, to see whether graph building, pruning or
    search dominates a run.

Key Classes:
    - TimingLog: Phase durations keyed by partition

Key Functions:
    - timed_phase: Context manager recording one phase duration

Dependencies:
    - time (std)
    - json (std)

Used By:
    - finder.controller: QuasiCliqueFinder.process_partition(), RunSummary
"""

from __future__ import annotations

import json
import logging
import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

# Phases recorded by the controller, in pipeline order
PHASES = ("build", "prune", "search")

SlowPartition = Tuple[str, float, str, float]


@dataclass
class TimingLog:
    """
    Phase durations for a finder run.

    Attributes:
        partition_timings: partition id -> {phase -> seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_partition("7", "search", 0.012)
        >>> log.get_partition_total("7")
        0.012
    """

    partition_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def log_partition(self, partition_id: str, phase: str, duration: float) -> None:
        """Record a phase duration, replacing an earlier one for the same phase."""
        self.partition_timings.setdefault(partition_id, {})[phase] = duration

    def get_partition_total(self, partition_id: str) -> float:
        return sum(self.partition_timings.get(partition_id, {}).values())

    def get_phase_averages(self) -> Dict[str, float]:
        """Mean duration of each phase over the partitions that ran it."""
        samples: Dict[str, List[float]] = defaultdict(list)
        for phases in self.partition_timings.values():
            for phase, duration in phases.items():
                samples[phase].append(duration)
        return {phase: sum(values) / len(values) for phase, values in samples.items()}

    def get_slowest_partitions(self, n: int = 3) -> List[SlowPartition]:
        """
        The n partitions with the largest total time.

        Returns:
            (partition id, total, slowest phase, slowest phase duration)
        """
        ranked = []
        for partition_id, phases in self.partition_timings.items():
            if phases:
                phase, duration = max(phases.items(), key=lambda item: item[1])
                ranked.append((partition_id, sum(phases.values()), phase, duration))
        return sorted(ranked, key=lambda row: -row[1])[:n]

    def summary(self) -> str:
        """Human-readable summary for logs and the benchmark script."""
        lines = ["", "=== Finder Timing Summary ===", f"Partitions: {len(self.partition_timings)}"]

        averages = self.get_phase_averages()
        if averages:
            lines += ["", "Phase averages:"]
            ordered = [p for p in PHASES if p in averages]
            ordered += sorted(p for p in averages if p not in PHASES)
            lines += [f"  {phase:10s} {averages[phase]:.3f}s" for phase in ordered]

        slowest = self.get_slowest_partitions(3)
        if slowest:
            lines += ["", "Slowest partitions:"]
            lines += [
                f"  {partition_id}: {total:.3f}s ({phase}: {duration:.3f}s)"
                for partition_id, total, phase, duration in slowest
            ]

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partition_timings": self.partition_timings,
            "phase_averages": self.get_phase_averages(),
            "slowest_partitions": [
                {"id": pid, "total": total, "slowest_phase": phase, "phase_duration": duration}
                for pid, total, phase, duration in self.get_slowest_partitions(5)
            ],
        }

    def save(self, path: Path) -> None:
        """Write to_dict() as JSON, overwriting path."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_phase(log: TimingLog, phase: str, partition_id: str) -> Iterator[None]:
    """
    Record the wall time of the enclosed block, even if it raises.

    Example:
        >>> with timed_phase(log, "build", "7"):
        ...     graph = build_graph(PartitionId(7), records, registry)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log_partition(partition_id, phase, time.perf_counter() - start)
