import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import quasiclique_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from quasiclique_toolkit.core.models import EdgeRecord, NodeId, PartitionId  # noqa: E402
from quasiclique_toolkit.core.schemas import TypeRegistry  # noqa: E402
from quasiclique_toolkit.finder import FinderConfig  # noqa: E402


# Common test fixtures
@pytest.fixture
def typespec():
    """Authors publishing at conferences and journals."""
    return [
        ("author", "published_at", "conference"),
        ("author", "published_at", "journal"),
    ]


@pytest.fixture
def registry(typespec):
    """Registry for the author core type."""
    return TypeRegistry(typespec, "author")


@pytest.fixture
def make_edges():
    """Build EdgeRecords from (source, target, source_type, relation, target_type) rows."""
    def _make(rows, partition=0):
        return [
            EdgeRecord(
                partition_id=PartitionId(partition),
                source_id=NodeId(source),
                target_id=NodeId(target),
                source_type=source_type,
                relation=relation,
                target_type=target_type,
            )
            for source, target, source_type, relation, target_type in rows
        ]
    return _make


@pytest.fixture
def make_config(typespec):
    """
    FinderConfig factory with exact-clique scoring.

    Density weight and both thresholds are 1.0, so only fully connected
    candidates are admissible.
    """
    def _make(schema=None, **overrides):
        values = dict(
            schema=schema if schema is not None else typespec,
            core_type="author",
            density_weight=1.0,
            global_threshold=1.0,
            local_threshold=1.0,
        )
        values.update(overrides)
        return FinderConfig(**values)
    return _make


@pytest.fixture
def clique_lines():
    """
    Generate raw edge lines for one fully connected clique.

    Core ids are 0..num_core-1; non-core ids follow, one block per entry
    of non_core_counts, typed by the matching non_core_types entry.

    Returns:
        (core_ids, non_core_ids, lines)
    """
    def _make(
        num_core,
        non_core_counts,
        non_core_types,
        relations=("published_at",),
        partition=0,
        core_type="author",
    ):
        core_ids = list(range(num_core))
        non_core = []
        next_id = num_core
        for type_name, count in zip(non_core_types, non_core_counts):
            non_core.extend((next_id + i, type_name) for i in range(count))
            next_id += count

        lines = [
            f"{partition}\t{core_id}\t{non_core_id}\t{core_type}\t{relation}\t{type_name}"
            for core_id in core_ids
            for non_core_id, type_name in non_core
            for relation in relations
        ]
        return core_ids, [node_id for node_id, _ in non_core], lines
    return _make
