"""
Unit tests for QuasiCliqueFinder.

Verified: 2026-10-19
"""

import io
import logging

import pytest

from quasiclique_toolkit.core.models import MembershipRecord, NodeId, PartitionId, RecordKind
from quasiclique_toolkit.core.schemas import SchemaError
from quasiclique_toolkit.finder import (
    FinderError,
    OutputFormat,
    QuasiCliqueFinder,
    find_quasi_cliques,
)
from quasiclique_toolkit.finder.loading import ParseError
from quasiclique_toolkit.finder.search import SearchState
from quasiclique_toolkit.finder.timing import TimingLog


SMALL_CLIQUE = [
    "0\t1\t3\tauthor\tpublished_at\tconference",
    "0\t1\t4\tauthor\tpublished_at\tconference",
    "0\t2\t3\tauthor\tpublished_at\tconference",
    "0\t2\t4\tauthor\tpublished_at\tconference",
]


@pytest.fixture
def small_clique(make_edges):
    """Authors 1 and 2 fully connected to conferences 3 and 4."""
    return make_edges([
        (1, 3, "author", "published_at", "conference"),
        (1, 4, "author", "published_at", "conference"),
        (2, 3, "author", "published_at", "conference"),
        (2, 4, "author", "published_at", "conference"),
    ])


def ids(values):
    return {NodeId(v) for v in values}


class TestProcessLine:
    """Tests for process_line()."""

    def test_process_line_when_edge_then_edge_record(self, make_config):
        # Arrange
        finder = QuasiCliqueFinder(make_config())

        # Act
        parsed = finder.process_line(SMALL_CLIQUE[0])

        # Assert
        assert parsed.kind is RecordKind.EDGE
        assert parsed.as_edge().target_id == NodeId(3)

    def test_process_line_when_membership_then_membership_record(self, make_config):
        # Arrange
        finder = QuasiCliqueFinder(make_config())

        # Act
        parsed = finder.process_line("0\t1\tauthor\t\t\t")

        # Assert
        assert parsed.is_membership
        assert parsed.as_membership().type_name == "author"

    def test_process_line_when_wide_id_then_depends_on_config(self, make_config):
        # Arrange
        line = "0\t5000000000\t3\tauthor\tpublished_at\tconference"

        # Act & Assert
        with pytest.raises(ParseError):
            QuasiCliqueFinder(make_config()).process_line(line)
        parsed = QuasiCliqueFinder(make_config(wide_ids=True)).process_line(line)
        assert parsed.as_edge().source_id == NodeId(5000000000)


class TestProcessPartition:
    """Tests for process_partition()."""

    def test_process_when_clique_then_found(self, make_config, small_clique):
        # Arrange
        finder = QuasiCliqueFinder(make_config())

        # Act
        result = finder.process_partition(PartitionId(0), small_clique)

        # Assert
        assert result.found
        assert result.candidate.core_ids == ids([1, 2])
        assert result.candidate.non_core_ids == ids([3, 4])
        assert result.state is SearchState.CONVERGED
        assert result.type_name_of(NodeId(3)) == "conference"

    def test_process_when_pruning_removes_everything_then_not_found(self, make_config, small_clique):
        """min_degree 3 exceeds every degree in the 2x2 block."""
        # Arrange
        finder = QuasiCliqueFinder(make_config(min_degree=3))

        # Act
        result = finder.process_partition(PartitionId(0), small_clique)

        # Assert
        assert not result.found
        assert result.num_steps == 0
        assert result.state is None
        assert result.excluded_count == 4

    def test_process_when_no_records_then_not_found(self, make_config):
        # Act
        result = QuasiCliqueFinder(make_config()).process_partition(PartitionId(4), [])

        # Assert
        assert result.candidate is None
        assert result.partition_id == PartitionId(4)

    def test_process_when_memberships_given_then_seed_used(self, make_config, small_clique):
        """With no rounds allowed the declared candidate is returned as is."""
        # Arrange
        finder = QuasiCliqueFinder(make_config(max_epochs=0))
        memberships = [
            MembershipRecord(PartitionId(0), NodeId(node_id), type_name)
            for node_id, type_name in [(1, "author"), (2, "author"), (3, "conference"), (4, "conference")]
        ]

        # Act
        result = finder.process_partition(PartitionId(0), small_clique, memberships)

        # Assert
        assert result.num_steps == 0
        assert result.candidate.core_ids == ids([1, 2])
        assert result.candidate.non_core_ids == ids([3, 4])

    def test_process_when_target_type_undeclared_then_schema_error(self, make_config, make_edges):
        # Arrange
        records = make_edges([(1, 3, "author", "published_at", "venue")])

        # Act & Assert
        with pytest.raises(SchemaError):
            QuasiCliqueFinder(make_config()).process_partition(PartitionId(0), records)

    def test_process_when_timing_given_then_phases_recorded(self, make_config, small_clique):
        # Arrange
        finder = QuasiCliqueFinder(make_config(min_degree=1))
        summary_timing = TimingLog()

        # Act
        finder.process_partition(PartitionId(0), small_clique, timing=summary_timing)

        # Assert
        assert set(summary_timing.partition_timings["0"]) == {"build", "prune", "search"}

    def test_find_quasi_cliques_when_called_then_same_as_finder(self, make_config, small_clique):
        # Arrange
        config = make_config()

        # Act
        direct = find_quasi_cliques(PartitionId(0), small_clique, config)
        via_finder = QuasiCliqueFinder(config).process_partition(PartitionId(0), small_clique)

        # Assert
        assert direct.candidate == via_finder.candidate
        assert direct.num_steps == via_finder.num_steps


class TestRun:
    """Tests for streaming runs."""

    def test_run_when_partitions_follow_each_other_then_one_line_each(self, make_config):
        # Arrange
        lines = SMALL_CLIQUE + ["1\t1\t2\tauthor\tpublished_at\tjournal"]
        sink = io.StringIO()

        # Act
        summary = QuasiCliqueFinder(make_config()).run(lines, sink)

        # Assert
        assert sink.getvalue() == "0\t[1, 2]\t[3, 4]\n1\t[1]\t[2]\n"
        assert summary.partitions == 2
        assert summary.found == 2
        assert summary.lines_written == 2

    def test_run_when_partition_reappears_then_new_group(self, make_config):
        """Only consecutive lines share a group."""
        # Arrange
        lines = [
            "0\t1\t3\tauthor\tpublished_at\tconference",
            "1\t1\t2\tauthor\tpublished_at\tjournal",
            "0\t5\t6\tauthor\tpublished_at\tconference",
        ]
        sink = io.StringIO()

        # Act
        summary = QuasiCliqueFinder(make_config()).run(lines, sink)

        # Assert
        assert summary.partitions == 3
        assert sink.getvalue().splitlines() == [
            "0\t[1]\t[3]",
            "1\t[1]\t[2]",
            "0\t[5]\t[6]",
        ]

    def test_run_when_line_malformed_then_dropped_with_warning(self, make_config, caplog):
        # Arrange
        lines = SMALL_CLIQUE[:2] + ["0\t1\t4\tauthor", "\n"] + SMALL_CLIQUE[2:]
        sink = io.StringIO()

        # Act
        with caplog.at_level(logging.WARNING):
            summary = QuasiCliqueFinder(make_config()).run(lines, sink)

        # Assert
        assert summary.lines_read == 6
        assert summary.lines_dropped == 1
        assert summary.partitions == 1
        assert "Dropping line 3" in caplog.text
        assert sink.getvalue() == "0\t[1, 2]\t[3, 4]\n"

    def test_run_when_strict_and_malformed_then_raises(self, make_config):
        # Arrange
        lines = SMALL_CLIQUE[:1] + ["0\tx\t4\tauthor\tpublished_at\tconference"]

        # Act & Assert
        with pytest.raises(FinderError, match="Line 2"):
            QuasiCliqueFinder(make_config()).run(lines, io.StringIO(), strict=True)

    def test_run_when_long_format_then_member_lines(self, make_config):
        # Arrange
        sink = io.StringIO()
        finder = QuasiCliqueFinder(make_config(output_format=OutputFormat.LONG))

        # Act
        summary = finder.run(SMALL_CLIQUE, sink)

        # Assert
        assert summary.lines_written == 4
        assert sink.getvalue().splitlines() == [
            "0\t1\tauthor",
            "0\t2\tauthor",
            "0\t3\tconference",
            "0\t4\tconference",
        ]

    def test_run_when_empty_input_then_nothing_written(self, make_config):
        # Arrange
        sink = io.StringIO()

        # Act
        summary = QuasiCliqueFinder(make_config()).run([], sink)

        # Assert
        assert summary.partitions == 0
        assert sink.getvalue() == ""
        assert str(summary) == "0 partitions (0 with results), 0 lines read, 0 dropped, 0 written"
