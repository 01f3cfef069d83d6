"""
Unit tests for seed selection.

Verified: 2026-10-19
"""

import logging

import pytest

from quasiclique_toolkit.core.models import Graph, MembershipRecord, NodeId, PartitionId
from quasiclique_toolkit.finder.loading import build_graph
from quasiclique_toolkit.finder.search import (
    Scorer,
    membership_candidate,
    rank_core_nodes,
    seed_candidates,
)


@pytest.fixture
def graph(registry, make_edges):
    """Author 2 has degree 3, authors 1 and 4 degree 2, author 7 degree 1."""
    records = make_edges([
        (1, 3, "author", "published_at", "conference"),
        (1, 5, "author", "published_at", "conference"),
        (2, 3, "author", "published_at", "conference"),
        (2, 5, "author", "published_at", "conference"),
        (2, 6, "author", "published_at", "journal"),
        (4, 6, "author", "published_at", "journal"),
        (4, 5, "author", "published_at", "conference"),
        (7, 8, "author", "published_at", "journal"),
    ])
    return build_graph(PartitionId(0), records, registry)


def membership(node_id, type_name, partition=0):
    return MembershipRecord(PartitionId(partition), NodeId(node_id), type_name)


class TestRankCoreNodes:
    """Tests for seed ranking."""

    def test_rank_when_degrees_tie_then_orders_by_id(self, graph):
        """Degree descending, ties by id ascending."""
        # Act
        ranked = rank_core_nodes(graph)

        # Assert
        assert ranked == [NodeId(2), NodeId(1), NodeId(4), NodeId(7)]


class TestSeedCandidates:
    """Tests for seed_candidates()."""

    def test_seed_when_width_smaller_than_core_then_truncates(self, registry, graph):
        """At most width seeds, highest degree first."""
        # Act
        seeds = seed_candidates(graph, Scorer(registry), 2)

        # Assert
        assert [seed.sorted_core for seed in seeds] == [(NodeId(2),), (NodeId(1),)]
        assert all(seed.is_scored for seed in seeds)

    def test_seed_when_graph_empty_then_returns_nothing(self, registry):
        """No core nodes means no seeds."""
        # Act
        seeds = seed_candidates(Graph(PartitionId(0)), Scorer(registry), 5)

        # Assert
        assert seeds == []

    def test_seed_when_memberships_given_then_declared_candidate_first(self, registry, graph):
        """Membership records form the first seed."""
        # Arrange
        records = [membership(1, "author"), membership(2, "author"), membership(3, "conference")]

        # Act
        seeds = seed_candidates(graph, Scorer(registry), 3, memberships=records)

        # Assert
        assert seeds[0].core_ids == {NodeId(1), NodeId(2)}
        assert seeds[0].non_core_ids == {NodeId(3)}
        assert len(seeds) == 3


class TestMembershipCandidate:
    """Tests for membership_candidate()."""

    def test_membership_when_role_conflicts_then_skips_with_warning(self, graph, caplog):
        """A conference declared as the core type is ignored."""
        # Arrange
        records = [membership(2, "author"), membership(3, "author")]

        # Act
        with caplog.at_level(logging.WARNING):
            candidate = membership_candidate(graph, records, "author")

        # Assert
        assert candidate.core_ids == {NodeId(2)}
        assert "conflicts" in caplog.text

    def test_membership_when_no_core_member_in_graph_then_none(self, graph):
        """Without a core member there is nothing to seed."""
        # Arrange
        records = [membership(99, "author"), membership(3, "conference")]

        # Act
        candidate = membership_candidate(graph, records, "author")

        # Assert
        assert candidate is None

    def test_membership_when_other_partition_then_ignored(self, graph):
        """Records for another partition do not apply."""
        # Arrange
        records = [membership(2, "author", partition=5)]

        # Act & Assert
        assert membership_candidate(graph, records, "author") is None
