"""
Unit tests for Node and Graph.

Verified: 2026-10-19
"""

import pytest

from quasiclique_toolkit.core.models import (
    CORE_TYPE_ID,
    Graph,
    NodeId,
    NodeTypeId,
    PartitionId,
    RelationId,
)


VENUE = NodeTypeId(1)


@pytest.fixture
def graph() -> Graph:
    """Authors 1, 2 and conference 3; author 1 linked by two relations."""
    g = Graph(PartitionId(0))
    a1 = g.ensure_node(NodeId(1), CORE_TYPE_ID, is_core=True)
    a2 = g.ensure_node(NodeId(2), CORE_TYPE_ID, is_core=True)
    c3 = g.ensure_node(NodeId(3), VENUE, is_core=False)
    g.add_edge(a1, c3, RelationId(0))
    g.add_edge(a1, c3, RelationId(1))
    g.add_edge(a2, c3, RelationId(0))
    return g


class TestGraph:
    """Tests for graph construction and queries."""

    def test_add_edge_when_added_then_adjacency_is_symmetric(self, graph):
        """Both endpoints record the relation."""
        # Assert
        assert graph.relations_between(NodeId(1), NodeId(3)) == {RelationId(0), RelationId(1)}
        assert graph.relations_between(NodeId(3), NodeId(1)) == {RelationId(0), RelationId(1)}

    def test_degree_when_multiple_relations_then_counts_each_kind(self, graph):
        """Degree sums relation kinds across neighbors."""
        # Assert
        assert graph.get_node(NodeId(1)).degree == 2
        assert graph.get_node(NodeId(2)).degree == 1
        assert graph.get_node(NodeId(3)).degree == 3
        assert graph.edge_count == 3

    def test_add_edge_when_duplicate_relation_then_idempotent(self, graph):
        """Repeating an identical edge changes nothing."""
        # Act
        added = graph.add_edge(
            graph.get_node(NodeId(2)), graph.get_node(NodeId(3)), RelationId(0)
        )

        # Assert
        assert added is False
        assert graph.edge_count == 3

    def test_core_ids_when_built_then_partition_node_map(self, graph):
        """core_ids and non_core_ids split the node map."""
        # Assert
        assert graph.core_ids == {NodeId(1), NodeId(2)}
        assert graph.non_core_ids == {NodeId(3)}
        assert graph.core_ids.isdisjoint(graph.non_core_ids)
        assert len(graph) == 3

    def test_ensure_node_when_role_conflict_then_raises_value_error(self, graph):
        """A core id cannot be reused as non-core."""
        # Act & Assert
        with pytest.raises(ValueError, match="already present"):
            graph.ensure_node(NodeId(1), VENUE, is_core=False)

    def test_add_edge_when_both_core_then_raises_value_error(self, graph):
        """Edges must be bipartite."""
        # Act & Assert
        with pytest.raises(ValueError, match="core and a non-core"):
            graph.add_edge(graph.get_node(NodeId(1)), graph.get_node(NodeId(2)), RelationId(0))

    def test_remove_node_when_called_then_strips_mirrored_edges(self, graph):
        """Removing a node removes it from every neighbor."""
        # Act
        graph.remove_node(NodeId(1))

        # Assert
        assert NodeId(1) not in graph
        assert graph.get_node(NodeId(3)).degree == 1
        assert not graph.get_node(NodeId(3)).is_adjacent(NodeId(1))
