"""
Unit tests for TypeRegistry.

Verified: 2026-10-19
"""

import pytest

from quasiclique_toolkit.core.models import NodeTypeId, RelationId
from quasiclique_toolkit.core.schemas import SchemaError, TypeRegistry


@pytest.fixture
def venue_registry() -> TypeRegistry:
    """Conference reachable by three relations, journal by one."""
    rows = [
        ("author", "published_at", "conference"),
        ("author", "organized", "conference"),
        ("author", "published_at", "journal"),
        ("author", "attended", "conference"),
    ]
    return TypeRegistry(rows, "author")


class TestTypeRegistry:
    """Tests for schema resolution."""

    def test_resolve_when_declared_then_ids_follow_declaration_order(self, venue_registry):
        """Target types get ids 1, 2, ... in order of first declaration."""
        # Assert
        assert venue_registry.resolve("conference").type_id == NodeTypeId(1)
        assert venue_registry.resolve("journal").type_id == NodeTypeId(2)

    def test_max_relations_when_declared_then_counts_distinct_relations(self, venue_registry):
        """max_relations counts distinct relation names per target type."""
        # Assert
        assert venue_registry.max_relations("conference") == 3
        assert venue_registry.max_relations("journal") == 1

    def test_max_relations_for_when_unknown_id_then_returns_zero(self, venue_registry):
        """Unknown type ids contribute nothing to density."""
        # Assert
        assert venue_registry.max_relations_for(NodeTypeId(99)) == 0
        assert venue_registry.max_relations_for(NodeTypeId(1)) == 3

    def test_resolve_when_undeclared_then_raises_schema_error(self, venue_registry):
        """Undeclared target names are a fatal configuration error."""
        # Act & Assert
        with pytest.raises(SchemaError, match="workshop"):
            venue_registry.resolve("workshop")

    def test_type_id_when_core_type_then_returns_zero(self, venue_registry):
        """The core type resolves to type id 0."""
        # Assert
        assert venue_registry.type_id("author") == NodeTypeId(0)
        assert venue_registry.type_name(NodeTypeId(0)) == "author"
        assert venue_registry.is_core("author") is True

    def test_relation_id_when_declared_then_ids_follow_declaration_order(self, venue_registry):
        """Relation names get ids 0, 1, ... in order of first declaration."""
        # Assert
        assert venue_registry.relation_id("published_at") == RelationId(0)
        assert venue_registry.relation_id("organized") == RelationId(1)
        assert venue_registry.relation_name(RelationId(2)) == "attended"

    def test_allows_when_relation_not_declared_for_target_then_false(self, venue_registry):
        """organized only connects authors to conferences."""
        # Assert
        assert venue_registry.allows("organized", "conference") is True
        assert venue_registry.allows("organized", "journal") is False

    def test_init_when_rows_for_other_source_then_ignores_them(self):
        """Rows whose source is not the core type are skipped."""
        # Arrange
        rows = [
            ("author", "published_at", "conference"),
            ("conference", "hosted_in", "city"),
        ]

        # Act
        registry = TypeRegistry(rows, "author")

        # Assert
        assert [entry.name for entry in registry.entries] == ["conference"]

    def test_init_when_no_rows_for_core_type_then_raises_schema_error(self):
        """A schema that never mentions the core type is fatal."""
        # Act & Assert
        with pytest.raises(SchemaError, match="No schema rows"):
            TypeRegistry([("venue", "hosts", "event")], "author")

    def test_init_when_row_has_two_fields_then_raises_schema_error(self):
        """Every row must be a triple."""
        # Act & Assert
        with pytest.raises(SchemaError, match="exactly 3 fields"):
            TypeRegistry([("author", "published_at")], "author")

    def test_init_when_row_has_empty_field_then_raises_schema_error(self):
        """Empty names are rejected."""
        # Act & Assert
        with pytest.raises(SchemaError, match="empty"):
            TypeRegistry([("author", "", "conference")], "author")

    def test_init_when_core_type_is_target_then_raises_schema_error(self):
        """The core type cannot also be a non-core target."""
        # Act & Assert
        with pytest.raises(SchemaError, match="cannot be a target"):
            TypeRegistry([("author", "coauthored", "author")], "author")
