"""
Module: core.schemas.registry

Purpose:
    Resolve the user-supplied type schema into stable type ids and
    scoring normalizers. Built once per run from (core type, relation,
    target type) triples and read-only thereafter.

Key Classes:
    - TypeRegistry: Type/relation lookup for one configured core type
    - TypeEntry: Resolved non-core type with its legal relation kinds
    - SchemaError: Fatal misconfiguration

Dependencies:
    - dataclasses (std)
    - core.models.identifiers

Used By:
    - finder.controller: Owns one registry per finder
    - finder.loading.builder: Resolves record type names
    - finder.search.scorer: Density normalization
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..models.identifiers import CORE_TYPE_ID, NodeTypeId, RelationId

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Unresolvable type name or malformed schema. Fatal at startup."""
    pass


@dataclass(frozen=True)
class TypeEntry:
    """
    A non-core node type declared for the configured core type.

    Attributes:
        type_id: Stable id (1, 2, ... in declaration order)
        name: Type name as written in the schema
        relations: Relation names that may connect a core node to this type

    Example:
        >>> entry = registry.resolve("conference")
        >>> entry.max_relations
        3
    """

    type_id: NodeTypeId
    name: str
    relations: FrozenSet[str]

    @property
    def max_relations(self) -> int:
        """Distinct relation kinds a core node can have toward this type."""
        return len(self.relations)


class TypeRegistry:
    """
    Immutable type lookup for one core type.

    Rows whose source type is not the configured core type are ignored.
    The core type itself always has id 0.

    Args:
        schema_rows: (core_type, relation, target_type) triples
        core_type: Name of the core type under search

    Raises:
        SchemaError: If a row is malformed, the core type has no rows,
            or the core type is also declared as a target

    Example:
        >>> registry = TypeRegistry(
        ...     [("author", "published_at", "conference")], "author"
        ... )
        >>> registry.resolve("conference").type_id
        NodeTypeId(value=1)
    """

    def __init__(self, schema_rows: Iterable[Sequence[str]], core_type: str):
        if not isinstance(core_type, str) or not core_type:
            raise SchemaError(f"Core type must be a non-empty string: {core_type!r}")

        self._core_type = core_type
        relations_by_target: Dict[str, List[str]] = {}
        relation_ids: Dict[str, RelationId] = {}

        for index, row in enumerate(schema_rows):
            source, relation, target = _check_row(index, row)
            if source != core_type:
                logger.debug(f"Ignoring schema row {index} for source type {source!r}")
                continue
            if target == core_type:
                raise SchemaError(
                    f"Schema row {index}: core type {core_type!r} cannot be a target type"
                )
            declared = relations_by_target.setdefault(target, [])
            if relation not in declared:
                declared.append(relation)
            if relation not in relation_ids:
                relation_ids[relation] = RelationId(len(relation_ids))

        if not relations_by_target:
            raise SchemaError(f"No schema rows declare core type {core_type!r}")

        self._entries: Dict[str, TypeEntry] = {
            name: TypeEntry(
                type_id=NodeTypeId(position + 1),
                name=name,
                relations=frozenset(relations),
            )
            for position, (name, relations) in enumerate(relations_by_target.items())
        }
        self._by_id: Dict[NodeTypeId, TypeEntry] = {
            entry.type_id: entry for entry in self._entries.values()
        }
        self._relation_ids = relation_ids
        self._relation_names: Dict[RelationId, str] = {
            rid: name for name, rid in relation_ids.items()
        }

    # ─────────────────────────────────────────────────────────────────────────
    # Type Lookup
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def core_type(self) -> str:
        return self._core_type

    @property
    def core_type_id(self) -> NodeTypeId:
        return CORE_TYPE_ID

    @property
    def entries(self) -> Tuple[TypeEntry, ...]:
        """Non-core type entries in declaration order."""
        return tuple(self._entries.values())

    def is_core(self, type_name: str) -> bool:
        return type_name == self._core_type

    def resolve(self, type_name: str) -> TypeEntry:
        """
        Resolve a non-core type name.

        Raises:
            SchemaError: If the name was never declared as a target of the core type
        """
        entry = self._entries.get(type_name)
        if entry is None:
            raise SchemaError(
                f"Type {type_name!r} is not declared as a target of core type "
                f"{self._core_type!r}"
            )
        return entry

    def type_id(self, type_name: str) -> NodeTypeId:
        """Type id for the core type or any declared target type."""
        if self.is_core(type_name):
            return CORE_TYPE_ID
        return self.resolve(type_name).type_id

    def type_name(self, type_id: NodeTypeId) -> Optional[str]:
        if type_id == CORE_TYPE_ID:
            return self._core_type
        entry = self._by_id.get(type_id)
        return entry.name if entry else None

    def max_relations(self, type_name: str) -> int:
        return self.resolve(type_name).max_relations

    def max_relations_for(self, type_id: NodeTypeId) -> int:
        """Scoring normalizer for a non-core type id; 0 when unknown."""
        entry = self._by_id.get(type_id)
        return entry.max_relations if entry else 0

    # ─────────────────────────────────────────────────────────────────────────
    # Relation Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def allows(self, relation: str, target_type: str) -> bool:
        """Check that relation is declared between the core type and target_type."""
        entry = self._entries.get(target_type)
        return entry is not None and relation in entry.relations

    def relation_id(self, relation: str) -> RelationId:
        rid = self._relation_ids.get(relation)
        if rid is None:
            raise SchemaError(f"Relation {relation!r} is not declared in the schema")
        return rid

    def relation_name(self, relation_id: RelationId) -> Optional[str]:
        return self._relation_names.get(relation_id)

    def __repr__(self) -> str:
        return (
            f"TypeRegistry(core={self._core_type!r}, "
            f"types={[e.name for e in self.entries]}, "
            f"relations={len(self._relation_ids)})"
        )


def _check_row(index: int, row: Sequence[str]) -> Tuple[str, str, str]:
    """Validate one schema triple."""
    if isinstance(row, str) or len(row) != 3:
        raise SchemaError(f"Schema row {index} must have exactly 3 fields: {row!r}")
    for field_value in row:
        if not isinstance(field_value, str) or not field_value.strip():
            raise SchemaError(f"Schema row {index} has an empty or non-string field: {row!r}")
    source, relation, target = (value.strip() for value in row)
    return source, relation, target
