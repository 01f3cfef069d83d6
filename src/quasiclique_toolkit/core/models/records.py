"""
Module: records

Purpose:
    Structured input records for one partition. An edge record links a
    core node to a non-core node by a named relation; a membership record
    names a node already known to belong to a quasi-clique.

Key Classes:
    - EdgeRecord: Six-field edge line
    - MembershipRecord: Three-field membership/seed line
    - ParsedLine: Classified line holding exactly one of the two records
    - RecordKind: EDGE or MEMBERSHIP
    - RecordKindError: Requested record kind does not match the line

Dependencies:
    - dataclasses (std)
    - .identifiers

Used By:
    - finder.loading.parser: Produces ParsedLine
    - finder.loading.builder: Consumes EdgeRecord
    - finder.search.seeding: Consumes MembershipRecord
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from .identifiers import NodeId, PartitionId


class RecordKindError(Exception):
    """A line was interpreted as the wrong kind of record."""
    pass


class RecordKind(Enum):
    """Kind of a classified input line."""

    EDGE = auto()
    MEMBERSHIP = auto()


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """
    One typed edge from a core node to a non-core node.

    Attributes:
        partition_id: Partition the edge belongs to
        source_id: Node id of the source (expected to be core)
        target_id: Node id of the target (non-core)
        source_type: Declared type name of the source
        relation: Relation kind name
        target_type: Declared type name of the target
    """

    partition_id: PartitionId
    source_id: NodeId
    target_id: NodeId
    source_type: str
    relation: str
    target_type: str


@dataclass(frozen=True, slots=True)
class MembershipRecord:
    """
    A node declared as a member of a known clique.

    Attributes:
        partition_id: Partition the node belongs to
        node_id: The member node
        type_name: Declared type name (the core type or a target type)
    """

    partition_id: PartitionId
    node_id: NodeId
    type_name: str


Record = Union[EdgeRecord, MembershipRecord]


@dataclass(frozen=True)
class ParsedLine:
    """
    A classified input line.

    Invariants:
        - record is an EdgeRecord for EDGE lines and a MembershipRecord otherwise

    Example:
        >>> line.kind
        <RecordKind.EDGE: 1>
        >>> line.as_edge().relation
        'published_at'
    """

    kind: RecordKind
    record: Record

    def __post_init__(self) -> None:
        expected = EdgeRecord if self.kind is RecordKind.EDGE else MembershipRecord
        if not isinstance(self.record, expected):
            raise ValueError(
                f"{self.kind.name} line cannot hold {type(self.record).__name__}"
            )

    @property
    def partition_id(self) -> PartitionId:
        return self.record.partition_id

    @property
    def is_edge(self) -> bool:
        return self.kind is RecordKind.EDGE

    @property
    def is_membership(self) -> bool:
        return self.kind is RecordKind.MEMBERSHIP

    def as_edge(self) -> EdgeRecord:
        """
        Interpret the line as an edge record.

        Raises:
            RecordKindError: If the line is a membership record
        """
        if not isinstance(self.record, EdgeRecord):
            raise RecordKindError(
                f"Expected an edge record, got a membership record for node "
                f"{self.record.node_id}"
            )
        return self.record

    def as_membership(self) -> MembershipRecord:
        """
        Interpret the line as a membership record.

        Raises:
            RecordKindError: If the line is an edge record
        """
        if not isinstance(self.record, MembershipRecord):
            raise RecordKindError(
                f"Expected a membership record, got an edge record "
                f"{self.record.source_id}->{self.record.target_id}"
            )
        return self.record

