"""
Core Models Package

Data models for one partition's search.

**MUTABILITY:**

Identifiers, records and candidates are frozen dataclasses:
1. Candidates can be deduplicated by core set and kept in sets
2. Each expansion yields a new candidate with no back-references
3. Safe to hand to another thread or process

Node and Graph are the exception. A Graph owns its Nodes and is only
changed while it is being built and pruned.

| Model | Mutable | Owned By |
|-------|---------|----------|
| `NodeId` etc. | no | value |
| `EdgeRecord` / `MembershipRecord` | no | caller |
| `Graph` / `Node` | build and prune only | finder |
| `Candidate` | no | beam |
"""

from .identifiers import (
    CORE_TYPE_ID,
    IdWidth,
    NodeId,
    NodeTypeId,
    PartitionId,
    RelationId,
)
from .records import (
    EdgeRecord,
    MembershipRecord,
    ParsedLine,
    Record,
    RecordKind,
    RecordKindError,
)
from .graph import Graph, Node
from .candidate import Candidate

__all__ = [
    "CORE_TYPE_ID",
    "IdWidth",
    "NodeId",
    "NodeTypeId",
    "PartitionId",
    "RelationId",
    "EdgeRecord",
    "MembershipRecord",
    "ParsedLine",
    "Record",
    "RecordKind",
    "RecordKindError",
    "Graph",
    "Node",
    "Candidate",
]
