"""
Module: identifiers

Purpose:
    Opaque integer handles for partitions, nodes, node types and relation
    kinds. Each handle is a distinct type so a node id can never be passed
    where a partition id is expected.

Key Classes:
    - PartitionId, NodeId, NodeTypeId, RelationId: Ordered, hashable handles
    - IdWidth: Accepted numeric range for ids read from input lines

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.graph: Node and Graph keys
    - core.models.candidate: Member sets
    - core.schemas.registry: Type and relation ids
    - finder.loading.parser: Line parsing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IdWidth(Enum):
    """
    Numeric range accepted for identifiers read from input.

    Attributes:
        NARROW: Signed 32-bit ids
        WIDE: Signed 64-bit ids, for very large id spaces
    """

    NARROW = 32
    WIDE = 64

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) range for this width."""
        limit = 1 << (self.value - 1)
        return (-limit, limit - 1)

    def contains(self, value: int) -> bool:
        """Check whether value fits this width."""
        low, high = self.bounds
        return low <= value <= high


def _check_int(kind: str, value: object) -> None:
    # bool is an int subclass but never a valid handle
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} value must be an int: {value!r}")


@dataclass(frozen=True, order=True, slots=True)
class PartitionId:
    """Identifier of one independent graph partition."""

    value: int

    def __post_init__(self) -> None:
        _check_int("PartitionId", self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True, slots=True)
class NodeId:
    """
    Identifier of a node within a partition.

    Example:
        >>> NodeId(3) < NodeId(10)
        True
    """

    value: int

    def __post_init__(self) -> None:
        _check_int("NodeId", self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True, slots=True)
class NodeTypeId:
    """Identifier of a node type. The core type is always 0."""

    value: int

    def __post_init__(self) -> None:
        _check_int("NodeTypeId", self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True, slots=True)
class RelationId:
    """Identifier of a relation (edge) kind."""

    value: int

    def __post_init__(self) -> None:
        _check_int("RelationId", self.value)

    def __str__(self) -> str:
        return str(self.value)


CORE_TYPE_ID = NodeTypeId(0)
