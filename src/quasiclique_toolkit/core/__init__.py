"""
Quasi-Clique Toolkit Core Package

Shared data models and the type registry used by every finder module.

1. **Typed handles**
   - Partition, node, node-type and relation ids are distinct types
   - A node id can never be passed where a partition id is expected

2. **Registry scoped per run**
   - One TypeRegistry per finder, threaded explicitly through the
     builder, scorer and controller
   - No module-level registry or other hidden global

3. **Immutable candidate lineage**
   - Expansions return new Candidates; nothing is mutated in place
"""

from .models import Candidate, Graph, Node, NodeId, PartitionId
from .schemas import SchemaError, TypeRegistry

__all__ = [
    "Candidate",
    "Graph",
    "Node",
    "NodeId",
    "PartitionId",
    "SchemaError",
    "TypeRegistry",
]
