"""
Module: finder.loading

Purpose:
    Turn raw input lines into one partition's graph, optionally shrunk
    by k-core peeling.

Key Functions:
    - parse_line(): Raw line -> ParsedLine
    - build_graph(): Edge records -> Graph
    - trim(): In-place k-core peeling
    - rebuild_pruned(): Build + peel into a fresh graph

Dependencies:
    - quasiclique_toolkit.core.models: Records and graph
    - quasiclique_toolkit.core.schemas.registry: Type resolution

Used By:
    - finder.controller: QuasiCliqueFinder
"""

from .parser import ParseError, classify_fields, parse_line, split_fields
from .builder import build_graph
from .pruning import rebuild_pruned, trim

__all__ = [
    "ParseError",
    "classify_fields",
    "parse_line",
    "split_fields",
    "build_graph",
    "rebuild_pruned",
    "trim",
]
