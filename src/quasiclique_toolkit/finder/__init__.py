"""
Module: finder

Purpose:
    Quasi-clique discovery pipeline: parse input lines, build one typed
    bipartite graph per partition, prune it, beam-search it and write the
    best candidate.

Key Functions:
    - find_quasi_cliques(): Main entry point for one partition
    - load_config(): Read a JSON config document

Key Classes:
    - FinderConfig: Configuration for a run
    - QuasiCliqueFinder: Per-run orchestrator
    - PartitionResult: Outcome for one partition

Dependencies:
    - quasiclique_toolkit.core: Models and type registry
    - jsonschema: Config document validation

Used By:
    - quasiclique_toolkit: Public API
"""

from .config import FinderConfig, OutputFormat, load_config
from .controller import (
    FinderError,
    PartitionResult,
    QuasiCliqueFinder,
    RunSummary,
    find_quasi_cliques,
)

__all__ = [
    "FinderConfig",
    "OutputFormat",
    "load_config",
    "FinderError",
    "PartitionResult",
    "QuasiCliqueFinder",
    "RunSummary",
    "find_quasi_cliques",
]
