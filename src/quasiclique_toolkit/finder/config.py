"""
Module: finder.config

Purpose:
    Configuration dataclass for the quasi-clique finder. Immutable
    configuration with validation on construction, loadable from a JSON
    document checked against the bundled schema.

Key Classes:
    - FinderConfig: Main configuration for one finder run
    - OutputFormat: Result line layout

Key Functions:
    - load_config(): Read and validate a JSON config file

Dependencies:
    - dataclasses (std)
    - json (std)
    - quasiclique_toolkit.core.schemas.validator: Document validation

Used By:
    - finder.controller: QuasiCliqueFinder
    - finder.output.writer: Result formatting
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from quasiclique_toolkit.core.models.identifiers import IdWidth
from quasiclique_toolkit.core.schemas.registry import TypeRegistry
from quasiclique_toolkit.core.schemas.validator import validate_finder_config


SchemaRow = Tuple[str, str, str]


class OutputFormat(Enum):
    """
    Layout of result lines.

    Attributes:
        SHORT: One line per partition: partition, core ids, non-core ids
        LONG: One line per member: partition, node id, type name
    """

    SHORT = "short"
    LONG = "long"


@dataclass(frozen=True)
class FinderConfig:
    """
    Configuration for quasi-clique search (immutable).

    Attributes:
        schema: (core type, relation, target type) triples
        core_type: Name of the core type under search
        beam_width: Candidates kept between rounds
        core_weight: Exponent on the core count
        non_core_weight: Exponent on the non-core count
        density_weight: Exponent on density, None to ignore density
        global_threshold: Minimum candidate density, None to disable
        local_threshold: Minimum density of each member, None to disable
        num_to_search: Frontier nodes tried per member and round, None for all
        max_epochs: Hard cap on expansion rounds
        patience: Non-improving rounds before early stop
        min_degree: Pre-search pruning threshold, 0 disables pruning
        wide_ids: Accept signed 64-bit ids instead of signed 32-bit
        verbose: Log search rounds at INFO and add score columns to output
        seed: Random seed for reproducible sampling
        output_format: Result line layout

    Invariants:
        - beam_width >= 1, patience >= 1
        - weights >= 0
        - thresholds in [0, 1] when set

    Example:
        >>> config = FinderConfig(
        ...     schema=[("author", "published_at", "conference")],
        ...     core_type="author",
        ... )
        >>> config.id_width
        <IdWidth.NARROW: 32>
    """

    # Required
    schema: Tuple[SchemaRow, ...]
    core_type: str

    # Search
    beam_width: int = 20
    max_epochs: int = 100
    patience: int = 3
    num_to_search: Optional[int] = None
    seed: int = 42

    # Scoring
    core_weight: float = 1.0
    non_core_weight: float = 1.0
    density_weight: Optional[float] = None
    global_threshold: Optional[float] = None
    local_threshold: Optional[float] = None

    # Loading
    min_degree: int = 0
    wide_ids: bool = False

    # Output
    verbose: bool = False
    output_format: OutputFormat = OutputFormat.SHORT

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "schema", tuple(tuple(row) for row in self.schema))
        if not self.core_type:
            raise ValueError("core_type must be a non-empty string")
        if self.beam_width < 1:
            raise ValueError(f"beam_width must be positive: {self.beam_width}")
        if self.max_epochs < 0:
            raise ValueError(f"max_epochs must be non-negative: {self.max_epochs}")
        if self.patience < 1:
            raise ValueError(f"patience must be positive: {self.patience}")
        if self.num_to_search is not None and self.num_to_search < 1:
            raise ValueError(f"num_to_search must be positive: {self.num_to_search}")
        if self.min_degree < 0:
            raise ValueError(f"min_degree must be non-negative: {self.min_degree}")
        for name in ("core_weight", "non_core_weight", "density_weight"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        for name in ("global_threshold", "local_threshold"):
            value = getattr(self, name)
            if value is not None and not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1]: {value}")
        if not isinstance(self.output_format, OutputFormat):
            raise ValueError(f"output_format must be an OutputFormat: {self.output_format!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def id_width(self) -> IdWidth:
        return IdWidth.WIDE if self.wide_ids else IdWidth.NARROW

    @property
    def prunes(self) -> bool:
        """Whether pre-search pruning is enabled."""
        return self.min_degree > 0

    def build_registry(self) -> TypeRegistry:
        """
        Resolve the schema for the configured core type.

        Raises:
            SchemaError: If the schema is malformed for core_type
        """
        return TypeRegistry(self.schema, self.core_type)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FinderConfig:
        """
        Create a config from a JSON-like document.

        Raises:
            ValidationError: If the document fails the config schema
        """
        validate_finder_config(data)
        values = dict(data)
        values["schema"] = tuple(tuple(row) for row in data["schema"])
        if "output_format" in values:
            values["output_format"] = OutputFormat(values["output_format"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Export as a JSON-compatible document."""
        return {
            "schema": [list(row) for row in self.schema],
            "core_type": self.core_type,
            "beam_width": self.beam_width,
            "max_epochs": self.max_epochs,
            "patience": self.patience,
            "num_to_search": self.num_to_search,
            "seed": self.seed,
            "core_weight": self.core_weight,
            "non_core_weight": self.non_core_weight,
            "density_weight": self.density_weight,
            "global_threshold": self.global_threshold,
            "local_threshold": self.local_threshold,
            "min_degree": self.min_degree,
            "wide_ids": self.wide_ids,
            "verbose": self.verbose,
            "output_format": self.output_format.value,
        }


def load_config(path: Path) -> FinderConfig:
    """
    Load a FinderConfig from a JSON file.

    Args:
        path: Path to a JSON config document

    Raises:
        ValidationError: If the document fails the config schema
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return FinderConfig.from_dict(data)

