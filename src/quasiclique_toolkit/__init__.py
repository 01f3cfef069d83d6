"""Top-level package for the Quasi-Clique Toolkit.

Provides subpackages:
- quasiclique_toolkit.core – identifiers, records, graph and candidate models, type registry
- quasiclique_toolkit.finder – graph building, pruning, beam search and orchestration
"""

def _get_version() -> str:
    """Get version from importlib.metadata (installed) or pyproject.toml (dev)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    try:
        return pkg_version("quasiclique_toolkit")
    except PackageNotFoundError:
        pass

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text().splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.0.0"


__version__ = _get_version()

from .finder import (  # noqa: E402
    FinderConfig,
    OutputFormat,
    PartitionResult,
    QuasiCliqueFinder,
    find_quasi_cliques,
    load_config,
)

__all__: list[str] = [
    "__version__",
    "FinderConfig",
    "OutputFormat",
    "PartitionResult",
    "QuasiCliqueFinder",
    "find_quasi_cliques",
    "load_config",
]
