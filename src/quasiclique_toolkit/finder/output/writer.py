"""
Module: finder.output.writer

Purpose:
    Render a partition's best candidate as tab-separated text lines and
    write them to any text sink (file, StringIO, stdout).

Key Functions:
    - format_result(): PartitionResult -> lines
    - write_result(): Format and write to a sink

Dependencies:
    - json (std)
    - finder.config: OutputFormat

Used By:
    - finder.controller: QuasiCliqueFinder.run()

Formats:
    SHORT  partition  [core ids]  [non-core ids]  (+ score, density, steps if verbose)
    LONG   partition  node_id  type_name           (one line per member)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, List, TextIO

from ..config import OutputFormat

if TYPE_CHECKING:
    from ..controller import PartitionResult

logger = logging.getLogger(__name__)


def format_result(
    result: PartitionResult,
    *,
    core_type: str,
    output_format: OutputFormat = OutputFormat.SHORT,
    verbose: bool = False,
) -> List[str]:
    """
    Format one partition result.

    Args:
        result: Partition result to render
        core_type: Type name written for core members in LONG format
        output_format: SHORT or LONG
        verbose: Append score, density and step count (SHORT only)

    Returns:
        Lines without terminators; empty when nothing was found

    Example:
        >>> format_result(result, core_type="author")
        ['0\\t[1, 2]\\t[3, 4]']
    """
    candidate = result.candidate
    if candidate is None:
        return []

    partition = str(result.partition_id)
    if output_format is OutputFormat.LONG:
        lines = [f"{partition}\t{node_id}\t{core_type}" for node_id in candidate.sorted_core]
        lines.extend(
            f"{partition}\t{node_id}\t{result.type_name_of(node_id)}"
            for node_id in candidate.sorted_non_core
        )
        return lines

    fields = [
        partition,
        json.dumps([node_id.value for node_id in candidate.sorted_core]),
        json.dumps([node_id.value for node_id in candidate.sorted_non_core]),
    ]
    if verbose:
        fields.extend([
            f"{candidate.score:.6f}",
            f"{candidate.density:.6f}",
            str(result.num_steps),
        ])
    return ["\t".join(fields)]


def write_result(
    result: PartitionResult,
    sink: TextIO,
    *,
    core_type: str,
    output_format: OutputFormat = OutputFormat.SHORT,
    verbose: bool = False,
) -> int:
    """
    Write one partition result to sink.

    Returns:
        Number of lines written
    """
    lines = format_result(
        result, core_type=core_type, output_format=output_format, verbose=verbose
    )
    for line in lines:
        sink.write(line + "\n")
    if not lines:
        logger.debug(f"Nothing to write for partition {result.partition_id}")
    return len(lines)
