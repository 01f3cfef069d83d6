"""
Module: finder.loading.parser

Purpose:
    Classify and parse one tab-separated input line into an edge record
    or a membership record.

Key Functions:
    - classify_fields(): Decide EDGE vs MEMBERSHIP from populated fields
    - parse_line(): Parse a raw line into a ParsedLine

Key Classes:
    - ParseError: Malformed line (record-level, recoverable)

Dependencies:
    - quasiclique_toolkit.core.models: Identifiers and records

Used By:
    - finder.controller: QuasiCliqueFinder.process_line() and run()

Line Format:
    edge:        partition  source  target  source_type  relation  target_type
    membership:  partition  node    type    ""           ""        ""
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from quasiclique_toolkit.core.models.identifiers import IdWidth, NodeId, PartitionId
from quasiclique_toolkit.core.models.records import (
    EdgeRecord,
    MembershipRecord,
    ParsedLine,
    RecordKind,
)

logger = logging.getLogger(__name__)


FIELD_COUNT = 6
MEMBERSHIP_FIELDS = 3

# ASCII decimal digits with an optional sign
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class ParseError(Exception):
    """Line has the wrong shape or an unparseable id."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


def split_fields(line: str) -> List[str]:
    """Split a raw line on tabs after stripping the line terminator. Fields are kept verbatim."""
    return line.rstrip("\r\n").split("\t")


def classify_fields(fields: Sequence[str]) -> RecordKind:
    """
    Classify split fields.

    Six populated fields make an edge; three populated fields followed by
    three empty ones make a membership record.

    Raises:
        ParseError: On any other shape
    """
    if len(fields) != FIELD_COUNT:
        raise ParseError(f"Expected {FIELD_COUNT} fields, got {len(fields)}")
    populated = [bool(value) for value in fields]
    if all(populated):
        return RecordKind.EDGE
    if all(populated[:MEMBERSHIP_FIELDS]) and not any(populated[MEMBERSHIP_FIELDS:]):
        return RecordKind.MEMBERSHIP
    raise ParseError(
        "Line is neither an edge (6 populated fields) nor a membership record "
        "(3 populated fields then 3 empty)"
    )


def parse_line(line: str, *, id_width: IdWidth = IdWidth.NARROW) -> ParsedLine:
    """
    Parse one raw input line.

    Args:
        line: Tab-separated line, trailing newline allowed
        id_width: Accepted id range

    Returns:
        ParsedLine holding an EdgeRecord or MembershipRecord

    Raises:
        ParseError: If the line is malformed or an id is out of range

    Example:
        >>> parse_line("0\\t1\\t3\\tauthor\\tpublished_at\\tconference").kind
        <RecordKind.EDGE: 1>
    """
    fields = split_fields(line)
    try:
        kind = classify_fields(fields)
    except ParseError as e:
        raise ParseError(str(e), line=line) from e

    partition_id = PartitionId(_parse_id(fields[0], "partition id", id_width, line))
    if kind is RecordKind.EDGE:
        record = EdgeRecord(
            partition_id=partition_id,
            source_id=NodeId(_parse_id(fields[1], "source id", id_width, line)),
            target_id=NodeId(_parse_id(fields[2], "target id", id_width, line)),
            source_type=fields[3],
            relation=fields[4],
            target_type=fields[5],
        )
    else:
        record = MembershipRecord(
            partition_id=partition_id,
            node_id=NodeId(_parse_id(fields[1], "node id", id_width, line)),
            type_name=fields[2],
        )
    return ParsedLine(kind=kind, record=record)


def _parse_id(text: str, label: str, id_width: IdWidth, line: str) -> int:
    if not _ID_PATTERN.fullmatch(text):
        raise ParseError(f"Unparseable {label}: {text!r}", line=line)
    value = int(text)
    if not id_width.contains(value):
        low, high = id_width.bounds
        raise ParseError(
            f"{label.capitalize()} {value} outside {id_width.value}-bit range [{low}, {high}]",
            line=line,
        )
    return value
