"""
Module: finder.output

Purpose:
    Text rendering of partition results.

Key Functions:
    - format_result(): Result -> lines
    - write_result(): Result -> sink

Used By:
    - finder.controller: Run loop
"""

from .writer import format_result, write_result

__all__ = [
    "format_result",
    "write_result",
]
