"""
Parsing of pasted coordinate text.

This module provides:
- Format and separator detection for whole text blocks
- Parsing of single lines into numeric pairs
"""

from coordsuite.core.parsers.detector import (
    classify_pair,
    classify_separator,
    detect_format,
    detect_separator,
)
from coordsuite.core.parsers.line_parser import (
    is_number,
    parse_line,
    parse_number,
    split_fields,
)

__all__ = [
    # Detector
    "classify_pair",
    "classify_separator",
    "detect_format",
    "detect_separator",
    # Line parser
    "is_number",
    "parse_line",
    "parse_number",
    "split_fields",
]
