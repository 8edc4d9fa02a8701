"""
Parsing of single coordinate lines.

A line holds two plain decimal numbers separated by any run of commas,
tabs and spaces.
"""

import re
from typing import List, Optional, Tuple

from coordsuite.core.errors import NumericParseError, TokenCountMismatchError
from coordsuite.models.coordinates import DetectionResult

# Optional sign, integer part, optional fractional part. No exponent, no
# thousands separators.
NUMBER_PATTERN = re.compile(r"[+-]?\d+(?:\.\d+)?")

# Any run of separator characters is a single field boundary
DELIMITER_PATTERN = re.compile(r"([,\t ]+)")

_STRIP_CHARS = " \t\r\n\f\v,"


def split_fields(line: str) -> Tuple[List[str], List[str]]:
    """
    Split a line into fields and the delimiter runs between them.

    Leading and trailing whitespace and separators are ignored.

    Args:
        line: Raw text line

    Returns:
        Tuple of (tokens, delimiters); len(delimiters) == len(tokens) - 1
        for a non-empty line
    """
    text = line.strip(_STRIP_CHARS)
    if not text:
        return [], []

    parts = DELIMITER_PATTERN.split(text)
    return parts[0::2], parts[1::2]


def is_number(token: str) -> bool:
    """True if the token is a plain decimal number."""
    return NUMBER_PATTERN.fullmatch(token) is not None


def parse_number(token: str) -> float:
    """
    Parse a plain decimal number.

    Raises:
        NumericParseError: If the token is not a valid decimal number
    """
    if not is_number(token):
        raise NumericParseError(token)
    return float(token)


def parse_line(line: str, detection: Optional[DetectionResult] = None) -> Tuple[float, float]:
    """
    Parse a line into a pair of numbers.

    Consecutive separator characters, or any mix of comma, tab and space,
    count as one boundary, so a line is accepted whatever separator was
    detected for its block.

    Args:
        line: Raw text line
        detection: Detection result of the enclosing block, reported in
            failure details

    Returns:
        Tuple of the two numbers in input order

    Raises:
        TokenCountMismatchError: If the line does not have exactly two fields
        NumericParseError: If a field is not a valid decimal number
    """
    tokens, _ = split_fields(line)
    details = {"separator": detection.separator.value} if detection else None

    if len(tokens) != 2:
        raise TokenCountMismatchError(len(tokens), details=details)

    first, second = tokens
    return parse_number(first), parse_number(second)
