"""
Format and separator detection for pasted coordinate blocks.

A block is classified once, from a small sample of its lines, as either
latitude/longitude or UTM easting/northing. The decision is a magnitude
heuristic: a UTM easting below 180 m would read as a longitude, so pairs
that fit neither class are left out of the vote rather than guessed.
"""

import logging
from collections import Counter
from typing import List, Optional, Tuple

from coordsuite.core.config import settings
from coordsuite.core.errors import UndetectableFormatError
from coordsuite.core.parsers.line_parser import is_number, split_fields
from coordsuite.models.coordinates import CoordinateFormat, DetectionResult, Separator

logger = logging.getLogger(__name__)

MAX_ABS_LATITUDE = 90.0
MAX_ABS_LONGITUDE = 180.0


def _numeric_pairs(text: str, limit: int) -> List[Tuple[float, float, str]]:
    """
    Collect up to ``limit`` lines made of exactly two numeric fields.

    Returns:
        List of (first, second, delimiter) tuples
    """
    samples: List[Tuple[float, float, str]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        tokens, delimiters = split_fields(line)
        if len(tokens) != 2 or not all(is_number(t) for t in tokens):
            continue
        samples.append((float(tokens[0]), float(tokens[1]), delimiters[0]))
        if len(samples) >= limit:
            break
    return samples


def classify_pair(first: float, second: float) -> Optional[CoordinateFormat]:
    """
    Classify one numeric pair.

    Args:
        first: First field (latitude or easting)
        second: Second field (longitude or northing)

    Returns:
        LATLON when both fit geographic bounds, UTM when both are positive
        and beyond them, None when the pair is ambiguous
    """
    if abs(first) <= MAX_ABS_LATITUDE and abs(second) <= MAX_ABS_LONGITUDE:
        return CoordinateFormat.LATLON
    if first > MAX_ABS_LONGITUDE and second > MAX_ABS_LONGITUDE:
        return CoordinateFormat.UTM
    return None


def classify_separator(delimiter: str) -> Separator:
    """
    Classify the delimiter run between the two fields of a line.

    A single comma with at most one space on either side is COMMA, runs of
    tabs are TAB, runs of spaces are SPACE. Anything combining separator
    kinds, or a comma padded with extra spaces, is MIXED.
    """
    if "," in delimiter:
        if "\t" in delimiter or delimiter.count(",") > 1:
            return Separator.MIXED
        before, _, after = delimiter.partition(",")
        if len(before) <= 1 and len(after) <= 1:
            return Separator.COMMA
        return Separator.MIXED
    if "\t" in delimiter:
        return Separator.TAB if set(delimiter) == {"\t"} else Separator.MIXED
    return Separator.SPACE


def detect_separator(text: str) -> Separator:
    """
    Separator of the first numeric line in a block.

    Returns MIXED, which the parser tolerates anyway, when no line holds
    a numeric pair.
    """
    samples = _numeric_pairs(text, limit=1)
    if not samples:
        return Separator.MIXED
    return classify_separator(samples[0][2])


def detect_format(text: str, sample_size: Optional[int] = None) -> DetectionResult:
    """
    Detect the coordinate format and separator of a text block.

    Blank lines and lines without exactly two numeric fields are skipped.
    Each sampled pair votes for LATLON or UTM; the majority decides.

    Args:
        text: Raw multi-line text
        sample_size: Number of numeric lines to inspect (default from settings)

    Returns:
        DetectionResult applied to the whole block

    Raises:
        UndetectableFormatError: If no line holds a numeric pair, every
            sampled pair is ambiguous, or the votes are tied
    """
    limit = sample_size or settings.detection_sample_size
    samples = _numeric_pairs(text, limit)

    if not samples:
        raise UndetectableFormatError("No line contains a pair of numeric values")

    votes = Counter(
        fmt for fmt in (classify_pair(a, b) for a, b, _ in samples) if fmt is not None
    )
    if not votes:
        raise UndetectableFormatError(
            "Sampled values fit neither latitude/longitude nor UTM ranges",
            sampled_lines=len(samples),
        )

    ranked = votes.most_common()
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        raise UndetectableFormatError(
            "Sampled lines disagree on the coordinate format",
            sampled_lines=len(samples),
            details={fmt.value: count for fmt, count in ranked},
        )

    result = DetectionResult(
        format=ranked[0][0],
        separator=classify_separator(samples[0][2]),
    )
    logger.debug(
        f"Detected {result.format.value} with {result.separator.value} separator "
        f"from {len(samples)} sampled line(s)"
    )
    return result
