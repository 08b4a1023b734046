"""
Point Classifier - Acupuncture Point → Anatomical Region

This module parses acupuncture point identifiers ("BL-20", "CV12", "Ren-3",
"Yin Tang") and maps them onto the fixed region vocabulary using the
per-channel range tables in core.constants.

Algorithm:
    1. Normalize: trim, uppercase, remove all whitespace
    2. Extra points table (named points with no channel/number)
    3. Parse CV<n> → REN, GV<n> → DU, then generic <LETTERS>-?<n>
    4. Resolve channel aliases (KI → KD, LR → LV, TE → SJ, ...)
    5. First inclusive range containing the number wins

Anything that cannot be placed resolves to RegionName.OTHER. A miss is
logged and returned as a ClassificationMiss; it never raises.

Pipeline Position:
    Extractor → ICD Backfill → Region Organizer → [Point Classifier]
                                                   ^^^^^^^^^^^^^^^^
                                                   You are here

Author: Shubham Singh
Date: December 2025
"""

import re
from typing import List, Optional, Tuple

from loguru import logger

from tcm_structured_notes.core.constants import (
    CHANNEL_ALIASES,
    CHANNEL_REGION_RANGES,
    EXTRA_POINTS,
)
from tcm_structured_notes.core.enums import RegionName
from tcm_structured_notes.core.models import ClassificationMiss, PointClassification


# =============================================================================
# STAGE 1: PARSING
# =============================================================================
# Ordered (pattern, fixed channel) pairs. A None channel means "take the
# channel from the first capture group".

_POINT_PATTERNS: List[Tuple[re.Pattern, Optional[str]]] = [
    (re.compile(r"^CV-?(\d+)$"), "REN"),
    (re.compile(r"^GV-?(\d+)$"), "DU"),
    (re.compile(r"^([A-Z]+)-?(\d+)$"), None),
]

_WHITESPACE = re.compile(r"\s+")


def normalize_point_name(point_name: str) -> str:
    """Uppercase with all whitespace removed ("Yin Tang " → "YINTANG")."""
    return _WHITESPACE.sub("", point_name.strip().upper())


def parse_point_code(point_name: str) -> Optional[Tuple[str, int]]:
    """
    Parse a point code into (channel, number).

    Args:
        point_name: Raw point identifier (e.g., "BL-20", "cv 12", "Du14")

    Returns:
        (canonical channel, point number) or None if the name doesn't parse
    """
    normalized = normalize_point_name(point_name)

    for pattern, fixed_channel in _POINT_PATTERNS:
        match = pattern.match(normalized)
        if not match:
            continue
        if fixed_channel:
            channel, number = fixed_channel, match.group(1)
        else:
            channel, number = match.group(1), match.group(2)
        return CHANNEL_ALIASES.get(channel, channel), int(number)

    return None


# =============================================================================
# STAGE 2: CLASSIFICATION
# =============================================================================


def classify_point_detailed(point_name: str) -> PointClassification:
    """
    Classify a point and report how the region was reached.

    Args:
        point_name: Raw point identifier

    Returns:
        PointClassification; .miss is set when the region is OTHER
        because the point could not be placed
    """
    # Step 1: Extra points take precedence over channel parsing
    extra_region = EXTRA_POINTS.get(normalize_point_name(point_name))
    if extra_region is not None:
        return PointClassification(
            point_name=point_name, region=extra_region, is_extra_point=True
        )

    # Step 2: Parse channel + number
    parsed = parse_point_code(point_name)
    if parsed is None:
        return _miss(point_name, "unparseable")

    channel, number = parsed
    ranges = CHANNEL_REGION_RANGES.get(channel)
    if ranges is None:
        return _miss(point_name, "unknown_channel", channel, number)

    # Step 3: First range containing the number
    for start, end, region in ranges:
        if start <= number <= end:
            return PointClassification(
                point_name=point_name, region=region, channel=channel, number=number
            )

    return _miss(point_name, "out_of_range", channel, number)


def classify_point(point_name: str) -> RegionName:
    """
    Return the anatomical region for a point name.

    Example:
        >>> classify_point("BL-23")
        <RegionName.BACK: 'Back'>
        >>> classify_point("XYZ-99")
        <RegionName.OTHER: 'Other'>
    """
    return classify_point_detailed(point_name).region


def _miss(
    point_name: str, reason: str, channel: Optional[str] = None, number: Optional[int] = None
) -> PointClassification:
    miss = ClassificationMiss(point_name=point_name, reason=reason, channel=channel, number=number)
    logger.warning(
        f"Could not classify acupuncture point '{point_name}' ({reason}), " f"filing under Other"
    )
    return PointClassification(
        point_name=point_name,
        region=RegionName.OTHER,
        channel=channel,
        number=number,
        miss=miss,
    )


# =============================================================================
# STAGE 3: TABLE VALIDATION
# =============================================================================


def validate_channel_table() -> List[str]:
    """
    Check every channel's ranges for gaps and overlaps.

    Each channel must cover 1..last point contiguously, with every range
    well-formed (start <= end) and following the previous one directly.

    Returns:
        List of problems found (empty when the table is consistent)
    """
    problems: List[str] = []

    for channel, ranges in CHANNEL_REGION_RANGES.items():
        expected_start = 1
        for start, end, region in ranges:
            if start > end:
                problems.append(f"{channel}: range {start}-{end} ({region.value}) is inverted")
            if start < expected_start:
                problems.append(f"{channel}: range {start}-{end} overlaps previous range")
            elif start > expected_start:
                problems.append(f"{channel}: gap at {expected_start}-{start - 1}")
            expected_start = max(expected_start, end + 1)

    return problems
