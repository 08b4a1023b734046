"""
Region Organizer - Flat Point List → Regions

Groups a flat list of FlatPoints into anatomical regions for display.
Grouping is stable (points keep their extraction order within a region)
and regions are sorted by name, so the same input always yields the same
output.

Author: Shubham Singh
Date: December 2025
"""

from typing import Dict, List, Optional

from tcm_structured_notes.acupuncture.point_classifier import classify_point_detailed
from tcm_structured_notes.core.enums import RegionName
from tcm_structured_notes.core.models import ClassificationMiss, FlatPoint, Region


def organize_by_region(
    points: List[FlatPoint], misses: Optional[List[ClassificationMiss]] = None
) -> List[Region]:
    """
    Group points by anatomical region.

    Args:
        points: Flat point list in extraction order
        misses: Optional list that collects classification misses

    Returns:
        Regions sorted by region name, each holding its points in input order
    """
    buckets: Dict[RegionName, List[FlatPoint]] = {}

    for point in points:
        classification = classify_point_detailed(point.name)
        if classification.miss is not None and misses is not None:
            misses.append(classification.miss)
        buckets.setdefault(classification.region, []).append(point)

    return [
        Region(region=region, points=grouped)
        for region, grouped in sorted(buckets.items(), key=lambda item: item[0].value)
    ]
