"""
Acupuncture Layer - Point Classification, Grouping, and Display

Deterministic post-processing of the flat acupuncture point list returned
by the model. No I/O, no shared mutable state.

Submodules:
    point_classifier.py  → Point name → anatomical region
    region_organizer.py  → Flat point list → sorted regions
    annotation.py        → Side/method annotations and copyable text

Dependency Rule:
    This layer depends on: core
    This layer is used by: generation (extractor), public API

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.acupuncture.point_classifier import (
    classify_point,
    classify_point_detailed,
    parse_point_code,
    validate_channel_table,
)
from tcm_structured_notes.acupuncture.region_organizer import organize_by_region
from tcm_structured_notes.acupuncture.annotation import (
    format_annotation,
    format_point,
    render_acupuncture_text,
)

__all__ = [
    "classify_point",
    "classify_point_detailed",
    "parse_point_code",
    "validate_channel_table",
    "organize_by_region",
    "format_annotation",
    "format_point",
    "render_acupuncture_text",
]
