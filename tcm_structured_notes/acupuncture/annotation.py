"""
Annotation Formatter - Display Strings for Acupuncture Points

Derives the short annotation shown next to each point ("T", "Right",
"Right R") and the plain-text treatment block the UI copies to the
clipboard. Both are display-only; FlatPoints are never modified.

Author: Shubham Singh
Date: December 2025
"""

from typing import List, Optional, Union

from tcm_structured_notes.core.enums import Side
from tcm_structured_notes.core.models import FlatPoint, StructuredNote


def format_annotation(point: FlatPoint, default_side: Union[Side, str]) -> Optional[str]:
    """
    Build the annotation for one point.

    The side is shown only when it differs from the session default;
    the method is shown whenever it is set.

    Args:
        point: The point to annotate
        default_side: Session-wide acupunctureTreatmentSide

    Returns:
        Space-joined tokens, or None when there is nothing to show

    Example:
        >>> format_annotation(FlatPoint(name="LI-4", side="Left", method="T"), Side.LEFT)
        'T'
    """
    default = Side(default_side)
    tokens: List[str] = []

    if point.side is not None and point.side != default:
        tokens.append(point.side.value)
    if point.method is not None:
        tokens.append(point.method.value)

    return " ".join(tokens) if tokens else None


def format_point(point: FlatPoint, default_side: Union[Side, str]) -> str:
    """Point name with its annotation in parentheses, e.g. "GB-30 (Right)"."""
    annotation = format_annotation(point, default_side)
    if annotation is None:
        return point.name
    return f"{point.name} ({annotation})"


def render_acupuncture_text(note: StructuredNote) -> str:
    """
    Render the acupuncture plan as copyable plain text.

    Format:
        Treatment Side: Both

        Back
        BL-23
        BL-25 (T)
        Hip
        GB-30 (Right)
    """
    side = note.acupuncture_treatment_side
    lines = [f"Treatment Side: {side.value}", ""]

    for region in note.acupuncture:
        lines.append(region.region.value)
        lines.extend(format_point(point, side) for point in region.points)

    return "\n".join(lines).rstrip()
