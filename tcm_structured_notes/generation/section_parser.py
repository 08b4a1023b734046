"""
Section Parser - Labelled Sections in Free-Text Clinical Notes

Practitioners often type short section headers on their own line
("CC", "HPI", "Tongue", "Points", ...). This module finds them so the
prompt can tell the model which sections the notes contain, and so the
extractor can recover values the model tends to drop (stress level).

Parsing is best effort: notes without headers simply yield no sections.

Author: Shubham Singh
Date: December 2025
"""

import re
from typing import Dict, List, Optional

from tcm_structured_notes.core.constants import SECTION_LABELS


# Upper-cased label → canonical label
_LABEL_LOOKUP = {label.upper(): label for label in SECTION_LABELS}

_STRESS_PATTERN = re.compile(r"stress.*?(\d+)\s*/\s*10", re.IGNORECASE)


def _header_label(line: str) -> Optional[str]:
    """Return the canonical label if the line is a bare section header."""
    candidate = line.strip().rstrip(":").strip()
    return _LABEL_LOOKUP.get(candidate.upper())


def parse_sections(clinical_notes: str) -> Dict[str, str]:
    """
    Split notes into labelled sections.

    Lines before the first header are ignored. Blank lines are dropped and
    content lines are trimmed. A label that appears twice keeps both
    bodies, joined by a newline.

    Example:
        >>> parse_sections("CC\\nLow back pain\\nTongue:\\nPale")
        {'CC': 'Low back pain', 'Tongue': 'Pale'}
    """
    sections: Dict[str, List[str]] = {}
    current: Optional[str] = None

    for line in clinical_notes.splitlines():
        label = _header_label(line)
        if label:
            current = label
            sections.setdefault(current, [])
            continue
        stripped = line.strip()
        if current and stripped:
            sections[current].append(stripped)

    return {label: "\n".join(lines) for label, lines in sections.items() if lines}


def detect_sections(clinical_notes: str) -> List[str]:
    """Labels of the non-empty sections, in order of first appearance."""
    return list(parse_sections(clinical_notes))


def extract_stress_level(text: str) -> Optional[str]:
    """
    Find a stress rating such as "stress 7/10" or "Stress level: 6 / 10".

    Returns:
        "N/10", or None when no rating is present
    """
    if not text:
        return None
    match = _STRESS_PATTERN.search(text)
    if not match:
        return None
    return f"{match.group(1)}/10"
