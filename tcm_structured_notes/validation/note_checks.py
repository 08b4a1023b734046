"""
Note Checks - Rule-Based Quality Checks on a Structured Note

Fast, deterministic checks run after a note has passed schema validation.
They never fail an extraction; findings are returned as warning strings
and logged, so the practitioner can review the note before saving.

Checks Performed:
    1. Chief complaint carries a duration ("... for 3 weeks")
    2. One or two chief complaints
    3. ICD-10 codes look like ICD-10 codes

Author: Shubham Singh
Date: December 2025
"""

import re
from typing import List

from tcm_structured_notes.core.models import StructuredNote


# =============================================================================
# STAGE 1: PATTERNS
# =============================================================================

_NUMBER_WORDS = (
    r"\d+(?:\.\d+)?|a|an|one|two|three|four|five|six|seven|eight|nine|ten|"
    r"eleven|twelve|several|few|couple|many|half"
)
_TIME_UNITS = r"hours?|hrs?|days?|weeks?|wks?|months?|mos?|years?|yrs?|decades?"

DURATION_PATTERN = re.compile(
    rf"\bfor\b.*?\b(?:{_NUMBER_WORDS})\b.*?\b(?:{_TIME_UNITS})\b",
    re.IGNORECASE,
)

ICD10_CODE_PATTERN = re.compile(r"^[A-Z]\d{2}(\.\d{1,4})?$")

MAX_CHIEF_COMPLAINTS = 2


# =============================================================================
# STAGE 2: CHECKS
# =============================================================================


class NoteChecks:
    """
    Static methods for rule-based structured note checks.

    What it does:
        Flags notes that parsed correctly but break documentation
        conventions the prompt asks for.

    Why it exists:
        1. Free validation (no API costs)
        2. Deterministic, so warnings are stable across runs
        3. Surfaces prompt drift without rejecting the note
    """

    @staticmethod
    def check_durations(note: StructuredNote) -> List[str]:
        """Each chief complaint should read "[Problem] for [Duration]"."""
        return [
            f"MISSING_DURATION: chief complaint '{complaint.text}' has no duration"
            for complaint in note.chief_complaints
            if not DURATION_PATTERN.search(complaint.text)
        ]

    @staticmethod
    def check_complaint_count(note: StructuredNote) -> List[str]:
        count = len(note.chief_complaints)
        if count > MAX_CHIEF_COMPLAINTS:
            return [f"TOO_MANY_COMPLAINTS: {count} chief complaints, expected at most {MAX_CHIEF_COMPLAINTS}"]
        return []

    @staticmethod
    def check_icd_format(note: StructuredNote) -> List[str]:
        """Codes on complaints and on the diagnosis must match the ICD-10 shape."""
        issues = []
        codes = [c.icd_code for c in note.chief_complaints if c.icd_code]
        codes.extend(icd.code for icd in note.diagnosis.icd_codes)
        for code in codes:
            if not ICD10_CODE_PATTERN.match(code):
                issues.append(f"INVALID_ICD_FORMAT: '{code}' is not an ICD-10 code")
        return issues

    @classmethod
    def run_all(cls, note: StructuredNote) -> List[str]:
        """Run every check and return all warnings."""
        return (
            cls.check_durations(note)
            + cls.check_complaint_count(note)
            + cls.check_icd_format(note)
        )
