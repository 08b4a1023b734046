"""
Validation Layer - Response Validation and Note Checks

This layer turns raw provider output into a validated StructuredNote and
runs rule-based checks on the result.

Submodules:
    response_validator.py → JSON decoding, point normalization, schema validation
    note_checks.py        → Non-fatal documentation checks

Dependency Rule:
    This layer depends on: core
    This layer is used by: generation (extractor)

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.validation.response_validator import ResponseValidator
from tcm_structured_notes.validation.note_checks import NoteChecks

__all__ = [
    "ResponseValidator",
    "NoteChecks",
]
