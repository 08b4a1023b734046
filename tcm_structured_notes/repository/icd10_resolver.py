"""
ICD-10 Resolver - Symptom Whitelist Lookup

This module maps normalized symptom phrases to symptom-level ICD-10 codes
using the static whitelist in core.constants. It is used as a backfill pass
after extraction and by manual-entry paths that need a code for a phrase.

Rules:
    1. Lookup only; a miss returns None and is never guessed
    2. Codes the model already provided are left untouched
    3. The whitelist holds symptom codes only, never disease diagnoses

Pipeline Position:
    Extractor → Validation → [ICD Backfill] → Region Organizer
                              ^^^^^^^^^^^^^^
                              You are here

Usage:
    from tcm_structured_notes.repository import resolve_icd10

    code = resolve_icd10("Low back pain")
    # ICDCode(code="M54.50", label="Low back pain, unspecified")

Author: Shubham Singh
Date: December 2025
"""

import re
from typing import List, Optional

from loguru import logger

from tcm_structured_notes.core.constants import ICD10_SYMPTOM_CODES
from tcm_structured_notes.core.models import ChiefComplaint, ICDCode, ICDResolutionMiss


_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# STAGE 1: LOOKUP
# =============================================================================


def normalize_phrase(phrase: str) -> str:
    """Lowercase, trim, and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", phrase.strip().lower())


def resolve_icd10(phrase: str) -> Optional[ICDCode]:
    """
    Resolve a symptom phrase to its whitelisted ICD-10 code.

    Args:
        phrase: Symptom phrase (e.g., "Lower back pain")

    Returns:
        ICDCode if the phrase is whitelisted, None otherwise
    """
    entry = ICD10_SYMPTOM_CODES.get(normalize_phrase(phrase))
    if entry is None:
        return None
    code, label = entry
    return ICDCode(code=code, label=label)


# =============================================================================
# STAGE 2: CHIEF COMPLAINT BACKFILL
# =============================================================================


def backfill_chief_complaints(
    complaints: List[ChiefComplaint], misses: Optional[List[ICDResolutionMiss]] = None
) -> List[ChiefComplaint]:
    """
    Fill in missing ICD-10 code/label on chief complaints.

    Algorithm:
        1. Skip complaints that already carry a code
        2. Resolve the leading symptom phrase (text before " for ")
        3. On a hit, copy code and label; on a miss, leave both as given

    Args:
        complaints: Chief complaints from the provider
        misses: Optional list that collects ICDResolutionMiss records

    Returns:
        New list of complaints; inputs are not mutated
    """
    filled: List[ChiefComplaint] = []

    for complaint in complaints:
        if complaint.icd_code:
            filled.append(complaint)
            continue

        phrase = complaint.symptom_phrase
        resolved = resolve_icd10(phrase)

        if resolved is None:
            logger.debug(f"No whitelisted ICD-10 code for '{phrase}'")
            if misses is not None:
                misses.append(ICDResolutionMiss(phrase=phrase))
            filled.append(complaint)
            continue

        logger.debug(f"Backfilled ICD-10 {resolved.code} for '{phrase}'")
        filled.append(
            complaint.model_copy(update={"icd_code": resolved.code, "icd_label": resolved.label})
        )

    return filled
