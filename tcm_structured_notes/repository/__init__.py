"""
Repository Layer - ICD-10 Whitelist Access

This layer provides lookup over the static ICD-10 symptom whitelist.

Submodules:
    icd10_resolver.py → Phrase lookup and chief complaint backfill

Dependency Rule:
    This layer depends on: core (models, constants)
    This layer is used by: generation (extractor), public API

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.repository.icd10_resolver import (
    resolve_icd10,
    backfill_chief_complaints,
)

__all__ = [
    "resolve_icd10",
    "backfill_chief_complaints",
]
