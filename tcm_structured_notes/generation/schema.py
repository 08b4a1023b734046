"""
Response Schema - JSON Schema for the Structured Note

The JSON Schema handed to the provider with every extraction call. OpenAI
uses it for Structured Outputs; other providers receive the expected shape
through the prompt. In both cases the validation layer re-checks the
response with the pydantic models, so the schema is guidance and the
models are the contract.

Author: Shubham Singh
Date: December 2025
"""

import copy
from typing import Any, Dict

from tcm_structured_notes.core.constants import TCM_REVIEW_CATEGORIES
from tcm_structured_notes.core.enums import Method, Side


# =============================================================================
# STAGE 1: FIELD FRAGMENTS
# =============================================================================

_NULLABLE_STRING = {"type": ["string", "null"]}

_CHIEF_COMPLAINT = {
    "type": "object",
    "properties": {
        "text": {
            "type": "string",
            "description": "Chief complaint text MUST include duration (e.g., 'Lower back pain for 10 months')",
        },
        "icdCode": {
            "type": "string",
            "description": "ICD-10 symptom code as STRING (e.g., 'M54.50'). Never null.",
        },
        "icdLabel": {
            "type": "string",
            "description": "ICD-10 description (e.g., 'Low back pain, unspecified').",
        },
    },
    "required": ["text", "icdCode", "icdLabel"],
    "additionalProperties": False,
}

_SUBJECTIVE = {
    "type": "object",
    "properties": {
        "pmh": {"type": "string", "description": "Past Medical History"},
        "fh": {"type": "string", "description": "Family History"},
        "sh": {"type": "string", "description": "Social History"},
        "es": {"type": "string", "description": "Emotional Status, including stress level"},
    },
    "required": ["pmh", "fh", "sh", "es"],
    "additionalProperties": False,
}

_ICD_CODE = {
    "type": "object",
    "properties": {
        "code": {"type": "string", "description": "ICD-10 code as STRING"},
        "label": {"type": "string", "description": "ICD-10 label"},
    },
    "required": ["code", "label"],
    "additionalProperties": False,
}


def _acupuncture_point_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "Point code or name (e.g., 'BL-20', 'LV-3', 'Yin Tang')",
            },
            "side": {
                "type": ["string", "null"],
                "enum": Side.get_all_values() + [None],
                "description": "Only specify if it differs from acupunctureTreatmentSide",
            },
            "method": {
                "type": ["string", "null"],
                "enum": Method.get_all_values() + [None],
                "description": "T=Tonify, R=Reduce/Sedate, E=Even/Balance",
            },
        },
        "required": ["name", "side", "method"],
        "additionalProperties": False,
    }


# =============================================================================
# STAGE 2: FULL SCHEMA
# =============================================================================


def build_note_schema() -> Dict[str, Any]:
    """
    Build the JSON Schema for one structured note.

    Returns a fresh dict each call so a client may mutate it (some SDKs
    annotate schemas in place) without affecting later calls.
    """
    return {
        "type": "object",
        "properties": {
            "note_summary": {
                "type": ["string", "null"],
                "description": "Brief summary of the clinical note",
            },
            "chiefComplaints": {
                "type": "array",
                "description": "Chief complaints with ICD-10 codes (1-2 complaints)",
                "items": copy.deepcopy(_CHIEF_COMPLAINT),
            },
            "hpi": {"type": "string", "description": "History of Present Illness narrative"},
            "subjective": copy.deepcopy(_SUBJECTIVE),
            "tcmReview": {
                "type": "object",
                "description": "TCM Review of Systems. Lowercase category keys; null for categories with no information.",
                "properties": {name: dict(_NULLABLE_STRING) for name in TCM_REVIEW_CATEGORIES},
                "required": list(TCM_REVIEW_CATEGORIES),
                "additionalProperties": False,
            },
            "tongue": {
                "type": "object",
                "properties": {
                    "body": {"type": "string", "description": "Tongue body: color, shape, texture, movement"},
                    "coating": {"type": "string", "description": "Tongue coating: color, thickness, quality"},
                },
                "required": ["body", "coating"],
                "additionalProperties": False,
            },
            "pulse": {
                "type": "object",
                "properties": {
                    "text": {"type": "string", "description": "Full pulse description"},
                },
                "required": ["text"],
                "additionalProperties": False,
            },
            "diagnosis": {
                "type": "object",
                "properties": {
                    "tcmDiagnosis": {
                        "type": "string",
                        "description": "TCM pattern diagnosis (e.g., 'Liver Qi Stagnation')",
                    },
                    "icdCodes": {"type": "array", "items": copy.deepcopy(_ICD_CODE)},
                },
                "required": ["tcmDiagnosis", "icdCodes"],
                "additionalProperties": False,
            },
            "treatment": {"type": "string", "description": "Treatment strategy and principle"},
            "acupunctureTreatmentSide": {
                "type": "string",
                "enum": Side.get_all_values(),
                "description": "Overall treatment side. Defaults to 'Both' if not specified.",
            },
            "acupuncturePoints": {
                "type": "array",
                "description": "Flat list of points. Do not organize by region.",
                "items": _acupuncture_point_schema(),
            },
        },
        "required": [
            "note_summary",
            "chiefComplaints",
            "hpi",
            "subjective",
            "tcmReview",
            "tongue",
            "pulse",
            "diagnosis",
            "treatment",
            "acupunctureTreatmentSide",
            "acupuncturePoints",
        ],
        "additionalProperties": False,
    }
