"""
TCM Structured Notes

Turns a practitioner's free-text Traditional Chinese Medicine clinical notes
into a structured intake note with one schema-constrained LLM call, then
applies deterministic post-processing: symptom ICD-10 backfill and
grouping of acupuncture points by anatomical region.

Architecture Overview:
    tcm_structured_notes/
    ├── core/           → Domain models, enums, tables, configuration (Layer 0 - Pure)
    ├── repository/     → ICD-10 symptom whitelist lookup (Layer 1)
    ├── acupuncture/    → Point classification and region grouping (Layer 1)
    ├── clients/        → LLM client abstractions (Layer 2 - Infrastructure)
    ├── validation/     → Response validation and note checks (Layer 2)
    ├── generation/     → Prompting and extraction (Layer 3)
    └── pipeline.py     → Facade (Layer 4 - Public API)

Quick Start:
    from tcm_structured_notes import StructuredNotesPipeline

    pipeline = StructuredNotesPipeline.from_environment()
    note = pipeline.extract(clinical_notes)

Author: Shubham Singh
Date: December 2025
"""

__version__ = "1.0.0"
__author__ = "Shubham Singh"

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================

# Main Entry Points
from tcm_structured_notes.pipeline import StructuredNotesPipeline, extract_structured_note

# Deterministic helpers
from tcm_structured_notes.acupuncture import (
    classify_point,
    organize_by_region,
    format_annotation,
    render_acupuncture_text,
)
from tcm_structured_notes.repository import resolve_icd10

# Client protocol
from tcm_structured_notes.clients import LLMClientProtocol

# Core Models
from tcm_structured_notes.core.models import (
    FlatPoint,
    Region,
    ICDCode,
    ChiefComplaint,
    StructuredNote,
    ClassificationMiss,
    ICDResolutionMiss,
    ExtractionDiagnostics,
)

# Enums
from tcm_structured_notes.core.enums import Side, Method, RegionName

# Configuration
from tcm_structured_notes.core.config import ExtractionConfiguration

# Exceptions
from tcm_structured_notes.core.exceptions import (
    StructuredNotesError,
    ExtractionError,
    EmptyInputError,
    ProviderError,
    SchemaViolationError,
    MalformedResponseError,
)

__all__ = [
    # Main Entry Points (use these!)
    "StructuredNotesPipeline",
    "extract_structured_note",
    # Deterministic helpers
    "classify_point",
    "organize_by_region",
    "format_annotation",
    "render_acupuncture_text",
    "resolve_icd10",
    # Client protocol
    "LLMClientProtocol",
    # Core Models
    "FlatPoint",
    "Region",
    "ICDCode",
    "ChiefComplaint",
    "StructuredNote",
    "ClassificationMiss",
    "ICDResolutionMiss",
    "ExtractionDiagnostics",
    # Enums
    "Side",
    "Method",
    "RegionName",
    # Configuration
    "ExtractionConfiguration",
    # Exceptions
    "StructuredNotesError",
    "ExtractionError",
    "EmptyInputError",
    "ProviderError",
    "SchemaViolationError",
    "MalformedResponseError",
]
