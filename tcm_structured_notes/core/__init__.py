"""
Core Layer - Domain Models, Enums, Tables, and Configuration

This layer contains PURE, side-effect-free components that form the
foundation of the structured notes pipeline.

Submodules:
    models.py     → Pydantic note models and diagnostics dataclasses
    enums.py      → Side, Method, RegionName, LLMProvider
    constants.py  → Static lookup tables (channels, extra points, ICD-10)
    config.py     → Configuration dataclass
    exceptions.py → Domain-specific exceptions

Dependency Rule:
    This layer depends on NOTHING else in the package.
    All other layers may depend on this layer.

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.core.models import (
    FlatPoint,
    Region,
    ICDCode,
    ChiefComplaint,
    StructuredNote,
    ClassificationMiss,
    ICDResolutionMiss,
    PointClassification,
    ExtractionDiagnostics,
)
from tcm_structured_notes.core.enums import Side, Method, RegionName, LLMProvider
from tcm_structured_notes.core.config import ExtractionConfiguration
from tcm_structured_notes.core.exceptions import (
    StructuredNotesError,
    ConfigurationError,
    ExtractionError,
    EmptyInputError,
    ProviderError,
    SchemaViolationError,
    MalformedResponseError,
)

__all__ = [
    # Models
    "FlatPoint",
    "Region",
    "ICDCode",
    "ChiefComplaint",
    "StructuredNote",
    "ClassificationMiss",
    "ICDResolutionMiss",
    "PointClassification",
    "ExtractionDiagnostics",
    # Enums
    "Side",
    "Method",
    "RegionName",
    "LLMProvider",
    # Configuration
    "ExtractionConfiguration",
    # Exceptions
    "StructuredNotesError",
    "ConfigurationError",
    "ExtractionError",
    "EmptyInputError",
    "ProviderError",
    "SchemaViolationError",
    "MalformedResponseError",
]
