"""
Domain Models for TCM Structured Notes

This module defines the data structures used throughout the extraction
pipeline.

Model Hierarchy:
    StructuredNote        → Full structured intake note (pydantic)
    ├── ChiefComplaint
    ├── Subjective
    ├── TongueExam / PulseExam
    ├── Diagnosis → ICDCode
    ├── FlatPoint         → Normalized acupuncture point
    └── Region            → Derived grouping of FlatPoints
    ClassificationMiss    → Non-fatal point classification miss (dataclass)
    ICDResolutionMiss     → Non-fatal ICD lookup miss (dataclass)
    PointClassification   → Detailed classifier output (dataclass)
    ExtractionDiagnostics → Per-call diagnostics (dataclass)

Why Pydantic for the Note:
    The note is validated against the provider's JSON. Pydantic turns any
    mismatch into a list of located errors, which the validation layer wraps
    in a SchemaViolationError. Field names are snake_case in Python and use
    the camelCase aliases the UI stores.

Usage:
    from tcm_structured_notes.core.models import FlatPoint, StructuredNote

    point = FlatPoint(name="BL-23", side=None, method="T")

Author: Shubham Singh
Date: December 2025
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tcm_structured_notes.core.enums import Method, RegionName, Side


# =============================================================================
# STAGE 1: ACUPUNCTURE MODELS
# =============================================================================


class FlatPoint(BaseModel):
    """
    A single acupuncture point as extracted, before regionization.

    Attributes:
        name: Point code or name (e.g., "BL-20", "CV-12", "Yin Tang")
        side: Per-point side override, None means "use the session default"
        method: Needling method, None when the notes state none for this point
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    side: Optional[Side] = None
    method: Optional[Method] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("point name cannot be blank")
        return stripped


class Region(BaseModel):
    """Points grouped under one anatomical region, in extraction order."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    region: RegionName
    points: List[FlatPoint] = Field(default_factory=list)


# =============================================================================
# STAGE 2: NOTE SECTION MODELS
# =============================================================================


class _CamelModel(BaseModel):
    """Base for note sections: camelCase aliases, Python names also accepted."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ICDCode(_CamelModel):
    """An ICD-10 code with its human-readable label."""

    code: str
    label: str

    @field_validator("code", mode="before")
    @classmethod
    def code_as_string(cls, v: Any) -> Any:
        # Some providers emit 54.5 instead of "M54.5"; a number is never valid.
        if isinstance(v, (int, float)):
            raise ValueError("ICD-10 code must be a string")
        return v


class ChiefComplaint(_CamelModel):
    """
    One chief complaint.

    The text is expected to read "[Problem] for [Duration]"; that is
    checked by validation.NoteChecks, not enforced here.
    """

    text: str
    icd_code: Optional[str] = Field(default=None, alias="icdCode")
    icd_label: Optional[str] = Field(default=None, alias="icdLabel")

    @field_validator("icd_code", mode="before")
    @classmethod
    def code_as_string(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            raise ValueError("ICD-10 code must be a string")
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def symptom_phrase(self) -> str:
        """Leading symptom phrase, i.e. the text before " for "."""
        head, _, _ = self.text.partition(" for ")
        return head.strip()


class Subjective(_CamelModel):
    """History sections with optional keyword highlights for UI emphasis."""

    pmh: str = ""
    fh: str = ""
    sh: str = ""
    es: str = ""
    stress_level: Optional[str] = Field(default=None, alias="stressLevel")
    pmh_highlights: Optional[List[str]] = Field(default=None, alias="pmhHighlights")
    fh_highlights: Optional[List[str]] = Field(default=None, alias="fhHighlights")
    sh_highlights: Optional[List[str]] = Field(default=None, alias="shHighlights")
    es_highlights: Optional[List[str]] = Field(default=None, alias="esHighlights")


class TongueExam(_CamelModel):
    body: str = ""
    body_highlights: Optional[List[str]] = Field(default=None, alias="bodyHighlights")
    coating: str = ""
    coating_highlights: Optional[List[str]] = Field(default=None, alias="coatingHighlights")


class PulseExam(_CamelModel):
    text: str = ""
    highlights: Optional[List[str]] = None


class Diagnosis(_CamelModel):
    tcm_diagnosis: str = Field(..., alias="tcmDiagnosis")
    icd_codes: List[ICDCode] = Field(default_factory=list, alias="icdCodes")


# =============================================================================
# STAGE 3: STRUCTURED NOTE
# =============================================================================


class StructuredNote(_CamelModel):
    """
    The pipeline's output: one structured intake note.

    What it does:
        Holds every section extracted from the practitioner's free text
        plus the derived region grouping of the acupuncture points.

    Invariants:
        - acupuncture is always derived from acupuncture_points by the
          Region Organizer; it is never edited on its own.
        - side/method values are closed enums, never free text.

    Example:
        >>> note = StructuredNote.model_validate(provider_json)
        >>> note.to_dict()["chiefComplaints"][0]["icdCode"]
        'M54.50'
    """

    summary: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("summary", "note_summary", "noteSummary"),
        serialization_alias="summary",
    )
    chief_complaints: List[ChiefComplaint] = Field(..., alias="chiefComplaints", min_length=1)
    hpi: str = ""
    subjective: Subjective = Field(default_factory=Subjective)
    tcm_review: Dict[str, Union[str, List[str]]] = Field(default_factory=dict, alias="tcmReview")
    tongue: TongueExam = Field(default_factory=TongueExam)
    pulse: PulseExam = Field(default_factory=PulseExam)
    diagnosis: Diagnosis
    treatment: str = ""
    acupuncture_treatment_side: Side = Field(default=Side.BOTH, alias="acupunctureTreatmentSide")
    acupuncture_points: List[FlatPoint] = Field(default_factory=list, alias="acupuncturePoints")
    acupuncture: List[Region] = Field(default_factory=list)

    @field_validator("tcm_review", mode="before")
    @classmethod
    def drop_empty_categories(cls, v: Any) -> Any:
        """Categories the model reported as null or blank are omitted."""
        if isinstance(v, dict):
            return {k: val for k, val in v.items() if val not in (None, "", [])}
        return v

    @property
    def is_complete(self) -> bool:
        """The UI treats a note with a summary as complete."""
        return bool(self.summary)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary the UI persists."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# STAGE 4: DIAGNOSTICS
# =============================================================================
# Non-fatal misses are recorded, never raised.


@dataclass(frozen=True)
class ClassificationMiss:
    """
    A point the classifier could not place; it was filed under "Other".

    Attributes:
        point_name: Name as given by the provider
        reason: "unparseable", "unknown_channel" or "out_of_range"
        channel: Parsed channel code (if the name parsed)
        number: Parsed point number (if the name parsed)
    """

    point_name: str
    reason: str
    channel: Optional[str] = None
    number: Optional[int] = None


@dataclass(frozen=True)
class ICDResolutionMiss:
    """A symptom phrase that was not in the ICD-10 whitelist."""

    phrase: str


@dataclass(frozen=True)
class PointClassification:
    """Full result of classifying one point name."""

    point_name: str
    region: RegionName
    channel: Optional[str] = None
    number: Optional[int] = None
    is_extra_point: bool = False
    miss: Optional[ClassificationMiss] = None

    @property
    def is_miss(self) -> bool:
        return self.miss is not None


@dataclass
class ExtractionDiagnostics:
    """
    Per-extraction diagnostics returned alongside the note.

    Attributes:
        classification_misses: Points filed under "Other"
        icd_misses: Chief complaint phrases with no whitelist entry
        warnings: Rule-based note check warnings (duration, counts, format)
        detected_sections: Section labels found in the clinical notes
        provider: Provider name of the client used
        model: Model name of the client used
        elapsed_seconds: Wall time of the whole extraction
    """

    classification_misses: List[ClassificationMiss] = field(default_factory=list)
    icd_misses: List[ICDResolutionMiss] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    detected_sections: List[str] = field(default_factory=list)
    provider: str = "unknown"
    model: str = "unknown"
    elapsed_seconds: float = 0.0

    @property
    def miss_count(self) -> int:
        """Total non-fatal misses."""
        return len(self.classification_misses) + len(self.icd_misses)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "classification_misses": [
                {"point": m.point_name, "reason": m.reason} for m in self.classification_misses
            ],
            "icd_misses": [m.phrase for m in self.icd_misses],
            "warnings": self.warnings,
            "detected_sections": self.detected_sections,
            "provider": self.provider,
            "model": self.model,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
