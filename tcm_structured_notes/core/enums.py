"""
Enumerations for TCM Structured Notes

This module defines the closed value sets used in a structured note.
Enums provide:
    1. Type safety for categorical values
    2. A single place to map the many spellings providers produce
    3. Clear domain semantics

Enumeration Categories:
    Side          → Needling side (session default or per point)
    Method        → Needling technique (Tonify / Reduce / Even)
    RegionName    → Anatomical region vocabulary for point grouping
    LLMProvider   → Supported LLM providers

Author: Shubham Singh
Date: December 2025
"""

from enum import Enum


# =============================================================================
# STAGE 1: SIDE ENUMERATION
# =============================================================================


class Side(str, Enum):
    """
    Side of the body a point is needled on.

    Used both as the session-wide acupunctureTreatmentSide and as the
    optional per-point override.
    """

    LEFT = "Left"
    RIGHT = "Right"
    BOTH = "Both"

    @classmethod
    def get_all_values(cls) -> list:
        """Return all side values as a list."""
        return [side.value for side in cls]

    @classmethod
    def from_string(cls, value: str) -> "Side":
        """
        Convert a provider string to a Side with lenient matching.

        Accepts the canonical values plus common spellings such as
        "L", "left side only", "bilateral" and "Both sides treatment".

        Raises:
            ValueError: If string doesn't match any side
        """
        normalized = value.strip().lower()
        for side in cls:
            if normalized == side.value.lower():
                return side
        for alias, side in _SIDE_ALIASES.items():
            if normalized == alias or normalized.startswith(alias + " "):
                return side
        raise ValueError(f"Unknown side: '{value}'. Valid sides: {cls.get_all_values()}")


_SIDE_ALIASES = {
    "l": Side.LEFT,
    "lt": Side.LEFT,
    "left": Side.LEFT,
    "r": Side.RIGHT,
    "rt": Side.RIGHT,
    "right": Side.RIGHT,
    "b": Side.BOTH,
    "both": Side.BOTH,
    "bilateral": Side.BOTH,
    "bilat": Side.BOTH,
}


# =============================================================================
# STAGE 2: METHOD ENUMERATION
# =============================================================================


class Method(str, Enum):
    """
    Needling method applied to a single point.

    T = Tonify, R = Reduce (sedate), E = Even (balance).
    """

    TONIFY = "T"
    REDUCE = "R"
    EVEN = "E"

    @classmethod
    def get_all_values(cls) -> list:
        """Return all method codes as a list."""
        return [method.value for method in cls]

    @classmethod
    def from_string(cls, value: str) -> "Method":
        """
        Convert a provider string to a Method.

        Accepts the one-letter codes and the verbs clinicians write
        ("tonifying", "sedate", "even method", ...).

        Raises:
            ValueError: If string doesn't match any method
        """
        normalized = value.strip().lower()
        if normalized.upper() in cls.get_all_values():
            return cls(normalized.upper())
        for prefix, method in _METHOD_PREFIXES:
            if normalized.startswith(prefix):
                return method
        raise ValueError(f"Unknown method: '{value}'. Valid methods: {cls.get_all_values()}")


_METHOD_PREFIXES = (
    ("tonif", Method.TONIFY),
    ("reduc", Method.REDUCE),
    ("sedat", Method.REDUCE),
    ("disperse", Method.REDUCE),
    ("even", Method.EVEN),
    ("balanc", Method.EVEN),
)


# =============================================================================
# STAGE 3: REGION NAME ENUMERATION
# =============================================================================
# Fixed vocabulary of anatomical regions. OTHER is the explicit fallback for
# points that cannot be classified.


class RegionName(str, Enum):
    """Anatomical regions used to organize acupuncture points for display."""

    HEAD = "Head"
    NECK = "Neck"
    FACE = "Face"
    CHEST = "Chest"
    ABDOMEN = "Abdomen"
    BACK = "Back"
    HIP = "Hip"
    SHOULDER = "Shoulder"
    UPPER_ARM = "Upper Arm"
    FOREARM = "Forearm"
    HAND = "Hand"
    THIGH = "Thigh"
    LOWER_LEG = "Lower Leg"
    FOOT = "Foot"
    OTHER = "Other"


# =============================================================================
# STAGE 4: LLM PROVIDER ENUMERATION
# =============================================================================


class LLMProvider(str, Enum):
    """LLM providers that can serve schema-constrained JSON completions."""

    OPENAI = "openai"
    GEMINI = "gemini"

    @classmethod
    def get_all_providers(cls) -> list:
        """Return all provider values as a list."""
        return [provider.value for provider in cls]
