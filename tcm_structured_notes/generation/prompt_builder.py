"""
Prompt Builder - Structured Note Extraction Prompts

This module constructs the system and user prompts for turning free-text
TCM clinical notes into a structured intake note. Prompts are designed to:
    1. Keep every extracted detail traceable to the notes (no invention)
    2. Produce symptom-level ICD-10 codes in the whitelist's format
    3. Scope needling side/method descriptors to a single point

Why Separate Prompt Builder:
    1. Single Responsibility: prompt construction separate from extraction
    2. Testability: prompts can be tested without LLM calls
    3. Maintainability: centralized prompt templates

Pipeline Position:
    Clinical notes → [PromptBuilder] → LLM client → ResponseValidator → ...
                      ^^^^^^^^^^^^^
                      You are here

Author: Shubham Singh
Date: December 2025
"""

import json
from typing import List, Optional

from tcm_structured_notes.core.constants import TCM_REVIEW_CATEGORIES
from tcm_structured_notes.generation.section_parser import detect_sections


# =============================================================================
# STAGE 1: SYSTEM PROMPT
# =============================================================================

SYSTEM_PROMPT = (
    "You are an expert TCM clinician specializing in organizing unstructured clinical "
    "notes into structured intake documentation. You have deep knowledge of TCM "
    "diagnosis, ICD-10 symptom coding, and proper medical documentation standards. "
    "Return only valid JSON that strictly follows the provided schema."
)


# =============================================================================
# STAGE 2: EXTRACTION RULES
# =============================================================================
# The side/method scope rule is prompt guidance only. The pipeline never
# re-derives methods from the raw text.

EXTRACTION_RULES = """**CRITICAL RULES**

**Chief Complaints:**
1. Each chief complaint MUST include duration in the format "[Problem] for [Duration]"
2. Include at least one and no more than two chief complaints
3. For each chief complaint give the closest ICD-10 SYMPTOM code (not a disease diagnosis)

**ICD-10 Coding:**
1. Codes are always symptom-based (unspecified), never disease diagnoses.
   Example: "R51.9" for "Headache, unspecified", not "G43.9" for "Migraine"
2. Codes are STRINGS and are never null; always include the label
3. Use the full unspecified code, e.g. "M54.50" for "Low back pain, unspecified"
4. Prioritize codes that reflect the symptom's presentation, not the cause

**Acupuncture:**
Extract all acupuncture points as a FLAT list. Do NOT organize by region.
Each point has:
- name: Point code or name (e.g., 'BL-20', 'LV-3', 'Yin Tang', 'ST-36')
- side: null UNLESS explicitly stated for this specific point
- method: null UNLESS explicitly stated for this specific point

Method rules:
- A method descriptor applies ONLY to the point immediately following it
- "tonifying on BL-20, BL-23" → BL-20: method "T", BL-23: method null
- "BL-20 (T), BL-23 (R)" → BL-20: method "T", BL-23: method "R"
- "reducing on LV-3, tonifying on KI-3" → LV-3: method "R", KI-3: method "T"
- "BL-20, BL-23" (no methods stated) → both null

Side rules:
- side: null means the point uses the overall acupunctureTreatmentSide
- Only specify side when it DIFFERS from the overall treatment side
- acupunctureTreatmentSide is 'Left', 'Right' or 'Both'; default to 'Both' if not specified

**Data Integrity:**
1. Never invent information. Only include details explicitly mentioned or clearly implied
2. Place every detail under its correct category (subjective.pmh, hpi, tongue.body, ...)
3. If a TCM review category has no relevant information, set it to null

**Output Requirements:**
1. Return only valid JSON. No commentary, markdown, or text outside the JSON object
2. Include every relevant detail from the clinical notes in its proper field
3. If the treatment is not stated, give the opposite or balancing principle of the tcmDiagnosis
"""


# =============================================================================
# STAGE 3: EXPECTED JSON SHAPE
# =============================================================================

EXPECTED_JSON_EXAMPLE = {
    "note_summary": "Brief summary",
    "chiefComplaints": [
        {
            "text": "[PROBLEM] for [DURATION (e.g., 2 weeks)]",
            "icdCode": "M54.50",
            "icdLabel": "Low back pain, unspecified",
        }
    ],
    "hpi": "History of chief complaint details",
    "subjective": {
        "pmh": "Past medical history: ongoing issues, surgeries, allergies, medications, supplements, herbs",
        "fh": "Family history of blood relatives",
        "sh": "Social history: relationship, children, occupation, smoking, alcohol, caffeine, exercise, diet",
        "es": "Emotional status: predominant emotions and stress level",
    },
    "tcmReview": {"sleep": "Difficulty falling asleep, wakes at 3am"},
    "tongue": {"body": "Pale, swollen, scalloped", "coating": "Thin white"},
    "pulse": {"text": "Deep, weak"},
    "diagnosis": {
        "tcmDiagnosis": "Kidney Yang Deficiency",
        "icdCodes": [{"code": "M54.50", "label": "Low back pain, unspecified"}],
    },
    "treatment": "Tonify Kidney Yang",
    "acupunctureTreatmentSide": "Both",
    "acupuncturePoints": [
        {"name": "BL-20", "side": None, "method": "T"},
        {"name": "BL-23", "side": None, "method": None},
        {"name": "LV-3", "side": "Left", "method": "R"},
    ],
}


# =============================================================================
# STAGE 4: PROMPT BUILDER CLASS
# =============================================================================


class PromptBuilder:
    """
    Constructs prompts for structured note extraction.

    What it does:
        Takes raw clinical notes, produces the system prompt and a user
        prompt carrying the rules, the notes, the expected JSON shape and
        the TCM review category descriptions.

    Why it exists:
        1. Centralizes prompt logic for maintainability
        2. Keeps the side/method scope rule in one place
        3. Enables testing prompts without making LLM calls

    Example:
        >>> builder = PromptBuilder()
        >>> system = builder.build_system_prompt()
        >>> user = builder.build_user_prompt(notes)
    """

    def __init__(self, include_section_hint: bool = True):
        """
        Args:
            include_section_hint: List detected section headers in the prompt
        """
        self._include_section_hint = include_section_hint

    def build_system_prompt(self) -> str:
        """Return the system (role) prompt."""
        return SYSTEM_PROMPT

    def build_user_prompt(self, clinical_notes: str, sections: Optional[List[str]] = None) -> str:
        """
        Build the user prompt for one extraction.

        STAGE 4.1: Rules
        STAGE 4.2: Section hint (when headers were detected)
        STAGE 4.3: Clinical notes
        STAGE 4.4: Expected JSON shape and category descriptions

        Args:
            clinical_notes: Free-text notes as typed by the practitioner
            sections: Pre-detected section labels (detected here if None)

        Returns:
            Complete user prompt
        """
        # =====================================================================
        # STAGE 4.1: RULES
        # =====================================================================
        parts = [
            "You are a TCM clinician. Organize the following unstructured clinical notes "
            "into a structured intake note according to the schema below.",
            EXTRACTION_RULES,
        ]

        # =====================================================================
        # STAGE 4.2: SECTION HINT
        # =====================================================================
        if self._include_section_hint:
            if sections is None:
                sections = detect_sections(clinical_notes)
            if sections:
                parts.append(
                    "**Sections present in the notes:** "
                    + ", ".join(sections)
                    + "\nUse them to place details, but still read the whole text."
                )

        # =====================================================================
        # STAGE 4.3: CLINICAL NOTES
        # =====================================================================
        parts.append(f"**Clinical Notes:**\n{clinical_notes.strip()}")

        # =====================================================================
        # STAGE 4.4: EXPECTED SHAPE
        # =====================================================================
        parts.append(
            "**Expected JSON Structure:**\n" + json.dumps(EXPECTED_JSON_EXAMPLE, indent=2)
        )
        parts.append("**TCM Review Categories (lowercase keys):**\n" + self._format_categories())

        return "\n\n".join(parts)

    def _format_categories(self) -> str:
        return "\n".join(f"- {name}: {desc}" for name, desc in TCM_REVIEW_CATEGORIES.items())
