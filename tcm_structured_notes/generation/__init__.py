"""
Generation Layer - Prompt Construction and Structured Extraction

This layer turns free-text clinical notes into a StructuredNote using a
single schema-constrained LLM call.

Submodules:
    note_extractor.py → Main extractor class
    prompt_builder.py → Prompt construction and templates
    schema.py         → JSON Schema sent to the provider
    section_parser.py → Section header detection and stress level parsing

Dependency Rule:
    This layer depends on: core, clients (protocol), repository,
                           acupuncture, validation
    This layer is used by: pipeline (facade)

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.generation.note_extractor import NoteExtractor
from tcm_structured_notes.generation.prompt_builder import PromptBuilder
from tcm_structured_notes.generation.schema import build_note_schema
from tcm_structured_notes.generation.section_parser import (
    detect_sections,
    parse_sections,
    extract_stress_level,
)

__all__ = [
    "NoteExtractor",
    "PromptBuilder",
    "build_note_schema",
    "detect_sections",
    "parse_sections",
    "extract_stress_level",
]
