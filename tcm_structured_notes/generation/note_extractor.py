"""
Note Extractor - Clinical Notes to StructuredNote with One LLM Call

This module provides the core extraction: free-text TCM clinical notes in,
validated StructuredNote out, with deterministic post-processing.

Why Separate from Prompt Builder:
    1. Single Responsibility: this class handles the LLM interaction
    2. Dependency injection: the LLM client is injected, never global
    3. Error handling: fatal errors propagate untouched, misses are recorded
    4. Post-processing: ICD backfill, stress level, regions, checks

Failure Semantics:
    - EmptyInputError, ProviderError, SchemaViolationError and
      MalformedResponseError abort the extraction. No partial note.
    - Point classification and ICD lookup misses never abort.
    - No internal retry; the caller decides whether to try again.

Pipeline Position:
    Clinical notes → PromptBuilder → [NoteExtractor] → StructuredNote
                                      ^^^^^^^^^^^^^^
                                      You are here

Author: Shubham Singh
Date: December 2025
"""

import time
from typing import List, Optional, Tuple

from loguru import logger

from tcm_structured_notes.acupuncture.region_organizer import organize_by_region
from tcm_structured_notes.clients.llm_client import LLMClientProtocol
from tcm_structured_notes.core.exceptions import EmptyInputError, ExtractionError, ProviderError
from tcm_structured_notes.core.models import (
    ClassificationMiss,
    ExtractionDiagnostics,
    ICDResolutionMiss,
    StructuredNote,
)
from tcm_structured_notes.generation.prompt_builder import PromptBuilder
from tcm_structured_notes.generation.schema import build_note_schema
from tcm_structured_notes.generation.section_parser import extract_stress_level, parse_sections
from tcm_structured_notes.repository.icd10_resolver import backfill_chief_complaints
from tcm_structured_notes.validation.note_checks import NoteChecks
from tcm_structured_notes.validation.response_validator import ResponseValidator


# =============================================================================
# STAGE 1: NOTE EXTRACTOR CLASS
# =============================================================================


class NoteExtractor:
    """
    Extracts a StructuredNote from clinical notes using an LLM client.

    What it does:
        Builds the prompts, makes exactly one schema-constrained call,
        validates the response and derives everything the provider
        should not be trusted with (ICD backfill, region grouping).

    When to use:
        - From the StructuredNotesPipeline facade
        - Directly in tests with a stub client

    How it works:
        STAGE 2.1: Reject empty input
        STAGE 2.2: Build prompts
        STAGE 2.3: Call the LLM client (once)
        STAGE 2.4: Validate the response
        STAGE 2.5: Post-process
        STAGE 2.6: Run note checks

    Example:
        >>> extractor = NoteExtractor(client)
        >>> note = extractor.extract(clinical_notes)
        >>> [r.region.value for r in note.acupuncture]
        ['Back', 'Hip']
    """

    def __init__(
        self,
        llm_client: LLMClientProtocol,
        prompt_builder: Optional[PromptBuilder] = None,
        validator: Optional[ResponseValidator] = None,
    ):
        """
        Initialize the extractor.

        Args:
            llm_client: Client implementing LLMClientProtocol
            prompt_builder: Custom prompt builder (default: PromptBuilder())
            validator: Custom response validator (default: ResponseValidator())
        """
        self._llm_client = llm_client
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._validator = validator or ResponseValidator()

        self._extraction_count = 0
        self._failure_count = 0

        logger.debug(f"NoteExtractor initialized | Provider: {self._get_provider_name()}")

    # =========================================================================
    # STAGE 2: MAIN EXTRACTION API
    # =========================================================================

    def extract(self, clinical_notes: str) -> StructuredNote:
        """
        Extract a structured note.

        Args:
            clinical_notes: Free-text notes as typed by the practitioner

        Returns:
            StructuredNote with ICD codes backfilled and regions derived

        Raises:
            EmptyInputError: Blank input (provider not called)
            ProviderError: Provider call failed
            MalformedResponseError: Response missing or not JSON
            SchemaViolationError: Response does not match the schema
        """
        note, _ = self.extract_with_diagnostics(clinical_notes)
        return note

    def extract_with_diagnostics(
        self, clinical_notes: str
    ) -> Tuple[StructuredNote, ExtractionDiagnostics]:
        """
        Extract a structured note and report non-fatal findings.

        Returns:
            Tuple of (note, diagnostics)

        Raises:
            Same as extract()
        """
        # =====================================================================
        # STAGE 2.1: REJECT EMPTY INPUT
        # =====================================================================
        if clinical_notes is None or not clinical_notes.strip():
            logger.error("Extraction rejected: clinical notes are empty")
            raise EmptyInputError()

        started = time.monotonic()
        sections = parse_sections(clinical_notes)
        diagnostics = ExtractionDiagnostics(
            detected_sections=list(sections),
            provider=self._get_provider_name(),
            model=self._get_model_name(),
        )

        logger.info(
            f"Extracting structured note | "
            f"Chars: {len(clinical_notes)} | "
            f"Sections: {len(sections)} | "
            f"Provider: {diagnostics.provider}"
        )

        try:
            # =================================================================
            # STAGE 2.2: BUILD PROMPTS
            # =================================================================
            system_prompt = self._prompt_builder.build_system_prompt()
            user_prompt = self._prompt_builder.build_user_prompt(
                clinical_notes, sections=list(sections)
            )

            # =================================================================
            # STAGE 2.3: CALL LLM (ONCE)
            # =================================================================
            content = self._call_client(system_prompt, user_prompt)

            # =================================================================
            # STAGE 2.4: VALIDATE RESPONSE
            # =================================================================
            note = self._validator.parse(content)

        except ExtractionError as e:
            self._failure_count += 1
            logger.error(f"Extraction failed | {type(e).__name__}: {e}")
            raise

        # =====================================================================
        # STAGE 2.5: POST-PROCESS
        # =====================================================================
        note = self._post_process(
            note, sections, diagnostics.classification_misses, diagnostics.icd_misses
        )

        # =====================================================================
        # STAGE 2.6: NOTE CHECKS
        # =====================================================================
        diagnostics.warnings = NoteChecks.run_all(note)
        for warning in diagnostics.warnings:
            logger.warning(warning)

        diagnostics.elapsed_seconds = time.monotonic() - started
        self._extraction_count += 1

        logger.info(
            f"Extraction complete | "
            f"Complaints: {len(note.chief_complaints)} | "
            f"Points: {len(note.acupuncture_points)} | "
            f"Regions: {len(note.acupuncture)} | "
            f"Misses: {diagnostics.miss_count} | "
            f"Time: {diagnostics.elapsed_seconds:.2f}s"
        )

        return note, diagnostics

    def _call_client(self, system_prompt: str, user_prompt: str) -> str:
        """
        Make the single provider call.

        Injected clients that do not extend BaseLLMClient may raise SDK or
        network exceptions directly; those are wrapped in ProviderError.
        """
        try:
            return self._llm_client.complete(system_prompt, user_prompt, build_note_schema())
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                f"LLM client failed: {e}",
                provider=self._get_provider_name(),
                original_error=e,
            ) from e

    # =========================================================================
    # STAGE 3: POST-PROCESSING
    # =========================================================================

    def _post_process(
        self,
        note: StructuredNote,
        sections: dict,
        classification_misses: List[ClassificationMiss],
        icd_misses: List[ICDResolutionMiss],
    ) -> StructuredNote:
        """
        Apply deterministic corrections to a validated note.

        -----------------------------------------------------------------
        3.1: ICD backfill (whitelist only, never fabricated)
        3.2: Stress level from the ES text when the model left it out
        3.3: Region grouping derived from the flat point list
        -----------------------------------------------------------------
        """
        complaints = backfill_chief_complaints(note.chief_complaints, icd_misses)

        subjective = note.subjective
        if not subjective.stress_level:
            stress = extract_stress_level(subjective.es) or extract_stress_level(
                sections.get("ES", "")
            )
            if stress:
                logger.debug(f"Backfilled stress level {stress} from ES section")
                subjective = subjective.model_copy(update={"stress_level": stress})

        regions = organize_by_region(note.acupuncture_points, classification_misses)

        return note.model_copy(
            update={
                "chief_complaints": complaints,
                "subjective": subjective,
                "acupuncture": regions,
            }
        )

    # =========================================================================
    # STAGE 4: UTILITIES
    # =========================================================================

    def _get_model_name(self) -> str:
        """Get model name from LLM client if available."""
        return getattr(self._llm_client, "model_name", "unknown")

    def _get_provider_name(self) -> str:
        """Get provider name from LLM client if available."""
        return getattr(self._llm_client, "provider_name", "unknown")

    # =========================================================================
    # STAGE 5: STATISTICS
    # =========================================================================

    @property
    def extraction_count(self) -> int:
        """Number of successful extractions."""
        return self._extraction_count

    @property
    def failure_count(self) -> int:
        """Number of extractions that raised a fatal error."""
        return self._failure_count
