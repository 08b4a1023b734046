"""
TCM Structured Notes Pipeline - Main Facade

This is the PUBLIC API entry point for the extraction system. It wires
configuration, the LLM client and the extractor into a simple,
easy-to-use interface.

Architecture Diagram:
    ┌─────────────────────────────────────────────────────────────────────┐
    │                      StructuredNotesPipeline                        │
    │                          (This Facade)                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   ┌───────────┐    ┌───────────┐    ┌───────────┐    ┌───────────┐  │
    │   │  Prompt   │ →  │ LLM Client│ →  │ Validation│ →  │ ICD / Acu │  │
    │   └───────────┘    └───────────┘    └───────────┘    └───────────┘  │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

Why Single Entry Point:
    1. Simple API: callers pass text and get a StructuredNote
    2. Encapsulation: client construction hidden behind the facade
    3. Configuration: one place to choose provider and model
    4. Testability: the client is injected, so tests pass a stub

Usage:
    from tcm_structured_notes import StructuredNotesPipeline

    pipeline = StructuredNotesPipeline.from_environment()
    note = pipeline.extract(clinical_notes)

Author: Shubham Singh
Date: December 2025
"""

from typing import Optional, Tuple

from loguru import logger

from tcm_structured_notes.clients import GeminiClient, LLMClientProtocol, OpenAIClient
from tcm_structured_notes.core.config import ExtractionConfiguration
from tcm_structured_notes.core.enums import LLMProvider
from tcm_structured_notes.core.exceptions import ConfigurationError
from tcm_structured_notes.core.models import ExtractionDiagnostics, StructuredNote
from tcm_structured_notes.generation import NoteExtractor


# =============================================================================
# STAGE 1: PIPELINE CLASS
# =============================================================================


class StructuredNotesPipeline:
    """
    Facade over configuration, client and extractor.

    What it does:
        Builds (or accepts) an LLM client and exposes one-call extraction
        of structured notes from clinical text.

    Why it exists:
        1. Simple API: one class to learn, one method to call
        2. Dependency injection: any LLMClientProtocol can be supplied
        3. No module-level client; each pipeline owns its own

    Example:
        >>> pipeline = StructuredNotesPipeline(config, client=stub_client)
        >>> note = pipeline.extract("CC\\nLow back pain for 10 months ...")
    """

    def __init__(
        self,
        config: Optional[ExtractionConfiguration] = None,
        client: Optional[LLMClientProtocol] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Extraction configuration (default: all defaults)
            client: Injected LLM client; built from config when omitted

        Raises:
            ConfigurationError: If no client is given and config is invalid
        """
        # =====================================================================
        # STAGE 1.1: STORE CONFIGURATION
        # =====================================================================
        self._config = config or ExtractionConfiguration()

        # =====================================================================
        # STAGE 1.2: INITIALIZE LLM CLIENT
        # =====================================================================
        if client is not None:
            self._client = client
        else:
            self._config.validate()
            self._client = self._create_llm_client(self._config)

        # =====================================================================
        # STAGE 1.3: INITIALIZE EXTRACTOR
        # =====================================================================
        self._extractor = NoteExtractor(llm_client=self._client)

        logger.info(
            f"StructuredNotesPipeline initialized | "
            f"Provider: {getattr(self._client, 'provider_name', 'unknown')} | "
            f"Model: {getattr(self._client, 'model_name', 'unknown')}"
        )

    # =========================================================================
    # STAGE 2: MAIN EXTRACTION API
    # =========================================================================

    def extract(self, clinical_notes: str) -> StructuredNote:
        """
        Extract a structured note from clinical notes.

        Raises:
            EmptyInputError, ProviderError, SchemaViolationError,
            MalformedResponseError
        """
        return self._extractor.extract(clinical_notes)

    def extract_with_diagnostics(
        self, clinical_notes: str
    ) -> Tuple[StructuredNote, ExtractionDiagnostics]:
        """Extract a note and return it with its ExtractionDiagnostics."""
        return self._extractor.extract_with_diagnostics(clinical_notes)

    # =========================================================================
    # STAGE 3: FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_environment(cls, env_file: Optional[str] = None) -> "StructuredNotesPipeline":
        """
        Create pipeline from environment configuration.

        This is the recommended way to create a pipeline. It:
            1. Loads configuration from .env file
            2. Validates required settings
            3. Builds the provider client

        Args:
            env_file: Path to .env file (optional)

        Raises:
            ConfigurationError: If required settings missing
        """
        config = ExtractionConfiguration.from_environment(env_file=env_file, validate_on_load=True)
        return cls(config)

    # =========================================================================
    # STAGE 4: PRIVATE HELPERS
    # =========================================================================

    def _create_llm_client(self, config: ExtractionConfiguration) -> LLMClientProtocol:
        """Create LLM client from configuration."""
        if config.llm_provider == LLMProvider.OPENAI.value:
            return OpenAIClient(
                api_key=config.openai_api_key,
                model_name=config.openai_model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.request_timeout,
                strict_schema=config.strict_schema,
            )
        if config.llm_provider == LLMProvider.GEMINI.value:
            return GeminiClient(
                api_key=config.gemini_api_key,
                model_name=config.gemini_model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.request_timeout,
            )
        raise ConfigurationError(
            f"Unsupported LLM provider: {config.llm_provider}",
            context={"supported": LLMProvider.get_all_providers()},
        )

    # =========================================================================
    # STAGE 5: PROPERTIES
    # =========================================================================

    @property
    def config(self) -> ExtractionConfiguration:
        """Current configuration."""
        return self._config

    @property
    def client(self) -> LLMClientProtocol:
        """The LLM client in use."""
        return self._client

    @property
    def extractor(self) -> NoteExtractor:
        return self._extractor


# =============================================================================
# STAGE 6: MODULE-LEVEL CONVENIENCE
# =============================================================================


def extract_structured_note(
    clinical_notes: str, client: Optional[LLMClientProtocol] = None
) -> StructuredNote:
    """
    One-shot extraction.

    Args:
        clinical_notes: Free-text clinical notes
        client: LLM client to use; loaded from the environment when omitted

    Returns:
        StructuredNote

    Example:
        >>> note = extract_structured_note(text, client=my_client)
    """
    if client is None:
        pipeline = StructuredNotesPipeline.from_environment()
    else:
        pipeline = StructuredNotesPipeline(client=client)
    return pipeline.extract(clinical_notes)


# =============================================================================
# STAGE 7: SMOKE TEST
# =============================================================================

if __name__ == "__main__":
    import sys

    from tcm_structured_notes.acupuncture import render_acupuncture_text

    logger.remove()
    logger.add(sys.stderr, level="INFO")

    SAMPLE_NOTES = """CC
Lower back pain for 10 months

ES
Worried about work, stress 7/10

Tongue
Pale, swollen, thin white coat

Pulse
Deep, weak in kidney position

Points
Right side GB-30, BL-23, tonifying on BL-25
"""

    print("\n--- TCM Structured Notes Smoke Test ---\n")

    try:
        print("1. Initializing pipeline from environment...")
        pipeline = StructuredNotesPipeline.from_environment()
        print(f"   [OK] Provider: {pipeline.config.llm_provider} | Model: {pipeline.config.model_name}")

        print("\n2. Extracting sample note...")
        note, diagnostics = pipeline.extract_with_diagnostics(SAMPLE_NOTES)
        for complaint in note.chief_complaints:
            print(f"   - {complaint.text} [{complaint.icd_code}]")
        print(f"   - Stress level: {note.subjective.stress_level}")
        print(f"   - Misses: {diagnostics.miss_count} | Warnings: {len(diagnostics.warnings)}")

        print("\n3. Acupuncture panel:\n")
        print(render_acupuncture_text(note))

        print("\n[OK] SMOKE TEST PASSED")

    except Exception as e:
        print(f"\n[FAIL] SMOKE TEST FAILED: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
