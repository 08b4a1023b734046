"""
Domain Exceptions for TCM Structured Notes Extraction

This module defines all custom exceptions raised by the extraction pipeline.
Every fatal failure of an extraction surfaces as one of these types so the
caller (the intake UI layer) can show a retry prompt without inspecting
provider-specific errors.

Exception Hierarchy:
    StructuredNotesError (base)
    ├── ConfigurationError            → Invalid configuration
    └── ExtractionError               → Fatal extraction failures
        ├── EmptyInputError           → Blank clinical notes
        ├── ProviderError             → Network / provider failure
        │   ├── ProviderRateLimitError
        │   └── ProviderContentFilteredError
        ├── SchemaViolationError      → Response does not match the schema
        └── MalformedResponseError    → Response missing or not JSON

Non-fatal misses (point classification, ICD lookup) are NOT exceptions;
see ClassificationMiss and ICDResolutionMiss in core.models.

Usage:
    from tcm_structured_notes.core.exceptions import ProviderError

    try:
        note = extractor.extract(text)
    except ProviderError as e:
        logger.error(f"Provider failed: {e.provider}")

Author: Shubham Singh
Date: December 2025
"""

from typing import List, Optional


# =============================================================================
# STAGE 1: BASE EXCEPTION
# =============================================================================
# All domain exceptions inherit from this base class.


class StructuredNotesError(Exception):
    """
    Base exception for all structured notes errors.

    What it does:
        Provides a common base class for all domain-specific exceptions,
        enabling catch-all handling while preserving specific error types.

    Attributes:
        message: Human-readable error description
        context: Dictionary of additional context for debugging
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """
        Initialize with message and optional context.

        Args:
            message: Human-readable error description
            context: Additional debugging context (provider, stage, inputs)
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format message with context for display."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


# =============================================================================
# STAGE 2: CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(StructuredNotesError):
    """
    Error in pipeline configuration.

    When raised:
        - Missing API key for the selected provider
        - Unknown provider name
        - Numeric settings out of range

    Example:
        >>> raise ConfigurationError(
        ...     "API key not configured",
        ...     context={"setting": "OPENAI_API_KEY", "source": "environment"}
        ... )
    """

    pass


# =============================================================================
# STAGE 3: EXTRACTION ERRORS
# =============================================================================
# Fatal errors. Any of these aborts the extraction; no partial note is
# returned and nothing is retried internally.


class ExtractionError(StructuredNotesError):
    """Base exception for fatal extraction failures."""

    pass


class EmptyInputError(ExtractionError):
    """
    Clinical notes text is empty or whitespace-only.

    Raised before any prompt is built, so the provider is never called.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Clinical notes text is empty")


class ProviderError(ExtractionError):
    """
    Error from the LLM provider call.

    What it does:
        Wraps network failures and non-success responses from the
        underlying provider SDK (OpenAI, Gemini) so callers only need
        to handle one type.

    Attributes:
        provider: The LLM provider (openai, gemini)
        original_error: The wrapped original exception
    """

    def __init__(self, message: str, provider: str, original_error: Optional[Exception] = None):
        self.provider = provider
        self.original_error = original_error
        super().__init__(
            message,
            context={
                "provider": provider,
                "original_error": str(original_error) if original_error else None,
            },
        )


class ProviderRateLimitError(ProviderError):
    """
    Provider rate limit or quota exceeded.

    Attributes:
        retry_after: Seconds the provider asked the caller to wait (if known)
    """

    def __init__(
        self,
        provider: str,
        retry_after: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded for {provider}", provider=provider, original_error=original_error
        )
        self.context["retry_after"] = retry_after


class ProviderContentFilteredError(ProviderError):
    """Provider refused to answer because of its safety settings."""

    def __init__(self, provider: str, reason: Optional[str] = None):
        super().__init__(
            f"Content filtered by {provider} safety settings: {reason or 'unknown reason'}",
            provider=provider,
        )
        self.reason = reason


class SchemaViolationError(ExtractionError):
    """
    Provider content is JSON but does not match the StructuredNote schema.

    Attributes:
        errors: Short descriptions of each violation ("loc: message")
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        super().__init__(
            message,
            context={"error_count": len(self.errors)} if self.errors else None,
        )


class MalformedResponseError(ExtractionError):
    """
    Provider response is missing, empty, or not parseable as JSON.

    Attributes:
        content_preview: First characters of the offending content
    """

    def __init__(self, message: str, content: Optional[str] = None):
        self.content_preview = (content or "")[:80]
        super().__init__(
            message,
            context={"content_preview": self.content_preview} if content else None,
        )
