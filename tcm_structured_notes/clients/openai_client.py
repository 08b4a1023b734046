"""
OpenAI Client - OpenAI Structured Outputs Implementation

Concrete LLMClient for OpenAI chat completions using the json_schema
response format, so the model is constrained to the StructuredNote shape.

Why Separate File:
    1. Single Responsibility: one provider per file
    2. Easy to swap: just change import
    3. Provider-specific handling: response_format, refusals

Author: Shubham Singh
Date: December 2025
"""

from typing import Any, Dict

from loguru import logger

from tcm_structured_notes.clients.llm_client import BaseLLMClient
from tcm_structured_notes.core.exceptions import (
    ProviderError,
    ProviderRateLimitError,
    ProviderContentFilteredError,
)


# =============================================================================
# STAGE 1: OPENAI CLIENT IMPLEMENTATION
# =============================================================================


class OpenAIClient(BaseLLMClient):
    """
    OpenAI API client for schema-constrained extraction.

    What it does:
        Sends the system + user prompt to a chat completion with
        response_format={"type": "json_schema", ...} and returns the
        message content.

    Supported Models:
        - gpt-4o (default)
        - gpt-4o-mini
        - any model that supports Structured Outputs

    Example:
        >>> client = OpenAIClient(api_key="...", model_name="gpt-4o")
        >>> content = client.complete(system, user, schema)
    """

    SCHEMA_NAME = "tcm_clinical_notes"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gpt-4o",
        temperature: float = 0.3,
        max_tokens: int = 4000,
        timeout: float = 60.0,
        strict_schema: bool = False,
    ):
        """
        Initialize OpenAI client.

        STAGE 1.1: Initialize base class
        STAGE 1.2: Configure OpenAI SDK

        Args:
            api_key: OpenAI API key
            model_name: Model to use (default: gpt-4o)
            temperature: Sampling temperature
            max_tokens: Maximum response tokens
            timeout: HTTP timeout in seconds
            strict_schema: Request strict schema adherence
        """
        # =====================================================================
        # STAGE 1.1: INITIALIZE BASE CLASS
        # =====================================================================
        super().__init__(
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )
        self._strict_schema = strict_schema

        # =====================================================================
        # STAGE 1.2: CONFIGURE OPENAI SDK
        # =====================================================================
        self._client = None
        self._initialize_client()

        logger.info(f"OpenAIClient initialized | Model: {model_name}")

    def _initialize_client(self) -> None:
        """
        Initialize the OpenAI client.

        SDK-level retries are disabled: a failed extraction is retried by
        the user, not behind their back.
        """
        try:
            from openai import OpenAI

            self._client = OpenAI(api_key=self._api_key, timeout=self._timeout, max_retries=0)

        except ImportError as e:
            raise ProviderError(
                "openai package not installed. Install with: pip install openai",
                provider="openai",
                original_error=e,
            )
        except Exception as e:
            raise ProviderError(
                f"Failed to initialize OpenAI client: {e}", provider="openai", original_error=e
            )

    # =========================================================================
    # STAGE 2: API CALL IMPLEMENTATION
    # =========================================================================

    def _call_api(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        """
        Make the actual OpenAI API call.

        Returns:
            Message content; empty string if the model returned none

        Raises:
            ProviderRateLimitError: If rate limited
            ProviderContentFilteredError: If the model refused or was filtered
            ProviderError: Any other API failure
        """
        from openai import OpenAIError, RateLimitError

        try:
            response = self._client.chat.completions.create(
                model=self._model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": self.SCHEMA_NAME,
                        "strict": self._strict_schema,
                        "schema": json_schema,
                    },
                },
            )

        except RateLimitError as e:
            retry_after = None
            if getattr(e, "response", None) is not None:
                header = e.response.headers.get("retry-after")
                if header and header.isdigit():
                    retry_after = int(header)
            raise ProviderRateLimitError(provider="openai", retry_after=retry_after, original_error=e)

        except OpenAIError as e:
            raise ProviderError(f"OpenAI API error: {e}", provider="openai", original_error=e)

        if not response.choices:
            return ""

        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise ProviderContentFilteredError(provider="openai", reason="content_filter")

        message = choice.message
        refusal = getattr(message, "refusal", None)
        if refusal:
            raise ProviderContentFilteredError(provider="openai", reason=refusal)

        return message.content or ""

    # =========================================================================
    # STAGE 3: PROPERTIES
    # =========================================================================

    @property
    def provider_name(self) -> str:
        """Return provider name."""
        return "openai"
