"""
LLM Client Protocol and Base Implementation

This module defines the interface the extractor uses to reach an LLM
provider and a base class with the behavior every provider shares
(error wrapping, call metrics, logging).

Protocol Pattern:
    - LLMClientProtocol defines the interface
    - BaseLLMClient provides common implementation
    - Concrete clients (OpenAIClient, GeminiClient) extend base

Retry Policy:
    None. One extraction makes exactly one provider call; failures
    surface to the caller as ProviderError and the user retries.

Author: Shubham Singh
Date: December 2025
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

from loguru import logger

from tcm_structured_notes.core.exceptions import ProviderError


# =============================================================================
# STAGE 1: LLM CLIENT PROTOCOL
# =============================================================================
# Defines the contract that all LLM clients must follow.


@runtime_checkable
class LLMClientProtocol(Protocol):
    """
    Protocol defining the interface for schema-constrained LLM clients.

    What it does:
        Specifies the single capability the extractor needs: a
        system + user message pair answered with JSON that follows
        a supplied JSON Schema.

    Required Methods:
        complete(system_prompt, user_prompt, json_schema) → raw content

    Optional Properties:
        model_name → Name of the model being used
        provider_name → Name of the provider (openai, gemini)
    """

    def complete(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        """
        Run one schema-constrained completion.

        Args:
            system_prompt: Role/system instruction
            user_prompt: User message (rules + clinical notes)
            json_schema: JSON Schema the response must follow

        Returns:
            Raw response content (expected to be a JSON object string)

        Raises:
            ProviderError: If the provider call fails
        """
        ...

    @property
    def model_name(self) -> str:
        """Name of the model being used."""
        ...

    @property
    def provider_name(self) -> str:
        """Name of the LLM provider."""
        ...


# =============================================================================
# STAGE 2: BASE LLM CLIENT (ABSTRACT)
# =============================================================================


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients with common functionality.

    What it does:
        Wraps the provider-specific _call_api with error translation,
        metrics and logging, so concrete clients only implement the
        SDK call itself.

    What subclasses must implement:
        - _call_api(system_prompt, user_prompt, json_schema): Actual API call
        - provider_name: Property returning provider name

    What base class provides:
        - Translation of unexpected exceptions into ProviderError
        - Call counters and last-call latency
    """

    def __init__(
        self,
        api_key: str,
        model_name: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
        timeout: float = 60.0,
    ):
        """
        Initialize base LLM client.

        Args:
            api_key: API key for the provider
            model_name: Name of model to use
            temperature: Sampling temperature
            max_tokens: Maximum response tokens
            timeout: HTTP timeout in seconds for one call
        """
        # =====================================================================
        # STAGE 2.1: STORE CONFIGURATION
        # =====================================================================
        self._api_key = api_key
        self._model_name = model_name
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout

        # =====================================================================
        # STAGE 2.2: TRACKING STATE
        # =====================================================================
        self._total_calls = 0
        self._failed_calls = 0
        self._last_latency: float = 0.0

    # =========================================================================
    # STAGE 3: PUBLIC API
    # =========================================================================

    def complete(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        """
        Run one completion; no retry.

        Raises:
            ProviderError: On any provider failure (subclasses preserved)
        """
        started = time.monotonic()
        try:
            result = self._call_api(system_prompt, user_prompt, json_schema)

        except ProviderError as e:
            self._failed_calls += 1
            logger.error(f"{self.provider_name} call failed: {e}")
            raise

        except Exception as e:
            self._failed_calls += 1
            logger.error(f"Unexpected error in {self.provider_name} call: {e}")
            raise ProviderError(
                f"{self.provider_name} API error: {e}",
                provider=self.provider_name,
                original_error=e,
            ) from e

        finally:
            self._last_latency = time.monotonic() - started

        self._total_calls += 1
        logger.debug(
            f"{self.provider_name} call complete | "
            f"Model: {self._model_name} | "
            f"Latency: {self._last_latency:.2f}s | "
            f"Chars: {len(result) if result else 0}"
        )
        return result

    # =========================================================================
    # STAGE 4: ABSTRACT METHODS
    # =========================================================================

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        """
        Make the actual API call. Must be implemented by subclasses.

        Returns:
            Raw content from the provider (may be empty; the extractor
            decides what an empty answer means)

        Raises:
            ProviderError: If API call fails
        """
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai', 'gemini')."""
        ...

    # =========================================================================
    # STAGE 5: COMMON IMPLEMENTATION
    # =========================================================================

    @property
    def model_name(self) -> str:
        """Return the model name."""
        return self._model_name

    # =========================================================================
    # STAGE 6: METRICS
    # =========================================================================

    @property
    def total_calls(self) -> int:
        """Total number of successful API calls."""
        return self._total_calls

    @property
    def failed_calls(self) -> int:
        """Number of failed API calls."""
        return self._failed_calls

    @property
    def last_latency(self) -> float:
        """Seconds spent in the most recent call."""
        return self._last_latency

    @property
    def success_rate(self) -> float:
        """Percentage of successful calls."""
        total = self._total_calls + self._failed_calls
        if total == 0:
            return 100.0
        return (self._total_calls / total) * 100
