"""
Configuration for the TCM Structured Notes Pipeline

This module defines the configuration dataclass used to build the LLM client
and the extractor. Configuration is:
    1. Loaded from environment variables (with .env support)
    2. Validated at startup to fail fast on misconfiguration
    3. Passed explicitly into the pipeline (no module-level client)

Configuration Hierarchy:
    ExtractionConfiguration
    ├── Provider Settings (provider, API keys, model names)
    └── Request Settings (temperature, max tokens, timeout, strict schema)

Usage:
    from tcm_structured_notes.core.config import ExtractionConfiguration

    # Load from environment
    config = ExtractionConfiguration.from_environment()

    # Or configure programmatically
    config = ExtractionConfiguration(openai_api_key="your-key")

Author: Shubham Singh
Date: December 2025
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tcm_structured_notes.core.enums import LLMProvider
from tcm_structured_notes.core.exceptions import ConfigurationError


# =============================================================================
# STAGE 1: DEFAULT VALUES
# =============================================================================


class ConfigDefaults:
    """Default configuration values."""

    # -------------------------------------------------------------------------
    # 1.1 Provider Defaults
    # -------------------------------------------------------------------------
    DEFAULT_PROVIDER = LLMProvider.OPENAI
    DEFAULT_OPENAI_MODEL = "gpt-4o"
    DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

    # -------------------------------------------------------------------------
    # 1.2 Request Defaults
    # -------------------------------------------------------------------------
    DEFAULT_TEMPERATURE = 0.3
    DEFAULT_MAX_TOKENS = 4000
    DEFAULT_TIMEOUT = 60.0  # seconds, handed to the provider SDK
    DEFAULT_STRICT_SCHEMA = False


# =============================================================================
# STAGE 2: CONFIGURATION DATACLASS
# =============================================================================


@dataclass
class ExtractionConfiguration:
    """
    Configuration for the structured notes extraction pipeline.

    What it does:
        Encapsulates the provider selection and request parameters needed
        to create an LLM client for the extractor.

    When to use:
        - At pipeline initialization
        - When creating test fixtures with custom config

    Example:
        >>> config = ExtractionConfiguration.from_environment()
        >>> config.llm_provider
        'openai'
    """

    # -------------------------------------------------------------------------
    # 2.1 Provider Configuration
    # -------------------------------------------------------------------------
    llm_provider: str = ConfigDefaults.DEFAULT_PROVIDER.value
    """Which LLM provider to use: 'openai' or 'gemini'."""

    openai_api_key: Optional[str] = None
    """OpenAI API key. Required if using OpenAI provider."""

    openai_model: str = ConfigDefaults.DEFAULT_OPENAI_MODEL
    """OpenAI model name; must support json_schema response format."""

    gemini_api_key: Optional[str] = None
    """Google Gemini API key. Required if using Gemini provider."""

    gemini_model: str = ConfigDefaults.DEFAULT_GEMINI_MODEL
    """Gemini model name (e.g., 'gemini-1.5-flash', 'gemini-1.5-pro')."""

    # -------------------------------------------------------------------------
    # 2.2 Request Configuration
    # -------------------------------------------------------------------------
    temperature: float = ConfigDefaults.DEFAULT_TEMPERATURE
    """Sampling temperature. Kept low: this is extraction, not writing."""

    max_tokens: int = ConfigDefaults.DEFAULT_MAX_TOKENS
    """Maximum tokens in the provider response."""

    request_timeout: float = ConfigDefaults.DEFAULT_TIMEOUT
    """HTTP timeout in seconds for the provider call."""

    strict_schema: bool = ConfigDefaults.DEFAULT_STRICT_SCHEMA
    """Ask the provider for strict schema adherence (OpenAI 'strict')."""

    # -------------------------------------------------------------------------
    # 2.3 Validation Methods
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.llm_provider not in LLMProvider.get_all_providers():
            raise ConfigurationError(
                f"Unsupported LLM provider: {self.llm_provider}",
                context={"supported": LLMProvider.get_all_providers()},
            )

        if self.llm_provider == LLMProvider.OPENAI.value and not self.openai_api_key:
            raise ConfigurationError(
                "OpenAI API key required when using OpenAI provider",
                context={"setting": "OPENAI_API_KEY", "provider": "openai"},
            )

        if self.llm_provider == LLMProvider.GEMINI.value and not self.gemini_api_key:
            raise ConfigurationError(
                "Gemini API key required when using Gemini provider",
                context={"setting": "GEMINI_API_KEY", "provider": "gemini"},
            )

        if not (0.0 <= self.temperature <= 2.0):
            raise ConfigurationError(
                f"Temperature must be 0-2, got {self.temperature}",
                context={"temperature": self.temperature},
            )

        if self.max_tokens <= 0:
            raise ConfigurationError(
                f"max_tokens must be positive, got {self.max_tokens}",
                context={"max_tokens": self.max_tokens},
            )

        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"Request timeout must be positive, got {self.request_timeout}",
                context={"request_timeout": self.request_timeout},
            )

    # -------------------------------------------------------------------------
    # 2.4 Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_environment(
        cls, env_file: Optional[str] = None, validate_on_load: bool = True
    ) -> "ExtractionConfiguration":
        """
        Load configuration from environment variables.

        STAGE 1: Load .env file (if specified or found)
        STAGE 2: Read environment variables
        STAGE 3: Convert to typed configuration
        STAGE 4: Validate configuration (optional)

        Args:
            env_file: Path to .env file (optional, auto-detected if not provided)
            validate_on_load: Whether to validate after loading

        Returns:
            Configured ExtractionConfiguration instance

        Raises:
            ConfigurationError: If required settings are missing or invalid
        """
        # STAGE 1: Load .env file
        if env_file:
            load_dotenv(env_file)
        else:
            possible_locations = [
                Path.cwd() / ".env",
                Path(__file__).parent.parent / ".env",
            ]
            for location in possible_locations:
                if location.exists():
                    load_dotenv(location)
                    break

        # STAGE 2: Read environment variables
        openai_key = os.getenv("OPENAI_API_KEY")
        gemini_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

        llm_provider = os.getenv("LLM_PROVIDER", ConfigDefaults.DEFAULT_PROVIDER.value).lower()
        if llm_provider == LLMProvider.OPENAI.value and not openai_key and gemini_key:
            llm_provider = LLMProvider.GEMINI.value

        # STAGE 3: Create configuration
        try:
            config = cls(
                llm_provider=llm_provider,
                openai_api_key=openai_key,
                openai_model=os.getenv("OPENAI_MODEL", ConfigDefaults.DEFAULT_OPENAI_MODEL),
                gemini_api_key=gemini_key,
                gemini_model=os.getenv("GEMINI_MODEL", ConfigDefaults.DEFAULT_GEMINI_MODEL),
                temperature=float(
                    os.getenv("LLM_TEMPERATURE", ConfigDefaults.DEFAULT_TEMPERATURE)
                ),
                max_tokens=int(os.getenv("LLM_MAX_TOKENS", ConfigDefaults.DEFAULT_MAX_TOKENS)),
                request_timeout=float(os.getenv("LLM_TIMEOUT", ConfigDefaults.DEFAULT_TIMEOUT)),
                strict_schema=os.getenv("STRICT_SCHEMA", "false").lower() == "true",
            )
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid numeric setting in environment: {e}", context={"source": "environment"}
            ) from e

        # STAGE 4: Validate
        if validate_on_load:
            config.validate()

        return config

    @property
    def model_name(self) -> str:
        """Model name for the selected provider."""
        if self.llm_provider == LLMProvider.GEMINI.value:
            return self.gemini_model
        return self.openai_model

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (for logging/debugging)."""
        return {
            "llm_provider": self.llm_provider,
            "openai_model": self.openai_model,
            "gemini_model": self.gemini_model,
            "openai_api_key": "***" if self.openai_api_key else None,
            "gemini_api_key": "***" if self.gemini_api_key else None,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "request_timeout": self.request_timeout,
            "strict_schema": self.strict_schema,
        }
