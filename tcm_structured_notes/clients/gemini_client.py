"""
Gemini Client - Google Gemini JSON Mode Implementation

Concrete LLMClient for Google's Gemini API. Gemini is asked for
application/json output constrained by a response_schema, and the
validation layer still enforces the full schema on the result.

Schema Conversion:
    Gemini accepts only an OpenAPI subset. Union types such as
    ["string", "null"] become {"type": "STRING", "nullable": true},
    null enum members are dropped and additionalProperties is removed.

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
# STAGE 1: SCHEMA CONVERSION
# =============================================================================

_PASSTHROUGH_KEYS = ("description",)


def to_gemini_schema(json_schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a JSON Schema node into Gemini's response_schema dialect.

    Example:
        >>> to_gemini_schema({"type": ["string", "null"], "enum": ["T", None]})
        {'type': 'STRING', 'nullable': True, 'format': 'enum', 'enum': ['T']}
    """
    node: Dict[str, Any] = {}

    json_type = json_schema.get("type")
    if isinstance(json_type, list):
        concrete = [t for t in json_type if t != "null"]
        node["type"] = concrete[0].upper()
        if len(concrete) != len(json_type):
            node["nullable"] = True
    elif json_type:
        node["type"] = json_type.upper()

    if "enum" in json_schema:
        members = [m for m in json_schema["enum"] if m is not None]
        if None in json_schema["enum"]:
            node["nullable"] = True
        node["format"] = "enum"
        node["enum"] = members

    for key in _PASSTHROUGH_KEYS:
        if key in json_schema:
            node[key] = json_schema[key]

    if "properties" in json_schema:
        node["properties"] = {
            name: to_gemini_schema(child) for name, child in json_schema["properties"].items()
        }
        if json_schema.get("required"):
            node["required"] = list(json_schema["required"])

    if "items" in json_schema:
        node["items"] = to_gemini_schema(json_schema["items"])

    return node


# =============================================================================
# STAGE 2: GEMINI CLIENT IMPLEMENTATION
# =============================================================================


class GeminiClient(BaseLLMClient):
    """
    Google Gemini API client for JSON extraction.

    Supported Models:
        - gemini-1.5-flash (fast, cost-effective)
        - gemini-1.5-pro (higher quality)

    Example:
        >>> client = GeminiClient(api_key="...", model_name="gemini-1.5-flash")
        >>> content = client.complete(system, user, schema)
    """

    # Permissive for clinical content (symptoms, anatomy, gynecology)
    SAFETY_SETTINGS = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_NONE"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_NONE"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"},
    ]

    # Lowercased error-text markers; the SDK surfaces several exception types
    RATE_LIMIT_MARKERS = ("429", "quota", "rate limit", "resource exhausted", "resourceexhausted")
    BLOCKED_MARKERS = ("blocked", "safety")

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.3,
        max_tokens: int = 4000,
        timeout: float = 60.0,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Google API key (Gemini)
            model_name: Model to use (default: gemini-1.5-flash)
            temperature: Sampling temperature
            max_tokens: Maximum response tokens
            timeout: HTTP timeout in seconds
        """
        super().__init__(
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )

        self._genai = None
        self._initialize_client()

        logger.info(f"GeminiClient initialized | Model: {model_name}")

    def _initialize_client(self) -> None:
        """Configure the google-generativeai SDK."""
        try:
            import google.generativeai as genai

            genai.configure(api_key=self._api_key)
            self._genai = genai

        except ImportError as e:
            raise ProviderError(
                "google-generativeai package not installed. "
                "Install with: pip install google-generativeai",
                provider="gemini",
                original_error=e,
            )
        except Exception as e:
            raise ProviderError(
                f"Failed to initialize Gemini client: {e}", provider="gemini", original_error=e
            )

    # =========================================================================
    # STAGE 3: API CALL IMPLEMENTATION
    # =========================================================================

    def _call_api(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        """
        Make the actual Gemini API call.

        Raises:
            ProviderRateLimitError: If rate limited
            ProviderContentFilteredError: If content was blocked
            ProviderError: Any other API failure
        """
        generation_config = {
            "temperature": self._temperature,
            "max_output_tokens": self._max_tokens,
            "response_mime_type": "application/json",
        }
        if json_schema:
            generation_config["response_schema"] = to_gemini_schema(json_schema)
        else:
            logger.debug("No schema supplied; Gemini runs in plain JSON mode")

        try:
            model = self._genai.GenerativeModel(
                model_name=self._model_name,
                system_instruction=system_prompt,
                safety_settings=self.SAFETY_SETTINGS,
                generation_config=generation_config,
            )
            response = model.generate_content(
                user_prompt, request_options={"timeout": self._timeout}
            )

            if response.prompt_feedback and response.prompt_feedback.block_reason:
                raise ProviderContentFilteredError(
                    provider="gemini", reason=str(response.prompt_feedback.block_reason)
                )

            if response.candidates:
                candidate = response.candidates[0]
                if candidate.content and candidate.content.parts:
                    return "".join(part.text for part in candidate.content.parts)

            return ""

        except ProviderError:
            raise

        except Exception as e:
            error_str = str(e).lower()

            if any(marker in error_str for marker in self.RATE_LIMIT_MARKERS):
                raise ProviderRateLimitError(provider="gemini", original_error=e)

            if any(marker in error_str for marker in self.BLOCKED_MARKERS):
                raise ProviderContentFilteredError(provider="gemini", reason=str(e))

            raise ProviderError(f"Gemini API error: {e}", provider="gemini", original_error=e)

    # =========================================================================
    # STAGE 4: PROPERTIES
    # =========================================================================

    @property
    def provider_name(self) -> str:
        """Return provider name."""
        return "gemini"
