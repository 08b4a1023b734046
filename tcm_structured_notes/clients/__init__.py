"""
Clients Layer - LLM API Client Abstractions

This layer provides clean abstractions over LLM providers (OpenAI, Gemini),
so the extractor depends only on LLMClientProtocol and tests can inject a
stub client.

Submodules:
    llm_client.py    → Protocol and base implementation
    openai_client.py → OpenAI Structured Outputs implementation
    gemini_client.py → Google Gemini JSON mode implementation + schema conversion

Author: Shubham Singh
Date: December 2025
"""

from tcm_structured_notes.clients.llm_client import (
    LLMClientProtocol,
    BaseLLMClient,
)
from tcm_structured_notes.clients.openai_client import OpenAIClient
from tcm_structured_notes.clients.gemini_client import GeminiClient, to_gemini_schema

__all__ = [
    "LLMClientProtocol",
    "BaseLLMClient",
    "OpenAIClient",
    "GeminiClient",
    "to_gemini_schema",
]
