"""
Tests for configuration loading and the pipeline facade.
"""

import os

import pytest

from tcm_structured_notes import StructuredNotesPipeline, extract_structured_note
from tcm_structured_notes.core.config import ExtractionConfiguration
from tcm_structured_notes.core.enums import RegionName
from tcm_structured_notes.core.exceptions import ConfigurationError

from conftest import StubLLMClient


_ENV_VARS = [
    "LLM_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "LLM_TIMEOUT",
    "STRICT_SCHEMA",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear provider settings and return an empty .env path."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    yield env_file
    # load_dotenv writes straight into os.environ
    for name in _ENV_VARS:
        os.environ.pop(name, None)


class TestExtractionConfiguration:
    def test_defaults(self):
        config = ExtractionConfiguration(openai_api_key="sk-test")
        config.validate()

        assert config.llm_provider == "openai"
        assert config.model_name == "gpt-4o"
        assert config.temperature == 0.3
        assert config.max_tokens == 4000
        assert config.strict_schema is False

    def test_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
        monkeypatch.setenv("LLM_TEMPERATURE", "0.1")
        monkeypatch.setenv("LLM_TIMEOUT", "15")
        monkeypatch.setenv("STRICT_SCHEMA", "true")

        config = ExtractionConfiguration.from_environment(env_file=str(clean_env))

        assert config.model_name == "gpt-4o-mini"
        assert config.temperature == 0.1
        assert config.request_timeout == 15.0
        assert config.strict_schema is True

    def test_reads_env_file(self, clean_env):
        clean_env.write_text("LLM_PROVIDER=gemini\nGEMINI_API_KEY=g-test\n")
        config = ExtractionConfiguration.from_environment(env_file=str(clean_env))

        assert config.llm_provider == "gemini"
        assert config.gemini_api_key == "g-test"

    def test_falls_back_to_gemini_when_only_google_key(self, clean_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-test")
        config = ExtractionConfiguration.from_environment(env_file=str(clean_env))
        assert config.llm_provider == "gemini"

    def test_missing_key_raises(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            ExtractionConfiguration.from_environment(env_file=str(clean_env))
        assert exc_info.value.context["setting"] == "OPENAI_API_KEY"

    def test_skip_validation(self, clean_env):
        config = ExtractionConfiguration.from_environment(
            env_file=str(clean_env), validate_on_load=False
        )
        assert config.openai_api_key is None

    def test_bad_number_raises(self, clean_env, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("LLM_MAX_TOKENS", "lots")
        with pytest.raises(ConfigurationError):
            ExtractionConfiguration.from_environment(env_file=str(clean_env))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"llm_provider": "anthropic"},
            {"temperature": 3.0},
            {"max_tokens": 0},
            {"request_timeout": -1},
        ],
    )
    def test_invalid_values(self, overrides):
        config = ExtractionConfiguration(openai_api_key="sk-test", **overrides)
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_to_dict_masks_keys(self):
        data = ExtractionConfiguration(openai_api_key="sk-secret").to_dict()
        assert data["openai_api_key"] == "***"
        assert data["gemini_api_key"] is None


class TestPipeline:
    def test_injected_client_skips_configuration(self, stub_client, clinical_notes):
        pipeline = StructuredNotesPipeline(client=stub_client)
        note = pipeline.extract(clinical_notes)

        assert pipeline.client is stub_client
        assert [r.region for r in note.acupuncture] == [RegionName.BACK, RegionName.HIP]

    def test_without_client_requires_valid_config(self):
        with pytest.raises(ConfigurationError):
            StructuredNotesPipeline(ExtractionConfiguration())

    def test_extract_with_diagnostics(self, stub_client, clinical_notes):
        note, diagnostics = StructuredNotesPipeline(client=stub_client).extract_with_diagnostics(
            clinical_notes
        )
        assert note.is_complete
        assert diagnostics.provider == "stub"

    def test_extract_structured_note(self, provider_response, clinical_notes):
        client = StubLLMClient(provider_response)
        note = extract_structured_note(clinical_notes, client=client)

        assert note.diagnosis.tcm_diagnosis == "Kidney Yang Deficiency"
        assert len(client.calls) == 1
