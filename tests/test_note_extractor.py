"""
End-to-end extraction tests with a stub LLM client.
"""

import pytest

from tcm_structured_notes.acupuncture import format_annotation
from tcm_structured_notes.core.enums import RegionName, Side
from tcm_structured_notes.core.exceptions import (
    EmptyInputError,
    MalformedResponseError,
    ProviderError,
    ProviderRateLimitError,
    SchemaViolationError,
)
from tcm_structured_notes.generation import NoteExtractor

from conftest import StubLLMClient


class TestExtraction:
    def test_end_to_end_scenario(self, stub_client, clinical_notes):
        note = NoteExtractor(stub_client).extract(clinical_notes)

        assert [r.region for r in note.acupuncture] == [RegionName.BACK, RegionName.HIP]
        back, hip = note.acupuncture
        assert [p.name for p in back.points] == ["BL-23", "BL-25"]
        assert [p.name for p in hip.points] == ["GB-30"]

        side = note.acupuncture_treatment_side
        assert side == Side.BOTH
        assert format_annotation(hip.points[0], side) == "Right"
        assert format_annotation(back.points[1], side) == "T"
        assert format_annotation(back.points[0], side) is None

        assert note.chief_complaints[0].icd_code == "M54.50"

    def test_single_provider_call(self, stub_client, clinical_notes):
        NoteExtractor(stub_client).extract(clinical_notes)

        assert len(stub_client.calls) == 1
        system_prompt, user_prompt, schema = stub_client.calls[0]
        assert "TCM clinician" in system_prompt
        assert "Lower back pain for 10 months" in user_prompt
        assert "acupuncturePoints" in schema["properties"]

    def test_icd_backfill_when_code_missing(self, provider_response, clinical_notes):
        provider_response["chiefComplaints"][0]["icdCode"] = ""
        provider_response["chiefComplaints"][0]["icdLabel"] = ""
        note = NoteExtractor(StubLLMClient(provider_response)).extract(clinical_notes)

        assert note.chief_complaints[0].icd_code == "M54.50"
        assert note.chief_complaints[0].icd_label == "Low back pain, unspecified"

    def test_stress_level_backfilled_from_es(self, stub_client, clinical_notes):
        note = NoteExtractor(stub_client).extract(clinical_notes)
        assert note.subjective.stress_level == "7/10"

    def test_stress_level_from_model_is_kept(self, provider_response, clinical_notes):
        provider_response["subjective"]["stressLevel"] = "5/10"
        note = NoteExtractor(StubLLMClient(provider_response)).extract(clinical_notes)
        assert note.subjective.stress_level == "5/10"

    def test_output_serializes_with_ui_keys(self, stub_client, clinical_notes):
        data = NoteExtractor(stub_client).extract(clinical_notes).to_dict()

        assert data["summary"].startswith("Chronic")
        assert data["acupunctureTreatmentSide"] == "Both"
        assert data["acupuncture"][1] == {
            "region": "Hip",
            "points": [{"name": "GB-30", "side": "Right", "method": None}],
        }


class TestDiagnostics:
    def test_clean_extraction(self, stub_client, clinical_notes):
        _, diagnostics = NoteExtractor(stub_client).extract_with_diagnostics(clinical_notes)

        assert diagnostics.miss_count == 0
        assert diagnostics.warnings == []
        assert diagnostics.provider == "stub"
        assert diagnostics.model == "stub-model"
        assert "Points" in diagnostics.detected_sections

    def test_misses_are_reported_not_raised(self, provider_response, clinical_notes):
        provider_response["acupuncturePoints"].append({"name": "XYZ-99", "side": None, "method": None})
        provider_response["chiefComplaints"] = [
            {"text": "Qi stagnation feeling", "icdCode": "", "icdLabel": ""}
        ]
        note, diagnostics = NoteExtractor(
            StubLLMClient(provider_response)
        ).extract_with_diagnostics(clinical_notes)

        assert note.acupuncture[-1].region == RegionName.OTHER
        assert [m.point_name for m in diagnostics.classification_misses] == ["XYZ-99"]
        assert [m.phrase for m in diagnostics.icd_misses] == ["Qi stagnation feeling"]
        assert any(w.startswith("MISSING_DURATION") for w in diagnostics.warnings)


class TestFailures:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_empty_input_never_calls_provider(self, stub_client, text):
        with pytest.raises(EmptyInputError):
            NoteExtractor(stub_client).extract(text)
        assert stub_client.calls == []

    def test_provider_error_propagates(self, clinical_notes):
        error = ProviderError("connection reset", provider="stub")
        client = StubLLMClient(error=error)

        with pytest.raises(ProviderError) as exc_info:
            NoteExtractor(client).extract(clinical_notes)

        assert exc_info.value is error
        assert len(client.calls) == 1

    def test_rate_limit_keeps_subclass(self, clinical_notes):
        client = StubLLMClient(error=ProviderRateLimitError(provider="stub", retry_after=30))
        with pytest.raises(ProviderRateLimitError) as exc_info:
            NoteExtractor(client).extract(clinical_notes)
        assert exc_info.value.retry_after == 30

    def test_unexpected_client_exception_becomes_provider_error(self, clinical_notes):
        client = StubLLMClient(error=TimeoutError("read timed out"))
        with pytest.raises(ProviderError) as exc_info:
            NoteExtractor(client).extract(clinical_notes)
        assert isinstance(exc_info.value.original_error, TimeoutError)

    def test_empty_response_is_malformed(self, clinical_notes):
        with pytest.raises(MalformedResponseError):
            NoteExtractor(StubLLMClient(response="")).extract(clinical_notes)

    def test_non_json_response_is_malformed(self, clinical_notes):
        with pytest.raises(MalformedResponseError):
            NoteExtractor(StubLLMClient(response="Here is your note:")).extract(clinical_notes)

    def test_schema_violation(self, provider_response, clinical_notes):
        del provider_response["diagnosis"]
        with pytest.raises(SchemaViolationError):
            NoteExtractor(StubLLMClient(provider_response)).extract(clinical_notes)

    def test_failure_counter(self, clinical_notes):
        extractor = NoteExtractor(StubLLMClient(response=""))
        with pytest.raises(MalformedResponseError):
            extractor.extract(clinical_notes)
        assert extractor.failure_count == 1
        assert extractor.extraction_count == 0
