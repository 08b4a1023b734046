"""
Tests for provider response parsing, normalization and validation.
"""

import json

import pytest

from tcm_structured_notes.core.enums import Method, Side
from tcm_structured_notes.core.exceptions import MalformedResponseError, SchemaViolationError
from tcm_structured_notes.validation import NoteChecks, ResponseValidator


@pytest.fixture
def validator():
    return ResponseValidator()


class TestDecoding:
    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_content_is_malformed(self, validator, content):
        with pytest.raises(MalformedResponseError):
            validator.parse(content)

    def test_invalid_json_is_malformed(self, validator):
        with pytest.raises(MalformedResponseError) as exc_info:
            validator.parse("{not json")
        assert exc_info.value.content_preview == "{not json"

    def test_code_fence_is_stripped(self, validator, provider_response):
        content = "```json\n" + json.dumps(provider_response) + "\n```"
        note = validator.parse(content)
        assert note.diagnosis.tcm_diagnosis == "Kidney Yang Deficiency"

    def test_non_object_is_schema_violation(self, validator):
        with pytest.raises(SchemaViolationError):
            validator.parse("[1, 2, 3]")


class TestSchemaValidation:
    def test_valid_response(self, validator, provider_response):
        note = validator.parse(json.dumps(provider_response))

        assert note.summary.startswith("Chronic low back pain")
        assert note.acupuncture_treatment_side == Side.BOTH
        assert note.acupuncture_points[2].side == Side.RIGHT
        assert note.acupuncture_points[1].method == Method.TONIFY
        assert note.acupuncture == []

    def test_null_review_categories_are_omitted(self, validator, provider_response):
        note = validator.parse(json.dumps(provider_response))
        assert "sleep" not in note.tcm_review
        assert note.tcm_review["pain"].startswith("Dull")

    def test_missing_chief_complaints_is_violation(self, validator, provider_response):
        del provider_response["chiefComplaints"]
        with pytest.raises(SchemaViolationError) as exc_info:
            validator.parse(json.dumps(provider_response))
        assert any("chiefComplaints" in error for error in exc_info.value.errors)

    def test_numeric_icd_code_is_violation(self, validator, provider_response):
        provider_response["chiefComplaints"][0]["icdCode"] = 54.5
        with pytest.raises(SchemaViolationError):
            validator.parse(json.dumps(provider_response))

    def test_unknown_field_is_violation(self, validator, provider_response):
        provider_response["billingNotes"] = "n/a"
        with pytest.raises(SchemaViolationError):
            validator.parse(json.dumps(provider_response))

    def test_provider_regions_are_discarded(self, validator, provider_response):
        provider_response["acupuncture"] = [{"region": "Back", "points": []}]
        note = validator.parse(json.dumps(provider_response))
        assert note.acupuncture == []

    def test_missing_treatment_side_defaults_to_both(self, validator, provider_response):
        provider_response["acupunctureTreatmentSide"] = None
        note = validator.parse(json.dumps(provider_response))
        assert note.acupuncture_treatment_side == Side.BOTH


class TestPointNormalization:
    def test_bare_string_point(self, validator, provider_response):
        provider_response["acupuncturePoints"] = ["ST-36"]
        note = validator.parse(json.dumps(provider_response))

        point = note.acupuncture_points[0]
        assert (point.name, point.side, point.method) == ("ST-36", None, None)

    @pytest.mark.parametrize(
        "side, expected",
        [("left", Side.LEFT), ("L", Side.LEFT), ("right side", Side.RIGHT), ("bilateral", Side.BOTH)],
    )
    def test_side_synonyms(self, validator, provider_response, side, expected):
        provider_response["acupuncturePoints"] = [{"name": "LV-3", "side": side, "method": None}]
        note = validator.parse(json.dumps(provider_response))
        assert note.acupuncture_points[0].side == expected

    @pytest.mark.parametrize(
        "method, expected",
        [("tonify", Method.TONIFY), ("t", Method.TONIFY), ("reduce", Method.REDUCE),
         ("sedating", Method.REDUCE), ("even", Method.EVEN)],
    )
    def test_method_synonyms(self, validator, provider_response, method, expected):
        provider_response["acupuncturePoints"] = [{"name": "LV-3", "side": None, "method": method}]
        note = validator.parse(json.dumps(provider_response))
        assert note.acupuncture_points[0].method == expected

    def test_session_side_synonym(self, validator, provider_response):
        provider_response["acupunctureTreatmentSide"] = "Both sides treatment"
        note = validator.parse(json.dumps(provider_response))
        assert note.acupuncture_treatment_side == Side.BOTH

    def test_snake_case_keys_are_normalized(self, validator, provider_response):
        del provider_response["acupuncturePoints"]
        del provider_response["acupunctureTreatmentSide"]
        provider_response["acupuncture_points"] = ["BL-23", {"name": "GB-30", "side": "right", "method": "tonify"}]
        provider_response["acupuncture_treatment_side"] = "left side"

        note = validator.parse(json.dumps(provider_response))

        assert note.acupuncture_treatment_side == Side.LEFT
        assert [p.name for p in note.acupuncture_points] == ["BL-23", "GB-30"]
        assert note.acupuncture_points[1].side == Side.RIGHT
        assert note.acupuncture_points[1].method == Method.TONIFY

    def test_unknown_method_is_violation(self, validator, provider_response):
        provider_response["acupuncturePoints"] = [{"name": "LV-3", "side": None, "method": "moxa"}]
        with pytest.raises(SchemaViolationError) as exc_info:
            validator.parse(json.dumps(provider_response))
        assert exc_info.value.errors[0].startswith("acupuncturePoints.0.method")

    def test_unknown_side_is_violation(self, validator, provider_response):
        provider_response["acupuncturePoints"] = [{"name": "LV-3", "side": "up", "method": None}]
        with pytest.raises(SchemaViolationError):
            validator.parse(json.dumps(provider_response))

    def test_blank_point_name_is_violation(self, validator, provider_response):
        provider_response["acupuncturePoints"] = [{"name": "  ", "side": None, "method": None}]
        with pytest.raises(SchemaViolationError):
            validator.parse(json.dumps(provider_response))


class TestNoteChecks:
    def test_clean_note_has_no_warnings(self, validator, provider_response):
        note = validator.parse(json.dumps(provider_response))
        assert NoteChecks.run_all(note) == []

    def test_missing_duration(self, validator, provider_response):
        provider_response["chiefComplaints"][0]["text"] = "Lower back pain"
        note = validator.parse(json.dumps(provider_response))
        warnings = NoteChecks.check_durations(note)
        assert len(warnings) == 1
        assert warnings[0].startswith("MISSING_DURATION")

    @pytest.mark.parametrize(
        "text",
        ["Headache for 3 weeks", "Insomnia for two years", "Fatigue for a few months",
         "Neck pain for the past 6 mos"],
    )
    def test_duration_phrasings(self, validator, provider_response, text):
        provider_response["chiefComplaints"][0]["text"] = text
        note = validator.parse(json.dumps(provider_response))
        assert NoteChecks.check_durations(note) == []

    def test_too_many_complaints(self, validator, provider_response):
        complaint = provider_response["chiefComplaints"][0]
        provider_response["chiefComplaints"] = [complaint, complaint, complaint]
        note = validator.parse(json.dumps(provider_response))
        assert NoteChecks.check_complaint_count(note)[0].startswith("TOO_MANY_COMPLAINTS")

    def test_bad_icd_format(self, validator, provider_response):
        provider_response["diagnosis"]["icdCodes"] = [{"code": "54.5", "label": "Back pain"}]
        note = validator.parse(json.dumps(provider_response))
        assert NoteChecks.check_icd_format(note) == [
            "INVALID_ICD_FORMAT: '54.5' is not an ICD-10 code"
        ]
