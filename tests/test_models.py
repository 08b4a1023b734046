"""
Tests for enums and note models.
"""

import pytest
from pydantic import ValidationError

from tcm_structured_notes.core.enums import Method, Side
from tcm_structured_notes.core.models import ChiefComplaint, FlatPoint, StructuredNote


class TestEnums:
    @pytest.mark.parametrize("value", ["Left", "left", " LT ", "l", "left side only"])
    def test_side_left(self, value):
        assert Side.from_string(value) == Side.LEFT

    def test_side_unknown(self):
        with pytest.raises(ValueError):
            Side.from_string("lateral")

    @pytest.mark.parametrize(
        "value, expected",
        [("T", Method.TONIFY), ("tonifying", Method.TONIFY), ("Disperse", Method.REDUCE),
         ("balancing", Method.EVEN)],
    )
    def test_method(self, value, expected):
        assert Method.from_string(value) == expected

    def test_method_unknown(self):
        with pytest.raises(ValueError):
            Method.from_string("cupping")


class TestModels:
    def test_flat_point_is_frozen_and_trimmed(self):
        point = FlatPoint(name="  BL-23 ")
        assert point.name == "BL-23"
        with pytest.raises(ValidationError):
            point.name = "BL-24"

    def test_symptom_phrase(self):
        assert ChiefComplaint(text="Low back pain for 10 months").symptom_phrase == "Low back pain"
        assert ChiefComplaint(text="Insomnia").symptom_phrase == "Insomnia"

    def test_blank_icd_code_becomes_none(self):
        assert ChiefComplaint(text="Headache", icdCode="  ").icd_code is None

    @pytest.mark.parametrize("key", ["summary", "note_summary", "noteSummary"])
    def test_summary_aliases(self, provider_response, key):
        summary = provider_response.pop("note_summary")
        provider_response[key] = summary
        note = StructuredNote.model_validate(provider_response)
        assert note.to_dict()["summary"] == summary

    def test_requires_a_chief_complaint(self, provider_response):
        provider_response["chiefComplaints"] = []
        with pytest.raises(ValidationError):
            StructuredNote.model_validate(provider_response)

    def test_review_accepts_lists(self, provider_response):
        provider_response["tcmReview"] = {"stool": ["Loose", "Frequent"], "urine": ""}
        note = StructuredNote.model_validate(provider_response)
        assert note.tcm_review == {"stool": ["Loose", "Frequent"]}

    def test_missing_summary_is_incomplete(self, provider_response):
        provider_response["note_summary"] = None
        assert not StructuredNote.model_validate(provider_response).is_complete
