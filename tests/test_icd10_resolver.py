"""
Tests for the ICD-10 symptom whitelist and chief complaint backfill.
"""

import re

import pytest

from tcm_structured_notes.core.constants import ICD10_SYMPTOM_CODES
from tcm_structured_notes.core.models import ChiefComplaint
from tcm_structured_notes.repository import backfill_chief_complaints, resolve_icd10
from tcm_structured_notes.repository.icd10_resolver import normalize_phrase


class TestResolveIcd10:
    @pytest.mark.parametrize(
        "phrase", ["Low back pain", "low back pain", "  LOW   BACK PAIN ", "Lower back pain"]
    )
    def test_low_back_pain_variants(self, phrase):
        result = resolve_icd10(phrase)
        assert result is not None
        assert result.code == "M54.50"
        assert result.label == "Low back pain, unspecified"

    def test_miss_returns_none(self):
        assert resolve_icd10("Migraine with aura") is None
        assert resolve_icd10("") is None

    def test_is_deterministic(self):
        assert resolve_icd10("Headache") == resolve_icd10("headache")

    def test_normalize_phrase(self):
        assert normalize_phrase("  Neck\tPain ") == "neck pain"

    def test_whitelist_keys_are_normalized(self):
        for key in ICD10_SYMPTOM_CODES:
            assert key == normalize_phrase(key)

    def test_whitelist_codes_are_well_formed(self):
        pattern = re.compile(r"^[A-Z]\d{2}(\.\d{1,4})?$")
        for code, label in ICD10_SYMPTOM_CODES.values():
            assert pattern.match(code), code
            assert label


class TestBackfillChiefComplaints:
    def test_fills_missing_code_from_symptom_phrase(self):
        complaints = [ChiefComplaint(text="Headache for 3 weeks")]
        filled = backfill_chief_complaints(complaints)

        assert filled[0].icd_code == "R51.9"
        assert filled[0].icd_label == "Headache, unspecified"
        assert complaints[0].icd_code is None

    def test_existing_code_is_kept(self):
        complaint = ChiefComplaint(text="Headache for 3 weeks", icdCode="G44.209", icdLabel="Tension")
        assert backfill_chief_complaints([complaint]) == [complaint]

    def test_miss_is_recorded_not_fabricated(self):
        misses = []
        filled = backfill_chief_complaints([ChiefComplaint(text="Qi stuck for 2 years")], misses)

        assert filled[0].icd_code is None
        assert [m.phrase for m in misses] == ["Qi stuck"]
