"""
Shared fixtures for TCM structured notes tests.

The StubLLMClient stands in for a provider: it records every call and
either returns canned content or raises a configured exception.
"""

import copy
import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest


SAMPLE_CLINICAL_NOTES = """CC
Lower back pain for 10 months

HPI
Dull ache worse in the morning, better with heat.

ES
Worried about work. Stress 7/10.

Tongue
Pale, swollen, thin white coat

Pulse
Deep, weak

Points
BL-23, BL-25 (T), GB-30 (Right side only)
"""


SAMPLE_PROVIDER_RESPONSE: Dict[str, Any] = {
    "note_summary": "Chronic low back pain with Kidney Yang deficiency signs.",
    "chiefComplaints": [
        {
            "text": "Lower back pain for 10 months",
            "icdCode": "M54.50",
            "icdLabel": "Low back pain, unspecified",
        }
    ],
    "hpi": "Dull ache worse in the morning, better with heat.",
    "subjective": {
        "pmh": "",
        "fh": "",
        "sh": "",
        "es": "Worried about work. Stress 7/10.",
    },
    "tcmReview": {"pain": "Dull lower back ache, better with heat", "sleep": None},
    "tongue": {"body": "Pale, swollen", "coating": "Thin white"},
    "pulse": {"text": "Deep, weak"},
    "diagnosis": {
        "tcmDiagnosis": "Kidney Yang Deficiency",
        "icdCodes": [{"code": "M54.50", "label": "Low back pain, unspecified"}],
    },
    "treatment": "Tonify Kidney Yang",
    "acupunctureTreatmentSide": "Both",
    "acupuncturePoints": [
        {"name": "BL-23", "side": None, "method": None},
        {"name": "BL-25", "side": None, "method": "T"},
        {"name": "GB-30", "side": "Right", "method": None},
    ],
}


class StubLLMClient:
    """Records calls; returns canned content or raises."""

    def __init__(
        self,
        response: Optional[Union[str, Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ):
        if isinstance(response, dict):
            response = json.dumps(response)
        self._response = response
        self._error = error
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def complete(self, system_prompt: str, user_prompt: str, json_schema: Dict[str, Any]) -> str:
        self.calls.append((system_prompt, user_prompt, json_schema))
        if self._error is not None:
            raise self._error
        return self._response

    @property
    def model_name(self) -> str:
        return "stub-model"

    @property
    def provider_name(self) -> str:
        return "stub"


@pytest.fixture
def provider_response() -> Dict[str, Any]:
    """A fresh copy of the sample provider JSON, safe to mutate."""
    return copy.deepcopy(SAMPLE_PROVIDER_RESPONSE)


@pytest.fixture
def clinical_notes() -> str:
    return SAMPLE_CLINICAL_NOTES


@pytest.fixture
def stub_client(provider_response) -> StubLLMClient:
    return StubLLMClient(response=provider_response)
