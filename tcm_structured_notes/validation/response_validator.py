"""
Response Validator - Provider JSON to StructuredNote

This module turns the raw content returned by an LLM client into a
validated StructuredNote, or raises the matching fatal error:

    Empty content / invalid JSON  → MalformedResponseError
    Wrong shape / bad enum values → SchemaViolationError

Point Normalization (before schema validation):
    1. A bare string point becomes {name, side: None, method: None}
    2. Side synonyms ("left", "L", "bilateral") map to Left/Right/Both
    3. Method synonyms ("tonify", "reduce", "even") map to T/R/E
    4. Anything else is a schema violation, never a guess

Pipeline Position:
    LLM client → [ResponseValidator] → ICD Backfill → Region Organizer
                  ^^^^^^^^^^^^^^^^^
                  You are here

Author: Shubham Singh
Date: December 2025
"""

import json
import re
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from tcm_structured_notes.core.enums import Method, Side
from tcm_structured_notes.core.exceptions import MalformedResponseError, SchemaViolationError
from tcm_structured_notes.core.models import StructuredNote


_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)

# Python field names a provider may echo back, mapped to the wire names
_SNAKE_CASE_KEYS = {
    "acupuncture_treatment_side": "acupunctureTreatmentSide",
    "acupuncture_points": "acupuncturePoints",
}


# =============================================================================
# STAGE 1: RESPONSE VALIDATOR
# =============================================================================


class ResponseValidator:
    """
    Parses and validates raw provider content.

    What it does:
        Decodes JSON, normalizes the acupuncture point list and treatment
        side, then validates the whole object against StructuredNote.

    Why it exists:
        1. Providers differ in how closely they follow the schema
        2. One place decides what is recoverable (synonyms) and what is
           fatal (unknown values, wrong types)
        3. The derived region grouping is never trusted from the provider

    Example:
        >>> note = ResponseValidator().parse(raw_content)
    """

    def parse(self, content: Optional[str]) -> StructuredNote:
        """
        Parse raw content into a StructuredNote.

        Args:
            content: Raw provider output (JSON object text)

        Returns:
            Validated StructuredNote with an empty region list

        Raises:
            MalformedResponseError: Content missing or not JSON
            SchemaViolationError: Content does not match the note schema
        """
        # =====================================================================
        # STAGE 1.1: DECODE
        # =====================================================================
        data = self._decode(content)

        if not isinstance(data, dict):
            raise SchemaViolationError(
                "Response is not a JSON object",
                errors=[f"top level is {type(data).__name__}"],
            )

        # =====================================================================
        # STAGE 1.2: NORMALIZE
        # =====================================================================
        data = self._normalize(data)

        # =====================================================================
        # STAGE 1.3: VALIDATE
        # =====================================================================
        try:
            note = StructuredNote.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            logger.error(f"Response failed schema validation | Errors: {len(errors)}")
            raise SchemaViolationError("Response does not match the note schema", errors=errors)

        logger.debug(
            f"Response validated | "
            f"Complaints: {len(note.chief_complaints)} | "
            f"Points: {len(note.acupuncture_points)}"
        )
        return note

    # =========================================================================
    # STAGE 2: DECODING
    # =========================================================================

    def _decode(self, content: Optional[str]) -> Any:
        if content is None or not content.strip():
            raise MalformedResponseError("No response content from provider", content=content)

        text = content.strip()
        fenced = _CODE_FENCE.match(text)
        if fenced:
            logger.debug("Stripped markdown code fence from response")
            text = fenced.group(1)

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e.msg}", content=content)

    # =========================================================================
    # STAGE 3: NORMALIZATION
    # =========================================================================

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data)
        errors: List[str] = []

        for name, alias in _SNAKE_CASE_KEYS.items():
            if name in data and alias not in data:
                data[alias] = data.pop(name)

        # Regions are derived locally from the flat list
        if data.pop("acupuncture", None) is not None:
            logger.debug("Discarded provider-supplied region grouping")

        # -----------------------------------------------------------------
        # 3.1: Session side
        # -----------------------------------------------------------------
        side = data.get("acupunctureTreatmentSide")
        if side is None or (isinstance(side, str) and not side.strip()):
            data.pop("acupunctureTreatmentSide", None)
        elif isinstance(side, str):
            try:
                data["acupunctureTreatmentSide"] = Side.from_string(side).value
            except ValueError as e:
                errors.append(f"acupunctureTreatmentSide: {e}")

        # -----------------------------------------------------------------
        # 3.2: Point list
        # -----------------------------------------------------------------
        points = data.get("acupuncturePoints")
        if points is None:
            data["acupuncturePoints"] = []
        elif isinstance(points, list):
            data["acupuncturePoints"] = [
                self._normalize_point(point, index, errors) for index, point in enumerate(points)
            ]

        if errors:
            logger.error(f"Unrecognized point values | Errors: {errors}")
            raise SchemaViolationError("Response contains unrecognized point values", errors=errors)

        return data

    def _normalize_point(self, point: Any, index: int, errors: List[str]) -> Any:
        """Normalize one point entry; anything not a str or dict is left for pydantic."""
        if isinstance(point, str):
            return {"name": point, "side": None, "method": None}
        if not isinstance(point, dict):
            return point

        point = dict(point)
        for key, parser in (("side", Side.from_string), ("method", Method.from_string)):
            value = point.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                errors.append(f"acupuncturePoints.{index}.{key}: expected a string, got {value!r}")
                continue
            if not value.strip():
                point[key] = None
                continue
            try:
                point[key] = parser(value).value
            except ValueError as e:
                errors.append(f"acupuncturePoints.{index}.{key}: {e}")
        return point
