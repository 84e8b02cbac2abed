"""Face recognition by comparing a candidate against reference images."""

import asyncio
import json
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError

from face_tagger.domain.identities import Identity
from face_tagger.domain.recognition import (
    OracleAnswer,
    RecognitionResult,
    RequestPart,
    ResultReason,
)
from face_tagger.services.image_codec import extract_media_type, strip_payload

_logger = logging.getLogger(__name__)

RECOGNITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "matchedId": {
            "type": ["string", "null"],
            "description": (
                "The Reference ID of the matching person, or null if no match found."
            ),
        },
        "confidence": {
            "type": "number",
            "description": "Confidence score between 0.0 and 1.0",
        },
    },
    "required": ["matchedId", "confidence"],
    "additionalProperties": False,
}

RECOGNITION_PROMPT = (
    "You are a precise face recognition system.\n"
    "1. Analyze the face in the CANDIDATE image.\n"
    "2. Compare it strictly against the Reference images provided.\n"
    "3. If the candidate matches a reference person, return the Reference ID.\n"
    "4. If the candidate does not match any reference, return null.\n"
    "5. Provide a confidence score between 0 and 1."
)

CANDIDATE_LABEL = "This is the CANDIDATE image."

_NO_MATCH_SENTINELS = {"", "null", "none", "unknown"}


class RecognitionClient(Protocol):
    """Interface for the external recognition oracle."""

    async def compare(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float | None,
        store: bool,
        parts: list[RequestPart],
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the oracle's structured answer."""


@dataclass
class RecognitionService:
    """Service that prepares recognition requests and validates answers."""

    client: RecognitionClient
    model: str
    temperature: float | None = 0.1
    store: bool = False
    retry_attempts: int = 0
    retry_delay_seconds: float = 0.5

    async def classify(
        self, candidate: str, references: Sequence[Identity]
    ) -> RecognitionResult:
        """Return the best-matching identity for a candidate image.

        Oracle failures never propagate; they degrade to an unmatched result
        with zero confidence and a reason describing what went wrong.
        """
        if not candidate:
            raise ValueError("candidate image must not be empty")
        if not references:
            return RecognitionResult(
                matched_identity_id=None,
                confidence=0.0,
                reason=ResultReason.NO_IDENTITIES,
            )

        parts = build_request_parts(candidate, references)
        try:
            raw = await self._call_with_retry(parts)
        except json.JSONDecodeError as exc:
            _logger.warning("Recognition oracle returned malformed JSON: %s", exc)
            return _fallback(ResultReason.INVALID_RESPONSE)
        except Exception:
            _logger.exception("Recognition oracle call failed")
            return _fallback(ResultReason.ORACLE_ERROR)

        try:
            answer = OracleAnswer.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Recognition oracle returned an invalid answer: %s", exc)
            return _fallback(ResultReason.INVALID_RESPONSE)

        return _to_result(answer, references)

    async def _call_with_retry(self, parts: list[RequestPart]) -> dict[str, object]:
        """Call the oracle with a short retry."""
        attempt = 0
        while True:
            try:
                return await self.client.compare(
                    model=self.model,
                    temperature=self.temperature,
                    store=self.store,
                    parts=parts,
                    schema=RECOGNITION_SCHEMA,
                    prompt=RECOGNITION_PROMPT,
                )
            except json.JSONDecodeError:
                raise
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Recognition attempt %s/%s failed: %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def build_request_parts(
    candidate: str, references: Sequence[Identity]
) -> list[RequestPart]:
    """Build the ordered image and text parts for one recognition request."""
    parts = [_image_part(candidate), RequestPart(kind="text", text=CANDIDATE_LABEL)]
    for identity in references:
        parts.append(_image_part(identity.reference_image))
        parts.append(RequestPart(kind="text", text=f"Reference ID: {identity.id}"))
    return parts


def clamp_confidence(value: object) -> float:
    """Coerce an oracle confidence into the [0, 1] range."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    if math.isnan(value):
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def _image_part(encoded_image: str) -> RequestPart:
    return RequestPart(
        kind="image",
        media_type=extract_media_type(encoded_image),
        data=strip_payload(encoded_image),
    )


def _to_result(
    answer: OracleAnswer, references: Sequence[Identity]
) -> RecognitionResult:
    confidence = clamp_confidence(answer.confidence)
    token = (answer.matched_id or "").strip()
    if token.lower() in _NO_MATCH_SENTINELS:
        return RecognitionResult(
            matched_identity_id=None,
            confidence=confidence,
            reason=ResultReason.NO_MATCH,
        )

    matched = _find_reference(token, references)
    if matched is None:
        _logger.warning("Recognition oracle returned an unknown reference: %s", token)
        return _fallback(ResultReason.NO_MATCH)
    return RecognitionResult(
        matched_identity_id=matched,
        confidence=confidence,
        reason=ResultReason.MATCHED,
    )


def _find_reference(token: str, references: Sequence[Identity]) -> UUID | None:
    try:
        candidate_id = UUID(token)
    except ValueError:
        return None
    for identity in references:
        if identity.id == candidate_id:
            return identity.id
    return None


def _fallback(reason: ResultReason) -> RecognitionResult:
    return RecognitionResult(matched_identity_id=None, confidence=0.0, reason=reason)
