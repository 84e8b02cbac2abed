"""Models for recognition requests and results."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field


class ResultReason(StrEnum):
    """Why a recognition result has the value it has."""

    MATCHED = "matched"
    NO_MATCH = "no_match"
    NO_IDENTITIES = "no_identities"
    ORACLE_ERROR = "oracle_error"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class RecognitionResult:
    """Best match for one candidate image."""

    matched_identity_id: UUID | None
    confidence: float
    reason: ResultReason = ResultReason.NO_MATCH

    @property
    def is_match(self) -> bool:
        return self.matched_identity_id is not None


@dataclass(frozen=True)
class RequestPart:
    """One ordered piece of a recognition request."""

    kind: Literal["image", "text"]
    text: str | None = None
    media_type: str | None = None
    data: str | None = None


class OracleAnswer(BaseModel):
    """Structured answer returned by the recognition oracle."""

    matched_id: str | None = Field(alias="matchedId")
    confidence: Any = None
