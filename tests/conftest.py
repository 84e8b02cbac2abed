"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from face_tagger.adapters.memory_store import InMemorySessionStore
from face_tagger.config import Settings
from face_tagger.containers import AppContainer
from face_tagger.domain.identities import Identity
from face_tagger.domain.recognition import RequestPart
from face_tagger.services.identities import IdentityService
from face_tagger.services.image_codec import BufferedImage, to_data_url
from face_tagger.services.recognition import RecognitionClient, RecognitionService
from face_tagger.services.scanner import Scanner
from face_tagger.services.stats import StatsService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"candidate-pixels"
JPEG_BYTES = b"\xff\xd8\xff" + b"reference-pixels"


@dataclass
class FakeRecognitionClient(RecognitionClient):
    """Fake recognition oracle returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {"matchedId": None, "confidence": 0.0}
    )
    error: Exception | None = None
    calls: list[list[RequestPart]] = field(default_factory=list)
    on_compare: Callable[[], None] | None = None

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
        self.calls.append(parts)
        if self.on_compare is not None:
            self.on_compare()
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class UnreadableImage:
    """Upload whose contents cannot be read."""

    filename: str | None
    content_type: str | None = "image/jpeg"

    async def read(self) -> bytes:
        raise OSError(f"cannot read {self.filename}")


def image_file(
    name: str, content: bytes = PNG_BYTES, content_type: str | None = "image/png"
) -> BufferedImage:
    return BufferedImage(filename=name, content_type=content_type, content=content)


def make_identity(name: str = "Alice") -> Identity:
    return Identity(
        id=uuid4(),
        name=name,
        reference_image=to_data_url(JPEG_BYTES, "image/jpeg"),
        created_at=datetime.now(tz=UTC),
    )


def build_scanner(
    client: FakeRecognitionClient, store: InMemorySessionStore, **kwargs
) -> Scanner:
    recognition = RecognitionService(client=client, model="test-model")
    return Scanner(recognition=recognition, store=store, **kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        operator_token="operator-token",
    )


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def recognition_client() -> FakeRecognitionClient:
    return FakeRecognitionClient()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemorySessionStore,
    recognition_client: FakeRecognitionClient,
) -> AppContainer:
    recognition_service = RecognitionService(
        client=recognition_client,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        recognition_service=recognition_service,
        identity_service=IdentityService(store),
        scanner=Scanner(recognition=recognition_service, store=store),
        stats_service=StatsService(store),
        close_resources=close_resources,
    )
