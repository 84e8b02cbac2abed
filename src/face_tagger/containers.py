"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from face_tagger.adapters.memory_store import InMemorySessionStore
from face_tagger.adapters.openai_recognition_client import OpenAIRecognitionClient
from face_tagger.config import Settings
from face_tagger.domain.photos import AnalyzedPhoto
from face_tagger.services.identities import IdentityService
from face_tagger.services.recognition import RecognitionService
from face_tagger.services.scanner import Scanner
from face_tagger.services.stats import StatsService
from face_tagger.services.store import SessionStore

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: SessionStore
    recognition_service: RecognitionService
    identity_service: IdentityService
    scanner: Scanner
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = InMemorySessionStore()
    openai_client = OpenAIRecognitionClient.create(resolved_settings.openai_api_key)
    recognition_service = RecognitionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        store=resolved_settings.openai_store,
        retry_attempts=resolved_settings.recognition_retry_attempts,
        retry_delay_seconds=resolved_settings.recognition_retry_delay_seconds,
    )
    scanner = Scanner(
        recognition=recognition_service,
        store=store,
        on_analysis_complete=_log_analysis,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        recognition_service=recognition_service,
        identity_service=IdentityService(store),
        scanner=scanner,
        stats_service=StatsService(store),
        close_resources=close_resources,
    )


def _log_analysis(photo: AnalyzedPhoto) -> None:
    _logger.info("Photo %s added to the gallery", photo.id)
