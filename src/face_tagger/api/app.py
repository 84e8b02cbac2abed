"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import (
    Depends,
    FastAPI,
    File,
    Form,
    HTTPException,
    Query,
    Request,
    Response,
    UploadFile,
    status,
)

from face_tagger.api.auth import require_operator
from face_tagger.api.schemas import (
    IdentityOut,
    PhotoOut,
    QueueItemOut,
    ScanAccepted,
    StatsOut,
)
from face_tagger.app_logging import configure_logging
from face_tagger.containers import AppContainer
from face_tagger.services.identities import IdentityValidationError
from face_tagger.services.image_codec import BufferedImage, ImageEncodingError
from face_tagger.services.stats import ALL_FILTER


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        state_container: AppContainer = app.state.container
        if state_container.scanner.is_busy:
            logger.info("Waiting for the scan queue to drain before shutdown")
            await state_container.scanner.join()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    protected = [Depends(require_operator)]

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/identities", dependencies=protected)
    async def list_identities(request: Request) -> list[IdentityOut]:
        """Return registered identities in registration order."""
        state_container: AppContainer = request.app.state.container
        return [
            IdentityOut.from_domain(identity)
            for identity in state_container.identity_service.list_identities()
        ]

    @app.post(
        "/identities",
        dependencies=protected,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_identity(
        request: Request,
        name: str = Form(...),
        file: UploadFile = File(...),
    ) -> IdentityOut:
        """Register a person with a reference photo."""
        state_container: AppContainer = request.app.state.container
        reference = await _buffer(file)
        try:
            identity = await state_container.identity_service.register(
                name, reference
            )
        except (IdentityValidationError, ImageEncodingError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return IdentityOut.from_domain(identity)

    @app.delete(
        "/identities/{identity_id}",
        dependencies=protected,
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_identity(identity_id: UUID, request: Request) -> Response:
        """Remove an identity; existing photos keep their stale reference."""
        state_container: AppContainer = request.app.state.container
        if not state_container.identity_service.remove(identity_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post(
        "/scan",
        dependencies=protected,
        status_code=status.HTTP_202_ACCEPTED,
    )
    async def scan(
        request: Request,
        files: list[UploadFile] = File(...),
        wait: bool = False,
    ) -> ScanAccepted:
        """Queue uploaded photos for recognition."""
        state_container: AppContainer = request.app.state.container
        buffered = [await _buffer(upload) for upload in files]
        accepted = state_container.scanner.submit(buffered)
        logger.info("Accepted %s of %s uploaded files", len(accepted), len(files))
        if wait:
            await state_container.scanner.join()
        return ScanAccepted(
            accepted=[QueueItemOut.from_domain(item) for item in accepted],
            queue=[
                QueueItemOut.from_domain(item)
                for item in state_container.scanner.queue
            ],
        )

    @app.get("/scan/queue", dependencies=protected)
    async def scan_queue(request: Request) -> list[QueueItemOut]:
        """Return files that are pending, processing or failed."""
        state_container: AppContainer = request.app.state.container
        return [
            QueueItemOut.from_domain(item) for item in state_container.scanner.queue
        ]

    @app.delete("/scan/queue/errors", dependencies=protected)
    async def clear_failed(request: Request) -> dict[str, int]:
        """Dismiss failed items from the queue."""
        state_container: AppContainer = request.app.state.container
        return {"cleared": state_container.scanner.clear_failed()}

    @app.get("/photos", dependencies=protected)
    async def list_photos(
        request: Request,
        filter_key: str = Query(ALL_FILTER, alias="filter"),
        limit: int | None = None,
    ) -> list[PhotoOut]:
        """Return analyzed photos, newest first, optionally filtered."""
        state_container: AppContainer = request.app.state.container
        stats_service = state_container.stats_service
        photos = stats_service.filter_photos(filter_key)
        if limit is not None:
            photos = photos[: max(limit, 0)]
        return [
            PhotoOut.from_domain(photo, stats_service.resolve_identity(photo))
            for photo in photos
        ]

    @app.get("/stats", dependencies=protected)
    async def stats(request: Request) -> StatsOut:
        """Return dashboard counts and per-identity frequencies."""
        state_container: AppContainer = request.app.state.container
        stats_service = state_container.stats_service
        return StatsOut.from_domain(
            stats_service.summary(), stats_service.frequencies()
        )

    return app


async def _buffer(upload: UploadFile) -> BufferedImage:
    """Read an upload into memory so it outlives the request."""
    return BufferedImage(
        filename=upload.filename,
        content_type=upload.content_type,
        content=await upload.read(),
    )
