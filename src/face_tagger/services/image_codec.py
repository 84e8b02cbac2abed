"""Helpers that turn uploaded files into data URLs and back."""

import base64
import re
from dataclasses import dataclass
from typing import Protocol

DEFAULT_MEDIA_TYPE = "image/jpeg"

_DATA_URL_PATTERN = re.compile(r"^data:([a-zA-Z0-9]+/[a-zA-Z0-9\-.+]+)[^,]*,")


class ImageEncodingError(ValueError):
    """Raised when a file cannot be turned into an encoded image."""


class ImageSource(Protocol):
    """A readable uploaded file with a declared content type."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes:
        """Return the full file contents."""


@dataclass
class BufferedImage(ImageSource):
    """Uploaded file whose bytes are already held in memory."""

    filename: str | None
    content_type: str | None
    content: bytes

    async def read(self) -> bytes:
        return self.content


def is_image(source: ImageSource) -> bool:
    """Return True when the declared content type is an image type."""
    return (source.content_type or "").lower().startswith("image/")


async def encode(source: ImageSource) -> str:
    """Read a file and return it as a base64 data URL."""
    content = await source.read()
    if not content:
        raise ImageEncodingError(f"{source.filename or 'file'} is empty")
    return to_data_url(content, source.content_type)


def to_data_url(content: bytes, declared_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    media_type = declared_type if _is_image_type(declared_type) else None
    media_type = media_type or detect_media_type(content)
    encoded = base64.b64encode(content).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"


def strip_payload(encoded_image: str) -> str:
    """Return the base64 payload of a data URL, or the input if malformed."""
    parts = encoded_image.split(",")
    return parts[1] if len(parts) == 2 else encoded_image  # noqa: PLR2004


def extract_media_type(encoded_image: str) -> str:
    """Return the media type declared in a data URL."""
    match = _DATA_URL_PATTERN.match(encoded_image)
    return match.group(1) if match else DEFAULT_MEDIA_TYPE


def detect_media_type(content: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if content.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if content.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    if content[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return DEFAULT_MEDIA_TYPE


def _is_image_type(value: str | None) -> bool:
    return value is not None and value.lower().startswith("image/") and "*" not in value
