"""Tests for identity registration."""

import asyncio

import pytest

from face_tagger.adapters.memory_store import InMemorySessionStore
from face_tagger.services.identities import IdentityService, IdentityValidationError
from face_tagger.services.image_codec import ImageEncodingError
from tests.conftest import JPEG_BYTES, image_file


def test_register_encodes_reference_image() -> None:
    store = InMemorySessionStore()
    service = IdentityService(store)

    identity = asyncio.run(
        service.register(
            "  Ada Lovelace ", image_file("ada.jpg", JPEG_BYTES, "image/jpeg")
        )
    )

    assert identity.name == "Ada Lovelace"
    assert identity.reference_image.startswith("data:image/jpeg;base64,")
    assert service.list_identities() == [identity]


def test_register_rejects_blank_name() -> None:
    service = IdentityService(InMemorySessionStore())

    with pytest.raises(IdentityValidationError):
        asyncio.run(service.register("   ", image_file("a.png")))


def test_register_rejects_non_image() -> None:
    service = IdentityService(InMemorySessionStore())

    with pytest.raises(IdentityValidationError):
        asyncio.run(service.register("Ada", image_file("a.txt", b"x", "text/plain")))


def test_register_rejects_empty_image() -> None:
    store = InMemorySessionStore()
    service = IdentityService(store)

    with pytest.raises(ImageEncodingError):
        asyncio.run(service.register("Ada", image_file("a.png", b"")))
    assert store.list_identities() == []


def test_remove_identity() -> None:
    store = InMemorySessionStore()
    service = IdentityService(store)
    identity = asyncio.run(service.register("Ada", image_file("a.png")))

    assert service.remove(identity.id) is True
    assert service.remove(identity.id) is False
    assert service.list_identities() == []
