"""Tests for the in-memory session store."""

from datetime import UTC, datetime
from uuid import uuid4

from face_tagger.adapters.memory_store import InMemorySessionStore
from face_tagger.domain.photos import AnalyzedPhoto, PhotoStatus
from tests.conftest import make_identity


def test_identities_keep_registration_order() -> None:
    store = InMemorySessionStore()
    alice = make_identity("Alice")
    bob = make_identity("Bob")
    store.add_identity(alice)
    store.add_identity(bob)

    snapshot = store.list_identities()
    store.remove_identity(alice.id)

    assert snapshot == [alice, bob]
    assert store.list_identities() == [bob]
    assert store.get_identity(alice.id) is None
    assert store.get_identity(bob.id) == bob


def test_photos_are_listed_newest_first() -> None:
    store = InMemorySessionStore()
    photos = [
        AnalyzedPhoto(
            id=uuid4(),
            image="data:image/png;base64,AAAA",
            matched_identity_id=None,
            confidence=0.0,
            timestamp=datetime.now(tz=UTC),
            status=PhotoStatus.ANALYZED,
        )
        for _ in range(3)
    ]
    for photo in photos:
        store.add_photo(photo)

    assert store.list_photos() == list(reversed(photos))
