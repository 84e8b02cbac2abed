"""Tests for stats service."""

from datetime import UTC, datetime
from uuid import uuid4

from face_tagger.adapters.memory_store import InMemorySessionStore
from face_tagger.domain.photos import AnalyzedPhoto, PhotoStatus
from face_tagger.services.stats import StatsService
from tests.conftest import make_identity


def _photo(matched_identity_id=None, confidence: float = 0.0) -> AnalyzedPhoto:
    return AnalyzedPhoto(
        id=uuid4(),
        image="data:image/png;base64,AAAA",
        matched_identity_id=matched_identity_id,
        confidence=confidence,
        timestamp=datetime.now(tz=UTC),
        status=PhotoStatus.ANALYZED,
    )


def _seeded_store() -> tuple[InMemorySessionStore, list]:
    store = InMemorySessionStore()
    alice = make_identity("Alice")
    bob = make_identity("Bob")
    carol = make_identity("Carol")
    for identity in (alice, bob, carol):
        store.add_identity(identity)
    for photo in (
        _photo(alice.id, 0.9),
        _photo(bob.id, 0.8),
        _photo(alice.id, 0.7),
        _photo(),
    ):
        store.add_photo(photo)
    return store, [alice, bob, carol]


def test_summary_counts_recognized_and_unknown() -> None:
    store, _ = _seeded_store()

    summary = StatsService(store).summary()

    assert summary.total_photos == 4
    assert summary.recognized == 3
    assert summary.unknown == 1


def test_removed_identity_counts_as_unknown() -> None:
    store, (alice, _, _) = _seeded_store()
    store.remove_identity(alice.id)
    service = StatsService(store)

    assert service.summary().unknown == 3
    assert len(service.filter_photos("unknown")) == 3
    unknown = service.filter_photos("unknown")
    assert all(service.resolve_identity(photo) is None for photo in unknown)


def test_frequencies_sorted_with_relative_share() -> None:
    store, (alice, bob, carol) = _seeded_store()

    frequencies = StatsService(store).frequencies()

    assert [item.label for item in frequencies] == ["Alice", "Bob", "Unknown", "Carol"]
    assert [item.count for item in frequencies] == [2, 1, 1, 0]
    assert frequencies[0].share == 100.0
    assert frequencies[1].share == 50.0
    assert frequencies[3].key == str(carol.id)


def test_frequencies_without_photos() -> None:
    store = InMemorySessionStore()
    store.add_identity(make_identity("Alice"))

    frequencies = StatsService(store).frequencies()

    assert [item.count for item in frequencies] == [0, 0]
    assert all(item.share == 0.0 for item in frequencies)


def test_filter_photos_by_identity() -> None:
    store, (alice, bob, _) = _seeded_store()
    service = StatsService(store)

    assert len(service.filter_photos()) == 4
    assert [photo.confidence for photo in service.filter_photos(str(alice.id))] == [
        0.7,
        0.9,
    ]
    assert len(service.filter_photos(str(bob.id))) == 1
    assert service.filter_photos("no-such-identity") == []
