"""Tests for the TTL store."""

from tests.core.fakes import FakeClock
from trailerbridge.utils.cache import TTLStore


def test_ttl_store_returns_live_values():
    """Stored values are returned until they expire."""
    clock = FakeClock()
    store: TTLStore[str] = TTLStore(60, timer=clock)

    store.put("movie:603", "meta")
    clock.advance(59)

    assert store.get("movie:603") == "meta"
    assert "movie:603" in store
    assert len(store) == 1


def test_ttl_store_expires_at_deadline():
    """Entries are gone once the clock reaches their expiry time."""
    clock = FakeClock()
    store: TTLStore[str] = TTLStore(60, timer=clock)

    store.put("movie:603", "meta")
    clock.advance(60)

    assert store.get("movie:603") is None
    assert "movie:603" not in store
    assert len(store) == 0


def test_ttl_store_ttl_counts_from_insertion_not_reads():
    """Reading an entry does not extend its lifetime."""
    clock = FakeClock()
    store: TTLStore[str] = TTLStore(60, timer=clock)

    store.put("key", "value")
    for _ in range(5):
        clock.advance(10)
        assert store.get("key") == "value"
    clock.advance(10)

    assert store.get("key") is None


def test_ttl_store_overwrite_gets_fresh_lifetime():
    """A value stored again lives a full TTL from the new insertion."""
    clock = FakeClock()
    store: TTLStore[str] = TTLStore(60, timer=clock)

    store.put("key", "old")
    clock.advance(50)
    store.put("key", "new")
    clock.advance(50)

    assert store.get("key") == "new"


def test_ttl_store_is_unbounded_and_clearable():
    """The store keeps every entry and can be cleared."""
    store: TTLStore[int] = TTLStore(60, timer=FakeClock())

    for i in range(1000):
        store.put(f"movie:{i}", i)

    assert len(store) == 1000
    assert store.get("movie:0") == 0

    store.clear()
    assert len(store) == 0
