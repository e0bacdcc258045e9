from datetime import datetime, timedelta, timezone

import pytest

from vaultop.ttl import ExpiredError, TTLEntry, TTLMap

EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_set_and_get():
    ttl_map = TTLMap()
    ttl_map.set("db/pass", timedelta(hours=1), EPOCH)
    entry = ttl_map.get("db/pass")
    assert entry is not None
    assert entry.expires_at == EPOCH + timedelta(hours=1)
    assert entry.key == "db/pass"


def test_get_missing():
    assert TTLMap().get("missing") is None


def test_check_expired_raises():
    ttl_map = TTLMap()
    ttl_map.set("k", timedelta(minutes=1), EPOCH)
    with pytest.raises(ExpiredError) as info:
        ttl_map.check("k", EPOCH + timedelta(minutes=2))
    assert info.value.key == "k"


def test_check_not_expired():
    ttl_map = TTLMap()
    ttl_map.set("k", timedelta(hours=1), EPOCH)
    ttl_map.check("k", EPOCH)
    assert ttl_map.expired(EPOCH) == []


def test_check_missing_key_no_error():
    ttl_map = TTLMap()
    ttl_map.check("nope", EPOCH)
    assert ttl_map.get("nope") is None


def test_expired_returns_expired_keys():
    ttl_map = TTLMap()
    ttl_map.set("a", timedelta(minutes=1), EPOCH)
    ttl_map.set("b", timedelta(hours=1), EPOCH)
    assert ttl_map.expired(EPOCH + timedelta(minutes=5)) == ["a"]


def test_expired_none_expired():
    ttl_map = TTLMap()
    ttl_map.set("a", timedelta(hours=1), EPOCH)
    ttl_map.set("b", timedelta(hours=2), EPOCH)
    assert ttl_map.expired(EPOCH) == []


def test_delete_removes_entry():
    ttl_map = TTLMap()
    ttl_map.set("x", timedelta(hours=1), EPOCH)
    ttl_map.delete("x")
    assert ttl_map.get("x") is None


def test_entry_not_expired_at_exact_expiry():
    entry = TTLEntry(key="k", expires_at=EPOCH)
    assert entry.is_expired(EPOCH) is False
    assert entry.is_expired(EPOCH + timedelta(microseconds=1)) is True


def test_entry_to_dict():
    entry = TTLEntry(key="k", expires_at=EPOCH)
    assert entry.to_dict() == {"key": "k", "expires_at": "2024-01-01T12:00:00+00:00"}