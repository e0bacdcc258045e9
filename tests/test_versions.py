import pytest

from vaultop.versions import VersionNotFoundError, VersionStore


def test_record_increments_version():
    store = VersionStore()
    first = store.record("db/pass", "alpha")
    second = store.record("db/pass", "beta")
    assert first.version == 1
    assert second.version == 2


def test_versions_are_per_key():
    store = VersionStore()
    store.record("a", "x")
    assert store.record("b", "y").version == 1


def test_get_returns_correct_entry():
    store = VersionStore()
    store.record("k", "v1")
    store.record("k", "v2")
    assert store.get("k", 1).value == "v1"
    assert store.get("k", 2).value == "v2"


def test_get_unknown_key_raises():
    store = VersionStore()
    with pytest.raises(VersionNotFoundError):
        store.get("missing", 1)


def test_get_out_of_range_raises():
    store = VersionStore()
    store.record("k", "only")
    with pytest.raises(VersionNotFoundError):
        store.get("k", 99)


def test_get_version_zero_raises():
    store = VersionStore()
    store.record("k", "only")
    with pytest.raises(VersionNotFoundError):
        store.get("k", 0)


def test_latest_returns_most_recent():
    store = VersionStore()
    store.record("k", "first")
    store.record("k", "second")
    store.record("k", "third")
    entry = store.latest("k")
    assert entry.value == "third"
    assert entry.version == 3


def test_latest_unknown_key_raises():
    store = VersionStore()
    with pytest.raises(VersionNotFoundError):
        store.latest("ghost")


def test_list_returns_all_in_order():
    store = VersionStore()
    values = ["a", "b", "c"]
    for value in values:
        store.record("k", value)
    assert [entry.value for entry in store.list("k")] == values
    assert [entry.version for entry in store.list("k")] == [1, 2, 3]


def test_list_returns_copy():
    store = VersionStore()
    store.record("k", "a")
    listed = store.list("k")
    listed.clear()
    assert store.count("k") == 1


def test_list_unknown_key_is_empty():
    assert VersionStore().list("nope") == []


def test_count_returns_correct_total():
    store = VersionStore()
    assert store.count("k") == 0
    store.record("k", "x")
    store.record("k", "y")
    assert store.count("k") == 2