import pytest

from vaultop.provider import (
    InMemoryProvider,
    ProviderType,
    SecretNotFoundError,
    UnsupportedProviderError,
    is_valid_type,
    new_provider,
)


@pytest.mark.parametrize("kind", list(ProviderType))
def test_type_is_valid(kind):
    assert is_valid_type(kind) is True


def test_type_string_values_are_valid():
    assert all(is_valid_type(name) for name in ("aws", "gcp", "azure", "vault"))


def test_unknown_type_is_invalid():
    assert is_valid_type("unknown") is False


def test_new_unsupported_provider():
    with pytest.raises(UnsupportedProviderError):
        new_provider("bogus", None)


def test_new_returns_in_memory_of_kind():
    p = new_provider(ProviderType.GCP, {"region": "eu"})
    assert isinstance(p, InMemoryProvider)
    assert p.kind is ProviderType.GCP
    assert p.opts == {"region": "eu"}


def test_stub_set_get():
    p = new_provider(ProviderType.AWS, None)
    p.set_secret("db/password", "s3cr3t")
    assert p.get_secret("db/password") == "s3cr3t"


def test_stub_delete_and_list():
    p = new_provider(ProviderType.VAULT, None)
    p.set_secret("app/key1", "v1")
    p.set_secret("app/key2", "v2")
    p.set_secret("other", "v3")

    assert sorted(p.list_secrets("app/")) == ["app/key1", "app/key2"]

    p.delete_secret("app/key1")
    with pytest.raises(SecretNotFoundError):
        p.get_secret("app/key1")


def test_list_with_empty_prefix_returns_all():
    p = new_provider("azure", None)
    p.set_secret("a", "1")
    p.set_secret("b", "2")
    assert sorted(p.list_secrets("")) == ["a", "b"]


def test_delete_missing_raises():
    p = new_provider("aws", None)
    with pytest.raises(SecretNotFoundError) as info:
        p.delete_secret("nope")
    assert "nope" in str(info.value)
    assert str(info.value).startswith("aws:")