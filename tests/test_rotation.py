import base64
from datetime import timedelta

import pytest

from vaultop.provider import InMemoryProvider, ProviderType, new_provider
from vaultop.rotation import (
    DEFAULT_SECRET_LENGTH,
    GenerationError,
    PolicyError,
    RotationOptions,
    RotationPolicy,
    Rotator,
    default_generator,
    error_generator,
    fixed_generator,
    random_bytes_generator,
)


@pytest.fixture
def provider():
    return new_provider(ProviderType.AWS)


class FailingProvider(InMemoryProvider):
    def set_secret(self, name, value):
        raise RuntimeError("set error")


def test_default_generator_returns_non_empty_string():
    value = default_generator("any-id")
    assert len(value) > 0


def test_default_generator_decodes_to_32_bytes():
    value = default_generator("any-id")
    assert len(base64.urlsafe_b64decode(value)) == 32


def test_default_generator_unique_values():
    values = {default_generator("id") for _ in range(5)}
    assert len(values) == 5


def test_fixed_generator_returns_fixed():
    gen = fixed_generator("static-value")
    assert [gen(i) for i in ("a", "b", "c")] == ["static-value"] * 3


def test_error_generator_raises():
    gen = error_generator("something went wrong")
    with pytest.raises(GenerationError, match="something went wrong"):
        gen("id")


def test_random_bytes_generator_length():
    gen = random_bytes_generator(16)
    assert len(base64.urlsafe_b64decode(gen("x"))) == 16


@pytest.mark.parametrize("n", [0, -3])
def test_random_bytes_generator_rejects_non_positive(n):
    with pytest.raises(ValueError):
        random_bytes_generator(n)


def test_policy_validate_valid():
    policy = RotationPolicy(key="db/password", interval=timedelta(hours=24), length=32)
    policy.validate()
    assert policy.effective_length() == 32


def test_policy_validate_empty_key():
    with pytest.raises(PolicyError):
        RotationPolicy(key="", interval=timedelta(hours=24)).validate()


def test_policy_validate_negative_length():
    with pytest.raises(PolicyError):
        RotationPolicy(key="api/token", length=-1).validate()


def test_policy_effective_length_uses_default():
    assert RotationPolicy(key="k", length=0).effective_length() == DEFAULT_SECRET_LENGTH


def test_policy_effective_length_uses_explicit():
    assert RotationPolicy(key="k", length=64).effective_length() == 64


def test_rotate_sets_new_values(provider):
    rotator = Rotator(provider, RotationOptions(generator=fixed_generator("new-val")))
    results = rotator.rotate(["sec/a", "sec/b"])
    assert [r.secret_id for r in results] == ["sec/a", "sec/b"]
    assert all(r.error is None for r in results)
    assert provider.get_secret("sec/a") == "new-val"
    assert provider.get_secret("sec/b") == "new-val"


def test_rotate_reports_provider_kind(provider):
    results = Rotator(provider, RotationOptions(generator=fixed_generator("v"))).rotate(["k"])
    assert results[0].provider == "aws"


def test_rotate_dry_run_does_not_persist(provider):
    provider.set_secret("sec/x", "original")
    rotator = Rotator(
        provider, RotationOptions(dry_run=True, generator=fixed_generator("changed"))
    )
    results = rotator.rotate(["sec/x"])
    assert results[0].error is None
    assert provider.get_secret("sec/x") == "original"


def test_rotate_generator_error_recorded(provider):
    rotator = Rotator(provider, RotationOptions(generator=error_generator("boom")))
    results = rotator.rotate(["sec/fail"])
    assert isinstance(results[0].error, GenerationError)
    assert "boom" in str(results[0].error)
    assert provider.list_secrets("") == []


def test_rotate_set_error_recorded():
    failing = FailingProvider(ProviderType.GCP)
    results = Rotator(failing, RotationOptions(generator=fixed_generator("v"))).rotate(["k"])
    assert isinstance(results[0].error, RuntimeError)
    assert results[0].ok is False


def test_rotate_uses_default_generator(provider):
    Rotator(provider).rotate(["k"])
    assert len(base64.urlsafe_b64decode(provider.get_secret("k"))) == 32