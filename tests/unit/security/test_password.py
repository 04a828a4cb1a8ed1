"""Unit tests for security/password.py"""

import pytest

from keepnotes.core.errors import HashingError, InvalidArgument
from keepnotes.security.password import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    digest = hasher.hash("pw1")
    assert digest != "pw1"
    assert hasher.verify("pw1", digest) is True
    assert hasher.verify("pw2", digest) is False


def test_same_password_gets_different_salts(hasher):
    assert hasher.hash("pw1") != hasher.hash("pw1")


def test_long_passwords_are_not_truncated(hasher):
    base = "x" * 72
    digest = hasher.hash(base + "a")
    assert hasher.verify(base + "a", digest) is True
    assert hasher.verify(base + "b", digest) is False


def test_verify_never_raises_on_garbage(hasher):
    assert hasher.verify("pw1", "not-a-hash") is False
    assert hasher.verify("pw1", "") is False


def test_needs_update(hasher):
    assert hasher.needs_update(hasher.hash("pw1")) is False
    assert hasher.needs_update("not-a-hash") is True


def test_hash_failure_is_hashing_error(hasher, monkeypatch):
    def boom(secret):
        raise ValueError("backend exploded")

    monkeypatch.setattr(hasher.context, "hash", boom)
    with pytest.raises(HashingError):
        hasher.hash("pw1")


async def test_async_variants(hasher):
    digest = await hasher.hash_async("pw1")
    assert await hasher.verify_async("pw1", digest) is True
    assert await hasher.verify_async("nope", digest) is False


def test_oversized_password_is_invalid_argument(hasher):
    with pytest.raises(InvalidArgument):
        hasher.hash("x" * 5000)


def test_digest_below_configured_cost_needs_update(hasher):
    assert PasswordHasher(rounds=5).needs_update(hasher.hash("pw1")) is True
    # a stronger digest is never downgraded
    assert hasher.needs_update(PasswordHasher(rounds=5).hash("pw1")) is False
