"""Tests for password hashing."""

import pytest

from src.services.passwords import get_password_hash, verify_password


def test_hash_is_not_plaintext():
    """The digest never contains the password."""
    digest = get_password_hash("pw123")
    assert digest != "pw123"
    assert "pw123" not in digest
    assert digest.startswith("$2b$")


def test_hashes_are_salted():
    """Hashing the same password twice gives different digests."""
    assert get_password_hash("pw123") != get_password_hash("pw123")


@pytest.mark.parametrize("password", ["pw123", "correct horse battery staple", "pässwörd", "x"])
def test_verify_matching_password(password):
    """A password verifies against its own digest."""
    assert verify_password(password, get_password_hash(password))


def test_verify_wrong_password():
    """A different password does not verify."""
    digest = get_password_hash("pw123")
    assert not verify_password("pw124", digest)
    assert not verify_password("PW123", digest)
    assert not verify_password("", digest)
