"""Tests for scrypt password hashing."""
import hashlib

import pytest

from core.passwords import hash_password, verify_password


def test__hash_password__returns_salt_and_hex_key() -> None:
    credential = hash_password("correct horse battery staple")

    salt, _, key_hex = credential.partition(":")
    assert len(salt) == 32
    assert len(key_hex) == 128
    int(salt, 16)
    int(key_hex, 16)


def test__hash_password__uses_fresh_salt_each_time() -> None:
    assert hash_password("same password") != hash_password("same password")


def test__verify_password__accepts_matching_password() -> None:
    credential = hash_password("s3cret-Password")
    assert verify_password("s3cret-Password", credential) is True


def test__verify_password__rejects_different_password() -> None:
    credential = hash_password("s3cret-Password")
    assert verify_password("s3cret-password", credential) is False
    assert verify_password("", credential) is False


def test__verify_password__accepts_credentials_derived_from_salt_string() -> None:
    """The hex salt text (not its decoded bytes) is the KDF salt."""
    salt = "00112233445566778899aabbccddeeff"
    key = hashlib.scrypt(
        b"legacy-password", salt=salt.encode(), n=16384, r=8, p=1, dklen=64,
    )
    assert verify_password("legacy-password", f"{salt}:{key.hex()}") is True


@pytest.mark.parametrize(
    "credential",
    [
        None,
        42,
        "",
        "no-separator",
        ":deadbeef",
        "salt:",
        "salt:not-hex",
        "salt:abcd",
        "salt:" + "ab" * 32,
    ],
)
def test__verify_password__fails_closed_on_malformed_credential(credential: object) -> None:
    assert verify_password("anything", credential) is False
