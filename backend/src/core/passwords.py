"""Password hashing with scrypt."""
import hashlib
import hmac
import secrets

# scrypt cost parameters: ~16 MiB of memory and tens of milliseconds per derivation
_SCRYPT_N = 2**14
_SCRYPT_R = 8
_SCRYPT_P = 1
_SCRYPT_MAXMEM = 64 * 1024 * 1024
_KEY_LENGTH = 64
_SALT_BYTES = 16


def _derive_key(password: str, salt: str) -> bytes:
    """Derive a key from the password using the hex salt string as KDF salt."""
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        maxmem=_SCRYPT_MAXMEM,
        dklen=_KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """
    Hash a plain-text password.

    Returns:
        Credential string in the form ``salt:derived_key_hex``.
    """
    salt = secrets.token_hex(_SALT_BYTES)
    return f"{salt}:{_derive_key(password, salt).hex()}"


def verify_password(password: str, credential: object) -> bool:
    """
    Check a password against a stored credential.

    Returns False for anything malformed (non-string, missing salt or key,
    non-hex key, wrong key length) instead of raising.
    """
    if not isinstance(credential, str) or not credential:
        return False

    salt, _, stored_hex = credential.partition(":")
    if not salt or not stored_hex:
        return False

    try:
        stored = bytes.fromhex(stored_hex)
    except ValueError:
        return False

    calculated = _derive_key(password, salt)
    if len(calculated) != len(stored):
        return False

    return hmac.compare_digest(calculated, stored)
