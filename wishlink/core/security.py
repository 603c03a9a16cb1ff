"""
wishlink/core/security.py

Purpose: Password digests

- Legacy 32-bit rolling checksum (kept bit-for-bit for stored digests)
- Salted PBKDF2-HMAC-SHA256 for new passwords
- Verification that accepts either format
- Upgrade detection for legacy digests

The legacy checksum is NOT a password hash: collisions and reversal are
cheap. It only exists so that digests written with it keep verifying.
"""

import hashlib
import hmac
import os
from typing import Optional

PBKDF2_PREFIX = "pbkdf2_sha256"
LEGACY_DIGEST_WIDTH = 16


def legacy_digest(password: str) -> str:
    """
    Rolling multiply-and-add checksum over UTF-16 code units.

    hash = hash * 31 + unit, wrapped to a signed 32-bit integer after every
    step; the result is the absolute value in hex, left-padded to 16 digits.

    Args:
        password: Plain text password

    Returns:
        16 hex digit digest
    """
    data = password.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
        if value >= 0x80000000:
            value -= 0x100000000
    return format(abs(value), "x").rjust(LEGACY_DIGEST_WIDTH, "0")


def pbkdf2_digest(password: str, iterations: int = 100_000, salt: Optional[bytes] = None) -> str:
    """
    Hash a password using PBKDF2-HMAC with SHA-256 and a random 16-byte salt.

    Returns:
        "pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>"
    """
    if salt is None:
        salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_PREFIX}${iterations}${salt.hex()}${dk.hex()}"


def is_legacy_digest(digest: str) -> bool:
    """Check whether a stored digest was produced by the legacy checksum."""
    return bool(digest) and not digest.startswith(f"{PBKDF2_PREFIX}$")


def hash_password(password: str, scheme: str = "pbkdf2", iterations: int = 100_000) -> str:
    """
    Computes the digest stored in place of a plaintext password.

    Args:
        password: Plain text password
        scheme: "pbkdf2" or "legacy"
        iterations: PBKDF2 iteration count

    Returns:
        Digest string
    """
    if scheme == "legacy":
        return legacy_digest(password)
    return pbkdf2_digest(password, iterations=iterations)


def verify_password(password: str, digest: str) -> bool:
    """
    Compares a plaintext password with a stored digest of either format.

    Malformed digests never verify.
    """
    if not digest:
        return False

    if is_legacy_digest(digest):
        return hmac.compare_digest(legacy_digest(password).encode(), digest.encode())

    try:
        _, iterations, salt_hex, hash_hex = digest.split("$", 3)
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False

    if rounds <= 0:
        return False

    expected = pbkdf2_digest(password, iterations=rounds, salt=salt)
    return hmac.compare_digest(expected.rsplit("$", 1)[1].encode(), hash_hex.encode())


def needs_rehash(digest: str, scheme: str = "pbkdf2") -> bool:
    """A legacy digest should be replaced once the plaintext is known."""
    return scheme == "pbkdf2" and is_legacy_digest(digest)
