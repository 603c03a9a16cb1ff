from wishlink.core.security import (
    hash_password,
    is_legacy_digest,
    legacy_digest,
    needs_rehash,
    pbkdf2_digest,
    verify_password,
)


def test_legacy_digest_known_values():
    assert legacy_digest("") == "0000000000000000"
    assert legacy_digest("a") == "0000000000000061"
    # ((97 * 31) + 98) * 31 + 99 = 96354 = 0x17862
    assert legacy_digest("abc") == "0000000000017862"


def test_legacy_digest_wraps_to_signed_32_bit():
    # Long inputs overflow many times; result is always 16 hex digits
    digest = legacy_digest("a much longer password with 123 digits and letters")
    assert len(digest) == 16
    assert int(digest, 16) <= 2 ** 31


def test_legacy_digest_uses_utf16_code_units():
    # U+1F600 is one surrogate pair: 0xD83D, 0xDE00
    expected = (0xD83D * 31 + 0xDE00) & 0xFFFFFFFF
    assert legacy_digest("\U0001F600") == format(expected, "x").rjust(16, "0")


def test_legacy_digest_is_deterministic():
    assert legacy_digest("abc123") == legacy_digest("abc123")
    assert legacy_digest("abc123") != legacy_digest("abc124")


def test_pbkdf2_roundtrip():
    digest = hash_password("abc123", iterations=1000)
    assert digest.startswith("pbkdf2_sha256$1000$")
    assert verify_password("abc123", digest)
    assert not verify_password("abc124", digest)


def test_pbkdf2_is_salted():
    assert pbkdf2_digest("abc123", iterations=1000) != pbkdf2_digest("abc123", iterations=1000)


def test_verify_accepts_legacy_digests():
    digest = hash_password("abc123", scheme="legacy")
    assert is_legacy_digest(digest)
    assert verify_password("abc123", digest)
    assert not verify_password("wrong1", digest)


def test_malformed_digests_never_verify():
    assert not verify_password("abc123", "")
    assert not verify_password("abc123", "pbkdf2_sha256$notanumber$00$00")
    assert not verify_password("abc123", "pbkdf2_sha256$1000$zz$00")
    assert not verify_password("abc123", "pbkdf2_sha256$0$00$00")


def test_needs_rehash():
    assert needs_rehash(legacy_digest("abc123"), "pbkdf2")
    assert not needs_rehash(legacy_digest("abc123"), "legacy")
    assert not needs_rehash(pbkdf2_digest("abc123", iterations=1000), "pbkdf2")
