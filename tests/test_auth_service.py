import logging

import pytest

from wishlink.core.security import legacy_digest
from wishlink.services.auth_service import AuthDirectory
from wishlink.services.session_service import SessionService
from utils.constants import CURRENT_USER_KEY, USERS_KEY

PHONE = "5551234567"


@pytest.fixture
def sessions(store):
    return SessionService(store)


@pytest.fixture
def auth(store, sessions):
    return AuthDirectory(store, sessions, hash_iterations=1000)


def test_register_login_change_password_scenario(auth):
    assert auth.register(PHONE, "abc123") is True
    assert auth.login(PHONE, "abc123") is True
    assert auth.login(PHONE, "wrong1") is False
    assert auth.change_password(PHONE, "abc123", "xyz789") is True
    assert auth.login(PHONE, "abc123") is False
    assert auth.login(PHONE, "xyz789") is True


def test_register_twice_is_rejected(auth):
    assert auth.register(PHONE, "abc123") is True
    assert auth.register(PHONE, "other99") is False
    # Original password still works
    assert auth.login(PHONE, "abc123") is True
    assert auth.login(PHONE, "other99") is False


def test_register_starts_session(auth, sessions):
    auth.register(PHONE, "abc123")
    assert sessions.get_current_phone() == PHONE
    assert auth.current_user().phone == PHONE


def test_register_stores_digest_not_plaintext(auth, store):
    auth.register(PHONE, "abc123")
    record = store.get(USERS_KEY)[PHONE]
    assert record["phone"] == PHONE
    assert "abc123" not in record["password_digest"]
    assert record["created_at"]


def test_is_registered(auth):
    assert auth.is_registered(PHONE) is False
    auth.register(PHONE, "abc123")
    assert auth.is_registered(PHONE) is True


def test_login_unknown_phone_fails(auth, sessions):
    assert auth.login("5550000000", "abc123") is False
    assert sessions.get_current_phone() is None


def test_failed_login_keeps_existing_session(auth, sessions):
    auth.register(PHONE, "abc123")
    auth.register("5550000000", "abc123")
    assert auth.login(PHONE, "nope99") is False
    assert sessions.get_current_phone() == "5550000000"


def test_logout_clears_session(auth, store):
    auth.register(PHONE, "abc123")
    auth.logout()
    assert auth.current_user() is None
    assert store.get(CURRENT_USER_KEY, "missing") is None
    auth.logout()
    assert auth.current_user() is None


def test_current_user_with_dangling_session(auth, sessions):
    sessions.set_current_phone("5550000000")
    assert auth.current_user() is None


def test_change_password_unknown_phone(auth):
    assert auth.change_password("5550000000", "abc123", "xyz789") is False


def test_change_password_wrong_old_password(auth):
    auth.register(PHONE, "abc123")
    assert auth.change_password(PHONE, "wrong1", "xyz789") is False
    assert auth.login(PHONE, "abc123") is True


def test_change_password_does_not_touch_session(auth, sessions):
    auth.register(PHONE, "abc123")
    auth.logout()
    assert auth.change_password(PHONE, "abc123", "xyz789") is True
    assert sessions.get_current_phone() is None


def test_legacy_scheme_stores_checksum(store, sessions):
    auth = AuthDirectory(store, sessions, hash_scheme="legacy")
    auth.register(PHONE, "abc123")
    assert store.get(USERS_KEY)[PHONE]["password_digest"] == legacy_digest("abc123")
    assert auth.login(PHONE, "abc123") is True


def test_legacy_digest_upgraded_on_login(store, auth):
    store.set(USERS_KEY, {
        PHONE: {
            "phone": PHONE,
            "password_digest": legacy_digest("abc123"),
            "created_at": "2025-01-01T00:00:00+00:00",
        }
    })

    assert auth.login(PHONE, "abc123") is True
    upgraded = store.get(USERS_KEY)[PHONE]["password_digest"]
    assert upgraded.startswith("pbkdf2_sha256$")
    assert auth.login(PHONE, "abc123") is True


def test_corrupt_users_blob_reads_as_empty(auth, store):
    store.data[USERS_KEY] = "{{{"
    assert auth.is_registered(PHONE) is False
    assert auth.register(PHONE, "abc123") is True


def test_non_string_session_is_ignored(store, sessions):
    store.set(CURRENT_USER_KEY, 12345)
    assert sessions.get_current_phone() is None


def test_unreadable_user_record_is_kept_and_phone_stays_taken(auth, store):
    broken = {"phone": "5550000000"}
    store.set(USERS_KEY, {"5550000000": broken})

    assert auth.is_registered("5550000000") is True
    assert auth.register("5550000000", "abc123") is False
    assert auth.register(PHONE, "abc123") is True

    users = store.get(USERS_KEY)
    assert users["5550000000"] == broken
    assert PHONE in users


def test_first_release_user_logs_in_and_is_upgraded(auth, store):
    store.set(USERS_KEY, {
        PHONE: {
            "phone": PHONE,
            "passwordHash": legacy_digest("abc123"),
            "createdAt": "2025-01-01T00:00:00.000Z",
        }
    })

    assert auth.is_registered(PHONE) is True
    assert auth.login(PHONE, "wrong1") is False
    assert auth.login(PHONE, "abc123") is True

    record = store.get(USERS_KEY)[PHONE]
    assert record["password_digest"].startswith("pbkdf2_sha256$")
    assert auth.current_user().created_at.year == 2025


def test_phone_numbers_are_masked_in_logs(auth, caplog):
    with caplog.at_level(logging.DEBUG, logger="wishlink"):
        auth.register(PHONE, "abc123")
        auth.login(PHONE, "abc123")
        auth.change_password(PHONE, "abc123", "xyz789")

    assert caplog.records
    for record in caplog.records:
        assert PHONE not in record.getMessage()
        assert getattr(record, "phone", None) in (None, "******4567")
