import os
import sys
from datetime import date

import pytest

# Must be set before wishlink.core.config builds the global settings
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from wishlink.core.config import Settings
from wishlink.core.context import build_context
from wishlink.db.store import MemoryStore
from wishlink.main import create_app
from wishlink.models.wish import WishForm


@pytest.fixture
def settings():
    return Settings(
        STORAGE_BACKEND="memory",
        SCHEDULER_ENABLED=False,
        PASSWORD_HASH_ITERATIONS=1000,
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def context(settings, store):
    return build_context(settings, store=store)


@pytest.fixture
def client(context):
    return TestClient(create_app(context))


@pytest.fixture
def make_form():
    def _make_form(**overrides):
        data = {
            "sender_name": "Asha",
            "sender_phone": "5551234567",
            "recipient_name": "Ravi",
            "recipient_phone": "5559876543",
            "occasion": "birthday",
            "message": "Happy birthday, have a wonderful year!",
            "photos": [],
            "occasion_date": date(2026, 10, 19),
        }
        data.update(overrides)
        return WishForm(**data)

    return _make_form
