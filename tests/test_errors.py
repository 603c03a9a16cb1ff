from fastapi.testclient import TestClient
from wishlink.main import app
import pytest

client = TestClient(app)

def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure():
    # A message shorter than the form minimum is rejected before reaching the repository
    response = client.post("/api/v1/wishes", json={
        "sender_name": "Asha",
        "sender_phone": "5551234567",
        "recipient_name": "Ravi",
        "recipient_phone": "5559876543",
        "occasion": "birthday",
        "message": "short",
        "occasion_date": "2026-10-19",
    })
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0

def test_custom_exception():
    from wishlink.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["error"] == "Item not found"

def test_conflict_exception():
    from wishlink.core.exceptions import ConflictError

    @app.get("/test-conflict-error")
    def trigger_conflict():
        raise ConflictError()

    response = client.get("/test-conflict-error")
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"

def test_unknown_wish_code_is_404():
    response = client.get("/api/v1/wishes/code/ZZZZZZ")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
