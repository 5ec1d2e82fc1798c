"""
Tests for the JSON error envelope produced by the exception handlers.
"""
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest
from sqlalchemy.exc import IntegrityError

from src.api.middleware.error_handler import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    integrity_error_to_exception,
    setup_exception_handlers,
)
from src.shared.core.exceptions import ConflictError, PostNotFoundError


class DriverError(Exception):
    def __init__(self, sqlstate):
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def integrity_error(sqlstate) -> IntegrityError:
    return IntegrityError("INSERT INTO posts ...", {}, DriverError(sqlstate))


@pytest.fixture
def client():
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/unique")
    async def unique():
        raise integrity_error(UNIQUE_VIOLATION)

    @app.get("/foreign-key")
    async def foreign_key():
        raise integrity_error(FOREIGN_KEY_VIOLATION)

    @app.get("/missing")
    async def missing():
        raise PostNotFoundError("abc")

    return TestClient(app, raise_server_exceptions=False)


class TestIntegrityErrors:
    def test_unique_violation_is_conflict(self, client):
        response = client.get("/unique")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"
        assert response.json()["error"]["message"] == "Resource already exists"

    def test_foreign_key_violation_is_bad_request(self, client):
        response = client.get("/foreign-key")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert response.json()["error"]["message"] == "Referenced record does not exist"

    def test_unknown_sqlstate_falls_back_to_conflict(self):
        error = integrity_error_to_exception(integrity_error(None))

        assert isinstance(error, ConflictError)
        assert error.status_code == 409


def test_application_error_envelope(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
