import re

import pytest
from fastapi.testclient import TestClient

from backend.company_notes.api.main import app
from backend.company_notes.api.middleware import NOTE_ERROR_STATUS
from backend.company_notes.models.company import Company
from backend.company_notes.services.auth import AuthService, get_auth_service
from backend.company_notes.services.backends import CompanySource, MemoryNoteBackend
from backend.company_notes.services.config import AppConfig
from backend.company_notes.services.note_store import NoteErrorKind, NoteStore, get_note_store

client = TestClient(app)


class StaticCompanies(CompanySource):
    def __init__(self, companies):
        self._companies = list(companies)

    async def list_companies(self):
        return list(self._companies)

    async def get_company(self, company_id):
        return next((c for c in self._companies if c.id == company_id), None)


@pytest.fixture
def config(tmp_path) -> AppConfig:
    return AppConfig(notes_file_path=tmp_path / "notes.json", environment="development")


@pytest.fixture
def store() -> NoteStore:
    return NoteStore(MemoryNoteBackend())


@pytest.fixture(autouse=True)
def overrides(store, config):
    app.dependency_overrides[get_note_store] = lambda: store
    app.dependency_overrides[get_auth_service] = lambda: AuthService(config=config)
    yield
    app.dependency_overrides = {}


def _as(user_id):
    return {"X-User-Id": user_id}


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", response.json()["time"])


def test_every_error_kind_has_a_status():
    assert set(NOTE_ERROR_STATUS) == set(NoteErrorKind)


def test_create_returns_camel_case_note():
    response = client.post(
        "/notes", json={"companyId": 1, "content": "Hello", "isPrivate": True}, headers=_as("user-1")
    )

    assert response.status_code == 201
    note = response.json()["note"]
    assert note["companyId"] == 1
    assert note["isPrivate"] is True
    assert note["userId"] == "user-1"
    assert note["id"] and note["createdAt"]


@pytest.mark.parametrize(
    "body",
    [{"content": "missing company"}, {"companyId": 1}, {"companyId": 1, "content": ""}],
)
def test_create_rejects_missing_fields(body):
    response = client.post("/notes", json=body, headers=_as("user-1"))

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_note_lifecycle_over_http():
    created = client.post(
        "/notes",
        json={"companyId": 1, "content": "First note", "isPrivate": True},
        headers=_as("user-1"),
    ).json()["note"]

    own = client.get("/companies/1/notes", headers=_as("user-1")).json()["notes"]
    assert [n["id"] for n in own] == [created["id"]]
    assert client.get("/companies/1/notes", headers=_as("user-2")).json()["notes"] == []

    forbidden = client.put(
        f"/notes/{created['id']}", json={"content": "hijack"}, headers=_as("user-2")
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "not_authorized"

    updated = client.put(
        f"/notes/{created['id']}",
        json={"content": "Updated", "isPrivate": False},
        headers=_as("user-1"),
    )
    assert updated.status_code == 200
    assert updated.json()["note"]["content"] == "Updated"
    others = client.get("/companies/1/notes", headers=_as("user-2")).json()["notes"]
    assert [n["content"] for n in others] == ["Updated"]

    deleted = client.delete(f"/notes/{created['id']}", headers=_as("user-1"))
    assert deleted.status_code == 204
    assert deleted.content == b""
    assert client.get("/companies/1/notes", headers=_as("user-1")).json()["notes"] == []


def test_update_requires_content():
    created = client.post(
        "/notes", json={"companyId": 1, "content": "x"}, headers=_as("user-1")
    ).json()["note"]

    response = client.put(f"/notes/{created['id']}", json={"isPrivate": True}, headers=_as("user-1"))

    assert response.status_code == 400
    assert response.json()["message"] == "content is required"


def test_unknown_note_is_404():
    assert client.put("/notes/nope", json={"content": "x"}, headers=_as("user-1")).status_code == 404
    assert client.delete("/notes/nope", headers=_as("user-1")).status_code == 404


def test_invalid_company_id_is_400():
    response = client.get("/companies/abc/notes")

    assert response.status_code == 400


def test_companies_without_hosted_backend_is_503():
    response = client.get("/companies", headers=_as("user-1"))

    assert response.status_code == 503
    assert response.json()["error"] == "not_configured"


def test_companies_listing(store):
    store.companies = StaticCompanies([Company(id=1, name="Acme")])

    response = client.get("/companies", headers=_as("user-1"))

    assert response.status_code == 200
    assert response.json()["companies"][0]["name"] == "Acme"


def test_anonymous_callers_in_production(tmp_path):
    prod = AppConfig(notes_file_path=tmp_path / "notes.json", environment="production")
    app.dependency_overrides[get_auth_service] = lambda: AuthService(config=prod)

    assert client.post("/notes", json={"companyId": 1, "content": "x"}).status_code == 401
    assert client.get("/companies").status_code == 401
    assert client.get("/companies/1/notes").status_code == 200
    basic = client.get("/companies/1/notes", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert basic.status_code == 200

    rejected = client.get("/companies/1/notes", headers={"Authorization": "Bearer bogus"})
    assert rejected.status_code == 401
    assert rejected.json()["error"] == "invalid_token"


def test_unexpected_errors_are_generic(store):
    class Broken(MemoryNoteBackend):
        async def list_notes(self, company_id):
            raise RuntimeError("disk on fire at /secret/path")

    store.notes = Broken()
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/companies/1/notes")

    assert response.status_code == 500
    assert response.json()["message"] == "Unexpected server error"
    assert "secret" not in response.text
