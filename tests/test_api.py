"""
HTTP tests for the FastAPI app.

Most tests skip the lifespan and inject a fake database through the `get_db`
dependency. The startup tests patch `Database.connect` instead.
"""

import asyncpg
import pytest
from fastapi.testclient import TestClient

import main
from core.db import StoreUnavailableError
from core.dependencies import get_db
from main import create_app
from tests.fakes import FakeTableDb, RecordingDb, UnreachableDb
from tests.test_aggregate import FULL_TABLES


@pytest.fixture
def app():
    return create_app()


def _client(app, db=None) -> TestClient:
    if db is not None:
        app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


def test_health_does_not_need_database(app):
    resp = _client(app).get("/api")
    assert resp.status_code == 200
    assert resp.json()["database"] is False


def test_all_data(app):
    resp = _client(app, FakeTableDb(FULL_TABLES)).get("/api/all-data")

    assert resp.status_code == 200
    body = resp.json()
    assert body["users"][0]["avatarUrl"] == "a.png"
    assert body["legalContent"]["terms"]["content"] == "new"


def test_all_data_with_missing_table_still_200(app):
    tables = {k: v for k, v in FULL_TABLES.items() if k != "contact_info"}

    resp = _client(app, FakeTableDb(tables)).get("/api/all-data")

    assert resp.status_code == 200
    assert resp.json()["contactInfo"] is None


def test_no_database_connection_is_503(app):
    resp = _client(app).get("/api/all-data")

    assert resp.status_code == 503
    assert resp.json()["message"] == "Service Unavailable: Could not connect to the database."


def test_store_dropping_mid_request_is_503(app):
    resp = _client(app, UnreachableDb()).get("/api/users")
    assert resp.status_code == 503


def test_partial_user_update_only_sets_given_columns(app):
    db = RecordingDb([{"id": 1, "name": "New", "avatarUrl": "legacy.png", "is_verified": 1}])

    resp = _client(app, db).put("/api/users/1", json={"name": "New", "isVerified": True})

    assert resp.status_code == 200
    assert resp.json()["avatarUrl"] == "legacy.png"
    method, sql, args = db.calls[0]
    assert method == "fetch_one"
    assert '"name" = $2' in sql
    assert '"is_verified" = $3' in sql
    assert "avatar_url" not in sql
    assert args == (1, "New", 1)


def test_update_prefers_formal_photo(app):
    db = RecordingDb([{"id": 2, "avatar_url": "formal.png"}])

    _client(app, db).put("/api/users/2", json={"avatarUrl": "a.png", "formalPhotoUrl": "formal.png"})

    _, sql, args = db.calls[0]
    assert '"avatar_url" = $2' in sql
    assert args == (2, "formal.png")


def test_update_unknown_user_is_404(app):
    resp = _client(app, RecordingDb([None])).put("/api/users/99", json={"name": "x"})
    assert resp.status_code == 404


def test_update_with_empty_body_reads_row(app):
    db = RecordingDb([{"id": 5, "title": "Same"}])

    resp = _client(app, db).put("/api/articles/5", json={})

    assert resp.status_code == 200
    assert resp.json()["title"] == "Same"
    assert db.calls[0][1].strip().startswith('SELECT * FROM "articles"')


def test_create_article_maps_cover(app):
    db = RecordingDb([{"id": 10, "title": "T", "cover_image_url": "c.jpg"}])

    resp = _client(app, db).post("/api/articles", json={"title": "T", "imageUrl": "c.jpg"})

    assert resp.status_code == 201
    assert resp.json()["coverImageUrl"] == "c.jpg"
    _, sql, args = db.calls[0]
    assert '"cover_image_url"' in sql
    assert args == ("T", "c.jpg")


def test_duplicate_email_is_409(app):
    db = RecordingDb([asyncpg.UniqueViolationError("duplicate key value")])

    resp = _client(app, db).post("/api/users", json={"email": "a@b.c"})

    assert resp.status_code == 409


def test_delete_article(app):
    resp = _client(app, RecordingDb([{"id": 3}])).delete("/api/articles/3")
    assert resp.json() == {"ok": True, "id": 3}

    missing = _client(app, RecordingDb([None])).delete("/api/articles/3")
    assert missing.status_code == 404


def test_replace_structure(app):
    db = RecordingDb(
        [
            None,
            {"id": 1, "name": "A", "position": "Chair", "photo_url": "a.png"},
            {"id": 2, "name": "B", "position": "Secretary", "photo_url": None},
            None,
        ]
    )

    resp = _client(app, db).put(
        "/api/structure",
        json=[
            {"id": 1, "name": "A", "position": "Chair", "photoUrl": "a.png"},
            {"id": 2, "name": "B", "position": "Secretary"},
        ],
    )

    assert resp.status_code == 200
    assert [item["name"] for item in resp.json()] == ["A", "B"]
    assert db.calls[0] == ("execute", 'DELETE FROM "structure"', ())
    second_insert = db.calls[2]
    assert "photo_url" not in second_insert[1]
    assert "setval" in db.calls[3][1]


def test_contact_info_absent_is_null(app):
    resp = _client(app, RecordingDb([None])).get("/api/contact-info")
    assert resp.status_code == 200
    assert resp.json() is None


def test_profile_put_upserts_only_given_columns(app):
    db = RecordingDb([{"id": 1, "legality_text": "T", "mission": '["x"]'}])

    resp = _client(app, db).put("/api/profile", json={"legality": {"text": "T"}})

    assert resp.status_code == 200
    assert resp.json()["legality"] == {"text": "T", "sk": ""}
    _, sql, args = db.calls[0]
    assert "ON CONFLICT (id) DO UPDATE" in sql
    assert '"legality_text" = EXCLUDED."legality_text"' in sql
    assert "mission" not in sql
    assert args == (1, "T")


def test_replace_inserts_explicit_ids_before_drawing_from_sequence(app):
    db = RecordingDb(
        [
            None,
            {"id": 1, "name": "A"},
            None,
            {"id": 2, "name": "B"},
        ]
    )

    resp = _client(app, db).put("/api/structure", json=[{"name": "B"}, {"id": 1, "name": "A"}])

    assert resp.status_code == 200
    assert [item["name"] for item in resp.json()] == ["B", "A"]
    kinds = [(method, "setval" in sql) for method, sql, _ in db.calls]
    assert kinds == [("execute", False), ("fetch_one", False), ("execute", True), ("fetch_one", False)]
    assert db.calls[1][2] == ("A", 1)
    assert db.calls[3][2] == ("B",)


def test_replace_with_duplicate_value_is_409(app):
    db = RecordingDb(
        [
            None,
            {"id": 1, "name": "A"},
            None,
            asyncpg.UniqueViolationError("duplicate key value"),
        ]
    )

    resp = _client(app, db).put("/api/structure", json=[{"id": 1, "name": "A"}, {"name": "B"}])

    assert resp.status_code == 409


class _MigratingDb(RecordingDb):
    def __init__(self, error: BaseException):
        super().__init__()
        self.error = error
        self.closed = False

    async def execute(self, sql, *args):
        self.calls.append(("execute", sql, args))
        raise self.error

    async def close(self):
        self.closed = True


def _start_with(monkeypatch, db) -> TestClient:
    async def connect(*args, **kwargs):
        return db

    monkeypatch.setenv("AUTO_MIGRATE", "1")
    monkeypatch.setattr(main.Database, "connect", connect)
    return TestClient(main.create_app())


def test_failed_migration_still_starts(monkeypatch):
    db = _MigratingDb(asyncpg.exceptions.InsufficientPrivilegeError("permission denied for schema public"))

    with _start_with(monkeypatch, db) as client:
        resp = client.get("/api")

    assert resp.status_code == 200
    assert resp.json()["database"] is True
    assert db.calls
    assert db.closed


def test_store_lost_during_migration_answers_503(monkeypatch):
    db = _MigratingDb(StoreUnavailableError("connection reset"))

    with _start_with(monkeypatch, db) as client:
        health = client.get("/api")
        resp = client.get("/api/all-data")

    assert health.json()["database"] is False
    assert resp.status_code == 503
    assert resp.json()["error"]["message"] == "connection reset"
    assert db.closed
