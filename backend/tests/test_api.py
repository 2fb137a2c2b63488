"""
API tests: routing, auth, admin restrictions and error-to-status mapping.
Uses FastAPI TestClient against the in-memory database; tokens are real JWTs for fixture users.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from forum.main import app
from conftest import PASSWORD, auth_headers

DESCRIPTION = "Need a clear explanation please"


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


def _create_question(client, user, page_id, title="Why does X happen?"):
    r = client.post(
        "/api/questions",
        json={"title": title, "description": DESCRIPTION, "page_id": str(page_id)},
        headers=auth_headers(user),
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_register_login_me(client):
    r = client.post("/api/auth/register", json={"name": "Alice", "email": "a@x.com", "password": "secret123"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["type"] == "Bearer"
    assert body["role"] == "USER"
    assert body["token"]

    r = client.post("/api/auth/register", json={"name": "Alice 2", "email": "a@x.com", "password": "secret456"})
    assert r.status_code == 409

    r = client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong-password"})
    assert r.status_code == 401

    r = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["token"]
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["email"] == "a@x.com"


def test_fixture_user_can_login(client, alice):
    r = client.post("/api/auth/login", json={"email": alice.email, "password": PASSWORD})
    assert r.status_code == 200
    assert r.json()["id"] == str(alice.id)


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_page_admin_only(client, alice, admin):
    payload = {"name": "CSE", "description": "Computer Science"}
    assert client.post("/api/pages", json=payload).status_code == 401
    assert client.post("/api/pages", json=payload, headers=auth_headers(alice)).status_code == 403

    r = client.post("/api/pages", json=payload, headers=auth_headers(admin))
    assert r.status_code == 201, r.text
    page = r.json()
    assert page["question_count"] == 0

    assert client.post("/api/pages", json=payload, headers=auth_headers(admin)).status_code == 409
    assert client.delete(f"/api/pages/{page['id']}", headers=auth_headers(alice)).status_code == 403


def test_page_reads(client, cse):
    r = client.get("/api/pages")
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["CSE"]
    assert client.get(f"/api/pages/{cse.id}").json()["name"] == "CSE"
    assert client.get("/api/pages/name/CSE").json()["id"] == str(cse.id)
    assert client.get("/api/pages/name/Nope").status_code == 404
    assert client.get(f"/api/pages/{uuid.uuid4()}").status_code == 404


def test_scenario_question_and_reply(client, cse, alice, bob):
    question = _create_question(client, alice, cse.id)
    assert question["user_name"] == "Alice"
    assert question["page_name"] == "CSE"

    r = client.post(
        f"/api/replies/question/{question['id']}",
        json={"content": "Because Y."},
        headers=auth_headers(bob),
    )
    assert r.status_code == 201, r.text

    replies = client.get(f"/api/replies/question/{question['id']}").json()
    assert len(replies) == 1
    assert replies[0]["user_id"] == str(bob.id)
    assert client.get(f"/api/questions/{question['id']}").json()["reply_count"] == 1
    assert client.get("/api/pages/name/CSE").json()["question_count"] == 1


def test_scenario_update_forbidden_admin_delete(client, cse, alice, bob, admin):
    question = _create_question(client, alice, cse.id)
    r = client.put(
        f"/api/questions/{question['id']}",
        json={"title": "Hijacked title", "description": DESCRIPTION},
        headers=auth_headers(bob),
    )
    assert r.status_code == 403
    assert "not authorized" in r.json()["detail"]

    assert client.delete(f"/api/questions/{question['id']}", headers=auth_headers(bob)).status_code == 403
    r = client.delete(f"/api/questions/{question['id']}", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()["message"] == "Question deleted successfully"
    assert client.get(f"/api/questions/{question['id']}").status_code == 404


def test_author_updates_question(client, cse, alice):
    question = _create_question(client, alice, cse.id)
    r = client.put(
        f"/api/questions/{question['id']}",
        json={"title": "Edited title", "description": "Edited description text"},
        headers=auth_headers(alice),
    )
    assert r.status_code == 200
    assert r.json()["title"] == "Edited title"


def test_question_validation_422(client, cse, alice):
    r = client.post(
        "/api/questions",
        json={"title": "Why", "description": DESCRIPTION, "page_id": str(cse.id)},
        headers=auth_headers(alice),
    )
    assert r.status_code == 422
    r = client.post(
        "/api/questions",
        json={"title": "Valid title", "description": "short", "page_id": str(cse.id)},
        headers=auth_headers(alice),
    )
    assert r.status_code == 422


def test_question_on_missing_page_404(client, alice):
    r = client.post(
        "/api/questions",
        json={"title": "Valid title", "description": DESCRIPTION, "page_id": str(uuid.uuid4())},
        headers=auth_headers(alice),
    )
    assert r.status_code == 404


def test_question_create_requires_auth(client, cse):
    r = client.post("/api/questions", json={"title": "Valid title", "description": DESCRIPTION, "page_id": str(cse.id)})
    assert r.status_code == 401


def test_pagination_query_params(client, cse, alice):
    ids = [_create_question(client, alice, cse.id, title=f"Question {i}")["id"] for i in range(3)]
    everything = client.get(f"/api/questions/page/{cse.id}").json()
    assert {q["id"] for q in everything} == set(ids)

    first = client.get(f"/api/questions/page/{cse.id}", params={"page": 0, "size": 2}).json()
    second = client.get(f"/api/questions/page/{cse.id}", params={"page": 1, "size": 2}).json()
    assert [q["id"] for q in first + second] == [q["id"] for q in everything]
    assert client.get(f"/api/questions/page/{cse.id}", params={"page": 5, "size": 2}).json() == []
    assert client.get("/api/questions/page/name/CSE", params={"page": 0, "size": 1}).json()[0]["id"] == everything[0]["id"]
    assert client.get(f"/api/questions/page/{cse.id}", params={"page": -1}).status_code == 422


def test_user_listings(client, cse, alice, bob):
    question = _create_question(client, alice, cse.id)
    client.post(f"/api/replies/question/{question['id']}", json={"content": "hi"}, headers=auth_headers(bob))
    assert [q["id"] for q in client.get(f"/api/questions/user/{alice.id}").json()] == [question["id"]]
    assert [r["content"] for r in client.get(f"/api/replies/user/{bob.id}").json()] == ["hi"]


def test_reply_permissions(client, cse, alice, bob, admin):
    question = _create_question(client, alice, cse.id)
    reply = client.post(
        f"/api/replies/question/{question['id']}", json={"content": "Because Y."}, headers=auth_headers(bob)
    ).json()

    assert client.put(f"/api/replies/{reply['id']}", json={"content": "edit"}, headers=auth_headers(alice)).status_code == 403
    r = client.put(f"/api/replies/{reply['id']}", json={"content": "Because Y, really."}, headers=auth_headers(bob))
    assert r.status_code == 200
    assert r.json()["content"] == "Because Y, really."

    assert client.delete(f"/api/replies/{reply['id']}", headers=auth_headers(alice)).status_code == 403
    assert client.delete(f"/api/replies/{reply['id']}", headers=auth_headers(admin)).status_code == 200
    assert client.delete(f"/api/replies/{reply['id']}", headers=auth_headers(admin)).status_code == 404


def test_empty_reply_422(client, cse, alice):
    question = _create_question(client, alice, cse.id)
    r = client.post(f"/api/replies/question/{question['id']}", json={"content": ""}, headers=auth_headers(alice))
    assert r.status_code == 422


def test_admin_deletes_page_with_content(client, cse, alice, bob, admin):
    question = _create_question(client, alice, cse.id)
    client.post(f"/api/replies/question/{question['id']}", json={"content": "Because Y."}, headers=auth_headers(bob))

    r = client.delete(f"/api/pages/{cse.id}", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()["message"] == "Page deleted successfully"
    assert client.get(f"/api/questions/{question['id']}").status_code == 404
    assert client.get(f"/api/replies/question/{question['id']}").json() == []
    assert client.delete(f"/api/pages/{cse.id}", headers=auth_headers(admin)).status_code == 404


def test_huge_page_number_returns_empty_list(client, cse, alice):
    _create_question(client, alice, cse.id)
    r = client.get(f"/api/questions/page/{cse.id}", params={"page": 10**18, "size": 20})
    assert r.status_code == 200
    assert r.json() == []
    r = client.get("/api/questions/page/name/CSE", params={"page": 10**18, "size": 20})
    assert r.status_code == 200
    assert r.json() == []


def test_page_name_with_slash(client, db, alice):
    from forum.services.pages import seed_default_pages
    seed_default_pages(db)
    page = client.get("/api/pages/name/AI/ML")
    assert page.status_code == 200, page.text
    assert page.json()["name"] == "AI/ML"
    assert client.get("/api/pages/name/AI%2FML").json()["id"] == page.json()["id"]

    question = _create_question(client, alice, page.json()["id"])
    listed = client.get("/api/questions/page/name/AI%2FML").json()
    assert [q["id"] for q in listed] == [question["id"]]
    assert [q["id"] for q in client.get("/api/questions/page/name/AI/ML").json()] == [question["id"]]
