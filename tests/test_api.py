"""
REST endpoint tests against an app built over a seeded in-memory store.
"""


def _new_post(client, **overrides):
    body = {"title": "Small wins", "content": "Got out of bed today.", "category": "progress"}
    body.update(overrides)
    return client.post("/api/blog-posts", json=body)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["connections"] == 0
    assert data["relay"]["messages_relayed"] == 0


# Therapists

def test_list_therapists(client):
    resp = client.get("/api/therapists")
    assert resp.status_code == 200
    names = [t["name"] for t in resp.json()]
    assert "Dr. Sarah Johnson" in names
    assert len(names) == 3


def test_get_therapist_by_id(client):
    therapist = client.get("/api/therapists").json()[0]
    resp = client.get(f"/api/therapists/{therapist['id']}")
    assert resp.status_code == 200
    assert resp.json() == therapist
    assert "imageUrl" in therapist


def test_get_unknown_therapist_is_404(client):
    resp = client.get("/api/therapists/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Therapist not found"}


def test_create_therapist(client):
    resp = client.post(
        "/api/therapists",
        json={
            "name": "Dr. Ana Lima",
            "specialty": "Grief Counselling",
            "education": "MSc Counselling",
            "experience": "6 years experience",
            "rating": "4.7 (40 reviews)",
            "email": "ana@example.com",
        },
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"]
    assert created["phone"] is None
    assert client.get(f"/api/therapists/{created['id']}").status_code == 200


def test_create_therapist_missing_fields_is_400(client):
    resp = client.post("/api/therapists", json={"name": "Incomplete"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid therapist data"}


# Blog posts

def test_create_blog_post_generates_anonymous_author(client):
    resp = _new_post(client, authorId="spoofed")
    assert resp.status_code == 201
    post = resp.json()
    assert post["likes"] == 0
    assert post["authorId"] and post["authorId"] != "spoofed"
    assert post["createdAt"]


def test_each_post_gets_a_different_author(client):
    a = _new_post(client).json()
    b = _new_post(client).json()
    assert a["authorId"] != b["authorId"]


def test_create_blog_post_invalid_is_400(client):
    resp = client.post("/api/blog-posts", json={"title": "No content"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid blog post data"}


def test_create_blog_post_blank_title_is_400(client):
    resp = _new_post(client, title="   ")
    assert resp.status_code == 400


def test_create_blog_post_malformed_body_is_400(client):
    resp = client.post(
        "/api/blog-posts",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_blog_posts_listed_newest_first(client):
    ids = [_new_post(client, title=f"post {i}").json()["id"] for i in range(3)]
    listed = [p["id"] for p in client.get("/api/blog-posts").json()]
    assert listed == list(reversed(ids))


def test_like_increments_every_call(client):
    post = _new_post(client).json()
    first = client.post(f"/api/blog-posts/{post['id']}/like")
    assert first.status_code == 200
    assert first.json()["likes"] == 1
    second = client.post(f"/api/blog-posts/{post['id']}/like")
    assert second.json()["likes"] == 2


def test_like_unknown_post_is_404(client):
    resp = client.post("/api/blog-posts/missing/like")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Blog post not found"}


# Comments

def test_comments_roundtrip_oldest_first(client):
    post = _new_post(client).json()
    url = f"/api/blog-posts/{post['id']}/comments"
    c1 = client.post(url, json={"content": "Proud of you"})
    c2 = client.post(url, json={"content": "Same here"})
    assert c1.status_code == 201
    assert c1.json()["postId"] == post["id"]
    listed = client.get(url).json()
    assert [c["id"] for c in listed] == [c1.json()["id"], c2.json()["id"]]


def test_comment_post_id_comes_from_path(client):
    post = _new_post(client).json()
    resp = client.post(
        f"/api/blog-posts/{post['id']}/comments",
        json={"content": "hi", "postId": "somewhere-else"},
    )
    assert resp.json()["postId"] == post["id"]


def test_invalid_comment_is_400(client):
    post = _new_post(client).json()
    resp = client.post(f"/api/blog-posts/{post['id']}/comments", json={"content": ""})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid comment data"}


# Chat rooms

def test_list_chat_rooms(client):
    rooms = client.get("/api/chat-rooms").json()
    assert len(rooms) == 3
    assert all(r["isActive"] for r in rooms)
    assert all(5 <= r["activeUsers"] <= 24 for r in rooms)


def test_messages_for_unknown_room_is_empty(client):
    resp = client.get("/api/chat-rooms/nowhere/messages")
    assert resp.status_code == 200
    assert resp.json() == []


def test_storage_failure_is_500(client, storage, monkeypatch):
    def boom():
        raise RuntimeError("store down")

    monkeypatch.setattr(storage, "get_chat_rooms", boom)
    resp = client.get("/api/chat-rooms")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to fetch chat rooms"}


def test_unhandled_error_is_generic_500(app, storage, monkeypatch):
    from fastapi.testclient import TestClient

    from safespace.core.config import settings

    def boom(data):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(settings, "debug", False)
    monkeypatch.setattr(storage, "create_blog_post", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = _new_post(c)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_unhandled_error_detail_only_in_debug(app, storage, monkeypatch):
    from fastapi.testclient import TestClient

    from safespace.core.config import settings

    def boom(data):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(settings, "debug", True)
    monkeypatch.setattr(storage, "create_blog_post", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = _new_post(c)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error", "error": "disk on fire"}


def test_app_exposes_chat_socket_route(app):
    from fastapi.routing import APIWebSocketRoute

    assert any(isinstance(r, APIWebSocketRoute) and r.path == "/ws" for r in app.routes)
