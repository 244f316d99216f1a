"""Posts API - HTTP contract for /api/v1/posts.

Tests cover:
    - authentication is required on every endpoint
    - status codes for create, not found, ownership, like conflicts
    - error envelope shape
"""

from uuid import uuid4


async def _create(client, headers, text: str = "Hello") -> dict:
    resp = await client.post("/api/v1/posts", json={"text": text}, headers=headers)
    assert resp.status_code == 201
    return resp.json()


# ─── authentication ──────────────────────────────────────────────

async def test_missing_token_is_401(client):
    resp = await client.get("/api/v1/posts")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_invalid_token_is_401(client):
    resp = await client.get(
        "/api/v1/posts", headers={"Authorization": "Bearer nonsense"},
    )
    assert resp.status_code == 401


async def test_token_for_unknown_user_is_401(client, auth_headers):
    class Ghost:
        id = uuid4()

    resp = await client.get("/api/v1/posts", headers=auth_headers(Ghost))
    assert resp.status_code == 401


# ─── create / read ───────────────────────────────────────────────

async def test_create_and_get_post(client, make_user, auth_headers):
    user = await make_user("Ada")
    headers = auth_headers(user)
    created = await _create(client, headers, "  Hello world  ")

    assert created["text"] == "Hello world"
    assert created["author_name"] == "Ada"
    assert created["owner_id"] == str(user.id)
    assert created["likes"] == []
    assert created["comments"] == []

    resp = await client.get(f"/api/v1/posts/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


async def test_create_blank_text_is_400(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    resp = await client.post("/api/v1/posts", json={"text": "   "}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_posts_newest_first(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    first = await _create(client, headers, "first")
    second = await _create(client, headers, "second")

    resp = await client.get("/api/v1/posts", headers=headers)
    assert [p["id"] for p in resp.json()] == [second["id"], first["id"]]


async def test_get_missing_post_is_404(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    resp = await client.get(f"/api/v1/posts/{uuid4()}", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["context"]["resource_type"] == "Post"


async def test_malformed_post_id_is_400(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    resp = await client.get("/api/v1/posts/not-a-uuid", headers=headers)
    assert resp.status_code == 400


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_by_non_owner_is_401(client, make_user, auth_headers):
    owner = auth_headers(await make_user())
    stranger = auth_headers(await make_user())
    post = await _create(client, owner)

    resp = await client.delete(f"/api/v1/posts/{post['id']}", headers=stranger)
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "NOT_AUTHORIZED"

    resp = await client.delete(f"/api/v1/posts/{post['id']}", headers=owner)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Post removed"}

    resp = await client.get(f"/api/v1/posts/{post['id']}", headers=owner)
    assert resp.status_code == 404


# ─── likes ───────────────────────────────────────────────────────

async def test_like_unlike_cycle(client, make_user, auth_headers):
    user = await make_user()
    headers = auth_headers(user)
    post = await _create(client, headers)

    resp = await client.put(f"/api/v1/posts/like/{post['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == [{"user_id": str(user.id)}]

    resp = await client.put(f"/api/v1/posts/like/{post['id']}", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Post already liked"

    resp = await client.put(f"/api/v1/posts/unlike/{post['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == []

    resp = await client.put(f"/api/v1/posts/unlike/{post['id']}", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Post has not yet been liked"


async def test_like_missing_post_is_404(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    resp = await client.put(f"/api/v1/posts/like/{uuid4()}", headers=headers)
    assert resp.status_code == 404


# ─── comments ────────────────────────────────────────────────────

async def test_comment_add_and_delete(client, make_user, auth_headers):
    owner_user = await make_user("Owner")
    bob_user = await make_user("Bob")
    owner, bob = auth_headers(owner_user), auth_headers(bob_user)
    post = await _create(client, owner)

    resp = await client.put(
        f"/api/v1/posts/comment/{post['id']}", json={"text": "Nice"}, headers=bob,
    )
    assert resp.status_code == 200
    comments = resp.json()
    assert comments[0]["text"] == "Nice"
    assert comments[0]["author_name"] == "Bob"
    comment_id = comments[0]["id"]

    url = f"/api/v1/posts/comment/{post['id']}/{comment_id}"
    resp = await client.delete(url, headers=owner)
    assert resp.status_code == 401

    resp = await client.delete(url, headers=bob)
    assert resp.status_code == 200
    assert resp.json() == []


async def test_delete_unknown_comment_is_400(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    post = await _create(client, headers)
    resp = await client.delete(
        f"/api/v1/posts/comment/{post['id']}/{uuid4()}", headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "COMMENT_NOT_FOUND"


async def test_blank_comment_is_400(client, make_user, auth_headers):
    headers = auth_headers(await make_user())
    post = await _create(client, headers)
    resp = await client.put(
        f"/api/v1/posts/comment/{post['id']}", json={"text": ""}, headers=headers,
    )
    assert resp.status_code == 400
