# mypy: ignore-errors
# tests/v1/test_integration.py
"""End-to-end marketplace flow through the public API."""

from fastapi import status


def _register(client, username):
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": "hunter22"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['access_token']}"}


def test_listing_lifecycle(client, category) -> None:
    alice, alice_headers = _register(client, "alice")
    bob, bob_headers = _register(client, "bob")
    _, carol_headers = _register(client, "carol")

    created = client.post(
        "/api/posts",
        json={
            "title": "Game key",
            "content": "Unused key for a racing game",
            "category_id": category.id,
            "price": 10,
        },
        headers=bob_headers,
    )
    assert created.status_code == status.HTTP_201_CREATED
    post_id = created.json()["id"]

    like_url = f"/api/posts/{post_id}/like"
    assert client.post(like_url, headers=alice_headers).json() == {"likes": [alice["id"]]}
    assert client.post(like_url, headers=alice_headers).json() == {"likes": []}

    edited = client.put(
        f"/api/posts/{post_id}",
        json={"title": "Game key (EU region)"},
        headers=bob_headers,
    )
    assert edited.status_code == status.HTTP_200_OK
    assert edited.json()["title"] == "Game key (EU region)"

    rejected = client.delete(f"/api/posts/{post_id}", headers=carol_headers)
    assert rejected.status_code == status.HTTP_403_FORBIDDEN

    post = client.get(f"/api/posts/{post_id}").json()
    assert post["title"] == "Game key (EU region)"
    assert post["price"] == 10
    assert post["category"]["slug"] == "digital-goods"
    assert post["author"]["id"] == bob["id"]

    profile = client.get("/api/users/bob").json()
    assert profile["post_count"] == 1
