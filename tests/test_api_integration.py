"""End-to-end checks of the example application's route binding."""

from __future__ import annotations

from fastapi.testclient import TestClient


def create_article(client: TestClient, **payload) -> dict:
    response = client.post("/api/articles", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_assigns_unique_slugs(client: TestClient):
    first = create_article(client, name="Hello World")
    second = create_article(client, name="Hello, world!")

    assert first["slug"] == "hello-world"
    assert second["slug"] == "hello-world-1"

    listing = client.get("/api/articles").json()
    assert [item["slug"] for item in listing] == ["hello-world", "hello-world-1"]


def test_article_is_reachable_by_slug_and_id(client: TestClient):
    article = create_article(client, name="Routing Guide")

    by_slug = client.get(f"/api/articles/{article['slug']}")
    by_id = client.get(f"/api/articles/{article['id']}")

    assert by_slug.status_code == 200
    assert by_id.status_code == 200
    assert by_slug.json()["id"] == by_id.json()["id"] == article["id"]


def test_unknown_article_returns_404(client: TestClient):
    response = client.get("/api/articles/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"detail": "Article not found"}


def test_strict_slug_lookup_maps_not_found_error(client: TestClient):
    article = create_article(client, name="Strict")

    assert client.get("/api/articles/by-slug/strict").json()["id"] == article["id"]

    response = client.get(f"/api/articles/by-slug/{article['id']}")
    assert response.status_code == 404
    assert response.json() == {"detail": f"No results for slug {article['id']}"}


def test_create_rejects_taken_explicit_slug(client: TestClient):
    create_article(client, name="Original", slug="shared")

    response = client.post("/api/articles", json={"name": "Copy", "slug": "Shared"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Slug is already taken"


def test_rename_keeps_slug(client: TestClient):
    article = create_article(client, name="Before")

    response = client.patch(f"/api/articles/{article['slug']}", json={"name": "After"})

    assert response.status_code == 200
    assert response.json()["name"] == "After"
    assert response.json()["slug"] == "before"


def test_clearing_slug_regenerates_it(client: TestClient):
    article = create_article(client, name="Before")

    response = client.patch(
        f"/api/articles/{article['id']}", json={"name": "After", "slug": None}
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "after"


def test_update_keeps_own_slug_and_rejects_foreign_one(client: TestClient):
    create_article(client, name="Taken")
    article = create_article(client, name="Mine")

    same = client.patch(f"/api/articles/{article['slug']}", json={"slug": "mine"})
    assert same.status_code == 200
    assert same.json()["slug"] == "mine"

    clash = client.patch(f"/api/articles/{article['slug']}", json={"slug": "taken"})
    assert clash.status_code == 422


def test_article_without_name_gets_fallback_slug(client: TestClient):
    article = create_article(client, body="no name")

    assert article["slug"]
    assert client.get(f"/api/articles/by-slug/{article['slug']}").status_code == 200


def test_tags_allow_null_handles(client: TestClient):
    first = client.post("/api/tags", json={})
    second = client.post("/api/tags", json={})
    named = client.post("/api/tags", json={"label": "Weekly Digest"})

    assert first.status_code == second.status_code == named.status_code == 201
    assert first.json()["handle"] is None
    assert second.json()["handle"] is None
    assert named.json()["handle"] == "weekly-digest"

    assert client.get("/api/tags/weekly-digest").json()["id"] == named.json()["id"]
    assert client.get(f"/api/tags/{first.json()['id']}").json()["handle"] is None


def test_oversized_numeric_key_is_a_missing_slug(client: TestClient):
    response = client.get("/api/articles/99999999999999999999")
    assert response.status_code == 404
    assert response.json() == {"detail": "Article not found"}
