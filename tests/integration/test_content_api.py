"""
Admin content and public content API flow against a real SQLite database.

Covers the admin token guard, body sanitization on save, error status
mapping, publish pings to IndexNow and draft visibility on the public API.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from fastapi.testclient import TestClient

from fixer_cms.api.deps import Settings, get_settings
from fixer_cms.api.main import app

BASE = "/api/admin/content"


def _create(client: TestClient, headers: dict[str, str], **fields: Any) -> dict[str, Any]:
    fields.setdefault("kind", "post")
    fields.setdefault("title", "Local SEO Guide")
    response = client.post(BASE, json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAdminGuard:
    def test_missing_token(self, client: TestClient) -> None:
        assert client.get(BASE).status_code == 401

    def test_wrong_token(self, client: TestClient) -> None:
        assert client.get(BASE, headers={"X-Admin-Token": "nope"}).status_code == 401

    def test_unset_token_disables_admin(self, client: TestClient) -> None:
        settings = Settings()
        settings.admin_token = ""
        app.dependency_overrides[get_settings] = lambda: settings
        assert client.get(BASE, headers={"X-Admin-Token": "anything"}).status_code == 401


class TestCreate:
    def test_body_sanitized(self, client, admin_headers, indexnow) -> None:
        data = _create(
            client,
            admin_headers,
            body='<p onclick="x()">Hi</p><script>alert(1)</script><a href="javascript:x()">y</a>',
        )
        assert data["body"] == "<p>Hi</p><a>y</a>"
        assert data["slug"] == "local-seo-guide"
        assert data["path"] == "/blog/local-seo-guide"
        assert data["status"] == "draft"
        assert data["published_at"] is None
        # Draft saves do not ping search engines
        assert indexnow.payloads == []

    def test_rejected_featured_image(self, client, admin_headers) -> None:
        response = client.post(
            BASE,
            json={"kind": "post", "title": "X", "featured_image": "javascript:alert(1)"},
            headers=admin_headers,
        )
        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert errors[0]["code"] == "rejected_url"
        assert errors[0]["field"] == "featured_image"

    def test_validation_error(self, client, admin_headers) -> None:
        response = client.post(BASE, json={"kind": "post", "title": " "}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["code"] == "title_required"

    def test_slug_taken(self, client, admin_headers) -> None:
        _create(client, admin_headers)
        response = client.post(
            BASE, json={"kind": "post", "title": "Local SEO Guide"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["code"] == "slug_taken"

    def test_unknown_kind(self, client, admin_headers) -> None:
        response = client.post(BASE, json={"kind": "event", "title": "X"}, headers=admin_headers)
        assert response.status_code == 422

    def test_publish_on_create_pings(self, client, admin_headers, indexnow) -> None:
        data = _create(client, admin_headers, status="published")
        assert data["published_at"] is not None
        assert indexnow.payloads[0]["urlList"] == [
            "https://eran-fixer.com/blog/local-seo-guide",
            "https://eran-fixer.com/sitemap.xml",
        ]
        assert indexnow.payloads[0]["key"] == "eranfixer2025"


class TestUpdateAndStatus:
    def test_update(self, client, admin_headers) -> None:
        created = _create(client, admin_headers, body="<p>old</p>")
        response = client.put(
            f"{BASE}/{created['id']}",
            json={"body": "<p>new</p><iframe src=\"javascript:x()\"></iframe>"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["body"] == "<p>new</p><iframe></iframe>"
        assert response.json()["slug"] == created["slug"]

    def test_empty_update(self, client, admin_headers) -> None:
        created = _create(client, admin_headers)
        response = client.put(f"{BASE}/{created['id']}", json={}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_missing(self, client, admin_headers) -> None:
        response = client.put(f"{BASE}/{uuid4()}", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404

    def test_publish_and_unpublish(self, client, admin_headers, indexnow) -> None:
        created = _create(client, admin_headers)

        published = client.post(
            f"{BASE}/{created['id']}/status", json={"status": "published"}, headers=admin_headers
        ).json()
        assert published["status"] == "published"
        assert published["published_at"] is not None

        draft = client.post(
            f"{BASE}/{created['id']}/status", json={"status": "draft"}, headers=admin_headers
        ).json()
        assert draft["published_at"] is None

        # Publish and unpublish both change the public site
        assert len(indexnow.payloads) == 2

    def test_indexnow_failure_does_not_fail_save(self, client, admin_headers, indexnow) -> None:
        indexnow.status_code = 500
        data = _create(client, admin_headers, status="published")
        assert data["status"] == "published"
        assert len(indexnow.payloads) == 1


class TestListGetDelete:
    def test_list(self, client, admin_headers) -> None:
        _create(client, admin_headers, title="One")
        _create(client, admin_headers, kind="page", title="Two")

        response = client.get(BASE, params={"kind": "page"}, headers=admin_headers)
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["path"] == "/two"

    def test_get(self, client, admin_headers) -> None:
        created = _create(client, admin_headers)
        response = client.get(f"{BASE}/{created['id']}", headers=admin_headers)
        assert response.json()["id"] == created["id"]
        assert client.get(f"{BASE}/{uuid4()}", headers=admin_headers).status_code == 404

    def test_delete(self, client, admin_headers, indexnow) -> None:
        created = _create(client, admin_headers, status="published")
        response = client.delete(f"{BASE}/{created['id']}", headers=admin_headers)
        assert response.status_code == 204
        assert client.get(f"{BASE}/{created['id']}", headers=admin_headers).status_code == 404
        # Once for publishing, once for removal
        assert len(indexnow.payloads) == 2
        assert client.delete(f"{BASE}/{created['id']}", headers=admin_headers).status_code == 404


class TestPublicContent:
    def test_draft_is_not_found(self, client, admin_headers) -> None:
        _create(client, admin_headers)
        assert client.get("/api/public/post/local-seo-guide").status_code == 404

    def test_unknown_kind(self, client) -> None:
        assert client.get("/api/public/event/x").status_code == 404

    def test_published(self, client, admin_headers) -> None:
        _create(
            client,
            admin_headers,
            status="published",
            excerpt="Rank locally.",
            body="<p>Body</p>",
            tags=["seo"],
        )
        response = client.get("/api/public/post/local-seo-guide")
        assert response.status_code == 200
        data = response.json()
        assert data["content"]["body"] == "<p>Body</p>"
        assert data["metadata"]["canonical_url"] == "https://eran-fixer.com/blog/local-seo-guide"
        assert data["metadata"]["og_type"] == "article"
        assert data["head_html"].startswith("<title>Local SEO Guide | ")
        assert '<meta name="description" content="Rank locally.">' in data["head_html"]
