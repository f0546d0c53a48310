"""
Tests for the Editor API: sanitize, paste, URL validation and session replay.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.api.deps import get_rules_adapter
from fixer_cms.api.routes.editor import router
from fixer_cms.components.richtext import get_message


@pytest.fixture
def editor_client(rules_adapter: RulesAdapter) -> TestClient:
    """Test client with dependency override."""
    app = FastAPI()
    app.include_router(router, prefix="/api/editor")
    app.dependency_overrides[get_rules_adapter] = lambda: rules_adapter
    return TestClient(app)


class TestSanitize:
    def test_strips_hostile_markup(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/sanitize",
            json={"html": '<p style="color:red" onclick="x()">Hi</p><script>alert(1)</script>'},
        )
        assert response.status_code == 200
        assert response.json() == {"html": "<p>Hi</p>", "stripped_to_empty": False}

    def test_stripped_to_empty(self, editor_client: TestClient) -> None:
        response = editor_client.post("/api/editor/sanitize", json={"html": "<script>x()</script>"})
        assert response.json() == {"html": "", "stripped_to_empty": True}


class TestPaste:
    def test_legacy_html(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/paste",
            json={"html": '<p><font face="Arial"><b>Bold</b></font></p>', "text": "Bold"},
        )
        data = response.json()
        assert data["source"] == "html"
        assert data["html"] == "<p><span><strong>Bold</strong></span></p>"

    def test_plain_text(self, editor_client: TestClient) -> None:
        response = editor_client.post("/api/editor/paste", json={"text": "Title\n- one\n- two"})
        assert response.json() == {
            "html": "<h1>Title</h1><ul><li>one</li><li>two</li></ul>",
            "source": "text",
        }


class TestValidateUrl:
    def test_valid(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/validate-url", json={"url": "https://eran-fixer.com"}
        )
        assert response.json() == {"valid": True, "code": None, "message": None}

    def test_rejected_in_hebrew_by_default(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/validate-url", json={"url": "javascript:alert(1)"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["code"] == "rejected_url"
        assert data["message"] == get_message("rejected_url", "he")

    def test_english(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/validate-url", json={"url": "", "locale": "en"}
        )
        data = response.json()
        assert data["code"] == "url_required"
        assert data["message"] == get_message("url_required", "en")


class TestSession:
    def test_replay(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/session",
            json={
                "content": "<p>Hello</p><script>x()</script>",
                "events": [
                    {"type": "open_link_modal"},
                    {"type": "insert_link", "payload": {"url": "javascript:alert(1)"}},
                    {"type": "insert_link", "payload": {"url": "https://x.com", "text": "X"}},
                ],
            },
        )
        data = response.json()
        assert data["success"] is False
        assert [e["code"] for e in data["errors"]] == ["rejected_url"]
        assert "<script" not in data["content"]
        assert 'href="https://x.com"' in data["content"]

    def test_unknown_event(self, editor_client: TestClient) -> None:
        response = editor_client.post(
            "/api/editor/session", json={"events": [{"type": "teleport"}]}
        )
        data = response.json()
        assert data["errors"][0]["code"] == "unknown_command"
        assert data["content"] == ""

    @pytest.mark.parametrize(
        "event,field",
        [
            ({"type": "select", "payload": {"start": "abc"}}, "start"),
            ({"type": "paste", "payload": {"html": 5}}, "html"),
        ],
    )
    def test_malformed_payload(
        self, editor_client: TestClient, event: dict, field: str
    ) -> None:
        """Mistyped payload values come back as an editor error, not a server error."""
        response = editor_client.post(
            "/api/editor/session", json={"content": "<p>a</p>", "events": [event]}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["errors"] == [
            {
                "code": "invalid_event",
                "message": get_message("invalid_event", "he"),
                "field": field,
            }
        ]
        assert data["content"] == "<p>a</p>"
