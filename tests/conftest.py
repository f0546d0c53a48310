import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from fixer_cms.adapters.http_client import HttpxClient
from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.migrator import SQLiteMigrator
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.api.deps import Settings, get_content_repo, get_http_client, get_rules, get_settings
from fixer_cms.api.main import app
from fixer_cms.rules.loader import load_rules
from fixer_cms.rules.models import Rules


@pytest.fixture
def rules() -> Rules:
    """
    Loads the REAL rules from the project root.
    """
    # Assuming tests run from project root.
    rules_path = Path("rules.yaml").resolve()
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def rules_adapter(rules: Rules) -> RulesAdapter:
    return RulesAdapter(rules)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "fixer.db")


@pytest.fixture
def content_repo(db_path: str) -> SQLiteContentRepo:
    """SQLite content repo on a freshly migrated temporary database."""
    SQLiteMigrator(db_path, "migrations").run_migrations()
    return SQLiteContentRepo(db_path)


# --- API ---

ADMIN_TOKEN = "test-admin-token"


class IndexNowRecorder:
    """httpx mock transport handler that records IndexNow submissions."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []
        self.status_code = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.payloads.append(json.loads(request.content))
        return httpx.Response(self.status_code)


@pytest.fixture
def indexnow() -> IndexNowRecorder:
    return IndexNowRecorder()


@pytest.fixture
def client(
    rules: Rules,
    content_repo: SQLiteContentRepo,
    indexnow: IndexNowRecorder,
) -> Iterator[TestClient]:
    """Full app wired to a temporary database and a mocked IndexNow endpoint."""
    settings = Settings()
    settings.admin_token = ADMIN_TOKEN
    http = HttpxClient(httpx.Client(transport=httpx.MockTransport(indexnow)))

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_rules] = lambda: rules
    app.dependency_overrides[get_content_repo] = lambda: content_repo
    app.dependency_overrides[get_http_client] = lambda: http

    yield TestClient(app)

    app.dependency_overrides.clear()
    http.close()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}
