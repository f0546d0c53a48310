import os
import secrets
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Header, HTTPException, status

from fixer_cms.adapters.clock import SystemClock
from fixer_cms.adapters.http_client import HttpxClient
from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.components.indexnow import IndexNowService, PublishNotifier
from fixer_cms.rules.loader import load_rules
from fixer_cms.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("FIXER_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "fixer.db")
        self.rules_path = Path(os.environ.get("FIXER_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = str(
            os.environ.get("FIXER_MIGRATIONS_DIR", self.base_dir / "migrations")
        )
        self.admin_token = os.environ.get("FIXER_ADMIN_TOKEN", "")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def get_rules_adapter(rules: Rules = Depends(get_rules)) -> RulesAdapter:
    return RulesAdapter(rules)


# --- Repos ---
def get_content_repo(settings: Settings = Depends(get_settings)) -> SQLiteContentRepo:
    return SQLiteContentRepo(settings.db_path)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# Outbound HTTP shares one connection pool
_http_client_instance: HttpxClient | None = None


def get_http_client() -> HttpxClient:
    """Get HTTP client singleton."""
    global _http_client_instance
    if _http_client_instance is None:
        _http_client_instance = HttpxClient()
    return _http_client_instance


def close_http_client() -> None:
    global _http_client_instance
    if _http_client_instance is not None:
        _http_client_instance.close()
        _http_client_instance = None


# --- Services ---
def get_indexnow_service(
    rules: RulesAdapter = Depends(get_rules_adapter),
    http: HttpxClient = Depends(get_http_client),
) -> IndexNowService:
    return IndexNowService(rules.get_indexnow_config(), http)


def get_publish_notifier(
    service: IndexNowService = Depends(get_indexnow_service),
    rules: Rules = Depends(get_rules),
) -> PublishNotifier:
    return PublishNotifier(service, rules.site.base_url)


# --- Admin Guard ---
def require_admin(
    x_admin_token: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Admin routes require X-Admin-Token to equal FIXER_ADMIN_TOKEN.

    An unset token disables the admin API entirely.
    """
    if not settings.admin_token or not x_admin_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    if not secrets.compare_digest(x_admin_token.encode(), settings.admin_token.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
        )
