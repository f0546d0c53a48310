import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fixer_cms.adapters.sqlite.migrator import SQLiteMigrator
from fixer_cms.api.deps import close_http_client, get_settings, require_admin
from fixer_cms.app_shell.config import configure_logging, validate_ops_rules
from fixer_cms.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    configure_logging()
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)
    validate_ops_rules(rules)
    logger.info("Rules loaded from %s", settings.rules_path)

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()

    yield

    close_http_client()


app = FastAPI(
    title="Fixer CMS API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from fixer_cms.api.routes import admin_content, editor, public, seo  # noqa: E402

app.include_router(editor.router, prefix="/api/editor", tags=["Editor"])
app.include_router(
    admin_content.router,
    prefix="/api/admin/content",
    tags=["Admin Content"],
    dependencies=[Depends(require_admin)],
)
app.include_router(public.router, prefix="/api/public", tags=["Public"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}


# Last: the SEO router owns the catch-all /{key}.txt
app.include_router(seo.router, prefix="", tags=["SEO"])

# CORS (Allow Frontend)
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "https://eran-fixer.com",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
