import argparse
import logging
import os
import sqlite3
import sys
from pathlib import Path

from fixer_cms.adapters.http_client import HttpxClient
from fixer_cms.adapters.rules_adapter import RulesAdapter
from fixer_cms.adapters.sqlite.migrator import SQLiteMigrator
from fixer_cms.adapters.sqlite.repos import SQLiteContentRepo
from fixer_cms.app_shell.config import configure_logging
from fixer_cms.components.indexnow import NotifyInput, run_notify
from fixer_cms.components.richtext import SanitizeHtmlInput, run_sanitize
from fixer_cms.components.sitemap import GenerateSitemapInput, run_generate
from fixer_cms.rules.loader import load_rules

logger = logging.getLogger("cli")

DATA_DIR = os.environ.get("FIXER_DATA_DIR", "./data")
DB_PATH = str(Path(DATA_DIR) / "fixer.db")
RULES_PATH = os.environ.get("FIXER_RULES_PATH", "rules.yaml")
MIGRATIONS_DIR = os.environ.get("FIXER_MIGRATIONS_DIR", "migrations")


def get_rules() -> RulesAdapter:
    if not Path(RULES_PATH).exists():
        logger.error("Rules file %s not found.", RULES_PATH)
        sys.exit(1)
    return RulesAdapter(load_rules(Path(RULES_PATH)))


def handle_migrate(args: argparse.Namespace) -> None:
    Path(DATA_DIR).mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(DB_PATH, MIGRATIONS_DIR).run_migrations()
    print(f"Applied {len(applied)} migrations.")


def handle_sanitize(rules: RulesAdapter, args: argparse.Namespace) -> None:
    if args.file == "-":
        html = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.exists():
            logger.error("File %s not found.", path)
            sys.exit(1)
        html = path.read_text(encoding="utf-8")

    result = run_sanitize(SanitizeHtmlInput(html=html), rules=rules)
    if result.stripped_to_empty:
        logger.warning("Input contained no allowed content.")
    sys.stdout.write(result.html + "\n")


def handle_sitemap(rules: RulesAdapter, args: argparse.Namespace) -> None:
    repo = SQLiteContentRepo(DB_PATH)
    try:
        result = run_generate(GenerateSitemapInput(), content=repo, rules=rules)
    except sqlite3.OperationalError as e:
        logger.error(
            "Cannot read content from %s (%s). Run 'fixer-cms migrate' first.", DB_PATH, e
        )
        sys.exit(1)

    if args.out == "-":
        sys.stdout.write(result.xml + "\n")
        return

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result.xml, encoding="utf-8")
    print(f"Sitemap written to {out} ({len(result.entries)} URLs)")


def handle_notify(rules: RulesAdapter, args: argparse.Namespace) -> None:
    http = HttpxClient()
    try:
        result = run_notify(NotifyInput(urls=args.urls), http=http, rules=rules)
    finally:
        http.close()

    if not result.success:
        logger.error("IndexNow submission failed: %s", result.error)
        sys.exit(1)
    print(f"Submitted {len(result.urls)} URLs to IndexNow (HTTP {result.status_code}).")


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run(
        "fixer_cms.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=os.environ.get("FIXER_LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Fixer CMS CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # sanitize
    sanitize_parser = subparsers.add_parser("sanitize", help="Run HTML through the gate")
    sanitize_parser.add_argument("file", help="HTML file to sanitize, or - for stdin")

    # sitemap
    sitemap_parser = subparsers.add_parser("sitemap", help="Write sitemap.xml")
    sitemap_parser.add_argument("--out", default="public/sitemap.xml", help="Output path, or -")

    # notify
    notify_parser = subparsers.add_parser("notify", help="Submit URLs to IndexNow")
    notify_parser.add_argument("urls", nargs="+", help="Absolute URLs to submit")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    configure_logging()

    if args.command == "migrate":
        handle_migrate(args)
        return
    if args.command == "serve":
        handle_serve(args)
        return

    rules = get_rules()
    if args.command == "sanitize":
        handle_sanitize(rules, args)
    elif args.command == "sitemap":
        handle_sitemap(rules, args)
    elif args.command == "notify":
        handle_notify(rules, args)


if __name__ == "__main__":
    main()
