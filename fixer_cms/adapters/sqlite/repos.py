import builtins
import json
import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from fixer_cms.domain.entities import ContentKind, ContentRecord, ContentStatus


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


def _row_to_record(row: dict[str, Any]) -> ContentRecord:
    return ContentRecord(
        id=UUID(row["id"]),
        kind=row["kind"],
        title=row["title"],
        slug=row["slug"],
        excerpt=row["excerpt"],
        body=row["body"],
        status=row["status"],
        meta_title=row["meta_title"],
        meta_description=row["meta_description"],
        featured_image=row["featured_image"],
        tags=json.loads(row["tags_json"] or "[]"),
        created_at=_parse_dt(row["created_at"]) or datetime.min,
        updated_at=_parse_dt(row["updated_at"]) or datetime.min,
        published_at=_parse_dt(row["published_at"]),
    )


class SQLiteContentRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, record: ContentRecord) -> ContentRecord:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO content_records (
                    id, kind, title, slug, excerpt, body, status,
                    meta_title, meta_description, featured_image, tags_json,
                    created_at, updated_at, published_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    kind=excluded.kind,
                    title=excluded.title,
                    slug=excluded.slug,
                    excerpt=excluded.excerpt,
                    body=excluded.body,
                    status=excluded.status,
                    meta_title=excluded.meta_title,
                    meta_description=excluded.meta_description,
                    featured_image=excluded.featured_image,
                    tags_json=excluded.tags_json,
                    updated_at=excluded.updated_at,
                    published_at=excluded.published_at
            """,
                (
                    str(record.id),
                    record.kind,
                    record.title,
                    record.slug,
                    record.excerpt,
                    record.body,
                    record.status,
                    record.meta_title,
                    record.meta_description,
                    record.featured_image,
                    json.dumps(record.tags, ensure_ascii=False),
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                    record.published_at.isoformat() if record.published_at else None,
                ),
            )
            conn.commit()
            return record
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, item_id: UUID) -> ContentRecord | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM content_records WHERE id = ?", (str(item_id),)
            ).fetchone()
            return _row_to_record(row) if row else None
        finally:
            conn.close()

    def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM content_records WHERE kind = ? AND slug = ?", (kind, slug)
            ).fetchone()
            return _row_to_record(row) if row else None
        finally:
            conn.close()

    def delete(self, item_id: UUID) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM content_records WHERE id = ?", (str(item_id),))
            conn.commit()
        finally:
            conn.close()

    def list(
        self,
        *,
        kind: ContentKind | None = None,
        status: ContentStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[builtins.list[ContentRecord], int]:
        conn = self._get_conn()
        try:
            where = " WHERE 1=1"
            params: builtins.list[str | int] = []

            if kind:
                where += " AND kind = ?"
                params.append(kind)
            if status:
                where += " AND status = ?"
                params.append(status)

            row = conn.execute(
                f"SELECT COUNT(*) as cnt FROM content_records{where}", params
            ).fetchone()
            total = row["cnt"] if row else 0

            rows = conn.execute(
                f"SELECT * FROM content_records{where} ORDER BY updated_at DESC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()
            return [_row_to_record(r) for r in rows], total
        finally:
            conn.close()

    def list_published(self) -> builtins.list[ContentRecord]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM content_records WHERE status = 'published' ORDER BY updated_at DESC"
            ).fetchall()
            return [_row_to_record(r) for r in rows]
        finally:
            conn.close()
