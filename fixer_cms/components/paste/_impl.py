"""
Clipboard paste normalization.

Two branches, both feeding the same insertion path (and therefore the
sanitization gate):

- HTML clipboard: preclean_html() rewrites legacy presentational tags to
  their semantic equivalents and drops clipboard noise (comments, meta,
  link). It is a best-effort normalization, not a security boundary.
- Plain-text clipboard: restructure_plain_text() turns lines into headings,
  paragraphs and lists by line length, trailing punctuation and bullets.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

# --- Configuration ---

HEADING_MAX_LENGTH = 60

SENTENCE_END: tuple[str, ...] = (
    ".",
    "!",
    "?",
    ":",
    ";",
    ",",
    "…",
    "。",
    "！",
    "？",
    "：",
    "；",
    "，",
)


@dataclass(frozen=True)
class PasteConfig:
    """Plain-text restructuring heuristics."""

    heading_max_length: int = HEADING_MAX_LENGTH


DEFAULT_CONFIG = PasteConfig()


# --- HTML pre-clean ---

# (pattern, replacement) applied in order
_PRECLEAN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<!--.*?-->", re.DOTALL), ""),
    (re.compile(r"<meta\b[^>]*>", re.IGNORECASE), ""),
    (re.compile(r"<link\b[^>]*>", re.IGNORECASE), ""),
    (re.compile(r"<font\b[^>]*>", re.IGNORECASE), "<span>"),
    (re.compile(r"</font\s*>", re.IGNORECASE), "</span>"),
    (re.compile(r"<b\b[^>]*>", re.IGNORECASE), "<strong>"),
    (re.compile(r"</b\s*>", re.IGNORECASE), "</strong>"),
    (re.compile(r"<i\b[^>]*>", re.IGNORECASE), "<em>"),
    (re.compile(r"</i\s*>", re.IGNORECASE), "</em>"),
)


def preclean_html(html_content: str | None) -> str:
    """
    Normalize clipboard HTML before it reaches the sanitization gate.

    <font> becomes <span>, <b> becomes <strong>, <i> becomes <em> (the
    legacy tags' attributes are dropped). Comments, <meta> and <link> are
    removed. Everything else is left for the gate to decide.
    """
    if not html_content:
        return ""

    cleaned = html_content
    for pattern, replacement in _PRECLEAN_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned.strip()


# --- Plain-text restructuring ---

_BULLET_LINE = re.compile(r"^[-*•]\s+(.+)$")
_ORDERED_LINE = re.compile(r"^\d+[.)]\s+(.+)$")


def is_heading_line(line: str, config: PasteConfig = DEFAULT_CONFIG) -> bool:
    """Short lines without sentence punctuation read as headings."""
    return len(line) < config.heading_max_length and not line.endswith(SENTENCE_END)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def restructure_plain_text(text: str | None, config: PasteConfig = DEFAULT_CONFIG) -> str:
    """
    Turn pasted plain text into HTML blocks.

    The first line becomes <h1> when it looks like a heading, later
    heading-like lines become <h2>. Consecutive bullet or numbered lines are
    grouped into one <ul>/<ol>. Everything else is a <p>.
    """
    if not text:
        return ""

    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    parts: list[str] = []
    open_list: str | None = None

    for index, line in enumerate(lines):
        bullet = _BULLET_LINE.match(line)
        ordered = None if bullet else _ORDERED_LINE.match(line)
        list_tag = "ul" if bullet else "ol" if ordered else None

        if list_tag != open_list:
            if open_list:
                parts.append(f"</{open_list}>")
            if list_tag:
                parts.append(f"<{list_tag}>")
            open_list = list_tag

        item = bullet or ordered
        if item:
            parts.append(f"<li>{_escape(item.group(1))}</li>")
        elif is_heading_line(line, config):
            level = "h1" if index == 0 else "h2"
            parts.append(f"<{level}>{_escape(line)}</{level}>")
        else:
            parts.append(f"<p>{_escape(line)}</p>")

    if open_list:
        parts.append(f"</{open_list}>")

    return "".join(parts)


def prepare_paste(
    html_content: str | None = None,
    text: str | None = None,
    config: PasteConfig = DEFAULT_CONFIG,
) -> str:
    """
    Pick the clipboard branch and return the fragment to insert.

    The fragment is not yet sanitized; callers send it through the gate.
    """
    if html_content and html_content.strip():
        return preclean_html(html_content)
    return restructure_plain_text(text, config)
