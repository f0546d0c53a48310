"""
RichText sanitization gate.

Turns arbitrary HTML (typed, pasted, or loaded from storage) into the
constrained subset that may be persisted or rendered.

Key behaviors:
- Wraps the nh3 sanitizer with an explicit allow-list (RichTextConfig)
- Removes script/style elements together with their content
- Empties iframe and other raw-text elements, whose children are never escaped
- Strips style, on* handlers, data-* and every non allow-listed attribute
- Checks every href/src against a restrictive URI pattern
- Validates user-entered link/image URLs before they are embedded
- Never raises on malformed HTML; output is idempotent
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import nh3

logger = logging.getLogger(__name__)

# --- Configuration ---

DEFAULT_ALLOWED_TAGS: frozenset[str] = frozenset(
    [
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ul",
        "ol",
        "li",
        "blockquote",
        "code",
        "pre",
        "a",
        "img",
        "video",
        "source",
        "iframe",
        "em",
        "strong",
        "b",
        "i",
        "u",
        "br",
        "hr",
        "span",
    ]
)

DEFAULT_ALLOWED_ATTRS: frozenset[str] = frozenset(
    [
        "href",
        "src",
        "alt",
        "title",
        "target",
        "rel",
        "controls",
        "class",
        "allowfullscreen",
        "type",
    ]
)

DEFAULT_URL_SCHEMES: frozenset[str] = frozenset(["http", "https", "mailto", "tel"])

# Elements dropped together with everything inside them.
CLEAN_CONTENT_TAGS: frozenset[str] = frozenset(["script", "style"])

# Never allowed, whatever the rules file says.
FORBIDDEN_TAGS: frozenset[str] = frozenset(
    ["script", "style", "object", "embed", "link", "meta", "base", "form"]
)

URI_ATTRIBUTES: frozenset[str] = frozenset(["href", "src"])

# Absolute URIs must use an allowed scheme; anything else must be relative.
SAFE_URI_PATTERN = re.compile(
    r"^(?:(?:https?|mailto|tel):|[^a-z]|[a-z+.\-]+(?:[^a-z+.\-:]|$))",
    re.IGNORECASE,
)

# Browsers ignore these inside a scheme ("java\tscript:").
_URI_NOISE = re.compile(r"[\x00-\x20\x7f-\x9f\u00a0\u1680\u180e\u2000-\u2029\u205f\u3000]")


# Elements whose children the HTML parser keeps as raw, unescaped text.
RAW_TEXT_TAGS: frozenset[str] = frozenset(
    ["iframe", "noembed", "noframes", "noscript", "xmp", "plaintext"]
)

# A start or end tag in serialized nh3 output, where attribute values are
# always double-quoted.
_SERIALIZED_TAG = re.compile(r'<(/?)([a-zA-Z][a-zA-Z0-9]*)\b(?:[^>"]|"[^"]*")*>')

# Block boundaries that separate words once tags are gone.
_BLOCK_END = re.compile(r"(</(?:p|h[1-6]|li|blockquote|pre)\s*>|<br\s*/?>)", re.IGNORECASE)


def _is_forbidden_attr(name: str) -> bool:
    return name == "style" or name.startswith("on") or name.startswith("data-")


@dataclass(frozen=True)
class RichTextConfig:
    """Allow-list for the sanitization gate."""

    allow_tags: frozenset[str] = field(default_factory=lambda: DEFAULT_ALLOWED_TAGS)
    allow_attrs: frozenset[str] = field(default_factory=lambda: DEFAULT_ALLOWED_ATTRS)
    url_schemes: frozenset[str] = field(default_factory=lambda: DEFAULT_URL_SCHEMES)
    clean_content_tags: frozenset[str] = field(default_factory=lambda: CLEAN_CONTENT_TAGS)
    uri_pattern: re.Pattern[str] = SAFE_URI_PATTERN

    def __post_init__(self) -> None:
        bad_tags = self.allow_tags & FORBIDDEN_TAGS
        if bad_tags:
            raise ValueError(f"Forbidden tags in allow-list: {sorted(bad_tags)}")

        bad_attrs = sorted(a for a in self.allow_attrs if _is_forbidden_attr(a))
        if bad_attrs:
            raise ValueError(f"Forbidden attributes in allow-list: {bad_attrs}")

        overlap = self.allow_tags & self.clean_content_tags
        if overlap:
            raise ValueError(f"Tags both allowed and content-cleaned: {sorted(overlap)}")


DEFAULT_CONFIG = RichTextConfig()


# --- URI checks ---


def is_safe_uri(value: str, config: RichTextConfig = DEFAULT_CONFIG) -> bool:
    """Check an href/src value against the URI pattern."""
    compact = _URI_NOISE.sub("", html.unescape(value or ""))
    if not compact:
        return True
    return bool(config.uri_pattern.match(compact))


def is_valid_url(url: str | None, config: RichTextConfig = DEFAULT_CONFIG) -> bool:
    """
    Gate for user-entered link and image URLs.

    Only absolute URLs with an allowed scheme pass. Blank input, embedded
    whitespace or control characters, http(s) without a host, and
    mailto/tel without a target are rejected.
    """
    if not url:
        return False

    candidate = url.strip()
    if not candidate or _URI_NOISE.search(candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # Raises ValueError on a malformed port
        parts.port
    except ValueError:
        return False

    scheme = parts.scheme.lower()
    if scheme not in config.url_schemes:
        return False

    if scheme in ("http", "https"):
        return bool(parts.hostname)

    return bool(parts.path)


# --- Sanitizer ---


def _attribute_filter(config: RichTextConfig):  # type: ignore[no-untyped-def]
    def filter_attribute(tag: str, attr: str, value: str) -> str | None:
        if _is_forbidden_attr(attr):
            return None
        if attr in URI_ATTRIBUTES and not is_safe_uri(value, config):
            logger.debug("Dropped unsafe %s on <%s>", attr, tag)
            return None
        return value

    return filter_attribute


def _drop_raw_text_content(cleaned: str, tags: frozenset[str]) -> str:
    """
    Empty every allowed raw-text element in sanitized output.

    nh3 writes the children of iframe and friends back verbatim, so a
    literal <script> inside them would survive. Browsers never render
    those children anyway.
    """
    if not tags:
        return cleaned

    out: list[str] = []
    pos = 0
    while True:
        match = _SERIALIZED_TAG.search(cleaned, pos)
        if match is None:
            out.append(cleaned[pos:])
            break
        out.append(cleaned[pos : match.end()])
        pos = match.end()
        name = match.group(2).lower()
        if not match.group(1) and name in tags:
            # Raw text ends at the first matching end tag, quotes or not
            end = re.compile(f"</{name}", re.IGNORECASE).search(cleaned, pos)
            pos = len(cleaned) if end is None else end.start()
    return "".join(out)


def sanitize_html(html_content: str | None, config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """
    Reduce HTML to the allow-listed subset.

    Disallowed tags are unwrapped (their text kept), except script/style
    which disappear with their content. Disallowed attributes are removed.
    """
    if not html_content or not html_content.strip():
        return ""

    cleaned = nh3.clean(
        html_content,
        tags=set(config.allow_tags),
        clean_content_tags=set(config.clean_content_tags),
        attributes={"*": set(config.allow_attrs)},
        attribute_filter=_attribute_filter(config),
        strip_comments=True,
        link_rel=None,
        url_schemes=set(config.url_schemes),
    )
    cleaned = _drop_raw_text_content(cleaned, config.allow_tags & RAW_TEXT_TAGS)

    logger.debug("Sanitized %d chars into %d chars", len(html_content), len(cleaned))
    return cleaned


def strip_tags(html_content: str | None) -> str:
    """Plain text of an HTML fragment, whitespace collapsed."""
    if not html_content:
        return ""
    spaced = _BLOCK_END.sub(r"\1 ", sanitize_html(html_content))
    text = html.unescape(
        nh3.clean(spaced, tags=set(), clean_content_tags=set(CLEAN_CONTENT_TAGS))
    )
    return " ".join(text.split())


# --- Service Class ---


class RichTextService:
    """Sanitization gate bound to one configuration."""

    def __init__(self, config: RichTextConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> RichTextConfig:
        return self._config

    def sanitize(self, html_content: str | None) -> str:
        return sanitize_html(html_content, self._config)

    def is_valid_url(self, url: str | None) -> bool:
        return is_valid_url(url, self._config)

    def is_safe_uri(self, value: str) -> bool:
        return is_safe_uri(value, self._config)


def create_rich_text_service(
    config: RichTextConfig | None = None,
) -> RichTextService:
    """Create a RichTextService with optional configuration."""
    return RichTextService(config=config)
