"""
Editor session - one rich-text editing surface.

Holds the in-memory document of a single writer. Every mutation (input,
paste, insertion, command) re-runs the full sanitization gate over the
whole document; nothing is diffed incrementally.

Transient state (selection, saved selection, modal flags, undo history)
only lives for the session and is never persisted.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field

from fixer_cms.components.paste import DEFAULT_CONFIG as DEFAULT_PASTE_CONFIG
from fixer_cms.components.paste import PasteConfig, prepare_paste
from fixer_cms.components.richtext import (
    DEFAULT_CONFIG as DEFAULT_RICHTEXT_CONFIG,
)
from fixer_cms.components.richtext import (
    DEFAULT_LOCALE,
    RichTextConfig,
    get_message,
    is_valid_url,
    sanitize_html,
    strip_tags,
)

from .models import EditorError, Selection

logger = logging.getLogger(__name__)

# --- Commands ---

INLINE_COMMANDS: dict[str, str] = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "code": "code",
}

BLOCK_COMMANDS: frozenset[str] = frozenset(
    ["p", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"]
)

LIST_COMMANDS: frozenset[str] = frozenset(["ul", "ol"])

VOID_COMMANDS: frozenset[str] = frozenset(["hr", "br"])


@dataclass(frozen=True)
class EditorConfig:
    """Editor session configuration."""

    richtext: RichTextConfig = field(default_factory=lambda: DEFAULT_RICHTEXT_CONFIG)
    paste: PasteConfig = field(default_factory=lambda: DEFAULT_PASTE_CONFIG)
    history_limit: int = 50
    locale: str = DEFAULT_LOCALE


DEFAULT_CONFIG = EditorConfig()


def build_link_html(url: str, label: str) -> str:
    """Anchor markup for a validated URL; opens in a new tab."""
    return (
        f'<a href="{html.escape(url.strip(), quote=True)}" target="_blank" '
        f'rel="noopener noreferrer">{html.escape(label, quote=False)}</a>'
    )


def build_image_html(url: str, alt: str) -> str:
    """Image markup for a validated URL."""
    src = html.escape(url.strip(), quote=True)
    return f'<img src="{src}" alt="{html.escape(alt, quote=True)}">'


class EditorSession:
    """
    In-memory document of one editing surface.

    Selections are character offsets into `content`. A missing selection
    means the caret sits at the end of the document.
    """

    def __init__(self, config: EditorConfig | None = None, content: str = "") -> None:
        self._config = config or DEFAULT_CONFIG
        self._content = ""
        self._undo: list[str] = []
        self._redo: list[str] = []
        self.selection: Selection | None = None
        self.saved_selection: Selection | None = None
        self.link_modal_open = False
        self.image_modal_open = False
        if content:
            self.load(content)

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def content(self) -> str:
        return self._content

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    # --- Internals ---

    def _error(self, code: str, field_name: str | None = None) -> EditorError:
        return EditorError(
            code=code,
            message=get_message(code, self._config.locale),
            field=field_name,
        )

    def _apply(self, new_html: str) -> None:
        """Sanitize the whole document and record the step for undo."""
        cleaned = sanitize_html(new_html, self._config.richtext)
        if cleaned == self._content:
            return

        self._undo.append(self._content)
        if len(self._undo) > self._config.history_limit:
            del self._undo[0]
        self._redo.clear()
        self._content = cleaned
        self._forget_selection()

    def _forget_selection(self) -> None:
        # Offsets into the old document are meaningless now; an open modal
        # then inserts at the end
        self.selection = None
        self.saved_selection = None

    def _range(self) -> tuple[int, int]:
        if self.selection is None:
            end = len(self._content)
            return end, end
        return self.selection.start, self.selection.end

    def _insert(self, fragment: str) -> None:
        start, end = self._range()
        self._apply(self._content[:start] + fragment + self._content[end:])

    def _selected_text(self) -> str:
        start, end = self._range()
        return strip_tags(self._content[start:end])

    # --- Surface events ---

    def load(self, stored_html: str) -> None:
        """Show a stored value; starts a fresh history."""
        self._content = sanitize_html(stored_html, self._config.richtext)
        self._undo.clear()
        self._redo.clear()
        self.selection = None
        self.close_modals()

    def input(self, surface_html: str) -> None:
        """The surface's full HTML after typing."""
        self._apply(surface_html)

    def select(self, start: int, end: int | None = None) -> Selection:
        """Set the selection, clamped to the document."""
        size = len(self._content)
        end = start if end is None else end
        start, end = sorted((max(0, min(start, size)), max(0, min(end, size))))
        self.selection = Selection(start=start, end=end)
        return self.selection

    def paste(self, clipboard_html: str | None = None, text: str | None = None) -> None:
        """Insert clipboard data at the selection."""
        fragment = prepare_paste(clipboard_html, text, self._config.paste)
        if fragment:
            self._insert(fragment)

    # --- Modals ---

    def open_link_modal(self) -> str:
        """Remember the selection; returns the selected text to prefill."""
        self.saved_selection = self.selection
        self.link_modal_open = True
        return self._selected_text()

    def open_image_modal(self) -> None:
        self.saved_selection = self.selection
        self.image_modal_open = True

    def close_modals(self) -> None:
        self.link_modal_open = False
        self.image_modal_open = False
        self.saved_selection = None

    def _restore_selection(self) -> None:
        if self.saved_selection is not None:
            self.selection = self.saved_selection

    def _check_url(self, url: str | None) -> EditorError | None:
        if not url or not url.strip():
            return self._error("url_required", "url")
        if not is_valid_url(url, self._config.richtext):
            logger.info("Insertion aborted, rejected URL: %.60s", url)
            return self._error("rejected_url", "url")
        return None

    def insert_link(self, url: str, text: str = "") -> list[EditorError]:
        """
        Insert a link at the saved selection.

        A rejected URL aborts the insertion: the document, the selection and
        the open modal are left exactly as they were.
        """
        error = self._check_url(url)
        if error:
            return [error]
        self._restore_selection()
        label = text.strip() or self._selected_text() or url.strip()
        self._insert(build_link_html(url, label))
        self.close_modals()
        return []

    def insert_image(self, url: str, alt: str = "") -> list[EditorError]:
        """Insert an image at the saved selection; same abort rules as links."""
        error = self._check_url(url)
        if error:
            return [error]
        self._restore_selection()
        self._insert(build_image_html(url, alt.strip()))
        self.close_modals()
        return []

    # --- Commands ---

    def apply_command(self, command: str) -> list[EditorError]:
        """Toolbar / keyboard command applied to the selection."""
        if command == "undo":
            self.undo()
            return []
        if command == "redo":
            self.redo()
            return []

        start, end = self._range()
        selected = self._content[start:end]

        if command in VOID_COMMANDS:
            self.select(end)
            self._insert(f"<{command}>")
            return []

        if command in INLINE_COMMANDS:
            tag = INLINE_COMMANDS[command]
            fragment = f"<{tag}>{selected}</{tag}>"
        elif command in BLOCK_COMMANDS:
            fragment = f"<{command}>{selected}</{command}>"
        elif command in LIST_COMMANDS:
            fragment = f"<{command}><li>{selected}</li></{command}>"
        else:
            return [self._error("unknown_command", "command")]

        if not selected.strip():
            return []
        self._insert(fragment)
        return []

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._content)
        self._content = self._undo.pop()
        self._forget_selection()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._content)
        self._content = self._redo.pop()
        self._forget_selection()
        return True

    def commit(self) -> str:
        """The sanitized string handed to the owning record at save time."""
        return self._content


def create_editor_session(
    content: str = "",
    config: EditorConfig | None = None,
) -> EditorSession:
    """Create an EditorSession with optional stored content."""
    return EditorSession(config=config, content=content)
