"""
Editor component - replays surface events against one editor session.

Invariants:
- I1: Every mutation leaves the document sanitized
- I2: A rejected URL never mutates the document
- I3: Session state is never persisted; only the committed string is
"""

from __future__ import annotations

import logging
from typing import Any

from fixer_cms.components.paste.component import build_config as build_paste_config
from fixer_cms.components.richtext import DEFAULT_LOCALE, get_message
from fixer_cms.components.richtext import build_config as build_richtext_config

from ._impl import DEFAULT_CONFIG, EditorConfig, EditorSession
from .models import EditInput, EditOutput, EditorError, EditorEvent
from .ports import RulesPort

logger = logging.getLogger(__name__)


def build_config(rules: RulesPort | None, locale: str | None = None) -> EditorConfig:
    """Build editor config from rules port."""
    if rules is None:
        if locale is None:
            return DEFAULT_CONFIG
        return EditorConfig(locale=locale)

    return EditorConfig(
        richtext=build_richtext_config(rules),
        paste=build_paste_config(rules),
        history_limit=rules.get_history_limit(),
        locale=locale or rules.get_locale() or DEFAULT_LOCALE,
    )


class InvalidEventPayload(ValueError):
    """A payload value has the wrong type for its event."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid payload value for '{key}'")
        self.key = key


def _text(payload: dict[str, Any], key: str) -> str:
    return _optional_text(payload, key) or ""


def _optional_text(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None or isinstance(value, str):
        return value
    raise InvalidEventPayload(key)


def _offset(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    # bool is an int subclass but never a valid offset
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidEventPayload(key)
    return value


def apply_event(session: EditorSession, event: EditorEvent) -> list[EditorError]:
    """
    Apply one surface event; returns user-facing errors, if any.

    A payload value of the wrong type leaves the session untouched and
    yields an invalid_event error naming the offending key.
    """
    try:
        return _dispatch(session, event)
    except InvalidEventPayload as e:
        logger.info("Rejected %s event: %s", event.type, e)
        return [
            EditorError(
                code="invalid_event",
                message=get_message("invalid_event", session.config.locale),
                field=e.key,
            )
        ]


def _dispatch(session: EditorSession, event: EditorEvent) -> list[EditorError]:
    payload = event.payload

    if event.type == "load":
        session.load(_text(payload, "html"))
    elif event.type == "input":
        session.input(_text(payload, "html"))
    elif event.type == "select":
        start = _offset(payload, "start")
        session.select(start or 0, _offset(payload, "end"))
    elif event.type == "paste":
        session.paste(_optional_text(payload, "html"), _optional_text(payload, "text"))
    elif event.type == "open_link_modal":
        session.open_link_modal()
    elif event.type == "open_image_modal":
        session.open_image_modal()
    elif event.type == "close_modals":
        session.close_modals()
    elif event.type == "insert_link":
        return session.insert_link(_text(payload, "url"), _text(payload, "text"))
    elif event.type == "insert_image":
        return session.insert_image(_text(payload, "url"), _text(payload, "alt"))
    elif event.type == "command":
        return session.apply_command(_text(payload, "command"))
    else:
        return [
            EditorError(
                code="unknown_command",
                message=get_message("unknown_command", session.config.locale),
                field="type",
            )
        ]
    return []


# --- Component Entry Points ---


def run_edit(
    inp: EditInput,
    *,
    rules: RulesPort | None = None,
) -> EditOutput:
    """
    Load stored content, replay the session's events, and commit.

    Args:
        inp: Stored content and the ordered surface events.
        rules: Optional rules port for configuration.

    Returns:
        EditOutput with the committed content and any user-facing errors.
        Rejected insertions are reported but do not stop the replay.
    """
    session = EditorSession(build_config(rules, inp.locale), inp.content)

    errors: list[EditorError] = []
    for event in inp.events:
        errors.extend(apply_event(session, event))

    return EditOutput(
        content=session.commit(),
        errors=errors,
        success=len(errors) == 0,
    )


def run(inp: EditInput, *, rules: RulesPort | None = None) -> EditOutput:
    """Main entry point for the editor component."""
    return run_edit(inp, rules=rules)
