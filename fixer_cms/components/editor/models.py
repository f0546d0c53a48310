"""
Editor component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

EventType = Literal[
    "load",
    "input",
    "select",
    "paste",
    "open_link_modal",
    "open_image_modal",
    "close_modals",
    "insert_link",
    "insert_image",
    "command",
]


@dataclass(frozen=True)
class EditorError:
    """User-facing editor error."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class Selection:
    """Character offsets into the session content."""

    start: int
    end: int

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class EditorEvent:
    """One surface event to replay against a session."""

    type: EventType
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EditInput:
    """Stored content plus the events of one edit session."""

    content: str = ""
    events: list[EditorEvent] = field(default_factory=list)
    locale: str | None = None


@dataclass(frozen=True)
class EditOutput:
    """Content after replay, ready to hand to the owning record."""

    content: str
    errors: list[EditorError] = field(default_factory=list)
    success: bool = True
