"""
Editor component - rich-text editing session over the sanitization gate.
"""

from ._impl import (
    BLOCK_COMMANDS,
    DEFAULT_CONFIG,
    INLINE_COMMANDS,
    LIST_COMMANDS,
    VOID_COMMANDS,
    EditorConfig,
    EditorSession,
    build_image_html,
    build_link_html,
    create_editor_session,
)
from .component import apply_event, build_config, run, run_edit
from .models import (
    EditInput,
    EditOutput,
    EditorError,
    EditorEvent,
    EventType,
    Selection,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_edit",
    "apply_event",
    "build_config",
    # Models
    "EditInput",
    "EditOutput",
    "EditorError",
    "EditorEvent",
    "EventType",
    "Selection",
    # Ports
    "RulesPort",
    # Session
    "BLOCK_COMMANDS",
    "DEFAULT_CONFIG",
    "INLINE_COMMANDS",
    "LIST_COMMANDS",
    "VOID_COMMANDS",
    "EditorConfig",
    "EditorSession",
    "build_image_html",
    "build_link_html",
    "create_editor_session",
]
