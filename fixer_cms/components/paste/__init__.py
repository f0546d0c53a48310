"""
Paste component - clipboard pre-clean and plain-text restructuring.
"""

from ._impl import (
    DEFAULT_CONFIG,
    HEADING_MAX_LENGTH,
    SENTENCE_END,
    PasteConfig,
    is_heading_line,
    prepare_paste,
    preclean_html,
    restructure_plain_text,
)
from .component import build_config, run, run_paste
from .models import PasteError, PasteInput, PasteOutput
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_paste",
    "build_config",
    # Models
    "PasteInput",
    "PasteOutput",
    "PasteError",
    # Ports
    "RulesPort",
    # Normalization
    "DEFAULT_CONFIG",
    "HEADING_MAX_LENGTH",
    "SENTENCE_END",
    "PasteConfig",
    "is_heading_line",
    "prepare_paste",
    "preclean_html",
    "restructure_plain_text",
]
