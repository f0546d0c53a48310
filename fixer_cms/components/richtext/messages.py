"""
User-facing messages for the editor surfaces, Hebrew first.
"""

from __future__ import annotations

DEFAULT_LOCALE = "he"

MESSAGES: dict[str, dict[str, str]] = {
    "he": {
        "rejected_url": (
            "כתובת לא תקינה. ניתן להשתמש רק בקישורים המתחילים ב-http, https, mailto או tel."
        ),
        "url_required": "יש להזין כתובת URL.",
        "unknown_command": "פקודת עריכה לא מוכרת.",
        "operation_failed": "הפעולה נכשלה, נסו שוב.",
        "invalid_event": "פעולת העריכה אינה תקינה.",
    },
    "en": {
        "rejected_url": "Invalid URL. Only http, https, mailto and tel links are allowed.",
        "url_required": "Please enter a URL.",
        "unknown_command": "Unknown editor command.",
        "operation_failed": "The operation failed, please try again.",
        "invalid_event": "The editor event is malformed.",
    },
}


def get_message(code: str, locale: str | None = None) -> str:
    """Look up a message, falling back to the default locale, then the code."""
    catalog = MESSAGES.get(locale or DEFAULT_LOCALE, MESSAGES[DEFAULT_LOCALE])
    return catalog.get(code) or MESSAGES[DEFAULT_LOCALE].get(code, code)
