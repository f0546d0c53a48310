"""
IndexNow component - notify search engines of added or removed URLs.
"""

from ._impl import (
    SUCCESS_STATUS_CODES,
    IndexNowConfig,
    IndexNowService,
    PublishNotifier,
    build_payload,
    should_notify,
)
from .component import run, run_notify
from .models import HttpResponse, HttpTransportError, IndexNowResult, NotifyInput
from .ports import HttpClientPort, RulesPort

__all__ = [
    "run",
    "run_notify",
    "NotifyInput",
    "IndexNowResult",
    "HttpResponse",
    "HttpTransportError",
    "HttpClientPort",
    "RulesPort",
    "SUCCESS_STATUS_CODES",
    "IndexNowConfig",
    "IndexNowService",
    "PublishNotifier",
    "build_payload",
    "should_notify",
]
