"""
IndexNow component - search engine ping on publish.

Invariants:
- I1: Transport failures are reported in the result, never raised
- I2: An empty URL list is rejected before any request
"""

from __future__ import annotations

from ._impl import IndexNowConfig, IndexNowService
from .models import IndexNowResult, NotifyInput
from .ports import HttpClientPort, RulesPort


def run_notify(
    inp: NotifyInput,
    *,
    http: HttpClientPort,
    rules: RulesPort | None = None,
) -> IndexNowResult:
    """Submit URLs to IndexNow."""
    config = rules.get_indexnow_config() if rules else IndexNowConfig()
    return IndexNowService(config, http).notify(inp.urls)


def run(
    inp: NotifyInput,
    *,
    http: HttpClientPort,
    rules: RulesPort | None = None,
) -> IndexNowResult:
    """Main entry point for the IndexNow component."""
    if isinstance(inp, NotifyInput):
        return run_notify(inp, http=http, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
