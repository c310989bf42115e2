"""Per-field merge policy.

This module intentionally contains *no* parsing. The ingestion layer is
responsible for producing events with timestamps.
"""

from __future__ import annotations

from datetime import datetime


def should_accept_update(*, applied_at: datetime | None, incoming_at: datetime) -> bool:
    """Decide whether a candidate value may replace the current one.

    A field that has never been set accepts anything. Otherwise only a
    strictly newer claim wins; equal or older claims are dropped no matter
    which source they come from.
    """
    if applied_at is None:
        return True
    return incoming_at > applied_at
