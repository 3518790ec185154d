# chatlite/navigation/logger.py
"""
Audit logger for navigation decisions.
One JSON record per applied decision, written after side effects run.
Must NEVER log the raw URL: query strings and fragments can carry OAuth
codes and session tokens. url_hash must always be exactly 64 characters.
"""
from __future__ import annotations

import json
import logging

from chatlite.core.constants import URL_HASH_LENGTH
from chatlite.core.enums import NavigationAction
from chatlite.navigation.models import NavigationRecord

# Output destination configured by app startup
_log = logging.getLogger("chatlite.navigation.audit")


REQUIRED_FIELDS = frozenset([
    "surface_id",
    "attempt",
    "action",
    "host",
    "url_hash",
    "default_suppressed",
    "registered",
    "error",
    "decided_at",
])


def log_decision(record: NavigationRecord) -> None:
    """
    Serialize NavigationRecord to the audit log.
    Raises AssertionError if an invariant is violated (fail loud, never silent).
    """
    assert len(record.url_hash) == URL_HASH_LENGTH, (
        f"url_hash length {len(record.url_hash)} != {URL_HASH_LENGTH}"
    )

    entry = {
        "surface_id":         record.surface_id,
        "attempt":            record.attempt.value,
        "action":             record.action.value,
        "host":               record.host,
        "url_hash":           record.url_hash,
        "default_suppressed": record.default_suppressed,
        "registered":         record.registered,
        "error":              record.error,
        "decided_at":         record.decided_at,
    }

    missing = REQUIRED_FIELDS - entry.keys()
    assert not missing, f"Missing required log fields: {missing}"
    assert "url" not in entry, "raw url must never be logged"

    if record.action == NavigationAction.CONTINUE:
        _log.debug(json.dumps(entry))
    else:
        _log.info(json.dumps(entry))
