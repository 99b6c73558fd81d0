"""Detect follow-up messages that resolve a pending approval."""

import re
from typing import Mapping

from execgram.approvals.classifier import classify_action
from execgram.approvals.types import ApprovalResolution, SentApproval

FULL_ID = re.compile(r"([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})", re.IGNORECASE)
SHORT_ID = re.compile(r"\b([a-f0-9]{8,})\b", re.IGNORECASE)


def _match_full_id(text: str, pending: Mapping[str, SentApproval]) -> str | None:
    """Exact lookup of the first UUID in text."""
    match = FULL_ID.search(text)
    if match and match.group(1) in pending:
        return match.group(1)
    return None


def _match_short_id(text: str, pending: Mapping[str, SentApproval]) -> str | None:
    """
    Prefix scan for a truncated id.

    Takes the first hex run of 8+ chars and returns the first pending key
    (in iteration order) that starts with it.
    """
    match = SHORT_ID.search(text)
    if not match:
        return None

    short_id = match.group(1)
    for pending_id in pending:
        if pending_id.startswith(short_id):
            return pending_id
    return None


def detect_approval_result(
    text: str,
    pending: Mapping[str, SentApproval],
) -> ApprovalResolution | None:
    """
    Detect whether a message resolves one of the pending approvals.

    1. Full UUID in text -> direct key lookup
    2. Otherwise a short hex id (8+ chars) -> prefix scan over pending keys

    `pending` is only read, never modified. Returns None when nothing is
    pending or no pending id is referenced.
    """
    if not pending:
        return None

    approval_id = _match_full_id(text, pending) or _match_short_id(text, pending)
    if approval_id is None:
        return None

    return ApprovalResolution(id=approval_id, action=classify_action(text))
