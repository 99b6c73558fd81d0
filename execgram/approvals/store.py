"""In-memory bookkeeping of approvals forwarded to chat."""

import time
from types import MappingProxyType
from typing import Mapping

from loguru import logger

from execgram.approvals.detector import detect_approval_result
from execgram.approvals.types import ApprovalInfo, ApprovalResolution, SentApproval


class PendingApprovals:
    """
    Tracks approvals that were forwarded and are still unanswered.

    Handles:
    - Insertion-ordered pending entries (the detector's tie-break order)
    - Resolution of entries from follow-up messages
    - Pruning of entries that outlived their usefulness
    """

    def __init__(self, max_pending: int = 100, stale_after_seconds: float = 600):
        self._pending: dict[str, SentApproval] = {}
        self._max_pending = max_pending
        self._stale_after_seconds = stale_after_seconds

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, approval_id: object) -> bool:
        return approval_id in self._pending

    def ids(self) -> list[str]:
        """Pending ids, oldest first."""
        return list(self._pending)

    def snapshot(self) -> Mapping[str, SentApproval]:
        """Read-only view of the pending entries."""
        return MappingProxyType(self._pending)

    def get(self, approval_id: str) -> SentApproval | None:
        """Get a pending approval by ID."""
        return self._pending.get(approval_id)

    def track(
        self,
        info: ApprovalInfo,
        message_id: int | str,
        sent_at: float | None = None,
    ) -> SentApproval:
        """Remember an approval that was just sent to chat."""
        entry = SentApproval(
            info=info,
            message_id=message_id,
            sent_at=time.time() if sent_at is None else sent_at,
        )

        # Re-tracking moves the entry to the end
        self._pending.pop(info.id, None)
        self._pending[info.id] = entry

        while len(self._pending) > self._max_pending:
            oldest = next(iter(self._pending))
            del self._pending[oldest]
            logger.warning(f"Pending approvals full, dropped {oldest}")

        logger.debug(f"Tracking approval {info.id} (message {message_id})")
        return entry

    def discard(self, approval_id: str) -> SentApproval | None:
        """Forget a pending approval without resolving it."""
        return self._pending.pop(approval_id, None)

    def observe(self, text: str) -> ApprovalResolution | None:
        """
        Check a follow-up message against the pending entries.

        On a match the entry is removed and the resolution returned.
        """
        resolution = detect_approval_result(text, self.snapshot())
        if resolution is None:
            return None

        self._pending.pop(resolution.id, None)
        logger.info(f"Approval {resolution.id} resolved: {resolution.action}")
        return resolution

    def prune_stale(self, max_age_seconds: float | None = None, now: float | None = None) -> list[SentApproval]:
        """Remove entries older than max_age_seconds (the store default if omitted)."""
        if max_age_seconds is None:
            max_age_seconds = self._stale_after_seconds
        now = time.time() if now is None else now
        stale = [k for k, v in self._pending.items() if now - v.sent_at > max_age_seconds]
        removed = [self._pending.pop(k) for k in stale]
        if removed:
            logger.info(f"Pruned {len(removed)} stale approval(s)")
        return removed
