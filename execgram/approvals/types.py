"""Type definitions for gateway exec approvals."""

from dataclasses import dataclass
from typing import Literal

# Approval decisions
ApprovalAction = Literal["allow-once", "allow-always", "deny"]

APPROVAL_ACTIONS: tuple[ApprovalAction, ...] = ("allow-once", "allow-always", "deny")


@dataclass(frozen=True)
class ApprovalInfo:
    """A pending exec approval request, as announced by the gateway."""
    id: str
    command: str = "unknown"
    cwd: str = "unknown"
    host: str = "gateway"
    agent: str = "main"
    security: str = "allowlist"
    ask: str = "on-miss"
    expires: str = "120s"

    @property
    def short_id(self) -> str:
        """First hex group of the id, as shown in chat."""
        return self.id.split("-", 1)[0]


@dataclass
class SentApproval:
    """An approval request that was forwarded to chat."""
    info: ApprovalInfo
    message_id: int | str
    sent_at: float


@dataclass(frozen=True)
class ApprovalResolution:
    """A pending approval that a follow-up message resolved."""
    id: str
    action: ApprovalAction
