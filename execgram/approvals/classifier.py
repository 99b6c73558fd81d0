"""Classify how a follow-up message resolved an approval."""

import re

from execgram.approvals.types import ApprovalAction

# Denial the gateway emits itself when nobody answered in time
GATEWAY_DENIAL = re.compile(r"Exec denied.*approval-timeout", re.IGNORECASE)

# Checked top to bottom, first hit wins. Order matters: "allow-always" must be
# seen before the generic "allow" words, and denials before "allowed".
ACTION_RULES: tuple[tuple[tuple[str, ...], ApprovalAction], ...] = (
    (("allow-always", "always allow"), "allow-always"),
    (("deny", "denied", "rejected"), "deny"),
    (("allow-once", "allowed"), "allow-once"),
    (("approved",), "allow-once"),
)

DEFAULT_ACTION: ApprovalAction = "allow-once"


def is_gateway_denial(text: str) -> bool:
    """Check for the gateway's own timeout denial."""
    return GATEWAY_DENIAL.search(text) is not None


def infer_action(text: str) -> ApprovalAction:
    """Infer the action from keywords in the text."""
    lower = text.lower()
    for keywords, action in ACTION_RULES:
        if any(keyword in lower for keyword in keywords):
            return action
    # The message referenced a pending id but named no action
    return DEFAULT_ACTION


def classify_action(text: str) -> ApprovalAction:
    """
    Determine the approval action from message text.

    A gateway timeout denial is trusted over any keyword the same text
    happens to contain.
    """
    if is_gateway_denial(text):
        return "deny"
    return infer_action(text)
