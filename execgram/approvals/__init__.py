"""Gateway exec approval parsing and resolution detection."""

from execgram.approvals.types import (
    APPROVAL_ACTIONS,
    ApprovalAction,
    ApprovalInfo,
    ApprovalResolution,
    SentApproval,
)
from execgram.approvals.fields import FIELD_SPECS, extract_field, extract_fields
from execgram.approvals.parser import parse_approval_text, is_approval_text
from execgram.approvals.classifier import classify_action, is_gateway_denial
from execgram.approvals.detector import detect_approval_result
from execgram.approvals.store import PendingApprovals
from execgram.approvals.formatting import (
    build_approval_keyboard,
    format_approval_html,
    format_resolved_html,
    parse_expires_seconds,
)

__all__ = [
    "APPROVAL_ACTIONS",
    "ApprovalAction",
    "ApprovalInfo",
    "ApprovalResolution",
    "SentApproval",
    "FIELD_SPECS",
    "extract_field",
    "extract_fields",
    "parse_approval_text",
    "is_approval_text",
    "classify_action",
    "is_gateway_denial",
    "detect_approval_result",
    "PendingApprovals",
    "build_approval_keyboard",
    "format_approval_html",
    "format_resolved_html",
    "parse_expires_seconds",
]
