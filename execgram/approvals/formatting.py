"""Telegram HTML rendering for approval messages."""

import re

from execgram.approvals.types import APPROVAL_ACTIONS, ApprovalAction, ApprovalInfo

# Telegram rejects messages over 4096 chars; leave room for the summary
MAX_COMMAND_CHARS = 3000

ACTION_LABELS: dict[ApprovalAction, str] = {
    "allow-once": "✅ Allow once",
    "allow-always": "🔓 Always allow",
    "deny": "❌ Deny",
}

ACTION_STATUS: dict[ApprovalAction, str] = {
    "allow-once": "✅ Allowed (once)",
    "allow-always": "🔓 Allowed (always)",
    "deny": "❌ Denied",
}

EXPIRES = re.compile(r"^\s*(\d+)\s*([smh]?)\s*$", re.IGNORECASE)
UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600}


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _truncate(text: str, max_length: int) -> str:
    """Truncate text to max_length, marking the cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def parse_expires_seconds(expires: str) -> int | None:
    """Convert an "Expires in" value such as 120s, 2m or 1h to seconds."""
    match = EXPIRES.match(expires or "")
    if not match:
        return None
    return int(match.group(1)) * UNIT_SECONDS[match.group(2).lower()]


def format_approval_html(info: ApprovalInfo, max_command_chars: int = MAX_COMMAND_CHARS) -> str:
    """Render an approval request for a Telegram message."""
    command = _escape(_truncate(info.command, max_command_chars))
    lines = [
        "🔒 <b>Exec approval required</b>",
        "",
        f"<pre><code>{command}</code></pre>",
        "",
        f"<b>Agent:</b> {_escape(info.agent)}",
        f"<b>Host:</b> {_escape(info.host)}",
        f"<b>CWD:</b> <code>{_escape(info.cwd)}</code>",
        f"<b>Security:</b> {_escape(info.security)} · <b>Ask:</b> {_escape(info.ask)}",
        f"<b>Expires in:</b> {_escape(info.expires)}",
        f"<b>ID:</b> <code>{_escape(info.short_id)}</code>",
    ]
    return "\n".join(lines)


def format_resolved_html(
    info: ApprovalInfo,
    action: ApprovalAction,
    max_command_chars: int = MAX_COMMAND_CHARS,
) -> str:
    """Render an approval after it was resolved (buttons removed)."""
    command = _escape(_truncate(info.command, max_command_chars))
    return "\n".join([
        f"{ACTION_STATUS[action]}",
        "",
        f"<pre><code>{command}</code></pre>",
        "",
        f"<b>Agent:</b> {_escape(info.agent)} · <b>ID:</b> <code>{_escape(info.short_id)}</code>",
    ])


def build_approval_keyboard(approval_id: str) -> list[list[tuple[str, str]]]:
    """
    Inline keyboard layout as rows of (label, callback_data).

    Callback data is the gateway command `/approve <id> <action>`.
    """
    buttons = [(ACTION_LABELS[a], f"/approve {approval_id} {a}") for a in APPROVAL_ACTIONS]
    allow_once, allow_always, deny = buttons
    return [[allow_once, allow_always], [deny]]
