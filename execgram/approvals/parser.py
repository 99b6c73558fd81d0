"""Parse the gateway's plain-text exec approval format."""

import re

from execgram.approvals.fields import FIELD_SPECS, extract_fields
from execgram.approvals.types import ApprovalInfo

APPROVAL_MARKER = re.compile(r"Exec approval required", re.IGNORECASE)

APPROVAL_ID = re.compile(r"^[ \t]*ID:[ \t]*([a-f0-9-]*[a-f0-9][a-f0-9-]*)", re.IGNORECASE | re.MULTILINE)

COMMAND_LINE = re.compile(r"^[ \t]*Command:[ \t]*(.*?)[ \t]*\r?$", re.IGNORECASE | re.MULTILINE)

# Any labeled line of the approval format ends an unclosed fence
LABEL_LINE = re.compile(
    r"^[ \t]*(?:ID|Command|{}):".format(
        "|".join(r"[ \t]+".join(map(re.escape, spec.label.split())) for spec in FIELD_SPECS)
    ),
    re.IGNORECASE,
)

FENCE = "```"

# Info strings dropped after an opening ``` fence
FENCE_TAGS = frozenset({"bash", "sh", "shell", "zsh", "console"})

UNKNOWN_COMMAND = "unknown"


def is_approval_text(text: str) -> bool:
    """Check whether text carries the approval marker phrase."""
    return bool(text) and APPROVAL_MARKER.search(text) is not None


def _strip_inline_fence(value: str) -> str:
    """Strip a one-line `code` fence; backticks inside the command stay."""
    if value.startswith("`"):
        return value.strip("`").strip()
    return value


def _scan_closed_fence(text: str, pos: int) -> tuple[list[str], int] | None:
    """
    Collect lines up to the closing ``` fence.

    Returns (lines, end offset), or None when no closing fence follows.
    """
    lines: list[str] = []
    for line in text[pos:].splitlines(keepends=True):
        pos += len(line)
        content = line.rstrip()
        if content.endswith(FENCE):
            content = content[:-len(FENCE)]
            if content.strip():
                lines.append(content)
            return lines, pos
        lines.append(content)
    return None


def _scan_open_fence(text: str, pos: int) -> tuple[list[str], int]:
    """Collect lines of an unclosed fence, up to a blank or labeled line."""
    lines: list[str] = []
    for line in text[pos:].splitlines(keepends=True):
        if not line.strip() or LABEL_LINE.match(line):
            break
        pos += len(line)
        lines.append(line.rstrip())
    return lines, pos


def _split_command(text: str) -> tuple[str | None, str]:
    """
    Find the command and cut it out of the text.

    Returns (command, remainder). A ``` block may span lines and ends at
    its closing fence, or, when unclosed, at the first blank or labeled
    line. Lines inside the block never shadow real fields, and the
    trailing ``ID:`` line is never part of the command.
    """
    match = COMMAND_LINE.search(text)
    if not match:
        return None, text

    start = match.start()
    end = _line_end(text, match.end())
    value = match.group(1)

    # Fence opening on the line after the label
    if not value:
        next_end = _line_end(text, end)
        if text[end:next_end].strip().startswith(FENCE):
            value = text[end:next_end].strip()
            end = next_end

    if not value.startswith(FENCE):
        command = _strip_inline_fence(value)
        return command or None, text[:start] + text[end:]

    opening = value[len(FENCE):].strip()
    if opening.endswith(FENCE):
        # ```command``` on a single line
        command = opening[:-len(FENCE)].strip()
        return command or None, text[:start] + text[end:]

    head = [opening] if opening and opening.lower() not in FENCE_TAGS else []

    closed = _scan_closed_fence(text, end)
    if closed is not None:
        body, block_end = closed
        if APPROVAL_ID.search(text[:start] + text[block_end:]):
            return "\n".join(head + body).strip() or None, text[:start] + text[block_end:]

    body, block_end = _scan_open_fence(text, end)
    return "\n".join(head + body).strip() or None, text[:start] + text[block_end:]


def _line_end(text: str, pos: int) -> int:
    """Offset just past the line containing pos."""
    newline = text.find("\n", pos)
    return len(text) if newline == -1 else newline + 1


def parse_approval_text(text: str) -> ApprovalInfo | None:
    """
    Parse a gateway approval message into an ApprovalInfo.

    Returns None unless the text carries both the marker phrase and an
    ``ID:`` line. Every other field is optional and falls back to its
    default, so a partially formatted message still parses.
    """
    if not is_approval_text(text):
        return None

    command, remainder = _split_command(text)

    id_match = APPROVAL_ID.search(remainder)
    if not id_match:
        return None

    return ApprovalInfo(
        id=id_match.group(1),
        command=command or UNKNOWN_COMMAND,
        **extract_fields(remainder),
    )
