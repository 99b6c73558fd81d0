"""Labeled field extraction for gateway approval messages."""

import re
from functools import lru_cache
from typing import NamedTuple


class FieldSpec(NamedTuple):
    """One optional `Label: value` line and its fallback."""
    attr: str
    label: str
    default: str


# Optional fields, in the order the gateway prints them
FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("cwd", "CWD", "unknown"),
    FieldSpec("host", "Host", "gateway"),
    FieldSpec("agent", "Agent", "main"),
    FieldSpec("security", "Security", "allowlist"),
    FieldSpec("ask", "Ask", "on-miss"),
    FieldSpec("expires", "Expires in", "120s"),
)


@lru_cache(maxsize=None)
def label_pattern(label: str) -> re.Pattern:
    """Compile the line-anchored pattern for a field label."""
    words = r"[ \t]+".join(re.escape(w) for w in label.split())
    return re.compile(rf"^[ \t]*{words}:[ \t]*(\S.*?)[ \t]*$", re.IGNORECASE | re.MULTILINE)


def extract_field(text: str, label: str) -> str | None:
    """
    Return the trimmed value after `label:` on its line.

    The label must start its line; an empty value counts as absent.
    """
    if not text:
        return None
    match = label_pattern(label).search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_fields(text: str) -> dict[str, str]:
    """Extract every optional field, falling back to its default."""
    return {
        spec.attr: extract_field(text, spec.label) or spec.default
        for spec in FIELD_SPECS
    }
