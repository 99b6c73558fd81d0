"""Shared fixtures for execgram tests."""

import pytest

from execgram.approvals import ApprovalInfo, SentApproval

APPROVAL_ID = "0e9a9d4d-c7e6-4893-972f-2c80d70162c5"


@pytest.fixture
def approval_info() -> ApprovalInfo:
    return ApprovalInfo(
        id=APPROVAL_ID,
        command="ls",
        cwd="/tmp",
        host="gateway",
        agent="main",
        security="allowlist",
        ask="on-miss",
        expires="120s",
    )


@pytest.fixture
def pending(approval_info: ApprovalInfo) -> dict[str, SentApproval]:
    return {APPROVAL_ID: SentApproval(info=approval_info, message_id=42, sent_at=1_700_000_000.0)}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch, request):
    """Keep tests away from ~/.execgram."""
    fake = lambda: tmp_path / "config.json"  # noqa: E731
    monkeypatch.setattr("execgram.config.loader.get_config_path", fake)
    # Test modules that imported the function by name hold their own reference.
    if hasattr(request.module, "get_config_path"):
        monkeypatch.setattr(request.module, "get_config_path", fake)
