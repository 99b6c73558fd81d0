"""Tests for PendingApprovals bookkeeping."""

import pytest

from execgram.approvals import ApprovalInfo, PendingApprovals

APPROVAL_ID = "0e9a9d4d-c7e6-4893-972f-2c80d70162c5"
OTHER_ID = "aaaabbbb-cccc-dddd-eeee-ffffffffffff"


class TestPendingApprovals:
    def test_track(self):
        store = PendingApprovals()
        entry = store.track(ApprovalInfo(id=APPROVAL_ID, command="ls"), message_id=42, sent_at=100.0)
        assert len(store) == 1
        assert APPROVAL_ID in store
        assert entry.message_id == 42
        assert entry.sent_at == 100.0
        assert store.get(APPROVAL_ID) is entry

    def test_track_defaults_sent_at_to_now(self):
        store = PendingApprovals()
        entry = store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        assert entry.sent_at > 0

    def test_retrack_moves_to_end(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        store.track(ApprovalInfo(id=OTHER_ID), message_id=2)
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=3)
        assert store.ids() == [OTHER_ID, APPROVAL_ID]
        assert store.get(APPROVAL_ID).message_id == 3

    def test_max_pending_evicts_oldest(self):
        store = PendingApprovals(max_pending=2)
        for i, approval_id in enumerate(["aaaaaaaa", "bbbbbbbb", "cccccccc"]):
            store.track(ApprovalInfo(id=approval_id), message_id=i)
        assert store.ids() == ["bbbbbbbb", "cccccccc"]

    def test_snapshot_is_read_only(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        snapshot = store.snapshot()
        assert APPROVAL_ID in snapshot
        with pytest.raises(TypeError):
            snapshot["x"] = snapshot[APPROVAL_ID]

    def test_observe_resolves_and_removes(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        resolution = store.observe(f"Exec denied: {APPROVAL_ID}")
        assert resolution is not None
        assert resolution.id == APPROVAL_ID
        assert resolution.action == "deny"
        assert APPROVAL_ID not in store

    def test_observe_short_id(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        resolution = store.observe("allow-always 0e9a9d4d")
        assert resolution is not None
        assert resolution.action == "allow-always"
        assert len(store) == 0

    def test_observe_no_match_keeps_entries(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        assert store.observe("Hello world") is None
        assert len(store) == 1

    def test_observe_empty_store(self):
        assert PendingApprovals().observe(f"Exec allowed: {APPROVAL_ID}") is None

    def test_discard(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1)
        assert store.discard(APPROVAL_ID) is not None
        assert store.discard(APPROVAL_ID) is None
        assert len(store) == 0

    def test_prune_stale(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1, sent_at=1000.0)
        store.track(ApprovalInfo(id=OTHER_ID), message_id=2, sent_at=1500.0)

        removed = store.prune_stale(max_age_seconds=600, now=1700.0)
        assert [e.info.id for e in removed] == [APPROVAL_ID]
        assert store.ids() == [OTHER_ID]

    def test_prune_nothing_stale(self):
        store = PendingApprovals()
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1, sent_at=1000.0)
        assert store.prune_stale(max_age_seconds=600, now=1100.0) == []
        assert len(store) == 1

    def test_prune_uses_configured_age(self):
        store = PendingApprovals(stale_after_seconds=60)
        store.track(ApprovalInfo(id=APPROVAL_ID), message_id=1, sent_at=1000.0)
        store.track(ApprovalInfo(id=OTHER_ID), message_id=2, sent_at=1050.0)

        removed = store.prune_stale(now=1100.0)
        assert [e.info.id for e in removed] == [APPROVAL_ID]
        assert store.ids() == [OTHER_ID]
