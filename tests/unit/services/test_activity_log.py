"""Tests for the bounded activity log."""

from src.core.entities import ActivityAction, ActivityEntity, ActivityLogEntry
from src.core.services import ActivityLog


class TestActivityLog:
    def test_append_prepends(self, clock, now):
        entries: list[ActivityLogEntry] = []
        log = ActivityLog(entries, clock=clock)

        log.append(ActivityAction.CREATE, ActivityEntity.WORK_ORDER, "first", "U1")
        log.append(ActivityAction.UPDATE, ActivityEntity.INVENTORY, "second", "U2")

        assert [e.details for e in entries] == ["second", "first"]
        assert entries[0].user_id == "U2"
        assert entries[0].timestamp == now

    def test_trims_to_limit(self, clock):
        entries: list[ActivityLogEntry] = []
        log = ActivityLog(entries, limit=50, clock=clock)

        for i in range(60):
            log.append(ActivityAction.UPDATE, ActivityEntity.SYSTEM, f"entry {i}", "U1")

        assert len(entries) == 50
        assert entries[0].details == "entry 59"
        assert entries[-1].details == "entry 10"

    def test_custom_limit(self, clock):
        entries: list[ActivityLogEntry] = []
        log = ActivityLog(entries, limit=3, clock=clock)
        for i in range(5):
            log.append(ActivityAction.UPDATE, ActivityEntity.SYSTEM, str(i), "U1")
        assert [e.details for e in log.entries] == ["4", "3", "2"]

    def test_entries_is_a_copy(self, clock):
        log = ActivityLog([], clock=clock)
        log.append(ActivityAction.CREATE, ActivityEntity.TOOL, "x", "U1")
        snapshot = log.entries
        snapshot.clear()
        assert len(log.entries) == 1

    def test_entries_get_unique_ids(self, clock):
        log = ActivityLog([], clock=clock)
        a = log.append(ActivityAction.CREATE, ActivityEntity.TOOL, "x", "U1")
        b = log.append(ActivityAction.CREATE, ActivityEntity.TOOL, "y", "U1")
        assert a.id != b.id
