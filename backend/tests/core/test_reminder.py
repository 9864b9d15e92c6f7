"""Unit tests for the daily reminder decision - pure functions, no mocks needed."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from expiryalert.core.models import ReminderState
from expiryalert.core.reminder import local_today, maybe_fire


class TestLocalToday:
    """Tests for local_today."""

    def test_uses_viewer_timezone(self):
        now = datetime(2025, 3, 1, 20, 0, tzinfo=timezone.utc)
        assert local_today(now, "UTC") == "2025-03-01"
        assert local_today(now, ZoneInfo("Asia/Tokyo")) == "2025-03-02"


class TestMaybeFire:
    """Tests for maybe_fire."""

    def test_fires_on_first_check(self):
        decision = maybe_fire(3, "2025-03-02", ReminderState())
        assert decision.should_fire is True
        assert decision.count == 3
        assert decision.state.last_shown_day == "2025-03-02"

    def test_fires_once_per_day(self):
        """Feeding the returned state back in never fires again the same day."""
        first = maybe_fire(3, "2025-03-02", ReminderState(last_shown_day="2025-03-01"))
        second = maybe_fire(4, "2025-03-02", first.state)
        assert first.should_fire is True
        assert second.should_fire is False
        assert second.state == first.state

    def test_fires_again_next_day(self):
        state = ReminderState(last_shown_day="2025-03-02")
        assert maybe_fire(1, "2025-03-03", state).should_fire is True

    def test_nothing_expired(self):
        """No expired items never fires and leaves the state alone."""
        state = ReminderState(last_shown_day="2025-03-01")
        decision = maybe_fire(0, "2025-03-02", state)
        assert decision.should_fire is False
        assert decision.count == 0
        assert decision.state == state

    def test_negative_count_clamped(self):
        decision = maybe_fire(-1, "2025-03-02", ReminderState())
        assert decision.should_fire is False
        assert decision.count == 0
