"""Daily Reminder - Pure decision logic for the once-per-day expired alert.

All functions are pure: same input always produces same output, no side effects.
The caller persists the returned state and serializes concurrent checks.
"""

from datetime import datetime, tzinfo

from .expiry import local_date
from .models import ReminderDecision, ReminderState


def local_today(now: datetime, tz: str | tzinfo) -> str:
    """The viewer's calendar day as YYYY-MM-DD."""
    return local_date(now, tz).isoformat()


def maybe_fire(expired_count: int, today: str, state: ReminderState) -> ReminderDecision:
    """Decide whether to show the expired-items reminder.

    Fires only when something is expired and the reminder has not already
    been shown on ``today``.

    Args:
        expired_count: Number of expired items in the current snapshot
        today: Viewer's calendar day (YYYY-MM-DD)
        state: Persisted reminder state

    Returns:
        ReminderDecision; on fire its state carries ``last_shown_day = today``,
        otherwise the input state unchanged
    """
    if expired_count > 0 and state.last_shown_day != today:
        return ReminderDecision(
            should_fire=True,
            count=expired_count,
            state=ReminderState(last_shown_day=today),
        )
    return ReminderDecision(should_fire=False, count=max(expired_count, 0), state=state)
