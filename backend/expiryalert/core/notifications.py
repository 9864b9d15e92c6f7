"""Notification Planning - Pure functions deciding which local alerts to schedule.

The "expiring today" alert is its own category here even though the
freshness buckets count day 0 as expired.
"""

from datetime import datetime, tzinfo
from typing import Iterable, Mapping

from .expiry import as_timezone, classify
from .models import FoodItem, NotificationSettings, PlannedNotification
from .translations import translate


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def plan_notifications(
    items: Iterable[FoodItem],
    now: datetime,
    tz: str | tzinfo,
    settings: NotificationSettings,
    translations: Mapping[str, str],
) -> list[PlannedNotification]:
    """Build the list of local notifications for a snapshot.

    Args:
        items: Food items to consider
        now: Current wall-clock time
        tz: Viewer's timezone
        settings: Which alert kinds are enabled and the look-ahead window
        translations: Key→string table for titles

    Returns:
        Notifications in item order; items without a parseable day are skipped
    """
    zone = as_timezone(tz)
    planned: list[PlannedNotification] = []

    for item in items:
        days = classify(item, now, zone).days_until_expiry
        if days is None:
            continue

        if settings.expiry_alerts and 0 < days <= settings.reminder_days:
            planned.append(PlannedNotification(
                id=f"expiring_{item.id}",
                kind="expiring",
                title=translate("notification.expiringSoonTitle", translations),
                body=f"{item.name} will expire in {days} day{_plural(days)}",
                item_id=item.id,
            ))

        if settings.today_alerts and days == 0:
            planned.append(PlannedNotification(
                id=f"today_{item.id}",
                kind="today",
                title=translate("notification.expiringTodayTitle", translations),
                body=f"{item.name} expires today. Use it now!",
                item_id=item.id,
            ))

        if settings.expired_alerts and days < 0:
            ago = abs(days)
            planned.append(PlannedNotification(
                id=f"expired_{item.id}",
                kind="expired",
                title=translate("notification.expiredTitle", translations),
                body=f"{item.name} expired {ago} day{_plural(ago)} ago",
                item_id=item.id,
            ))

    return planned
