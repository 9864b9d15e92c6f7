"""Unit tests for notification planning - pure functions, no mocks needed."""

from datetime import datetime, timezone

from expiryalert.core.models import FoodItem, NotificationSettings
from expiryalert.core.notifications import plan_notifications
from expiryalert.core.translations import get_translations


NOW = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)
EN = get_translations("en")


def _items():
    return [
        FoodItem(id="yogurt", name="Yogurt", expiry_date="2025-03-12"),
        FoodItem(id="milk", name="Milk", expiry_date="2025-03-10"),
        FoodItem(id="eggs", name="Eggs", expiry_date="2025-03-09"),
        FoodItem(id="rice", name="Rice", expiry_date="2025-03-20"),
        FoodItem(id="salt", name="Salt"),
    ]


class TestPlanNotifications:
    """Tests for plan_notifications."""

    def test_default_settings(self):
        planned = plan_notifications(_items(), NOW, "UTC", NotificationSettings(), EN)
        assert [p.id for p in planned] == ["expiring_yogurt", "today_milk", "expired_eggs"]
        assert planned[0].body == "Yogurt will expire in 2 days"
        assert planned[1].body == "Milk expires today. Use it now!"
        assert planned[2].body == "Eggs expired 1 day ago"
        assert planned[1].title == "Food Expiring Today!"

    def test_window_respected(self):
        """Items past the look-ahead window are not announced."""
        settings = NotificationSettings(reminder_days=1)
        planned = plan_notifications(_items(), NOW, "UTC", settings, EN)
        assert "expiring_yogurt" not in [p.id for p in planned]

    def test_singular_day(self):
        items = [FoodItem(id="a", name="Ham", expiry_date="2025-03-11")]
        planned = plan_notifications(items, NOW, "UTC", NotificationSettings(), EN)
        assert planned[0].body == "Ham will expire in 1 day"

    def test_toggles(self):
        settings = NotificationSettings(expiry_alerts=False, today_alerts=False)
        planned = plan_notifications(_items(), NOW, "UTC", settings, EN)
        assert [p.kind for p in planned] == ["expired"]

    def test_all_disabled(self):
        settings = NotificationSettings(expiry_alerts=False, today_alerts=False, expired_alerts=False)
        assert plan_notifications(_items(), NOW, "UTC", settings, EN) == []

    def test_localized_titles(self):
        planned = plan_notifications(_items(), NOW, "UTC", NotificationSettings(), get_translations("ja"))
        assert planned[2].title == "期限切れの食品"
