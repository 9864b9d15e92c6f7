"""Tests for the reminder service with an in-memory preference store."""

import asyncio
from datetime import datetime, timedelta, timezone

from expiryalert.core.models import FoodItem, ReminderState
from expiryalert.shell.device import hash_device_id
from expiryalert.shell.firestore_client import StoreUnavailableError
from expiryalert.shell.reminder_service import ExpiredReminderService


DEVICE_ID = "123e4567-e89b-12d3-a456-426614174000"


class FakeStore:
    """Dict-backed stand-in for PreferenceFirestoreClient."""

    def __init__(self, save_ok=True, read_ok=True):
        self.states = {}
        self.save_ok = save_ok
        self.read_ok = read_ok
        self.saves = 0

    def get_reminder_state(self, device_key):
        if not self.read_ok:
            raise StoreUnavailableError("unavailable")
        return self.states.get(device_key)

    def save_reminder_state(self, device_key, state):
        self.saves += 1
        if not self.save_ok:
            return False
        self.states[device_key] = state
        return True


class Clock:
    """Settable clock."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


EXPIRED_ITEMS = [
    FoodItem(id="a", name="Milk", expiry_date="2025-03-01"),
    FoodItem(id="b", name="Eggs", expiry_date="2025-03-02"),
    FoodItem(id="c", name="Rice", expiry_date="2025-12-01"),
]


def _service(store, now=datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc)):
    return ExpiredReminderService(store, delay_seconds=0, clock=Clock(now))


class TestCheckNow:
    """Tests for ExpiredReminderService.check_now."""

    def test_fires_and_persists(self):
        store = FakeStore()
        decision = asyncio.run(_service(store).check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"))
        assert decision.should_fire is True
        assert decision.count == 2
        assert store.states[hash_device_id(DEVICE_ID)] == ReminderState(last_shown_day="2025-03-02")

    def test_once_per_day(self):
        store = FakeStore()
        service = _service(store)

        async def run_twice():
            first = await service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC")
            second = await service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC")
            return first, second

        first, second = asyncio.run(run_twice())
        assert first.should_fire is True
        assert second.should_fire is False
        assert second.count == 2
        assert store.saves == 1

    def test_concurrent_checks_fire_once(self):
        """Two overlapping checks for the same device fire only once."""
        store = FakeStore()
        service = _service(store)

        async def run_together():
            return await asyncio.gather(
                service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"),
                service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"),
            )

        results = asyncio.run(run_together())
        assert sorted(d.should_fire for d in results) == [False, True]
        assert store.saves == 1

    def test_next_day_fires_again(self):
        store = FakeStore()
        clock = Clock(datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc))
        service = ExpiredReminderService(store, delay_seconds=0, clock=clock)

        async def two_days():
            first = await service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC")
            clock.now = clock.now + timedelta(days=1)
            second = await service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC")
            return first, second

        first, second = asyncio.run(two_days())
        assert first.should_fire and second.should_fire
        assert second.state.last_shown_day == "2025-03-03"

    def test_local_day_boundary(self):
        """The day marker follows the viewer's timezone, not UTC."""
        store = FakeStore()
        service = _service(store, now=datetime(2025, 3, 2, 20, 0, tzinfo=timezone.utc))
        decision = asyncio.run(service.check_now(DEVICE_ID, EXPIRED_ITEMS, "Asia/Tokyo"))
        assert decision.state.last_shown_day == "2025-03-03"

    def test_nothing_expired(self):
        store = FakeStore()
        items = [FoodItem(id="c", name="Rice", expiry_date="2025-12-01")]
        decision = asyncio.run(_service(store).check_now(DEVICE_ID, items, "UTC"))
        assert decision.should_fire is False
        assert store.saves == 0

    def test_failed_save_does_not_fire(self):
        """A fire is only reported once the marker is stored."""
        store = FakeStore(save_ok=False)
        decision = asyncio.run(_service(store).check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"))
        assert decision.should_fire is False
        assert decision.count == 2
        assert decision.state.last_shown_day is None

    def test_devices_independent(self):
        store = FakeStore()
        service = _service(store)
        other = "223e4567-e89b-12d3-a456-426614174000"

        async def both():
            a = await service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC")
            b = await service.check_now(other, EXPIRED_ITEMS, "UTC")
            return a, b

        a, b = asyncio.run(both())
        assert a.should_fire and b.should_fire

    def test_failed_read_does_not_fire(self):
        """An unreadable marker after a fire earlier today does not fire again."""
        store = FakeStore()
        service = _service(store)
        asyncio.run(service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"))

        store.read_ok = False
        decision = asyncio.run(service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"))
        assert decision.should_fire is False
        assert decision.count == 2
        assert store.saves == 1

    def test_locks_released_after_checks(self):
        """Per-device locks do not outlive the checks that used them."""
        store = FakeStore()
        service = _service(store)
        device_ids = [f"00000000-0000-0000-0000-{n:012d}" for n in range(50)]

        async def many():
            await asyncio.gather(
                *(service.check_now(d, EXPIRED_ITEMS, "UTC") for d in device_ids),
                service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"),
                service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"),
            )

        asyncio.run(many())
        assert service._locks == {}
        assert service._holders == {}

    def test_lock_released_on_failure(self):
        store = FakeStore(read_ok=False)
        service = _service(store)
        asyncio.run(service.check_now(DEVICE_ID, EXPIRED_ITEMS, "UTC"))
        assert service._locks == {}


class TestCheckAfterDelay:
    """Tests for ExpiredReminderService.check_after_delay."""

    def test_delegates_after_sleep(self):
        store = FakeStore()
        decision = asyncio.run(_service(store).check_after_delay(DEVICE_ID, EXPIRED_ITEMS, "UTC"))
        assert decision.should_fire is True
